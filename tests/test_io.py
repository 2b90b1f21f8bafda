import unittest
import sys
import os
import shutil
import struct
import tempfile

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from origin_shift.core.maze import OriginShiftMaze, InvalidPathData
from origin_shift.io.serializer import MazeSerializer
from origin_shift.main import main

class TestIO(unittest.TestCase):
    def setUp(self):
        self.out_dir = tempfile.mkdtemp(prefix="origin_shift_io_")

    def tearDown(self):
        shutil.rmtree(self.out_dir, ignore_errors=True)

    def test_raw_file(self):
        maze = OriginShiftMaze.create(10, 7, seed=1)
        path = os.path.join(self.out_dir, "raw.maze")
        MazeSerializer.save(maze, path, meta={"seed": 1})

        maze2, meta = MazeSerializer.load(path)
        self.assertEqual(maze.path.tobytes(), maze2.path.tobytes())
        self.assertEqual((maze2.rows, maze2.columns), (10, 7))
        self.assertEqual(maze2.origin, maze.origin)
        self.assertEqual(meta["seed"], 1)

        # A loaded maze keeps shifting like any other
        maze2.iterate(50)
        maze2.validate()

    def test_compressed_file(self):
        maze = OriginShiftMaze.create(60, 60, seed=2)
        raw_path = os.path.join(self.out_dir, "raw.maze")
        comp_path = os.path.join(self.out_dir, "comp.maze")
        MazeSerializer.save(maze, raw_path)
        MazeSerializer.save(maze, comp_path, compress=True)

        maze2, _ = MazeSerializer.load(comp_path)
        self.assertEqual(maze.path.tobytes(), maze2.path.tobytes())
        self.assertLess(os.path.getsize(comp_path), os.path.getsize(raw_path))

    def test_seed_only(self):
        maze = OriginShiftMaze.create(10, 10, seed=12345, iterations=900)
        path = os.path.join(self.out_dir, "seed.maze")
        MazeSerializer.save(maze, path, meta={"seed": 12345, "iterations": 900}, seed_only=True)

        maze2, meta = MazeSerializer.load(path)
        self.assertEqual(meta["seed"], 12345)
        self.assertEqual(maze.path.tobytes(), maze2.path.tobytes())

        # Header + Meta only
        self.assertLess(os.path.getsize(path), 100)

    def test_seed_only_requires_seed(self):
        maze = OriginShiftMaze.create(3, 3, iterations=0)
        with self.assertRaises(ValueError):
            MazeSerializer.save(maze, os.path.join(self.out_dir, "x.maze"), seed_only=True)

    def test_invalid_magic(self):
        path = os.path.join(self.out_dir, "bogus.maze")
        with open(path, "wb") as f:
            f.write(b"NOPE" + bytes(32))
        with self.assertRaises(ValueError):
            MazeSerializer.load(path)

    def test_corrupt_tree(self):
        maze = OriginShiftMaze.create(4, 4, seed=9)
        path = os.path.join(self.out_dir, "corrupt.maze")
        MazeSerializer.save(maze, path)

        with open(path, "rb") as f:
            data = bytearray(f.read())
        # Zero every link: no origin, and cell 0 points at itself
        data[-16 * 4:] = bytes(16 * 4)
        with open(path, "wb") as f:
            f.write(data)

        with self.assertRaises(InvalidPathData):
            MazeSerializer.load(path)

    def write_bytes(self, name, data):
        path = os.path.join(self.out_dir, name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def test_truncated_file(self):
        maze = OriginShiftMaze.create(4, 4, seed=3)
        path = os.path.join(self.out_dir, "full.maze")
        MazeSerializer.save(maze, path, meta={"seed": 3})
        with open(path, "rb") as f:
            data = f.read()

        # Cut inside the header, the metadata and the path data
        for size in (5, 12, 20, len(data) - 10):
            cut = self.write_bytes("cut.maze", data[:size])
            with self.assertRaises(ValueError):
                MazeSerializer.load(cut)

    def test_corrupt_compressed_data(self):
        maze = OriginShiftMaze.create(6, 6, seed=4)
        path = os.path.join(self.out_dir, "comp.maze")
        MazeSerializer.save(maze, path, compress=True)
        with open(path, "rb") as f:
            data = bytearray(f.read())

        # Stream header follows MAGIC, version/flags, dims, meta "{}" and data length
        start = 4 + 2 + 8 + 2 + len(b"{}") + 4
        bad_header = bytearray(data)
        bad_header[start:start + 2] = b"\xff\xff"
        bad_checksum = bytearray(data)
        bad_checksum[-1] ^= 0xFF

        for name, blob in (("header.maze", bad_header), ("checksum.maze", bad_checksum)):
            with self.assertRaises(ValueError):
                MazeSerializer.load(self.write_bytes(name, bytes(blob)))

    def test_header_payload_mismatch(self):
        # Huge dimensions with an empty payload fail before the maze is allocated
        huge = (MazeSerializer.MAGIC + struct.pack("<BB", MazeSerializer.VERSION, 0)
                + struct.pack("<II", 0xFFFF, 0xFFFF) + struct.pack("<H", 2) + b"{}"
                + struct.pack("<I", 0))
        with self.assertRaises(ValueError):
            MazeSerializer.load(self.write_bytes("huge.maze", huge))

        maze = OriginShiftMaze.create(4, 4, seed=5)
        path = os.path.join(self.out_dir, "small.maze")
        MazeSerializer.save(maze, path, compress=True)
        with open(path, "rb") as f:
            data = bytearray(f.read())
        data[6:14] = struct.pack("<II", 5, 4)
        with self.assertRaises(ValueError):
            MazeSerializer.load(self.write_bytes("grown.maze", bytes(data)))

    def test_cli_reports_bad_file(self):
        path = self.write_bytes("short.maze", b"OSMZ\x01")
        with self.assertRaises(SystemExit) as ctx:
            main(["show", path])
        self.assertEqual(ctx.exception.code, 1)

if __name__ == '__main__':
    unittest.main()
