import json
import logging
import struct
import sys
import zlib
from array import array
from typing import Any, Dict, Tuple
from origin_shift.core.maze import OriginShiftMaze

logger = logging.getLogger(__name__)

class MazeSerializer:
    MAGIC = b"OSMZ"
    VERSION = 1

    # Flags
    FLAG_COMPRESSED = 1
    FLAG_SEED_ONLY = 2

    @staticmethod
    def _path_bytes(maze: OriginShiftMaze) -> bytes:
        data = array('I', maze.path)
        if sys.byteorder != "little":
            data.byteswap()
        return data.tobytes()

    @staticmethod
    def save(maze: OriginShiftMaze, filepath: str, meta: Dict[str, Any] = None, seed_only=False, compress=False):
        """
        Saves the maze to a binary file.
        Format (little-endian):
        - MAGIC (4 bytes)
        - VERSION (1 byte)
        - FLAGS (1 byte)
        - ROWS (4 bytes)
        - COLUMNS (4 bytes)
        - META_LEN (2 bytes)
        - META_JSON (META_LEN bytes)
        - DATA_LEN (4 bytes, 0 if seed_only)
        - DATA (uint32 path links, compressed or raw)

        A seed-only file needs meta["seed"] and meta["iterations"] to rebuild the maze.
        """
        if meta is None:
            meta = {}
        if seed_only and "seed" not in meta:
            raise ValueError("Seed-only files require meta['seed']")

        flags = 0
        if compress:
            flags |= MazeSerializer.FLAG_COMPRESSED
        if seed_only:
            flags |= MazeSerializer.FLAG_SEED_ONLY

        meta_bytes = json.dumps(meta).encode('utf-8')

        with open(filepath, "wb") as f:
            f.write(MazeSerializer.MAGIC)
            f.write(struct.pack("<BB", MazeSerializer.VERSION, flags))
            f.write(struct.pack("<II", maze.rows, maze.columns))
            f.write(struct.pack("<H", len(meta_bytes)))
            f.write(meta_bytes)

            if seed_only:
                f.write(struct.pack("<I", 0))
            else:
                data = MazeSerializer._path_bytes(maze)
                if compress:
                    data = zlib.compress(data)
                f.write(struct.pack("<I", len(data)))
                f.write(data)

        logger.debug(f"Saved {maze.rows}x{maze.columns} maze to {filepath} (flags={flags})")

    @staticmethod
    def _read_exact(f, n: int) -> bytes:
        data = f.read(n)
        if len(data) != n:
            raise ValueError("Truncated maze file")
        return data

    @staticmethod
    def load(filepath: str) -> Tuple[OriginShiftMaze, Dict[str, Any]]:
        read = MazeSerializer._read_exact
        with open(filepath, "rb") as f:
            magic = f.read(4)
            if magic != MazeSerializer.MAGIC:
                raise ValueError("Invalid file format")

            version, flags = struct.unpack("<BB", read(f, 2))
            if version != MazeSerializer.VERSION:
                raise ValueError(f"Unsupported maze file version {version}")
            rows, columns = struct.unpack("<II", read(f, 8))
            meta_len = struct.unpack("<H", read(f, 2))[0]
            meta = json.loads(read(f, meta_len).decode('utf-8'))

            data_len = struct.unpack("<I", read(f, 4))[0]
            data = read(f, data_len)

        if flags & MazeSerializer.FLAG_SEED_ONLY:
            # Regenerate from the recorded seed
            maze = OriginShiftMaze.create(rows, columns, seed=meta.get("seed"),
                                          iterations=meta.get("iterations"))
            return maze, meta

        # The payload must cover the header dimensions before anything is allocated
        expected = rows * columns * 4
        if flags & MazeSerializer.FLAG_COMPRESSED:
            try:
                # Never inflate past what the header allows
                data = zlib.decompressobj().decompress(data, expected + 1)
            except zlib.error as e:
                raise ValueError(f"Corrupt compressed maze data: {e}") from e

        if len(data) != expected:
            raise ValueError(
                f"Maze data holds {len(data)} bytes, expected {expected} for {rows}x{columns}")

        values = array('I')
        values.frombytes(data)
        if sys.byteorder != "little":
            values.byteswap()

        maze = OriginShiftMaze.create(rows, columns, seed=meta.get("seed"), iterations=0)
        maze.restore(values)
        return maze, meta
