import unittest
import sys
import os
import io

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from origin_shift.algo.origin_shift import OriginShiftGenerator
from origin_shift.core.maze import OriginShiftMaze
from origin_shift.core.wallified import WallifiedView
from origin_shift.viz import terminal
from test_wallified import EXAMPLE_WALLS, example_maze


def to_text(line, arrows=True):
    out = []
    for ch in line:
        if ch == "█":
            out.append("██")
        elif ch == "✥":
            out.append("😊")
        else:
            out.append(ch + " " if arrows else "  ")
    return "".join(out)


class TestTerminal(unittest.TestCase):
    def test_dump(self):
        maze = OriginShiftMaze.create(2, 2, iterations=0)
        out = io.StringIO()
        terminal.dump(maze, out)
        self.assertEqual(out.getvalue(), " →  ↓ \n →  ✥ \n")

    def test_dump_example(self):
        out = io.StringIO()
        terminal.dump(example_maze(), out)
        self.assertEqual(out.getvalue().splitlines(), [
            " ↓  ←  →  ↓ ",
            " ↓  ✥  ↓  ← ",
            " →  ↑  ←  ← ",
            " ↑  →  ↑  ← ",
        ])

    def test_render_walls(self):
        maze = example_maze()

        out = io.StringIO()
        terminal.render_walls(maze, out, show_arrows=True)
        expected = "\n".join(to_text(line) for line in EXAMPLE_WALLS) + "\n\n"
        self.assertEqual(out.getvalue(), expected)

        out = io.StringIO()
        terminal.render_walls(maze, out)
        expected = "\n".join(to_text(line, arrows=False) for line in EXAMPLE_WALLS) + "\n\n"
        self.assertEqual(out.getvalue(), expected)

    def test_render_highlight(self):
        maze = OriginShiftMaze.create(2, 2, iterations=0)
        trail = WallifiedView.trail([(0, 0), (0, 1), (1, 1)])
        out = io.StringIO()
        terminal.render_walls(maze, out, highlight=trail)
        lines = out.getvalue().splitlines()
        self.assertEqual(lines[1], "██······██")
        self.assertEqual(lines[2], "██████··██")
        # The origin keeps its own glyph
        self.assertEqual(lines[3], "██    😊██")

    def test_animate(self):
        maze = OriginShiftMaze.create(4, 4, seed=1, iterations=0)
        out = io.StringIO()
        terminal.animate(maze, out, frames=3, delay=0)
        text = out.getvalue()
        self.assertTrue(text.startswith(terminal.HIDE_CURSOR))
        self.assertTrue(text.endswith(terminal.SHOW_CURSOR))
        self.assertEqual(text.count(terminal.HOME_CLEAR), 3)
        self.assertEqual(text.count(terminal.SYNC_BEGIN), text.count(terminal.SYNC_END))
        maze.validate()

    def test_animate_with_generator(self):
        maze = OriginShiftMaze.create(3, 3, seed=6, iterations=0)
        generator = OriginShiftGenerator(maze, iterations=2, report_every=1)
        out = io.StringIO()
        terminal.animate(maze, out, frames=10, delay=0, walls=False, generator=generator)
        text = out.getvalue()

        # The starting frame plus one per move, none after the last move
        self.assertEqual(generator.step_count, 2)
        self.assertTrue(generator.finished)
        self.assertEqual(text.count(terminal.HOME_CLEAR), 3)
        self.assertEqual(text.count(terminal.SYNC_BEGIN), text.count(terminal.SYNC_END))

        final = io.StringIO()
        terminal.dump(maze, final)
        last_frame = text.split(terminal.HOME_CLEAR)[-1]
        self.assertEqual(last_frame, final.getvalue() + terminal.SYNC_END + terminal.SHOW_CURSOR)

    def test_animate_with_idle_generator(self):
        maze = OriginShiftMaze.create(3, 3, iterations=0)
        generator = OriginShiftGenerator(maze, iterations=0)
        out = io.StringIO()
        terminal.animate(maze, out, frames=10, delay=0, walls=False, generator=generator)
        self.assertEqual(out.getvalue().count(terminal.HOME_CLEAR), 1)

if __name__ == '__main__':
    unittest.main()
