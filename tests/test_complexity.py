import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from origin_shift.core.maze import OriginShiftMaze
from origin_shift.core.complexity import MazeStatistics

class TestComplexity(unittest.TestCase):
    def test_seed_layout_stats(self):
        # 0 -> 1 -> 2
        #           v
        # 3 -> 4 -> 5
        #           v
        # 6 -> 7 -> 8 (origin)
        maze = OriginShiftMaze.create(3, 3, iterations=0)
        self.assertEqual(list(MazeStatistics.degrees(maze)), [1, 2, 2, 1, 2, 3, 1, 2, 2])
        self.assertEqual(list(MazeStatistics.depths(maze)), [4, 3, 2, 3, 2, 1, 2, 1, 0])

        stats = MazeStatistics.calculate_stats(maze)
        self.assertEqual(stats["dead_ends"], 3)
        self.assertEqual(stats["corridors"], 5)
        self.assertEqual(stats["junctions"], 1)
        self.assertEqual(stats["max_depth"], 4)
        self.assertAlmostEqual(stats["mean_depth"], 2.0)

    def test_random_maze_is_a_tree(self):
        maze = OriginShiftMaze.create(20, 20, seed=42)
        n = maze.rows * maze.columns
        self.assertEqual(sum(MazeStatistics.degrees(maze)), 2 * (n - 1))

        stats = MazeStatistics.calculate_stats(maze)
        self.assertEqual(stats["dead_ends"] + stats["corridors"] + stats["junctions"], n)
        self.assertGreater(stats["dead_ends"], 0)

    def test_mixing_changes_structure(self):
        maze = OriginShiftMaze.create(20, 20, seed=7, iterations=0)
        seed_stats = MazeStatistics.calculate_stats(maze)
        # The seed layout is a comb: one dead end per row
        self.assertEqual(seed_stats["dead_ends"], 20)

        maze.iterate()
        mixed = MazeStatistics.calculate_stats(maze)
        self.assertGreater(mixed["dead_ends"], seed_stats["dead_ends"])

if __name__ == '__main__':
    unittest.main()
