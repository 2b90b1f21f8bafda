import sys
import os
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from origin_shift.core.maze import OriginShiftMaze
from origin_shift.core.wallified import WallifiedView
from origin_shift.core.complexity import MazeStatistics

def benchmark_size(rows: int, columns: int):
    print(f"\n--- Benchmarking {rows}x{columns} ({rows*columns:,} cells) ---")

    # 1. Seed layout only
    start_time = time.time()
    maze = OriginShiftMaze.create(rows, columns, seed=42, iterations=0)
    print(f"Maze Init: {time.time() - start_time:.4f}s")
    print(f"Memory (Path Data): ~{maze.path.itemsize * len(maze.path) / (1024 * 1024):.2f} MB")

    # 2. Randomization with the default heuristic
    iterations = rows * columns * 20
    gen_start = time.time()
    maze.iterate(iterations)
    gen_time = time.time() - gen_start
    print(f"Iteration Time: {gen_time:.4f}s")
    print(f"Speed: {iterations / gen_time:,.0f} moves/sec")

    # 3. Full wallified scan (what a renderer does every frame)
    view = WallifiedView(maze)
    scan_start = time.time()
    cells = sum(len(r) for r in view.iter_rows())
    scan_time = time.time() - scan_start
    print(f"Wallified Scan: {scan_time:.4f}s ({cells:,} cells)")

    # 4. Quality
    stats = MazeStatistics.calculate_stats(maze)
    print(f"Dead ends: {stats['dead_end_percent']:.1f}% | Max depth: {stats['max_depth']}")

def run_suite():
    sizes = [
        (12, 12),
        (50, 50),
        (200, 200),
        # (1000, 1000),  # 20M moves, slow in pure Python
    ]

    for rows, columns in sizes:
        benchmark_size(rows, columns)

if __name__ == "__main__":
    run_suite()
