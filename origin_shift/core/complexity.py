from array import array
from origin_shift.core.maze import NONE, OriginShiftMaze

class MazeStatistics:
    @staticmethod
    def degrees(maze: OriginShiftMaze) -> array:
        """
        Number of open passages per cell. Each link joins two cells,
        so the degrees sum to 2 * (cells - 1) in a perfect maze.
        """
        deg = array('B', [0] * (maze.rows * maze.columns))
        for offset, nxt in enumerate(maze.path):
            if nxt == NONE:
                continue
            deg[offset] += 1
            deg[nxt] += 1
        return deg

    @staticmethod
    def depths(maze: OriginShiftMaze) -> array:
        """Link count from every cell to the origin."""
        total = maze.rows * maze.columns
        depth = array('i', [-1] * total)
        depth[maze.origin] = 0

        for start in range(total):
            # Walk up until a known depth, then unwind
            chain = []
            cur = start
            while depth[cur] == -1:
                chain.append(cur)
                cur = maze.path[cur]
            d = depth[cur]
            for offset in reversed(chain):
                d += 1
                depth[offset] = d
        return depth

    @staticmethod
    def calculate_stats(maze: OriginShiftMaze):
        dead_ends = 0
        corridors = 0
        junctions = 0

        for d in MazeStatistics.degrees(maze):
            if d == 1: dead_ends += 1
            elif d == 2: corridors += 1
            elif d >= 3: junctions += 1

        depth = MazeStatistics.depths(maze)
        total = maze.rows * maze.columns
        return {
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "dead_end_percent": (dead_ends / total) * 100,
            "max_depth": max(depth),
            "mean_depth": sum(depth) / total,
        }
