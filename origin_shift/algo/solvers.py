from typing import Dict, Iterator, List, Tuple
from origin_shift.core.maze import NONE, OriginShiftMaze

class PathSolver:
    """
    Finds the unique path between two cells of a perfect maze.

    Every cell links towards the origin, so the path is the chase from
    `start` up to the first cell shared with the chase from `end`, followed
    by the `end` chase in reverse. No search frontier is needed.
    """
    def __init__(self, maze: OriginShiftMaze, report_every: int = 1000):
        self.maze = maze
        self.report_every = report_every
        self.path: List[Tuple[int, int]] = []
        self.visited_count = 0

    def run(self, start: Tuple[int, int], end: Tuple[int, int]) -> Iterator[str]:
        maze = self.maze
        self.path = []
        self.visited_count = 0

        # Ancestors of start: offset -> position in chain
        start_chain: Dict[int, int] = {}
        chain_order: List[int] = []
        cur = maze.get_offset(*start)
        while True:
            start_chain[cur] = len(chain_order)
            chain_order.append(cur)
            self.visited_count += 1
            if self.visited_count % self.report_every == 0:
                yield f"Visited: {self.visited_count}"
            nxt = maze.path[cur]
            if nxt == NONE:
                break
            cur = nxt

        # Climb from end until we meet the start chain
        end_chain: List[int] = []
        cur = maze.get_offset(*end)
        while cur not in start_chain:
            end_chain.append(cur)
            self.visited_count += 1
            if self.visited_count % self.report_every == 0:
                yield f"Visited: {self.visited_count}"
            cur = maze.path[cur]

        offsets = chain_order[:start_chain[cur] + 1] + end_chain[::-1]
        self.path = [maze.get_coordinates(o) for o in offsets]
        yield "Solved"

    def solve(self, start: Tuple[int, int], end: Tuple[int, int]) -> List[Tuple[int, int]]:
        for _ in self.run(start, end):
            pass
        return self.path
