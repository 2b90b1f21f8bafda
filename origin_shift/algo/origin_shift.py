from typing import Iterator, Optional
from origin_shift.core.maze import DEFAULT_ITERATION_FACTOR, OriginShiftMaze
from origin_shift.algo.base import Generator

class OriginShiftGenerator(Generator):
    """
    Steps the origin shift one move at a time, drawing directions from the
    maze's own random source. Running it for N steps leaves the maze in the
    same state as `maze.iterate(N)`.

    `iterations=None` uses the rows * columns * 20 heuristic; a negative
    count runs until the consumer stops iterating (live re-randomization).
    """
    def __init__(self, maze: OriginShiftMaze, iterations: Optional[int] = None, report_every: int = 100):
        super().__init__(maze, report_every)
        if iterations is None:
            iterations = maze.rows * maze.columns * DEFAULT_ITERATION_FACTOR
        self.iterations = iterations

    def run(self) -> Iterator[str]:
        maze = self.maze
        rng = maze.random

        while self.iterations < 0 or self.step_count < self.iterations:
            maze.iterate_once(rng.randrange(4))
            self.step_count += 1

            if self.step_count % self.report_every == 0:
                row, col = maze.get_origin()
                yield f"Shifting... Step: {self.step_count} Origin: ({row}, {col})"

        self.finished = True
        yield "Done"
