from abc import ABC, abstractmethod
from typing import Iterator
from origin_shift.core.maze import OriginShiftMaze

class Generator(ABC):
    """
    Incremental driver for a maze. `run()` mutates self.maze in place and
    yields every `report_every` steps so a UI can draw between batches.
    """
    def __init__(self, maze: OriginShiftMaze, report_every: int = 100):
        if report_every < 1:
            raise ValueError("report_every must be at least 1")
        self.maze = maze
        self.report_every = report_every
        self.step_count = 0
        self.finished = False

    @abstractmethod
    def run(self) -> Iterator[str]:
        pass

    def run_all(self) -> int:
        """Runs to completion and returns the number of steps taken."""
        for _ in self.run():
            pass
        return self.step_count
