import logging
from typing import Iterator
from origin_shift.algo.base import Generator
from origin_shift.core.events import EVT_SHIFT, EventReader
from origin_shift.core.maze import OriginShiftMaze

logger = logging.getLogger(__name__)

class EventAdapter(Generator):
    """
    Adapts an EventReader stream to look like a Generator for the renderers.
    Applies the logged origin moves to the maze as it iterates; the maze
    must start from the seed layout (built with iterations=0).
    """
    def __init__(self, maze: OriginShiftMaze, reader: EventReader, report_every: int = 50):
        super().__init__(maze, report_every)
        self.reader = reader
        if (reader.rows, reader.columns) != (maze.rows, maze.columns):
            raise ValueError(
                f"Event log is {reader.rows}x{reader.columns} but maze is {maze.rows}x{maze.columns}")

    def run(self) -> Iterator[str]:
        for type_code, data in self.reader.stream_events():
            if type_code == EVT_SHIFT:
                self.maze.iterate_once(data[0])
                self.step_count += 1

            if self.step_count % self.report_every == 0:
                yield "Replay"

        logger.debug(f"Replayed {self.step_count} shifts")
        self.finished = True
        yield "Done"

    @classmethod
    def from_reader(cls, reader: EventReader, report_every: int = 50) -> "EventAdapter":
        """Reads the log header and builds a matching seed-layout maze."""
        rows, columns = reader.read_header()
        maze = OriginShiftMaze.create(rows, columns, iterations=0)
        return cls(maze, reader, report_every)
