import random as _random
from array import array
from typing import List, Optional, Sequence, Tuple

# Marks the one node without a next node, namely the origin.
NONE = 0xFFFFFFFF

# rows * columns * DEFAULT_ITERATION_FACTOR mutations look sufficiently mixed
DEFAULT_ITERATION_FACTOR = 20


class MazeError(ValueError):
    pass

class InvalidBufferSize(MazeError):
    pass

class InvalidDimensions(MazeError):
    pass

class InvalidPathData(MazeError):
    pass


class Direction:
    # Ordinals match a uniform draw of randrange(4)
    RIGHT = 0
    LEFT  = 1
    UP    = 2
    DOWN  = 3

    ALL = (RIGHT, LEFT, UP, DOWN)

    # Row / Column deltas
    DR = {RIGHT: 0, LEFT: 0, UP: -1, DOWN: 1}
    DC = {RIGHT: 1, LEFT: -1, UP: 0, DOWN: 0}
    OPPOSITE = {RIGHT: LEFT, LEFT: RIGHT, UP: DOWN, DOWN: UP}

    NAMES = {RIGHT: "right", LEFT: "left", UP: "up", DOWN: "down"}
    ARROWS = {RIGHT: "→", LEFT: "←", UP: "↑", DOWN: "↓"}


def check_dimensions(rows: int, columns: int):
    """Raises InvalidDimensions unless every offset fits below the NONE sentinel."""
    if rows < 2 or columns < 2:
        raise InvalidDimensions(f"Maze must be at least 2x2, got {rows}x{columns}")
    if rows * columns >= NONE:
        raise InvalidDimensions(f"Maze of {rows}x{columns} cells does not fit 32-bit offsets")


def check_tree(path: Sequence[int], rows: int, columns: int) -> int:
    """
    Verifies that `path` encodes a spanning tree of a rows x columns grid
    and returns the origin offset. Raises InvalidPathData otherwise.
    """
    total = rows * columns
    if len(path) != total:
        raise InvalidPathData(f"Expected {total} path entries, got {len(path)}")

    origin = -1
    for offset in range(total):
        nxt = path[offset]
        if nxt == NONE:
            if origin != -1:
                raise InvalidPathData(f"Multiple origins ({origin} and {offset})")
            origin = offset
            continue

        col = offset % columns
        if nxt == offset + 1 and col + 1 < columns:
            continue
        if nxt == offset - 1 and col > 0:
            continue
        if nxt == offset + columns and nxt < total:
            continue
        if nxt == offset - columns and offset >= columns:
            continue
        raise InvalidPathData(f"Cell {offset} links to non-neighbor {nxt}")

    if origin == -1:
        raise InvalidPathData("No origin found")

    # Chase every cell to the root. 0 = unseen, 1 = on current chase, 2 = reaches origin
    state = bytearray(total)
    state[origin] = 2
    for start in range(total):
        chain = []
        cur = start
        while state[cur] == 0:
            state[cur] = 1
            chain.append(cur)
            cur = path[cur]
        if state[cur] == 1:
            raise InvalidPathData(f"Cycle detected through cell {cur}")
        for offset in chain:
            state[offset] = 2

    return origin


class OriginShiftMaze:
    """
    A perfect maze stored as a spanning tree: every cell points to a
    neighbor, and following the links from any cell ends at the origin.

    The origin shift algorithm moves the origin to a random neighbor,
    re-rooting the tree. The maze is perfect after every single step.
    """

    __slots__ = ('rows', 'columns', 'path', 'origin', 'random', 'event_writer')

    def __init__(self, path_buffer, rows: int, columns: int, random,
                 iterations: Optional[int] = None, event_writer=None):
        if len(path_buffer) != rows * columns:
            raise InvalidBufferSize(
                f"Path buffer holds {len(path_buffer)} entries, expected {rows * columns}")
        check_dimensions(rows, columns)

        self.rows = rows
        self.columns = columns
        self.path = path_buffer
        self.random = random
        self.event_writer = event_writer

        # Every node points right, except the rightmost node of each row which points down
        offset = 0
        for _ in range(rows):
            for _ in range(columns - 1):
                self.path[offset] = offset + 1
                offset += 1
            self.path[offset] = offset + columns
            offset += 1

        # The lower right node is the initial origin (by convention)
        self.origin = len(self.path) - 1
        self.path[self.origin] = NONE

        if self.event_writer:
            self.event_writer.write_header(rows, columns)

        self.iterate(iterations)

    @classmethod
    def create(cls, rows: int, columns: int, seed: int = None,
               iterations: Optional[int] = None, event_writer=None) -> "OriginShiftMaze":
        """Allocates the path buffer and a seeded RNG."""
        check_dimensions(rows, columns)
        # 'I' -> unsigned int, 4 bytes per cell
        buffer = array('I', [0]) * (rows * columns)
        return cls(buffer, rows, columns, _random.Random(seed),
                   iterations=iterations, event_writer=event_writer)

    def iterate(self, iterations: Optional[int] = None):
        """
        Performs random origin moves. Can be called any number of times.
        If `iterations` is None, rows * columns * DEFAULT_ITERATION_FACTOR is used.
        """
        if iterations is None:
            iterations = self.rows * self.columns * DEFAULT_ITERATION_FACTOR
        rng = self.random
        for _ in range(iterations):
            self.iterate_once(rng.randrange(4))

    def iterate_once(self, direction: int):
        """
        Moves the origin one step in `direction`. Moving off the grid
        (e.g. down from the last row) is a no-op.
        """
        columns = self.columns
        origin = self.origin
        row, col = divmod(origin, columns)

        if direction == Direction.RIGHT:
            if col + 1 >= columns:
                return
            target = origin + 1
        elif direction == Direction.LEFT:
            if col == 0:
                return
            target = origin - 1
        elif direction == Direction.UP:
            if row == 0:
                return
            target = origin - columns
        elif direction == Direction.DOWN:
            if row + 1 >= self.rows:
                return
            target = origin + columns
        else:
            raise ValueError(f"Unknown direction {direction}")

        self.path[origin] = target
        self.origin = target
        self.path[target] = NONE

        if self.event_writer:
            self.event_writer.log_shift(direction)

    def get_origin(self) -> Tuple[int, int]:
        return divmod(self.origin, self.columns)

    def get_offset(self, row: int, column: int) -> int:
        if 0 <= row < self.rows and 0 <= column < self.columns:
            return row * self.columns + column
        raise IndexError(f"Coordinate ({row}, {column}) out of bounds")

    def get_coordinates(self, offset: int) -> Tuple[int, int]:
        if 0 <= offset < self.rows * self.columns:
            return divmod(offset, self.columns)
        raise IndexError(f"Offset {offset} out of bounds")

    def compute_direction(self, offset1: int, offset2: int) -> Optional[int]:
        """
        Direction from `offset1` to `offset2`, which must be a neighbor of `offset1`.
        Returns None if both offsets are equal.
        """
        diff = offset2 - offset1
        if diff == 0:
            return None
        if diff == -self.columns:
            return Direction.UP
        if diff == self.columns:
            return Direction.DOWN
        if diff == -1:
            return Direction.LEFT
        return Direction.RIGHT

    def path_to_origin(self, offset: int) -> List[int]:
        """Offsets visited from `offset` up to and including the origin."""
        chain = [offset]
        cur = offset
        for _ in range(self.rows * self.columns):
            nxt = self.path[cur]
            if nxt == NONE:
                return chain
            chain.append(nxt)
            cur = nxt
        raise InvalidPathData(f"Cell {offset} does not reach the origin")

    def validate(self):
        origin = check_tree(self.path, self.rows, self.columns)
        if origin != self.origin:
            raise InvalidPathData(f"Sentinel at {origin} but origin is {self.origin}")

    def restore(self, values: Sequence[int]):
        """
        Replaces the whole path with `values`. The data is checked first,
        so a rejected restore leaves the maze untouched.
        """
        origin = check_tree(values, self.rows, self.columns)
        for offset, nxt in enumerate(values):
            self.path[offset] = nxt
        self.origin = origin
