from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple
from origin_shift.core.maze import NONE, Direction, OriginShiftMaze

# Cell kinds
WALL = 0
PATH = 1
ORIGIN = 2


class Cell(NamedTuple):
    kind: int
    direction: Optional[int] = None


WALL_CELL = Cell(WALL)
ORIGIN_CELL = Cell(ORIGIN)


class WallifiedView:
    """
    Read-only view of a maze as a (2 * rows + 1) x (2 * columns + 1) grid
    with walls between the paths and walls surrounding the maze.

    Path cells sit at odd row/column indices. A wall cell between two path
    cells becomes a path cell when one of them points through it:

        ↓ ← → ↓            █████████
        ↓ ✥ ↓ ←            █↓←←█→→↓█
        → ↑ ← ←    ==>     █↓█████↓█
        ↑ → ↑ ←            █↓█✥█↓←←█
                           █↓█↑█↓███
                           █→→↑←←←←█
                           █↑███↑███
                           █↑█→→↑←←█
                           █████████

    Nothing is stored; every query is computed from the maze path.
    """

    def __init__(self, maze: OriginShiftMaze):
        self.maze = maze

    def get_size(self) -> Tuple[int, int]:
        return self.maze.rows * 2 + 1, self.maze.columns * 2 + 1

    def get_cell(self, row: int, column: int) -> Optional[Cell]:
        """
        Returns the cell at wallified coordinates (row, column), or None
        when the coordinates are out of bounds.
        """
        return self._get_cell(row, column, True)

    def _get_cell(self, row: int, column: int, find_neighbor: bool) -> Optional[Cell]:
        size_rows, size_cols = self.get_size()
        if not (0 <= row < size_rows and 0 <= column < size_cols):
            return None

        # The bounding box is all walls
        if row == 0 or row == size_rows - 1 or column == 0 or column == size_cols - 1:
            return WALL_CELL

        maze = self.maze

        if row % 2 != 0 and column % 2 != 0:
            offset = (row // 2) * maze.columns + (column // 2)
            nxt = maze.path[offset]
            if nxt == NONE:
                return ORIGIN_CELL
            return Cell(PATH, maze.compute_direction(offset, nxt))

        # Interior wall, unless a neighboring path cell points through it.
        # Probes are one level deep only; wall neighbors never probe further.
        if find_neighbor:
            if row > 1:
                north = self._get_cell(row - 1, column, False)
                if north.kind == PATH and north.direction == Direction.DOWN:
                    return Cell(PATH, Direction.DOWN)
            if row < maze.rows * 2 - 1:
                south = self._get_cell(row + 1, column, False)
                if south.kind == PATH and south.direction == Direction.UP:
                    return Cell(PATH, Direction.UP)
            if column > 1:
                west = self._get_cell(row, column - 1, False)
                if west.kind == PATH and west.direction == Direction.RIGHT:
                    return Cell(PATH, Direction.RIGHT)
            if column < maze.columns * 2 - 1:
                east = self._get_cell(row, column + 1, False)
                if east.kind == PATH and east.direction == Direction.LEFT:
                    return Cell(PATH, Direction.LEFT)

        return WALL_CELL

    def iter_rows(self) -> Iterator[List[Cell]]:
        size_rows, size_cols = self.get_size()
        for r in range(size_rows):
            yield [self._get_cell(r, c, True) for c in range(size_cols)]

    @staticmethod
    def trail(path: Sequence[Tuple[int, int]]) -> List[Tuple[int, int]]:
        """
        Maps consecutive path-grid coordinates to the wallified cells they
        cover, including the wall cell pierced between each pair.
        """
        cells = []
        prev = None
        for r, c in path:
            if prev is not None:
                pr, pc = prev
                cells.append((pr + r + 1, pc + c + 1))
            cells.append((r * 2 + 1, c * 2 + 1))
            prev = (r, c)
        return cells
