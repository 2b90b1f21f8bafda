from typing import Iterable, Optional, Tuple
import numpy as np
from origin_shift.core.maze import OriginShiftMaze
from origin_shift.core.wallified import ORIGIN, PATH, WALL, WallifiedView

COLOR_WALL = (200, 200, 200)
COLOR_PATH = (10, 10, 10)
COLOR_ORIGIN = (255, 80, 80)
COLOR_TRAIL = (255, 215, 0) # Gold


def to_array(maze: OriginShiftMaze) -> np.ndarray:
    """
    Wallified maze as an int8 matrix of cell kinds (WALL, PATH, ORIGIN),
    shape (rows * 2 + 1, columns * 2 + 1).
    """
    view = WallifiedView(maze)
    h, w = view.get_size()
    kinds = np.full((h, w), WALL, dtype=np.int8)
    for r, cells in enumerate(view.iter_rows()):
        for c, cell in enumerate(cells):
            kinds[r, c] = cell.kind
    return kinds


def render_image(maze: OriginShiftMaze, scale: int = 1,
                 highlight: Optional[Iterable[Tuple[int, int]]] = None) -> np.ndarray:
    """
    RGB uint8 image of the wallified maze, `scale` pixels per cell,
    shape (height, width, 3).
    """
    if scale < 1:
        raise ValueError("scale must be at least 1")

    kinds = to_array(maze)
    palette = np.zeros((3, 3), dtype=np.uint8)
    palette[WALL] = COLOR_WALL
    palette[PATH] = COLOR_PATH
    palette[ORIGIN] = COLOR_ORIGIN
    img = palette[kinds]

    if highlight:
        for r, c in highlight:
            if kinds[r, c] == PATH:
                img[r, c] = COLOR_TRAIL

    if scale > 1:
        img = np.repeat(np.repeat(img, scale, axis=0), scale, axis=1)
    return img
