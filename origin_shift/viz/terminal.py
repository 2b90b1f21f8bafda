import sys
import time
from typing import Iterable, Optional, TextIO, Tuple
from origin_shift.algo.base import Generator
from origin_shift.core.maze import NONE, Direction, OriginShiftMaze
from origin_shift.core.wallified import PATH, WALL, WallifiedView

# Glyphs
DUMP_ORIGIN = " ✥ "
WALL_GLYPH = "██"
PATH_GLYPH = "  "
ORIGIN_GLYPH = "😊"
TRAIL_GLYPH = "··"

# ANSI control sequences
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
SYNC_BEGIN = "\x1b[?2026h"
SYNC_END = "\x1b[?2026l"
HOME_CLEAR = "\x1b[H\x1b[J"


def dump(maze: OriginShiftMaze, out: TextIO = None):
    """Prints one arrow per path cell, pointing towards the origin."""
    out = out or sys.stdout
    offset = 0
    for _ in range(maze.rows):
        line = []
        for _ in range(maze.columns):
            nxt = maze.path[offset]
            if nxt == NONE:
                line.append(DUMP_ORIGIN)
            else:
                line.append(f" {Direction.ARROWS[maze.compute_direction(offset, nxt)]} ")
            offset += 1
        out.write("".join(line) + "\n")


def render_walls(maze: OriginShiftMaze, out: TextIO = None, show_arrows: bool = False,
                 highlight: Optional[Iterable[Tuple[int, int]]] = None):
    """
    Prints the wallified maze, two characters per cell. Cells listed in
    `highlight` (wallified coordinates) are drawn as a trail.
    """
    out = out or sys.stdout
    marked = set(highlight) if highlight else set()
    view = WallifiedView(maze)

    for r, cells in enumerate(view.iter_rows()):
        line = []
        for c, cell in enumerate(cells):
            if cell.kind == WALL:
                line.append(WALL_GLYPH)
            elif cell.kind == PATH:
                if (r, c) in marked:
                    line.append(TRAIL_GLYPH)
                elif show_arrows:
                    line.append(Direction.ARROWS[cell.direction] + " ")
                else:
                    line.append(PATH_GLYPH)
            else:
                line.append(ORIGIN_GLYPH)
        out.write("".join(line) + "\n")
    out.write("\n")


def draw(maze: OriginShiftMaze, out: TextIO, walls: bool = True, show_arrows: bool = False):
    if walls:
        render_walls(maze, out, show_arrows=show_arrows)
    else:
        dump(maze, out)


def animate(maze: OriginShiftMaze, out: TextIO = None, frames: Optional[int] = None,
            delay: float = 0.002, walls: bool = True, show_arrows: bool = False,
            generator: Optional[Generator] = None):
    """
    Redraws the maze in place while the origin wanders, one move per frame.
    A `generator` (stepping one move per yield, e.g. a replay) may drive the
    frames; the animation ends with the frame showing its last move. By
    default random moves are drawn from the maze's random source.
    """
    out = out or sys.stdout
    if frames is None:
        frames = maze.rows * maze.columns * 8 + 10
    moves = generator.run() if generator is not None else None

    out.write(HIDE_CURSOR)
    try:
        for _ in range(frames):
            out.write(SYNC_BEGIN)
            out.write(HOME_CLEAR)
            draw(maze, out, walls=walls, show_arrows=show_arrows)

            if moves is None:
                maze.iterate_once(maze.random.randrange(4))
            elif next(moves, None) is None or generator.finished:
                out.write(SYNC_END)
                break

            out.write(SYNC_END)
            out.flush()
            if delay > 0:
                time.sleep(delay)
    finally:
        out.write(SHOW_CURSOR)
        out.flush()
