import os
import sys
import time
from collections.abc import Sequence
from typing import TextIO

from blockpix.model import FrameCharGrid

RESET = "\033[0m"
CLEAR_SCREEN = "\033[2J"
CURSOR_HOME = "\033[H"


def get_terminal_size() -> tuple[int, int]:
    """Return (columns, rows) of the terminal, or (80, 24) if not a tty."""
    if not sys.stdout.isatty():
        return (80, 24)
    size = os.get_terminal_size()
    return (size.columns, size.lines)


def format_grid(grid: FrameCharGrid, colour: bool = False) -> str:
    """Join a grid into text, optionally wrapping each glyph in ANSI truecolor escapes."""
    if not colour:
        return "\n".join(grid.lines())
    out = []
    for row in grid.cells:
        parts = []
        for cell in row:
            r, g, b = cell.color
            parts.append(f"\033[38;2;{r};{g};{b}m{cell.glyph}")
        parts.append(RESET)
        out.append("".join(parts))
    return "\n".join(out)


def play(
    grids: Sequence[FrameCharGrid],
    delays: Sequence[int | None],
    colour: bool = False,
    loops: int = 1,
    stream: TextIO | None = None,
    sleep=time.sleep,
) -> None:
    """Draw frames one after another in place, holding each for its delay in ms."""
    stream = stream or sys.stdout
    stream.write(CLEAR_SCREEN)
    for _ in range(loops):
        for grid, delay in zip(grids, delays):
            stream.write(CURSOR_HOME + format_grid(grid, colour) + "\n")
            stream.flush()
            if delay:
                sleep(delay / 1000)
