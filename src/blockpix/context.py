from __future__ import annotations

from blockpix.errors import GridAssemblyError
from blockpix.model import CharCell, FrameCharGrid


class RenderContext:
    """Collects the character cells of a single frame render.

    Cells land in slots addressed by their own (row, col), so the finished grid
    is row-major whatever order cells were pushed in. One context per frame
    render; it is never shared between renders.
    """

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        self._slots: list[list[CharCell | None]] = [[None] * cols for _ in range(rows)]
        self._count = 0

    def __enter__(self) -> RenderContext:
        return self

    def __exit__(self, *exc_info) -> None:
        self.clear()

    def __len__(self) -> int:
        return self._count

    def push(self, cell: CharCell) -> None:
        if not (0 <= cell.row < self.rows and 0 <= cell.col < self.cols):
            raise GridAssemblyError(
                f"Cell ({cell.row}, {cell.col}) is outside the {self.rows}x{self.cols} grid",
                row=cell.row,
                col=cell.col,
            )
        if self._slots[cell.row][cell.col] is not None:
            raise GridAssemblyError(f"Cell ({cell.row}, {cell.col}) was rendered twice", row=cell.row, col=cell.col)
        self._slots[cell.row][cell.col] = cell
        self._count += 1

    def finish(self, index: int = 0, previous: int | None = None) -> FrameCharGrid:
        """Freeze the collected cells into a grid.

        A context nothing was pushed to (block strategies) gives an empty grid.
        """
        if self._count == 0:
            return FrameCharGrid(index=index, previous=previous)
        if self._count != self.rows * self.cols:
            for r, row in enumerate(self._slots):
                for c, cell in enumerate(row):
                    if cell is None:
                        raise GridAssemblyError(f"Cell ({r}, {c}) was never rendered", row=r, col=c)
        cells = tuple(tuple(row) for row in self._slots)
        return FrameCharGrid(cells=cells, index=index, previous=previous)

    def clear(self) -> None:
        self._slots = []
        self._count = 0
        self.rows = 0
        self.cols = 0
