from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from PIL import Image

from blockpix.charsets import DEFAULT_PALETTE

if TYPE_CHECKING:
    from blockpix.engine import RenderStrategy

RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]

TRANSPARENT: RGBA = (0, 0, 0, 0)


@dataclass(frozen=True)
class FontMetrics:
    """Font used to draw glyphs into character blocks.

    ``font_path`` of None selects Pillow's built-in scalable font. ``font_size``
    of None sizes the font to the block, so one glyph fills one block.
    """

    font_path: str | None = None
    font_size: int | None = None

    def size_for(self, block_size: int) -> int:
        return self.font_size if self.font_size is not None else block_size


@dataclass(frozen=True)
class RenderOptions:
    block_size: int = 1
    rate: float = 1.0
    palette: str = DEFAULT_PALETTE
    strategy: RenderStrategy | None = None
    output_format: str = "jpg"
    font: FontMetrics = field(default_factory=FontMetrics)
    background: RGBA = TRANSPARENT


@dataclass(frozen=True)
class CharCell:
    glyph: str
    color: RGB
    row: int
    col: int


@dataclass(frozen=True)
class FrameCharGrid:
    """Character cells of one rendered frame, in row-major order.

    ``index`` is this frame's position in the owning sequence and ``previous``
    the position of the frame before it (None for the first). The link is
    navigation only: grids never hold each other.
    """

    cells: tuple[tuple[CharCell, ...], ...] = ()
    index: int = 0
    previous: int | None = None

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def lines(self) -> list[str]:
        """One string per grid row."""
        return ["".join(cell.glyph for cell in row) for row in self.cells]

    def glyphs(self) -> list[list[str]]:
        return [[cell.glyph for cell in row] for row in self.cells]

    def linked(self, index: int, previous: int | None) -> FrameCharGrid:
        """Return a copy placed at ``index`` in a sequence, pointing back to ``previous``."""
        return FrameCharGrid(cells=self.cells, index=index, previous=previous)


@dataclass
class Frame:
    """One source image; ``delay`` is the display time in ms, None for a static image."""

    image: Image.Image | None
    delay: int | None = None


@dataclass
class RenderedFrame:
    image: Image.Image
    grid: FrameCharGrid
    delay: int | None = None
