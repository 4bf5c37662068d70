"""
High level entry point: load a source, render it, and hand back an image,
GIF bytes, a file on disk, or the character grids.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image

from blockpix import codec
from blockpix.animation import AnimationAssembler
from blockpix.charsets import DEFAULT_PALETTE
from blockpix.errors import InvalidDimensionError, InvalidSourceError
from blockpix.model import TRANSPARENT, FontMetrics, FrameCharGrid, RenderOptions
from blockpix.renderer import FrameRenderer
from blockpix.strategies import PixelStyle, resolve_strategy

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_SIZE = 1
DEFAULT_RATE = 1.0
DEFAULT_STYLE = PixelStyle.CHAR_COLOR
DEFAULT_FORMAT = "jpg"


def build_options(
    block_size: int | None = None,
    rate: float | None = None,
    style=None,
    palette: str | None = None,
    output_format: str | None = None,
    font_path: str | None = None,
    font_size: int | None = None,
    background=TRANSPARENT,
) -> RenderOptions:
    """Validate user settings and fill in defaults.

    Non-positive block sizes fall back to 1, a missing style to coloured
    characters, a missing palette to the default ramp and a missing rate to 1.0.
    The font is sized to the block unless ``font_size`` says otherwise.
    """
    if block_size is None or block_size <= 0:
        if block_size is not None:
            logger.warning("Ignoring block size %d, using %d", block_size, DEFAULT_BLOCK_SIZE)
        block_size = DEFAULT_BLOCK_SIZE
    if rate is None:
        rate = DEFAULT_RATE
    if rate <= 0:
        raise InvalidDimensionError(f"Scale rate must be positive, got {rate}")
    strategy = resolve_strategy(style if style is not None else DEFAULT_STYLE)
    if not palette:
        palette = DEFAULT_PALETTE
    if font_size is not None and font_size <= 0:
        font_size = None
    return RenderOptions(
        block_size=block_size,
        rate=float(rate),
        palette=palette,
        strategy=strategy,
        output_format=output_format or DEFAULT_FORMAT,
        font=FontMetrics(font_path=font_path, font_size=font_size),
        background=tuple(background),
    )


class PixelWrapper:
    """Render a static or animated source with one set of options.

    Keyword arguments are passed to :func:`build_options`. When no output
    format is given the source's own format is used.
    """

    def __init__(self, source: codec.Source, workers: int = 1, **options):
        self.frames, self.source_format = codec.load_frames(source)
        if not self.frames:
            raise InvalidSourceError("Source contains no frames")
        if options.get("output_format") is None:
            options["output_format"] = self.source_format
        self.options = build_options(**options)
        self.workers = workers

    @property
    def is_animated(self) -> bool:
        return self.source_format == "gif"

    def as_image(self) -> Image.Image:
        """Rendered image of the source, or of its first frame when animated."""
        return FrameRenderer(self.options).render(self.frames[0]).image

    def as_gif(self) -> bytes:
        if not self.is_animated:
            raise InvalidSourceError("Source is not an animated GIF")
        buffer = io.BytesIO()
        AnimationAssembler(self.options, workers=self.workers).encode(self.frames, buffer)
        return buffer.getvalue()

    def as_file(self, path: str | Path) -> Path:
        """Write the rendering to ``path``; animated sources are written as GIF."""
        path = Path(path)
        if self.is_animated:
            AnimationAssembler(self.options, workers=self.workers).encode(self.frames, path)
        else:
            codec.save_image(self.as_image(), path, self.options.output_format)
        logger.info("Saved rendering to %s", path)
        return path

    def as_chars(self) -> list[list[str]]:
        """Rows of glyphs for each frame, oldest frame first."""
        return [grid.lines() for grid in self.char_grids()]

    def char_grids(self) -> list[FrameCharGrid]:
        if not self.is_animated:
            return [FrameRenderer(self.options).render(self.frames[0]).grid]
        return AnimationAssembler(self.options, workers=self.workers).char_grids(self.frames)
