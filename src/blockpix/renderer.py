from __future__ import annotations

import logging

import numpy as np
from PIL import Image

from blockpix.context import RenderContext
from blockpix.errors import InvalidSourceError, MissingStrategyError
from blockpix.grid import grid_shape, iter_blocks, truncated_size
from blockpix.model import Frame, RenderedFrame, RenderOptions
from blockpix.scaling import scale

logger = logging.getLogger(__name__)


def _check_source(image: Image.Image | None) -> None:
    if image is None:
        raise InvalidSourceError("Source image cannot be None")
    if image.width == 0 or image.height == 0:
        raise InvalidSourceError(f"Source image has a zero dimension: {image.width}x{image.height}")


class FrameRenderer:
    """Scale one frame, split it into blocks and run the render strategy on each."""

    def __init__(self, options: RenderOptions):
        self.options = options

    def render(self, frame: Frame, index: int = 0, previous: int | None = None) -> RenderedFrame:
        options = self.options
        _check_source(frame.image)
        strategy = options.strategy
        if strategy is None:
            raise MissingStrategyError("No render strategy configured")

        source = scale(frame.image.convert("RGBA"), options.rate)
        pixels = np.asarray(source, dtype=np.uint8)
        bs = options.block_size
        out_width, out_height = truncated_size(source.width, source.height, bs)
        rows, cols = grid_shape(source.width, source.height, bs)

        output = np.empty((out_height, out_width, 4), dtype=np.uint8)
        output[...] = options.background

        with RenderContext(rows, cols) as context:
            for x, y in iter_blocks(source.width, source.height, bs):
                cell = strategy.render(pixels[y : y + bs, x : x + bs], output, options, x, y)
                if cell is not None:
                    context.push(cell)
            grid = context.finish(index=index, previous=previous)

        logger.debug(
            "Rendered frame %d: %dx%d -> %dx%d, %d blocks with %s",
            index,
            frame.image.width,
            frame.image.height,
            out_width,
            out_height,
            rows * cols,
            getattr(strategy, "name", type(strategy).__name__),
        )
        if output.size == 0:
            # smaller than one block
            rendered = Image.new("RGBA", (out_width, out_height), options.background)
        else:
            rendered = Image.fromarray(output)
        return RenderedFrame(image=rendered, grid=grid, delay=frame.delay)


def render_image(image: Image.Image, options: RenderOptions) -> RenderedFrame:
    """Render a single static image."""
    return FrameRenderer(options).render(Frame(image=image))
