import abc
import enum

import numpy as np

from blockpix.engine import RenderStrategy
from blockpix.glyph_atlas import build_atlas
from blockpix.model import RGB, CharCell, RenderOptions
from blockpix.sampling import block_mean, luminance, palette_index, to_channel


def _fill(output: np.ndarray, x: int, y: int, size: int, rgba) -> None:
    output[y : y + size, x : x + size] = rgba


def _draw_glyph(output: np.ndarray, x: int, y: int, mask: np.ndarray, rgb: RGB) -> None:
    """Composite a glyph coverage mask in ``rgb`` over the block region."""
    size = mask.shape[0]
    region = output[y : y + size, x : x + size].astype(np.float32)
    coverage = mask[..., np.newaxis]
    colour = np.array(rgb + (255,), dtype=np.float32)
    blended = region * (1.0 - coverage) + colour * coverage
    output[y : y + size, x : x + size] = np.clip(np.rint(blended), 0, 255).astype(np.uint8)


class GrayStrategy:
    """Solid grey block at the block's mean luminance."""

    name = "gray"

    def render(self, block, output, options: RenderOptions, x, y):
        mean = block_mean(block)
        level = to_channel(luminance(mean))
        _fill(output, x, y, options.block_size, (level, level, level, to_channel(mean[3])))
        return None


class ColorBlockStrategy:
    """Solid block in the block's mean colour."""

    name = "pixel"

    def render(self, block, output, options: RenderOptions, x, y):
        mean = block_mean(block)
        _fill(output, x, y, options.block_size, tuple(to_channel(v) for v in mean))
        return None


class _CharStrategy(abc.ABC):
    name = ""

    @abc.abstractmethod
    def _glyph_colour(self, mean: np.ndarray, level: int) -> RGB:
        """Colour to draw the glyph in, from the block mean and its grey level."""

    def render(self, block, output, options: RenderOptions, x, y):
        mean = block_mean(block)
        value = luminance(mean)
        index = palette_index(value, len(options.palette))
        colour = self._glyph_colour(mean, to_channel(value))

        atlas = build_atlas(options.palette, options.block_size, options.font)
        _draw_glyph(output, x, y, atlas.masks[index], colour)
        return CharCell(
            glyph=atlas.chars[index],
            color=colour,
            row=y // options.block_size,
            col=x // options.block_size,
        )


class CharGrayStrategy(_CharStrategy):
    """Palette glyph chosen by luminance, drawn in grey."""

    name = "char_gray"

    def _glyph_colour(self, mean, level):
        return (level, level, level)


class CharColorStrategy(_CharStrategy):
    """Palette glyph chosen by luminance, drawn in the block's mean colour."""

    name = "char_color"

    def _glyph_colour(self, mean, level):
        return (to_channel(mean[0]), to_channel(mean[1]), to_channel(mean[2]))


class PixelStyle(enum.Enum):
    GRAY = "gray"
    PIXEL = "pixel"
    CHAR_GRAY = "char_gray"
    CHAR_COLOR = "char_color"

    @property
    def strategy(self) -> RenderStrategy:
        return _STRATEGIES[self]


_STRATEGIES: dict[PixelStyle, RenderStrategy] = {
    PixelStyle.GRAY: GrayStrategy(),
    PixelStyle.PIXEL: ColorBlockStrategy(),
    PixelStyle.CHAR_GRAY: CharGrayStrategy(),
    PixelStyle.CHAR_COLOR: CharColorStrategy(),
}


def resolve_strategy(value) -> RenderStrategy | None:
    """Accept a PixelStyle, its value in any case, a strategy object, or None."""
    if value is None:
        return None
    if isinstance(value, PixelStyle):
        return value.strategy
    if isinstance(value, str):
        key = value.strip().lower().replace("-", "_")
        for style in PixelStyle:
            if key == style.value:
                return style.strategy
        raise ValueError(f"Unknown pixel style: {value!r} (choose from {', '.join(s.value for s in PixelStyle)})")
    if callable(getattr(value, "render", None)):
        return value
    raise TypeError(f"Not a render strategy: {value!r}")
