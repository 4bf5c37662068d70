from dataclasses import dataclass
from functools import lru_cache

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from blockpix.model import FontMetrics


@dataclass(frozen=True, eq=False)
class GlyphAtlas:
    """Pre-rendered palette glyphs as coverage masks.

    ``masks`` has shape (len(chars), block_size, block_size), float32 in 0-1,
    aligned with ``chars``.
    """

    chars: tuple[str, ...]
    masks: np.ndarray
    block_size: int


def load_font(metrics: FontMetrics, block_size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = metrics.size_for(block_size)
    if metrics.font_path is None:
        return ImageFont.load_default(size=size)
    return ImageFont.truetype(metrics.font_path, size)


@lru_cache(maxsize=32)
def build_atlas(palette: str, block_size: int, metrics: FontMetrics) -> GlyphAtlas:
    """Render every palette glyph into a block-sized cell.

    Glyphs are centred horizontally on their own ink box and share one
    baseline, taken from the box of "M", centred vertically in the cell.
    """
    font = load_font(metrics, block_size)
    ref = font.getbbox("M")
    y_offset = (block_size - (ref[3] - ref[1])) // 2 - ref[1]

    chars = tuple(palette)
    masks = np.zeros((len(chars), block_size, block_size), dtype=np.float32)
    for i, char in enumerate(chars):
        bbox = font.getbbox(char)
        x_offset = (block_size - (bbox[2] - bbox[0])) // 2 - bbox[0]
        img = Image.new("L", (block_size, block_size), 0)
        draw = ImageDraw.Draw(img)
        draw.text((x_offset, y_offset), char, fill=255, font=font)
        masks[i] = np.asarray(img, dtype=np.float32) / 255.0

    masks.setflags(write=False)
    return GlyphAtlas(chars=chars, masks=masks, block_size=block_size)
