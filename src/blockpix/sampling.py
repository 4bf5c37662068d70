import math

import numpy as np

# ITU-R BT.601 luma weights for R, G, B
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114])


def block_mean(block: np.ndarray) -> np.ndarray:
    """Mean RGBA of a (h, w, 4) block, as float64 of shape (4,)."""
    return block.reshape(-1, block.shape[-1]).mean(axis=0, dtype=np.float64)


def luminance(rgb) -> float:
    """Perceived brightness 0-255 of an RGB triple."""
    return float(np.dot(np.asarray(rgb[:3], dtype=np.float64), LUMA_WEIGHTS))


def to_channel(value: float) -> int:
    """Round a float channel value to the nearest 0-255 integer."""
    return int(min(255, max(0, math.floor(value + 0.5))))


def palette_index(value: float, palette_length: int) -> int:
    """Map a luminance 0-255 onto a palette position.

    Linear scaling ``floor(value / 256 * palette_length)``: 0 selects the first
    glyph and 255 the last, whatever order the palette was written in.
    """
    if palette_length <= 0:
        raise ValueError("Palette must contain at least one glyph")
    index = math.floor(value / 256 * palette_length)
    return min(palette_length - 1, max(0, index))
