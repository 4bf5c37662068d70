from PIL import Image

from blockpix.errors import InvalidDimensionError


def scaled_size(width: int, height: int, rate: float) -> tuple[int, int]:
    """Size of an image after scaling by ``rate``, rounding half up."""
    if rate <= 0:
        raise InvalidDimensionError(f"Scale rate must be positive, got {rate}")
    new_width = int(width * rate + 0.5)
    new_height = int(height * rate + 0.5)
    if new_width <= 0 or new_height <= 0:
        raise InvalidDimensionError(
            f"Scaling {width}x{height} by {rate} gives an empty image ({new_width}x{new_height})"
        )
    return new_width, new_height


def scale(image: Image.Image, rate: float) -> Image.Image:
    """Resize an image by ``rate`` ahead of block decomposition.

    A rate of exactly 1.0 returns the image untouched. Resampling is bilinear,
    which is deterministic for identical inputs.
    """
    if rate == 1.0:
        return image
    size = scaled_size(image.width, image.height, rate)
    return image.resize(size, Image.BILINEAR)
