import io

import pytest
from PIL import Image

from blockpix.model import Frame, RenderOptions
from blockpix.strategies import PixelStyle


def make_options(style=PixelStyle.PIXEL, block_size=2, rate=1.0, palette=" #", **kwargs):
    """RenderOptions with a strategy set, for tests that bypass build_options."""
    return RenderOptions(block_size=block_size, rate=rate, palette=palette, strategy=style.strategy, **kwargs)


@pytest.fixture
def options():
    return make_options


@pytest.fixture
def coloured_frames():
    """Three distinct solid frames with delays 40, 60 and 50 ms."""
    return [
        Frame(image=Image.new("RGB", (8, 8), (255, 0, 0)), delay=40),
        Frame(image=Image.new("RGB", (8, 8), (0, 255, 0)), delay=60),
        Frame(image=Image.new("RGB", (8, 8), (0, 0, 255)), delay=50),
    ]


@pytest.fixture
def gif_bytes(coloured_frames):
    """The coloured frames encoded as an animated GIF."""
    buffer = io.BytesIO()
    first, *rest = [f.image for f in coloured_frames]
    first.save(
        buffer,
        format="GIF",
        save_all=True,
        append_images=rest,
        duration=[f.delay for f in coloured_frames],
        loop=0,
    )
    return buffer.getvalue()
