"""
Pillow-backed decoding of source images and encoding of rendered output.

The rendering core never touches files; this module turns paths, bytes and
file objects into Frames and writes rendered frames back out as a raster
image or an animated GIF.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import IO, Union

from PIL import Image, ImageSequence

from blockpix.errors import EmptySequenceError, EncodingFailureError, InvalidSourceError
from blockpix.model import Frame

logger = logging.getLogger(__name__)

Source = Union[Image.Image, str, Path, bytes, bytearray, IO[bytes]]
Target = Union[str, Path, IO[bytes]]

DEFAULT_DELAY_MS = 100

# Formats that cannot store an alpha channel
_OPAQUE_FORMATS = {"JPEG", "BMP", "PPM"}


def format_extension(pil_format: str | None) -> str | None:
    """Short file-extension style tag for a Pillow format name ("JPEG" -> "jpg")."""
    if pil_format is None:
        return None
    pil_format = pil_format.upper()
    if pil_format == "JPEG":
        return "jpg"
    return pil_format.lower()


def pil_format(tag: str) -> str:
    """Pillow format name for an extension style tag ("jpg" -> "JPEG")."""
    ext = "." + tag.lower().lstrip(".")
    registered = Image.registered_extensions()
    if ext not in registered:
        raise EncodingFailureError(f"Unsupported output format: {tag!r}")
    return registered[ext]


def _open(source: Source) -> Image.Image:
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        return Image.open(source)
    except (OSError, ValueError) as exc:
        raise InvalidSourceError(f"Cannot read source image: {exc}") from exc


def _read_frames(image: Image.Image) -> list[Frame]:
    if image.format != "GIF":
        return [Frame(image=image.convert("RGBA"), delay=None)]
    frames = []
    for frame in ImageSequence.Iterator(image):
        delay = frame.info.get("duration", DEFAULT_DELAY_MS)
        frames.append(Frame(image=frame.convert("RGBA"), delay=int(delay)))
    return frames


def load_frames(source: Source) -> tuple[list[Frame], str | None]:
    """Decode a source into Frames plus its format tag ("jpg", "png", "gif", ...).

    The format is sniffed from the data itself, not the file name. A GIF gives
    one Frame per animation frame with its delay; anything else gives a single
    Frame with no delay.
    """
    if isinstance(source, Image.Image):
        return _read_frames(source), format_extension(source.format)

    image = _open(source)
    with image:
        try:
            frames = _read_frames(image)
        except (OSError, ValueError) as exc:
            raise InvalidSourceError(f"Cannot decode source image: {exc}") from exc
        fmt = format_extension(image.format)
    logger.debug("Decoded %d frame(s) of %s source", len(frames), fmt)
    return frames, fmt


def _prepare_target(target: Target) -> Target:
    if isinstance(target, (str, Path)):
        path = Path(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path
    return target


def flatten(image: Image.Image, background=(0, 0, 0)) -> Image.Image:
    """Composite an RGBA image onto an opaque background."""
    canvas = Image.new("RGB", image.size, background)
    if image.mode == "RGBA":
        canvas.paste(image, mask=image.getchannel("A"))
    else:
        canvas.paste(image.convert("RGB"))
    return canvas


def save_image(image: Image.Image, target: Target, fmt: str = "png") -> None:
    """Write one rendered image, creating parent directories as needed."""
    name = pil_format(fmt)
    if name in _OPAQUE_FORMATS:
        image = flatten(image)
    try:
        image.save(_prepare_target(target), format=name)
    except (OSError, ValueError) as exc:
        raise EncodingFailureError(f"Failed to write {name} image to {target}: {exc}") from exc


def encode_gif(
    images: Sequence[Image.Image],
    delays: Sequence[int | None],
    target: Target,
    loop: int = 0,
) -> None:
    """Write frames as an animated GIF, keeping their order and delays."""
    if not images:
        raise EmptySequenceError("No frames to encode")
    if len(images) != len(delays):
        raise EncodingFailureError(f"Got {len(images)} frames but {len(delays)} delays")

    durations = [DEFAULT_DELAY_MS if d is None else d for d in delays]
    first, *rest = images
    try:
        first.save(
            _prepare_target(target),
            format="GIF",
            save_all=True,
            append_images=rest,
            duration=durations,
            loop=loop,
            disposal=2,
        )
    except (OSError, ValueError) as exc:
        raise EncodingFailureError(f"Failed to encode GIF: {exc}") from exc
    logger.info("Encoded GIF with %d frames", len(images))
