import argparse
import logging
import sys
from pathlib import Path

from PIL import Image

from blockpix.charsets import PALETTES
from blockpix.errors import BlockPixError
from blockpix.strategies import PixelStyle
from blockpix.terminal import format_grid, get_terminal_size, play
from blockpix.wrapper import PixelWrapper


def _palette(value: str) -> str:
    return PALETTES.get(value, value)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render an image or animated GIF as pixel art or characters")
    parser.add_argument("image", help="Path to input image (JPEG, PNG or GIF)")
    parser.add_argument("-o", "--output", default=None, help="Write the rendered image or GIF to this path")
    parser.add_argument("-b", "--block-size", type=int, default=None, help="Block size in pixels (default: 1)")
    parser.add_argument("-r", "--rate", type=float, default=None, help="Scale the source by this factor first")
    parser.add_argument(
        "-s",
        "--style",
        default=PixelStyle.CHAR_COLOR.value,
        choices=[s.value for s in PixelStyle],
        help="Rendering style (default: char_color)",
    )
    parser.add_argument(
        "-p",
        "--palette",
        type=_palette,
        default=None,
        help=f"Glyph palette: one of {', '.join(sorted(PALETTES))} or a literal string of glyphs",
    )
    parser.add_argument("--font", default=None, help="TrueType font for character styles")
    parser.add_argument("--font-size", type=int, default=None, help="Font size (default: block size)")
    parser.add_argument("-f", "--format", default=None, help="Output raster format (default: source format)")
    parser.add_argument("-t", "--text", action="store_true", help="Print the character grid to stdout")
    parser.add_argument("-c", "--colour", action="store_true", help="Use truecolor ANSI escapes for text output")
    parser.add_argument("--play", action="store_true", help="Play an animated source in the terminal")
    parser.add_argument("--loops", type=int, default=1, help="Times to repeat --play (default: 1)")
    parser.add_argument("-j", "--workers", type=int, default=1, help="Render frames on this many threads")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log progress (-vv for debug)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING - 10 * min(args.verbose, 2),
        format="%(levelname)s %(name)s: %(message)s",
    )

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.block_size is None and (args.text or args.play) and args.rate is None:
            # fit one glyph per terminal column
            with Image.open(image_path) as probe:
                width = probe.width
            args.block_size = max(1, -(-width // get_terminal_size()[0]))

        wrapper = PixelWrapper(
            image_path,
            workers=args.workers,
            block_size=args.block_size,
            rate=args.rate,
            style=args.style,
            palette=args.palette,
            output_format=args.format,
            font_path=args.font,
            font_size=args.font_size,
        )
        if args.output:
            wrapper.as_file(args.output)
        if args.play:
            grids = wrapper.char_grids()
            play(grids, [frame.delay for frame in wrapper.frames], colour=args.colour, loops=args.loops)
        elif args.text or not args.output:
            for grid in wrapper.char_grids():
                print(format_grid(grid, colour=args.colour))
    except (BlockPixError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
