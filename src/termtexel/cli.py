import argparse
import logging
import sys
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from termtexel.codes import RESET
from termtexel.config import FALLBACK_SIZE, RenderConfig
from termtexel.errors import RenderError, TerminalSizeError
from termtexel.glyphs import ColourMode, GlyphLayout
from termtexel.raster import Raster
from termtexel.renderer import TexelRenderer
from termtexel.terminal import get_terminal_size

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Render an image in the terminal with block glyphs")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-s", "--size", type=int, default=None, help="Output width in columns (default: terminal width)"
    )
    parser.add_argument(
        "--height", type=int, default=None, help="Output height in rows (default: derived from the width)"
    )
    parser.add_argument(
        "--half", action="store_true", default=False, help="Use half blocks instead of quarter blocks"
    )
    parser.add_argument(
        "-p", "--palette", action="store_true", default=False, help="Use the 256-colour palette instead of truecolor"
    )
    parser.add_argument("-w", "--workers", type=int, default=None, help="Threads used to quantize cells")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    width = args.size
    if width is None and args.height is None:
        try:
            width = get_terminal_size().char_width
        except TerminalSizeError as e:
            width = FALLBACK_SIZE[0]
            logger.warning("%s, using %d columns", e, width)

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)

    try:
        with Image.open(image_path) as image:
            raster = Raster.from_image(image)
    except UnidentifiedImageError:
        print(f"Not an image: {image_path}", file=sys.stderr)
        sys.exit(1)

    config = RenderConfig(
        columns=width,
        rows=args.height,
        layout=GlyphLayout.HALF if args.half else GlyphLayout.QUARTER,
        colour_mode=ColourMode.PALETTE if args.palette else ColourMode.TRUECOLOR,
        workers=args.workers,
    )
    try:
        text = TexelRenderer(config).render(raster)
    except RenderError as e:
        print(f"Cannot render {image_path}: {e}", file=sys.stderr)
        sys.exit(1)
    # Reset before the final line break so the background does not bleed into the next line
    separator = config.row_separator
    sys.stdout.write(text[: -len(separator)] + RESET + separator)
