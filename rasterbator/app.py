"""Rasterbator - command-line entry point."""

import argparse
import logging
import sys

from .config_manager import ConfigManager
from .image_processing import Rasterbator, render_poster, save_pages
from .image_processing.rendering import check_image_path
from .models import ColorMode, RasterConfig

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rasterbator",
        description="Turn an image into a multi-page poster of halftone dots.",
    )
    parser.add_argument("input", help="Source image (PNG, JPG, ...)")
    parser.add_argument(
        "-o",
        "--output",
        default="output/rasterbator_page",
        help="Output path prefix; page numbers are appended (default: %(default)s)",
    )
    parser.add_argument("--config", help="JSON preset with default options")

    layout = parser.add_argument_group("layout")
    layout.add_argument("--pages-wide", type=int, dest="pages_wide")
    layout.add_argument("--pages-high", type=int, dest="pages_high")
    layout.add_argument("--paper-width", type=float, dest="paper_width")
    layout.add_argument("--paper-height", type=float, dest="paper_height")
    layout.add_argument("--target-width", type=int, dest="target_width")
    layout.add_argument("--dot-size", type=float, dest="dot_size")
    layout.add_argument(
        "--use-pixels",
        action="store_true",
        default=None,
        dest="use_pixels",
        help="Read paper and dot sizes as pixels instead of millimeters",
    )

    color = parser.add_argument_group("color")
    color.add_argument(
        "--color-mode", choices=[m.value for m in ColorMode], dest="color_mode"
    )
    color.add_argument("--dot-color", dest="dot_color", help="Hex color for mono mode")

    background = parser.add_argument_group("background removal")
    background.add_argument(
        "--background-removal", action="store_true", default=None, dest="background_removal"
    )
    background.add_argument("--background-color", dest="background_color")
    background.add_argument(
        "--background-threshold", type=float, dest="background_threshold", help="0-100"
    )
    background.add_argument(
        "--preserve-edges", action="store_true", default=None, dest="preserve_edges"
    )

    output = parser.add_argument_group("output")
    output.add_argument("--format", choices=["png", "svg"], default="png")
    output.add_argument("--preview", help="Also write the stitched poster to this PNG file")
    output.add_argument("--workers", type=int, default=1, help="Pages built in parallel")
    output.add_argument("-v", "--verbose", action="store_true")
    return parser


OPTION_NAMES = (
    "pages_wide",
    "pages_high",
    "paper_width",
    "paper_height",
    "target_width",
    "dot_size",
    "use_pixels",
    "color_mode",
    "dot_color",
    "background_removal",
    "background_color",
    "background_threshold",
    "preserve_edges",
)


def load_config(args: argparse.Namespace) -> RasterConfig:
    """Merge preset file (if any) and explicit command-line options."""
    overrides = {
        name: getattr(args, name)
        for name in OPTION_NAMES
        if getattr(args, name) is not None
    }
    if args.config:
        return ConfigManager(args.config).load(**overrides)
    return RasterConfig.from_options(**overrides)


def main(argv: "list[str] | None" = None) -> int:
    """Run the command line and return the process exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args)
        if args.preview:
            check_image_path(args.preview)
        rasterbator = Rasterbator(config, workers=args.workers)
        pages = rasterbator.process(args.input)

        written = save_pages(pages, args.output, fmt=args.format)
        if args.preview:
            render_poster(pages, config.pages_wide).save(args.preview)
            logger.info("Saved preview: %s", args.preview)
    except (ValueError, OSError) as e:  # ValueError includes ConfigurationError
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(f"✓ Generated {len(written)} page(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
