"""Raster output for generated pages.

AIDEV-NOTE: The rasterizer only produces dot lists. This module is the
file-encoder side: it draws pages with Pillow and writes numbered files.
"""

import logging
from pathlib import Path

from PIL import Image, ImageDraw

from ..models import Page
from .svg_export import page_to_svg

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("png", "svg")


def render_page(page: Page) -> Image.Image:
    """Draw a page's dots onto a new RGB image.

    Args:
        page: Page to draw

    Returns:
        PIL Image sized to the page, background filled, dots as circles
    """
    image = Image.new("RGB", page.size, page.background_color)
    draw = ImageDraw.Draw(image)

    for dot in page.dots:
        draw.ellipse(
            (
                dot.center_x - dot.radius,
                dot.center_y - dot.radius,
                dot.center_x + dot.radius,
                dot.center_y + dot.radius,
            ),
            fill=dot.color,
        )

    return image


def render_poster(pages: "list[Page]", pages_wide: int) -> Image.Image:
    """Stitch all pages into one preview image in tiling order.

    Args:
        pages: Pages in row-major order, as returned by rasterize
        pages_wide: Number of pages per row

    Returns:
        PIL Image of the whole poster
    """
    if not pages:
        raise ValueError("No pages to render")

    page_width, page_height = pages[0].size
    pages_high = -(-len(pages) // pages_wide)
    poster = Image.new(
        "RGB", (page_width * pages_wide, page_height * pages_high), pages[0].background_color
    )

    for index, page in enumerate(pages):
        row, column = divmod(index, pages_wide)
        poster.paste(render_page(page), (column * page_width, row * page_height))

    return poster


def check_image_path(path: "str | Path") -> Path:
    """Fail early if Pillow cannot pick a writer from the file extension.

    Raises:
        ValueError: If the extension is missing or unknown to Pillow
    """
    path = Path(path)
    if path.suffix.lower() not in Image.registered_extensions():
        raise ValueError(f"Unknown image file extension: {path.name}")
    return path


def page_filename(base_name: "str | Path", index: int, fmt: str) -> Path:
    """Numbered file name, e.g. ``output/page_01.png`` for index 0."""
    base = Path(base_name)
    return base.with_name(f"{base.name}_{index + 1:02d}.{fmt}")


def save_pages(
    pages: "list[Page]",
    base_name: "str | Path" = "rasterbator_page",
    fmt: str = "png",
) -> "list[Path]":
    """Write each page to its own file.

    Args:
        pages: Pages to write
        base_name: Path prefix; page numbers and extension are appended
        fmt: "png" or "svg"

    Returns:
        Paths written, in page order

    Raises:
        ValueError: If fmt is not a supported format
    """
    if fmt not in OUTPUT_FORMATS:
        raise ValueError(f"Unsupported output format: {fmt}")

    written = []
    for index, page in enumerate(pages):
        path = page_filename(base_name, index, fmt)
        path.parent.mkdir(parents=True, exist_ok=True)

        if fmt == "svg":
            path.write_text(page_to_svg(page), encoding="utf-8")
        else:
            render_page(page).save(path, format="PNG")

        logger.info("Saved: %s", path)
        written.append(path)

    return written
