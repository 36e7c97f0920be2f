"""SVG serialization of rasterized pages."""

import svg

from ..models import Page
from .utils import to_hex


def page_to_svg(page: Page) -> str:
    """Convert a page to an SVG document string.

    Args:
        page: Page with dots in page-local pixel coordinates

    Returns:
        SVG content as string, one circle per dot over a background rect
    """
    width = round(page.width_px, 3)
    height = round(page.height_px, 3)

    elements: list[svg.Element] = [
        svg.Rect(
            x=0,
            y=0,
            width=width,
            height=height,
            fill=to_hex(page.background_color),
        )
    ]
    elements.extend(
        svg.Circle(
            cx=round(dot.center_x, 3),
            cy=round(dot.center_y, 3),
            r=round(dot.radius, 3),
            fill=dot.hex_color,
        )
        for dot in page.dots
    )

    document = svg.SVG(
        width=width,
        height=height,
        viewBox=svg.ViewBoxSpec(0, 0, width, height),
        elements=elements,
    )
    return document.as_str()
