"""Page and dot-grid geometry."""

import math

from ..models import CELL_GUTTER, MM_PER_INCH, RESOLUTION, Geometry, RasterConfig


def to_pixels(value: float, use_pixels: bool, resolution: float = RESOLUTION) -> float:
    """Convert a size in mm to px; pixel sizes pass through unchanged."""
    if use_pixels:
        return value
    return value / MM_PER_INCH * resolution


def plan_layout(config: RasterConfig, resolution: float = RESOLUTION) -> Geometry:
    """Compute the dot grid shared by every page.

    Args:
        config: Rasterization options
        resolution: Pixels per inch used for mm conversion

    Returns:
        Geometry with page size, cell pitch and cell counts

    AIDEV-NOTE: A cell larger than the page gives zero cells, which is
    a valid blank page rather than an error.
    """
    paper_width_px = to_pixels(config.paper_width, config.use_pixels, resolution)
    paper_height_px = to_pixels(config.paper_height, config.use_pixels, resolution)
    dot_size_px = to_pixels(config.dot_size, config.use_pixels, resolution)

    square_size = dot_size_px * CELL_GUTTER

    return Geometry(
        paper_width_px=paper_width_px,
        paper_height_px=paper_height_px,
        square_size=square_size,
        squares_x=max(0, math.floor(paper_width_px / square_size)),
        squares_y=max(0, math.floor(paper_height_px / square_size)),
        max_dot_radius=dot_size_px,
    )
