"""Decide whether a cell gets a dot, and how big and what color."""

from ..models import DOT_SUPPRESS_RADIUS, AreaSample, ColorMode, Dot, RasterConfig
from .utils import clamp_color


def dot_radius(brightness: float, max_dot_radius: float) -> float:
    """Darker cells get larger dots; white gives radius 0."""
    return (1 - brightness) * max_dot_radius / 2


def compose_dot(
    sample: AreaSample,
    center_x: float,
    center_y: float,
    max_dot_radius: float,
    config: RasterConfig,
    is_edge: bool = False,
) -> "Dot | None":
    """Turn one cell's sample into a Dot, or None when the cell stays empty.

    Args:
        sample: Classified area sample for the cell
        center_x: Cell center in page-local px
        center_y: Cell center in page-local px
        max_dot_radius: Geometry.max_dot_radius
        config: Rasterization options
        is_edge: Edge detector verdict, only consulted for background cells
            when edge preservation is on

    Returns:
        Dot to draw, or None if the cell is background or too light
    """
    if config.background_removal and sample.is_background:
        if not (config.preserve_edges and is_edge):
            return None

    radius = dot_radius(sample.brightness, max_dot_radius)
    if radius <= DOT_SUPPRESS_RADIUS:
        return None

    if config.color_mode == ColorMode.MONO:
        color = config.dot_color
    else:
        color = clamp_color(sample.color)

    return Dot(center_x=center_x, center_y=center_y, radius=radius, color=color)
