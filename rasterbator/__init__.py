"""Rasterbator - turn images into tiled pages of halftone dots."""

from .image_processing import (
    Rasterbator,
    SourceImage,
    load_source,
    page_to_svg,
    rasterize,
    render_page,
    render_poster,
    save_pages,
)
from .models import (
    AreaSample,
    ColorMode,
    ConfigurationError,
    Dot,
    Geometry,
    Page,
    RasterConfig,
)

__version__ = "1.0.0"

__all__ = [
    "AreaSample",
    "ColorMode",
    "ConfigurationError",
    "Dot",
    "Geometry",
    "Page",
    "RasterConfig",
    "Rasterbator",
    "SourceImage",
    "load_source",
    "page_to_svg",
    "rasterize",
    "render_page",
    "render_poster",
    "save_pages",
]
