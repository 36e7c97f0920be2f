"""Image-to-dots pipeline for poster printing.

AIDEV-NOTE: This package turns a decoded image into pages of dots.
Organized into modular components:
- source: Read-only pixel buffer and file loading
- layout: Page and dot-grid geometry
- sampling: Area sampling, background classification, edge detection
- composer: Per-cell dot radius and color
- processor: Main Rasterbator orchestrator (page assembly)
- rendering / svg_export: Output adapters for PNG and SVG
"""

from .processor import Rasterbator, rasterize
from .rendering import render_page, render_poster, save_pages
from .source import SourceImage, load_source
from .svg_export import page_to_svg

__all__ = [
    "Rasterbator",
    "SourceImage",
    "load_source",
    "page_to_svg",
    "rasterize",
    "render_page",
    "render_poster",
    "save_pages",
]
