"""Main rasterizer orchestrating layout, sampling and dot composition.

AIDEV-NOTE: This module handles the complete pipeline from a decoded
image to per-page dot lists. Uses modular components for layout,
sampling and composition. Drawing the dots is left to the output
adapters (rendering, svg_export).
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ..models import Geometry, Page, RasterConfig
from .composer import compose_dot
from .layout import plan_layout
from .sampling import classify_background, detect_edge, sample_area
from .source import SourceImage, load_source

logger = logging.getLogger(__name__)


def sampling_rect(
    global_x: float,
    global_y: float,
    square_size: float,
    scale_x: float,
    scale_y: float,
    image_width: int,
    image_height: int,
) -> "tuple[int, int, int, int] | None":
    """Map a composite-canvas cell center to a source-image rectangle.

    Returns:
        (start_x, start_y, end_x, end_y), half-open, or None if the cell
        falls outside the image

    AIDEV-NOTE: The rectangle is square with side based on scale_x only,
    so non-uniform scaling samples a square patch of the source.
    """
    area_size = max(1, math.floor(square_size * scale_x))
    start_x = math.floor(global_x * scale_x - area_size / 2)
    start_y = math.floor(global_y * scale_y - area_size / 2)

    if not (0 <= start_x < image_width and 0 <= start_y < image_height):
        return None

    end_x = min(image_width, start_x + area_size)
    end_y = min(image_height, start_y + area_size)
    return start_x, start_y, end_x, end_y


class Rasterbator:
    """Converts images into tiled pages of variable-radius dots."""

    def __init__(self, config: RasterConfig | None = None, workers: int = 1):
        self.config = config or RasterConfig()
        self.workers = max(1, workers)

    def plan_layout(self) -> Geometry:
        """Compute the dot grid for the current config."""
        return plan_layout(self.config)

    def build_page(
        self,
        image: SourceImage,
        geometry: Geometry,
        column: int,
        row: int,
    ) -> Page:
        """Assemble the dots for the page at grid position (column, row).

        Args:
            image: Source pixels
            geometry: Shared layout from plan_layout
            column: Page index across (0-based)
            row: Page index down (0-based)

        Returns:
            Page with dots in row-major cell order
        """
        config = self.config
        page = Page(
            width_px=geometry.paper_width_px,
            height_px=geometry.paper_height_px,
            column=column,
            row=row,
        )

        offset_x = geometry.paper_width_px * column
        offset_y = geometry.paper_height_px * row

        # Whole poster, all pages side by side
        total_width = geometry.paper_width_px * config.pages_wide
        total_height = geometry.paper_height_px * config.pages_high

        scale_x = image.width / total_width
        scale_y = image.height / total_height

        square = geometry.square_size
        for sy in range(geometry.squares_y):
            for sx in range(geometry.squares_x):
                center_x = (sx + 0.5) * square
                center_y = (sy + 0.5) * square

                rect = sampling_rect(
                    offset_x + center_x,
                    offset_y + center_y,
                    square,
                    scale_x,
                    scale_y,
                    image.width,
                    image.height,
                )
                if rect is None:
                    continue

                sample = sample_area(image, *rect, config.color_mode)
                sample = classify_background(sample, config)

                is_edge = False
                if sample.is_background and config.preserve_edges:
                    is_edge = detect_edge(image, *rect, config)

                dot = compose_dot(
                    sample,
                    center_x,
                    center_y,
                    geometry.max_dot_radius,
                    config,
                    is_edge=is_edge,
                )
                if dot is not None:
                    page.dots.append(dot)

        logger.debug("Page (%d, %d): %d dots", column, row, len(page.dots))
        return page

    def rasterize(self, image: SourceImage) -> "list[Page]":
        """Generate every page of the poster.

        Args:
            image: Decoded source image

        Returns:
            Pages in row-major order (top row first, left to right)
        """
        geometry = self.plan_layout()
        logger.info(
            "Page %.1fx%.1f px, cell %.2f px, grid %dx%d, %d page(s)",
            geometry.paper_width_px,
            geometry.paper_height_px,
            geometry.square_size,
            geometry.squares_x,
            geometry.squares_y,
            self.config.pages_wide * self.config.pages_high,
        )

        positions = [
            (px, py)
            for py in range(self.config.pages_high)
            for px in range(self.config.pages_wide)
        ]

        # AIDEV-NOTE: Pages share only read-only state, so they can be built
        # in parallel; executor.map keeps the row-major order.
        if self.workers > 1 and len(positions) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                pages = list(
                    executor.map(
                        lambda pos: self.build_page(image, geometry, *pos), positions
                    )
                )
        else:
            pages = [self.build_page(image, geometry, px, py) for px, py in positions]

        logger.info(
            "Generated %d page(s), %d dots total",
            len(pages),
            sum(len(page.dots) for page in pages),
        )
        return pages

    def process(self, file_path: "str | Path") -> "list[Page]":
        """Load an image file, resize it to the target width and rasterize it."""
        logger.info("Starting rasterization of %s", file_path)
        image = load_source(file_path, self.config.target_width)
        return self.rasterize(image)


def rasterize(
    image: SourceImage, config: RasterConfig, workers: int = 1
) -> "list[Page]":
    """Convert an image into pages of dots.

    Args:
        image: Decoded source image
        config: Validated rasterization options
        workers: Number of pages built in parallel

    Returns:
        One Page per (column, row), in row-major order
    """
    return Rasterbator(config, workers=workers).rasterize(image)
