"""Per-cell area sampling, background classification and edge detection.

AIDEV-NOTE: All three operate on half-open pixel rectangles
[start_x, end_x) x [start_y, end_y) that the caller has already clamped
to the image. Pixel loops are vectorized with numpy; scan order
(row by row, left to right) still matters for dominant-color ties.
"""

import numpy as np

from ..models import (
    EDGE_EXPAND_PX,
    EDGE_RATIO_MAX,
    EDGE_RATIO_MIN,
    QUANTIZE_STEP,
    AreaSample,
    ColorMode,
    RasterConfig,
)
from .source import SourceImage
from .utils import color_distance, round_half_up

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114])


def sample_area(
    image: SourceImage,
    start_x: int,
    start_y: int,
    end_x: int,
    end_y: int,
    color_mode: ColorMode,
) -> AreaSample:
    """Measure color and brightness over a rectangle.

    Args:
        image: Source pixels
        start_x: Left edge (inclusive)
        start_y: Top edge (inclusive)
        end_x: Right edge (exclusive)
        end_y: Bottom edge (exclusive)
        color_mode: MULTI reports the dominant quantized color, every
            other mode reports the average color

    Returns:
        AreaSample with ``is_background`` left False

    Raises:
        ValueError: If the rectangle contains no pixels
    """
    region = image.region(start_x, start_y, end_x, end_y)
    pixels = region.reshape(-1, 3)
    count = pixels.shape[0]
    if count == 0:
        raise ValueError(
            f"Empty sampling region [{start_x}, {end_x}) x [{start_y}, {end_y})"
        )

    totals = pixels.sum(axis=0, dtype=np.int64)
    avg_color = tuple(round_half_up(total / count) for total in totals)

    # Mean of per-pixel brightness, each normalized to 0-1
    brightness = float((pixels @ LUMA_WEIGHTS / 255.0).mean())

    color = avg_color
    if ColorMode(color_mode) == ColorMode.MULTI:
        color = dominant_color(pixels)

    return AreaSample(color=color, brightness=brightness)


def dominant_color(pixels: np.ndarray) -> "tuple[int, int, int]":
    """Most frequent color after flooring each channel to a multiple of 32.

    AIDEV-NOTE: Ties go to the bucket seen first in scan order, not to
    the numerically smallest bucket.
    """
    quantized = (pixels.reshape(-1, 3) // QUANTIZE_STEP) * QUANTIZE_STEP
    buckets, first_seen, counts = np.unique(
        quantized, axis=0, return_index=True, return_counts=True
    )
    # Highest count first, then earliest first occurrence
    best = np.lexsort((first_seen, -counts))[0]
    r, g, b = buckets[best]
    return (int(r), int(g), int(b))


def is_background_color(
    color: "tuple[int, int, int]",
    background_color: "tuple[int, int, int]",
    threshold: float,
) -> bool:
    """Whether a color is within ``threshold`` (0-100) of the background.

    AIDEV-NOTE: Distance is divided by 255, not by the RGB cube diagonal.
    Existing threshold values depend on this, keep it. An exact match is
    always background, so a threshold of 0 removes only that color.
    """
    distance = color_distance(color, background_color) / 255
    return distance == 0 or distance < threshold / 100


def classify_background(sample: AreaSample, config: RasterConfig) -> AreaSample:
    """Return the sample with ``is_background`` filled in.

    Nothing is ever background while background removal is off.
    """
    if not config.background_removal:
        return sample

    is_background = is_background_color(
        sample.color, config.background_color, config.background_threshold
    )
    return AreaSample(color=sample.color, brightness=sample.brightness, is_background=is_background)


def background_ratio(
    image: SourceImage,
    start_x: int,
    start_y: int,
    end_x: int,
    end_y: int,
    config: RasterConfig,
) -> float:
    """Fraction of background pixels around a cell.

    The rectangle is grown by EDGE_EXPAND_PX on every side, clamped to
    the image, and each pixel is classified on its own.
    """
    region = image.region(
        max(0, start_x - EDGE_EXPAND_PX),
        max(0, start_y - EDGE_EXPAND_PX),
        min(image.width, end_x + EDGE_EXPAND_PX),
        min(image.height, end_y + EDGE_EXPAND_PX),
    )
    pixels = region.reshape(-1, 3).astype(np.float64)
    if pixels.shape[0] == 0:
        return 0.0

    background = np.asarray(config.background_color, dtype=np.float64)
    distances = np.sqrt(((pixels - background) ** 2).sum(axis=1)) / 255
    matches = (distances == 0) | (distances < config.background_threshold / 100)
    return float(matches.sum()) / pixels.shape[0]


def is_edge_ratio(ratio: float) -> bool:
    """A mixed neighborhood (strictly between 20% and 80% background) is an edge."""
    return EDGE_RATIO_MIN < ratio < EDGE_RATIO_MAX


def detect_edge(
    image: SourceImage,
    start_x: int,
    start_y: int,
    end_x: int,
    end_y: int,
    config: RasterConfig,
) -> bool:
    """Whether a background cell sits on an object boundary."""
    ratio = background_ratio(image, start_x, start_y, end_x, end_y, config)
    return is_edge_ratio(ratio)
