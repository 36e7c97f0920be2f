"""Shared pytest fixtures for the rasterbator test suite.

Fixtures:
    make_image: Factory for solid-color SourceImages
    split_image: 144x36 image, black left half, white right half
    soft_edge_image: Like split_image but with a light gray band after the split
    pixel_config: Factory for RasterConfig with sizes in pixels
"""

import numpy as np
import pytest

from rasterbator import RasterConfig, SourceImage

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


@pytest.fixture
def make_image():
    def _make(width, height, color=BLACK):
        pixels = np.zeros((height, width, 3), dtype=np.uint8)
        pixels[:, :] = color
        return SourceImage.from_array(pixels)

    return _make


@pytest.fixture
def split_image():
    pixels = np.full((36, 144, 3), 255, dtype=np.uint8)
    pixels[:, :72] = 0
    return SourceImage.from_array(pixels)


@pytest.fixture
def soft_edge_image():
    """Black up to x=72, gray 230 for x in [72, 90), white after.

    With 30px dots the cell covering x in [72, 108) averages close enough
    to white to count as background, while its neighborhood is half
    background pixels.
    """
    pixels = np.full((36, 144, 3), 255, dtype=np.uint8)
    pixels[:, :72] = 0
    pixels[:, 72:90] = 230
    return SourceImage.from_array(pixels)


@pytest.fixture
def pixel_config():
    def _make(**options):
        options.setdefault("use_pixels", True)
        return RasterConfig.from_options(**options)

    return _make
