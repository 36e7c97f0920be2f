"""Read-only pixel buffer consumed by the rasterizer."""

import logging
from pathlib import Path

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


class SourceImage:
    """Immutable RGB pixel grid.

    AIDEV-NOTE: Pixels are stored as a (height, width, 3) uint8 array that
    is marked read-only, so pages can be assembled concurrently against the
    same buffer without copies or locks.
    """

    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise ValueError(f"Expected an (h, w, 3) or (h, w, 4) array, got {pixels.shape}")
        if pixels.shape[0] < 1 or pixels.shape[1] < 1:
            raise ValueError("Image must be at least 1x1 pixels")
        if not np.issubdtype(pixels.dtype, np.integer):
            raise ValueError(f"Pixel values must be integers, got dtype {pixels.dtype}")

        channels = pixels[:, :, :3]
        if channels.min() < 0 or channels.max() > 255:
            raise ValueError("Pixel values must be in 0-255")

        rgb = np.array(channels, dtype=np.uint8, copy=True)
        rgb.setflags(write=False)
        self._pixels = rgb

    @classmethod
    def from_array(cls, array) -> "SourceImage":
        return cls(np.asarray(array))

    @classmethod
    def from_pil(cls, image: Image.Image) -> "SourceImage":
        """Wrap a Pillow image; alpha is discarded."""
        # AIDEV-NOTE: Always convert to RGB for consistent processing
        if image.mode != "RGB":
            image = image.convert("RGB")
        return cls(np.asarray(image))

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    def pixel_at(self, x: int, y: int) -> "tuple[int, int, int]":
        """Get RGB color at a pixel location.

        Raises:
            IndexError: If (x, y) lies outside the image
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        r, g, b = self._pixels[y, x]
        return (int(r), int(g), int(b))

    def region(self, start_x: int, start_y: int, end_x: int, end_y: int) -> np.ndarray:
        """View of the half-open rectangle [start_x, end_x) x [start_y, end_y)."""
        return self._pixels[start_y:end_y, start_x:end_x]


def load_source(file_path: "str | Path", target_width: int) -> SourceImage:
    """Load an image file and resize it to ``target_width`` pixels wide.

    Args:
        file_path: Path to image file (PNG, JPG, etc.)
        target_width: Output width in pixels; height keeps the aspect ratio

    Returns:
        SourceImage ready for sampling

    Raises:
        ValueError: If file cannot be loaded or is invalid
    """
    try:
        with Image.open(file_path) as image:
            image = image.convert("RGB")
    except Exception as e:
        raise ValueError(f"Failed to load image: {e}") from e

    orig_width, orig_height = image.size
    target_height = max(1, int(target_width * orig_height / orig_width))
    logger.info(
        "Loaded %s (%dx%d), resizing to %dx%d",
        file_path,
        orig_width,
        orig_height,
        target_width,
        target_height,
    )

    if (target_width, target_height) != image.size:
        image = image.resize((target_width, target_height), Image.Resampling.LANCZOS)
    return SourceImage.from_pil(image)
