"""Data models and constants for the Rasterbator dot generator."""

import math
from dataclasses import dataclass, field, fields
from enum import Enum

# AIDEV-NOTE: Layout constants - changing these changes every generated poster
RESOLUTION = 144.0  # px per inch
MM_PER_INCH = 25.4
CELL_GUTTER = 1.2  # cell pitch = dot diameter * 1.2
DOT_SUPPRESS_RADIUS = 0.5  # px, dots at or below this are not emitted
EDGE_EXPAND_PX = 2  # neighborhood margin for edge detection
EDGE_RATIO_MIN = 0.2
EDGE_RATIO_MAX = 0.8
QUANTIZE_STEP = 32  # 8 buckets per channel for dominant color

PAGE_BACKGROUND = (255, 255, 255)


class ConfigurationError(ValueError):
    """Raised when rasterization options are invalid."""


class ColorMode(Enum):
    """How each dot gets its color.

    AIDEV-NOTE: Sampling always computes the average color; the mode only
    decides which color ends up on the dot.
    """

    MONO = "mono"  # Every dot uses the configured dot color
    MULTI = "multi"  # Dominant quantized color of the cell
    AVERAGE = "average"  # Mean color of the cell


# Maps user-facing option names to RasterConfig fields
OPTION_ALIASES = {
    "pagesWide": "pages_wide",
    "pagesHigh": "pages_high",
    "paperWidth": "paper_width",
    "paperHeight": "paper_height",
    "targetWidth": "target_width",
    "dotSize": "dot_size",
    "usePixels": "use_pixels",
    "colorMode": "color_mode",
    "dotColor": "dot_color",
    "backgroundRemoval": "background_removal",
    "backgroundColor": "background_color",
    "backgroundThreshold": "background_threshold",
    "preserveEdges": "preserve_edges",
}


@dataclass(frozen=True)
class RasterConfig:
    """Options for one rasterize call.

    Sizes are in millimeters unless ``use_pixels`` is set. Colors are
    ``(r, g, b)`` tuples; hex strings are accepted and converted.

    Raises:
        ConfigurationError: If any option is out of range or malformed
    """

    # Poster tiling
    pages_wide: int = 1
    pages_high: int = 1

    # Paper size (A4 by default)
    paper_width: float = 210.0
    paper_height: float = 297.0

    # Width the source image is resized to before sampling (px)
    target_width: int = 1024

    dot_size: float = 5.0
    use_pixels: bool = False

    color_mode: ColorMode = ColorMode.MONO
    dot_color: "tuple[int, int, int]" = (0, 0, 0)

    # Background removal
    background_removal: bool = False
    background_color: "tuple[int, int, int]" = (255, 255, 255)
    background_threshold: float = 20.0  # 0-100
    preserve_edges: bool = False

    def __post_init__(self):
        from .image_processing.utils import parse_color

        for name in ("pages_wide", "pages_high"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigurationError(f"{name} must be an integer >= 1, got {value!r}")

        if (
            isinstance(self.target_width, bool)
            or not isinstance(self.target_width, int)
            or self.target_width < 1
        ):
            raise ConfigurationError(
                f"target_width must be a positive integer, got {self.target_width!r}"
            )

        for name in ("paper_width", "paper_height", "dot_size"):
            value = getattr(self, name)
            if not _is_positive_number(value):
                raise ConfigurationError(f"{name} must be a positive number, got {value!r}")
        self._check_pixel_sizes()

        try:
            mode = ColorMode(self.color_mode)
        except ValueError:
            valid = ", ".join(m.value for m in ColorMode)
            raise ConfigurationError(
                f"color_mode must be one of {valid}, got {self.color_mode!r}"
            ) from None
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "color_mode", mode)

        object.__setattr__(self, "dot_color", parse_color(self.dot_color))
        object.__setattr__(self, "background_color", parse_color(self.background_color))

        threshold = self.background_threshold
        if (
            isinstance(threshold, bool)
            or not isinstance(threshold, (int, float))
            or not 0 <= threshold <= 100
        ):
            raise ConfigurationError(
                f"background_threshold must be between 0 and 100, got {threshold!r}"
            )

    def _check_pixel_sizes(self):
        """Sizes must stay finite after mm to px conversion and cell division."""
        from .image_processing.layout import to_pixels

        dot_px = to_pixels(self.dot_size, self.use_pixels) * CELL_GUTTER
        for name in ("paper_width", "paper_height"):
            paper_px = to_pixels(getattr(self, name), self.use_pixels)
            if not (math.isfinite(paper_px) and math.isfinite(dot_px) and dot_px > 0):
                raise ConfigurationError(f"{name} or dot_size is too large to lay out")
            if not math.isfinite(paper_px / dot_px):
                raise ConfigurationError(
                    f"{name} is too large for dot_size {self.dot_size!r}"
                )

    @classmethod
    def from_options(cls, **options) -> "RasterConfig":
        """Build a config from user-facing options.

        Accepts camelCase (``pagesWide``) or snake_case (``pages_wide``)
        names. Omitted options fall back to the defaults.

        Raises:
            ConfigurationError: On unknown option names or invalid values
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in options.items():
            name = OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown option: {key}")
            kwargs[name] = value
        return cls(**kwargs)


def _is_positive_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


@dataclass(frozen=True)
class Geometry:
    """Pixel-space layout shared by every page of one rasterize call."""

    paper_width_px: float
    paper_height_px: float
    square_size: float  # cell pitch
    squares_x: int
    squares_y: int
    max_dot_radius: float  # dot size in px, halved when composing


@dataclass(frozen=True)
class AreaSample:
    """Color and brightness measured over one cell's sampling rectangle."""

    color: "tuple[int, int, int]"
    brightness: float  # 0 (black) to 1 (white)
    is_background: bool = False


@dataclass(frozen=True)
class Dot:
    """A filled circle in page-local pixel coordinates."""

    center_x: float
    center_y: float
    radius: float
    color: "tuple[int, int, int]"

    @property
    def hex_color(self) -> str:
        from .image_processing.utils import to_hex

        return to_hex(self.color)


@dataclass
class Page:
    """One printable sheet: a background fill plus its dots in scan order."""

    width_px: float
    height_px: float
    column: int = 0
    row: int = 0
    background_color: "tuple[int, int, int]" = PAGE_BACKGROUND
    dots: "list[Dot]" = field(default_factory=list)

    @property
    def size(self) -> "tuple[int, int]":
        """Integer canvas size used by raster output."""
        return max(1, int(self.width_px)), max(1, int(self.height_px))
