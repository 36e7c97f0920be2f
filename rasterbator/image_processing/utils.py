"""Color helpers shared by sampling, composing and output.

AIDEV-NOTE: Colors travel through the pipeline as (r, g, b) int tuples.
Hex strings only appear at the edges (config input, SVG/PNG output).
"""

import math
import numbers
import re

from ..models import ConfigurationError

_HEX_COLOR = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)


def parse_hex_color(value: str) -> "tuple[int, int, int]":
    """Parse ``#rrggbb`` (leading ``#`` optional, any case) to an RGB tuple.

    Raises:
        ConfigurationError: If the string is not a 6-digit hex color
    """
    match = _HEX_COLOR.match(value.strip())
    if not match:
        raise ConfigurationError(f"Invalid hex color: {value!r}")
    r, g, b = (int(group, 16) for group in match.groups())
    return (r, g, b)


def parse_color(value) -> "tuple[int, int, int]":
    """Accept a hex string or an RGB sequence and return an RGB tuple."""
    if isinstance(value, str):
        return parse_hex_color(value)

    try:
        channels = tuple(value)
    except TypeError:
        raise ConfigurationError(f"Invalid color: {value!r}") from None

    if len(channels) != 3 or not all(
        isinstance(c, numbers.Integral) and not isinstance(c, bool) and 0 <= c <= 255
        for c in channels
    ):
        raise ConfigurationError(f"Color must be three integers in 0-255, got {value!r}")
    r, g, b = channels
    return (int(r), int(g), int(b))


def to_hex(color: "tuple[int, int, int]") -> str:
    """Format an RGB tuple as ``#rrggbb``."""
    r, g, b = color
    return f"#{r:02x}{g:02x}{b:02x}"


def clamp_channel(value) -> int:
    return max(0, min(255, int(value)))


def clamp_color(color) -> "tuple[int, int, int]":
    r, g, b = color
    return (clamp_channel(r), clamp_channel(g), clamp_channel(b))


def color_distance(
    color1: "tuple[int, int, int]", color2: "tuple[int, int, int]"
) -> float:
    """Euclidean distance between two colors in RGB space."""
    dr = color1[0] - color2[0]
    dg = color1[1] - color2[1]
    db = color1[2] - color2[2]
    return math.sqrt(dr * dr + dg * dg + db * db)


def round_half_up(value: float) -> int:
    """Round .5 upwards instead of to the nearest even integer."""
    return int(math.floor(value + 0.5))
