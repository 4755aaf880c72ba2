"""Console colors for log line prefixes."""

from typing import Any, Dict

from rich.color import Color, ColorParseError
from rich.style import Style

from duolog.levels import LogLevel


DEFAULT_LEVEL_COLORS: Dict[LogLevel, Color] = {
    LogLevel.DEBUG: Color.from_rgb(0x0F, 0x96, 0x0D),
    LogLevel.INFO: Color.from_rgb(0xE5, 0xE5, 0xE5),
    LogLevel.WARNING: Color.from_rgb(0xC6, 0xAD, 0x0B),
    LogLevel.ERROR: Color.from_rgb(0xD3, 0x0C, 0x0C),
    LogLevel.IMPORTANT: Color.from_rgb(0x1E, 0x90, 0xFF),
    LogLevel.CRITICAL: Color.from_rgb(0xFF, 0x00, 0x00),
}

# Light gray, used for levels without a mapped color
DEFAULT_FALLBACK_COLOR: Color = Color.from_rgb(0xD3, 0xD3, 0xD3)


def parse_color(value: Any) -> Color:
    """
    Convert a user supplied color to a rich Color.

    Args:
        value: A rich Color, an (r, g, b) tuple, an int 0xRRGGBB, or any
            string rich understands ("#ff0000", "red", "rgb(1,2,3)").

    Returns:
        Parsed Color.

    Raises:
        ValueError: If the value is not a valid color.
    """
    if isinstance(value, Color):
        return value
    if isinstance(value, tuple) and len(value) == 3:
        if all(isinstance(c, int) and 0 <= c <= 0xFF for c in value):
            return Color.from_rgb(*value)
        raise ValueError(f"Invalid RGB color: {value!r}")
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value <= 0xFFFFFF:
            raise ValueError(f"Invalid RGB color: {value:#x}")
        return Color.from_rgb((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
    if isinstance(value, str):
        try:
            return Color.parse(value.strip())
        except ColorParseError as e:
            raise ValueError(f"Invalid color {value!r}: {e}") from e
    raise ValueError(f"Invalid color: {value!r}")


def style_for(color: Color) -> Style:
    """Foreground style used to render a prefix in the given color."""
    return Style(color=color)
