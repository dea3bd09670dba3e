"""Color parsing and WCAG contrast helpers."""

import re
from typing import NamedTuple

_RGB_RE = re.compile(r"rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)(?:\s*,\s*([\d.]+))?")
_HEX_RE = re.compile(r"#([0-9a-f]{6}|[0-9a-f]{3})\b", re.IGNORECASE)


class RGB(NamedTuple):
    """An opaque sRGB color with 0-255 channels."""

    r: int
    g: int
    b: int


def parse_color(value: str | None) -> RGB | None:
    """Parse a CSS rgb()/rgba()/hex color.

    Returns None for empty, ``transparent``, fully transparent rgba values and
    anything else that can not be parsed.
    """
    if not value or value.strip() == "transparent":
        return None

    if match := _RGB_RE.search(value):
        alpha = match.group(4)
        if alpha is not None and float(alpha) == 0:
            return None
        return RGB(*(int(match.group(i)) for i in (1, 2, 3)))

    if match := _HEX_RE.search(value):
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return RGB(*(int(digits[i : i + 2], 16) for i in (0, 2, 4)))

    return None


def relative_luminance(color: RGB | None) -> float:
    """Relative luminance as defined by WCAG 2.1; 0 for unknown colors."""
    if color is None:
        return 0.0

    def channel(c: int) -> float:
        s = c / 255
        return s / 12.92 if s <= 0.03928 else ((s + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(c) for c in color)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(first: RGB | None, second: RGB | None) -> float:
    """Contrast ratio between two colors, from 1 to 21."""
    lighter, darker = sorted(
        (relative_luminance(first), relative_luminance(second)), reverse=True
    )
    return (lighter + 0.05) / (darker + 0.05)
