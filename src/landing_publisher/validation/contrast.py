"""WCAG colour contrast helpers.

Colours may be given as ``#rgb``, ``#rrggbb`` or ``rgb()/rgba()`` strings.
"""

import re
from typing import NamedTuple

AA_NORMAL = 4.5
AA_LARGE = 3.0
AAA_NORMAL = 7.0
AAA_LARGE = 4.5

RGB_FUNCTION = re.compile(r"rgba?\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)", re.IGNORECASE)


class RGB(NamedTuple):
    r: int
    g: int
    b: int


def parse_color(color: str) -> RGB | None:
    """Parse a CSS colour string.

    Examples:
        >>> parse_color("#fff")
        RGB(r=255, g=255, b=255)
        >>> parse_color("rgb(0, 128, 255)")
        RGB(r=0, g=128, b=255)
        >>> parse_color("papayawhip") is None
        True
    """
    value = color.strip()

    if value.startswith("#"):
        hex_digits = value[1:]
        if len(hex_digits) == 3:
            hex_digits = "".join(ch * 2 for ch in hex_digits)
        if len(hex_digits) != 6:
            return None
        try:
            return RGB(
                int(hex_digits[0:2], 16),
                int(hex_digits[2:4], 16),
                int(hex_digits[4:6], 16),
            )
        except ValueError:
            return None

    match = RGB_FUNCTION.match(value)
    if match:
        r, g, b = (int(part) for part in match.groups())
        if all(0 <= channel <= 255 for channel in (r, g, b)):
            return RGB(r, g, b)

    return None


def _linearize(channel: int) -> float:
    srgb = channel / 255
    if srgb <= 0.03928:
        return srgb / 12.92
    return ((srgb + 0.055) / 1.055) ** 2.4


def relative_luminance(rgb: RGB) -> float:
    """WCAG 2.x relative luminance in the range 0..1."""
    return (
        0.2126 * _linearize(rgb.r)
        + 0.7152 * _linearize(rgb.g)
        + 0.0722 * _linearize(rgb.b)
    )


def contrast_ratio(foreground: str, background: str) -> float | None:
    """Contrast ratio between two colours, or None if either is unparseable.

    Examples:
        >>> round(contrast_ratio("#000000", "#ffffff"), 1)
        21.0
    """
    fg = parse_color(foreground)
    bg = parse_color(background)
    if fg is None or bg is None:
        return None

    lighter, darker = sorted(
        (relative_luminance(fg), relative_luminance(bg)), reverse=True
    )
    return (lighter + 0.05) / (darker + 0.05)


def ensure_readable_text_color(
    background: str, text_color: str, min_contrast: float = AA_NORMAL
) -> tuple[str, bool]:
    """Pick a text colour that meets ``min_contrast`` on ``background``.

    Returns:
        Tuple of (text colour, whether it was substituted). The substitute
        is white on dark backgrounds and black otherwise.
    """
    ratio = contrast_ratio(text_color, background)
    if ratio is not None and ratio >= min_contrast:
        return text_color, False

    bg = parse_color(background)
    if bg is None:
        return "#000000", True

    return ("#FFFFFF" if relative_luminance(bg) < 0.5 else "#000000"), True
