"""WCAG relative luminance and contrast ratio."""

import re

MIN_CONTRAST = 4.5
UNKNOWN_LUMINANCE = 0.5

DARK_TEXT = "#1f2937"
LIGHT_TEXT = "#ffffff"
BLACK = "#000000"

_HEX6 = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)
_HEX3 = re.compile(r"^#?([a-f\d])([a-f\d])([a-f\d])$", re.IGNORECASE)


def hex_to_rgb(color: str) -> tuple[int, int, int] | None:
    """Parse ``#rrggbb`` or ``#rgb``; anything else is None."""
    if not isinstance(color, str):
        return None
    value = color.strip()
    match = _HEX6.match(value)
    if match:
        return tuple(int(part, 16) for part in match.groups())  # type: ignore[return-value]
    match = _HEX3.match(value)
    if match:
        return tuple(int(part * 2, 16) for part in match.groups())  # type: ignore[return-value]
    return None


def _linearize(channel: int) -> float:
    c = channel / 255
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def luminance(color: str) -> float:
    """Relative luminance in [0, 1]; unparseable colours count as 0.5."""
    rgb = hex_to_rgb(color)
    if rgb is None:
        return UNKNOWN_LUMINANCE
    r, g, b = (_linearize(c) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(color1: str, color2: str) -> float:
    """(L1 + 0.05) / (L2 + 0.05) with L1 the lighter colour."""
    lum1 = luminance(color1)
    lum2 = luminance(color2)
    brightest = max(lum1, lum2)
    darkest = min(lum1, lum2)
    return (brightest + 0.05) / (darkest + 0.05)


def readable_text_color(background: str) -> str:
    """
    Pick a text colour that reaches MIN_CONTRAST on ``background``.

    Dark grey on light backgrounds, white on dark ones (threshold at
    luminance 0.5). Mid-luminance backgrounds where neither passes get
    whichever of black or white contrasts more.
    """
    candidate = DARK_TEXT if luminance(background) > 0.5 else LIGHT_TEXT
    if contrast_ratio(candidate, background) >= MIN_CONTRAST:
        return candidate
    return max((BLACK, LIGHT_TEXT), key=lambda c: contrast_ratio(c, background))
