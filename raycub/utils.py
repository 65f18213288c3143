"""Small numeric, colour and string helpers shared by the engine."""

from __future__ import annotations

import math

INT_MAX = 2**31 - 1

_WHITESPACE = " \n\t\v\f\r"
_MASK32 = 0xFFFFFFFF


def eq(first: str | None, second: str | None) -> bool:
    """Return True when both strings are present and identical."""
    if first is None or second is None:
        return False
    return first == second


def cub_atoi(text: str) -> int:
    """Parse a leading decimal integer, clamping overflow to INT_MAX.

    Leading whitespace and one optional sign are accepted; parsing stops at
    the first non-digit character.  Text without digits yields 0.
    """
    stripped = text.lstrip(_WHITESPACE)
    sign = 1
    if stripped[:1] in ("+", "-"):
        if stripped[0] == "-":
            sign = -1
        stripped = stripped[1:]
    result = 0
    for char in stripped:
        if not "0" <= char <= "9":
            break
        result = min(result * 10 + int(char), INT_MAX)
    return result * sign


def check_atoi(text: str, low: int, high: int) -> bool:
    """Return True if ``text`` is all digits and its value is in [low, high]."""
    if any(not "0" <= char <= "9" for char in text):
        return False
    return low <= cub_atoi(text) <= high


def _normalize(angle: float) -> float:
    if angle >= 360:
        angle -= 360
    if angle < -360:
        angle += 360
    return angle


def cos_a(angle: float) -> float:
    """Cosine of an angle given in degrees."""
    return math.cos(_normalize(angle) / 180 * math.pi)


def sin_a(angle: float) -> float:
    """Sine of an angle in degrees, negated because screen y grows downwards."""
    return -math.sin(_normalize(angle) / 180 * math.pi)


def create_trgb(t: int, r: int, g: int, b: int) -> int:
    """Pack transparency and colour channels into a 32-bit colour value."""
    return (t << 24 | r << 16 | g << 8 | b) & _MASK32


def add_shade(distance: float, color: int) -> int:
    """Darken the colour channels of ``color`` by the fraction ``distance``.

    The transparency byte is kept unchanged.
    """
    t = (color >> 24) & 0xFF
    r = (color >> 16) & 0xFF
    g = (color >> 8) & 0xFF
    b = color & 0xFF
    return create_trgb(
        t,
        int(r - r * distance) & 0xFF,
        int(g - g * distance) & 0xFF,
        int(b - b * distance) & 0xFF,
    )


def split_words(text: str, sep: str) -> list[str]:
    """Split ``text`` on the single character ``sep``, dropping empty parts."""
    return [part for part in text.split(sep) if part]