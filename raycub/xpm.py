"""Reading XPM pixmaps into 32-bit images."""

from __future__ import annotations

import os
import re
from collections.abc import Iterator

from .colornames import lookup_color
from .image import Image
from .utils import cub_atoi

TRANSPARENT_PIXEL = 0xFF000000

_WORD_SEPARATORS = re.compile(r"[ \t]+")
_HEX_NUMBER = re.compile(r"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")
_LONG_MAX = 2**63 - 1
_NAME_BUFFER = 63


class XpmError(Exception):
    """Raised when XPM data cannot be read or parsed."""


def _find_outside_quotes(text: str, token: str) -> int:
    inside = False
    for index, char in enumerate(text):
        if char == '"':
            inside = not inside
        if not inside and text.startswith(token, index):
            return index
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C comments outside string literals with spaces.

    Block comments are removed first, then line comments together with the
    newline that ends them.  The length of the text is preserved.
    """
    while (begin := _find_outside_quotes(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        text = _blank(text, begin, len(text) if end == -1 else end + 2)
    while (begin := _find_outside_quotes(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        text = _blank(text, begin, len(text) if end == -1 else end + 1)
    return text


def _quoted_strings(text: str) -> Iterator[str]:
    pos = 0
    while True:
        start = text.find('"', pos)
        if start == -1:
            return
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def _words(text: str) -> list[str]:
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _parse_hex(text: str) -> int:
    match = _HEX_NUMBER.match(text)
    sign, digits = match.groups()
    value = min(int(digits, 16), _LONG_MAX) if digits else 0
    return -value if sign == "-" else value


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 2**32 if value >= 2**31 else value


def _text_color(name: str, following: str | None) -> int:
    """Colour for a ``c`` key value: ``#RRGGBB`` or an X11 colour name."""
    if name.startswith("#"):
        return _to_int32(_parse_hex(name[1:]))
    if following is not None:
        name = f"{name} {following}"[:_NAME_BUFFER]
    color = lookup_color(name)
    return 0 if color is None else color


def _header(line: str) -> tuple[int, int, int, int]:
    words = _words(line)
    if len(words) < 4:
        raise XpmError("XPM header needs width, height, colour count and chars per pixel")
    values = tuple(cub_atoi(word) for word in words[:4])
    if any(value == 0 for value in values):
        raise XpmError(f"invalid XPM header: {line!r}")
    return values  # type: ignore[return-value]


def parse_xpm(text: str) -> Image:
    """Build an image from XPM text whose comments have already been removed."""
    strings = _quoted_strings(text)

    def next_line() -> str:
        try:
            return next(strings)
        except StopIteration:
            raise XpmError("unexpected end of XPM data") from None

    width, height, colors_count, cpp = _header(next_line())
    if colors_count < 0 or cpp < 0:
        raise XpmError("negative colour count or chars per pixel")

    palette: dict[str, int] = {}
    last_definition_wins = cpp <= 2
    for _ in range(colors_count):
        line = next_line()
        if len(line) < cpp:
            raise XpmError(f"colour line too short: {line!r}")
        words = _words(line[cpp:])
        try:
            key_index = words.index("c")
        except ValueError:
            raise XpmError(f"colour line without 'c' key: {line!r}") from None
        if key_index + 1 >= len(words):
            raise XpmError(f"colour line without colour value: {line!r}")
        following = words[key_index + 2] if key_index + 2 < len(words) else None
        color = _text_color(words[key_index + 1], following)
        key = line[:cpp]
        if last_definition_wins or key not in palette:
            palette[key] = color

    try:
        image = Image(width, height)
    except ValueError as err:
        raise XpmError(str(err)) from err

    for y in range(height):
        row = next_line()
        if len(row) < cpp * width:
            raise XpmError(f"pixel row {y} is shorter than {width} pixels")
        for x in range(width):
            color = palette.get(row[cpp * x:cpp * (x + 1)], 0)
            image.put_pixel(x, y, TRANSPARENT_PIXEL if color == -1 else color)
    return image


def load_xpm(path: str | os.PathLike[str]) -> Image:
    """Read an XPM file, strip its comments and parse it."""
    try:
        with open(path, encoding="latin-1", newline="") as handle:
            text = handle.read()
    except OSError as err:
        raise XpmError(f"cannot read {os.fspath(path)!r}: {err}") from err
    return parse_xpm(strip_comments(text))