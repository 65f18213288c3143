"""A 32-bit pixel buffer used as a drawing surface and texture store."""

from __future__ import annotations

import struct

_PIXEL = struct.Struct("<I")


class Image:
    """Rectangular buffer of little-endian 32-bit pixels."""

    bpp = 32

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.line_length = width * (self.bpp // 8)
        self.data = bytearray(self.line_length * height)

    @property
    def half_width(self) -> int:
        return self.width // 2

    @property
    def half_height(self) -> int:
        return self.height // 2

    def _offset(self, x: float, y: float) -> int:
        col, line = int(x), int(y)
        if not (0 <= col < self.width and 0 <= line < self.height):
            raise IndexError(f"pixel ({col}, {line}) outside {self.width}x{self.height}")
        return line * self.line_length + col * (self.bpp // 8)

    def put_pixel(self, x: float, y: float, color: int) -> None:
        """Store ``color`` at the pixel containing (x, y)."""
        _PIXEL.pack_into(self.data, self._offset(x, y), color & 0xFFFFFFFF)

    def get_pixel(self, x: float, y: float) -> int:
        """Return the colour stored at the pixel containing (x, y)."""
        return _PIXEL.unpack_from(self.data, self._offset(x, y))[0]

    def fill(self, color: int) -> None:
        """Set every pixel to ``color``."""
        self.data[:] = _PIXEL.pack(color & 0xFFFFFFFF) * (self.width * self.height)

    def row(self, y: int) -> bytes:
        """Return the raw bytes of pixel row ``y``."""
        if not 0 <= y < self.height:
            raise IndexError(f"row {y} outside image of height {self.height}")
        start = y * self.line_length
        return bytes(self.data[start:start + self.line_length])