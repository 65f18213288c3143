"""Writing an image as an uncompressed bottom-up BMP file."""

from __future__ import annotations

import os
import struct

from .image import Image

SAVE_FILENAME = "screenshot.bmp"

_FILE_HEADER = struct.Struct("<HIHHI")
_INFO_HEADER = struct.Struct("<IiiHHIIiiII")
_HEADERS_SIZE = _FILE_HEADER.size + _INFO_HEADER.size
_BMP_MAGIC = 0x4D42


def encode_bmp(image: Image, offset: int = 0) -> bytes:
    """Encode ``image`` as BMP, cropping ``offset`` pixels from each side."""
    if offset < 0 or 2 * offset >= image.width:
        raise ValueError(f"offset {offset} does not fit image width {image.width}")
    pixel_bytes = image.bpp // 8
    cut = offset * pixel_bytes
    file_size = _HEADERS_SIZE + image.line_length * image.height - image.height * cut * 2
    file_header = _FILE_HEADER.pack(_BMP_MAGIC, file_size, 0, 0, _HEADERS_SIZE)
    info_header = _INFO_HEADER.pack(
        _INFO_HEADER.size,
        image.width - 2 * offset,
        image.height,
        1,
        image.bpp,
        0, 0, 0, 0, 0, 0,
    )
    rows = (
        image.row(y)[cut:image.line_length - cut]
        for y in reversed(range(image.height))
    )
    return b"".join((file_header, info_header, *rows))


def save_bmp(image: Image, path: str | os.PathLike[str] = SAVE_FILENAME, offset: int = 0) -> None:
    """Write ``image`` to ``path`` as a BMP file."""
    data = encode_bmp(image, offset)
    with open(path, "wb") as handle:
        handle.write(data)