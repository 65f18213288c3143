import struct

import pytest

from raycub.bmp import encode_bmp, save_bmp
from raycub.image import Image


def _headers(data):
    file_header = struct.unpack_from("<HIHHI", data, 0)
    info_header = struct.unpack_from("<IiiHHIIiiII", data, 14)
    return file_header, info_header


def _sample(width=6, height=3):
    image = Image(width, height)
    for y in range(height):
        for x in range(width):
            image.put_pixel(x, y, (y << 8) | x)
    return image


def test_file_header_fields():
    image = _sample()
    data = encode_bmp(image)
    (magic, size, res1, res2, pixel_offset), _ = _headers(data)
    assert data[:2] == b"BM"
    assert size == len(data)
    assert (res1, res2) == (0, 0)
    assert pixel_offset == 54


def test_info_header_fields():
    image = _sample()
    _, info = _headers(encode_bmp(image))
    header_size, width, height, planes, bpp = info[:5]
    assert header_size == 40
    assert (width, height) == (image.width, image.height)
    assert planes == 1
    assert bpp == image.bpp
    assert info[5:] == (0, 0, 0, 0, 0, 0)


def test_rows_are_stored_bottom_up():
    image = _sample()
    data = encode_bmp(image)
    first_row = data[54:54 + image.line_length]
    assert first_row == image.row(image.height - 1)
    assert data[-image.line_length:] == image.row(0)


def test_offset_crops_both_sides():
    image = _sample(width=10, height=2)
    data = encode_bmp(image, 2)
    (_, size, _, _, _), info = _headers(data)
    assert info[1] == 10 - 2 * 2
    assert size == len(data)
    row_bytes = (10 - 4) * 4
    bottom = data[54:54 + row_bytes]
    pixels = struct.unpack(f"<{10 - 4}I", bottom)
    assert pixels == tuple((1 << 8) | x for x in range(2, 8))


@pytest.mark.parametrize("offset", [-1, 5, 6])
def test_invalid_offset(offset):
    with pytest.raises(ValueError):
        encode_bmp(_sample(width=10), offset)


def test_save_writes_encoded_bytes(tmp_path):
    image = _sample()
    target = tmp_path / "shot.bmp"
    save_bmp(image, target, 1)
    assert target.read_bytes() == encode_bmp(image, 1)


def test_save_replaces_existing_file(tmp_path):
    target = tmp_path / "shot.bmp"
    target.write_bytes(b"x" * 10000)
    image = _sample()
    save_bmp(image, target)
    assert target.read_bytes() == encode_bmp(image)


def test_save_to_missing_directory(tmp_path):
    with pytest.raises(OSError):
        save_bmp(_sample(), tmp_path / "missing" / "shot.bmp")