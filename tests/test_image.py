import pytest

from raycub.image import Image


def test_new_image_is_blank():
    image = Image(3, 2)
    assert all(image.get_pixel(x, y) == 0 for x in range(3) for y in range(2))
    assert image.line_length == 3 * 4


def test_put_get_round_trip():
    image = Image(4, 4)
    image.put_pixel(2, 3, 0x00ABCDEF)
    assert image.get_pixel(2, 3) == 0x00ABCDEF
    assert image.get_pixel(3, 2) == 0


def test_float_coordinates_are_truncated():
    image = Image(4, 4)
    image.put_pixel(1.7, 2.2, 0x123)
    assert image.get_pixel(1, 2) == 0x123


def test_color_is_masked_to_32_bits():
    image = Image(1, 1)
    image.put_pixel(0, 0, -1)
    assert image.get_pixel(0, 0) == 0xFFFFFFFF


def test_pixels_are_little_endian():
    image = Image(2, 1)
    image.put_pixel(0, 0, 0x11223344)
    assert image.row(0)[:4] == bytes([0x44, 0x33, 0x22, 0x11])


def test_fill_sets_every_pixel():
    image = Image(5, 3)
    image.fill(0x00333333)
    assert {image.get_pixel(x, y) for x in range(5) for y in range(3)} == {0x00333333}


def test_row_length_matches_line_length():
    image = Image(7, 2)
    assert len(image.row(1)) == image.line_length


def test_half_sizes():
    image = Image(9, 6)
    assert (image.half_width, image.half_height) == (4, 3)


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (4, 0), (0, 3)])
def test_out_of_range_pixel(x, y):
    image = Image(4, 3)
    with pytest.raises(IndexError):
        image.put_pixel(x, y, 1)
    with pytest.raises(IndexError):
        image.get_pixel(x, y)


def test_out_of_range_row():
    with pytest.raises(IndexError):
        Image(2, 2).row(2)


@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 3)])
def test_invalid_size(width, height):
    with pytest.raises(ValueError):
        Image(width, height)