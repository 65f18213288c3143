import math

import pytest

from raycub.utils import (
    INT_MAX,
    add_shade,
    check_atoi,
    cos_a,
    create_trgb,
    cub_atoi,
    eq,
    sin_a,
    split_words,
)


def test_eq_identical_strings():
    assert eq("NO", "NO") is True


@pytest.mark.parametrize("first,second", [("R", "RR"), ("RR", "R"), ("S", "SO")])
def test_eq_different_strings(first, second):
    assert eq(first, second) is False


def test_eq_missing_value():
    assert eq(None, "R") is False
    assert eq("R", None) is False


def test_cub_atoi_sign_and_whitespace():
    assert cub_atoi("  \t-42") == -42
    assert cub_atoi("+17abc") == 17


def test_cub_atoi_without_digits():
    assert cub_atoi("abc") == 0


def test_cub_atoi_clamps_overflow():
    assert cub_atoi("99999999999999") == INT_MAX
    assert cub_atoi("-99999999999999") == -INT_MAX


def test_check_atoi_bounds():
    assert check_atoi("255", 0, 255) is True
    assert check_atoi("0", 0, 255) is True
    assert check_atoi("256", 0, 255) is False


@pytest.mark.parametrize("text", ["+5", "-5", "1a", " 7"])
def test_check_atoi_rejects_non_digits(text):
    assert check_atoi(text, -100, 100) is False


def test_check_atoi_empty_is_zero():
    assert check_atoi("", 0, 255) is True
    assert check_atoi("", 1, 255) is False


@pytest.mark.parametrize("angle", [0, 30, 90, 135, 200, 359, 400, -45, -400])
def test_trig_identity(angle):
    assert cos_a(angle) ** 2 + sin_a(angle) ** 2 == pytest.approx(1.0)


def test_trig_cardinal_directions():
    assert cos_a(0) == pytest.approx(1.0)
    assert sin_a(90) == pytest.approx(-1.0)
    assert cos_a(180) == pytest.approx(-1.0)


def test_trig_wraps_full_turn():
    assert cos_a(370) == pytest.approx(cos_a(10))
    assert sin_a(370) == pytest.approx(sin_a(10))
    assert math.isclose(sin_a(-370), sin_a(-10), abs_tol=1e-12)


def test_create_trgb_packs_channels():
    assert create_trgb(0, 0x12, 0x34, 0x56) == 0x123456


def test_create_trgb_channels_round_trip():
    color = create_trgb(7, 200, 100, 50)
    assert (color >> 24) & 0xFF == 7
    assert (color >> 16) & 0xFF == 200
    assert (color >> 8) & 0xFF == 100
    assert color & 0xFF == 50


def test_add_shade_zero_keeps_color():
    color = create_trgb(0, 10, 20, 30)
    assert add_shade(0.0, color) == color


def test_add_shade_full_keeps_only_transparency():
    color = create_trgb(5, 10, 20, 30)
    assert add_shade(1.0, color) == create_trgb(5, 0, 0, 0)


def test_add_shade_never_brightens():
    color = create_trgb(0, 90, 160, 240)
    shaded = add_shade(0.5, color)
    for shift in (0, 8, 16):
        assert (shaded >> shift) & 0xFF <= (color >> shift) & 0xFF


def test_split_words_drops_empty_parts():
    assert split_words("R  1920 1080 ", " ") == ["R", "1920", "1080"]


def test_split_words_only_separators():
    assert split_words(",,,", ",") == []