import pytest

from raycub.colornames import COLOR_NAMES, lookup_color


@pytest.mark.parametrize(
    "name, expected",
    [
        ("snow", 0xfffafa),
        ("black", 0x0),
        ("white", 0xffffff),
        ("navy", 0x80),
        ("gray50", 0x7f7f7f),
        ("light green", 0x90ee90),
    ],
)
def test_known_names(name, expected):
    assert lookup_color(name) == expected


def test_lookup_ignores_case():
    assert lookup_color("SNOW") == lookup_color("snow")
    assert lookup_color("Light Green") == lookup_color("light green")


def test_none_is_transparent():
    assert lookup_color("none") == -1
    assert lookup_color("NONE") == -1


def test_unknown_name_gives_none():
    assert lookup_color("no-such-colour") is None
    assert lookup_color("") is None


def test_first_duplicate_wins():
    assert lookup_color("dark slate") == 0x2f4f4f
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xfafad2


def test_gray_and_grey_agree():
    for level in range(101):
        assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_every_table_name_resolves_to_its_first_entry():
    seen = set()
    for name, color in COLOR_NAMES:
        key = name.lower()
        if key not in seen:
            assert lookup_color(name) == color
            seen.add(key)


def test_looked_up_colors_fit_in_24_bits():
    for name, _ in COLOR_NAMES:
        if name.lower() != "none":
            assert 0 <= lookup_color(name) <= 0xFFFFFF