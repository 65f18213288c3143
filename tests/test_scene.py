import pytest

from raycub.scene import (
    ERR_ARGS_COUNT,
    ERR_DUPLICATE_OPT,
    ERR_INVALID_ARG,
    ERR_INVALID_MAP,
    ERR_NO_CUB_FILE,
    ERR_OPEN_FILE,
    ERR_PARSE_FILE,
    ERR_WRONG_COLOR,
    ERR_WRONG_RES,
    ERR_WRONG_TEXTURE,
    CubError,
    find_player,
    find_sprites,
    load_scene,
    parse_arguments,
    parse_scene,
    validate_map,
)
from raycub.utils import create_trgb

OPTIONS = [
    "R 640 480",
    "NO ./north.xpm",
    "SO ./south.xpm",
    "WE ./west.xpm",
    "EA ./east.xpm",
    "S ./sprite.xpm",
    "F 220,100,0",
    "C 225,30,0",
]

MAP = [
    "111111",
    "100201",
    "10N001",
    "111111",
]


def scene_text(options=None, grid=None, trailing="\n"):
    options = OPTIONS if options is None else options
    grid = MAP if grid is None else grid
    return "\n".join([*options, "", *grid]) + trailing


def parse(text, screen=(1920, 1080)):
    return parse_scene(text, *screen)


def expect_error(text, message):
    with pytest.raises(CubError) as excinfo:
        parse(text)
    assert str(excinfo.value) == message


def test_valid_scene_fields():
    scene = parse(scene_text())
    assert (scene.width, scene.height) == (640, 480)
    assert scene.wall_textures == ("./east.xpm", "./north.xpm", "./west.xpm", "./south.xpm")
    assert scene.sprite_texture == "./sprite.xpm"
    assert scene.floor_color == create_trgb(0, 220, 100, 0)
    assert scene.ceiling_color == create_trgb(0, 225, 30, 0)
    assert scene.grid == MAP
    assert (scene.player_x, scene.player_y) == (2.5, 2.5)
    assert scene.sprites == [(3.5, 1.5)]


def test_trailing_newline_does_not_matter():
    assert parse(scene_text(trailing="")) == parse(scene_text(trailing="\n"))


def test_resolution_clamped_to_screen():
    options = ["R 5000 4000", *OPTIONS[1:]]
    scene = parse(scene_text(options), screen=(800, 600))
    assert (scene.width, scene.height) == (800, 600)


def test_ragged_rows_are_padded():
    grid = ["111111", "10N1", "111111"]
    grid = [" 111 ", "11N11", " 111 "]
    scene = parse(scene_text(grid=[" 111", "11N11", " 111"]))
    assert {len(row) for row in scene.grid} == {scene.map_width}
    assert scene.grid[0] == " 111 "


def test_view_geometry():
    scene = parse(scene_text())
    assert scene.offset == scene.width // 5
    assert scene.view_width == scene.width + 2 * scene.offset
    angles = scene.ray_angles()
    assert len(angles) == scene.view_width
    assert angles[scene.view_width // 2] == 0
    assert angles == sorted(angles)


def test_duplicate_option():
    expect_error(scene_text([*OPTIONS, "NO ./other.xpm"]), ERR_DUPLICATE_OPT)


def test_missing_option():
    expect_error(scene_text(OPTIONS[:-1]), ERR_PARSE_FILE)


def test_option_after_map():
    text = scene_text(OPTIONS[:-1], grid=[*MAP, "C 1,2,3"])
    expect_error(text, ERR_PARSE_FILE)


@pytest.mark.parametrize("line", ["R 640", "R 0 480", "R -5 480", "R 640 480 1", "R 64a 480"])
def test_wrong_resolution(line):
    expect_error(scene_text([line, *OPTIONS[1:]]), ERR_WRONG_RES)


def test_wrong_texture():
    expect_error(scene_text(["NO a.xpm b.xpm", *OPTIONS[1:]]), ERR_WRONG_TEXTURE)


@pytest.mark.parametrize("line", ["F 256,0,0", "F 1,2", "F 1,2,3,4", "F 1,2,x", "F 1, 2,3"])
def test_wrong_color(line):
    options = [option for option in OPTIONS if not option.startswith("F")]
    expect_error(scene_text([*options, line]), ERR_WRONG_COLOR)


def test_color_ignores_empty_fields():
    options = [option for option in OPTIONS if not option.startswith("F")]
    scene = parse(scene_text([*options, "F 1,,2,3"]))
    assert scene.floor_color == create_trgb(0, 1, 2, 3)


def test_invalid_map_character():
    expect_error(scene_text(grid=["111", "1X1", "1N1", "111"]), ERR_INVALID_MAP)


def test_empty_line_inside_map():
    expect_error(scene_text(grid=["111", "1N1", "", "111"]), ERR_INVALID_MAP)


def test_open_map():
    expect_error(scene_text(grid=["111", "1N0", "111"]), ERR_INVALID_MAP)


def test_two_players():
    expect_error(scene_text(grid=["1111", "1NS1", "1111"]), ERR_INVALID_MAP)


def test_unknown_option_before_map():
    expect_error(scene_text(["X foo", *OPTIONS]), ERR_INVALID_MAP)


@pytest.mark.parametrize("char, angle", [("E", 0.0), ("N", 90.0), ("W", 180.0), ("S", 270.0)])
def test_find_player_direction(char, angle):
    assert find_player(["111", f"1{char}1", "111"]) == (1.5, 1.5, angle)


def test_find_player_none():
    with pytest.raises(CubError) as excinfo:
        find_player(["111", "101", "111"])
    assert str(excinfo.value) == ERR_INVALID_MAP


def test_validate_map_allows_outer_spaces():
    grid = ["  111  ", " 11011 ", "  111  "]
    validate_map(grid)
    assert find_sprites(grid) == []


def test_validate_map_rejects_space_next_to_floor():
    with pytest.raises(CubError):
        validate_map(["11111", "10 01", "11111"])


def test_find_sprites_row_order():
    grid = ["11111", "12021", "10201", "11111"]
    assert find_sprites(grid) == [(1.5, 1.5), (3.5, 1.5), (2.5, 2.5)]


def test_load_scene_from_file(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text(scene_text())
    assert load_scene(path, 1920, 1080) == parse(scene_text())


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(CubError) as excinfo:
        load_scene(tmp_path / "absent.cub", 1920, 1080)
    assert str(excinfo.value) == ERR_OPEN_FILE


def test_parse_arguments_ok(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text(scene_text())
    assert parse_arguments([str(path)]) == (str(path), False)
    assert parse_arguments([str(path), "--save"]) == (str(path), True)


@pytest.mark.parametrize("argv", [[], ["a.cub", "--save", "extra"]])
def test_parse_arguments_count(argv):
    with pytest.raises(CubError) as excinfo:
        parse_arguments(argv)
    assert str(excinfo.value) == ERR_ARGS_COUNT


@pytest.mark.parametrize("name", [".cub", "level.txt", "level.cu"])
def test_parse_arguments_not_cub(name):
    with pytest.raises(CubError) as excinfo:
        parse_arguments([name])
    assert str(excinfo.value) == ERR_NO_CUB_FILE


def test_parse_arguments_unopenable(tmp_path):
    with pytest.raises(CubError) as excinfo:
        parse_arguments([str(tmp_path / "absent.cub")])
    assert str(excinfo.value) == ERR_OPEN_FILE


def test_parse_arguments_bad_flag(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text(scene_text())
    with pytest.raises(CubError) as excinfo:
        parse_arguments([str(path), "--saved"])
    assert str(excinfo.value) == ERR_INVALID_ARG