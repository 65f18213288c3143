import pytest

from raycub.game import ANGLE_STEP, BODY, STEP, Game, Key, WallStyle
from raycub.scene import parse_scene

SCENE_TEXT = (
    "R 120 110\nNO n.xpm\nSO s.xpm\nWE w.xpm\nEA e.xpm\nS sp.xpm\n"
    "F 10,20,30\nC 40,50,60\n\n"
    "11111\n10001\n10E01\n10001\n11111\n"
)


@pytest.fixture
def game():
    return Game(parse_scene(SCENE_TEXT, 1920, 1080))


def test_initial_state_comes_from_scene(game):
    assert (game.player_x, game.player_y, game.player_angle) == (2.5, 2.5, 0.0)
    assert game.walls_style is WallStyle.TEXTURES
    assert game.map_visible is False


def test_forward_key_moves_one_step(game):
    game.key_press(Key.W)
    game.update()
    assert game.player_x == pytest.approx(2.5 + STEP)
    assert game.player_y == pytest.approx(2.5)


def test_release_stops_movement(game):
    game.key_press(Key.W)
    game.key_release(Key.W)
    game.update()
    assert game.player_x == 2.5


def test_backward_is_opposite_of_forward(game):
    game.key_press(Key.S)
    game.update()
    assert game.player_x == pytest.approx(2.5 - STEP)


def test_collision_keeps_body_away_from_wall(game):
    for _ in range(10):
        game.move(0.5, 0.0)
    assert game.player_x + BODY / 2 <= 4.0
    assert game.player_x > 3.0


def test_collision_disabled_walks_into_wall(game):
    game.key_press(Key.FIVE)
    assert game.wall_collision is False
    game.move(1.5, 0.0)
    assert game.player_x == pytest.approx(4.0)


def test_turning_left_and_right(game):
    game.key_press(Key.LEFT)
    game.update()
    assert game.player_angle == ANGLE_STEP
    game.key_release(Key.LEFT)
    game.key_press(Key.RIGHT)
    game.update()
    game.update()
    assert game.player_angle == -ANGLE_STEP


def test_left_turn_wraps_at_full_circle(game):
    game.player_angle = 360 - ANGLE_STEP
    game.key_press(Key.LEFT)
    game.update()
    assert game.player_angle == 0


def test_toggles(game):
    game.key_press(Key.TAB)
    assert game.map_visible is True
    game.key_press(Key.FOUR)
    assert game.use_sprites is False
    game.key_press(Key.TWO)
    assert game.walls_style is WallStyle.MANY_COLORS
    game.key_press(Key.ONE)
    assert game.walls_style is WallStyle.ONE_COLOR


def test_escape_requests_quit(game):
    game.key_press(Key.ESC)
    assert game.quit_requested is True


def test_unknown_key_is_ignored(game):
    game.key_press(999)
    game.update()
    assert game.pressed == set()
    assert game.player_x == 2.5


def test_mouse_disabled_by_default(game):
    game.mouse_motion(10, 0)
    game.mouse_motion(0, 0)
    assert game.player_angle == 0.0
    assert game.mouse_x == -1


def test_mouse_turns_view_when_enabled(game):
    game.mouse_enabled = True
    game.mouse_motion(100, 5)
    game.mouse_motion(90, 5)
    assert game.player_angle == ANGLE_STEP
    game.mouse_motion(95, 5)
    assert game.player_angle == 0
    assert (game.mouse_x, game.mouse_y) == (95, 5)