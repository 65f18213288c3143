"""Player state, input handling and movement through the map."""

from __future__ import annotations

from enum import IntEnum

from .scene import MAP_WALL, Scene
from .utils import cos_a, sin_a

BODY = 1.0 / 2
STEP = 1.0 / 8
ANGLE_STEP = 5
DEF_WALL_COLOR = 0x00000066
WALL_COLLISION = True
USE_SPRITES = True
MOUSE_ON = False


class Key(IntEnum):
    """Keyboard codes the game reacts to."""

    A = 0
    S = 1
    D = 2
    W = 13
    ONE = 18
    TWO = 19
    THREE = 20
    FOUR = 21
    FIVE = 23
    TAB = 48
    ESC = 53
    LEFT = 123
    RIGHT = 124


class WallStyle(IntEnum):
    """How walls are painted."""

    ONE_COLOR = 1 << 0
    MANY_COLORS = 1 << 1
    TEXTURES = 1 << 2


_HELD_KEYS = frozenset({Key.A, Key.W, Key.S, Key.D, Key.LEFT, Key.RIGHT})
_STYLE_KEYS = {
    Key.ONE: WallStyle.ONE_COLOR,
    Key.TWO: WallStyle.MANY_COLORS,
    Key.THREE: WallStyle.TEXTURES,
}
# Direction of each movement key, relative to the view angle.
_MOVE_KEYS = ((Key.A, 90), (Key.W, 0), (Key.S, 180), (Key.D, -90))


def _as_key(key: int) -> Key | None:
    try:
        return Key(key)
    except ValueError:
        return None


class Game:
    """The world as the player sees it: map, position, view and toggles."""

    def __init__(self, scene: Scene) -> None:
        self.scene = scene
        self.grid = list(scene.grid)
        self.map_width = scene.map_width
        self.map_height = scene.map_height
        self.player_x = scene.player_x
        self.player_y = scene.player_y
        self.player_angle = scene.player_angle
        self.wall_color = DEF_WALL_COLOR
        self.floor_color = scene.floor_color
        self.ceiling_color = scene.ceiling_color
        self.pressed: set[Key] = set()
        self.map_visible = False
        self.walls_style = WallStyle.TEXTURES
        self.use_sprites = USE_SPRITES
        self.wall_collision = WALL_COLLISION
        self.mouse_enabled = MOUSE_ON
        self.mouse_x = -1
        self.mouse_y = -1
        self.quit_requested = False

    def key_press(self, key: int) -> None:
        """React to a key going down."""
        code = _as_key(key)
        if code is None:
            return
        if code is Key.ESC:
            self.quit_requested = True
        elif code is Key.TAB:
            self.map_visible = not self.map_visible
        elif code in _HELD_KEYS:
            self.pressed.add(code)
        elif code in _STYLE_KEYS:
            self.walls_style = _STYLE_KEYS[code]
        elif code is Key.FOUR:
            self.use_sprites = not self.use_sprites
        elif code is Key.FIVE:
            self.wall_collision = not self.wall_collision

    def key_release(self, key: int) -> None:
        """React to a key going up."""
        code = _as_key(key)
        if code in _HELD_KEYS:
            self.pressed.discard(code)

    def mouse_motion(self, x: int, y: int) -> None:
        """Turn the view by horizontal mouse movement, when enabled."""
        if not self.mouse_enabled:
            return
        if self.mouse_x != -1:
            if x < self.mouse_x:
                self.player_angle += ANGLE_STEP
            if x > self.mouse_x:
                self.player_angle -= ANGLE_STEP
        self.mouse_x = x
        self.mouse_y = y

    def _blocked(self, x: float, y: float) -> bool:
        if not self.wall_collision:
            return False
        col, row = int(x), int(y)
        if not (0 <= row < len(self.grid) and 0 <= col < len(self.grid[row])):
            return False
        return self.grid[row][col] == MAP_WALL

    def move(self, dx: float, dy: float) -> None:
        """Move the player, stopping half a body short of walls."""
        half = BODY / 2
        x = self.player_x + dx
        x = x + half if dx > 0 else x - half
        if self._blocked(x, self.player_y):
            x = int(x) - half if dx > 0 else int(x + 1) + half
        else:
            x = self.player_x + dx
        y = self.player_y + dy
        y = y + half if dy > 0 else y - half
        if self._blocked(x, y):
            y = int(y) - half if dy > 0 else int(y + 1) + half
        else:
            y = self.player_y + dy
        self.player_x = x
        self.player_y = y

    def update(self) -> None:
        """Apply one frame of movement and turning for the held keys."""
        for key, direction in _MOVE_KEYS:
            if key in self.pressed:
                angle = self.player_angle + direction
                self.move(cos_a(angle) * STEP, sin_a(angle) * STEP)
        if Key.LEFT in self.pressed:
            self.player_angle += ANGLE_STEP
            if self.player_angle >= 360:
                self.player_angle -= 360
        if Key.RIGHT in self.pressed:
            self.player_angle -= ANGLE_STEP
            if self.player_angle < -360:
                self.player_angle += 360