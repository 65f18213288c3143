"""Reading ``.cub`` scene descriptions: options, map grid, player and sprites."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field

from .utils import INT_MAX, check_atoi, create_trgb, cub_atoi, split_words

SAVE_OPTION = "--save"
FOV = 60

MAP_ALLOWED_CHARS = " 012ENWS"
PLAYER_CHARS = "ENWS"
SPRITE_CHARS = "2"
MAP_WALL = "1"
MAP_EMPTY = "0"

E_WALL = 0
N_WALL = 1
W_WALL = 2
S_WALL = 3

ERR_NO_CUB_FILE = "No .cub file given"
ERR_ARGS_COUNT = "Wrong arguments count"
ERR_INVALID_ARG = "Wrong second argument"
ERR_OPEN_FILE = "Can't open .cub file"
ERR_PARSE_FILE = "Error parse .cub file"
ERR_DUPLICATE_OPT = "Duplicate option"
ERR_WRONG_RES = "Wrong resolution option"
ERR_WRONG_TEXTURE = "Wrong texture option"
ERR_WRONG_COLOR = "Wrong color option"
ERR_INVALID_MAP = "Invalid map data"

_RESOLUTION_KEY = "R"
_COLOR_KEYS = ("F", "C")
_WALL_KEYS = {"EA": E_WALL, "NO": N_WALL, "WE": W_WALL, "SO": S_WALL}
_SPRITE_KEY = "S"
_TEXTURE_KEYS = (_SPRITE_KEY, *_WALL_KEYS)
_ALL_KEYS = frozenset((_RESOLUTION_KEY, *_COLOR_KEYS, *_TEXTURE_KEYS))


class CubError(Exception):
    """Raised when the arguments or the scene description are not valid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass
class Scene:
    """Everything a ``.cub`` file describes, ready for the engine."""

    width: int
    height: int
    wall_textures: tuple[str, str, str, str]
    sprite_texture: str
    floor_color: int
    ceiling_color: int
    grid: list[str]
    player_x: float
    player_y: float
    player_angle: float
    sprites: list[tuple[float, float]] = field(default_factory=list)

    @property
    def map_width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def map_height(self) -> int:
        return len(self.grid)

    @property
    def offset(self) -> int:
        """Extra columns rendered on each side of the visible window."""
        return self.width // 5

    @property
    def view_width(self) -> int:
        """Width of the rendered image, including both side offsets."""
        return self.width + 2 * self.offset

    @property
    def projection_distance(self) -> float:
        """Distance from the eye to the projection plane, in pixels."""
        return self.width / 2 / math.tan(math.radians(FOV / 2))

    def ray_angles(self) -> list[float]:
        """Angle in degrees between the view direction and each column's ray."""
        half = self.view_width // 2
        dpp = self.projection_distance
        return [math.degrees(math.atan((column - half) / dpp)) for column in range(self.view_width)]


def parse_arguments(argv: list[str]) -> tuple[str, bool]:
    """Check command-line arguments (without the program name).

    Returns the scene path and whether a screenshot was requested.
    """
    if not 1 <= len(argv) <= 2:
        raise CubError(ERR_ARGS_COUNT)
    path = argv[0]
    if not (len(path) > 4 and path.endswith(".cub")):
        raise CubError(ERR_NO_CUB_FILE)
    try:
        with open(path, "rb"):
            pass
    except OSError as err:
        raise CubError(ERR_OPEN_FILE) from err
    save = False
    if len(argv) == 2:
        if argv[1] != SAVE_OPTION:
            raise CubError(ERR_INVALID_ARG)
        save = True
    return path, save


class _SceneBuilder:
    """Collects options and map lines one line at a time."""

    def __init__(self, screen_width: int, screen_height: int) -> None:
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.seen: set[str] = set()
        self.map_started = False
        self.rows: list[str] = []
        self.width = 0
        self.height = 0
        self.textures: dict[str, str] = {}
        self.colors: dict[str, int] = {}

    def feed(self, line: str) -> None:
        parts = split_words(line, " ")
        key = parts[0] if parts else None
        if key == _RESOLUTION_KEY:
            self._resolution(parts)
        elif key in _TEXTURE_KEYS:
            self._texture(key, parts)
        elif key in _COLOR_KEYS:
            self._color(key, parts)
        else:
            self._map_line(line)

    def _claim(self, key: str) -> None:
        if self.map_started:
            raise CubError(ERR_PARSE_FILE)
        if key in self.seen:
            raise CubError(ERR_DUPLICATE_OPT)

    def _resolution(self, parts: list[str]) -> None:
        self._claim(_RESOLUTION_KEY)
        if len(parts) == 3 and check_atoi(parts[1], 1, INT_MAX) and check_atoi(parts[2], 1, INT_MAX):
            width = min(cub_atoi(parts[1]), self.screen_width)
            height = min(cub_atoi(parts[2]), self.screen_height)
            if width > 0 and height > 0:
                self.width, self.height = width, height
                self.seen.add(_RESOLUTION_KEY)
                return
        raise CubError(ERR_WRONG_RES)

    def _texture(self, key: str, parts: list[str]) -> None:
        self._claim(key)
        if len(parts) != 2:
            raise CubError(ERR_WRONG_TEXTURE)
        self.textures[key] = parts[1]
        self.seen.add(key)

    def _color(self, key: str, parts: list[str]) -> None:
        self._claim(key)
        if len(parts) == 2:
            rgb = split_words(parts[1], ",")
            if len(rgb) == 3 and all(check_atoi(channel, 0, 255) for channel in rgb):
                red, green, blue = (cub_atoi(channel) for channel in rgb)
                self.colors[key] = create_trgb(0, red, green, blue)
                self.seen.add(key)
                return
        raise CubError(ERR_WRONG_COLOR)

    def _map_line(self, line: str) -> None:
        if not line and not self.map_started:
            return
        self.map_started = True
        if not line or any(char not in MAP_ALLOWED_CHARS for char in line):
            raise CubError(ERR_INVALID_MAP)
        self.rows.append(line)

    def build(self) -> Scene:
        if self.seen != _ALL_KEYS:
            raise CubError(ERR_PARSE_FILE)
        map_width = max((len(row) for row in self.rows), default=0)
        grid = [row.ljust(map_width) for row in self.rows]
        player_x, player_y, player_angle = find_player(grid)
        validate_map(grid)
        walls = sorted(_WALL_KEYS, key=_WALL_KEYS.__getitem__)
        return Scene(
            width=self.width,
            height=self.height,
            wall_textures=tuple(self.textures[key] for key in walls),
            sprite_texture=self.textures[_SPRITE_KEY],
            floor_color=self.colors["F"],
            ceiling_color=self.colors["C"],
            grid=grid,
            player_x=player_x,
            player_y=player_y,
            player_angle=player_angle,
            sprites=find_sprites(grid),
        )


def parse_scene(text: str, screen_width: int, screen_height: int) -> Scene:
    """Parse the contents of a ``.cub`` file.

    The resolution is clamped to the given screen size.
    """
    lines = text.split("\n")
    if not lines[-1]:
        lines.pop()
    builder = _SceneBuilder(screen_width, screen_height)
    for line in lines:
        builder.feed(line)
    return builder.build()


def load_scene(path: str | os.PathLike[str], screen_width: int, screen_height: int) -> Scene:
    """Read and parse the ``.cub`` file at ``path``."""
    try:
        handle = open(path, encoding="utf-8", errors="surrogateescape", newline="")
    except OSError as err:
        raise CubError(ERR_OPEN_FILE) from err
    with handle:
        try:
            text = handle.read()
        except OSError as err:
            raise CubError(ERR_PARSE_FILE) from err
    return parse_scene(text, screen_width, screen_height)


def find_player(grid: list[str]) -> tuple[float, float, float]:
    """Return the player's centre position and facing angle in degrees.

    Exactly one of ``E``, ``N``, ``W`` or ``S`` must appear in the grid.
    """
    found = [
        (x + 0.5, y + 0.5, PLAYER_CHARS.index(char) * 90.0)
        for y, row in enumerate(grid)
        for x, char in enumerate(row)
        if char in PLAYER_CHARS
    ]
    if len(found) != 1:
        raise CubError(ERR_INVALID_MAP)
    return found[0]


def _cell_is_enclosed(grid: list[str], x: int, y: int) -> bool:
    if grid[y][x] in (" ", MAP_WALL):
        return True
    if y == 0 or x == 0 or y == len(grid) - 1 or x == len(grid[y]) - 1:
        return False
    return all(
        grid[y + dy][x + dx] != " "
        for dy in (-1, 0, 1)
        for dx in (-1, 0, 1)
        if dx or dy
    )


def validate_map(grid: list[str]) -> None:
    """Raise CubError unless every open cell is surrounded by walls or cells."""
    for y, row in enumerate(grid):
        for x in range(len(row)):
            if not _cell_is_enclosed(grid, x, y):
                raise CubError(ERR_INVALID_MAP)


def find_sprites(grid: list[str]) -> list[tuple[float, float]]:
    """Return the centre of every sprite cell, row by row."""
    return [
        (x + 0.5, y + 0.5)
        for y, row in enumerate(grid)
        for x, char in enumerate(row)
        if char in SPRITE_CHARS
    ]