"""Ray casting of walls and sprites, and the overhead mini map."""

from __future__ import annotations

import math
import struct
from collections.abc import Sequence
from dataclasses import dataclass
from operator import attrgetter

from .game import BODY, Game, WallStyle
from .image import Image
from .scene import E_WALL, FOV, MAP_WALL, N_WALL, S_WALL, SPRITE_CHARS, W_WALL
from .utils import cos_a, sin_a

MAX_VIEW = 200
MAP_TILE = 20
MAP_COLOR = 0x00999999
MAP_PL_BODY = MAP_TILE * BODY
MAP_PL_BODY_COLOR = 0x0000FF00
MAP_RAY_COLOR = 0x000000FF
MAP_RAY_STEP = 0.05
MAP_SPRITE_COLOR = 0x00FFFF00
MAP_LOOK_COLOR = 0x00FF0000
MAP_CLEAR_COLOR = 0xFF000000
TRANSPARENT_COLOR = 0x00980088

_EDGE = 0.000001
_PIXEL = struct.Struct("<I")


@dataclass(frozen=True)
class Ray:
    """Result of casting one ray: nearest wall hit and where on it."""

    distance: float
    side: int
    hit: float
    color: int
    wall: int


@dataclass(frozen=True)
class _LineHit:
    distance: float
    hit: float
    color: int
    wall: int


_MISS = _LineHit(math.inf, 0.0, 0, 0)


@dataclass
class _Sprite:
    x: float
    y: float
    distance: float = 0.0
    angle: float = 0.0


def _texel(image: Image, x: int, y: int) -> int:
    """Read a pixel by raw offset, as texture lookups may run past a row."""
    offset = y * image.line_length + x * (image.bpp // 8)
    offset = min(max(offset, 0), len(image.data) - _PIXEL.size)
    return _PIXEL.unpack_from(image.data, offset)[0]


def _c_round(value: float) -> float:
    return math.floor(value + 0.5) if value >= 0 else math.ceil(value - 0.5)


class Renderer:
    """Draws the 3D view and the mini map of a game into images."""

    def __init__(self, game: Game, textures: Sequence[Image], sprite: Image) -> None:
        textures = tuple(textures)
        if len(textures) != 4:
            raise ValueError(f"expected 4 wall textures, got {len(textures)}")
        scene = game.scene
        self.game = game
        self.textures = textures
        self.sprite = sprite
        self.offset = scene.offset
        self.main = Image(scene.view_width, scene.height)
        self.minimap = Image(scene.width, scene.height)
        self.dpp = scene.projection_distance
        self.angles = scene.ray_angles()
        self.z = [0.0] * scene.view_width
        self._sprites = [_Sprite(x, y) for x, y in scene.sprites]

    def _in_map(self, x: float, y: float) -> bool:
        return 0 <= y < self.game.map_height and 0 <= x < self.game.map_width

    def _is_wall(self, x: float, y: float) -> bool:
        return self._in_map(x, y) and self.game.grid[int(y)][int(x)] == MAP_WALL

    def _vertical(self, cos: float, sin: float) -> _LineHit:
        if cos == 0:
            return _MISS
        px, py = self.game.player_x, self.game.player_y
        x = float(int(px + 1)) if cos >= 0 else int(px) - _EDGE
        y = py + (x - px) / cos * sin
        dx = 1.0 if cos >= 0 else -1.0
        dy = dx / cos * sin
        while abs(x - px) < MAX_VIEW and not self._is_wall(x, y):
            x += dx
            y += dy
        wall = 1 if self._in_map(x, y) else 0
        hit = 1 - (y - int(y)) if cos < 0 else y - int(y)
        distance = (x - px) / cos
        if not distance < MAX_VIEW:
            wall = 0
        return _LineHit(abs(distance), hit, int(y) * 30, wall)

    def _horizontal(self, cos: float, sin: float) -> _LineHit:
        if sin == 0:
            return _MISS
        px, py = self.game.player_x, self.game.player_y
        y = float(int(py + 1)) if sin >= 0 else int(py) - _EDGE
        x = px + (y - py) / sin * cos
        dy = 1.0 if sin >= 0 else -1.0
        dx = dy / sin * cos
        while abs(y - py) < MAX_VIEW and not self._is_wall(x, y):
            x += dx
            y += dy
        wall = 1 if self._in_map(x, y) else 0
        hit = 1 - (x - int(x)) if sin >= 0 else x - int(x)
        distance = (y - py) / sin
        if not distance < MAX_VIEW:
            wall = 0
        return _LineHit(abs(distance), hit, int(x) * 30, wall)

    def cast_ray(self, angle: float) -> Ray:
        """Cast a ray at ``angle`` degrees from the player's position."""
        sin = sin_a(angle)
        cos = cos_a(angle)
        vertical = self._vertical(cos, sin)
        horizontal = self._horizontal(cos, sin)
        if horizontal.distance < vertical.distance:
            chosen, side = horizontal, (S_WALL if sin >= 0 else N_WALL)
        else:
            chosen, side = vertical, (E_WALL if cos >= 0 else W_WALL)
        return Ray(chosen.distance, side, chosen.hit, chosen.color,
                   horizontal.wall + vertical.wall)

    def render(self) -> Image:
        """Draw one frame and return the main image."""
        game = self.game
        if game.map_visible:
            self.minimap.fill(MAP_CLEAR_COLOR)
        for column, offset_angle in enumerate(self.angles):
            angle = game.player_angle - offset_angle
            ray = self.cast_ray(angle)
            self._draw_2d_ray(angle, ray.distance)
            distance = ray.distance * cos_a(offset_angle)
            self.z[column] = distance
            self._draw_column(column, distance, ray)
        self._draw_sprites()
        self._draw_2d_map()
        return self.main

    def _wall_color(self, ray: Ray, tx: int, ty: int) -> int:
        style = self.game.walls_style
        if style == WallStyle.TEXTURES:
            return _texel(self.textures[ray.side], tx, ty)
        if style == WallStyle.MANY_COLORS:
            return ray.color
        return self.game.wall_color

    def _draw_column(self, column: int, distance: float, ray: Ray) -> None:
        game = self.game
        texture = self.textures[ray.side]
        height = self.main.height
        wall_height = int(self.dpp / distance) if ray.wall and distance > 0 else 0
        step = texture.height / wall_height if wall_height else math.inf
        ty = step * (wall_height - height) / 2 if wall_height >= height else 0.0
        wall_height = min(wall_height, height)
        tx = int(texture.width * ray.hit)
        ceiling_end = (height - wall_height) >> 1
        floor_start = height - ceiling_end
        for y in range(height):
            if y < ceiling_end:
                color = game.ceiling_color
            elif y < floor_start:
                color = self._wall_color(ray, tx, math.floor(ty))
                if ty + step < texture.height:
                    ty += step
            else:
                color = game.floor_color
            self.main.put_pixel(column, y, color)

    def _draw_sprites(self) -> None:
        game = self.game
        if not game.use_sprites:
            return
        px, py, pa = game.player_x, game.player_y, game.player_angle
        for sprite in self._sprites:
            dx = sprite.x - px
            dy = -(sprite.y - py)
            sprite.distance = math.hypot(dx, dy)
            angle = math.atan2(dy, dx) * 180 / math.pi
            if angle - pa > 180:
                angle -= 360
            if angle - pa < -180:
                angle += 360
            sprite.angle = angle
        self._sprites.sort(key=attrgetter("distance"), reverse=True)
        for sprite in self._sprites:
            sprite.distance *= cos_a(sprite.angle - pa)
            if sprite.distance > 1.0 / 2:
                self._draw_sprite(sprite.distance, sprite.angle, int(self.dpp / sprite.distance))

    def _draw_sprite(self, distance: float, angle: float, size: int) -> None:
        main, texture = self.main, self.sprite
        sprite_h = sprite_w = size
        step_y = texture.height / sprite_h if sprite_h else math.inf
        step_x = texture.width / sprite_w if sprite_w else math.inf
        ty = 0.0
        tx_start = 0.0
        if sprite_h >= main.height:
            ty = step_y * (sprite_h - main.height) / 2
            sprite_h = main.height - 1
        if sprite_w >= main.width:
            tx_start = step_y * (sprite_w - main.width) / 2
            sprite_w = main.width - 1
        pa = self.game.player_angle
        center = next(
            (column for column, offset in enumerate(self.angles) if pa - offset < angle),
            len(self.angles),
        )
        if center in (0, len(self.angles)):
            return
        for y in range(-(sprite_h // 2), sprite_h // 2):
            row = main.half_height + y
            tx = tx_start
            for x in range(-(sprite_w // 2), sprite_w // 2):
                column = center + x
                if (0 <= column < main.width and 0 <= row < main.height
                        and self.z[column] > distance):
                    color = _texel(texture, int(tx), int(ty))
                    if color != TRANSPARENT_COLOR:
                        main.put_pixel(column, row, color)
                tx += step_x
            ty += step_y

    def _draw_2d_ray(self, angle: float, distance: float) -> None:
        game = self.game
        if not game.map_visible or abs(angle - game.player_angle) > FOV // 2:
            return
        cos, sin = cos_a(angle), sin_a(angle)
        width, height = self.minimap.width, self.minimap.height
        step = 0.0
        while step <= distance:
            x = (game.player_x + cos * step) * MAP_TILE
            y = (game.player_y + sin * step) * MAP_TILE
            if 0 <= int(x) < width and 0 <= int(y) < height:
                self.minimap.put_pixel(x, y, MAP_RAY_COLOR)
            step += MAP_RAY_STEP

    def _draw_tile(self, cell_x: int, cell_y: int, color: int) -> None:
        width, height = self.minimap.width, self.minimap.height
        for j in range(1, MAP_TILE - 1):
            y = cell_y * MAP_TILE + j
            if y >= height:
                break
            for i in range(1, MAP_TILE - 1):
                x = cell_x * MAP_TILE + i
                if x < width:
                    self.minimap.put_pixel(x, y, color)

    def _draw_2d_map(self) -> None:
        game = self.game
        if not game.map_visible:
            return
        for y, row in enumerate(game.grid):
            for x, char in enumerate(row):
                if char == MAP_WALL:
                    self._draw_tile(x, y, MAP_COLOR)
                if char in SPRITE_CHARS and game.use_sprites:
                    self._draw_tile(x, y, MAP_SPRITE_COLOR)
        self._draw_2d_player()

    def _draw_2d_player(self) -> None:
        game = self.game
        width, height = self.minimap.width, self.minimap.height
        cx, cy = game.player_x * MAP_TILE, game.player_y * MAP_TILE
        for radius in range(1, math.ceil(MAP_PL_BODY / 2)):
            for angle in range(360):
                x = int(cx + _c_round(cos_a(angle) * radius))
                y = int(cy - _c_round(sin_a(angle) * radius))
                if 0 <= x < width and 0 <= y < height:
                    self.minimap.put_pixel(x, y, MAP_PL_BODY_COLOR)
        self._draw_look_line()

    def _draw_look_line(self) -> None:
        game = self.game
        width, height = self.minimap.width, self.minimap.height
        cos, sin = cos_a(game.player_angle), sin_a(game.player_angle)
        for step in range(width * 2):
            x = game.player_x * MAP_TILE + cos * step
            y = game.player_y * MAP_TILE + sin * step
            if x >= width or y >= height or x < 0 or y < 0:
                break
            cell_x, cell_y = int(x / MAP_TILE), int(y / MAP_TILE)
            if (cell_y < game.map_height and cell_x < game.map_width
                    and game.grid[cell_y][cell_x] == MAP_WALL):
                break
            self.minimap.put_pixel(x, y, MAP_LOOK_COLOR)