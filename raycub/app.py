"""Command-line entry point: load a scene, then show it or save a screenshot."""

from __future__ import annotations

import sys
from collections.abc import Sequence

import pygame

from .bmp import SAVE_FILENAME, save_bmp
from .game import Game, Key
from .image import Image
from .render import Renderer
from .scene import CubError, Scene, load_scene, parse_arguments
from .utils import INT_MAX
from .xpm import XpmError, load_xpm

APP_NAME = "cub3D"
ERROR = "Error"
ERR_MLX_INIT = "Error mlx init"
ERR_MLX_WINDOW = "Error window create"
ERR_LOAD_TEXTURE = "Error load texture from file"
ERR_LOAD_SPRITE = "Error load sprite from file"
ERR_SAVE_BMP = "Error save bmp file"

FRAME_RATE = 60

# The top byte of a pixel is transparency (0 = opaque); pygame wants opacity.
_INVERT_ALPHA = bytes(range(255, -1, -1))

_KEYMAP = {
    pygame.K_a: Key.A,
    pygame.K_s: Key.S,
    pygame.K_d: Key.D,
    pygame.K_w: Key.W,
    pygame.K_1: Key.ONE,
    pygame.K_2: Key.TWO,
    pygame.K_3: Key.THREE,
    pygame.K_4: Key.FOUR,
    pygame.K_5: Key.FIVE,
    pygame.K_TAB: Key.TAB,
    pygame.K_ESCAPE: Key.ESC,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
}


def _to_rgba(image: Image) -> bytes:
    """Convert an image's little-endian TRGB pixels to RGBA bytes."""
    source = image.data
    out = bytearray(len(source))
    out[0::4] = source[2::4]
    out[1::4] = source[1::4]
    out[2::4] = source[0::4]
    out[3::4] = bytes(source[3::4]).translate(_INVERT_ALPHA)
    return bytes(out)


def _surface(image: Image) -> pygame.Surface:
    return pygame.image.frombuffer(_to_rgba(image), (image.width, image.height), "RGBA")


def _screen_size() -> tuple[int, int]:
    """Size of the desktop, or no limit when it cannot be queried."""
    try:
        pygame.display.init()
        try:
            sizes = pygame.display.get_desktop_sizes()
        finally:
            pygame.display.quit()
    except pygame.error:
        return INT_MAX, INT_MAX
    if not sizes:
        return INT_MAX, INT_MAX
    width, height = sizes[0]
    return (width if width > 0 else INT_MAX, height if height > 0 else INT_MAX)


def _load_textures(scene: Scene) -> tuple[list[Image], Image]:
    try:
        walls = [load_xpm(path) for path in scene.wall_textures]
    except XpmError as err:
        raise CubError(ERR_LOAD_TEXTURE) from err
    try:
        sprite = load_xpm(scene.sprite_texture)
    except XpmError as err:
        raise CubError(ERR_LOAD_SPRITE) from err
    return walls, sprite


def save_screenshot(renderer: Renderer, path: str = SAVE_FILENAME) -> None:
    """Write the last rendered frame to ``path`` as a BMP file."""
    try:
        save_bmp(renderer.main, path, renderer.offset)
    except OSError as err:
        raise CubError(ERR_SAVE_BMP) from err


def _dispatch(game: Game, event: pygame.event.Event) -> None:
    if event.type == pygame.QUIT:
        game.quit_requested = True
    elif event.type == pygame.KEYDOWN:
        key = _KEYMAP.get(event.key)
        if key is not None:
            game.key_press(key)
    elif event.type == pygame.KEYUP:
        key = _KEYMAP.get(event.key)
        if key is not None:
            game.key_release(key)
    elif event.type == pygame.MOUSEMOTION:
        game.mouse_motion(*event.pos)


def run_window(renderer: Renderer) -> None:
    """Show the game in a window until it is closed or Escape is pressed."""
    game = renderer.game
    size = (game.scene.width, game.scene.height)
    try:
        pygame.display.init()
    except pygame.error as err:
        raise CubError(ERR_MLX_INIT) from err
    try:
        try:
            window = pygame.display.set_mode(size)
        except pygame.error as err:
            raise CubError(ERR_MLX_WINDOW) from err
        pygame.display.set_caption(APP_NAME)
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                _dispatch(game, event)
            if game.quit_requested:
                break
            game.update()
            renderer.render()
            window.fill((0, 0, 0))
            window.blit(_surface(renderer.main), (-renderer.offset, 0))
            if game.map_visible:
                window.blit(_surface(renderer.minimap), (0, 0))
            pygame.display.flip()
            clock.tick(FRAME_RATE)
    finally:
        pygame.display.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the program; returns the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        path, save = parse_arguments(args)
        width, height = _screen_size()
        scene = load_scene(path, width, height)
        walls, sprite = _load_textures(scene)
        game = Game(scene)
        renderer = Renderer(game, walls, sprite)
        game.update()
        renderer.render()
        if save:
            save_screenshot(renderer, SAVE_FILENAME)
        else:
            run_window(renderer)
    except CubError as err:
        print(ERROR)
        print(err.message)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())