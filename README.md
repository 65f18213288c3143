# raycub

A ray-casting maze viewer. It reads a `.cub` scene file describing the
window resolution, the wall and sprite textures (XPM files), the floor and
ceiling colours and a grid map. It then lets you walk through the maze in a
pygame window, or writes a single frame to a BMP screenshot.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running

```
raycub maps/level.cub
raycub maps/level.cub --save
```

The first argument must be an existing file whose name ends in `.cub`; the
only accepted second argument is `--save`. With `--save`, the first rendered
frame is written to `screenshot.bmp` in the current directory and the program
exits without opening a window.

If something is wrong (a bad argument count, a file that does not end in
`.cub` or cannot be opened, a missing or duplicated option, a bad colour or
resolution, a map that is not closed by walls, a texture that cannot be read
or a screenshot that cannot be written), the program prints `Error` and a
one-line reason on standard output and exits with status 1.

## The .cub format

```
R 1280 720
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
S ./textures/barrel.xpm
F 110,110,110
C 50,50,80

111111111
100000001
102000N01
100000001
111111111
```

- `R width height`: window size, each a positive whole number. It is capped
  to the size of the desktop.
- `NO`, `SO`, `WE`, `EA`: wall texture files for each side.
- `S`: sprite texture file.
- `F`, `C`: floor and ceiling colours as `r,g,b`, each from 0 to 255.
- Option fields are separated by spaces, so texture paths cannot contain
  spaces.
- The map comes last and may use only ` 012NSEW`: `1` is a wall, `0` is
  floor, `2` is a sprite and `N`/`S`/`E`/`W` is the player's start cell and
  facing. There is exactly one player. Every cell that is not a wall or a
  space must lie away from the map's edge and have no space among its eight
  neighbours. Blank lines are allowed before the map but not inside or
  after it.

Every option must appear exactly once and before the map.

## Controls

| Key          | Action                                  |
|--------------|-----------------------------------------|
| W / S        | move forward / back                     |
| A / D        | strafe left / right                     |
| ← / →        | turn                                    |
| Tab          | toggle the mini map                     |
| 1 / 2 / 3    | walls: one colour / per-line colours / textured |
| 4            | toggle sprites                          |
| 5            | toggle wall collision                   |
| Esc          | quit                                    |

Closing the window also quits. Turning with the mouse is off by default; it
can be switched on from code with `game.mouse_enabled = True`.

## Using it as a library

```python
from raycub.scene import load_scene
from raycub.game import Game
from raycub.render import Renderer
from raycub.xpm import load_xpm
from raycub.app import save_screenshot

scene = load_scene("maps/level.cub", 1920, 1080)
game = Game(scene)
textures = [load_xpm(path) for path in scene.wall_textures]
renderer = Renderer(game, textures, load_xpm(scene.sprite_texture))
renderer.render()
save_screenshot(renderer, "frame.bmp")
```

The modules:

- `raycub.scene`: `parse_arguments`, `parse_scene`, `load_scene`, the
  `Scene` dataclass, and the map checks `find_player`, `validate_map` and
  `find_sprites`. Problems raise `CubError`, whose `message` is the reason.
- `raycub.game`: `Game` holds the player and toggles; `key_press`,
  `key_release`, `mouse_motion`, `move` and `update` drive it with `Key`
  codes. `WallStyle` selects how walls are painted.
- `raycub.render`: `Renderer.cast_ray` returns a `Ray`; `Renderer.render`
  draws walls, sprites and, when visible, the mini map (`renderer.minimap`),
  and returns the main image.
- `raycub.image`: `Image`, a buffer of 32-bit pixels with `put_pixel`,
  `get_pixel`, `fill` and `row`.
- `raycub.bmp`: `encode_bmp` turns an `Image` into the bytes of a 32-bit
  BMP file, optionally cropping columns from each side; `save_bmp` writes it.
- `raycub.xpm`: `load_xpm` reads an XPM file; `parse_xpm` reads XPM text
  once `strip_comments` has removed its comments. Failures raise `XpmError`.
- `raycub.colornames`: `lookup_color` maps X11 colour names to values.
- `raycub.utils`: small numeric, colour and string helpers.
- `raycub.app`: `main`, `run_window` and `save_screenshot`.

## What it does not do

There is no sound, no enemies or shooting, and no saving of game state. Only
XPM textures are read, and only BMP screenshots are written, always to
`screenshot.bmp` when run as a command.