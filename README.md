# gfckit

Building blocks for small 2D games on top of pygame:

- `gfckit.geometry`: `Vector` and integer `Rectangle` with a bottom-left origin.
- `gfckit.body`: `Body`, the geometric part of a sprite: position, size,
  pivot, rotation, motion, named properties, and a delete/die life cycle.
- `gfckit.sprite`: `Sprite`, a `Body` with an image, sprite-sheet animation
  (`SheetGrid`), drawing onto a pygame surface, and box or pixel-level hit tests.
- `gfckit.shapes`: ready-made `SpriteOval`, `SpriteRect` and `SpriteText`,
  and `any_but`, which picks a colour unlike the given ones for use as a
  transparent key.
- `gfckit.sprite_list`: `SpriteList`, a list with bulk removal and bulk
  method calls, and the `deleted` predicate.
- `gfckit.sound`: `Sound`, `SoundPlayer` with `PlayMode` replay policies,
  the reference-counted `AudioSystem`, and the `AudioBackend` interface with
  its pygame mixer implementation `PygameAudioBackend`.

## Install

```
pip install gfckit
```

To run the tests:

```
pip install "gfckit[test]"
pytest
```

## Coordinates

The y axis points up. A `Rectangle` is stored by its lower-left corner
(`x`, `y`) and its size (`w`, `h`); `left()`, `bottom()`, `right()` and
`top()` give its edges. A negative width or height passed to `set` turns the
rectangle inside out, so the stored size is never negative;
`set_collapsed` and `set_tops_collapsed` collapse it to zero instead.

```python
from gfckit.geometry import Rectangle, Vector

r = Rectangle(0, 0, 10, 10)
r.union(Rectangle(5, 5, 10, 10))          # r is now Rectangle(0, 0, 15, 15)
r.intersects(Rectangle(20, 20, 5, 5))     # False
moved = r + Vector(3, 4)                  # an offset copy
common = r * Rectangle(10, 10, 10, 10)    # the intersection, as a copy
```

Sprites use the same upward y axis; when a sprite is drawn, its position is
flipped onto the rows of the target surface.

## Sprites

A sprite is placed by its pivot point, which starts at its centre. It can be
rotated (`set_rotation`, in degrees), moved by `speed` along `direction`,
spun by `omega`, and tested for hits against a point (`hit_test_point`), a
rectangle (`hit_test_rect`) or another sprite (`hit_test_sprite`). With a
positive `skip`, `hit_test_sprite` goes on to compare opaque pixels, testing
every `skip`-th pixel in each direction.

```python
from gfckit.shapes import SpriteOval, SpriteRect
from gfckit.sprite_list import SpriteList, deleted

ball = SpriteOval.circle(100, 100, 16, (255, 0, 0), None, 0)
wall = SpriteRect(300, 100, 20, 200, (0, 0, 255), None, 0)
ball.speed = 200            # units per second along ball.direction

sprites = SpriteList([ball, wall])
game_time = 1000            # milliseconds
sprites.for_each("update", game_time)
if ball.hit_test_sprite(wall, 0):
    ball.die(500)           # deleted on the first update at least 500 ms later
removed = sprites.delete_if(deleted)
```

`for_each` takes either a method name or a function that receives the item
first, such as `Sprite.update`. `delete_if` returns the items it removed.

Drawing takes a pygame surface:

```python
screen = pygame.display.set_mode((640, 480))
for sprite in sprites:
    sprite.draw(screen)
```

### Images and animation

A `Sprite` may be given an image as a pygame surface or a file name, with an
optional colour key. Without a width and height it takes the image's size.

Animation frames are stored as indexed properties under a name. `add_image`
cuts a block of cells out of a sprite sheet (row 0 is the top row) and
appends them; `load_animation` does the same for one row or column given as
a `SheetGrid`:

```python
from gfckit.sprite import SheetGrid, Sprite

hero = Sprite(320, 240, 64, 64)
hero.load_animation("hero.png", "walk", SheetGrid.row(8, 4, 0))
hero.set_animation("walk", 12)      # 12 frames per second, resizing to each frame
```

`set_animation_keep_size` plays frames without changing the sprite's size.
`is_animation_playing`, `current_animation` and `current_animation_frame`
report on the running animation. An animation name with no frames shows an
empty image. An `fps` outside 1 to 1000 raises `ValueError`.

`clone` makes an independent copy with its own images and properties.

### Text

`SpriteText` renders a line of text with a font (a file path, a system font
name, or `None` for pygame's default font), a size and a colour. The text is
rendered the first time the sprite is drawn onto a target, and the sprite
takes the size of the rendered text.

## Sound

`SoundPlayer` plays one `Sound` at a time on a mixer channel. Its `PlayMode`
decides what `play` does while something is already playing:

- `TERMINATE_AND_PLAY`: stop the current sound and play.
- `PLAY_IF_IDLE`: play only when nothing is playing.
- `PLAY_IF_NEW`: do not restart the sound that is playing now.
- `PLAY_ONCE`: do not replay the sound played last.

```python
from gfckit.sound import AudioSystem, PlayMode, PygameAudioBackend, SoundPlayer

audio = AudioSystem(PygameAudioBackend())
with SoundPlayer(audio, PlayMode.PLAY_IF_NEW) as player:
    player.play_file("jump.wav", 0, 0)
```

`play_file` looks for the file as given and then in a `sounds` directory,
and raises `FileNotFoundError` when it finds neither; loaded files are cached
by the `AudioSystem`. The player also offers `pause`, `resume`, `stop`,
`fade_out`, `expire`, `set_volume` (a fraction of full volume) and
`set_position` (angle in degrees, distance 0 to 255).

The audio device is opened by the first `Sound` or `SoundPlayer` created on
an `AudioSystem` and closed when the last one is closed; `set_params` changes
the device settings and reopens it if it is open. Without an explicit
`AudioSystem`, sounds and players share a default one using the pygame mixer.
Any subclass of `AudioBackend` can take the place of pygame, which keeps game
logic testable without a sound card.

## What it does not do

gfckit provides pieces, not a game framework: it opens no window, runs no
main loop, keeps no game clock and handles no keyboard, mouse or joystick
input. Your program creates the pygame display, passes the game time in
milliseconds to `update`, and calls `draw` with the surface to draw on.