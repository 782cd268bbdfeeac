"""Sprites: bodies with images, sprite-sheet animation, drawing and pixel-level collisions."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

import pygame

from gfckit.body import Body
from gfckit.geometry import Rectangle, Vector

Number = Union[int, float]
ColorKey = Optional[Tuple[int, int, int]]
ImageSource = Union[str, "pygame.Surface"]


@dataclass(frozen=True)
class SheetGrid:
    """A run of cells in a sprite sheet of ``num_cols`` by ``num_rows`` cells.

    ``index`` is the row (when ``horizontally``) or the column holding the run,
    which goes from ``start`` to ``end``; a negative ``end`` means the last cell.
    """

    num_cols: int
    num_rows: int
    index: int
    start: int = 0
    end: int = -1
    horizontally: bool = True

    @classmethod
    def row(cls, num_cols: int, num_rows: int, row: int, start: int = 0, end: int = -1) -> SheetGrid:
        return cls(num_cols, num_rows, row, start, end, True)

    @classmethod
    def column(
        cls, num_cols: int, num_rows: int, column: int, start: int = 0, end: int = -1
    ) -> SheetGrid:
        return cls(num_cols, num_rows, column, start, end, False)


_missing_frame: Optional[pygame.Surface] = None


def _missing() -> pygame.Surface:
    """The shared empty image shown when an animation has no frames."""
    global _missing_frame
    if _missing_frame is None:
        _missing_frame = pygame.Surface((0, 0), 0, 32)
    return _missing_frame


def _load_surface(image: ImageSource, color_key: ColorKey = None) -> pygame.Surface:
    surface = pygame.image.load(image) if isinstance(image, str) else image
    if color_key is not None:
        surface.set_colorkey(color_key)
    return surface


def _dup(value: Any) -> Any:
    return value.copy() if isinstance(value, pygame.Surface) else value


def _step_range(start: int, stop: int) -> range:
    step = 1 if stop >= start else -1
    return range(start, stop + step, step)


def _collide_pixels(
    a: pygame.Surface, ax: int, ay: int, b: pygame.Surface, bx: int, by: int, skip: int
) -> bool:
    """Whether two images, placed top-down at the given corners, share an opaque pixel."""
    aw, ah = a.get_size()
    bw, bh = b.get_size()
    x1, y1 = max(ax, bx), max(ay, by)
    x2, y2 = min(ax + aw, bx + bw), min(ay + ah, by + bh)
    if x1 >= x2 or y1 >= y2:
        return False
    mask_a = pygame.mask.from_surface(a)
    mask_b = pygame.mask.from_surface(b)
    for y in range(y1, y2, skip):
        for x in range(x1, x2, skip):
            if mask_a.get_at((x - ax, y - ay)) and mask_b.get_at((x - bx, y - by)):
                return True
    return False


class Sprite(Body):
    """A body with an image, optional animation, and drawing onto a target surface.

    Coordinates grow upwards; drawing flips them onto the target's rows.
    """

    def __init__(
        self,
        x: Number = 0.0,
        y: Number = 0.0,
        width: Optional[Number] = None,
        height: Optional[Number] = None,
        image: Optional[ImageSource] = None,
        color_key: ColorKey = None,
        time: int = 0,
    ) -> None:
        if (width is None) != (height is None):
            raise TypeError("give both width and height, or neither")
        change_size = width is None
        super().__init__(x, y, width or 0.0, height or 0.0, time)
        self._graphics: Optional[pygame.Surface] = None
        self._color_key: ColorKey = None
        self._frames: List[pygame.Surface] = []
        self._anim_name: Optional[str] = None
        self._cur_frame = 0
        self._frame_period = 1
        self._frame_time: Optional[int] = None
        self._frame_change_size = True
        self._init_image(image, color_key, change_size)

    def _init_image(self, image: Optional[ImageSource], color_key: ColorKey, change_size: bool) -> None:
        if image is None:
            self.on_prepare_graphics()
        elif isinstance(image, str):
            surface = _load_surface(image, color_key)
            self.set_property(image, surface)
            self.set_image(surface, change_size)
        else:
            self.set_image(image, change_size)
        if color_key is not None:
            self.color_key = color_key

    @classmethod
    def from_rect(
        cls,
        rect: Rectangle,
        image: Optional[ImageSource] = None,
        color_key: ColorKey = None,
        time: int = 0,
    ) -> Sprite:
        """A sprite centred in the rectangle and sized to it."""
        return cls(rect.center_x(), rect.center_y(), rect.w, rect.h, image, color_key, time)

    # Images

    @property
    def graphics(self) -> Optional[pygame.Surface]:
        return self._graphics

    @property
    def roto_graphics(self) -> Optional[pygame.Surface]:
        return self._roto

    @property
    def color_key(self) -> ColorKey:
        return self._color_key

    @color_key.setter
    def color_key(self, key: ColorKey) -> None:
        self._color_key = key
        if self._graphics is not None:
            self._graphics.set_colorkey(key)
        self._roto = None

    def clone(self) -> Sprite:
        """An independent copy with its own images and properties."""
        p = Sprite(self.x, self.y, self.width, self.height, time=0)
        p.time = self.time
        p._graphics = _dup(self._graphics)
        p._roto = None
        p._color_key = self._color_key
        p.state = self.state
        p.health = self.health
        p.direction = Vector(self.direction.x, self.direction.y)
        p.speed = self.speed
        p._rot = self._rot
        p._sinrot = self._sinrot
        p._cosrot = self._cosrot
        p.omega = self.omega
        p._deleted = self._deleted
        p._death_time = self._death_time
        p._properties = {
            label: dataclasses.replace(
                prop, value=_dup(prop.value), indexed=[_dup(v) for v in prop.indexed]
            )
            for label, prop in self._properties.items()
        }
        p._frames = [frame.copy() for frame in self._frames]
        p._anim_name = self._anim_name
        p._cur_frame = self._cur_frame
        p._frame_period = self._frame_period
        p._frame_time = self._frame_time
        p._frame_change_size = self._frame_change_size
        p.invalidate()
        return p

    def clear_image(self) -> None:
        self._frames = []
        self._graphics = None
        self._roto = None

    def load_animation(
        self, image: ImageSource, alias: str, grid: SheetGrid, color_key: ColorKey = None
    ) -> None:
        """Add the frames of one row or column of a sprite sheet under an alias."""
        if grid.horizontally:
            self.add_image(image, alias, grid.num_cols, grid.num_rows,
                           grid.start, grid.index, grid.end, grid.index,
                           color_key, True)
        else:
            self.add_image(image, alias, grid.num_cols, grid.num_rows,
                           grid.index, grid.start, grid.index, grid.end,
                           color_key, False)

    def add_image(
        self,
        image: ImageSource,
        alias: str,
        num_cols: int,
        num_rows: int,
        col_from: int = 0,
        row_from: int = 0,
        col_to: int = -1,
        row_to: int = -1,
        color_key: ColorKey = None,
        horizontally: bool = True,
    ) -> None:
        """Cut a block of cells out of a sprite sheet and append them under an alias.

        Row 0 is the top row of the sheet. The block is walked row by row when
        ``horizontally``, otherwise column by column; a ``*_from`` beyond a
        ``*_to`` walks backwards.
        """
        col_from = max(col_from, 0)
        row_from = max(row_from, 0)
        if col_to < 0:
            col_to = num_cols - 1
        if row_to < 0:
            row_to = num_rows - 1
        col_to = min(col_to, num_cols - 1)
        if col_from >= num_cols:
            col_from = col_to
        row_to = min(row_to, num_rows - 1)
        if row_from >= num_rows:
            row_from = row_to

        sheet = _load_surface(image)
        cell_w = sheet.get_width() // num_cols
        cell_h = sheet.get_height() // num_rows

        def cell(col: int, row: int) -> pygame.Surface:
            surface = sheet.subsurface((col * cell_w, row * cell_h, cell_w, cell_h)).copy()
            if color_key is not None:
                surface.set_colorkey(color_key)
            return surface

        rows = _step_range(row_from, row_to)
        cols = _step_range(col_from, col_to)
        if horizontally:
            cells = [(c, r) for r in rows for c in cols]
        else:
            cells = [(c, r) for c in cols for r in rows]
        for col, row in cells:
            self.add_property(alias, cell(col, row))

    def set_image(self, image: ImageSource, change_size: bool = True) -> None:
        """Show a copy of an image; a name refers to a stored property or a file."""
        if isinstance(image, str):
            stored = self.get_property(image)
            source = stored if isinstance(stored, pygame.Surface) else _load_surface(image)
        else:
            source = image
        self.clear_image()
        self._graphics = source.copy()
        if self._color_key is not None:
            self._graphics.set_colorkey(self._color_key)
        if change_size:
            self.set_size(float(self._graphics.get_width()), float(self._graphics.get_height()))

    # Animation

    @staticmethod
    def _period(fps: int) -> int:
        if fps <= 0 or 1000 // fps == 0:
            raise ValueError("fps must be between 1 and 1000")
        return 1000 // fps

    def _collect_frames(self, name: str, start: int, num_frames: int) -> List[pygame.Surface]:
        available = self.property_count(name) - start
        count = min(num_frames, available) if num_frames > 0 else available
        return [self.get_property(name, start + i) for i in range(max(count, 0))]

    def set_animation(self, name: str, fps: int, start: int = 0, num_frames: int = 0) -> None:
        """Play the images stored under a name, resizing the sprite to each frame."""
        period = self._period(fps)
        self.clear_image()
        self._anim_name = name
        self._frames = self._collect_frames(name, start, num_frames) or [_missing()]
        self._cur_frame = 0
        self._frame_period = period
        self._frame_time = None
        self._frame_change_size = True

    def set_animation_keep_size(
        self, name: str, fps: int, start: int = 0, num_frames: int = 0
    ) -> None:
        """Play the images stored under a name, keeping the sprite's size."""
        period = self._period(fps)
        self.clear_image()
        self._anim_name = name
        self._frames = self._collect_frames(name, start, num_frames)
        self._cur_frame = 0
        self._frame_period = period
        self._frame_time = None
        self._frame_change_size = False

    def is_animation_playing(self, name: Optional[str] = None) -> bool:
        """Whether an animation (or the named one) is playing."""
        if not self._frames:
            return False
        return name is None or name == self._anim_name

    def current_animation(self) -> Optional[str]:
        return self._anim_name if self.is_animation_playing() else None

    def current_animation_frame(self) -> int:
        return self._cur_frame if self.is_animation_playing() else -1

    # Collisions

    def _corners_local(self) -> List[Vector]:
        return [
            Vector(self.left_local, self.bottom_local),
            Vector(self.left_local, self.top_local),
            Vector(self.right_local, self.bottom_local),
            Vector(self.right_local, self.top_local),
        ]

    def _separated_from(self, other: Sprite) -> bool:
        points = [self.global_to_local(other.local_to_global(c)) for c in other._corners_local()]
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return (
            max(xs) < self.left_local
            or min(xs) > self.right_local
            or max(ys) < self.bottom_local
            or min(ys) > self.top_local
        )

    def hit_test_sprite(self, other: Sprite, skip: int = 0) -> bool:
        """Whether two sprites overlap.

        Boxes are compared first; with a positive ``skip`` the opaque pixels are
        then compared, testing every ``skip``-th pixel in each direction.
        """
        if self._separated_from(other) or other._separated_from(self):
            return False
        if skip <= 0:
            return True

        my_rect = self.bounding_rect()
        his_rect = other.bounding_rect()
        self.void_draw()
        other.void_draw()
        mine, his = self._roto, other._roto
        if mine is None or his is None:
            return True
        return _collide_pixels(
            mine, my_rect.x, -(my_rect.y + my_rect.h),
            his, his_rect.x, -(his_rect.y + his_rect.h),
            skip,
        )

    # Update and draw

    def update(self, game_time: int) -> None:
        """Advance the sprite to the given game time (in milliseconds)."""
        delta = max(game_time - self.time, 0)
        self.time = game_time
        if self.is_dead():
            self.delete()
        if not self.is_deleted():
            self.on_update(game_time, delta)

    def draw(self, target: pygame.Surface) -> None:
        """Draw the sprite onto a target surface."""
        if self.is_deleted():
            return
        self.on_prepare_graphics(target)
        if self._graphics is None:
            return
        self.on_draw(self._graphics)
        if not self.on_prepare_roto_graphics(target):
            self._blit(target, self._no_rot_bounding_rect(), self._graphics)
        else:
            if self._roto is None:
                return
            self._blit(target, self.bounding_rect(), self._roto)
        self._validate()

    @staticmethod
    def _blit(target: pygame.Surface, rect: Rectangle, image: pygame.Surface) -> None:
        target.blit(image, (rect.x, target.get_height() - rect.y - rect.h))

    def on_update(self, time: int, delta_time: int) -> None:
        """Move, rotate and advance the animation; override for other behaviour."""
        self._proceed_velocity(delta_time)
        self._proceed_omega(delta_time)
        if not self._frames:
            return
        if self._frame_time is None:
            self._frame_time = time
        self._cur_frame = ((time - self._frame_time) // self._frame_period) % len(self._frames)
        frame = self._frames[self._cur_frame]
        if frame is not self._graphics:
            self._graphics = frame
            self._roto = None
        if self._frame_change_size:
            self.set_size(float(frame.get_width()), float(frame.get_height()))

    def void_draw(self) -> None:
        """Prepare the images without drawing them anywhere."""
        self.on_prepare_graphics()
        if self._graphics is not None:
            self.on_draw(self._graphics)
        self.on_prepare_roto_graphics()

    def on_prepare_graphics(self, target: Optional[pygame.Surface] = None) -> None:
        """Create a blank image of the sprite's size if it has none."""
        if self._graphics is not None:
            return
        if not self.width or not self.height:
            return
        self._graphics = pygame.Surface((int(self.width), int(self.height)), 0, 32)
        if self._color_key is not None:
            self._graphics.set_colorkey(self._color_key)

    def on_prepare_roto_graphics(self, target: Optional[pygame.Surface] = None) -> bool:
        """Build the scaled and rotated image; False when there is none to build."""
        graphics = self._graphics
        if graphics is None or graphics.get_width() == 0 or graphics.get_height() == 0:
            return False
        if self._roto is None:
            key = graphics.get_colorkey()
            source = graphics
            if self.width != graphics.get_width() or self.height != graphics.get_height():
                size = (int(self.width), int(self.height))
                if size[0] <= 0 or size[1] <= 0:
                    return False
                source = pygame.transform.scale(graphics, size)
            roto = pygame.transform.rotate(source, -self.rotation)
            if key is not None:
                roto.set_colorkey(key[:3])
            self._roto = roto
        return True

    def on_draw(self, surface: pygame.Surface) -> None:
        """Paint onto the sprite's own image; by default only applies the colour key.

        Subclasses override this to draw their own content.
        """
        if self._color_key is not None and surface.get_colorkey() is None:
            surface.set_colorkey(self._color_key)