"""Ready-made sprites: filled ovals, filled rectangles and lines of text."""

from __future__ import annotations

import itertools
import os
from typing import Any, Iterator, Optional, Tuple, Union

import pygame

from gfckit.geometry import Rectangle
from gfckit.sprite import Sprite

Number = Union[int, float]
RGB = Tuple[int, int, int]

_PREFERRED_KEYS: Tuple[RGB, ...] = (
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 0),
    (0, 0, 0),
    (255, 255, 255),
)


def _rgb(color: Any) -> RGB:
    """Normalise a colour (tuple, name or pygame.Color) to an RGB tuple."""
    c = pygame.Color(color)
    return (c.r, c.g, c.b)


def _candidates() -> Iterator[RGB]:
    yield from _PREFERRED_KEYS
    for r, g, b in itertools.product(range(256), repeat=3):
        yield (r, g, b)


def any_but(*args: Any) -> RGB:
    """A colour that differs from every colour given; useful as a transparent key."""
    excluded = {_rgb(c) for c in args}
    return next(c for c in _candidates() if c not in excluded)


def _to_surface_rect(rect: Rectangle, surface: pygame.Surface) -> pygame.Rect:
    """Turn a bottom-up rectangle into a pygame rectangle on the surface's rows."""
    return pygame.Rect(rect.x, surface.get_height() - rect.y - rect.h, rect.w, rect.h)


def _inner_area(surface: pygame.Surface, client: Rectangle) -> pygame.Rect:
    inner = client.copy().grow(0, -1, 0, -1)
    return _to_surface_rect(inner, surface)


class SpriteOval(Sprite):
    """A sprite drawn as a filled ellipse with an outline."""

    def __init__(
        self,
        x: Number,
        y: Number,
        width: Number,
        height: Number,
        color: Any,
        outline: Any = None,
        time: int = 0,
    ) -> None:
        self.fill_color = _rgb(color)
        self.outline_color = _rgb(outline) if outline is not None else self.fill_color
        super().__init__(x, y, width, height, time=time)
        self.color_key = any_but(self.fill_color, self.outline_color)

    @classmethod
    def circle(
        cls,
        x: Number,
        y: Number,
        radius: Number,
        color: Any,
        outline: Any = None,
        time: int = 0,
    ) -> SpriteOval:
        """A circle centred at (x, y)."""
        return cls(x, y, radius + radius, radius + radius, color, outline, time)

    @classmethod
    def from_rect(  # type: ignore[override]
        cls, rect: Rectangle, color: Any, outline: Any = None, time: int = 0
    ) -> SpriteOval:
        """An oval centred in the rectangle and sized to it."""
        return cls(rect.center_x(), rect.center_y(), rect.w, rect.h, color, outline, time)

    def on_draw(self, surface: pygame.Surface) -> None:
        if self.valid:
            return
        client = self._client_rect()
        surface.fill(self.color_key, _to_surface_rect(client, surface))
        area = _inner_area(surface, client)
        if area.width <= 0 or area.height <= 0:
            return
        pygame.draw.ellipse(surface, self.fill_color, area)
        pygame.draw.ellipse(surface, self.outline_color, area, 1)


class SpriteRect(Sprite):
    """A sprite drawn as a filled rectangle with an outline."""

    def __init__(
        self,
        x: Number,
        y: Number,
        width: Number,
        height: Number,
        color: Any,
        outline: Any = None,
        time: int = 0,
    ) -> None:
        self.fill_color = _rgb(color)
        self.outline_color = _rgb(outline) if outline is not None else self.fill_color
        super().__init__(x, y, width, height, time=time)
        self.color_key = any_but(self.fill_color, self.outline_color)

    @classmethod
    def from_rect(  # type: ignore[override]
        cls, rect: Rectangle, color: Any, outline: Any = None, time: int = 0
    ) -> SpriteRect:
        """A rectangle sprite covering the given rectangle."""
        return cls(rect.center_x(), rect.center_y(), rect.w, rect.h, color, outline, time)

    def on_draw(self, surface: pygame.Surface) -> None:
        if self.valid:
            return
        client = self._client_rect()
        surface.fill(self.fill_color, _to_surface_rect(client, surface))
        area = _inner_area(surface, client)
        if area.width <= 0 or area.height <= 0:
            return
        pygame.draw.rect(surface, self.outline_color, area, 1)


def _open_font(name: Optional[str], size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    if name is None:
        return pygame.font.Font(None, size)
    if os.path.isfile(name):
        return pygame.font.Font(name, size)
    return pygame.font.SysFont(name, size)


class SpriteText(Sprite):
    """A sprite showing a line of text, rendered when first drawn onto a target."""

    def __init__(
        self,
        x: Number,
        y: Number,
        font_name: Optional[str],
        size: int,
        text: str,
        color: Any,
        align: int = 0,
        valign: int = 0,
        time: int = 0,
    ) -> None:
        self.font_name = font_name
        self.font_size = int(size)
        self.text = text
        self.text_color = _rgb(color)
        self.align = align
        self.valign = valign
        super().__init__(x, y, 0, 0, time=time)
        self.color_key = any_but(self.text_color)

    def on_prepare_graphics(self, target: Optional[pygame.Surface] = None) -> None:
        """Render the text once a target to draw on is known."""
        if self._graphics is not None:
            return
        if target is None:
            return
        font = _open_font(self.font_name, self.font_size)
        key = self.color_key if self.color_key is not None else any_but(self.text_color)
        rendered = font.render(self.text, False, self.text_color, key)
        rendered.set_colorkey(key)
        self._graphics = rendered
        self.set_size(float(rendered.get_width()), float(rendered.get_height()))

    def on_draw(self, surface: pygame.Surface) -> None:
        """Nothing to paint: the text is rendered in on_prepare_graphics."""