import pygame
import pytest

from gfckit.geometry import Rectangle
from gfckit.shapes import SpriteOval, SpriteRect, SpriteText, any_but

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)


def _pixel(surface, x, y):
    return tuple(surface.get_at((x, y)))[:3]


def test_any_but_avoids_given_colours():
    key = any_but(RED, GREEN)
    assert key not in (RED, GREEN)
    assert len(key) == 3


def test_any_but_is_deterministic():
    key = any_but(BLUE)
    assert key not in (BLUE,)
    assert len(key) == 3
    assert all(0 <= channel <= 255 for channel in key)
    assert any_but(BLUE) == key


def test_any_but_skips_preferred_when_excluded():
    first = any_but()
    second = any_but(first)
    assert second != first
    third = any_but(first, second)
    assert third not in (first, second)


def test_any_but_accepts_pygame_color():
    key = any_but(pygame.Color(255, 0, 255))
    assert key not in ((255, 0, 255),)
    assert len(key) == 3
    assert key == any_but((255, 0, 255))


def test_oval_size_and_key():
    oval = SpriteOval(10, 20, 30, 16, RED, GREEN)
    assert oval.width == 30
    assert oval.height == 16
    assert oval.color_key == any_but(RED, GREEN)


def test_oval_without_outline_uses_fill():
    oval = SpriteOval(0, 0, 10, 10, RED)
    assert oval.outline_color == RED
    assert oval.color_key != RED


def test_circle_diameter():
    oval = SpriteOval.circle(5, 5, 7, BLUE)
    assert oval.width == 14
    assert oval.height == 14
    assert (oval.x, oval.y) == (5, 5)


def test_oval_painting():
    oval = SpriteOval(0, 0, 20, 20, RED, GREEN)
    oval.void_draw()
    g = oval.graphics
    assert g.get_size() == (20, 20)
    assert _pixel(g, 10, 10) == RED
    assert _pixel(g, 0, 0) == oval.color_key
    assert _pixel(g, 19, 19) == oval.color_key


def test_rect_painting():
    rect = SpriteRect(0, 0, 10, 8, RED, GREEN)
    rect.void_draw()
    g = rect.graphics
    assert _pixel(g, 0, 0) == GREEN
    assert _pixel(g, 4, 4) == RED


def test_rect_single_colour():
    rect = SpriteRect(0, 0, 6, 6, BLUE)
    rect.void_draw()
    g = rect.graphics
    assert all(_pixel(g, x, y) == BLUE for x in range(6) for y in range(6))


def test_valid_sprite_is_not_repainted():
    rect = SpriteRect(10, 10, 4, 4, RED)
    target = pygame.Surface((20, 20))
    rect.draw(target)
    assert rect.valid
    rect.graphics.fill(BLUE)
    rect.on_draw(rect.graphics)
    assert _pixel(rect.graphics, 1, 1) == BLUE
    rect.invalidate()
    rect.on_draw(rect.graphics)
    assert _pixel(rect.graphics, 1, 1) == RED


def test_rect_draws_onto_target():
    rect = SpriteRect(10, 10, 4, 4, RED)
    target = pygame.Surface((20, 20))
    target.fill((0, 0, 0))
    rect.draw(target)
    painted = sum(
        1 for x in range(20) for y in range(20) if _pixel(target, x, y) == RED
    )
    assert painted == 16


def test_from_rect():
    oval = SpriteOval.from_rect(Rectangle(0, 0, 10, 6), RED)
    assert (oval.x, oval.y) == (5, 3)
    assert (oval.width, oval.height) == (10, 6)
    box = SpriteRect.from_rect(Rectangle(0, 0, 10, 6), RED, GREEN)
    assert box.hit_test_point((5, 3))
    assert not box.hit_test_point((50, 3))


def test_text_not_rendered_without_target():
    text = SpriteText(0, 0, None, 20, "Hello", RED)
    text.on_prepare_graphics(None)
    assert text.graphics is None
    assert text.width == 0


def test_text_rendered_with_target():
    text = SpriteText(30, 30, None, 24, "Hello", RED)
    target = pygame.Surface((200, 100))
    text.on_prepare_graphics(target)
    g = text.graphics
    assert g.get_width() > 0 and g.get_height() > 0
    assert (text.width, text.height) == g.get_size()
    colours = {_pixel(g, x, y) for x in range(g.get_width()) for y in range(g.get_height())}
    assert RED in colours
    assert text.color_key in colours
    assert g.get_colorkey()[:3] == text.color_key


def test_text_keeps_alignment_and_key():
    text = SpriteText(0, 0, None, 12, "x", GREEN, align=1, valign=2)
    assert (text.align, text.valign) == (1, 2)
    assert text.color_key == any_but(GREEN)


def test_text_draw_paints_target():
    text = SpriteText(100, 50, None, 24, "Hi", RED)
    target = pygame.Surface((200, 100))
    target.fill((0, 0, 0))
    text.draw(target)
    assert text.valid
    assert any(
        _pixel(target, x, y) == RED for x in range(200) for y in range(100)
    )


@pytest.mark.parametrize("cls", [SpriteOval, SpriteRect])
def test_deleted_shape_is_not_drawn(cls):
    sprite = cls(10, 10, 4, 4, RED)
    sprite.delete()
    target = pygame.Surface((20, 20))
    target.fill((0, 0, 0))
    sprite.draw(target)
    assert not sprite.valid
    assert all(_pixel(target, x, y) == (0, 0, 0) for x in range(20) for y in range(20))