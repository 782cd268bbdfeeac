"""Rectangles, sprites, sprite lists, shape and text sprites, and sound players for 2D games on pygame."""

__version__ = "0.1.0"
__all__ = ["geometry", "sprite_list", "sound", "body", "sprite", "shapes"]