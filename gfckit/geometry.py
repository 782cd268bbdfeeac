"""Plane geometry: 2-D vectors and integer rectangles with a bottom-left origin."""

from __future__ import annotations

from typing import Iterator, Optional, Union

Number = Union[int, float]


def _halve_toward_zero(value: int) -> int:
    """Halve an integer, rounding toward zero."""
    return -((-value) // 2) if value < 0 else value // 2


class Vector:
    """A mutable 2-D vector of floats."""

    __slots__ = ("x", "y")

    def __init__(self, x: Number = 0.0, y: Number = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Vector({self.x!r}, {self.y!r})"

    def __add__(self, other: object) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: object) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, other: object) -> Vector:
        """Multiply component-wise by another vector, or scale by a number."""
        if isinstance(other, Vector):
            return Vector(self.x * other.x, self.y * other.y)
        if isinstance(other, (int, float)):
            return Vector(self.x * other, self.y * other)
        return NotImplemented

    def __rmul__(self, other: object) -> Vector:
        if isinstance(other, (int, float)):
            return Vector(self.x * other, self.y * other)
        return NotImplemented

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    __hash__ = None  # type: ignore[assignment]


class Rectangle:
    """An integer rectangle given by its bottom-left corner and a non-negative size."""

    __slots__ = ("x", "y", "w", "h")

    def __init__(self, x: int = 0, y: int = 0, w: int = 0, h: int = 0) -> None:
        self.set(x, y, w, h)

    def __repr__(self) -> str:
        return f"Rectangle({self.x}, {self.y}, {self.w}, {self.h})"

    # Geometry

    def left(self) -> int:
        return self.x

    def bottom(self) -> int:
        return self.y

    def right(self) -> int:
        return self.x + self.w

    def top(self) -> int:
        return self.y + self.h

    def center_x(self) -> int:
        return self.x + self.w // 2

    def center_y(self) -> int:
        return self.y + self.h // 2

    # Setting

    def set(self, x: Number, y: Number, w: Number, h: Number) -> Rectangle:
        """Set corner and size; a negative width or height turns the rectangle inside out."""
        x, y, w, h = int(x), int(y), int(w), int(h)
        if w < 0:
            w = -w
            x -= w
        if h < 0:
            h = -h
            y -= h
        self.x, self.y, self.w, self.h = x, y, w, h
        return self

    def set_collapsed(self, x: Number, y: Number, w: Number, h: Number) -> Rectangle:
        """Set corner and size; a negative width or height collapses to zero."""
        self.x, self.y = int(x), int(y)
        self.w, self.h = max(int(w), 0), max(int(h), 0)
        return self

    def set_tops(self, x0: Number, y0: Number, x1: Number, y1: Number) -> Rectangle:
        """Set from two opposite corners in any order."""
        x0, y0, x1, y1 = int(x0), int(y0), int(x1), int(y1)
        return self.set(x0, y0, x1 - x0, y1 - y0)

    def set_tops_collapsed(self, x0: Number, y0: Number, x1: Number, y1: Number) -> Rectangle:
        """Set from two corners; reversed corners collapse to their midpoint."""
        x0, y0, x1, y1 = int(x0), int(y0), int(x1), int(y1)
        if x1 < x0:
            x0 = x1 = _halve_toward_zero(x0 + x1)
        if y1 < y0:
            y0 = y1 = _halve_toward_zero(y0 + y1)
        return self.set(x0, y0, x1 - x0, y1 - y0)

    def to_vector(self) -> Vector:
        return Vector(self.x, self.y)

    def y_invert(self, height: int) -> Rectangle:
        """Flip the rectangle vertically inside an area of the given height."""
        self.y = int(height) - self.y - self.h
        return self

    # Emptiness

    def set_empty(self) -> Rectangle:
        return self.set(0, 0, 0, 0)

    def is_empty(self) -> bool:
        return self.w == 0 or self.h == 0

    # Moving

    def offset(self, dx: Union[Number, Vector], dy: Optional[Number] = None) -> Rectangle:
        """Move by (dx, dy), or by a vector passed as the only argument."""
        if isinstance(dx, Vector):
            dx, dy = dx.x, dx.y
        if dy is None:
            raise TypeError("offset needs a vector or both dx and dy")
        self.x += int(dx)
        self.y += int(dy)
        return self

    def move_to(self, x: Union[Number, Vector], y: Optional[Number] = None) -> Rectangle:
        """Place the bottom-left corner at (x, y), or at a vector passed alone."""
        if isinstance(x, Vector):
            x, y = x.x, x.y
        if y is None:
            raise TypeError("move_to needs a vector or both x and y")
        self.x, self.y = int(x), int(y)
        return self

    def grow(
        self,
        left: int,
        right: Optional[int] = None,
        top: Optional[int] = None,
        bottom: Optional[int] = None,
    ) -> Rectangle:
        """Grow each side outwards.

        With one argument every side grows by it; with two they are the
        horizontal and vertical amounts; with four each side is given.
        """
        if top is None and bottom is None:
            if right is None:
                left = right = top = bottom = left
            else:
                left, right, top, bottom = left, left, right, right
        elif right is None or top is None or bottom is None:
            raise TypeError("grow takes one, two or four amounts")
        return self.set(
            self.x - left, self.y - bottom, self.w + left + right, self.h + top + bottom
        )

    # Union and intersection

    def union(self, other: Rectangle) -> Rectangle:
        return self.set_tops(
            min(self.left(), other.left()),
            min(self.bottom(), other.bottom()),
            max(self.right(), other.right()),
            max(self.top(), other.top()),
        )

    def intersection(self, other: Rectangle) -> Rectangle:
        return self.set_tops_collapsed(
            max(self.left(), other.left()),
            max(self.bottom(), other.bottom()),
            min(self.right(), other.right()),
            min(self.top(), other.top()),
        )

    # Tests

    def contains(self, x: Union[Number, Vector], y: Optional[Number] = None) -> bool:
        """Whether the point lies inside the rectangle, edges included."""
        if isinstance(x, Vector):
            x, y = x.x, x.y
        if y is None:
            raise TypeError("contains needs a vector or both x and y")
        return self.left() <= x <= self.right() and self.bottom() <= y <= self.top()

    def intersects(self, other: Rectangle) -> bool:
        """Whether the rectangles overlap by a positive area."""
        return (
            min(self.right(), other.right()) > max(self.left(), other.left())
            and min(self.top(), other.top()) > max(self.bottom(), other.bottom())
        )

    def copy(self) -> Rectangle:
        return Rectangle(self.x, self.y, self.w, self.h)

    # Operators

    def __add__(self, other: object) -> Rectangle:
        if isinstance(other, Vector):
            return self.copy().offset(other)
        if isinstance(other, Rectangle):
            return self.copy().union(other)
        return NotImplemented

    def __sub__(self, other: object) -> Rectangle:
        if isinstance(other, Vector):
            return self.copy().offset(-other)
        return NotImplemented

    def __mul__(self, other: object) -> Rectangle:
        if isinstance(other, Rectangle):
            return self.copy().intersection(other)
        return NotImplemented

    def __iadd__(self, other: object) -> Rectangle:
        if isinstance(other, Vector):
            return self.offset(other)
        if isinstance(other, Rectangle):
            return self.union(other)
        return NotImplemented

    def __isub__(self, other: object) -> Rectangle:
        if isinstance(other, Vector):
            return self.offset(-other)
        return NotImplemented

    def __imul__(self, other: object) -> Rectangle:
        if isinstance(other, Rectangle):
            return self.intersection(other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rectangle):
            return NotImplemented
        return (self.x, self.y, self.w, self.h) == (other.x, other.y, other.w, other.h)

    __hash__ = None  # type: ignore[assignment]