"""The geometric core of a sprite: position, extent, rotation, motion and properties."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from gfckit.geometry import Rectangle, Vector

Number = Union[int, float]


@dataclass
class _Property:
    """A named value together with an indexed list of values under the same name."""

    value: Any = None
    indexed: List[Any] = field(default_factory=list)


def _as_vector(point: Union[Vector, Tuple[Number, Number]]) -> Vector:
    if isinstance(point, Vector):
        return Vector(point.x, point.y)
    x, y = point
    return Vector(x, y)


class Body:
    """A rectangular body placed by its pivot point, able to rotate and move.

    Local coordinates are centred at the pivot and rotated with the body.
    The local extent runs from the bottom-left corner to the top-right one.
    """

    def __init__(
        self,
        x: Number = 0.0,
        y: Number = 0.0,
        width: Number = 0.0,
        height: Number = 0.0,
        time: int = 0,
    ) -> None:
        self.position = Vector(x, y)
        self._pt1 = Vector(-width / 2, -height / 2)
        self._pt2 = Vector(width / 2, height / 2)
        self.time = time
        self.state = 0
        self.health = 0.0
        self.direction = Vector(0, 1)
        self.speed = 0.0
        self.omega = 0.0
        self._rot = 0.0
        self._sinrot = 0.0
        self._cosrot = 1.0
        self._valid = False
        self._roto: Any = None
        self._properties: Dict[str, _Property] = {}
        self._deleted = False
        self._death_time: Optional[int] = None

    # Position and extent

    @property
    def x(self) -> float:
        return self.position.x

    @x.setter
    def x(self, value: Number) -> None:
        self.position.x = float(value)

    @property
    def y(self) -> float:
        return self.position.y

    @y.setter
    def y(self, value: Number) -> None:
        self.position.y = float(value)

    @property
    def left_local(self) -> float:
        return self._pt1.x

    @property
    def right_local(self) -> float:
        return self._pt2.x

    @property
    def bottom_local(self) -> float:
        return self._pt1.y

    @property
    def top_local(self) -> float:
        return self._pt2.y

    @property
    def width(self) -> float:
        return self._pt2.x - self._pt1.x

    @property
    def height(self) -> float:
        return self._pt2.y - self._pt1.y

    @property
    def size(self) -> Vector:
        return Vector(self.width, self.height)

    def set_size(self, width: Union[Number, Vector], height: Optional[Number] = None) -> None:
        """Resize the body, keeping the pivot at the same relative place."""
        if isinstance(width, Vector):
            size = Vector(width.x, width.y)
        elif height is None:
            raise TypeError("set_size needs a vector or both width and height")
        else:
            size = Vector(width, height)
        px, py = self.pivot_rel()
        pivot = Vector(px, py)
        self._pt1 = -size * pivot
        self._pt2 = size * (Vector(1, 1) - pivot)
        self._roto = None

    # Coordinate conversion

    def global_to_local(
        self, point: Union[Vector, Tuple[Number, Number]], use_rotation: bool = True
    ) -> Vector:
        """Convert a point from global to local coordinates.

        With rotation, the result is truncated to whole units.
        """
        p = _as_vector(point)
        x = p.x - self.x
        y = p.y - self.y
        if not use_rotation or self._rot == 0:
            return Vector(x, y)
        return Vector(
            int(x * self._cosrot + y * self._sinrot),
            int(-x * self._sinrot + y * self._cosrot),
        )

    def local_to_global(
        self, point: Union[Vector, Tuple[Number, Number]], use_rotation: bool = True
    ) -> Vector:
        """Convert a point from local to global coordinates."""
        p = _as_vector(point)
        if not use_rotation or self._rot == 0:
            return Vector(p.x + self.x, p.y + self.y)
        return Vector(
            p.x * self._cosrot - p.y * self._sinrot + self.x,
            p.x * self._sinrot + p.y * self._cosrot + self.y,
        )

    def _corners_global(self, use_rotation: bool = True) -> List[Vector]:
        corners = [
            Vector(self._pt1.x, self._pt1.y),
            Vector(self._pt1.x, self._pt2.y),
            Vector(self._pt2.x, self._pt1.y),
            Vector(self._pt2.x, self._pt2.y),
        ]
        return [self.local_to_global(c, use_rotation) for c in corners]

    def bounding_rect(self) -> Rectangle:
        """The axis-aligned rectangle enclosing the rotated body."""
        return self._enclosing(self._corners_global())

    def _no_rot_bounding_rect(self) -> Rectangle:
        """The enclosing rectangle of the body as if it were not rotated."""
        return self._enclosing(self._corners_global(use_rotation=False))

    def _client_rect(self) -> Rectangle:
        """The body's own area, with its origin at the bottom-left corner."""
        return Rectangle(0, 0, int(self.width), int(self.height))

    @staticmethod
    def _enclosing(corners: List[Vector]) -> Rectangle:
        left = math.floor(min(c.x for c in corners))
        bottom = math.floor(min(c.y for c in corners))
        right = math.floor(max(c.x for c in corners))
        top = math.floor(max(c.y for c in corners))
        return Rectangle(left, bottom, right - left, top - bottom)

    # Pivot

    def set_pivot_local(self, point: Union[Vector, Tuple[Number, Number]]) -> None:
        """Move the pivot to a point given in local coordinates; the body stays put."""
        p = _as_vector(point)
        self._pt1 = self._pt1 - p
        self._pt2 = self._pt2 - p
        self.position = self.local_to_global(p)

    def pivot_rel(self) -> Tuple[float, float]:
        """The pivot's place as fractions of width and height from the bottom-left."""
        if self.right_local == self.left_local:
            x = 0.5
        else:
            x = -self.left_local / (self.right_local - self.left_local)
        if self.top_local == self.bottom_local:
            y = 0.5
        else:
            y = -self.bottom_local / (self.top_local - self.bottom_local)
        return x, y

    # Hit tests

    def hit_test_point(
        self, point: Union[Vector, Tuple[Number, Number]], radius: Number = 0.0
    ) -> bool:
        """Whether a point, or a circle around it, touches the body's rectangle."""
        p = self.global_to_local(point)
        return (
            self.left_local - radius <= p.x <= self.right_local + radius
            and self.bottom_local - radius <= p.y <= self.top_local + radius
        )

    def hit_test_rect(self, rect: Rectangle) -> bool:
        """Whether the body's bounding rectangle overlaps the given one."""
        return self.bounding_rect().intersects(rect)

    # Properties

    def set_property(self, label: str, value: Any, index: Optional[int] = None) -> None:
        """Set a named value, or one of its indexed values."""
        prop = self._properties.setdefault(label, _Property())
        if index is None:
            prop.value = value
            return
        if index < 0:
            raise IndexError("property index must not be negative")
        if index >= len(prop.indexed):
            prop.indexed.extend([None] * (index + 1 - len(prop.indexed)))
        prop.indexed[index] = value

    def get_property(self, label: str, index: Optional[int] = None) -> Any:
        """A named value or one of its indexed values; None when not set."""
        prop = self._properties.get(label)
        if prop is None:
            return None
        if index is None:
            return prop.value
        if 0 <= index < len(prop.indexed):
            return prop.indexed[index]
        return None

    def add_property(self, label: str, value: Any) -> None:
        """Append an indexed value under a name."""
        self._properties.setdefault(label, _Property()).indexed.append(value)

    def property_count(self, label: str) -> int:
        """How many indexed values a name holds."""
        prop = self._properties.get(label)
        return len(prop.indexed) if prop is not None else 0

    # Rotation and motion

    @property
    def rotation(self) -> float:
        """Rotation in degrees."""
        return self._rot

    @rotation.setter
    def rotation(self, degrees: Number) -> None:
        self.set_rotation(degrees)

    def set_rotation(self, degrees: Number) -> None:
        if degrees == self._rot:
            return
        self._rot = float(degrees)
        radians = math.radians(self._rot)
        self._sinrot = math.sin(-radians)
        self._cosrot = math.cos(-radians)
        self._roto = None

    def _proceed_velocity(self, delta_time: int) -> None:
        if self.speed:
            self.position = self.position + self.direction * (self.speed * delta_time / 1000.0)

    def _proceed_omega(self, delta_time: int) -> None:
        if self.omega:
            self.set_rotation(self._rot + self.omega * delta_time / 1000.0)

    # Life cycle

    def delete(self) -> None:
        self._deleted = True

    def undelete(self) -> None:
        self._deleted = False

    def die(self, delay: int = 0) -> None:
        """Schedule the body to die after a delay measured from its current time."""
        self._death_time = self.time + delay

    def is_dead(self) -> bool:
        return self._death_time is not None and self.time >= self._death_time

    def is_deleted(self) -> bool:
        return self._deleted

    # Validity of the drawn image

    @property
    def valid(self) -> bool:
        return self._valid

    def invalidate(self) -> None:
        self._valid = False

    def _validate(self) -> None:
        self._valid = True