import itertools
from enum import Enum
from typing import Iterator

from .math import round_half_up


class PointKind(Enum):
    KNOT = "knot"
    HANDLE = "handle"


class IdAllocator:
    """
    Hands out point identifiers for one spline. Ids are never reused, even after
    the point they were given to is discarded.
    """

    def __init__(self, start: int = 0):
        self._counter = itertools.count(start)

    def next_id(self) -> int:
        return next(self._counter)


class Point:
    """
    Integer-rounded 2-D point with a stable identity.

    A bare Point is a handle: ``owner_id`` names the knot holding it and ``slot``
    says whether it is that knot's handler1 or handler2.
    """
    kind = PointKind.HANDLE

    def __init__(self, point_id: int, x: float, y: float):
        self.id = point_id
        self.x = x
        self.y = y
        self.active = False
        self.owner_id: int | None = None
        self.slot: int | None = None

    @property
    def x(self) -> int:
        return self._x

    @x.setter
    def x(self, value: float):
        self._x = round_half_up(value)

    @property
    def y(self) -> int:
        return self._y

    @y.setter
    def y(self, value: float):
        self._y = round_half_up(value)

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def is_handle(self) -> bool:
        return self.kind is PointKind.HANDLE

    def is_handler1(self) -> bool:
        return self.is_handle() and self.slot == 1

    def is_handler2(self) -> bool:
        return self.is_handle() and self.slot == 2

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"{type(self).__name__}(id={self.id}, x={self.x}, y={self.y})"


class Knot(Point):
    """
    Anchor point of the spline. Owns handler1 and, depending on the draw mode and
    its position in the spline, handler2.
    """
    kind = PointKind.KNOT

    def __init__(self, point_id: int, x: float, y: float, from_subdivision: bool = False):
        super().__init__(point_id, x, y)
        self._handler1: Point | None = None
        self._handler2: Point | None = None
        self.from_subdivision = from_subdivision

    @property
    def handler1(self) -> Point | None:
        return self._handler1

    @handler1.setter
    def handler1(self, point: Point | None):
        self._handler1 = self._adopt(point, 1)

    @property
    def handler2(self) -> Point | None:
        return self._handler2

    @handler2.setter
    def handler2(self, point: Point | None):
        self._handler2 = self._adopt(point, 2)

    def _adopt(self, point: Point | None, slot: int) -> Point | None:
        if point is not None:
            point.owner_id = self.id
            point.slot = slot
        return point

    @property
    def outgoing(self) -> Point:
        """Handle used as the first interior control point of the segment leaving this knot."""
        return self._handler2 or self._handler1

    def handles(self) -> Iterator[Point]:
        if self._handler1 is not None:
            yield self._handler1
        if self._handler2 is not None:
            yield self._handler2

    def opposite(self, handle: Point) -> Point | None:
        if handle.slot == 1:
            return self._handler2
        if handle.slot == 2:
            return self._handler1
        return None

    def translate(self, dx: float, dy: float) -> None:
        """Move the knot and keep its handles at the same offsets."""
        self.move_to(self.x + dx, self.y + dy)
        for h in self.handles():
            h.move_to(h.x + dx, h.y + dy)

    def to_dict(self) -> dict:
        data = {"x": self.x, "y": self.y, "hp1": self._handler1.to_dict()}
        if self._handler2 is not None:
            data["hp2"] = self._handler2.to_dict()
        return data
