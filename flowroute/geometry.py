"""Geometry primitives shared by the routing engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

# Tolerance used by the segment/segment intersection test
INTERSECTION_EPSILON = 0.0001


class Point(NamedTuple):
    """An immutable (x, y) coordinate.

    A NamedTuple so points compare equal to plain ``(x, y)`` tuples.
    """

    x: float
    y: float

    def distance_to(self, other: Point | tuple[float, float]) -> float:
        """Euclidean distance to another point."""
        return math.hypot(other[0] - self.x, other[1] - self.y)

    def translate(self, dx: float, dy: float) -> Point:
        """Return a copy moved by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)


class Orientation(Enum):
    """The direction a port faces."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"

    @property
    def opposite(self) -> Orientation:
        return _OPPOSITES[self]

    @property
    def is_horizontal(self) -> bool:
        return self in (Orientation.LEFT, Orientation.RIGHT)

    @property
    def is_vertical(self) -> bool:
        return self in (Orientation.TOP, Orientation.BOTTOM)

    @classmethod
    def parse(cls, value: str | Orientation) -> Orientation:
        """Convert a side name ("left", "right", "top", "bottom") to an Orientation."""
        if isinstance(value, Orientation):
            return value
        try:
            return cls(value.lower())
        except ValueError:
            raise ValueError(
                f"Invalid orientation '{value}', must be 'left', 'right', 'top' or 'bottom'"
            ) from None


_OPPOSITES = {
    Orientation.LEFT: Orientation.RIGHT,
    Orientation.RIGHT: Orientation.LEFT,
    Orientation.TOP: Orientation.BOTTOM,
    Orientation.BOTTOM: Orientation.TOP,
}


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle (left, top, width, height)."""

    left: float
    top: float
    width: float
    height: float

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> Rect:
        return cls(left, top, right - left, bottom - top)

    @classmethod
    def from_center(cls, center: tuple[float, float], width: float, height: float) -> Rect:
        return cls(center[0] - width / 2, center[1] - height / 2, width, height)

    @classmethod
    def bounding(cls, points: list[Point] | tuple[Point, ...]) -> Rect:
        """Smallest rectangle containing all points (at least one required)."""
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return cls.from_ltrb(min(xs), min(ys), max(xs), max(ys))

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Point:
        return Point(self.left + self.width / 2, self.top + self.height / 2)

    @property
    def top_left(self) -> Point:
        return Point(self.left, self.top)

    @property
    def top_right(self) -> Point:
        return Point(self.right, self.top)

    @property
    def bottom_left(self) -> Point:
        return Point(self.left, self.bottom)

    @property
    def bottom_right(self) -> Point:
        return Point(self.right, self.bottom)

    def contains(self, point: tuple[float, float]) -> bool:
        """Half-open containment: left/top edges are inside, right/bottom are not."""
        x, y = point
        return self.left <= x < self.right and self.top <= y < self.bottom

    def intersects(self, other: Rect) -> bool:
        """True when the rectangles overlap with a non-zero area."""
        return (
            self.left < other.right
            and other.left < self.right
            and self.top < other.bottom
            and other.top < self.bottom
        )

    def union(self, other: Rect) -> Rect:
        """The smallest rectangle containing both rectangles."""
        return Rect.from_ltrb(
            min(self.left, other.left),
            min(self.top, other.top),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )

    def inflate(self, delta: float) -> Rect:
        """Grow the rectangle by delta on every side."""
        return Rect.from_ltrb(
            self.left - delta,
            self.top - delta,
            self.right + delta,
            self.bottom + delta,
        )

    def intersects_segment(self, p1: tuple[float, float], p2: tuple[float, float]) -> bool:
        """Check whether the segment p1-p2 touches or crosses this rectangle."""
        if self.contains(p1) or self.contains(p2):
            return True

        return (
            segments_intersect(p1, p2, self.top_left, self.top_right)
            or segments_intersect(p1, p2, self.top_right, self.bottom_right)
            or segments_intersect(p1, p2, self.bottom_right, self.bottom_left)
            or segments_intersect(p1, p2, self.bottom_left, self.top_left)
        )


def union_bounds(a: Rect | None, b: Rect | None) -> Rect | None:
    """Union of two optional rectangles (None when both are missing)."""
    if a is None:
        return b
    if b is None:
        return a
    return a.union(b)


def _cross(a: tuple[float, float], b: tuple[float, float], c: tuple[float, float]) -> float:
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def _on_segment(a: tuple[float, float], b: tuple[float, float], p: tuple[float, float]) -> bool:
    return (
        min(a[0], b[0]) <= p[0] <= max(a[0], b[0])
        and min(a[1], b[1]) <= p[1] <= max(a[1], b[1])
    )


def segments_intersect(
    p1: tuple[float, float],
    p2: tuple[float, float],
    p3: tuple[float, float],
    p4: tuple[float, float],
) -> bool:
    """Check whether segment p1-p2 intersects segment p3-p4 (touching counts)."""
    d1 = _cross(p3, p4, p1)
    d2 = _cross(p3, p4, p2)
    d3 = _cross(p1, p2, p3)
    d4 = _cross(p1, p2, p4)

    if ((d1 > 0 > d2) or (d1 < 0 < d2)) and ((d3 > 0 > d4) or (d3 < 0 < d4)):
        return True

    # Collinear / touching cases
    if abs(d1) < INTERSECTION_EPSILON and _on_segment(p3, p4, p1):
        return True
    if abs(d2) < INTERSECTION_EPSILON and _on_segment(p3, p4, p2):
        return True
    if abs(d3) < INTERSECTION_EPSILON and _on_segment(p1, p2, p3):
        return True
    if abs(d4) < INTERSECTION_EPSILON and _on_segment(p1, p2, p4):
        return True

    return False
