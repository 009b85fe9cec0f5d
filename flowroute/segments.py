"""Path segment primitives.

A routed connection is a start point followed by a list of segments. Each
segment draws from the previous segment's end (or the start point) to its own
``end`` and knows how to cover itself with hit-test rectangles.

Segment kinds:
    Line            straight line to ``end``
    QuadraticCurve  one control point, used for rounded corners
    CubicCurve      two control points, used by the curved style
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .geometry import Point, Rect

# Hit rectangles are kept within tolerance * this factor across the path
HIT_SIZE_MULTIPLIER = 3.0

# Lines shorter than this produce no hit geometry
MIN_HIT_LENGTH = 0.1

# A line counts as horizontal/vertical when the other delta is below this
AXIS_TOLERANCE = 0.5


def max_hit_size(tolerance: float) -> float:
    """Maximum extent across the path for one hit rectangle."""
    return tolerance * HIT_SIZE_MULTIPLIER


def axis_class(start: tuple[float, float], end: tuple[float, float]) -> tuple[bool, bool]:
    """Return (is_horizontal, is_vertical) for the vector start -> end."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    return abs(dy) < AXIS_TOLERANCE, abs(dx) < AXIS_TOLERANCE


@dataclass(frozen=True)
class Line:
    """A straight line from the current point to ``end``."""

    end: Point
    generates_hit_rects: bool = True

    def hit_rects(self, start: Point, tolerance: float) -> list[Rect]:
        if not self.generates_hit_rects:
            return []

        dx = self.end.x - start.x
        dy = self.end.y - start.y
        length = math.hypot(dx, dy)
        if length < MIN_HIT_LENGTH:
            return []

        is_horizontal, is_vertical = axis_class(start, self.end)
        if is_horizontal or is_vertical:
            return [Rect.bounding((start, self.end)).inflate(tolerance)]

        # Diagonal: the box grows with length * min(|sin|, |cos|), so split it
        # into pieces that stay within the maximum hit size across the line.
        min_trig = min(abs(dx), abs(dy)) / length
        perp_expansion = length * min_trig + 2 * tolerance
        limit = max_hit_size(tolerance)
        count = 1 if perp_expansion <= limit else math.ceil(perp_expansion / limit)

        rects = []
        for i in range(count):
            p1 = Point(start.x + dx * i / count, start.y + dy * i / count)
            p2 = Point(start.x + dx * (i + 1) / count, start.y + dy * (i + 1) / count)
            rects.append(Rect.bounding((p1, p2)).inflate(tolerance))
        return rects

    def point_at(self, start: Point, t: float) -> Point:
        return Point(start.x + (self.end.x - start.x) * t, start.y + (self.end.y - start.y) * t)


@dataclass(frozen=True)
class QuadraticCurve:
    """A quadratic Bezier from the current point through ``control`` to ``end``."""

    control: Point
    end: Point
    generates_hit_rects: bool = True

    def hit_rects(self, start: Point, tolerance: float) -> list[Rect]:
        if not self.generates_hit_rects:
            return []
        # Rounded corners are small, the control triangle bounds are enough
        return [Rect.bounding((start, self.control, self.end)).inflate(tolerance)]

    def point_at(self, start: Point, t: float) -> Point:
        mt = 1 - t
        return Point(
            mt * mt * start.x + 2 * mt * t * self.control.x + t * t * self.end.x,
            mt * mt * start.y + 2 * mt * t * self.control.y + t * t * self.end.y,
        )


@dataclass(frozen=True)
class CubicCurve:
    """A cubic Bezier from the current point to ``end``.

    ``curvature`` records the factor the control points were derived with;
    sharper curves get more hit rectangles.
    """

    control1: Point
    control2: Point
    end: Point
    curvature: float = 0.5
    generates_hit_rects: bool = True

    def hit_rects(self, start: Point, tolerance: float) -> list[Rect]:
        """Cover the curve with the control-polygon bounds of its sub-curves.

        A Bezier curve lies inside the convex hull of its control points, so
        each inflated sub-curve box contains every point within ``tolerance``
        of that piece.
        """
        if not self.generates_hit_rects:
            return []

        hull = Rect.bounding((start, self.control1, self.control2, self.end))
        limit = max_hit_size(tolerance)

        chord_dx = self.end.x - start.x
        chord_dy = self.end.y - start.y
        chord_length = math.hypot(chord_dx, chord_dy)

        if chord_length < MIN_HIT_LENGTH or (hull.width < limit and hull.height < limit):
            return [hull.inflate(tolerance)]

        count = self._piece_count(start, chord_dx, chord_dy, chord_length, tolerance)

        rects = []
        for i in range(count):
            piece = self._sub_curve(start, i / count, (i + 1) / count)
            rects.append(Rect.bounding(piece).inflate(tolerance))
        return rects

    def _piece_count(
        self,
        start: Point,
        chord_dx: float,
        chord_dy: float,
        chord_length: float,
        tolerance: float,
    ) -> int:
        limit = max_hit_size(tolerance)

        # How far the control points bulge away from the chord
        perp_x = -chord_dy / chord_length
        perp_y = chord_dx / chord_length
        deviation = max(
            abs((self.control1.x - start.x) * perp_x + (self.control1.y - start.y) * perp_y),
            abs((self.control2.x - start.x) * perp_x + (self.control2.y - start.y) * perp_y),
        )

        # Diagonal chords need length-based splitting, axis-aligned ones do not
        min_trig = min(abs(chord_dx), abs(chord_dy)) / chord_length
        chord_expansion = chord_length * min_trig + 2 * tolerance

        length_count = math.ceil(chord_expansion / limit) if chord_expansion > limit else 1
        deviation_count = max(2, math.ceil(deviation / (limit / 2))) if deviation > 0 else 1
        curvature_count = max(1, math.ceil(self.curvature * 3))

        return max(curvature_count, length_count, deviation_count)

    def _sub_curve(self, start: Point, t0: float, t1: float) -> tuple[Point, Point, Point, Point]:
        """Control points of the piece of this curve between t0 and t1."""
        points = (start, self.control1, self.control2, self.end)
        if t1 < 1:
            points, _ = _split_cubic(points, t1)
        if t0 > 0:
            _, points = _split_cubic(points, t0 / t1)
        return points

    def point_at(self, start: Point, t: float) -> Point:
        mt = 1 - t
        a = mt * mt * mt
        b = 3 * mt * mt * t
        c = 3 * mt * t * t
        d = t * t * t
        return Point(
            a * start.x + b * self.control1.x + c * self.control2.x + d * self.end.x,
            a * start.y + b * self.control1.y + c * self.control2.y + d * self.end.y,
        )


def _lerp(a: Point, b: Point, t: float) -> Point:
    return Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def _split_cubic(
    points: tuple[Point, Point, Point, Point], t: float
) -> tuple[tuple[Point, Point, Point, Point], tuple[Point, Point, Point, Point]]:
    """De Casteljau split of a cubic at parameter t."""
    p0, p1, p2, p3 = points
    p01 = _lerp(p0, p1, t)
    p12 = _lerp(p1, p2, t)
    p23 = _lerp(p2, p3, t)
    p012 = _lerp(p01, p12, t)
    p123 = _lerp(p12, p23, t)
    mid = _lerp(p012, p123, t)
    return (p0, p01, p012, mid), (mid, p123, p23, p3)


PathSegment = Union[Line, QuadraticCurve, CubicCurve]

SEGMENT_TYPES = (Line, QuadraticCurve, CubicCurve)


def check_segment(segment: object) -> PathSegment:
    """Raise TypeError for anything that is not a known segment kind."""
    if not isinstance(segment, SEGMENT_TYPES):
        raise TypeError(f"Unsupported path segment: {segment!r}")
    return segment
