"""Turn waypoints into drawable segments with rounded corners."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .geometry import Point
from .segments import Line, PathSegment, QuadraticCurve

if TYPE_CHECKING:
    from collections.abc import Sequence

# Vectors shorter than this are treated as zero-length
MIN_VECTOR_LENGTH = 0.01

# Corners with a usable radius below this are drawn sharp
MIN_CORNER_RADIUS = 1.0


def waypoints_to_segments(
    points: Sequence[tuple[float, float]],
    corner_radius: float = 0.0,
) -> list[PathSegment]:
    """Convert waypoints to line segments with rounded right-angle corners.

    Each corner is rounded with a quadratic curve whose control point is the
    corner itself. The radius is clamped to half of both adjacent legs so
    neighbouring corners never overlap.

    Args:
        points: Waypoints, first one being the path start
        corner_radius: Requested radius, 0 for sharp corners

    Returns:
        Segments to draw after moving to points[0]
    """
    if len(points) < 2:
        return []

    points = [Point(*p) for p in points]
    if corner_radius <= 0 or len(points) < 3:
        return [Line(p) for p in points[1:]]

    segments: list[PathSegment] = []

    for i in range(1, len(points) - 1):
        prev = points[0] if i == 1 else segments[-1].end
        curr = points[i]
        nxt = points[i + 1]

        in_x, in_y = curr.x - prev.x, curr.y - prev.y
        out_x, out_y = nxt.x - curr.x, nxt.y - curr.y
        in_length = math.hypot(in_x, in_y)
        out_length = math.hypot(out_x, out_y)

        if in_length < MIN_VECTOR_LENGTH or out_length < MIN_VECTOR_LENGTH:
            segments.append(Line(curr))
            continue

        in_horizontal = abs(in_y) < MIN_VECTOR_LENGTH
        in_vertical = abs(in_x) < MIN_VECTOR_LENGTH
        out_horizontal = abs(out_y) < MIN_VECTOR_LENGTH
        out_vertical = abs(out_x) < MIN_VECTOR_LENGTH
        is_corner = (in_horizontal and out_vertical) or (in_vertical and out_horizontal)

        radius = min(corner_radius, in_length / 2, out_length / 2)
        if not is_corner or radius < MIN_CORNER_RADIUS:
            segments.append(Line(curr))
            continue

        in_dir = (in_x / in_length, in_y / in_length)
        out_dir = (out_x / out_length, out_y / out_length)
        arc_start = Point(curr.x - in_dir[0] * radius, curr.y - in_dir[1] * radius)
        arc_end = Point(curr.x + out_dir[0] * radius, curr.y + out_dir[1] * radius)

        segments.append(Line(arc_start))
        # Hit geometry for the corner comes from its legs in hit_rects
        segments.append(QuadraticCurve(control=curr, end=arc_end, generates_hit_rects=False))

    segments.append(Line(points[-1]))
    return segments
