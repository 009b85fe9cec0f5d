"""Hit-test rectangles for routed connections."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .geometry import Point, Rect
from .segments import MIN_HIT_LENGTH, Line, QuadraticCurve, axis_class, check_segment

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .segments import PathSegment


def hit_rects(
    start: tuple[float, float],
    segments: Iterable[PathSegment],
    tolerance: float,
) -> list[Rect]:
    """Cover a segment path with axis-aligned rectangles.

    Consecutive horizontal (or vertical) lines are merged into a single
    rectangle, so an orthogonal route with rounded corners yields one
    rectangle per leg. Legs next to a rounded corner (a curve with
    ``generates_hit_rects=False``) reach into the corner point, and corners
    wider than ``tolerance`` get a rectangle of their own. Every point
    within ``tolerance`` of a drawn segment lies inside at least one
    rectangle.

    Args:
        start: Path start point
        segments: Segments following the start point
        tolerance: Distance from the path that still counts as a hit

    Returns:
        List of rectangles
    """
    rects: list[Rect] = []
    current = Point(*start)

    run: list[Point] = []
    run_class: tuple[bool, bool] | None = None
    # Control point of the last suppressed corner; the next leg starts there
    corner: Point | None = None

    def flush() -> None:
        nonlocal run, run_class
        if run:
            rects.append(Rect.bounding(run).inflate(tolerance))
        run = []
        run_class = None

    for segment in segments:
        check_segment(segment)

        if isinstance(segment, QuadraticCurve) and not segment.generates_hit_rects:
            # Legs on both sides are extended to the corner point
            if not run and corner is not None:
                run = [corner]
            if run:
                run.append(segment.control)
            flush()

            hull = Rect.bounding((current, segment.control, segment.end))
            if max(hull.width, hull.height) > tolerance:
                rects.append(hull.inflate(tolerance))
            corner = segment.control
            current = segment.end
            continue

        if isinstance(segment, Line) and segment.generates_hit_rects:
            if current.distance_to(segment.end) < MIN_HIT_LENGTH:
                current = segment.end
                continue

            line_class = axis_class(current, segment.end)
            if line_class[0] or line_class[1]:
                if run and line_class == run_class:
                    run.append(segment.end)
                else:
                    flush()
                    run = [corner if corner is not None else current, segment.end]
                    run_class = line_class
                corner = None
                current = segment.end
                continue

        flush()
        corner = None
        rects.extend(segment.hit_rects(current, tolerance))
        current = segment.end

    flush()
    return rects


def contains_point(rects: Iterable[Rect], point: tuple[float, float]) -> bool:
    """True when any rectangle contains the point."""
    return any(rect.contains(point) for rect in rects)
