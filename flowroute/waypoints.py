"""Orthogonal waypoint calculation for port-to-port connections.

The calculator turns a RoutingParameters snapshot into an ordered list of
corner points. Every segment between consecutive waypoints is horizontal or
vertical, except when a free endpoint forces a direct approach.

Rules are tried in order and the first one that applies wins:
    1. self-connection: loop around the shared node
    2. collinear: straight line when nothing is in the way
    3. same side: go past both nodes on the shared side
    4. L-shape: a single corner
    5. opposite sides: S-bend or Z-bend, around the nodes when needed
    6. fallback: around the nodes on the target side, or through the midpoint
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from .geometry import Orientation, Point, Rect, union_bounds

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import RoutingParameters

logger = logging.getLogger(__name__)

# Points closer than this on one axis count as aligned on that axis
COLLINEAR_TOLERANCE = 1.0

# Axis tolerance used when removing redundant waypoints
OPTIMIZE_TOLERANCE = 0.5

# Below this start/end distance opposite ports always take the plain Z-bend
PROXIMITY_THRESHOLD = 100.0

Direction = Literal["above", "below", "left", "right"]

_SIDE_DIRECTIONS: dict[Orientation, Direction] = {
    Orientation.TOP: "above",
    Orientation.BOTTOM: "below",
    Orientation.LEFT: "left",
    Orientation.RIGHT: "right",
}


def extended_point(point: Point, orientation: Orientation, distance: float) -> Point:
    """Move a port position straight out along the direction it faces."""
    if orientation is Orientation.LEFT:
        return Point(point.x - distance, point.y)
    if orientation is Orientation.RIGHT:
        return Point(point.x + distance, point.y)
    if orientation is Orientation.TOP:
        return Point(point.x, point.y - distance)
    return Point(point.x, point.y + distance)


def is_self_connection(params: RoutingParameters) -> bool:
    """True when both ends sit on the same node."""
    return (
        params.source_bounds is not None
        and params.target_bounds is not None
        and params.source_bounds == params.target_bounds
    )


def needs_loopback_routing(params: RoutingParameters) -> bool:
    """Check whether a connection has to loop instead of going forward.

    That is the case for self-connections, for two ports facing the same way,
    and when the target lies behind the source port by more than its extension.
    """
    if is_self_connection(params):
        return True

    source = params.effective_source_orientation
    if source is params.effective_target_orientation:
        return True

    offset = params.effective_source_extension
    start, end = params.start, params.end
    if source is Orientation.RIGHT:
        return end.x < start.x - offset
    if source is Orientation.LEFT:
        return end.x > start.x + offset
    if source is Orientation.BOTTOM:
        return end.y < start.y - offset
    return end.y > start.y + offset


def calculate_waypoints(params: RoutingParameters) -> list[Point]:
    """Compute the waypoints of an orthogonal route.

    Args:
        params: Endpoints, orientations, node bounds and spacing

    Returns:
        At least two points, the first being params.start and the last
        params.end
    """
    start, end = params.start, params.end
    source = params.effective_source_orientation
    target = params.effective_target_orientation
    gap = params.obstacle_clearance

    ext_start = extended_point(start, source, params.effective_source_extension)
    ext_end = extended_point(end, target, params.effective_target_extension)
    bounds = union_bounds(params.source_bounds, params.target_bounds)

    if is_self_connection(params):
        direction = _self_connection_direction(
            params.source_bounds, source, target, ext_start, ext_end
        )
        logger.debug("Self-connection routed %s the node", direction)
        return route_around_bounds(
            start, end, ext_start, ext_end, params.source_bounds, direction, gap
        )

    if _is_collinear(start, ext_start, ext_end, end) and _is_path_clear(
        ext_start, ext_end, params.source_bounds, params.target_bounds
    ):
        logger.debug("Collinear ports, straight route")
        return [start, ext_start, ext_end, end]

    if source is target:
        logger.debug("Same-side ports (%s)", source.value)
        return _same_side_route(start, end, ext_start, ext_end, source, bounds, gap)

    l_shape = _l_shape_route(start, end, ext_start, ext_end, source, params)
    if l_shape is not None:
        logger.debug("L-shaped route")
        return l_shape

    if source.opposite is target:
        logger.debug("Opposite-facing ports (%s -> %s)", source.value, target.value)
        return _opposite_route(start, end, ext_start, ext_end, source, bounds, gap)

    logger.debug("Falling back to full routing")
    return _full_route(start, end, ext_start, ext_end, source, target, bounds, gap)


def route_around_bounds(
    start: Point,
    end: Point,
    ext_start: Point,
    ext_end: Point,
    bounds: Rect,
    direction: Direction,
    gap: float,
) -> list[Point]:
    """Six-point route passing ``gap`` beyond one edge of ``bounds``."""
    if direction == "above":
        route_y = bounds.top - gap
        return [start, ext_start, Point(ext_start.x, route_y), Point(ext_end.x, route_y), ext_end, end]
    if direction == "below":
        route_y = bounds.bottom + gap
        return [start, ext_start, Point(ext_start.x, route_y), Point(ext_end.x, route_y), ext_end, end]
    if direction == "left":
        route_x = bounds.left - gap
    else:
        route_x = bounds.right + gap
    return [start, ext_start, Point(route_x, ext_start.y), Point(route_x, ext_end.y), ext_end, end]


def _self_connection_direction(
    bounds: Rect,
    source: Orientation,
    target: Orientation,
    ext_start: Point,
    ext_end: Point,
) -> Direction:
    if source is target:
        return _SIDE_DIRECTIONS[source]

    center = bounds.center
    if source.is_horizontal and target.is_horizontal:
        if ext_start.y < center.y and ext_end.y < center.y:
            return "above"
        return "below"

    if source.is_vertical and target.is_vertical:
        if ext_start.x < center.x and ext_end.x < center.x:
            return "left"
        return "right"

    sides = (source, target)
    if Orientation.RIGHT in sides:
        return "right"
    if Orientation.LEFT in sides:
        return "left"
    if Orientation.BOTTOM in sides:
        return "below"
    return "above"


def _is_collinear(a: Point, b: Point, c: Point, d: Point) -> bool:
    xs = (a.x, b.x, c.x, d.x)
    ys = (a.y, b.y, c.y, d.y)
    return (
        max(xs) - min(xs) < COLLINEAR_TOLERANCE
        or max(ys) - min(ys) < COLLINEAR_TOLERANCE
    )


def _is_path_clear(p1: Point, p2: Point, *rects: Rect | None) -> bool:
    return not any(rect is not None and rect.intersects_segment(p1, p2) for rect in rects)


def _same_side_route(
    start: Point,
    end: Point,
    ext_start: Point,
    ext_end: Point,
    side: Orientation,
    bounds: Rect | None,
    gap: float,
) -> list[Point]:
    if bounds is not None:
        return route_around_bounds(start, end, ext_start, ext_end, bounds, _SIDE_DIRECTIONS[side], gap)

    # No nodes to clear: go past whichever extended point sticks out further
    if side is Orientation.RIGHT:
        route_x = max(ext_start.x, ext_end.x) + gap
    elif side is Orientation.LEFT:
        route_x = min(ext_start.x, ext_end.x) - gap
    elif side is Orientation.TOP:
        route_y = min(ext_start.y, ext_end.y) - gap
    else:
        route_y = max(ext_start.y, ext_end.y) + gap

    if side.is_horizontal:
        return [start, ext_start, Point(route_x, ext_start.y), Point(route_x, ext_end.y), ext_end, end]
    return [start, ext_start, Point(ext_start.x, route_y), Point(ext_end.x, route_y), ext_end, end]


def _l_shape_route(
    start: Point,
    end: Point,
    ext_start: Point,
    ext_end: Point,
    source: Orientation,
    params: RoutingParameters,
) -> list[Point] | None:
    if source.is_horizontal:
        corner = Point(ext_start.x, ext_end.y)
    else:
        corner = Point(ext_end.x, ext_start.y)

    for rect in (params.source_bounds, params.target_bounds):
        if rect is None:
            continue
        if rect.intersects_segment(ext_start, corner) or rect.intersects_segment(corner, ext_end):
            return None

    if source is Orientation.RIGHT:
        clear = ext_start.x <= ext_end.x
    elif source is Orientation.LEFT:
        clear = ext_start.x >= ext_end.x
    elif source is Orientation.BOTTOM:
        clear = ext_start.y <= ext_end.y
    else:
        clear = ext_start.y >= ext_end.y

    if not clear:
        return None
    return [start, ext_start, corner, ext_end, end]


def _opposite_route(
    start: Point,
    end: Point,
    ext_start: Point,
    ext_end: Point,
    source: Orientation,
    bounds: Rect | None,
    gap: float,
) -> list[Point]:
    mid_x = (ext_start.x + ext_end.x) / 2
    mid_y = (ext_start.y + ext_end.y) / 2

    if source.is_horizontal:
        if source is Orientation.RIGHT:
            facing = ext_start.x < ext_end.x
        else:
            facing = ext_start.x > ext_end.x
        if facing:
            # S-bend through the horizontal midpoint
            return [start, ext_start, Point(mid_x, ext_start.y), Point(mid_x, ext_end.y), ext_end, end]
        z_bend = [start, ext_start, Point(ext_start.x, mid_y), Point(ext_end.x, mid_y), ext_end, end]
    else:
        if source is Orientation.BOTTOM:
            facing = ext_start.y < ext_end.y
        else:
            facing = ext_start.y > ext_end.y
        if facing:
            return [start, ext_start, Point(ext_start.x, mid_y), Point(ext_end.x, mid_y), ext_end, end]
        z_bend = [start, ext_start, Point(mid_x, ext_start.y), Point(mid_x, ext_end.y), ext_end, end]

    # Close ports: the short Z-bend reads better than a detour around the nodes
    if start.distance_to(end) < PROXIMITY_THRESHOLD:
        return z_bend

    if bounds is None or not _waypoints_intersect_bounds(z_bend, bounds):
        return z_bend

    if source.is_horizontal:
        above_cost = _deviation(ext_start.y, ext_end.y, bounds.top - gap)
        below_cost = _deviation(ext_start.y, ext_end.y, bounds.bottom + gap)
        direction: Direction = "above" if above_cost <= below_cost else "below"
    else:
        left_cost = _deviation(ext_start.x, ext_end.x, bounds.left - gap)
        right_cost = _deviation(ext_start.x, ext_end.x, bounds.right + gap)
        direction = "left" if left_cost <= right_cost else "right"

    logger.debug("Z-bend blocked, routing %s the nodes", direction)
    return route_around_bounds(start, end, ext_start, ext_end, bounds, direction, gap)


def _deviation(a: float, b: float, c: float) -> float:
    return abs(a - c) + abs(b - c)


def _waypoints_intersect_bounds(points: list[Point], bounds: Rect) -> bool:
    """Check the middle segments (between the extended points) against bounds."""
    if len(points) < 4:
        return False
    return any(
        bounds.intersects_segment(points[i], points[i + 1])
        for i in range(1, len(points) - 2)
    )


def _full_route(
    start: Point,
    end: Point,
    ext_start: Point,
    ext_end: Point,
    source: Orientation,
    target: Orientation,
    bounds: Rect | None,
    gap: float,
) -> list[Point]:
    if bounds is not None:
        return route_around_bounds(
            start, end, ext_start, ext_end, bounds, _SIDE_DIRECTIONS[target], gap
        )

    if source.is_horizontal:
        mid_y = (ext_start.y + ext_end.y) / 2
        return [start, ext_start, Point(ext_start.x, mid_y), Point(ext_end.x, mid_y), ext_end, end]
    mid_x = (ext_start.x + ext_end.x) / 2
    return [start, ext_start, Point(mid_x, ext_start.y), Point(mid_x, ext_end.y), ext_end, end]


def optimize_waypoints(points: Sequence[Point]) -> Sequence[Point]:
    """Drop waypoints that sit on a straight run between their neighbours.

    A single pass compares each interior point with the last kept point and
    its successor. The first and last points are always kept. When nothing is
    removed the input object is returned unchanged.
    """
    if len(points) <= 2:
        return points

    result = [points[0]]
    for i in range(1, len(points) - 1):
        prev = result[-1]
        curr = points[i]
        nxt = points[i + 1]

        same_x = abs(prev[0] - curr[0]) < OPTIMIZE_TOLERANCE and abs(curr[0] - nxt[0]) < OPTIMIZE_TOLERANCE
        same_y = abs(prev[1] - curr[1]) < OPTIMIZE_TOLERANCE and abs(curr[1] - nxt[1]) < OPTIMIZE_TOLERANCE
        if same_x or same_y:
            continue
        result.append(curr)
    result.append(points[-1])

    if len(result) == len(points):
        return points
    return result
