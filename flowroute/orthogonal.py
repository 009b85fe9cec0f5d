"""Orthogonal routing through user-placed control points."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .geometry import Point
from .waypoints import calculate_waypoints, optimize_waypoints

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import RoutingParameters

logger = logging.getLogger(__name__)


def reconcile(
    control_points: Sequence[tuple[float, float]],
    params: RoutingParameters,
) -> list[Point]:
    """Build an orthogonal route that passes through the given control points.

    Every control point is reached with two axis-aligned hops. Hops alternate
    between horizontal-first and vertical-first so consecutive control points
    do not fold back onto each other.

    Args:
        control_points: User-placed points, optionally including the endpoints
        params: Routing parameters providing start and end

    Returns:
        Optimized waypoints from params.start to params.end
    """
    start, end = params.start, params.end
    interior = [Point(*p) for p in control_points]

    if not interior or interior == [start, end]:
        logger.debug("No user control points, using automatic routing")
        return list(optimize_waypoints(calculate_waypoints(params)))

    if interior and interior[0] == start:
        interior = interior[1:]
    if interior and interior[-1] == end:
        interior = interior[:-1]

    chain = [start, *interior, end]
    result = [start]
    horizontal_first = True

    for target in chain[1:-1]:
        current = result[-1]
        if horizontal_first:
            result.append(Point(target.x, current.y))
        else:
            result.append(Point(current.x, target.y))
        result.append(target)
        horizontal_first = not horizontal_first

    prev = result[-1]
    dx = abs(end.x - prev.x)
    dy = abs(end.y - prev.y)
    if horizontal_first:
        horizontal = dx > dy
    else:
        horizontal = not dy > dx
    if horizontal:
        result.append(Point(end.x, prev.y))
    else:
        result.append(Point(prev.x, end.y))
    result.append(end)

    return list(optimize_waypoints(result))
