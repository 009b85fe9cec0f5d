"""Views derived from a routed connection, plus a caller-owned path cache."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

from .geometry import Point
from .hittest import contains_point
from .segments import Line, check_segment

if TYPE_CHECKING:
    import drawsvg as draw

    from .geometry import Rect
    from .models import RoutingParameters, RoutingResult
    from .styles import ConnectionStyle

logger = logging.getLogger(__name__)

# Samples taken along each curved segment when measuring arc length
CURVE_SAMPLES = 10


def extract_bend_points(result: RoutingResult) -> list[Point]:
    """Start point followed by the end point of every segment."""
    return [result.start, *(segment.end for segment in result.segments)]


def sample_points(result: RoutingResult, samples_per_curve: int = CURVE_SAMPLES) -> list[Point]:
    """Approximate the drawn path with a polyline."""
    points = [result.start]
    current = result.start
    for segment in result.segments:
        check_segment(segment)
        if isinstance(segment, Line):
            points.append(segment.end)
        else:
            for i in range(1, samples_per_curve + 1):
                points.append(segment.point_at(current, i / samples_per_curve))
        current = segment.end
    return points


def point_along(result: RoutingResult, fraction: float) -> Point:
    """Point at ``fraction`` (0..1) of the path's arc length.

    Args:
        result: Routed connection
        fraction: Position along the path, clamped to [0, 1]

    Returns:
        (x, y) coordinates on the path
    """
    fraction = min(max(fraction, 0.0), 1.0)
    points = sample_points(result)
    if len(points) < 2:
        return points[0]

    # Calculate cumulative arc lengths
    arc_lengths = [0.0]
    for i in range(1, len(points)):
        segment_length = math.hypot(points[i].x - points[i - 1].x, points[i].y - points[i - 1].y)
        arc_lengths.append(arc_lengths[-1] + segment_length)

    total_length = arc_lengths[-1]
    if total_length == 0:
        return points[0]

    target_length = total_length * fraction

    for i in range(1, len(arc_lengths)):
        if arc_lengths[i] >= target_length:
            segment_start = arc_lengths[i - 1]
            segment_length = arc_lengths[i] - segment_start
            if segment_length == 0:
                return points[i - 1]

            t = (target_length - segment_start) / segment_length
            return Point(
                points[i - 1].x + t * (points[i].x - points[i - 1].x),
                points[i - 1].y + t * (points[i].y - points[i - 1].y),
            )

    return points[-1]


def path_center(result: RoutingResult) -> Point:
    """Midpoint of the path by arc length, e.g. for placing a label."""
    return point_along(result, 0.5)


class RoutedConnection:
    """One routing result together with everything derived from it.

    The drawable path, hit rectangles and bend points are computed lazily
    from the same result, so they can never disagree.
    """

    def __init__(
        self,
        result: RoutingResult,
        style: ConnectionStyle,
        params: RoutingParameters | None = None,
        hit_tolerance: float | None = None,
    ):
        self.result = result
        self.style = style
        self.params = params
        self.hit_tolerance = style.default_hit_tolerance if hit_tolerance is None else hit_tolerance

    @classmethod
    def route(
        cls,
        params: RoutingParameters,
        style: ConnectionStyle,
        hit_tolerance: float | None = None,
    ) -> RoutedConnection:
        return cls(style.create_segments(params), style, params, hit_tolerance)

    @cached_property
    def path(self) -> draw.Path:
        return self.style.build_path(self.result)

    @cached_property
    def hit_rects(self) -> list[Rect]:
        return self.style.build_hit_rects(self.result, self.hit_tolerance)

    @cached_property
    def bend_points(self) -> list[Point]:
        return self.style.extract_bend_points(self.result)

    @property
    def center(self) -> Point:
        return path_center(self.result)

    def hit_test(self, point: tuple[float, float]) -> bool:
        return contains_point(self.hit_rects, point)

    def intersects(self, rect: Rect) -> bool:
        """True when any hit rectangle overlaps ``rect``, e.g. a selection marquee."""
        return any(hit.intersects(rect) for hit in self.hit_rects)

    def __repr__(self) -> str:
        return f"RoutedConnection(style={self.style.id!r}, segments={len(self.result.segments)})"


@dataclass
class _CacheEntry:
    params: RoutingParameters
    style: ConnectionStyle
    connection: RoutedConnection


class ConnectionPathCache:
    """Caller-owned memo of routed connections keyed by connection id.

    A connection is re-routed only when its parameters or style differ from
    the cached entry. Nothing is invalidated automatically.

    Args:
        hit_tolerance: Hit tolerance for cached connections, or None for each
            style's default
    """

    def __init__(self, hit_tolerance: float | None = None):
        self.hit_tolerance = hit_tolerance
        self._entries: dict[str, _CacheEntry] = {}

    def get(
        self,
        connection_id: str,
        params: RoutingParameters,
        style: ConnectionStyle | str | None = None,
    ) -> RoutedConnection:
        """Return the cached connection, routing it again if its inputs changed."""
        from .styles import get_style

        style = get_style(style)
        entry = self._entries.get(connection_id)
        if entry is not None and entry.params == params and entry.style == style:
            return entry.connection

        logger.debug("Routing connection %s with style %s", connection_id, style.id)
        connection = RoutedConnection.route(params, style, self.hit_tolerance)
        self._entries.pop(connection_id, None)
        self._entries[connection_id] = _CacheEntry(params, style, connection)
        return connection

    def invalidate(self, connection_id: str) -> None:
        self._entries.pop(connection_id, None)

    def invalidate_all(self) -> None:
        self._entries.clear()

    def hit_test(self, point: tuple[float, float]) -> str | None:
        """Id of the most recently routed cached connection under the point."""
        for connection_id in reversed(list(self._entries)):
            if self._entries[connection_id].connection.hit_test(point):
                return connection_id
        return None

    def intersects(self, connection_id: str, rect: Rect) -> bool:
        """Check a cached connection against a rectangle (False when not cached)."""
        entry = self._entries.get(connection_id)
        return entry is not None and entry.connection.intersects(rect)

    def connections(self) -> dict[str, RoutedConnection]:
        return {key: entry.connection for key, entry in self._entries.items()}

    def __contains__(self, connection_id: str) -> bool:
        return connection_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
