"""Tests for derived path views and the connection path cache."""

import pytest
from conftest import make_params

from flowroute.geometry import Point, Rect
from flowroute.models import RoutingResult
from flowroute.paths import (
    ConnectionPathCache,
    RoutedConnection,
    extract_bend_points,
    path_center,
    point_along,
)
from flowroute.segments import CubicCurve, Line
from flowroute.styles import BezierStyle, SmoothStepStyle, StepStyle


def test_extract_bend_points():
    result = RoutingResult(start=Point(0, 0), segments=[Line(Point(10, 0)), Line(Point(10, 20))])
    assert extract_bend_points(result) == [(0, 0), (10, 0), (10, 20)]


def test_extract_bend_points_empty_result():
    assert extract_bend_points(RoutingResult(start=Point(3, 4))) == [(3, 4)]


def test_path_center_straight_line():
    result = RoutingResult(start=Point(0, 0), segments=[Line(Point(100, 0))])
    assert path_center(result) == (50, 0)


def test_path_center_uses_arc_length():
    result = RoutingResult(
        start=Point(0, 0), segments=[Line(Point(100, 0)), Line(Point(100, 100))]
    )
    assert path_center(result) == (100, 0)


def test_point_along_ends_and_clamping():
    result = RoutingResult(start=Point(0, 0), segments=[Line(Point(100, 0))])
    assert point_along(result, 0) == (0, 0)
    assert point_along(result, 1) == (100, 0)
    assert point_along(result, 1.5) == (100, 0)
    assert point_along(result, 0.25) == (25, 0)


def test_point_along_zero_length_path():
    result = RoutingResult(start=Point(5, 5), segments=[Line(Point(5, 5))])
    assert point_along(result, 0.5) == (5, 5)


def test_curved_path_center():
    # Point-symmetric around (100, 50)
    curve = CubicCurve(Point(100, 0), Point(100, 100), Point(200, 100))
    center = path_center(RoutingResult(start=Point(0, 0), segments=[curve]))
    assert center.x == pytest.approx(100, abs=1)
    assert center.y == pytest.approx(50, abs=1)


# --- RoutedConnection ---


@pytest.fixture
def routed():
    return RoutedConnection.route(make_params((0, 0), (200, 100)), StepStyle())


def test_routed_connection_caches_derived_views(routed):
    assert routed.hit_rects is routed.hit_rects
    assert routed.bend_points is routed.bend_points
    assert routed.path is routed.path
    assert routed.bend_points == [(0, 0), (10, 0), (10, 100), (200, 100)]


def test_routed_connection_hit_test(routed):
    assert routed.hit_test((5, 3))
    assert routed.hit_test((100, 104))
    assert not routed.hit_test((100, 30))


def test_routed_connection_custom_tolerance():
    connection = RoutedConnection.route(make_params((0, 0), (200, 100)), StepStyle(), hit_tolerance=2)
    assert connection.hit_test((100, 101))
    assert not connection.hit_test((100, 104))


def test_routed_connection_center(routed):
    # Total length 10 + 100 + 190 = 300, halfway is 40 units into the last leg
    assert routed.center == pytest.approx((50, 100))


# --- ConnectionPathCache ---


def test_cache_reuses_unchanged_connection():
    cache = ConnectionPathCache()
    params = make_params((0, 0), (200, 100))
    first = cache.get("c1", params, "smoothstep")
    assert cache.get("c1", params, "smoothstep") is first
    assert cache.get("c1", make_params((0, 0), (200, 100)), SmoothStepStyle()) is first


def test_cache_recomputes_when_params_change():
    cache = ConnectionPathCache()
    params = make_params((0, 0), (200, 100))
    first = cache.get("c1", params)
    second = cache.get("c1", params.with_changes(end=Point(250, 100)))
    assert second is not first
    assert second.result.end == (250, 100)


def test_cache_recomputes_when_style_changes():
    cache = ConnectionPathCache()
    params = make_params((0, 0), (200, 100))
    first = cache.get("c1", params, "smoothstep")
    second = cache.get("c1", params, BezierStyle())
    assert second is not first
    assert isinstance(second.result.segments[0], CubicCurve)


def test_cache_invalidate():
    cache = ConnectionPathCache()
    params = make_params((0, 0), (200, 100))
    first = cache.get("c1", params)
    cache.get("c2", params)
    cache.invalidate("c1")
    assert "c1" not in cache
    assert "c2" in cache
    assert cache.get("c1", params) is not first
    cache.invalidate("missing")

    cache.invalidate_all()
    assert len(cache) == 0


def test_cache_hit_test():
    cache = ConnectionPathCache()
    cache.get("upper", make_params((0, 0), (200, 0)))
    cache.get("lower", make_params((0, 300), (200, 300)))
    assert cache.hit_test((100, 2)) == "upper"
    assert cache.hit_test((100, 298)) == "lower"
    assert cache.hit_test((100, 150)) is None
    assert set(cache.connections()) == {"upper", "lower"}


def test_cache_intersects_marquee():
    cache = ConnectionPathCache()
    cache.get("upper", make_params((0, 0), (200, 0)))
    assert cache.intersects("upper", Rect(50, -20, 10, 15))
    assert not cache.intersects("upper", Rect(50, 20, 10, 10))
    assert not cache.intersects("missing", Rect(50, -20, 10, 15))
