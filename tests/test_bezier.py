"""Tests for curved connection control points."""

from conftest import BOTTOM, LEFT, RIGHT, TOP

from flowroute.bezier import control_point, cubic_segment, nudge_control_point
from flowroute.geometry import Point, Rect


def test_control_points_follow_port_axes():
    curve = cubic_segment(Point(0, 0), Point(200, 100), RIGHT, LEFT, curvature=0.5, extension=10)
    assert curve.control1 == (100, 0)
    assert curve.control2 == (100, 100)
    assert curve.end == (200, 100)
    assert curve.curvature == 0.5


def test_control_distance_never_below_extension():
    curve = cubic_segment(Point(0, 0), Point(10, 50), RIGHT, LEFT, curvature=0.5, extension=10)
    assert curve.control1 == (10, 0)
    assert curve.control2 == (0, 50)


def test_per_side_extensions():
    curve = cubic_segment(
        Point(0, 0), Point(10, 50), RIGHT, LEFT,
        curvature=0.5, extension=10, source_extension=30, target_extension=0,
    )
    assert curve.control1 == (30, 0)
    assert curve.control2 == (5, 50)


def test_vertical_ports():
    assert control_point(Point(0, 0), BOTTOM, Point(0, 100), 0.5, 10) == (0, 50)
    assert control_point(Point(0, 100), TOP, Point(0, 0), 0.5, 10) == (0, 50)


def test_nudge_pushes_control_out_of_node():
    node = Rect(0, -25, 100, 50)
    assert nudge_control_point(Point(105, 0), RIGHT, node, 10) == (110, 0)
    assert nudge_control_point(Point(150, 0), RIGHT, node, 10) == (150, 0)
    assert nudge_control_point(Point(-5, 0), LEFT, node, 10) == (-10, 0)
    assert nudge_control_point(Point(50, 30), BOTTOM, node, 10) == (50, 35)
    assert nudge_control_point(Point(50, -30), TOP, node, 10) == (50, -35)


def test_nudge_without_bounds_is_noop():
    assert nudge_control_point(Point(1, 2), RIGHT, None, 10) == (1, 2)
