"""Tests for routing through user control points."""

from conftest import LEFT, RIGHT, assert_orthogonal, make_params

from flowroute.geometry import Point
from flowroute.orthogonal import reconcile
from flowroute.waypoints import calculate_waypoints, optimize_waypoints


def _params(end=(200, 100)):
    return make_params((0, 0), end, RIGHT, LEFT)


def test_no_control_points_uses_automatic_routing():
    params = _params()
    expected = optimize_waypoints(calculate_waypoints(params))
    assert reconcile([], params) == expected


def test_endpoints_only_uses_automatic_routing():
    params = _params()
    expected = optimize_waypoints(calculate_waypoints(params))
    assert reconcile([(0, 0), (200, 100)], params) == expected


def test_single_control_point():
    assert reconcile([(100, 50)], _params()) == [
        (0, 0), (100, 0), (100, 50), (200, 50), (200, 100),
    ]


def test_control_point_equal_to_start_is_not_duplicated():
    assert reconcile([(0, 0), (100, 50)], _params()) == reconcile([(100, 50)], _params())


def test_control_point_equal_to_end_is_not_duplicated():
    assert reconcile([(100, 50), (200, 100)], _params()) == reconcile([(100, 50)], _params())


def test_hops_alternate_direction():
    points = reconcile([(100, 50), (150, 80)], _params())
    # Second control point is approached vertically first, then the
    # optimizer folds the straight runs
    assert points == [(0, 0), (100, 0), (100, 80), (200, 80), (200, 100)]


def test_final_hop_tie_uses_the_other_axis():
    # After one horizontal-first hop, an equal dx/dy remainder goes horizontal
    assert reconcile([(100, 50)], _params(end=(150, 100))) == [
        (0, 0), (100, 0), (100, 50), (150, 50), (150, 100),
    ]


def test_final_hop_prefers_larger_delta():
    # After two hops horizontal is preferred again; dy dominates here
    points = reconcile([(100, 50), (120, 60)], _params(end=(130, 200)))
    assert points[-2] == (120, 200)
    assert points[-1] == (130, 200)


def test_result_is_orthogonal_and_keeps_endpoints():
    params = _params(end=(400, -50))
    points = reconcile([(50, 300), (120, -80), (260, 10)], params)
    assert points[0] == params.start
    assert points[-1] == params.end
    assert_orthogonal(points)
    assert all(isinstance(p, Point) for p in points)
