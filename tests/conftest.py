"""Shared test fixtures and helpers for the flowroute test suite."""

from __future__ import annotations

import math

import pytest

from flowroute.geometry import Orientation, Point, Rect
from flowroute.models import RoutingParameters

RIGHT = Orientation.RIGHT
LEFT = Orientation.LEFT
TOP = Orientation.TOP
BOTTOM = Orientation.BOTTOM


# --- Parameter helpers ---


def make_params(start, end, source=RIGHT, target=LEFT, **kwargs) -> RoutingParameters:
    """RoutingParameters with the usual right -> left ports unless overridden."""
    return RoutingParameters(
        start=Point(*start),
        end=Point(*end),
        source_orientation=source,
        target_orientation=target,
        **kwargs,
    )


def assert_points_close(actual, expected, tol=1e-6):
    assert len(actual) == len(expected), f"{list(actual)} != {list(expected)}"
    for a, e in zip(actual, expected):
        assert math.isclose(a[0], e[0], abs_tol=tol) and math.isclose(
            a[1], e[1], abs_tol=tol
        ), f"{list(actual)} != {list(expected)}"


def assert_orthogonal(points, tol=0.01):
    """Every consecutive pair shares an x or a y coordinate."""
    for a, b in zip(points, points[1:]):
        assert abs(a[0] - b[0]) < tol or abs(a[1] - b[1]) < tol, f"{a} -> {b} is diagonal"


def chain_points(result):
    """Start point followed by every segment end."""
    return [result.start, *(s.end for s in result.segments)]


# --- Pytest fixtures ---


@pytest.fixture
def node_a() -> Rect:
    """A 100x50 node at the origin."""
    return Rect(0, 0, 100, 50)


@pytest.fixture
def node_b() -> Rect:
    """A 100x50 node to the right of node_a."""
    return Rect(300, 100, 100, 50)


@pytest.fixture
def forward_params(node_a, node_b) -> RoutingParameters:
    """Right port of node_a to left port of node_b."""
    return make_params(
        (100, 25),
        (300, 125),
        source_bounds=node_a,
        target_bounds=node_b,
    )
