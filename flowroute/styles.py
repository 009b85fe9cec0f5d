"""Connection styles and the style registry.

A style turns RoutingParameters into a RoutingResult. Everything else a
consumer needs (the drawable path, hit rectangles, bend points) is derived
from that one result, so the three always agree.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .bezier import cubic_segment, nudge_control_point
from .hittest import hit_rects
from .models import RoutingResult
from .orthogonal import reconcile
from .paths import extract_bend_points
from .renderer import build_path
from .segments import CubicCurve, Line
from .synthesis import waypoints_to_segments
from .waypoints import (
    calculate_waypoints,
    extended_point,
    needs_loopback_routing,
    optimize_waypoints,
)

if TYPE_CHECKING:
    import drawsvg as draw

    from .geometry import Point, Rect
    from .models import RoutingParameters

logger = logging.getLogger(__name__)


class ConnectionStyle(ABC):
    """Base class for connection styles."""

    id: str = ""
    display_name: str = ""
    default_hit_tolerance: float = 8.0

    @abstractmethod
    def create_segments(self, params: RoutingParameters) -> RoutingResult:
        """Route one connection."""

    def build_path(self, result: RoutingResult, **attrs) -> draw.Path:
        """Drawable SVG path for a routed connection."""
        return build_path(result.start, result.segments, **attrs)

    def build_hit_rects(self, result: RoutingResult, tolerance: float | None = None) -> list[Rect]:
        if tolerance is None:
            tolerance = self.default_hit_tolerance
        return hit_rects(result.start, result.segments, tolerance)

    def extract_bend_points(self, result: RoutingResult) -> list[Point]:
        return extract_bend_points(result)

    # Styles with the same type and settings route identically
    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and vars(other) == vars(self)

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(vars(self).items()))))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


def _orthogonal_result(params: RoutingParameters, corner_radius: float) -> RoutingResult:
    points = optimize_waypoints(calculate_waypoints(params))
    return RoutingResult(start=params.start, segments=waypoints_to_segments(points, corner_radius))


class SmoothStepStyle(ConnectionStyle):
    """Orthogonal routing with rounded corners.

    Args:
        corner_radius: Fixed corner radius, or None to use the radius from the
            routing parameters
    """

    id = "smoothstep"
    display_name = "Smooth Step"

    def __init__(self, corner_radius: float | None = None):
        self.corner_radius = corner_radius

    def create_segments(self, params: RoutingParameters) -> RoutingResult:
        radius = params.corner_radius if self.corner_radius is None else self.corner_radius
        return _orthogonal_result(params, radius)


class StepStyle(SmoothStepStyle):
    """Orthogonal routing with sharp corners."""

    id = "step"
    display_name = "Step"

    def __init__(self):
        super().__init__(corner_radius=0.0)


class StraightStyle(ConnectionStyle):
    """Straight line between the two extended port positions.

    Connections that would have to double back use orthogonal routing.
    """

    id = "straight"
    display_name = "Straight"

    def create_segments(self, params: RoutingParameters) -> RoutingResult:
        if needs_loopback_routing(params):
            logger.debug("Straight connection needs loopback, using orthogonal routing")
            return _orthogonal_result(params, params.corner_radius)

        ext_start = extended_point(
            params.start, params.effective_source_orientation, params.effective_source_extension
        )
        ext_end = extended_point(
            params.end, params.effective_target_orientation, params.effective_target_extension
        )
        segments = [Line(ext_start), Line(ext_end), Line(params.end)]
        return RoutingResult(start=params.start, segments=segments)


class BezierStyle(ConnectionStyle):
    """A single cubic curve between the ports.

    Connections that would have to double back use orthogonal routing.
    """

    id = "bezier"
    display_name = "Bezier"

    def create_segments(self, params: RoutingParameters) -> RoutingResult:
        if needs_loopback_routing(params):
            logger.debug("Curved connection needs loopback, using orthogonal routing")
            return _orthogonal_result(params, params.corner_radius)

        source = params.effective_source_orientation
        target = params.effective_target_orientation
        curve = cubic_segment(
            params.start,
            params.end,
            source,
            target,
            curvature=params.curvature,
            extension=params.extension,
            source_extension=params.effective_source_extension,
            target_extension=params.effective_target_extension,
        )
        curve = CubicCurve(
            control1=nudge_control_point(
                curve.control1, source, params.source_bounds, params.effective_source_extension
            ),
            control2=nudge_control_point(
                curve.control2, target, params.target_bounds, params.effective_target_extension
            ),
            end=curve.end,
            curvature=curve.curvature,
        )
        return RoutingResult(start=params.start, segments=[curve])


class EditableSmoothStepStyle(ConnectionStyle):
    """Smooth step routing that follows user-placed control points."""

    id = "editable-smoothstep"
    display_name = "Editable Smooth Step"

    def __init__(self, default_corner_radius: float = 8.0):
        self.default_corner_radius = default_corner_radius

    def create_segments(self, params: RoutingParameters) -> RoutingResult:
        radius = params.corner_radius if params.corner_radius > 0 else self.default_corner_radius
        points = reconcile(params.user_control_points, params)
        return RoutingResult(start=params.start, segments=waypoints_to_segments(points, radius))


# Style registry
_STYLES: dict[str, ConnectionStyle] = {}


def register_style(style: ConnectionStyle) -> None:
    """Make a style available by its id (replaces any style with the same id)."""
    if not style.id:
        raise ValueError(f"{type(style).__name__} has no id")
    _STYLES[style.id] = style


def get_style(style: str | ConnectionStyle | None) -> ConnectionStyle:
    """Look up a style by id.

    Unknown ids fall back to smooth step routing.
    """
    if isinstance(style, ConnectionStyle):
        return style
    if style is not None and style in _STYLES:
        return _STYLES[style]
    if style is not None:
        logger.warning("Unknown connection style '%s', using '%s'", style, SmoothStepStyle.id)
    return _STYLES[SmoothStepStyle.id]


def available_styles() -> list[ConnectionStyle]:
    """All registered styles in registration order."""
    return list(_STYLES.values())


for _style in (
    SmoothStepStyle(),
    StepStyle(),
    StraightStyle(),
    BezierStyle(),
    EditableSmoothStepStyle(),
):
    register_style(_style)
