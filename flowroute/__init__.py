"""flowroute - Connection routing for node-graph editors.

Example usage:
    from flowroute import Orientation, Rect, RoutingParameters, get_style

    params = RoutingParameters(
        start=(100, 25),
        end=(300, 80),
        source_orientation=Orientation.RIGHT,
        target_orientation=Orientation.LEFT,
        source_bounds=Rect(0, 0, 100, 50),
        target_bounds=Rect(300, 50, 100, 60),
    )
    style = get_style("smoothstep")
    result = style.create_segments(params)
    path = style.build_path(result, stroke="black")
    rects = style.build_hit_rects(result)
"""

from .bezier import (
    cubic_segment,
    nudge_control_point,
)
from .geometry import (
    Orientation,
    Point,
    Rect,
    segments_intersect,
    union_bounds,
)
from .hittest import (
    hit_rects,
)
from .models import (
    RoutingConfig,
    RoutingParameters,
    RoutingResult,
)
from .orthogonal import (
    reconcile,
)
from .paths import (
    ConnectionPathCache,
    RoutedConnection,
    extract_bend_points,
    path_center,
    point_along,
)
from .renderer import (
    DEFAULT_THEME,
    ConnectionRenderer,
    Theme,
    build_path,
    render_to_svg,
)
from .segments import (
    CubicCurve,
    Line,
    PathSegment,
    QuadraticCurve,
)
from .styles import (
    BezierStyle,
    ConnectionStyle,
    EditableSmoothStepStyle,
    SmoothStepStyle,
    StepStyle,
    StraightStyle,
    available_styles,
    get_style,
    register_style,
)
from .synthesis import (
    waypoints_to_segments,
)
from .waypoints import (
    calculate_waypoints,
    extended_point,
    is_self_connection,
    needs_loopback_routing,
    optimize_waypoints,
)

__version__ = "0.1.0"

__all__ = [
    # Geometry
    "Point",
    "Rect",
    "Orientation",
    "segments_intersect",
    "union_bounds",
    # Segments
    "Line",
    "QuadraticCurve",
    "CubicCurve",
    "PathSegment",
    # Models
    "RoutingConfig",
    "RoutingParameters",
    "RoutingResult",
    # Routing
    "calculate_waypoints",
    "optimize_waypoints",
    "extended_point",
    "is_self_connection",
    "needs_loopback_routing",
    "waypoints_to_segments",
    "reconcile",
    "cubic_segment",
    "nudge_control_point",
    "hit_rects",
    # Styles
    "ConnectionStyle",
    "SmoothStepStyle",
    "StepStyle",
    "StraightStyle",
    "BezierStyle",
    "EditableSmoothStepStyle",
    "get_style",
    "register_style",
    "available_styles",
    # Derived views
    "extract_bend_points",
    "point_along",
    "path_center",
    "RoutedConnection",
    "ConnectionPathCache",
    # Rendering
    "build_path",
    "render_to_svg",
    "ConnectionRenderer",
    "Theme",
    "DEFAULT_THEME",
    # Version
    "__version__",
]
