"""Control points for curved (cubic Bezier) connections."""

from __future__ import annotations

from .geometry import Orientation, Point, Rect
from .segments import CubicCurve


def control_point(
    anchor: Point,
    orientation: Orientation,
    other: Point,
    curvature: float,
    extension: float,
) -> Point:
    """Place a control point on the port axis, away from the node.

    The distance grows with the gap to the other endpoint along that axis but
    never drops below the port extension.
    """
    if orientation.is_horizontal:
        distance = max(extension, abs(other.x - anchor.x) * curvature)
    else:
        distance = max(extension, abs(other.y - anchor.y) * curvature)

    if orientation is Orientation.LEFT:
        return Point(anchor.x - distance, anchor.y)
    if orientation is Orientation.RIGHT:
        return Point(anchor.x + distance, anchor.y)
    if orientation is Orientation.TOP:
        return Point(anchor.x, anchor.y - distance)
    return Point(anchor.x, anchor.y + distance)


def cubic_segment(
    start: Point,
    end: Point,
    source_orientation: Orientation,
    target_orientation: Orientation,
    curvature: float = 0.5,
    extension: float = 10.0,
    source_extension: float | None = None,
    target_extension: float | None = None,
) -> CubicCurve:
    """Build the single cubic curve of a forward curved connection.

    Args:
        start: Source port position
        end: Target port position
        source_orientation: Side the source port faces
        target_orientation: Side the target port faces
        curvature: Control distance as a fraction of the axis gap
        extension: Minimum control distance
        source_extension: Minimum control distance at the source, if different
        target_extension: Minimum control distance at the target, if different

    Returns:
        CubicCurve ending at ``end``
    """
    start, end = Point(*start), Point(*end)
    c1 = control_point(
        start,
        source_orientation,
        end,
        curvature,
        extension if source_extension is None else source_extension,
    )
    c2 = control_point(
        end,
        target_orientation,
        start,
        curvature,
        extension if target_extension is None else target_extension,
    )
    return CubicCurve(control1=c1, control2=c2, end=end, curvature=curvature)


def nudge_control_point(
    control: Point,
    orientation: Orientation,
    bounds: Rect | None,
    clearance: float,
) -> Point:
    """Push a control point at least ``clearance`` outside its node.

    Only the coordinate along the port axis moves, on the side the port faces.
    """
    if bounds is None:
        return control

    if orientation is Orientation.RIGHT:
        return Point(max(control.x, bounds.right + clearance), control.y)
    if orientation is Orientation.LEFT:
        return Point(min(control.x, bounds.left - clearance), control.y)
    if orientation is Orientation.BOTTOM:
        return Point(control.x, max(control.y, bounds.bottom + clearance))
    return Point(control.x, min(control.y, bounds.top - clearance))
