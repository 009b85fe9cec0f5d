"""SVG rendering of routed connections using drawsvg."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import drawsvg as draw

from .segments import CubicCurve, Line, QuadraticCurve, check_segment

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .geometry import Point, Rect
    from .paths import RoutedConnection
    from .segments import PathSegment


class Theme:
    """Colors and sizes used when rendering connections."""

    def __init__(
        self,
        background: str = "#ffffff",
        node_fill: str = "#f8fafc",
        node_stroke: str = "#cbd5e1",
        edge_color: str = "#64748b",
        edge_width: float = 1.5,
        hit_rect_color: str = "#f97316",
        bend_point_color: str = "#3b82f6",
        label_color: str = "#64748b",
    ):
        self.background = background
        self.node_fill = node_fill
        self.node_stroke = node_stroke
        self.edge_color = edge_color
        self.edge_width = edge_width
        self.hit_rect_color = hit_rect_color
        self.bend_point_color = bend_point_color
        self.label_color = label_color


DEFAULT_THEME = Theme()


def build_path(start: tuple[float, float], segments: Iterable[PathSegment], **attrs) -> draw.Path:
    """Convert a segment list to a drawsvg path.

    Args:
        start: Path start point
        segments: Segments following the start point
        **attrs: SVG attributes for the path (stroke, fill...)

    Returns:
        drawsvg Path using M, L, Q and C commands
    """
    attrs.setdefault("fill", "none")
    path = draw.Path(**attrs)
    path.M(start[0], start[1])

    for segment in segments:
        check_segment(segment)
        if isinstance(segment, Line):
            path.L(segment.end.x, segment.end.y)
        elif isinstance(segment, QuadraticCurve):
            path.Q(segment.control.x, segment.control.y, segment.end.x, segment.end.y)
        elif isinstance(segment, CubicCurve):
            path.C(
                segment.control1.x, segment.control1.y,
                segment.control2.x, segment.control2.y,
                segment.end.x, segment.end.y,
            )

    return path


class ConnectionRenderer:
    """Renders routed connections (and optionally their debug geometry) to SVG."""

    def __init__(
        self,
        theme: Theme | None = None,
        padding: float = 20.0,
        arrow_size: float = 8.0,
    ):
        self.theme = theme or DEFAULT_THEME
        self.padding = padding
        self.arrow_size = arrow_size

    def render(
        self,
        connections: Iterable[RoutedConnection],
        debug: bool = False,
        labels: dict[int, str] | None = None,
    ) -> draw.Drawing:
        """Render connections to an SVG Drawing object.

        Args:
            connections: Routed connections to draw
            debug: Also draw hit rectangles and bend points
            labels: Optional label per connection index, placed at the path center

        Returns:
            drawsvg Drawing sized to fit everything drawn
        """
        connections = list(connections)
        labels = labels or {}

        nodes: list[Rect] = []
        for connection in connections:
            params = connection.params
            if params is None:
                continue
            for rect in (params.source_bounds, params.target_bounds):
                if rect is not None and rect not in nodes:
                    nodes.append(rect)

        min_x, min_y, max_x, max_y = self._extent(connections, nodes, debug)
        width = max_x - min_x + 2 * self.padding
        height = max_y - min_y + 2 * self.padding
        origin = (min_x - self.padding, min_y - self.padding)

        d = draw.Drawing(width, height, origin=origin)
        d.append(draw.Rectangle(origin[0], origin[1], width, height, fill=self.theme.background))

        # Nodes first so connections are drawn on top
        for rect in nodes:
            d.append(
                draw.Rectangle(
                    rect.left, rect.top, rect.width, rect.height,
                    fill=self.theme.node_fill,
                    stroke=self.theme.node_stroke,
                    stroke_width=1,
                    rx=6, ry=6,
                )
            )

        for index, connection in enumerate(connections):
            self._render_connection(d, connection, debug)
            if index in labels:
                self._render_label(d, connection, labels[index])

        return d

    def _extent(
        self,
        connections: list[RoutedConnection],
        nodes: list[Rect],
        debug: bool,
    ) -> tuple[float, float, float, float]:
        xs: list[float] = []
        ys: list[float] = []
        for rect in nodes:
            xs.extend((rect.left, rect.right))
            ys.extend((rect.top, rect.bottom))
        for connection in connections:
            for point in connection.bend_points:
                xs.append(point.x)
                ys.append(point.y)
            for segment in connection.result.segments:
                if isinstance(segment, QuadraticCurve):
                    xs.append(segment.control.x)
                    ys.append(segment.control.y)
                elif isinstance(segment, CubicCurve):
                    xs.extend((segment.control1.x, segment.control2.x))
                    ys.extend((segment.control1.y, segment.control2.y))
            if debug:
                for rect in connection.hit_rects:
                    xs.extend((rect.left, rect.right))
                    ys.extend((rect.top, rect.bottom))

        if not xs:
            return 0.0, 0.0, 0.0, 0.0
        return min(xs), min(ys), max(xs), max(ys)

    def _render_connection(self, d: draw.Drawing, connection: RoutedConnection, debug: bool) -> None:
        """Render a single connection."""
        result = connection.result
        if result.is_empty:
            return

        if debug:
            for rect in connection.hit_rects:
                d.append(
                    draw.Rectangle(
                        rect.left, rect.top, rect.width, rect.height,
                        fill=self.theme.hit_rect_color,
                        fill_opacity=0.15,
                        stroke=self.theme.hit_rect_color,
                        stroke_width=0.5,
                    )
                )

        d.append(
            connection.style.build_path(
                result,
                stroke=self.theme.edge_color,
                stroke_width=self.theme.edge_width,
            )
        )

        # Arrowhead follows the direction of the last drawn segment
        last = result.segments[-1]
        if isinstance(last, QuadraticCurve):
            before = last.control
        elif isinstance(last, CubicCurve):
            before = last.control2
        else:
            points = connection.bend_points
            before = points[-2]
        end = result.end
        if before != end:
            angle = math.atan2(end.y - before.y, end.x - before.x)
            self._draw_arrowhead(d, end, angle)

        if debug:
            for point in connection.bend_points:
                d.append(draw.Circle(point.x, point.y, 2.5, fill=self.theme.bend_point_color))

    def _render_label(self, d: draw.Drawing, connection: RoutedConnection, label: str) -> None:
        mid = connection.center
        label_width = len(label) * 7 + 12
        d.append(
            draw.Rectangle(
                mid.x - label_width / 2,
                mid.y - 9,
                label_width,
                18,
                fill=self.theme.background,
                stroke=self.theme.edge_color,
                stroke_width=1,
                rx=4, ry=4,
            )
        )
        d.append(
            draw.Text(
                label,
                11,
                mid.x, mid.y,
                fill=self.theme.label_color,
                font_family="JetBrains Mono, Consolas, monospace",
                text_anchor="middle",
                dominant_baseline="middle",
            )
        )

    def _draw_arrowhead(self, d: draw.Drawing, tip: Point, angle: float) -> None:
        """Draw an arrowhead at the given position and angle."""
        size = self.arrow_size
        p1_x = tip.x - size * math.cos(angle - math.pi / 6)
        p1_y = tip.y - size * math.sin(angle - math.pi / 6)
        p2_x = tip.x - size * math.cos(angle + math.pi / 6)
        p2_y = tip.y - size * math.sin(angle + math.pi / 6)

        d.append(
            draw.Lines(
                tip.x, tip.y,
                p1_x, p1_y,
                p2_x, p2_y,
                tip.x, tip.y,
                fill=self.theme.edge_color,
                stroke="none",
            )
        )


def render_to_svg(
    connections: Iterable[RoutedConnection],
    filename: str | None = None,
    debug: bool = False,
    theme: Theme | None = None,
) -> str:
    """Render routed connections to SVG.

    Args:
        connections: The connections to render
        filename: Optional filename to save to (without extension)
        debug: Also draw hit rectangles and bend points
        theme: Colors to use (DEFAULT_THEME when omitted)

    Returns:
        SVG content as string
    """
    renderer = ConnectionRenderer(theme=theme)
    drawing = renderer.render(connections, debug=debug)

    if filename:
        drawing.save_svg(f"{filename}.svg")

    return drawing.as_svg()
