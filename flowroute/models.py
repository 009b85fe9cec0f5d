"""Routing inputs, outputs and configuration."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

from .geometry import Orientation, Point, Rect
from .segments import PathSegment


@dataclass
class RoutingConfig:
    """Default routing settings shared by the connection styles."""

    # Straight-out distance from a port before the first turn
    extension: float = 10.0
    corner_radius: float = 4.0
    # Gap kept between a routed line and the node it goes around
    obstacle_clearance: float = 20.0
    # Control point distance factor for curved connections
    curvature: float = 0.5
    # Half-width of the clickable band around a connection
    hit_tolerance: float = 8.0

    def __post_init__(self) -> None:
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if value < 0:
                raise ValueError(f"{f.name} must be non-negative, got {value}")


@dataclass(frozen=True)
class RoutingParameters:
    """Everything needed to route one connection.

    A missing orientation means the endpoint is free, e.g. the pointer while a
    connection is being dragged out of a port.
    """

    start: Point
    end: Point
    source_orientation: Orientation | None = None
    target_orientation: Orientation | None = None
    extension: float = 10.0
    source_extension: float | None = None
    target_extension: float | None = None
    corner_radius: float = 4.0
    obstacle_clearance: float = 20.0
    curvature: float = 0.5
    source_bounds: Rect | None = None
    target_bounds: Rect | None = None
    user_control_points: tuple[Point, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept plain tuples and strings at the boundary
        object.__setattr__(self, "start", Point(*self.start))
        object.__setattr__(self, "end", Point(*self.end))
        if self.source_orientation is not None:
            object.__setattr__(
                self, "source_orientation", Orientation.parse(self.source_orientation)
            )
        if self.target_orientation is not None:
            object.__setattr__(
                self, "target_orientation", Orientation.parse(self.target_orientation)
            )
        object.__setattr__(
            self, "user_control_points", tuple(Point(*p) for p in self.user_control_points)
        )

    @classmethod
    def from_config(
        cls,
        start: tuple[float, float],
        end: tuple[float, float],
        config: RoutingConfig | None = None,
        **kwargs,
    ) -> RoutingParameters:
        """Build parameters using the defaults of a RoutingConfig.

        Args:
            start: Source port position
            end: Target port position
            config: Routing defaults (RoutingConfig() when omitted)
            **kwargs: Any other RoutingParameters field (orientations, bounds...)

        Returns:
            New RoutingParameters
        """
        config = config or RoutingConfig()
        values = {
            "extension": config.extension,
            "corner_radius": config.corner_radius,
            "obstacle_clearance": config.obstacle_clearance,
            "curvature": config.curvature,
        }
        values.update(kwargs)
        return cls(start=start, end=end, **values)

    @property
    def effective_source_orientation(self) -> Orientation:
        if self.source_orientation is not None:
            return self.source_orientation
        if self.target_orientation is not None:
            return self.target_orientation.opposite
        return Orientation.RIGHT

    @property
    def effective_target_orientation(self) -> Orientation:
        if self.target_orientation is not None:
            return self.target_orientation
        if self.source_orientation is not None:
            return self.source_orientation.opposite
        return Orientation.LEFT

    @property
    def effective_source_extension(self) -> float:
        if self.source_extension is not None:
            return self.source_extension
        return self.extension if self.source_orientation is not None else 0.0

    @property
    def effective_target_extension(self) -> float:
        if self.target_extension is not None:
            return self.target_extension
        return self.extension if self.target_orientation is not None else 0.0

    def with_changes(self, **changes) -> RoutingParameters:
        """Return a copy with some fields replaced."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class RoutingResult:
    """A routed path: the start point followed by the segments to draw."""

    start: Point
    segments: tuple[PathSegment, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", tuple(self.segments))

    @property
    def end(self) -> Point:
        return self.segments[-1].end if self.segments else self.start

    @property
    def is_empty(self) -> bool:
        return not self.segments
