"""Curved arc construction between two node footprints."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from ..config import GeometryConfig, get_geometry_config
from ..logging_utils import apply_debug_logging
from ..model import curvature_sign_of
from .circle import Circle, as_point, circle_from_three_points, control_point, left_normal
from .footprint import Footprint, ellipse_at
from .intersect import directed_delta, find_arc_ellipse_intersection

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


@dataclass(frozen=True)
class ArcPath:
    """Everything a renderer needs to draw one arc.

    Angles are measured around ``circle``. ``sweep`` is +1 when the arc runs in
    the direction of increasing angle and -1 otherwise; ``delta`` is the signed
    angular extent of the trimmed arc.
    """

    circle: Circle
    control_point: Point
    raw_start_angle: float
    raw_end_angle: float
    start_angle: float
    end_angle: float
    sweep: int
    delta: float
    start_point: Point
    end_point: Point
    polyline: Tuple[Point, ...]
    midpoint: Point
    sign_point: Point
    start_crossed: bool
    end_crossed: bool

    @property
    def sweep_flag(self) -> int:
        """SVG ``sweep-flag`` for this arc."""
        return 1 if self.sweep > 0 else 0

    @property
    def arc_length(self) -> float:
        return self.circle.r * abs(self.delta)

    @property
    def end_direction(self) -> Point:
        """Unit tangent at the end point, pointing along the direction of travel."""
        return (
            -self.sweep * math.sin(self.end_angle),
            self.sweep * math.cos(self.end_angle),
        )

    def svg_path(self) -> str:
        return polyline_svg_path(self.polyline)

    def svg_arc_path(self) -> str:
        (sx, sy), (ex, ey) = self.start_point, self.end_point
        large = 1 if abs(self.delta) > math.pi else 0
        r = self.circle.r
        return f"M{sx},{sy} A{r},{r} 0 {large} {self.sweep_flag} {ex},{ey}"


def polyline_svg_path(points: Sequence[Point]) -> str:
    return "M" + " L".join(f"{x},{y}" for x, y in points)


def _sample_arc(circle: Circle, start_angle: float, delta: float, segments: int) -> Tuple[Point, ...]:
    angles = start_angle + np.linspace(0.0, 1.0, segments + 1) * delta
    xs = circle.cx + circle.r * np.cos(angles)
    ys = circle.cy + circle.r * np.sin(angles)
    return tuple((float(x), float(y)) for x, y in zip(xs, ys))


def _sign_anchor(
    circle: Circle,
    start_angle: float,
    delta: float,
    position: Optional[float],
    config: GeometryConfig,
) -> Point:
    if position is None:
        length = circle.r * abs(delta)
        position = 1.0 - config.sign_distance / length if length > 0.0 else 0.5
    position = min(1.0, max(0.0, position))
    angle = start_angle + position * delta
    x, y = circle.point_at(angle)
    # offset radially toward the centre
    return (x - math.cos(angle) * config.sign_offset, y - math.sin(angle) * config.sign_offset)


def compute_arc_path(
    from_node,
    to_node,
    curvature: float,
    from_footprint: Footprint,
    to_footprint: Footprint,
    *,
    config: Optional[GeometryConfig] = None,
    sign_position: Optional[float] = None,
) -> ArcPath:
    """Build the trimmed circular arc from ``from_node`` to ``to_node``.

    Nodes may be :class:`~cld_core.model.Node` instances or ``(x, y)`` pairs.
    ``sign_position`` is the fraction of the arc at which the sign glyph sits;
    by default it is placed a fixed distance before the end.

    Raises :class:`~cld_core.geometry.circle.DegenerateCircleError` when the
    endpoints and the control point are collinear.
    """

    if config is None:
        config = get_geometry_config()
    start = as_point(from_node)
    end = as_point(to_node)

    control = control_point(start, end, curvature)
    circle = circle_from_three_points(start, control, end, eps=config.collinear_eps)

    raw_start = circle.angle_of(start)
    raw_end = circle.angle_of(end)
    to_start = (start[0] - circle.cx, start[1] - circle.cy)
    to_control = (control[0] - circle.cx, control[1] - circle.cy)
    cross = to_start[0] * to_control[1] - to_start[1] * to_control[0]
    sweep = 1 if cross > 0.0 else -1

    trim_kwargs = dict(
        direction=sweep,
        samples=config.samples,
        refine_iterations=config.refine_iterations,
        clearance=config.clearance,
    )
    head = find_arc_ellipse_intersection(
        circle, raw_start, raw_end, ellipse_at(start, from_footprint), search_from_start=True, **trim_kwargs
    )
    tail = find_arc_ellipse_intersection(
        circle, raw_start, raw_end, ellipse_at(end, to_footprint), search_from_start=False, **trim_kwargs
    )

    raw_delta = directed_delta(raw_start, raw_end, sweep)
    start_angle = head.angle
    delta = directed_delta(start_angle, tail.angle, sweep)
    if abs(delta) > abs(raw_delta):
        # the two footprints overlap along the arc; collapse onto the head point
        logger.warning(
            "Footprints overlap along arc (%.2f, %.2f) -> (%.2f, %.2f); arc collapsed",
            start[0],
            start[1],
            end[0],
            end[1],
        )
        delta = 0.0
    end_angle = start_angle + delta

    polyline = _sample_arc(circle, start_angle, delta, config.polyline_segments)
    return ArcPath(
        circle=circle,
        control_point=control,
        raw_start_angle=raw_start,
        raw_end_angle=raw_end,
        start_angle=start_angle,
        end_angle=end_angle,
        sweep=sweep,
        delta=delta,
        start_point=polyline[0],
        end_point=polyline[-1],
        polyline=polyline,
        midpoint=circle.point_at(start_angle + 0.5 * delta),
        sign_point=_sign_anchor(circle, start_angle, delta, sign_position, config),
        start_crossed=head.crossed,
        end_crossed=tail.crossed,
    )


def clamp_curvature(
    curvature: float,
    distance: float,
    *,
    interactive: bool = True,
    config: Optional[GeometryConfig] = None,
) -> float:
    """Clamp ``curvature`` for an arc whose endpoints are ``distance`` apart.

    The magnitude never reaches half the distance. In interactive use it is also
    kept above ``min_curvature`` (or the upper bound, when that is smaller) so
    the arc never flattens into an ambiguous direction. The sign is preserved,
    with zero treated as positive.
    """

    if config is None:
        config = get_geometry_config()
    upper = config.max_curvature_ratio * abs(distance)
    magnitude = abs(curvature)
    if interactive:
        magnitude = max(magnitude, min(config.min_curvature, upper))
    magnitude = min(magnitude, upper)
    return curvature_sign_of(curvature) * magnitude


def curvature_from_pointer(from_node, to_node, pointer) -> float:
    """Signed distance of ``pointer`` from the chord midpoint along the arc normal."""

    a = as_point(from_node)
    b = as_point(to_node)
    p = as_point(pointer)
    nx, ny = left_normal(a, b)
    mx = (a[0] + b[0]) * 0.5
    my = (a[1] + b[1]) * 0.5
    return (p[0] - mx) * nx + (p[1] - my) * ny


def node_distance(from_node, to_node) -> float:
    a = as_point(from_node)
    b = as_point(to_node)
    return math.hypot(b[0] - a[0], b[1] - a[1])


apply_debug_logging(globals(), logger=logger, skip={"polyline_svg_path"})


__all__ = [
    "ArcPath",
    "polyline_svg_path",
    "compute_arc_path",
    "clamp_curvature",
    "curvature_from_pointer",
    "node_distance",
]
