"""Circle through three points and the curvature control-point construction."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import get_geometry_config
from ..logging_utils import apply_debug_logging

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class DegenerateCircleError(ValueError):
    """Raised when three points do not determine a circle (collinear or coincident)."""

    def __init__(self, message: str, points: Tuple[Point, ...] = ()):
        super().__init__(message)
        self.points = points


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float

    @property
    def center(self) -> Point:
        return (self.cx, self.cy)

    def angle_of(self, point: Point) -> float:
        return math.atan2(point[1] - self.cy, point[0] - self.cx)

    def point_at(self, angle: float) -> Point:
        return (self.cx + self.r * math.cos(angle), self.cy + self.r * math.sin(angle))


def as_point(value) -> Point:
    if hasattr(value, "x") and hasattr(value, "y"):
        return (float(value.x), float(value.y))
    return (float(value[0]), float(value[1]))


def left_normal(from_pt: Point, to_pt: Point) -> Point:
    """Unit normal to ``to - from``, rotated +90 degrees."""

    dx = to_pt[0] - from_pt[0]
    dy = to_pt[1] - from_pt[1]
    length = math.hypot(dx, dy)
    if length == 0.0:
        raise DegenerateCircleError("endpoints coincide", (from_pt, to_pt))
    return (-dy / length, dx / length)


def control_point(from_pt, to_pt, curvature: float) -> Point:
    """Point offset from the chord midpoint by ``curvature`` along the left normal."""

    a = as_point(from_pt)
    b = as_point(to_pt)
    nx, ny = left_normal(a, b)
    mx = (a[0] + b[0]) * 0.5
    my = (a[1] + b[1]) * 0.5
    return (mx + nx * curvature, my + ny * curvature)


def circle_from_three_points(p1, p2, p3, *, eps: Optional[float] = None) -> Circle:
    """Return the circle through ``p1``, ``p2`` and ``p3``.

    The collinearity test compares the determinant with ``eps`` scaled by the
    squared extent of the triple, so it behaves the same at any zoom level.
    """

    if eps is None:
        eps = get_geometry_config().collinear_eps
    a = as_point(p1)
    b = as_point(p2)
    c = as_point(p3)

    ax, ay = b[0] - a[0], b[1] - a[1]
    bx, by = c[0] - a[0], c[1] - a[1]
    e = ax * (a[0] + b[0]) + ay * (a[1] + b[1])
    f = bx * (a[0] + c[0]) + by * (a[1] + c[1])
    g = 2.0 * (ax * (c[1] - b[1]) - ay * (c[0] - b[0]))

    scale = max(abs(ax), abs(ay), abs(bx), abs(by), abs(c[0] - b[0]), abs(c[1] - b[1]))
    if scale == 0.0 or abs(g) < eps * scale * scale:
        raise DegenerateCircleError("points are collinear", (a, b, c))

    cx = (by * e - ay * f) / g
    cy = (ax * f - bx * e) / g
    r = math.hypot(a[0] - cx, a[1] - cy)
    return Circle(cx, cy, r)


def reference_circle(from_pt, to_pt, curvature: float, *, eps: Optional[float] = None) -> Circle:
    """Circle through both endpoints and the control point for ``curvature``."""

    control = control_point(from_pt, to_pt, curvature)
    return circle_from_three_points(from_pt, control, to_pt, eps=eps)


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "Point",
    "DegenerateCircleError",
    "Circle",
    "as_point",
    "left_normal",
    "control_point",
    "circle_from_three_points",
    "reference_circle",
]
