"""Locate where a circular arc leaves an elliptical node footprint.

The arc is sampled at equal angular steps starting from the chosen end, each
sample is classified as inside or outside the ellipse, and the first change of
state is refined by bisection in angle. The refined point is then pushed out
along the ray from the ellipse centre by a small clearance so a stroked arc
does not touch the node outline.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..config import MIN_SAMPLES, get_geometry_config
from ..logging_utils import apply_debug_logging
from .circle import Circle
from .footprint import Ellipse

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

_TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class ArcCrossing:
    """Trim point on an arc.

    ``crossed`` is ``False`` when the sweep never crossed the ellipse boundary and
    ``point`` is the fallback last sample.
    """

    point: Point
    angle: float
    crossed: bool


def short_delta(start_angle: float, end_angle: float) -> float:
    """Signed angular distance from start to end, taking the short way round."""

    delta = math.fmod(end_angle - start_angle, _TWO_PI)
    if delta > math.pi:
        delta -= _TWO_PI
    elif delta < -math.pi:
        delta += _TWO_PI
    return delta


def directed_delta(start_angle: float, end_angle: float, direction: int) -> float:
    """Angular distance from start to end travelling in ``direction`` (+1 or -1)."""

    delta = math.fmod(end_angle - start_angle, _TWO_PI)
    if direction > 0 and delta < 0.0:
        delta += _TWO_PI
    elif direction < 0 and delta > 0.0:
        delta -= _TWO_PI
    return delta


def _inside(ellipse: Ellipse, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    ex = (xs - ellipse.cx) / ellipse.rx
    ey = (ys - ellipse.cy) / ellipse.ry
    return ex * ex + ey * ey < 1.0


def _push_out(ellipse: Ellipse, point: Point, clearance: float) -> Point:
    dx = point[0] - ellipse.cx
    dy = point[1] - ellipse.cy
    length = math.hypot(dx, dy)
    if length == 0.0:
        return point
    scale = (length + clearance) / length
    return (ellipse.cx + dx * scale, ellipse.cy + dy * scale)


def find_arc_ellipse_intersection(
    circle: Circle,
    start_angle: float,
    end_angle: float,
    ellipse: Ellipse,
    *,
    search_from_start: bool = True,
    direction: Optional[int] = None,
    samples: Optional[int] = None,
    refine_iterations: Optional[int] = None,
    clearance: Optional[float] = None,
) -> ArcCrossing:
    """Return the first point, walking from one end, where the arc crosses ``ellipse``.

    ``direction`` fixes the travel direction from ``start_angle`` to
    ``end_angle`` (+1 increasing angle, -1 decreasing); ``None`` takes the
    short way round. When no crossing exists the last sample is returned with
    ``crossed=False``.
    """

    config = get_geometry_config()
    samples = max(int(samples or config.samples), MIN_SAMPLES)
    if refine_iterations is None:
        refine_iterations = config.refine_iterations
    if clearance is None:
        clearance = config.clearance

    if direction is None:
        delta = short_delta(start_angle, end_angle)
    else:
        delta = directed_delta(start_angle, end_angle, direction)

    t = np.linspace(0.0, 1.0, samples + 1)
    if not search_from_start:
        t = t[::-1]
    angles = start_angle + t * delta
    xs = circle.cx + circle.r * np.cos(angles)
    ys = circle.cy + circle.r * np.sin(angles)
    inside = _inside(ellipse, xs, ys)

    changes = np.flatnonzero(inside[1:] != inside[:-1])
    if changes.size == 0:
        last = (float(xs[-1]), float(ys[-1]))
        logger.warning(
            "Arc on circle (%.2f, %.2f, r=%.2f) never crosses ellipse at (%.2f, %.2f) "
            "rx=%.2f ry=%.2f; using last sample",
            circle.cx,
            circle.cy,
            circle.r,
            ellipse.cx,
            ellipse.cy,
            ellipse.rx,
            ellipse.ry,
        )
        pushed = _push_out(ellipse, last, clearance)
        return ArcCrossing(pushed, circle.angle_of(pushed), False)

    idx = int(changes[0])
    lo = float(angles[idx])
    hi = float(angles[idx + 1])
    lo_inside = bool(inside[idx])
    for _ in range(refine_iterations):
        mid = 0.5 * (lo + hi)
        mx, my = circle.point_at(mid)
        if ellipse.contains(mx, my) == lo_inside:
            lo = mid
        else:
            hi = mid

    boundary = circle.point_at(0.5 * (lo + hi))
    pushed = _push_out(ellipse, boundary, clearance)
    return ArcCrossing(pushed, circle.angle_of(pushed), True)


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "ArcCrossing",
    "short_delta",
    "directed_delta",
    "find_arc_ellipse_intersection",
]
