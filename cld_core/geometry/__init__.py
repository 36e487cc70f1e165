"""Arc geometry: circle fitting, footprint trimming and arc path construction."""

from .arc_path import (
    ArcPath,
    clamp_curvature,
    compute_arc_path,
    curvature_from_pointer,
    node_distance,
    polyline_svg_path,
)
from .circle import (
    Circle,
    DegenerateCircleError,
    as_point,
    circle_from_three_points,
    control_point,
    left_normal,
    reference_circle,
)
from .footprint import (
    Ellipse,
    Footprint,
    ellipse_at,
    estimate_label_size,
    footprint_for_label,
    measure_text_width,
    wrap_label,
)
from .intersect import ArcCrossing, directed_delta, find_arc_ellipse_intersection, short_delta

__all__ = [
    "ArcPath",
    "clamp_curvature",
    "compute_arc_path",
    "curvature_from_pointer",
    "node_distance",
    "polyline_svg_path",
    "Circle",
    "DegenerateCircleError",
    "as_point",
    "circle_from_three_points",
    "control_point",
    "left_normal",
    "reference_circle",
    "Ellipse",
    "Footprint",
    "ellipse_at",
    "estimate_label_size",
    "footprint_for_label",
    "measure_text_width",
    "wrap_label",
    "ArcCrossing",
    "directed_delta",
    "find_arc_ellipse_intersection",
    "short_delta",
]
