"""Configuration helpers for the geometry and loop-analysis engines."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Optional


@dataclass
class GeometryConfig:
    """Tunables for arc construction, trimming and sign placement."""

    samples: int = 1000
    refine_iterations: int = 8
    clearance: float = 1.0
    polyline_segments: int = 40
    collinear_eps: float = 1e-6
    min_curvature: float = 20.0
    max_curvature_ratio: float = 0.49
    default_curvature: float = 40.0
    sign_distance: float = 20.0
    sign_offset: float = 10.0
    label_padding: float = 16.0
    font_size: float = 16.0
    max_label_width: float = 220.0


@dataclass
class AnalysisConfig:
    """Limits applied before cycle enumeration. ``None`` disables a limit."""

    max_nodes: Optional[int] = 100
    max_arcs: Optional[int] = 200


MIN_SAMPLES = 100

_GEOMETRY_CONFIG = GeometryConfig()
_ANALYSIS_CONFIG = AnalysisConfig()


def get_geometry_config() -> GeometryConfig:
    return copy.deepcopy(_GEOMETRY_CONFIG)


def set_geometry_config(config: GeometryConfig) -> None:
    global _GEOMETRY_CONFIG
    _GEOMETRY_CONFIG = copy.deepcopy(config)


def get_analysis_config() -> AnalysisConfig:
    return copy.deepcopy(_ANALYSIS_CONFIG)


def set_analysis_config(config: AnalysisConfig) -> None:
    global _ANALYSIS_CONFIG
    _ANALYSIS_CONFIG = copy.deepcopy(config)


__all__ = [
    "GeometryConfig",
    "AnalysisConfig",
    "MIN_SAMPLES",
    "get_geometry_config",
    "set_geometry_config",
    "get_analysis_config",
    "set_analysis_config",
]
