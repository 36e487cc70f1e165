"""Elliptical node footprints and a headless label-size estimate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..config import get_geometry_config

# Average glyph advance relative to font size for bold sans-serif text.
_CHAR_WIDTH_RATIO = 0.525
_LINE_HEIGHT_RATIO = 1.2


@dataclass(frozen=True)
class Footprint:
    """Semi-axes of the ellipse drawn around a node label, centred on the node."""

    rx: float
    ry: float

    def __post_init__(self) -> None:
        if self.rx <= 0.0 or self.ry <= 0.0:
            raise ValueError(f"footprint semi-axes must be positive, got rx={self.rx}, ry={self.ry}")

    @classmethod
    def from_label_size(cls, width: float, height: float, padding: Optional[float] = None) -> "Footprint":
        if padding is None:
            padding = get_geometry_config().label_padding
        return cls(abs(width / 2.0 + padding), abs(height / 2.0 + padding))


@dataclass(frozen=True)
class Ellipse:
    cx: float
    cy: float
    rx: float
    ry: float

    def contains(self, x: float, y: float) -> bool:
        ex = (x - self.cx) / self.rx
        ey = (y - self.cy) / self.ry
        return ex * ex + ey * ey < 1.0


def ellipse_at(center: Tuple[float, float], footprint: Footprint) -> Ellipse:
    return Ellipse(center[0], center[1], footprint.rx, footprint.ry)


def measure_text_width(text: str, font_size: float) -> float:
    return len(text) * font_size * _CHAR_WIDTH_RATIO


def wrap_label(text: str, max_width: float, font_size: float) -> List[str]:
    """Greedy word wrap; explicit newlines always break."""

    lines: List[str] = []
    for paragraph in text.split("\n"):
        line = ""
        for word in paragraph.split(" "):
            candidate = f"{line} {word}" if line else word
            if line and measure_text_width(candidate, font_size) > max_width:
                lines.append(line)
                line = word
            else:
                line = candidate
        lines.append(line)
    return lines


def estimate_label_size(
    label: str, font_size: Optional[float] = None, max_width: Optional[float] = None
) -> Tuple[float, float]:
    """Approximate ``(width, height)`` of a wrapped label without a text renderer."""

    config = get_geometry_config()
    if font_size is None:
        font_size = config.font_size
    if max_width is None:
        max_width = config.max_label_width
    lines = wrap_label(label, max_width, font_size)
    width = max([1.0] + [measure_text_width(line, font_size) for line in lines])
    height = len(lines) * font_size * _LINE_HEIGHT_RATIO
    return width, height


def footprint_for_label(label: str, font_size: Optional[float] = None) -> Footprint:
    width, height = estimate_label_size(label, font_size)
    return Footprint.from_label_size(width, height)


__all__ = [
    "Footprint",
    "Ellipse",
    "ellipse_at",
    "measure_text_width",
    "wrap_label",
    "estimate_label_size",
    "footprint_for_label",
]
