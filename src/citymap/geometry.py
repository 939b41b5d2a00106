"""
Plane geometry helpers used by the router, the renderer and the hit tester.

All points are plain ``(x, y)`` tuples in canvas space unless noted.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

Number = float | int
Point = Tuple[float, float]

__all__ = [
    "FontMetrics",
    "Point",
    "bearing",
    "distance",
    "midpoint",
    "quadratic_bezier_point",
    "rotate_text_anchor",
    "to_canvas",
]


@dataclass(frozen=True)
class FontMetrics:
    """Approximate metrics for a fixed-pitch rendering of a font."""

    char_width: float
    ascent: float
    descent: float

    @classmethod
    def for_font_size(cls, size: Number) -> "FontMetrics":
        size = float(size)
        return cls(char_width=size * 0.55, ascent=size * 0.8, descent=size * 0.2)

    def text_width(self, text: str) -> float:
        return self.char_width * len(text)


def quadratic_bezier_point(p0: Point, control: Point, p1: Point, t: float) -> Point:
    """Point on the quadratic Bezier curve p0 -> p1 shaped by `control`."""
    if t == 0:
        return (p0[0], p0[1])
    if t == 1:
        return (p1[0], p1[1])
    u = 1.0 - t
    a, b, c = u * u, 2.0 * u * t, t * t
    return (
        a * p0[0] + b * control[0] + c * p1[0],
        a * p0[1] + b * control[1] + c * p1[1],
    )


def distance(p1: Point, p2: Point) -> float:
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def bearing(p1: Point, p2: Point) -> float:
    """Angle of the vector p1 -> p2 in radians, in (-pi, pi]."""
    return math.atan2(p2[1] - p1[1], p2[0] - p1[0])


def midpoint(p1: Point, p2: Point) -> Point:
    return ((p1[0] + p2[0]) / 2.0, (p1[1] + p2[1]) / 2.0)


def to_canvas(x: float, y: float, width: Number, height: Number) -> Point:
    """Scale a normalized position into canvas space."""
    return (x * width, y * height)


def rotate_text_anchor(
    point: Point, angle: float, text: str, metrics: FontMetrics
) -> Point:
    """
    Return the draw origin for `text` so that, once rotated by `angle` about
    that origin, the text box is centered on `point`.

    The origin is the left end of the baseline. In the text's own frame the
    box center sits at (width / 2, -(ascent - descent) / 2).
    """
    half_w = metrics.text_width(text) / 2.0
    half_h = (metrics.ascent - metrics.descent) / 2.0
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    dx = half_w * cos_a + half_h * sin_a
    dy = half_w * sin_a - half_h * cos_a
    return (point[0] - dx, point[1] - dy)
