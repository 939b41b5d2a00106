"""
Curved edge routing.

Every edge is drawn as a quadratic curve whose control point sits to the left
of the edge direction, a fifth of the edge length away from the chord
midpoint. Edges that would land on a control point already taken earlier in
the same pass are pushed further out until their control point is unique.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Tuple

from .geometry import Number, Point, bearing, distance, midpoint, to_canvas
from .model import Edge, Node

__all__ = ["EdgeRouter", "RoutedEdge", "MIN_SHIFT", "SHIFT_GROWTH"]

# Quarter turns added to the chord bearing: 3/2 pi points to the left side.
ROTATE = math.pi / 2.0 * 3
SHIFT_DIVISOR = 5.0
SHIFT_GROWTH = 1.2
# Zero-length edges still get a control point off their midpoint.
MIN_SHIFT = 1.0


@dataclass(frozen=True)
class RoutedEdge:
    edge: Edge
    start: Point
    control: Point
    end: Point
    shift: float
    attempts: int


class EdgeRouter:
    """Compute one control point per edge for a single redraw."""

    def __init__(self, width: Number, height: Number) -> None:
        self.width = width
        self.height = height

    def endpoints(self, edge: Edge, nodes: Mapping[int, Node]) -> Tuple[Point, Point]:
        """Canvas positions of an edge's endpoints. Raises KeyError when missing."""
        src = nodes[edge.source]
        dst = nodes[edge.target]
        return (
            to_canvas(src.x, src.y, self.width, self.height),
            to_canvas(dst.x, dst.y, self.width, self.height),
        )

    def route(self, edges: Iterable[Edge], nodes: Mapping[int, Node]) -> List[RoutedEdge]:
        taken: List[Point] = []
        routed: List[RoutedEdge] = []
        for edge in edges:
            start, end = self.endpoints(edge, nodes)
            control, shift, attempts = self.control_point(start, end, taken)
            taken.append(control)
            routed.append(
                RoutedEdge(
                    edge=edge,
                    start=start,
                    control=control,
                    end=end,
                    shift=shift,
                    attempts=attempts,
                )
            )
        return routed

    @staticmethod
    def control_point(
        start: Point, end: Point, taken: List[Point]
    ) -> Tuple[Point, float, int]:
        """
        Return (control, shift, attempts) for the chord start -> end.

        Only exact matches against `taken` count as collisions; near misses
        are accepted as is.
        """
        angle = (bearing(start, end) + ROTATE) % (math.pi * 2)
        shift = distance(start, end) / SHIFT_DIVISOR or MIN_SHIFT
        mid = midpoint(start, end)
        cos_a, sin_a = math.cos(angle), math.sin(angle)

        attempts = 1
        control = (mid[0] + cos_a * shift, mid[1] + sin_a * shift)
        while control in taken:
            shift *= SHIFT_GROWTH
            attempts += 1
            control = (mid[0] + cos_a * shift, mid[1] + sin_a * shift)
        return control, shift, attempts
