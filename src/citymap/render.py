"""
Paint a city map onto a Canvas using svg.py.

One redraw produces, in paint order:
- a background rect and the optional theme <style>
- the edges group: curved routes with a direction glyph at each midpoint
- the nodes group: one filled circle per city, sized by its type
- the overlay group: dashed straight segments along a staged path, if any
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
from xml.sax.saxutils import escape

import svg

from .canvas import Canvas
from .edge_router import EdgeRouter, RoutedEdge
from .geometry import FontMetrics, bearing, quadratic_bezier_point, rotate_text_anchor, to_canvas
from .model import Edge, Node
from .resources import default_theme_css

logger = logging.getLogger(__name__)

__all__ = ["OverlayState", "PathOverlay", "RenderEngine", "ARROW_GLYPH"]

ARROW_GLYPH = "-->"


class OverlayState(Enum):
    EMPTY = "empty"
    ARMED = "armed"


class PathOverlay:
    """
    Single-shot highlighted path.

    `arm` stages a path; the next `consume` hands it out and drops back to
    EMPTY, so a path is drawn by exactly one redraw.
    """

    def __init__(self) -> None:
        self.state = OverlayState.EMPTY
        self._nodes: Tuple[Node, ...] = ()

    @property
    def is_armed(self) -> bool:
        return self.state is OverlayState.ARMED

    def arm(self, nodes: Iterable[Node]) -> None:
        self._nodes = tuple(nodes)
        self.state = OverlayState.ARMED

    def consume(self) -> Tuple[Node, ...]:
        if self.state is OverlayState.EMPTY:
            return ()
        nodes = self._nodes
        self._nodes = ()
        self.state = OverlayState.EMPTY
        return nodes


class RenderEngine:
    """Draw nodes, routed edges and the path overlay into a Canvas."""

    def __init__(
        self,
        *,
        node_style: Optional[Dict] = None,
        edge_style: Optional[Dict] = None,
        arrow_style: Optional[Dict] = None,
        overlay_style: Optional[Dict] = None,
        font_size: float = 20,
        embed_theme: bool = True,
        theme_css: Optional[str] = None,
    ) -> None:
        self.font_size = font_size
        self.embed_theme = embed_theme
        self.theme_css = theme_css
        self.metrics = FontMetrics.for_font_size(font_size)
        self.overlay = PathOverlay()

        self.node_style = {"fill": "black"}
        if node_style:
            self.node_style.update(node_style)

        # Per-edge colors override "stroke" when the edge carries one.
        self.edge_style = {"stroke": "#222222", "stroke_width": 4}
        if edge_style:
            self.edge_style.update(edge_style)

        self.arrow_style = {"fill": "black", "font_weight": "bold", "font_family": "Arial"}
        if arrow_style:
            self.arrow_style.update(arrow_style)

        self.overlay_style = {"stroke": "red", "stroke_width": 2, "stroke_dasharray": [9]}
        if overlay_style:
            self.overlay_style.update(overlay_style)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #
    def redraw(
        self,
        canvas: Canvas,
        nodes: Mapping[int, Node],
        edges: Mapping[int, Edge],
    ) -> Canvas:
        """
        Repaint `canvas` from scratch and consume the staged overlay.

        Raises KeyError when an edge references a node missing from `nodes`.
        """
        canvas.clear()
        canvas.add(
            svg.Rect(
                class_="background",
                x=0,
                y=0,
                width=canvas.width,
                height=canvas.height,
                fill="none",
                stroke="none",
            )
        )

        style_el = self._build_style_element()
        if style_el is not None:
            canvas.add(style_el)

        router = EdgeRouter(canvas.width, canvas.height)
        routes = router.route(edges.values(), nodes)
        canvas.add(self._build_edges_group(routes))
        canvas.add(self._build_nodes_group(nodes.values(), canvas))

        path = self.overlay.consume()
        overlay_group = self._build_overlay_group(path, canvas)
        if overlay_group is not None:
            canvas.add(overlay_group)

        logger.debug(
            "Redrew %d edges, %d nodes, %d overlay segments",
            len(routes),
            len(nodes),
            max(len(path) - 1, 0),
        )
        return canvas

    # ------------------------------------------------------------------ #
    # Drawing helpers
    # ------------------------------------------------------------------ #
    def _build_style_element(self):
        """Build a <style> element from the bundled or supplied theme."""
        if not self.embed_theme:
            return None

        css_text = self.theme_css if self.theme_css is not None else default_theme_css()
        if not css_text:
            return None

        # svg.py writes element text verbatim; escape it to keep the XML well formed.
        return svg.Style(text=escape(css_text))

    def _build_edges_group(self, routes: List[RoutedEdge]) -> svg.G:
        edges_root = svg.G(id="edges", elements=[])
        for route in routes:
            edge = route.edge
            (x1, y1), (cx, cy), (x2, y2) = route.start, route.control, route.end
            curve = svg.Path(
                d=[svg.MoveTo(x1, y1), svg.QuadraticBezier(cx, cy, x2, y2)],
                stroke=edge.color or self.edge_style["stroke"],
                stroke_width=self.edge_style["stroke_width"],
                fill="none",
            )
            edge_group = svg.G(
                id=f"edge-{edge.id}",
                class_="edge",
                elements=[curve, self._arrow_element(route)],
            )
            edges_root.elements.append(edge_group)
        return edges_root

    def _arrow_element(self, route: RoutedEdge) -> svg.Text:
        """
        Direction glyph at the curve midpoint.

        The glyph follows the straight chord bearing, not the curve tangent.
        """
        anchor = quadratic_bezier_point(route.start, route.control, route.end, 0.5)
        angle = bearing(route.start, route.end)
        ox, oy = rotate_text_anchor(anchor, angle, ARROW_GLYPH, self.metrics)
        return svg.Text(
            class_="arrow",
            text=ARROW_GLYPH,
            x=ox,
            y=oy,
            font_size=self.font_size,
            font_family=self.arrow_style["font_family"],
            font_weight=self.arrow_style["font_weight"],
            fill=self.arrow_style["fill"],
            transform=[svg.Rotate(math.degrees(angle), ox, oy)],
        )

    def _build_nodes_group(self, nodes: Iterable[Node], canvas: Canvas) -> svg.G:
        nodes_root = svg.G(id="nodes", elements=[])
        for node in nodes:
            radius = node.type.radius
            size = node.type.size
            px, py = to_canvas(node.x, node.y, canvas.width, canvas.height)
            # Bounding box starts at position - radius and spans the diameter.
            left, top = px - radius, py - radius
            nodes_root.elements.append(
                svg.Circle(
                    id=f"node-{node.id}",
                    class_=f"node {node.type.value}",
                    cx=left + size / 2,
                    cy=top + size / 2,
                    r=size / 2,
                    fill=self.node_style["fill"],
                )
            )
        return nodes_root

    def _build_overlay_group(self, path: Sequence[Node], canvas: Canvas) -> Optional[svg.G]:
        if len(path) < 2:
            return None
        overlay_root = svg.G(id="overlay", elements=[])
        for src, dst in zip(path, path[1:]):
            x1, y1 = to_canvas(src.x, src.y, canvas.width, canvas.height)
            x2, y2 = to_canvas(dst.x, dst.y, canvas.width, canvas.height)
            overlay_root.elements.append(
                svg.Line(
                    class_="path-segment",
                    x1=x1,
                    y1=y1,
                    x2=x2,
                    y2=y2,
                    stroke=self.overlay_style["stroke"],
                    stroke_width=self.overlay_style["stroke_width"],
                    stroke_dasharray=self.overlay_style["stroke_dasharray"],
                )
            )
        return overlay_root
