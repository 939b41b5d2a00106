"""
CityMap ties the graph model, the renderer and the hit tester together behind
the calls a UI makes: mutate, redraw, hit test and stage a path.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Mapping, Optional, Tuple

from .canvas import Canvas
from .errors import DataLoadError
from .geometry import Number, Point
from .graph_model import GraphModel
from .hit_test import HitTester
from .model import Edge, Node
from .render import RenderEngine
from .store import MapStore

logger = logging.getLogger(__name__)

__all__ = ["CityMap"]


class CityMap:
    """
    Interactive map of cities and routes.

    Every mutation and every staged path requests a repaint: `needs_redraw`
    is set and the optional `on_change` callback is invoked with the map.
    The callback is where a host toolkit schedules its paint. `redraw`
    resets the flag.
    """

    def __init__(
        self,
        width: Number = 800,
        height: Number = 400,
        *,
        on_change: Optional[Callable[["CityMap"], None]] = None,
        hit_tester: Optional[HitTester] = None,
        **render_kwargs,
    ) -> None:
        self.width = width
        self.height = height
        self.on_change = on_change
        self.model = GraphModel()
        self.engine = RenderEngine(**render_kwargs)
        self.hit_tester = hit_tester or HitTester()
        self.needs_redraw = False

    # ------------------------------------------------------------------ #
    # Loading
    # ------------------------------------------------------------------ #
    @staticmethod
    def _fetch(store: MapStore) -> Tuple[List[Node], List[Edge]]:
        fetch_all = getattr(store, "fetch_all", None)
        try:
            if fetch_all is not None:
                nodes, edges = fetch_all()
                nodes, edges = list(nodes), list(edges)
            else:
                nodes = list(store.fetch_nodes())
                edges = list(store.fetch_edges())
        except DataLoadError:
            raise
        except Exception as exc:
            logger.warning("Data store %r failed: %s", store, exc)
            raise DataLoadError(f"Loading the map failed: {exc}") from exc
        return nodes, edges

    def load(self, store: MapStore) -> None:
        """
        Add every node and edge the store returns.

        Both sets are fetched before anything is inserted, so a failing store
        leaves the current graph untouched.
        """
        nodes, edges = self._fetch(store)
        for node in nodes:
            self.model.insert_node(node)
        for edge in edges:
            self.model.insert_edge(edge)
        logger.info("Loaded %d nodes and %d edges", len(nodes), len(edges))
        self._changed()

    def reload(self, store: MapStore) -> None:
        """Replace the whole graph with the store's contents."""
        nodes, edges = self._fetch(store)
        self.model.clear()
        for node in nodes:
            self.model.insert_node(node)
        for edge in edges:
            self.model.insert_edge(edge)
        logger.info("Reloaded map with %d nodes and %d edges", len(nodes), len(edges))
        self._changed()

    @classmethod
    def from_store(cls, store: MapStore, **kwargs) -> "CityMap":
        city_map = cls(**kwargs)
        city_map.load(store)
        return city_map

    # ------------------------------------------------------------------ #
    # Mutation
    # ------------------------------------------------------------------ #
    def _changed(self) -> None:
        self.needs_redraw = True
        if self.on_change is not None:
            self.on_change(self)

    def insert_node(self, node: Node) -> None:
        self.model.insert_node(node)
        self._changed()

    def remove_node(self, node: Node | int) -> None:
        self.model.remove_node(node.id if isinstance(node, Node) else node)
        self._changed()

    def insert_edge(self, edge: Edge) -> None:
        self.model.insert_edge(edge)
        self._changed()

    def remove_edge(self, edge: Edge | int) -> None:
        self.model.remove_edge(edge.id if isinstance(edge, Edge) else edge)
        self._changed()

    def clear(self) -> None:
        self.model.clear()
        self._changed()

    def set_path_overlay(self, nodes: Iterable[Node]) -> None:
        """Stage a path to highlight on the next redraw only."""
        self.engine.overlay.arm(nodes)
        self._changed()

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    @property
    def nodes(self) -> Mapping[int, Node]:
        return self.model.snapshot_nodes()

    @property
    def edges(self) -> Mapping[int, Edge]:
        return self.model.snapshot_edges()

    def node_count(self) -> int:
        return self.model.node_count()

    def find_nearest(self, point: Point) -> Optional[Node]:
        """Return the node under a normalized point, or None."""
        return self.hit_tester.find_nearest(
            point, self.model.snapshot_nodes().values(), self.width
        )

    @staticmethod
    def preferred_size(width: int, height: int) -> Tuple[int, int]:
        """Largest 2:1 (width:height) size derived from the available area."""
        size = min(width, height)
        return size, size // 2

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #
    def redraw(self, canvas: Optional[Canvas] = None) -> Canvas:
        """
        Repaint the map into `canvas`, or into a fresh canvas of the map's
        size. The canvas size drives node placement for this frame.
        """
        if canvas is None:
            canvas = Canvas(self.width, self.height)
        self.engine.redraw(canvas, self.model.snapshot_nodes(), self.model.snapshot_edges())
        self.needs_redraw = False
        return canvas

    def to_string(self, *, pretty: bool = True) -> str:
        return self.redraw().to_string(pretty=pretty)

    def write(self, path, *, pretty: bool = True) -> None:
        self.redraw().write(path, pretty=pretty)

