"""
citymap package initialization.
Exports the CityMap facade, its building blocks, the data stores and the
resource helpers.
"""

from .city_map import CityMap
from .canvas import Canvas
from .edge_router import EdgeRouter, RoutedEdge
from .errors import CityMapError, DataLoadError
from .graph_model import GraphModel
from .hit_test import HitTester
from .model import Edge, MapDocument, Node, NodeType
from .render import OverlayState, PathOverlay, RenderEngine
from .store import JsonMapStore, MapStore, MemoryMapStore

from .resources import default_theme_css

__all__ = [
    "CityMap",
    "Canvas",
    "EdgeRouter",
    "RoutedEdge",
    "CityMapError",
    "DataLoadError",
    "GraphModel",
    "HitTester",
    "Edge",
    "MapDocument",
    "Node",
    "NodeType",
    "OverlayState",
    "PathOverlay",
    "RenderEngine",
    "JsonMapStore",
    "MapStore",
    "MemoryMapStore",
    "default_theme_css",
]
