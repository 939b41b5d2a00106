"""
In-memory storage for the nodes and edges of a map.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping

from .model import Edge, Node

__all__ = ["GraphModel"]


class GraphModel:
    """
    Id-keyed node and edge storage.

    Both maps preserve insertion order, which fixes the order edges are routed
    and drawn in and the order hit tests visit nodes. Re-inserting an existing
    id replaces the item in place without moving it. Edge endpoints are not
    checked here; the renderer treats a dangling endpoint as a caller error.
    """

    def __init__(self) -> None:
        self._nodes: Dict[int, Node] = {}
        self._edges: Dict[int, Edge] = {}

    def insert_node(self, node: Node) -> None:
        self._nodes[node.id] = node

    def remove_node(self, node_id: int) -> None:
        self._nodes.pop(node_id, None)

    def insert_edge(self, edge: Edge) -> None:
        self._edges[edge.id] = edge

    def remove_edge(self, edge_id: int) -> None:
        self._edges.pop(edge_id, None)

    def clear(self) -> None:
        self._edges.clear()
        self._nodes.clear()

    def snapshot_nodes(self) -> Mapping[int, Node]:
        """Return a read-only copy of the node map."""
        return MappingProxyType(dict(self._nodes))

    def snapshot_edges(self) -> Mapping[int, Edge]:
        """Return a read-only copy of the edge map."""
        return MappingProxyType(dict(self._edges))

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)
