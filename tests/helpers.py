from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path

from citymap import Edge, Node, NodeType

SVG_NS = {"svg": "http://www.w3.org/2000/svg"}


def node(node_id: int, x: float, y: float, node_type: NodeType = NodeType.TOWN, **kwargs) -> Node:
    return Node(id=node_id, x=x, y=y, type=node_type, **kwargs)


def edge(edge_id: int, source: int, target: int, color: str = "#1f77b4") -> Edge:
    return Edge(id=edge_id, source=source, target=target, color=color)


def triangle_nodes() -> list[Node]:
    return [
        node(1, 0.1, 0.2, NodeType.CAPITAL, name="Budapest"),
        node(2, 0.8, 0.2, NodeType.CITY, name="Debrecen"),
        node(3, 0.5, 0.9, NodeType.VILLAGE, name="Tata"),
    ]


def triangle_edges() -> list[Edge]:
    return [
        edge(10, 1, 2, "#d62728"),
        edge(11, 2, 3, "#2ca02c"),
        edge(12, 3, 1),
    ]


def map_document() -> dict:
    return {
        "nodes": [n.model_dump(mode="json") for n in triangle_nodes()],
        "edges": [e.model_dump(mode="json") for e in triangle_edges()],
    }


def parse_svg(svg_text: str) -> ET.Element:
    return ET.fromstring(svg_text)


def local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


def root_children_signature(root: ET.Element) -> list[tuple[str, str | None]]:
    out: list[tuple[str, str | None]] = []
    for child in list(root):
        out.append((local_name(child.tag), child.get("id")))
    return out


def write_json(path: Path, data: dict) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")
