from enum import Enum
from typing import List, Optional, Tuple
from pydantic import BaseModel, Field, model_validator, field_validator

class NodeType(str, Enum):
    VILLAGE = "village"
    TOWN = "town"
    CITY = "city"
    CAPITAL = "capital"

    @property
    def size(self) -> int:
        """Marker diameter in pixels."""
        return _NODE_SIZES[self]

    @property
    def radius(self) -> int:
        return _NODE_SIZES[self] // 2

_NODE_SIZES = {
    NodeType.VILLAGE: 6,
    NodeType.TOWN: 10,
    NodeType.CITY: 14,
    NodeType.CAPITAL: 20,
}

class Node(BaseModel):
    model_config = {"frozen": True}

    id: int
    # Normalized position; scaled to the canvas at draw time.
    x: float = Field(ge=0.0, le=1.0)
    y: float = Field(ge=0.0, le=1.0)
    type: NodeType = NodeType.TOWN
    name: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

class Edge(BaseModel):
    model_config = {"frozen": True}

    id: int
    source: int
    target: int
    # None falls back to the renderer's edge stroke.
    color: Optional[str] = None

    @field_validator("color")
    @classmethod
    def color_not_blank(cls, v: Optional[str]):
        if v is None:
            return v
        if not v.strip():
            raise ValueError("edge color must not be empty")
        return v.strip()

class MapDocument(BaseModel):
    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)

    @field_validator("nodes")
    @classmethod
    def node_ids_unique(cls, v: List[Node]):
        ids = [n.id for n in v]
        if len(ids) != len(set(ids)):
            raise ValueError("node id values must be unique")
        return v

    @field_validator("edges")
    @classmethod
    def edge_ids_unique(cls, v: List[Edge]):
        ids = [e.id for e in v]
        if len(ids) != len(set(ids)):
            raise ValueError("edge id values must be unique")
        return v

    @model_validator(mode="after")
    def edge_endpoints_exist(self):
        known = {n.id for n in self.nodes}
        for edge in self.edges:
            missing = [i for i in (edge.source, edge.target) if i not in known]
            if missing:
                raise ValueError(
                    f"edge {edge.id} references unknown node id(s) {missing}"
                )
        return self
