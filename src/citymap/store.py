"""
Data stores that supply the node and edge sets of a map.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from pydantic import ValidationError

from .errors import DataLoadError
from .model import Edge, MapDocument, Node

logger = logging.getLogger(__name__)

__all__ = ["MapStore", "JsonMapStore", "MemoryMapStore"]


class MapStore(Protocol):
    def fetch_nodes(self) -> List[Node]: ...

    def fetch_edges(self) -> List[Edge]: ...


class MemoryMapStore:
    """Serve fixed node and edge lists."""

    def __init__(
        self,
        nodes: Optional[Sequence[Node]] = None,
        edges: Optional[Sequence[Edge]] = None,
    ) -> None:
        self.nodes = list(nodes or [])
        self.edges = list(edges or [])

    def fetch_nodes(self) -> List[Node]:
        return list(self.nodes)

    def fetch_edges(self) -> List[Edge]:
        return list(self.edges)


class JsonMapStore:
    """
    Read a map from a JSON document of the form
    ``{"nodes": [{"id", "x", "y", "type"}, ...], "edges": [{"id", "source", "target", "color"}, ...]}``.

    The file is re-read and validated on every fetch so a reload picks up
    changes on disk. `fetch_all` serves both sets from one read, so they
    always come from the same version of the file.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _document(self) -> MapDocument:
        try:
            data: Dict = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            logger.warning("Failed to read map file %s: %s", self.path, exc)
            raise DataLoadError(f"Could not read map file {self.path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            logger.warning("Map file %s is not valid JSON: %s", self.path, exc)
            raise DataLoadError(f"Map file {self.path} is not valid JSON: {exc}") from exc

        try:
            return MapDocument.model_validate(data)
        except ValidationError as exc:
            logger.warning("Map file %s failed validation: %s", self.path, exc)
            raise DataLoadError(f"Map file {self.path} is invalid:\n{exc}") from exc

    def fetch_nodes(self) -> List[Node]:
        return list(self._document().nodes)

    def fetch_edges(self) -> List[Edge]:
        return list(self._document().edges)

    def fetch_all(self) -> Tuple[List[Node], List[Edge]]:
        """Nodes and edges from a single read of the file."""
        doc = self._document()
        return list(doc.nodes), list(doc.edges)
