"""Dataset — lazy loader for the static node and edge files.

The Dataset is the single dependency injected into every service. It owns
the parsed edge list, the node payloads used for display, and the shared
:class:`~subjectgraph.graph.index.GraphIndex`. Everything is loaded on first
access and never changes afterwards, so ``--help`` and ``--version`` never
touch the data files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from subjectgraph.domain.records import EdgeRecord, NodeRecord
from subjectgraph.graph.index import GraphIndex

if TYPE_CHECKING:
    from subjectgraph.config.settings import SgSettings
    from subjectgraph.domain.types import Edge, VertexId

log = structlog.get_logger(__name__)


class DatasetError(Exception):
    """Raised when a data file is missing or malformed."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


def _read_array(path: Path) -> list[Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DatasetError(path, "file not found") from exc
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DatasetError(path, f"invalid JSON ({exc.msg}, line {exc.lineno})") from exc
    if not isinstance(payload, list):
        raise DatasetError(path, f"expected a JSON array, got {type(payload).__name__}")
    return payload


def load_edges(path: Path) -> tuple[Edge, ...]:
    """Parse ``edges.json`` into an immutable edge tuple.

    Raises:
        DatasetError: If the file is missing, not a JSON array, or any
            entry lacks an integer/string ``source`` or ``target``.
    """
    edges: list[Edge] = []
    for i, item in enumerate(_read_array(path)):
        try:
            edges.append(EdgeRecord.model_validate(item).to_edge())
        except ValidationError as exc:
            raise DatasetError(path, f"malformed edge at index {i}: {exc.errors()[0]['msg']}") from exc
    return tuple(edges)


def load_nodes(path: Path) -> dict[VertexId, NodeRecord]:
    """Parse ``nodes.json`` into an id -> record mapping.

    Later entries with a duplicate id replace earlier ones.
    """
    nodes: dict[VertexId, NodeRecord] = {}
    for i, item in enumerate(_read_array(path)):
        try:
            record = NodeRecord.model_validate(item)
        except ValidationError as exc:
            raise DatasetError(path, f"malformed node at index {i}: {exc.errors()[0]['msg']}") from exc
        nodes[record.id] = record
    return nodes


class Dataset:
    """Lazily loaded edges, node payloads, and graph index."""

    def __init__(self, settings: SgSettings) -> None:
        self._settings = settings
        self._edges: tuple[Edge, ...] | None = None
        self._nodes: dict[VertexId, NodeRecord] | None = None
        self._index: GraphIndex | None = None

    @classmethod
    def from_edges(
        cls,
        settings: SgSettings,
        edges: list[tuple[VertexId, VertexId]] | tuple[Edge, ...],
        nodes: list[NodeRecord] | None = None,
    ) -> Dataset:
        """Build a dataset from in-memory data (no file access)."""
        ds = cls(settings)
        ds._index = GraphIndex(edges)
        ds._edges = ds._index.edges
        ds._nodes = {n.id: n for n in nodes or []}
        return ds

    @property
    def root(self) -> Path:
        return self._settings.data_root

    @property
    def edges(self) -> tuple[Edge, ...]:
        if self._edges is None:
            self._edges = load_edges(self._settings.edges_path)
            log.debug("dataset.edges_loaded", count=len(self._edges))
        return self._edges

    @property
    def nodes(self) -> dict[VertexId, NodeRecord]:
        """Node payloads. A missing ``nodes.json`` means no labels."""
        if self._nodes is None:
            path = self._settings.nodes_path
            if path.is_file():
                self._nodes = load_nodes(path)
            else:
                log.debug("dataset.nodes_missing", path=str(path))
                self._nodes = {}
        return self._nodes

    @property
    def index(self) -> GraphIndex:
        """The shared index, built once from :attr:`edges`."""
        if self._index is None:
            self._index = GraphIndex(self.edges)
            log.debug("dataset.index_built", vertices=len(self._index))
        return self._index

    def resolve_id(self, raw: str | int) -> VertexId | None:
        """Map a CLI argument to a vertex id of the graph.

        Tries the value as given, then as an integer. Returns None when
        neither form is a vertex.
        """
        index = self.index
        if raw in index:
            return raw
        if isinstance(raw, str):
            try:
                as_int = int(raw)
            except ValueError:
                return None
            if as_int in index:
                return as_int
        return None

    def describe(self, vertex: VertexId) -> dict[str, Any]:
        """Display payload for one vertex (id plus any node fields)."""
        record = self.nodes.get(vertex)
        return {
            "id": vertex,
            "label": record.label if record and record.label else "",
            "course": record.course if record and record.course else "",
            "url": record.url if record and record.url else "",
        }
