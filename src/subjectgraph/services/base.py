"""BaseService — shared foundation for subjectgraph services.

Every service receives a :class:`Dataset` at construction time. The
Dataset provides the edge list, node payloads, and the shared graph index.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from subjectgraph.graph.index import vertex_order
from subjectgraph.services.result import NOT_FOUND, ServiceResult

if TYPE_CHECKING:
    from subjectgraph.domain.types import VertexId
    from subjectgraph.infrastructure.dataset import Dataset

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class GraphService(BaseService):
            def relatives(self, vertex: str, ...) -> ServiceResult:
                found = self._lookup("relatives", vertex)
                if isinstance(found, ServiceResult):
                    return found
                ...
    """

    def __init__(self, dataset: Dataset) -> None:
        self._dataset = dataset

    def _lookup(
        self,
        op: str,
        raw: str | int,
        *,
        label: str = "vertex",
    ) -> VertexId | ServiceResult:
        """Resolve *raw* to a vertex id, or return a NOT_FOUND result."""
        vertex = self._dataset.resolve_id(raw)
        if vertex is None:
            logger.debug("%s: %s %r not in graph", op, label, raw)
            return ServiceResult.failure(
                op,
                NOT_FOUND,
                f"Vertex '{raw}' ({label}) not found in graph",
                vertex=raw,
            )
        return vertex

    def _items(self, vertices: Any) -> list[dict[str, Any]]:
        """Sorted display payloads for a vertex collection."""
        return [self._dataset.describe(v) for v in sorted(vertices, key=vertex_order)]

    def _steps(self, vertices: list[VertexId]) -> list[dict[str, Any]]:
        """Display payloads for an ordered vertex sequence."""
        return [self._dataset.describe(v) for v in vertices]
