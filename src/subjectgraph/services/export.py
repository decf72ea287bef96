"""ExportService — render the subgraph around a focal vertex.

The vertex set is the traversal result plus the focal vertex; links are the
edges induced by that set (both endpoints present). Two formats:

- ``json`` — force-graph ``{"nodes": [...], "links": [...]}`` document
- ``dot`` — Graphviz DOT language
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from subjectgraph.domain.types import TraversalMode
from subjectgraph.graph import induced_edges, traverse
from subjectgraph.graph.index import vertex_order
from subjectgraph.services.base import BaseService
from subjectgraph.services.result import INVALID_FORMAT, INVALID_MODE, ServiceResult
from subjectgraph.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from subjectgraph.domain.types import Edge, VertexId

FORMATS = ("json", "dot")


def _dot_quote(value: object) -> str:
    """A DOT double-quoted string; embedded quotes are backslash-escaped."""
    return '"' + str(value).replace('"', '\\"') + '"'


class ExportService(BaseService):
    """Serialises filtered subgraphs for the renderer."""

    @traced
    def export_subgraph(
        self,
        vertex: str | int,
        *,
        mode: TraversalMode | str = TraversalMode.TREE,
        fmt: str = "json",
    ) -> ServiceResult:
        """Export the vertices reachable from *vertex* under *mode*.

        Returns the document as a string in ``data["content"]``.
        """
        op = "export_subgraph"
        if fmt not in FORMATS:
            return ServiceResult.failure(
                op,
                INVALID_FORMAT,
                f"Unknown export format: {fmt}",
                format=fmt,
                valid=list(FORMATS),
            )
        try:
            mode = TraversalMode(mode)
        except ValueError:
            return ServiceResult.failure(
                op,
                INVALID_MODE,
                f"Unknown traversal mode: {mode}",
                valid=[m.value for m in TraversalMode],
            )

        found = self._lookup(op, vertex)
        if isinstance(found, ServiceResult):
            return found

        index = self._dataset.index
        with trace_span("select") as span:
            members = traverse(found, index, mode) | {found}
            links = induced_edges(members, index)
            if span:
                span.annotate("nodes", len(members))
                span.annotate("links", len(links))

        ordered = sorted(members, key=vertex_order)
        if fmt == "dot":
            content = self._to_dot(ordered, links, focus=found)
        else:
            content = self._to_force_json(ordered, links)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "source_id": found,
                "mode": mode.value,
                "format": fmt,
                "node_count": len(ordered),
                "edge_count": len(links),
                "content": content,
            },
        )

    # ── Private helpers ───────────────────────────────────────────────

    def _to_force_json(self, vertices: list[VertexId], links: list[Edge]) -> str:
        nodes: list[dict[str, Any]] = []
        for vertex in vertices:
            record = self._dataset.nodes.get(vertex)
            node: dict[str, Any] = {"id": vertex}
            if record is not None:
                node.update(record.model_dump(exclude={"id"}, exclude_none=True))
            nodes.append(node)
        payload = {
            "nodes": nodes,
            "links": [{"source": e.source, "target": e.target} for e in links],
        }
        return json.dumps(payload, indent=2)

    def _to_dot(self, vertices: list[VertexId], links: list[Edge], *, focus: VertexId) -> str:
        lines = ["digraph subjects {", "  rankdir=LR;", "  node [shape=box];"]
        for vertex in vertices:
            record = self._dataset.nodes.get(vertex)
            label = f"{vertex}: {record.label}" if record and record.label else str(vertex)
            attrs = f"label={_dot_quote(label)}"
            if vertex == focus:
                attrs += " style=bold"
            lines.append(f"  {_dot_quote(vertex)} [{attrs}];")
        for edge in links:
            lines.append(f"  {_dot_quote(edge.source)} -> {_dot_quote(edge.target)};")
        lines.append("}")
        return "\n".join(lines) + "\n"
