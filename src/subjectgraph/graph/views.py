"""Pure edge-list transforms."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from subjectgraph.domain.types import Edge
from subjectgraph.graph.index import edge_list

if TYPE_CHECKING:
    from subjectgraph.domain.types import VertexId
    from subjectgraph.graph.index import EdgeSource


def undirected(edges: EdgeSource) -> list[Edge]:
    """Every edge followed by its reverse.

    Append-only: reciprocal pairs already present are doubled again, so
    applying this twice is not the same as applying it once.
    """
    doubled: list[Edge] = []
    for source, target in edge_list(edges):
        doubled.append(Edge(source, target))
        doubled.append(Edge(target, source))
    return doubled


def induced_edges(vertices: Iterable[VertexId], edges: EdgeSource) -> list[Edge]:
    """Edges whose source and target are both in *vertices*."""
    keep = set(vertices)
    return [e for e in edge_list(edges) if e.source in keep and e.target in keep]
