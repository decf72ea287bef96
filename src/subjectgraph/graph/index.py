"""GraphIndex — lazy-built NetworkX adjacency over an immutable edge list.

Every engine function accepts either a raw edge iterable or a prebuilt
``GraphIndex``. Raw edges are indexed per call (O(|edges|)); callers that
issue many queries against the same data build the index once and pass it.
Duplicate edges collapse in the index, so results never repeat a vertex.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import networkx as nx

from subjectgraph.domain.types import Edge

if TYPE_CHECKING:
    from subjectgraph.domain.types import VertexId

type EdgeSource = Iterable[tuple[VertexId, VertexId]] | GraphIndex


class GraphIndex:
    """Read-only adjacency lookups, built on first access."""

    def __init__(self, edges: Iterable[tuple[VertexId, VertexId]]) -> None:
        self._edges: tuple[Edge, ...] = tuple(Edge(s, t) for s, t in edges)
        self._digraph: nx.DiGraph | None = None
        self._graph: nx.Graph | None = None

    @property
    def edges(self) -> tuple[Edge, ...]:
        """The edge list in file order, duplicates included."""
        return self._edges

    @property
    def digraph(self) -> nx.DiGraph:
        """Directed view. Successor/predecessor order follows the edge list."""
        if self._digraph is None:
            g: nx.DiGraph = nx.DiGraph()
            g.add_edges_from(self._edges)
            self._digraph = g
        return self._digraph

    @property
    def graph(self) -> nx.Graph:
        """Undirected view with neighbours in first-appearance edge order."""
        if self._graph is None:
            g: nx.Graph = nx.Graph()
            g.add_edges_from(self._edges)
            self._graph = g
        return self._graph

    def __contains__(self, vertex: object) -> bool:
        return vertex in self.digraph

    def __len__(self) -> int:
        return self.digraph.number_of_nodes()

    def vertices(self) -> set[VertexId]:
        return set(self.digraph.nodes)

    def parents(self, vertex: VertexId) -> set[VertexId]:
        if vertex not in self.digraph:
            return set()
        return set(self.digraph.predecessors(vertex))

    def children(self, vertex: VertexId) -> set[VertexId]:
        if vertex not in self.digraph:
            return set()
        return set(self.digraph.successors(vertex))

    def successors(self, vertex: VertexId) -> list[VertexId]:
        """Children in edge-list order (used where visit order matters)."""
        if vertex not in self.digraph:
            return []
        return list(self.digraph.successors(vertex))

    def neighbors(self, vertex: VertexId) -> list[VertexId]:
        """Parents and children interleaved in edge-list order."""
        if vertex not in self.graph:
            return []
        return list(self.graph.neighbors(vertex))

    def degree(self, vertex: VertexId) -> int:
        """Distinct undirected neighbours, not counting a self-loop."""
        return sum(1 for n in self.neighbors(vertex) if n != vertex)


def as_index(edges: EdgeSource) -> GraphIndex:
    """Return *edges* unchanged if already indexed, else index them."""
    if isinstance(edges, GraphIndex):
        return edges
    return GraphIndex(edges)


def edge_list(edges: EdgeSource) -> tuple[Edge, ...]:
    """Return the raw edge tuple behind *edges*."""
    if isinstance(edges, GraphIndex):
        return edges.edges
    return tuple(Edge(s, t) for s, t in edges)


def parents(vertex: VertexId, edges: EdgeSource) -> set[VertexId]:
    """Distinct ``v`` such that ``(v, vertex)`` is an edge."""
    return as_index(edges).parents(vertex)


def children(vertex: VertexId, edges: EdgeSource) -> set[VertexId]:
    """Distinct ``v`` such that ``(vertex, v)`` is an edge."""
    return as_index(edges).children(vertex)


def everything(edges: EdgeSource) -> set[VertexId]:
    """Every vertex that appears as a source or target."""
    return as_index(edges).vertices()


def vertex_order(vertex: VertexId) -> tuple[bool, VertexId]:
    """Sort key placing integer ids before string ids."""
    return (isinstance(vertex, str), vertex)
