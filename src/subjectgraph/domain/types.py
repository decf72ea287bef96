"""Vertex, edge, and selector types.

Edges are plain ``(source, target)`` named tuples so that any iterable of
pairs works wherever an edge list is expected. ``source`` is the
prerequisite, ``target`` the subject that requires it.
"""

from __future__ import annotations

from enum import StrEnum
from typing import NamedTuple

type VertexId = int | str


class Edge(NamedTuple):
    """A directed prerequisite relation."""

    source: VertexId
    target: VertexId


class Route(NamedTuple):
    """Shortest path between one pair of odd-degree vertices."""

    source: VertexId
    target: VertexId
    path: list[VertexId]


class TraversalMode(StrEnum):
    """Direction selector for :func:`subjectgraph.graph.traversal.traverse`."""

    ANCESTORS = "ancestors"
    DESCENDANTS = "descendants"
    WEB = "web"
    TREE = "tree"


class Relation(StrEnum):
    """Named relationship sets around a focal vertex."""

    PARENTS = "parents"
    CHILDREN = "children"
    ANCESTORS = "ancestors"
    DESCENDANTS = "descendants"
    SIBLINGS = "siblings"
    COUSINS = "cousins"
    RELATED = "related"


class SearchStrategy(StrEnum):
    """Visit-order searches over the undirected view."""

    DFS = "dfs"
    BFS = "bfs"
    MAZE = "maze"
