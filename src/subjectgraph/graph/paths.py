"""Shortest paths over the unweighted prerequisite graph.

Dijkstra-style expansion with a ``heapq`` priority queue of
``(hops, counter, path)`` entries. Every edge weighs 1, so this visits
vertices in BFS order; the counter breaks ties by enqueue order. Vertices
are marked visited when popped, so several candidate paths to the same
vertex may sit in the queue and the first one popped wins.
"""

from __future__ import annotations

import heapq
import itertools
from typing import TYPE_CHECKING

from subjectgraph.graph.index import as_index

if TYPE_CHECKING:
    from subjectgraph.domain.types import VertexId
    from subjectgraph.graph.index import EdgeSource


def shortest_path(
    source: VertexId,
    target: VertexId,
    edges: EdgeSource,
) -> list[VertexId]:
    """Fewest-hop directed path from *source* to *target*.

    Returns ``[source]`` when both ends are the same vertex and ``[]`` when
    *target* cannot be reached. Pass ``undirected(edges)`` to ignore edge
    direction.
    """
    if source == target:
        return [source]

    index = as_index(edges)
    counter = itertools.count()
    queue: list[tuple[int, int, list[VertexId]]] = [(0, next(counter), [source])]
    visited: set[VertexId] = set()

    while queue:
        hops, _, path = heapq.heappop(queue)
        vertex = path[-1]
        if vertex in visited:
            continue
        if vertex == target:
            return path
        visited.add(vertex)
        for neighbor in index.successors(vertex):
            if neighbor not in visited:
                heapq.heappush(queue, (hops + 1, next(counter), [*path, neighbor]))

    return []


def path_edges(path: list[VertexId]) -> list[tuple[VertexId, VertexId]]:
    """Consecutive ``(a, b)`` pairs along *path*."""
    return list(itertools.pairwise(path))
