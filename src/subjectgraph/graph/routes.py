"""Route inspection helpers — cycle detection and odd-vertex pairing.

``postman`` pairs *every* odd-degree vertex with every other one and joins
each pair with a shortest path. This is not minimum-weight perfect
matching, so the resulting tour is only an approximation of the classic
route-inspection answer.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from typing import TYPE_CHECKING

from subjectgraph.domain.types import Route
from subjectgraph.graph.index import as_index, vertex_order
from subjectgraph.graph.paths import shortest_path
from subjectgraph.graph.views import undirected

if TYPE_CHECKING:
    from subjectgraph.domain.types import VertexId
    from subjectgraph.graph.index import EdgeSource


def has_cycle(edges: EdgeSource) -> bool:
    """True if the undirected simple view of the graph has a cycle.

    Depth-first walk from every unvisited vertex with an explicit stack. A
    neighbour that is still on the stack, other than the vertex we just
    came from, closes a cycle. Self-loops count; parallel and reciprocal
    edges between the same pair do not.
    """
    index = as_index(edges)
    visited: set[VertexId] = set()

    for root in index.vertices():
        if root in visited:
            continue
        visited.add(root)
        on_stack: set[VertexId] = {root}
        stack: list[tuple[VertexId, VertexId | None, Iterator[VertexId]]] = [
            (root, None, iter(index.neighbors(root)))
        ]
        while stack:
            vertex, came_from, pending = stack[-1]
            for neighbor in pending:
                if neighbor == came_from:
                    continue
                if neighbor in on_stack:
                    return True
                if neighbor not in visited:
                    visited.add(neighbor)
                    on_stack.add(neighbor)
                    stack.append((neighbor, vertex, iter(index.neighbors(neighbor))))
                    break
            else:
                stack.pop()
                on_stack.discard(vertex)

    return False


def odd_vertices(edges: EdgeSource) -> list[VertexId]:
    """Vertices with an odd number of distinct neighbours, sorted."""
    index = as_index(edges)
    return sorted(
        (v for v in index.vertices() if index.degree(v) % 2 == 1),
        key=vertex_order,
    )


def postman(edges: EdgeSource) -> list[Route]:
    """Shortest undirected path between every pair of odd-degree vertices.

    Pairs come from :func:`itertools.combinations` over the sorted odd
    vertices; a pair in different components gets an empty path.
    """
    index = as_index(edges)
    both_ways = as_index(undirected(index))
    return [
        Route(a, b, shortest_path(a, b, both_ways))
        for a, b in itertools.combinations(odd_vertices(index), 2)
    ]


def postman_tour(edges: EdgeSource) -> list[VertexId]:
    """All vertices on any :func:`postman` route, first occurrence order."""
    seen: dict[VertexId, None] = {}
    for route in postman(edges):
        for vertex in route.path:
            seen.setdefault(vertex, None)
    return list(seen)
