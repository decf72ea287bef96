"""Traversal engine — fixed-point reachability and bounded visit-order searches.

``traverse`` repeats full sweeps over the edge list until nothing new is
added: O(|edges| x diameter). ``dfs``/``bfs``/``maze`` treat the graph as
undirected and return vertices in visit order, each at most once.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from subjectgraph.domain.types import TraversalMode
from subjectgraph.graph.index import as_index, edge_list

if TYPE_CHECKING:
    from subjectgraph.domain.types import VertexId
    from subjectgraph.graph.index import EdgeSource


def _sweep(vertex: VertexId, edges: EdgeSource, mode: TraversalMode) -> set[VertexId]:
    forward = mode in (TraversalMode.DESCENDANTS, TraversalMode.WEB)
    backward = mode in (TraversalMode.ANCESTORS, TraversalMode.WEB)

    visited: set[VertexId] = {vertex}
    items = edge_list(edges)
    changed = True
    while changed:
        changed = False
        for source, target in items:
            if forward and source in visited and target not in visited:
                visited.add(target)
                changed = True
            if backward and target in visited and source not in visited:
                visited.add(source)
                changed = True
    return visited


def traverse(
    vertex: VertexId,
    edges: EdgeSource,
    mode: TraversalMode | str = TraversalMode.TREE,
) -> set[VertexId]:
    """Vertices reachable from *vertex* under *mode*, excluding *vertex*.

    ``ancestors``/``descendants`` follow edges against/along their
    direction, ``web`` ignores direction, and ``tree`` is the union of the
    ancestors and descendants sweeps.

    Raises:
        ValueError: If *mode* is not a :class:`TraversalMode`.
    """
    mode = TraversalMode(mode)
    if mode is TraversalMode.TREE:
        reached = _sweep(vertex, edges, TraversalMode.ANCESTORS)
        reached |= _sweep(vertex, edges, TraversalMode.DESCENDANTS)
    else:
        reached = _sweep(vertex, edges, mode)
    reached.discard(vertex)
    return reached


def _check_depth(max_depth: int, *, name: str = "max_depth") -> None:
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        msg = f"{name} must be an integer, got {type(max_depth).__name__}"
        raise ValueError(msg)
    if max_depth < 0:
        msg = f"{name} must be >= 0, got {max_depth}"
        raise ValueError(msg)


def dfs(start: VertexId, max_depth: int, edges: EdgeSource) -> list[VertexId]:
    """Depth-first preorder within *max_depth* hops of *start*.

    The first visit wins: a vertex reached by a long route is not revisited
    when a shorter route to it turns up later, so its neighbours may be
    left unexplored if the depth budget ran out on that first visit.
    """
    _check_depth(max_depth)
    index = as_index(edges)
    if start not in index:
        return []

    visited: set[VertexId] = set()
    order: list[VertexId] = []
    stack: list[tuple[VertexId, int]] = [(start, max_depth)]
    while stack:
        vertex, remaining = stack.pop()
        if vertex in visited:
            continue
        visited.add(vertex)
        order.append(vertex)
        if remaining == 0:
            continue
        # Reversed so the first neighbour is explored first.
        for neighbor in reversed(index.neighbors(vertex)):
            if neighbor not in visited:
                stack.append((neighbor, remaining - 1))
    return order


def bfs(
    start: VertexId,
    edges: EdgeSource,
    *,
    max_depth: int | None = None,
) -> list[VertexId]:
    """Breadth-first visit order from *start*, optionally depth-bounded."""
    if max_depth is not None:
        _check_depth(max_depth)
    index = as_index(edges)
    if start not in index:
        return []

    visited: set[VertexId] = set()
    order: list[VertexId] = []
    queue: deque[tuple[VertexId, int]] = deque([(start, 0)])
    while queue:
        vertex, depth = queue.popleft()
        if vertex in visited:
            continue
        visited.add(vertex)
        order.append(vertex)
        if max_depth is not None and depth >= max_depth:
            continue
        for neighbor in index.neighbors(vertex):
            if neighbor not in visited:
                queue.append((neighbor, depth + 1))
    return order


def maze(start: VertexId, end: VertexId, edges: EdgeSource) -> list[VertexId]:
    """Breadth-first exploration order from *start* until *end* is reached.

    This is the order in which vertices were explored, not a path. If *end*
    is unreachable every vertex connected to *start* is returned.
    """
    index = as_index(edges)
    if start not in index:
        return []

    visited: set[VertexId] = set()
    order: list[VertexId] = []
    queue: deque[VertexId] = deque([start])
    while queue:
        vertex = queue.popleft()
        if vertex in visited:
            continue
        visited.add(vertex)
        order.append(vertex)
        if vertex == end:
            break
        queue.extend(n for n in index.neighbors(vertex) if n not in visited)
    return order
