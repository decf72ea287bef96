"""Relationship queries around a focal vertex.

Closures are computed with an explicit worklist and a visited set, so a
cycle stops expanding once all its members are marked. The focal vertex is
always removed from the result, even when a cycle leads back to it; use the
``*_and_self`` variants to include it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from subjectgraph.domain.types import Relation
from subjectgraph.graph.index import as_index, children, parents

if TYPE_CHECKING:
    from subjectgraph.domain.types import VertexId
    from subjectgraph.graph.index import EdgeSource


def _closure(
    vertex: VertexId,
    step: Callable[[VertexId], set[VertexId]],
) -> set[VertexId]:
    found: set[VertexId] = set()
    stack = list(step(vertex))
    while stack:
        current = stack.pop()
        if current in found:
            continue
        found.add(current)
        stack.extend(v for v in step(current) if v not in found)
    found.discard(vertex)
    return found


def ancestors(vertex: VertexId, edges: EdgeSource) -> set[VertexId]:
    """Every vertex with a directed path to *vertex*."""
    return _closure(vertex, as_index(edges).parents)


def descendants(vertex: VertexId, edges: EdgeSource) -> set[VertexId]:
    """Every vertex reachable from *vertex* along edge direction."""
    return _closure(vertex, as_index(edges).children)


def siblings(vertex: VertexId, edges: EdgeSource) -> set[VertexId]:
    """Other children of any parent of *vertex*."""
    index = as_index(edges)
    found: set[VertexId] = set()
    for parent in index.parents(vertex):
        found |= index.children(parent)
    found.discard(vertex)
    return found


def cousins(vertex: VertexId, edges: EdgeSource) -> set[VertexId]:
    """Descendants of every sibling of *vertex*."""
    index = as_index(edges)
    found: set[VertexId] = set()
    for sibling in siblings(vertex, index):
        found |= descendants(sibling, index)
    found.discard(vertex)
    return found


def related(vertex: VertexId, edges: EdgeSource) -> set[VertexId]:
    """Ancestors and descendants combined."""
    index = as_index(edges)
    return ancestors(vertex, index) | descendants(vertex, index)


def ancestors_and_self(vertex: VertexId, edges: EdgeSource) -> set[VertexId]:
    return ancestors(vertex, edges) | {vertex}


def descendants_and_self(vertex: VertexId, edges: EdgeSource) -> set[VertexId]:
    return descendants(vertex, edges) | {vertex}


def siblings_and_self(vertex: VertexId, edges: EdgeSource) -> set[VertexId]:
    return siblings(vertex, edges) | {vertex}


def cousins_and_self(vertex: VertexId, edges: EdgeSource) -> set[VertexId]:
    return cousins(vertex, edges) | {vertex}


def related_and_self(vertex: VertexId, edges: EdgeSource) -> set[VertexId]:
    return related(vertex, edges) | {vertex}


def isolated_nodes(edges: EdgeSource) -> set[VertexId]:
    """Vertices with no ancestors and no descendants.

    Only a vertex whose every edge is a self-loop qualifies, since any
    other edge gives it a parent or a child.
    """
    index = as_index(edges)
    return {v for v in index.vertices() if not related(v, index)}


_RELATIONS: dict[Relation, Callable[[VertexId, EdgeSource], set[VertexId]]] = {
    Relation.PARENTS: parents,
    Relation.CHILDREN: children,
    Relation.ANCESTORS: ancestors,
    Relation.DESCENDANTS: descendants,
    Relation.SIBLINGS: siblings,
    Relation.COUSINS: cousins,
    Relation.RELATED: related,
}


def relation(
    name: Relation | str,
    vertex: VertexId,
    edges: EdgeSource,
    *,
    include_self: bool = False,
) -> set[VertexId]:
    """Look up a relationship set by name.

    Raises:
        ValueError: If *name* is not a :class:`Relation`.
    """
    func = _RELATIONS[Relation(name)]
    found = func(vertex, edges)
    if include_self:
        found = found | {vertex}
    return found
