"""Graph query engine — pure functions over an immutable edge list.

Every function takes either an iterable of ``(source, target)`` pairs or a
prebuilt :class:`GraphIndex`, and returns a fresh set or list. Unknown
vertex ids give empty results rather than errors.
"""

from subjectgraph.graph.index import GraphIndex, as_index, children, everything, parents
from subjectgraph.graph.paths import path_edges, shortest_path
from subjectgraph.graph.relations import (
    ancestors,
    ancestors_and_self,
    cousins,
    cousins_and_self,
    descendants,
    descendants_and_self,
    isolated_nodes,
    related,
    related_and_self,
    relation,
    siblings,
    siblings_and_self,
)
from subjectgraph.graph.routes import has_cycle, odd_vertices, postman, postman_tour
from subjectgraph.graph.traversal import bfs, dfs, maze, traverse
from subjectgraph.graph.views import induced_edges, undirected

__all__ = [
    "GraphIndex",
    "ancestors",
    "ancestors_and_self",
    "as_index",
    "bfs",
    "children",
    "cousins",
    "cousins_and_self",
    "descendants",
    "descendants_and_self",
    "dfs",
    "everything",
    "has_cycle",
    "induced_edges",
    "isolated_nodes",
    "maze",
    "odd_vertices",
    "parents",
    "path_edges",
    "postman",
    "postman_tour",
    "related",
    "related_and_self",
    "relation",
    "shortest_path",
    "siblings",
    "siblings_and_self",
    "traverse",
    "undirected",
]
