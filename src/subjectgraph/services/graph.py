"""GraphService — relationship, traversal, path, and route queries.

Thin wrappers over :mod:`subjectgraph.graph` that resolve CLI ids against
the dataset, translate engine ``ValueError``s into error results, and
attach node labels for display. All queries share the dataset's prebuilt
:class:`~subjectgraph.graph.index.GraphIndex`.
"""

from __future__ import annotations

from typing import Any

from subjectgraph.domain.types import Relation, SearchStrategy, TraversalMode
from subjectgraph.graph import (
    bfs,
    dfs,
    everything,
    has_cycle,
    isolated_nodes,
    maze,
    odd_vertices,
    postman,
    postman_tour,
    relation,
    shortest_path,
    traverse,
    undirected,
)
from subjectgraph.graph.index import as_index
from subjectgraph.services.base import BaseService
from subjectgraph.services.result import (
    INVALID_DEPTH,
    INVALID_MODE,
    NO_PATH,
    ServiceResult,
)
from subjectgraph.services.telemetry import trace_span, traced


class GraphService(BaseService):
    """Handles graph queries around a focal vertex."""

    # ------------------------------------------------------------------
    # relatives: named relationship sets
    # ------------------------------------------------------------------

    @traced
    def relatives(
        self,
        vertex: str | int,
        relation_name: Relation | str = Relation.RELATED,
        *,
        include_self: bool = False,
    ) -> ServiceResult:
        """Parents, children, ancestors, descendants, siblings, cousins, or related.

        Args:
            vertex: Focal vertex id (CLI string or native id).
            relation_name: Which relationship set to compute.
            include_self: Add the focal vertex to the result.
        """
        op = "relatives"
        try:
            rel = Relation(relation_name)
        except ValueError:
            return ServiceResult.failure(
                op,
                INVALID_MODE,
                f"Unknown relation: {relation_name}",
                valid=[r.value for r in Relation],
            )

        found = self._lookup(op, vertex)
        if isinstance(found, ServiceResult):
            return found

        with trace_span(f"relation.{rel.value}") as span:
            members = relation(rel, found, self._dataset.index, include_self=include_self)
            if span:
                span.annotate("count", len(members))

        items = self._items(members)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "source_id": found,
                "relation": rel.value,
                "include_self": include_self,
                "count": len(items),
                "items": items,
            },
        )

    # ------------------------------------------------------------------
    # traverse: fixed-point reachability by mode
    # ------------------------------------------------------------------

    @traced
    def traverse(
        self,
        vertex: str | int,
        mode: TraversalMode | str = TraversalMode.TREE,
    ) -> ServiceResult:
        """Reachable set under ancestors/descendants/web/tree mode."""
        op = "traverse"
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

        with trace_span("sweep") as span:
            reached = traverse(found, self._dataset.index, mode)
            if span:
                span.annotate("count", len(reached))

        items = self._items(reached)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "source_id": found,
                "mode": mode.value,
                "count": len(items),
                "items": items,
            },
        )

    # ------------------------------------------------------------------
    # search: visit-order DFS / BFS / maze
    # ------------------------------------------------------------------

    @traced
    def search(
        self,
        start: str | int,
        strategy: SearchStrategy | str = SearchStrategy.DFS,
        *,
        depth: int | None = 2,
        end: str | int | None = None,
    ) -> ServiceResult:
        """Undirected visit order from *start*.

        Args:
            start: Vertex to search from.
            strategy: ``dfs`` (bounded by *depth*), ``bfs`` (optionally
                bounded by *depth*), or ``maze`` (stops at *end*).
            depth: Hop limit; required for dfs.
            end: Target vertex for maze.
        """
        op = "search"
        try:
            strategy = SearchStrategy(strategy)
        except ValueError:
            return ServiceResult.failure(
                op,
                INVALID_MODE,
                f"Unknown search strategy: {strategy}",
                valid=[s.value for s in SearchStrategy],
            )

        found = self._lookup(op, start, label="start")
        if isinstance(found, ServiceResult):
            return found

        index = self._dataset.index
        data: dict[str, Any] = {"source_id": found, "strategy": strategy.value}
        try:
            if strategy is SearchStrategy.MAZE:
                if end is None:
                    return ServiceResult.failure(op, INVALID_MODE, "maze search needs an end vertex")
                target = self._lookup(op, end, label="end")
                if isinstance(target, ServiceResult):
                    return target
                order = maze(found, target, index)
                data["target_id"] = target
                data["reached"] = bool(order) and order[-1] == target
            elif strategy is SearchStrategy.DFS:
                if depth is None:
                    depth = 0
                order = dfs(found, depth, index)
                data["depth"] = depth
            else:
                order = bfs(found, index, max_depth=depth)
                data["depth"] = depth
        except ValueError as exc:
            return ServiceResult.failure(op, INVALID_DEPTH, str(exc), depth=depth)

        steps = self._steps(order)
        for position, step in enumerate(steps):
            step["position"] = position
        data["count"] = len(steps)
        data["items"] = steps
        return ServiceResult(ok=True, op=op, data=data)

    # ------------------------------------------------------------------
    # path: fewest-hop chain between two vertices
    # ------------------------------------------------------------------

    @traced
    def path(
        self,
        source_id: str | int,
        target_id: str | int,
        *,
        undirected_view: bool = False,
    ) -> ServiceResult:
        """Shortest prerequisite chain from *source_id* to *target_id*.

        Args:
            source_id: Starting vertex.
            target_id: Destination vertex.
            undirected_view: Ignore edge direction.
        """
        op = "path"
        source = self._lookup(op, source_id, label="source")
        if isinstance(source, ServiceResult):
            return source
        target = self._lookup(op, target_id, label="target")
        if isinstance(target, ServiceResult):
            return target

        index = self._dataset.index
        if undirected_view:
            with trace_span("undirected_view"):
                index = as_index(undirected(index))

        with trace_span("shortest_path") as span:
            node_path = shortest_path(source, target, index)
            if span:
                span.annotate("hops", max(len(node_path) - 1, 0))

        if not node_path:
            return ServiceResult.failure(
                op,
                NO_PATH,
                f"No path between '{source}' and '{target}'",
                source=source,
                target=target,
                undirected=undirected_view,
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "source_id": source,
                "target_id": target,
                "undirected": undirected_view,
                "length": len(node_path) - 1,
                "steps": self._steps(node_path),
            },
        )

    # ------------------------------------------------------------------
    # whole-graph checks
    # ------------------------------------------------------------------

    @traced
    def cycles(self) -> ServiceResult:
        """Report whether the undirected view contains a cycle."""
        index = self._dataset.index
        return ServiceResult(
            ok=True,
            op="has_cycle",
            data={"has_cycle": has_cycle(index), "vertex_count": len(index)},
        )

    @traced
    def postman(self) -> ServiceResult:
        """Pair odd-degree vertices and join each pair with a shortest path.

        Every odd vertex is paired with every other one; this is a naive
        approximation, not a minimum-weight matching.
        """
        index = self._dataset.index
        with trace_span("odd_vertices") as span:
            odd = odd_vertices(index)
            if span:
                span.annotate("count", len(odd))

        with trace_span("pair_paths") as span:
            routes = postman(index)
            if span:
                span.annotate("pairs", len(routes))

        warnings: list[str] = []
        unreachable = sum(1 for r in routes if not r.path)
        if unreachable:
            warnings.append(f"{unreachable} odd-vertex pair(s) lie in different components")

        return ServiceResult(
            ok=True,
            op="postman",
            data={
                "odd_vertices": odd,
                "count": len(routes),
                "routes": [
                    {"source": r.source, "target": r.target, "path": r.path}
                    for r in routes
                ],
                "tour": postman_tour(index),
            },
            warnings=warnings,
        )

    @traced
    def isolated(self) -> ServiceResult:
        """Vertices with no ancestors and no descendants."""
        items = self._items(isolated_nodes(self._dataset.index))
        return ServiceResult(
            ok=True,
            op="isolated",
            data={"count": len(items), "items": items},
        )

    @traced
    def overview(self) -> ServiceResult:
        """Vertex and edge counts plus the cycle flag."""
        index = self._dataset.index
        vertices = everything(index)
        return ServiceResult(
            ok=True,
            op="overview",
            data={
                "vertex_count": len(vertices),
                "edge_count": len(index.edges),
                "distinct_edge_count": index.digraph.number_of_edges(),
                "labelled_count": sum(1 for v in vertices if v in self._dataset.nodes),
                "has_cycle": has_cycle(index),
            },
        )
