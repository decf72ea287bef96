"""Tests for the undirected and induced-edge views."""

from __future__ import annotations

from collections import Counter

from subjectgraph.domain.types import Edge
from subjectgraph.graph.index import GraphIndex
from subjectgraph.graph.views import induced_edges, undirected

CHAIN = [(1, 2), (2, 3), (1, 4)]


class TestUndirected:
    def test_each_edge_followed_by_reverse(self) -> None:
        assert undirected(CHAIN) == [
            Edge(1, 2),
            Edge(2, 1),
            Edge(2, 3),
            Edge(3, 2),
            Edge(1, 4),
            Edge(4, 1),
        ]

    def test_twice_doubles_again(self) -> None:
        twice = undirected(undirected(CHAIN))
        assert len(twice) == 4 * len(CHAIN)
        assert Counter(twice)[(2, 1)] == 2

    def test_self_loop_doubles(self) -> None:
        assert undirected([(1, 1)]) == [Edge(1, 1), Edge(1, 1)]

    def test_input_not_mutated(self) -> None:
        edges = list(CHAIN)
        undirected(edges)
        assert edges == CHAIN

    def test_accepts_index(self) -> None:
        assert len(undirected(GraphIndex(CHAIN))) == 6


class TestInducedEdges:
    def test_both_endpoints_required(self) -> None:
        assert induced_edges({1, 2, 3}, CHAIN) == [Edge(1, 2), Edge(2, 3)]

    def test_keeps_duplicates_and_self_loops(self) -> None:
        edges = [(1, 2), (1, 2), (2, 2), (2, 3)]
        assert induced_edges([1, 2], edges) == [Edge(1, 2), Edge(1, 2), Edge(2, 2)]

    def test_empty_selection(self) -> None:
        assert induced_edges(set(), CHAIN) == []
