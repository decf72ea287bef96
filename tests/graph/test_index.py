"""Tests for GraphIndex and the adjacency lookups."""

from __future__ import annotations

from subjectgraph.domain.types import Edge
from subjectgraph.graph.index import (
    GraphIndex,
    as_index,
    children,
    edge_list,
    everything,
    parents,
    vertex_order,
)

CHAIN = [(1, 2), (2, 3), (1, 4)]


class TestParentsChildren:
    def test_parents(self) -> None:
        assert parents(3, CHAIN) == {2}
        assert parents(1, CHAIN) == set()

    def test_children(self) -> None:
        assert children(1, CHAIN) == {2, 4}
        assert children(3, CHAIN) == set()

    def test_duplicate_edges_collapse(self) -> None:
        edges = [(1, 2), (1, 2), (3, 2)]
        assert parents(2, edges) == {1, 3}
        assert children(1, edges) == {2}

    def test_absent_vertex_is_empty(self) -> None:
        assert parents(5, [(1, 2)]) == set()
        assert children(5, [(1, 2)]) == set()

    def test_self_loop_is_own_parent_and_child(self) -> None:
        edges = [(1, 1), (1, 2)]
        assert parents(1, edges) == {1}
        assert children(1, edges) == {1, 2}

    def test_edge_order_does_not_matter(self) -> None:
        assert children(1, list(reversed(CHAIN))) == children(1, CHAIN)


class TestEverything:
    def test_collects_sources_and_targets(self) -> None:
        assert everything(CHAIN) == {1, 2, 3, 4}

    def test_vertex_only_exists_through_edges(self) -> None:
        assert 5 not in everything([(1, 2)])

    def test_empty(self) -> None:
        assert everything([]) == set()


class TestGraphIndex:
    def test_edges_keep_order_and_duplicates(self) -> None:
        index = GraphIndex([(1, 2), (1, 2), (2, 3)])
        assert index.edges == (Edge(1, 2), Edge(1, 2), Edge(2, 3))

    def test_contains_and_len(self) -> None:
        index = GraphIndex(CHAIN)
        assert 3 in index
        assert 9 not in index
        assert len(index) == 4

    def test_neighbors_follow_edge_order(self) -> None:
        index = GraphIndex([(3, 1), (1, 2), (4, 1)])
        assert index.neighbors(1) == [3, 2, 4]

    def test_neighbors_deduplicated(self) -> None:
        index = GraphIndex([(1, 2), (2, 1), (1, 2)])
        assert index.neighbors(1) == [2]

    def test_successors_follow_edge_order(self) -> None:
        index = GraphIndex([(1, 3), (1, 2)])
        assert index.successors(1) == [3, 2]
        assert index.successors(9) == []

    def test_degree_ignores_self_loop(self) -> None:
        index = GraphIndex([(1, 1), (1, 2), (3, 1)])
        assert index.degree(1) == 2
        assert index.degree(2) == 1
        assert index.degree(9) == 0

    def test_accepts_edge_tuples(self) -> None:
        index = GraphIndex([Edge(1, 2)])
        assert index.children(1) == {2}

    def test_string_ids(self) -> None:
        index = GraphIndex([("COMP1511", "COMP2521")])
        assert index.parents("COMP2521") == {"COMP1511"}

    def test_as_index_reuses_existing(self) -> None:
        index = GraphIndex(CHAIN)
        assert as_index(index) is index
        assert isinstance(as_index(CHAIN), GraphIndex)

    def test_edge_list_from_index_and_iterable(self) -> None:
        index = GraphIndex(CHAIN)
        assert edge_list(index) is index.edges
        assert edge_list(iter(CHAIN)) == tuple(Edge(s, t) for s, t in CHAIN)

    def test_input_list_not_mutated(self) -> None:
        edges = [(1, 2), (2, 3)]
        GraphIndex(edges).vertices()
        assert edges == [(1, 2), (2, 3)]


def test_vertex_order_handles_mixed_ids() -> None:
    assert sorted(["b", 3, "a", 1], key=vertex_order) == [1, 3, "a", "b"]
