"""Tests for the dataset loader."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from subjectgraph.config.settings import SgSettings
from subjectgraph.domain.records import NodeRecord
from subjectgraph.domain.types import Edge
from subjectgraph.infrastructure.dataset import Dataset, DatasetError, load_edges, load_nodes


class TestLoadEdges:
    def test_keeps_order_and_duplicates(self, tmp_path: Path) -> None:
        path = tmp_path / "edges.json"
        path.write_text(json.dumps([{"source": 1, "target": 2}, {"source": 1, "target": 2}]))
        assert load_edges(path) == (Edge(1, 2), Edge(1, 2))

    def test_string_ids(self, tmp_path: Path) -> None:
        path = tmp_path / "edges.json"
        path.write_text(json.dumps([{"source": "COMP1511", "target": "COMP2521"}]))
        assert load_edges(path) == (Edge("COMP1511", "COMP2521"),)

    def test_extra_keys_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "edges.json"
        path.write_text(json.dumps([{"source": 1, "target": 2, "weight": 3}]))
        assert load_edges(path) == (Edge(1, 2),)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DatasetError, match="file not found"):
            load_edges(tmp_path / "edges.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "edges.json"
        path.write_text("[{")
        with pytest.raises(DatasetError, match="invalid JSON"):
            load_edges(path)

    def test_not_an_array(self, tmp_path: Path) -> None:
        path = tmp_path / "edges.json"
        path.write_text('{"source": 1}')
        with pytest.raises(DatasetError, match="expected a JSON array"):
            load_edges(path)

    def test_malformed_entry(self, tmp_path: Path) -> None:
        path = tmp_path / "edges.json"
        path.write_text(json.dumps([{"source": 1, "target": 2}, {"source": 1}]))
        with pytest.raises(DatasetError, match="malformed edge at index 1") as exc_info:
            load_edges(path)
        assert exc_info.value.path == path


class TestLoadNodes:
    def test_optional_fields(self, tmp_path: Path) -> None:
        path = tmp_path / "nodes.json"
        path.write_text(json.dumps([{"id": 1, "label": "Programming 1"}, {"id": 2}]))
        nodes = load_nodes(path)
        assert nodes[1] == NodeRecord(id=1, label="Programming 1")
        assert nodes[2].course is None

    def test_later_duplicate_wins(self, tmp_path: Path) -> None:
        path = tmp_path / "nodes.json"
        path.write_text(json.dumps([{"id": 1, "label": "old"}, {"id": 1, "label": "new"}]))
        assert load_nodes(path)[1].label == "new"

    def test_missing_id(self, tmp_path: Path) -> None:
        path = tmp_path / "nodes.json"
        path.write_text(json.dumps([{"label": "nameless"}]))
        with pytest.raises(DatasetError, match="malformed node at index 0"):
            load_nodes(path)


class TestDataset:
    def test_lazy_load(self, dataset: Dataset) -> None:
        assert len(dataset.edges) == 8
        assert len(dataset.index) == 8
        assert dataset.nodes[3].label == "Data Structures"

    def test_missing_nodes_file_means_no_labels(
        self, make_data_root: Callable[..., Path]
    ) -> None:
        root = make_data_root([(1, 2)])
        dataset = Dataset(SgSettings.from_cli(data_root=root))
        assert dataset.nodes == {}
        assert dataset.describe(1) == {"id": 1, "label": "", "course": "", "url": ""}

    def test_missing_edges_file_is_error(self, tmp_path: Path) -> None:
        dataset = Dataset(SgSettings.from_cli(data_root=tmp_path / "nowhere"))
        with pytest.raises(DatasetError):
            dataset.index  # noqa: B018

    def test_custom_file_names(self, tmp_path: Path) -> None:
        (tmp_path / "prereqs.json").write_text(json.dumps([{"source": 1, "target": 2}]))
        (tmp_path / "subjectgraph.toml").write_text('[data]\nedges_file = "prereqs.json"\n')
        dataset = Dataset(SgSettings.from_cli(data_root=tmp_path))
        assert dataset.edges == (Edge(1, 2),)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(3, 3), ("3", 3), ("99", None), ("abc", None), (99, None)],
    )
    def test_resolve_int_ids(self, dataset: Dataset, raw: str | int, expected: int | None) -> None:
        assert dataset.resolve_id(raw) == expected

    def test_resolve_string_ids(self) -> None:
        dataset = Dataset.from_edges(SgSettings.from_cli(), [("COMP1511", "COMP2521")])
        assert dataset.resolve_id("COMP1511") == "COMP1511"
        assert dataset.resolve_id("1511") is None

    def test_describe(self, dataset: Dataset) -> None:
        assert dataset.describe(4) == {
            "id": 4,
            "label": "Discrete Maths",
            "course": "MATH",
            "url": "",
        }
