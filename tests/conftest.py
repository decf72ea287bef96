"""Shared pytest fixtures and sample data for subjectgraph tests."""

from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from subjectgraph.config.settings import SgSettings
from subjectgraph.infrastructure.dataset import Dataset
from subjectgraph.services.telemetry import disable_telemetry

# 1 -> 2 -> 3 -> 5 and 1 -> 4 -> 5 (an undirected cycle), a duplicated
# 1 -> 2, a separate 6 -> 7 component, and a self-loop on 8.
SAMPLE_EDGES: list[tuple[int, int]] = [
    (1, 2),
    (2, 3),
    (1, 4),
    (4, 5),
    (3, 5),
    (1, 2),
    (6, 7),
    (8, 8),
]

SAMPLE_NODES: list[dict[str, Any]] = [
    {"id": 1, "label": "Programming 1", "course": "COMP", "url": "https://example.edu/1"},
    {"id": 2, "label": "Programming 2", "course": "COMP"},
    {"id": 3, "label": "Data Structures", "course": "COMP"},
    {"id": 4, "label": "Discrete Maths", "course": "MATH"},
    {"id": 5, "label": "Algorithms", "course": "COMP"},
    {"id": 6, "label": "Calculus 1", "course": "MATH"},
    {"id": 7, "label": "Calculus 2", "course": "MATH"},
]


def write_dataset(
    root: Path,
    edges: list[tuple[Any, Any]],
    nodes: list[dict[str, Any]] | None = None,
) -> Path:
    """Write ``edges.json`` (and ``nodes.json`` if given) under *root*."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "edges.json").write_text(
        json.dumps([{"source": s, "target": t} for s, t in edges]),
        encoding="utf-8",
    )
    if nodes is not None:
        (root / "nodes.json").write_text(json.dumps(nodes), encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def _reset_context() -> Generator[None]:
    """Telemetry and log bindings live in ContextVars; reset them per test."""
    yield
    disable_telemetry()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Temporary directory holding the sample edges and nodes files."""
    return write_dataset(tmp_path, SAMPLE_EDGES, SAMPLE_NODES)


@pytest.fixture
def settings(data_root: Path) -> SgSettings:
    return SgSettings.from_cli(data_root=data_root)


@pytest.fixture
def dataset(settings: SgSettings) -> Dataset:
    """Dataset over the sample files (loaded lazily on first access)."""
    return Dataset(settings)


@pytest.fixture
def _isolated_data(data_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the sample data root so the CLI finds it by default.

    Use via ``@pytest.mark.usefixtures("_isolated_data")`` on command test
    classes.
    """
    monkeypatch.delenv("SUBJECTGRAPH_CONFIG", raising=False)
    monkeypatch.chdir(data_root)


@pytest.fixture
def sample_edges() -> list[tuple[int, int]]:
    return list(SAMPLE_EDGES)


@pytest.fixture
def make_data_root(tmp_path: Path):  # noqa: ANN201
    """Factory writing a custom dataset to a fresh directory under tmp_path."""
    counter = iter(range(1_000))

    def _make(
        edges: list[tuple[Any, Any]],
        nodes: list[dict[str, Any]] | None = None,
    ) -> Path:
        return write_dataset(tmp_path / f"data{next(counter)}", edges, nodes)

    return _make
