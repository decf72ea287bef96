"""Pydantic models for the static node and edge data files."""

from __future__ import annotations

from pydantic import BaseModel

from subjectgraph.domain.types import Edge


class NodeRecord(BaseModel):
    """One entry of ``nodes.json``. Only ``id`` is required."""

    model_config = {"frozen": True}

    id: int | str
    label: str | None = None
    url: str | None = None
    course: str | None = None


class EdgeRecord(BaseModel):
    """One entry of ``edges.json``."""

    model_config = {"frozen": True}

    source: int | str
    target: int | str

    def to_edge(self) -> Edge:
        return Edge(self.source, self.target)
