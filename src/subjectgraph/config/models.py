"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, subjectgraph.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from subjectgraph.domain.types import TraversalMode

# --- subjectgraph.toml sections ---


class DataConfig(BaseModel):
    """[data] section — file names relative to the data root."""

    model_config = {"frozen": True}

    edges_file: str = "edges.json"
    nodes_file: str = "nodes.json"


class QueryConfig(BaseModel):
    """[query] section."""

    model_config = {"frozen": True}

    default_mode: TraversalMode = TraversalMode.TREE
    search_depth: int = 2
    max_workers: int = 2

    @field_validator("search_depth")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            msg = f"search_depth must be >= 0, got {value}"
            raise ValueError(msg)
        return value


class ExportConfig(BaseModel):
    """[export] section."""

    model_config = {"frozen": True}

    format: str = "json"
