"""Command group: export filtered subgraphs for the renderer."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from subjectgraph.commands._base import SgGroup
from subjectgraph.domain.types import TraversalMode
from subjectgraph.services.export import FORMATS, ExportService

if TYPE_CHECKING:
    from subjectgraph.commands._context import AppContext

_EXPORT_EXAMPLES = """\
  subjectgraph export subgraph 48024
  subjectgraph export subgraph 48024 --mode ancestors --format dot
  subjectgraph export subgraph 48024 --output graph.json"""


@click.group(cls=SgGroup, examples=_EXPORT_EXAMPLES)
@click.pass_obj
def export(app: AppContext) -> None:
    """Export graph data."""


@export.command(
    examples="""\
  subjectgraph export subgraph 48024
  subjectgraph export subgraph 48024 --mode web --format dot
  subjectgraph export subgraph 48024 --output subgraph.json"""
)
@click.argument("vertex")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in TraversalMode]),
    default=None,
    help="Traversal direction (default from [query] default_mode).",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(list(FORMATS)),
    default=None,
    help="Output format (default from [export] format).",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the document to a file instead of stdout.",
)
@click.pass_obj
def subgraph(
    app: AppContext,
    vertex: str,
    mode: str | None,
    fmt: str | None,
    output_path: Path | None,
) -> None:
    """Nodes and induced links around VERTEX."""
    result = app.dispatcher.call(
        ExportService(app.dataset).export_subgraph,
        vertex,
        mode=mode or app.settings.query.default_mode,
        fmt=fmt or app.settings.export.format,
    )
    if output_path is not None and result.ok:
        output_path.write_text(result.data["content"], encoding="utf-8")
        data = {k: v for k, v in result.data.items() if k != "content"}
        data["output"] = str(output_path)
        result = result.model_copy(update={"data": data})
    app.emit(result)
