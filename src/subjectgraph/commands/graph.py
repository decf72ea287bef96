"""Command group: graph queries around a focal vertex."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from subjectgraph.commands._base import SgGroup
from subjectgraph.domain.types import Relation, SearchStrategy, TraversalMode
from subjectgraph.services.graph import GraphService

if TYPE_CHECKING:
    from subjectgraph.commands._context import AppContext

_GRAPH_EXAMPLES = """\
  subjectgraph graph relatives 48024 --relation ancestors
  subjectgraph graph traverse 48024 --mode web
  subjectgraph graph search 48024 --strategy bfs --depth 3
  subjectgraph graph search 48024 --strategy maze --end 51003
  subjectgraph graph path 48024 51003 --undirected
  subjectgraph graph cycles
  subjectgraph graph postman
  subjectgraph graph isolated
  subjectgraph graph overview"""


@click.group(cls=SgGroup, examples=_GRAPH_EXAMPLES)
@click.pass_obj
def graph(app: AppContext) -> None:
    """Query the prerequisite graph."""


@graph.command(
    examples="""\
  subjectgraph graph relatives 48024
  subjectgraph graph relatives 48024 --relation siblings --self
  subjectgraph --json graph relatives 48024 --relation cousins"""
)
@click.argument("vertex")
@click.option(
    "--relation",
    "relation_name",
    type=click.Choice([r.value for r in Relation]),
    default=Relation.RELATED.value,
    show_default=True,
    help="Relationship set to compute.",
)
@click.option("--self", "include_self", is_flag=True, help="Include the focal vertex.")
@click.pass_obj
def relatives(app: AppContext, vertex: str, relation_name: str, include_self: bool) -> None:
    """List a relationship set of VERTEX."""
    app.run(GraphService(app.dataset).relatives, vertex, relation_name, include_self=include_self)


@graph.command(
    examples="""\
  subjectgraph graph traverse 48024
  subjectgraph graph traverse 48024 --mode descendants
  subjectgraph -q graph traverse 48024 --mode web"""
)
@click.argument("vertex")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in TraversalMode]),
    default=None,
    help="Traversal direction (default from [query] default_mode).",
)
@click.pass_obj
def traverse(app: AppContext, vertex: str, mode: str | None) -> None:
    """Everything reachable from VERTEX under a traversal mode."""
    chosen = mode or app.settings.query.default_mode
    app.run(GraphService(app.dataset).traverse, vertex, chosen)


@graph.command(
    examples="""\
  subjectgraph graph search 48024
  subjectgraph graph search 48024 --strategy bfs --depth 4
  subjectgraph graph search 48024 --strategy maze --end 51003"""
)
@click.argument("vertex")
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in SearchStrategy]),
    default=SearchStrategy.DFS.value,
    show_default=True,
    help="Visit order.",
)
@click.option("--depth", type=int, default=None, help="Hop limit (default from [query] search_depth).")
@click.option("--end", default=None, help="Stop vertex for maze search.")
@click.pass_obj
def search(app: AppContext, vertex: str, strategy: str, depth: int | None, end: str | None) -> None:
    """Undirected visit order starting at VERTEX."""
    if depth is None and strategy == SearchStrategy.DFS:
        depth = app.settings.query.search_depth
    app.run(GraphService(app.dataset).search, vertex, strategy, depth=depth, end=end)


@graph.command(
    examples="""\
  subjectgraph graph path 48024 51003
  subjectgraph graph path 48024 51003 --undirected
  subjectgraph --json graph path 48024 51003"""
)
@click.argument("source_id")
@click.argument("target_id")
@click.option("--undirected", "undirected_view", is_flag=True, help="Ignore edge direction.")
@click.pass_obj
def path(app: AppContext, source_id: str, target_id: str, undirected_view: bool) -> None:
    """Shortest prerequisite chain between two vertices."""
    app.run(
        GraphService(app.dataset).path,
        source_id,
        target_id,
        undirected_view=undirected_view,
    )


@graph.command(
    examples="""\
  subjectgraph graph cycles
  subjectgraph --json graph cycles"""
)
@click.pass_obj
def cycles(app: AppContext) -> None:
    """Check the graph for cycles."""
    app.run(GraphService(app.dataset).cycles)


@graph.command(
    examples="""\
  subjectgraph graph postman
  subjectgraph -q graph postman"""
)
@click.pass_obj
def postman(app: AppContext) -> None:
    """Pair odd-degree vertices and stitch their shortest paths."""
    app.run(GraphService(app.dataset).postman)


@graph.command(
    examples="""\
  subjectgraph graph isolated"""
)
@click.pass_obj
def isolated(app: AppContext) -> None:
    """Vertices with no ancestors and no descendants."""
    app.run(GraphService(app.dataset).isolated)


@graph.command(
    examples="""\
  subjectgraph graph overview
  subjectgraph --json graph overview"""
)
@click.pass_obj
def overview(app: AppContext) -> None:
    """Vertex and edge counts."""
    app.run(GraphService(app.dataset).overview)
