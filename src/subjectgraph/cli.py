"""Root ``subjectgraph`` command: global flags, settings, command registration."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click

from subjectgraph import __version__
from subjectgraph.commands import register_commands
from subjectgraph.commands._base import SgGroup
from subjectgraph.commands._context import AppContext
from subjectgraph.config.settings import SgSettings

_FLAGS: list[Callable[[Callable[..., Any]], Callable[..., Any]]] = [
    click.option("--json", "json_output", is_flag=True, help="Print the result envelope as JSON."),
    click.option("-q", "--quiet", is_flag=True, help="Print bare vertex ids only."),
    click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing spans."),
    click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines."),
    click.option("--sync", is_flag=True, help="Run queries on the main thread."),
]


def _global_flags(func: Callable[..., Any]) -> Callable[..., Any]:
    for option in reversed(_FLAGS):
        func = option(func)
    return func


@click.group(
    cls=SgGroup,
    invoke_without_command=True,
    examples="""\
  subjectgraph graph overview
  subjectgraph --data-root data/unsw graph relatives 48024
  subjectgraph --json graph path 48024 51003""",
)
@click.version_option(version=__version__, prog_name="subjectgraph")
@click.option("-c", "--config", "config_path", default=None, help="Use this config file.")
@click.option(
    "--data-root",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding edges.json and nodes.json.",
)
@_global_flags
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, data_root: str | None, **flags: bool) -> None:
    """subjectgraph — query course prerequisite graphs."""
    settings = SgSettings.from_cli(config_path=config_path, data_root=data_root, **flags)
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
