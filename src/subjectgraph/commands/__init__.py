"""Subcommand modules for subjectgraph.

Provides register_commands() which uses deferred imports to keep
``subjectgraph --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups on the root CLI group."""
    from subjectgraph.commands.export import export
    from subjectgraph.commands.graph import graph

    cli.add_command(graph)
    cli.add_command(export)
