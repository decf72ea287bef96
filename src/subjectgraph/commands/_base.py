"""Click base classes with an ``--examples`` flag.

Commands and groups built from :class:`SgCommand` / :class:`SgGroup` take an
``examples`` keyword. When set, an eager ``--examples`` flag prints the text
and exits before arguments are validated, so ``subjectgraph graph path
--examples`` works without a SOURCE and TARGET.
"""

from __future__ import annotations

from typing import Any

import click


class ExamplesOption(click.Option):
    """Eager ``--examples`` flag bound to one command's example text."""

    def __init__(self, examples: str) -> None:
        self.examples = examples
        super().__init__(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=self._show,
            help="Show usage examples and exit.",
        )

    def _show(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class SgCommand(click.Command):
    """Command accepting ``examples=``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(ExamplesOption(examples))


class SgGroup(click.Group):
    """Group accepting ``examples=``; subcommands and subgroups inherit it."""

    command_class = SgCommand
    group_class = type

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(ExamplesOption(examples))
