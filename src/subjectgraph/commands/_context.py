"""The object handed to every subcommand through ``@click.pass_obj``.

The root group builds one :class:`AppContext` from the resolved settings.
Commands ask it for the dataset, hand it a service call, and let it print
the result and pick the exit code.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, ParamSpec

import click

from subjectgraph.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from subjectgraph.config.settings import SgSettings
    from subjectgraph.infrastructure.dataset import Dataset
    from subjectgraph.services.dispatch import QueryDispatcher
    from subjectgraph.services.result import ServiceResult

_P = ParamSpec("_P")


class AppContext:
    """Settings plus the lazily built dataset and dispatcher.

    The dataset is read on first use so ``--help`` and ``--version`` never
    open the data files.
    """

    def __init__(self, settings: SgSettings) -> None:
        self.settings = settings
        self._dataset: Dataset | None = None
        self._dispatcher: QueryDispatcher | None = None

        from subjectgraph.config.logging import bind_dataset, configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        bind_dataset(settings.data_root, settings.data.edges_file)

        if settings.verbose:
            from subjectgraph.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def dataset(self) -> Dataset:
        """The dataset, with edges and index loaded on first access.

        Raises:
            click.ClickException: If the data files are missing or malformed.
        """
        if self._dataset is None:
            from subjectgraph.infrastructure.dataset import Dataset, DatasetError

            dataset = Dataset(self.settings)
            try:
                dataset.index  # noqa: B018 - force the load so errors surface here
                dataset.nodes  # noqa: B018
            except DatasetError as exc:
                raise click.ClickException(str(exc)) from exc
            self._dataset = dataset
        return self._dataset

    @property
    def dispatcher(self) -> QueryDispatcher:
        if self._dispatcher is None:
            from subjectgraph.services.dispatch import QueryDispatcher

            self._dispatcher = QueryDispatcher(
                sync=self.settings.sync,
                max_workers=self.settings.query.max_workers,
            )
            ctx = click.get_current_context(silent=True)
            if ctx is not None:
                ctx.call_on_close(self._dispatcher.shutdown)
        return self._dispatcher

    def run(
        self,
        query: Callable[_P, ServiceResult],
        *args: _P.args,
        **kwargs: _P.kwargs,
    ) -> None:
        """Run a service query through the dispatcher and emit its result."""
        self.emit(self.dispatcher.call(query, *args, **kwargs))

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failed query goes to stderr and exits 1.

        Warnings on a successful result are echoed to stderr so piped
        stdout stays clean. JSON output already embeds them.
        """
        mode = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        text = format_result(result, settings=mode)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        if not mode.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
