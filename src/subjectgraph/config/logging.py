"""structlog configuration for subjectgraph.

Two output modes:
- Human (default): colored console output to stderr
- JSON (--log-json): one JSON object per line on stderr

Context bound with :func:`bind_dataset` (the data root and edge file) is
merged into every record emitted afterwards, including stdlib records from
``logging.getLogger(__name__)`` loggers.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

_NOISY_LOGGERS = ("networkx", "asyncio")


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and route everything to stderr.

    Args:
        verbose: ``subjectgraph`` loggers emit DEBUG. Otherwise WARNING+.
        log_json: Render JSON lines instead of the console format.
    """
    sg_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    final: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if log_json:
        final += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        final.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=final,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("subjectgraph").setLevel(sg_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_dataset(data_root: Path, edges_file: str) -> None:
    """Attach dataset location to all subsequent log records."""
    structlog.contextvars.bind_contextvars(
        data_root=str(data_root),
        edges_file=edges_file,
    )


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
