"""configure_logging: levels, JSON rendering, dataset context."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from subjectgraph.config.logging import bind_dataset, clear_context, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Put the root and package loggers back the way they were."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    sg = logging.getLogger("subjectgraph")
    sg_level = sg.level
    yield
    root.handlers = saved_handlers
    root.setLevel(saved_level)
    sg.setLevel(sg_level)
    clear_context()


class TestLogging:
    def test_verbose_lowers_package_level_only(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("subjectgraph").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_default_level_is_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("subjectgraph").level == logging.WARNING

    def test_json_lines_carry_event_fields(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("subjectgraph.test").warning("loaded", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "loaded"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "subjectgraph.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_dataset_context(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        bind_dataset(Path("/data/unsw"), "edges.json")
        logging.getLogger("subjectgraph.services.base").debug("lookup miss")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "lookup miss"
        assert parsed["level"] == "debug"
        assert parsed["data_root"] == "/data/unsw"
        assert parsed["edges_file"] == "edges.json"

    def test_other_loggers_stay_quiet(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("networkx").debug("noise")
        logging.getLogger("asyncio").debug("noise")
        assert capfd.readouterr().err == ""

    def test_reconfigure_keeps_one_handler(self) -> None:
        configure_logging(verbose=True)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1
