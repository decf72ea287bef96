"""Tests for the root subjectgraph CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from subjectgraph import __version__
from subjectgraph.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "prerequisite" in result.output
    assert "graph" in result.output
    assert "export" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize(
    "flags",
    [["--json"], ["-q"], ["-v"], ["--log-json"], ["--sync"], ["-c", "/tmp/none.toml"]],
)
def test_global_flags_accepted(cli_runner: CliRunner, flags: list[str]) -> None:
    result = cli_runner.invoke(cli, [*flags, "--version"])
    assert result.exit_code == 0


def test_help_does_not_read_data(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli, ["--data-root", str(tmp_path), "graph", "--help"])
    assert result.exit_code == 0
    assert "relatives" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["graph"],
        ["graph", "relatives"],
        ["graph", "search"],
        ["export"],
        ["export", "subgraph"],
    ],
)
def test_examples_flag(cli_runner: CliRunner, args: list[str]) -> None:
    result = cli_runner.invoke(cli, [*args, "--examples"])
    assert result.exit_code == 0
    assert "Examples for" in result.output
    assert "subjectgraph " in result.output


def test_invalid_toml_is_reported(cli_runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "bad.toml"
    config.write_text("[query\n")
    result = cli_runner.invoke(cli, ["-c", str(config), "graph", "overview"])
    assert result.exit_code == 1
    assert "Invalid TOML" in result.output
