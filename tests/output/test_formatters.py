"""Tests for the format_result dispatcher and OutputSettings."""

import json

from subjectgraph.output.formatters import OutputSettings, format_result
from subjectgraph.services.result import ServiceError, ServiceResult


def _ok(op: str = "overview", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "path", msg: str = "fail") -> ServiceResult:
    return ServiceResult(ok=False, op=op, error=ServiceError(code="NO_PATH", message=msg))


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResult:
    def test_json_mode(self) -> None:
        data = json.loads(format_result(_ok(vertex_count=3), settings=OutputSettings(json_output=True)))
        assert data["ok"] is True
        assert data["data"] == {"vertex_count": 3}

    def test_json_error(self) -> None:
        data = json.loads(format_result(_err(), settings=OutputSettings(json_output=True)))
        assert data["ok"] is False
        assert data["error"]["code"] == "NO_PATH"

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(_ok(), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["op"] == "overview"

    def test_quiet_mode(self) -> None:
        output = format_result(_ok("traverse", items=[{"id": 2}]), settings=OutputSettings(quiet=True))
        assert output == "2"

    def test_default_is_rich(self) -> None:
        output = format_result(_ok(vertex_count=3))
        assert "vertex_count: 3" in output
