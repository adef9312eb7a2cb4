"""Tests for the format_result dispatcher and OutputSettings."""

import json

from devflake.output.formatters import OutputSettings, format_result
from devflake.services.result import ServiceError, ServiceResult


def _ok(op: str = "platforms", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "resolve", msg: str = "fail") -> ServiceResult:
    return ServiceResult(ok=False, op=op, error=ServiceError(code="CONFIG_ERROR", message=msg))


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResultJSON:
    def test_json_mode_returns_valid_json(self) -> None:
        output = format_result(_ok(platforms=["x86_64-linux"]), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["data"]["platforms"] == ["x86_64-linux"]

    def test_json_mode_error(self) -> None:
        data = json.loads(format_result(_err(msg="Toolchain descriptor not found"), json_output=True))
        assert data["ok"] is False
        assert data["error"]["message"] == "Toolchain descriptor not found"

    def test_json_beats_quiet(self) -> None:
        output = format_result(_ok(), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["op"] == "platforms"

    def test_settings_overrides_kwarg(self) -> None:
        output = format_result(_ok(), settings=OutputSettings(), json_output=True)
        assert not output.startswith("{")


class TestFormatResultModes:
    def test_quiet_mode(self) -> None:
        output = format_result(_ok(platforms=["a-linux", "b-linux"]), settings=OutputSettings(quiet=True))
        assert output == "a-linux\nb-linux"

    def test_human_mode(self) -> None:
        output = format_result(_ok(provider="rust-overlay", platforms=["x86_64-linux"]))
        assert "OK" in output
        assert "rust-overlay" in output
        assert "x86_64-linux" in output
