"""Tests for the build command."""

from __future__ import annotations

import json
import subprocess
from typing import Any

import pytest
from click.testing import CliRunner

from devflake.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestBuildCommand:
    def test_dry_run(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "--no-plugins", "build", "-p", "x86_64-linux", "--dry-run"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["dry_run"] is True
        assert data["command"][1:] == ["build", "--release"]
        assert "OUT_DIR" not in data["env"]

    def test_passes_cargo_args(self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[list[str]] = []

        def fake_run(command: list[str], **kwargs: Any) -> subprocess.CompletedProcess[bytes]:
            calls.append(command)
            return subprocess.CompletedProcess(command, 0)

        monkeypatch.setattr(subprocess, "run", fake_run)
        result = cli_runner.invoke(
            cli, ["--no-plugins", "build", "-p", "x86_64-linux", "--", "--features", "gpu"]
        )
        assert result.exit_code == 0
        assert calls[0][-2:] == ["--features", "gpu"]

    def test_build_failure_exits_1(self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(subprocess, "run", lambda command, **kwargs: subprocess.CompletedProcess(command, 101))
        result = cli_runner.invoke(cli, ["--json", "--no-plugins", "build", "-p", "x86_64-linux"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "BUILD_FAILED"
