"""Shared pytest fixtures and test helpers for devflake tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from devflake.config.models import PlatformBuild
from devflake.config.settings import DevflakeSettings
from devflake.domain.environment import AuxTool
from devflake.domain.toolchain import ToolchainSpec
from devflake.infrastructure.provider import ToolchainProvider
from devflake.services.aggregate import ProjectInputs
from devflake.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep developer environment variables out of settings and ambient paths."""
    for name in ("DEVFLAKE_CONFIG", "DEVFLAKE_PROJECT_ROOT", "LD_LIBRARY_PATH"):
        monkeypatch.delenv(name, raising=False)
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A project directory with a pinned toolchain and a Cargo manifest."""
    (tmp_path / "rust-toolchain").write_text(
        '[toolchain]\nchannel = "1.70.0"\ncomponents = ["rustfmt", "clippy"]\n'
    )
    (tmp_path / "Cargo.toml").write_text('[package]\nname = "glif"\nversion = "0.1.0"\n')
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> DevflakeSettings:
    return DevflakeSettings.from_cli(project_root=project_root)


@pytest.fixture
def toolchain() -> ToolchainSpec:
    return ToolchainSpec.from_channel("1.70", components=["rustfmt"])


@pytest.fixture
def provider() -> ToolchainProvider:
    """Provider advertising x86_64-linux and aarch64-linux only."""
    return ToolchainProvider(
        platforms={
            "x86_64-linux": PlatformBuild(),
            "aarch64-linux": PlatformBuild(components=["rustfmt"]),
        }
    )


@pytest.fixture
def aux_tools() -> list[AuxTool]:
    """Default auxiliary tools: fast linker, pkg-config, glibc on linux."""
    return [
        AuxTool(name="lld"),
        AuxTool(name="pkg-config"),
        AuxTool(name="glibc", platforms=["*-linux"]),
    ]


@pytest.fixture
def project(project_root: Path) -> ProjectInputs:
    return ProjectInputs(
        name="glif",
        description="glyph editor",
        source_root=project_root,
        shell_tools=(AuxTool(name="rust-analyzer"), AuxTool(name="cargo")),
    )


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project so the CLI resolves it.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(project_root)


@pytest.fixture
def write_config(project_root: Path) -> Callable[[str], Path]:
    """Return a helper that writes devflake.toml into the project root."""

    def _write(text: str) -> Path:
        path = project_root / "devflake.toml"
        path.write_text(text)
        return path

    return _write
