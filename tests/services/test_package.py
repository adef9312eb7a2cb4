"""Tests for the Package Resolver."""

from pathlib import Path

import pytest

from devflake.domain.environment import EnvironmentConfig
from devflake.domain.errors import InputError
from devflake.services.package import resolve_package


def test_records_inputs(tmp_path: Path) -> None:
    env = EnvironmentConfig(variables={"CARGO": "cargo"})
    package = resolve_package("glif", tmp_path, env, platform="x86_64-linux")
    assert package.name == "glif"
    assert package.root == str(tmp_path)
    assert package.platform == "x86_64-linux"
    assert package.env is env


def test_missing_source_root(tmp_path: Path) -> None:
    missing = tmp_path / "nope"
    with pytest.raises(InputError) as excinfo:
        resolve_package("glif", missing, EnvironmentConfig(), platform="x86_64-linux")
    assert excinfo.value.path == str(missing)
    assert excinfo.value.platform == "x86_64-linux"
