"""Tests for OutputSet, descriptors, and the legacy shell lookup."""

import json

import pytest

from devflake.domain.environment import EnvironmentConfig
from devflake.domain.outputs import (
    DevShellDescriptor,
    OutputSet,
    PackageDescriptor,
    PlatformFailure,
    PlatformOutputs,
    legacy_shell,
)
from devflake.domain.types import FailureKind


def _outputs(platform: str = "x86_64-linux") -> PlatformOutputs:
    env = EnvironmentConfig(variables={"CARGO": "/store/rust/bin/cargo"})
    return PlatformOutputs(
        package=PackageDescriptor(name="glif", platform=platform, root="/src", env=env),
        dev_shell=DevShellDescriptor(name="glif", description="glyph editor", platform=platform, env=env),
    )


class TestOutputSet:
    def test_empty(self) -> None:
        outputs = OutputSet()
        assert len(outputs) == 0
        assert outputs.failures == ()
        assert outputs.platforms == []

    def test_contains_and_lookup(self) -> None:
        entry = _outputs()
        outputs = OutputSet(outputs={"x86_64-linux": entry})
        assert "x86_64-linux" in outputs
        assert "aarch64-darwin" not in outputs
        assert outputs.package("x86_64-linux") is entry.package

    def test_failures_for(self) -> None:
        failure = PlatformFailure(
            platform="aarch64-darwin",
            kind=FailureKind.PLATFORM_UNSUPPORTED,
            message="unsupported",
        )
        outputs = OutputSet(failures=(failure,))
        assert outputs.failures_for("aarch64-darwin") == [failure]
        assert outputs.failures_for("x86_64-linux") == []

    def test_summary_is_json_serializable(self) -> None:
        outputs = OutputSet(outputs={"x86_64-linux": _outputs()})
        summary = outputs.summary()
        json.dumps(summary)
        assert summary["platforms"]["x86_64-linux"]["package"]["name"] == "glif"
        assert summary["failures"] == []

    def test_summary_with_missing_package(self) -> None:
        entry = _outputs()
        outputs = OutputSet(outputs={"x86_64-linux": PlatformOutputs(package=None, dev_shell=entry.dev_shell)})
        assert outputs.summary()["platforms"]["x86_64-linux"]["package"] is None


class TestLegacyShell:
    def test_same_instance_as_qualified_shell(self) -> None:
        entry = _outputs()
        outputs = OutputSet(outputs={"x86_64-linux": entry})
        assert legacy_shell(outputs, "x86_64-linux") is outputs.shell("x86_64-linux")
        assert legacy_shell(outputs, "x86_64-linux") is entry.dev_shell

    def test_unknown_platform(self) -> None:
        with pytest.raises(KeyError):
            legacy_shell(OutputSet(), "x86_64-linux")

    def test_qualified_name(self) -> None:
        assert _outputs().dev_shell.qualified_name == "devShells.x86_64-linux.default"

    def test_legacy_alias_is_lookup(self) -> None:
        entry = _outputs()
        outputs = OutputSet(outputs={"x86_64-linux": entry})
        assert outputs.legacy_alias("x86_64-linux") is entry.dev_shell
        assert outputs.legacy_alias("aarch64-darwin") is None
