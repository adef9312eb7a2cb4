"""Tests for ToolchainSpec and channel parsing."""

import pytest

from devflake.domain.toolchain import LATEST, ToolchainSpec, parse_channel


class TestParseChannel:
    @pytest.mark.parametrize(
        ("channel", "expected"),
        [
            ("stable", ("stable", LATEST)),
            ("nightly", ("nightly", LATEST)),
            ("nightly-2022-05-01", ("nightly", "2022-05-01")),
            ("beta-2023-01-15", ("beta", "2023-01-15")),
            ("1.70", ("stable", "1.70")),
            ("1.70.0", ("stable", "1.70.0")),
            ("  1.70.0\n", ("stable", "1.70.0")),
        ],
    )
    def test_accepted_forms(self, channel: str, expected: tuple[str, str]) -> None:
        assert parse_channel(channel) == expected

    @pytest.mark.parametrize("channel", ["", "latest", "nightly-22-05-01", "1", "v1.70"])
    def test_rejects_unknown(self, channel: str) -> None:
        with pytest.raises(ValueError, match="Unrecognized toolchain channel"):
            parse_channel(channel)


class TestToolchainSpec:
    def test_from_channel(self) -> None:
        spec = ToolchainSpec.from_channel("1.70", components=["rustfmt", "clippy"])
        assert spec.name == "stable"
        assert spec.version == "1.70"
        assert spec.components == ("rustfmt", "clippy")
        assert spec.channel == "1.70"
        assert spec.label == "stable-1.70"

    def test_frozen(self) -> None:
        spec = ToolchainSpec(name="stable", version="1.70")
        with pytest.raises(Exception):
            spec.version = "1.71"  # type: ignore[misc]

    def test_structural_equality(self) -> None:
        assert ToolchainSpec.from_channel("stable") == ToolchainSpec.from_channel("stable")
