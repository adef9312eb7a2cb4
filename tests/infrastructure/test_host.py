"""Tests for host platform detection."""

import pytest

from devflake.infrastructure.host import current_platform


@pytest.mark.parametrize(
    ("machine", "system", "expected"),
    [
        ("x86_64", "linux", "x86_64-linux"),
        ("AMD64", "win32", "x86_64-windows"),
        ("arm64", "darwin", "aarch64-darwin"),
        ("aarch64", "linux2", "aarch64-linux"),
        ("i386", "linux", "i686-linux"),
    ],
)
def test_normalizes(machine: str, system: str, expected: str) -> None:
    assert current_platform(machine, system) == expected


def test_detects_running_host() -> None:
    arch, _, os_name = current_platform().partition("-")
    assert arch
    assert os_name
