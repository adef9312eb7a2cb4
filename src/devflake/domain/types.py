"""Shared type aliases and classification enums."""

from __future__ import annotations

from enum import StrEnum

PlatformId = str
"""An OS/architecture pair such as ``"x86_64-linux"``."""


class Channel(StrEnum):
    """Named release channels a toolchain can track."""

    STABLE = "stable"
    BETA = "beta"
    NIGHTLY = "nightly"


class FailureKind(StrEnum):
    """Per-platform failure categories surfaced alongside an OutputSet."""

    PLATFORM_UNSUPPORTED = "platform_unsupported"
    INPUT = "input"
