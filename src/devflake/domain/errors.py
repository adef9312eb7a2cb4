"""Error taxonomy for resolution.

``ConfigError`` is fatal for the whole resolution.  ``PlatformUnsupportedError``
and ``InputError`` are scoped to one platform: the aggregator collects them
as :class:`~devflake.domain.outputs.PlatformFailure` values instead of
letting them propagate.
"""

from __future__ import annotations


class DevflakeError(Exception):
    """Base class for all devflake errors."""


class ConfigError(DevflakeError):
    """The toolchain descriptor (or project config) is missing or malformed."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path


class PlatformUnsupportedError(DevflakeError):
    """The toolchain provider has no build for a platform (or a component on it)."""

    def __init__(self, platform: str, component: str | None = None) -> None:
        if component is None:
            message = f"Platform {platform} is not supported by the toolchain provider"
        else:
            message = f"Platform {platform} has no build for toolchain component {component!r}"
        super().__init__(message)
        self.message = message
        self.platform = platform
        self.component = component


class InputError(DevflakeError):
    """A required source path does not exist."""

    def __init__(self, platform: str, path: str) -> None:
        message = f"Package source root for {platform} does not exist: {path}"
        super().__init__(message)
        self.message = message
        self.platform = platform
        self.path = path
