"""PlatformMatrix — the platforms a resolution iterates over.

The matrix is derived from the toolchain provider's advertised platform
keys and never adds platforms of its own, so every platform it yields is
buildable by the pinned toolchain's provider.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from devflake.domain.types import PlatformId
    from devflake.infrastructure.provider import ToolchainProvider


class PlatformMatrix:
    """Ordered set of platform identifiers to resolve."""

    def __init__(self, provider: ToolchainProvider) -> None:
        self._provider = provider
        self._platforms: tuple[PlatformId, ...] | None = None

    def platforms(self) -> tuple[PlatformId, ...]:
        """Sorted advertised platforms. The provider is queried at most once.

        An empty tuple is a valid result, not an error.
        """
        if self._platforms is None:
            self._platforms = tuple(sorted(set(self._provider.platforms())))
        return self._platforms

    def __iter__(self) -> Iterator[PlatformId]:
        return iter(self.platforms())

    def __len__(self) -> int:
        return len(self.platforms())
