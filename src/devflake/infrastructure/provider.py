"""ToolchainProvider — the advertised platform set and per-platform builds.

Models a binary toolchain distribution (rust-overlay by default): it knows
which platforms it publishes builds for and, optionally, which components
each platform carries. Tool paths are content-addressed so the same
(name, version, platform) always maps to the same store path, and the same
tool on two platforms never does.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Mapping

from devflake.config.models import PlatformBuild, ProviderConfig
from devflake.domain.environment import ToolRef
from devflake.domain.errors import PlatformUnsupportedError
from devflake.domain.toolchain import ToolchainSpec
from devflake.domain.types import PlatformId

DIGEST_LENGTH = 32


class ToolchainProvider:
    """Source of supported platforms and platform-specific tool builds."""

    def __init__(
        self,
        *,
        name: str = "rust-overlay",
        store_dir: str = "/nix/store",
        platforms: Mapping[PlatformId, PlatformBuild] | None = None,
    ) -> None:
        self.name = name
        self.store_dir = store_dir.rstrip("/")
        self._builds: dict[PlatformId, PlatformBuild] = dict(
            platforms if platforms is not None else ProviderConfig().platforms
        )

    @classmethod
    def from_config(cls, config: ProviderConfig) -> ToolchainProvider:
        return cls(name=config.name, store_dir=config.store_dir, platforms=config.platforms)

    def platforms(self) -> tuple[PlatformId, ...]:
        """Advertised platform identifiers, in declaration order."""
        return tuple(self._builds)

    def supports(self, platform: PlatformId) -> bool:
        return platform in self._builds

    def store_path(
        self,
        name: str,
        version: str,
        platform: PlatformId,
        extra: Iterable[str] = (),
    ) -> str:
        key = "/".join([name, version, platform, *extra])
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:DIGEST_LENGTH]
        return f"{self.store_dir}/{digest}-{name}-{version}"

    def tool(self, name: str, version: str, platform: PlatformId) -> ToolRef:
        """Reference to an auxiliary tool built for *platform*."""
        return ToolRef(
            name=name,
            version=version,
            platform=platform,
            path=self.store_path(name, version, platform),
        )

    def resolve(self, toolchain: ToolchainSpec, platform: PlatformId) -> ToolRef:
        """Resolve *toolchain* for *platform*.

        Raises:
            PlatformUnsupportedError: If *platform* is not advertised, or a
                declared component has no build on it.
        """
        build = self._builds.get(platform)
        if build is None:
            raise PlatformUnsupportedError(platform)
        if build.components is not None:
            for component in toolchain.components:
                if component not in build.components:
                    raise PlatformUnsupportedError(platform, component)

        name = f"rust-{toolchain.name}"
        extra = [toolchain.profile, *toolchain.components, *(f"target:{t}" for t in toolchain.targets)]
        return ToolRef(
            name=name,
            version=toolchain.version,
            platform=platform,
            path=self.store_path(name, toolchain.version, platform, extra),
        )
