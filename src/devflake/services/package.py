"""Package Resolver — records a build derivation; never compiles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from devflake.domain.errors import InputError
from devflake.domain.outputs import PackageDescriptor

if TYPE_CHECKING:
    from pathlib import Path

    from devflake.domain.environment import EnvironmentConfig
    from devflake.domain.types import PlatformId


def resolve_package(
    name: str,
    source_root: Path,
    env: EnvironmentConfig,
    *,
    platform: PlatformId,
) -> PackageDescriptor:
    """Describe how to build *name* from *source_root* in *env*.

    Raises:
        InputError: If *source_root* does not exist.
    """
    if not source_root.exists():
        raise InputError(platform, str(source_root))
    return PackageDescriptor(name=name, platform=platform, root=str(source_root), env=env)
