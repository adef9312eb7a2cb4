"""DevShell Composer — package environment plus developer conveniences.

On top of the merged environment, exactly two variables are set:

- ``OUT_DIR``: where editor tooling looks for build output without building;
- ``RUSTFLAGS``: allows a fixed set of non-fatal lints (dead code, unused
  imports, unused variables). Never applied to the release package.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from devflake.config.models import DEFAULT_ALLOWED_LINTS
from devflake.domain.outputs import DevShellDescriptor

if TYPE_CHECKING:
    from devflake.domain.environment import EnvironmentConfig
    from devflake.domain.types import PlatformId

OUT_DIR_VAR = "OUT_DIR"
DIAGNOSTICS_VAR = "RUSTFLAGS"
DEFAULT_OUT_DIR = "./target"


def diagnostics_flags(lints: Sequence[str]) -> str:
    """``-A <lint>`` for each lint, in order."""
    return " ".join(f"-A {lint}" for lint in lints)


def compose_shell(
    name: str,
    description: str,
    env: EnvironmentConfig,
    extra: EnvironmentConfig,
    *,
    platform: PlatformId,
    out_dir: str = DEFAULT_OUT_DIR,
    allowed_lints: Sequence[str] = DEFAULT_ALLOWED_LINTS,
) -> DevShellDescriptor:
    merged = env.merge(extra).with_variables(
        {
            OUT_DIR_VAR: out_dir,
            DIAGNOSTICS_VAR: diagnostics_flags(allowed_lints),
        }
    )
    return DevShellDescriptor(name=name, description=description, platform=platform, env=merged)
