"""Environment Composer — one EnvironmentConfig per platform.

Composition order:

1. toolchain references (``RUSTC``, ``CARGO``, optional ``RUST_SRC_PATH``),
   resolved for the platform by the provider;
2. auxiliary tools in declared order (earlier entries shadow later ones);
3. ``LD_LIBRARY_PATH`` = aux library dirs, then the ambient value at
   consumption time (append, never replace);
4. ``CARGO_FEATURE_FORCE_CROSS`` when cross compilation is forced.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from devflake.domain.environment import LIBRARY_PATH_VAR, AuxTool, EnvironmentConfig

if TYPE_CHECKING:
    from devflake.domain.toolchain import ToolchainSpec
    from devflake.domain.types import PlatformId
    from devflake.infrastructure.provider import ToolchainProvider

logger = logging.getLogger(__name__)

FORCE_CROSS_VAR = "CARGO_FEATURE_FORCE_CROSS"
RUST_SRC_COMPONENT = "rust-src"


def compose(
    platform: PlatformId,
    toolchain: ToolchainSpec,
    aux_tools: Sequence[AuxTool],
    *,
    provider: ToolchainProvider,
    force_cross: bool = True,
) -> EnvironmentConfig:
    """Compose the build environment for *platform*.

    Raises:
        PlatformUnsupportedError: If the provider has no toolchain build
            for *platform*. Only this platform is affected.
    """
    rust = provider.resolve(toolchain, platform)
    variables = {
        "RUSTC": f"{rust.bin_dir}/rustc",
        "CARGO": f"{rust.bin_dir}/cargo",
    }
    if RUST_SRC_COMPONENT in toolchain.components:
        variables["RUST_SRC_PATH"] = f"{rust.lib_dir}/rustlib/src/rust/library"
    env = EnvironmentConfig(variables=variables, tools=(rust,))

    aux_refs = tuple(
        provider.tool(aux.name, aux.version, platform) for aux in aux_tools if aux.applies_to(platform)
    )
    search_path = {LIBRARY_PATH_VAR: tuple(ref.lib_dir for ref in aux_refs)} if aux_refs else {}
    env = env.merge(EnvironmentConfig(tools=aux_refs, search_path=search_path))

    if force_cross:
        env = env.with_variables({FORCE_CROSS_VAR: "true"})

    logger.debug(
        "Composed environment for %s: %d variables, %d tools",
        platform,
        len(env.names()),
        len(env.tools),
    )
    return env
