"""Output Aggregator — resolve every platform into one OutputSet.

Platforms are composed independently from read-only inputs, so they may be
fanned out over a thread pool. The toolchain spec must be fully loaded by
the caller before :func:`aggregate` runs; it is shared, never mutated.

Partial-failure semantics: a platform the provider cannot build is dropped
and reported; a missing source root drops only that platform's package.
Neither aborts the remaining platforms.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from devflake.config.models import DEFAULT_ALLOWED_LINTS
from devflake.domain.environment import AuxTool, EnvironmentConfig
from devflake.domain.errors import InputError, PlatformUnsupportedError
from devflake.domain.outputs import OutputSet, PlatformFailure, PlatformOutputs
from devflake.domain.types import FailureKind, PlatformId
from devflake.services.compose import compose
from devflake.services.devshell import DEFAULT_OUT_DIR, compose_shell
from devflake.services.package import resolve_package

if TYPE_CHECKING:
    from devflake.domain.toolchain import ToolchainSpec
    from devflake.infrastructure.provider import ToolchainProvider

logger = logging.getLogger(__name__)

ShellToolsHook = Callable[[PlatformId], Sequence[AuxTool]]


@dataclass(frozen=True)
class ProjectInputs:
    """Per-project inputs shared by every platform's composition."""

    name: str
    description: str
    source_root: Path
    out_dir: str = DEFAULT_OUT_DIR
    allowed_lints: tuple[str, ...] = DEFAULT_ALLOWED_LINTS
    shell_tools: tuple[AuxTool, ...] = field(default_factory=tuple)
    force_cross: bool = True


def _failure(exc: PlatformUnsupportedError | InputError) -> PlatformFailure:
    if isinstance(exc, PlatformUnsupportedError):
        return PlatformFailure(
            platform=exc.platform,
            kind=FailureKind.PLATFORM_UNSUPPORTED,
            message=exc.message,
            component=exc.component,
        )
    return PlatformFailure(
        platform=exc.platform,
        kind=FailureKind.INPUT,
        message=exc.message,
        component=exc.path,
    )


def resolve_platform(
    platform: PlatformId,
    toolchain: ToolchainSpec,
    aux_tools: Sequence[AuxTool],
    *,
    provider: ToolchainProvider,
    project: ProjectInputs,
    plugin_tools: ShellToolsHook | None = None,
) -> tuple[PlatformOutputs | None, list[PlatformFailure]]:
    """Resolve a single platform; per-platform errors are returned, not raised."""
    try:
        env = compose(platform, toolchain, aux_tools, provider=provider, force_cross=project.force_cross)
    except PlatformUnsupportedError as exc:
        logger.warning("Skipping %s: %s", platform, exc.message)
        return None, [_failure(exc)]

    dev_tools = list(project.shell_tools)
    if plugin_tools is not None:
        dev_tools.extend(plugin_tools(platform))
    extra = EnvironmentConfig(
        tools=tuple(
            provider.tool(tool.name, tool.version, platform) for tool in dev_tools if tool.applies_to(platform)
        )
    )
    dev_shell = compose_shell(
        project.name,
        project.description,
        env,
        extra,
        platform=platform,
        out_dir=project.out_dir,
        allowed_lints=project.allowed_lints,
    )

    failures: list[PlatformFailure] = []
    try:
        package = resolve_package(project.name, project.source_root, env, platform=platform)
    except InputError as exc:
        logger.warning("No package for %s: %s", platform, exc.message)
        package = None
        failures.append(_failure(exc))

    return PlatformOutputs(package=package, dev_shell=dev_shell), failures


def aggregate(
    platforms: Iterable[PlatformId],
    toolchain: ToolchainSpec,
    aux_tools: Sequence[AuxTool],
    *,
    provider: ToolchainProvider,
    project: ProjectInputs,
    max_workers: int = 1,
    plugin_tools: ShellToolsHook | None = None,
) -> OutputSet:
    """Resolve each platform and collect the results.

    Output order is the sorted platform order regardless of completion
    order. Never raises for per-platform failures.
    """
    ordered = sorted(set(platforms))

    def _one(platform: PlatformId) -> tuple[PlatformOutputs | None, list[PlatformFailure]]:
        return resolve_platform(
            platform,
            toolchain,
            aux_tools,
            provider=provider,
            project=project,
            plugin_tools=plugin_tools,
        )

    if max_workers > 1 and len(ordered) > 1:
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="devflake-resolve") as pool:
            results = list(pool.map(_one, ordered))
    else:
        results = [_one(platform) for platform in ordered]

    outputs: dict[PlatformId, PlatformOutputs] = {}
    failures: list[PlatformFailure] = []
    for platform, (out, errs) in zip(ordered, results, strict=True):
        if out is not None:
            outputs[platform] = out
        failures.extend(errs)

    logger.debug("Resolved %d of %d platforms", len(outputs), len(ordered))
    return OutputSet(outputs=outputs, failures=tuple(failures))
