"""ConsumeService — hand resolved outputs to external tooling.

``shell`` renders a dev shell as a POSIX export script; ``build`` runs
cargo in the package root with the package environment. Both resolve only
the platform they need; the ambient environment is read here, at
consumption time, never during resolution.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence

from devflake.domain.errors import ConfigError, InputError, PlatformUnsupportedError
from devflake.domain.outputs import LEGACY_SHELL_NAME, OutputSet, legacy_shell
from devflake.domain.types import FailureKind, PlatformId
from devflake.infrastructure.host import current_platform
from devflake.services.base import BaseService
from devflake.services.result import ErrorCode, ServiceError, ServiceResult
from devflake.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

BUILD_ARGS: tuple[str, ...] = ("build", "--release")


class ConsumeService(BaseService):
    """Consumption entry points for packages and dev shells."""

    def _resolve_one(self, op: str, platform: PlatformId) -> OutputSet | ServiceResult:
        try:
            with trace_span("resolve_outputs"):
                outputs = self.resolve_outputs([platform])
        except ConfigError as exc:
            return self._error(op, ErrorCode.CONFIG_ERROR, exc, path=exc.path)

        if platform not in outputs:
            failure = outputs.failures_for(platform)[0]
            exc = PlatformUnsupportedError(platform, failure.component)
            return self._error(
                op,
                ErrorCode.PLATFORM_UNSUPPORTED,
                exc,
                platform=platform,
                component=failure.component,
            )
        return outputs

    @traced
    def shell(self, platform: PlatformId | None = None, *, legacy: bool = False) -> ServiceResult:
        """Render the dev shell for *platform* (default: this host).

        With *legacy*, the shell is looked up through the ``devShell`` alias
        of the current platform.
        """
        op = "shell"
        target = current_platform() if legacy or platform is None else platform
        resolved = self._resolve_one(op, target)
        if isinstance(resolved, ServiceResult):
            return resolved

        shell = legacy_shell(resolved, target) if legacy else resolved.shell(target)
        warnings = [f.message for f in resolved.failures]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "platform": target,
                "name": LEGACY_SHELL_NAME if legacy else shell.qualified_name,
                "description": shell.description,
                "script": shell.env.render_exports(),
            },
            warnings=warnings,
        )

    @traced
    def build(
        self,
        platform: PlatformId | None = None,
        *,
        dry_run: bool = False,
        cargo_args: Sequence[str] = (),
        ambient: Mapping[str, str] | None = None,
    ) -> ServiceResult:
        """Build the package for *platform* (default: this host) with cargo."""
        op = "build"
        target = platform or current_platform()
        resolved = self._resolve_one(op, target)
        if isinstance(resolved, ServiceResult):
            return resolved

        package = resolved.package(target)
        if package is None:
            failure = next(f for f in resolved.failures_for(target) if f.kind == FailureKind.INPUT)
            exc = InputError(target, failure.component or "")
            return self._error(op, ErrorCode.INPUT_ERROR, exc, platform=target, path=failure.component)

        base_env = dict(os.environ if ambient is None else ambient)
        composed = package.env.materialize(base_env)
        command = [package.env.variables.get("CARGO", "cargo"), *BUILD_ARGS, *cargo_args]
        data = {
            "platform": target,
            "package": package.name,
            "root": package.root,
            "command": command,
            "env": composed,
            "dry_run": dry_run,
        }
        if dry_run:
            return ServiceResult(ok=True, op=op, data=data)

        logger.info("Building %s for %s: %s", package.name, target, " ".join(command))
        try:
            with trace_span("cargo"):
                proc = subprocess.run(command, cwd=package.root, env={**base_env, **composed}, check=False)
        except FileNotFoundError:
            return ServiceResult(
                ok=False,
                op=op,
                data=data,
                error=ServiceError(
                    code=ErrorCode.TOOL_NOT_FOUND,
                    message=f"Build tool not found for {target}: {command[0]}",
                    detail={"platform": target, "tool": command[0]},
                ),
            )

        if proc.returncode != 0:
            return ServiceResult(
                ok=False,
                op=op,
                data=data,
                error=_build_failed(target, proc.returncode),
            )
        return ServiceResult(ok=True, op=op, data={**data, "returncode": proc.returncode})


def _build_failed(platform: PlatformId, returncode: int) -> ServiceError:
    return ServiceError(
        code=ErrorCode.BUILD_FAILED,
        message=f"cargo build for {platform} exited with status {returncode}",
        detail={"platform": platform, "returncode": returncode},
    )
