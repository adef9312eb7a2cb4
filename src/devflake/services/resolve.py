"""ResolveService — the OutputSet, the platform matrix, and the toolchain.

``ConfigError`` aborts before anything is resolved and yields an
``ok=False`` result with no OutputSet. Per-platform failures keep
``ok=True``: they are listed in ``data["failures"]`` and repeated as
warnings so the CLI surfaces every skipped platform by name.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from devflake.domain.errors import ConfigError
from devflake.domain.outputs import LEGACY_SHELL_NAME
from devflake.domain.types import PlatformId
from devflake.infrastructure.host import current_platform
from devflake.services.base import BaseService
from devflake.services.matrix import PlatformMatrix
from devflake.services.result import ErrorCode, ServiceResult
from devflake.services.telemetry import get_current_span, traced

log = structlog.get_logger(__name__)


class ResolveService(BaseService):
    """Resolution operations exposed to the CLI."""

    @traced
    def resolve(self, platforms: Iterable[PlatformId] | None = None) -> ServiceResult:
        """Resolve packages and dev shells for *platforms* (default: the matrix)."""
        op = "resolve"
        try:
            toolchain = self.load_toolchain()
        except ConfigError as exc:
            log.debug("toolchain.invalid", path=exc.path, error=exc.message)
            return self._error(op, ErrorCode.CONFIG_ERROR, exc, path=exc.path)

        outputs = self.resolve_outputs(platforms, toolchain=toolchain)
        warnings = [f.message for f in outputs.failures]

        self._dispatch_event(
            "post_resolve",
            {
                "platforms": outputs.platforms,
                "failures": [f.model_dump(mode="json") for f in outputs.failures],
            },
            warnings,
        )

        span = get_current_span()
        if span is not None:
            span.annotate("platforms", len(outputs))
            span.annotate("failures", len(outputs.failures))

        host = current_platform()
        alias = outputs.legacy_alias(host)
        data = {
            "toolchain": toolchain.label,
            "count": len(outputs),
            "failure_count": len(outputs.failures),
            "legacy_alias": (
                {"name": LEGACY_SHELL_NAME, "platform": host, "target": alias.qualified_name}
                if alias is not None
                else None
            ),
            **outputs.summary(),
        }
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    @traced
    def platforms(self) -> ServiceResult:
        """List the platforms the provider advertises."""
        provider = self.provider
        items = list(PlatformMatrix(provider).platforms())
        return ServiceResult(
            ok=True,
            op="platforms",
            data={"provider": provider.name, "platforms": items, "count": len(items)},
        )

    @traced
    def toolchain(self) -> ServiceResult:
        """Show the pinned toolchain."""
        op = "toolchain"
        try:
            spec = self.load_toolchain()
        except ConfigError as exc:
            return self._error(op, ErrorCode.CONFIG_ERROR, exc, path=exc.path)
        return ServiceResult(ok=True, op=op, data=spec.model_dump(mode="json"))
