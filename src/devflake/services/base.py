"""BaseService — shared wiring for devflake services.

Every service receives the frozen :class:`DevflakeSettings` and an optional
plugin manager. The toolchain descriptor is read once per service call and
passed explicitly into every composition; nothing is cached globally.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from devflake.domain.outputs import OutputSet
from devflake.domain.toolchain import ToolchainSpec
from devflake.infrastructure.provider import ToolchainProvider
from devflake.infrastructure.toolchain_file import load_toolchain
from devflake.services.aggregate import ProjectInputs, aggregate
from devflake.services.matrix import PlatformMatrix
from devflake.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from devflake.config.settings import DevflakeSettings
    from devflake.domain.errors import DevflakeError
    from devflake.domain.types import PlatformId
    from devflake.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Subclasses turn resolution outcomes into :class:`ServiceResult` values.
    """

    def __init__(self, settings: DevflakeSettings, *, plugins: PluginManager | None = None) -> None:
        self._settings = settings
        self._plugins = plugins

    @property
    def provider(self) -> ToolchainProvider:
        return ToolchainProvider.from_config(self._settings.provider)

    def load_toolchain(self) -> ToolchainSpec:
        """Raises ConfigError if the descriptor is missing or malformed."""
        return load_toolchain(self._settings.project_root, self._settings.toolchain.file)

    def project_inputs(self) -> ProjectInputs:
        s = self._settings
        return ProjectInputs(
            name=s.project.name,
            description=s.project.description,
            source_root=s.source_root,
            out_dir=s.shell.out_dir,
            allowed_lints=tuple(s.shell.allowed_lints),
            shell_tools=tuple(s.shell.extra_tools),
            force_cross=s.aux.force_cross,
        )

    def resolve_outputs(
        self,
        platforms: Iterable[PlatformId] | None = None,
        *,
        toolchain: ToolchainSpec | None = None,
    ) -> OutputSet:
        """Load the toolchain (once) and aggregate the requested platforms.

        With *platforms* None, every platform in the matrix is resolved.

        Raises:
            ConfigError: If the toolchain descriptor is missing or malformed.
        """
        toolchain = toolchain or self.load_toolchain()
        provider = self.provider
        selected = PlatformMatrix(provider).platforms() if platforms is None else tuple(platforms)
        return aggregate(
            selected,
            toolchain,
            self._settings.aux.tools,
            provider=provider,
            project=self.project_inputs(),
            max_workers=self._settings.resolve.max_workers,
            plugin_tools=self._plugins.shell_tools if self._plugins is not None else None,
        )

    def _dispatch_event(self, hook_name: str, payload: dict[str, Any], warnings: list[str]) -> None:
        """Call a plugin notification hook. No-op without plugins.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        if self._plugins is None:
            return
        try:
            getattr(self._plugins.hook, hook_name)(**payload)
        except Exception:
            logger.debug("Plugin hook %s failed", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed")

    @staticmethod
    def _error(op: str, code: str, exc: DevflakeError, **detail: Any) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=str(exc), detail=detail),
        )
