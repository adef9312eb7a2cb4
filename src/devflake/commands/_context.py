"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy plugin loading and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from devflake.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from devflake.config.settings import DevflakeSettings
    from devflake.plugins.manager import PluginManager
    from devflake.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Plugins are discovered on first use so ``--help`` and ``--version``
    never import third-party plugin code.
    """

    def __init__(self, settings: DevflakeSettings) -> None:
        self.settings = settings
        self._plugins: PluginManager | None = None

        from devflake.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            project=settings.project.name,
        )

        if settings.verbose:
            from devflake.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def plugins(self) -> PluginManager | None:
        """Loaded plugin manager, or None when ``--no-plugins`` is set."""
        if self.settings.no_plugins:
            return None
        if self._plugins is None:
            from devflake.plugins.manager import LOCAL_PLUGIN_DIR, PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load(local_dir=self.settings.project_root / LOCAL_PLUGIN_DIR)
        return self._plugins

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
