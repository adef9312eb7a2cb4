"""Command: print the dev shell environment as a sourceable script."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from devflake.commands._base import DevflakeCommand

if TYPE_CHECKING:
    from devflake.commands._context import AppContext


@click.command(
    cls=DevflakeCommand,
    examples="""\
        eval "$(devflake shell)"
        devflake shell --platform aarch64-darwin
        devflake shell --legacy""",
)
@click.option("-p", "--platform", default=None, help="Target platform. Default: this host.")
@click.option(
    "--legacy",
    is_flag=True,
    help="Use the singular devShell alias (always the current platform).",
)
@click.pass_obj
def shell(app: AppContext, platform: str | None, legacy: bool) -> None:
    """Print export statements for the dev shell."""
    from devflake.services.consume import ConsumeService

    if legacy and platform:
        raise click.UsageError("--legacy always targets the current platform; drop --platform.")

    svc = ConsumeService(app.settings, plugins=app.plugins)
    app.emit(svc.shell(platform, legacy=legacy))
