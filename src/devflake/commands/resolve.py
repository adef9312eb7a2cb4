"""Command: resolve packages and dev shells for every platform."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from devflake.commands._base import DevflakeCommand

if TYPE_CHECKING:
    from devflake.commands._context import AppContext


@click.command(
    cls=DevflakeCommand,
    examples="""\
        devflake resolve
        devflake resolve --platform x86_64-linux --platform aarch64-darwin
        devflake --json resolve""",
)
@click.option(
    "-p",
    "--platform",
    "platforms",
    multiple=True,
    help="Resolve only these platforms (repeatable). Default: every supported platform.",
)
@click.pass_obj
def resolve(app: AppContext, platforms: tuple[str, ...]) -> None:
    """Resolve the package and dev shell for each platform."""
    from devflake.services.resolve import ResolveService

    svc = ResolveService(app.settings, plugins=app.plugins)
    app.emit(svc.resolve(platforms or None))
