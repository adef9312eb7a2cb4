"""Command: show the pinned toolchain."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from devflake.commands._base import DevflakeCommand

if TYPE_CHECKING:
    from devflake.commands._context import AppContext


@click.command(cls=DevflakeCommand, examples="devflake toolchain\ndevflake --json toolchain")
@click.pass_obj
def toolchain(app: AppContext) -> None:
    """Show the toolchain pinned by the project's toolchain file."""
    from devflake.services.resolve import ResolveService

    app.emit(ResolveService(app.settings).toolchain())
