"""Command: list the platforms the toolchain provider supports."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from devflake.commands._base import DevflakeCommand

if TYPE_CHECKING:
    from devflake.commands._context import AppContext


@click.command(cls=DevflakeCommand, examples="devflake platforms\ndevflake -q platforms")
@click.pass_obj
def platforms(app: AppContext) -> None:
    """List supported platforms."""
    from devflake.services.resolve import ResolveService

    app.emit(ResolveService(app.settings).platforms())
