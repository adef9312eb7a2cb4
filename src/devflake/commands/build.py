"""Command: build the package with cargo in the resolved environment."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from devflake.commands._base import DevflakeCommand

if TYPE_CHECKING:
    from devflake.commands._context import AppContext


@click.command(
    cls=DevflakeCommand,
    context_settings={"ignore_unknown_options": True},
    examples="""\
        devflake build
        devflake build --dry-run
        devflake build -- --features gpu""",
)
@click.option("-p", "--platform", default=None, help="Target platform. Default: this host.")
@click.option("--dry-run", is_flag=True, help="Print the command and environment without running.")
@click.argument("cargo_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def build(app: AppContext, platform: str | None, dry_run: bool, cargo_args: tuple[str, ...]) -> None:
    """Run ``cargo build --release`` for the package."""
    from devflake.services.consume import ConsumeService

    svc = ConsumeService(app.settings, plugins=app.plugins)
    app.emit(svc.build(platform, dry_run=dry_run, cargo_args=cargo_args))
