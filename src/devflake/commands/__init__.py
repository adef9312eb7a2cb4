"""Subcommand modules for devflake.

Provides register_commands() which uses deferred imports to keep
``devflake --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from devflake.commands.build import build
    from devflake.commands.platforms import platforms
    from devflake.commands.resolve import resolve
    from devflake.commands.shell import shell
    from devflake.commands.toolchain import toolchain

    cli.add_command(resolve)
    cli.add_command(platforms)
    cli.add_command(toolchain)
    cli.add_command(shell)
    cli.add_command(build)
