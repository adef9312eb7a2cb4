"""Root CLI group for devflake with global flags and command registration."""

from __future__ import annotations

import click

from devflake import __version__
from devflake.commands import register_commands
from devflake.commands._context import AppContext
from devflake.config.settings import DevflakeSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="devflake")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-plugins", is_flag=True, help="Skip plugin discovery.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_plugins: bool,
    config_path: str | None,
) -> None:
    """devflake — build and dev-shell resolver for every supported platform."""
    ctx.ensure_object(dict)
    settings = DevflakeSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_plugins=no_plugins,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
