"""Root CLI group for spacectl with global flags and command registration."""

from __future__ import annotations

import click

from spacectl import __version__
from spacectl.commands import register_commands
from spacectl.commands._base import SpaceGroup
from spacectl.commands._context import AppContext
from spacectl.config.settings import SpacectlSettings


@click.group(cls=SpaceGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="spacectl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with timing info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-interact", is_flag=True, help="Non-interactive mode (no prompts).")
@click.option(
    "-f", "--force", is_flag=True, help="Skip confirmations and delete non-empty spaces."
)
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_interact: bool,
    force: bool,
    config_path: str | None,
) -> None:
    """spacectl: manage spaces in your platform organizations."""
    settings = SpacectlSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_interact=no_interact,
        force=force,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
