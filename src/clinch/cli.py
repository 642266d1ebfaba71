"""Root CLI group for clinch with global flags and command registration."""

from __future__ import annotations

import click

from clinch import __version__
from clinch.commands import register_commands
from clinch.commands._context import AppContext
from clinch.config.settings import ClinchSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="clinch")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-plugins", is_flag=True, help="Skip loading plugin commands.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    no_plugins: bool,
) -> None:
    """clinch — command core inspection utility."""
    # Unset flags fall through to env vars and [tool.clinch].
    settings = ClinchSettings.from_cli(
        json_output=json_output or None,
        verbose=verbose or None,
        log_json=log_json or None,
        plugins=False if no_plugins else None,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
