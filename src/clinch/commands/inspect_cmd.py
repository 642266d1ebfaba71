"""Command: list the command classes a set of modules exports."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from clinch.commands._context import AppContext


@click.command("inspect")
@click.argument("modules", nargs=-1)
@click.option("--listed-only", is_flag=True, help="Hide commands without paths.")
@click.option(
    "--definitions",
    is_flag=True,
    help="Dump the Definition records handed to help renderers (JSON).",
)
@click.pass_obj
def inspect_cmd(
    app: AppContext,
    modules: tuple[str, ...],
    listed_only: bool,
    definitions: bool,
) -> None:
    """Show the command classes exported by MODULES (dotted names).

    Modules from ``[tool.clinch] modules`` and plugin commands are
    included as well.
    """
    from clinch.domain.definition import build_definition
    from clinch.output.formatters import format_summaries
    from clinch.services.catalog import CommandSummary

    catalog = app.build_catalog(modules)
    commands = catalog.listed() if listed_only else catalog.commands

    if definitions:
        binary_name = app.settings.binary_name
        records = []
        for command_cls in commands:
            paths = command_cls.paths or [[]]
            # The bare path stands in for the usage line; rendering it is the help renderer's job.
            usage_line = " ".join([binary_name, *paths[0]])
            definition = build_definition(command_cls, binary_name=binary_name, usage=usage_line)
            records.append(definition.model_dump(mode="json"))
        app.emit(json.dumps(records, indent=2))
        return

    summaries = [CommandSummary.of(command_cls) for command_cls in commands]
    app.emit(
        format_summaries(
            summaries,
            json_output=app.settings.json_output,
            verbose=app.settings.verbose,
        )
    )
