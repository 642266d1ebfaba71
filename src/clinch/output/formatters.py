"""Rich/JSON rendering of catalog inspections.

Renders into a StringIO-backed Console so callers get a plain string
back; Rich disables color codes automatically outside a TTY.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

if TYPE_CHECKING:
    from clinch.services.catalog import CommandSummary

CLINCH_THEME = Theme(
    {
        "clinch.name": "bold cyan",
        "clinch.path": "bold",
        "clinch.hidden": "dim italic",
        "clinch.count": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=CLINCH_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def _summary_table(summaries: Sequence[CommandSummary], *, verbose: bool) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Command", style="clinch.name", no_wrap=True)
    table.add_column("Paths", style="clinch.path")
    table.add_column("Category")
    table.add_column("Description")
    table.add_column("Schema", style="clinch.count", justify="right")
    table.add_column("Options", style="clinch.count", justify="right")
    if verbose:
        table.add_column("Module", style="dim")

    for summary in summaries:
        if summary.paths is None:
            paths = "[clinch.hidden](unlisted)[/]"
        else:
            paths = "\n".join(p or "(default)" for p in summary.paths)
        row = [
            summary.name,
            paths,
            summary.category or "",
            summary.description or "",
            str(summary.schema_size),
            str(summary.option_count),
        ]
        if verbose:
            row.append(summary.module)
        table.add_row(*row)
    return table


def format_summaries(
    summaries: Sequence[CommandSummary],
    *,
    json_output: bool = False,
    verbose: bool = False,
) -> str:
    """Format command summaries for display.

    Args:
        summaries: Rows to render.
        json_output: Return a JSON document instead of a table.
        verbose: Include the defining module in the table.
    """
    if json_output:
        payload = {
            "count": len(summaries),
            "commands": [s.model_dump(mode="json") for s in summaries],
        }
        return json.dumps(payload, indent=2)

    if not summaries:
        return "No commands found."

    console = create_console()
    console.print(_summary_table(summaries, verbose=verbose))
    console.print(f"{len(summaries)} command(s)")
    assert isinstance(console.file, StringIO)
    return console.file.getvalue().rstrip("\n")
