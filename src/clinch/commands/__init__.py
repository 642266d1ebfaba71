"""Subcommand modules for the clinch developer CLI.

Provides register_commands() which uses deferred imports to keep
``clinch --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the root CLI group."""
    from clinch.commands.inspect_cmd import inspect_cmd

    cli.add_command(inspect_cmd)
