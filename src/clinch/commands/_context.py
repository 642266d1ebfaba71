"""AppContext — shared Click context for all developer commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Command modules are only imported by the
subcommands that need them, so ``--help`` and ``--version`` stay cheap.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from clinch.config.settings import ClinchSettings
    from clinch.services.catalog import CommandCatalog


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: ClinchSettings) -> None:
        self.settings = settings

        from clinch.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def build_catalog(self, extra_modules: Iterable[str]) -> CommandCatalog:
        """Load the configured modules, *extra_modules*, and plugins into a new catalog.

        Import failures become :class:`click.ClickException` (exit code 1).
        """
        from clinch.plugins.manager import PluginManager
        from clinch.services.catalog import CommandCatalog

        catalog = CommandCatalog()
        for name in [*self.settings.modules, *extra_modules]:
            try:
                catalog.load_modules([name])
            except ImportError as exc:
                msg = f"Cannot import command module {name!r}: {exc}"
                raise click.ClickException(msg) from exc
        if self.settings.plugins:
            catalog.load_plugins(PluginManager())
        return catalog

    def emit(self, output: str) -> None:
        """Write *output* to stdout."""
        click.echo(output)
