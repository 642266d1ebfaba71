"""Pluggy hook specifications for plugin-provided commands."""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("clinch")
hookimpl = pluggy.HookimplMarker("clinch")


class ClinchHookSpec:
    """Hook specifications for the clinch plugin system."""

    @hookspec
    def clinch_commands(self) -> object:
        """Return the commands this plugin contributes.

        Any value accepted by ``extract_from_module_exports`` works: a
        command class, a module, a mapping of names to classes.  A list
        or tuple of such values is also accepted.
        """
