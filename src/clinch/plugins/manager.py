"""Plugin discovery and command collection.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints
in the ``clinch.plugins`` group.  Each plugin implements the
``clinch_commands`` hook and returns the command classes it contributes.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

import pluggy

from clinch.domain.command import Command
from clinch.domain.discovery import extract_from_module_exports
from clinch.plugins.hookspecs import ClinchHookSpec

PROJECT_NAME = "clinch"
ENTRY_POINT_GROUP = "clinch.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and command collection."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(ClinchHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load plugins registered under the ``clinch.plugins`` entry point group.

        Returns the names of all registered plugins.
        """
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning("Failed to load entry-point plugins", exc_info=True)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def collect_commands(self) -> list[type[Command[Any]]]:
        """Gather the command classes contributed by every registered plugin.

        A plugin whose hook raises or returns nothing usable is skipped
        with a warning.
        """
        commands: list[type[Command[Any]]] = []
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            hook = getattr(plugin, "clinch_commands", None)
            if hook is None:
                continue
            try:
                contributed = hook()
            except Exception:
                logger.warning(
                    "Failed to collect commands from plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            found = extract_from_module_exports(contributed)
            if contributed is not None and not found:
                logger.warning("Plugin %s contributed no command classes", plugin_name)
            for cls in found:
                if cls not in commands:
                    commands.append(cls)
        return commands

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly; hook
        dispatch against a class object leaves ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue
            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
