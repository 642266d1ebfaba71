"""CommandCatalog — explicit, ordered registry of command classes.

Applications register command classes (directly, from module exports,
from dotted module names, or from plugins) once at startup and hand the
catalog to their router.  The catalog never resolves paths itself.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from clinch.domain.command import Command
from clinch.domain.definition import option_table
from clinch.domain.discovery import (
    extract_from_module_exports,
    is_command_class,
    load_module_commands,
)

if TYPE_CHECKING:
    from clinch.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

CommandClass = type[Command[Any]]


class CommandCatalog:
    """Ordered set of command classes.

    Usage::

        catalog = CommandCatalog()
        catalog.register(VersionCommand)
        catalog.load_modules(["myapp.commands.deploy"])
        router.register_all(catalog.listed())
    """

    def __init__(self, commands: Iterable[CommandClass] = ()) -> None:
        self._commands: list[CommandClass] = []
        for cls in commands:
            self.register(cls)

    def register(self, cls: object) -> bool:
        """Add *cls* to the catalog.

        Returns False if it was already registered.

        Raises:
            TypeError: *cls* is not a command class.
        """
        if not is_command_class(cls):
            msg = f"{cls!r} is not a command class"
            raise TypeError(msg)
        if cls in self._commands:
            return False
        self._commands.append(cls)
        logger.debug("Registered command %s", cls.__name__)
        return True

    def extend(self, exports: Any) -> list[CommandClass]:
        """Register every command class found in *exports*; return the new ones."""
        return [cls for cls in extract_from_module_exports(exports) if self.register(cls)]

    def load_modules(self, names: Iterable[str]) -> list[CommandClass]:
        """Import each dotted module name and register its command classes.

        Import errors propagate to the caller.
        """
        added: list[CommandClass] = []
        for name in names:
            found = load_module_commands(name)
            if not found:
                logger.warning("Module %s exports no command classes", name)
            added.extend(cls for cls in found if self.register(cls))
        return added

    def load_plugins(self, manager: PluginManager) -> list[CommandClass]:
        """Register the commands contributed by the plugins of *manager*."""
        if not manager.is_loaded:
            manager.discover_and_load()
        return [cls for cls in manager.collect_commands() if self.register(cls)]

    @property
    def commands(self) -> list[CommandClass]:
        """All registered command classes, in registration order."""
        return list(self._commands)

    def listed(self) -> list[CommandClass]:
        """Command classes that declare ``paths`` (the others are invoke-only)."""
        return [cls for cls in self._commands if cls.paths is not None]

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[CommandClass]:
        return iter(list(self._commands))

    def __contains__(self, cls: object) -> bool:
        return cls in self._commands


class CommandSummary(BaseModel):
    """Static metadata of one command class, for inspection output."""

    model_config = ConfigDict(frozen=True)

    name: str
    module: str
    paths: list[str] | None
    category: str | None = None
    description: str | None = None
    schema_size: int = 0
    option_count: int = 0

    @classmethod
    def of(cls, command_cls: CommandClass) -> CommandSummary:
        usage = command_cls.usage
        schema = command_cls.schema
        return cls(
            name=command_cls.__name__,
            module=command_cls.__module__,
            paths=[" ".join(p) for p in command_cls.paths] if command_cls.paths is not None else None,
            category=usage.category if usage else None,
            description=usage.description if usage else None,
            schema_size=len(schema) if isinstance(schema, (list, tuple)) else 0,
            option_count=len(option_table(command_cls)),
        )
