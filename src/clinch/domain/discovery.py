"""Command discovery over arbitrary exported values.

Modules may export a single command class, several named command
classes, or a mix of commands and unrelated helpers.  Discovery picks
out the command classes, testing each candidate value on its own.
"""

from __future__ import annotations

import importlib
import inspect
from collections.abc import Iterable, Mapping, Sequence
from types import ModuleType
from typing import Any, TypeGuard

from clinch.domain.command import Command


def is_command_class(value: object) -> TypeGuard[type[Command[Any]]]:
    """Return True if *value* is a class deriving from :class:`Command`.

    ``Command`` itself is not a command class; abstract intermediate
    bases are.
    """
    return inspect.isclass(value) and value is not Command and issubclass(value, Command)


def _module_exports(module: ModuleType) -> list[Any]:
    names = getattr(module, "__all__", None)
    if names is None:
        names = [name for name in vars(module) if not name.startswith("_")]
    return [getattr(module, name) for name in names if hasattr(module, name)]


def _filter_commands(candidates: Iterable[Any]) -> list[type[Command[Any]]]:
    # A class bound to several names is kept once, at its first position.
    found: list[type[Command[Any]]] = []
    for value in candidates:
        if is_command_class(value) and value not in found:
            found.append(value)
    return found


def extract_from_module_exports(exports: Any) -> list[type[Command[Any]]]:
    """Return every command class found in *exports*.

    * A command class yields ``[exports]``.
    * A module yields its public command classes (``__all__`` order if
      declared, else definition order).
    * A list or tuple yields the command classes among its items.
    * A mapping or any other object with fields yields the command
      classes among its values, in iteration order.
    * Anything else yields ``[]``.

    Each value is tested independently; a class exported under two
    names is listed once.
    """
    if is_command_class(exports):
        return [exports]
    if isinstance(exports, ModuleType):
        return _filter_commands(_module_exports(exports))
    if isinstance(exports, Mapping):
        return _filter_commands(exports.values())
    if isinstance(exports, Sequence) and not isinstance(exports, (str, bytes, bytearray)):
        return _filter_commands(exports)
    if exports is not None and hasattr(exports, "__dict__") and not callable(exports):
        return _filter_commands(vars(exports).values())
    return []


def load_module_commands(name: str) -> list[type[Command[Any]]]:
    """Import the module *name* and return the command classes it exports."""
    return extract_from_module_exports(importlib.import_module(name))
