"""Boundary types shared with the router.

The router owns tokenizing, path matching, and help rendering.  These
types only describe what it hands to a command instance before
``validate_and_execute`` runs.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import IO, TYPE_CHECKING, Any, Protocol, TypeAlias

if TYPE_CHECKING:
    from clinch.domain.command import Command
    from clinch.domain.definition import Definition

# Lexical tokens are produced by the router's tokenizer; opaque here.
Token: TypeAlias = Any


@dataclass
class BaseContext:
    """Minimal application context.  Applications extend it with their own state."""

    stdin: IO[str] = field(default_factory=lambda: sys.stdin)
    stdout: IO[str] = field(default_factory=lambda: sys.stdout)
    stderr: IO[str] = field(default_factory=lambda: sys.stderr)
    env: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))
    color_depth: int = 1


class MiniCli(Protocol):
    """Facade a command uses to introspect and forward to sibling commands."""

    binary_label: str | None
    binary_name: str
    binary_version: str | None

    def definitions(self) -> list[Definition]: ...

    def process(self, input: Sequence[str]) -> Command: ...

    async def run(self, input: Sequence[str], context: Any = None) -> int: ...

    def usage(self, command_cls: type[Command] | None = None, *, detailed: bool = False) -> str: ...
