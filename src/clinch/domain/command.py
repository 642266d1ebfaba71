"""Command — the abstract base every command implementation derives from.

A command class declares where it is reachable (``paths``), what its
fields must satisfy (``schema``), and how it is documented (``usage``),
then implements ``execute``.  The router creates one instance per
invocation, fills in ``help``, ``cli``, ``context``, ``path`` and
``tokens``, and awaits :meth:`Command.validate_and_execute`.

Usage::

    class GreetCommand(Command):
        paths = [["greet"]]
        usage = Command.usage_of(category="Demo", description="Say hello")
        schema = [has_default("name", "world")]

        name: str | None = None

        async def execute(self) -> int | None:
            self.context.stdout.write(f"Hello {self.name}\\n")
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from clinch.domain.definition import IS_OPTION, OptionSpec, Usage
from clinch.schema.cascade import Predicate, validate_schema

if TYPE_CHECKING:
    from clinch.domain.context import MiniCli, Token

logger = logging.getLogger(__name__)

ContextT = TypeVar("ContextT")


class Command(ABC, Generic[ContextT]):
    """Base class for CLI commands.

    Subclasses must implement the async :meth:`execute`.  Everything else
    is optional.
    """

    #: Paths under which the command is exposed.  None keeps it out of
    #: listings; it can still be run by anyone holding the class.
    paths: ClassVar[list[list[str]] | None] = None

    #: Predicates applied to the instance before ``execute`` runs.
    schema: ClassVar[Sequence[Predicate] | None] = None

    #: Usage information.  None hides the command from the general listing.
    usage: ClassVar[Usage | None] = None

    #: Descriptor table of option-backed fields.
    options: ClassVar[Mapping[str, OptionSpec] | None] = None

    #: Use in ``paths`` to mark the default command: ``paths = [Command.DEFAULT]``.
    DEFAULT: ClassVar[list[str]] = []

    #: Marker carried by every option descriptor.
    is_option: ClassVar[object] = IS_OPTION

    # Populated by the router before validate_and_execute() runs.
    help: bool
    cli: MiniCli
    context: ContextT
    path: list[str]
    tokens: list[Token]

    def __init__(self) -> None:
        # Set to True when -h/--help was used; execute() is then skipped by the router.
        self.help = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "path" in vars(cls):
            msg = f"{cls.__name__} defines 'path'; command paths are declared with 'paths'"
            raise TypeError(msg)

    @staticmethod
    def usage_of(**fields: Any) -> Usage:
        """Build a :class:`Usage` record for the ``usage`` class attribute."""
        return Usage(**fields)

    @abstractmethod
    async def execute(self) -> int | None:
        """Run the command.  Returning None is treated as exit code 0."""

    async def catch(self, error: BaseException) -> None:
        """Handle an error raised by :meth:`execute`.

        The default re-raises *error* unchanged.  Override to log,
        translate, or swallow it.
        """
        raise error

    async def validate_and_execute(self) -> int:
        """Validate the instance against ``schema``, then run :meth:`execute`.

        Errors raised by ``execute`` propagate; routing them through
        :meth:`catch` is the caller's job.
        """
        command_cls = type(self)
        await validate_schema(command_cls.schema, self)

        exit_code = await self.execute()
        if exit_code is None:
            exit_code = 0
        logger.debug("Command %s exited with %s", command_cls.__name__, exit_code)
        return exit_code
