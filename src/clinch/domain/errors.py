"""Error taxonomy for command validation and execution.

Three families:

- :class:`InvalidSchemaConfiguration`: a command declares a ``schema``
  that is not a sequence.  Programming error, raised before any field
  of the instance is read.
- :class:`SchemaValidationError`: one or more cascade predicates
  failed.  Carries every collected message, in order.  Also a
  :class:`click.UsageError` so routers built on Click report it as a
  usage error (exit code 2).
- Execution errors: whatever ``execute`` raises.  Not wrapped; they
  flow through ``Command.catch`` unchanged.
"""

from __future__ import annotations

from collections.abc import Sequence

import click


class ClinchError(Exception):
    """Base class for errors raised by the command core itself."""


class InvalidSchemaConfiguration(ClinchError, TypeError):
    """A command class declares a ``schema`` that is neither None nor a sequence."""

    def __init__(self, schema: object) -> None:
        super().__init__("Invalid command schema")
        self.schema = schema


class SchemaValidationError(ClinchError, click.UsageError):
    """Aggregated cascade failure.

    Attributes:
        errors: Every message collected during the cascade, in the
            order predicates appended them.
    """

    def __init__(self, message: str, errors: Sequence[str]) -> None:
        super().__init__(message)
        self.errors: list[str] = list(errors)


def format_error(message: str, errors: Sequence[str]) -> SchemaValidationError:
    """Build a :class:`SchemaValidationError` listing *errors* under *message*.

    A single error is inlined (``"<message>: <error>"``); several errors
    are rendered as a bullet list, one per line.
    """
    if len(errors) == 1:
        text = f"{message}: {errors[0]}"
    else:
        text = f"{message}:\n" + "".join(f"\n- {error}" for error in errors)
    return SchemaValidationError(text, errors)
