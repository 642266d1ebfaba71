"""Validation cascade engine.

A cascade is an ordered list of predicates applied to one candidate
object (a command instance).  Every predicate shares one
:class:`ValidationState`: errors accumulate instead of short-circuiting,
and coercions (deferred mutations) are only applied once the whole
cascade has succeeded.

INVARIANT: coercions never run on a candidate that failed validation.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterator, Mapping, MutableMapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from clinch.domain.errors import InvalidSchemaConfiguration, format_error

logger = logging.getLogger(__name__)

Coercion = tuple[str, Callable[[], None]]


@dataclass
class ValidationState:
    """Shared accumulator passed to every predicate of a cascade."""

    errors: list[str] = field(default_factory=list)
    coercions: list[Coercion] = field(default_factory=list)

    def push_error(self, message: str) -> bool:
        """Record *message* and return False so predicates can ``return state.push_error(...)``."""
        self.errors.append(message)
        return False

    def push_coercion(self, name: str, operation: Callable[[], None]) -> None:
        self.coercions.append((name, operation))


class Predicate(Protocol):
    """A cascade entry.  May be a plain or an async callable."""

    def __call__(self, candidate: Any, state: ValidationState) -> bool | Awaitable[bool]: ...


# ---------------------------------------------------------------------------
# Field access
# ---------------------------------------------------------------------------


class FieldView(Mapping[str, Any]):
    """Read-only mapping view over an object's fields.

    Lookups go through ``getattr`` so class-level defaults are visible;
    iteration only covers fields set on the instance.
    """

    def __init__(self, target: object) -> None:
        self._target = target

    def __getitem__(self, key: str) -> Any:
        try:
            return getattr(self._target, key)
        except AttributeError:
            raise KeyError(key) from None

    def __iter__(self) -> Iterator[str]:
        return iter(vars(self._target))

    def __len__(self) -> int:
        return len(vars(self._target))


def fields_of(candidate: Any) -> Mapping[str, Any]:
    """Return *candidate* as a mapping of field names to values."""
    if isinstance(candidate, Mapping):
        return candidate
    return FieldView(candidate)


def set_field(candidate: Any, name: str, value: Any) -> None:
    """Assign *value* to the field *name* of *candidate*."""
    if isinstance(candidate, MutableMapping):
        candidate[name] = value
    else:
        setattr(candidate, name, value)


# ---------------------------------------------------------------------------
# Cascade composition
# ---------------------------------------------------------------------------


def is_dict() -> Predicate:
    """Base check: the candidate must behave as a dictionary of fields."""

    def check(candidate: Any, state: ValidationState) -> bool:
        if isinstance(candidate, Mapping) or hasattr(candidate, "__dict__"):
            return True
        return state.push_error(f"Expected an object (got {type(candidate).__name__})")

    return check


async def _resolve(result: bool | Awaitable[bool]) -> bool:
    if inspect.isawaitable(result):
        result = await result
    return bool(result)


def apply_cascade(base: Predicate, cascade: Sequence[Predicate]) -> Callable[..., Awaitable[bool]]:
    """Combine *base* with every entry of *cascade* into one async predicate.

    If *base* fails the cascade is not evaluated.  Otherwise every entry
    runs in declared order, even after a failure, and the result is the
    logical AND of all of them.
    """

    async def check(candidate: Any, state: ValidationState) -> bool:
        if not await _resolve(base(candidate, state)):
            return False
        valid = True
        for entry in cascade:
            if not await _resolve(entry(candidate, state)):
                valid = False
        return valid

    return check


async def validate_schema(schema: Sequence[Predicate] | None, candidate: Any) -> None:
    """Validate *candidate* against *schema*, then apply collected coercions.

    Raises:
        InvalidSchemaConfiguration: *schema* is neither None nor a list/tuple.
        SchemaValidationError: at least one predicate failed; carries all
            collected messages.
    """
    if schema is None:
        return
    if not isinstance(schema, (list, tuple)):
        raise InvalidSchemaConfiguration(schema)

    state = ValidationState()
    valid = await apply_cascade(is_dict(), schema)(candidate, state)
    if not valid:
        logger.debug("Schema validation failed with %d error(s)", len(state.errors))
        raise format_error("Invalid option schema", state.errors)

    for name, operation in state.coercions:
        logger.debug("Applying coercion for %s", name)
        operation()
