"""Ready-made cascade predicates for common option constraints.

Each factory returns a predicate suitable for a command's ``schema``::

    class DeployCommand(Command):
        schema = [
            has_mutually_exclusive_keys(["tag", "branch"]),
            has_key_relationship("force", KeyRelationship.REQUIRES, ["tag"]),
            coerce_field("retries", int),
            has_default("retries", 3),
        ]

A field counts as missing when its value is None (``missing_if="none"``)
or when it is falsy (``missing_if="falsy"``).
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping, Sequence
from enum import StrEnum
from typing import Any, Literal

from pydantic import TypeAdapter, ValidationError

from clinch.schema.cascade import Predicate, ValidationState, fields_of, set_field

MissingIf = Literal["none", "falsy"]


class KeyRelationship(StrEnum):
    """How a subject property relates to other properties."""

    FORBIDS = "forbids"
    REQUIRES = "requires"


def _is_present(fields: Mapping[str, Any], key: str, missing_if: MissingIf) -> bool:
    value = fields.get(key)
    if missing_if == "falsy":
        return bool(value)
    return value is not None


def _quoted(keys: Sequence[str], separator: str = ", ") -> str:
    return separator.join(f'"{key}"' for key in keys)


def has_mutually_exclusive_keys(keys: Sequence[str], *, missing_if: MissingIf = "none") -> Predicate:
    """Fail when more than one of *keys* is present."""

    def check(candidate: Any, state: ValidationState) -> bool:
        fields = fields_of(candidate)
        used = [key for key in keys if _is_present(fields, key, missing_if)]
        if len(used) > 1:
            return state.push_error(f"Mutually exclusive properties {_quoted(used, ' and ')}")
        return True

    return check


def has_key_relationship(
    subject: str,
    relationship: KeyRelationship,
    others: Sequence[str],
    *,
    missing_if: MissingIf = "none",
) -> Predicate:
    """Constrain *others* whenever *subject* is present.

    ``FORBIDS`` fails if any of *others* is present; ``REQUIRES`` fails
    if any of them is missing.  No-op when *subject* is missing.
    """

    def check(candidate: Any, state: ValidationState) -> bool:
        fields = fields_of(candidate)
        if not _is_present(fields, subject, missing_if):
            return True
        if relationship is KeyRelationship.FORBIDS:
            problems = [key for key in others if _is_present(fields, key, missing_if)]
        else:
            problems = [key for key in others if not _is_present(fields, key, missing_if)]
        if not problems:
            return True
        noun = "property" if len(problems) == 1 else "properties"
        return state.push_error(
            f'Property "{subject}" {relationship.value} using {noun} {_quoted(problems)}'
        )

    return check


def has_at_least_one_key(keys: Sequence[str], *, missing_if: MissingIf = "none") -> Predicate:
    """Fail when none of *keys* is present."""

    def check(candidate: Any, state: ValidationState) -> bool:
        fields = fields_of(candidate)
        if any(_is_present(fields, key, missing_if) for key in keys):
            return True
        return state.push_error(f"Missing at least one property from {_quoted(keys)}")

    return check


def has_default(name: str, value: Any, *, missing_if: MissingIf = "none") -> Predicate:
    """Queue a coercion assigning *value* to *name* when the field is missing.

    Each coercion assigns a fresh deep copy, so a mutable default such as
    ``[]`` is never shared between command instances.
    """

    def check(candidate: Any, state: ValidationState) -> bool:
        if not _is_present(fields_of(candidate), name, missing_if):
            state.push_coercion(name, lambda: set_field(candidate, name, copy.deepcopy(value)))
        return True

    return check


def coerce_field(name: str, type_: Any) -> Predicate:
    """Convert the field *name* to *type_* using pydantic's lax validation.

    ``"42"`` becomes ``42`` for ``int``, ``"out.txt"`` becomes a
    :class:`~pathlib.Path` for ``Path``, and so on.  The converted value
    is stored through a coercion.  Missing (None) fields are skipped.
    """
    adapter: TypeAdapter[Any] = TypeAdapter(type_)

    def check(candidate: Any, state: ValidationState) -> bool:
        raw = fields_of(candidate).get(name)
        if raw is None:
            return True
        try:
            converted = adapter.validate_python(raw)
        except ValidationError as exc:
            reason = exc.errors()[0]["msg"]
            return state.push_error(f'Invalid value for "{name}": {reason}')
        state.push_coercion(name, lambda: set_field(candidate, name, converted))
        return True

    return check


def predicate(test: Callable[[Mapping[str, Any]], bool], message: str) -> Predicate:
    """Wrap a boolean *test* over the candidate's fields; push *message* on failure."""

    def check(candidate: Any, state: ValidationState) -> bool:
        if test(fields_of(candidate)):
            return True
        return state.push_error(message)

    return check
