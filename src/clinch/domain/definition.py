"""Usage and definition records consumed by help renderers.

``Usage`` is declared by each command class.  ``Definition`` is the
record a help-listing renderer receives for one command: its display
path, rendered usage line, and option table.

Option-backed fields are declared up front in a per-class descriptor
table (``options = {"field_name": OptionSpec(...)}``) instead of being
discovered at instance-construction time.  Every :class:`OptionSpec`
carries the :data:`IS_OPTION` marker so option-declaration systems can
recognise it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from clinch.domain.command import Command


class _OptionMarker:
    """Singleton marker type for option descriptors."""

    _instance: _OptionMarker | None = None

    def __new__(cls) -> _OptionMarker:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "IS_OPTION"


IS_OPTION: Final = _OptionMarker()


class Usage(BaseModel):
    """Usage information declared by a command class.

    Attributes:
        category: Grouping label in the detailed usage.
        description: Short description, formatted as Markdown.
        details: Extended details, formatted as Markdown.
        examples: ``(description, command)`` pairs.  A leading ``$0`` in
            the command is replaced by the binary name when rendered.
    """

    model_config = ConfigDict(frozen=True)

    category: str | None = None
    description: str | None = None
    details: str | None = None
    examples: list[tuple[str, str]] | None = None


class OptionSpec(BaseModel):
    """Descriptor table entry for one option-backed field."""

    model_config = ConfigDict(frozen=True)

    name_set: tuple[str, ...]
    description: str | None = None
    required: bool = False
    arity: int = 0

    @property
    def is_option(self) -> _OptionMarker:
        return IS_OPTION

    @property
    def preferred_name(self) -> str:
        """Longest name in the set (``--name`` over ``-n``)."""
        return max(self.name_set, key=len)


class OptionDefinition(BaseModel):
    """One entry of ``Definition.options``."""

    model_config = ConfigDict(frozen=True)

    preferred_name: str
    name_set: list[str]
    definition: str
    description: str | None = None
    required: bool


class Definition(Usage):
    """Rendered metadata for one command."""

    path: str
    usage: str
    options: list[OptionDefinition] = Field(default_factory=list)


def is_option_spec(value: object) -> bool:
    """Return True if *value* is tagged with the :data:`IS_OPTION` marker."""
    return getattr(value, "is_option", None) is IS_OPTION


def option_table(command_cls: type[Command]) -> dict[str, OptionSpec]:
    """Merge the ``options`` tables declared along the MRO of *command_cls*.

    Base-class entries come first; a subclass redefining a field replaces
    the inherited entry in place.
    """
    table: dict[str, OptionSpec] = {}
    for klass in reversed(command_cls.__mro__):
        declared = vars(klass).get("options")
        if not isinstance(declared, Mapping):
            continue
        for field_name, spec in declared.items():
            if not is_option_spec(spec):
                msg = f"{klass.__name__}.options[{field_name!r}] is not an OptionSpec"
                raise TypeError(msg)
            table[field_name] = spec
    return table


def _option_definition(spec: OptionSpec) -> str:
    names = ",".join(spec.name_set)
    if spec.arity == 0:
        return names
    placeholders = " ".join(f"#{i}" for i in range(spec.arity))
    return f"{names} {placeholders}"


def collect_options(command_cls: type[Command]) -> list[OptionDefinition]:
    """Serialize the option table of *command_cls* for ``Definition.options``."""
    return [
        OptionDefinition(
            preferred_name=spec.preferred_name,
            name_set=list(spec.name_set),
            definition=_option_definition(spec),
            description=spec.description,
            required=spec.required,
        )
        for spec in option_table(command_cls).values()
    ]


def build_definition(command_cls: type[Command], *, binary_name: str, usage: str) -> Definition:
    """Assemble the :class:`Definition` record for *command_cls*.

    *usage* is the already-rendered usage line; rendering it is the
    help renderer's job.  The path is *binary_name* followed by the
    first declared path, if any.
    """
    paths = command_cls.paths or []
    segments = [binary_name, *(paths[0] if paths else [])]
    declared = command_cls.usage or Usage()
    return Definition(
        path=" ".join(segments),
        usage=usage,
        options=collect_options(command_cls),
        **declared.model_dump(),
    )
