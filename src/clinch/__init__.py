"""clinch — command contract, discovery, and validation cascade for CLI frameworks."""

from clinch.domain.command import Command
from clinch.domain.context import BaseContext, MiniCli
from clinch.domain.definition import (
    IS_OPTION,
    Definition,
    OptionDefinition,
    OptionSpec,
    Usage,
    build_definition,
    collect_options,
)
from clinch.domain.discovery import (
    extract_from_module_exports,
    is_command_class,
    load_module_commands,
)
from clinch.domain.errors import (
    ClinchError,
    InvalidSchemaConfiguration,
    SchemaValidationError,
)
from clinch.schema.cascade import ValidationState, validate_schema

__version__ = "0.1.0"

__all__ = [
    "IS_OPTION",
    "BaseContext",
    "ClinchError",
    "Command",
    "Definition",
    "InvalidSchemaConfiguration",
    "MiniCli",
    "OptionDefinition",
    "OptionSpec",
    "SchemaValidationError",
    "Usage",
    "ValidationState",
    "__version__",
    "build_definition",
    "collect_options",
    "extract_from_module_exports",
    "is_command_class",
    "load_module_commands",
    "validate_schema",
]
