"""Schema layer — the validation cascade engine and ready-made predicates."""

from clinch.schema.cascade import (
    FieldView,
    Predicate,
    ValidationState,
    apply_cascade,
    fields_of,
    is_dict,
    set_field,
    validate_schema,
)

__all__ = [
    "FieldView",
    "Predicate",
    "ValidationState",
    "apply_cascade",
    "fields_of",
    "is_dict",
    "set_field",
    "validate_schema",
]
