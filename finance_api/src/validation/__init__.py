"""Schema definitions and validation.

This package contains the immutable Schema value objects and the validate()
function that turns raw request input into a typed value or field errors.
"""

from finance_api.src.validation.schema import (
    REQUIRED,
    Refinement,
    Schema,
    SchemaField,
    optional,
    schema_field,
    wire_name,
)
from finance_api.src.validation.validator import (
    Invalid,
    Valid,
    ValidationResult,
    first_error_message,
    format_validation_errors,
    utc_now,
    validate,
)

__all__ = [
    "REQUIRED",
    "Refinement",
    "Schema",
    "SchemaField",
    "optional",
    "schema_field",
    "wire_name",
    "Invalid",
    "Valid",
    "ValidationResult",
    "first_error_message",
    "format_validation_errors",
    "utc_now",
    "validate",
]
