"""
Schema validation returning a tagged result instead of raising.

validate() checks raw input (decoded JSON, query parameters) against a
Schema. Per-field checks run first; cross-field refinements run only when
every field passed. Errors are keyed by dot-joined wire paths and the first
error reported for a path wins.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Callable, Dict, Generic, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError

from finance_api.src.validation.schema import Schema, wire_name

T = TypeVar("T", bound=BaseModel)

Clock = Callable[[], datetime]

DEFAULT_ERROR_MESSAGE = "Validation failed"


def utc_now() -> datetime:
    """Default validation clock."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Valid(Generic[T]):
    """Successful validation carrying the typed value."""
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Invalid:
    """Failed validation carrying field path -> message."""
    errors: Mapping[str, str]

    def __post_init__(self):
        object.__setattr__(self, "errors", MappingProxyType(dict(self.errors)))

    @property
    def ok(self) -> bool:
        return False


ValidationResult = Union[Valid[T], Invalid]


def validate(schema: Schema, raw_input: Any, *, clock: Optional[Clock] = None) -> ValidationResult:
    """
    Validate raw input against a schema.

    Args:
        schema: Schema to validate against
        raw_input: Untyped input, usually decoded JSON
        clock: Source of "now" for clock-defaulted fields

    Returns:
        Valid with the model instance, or Invalid with field errors

    Example:
        >>> result = validate(sign_in_schema, {"email": "a@b.com", "password": "secret1"})
        >>> result.ok
        True
    """
    data = _apply_clock_defaults(schema, raw_input, clock or utc_now)

    try:
        value = schema.model.model_validate(data)
    except ValidationError as exc:
        return Invalid(format_validation_errors(exc, schema))

    errors: Dict[str, str] = {}
    for refinement in schema.refinements:
        if not refinement.check(value):
            errors.setdefault(refinement.error_path, refinement.message)

    if errors:
        return Invalid(errors)
    return Valid(value)


def format_validation_errors(exc: ValidationError, schema: Optional[Schema] = None) -> Dict[str, str]:
    """
    Flatten a Pydantic ValidationError into path -> message.

    Args:
        exc: Validation error raised by Pydantic
        schema: Schema whose field message overrides apply

    Returns:
        One message per dot-joined location, first error wins
    """
    errors: Dict[str, str] = {}

    for error in exc.errors():
        location = error.get("loc", ())
        path = ".".join(str(part) for part in location)
        if path in errors:
            continue

        message = error["msg"]
        if schema is not None and location:
            spec = schema.field_for_wire(str(location[0]))
            if spec is not None:
                message = spec.message_for(error["type"]) or message

        errors[path] = message

    return errors


def first_error_message(errors: Mapping[str, str]) -> str:
    """Return the first error message, or a generic one."""
    return next(iter(errors.values()), DEFAULT_ERROR_MESSAGE)


def _apply_clock_defaults(schema: Schema, raw_input: Any, clock: Clock) -> Any:
    if not isinstance(raw_input, Mapping):
        return raw_input

    missing = [
        (field_name, spec)
        for field_name, spec in schema.fields.items()
        if spec.clock_default
        and raw_input.get(field_name) is None
        and raw_input.get(wire_name(field_name)) is None
    ]
    if not missing:
        return raw_input

    now = clock()
    data = dict(raw_input)
    for field_name, spec in missing:
        data[wire_name(field_name)] = spec.clock_value(now)
    return data
