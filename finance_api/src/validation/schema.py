"""
Immutable, composable validation schemas.

A Schema is a named set of fields plus cross-field refinements. Each schema
compiles once, at construction, into a frozen Pydantic model that performs
the per-field type and constraint checks. Derivations (pick, omit, partial,
extend, refine, with_clock_default) never mutate a schema; they return a new
one that shares the untouched SchemaField values with the original.

Field names are snake_case in Python and camelCase on the wire.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Type, get_args

from pydantic import BaseModel, ConfigDict, Field, create_model
from pydantic.alias_generators import to_camel


REQUIRED: Any = ...

MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
    frozen=True,
)


def wire_name(name: str) -> str:
    """Return the camelCase name a field uses in JSON payloads."""
    return to_camel(name)


@dataclass(frozen=True)
class SchemaField:
    """
    Shape of one field.

    Attributes:
        annotation: Python type checked by Pydantic
        default: Default value, REQUIRED when the field must be present
        constraints: Pydantic Field constraints (min_length, gt, le, ...)
        messages: Error type -> message overrides for this field
        clock_default: Fill the field from the validation clock when absent
    """
    annotation: Any
    default: Any = REQUIRED
    constraints: Mapping[str, Any] = field(default_factory=dict)
    messages: Mapping[str, str] = field(default_factory=dict)
    clock_default: bool = False

    def __post_init__(self):
        object.__setattr__(self, "constraints", MappingProxyType(dict(self.constraints)))
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))

    @property
    def required(self) -> bool:
        return self.default is REQUIRED and not self.clock_default

    def clock_value(self, now: datetime) -> Any:
        """Convert a clock reading to the value this field accepts."""
        members = get_args(self.annotation) or (self.annotation,)
        if date in members and datetime not in members:
            return now.date()
        return now

    def message_for(self, error_type: str) -> Optional[str]:
        return self.messages.get(error_type)


def schema_field(
    annotation: Any,
    default: Any = REQUIRED,
    *,
    messages: Optional[Mapping[str, str]] = None,
    **constraints: Any,
) -> SchemaField:
    """Build a SchemaField; extra keyword arguments become constraints."""
    return SchemaField(
        annotation=annotation,
        default=default,
        constraints=constraints,
        messages=messages or {},
    )


def optional(
    annotation: Any,
    *,
    messages: Optional[Mapping[str, str]] = None,
    **constraints: Any,
) -> SchemaField:
    """Build a SchemaField that may be absent (defaults to None)."""
    return schema_field(Optional[annotation], None, messages=messages, **constraints)


@dataclass(frozen=True)
class Refinement:
    """A predicate over a fully validated value, reported at `path`."""
    check: Callable[[Any], bool]
    message: str
    path: Tuple[str, ...] = ()

    @property
    def error_path(self) -> str:
        return ".".join(wire_name(part) for part in self.path)


@dataclass(frozen=True)
class Schema:
    """
    Declarative description of a data shape.

    Example:
        >>> login = Schema("Login", {"email": schema_field(str)})
        >>> login.pick("email").field_names
        ('email',)
    """
    name: str
    fields: Mapping[str, SchemaField]
    refinements: Tuple[Refinement, ...] = ()
    model: Type[BaseModel] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        object.__setattr__(self, "refinements", tuple(self.refinements))
        object.__setattr__(self, "model", _build_model(self.name, self.fields))

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(self.fields)

    def field_for_wire(self, name: str) -> Optional[SchemaField]:
        """Look up a field by its wire name or Python name."""
        for field_name, spec in self.fields.items():
            if name in (field_name, wire_name(field_name)):
                return spec
        return None

    # =========================================================================
    # Derivation
    # =========================================================================

    def pick(self, *names: str, name: Optional[str] = None) -> "Schema":
        """New schema with only `names`. Refinements are not carried over."""
        self._require_known(names)
        kept = {key: spec for key, spec in self.fields.items() if key in names}
        return Schema(name or f"{self.name}Pick", kept)

    def omit(self, *names: str, name: Optional[str] = None) -> "Schema":
        """New schema without `names`. Refinements are not carried over."""
        self._require_known(names)
        kept = {key: spec for key, spec in self.fields.items() if key not in names}
        return Schema(name or f"{self.name}Omit", kept)

    def partial(self, name: Optional[str] = None) -> "Schema":
        """New schema where every field is optional and defaults to None."""
        loosened = {
            key: spec if not spec.required else replace(
                spec, annotation=Optional[spec.annotation], default=None
            )
            for key, spec in self.fields.items()
        }
        return Schema(name or f"{self.name}Partial", loosened)

    def extend(self, extra: Mapping[str, SchemaField], name: Optional[str] = None) -> "Schema":
        """New schema with `extra` fields added or replaced; refinements are kept."""
        merged: Dict[str, SchemaField] = dict(self.fields)
        merged.update(extra)
        return Schema(name or self.name, merged, self.refinements)

    def refine(
        self,
        check: Callable[[Any], bool],
        message: str,
        path: Iterable[str] = (),
    ) -> "Schema":
        """New schema with an extra cross-field refinement."""
        path = tuple(path)
        self._require_known(path[:1])
        refinement = Refinement(check=check, message=message, path=path)
        return Schema(self.name, self.fields, self.refinements + (refinement,))

    def with_clock_default(self, *names: str) -> "Schema":
        """New schema whose `names` default to the validation clock when absent."""
        self._require_known(names)
        updated = {
            key: replace(spec, clock_default=True) if key in names else spec
            for key, spec in self.fields.items()
        }
        return Schema(self.name, updated, self.refinements)

    def _require_known(self, names: Iterable[str]) -> None:
        unknown = [name for name in names if name not in self.fields]
        if unknown:
            raise KeyError(f"Unknown fields for schema {self.name}: {sorted(unknown)}")


def _build_model(name: str, fields: Mapping[str, SchemaField]) -> Type[BaseModel]:
    definitions = {
        field_name: (spec.annotation, Field(spec.default, **spec.constraints))
        for field_name, spec in fields.items()
    }
    return create_model(name, __config__=MODEL_CONFIG, **definitions)
