"""Dynamic value entities mirroring the schema kinds."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from reflected_components.schema_management.primitive_types import Scalar


@dataclass(frozen=True)
class PrimitiveValue:
    """Bool, integer, float, or text scalar."""

    value: Scalar


@dataclass
class FixedVector:
    """Fixed-length float sequence of a vector type."""

    components: list[float]


@dataclass
class StructValue:
    """Named fields; a declared field may be absent."""

    fields: dict[str, DynamicValue] = field(default_factory=dict)

    def set_field(self, name: str, value: DynamicValue) -> None:
        """Replace one field in place."""
        self.fields[name] = value


@dataclass
class TupleValue:
    """Positional items of a tuple struct or multi-slot tuple variant."""

    items: list[DynamicValue] = field(default_factory=list)


@dataclass
class VariantValue:
    """Selected variant of an enum or option with its optional payload."""

    tag: str
    payload: DynamicValue | None = None


@dataclass
class ListValue:
    """Items of a list or array."""

    items: list[DynamicValue] = field(default_factory=list)


@dataclass(frozen=True)
class NoValue:
    """Placeholder for a type whose value cannot be represented."""

    type_id: str = ""


DynamicValue: TypeAlias = (
    PrimitiveValue | FixedVector | StructValue | TupleValue | VariantValue | ListValue | NoValue
)

NONE_VARIANT = "None"
SOME_VARIANT = "Some"


def none_value() -> VariantValue:
    """Return a fresh `None` option value."""
    return VariantValue(tag=NONE_VARIANT)


def some_value(payload: DynamicValue) -> VariantValue:
    """Return a fresh `Some(payload)` option value."""
    return VariantValue(tag=SOME_VARIANT, payload=payload)


def to_plain(value: DynamicValue | None) -> Any:
    """Convert a value to plain JSON-compatible data without consulting a schema."""
    if value is None or isinstance(value, NoValue):
        return None
    if isinstance(value, PrimitiveValue):
        return value.value
    if isinstance(value, FixedVector):
        return list(value.components)
    if isinstance(value, StructValue):
        return {name: to_plain(item) for name, item in value.fields.items()}
    if isinstance(value, TupleValue | ListValue):
        return [to_plain(item) for item in value.items]
    if value.payload is None:
        return value.tag
    return {value.tag: to_plain(value.payload)}


def from_plain(data: Any) -> DynamicValue:
    """Best-effort conversion of plain JSON data when no schema is available."""
    if isinstance(data, bool | int | float | str):
        return PrimitiveValue(value=data)
    if isinstance(data, Mapping):
        return StructValue(fields={str(key): from_plain(item) for key, item in data.items()})
    if isinstance(data, Sequence):
        return ListValue(items=[from_plain(item) for item in data])
    return NoValue()
