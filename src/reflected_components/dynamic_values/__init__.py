"""Dynamic value domain exports."""

from .default_builder import build_default
from .value_models import (
    DynamicValue,
    FixedVector,
    ListValue,
    NoValue,
    PrimitiveValue,
    StructValue,
    TupleValue,
    VariantValue,
    from_plain,
    none_value,
    some_value,
    to_plain,
)

__all__ = [
    "DynamicValue",
    "FixedVector",
    "ListValue",
    "NoValue",
    "PrimitiveValue",
    "StructValue",
    "TupleValue",
    "VariantValue",
    "build_default",
    "from_plain",
    "none_value",
    "some_value",
    "to_plain",
]
