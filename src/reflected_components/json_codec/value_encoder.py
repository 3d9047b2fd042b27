"""Dynamic value to reflection JSON encoding service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from reflected_components.dynamic_values.value_models import (
    NONE_VARIANT,
    DynamicValue,
    FixedVector,
    ListValue,
    NoValue,
    PrimitiveValue,
    StructValue,
    TupleValue,
    VariantValue,
    to_plain,
)
from reflected_components.schema_management.schema_models import (
    FieldDefinition,
    SchemaDefinition,
    SchemaKind,
    TypeReference,
    VariantDefinition,
    VariantShape,
)
from reflected_components.schema_management.schema_registry import SchemaRegistry
from reflected_components.schema_management.vector_types import COMPONENT_NAMES

from .variant_schemas import option_inner_schema

logger = logging.getLogger(__name__)


def encode(
    value: DynamicValue | None, definition: SchemaDefinition, registry: SchemaRegistry
) -> Any:
    """Encode `value` against `definition` into plain JSON-compatible data.

    Encoding is pure: identical input always yields identical output.
    """
    if registry.vector_types.is_vector(definition.type_id):
        return _encode_vector(value, definition.type_id, registry)
    if value is None:
        return None

    kind = definition.kind
    if kind == SchemaKind.OPTION:
        return _encode_option(value, definition, registry)
    if kind == SchemaKind.STRUCT:
        return _encode_struct(value, definition.fields, registry)
    if kind == SchemaKind.TUPLE_STRUCT:
        return _encode_tuple_struct(value, definition, registry)
    if kind == SchemaKind.ENUM:
        return _encode_enum(value, definition, registry)
    if kind in (SchemaKind.LIST, SchemaKind.ARRAY):
        return _encode_list(value, definition, registry)
    if kind == SchemaKind.VALUE:
        return _encode_primitive(value)
    logger.debug(
        "Encoding unsupported kind %s of %s as null", definition.raw_kind, definition.type_id
    )
    return None


def _encode_vector(
    value: DynamicValue | None, type_id: str, registry: SchemaRegistry
) -> list[float]:
    count = registry.vector_types.component_count(type_id)
    components = _vector_components(value, count)
    return (components + [0.0] * count)[:count]


def _vector_components(value: DynamicValue | None, count: int) -> list[float]:
    if isinstance(value, FixedVector):
        return [float(component) for component in value.components]
    if isinstance(value, TupleValue) and len(value.items) == 1:
        if isinstance(value.items[0], FixedVector):
            return _vector_components(value.items[0], count)
    if isinstance(value, TupleValue | ListValue):
        return [_number_or_zero(item) for item in value.items]
    if isinstance(value, StructValue):
        return [_number_or_zero(value.fields.get(name)) for name in COMPONENT_NAMES[:count]]
    return [0.0] * count


def _number_or_zero(value: DynamicValue | None) -> float:
    if isinstance(value, PrimitiveValue) and isinstance(value.value, int | float):
        return float(value.value)
    return 0.0


def _encode_option(
    value: DynamicValue, definition: SchemaDefinition, registry: SchemaRegistry
) -> Any:
    if not isinstance(value, VariantValue) or value.payload is None:
        return None
    if value.tag == NONE_VARIANT:
        return None
    inner_schema = option_inner_schema(definition, registry)
    if inner_schema is None:
        return to_plain(value.payload)
    return encode(value.payload, inner_schema, registry)


def _encode_struct(
    value: DynamicValue | None, fields: Sequence[FieldDefinition], registry: SchemaRegistry
) -> dict[str, Any] | None:
    if not fields:
        return None
    if not isinstance(value, StructValue):
        logger.debug("Expected a struct value, got %s", type(value).__name__)
        return {}
    encoded: dict[str, Any] = {}
    for field_definition in fields:
        if field_definition.name not in value.fields:
            continue
        field_schema = registry.resolve(field_definition.type_ref)
        if field_schema is None:
            continue
        encoded[field_definition.name] = encode(
            value.fields[field_definition.name], field_schema, registry
        )
    return encoded


def _encode_tuple_struct(
    value: DynamicValue, definition: SchemaDefinition, registry: SchemaRegistry
) -> Any:
    if len(definition.prefix_items) == 1:
        inner_schema = registry.resolve(definition.prefix_items[0])
        if inner_schema is None:
            return None
        inner_value: DynamicValue | None = value
        if isinstance(value, TupleValue):
            inner_value = value.items[0] if value.items else None
        return encode(inner_value, inner_schema, registry)
    return _encode_positional(value, definition.prefix_items, registry)


def _encode_positional(
    value: DynamicValue | None, prefix_items: Sequence[TypeReference], registry: SchemaRegistry
) -> list[Any]:
    items = value.items if isinstance(value, TupleValue | ListValue) else []
    encoded: list[Any] = []
    for index, reference in enumerate(prefix_items):
        item_schema = registry.resolve(reference)
        item_value = items[index] if index < len(items) else None
        encoded.append(encode(item_value, item_schema, registry) if item_schema else None)
    return encoded


def _encode_enum(
    value: DynamicValue, definition: SchemaDefinition, registry: SchemaRegistry
) -> Any:
    if not isinstance(value, VariantValue) or not value.tag:
        logger.warning("Enum %s has no variant selected", definition.type_id)
        return ""
    if value.payload is None:
        return value.tag

    variant = definition.find_variant(value.tag)
    if variant is None:
        logger.warning("Unknown variant %s of %s", value.tag, definition.type_id)
        return {value.tag: None}
    if variant.shape == VariantShape.UNIT:
        logger.debug("Dropping payload of unit variant %s of %s", value.tag, definition.type_id)
        return value.tag
    return {value.tag: _encode_variant_payload(value.payload, variant, registry)}


def _encode_variant_payload(
    payload: DynamicValue, variant: VariantDefinition, registry: SchemaRegistry
) -> Any:
    if variant.shape == VariantShape.STRUCT:
        return _encode_struct(payload, variant.fields, registry)
    if len(variant.prefix_items) == 1:
        inner_schema = registry.resolve(variant.prefix_items[0])
        return encode(payload, inner_schema, registry) if inner_schema else None
    if not variant.prefix_items:
        return None
    return _encode_positional(payload, variant.prefix_items, registry)


def _encode_list(
    value: DynamicValue, definition: SchemaDefinition, registry: SchemaRegistry
) -> list[Any]:
    item_schema = registry.resolve(definition.item)
    if item_schema is None or not isinstance(value, ListValue | TupleValue):
        return []
    return [encode(item, item_schema, registry) for item in value.items]


def _encode_primitive(value: DynamicValue) -> Any:
    if isinstance(value, PrimitiveValue):
        return value.value
    if isinstance(value, NoValue):
        return None
    return to_plain(value)
