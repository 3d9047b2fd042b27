"""Reflection JSON to dynamic value decoding service.

Decoding never raises on data: shape mismatches fall back to safe defaults,
unresolved references and unconvertible scalars leave the slot absent, and enum
tags unknown to the schema are kept as dataless variants.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from reflected_components.dynamic_values.default_builder import build_default
from reflected_components.dynamic_values.value_models import (
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
)
from reflected_components.schema_management.primitive_types import (
    PrimitiveConversionError,
    PrimitiveFamily,
    convert_scalar,
    primitive_family,
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


def decode(
    token: Any, definition: SchemaDefinition, registry: SchemaRegistry
) -> DynamicValue | None:
    """Decode plain JSON data against `definition`.

    Returns None for JSON null unless the schema gives null a meaning: an option
    (`None`), a unit struct (empty struct) or an unrecognized primitive
    (placeholder).
    """
    if registry.vector_types.is_vector(definition.type_id):
        if token is None:
            return None
        return _decode_vector(token, definition.type_id, registry)

    kind = definition.kind
    if kind == SchemaKind.OPTION:
        return _decode_option(token, definition, registry)
    if kind == SchemaKind.STRUCT:
        if definition.is_unit_struct:
            return StructValue()
        return None if token is None else _decode_struct(token, definition.fields, registry)
    if kind == SchemaKind.TUPLE_STRUCT:
        return _decode_tuple_struct(token, definition, registry)
    if kind == SchemaKind.ENUM:
        return None if token is None else _decode_enum(token, definition, registry)
    if kind in (SchemaKind.LIST, SchemaKind.ARRAY):
        return None if token is None else _decode_list(token, definition, registry)
    if kind == SchemaKind.VALUE:
        return _decode_primitive(token, definition.type_id)
    return NoValue(type_id=definition.type_id)


def _decode_vector(token: Any, type_id: str, registry: SchemaRegistry) -> FixedVector:
    count = registry.vector_types.component_count(type_id)
    components = [0.0] * count
    if isinstance(token, Sequence) and not isinstance(token, str):
        for index, item in enumerate(token[:count]):
            components[index] = _float_or_zero(item)
    elif isinstance(token, Mapping):
        for index, name in enumerate(COMPONENT_NAMES[:count]):
            if name in token:
                components[index] = _float_or_zero(token[name])
    else:
        logger.debug("Vector %s expected an array, got %r; using zeros", type_id, token)
    return FixedVector(components=components)


def _float_or_zero(token: Any) -> float:
    if isinstance(token, bool) or not isinstance(token, int | float):
        return 0.0
    try:
        component = float(token)
    except OverflowError:
        return 0.0
    return component if math.isfinite(component) else 0.0


def _decode_option(
    token: Any, definition: SchemaDefinition, registry: SchemaRegistry
) -> VariantValue:
    if token is None:
        return none_value()
    inner_schema = option_inner_schema(definition, registry)
    if inner_schema is None:
        return some_value(from_plain(token))
    payload = decode(token, inner_schema, registry)
    if payload is None:
        return none_value()
    return some_value(payload)


def _decode_struct(
    token: Any, fields: Sequence[FieldDefinition], registry: SchemaRegistry
) -> StructValue:
    value = StructValue()
    if not fields:
        return value
    if not isinstance(token, Mapping):
        logger.debug("Struct expected an object, got %r", token)
        return value
    for field_definition in fields:
        if field_definition.name not in token:
            continue
        field_schema = registry.resolve(field_definition.type_ref)
        if field_schema is None:
            continue
        decoded = decode(token[field_definition.name], field_schema, registry)
        if decoded is not None:
            value.fields[field_definition.name] = decoded
    return value


def _decode_tuple_struct(
    token: Any, definition: SchemaDefinition, registry: SchemaRegistry
) -> TupleValue | None:
    if len(definition.prefix_items) == 1:
        inner_schema = registry.resolve(definition.prefix_items[0])
        if inner_schema is None:
            return None
        inner_value = decode(token, inner_schema, registry)
        return None if inner_value is None else TupleValue(items=[inner_value])
    if token is None:
        return None
    return TupleValue(items=_decode_positional(token, definition.prefix_items, registry))


def _decode_positional(
    token: Any, prefix_items: Sequence[TypeReference], registry: SchemaRegistry
) -> list[DynamicValue]:
    if not isinstance(token, Sequence) or isinstance(token, str):
        logger.debug("Tuple expected an array, got %r", token)
        return []
    items: list[DynamicValue] = []
    for reference, item_token in zip(prefix_items, token, strict=False):
        item_schema = registry.resolve(reference)
        decoded = decode(item_token, item_schema, registry) if item_schema else None
        items.append(decoded if decoded is not None else NoValue(reference.target_type_id or ""))
    return items


def _decode_enum(
    token: Any, definition: SchemaDefinition, registry: SchemaRegistry
) -> DynamicValue:
    if isinstance(token, str):
        return VariantValue(tag=token)
    if not isinstance(token, Mapping) or not token:
        logger.debug("Enum %s expected a string or object, got %r", definition.type_id, token)
        return build_default(definition, registry)

    tag, payload_token = next(iter(token.items()))
    tag = str(tag)
    if len(token) > 1:
        logger.debug("Enum %s object has several keys; using %s", definition.type_id, tag)
    variant = definition.find_variant(tag)
    if variant is None:
        logger.warning("Unknown variant %s of %s kept without data", tag, definition.type_id)
        return VariantValue(tag=tag)
    return VariantValue(tag=tag, payload=_decode_variant_payload(payload_token, variant, registry))


def _decode_variant_payload(
    token: Any, variant: VariantDefinition, registry: SchemaRegistry
) -> DynamicValue | None:
    if variant.shape == VariantShape.STRUCT:
        return _decode_struct(token, variant.fields, registry)
    if variant.shape == VariantShape.UNIT or not variant.prefix_items:
        return None
    if len(variant.prefix_items) == 1:
        inner_schema = registry.resolve(variant.prefix_items[0])
        return decode(token, inner_schema, registry) if inner_schema else None
    if token is None:
        return None
    return TupleValue(items=_decode_positional(token, variant.prefix_items, registry))


def _decode_list(token: Any, definition: SchemaDefinition, registry: SchemaRegistry) -> ListValue:
    if not isinstance(token, Sequence) or isinstance(token, str):
        logger.debug("List %s expected an array, got %r", definition.type_id, token)
        return ListValue()
    item_schema = registry.resolve(definition.item)
    if item_schema is None:
        return ListValue()
    items: list[DynamicValue] = []
    for item_token in token:
        decoded = decode(item_token, item_schema, registry)
        if decoded is not None:
            items.append(decoded)
    return ListValue(items=items)


def _decode_primitive(token: Any, type_id: str) -> DynamicValue | None:
    family = primitive_family(type_id)
    if token is None:
        return NoValue(type_id=type_id) if family == PrimitiveFamily.UNKNOWN else None
    if isinstance(token, Mapping) or (isinstance(token, Sequence) and not isinstance(token, str)):
        if family == PrimitiveFamily.UNKNOWN:
            return from_plain(token)
        logger.debug("Primitive %s expected a scalar, got %r", type_id, token)
        return None
    try:
        return PrimitiveValue(value=convert_scalar(family, token))
    except PrimitiveConversionError as exc:
        logger.debug("Skipping %s value: %s", type_id, exc)
        return NoValue(type_id=type_id) if family == PrimitiveFamily.UNKNOWN else None
