"""Default value construction from schema definitions."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from reflected_components.schema_management.primitive_types import primitive_family, zero_value
from reflected_components.schema_management.schema_models import (
    FieldDefinition,
    SchemaDefinition,
    SchemaKind,
    TypeReference,
    VariantDefinition,
    VariantShape,
)
from reflected_components.schema_management.schema_registry import SchemaRegistry

from .value_models import (
    DynamicValue,
    FixedVector,
    ListValue,
    NoValue,
    PrimitiveValue,
    StructValue,
    TupleValue,
    VariantValue,
    none_value,
)

logger = logging.getLogger(__name__)


def build_default(definition: SchemaDefinition, registry: SchemaRegistry) -> DynamicValue:
    """Return the default value of `definition`; never raises for supported kinds.

    A type that contains itself through structs, tuples or enum payloads gets a
    `NoValue` placeholder at the point where it repeats.
    """
    return _build(definition, registry, frozenset())


def _build(
    definition: SchemaDefinition, registry: SchemaRegistry, building: frozenset[str]
) -> DynamicValue:
    type_id = definition.type_id
    if registry.vector_types.is_vector(type_id):
        return zero_vector(type_id, registry)
    if type_id in building:
        logger.warning("Recursive type %s has no finite default; leaving a placeholder", type_id)
        return NoValue(type_id=type_id)

    kind = definition.kind
    if kind == SchemaKind.VALUE:
        return _default_primitive(type_id)
    if kind == SchemaKind.STRUCT:
        return default_struct(definition.fields, registry, building | {type_id})
    if kind == SchemaKind.TUPLE_STRUCT:
        return _default_tuple_struct(definition, registry, building | {type_id})
    if kind == SchemaKind.ENUM:
        return _default_enum(definition, registry, building | {type_id})
    if kind == SchemaKind.OPTION:
        return none_value()
    if kind in (SchemaKind.LIST, SchemaKind.ARRAY):
        return ListValue()
    logger.debug("No default for unsupported kind %s of %s", definition.raw_kind, type_id)
    return NoValue(type_id=type_id)


def zero_vector(type_id: str, registry: SchemaRegistry) -> FixedVector:
    """Return an all-zero vector sized for `type_id`."""
    return FixedVector(components=[0.0] * registry.vector_types.component_count(type_id))


def default_struct(
    fields: Sequence[FieldDefinition],
    registry: SchemaRegistry,
    building: frozenset[str] = frozenset(),
) -> StructValue:
    """Default every resolvable field in declaration order."""
    value = StructValue()
    for field_definition in fields:
        field_schema = registry.resolve(field_definition.type_ref)
        if field_schema is None:
            continue
        value.fields[field_definition.name] = _build(field_schema, registry, building)
    return value


def _default_primitive(type_id: str) -> DynamicValue:
    zero = zero_value(primitive_family(type_id))
    if zero is None:
        logger.debug("No zero value for primitive type %s", type_id)
        return NoValue(type_id=type_id)
    return PrimitiveValue(value=zero)


def _default_tuple_struct(
    definition: SchemaDefinition, registry: SchemaRegistry, building: frozenset[str]
) -> TupleValue:
    if len(definition.prefix_items) == 1:
        inner = registry.resolve(definition.prefix_items[0])
        if inner is not None and registry.vector_types.is_vector(inner.type_id):
            return TupleValue(items=[zero_vector(inner.type_id, registry)])
    return TupleValue(items=_default_items(definition.prefix_items, registry, building))


def _default_items(
    prefix_items: Sequence[TypeReference], registry: SchemaRegistry, building: frozenset[str]
) -> list[DynamicValue]:
    items: list[DynamicValue] = []
    for reference in prefix_items:
        item_schema = registry.resolve(reference)
        if item_schema is None:
            items.append(NoValue(type_id=reference.target_type_id or ""))
            continue
        items.append(_build(item_schema, registry, building))
    return items


def _default_enum(
    definition: SchemaDefinition, registry: SchemaRegistry, building: frozenset[str]
) -> VariantValue:
    if not definition.variants:
        return VariantValue(tag="")
    return default_variant(definition.variants[0], registry, building)


def default_variant(
    variant: VariantDefinition,
    registry: SchemaRegistry,
    building: frozenset[str] = frozenset(),
) -> VariantValue:
    """Return `variant` carrying default data for its shape."""
    if variant.shape == VariantShape.STRUCT:
        payload = default_struct(variant.fields, registry, building)
        return VariantValue(tag=variant.name, payload=payload)
    if variant.shape == VariantShape.TUPLE:
        items = _default_items(variant.prefix_items, registry, building)
        if len(items) == 1:
            return VariantValue(tag=variant.name, payload=items[0])
        if items:
            return VariantValue(tag=variant.name, payload=TupleValue(items=items))
    return VariantValue(tag=variant.name)
