"""Variant schema lookups shared by the encoder and decoder."""

from __future__ import annotations

import logging

from reflected_components.dynamic_values.value_models import SOME_VARIANT
from reflected_components.schema_management.schema_models import SchemaDefinition, VariantShape
from reflected_components.schema_management.schema_registry import SchemaRegistry

logger = logging.getLogger(__name__)


def option_inner_schema(
    definition: SchemaDefinition, registry: SchemaRegistry
) -> SchemaDefinition | None:
    """Return the schema wrapped by the `Some` variant of an option type."""
    some_variant = definition.find_variant(SOME_VARIANT)
    if (
        some_variant is None
        or some_variant.shape != VariantShape.TUPLE
        or not some_variant.prefix_items
    ):
        logger.warning("Option %s has no Some(T) variant", definition.type_id)
        return None
    return registry.resolve(some_variant.prefix_items[0])
