"""Schema management exports."""

from .schema_models import (
    FieldDefinition,
    SchemaDefinition,
    SchemaKind,
    TypeReference,
    VariantDefinition,
    VariantShape,
)
from .schema_parsing import SchemaError, load_schema_document, parse_schema_definition
from .schema_registry import RegistryLoadReport, SchemaRegistry, SkippedSchema
from .type_names import short_type_name
from .vector_types import DEFAULT_VECTOR_TYPE_IDS, VectorTypeCatalog

__all__ = [
    "FieldDefinition",
    "SchemaDefinition",
    "SchemaKind",
    "TypeReference",
    "VariantDefinition",
    "VariantShape",
    "SchemaError",
    "load_schema_document",
    "parse_schema_definition",
    "RegistryLoadReport",
    "SchemaRegistry",
    "SkippedSchema",
    "short_type_name",
    "DEFAULT_VECTOR_TYPE_IDS",
    "VectorTypeCatalog",
]
