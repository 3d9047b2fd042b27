"""Schema document loading and definition parsing service."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from .schema_models import (
    OPTION_TYPE_PREFIX,
    FieldDefinition,
    SchemaDefinition,
    SchemaKind,
    TypeReference,
    VariantDefinition,
    VariantShape,
)

_KIND_ALIASES: Mapping[str, SchemaKind] = {
    "Value": SchemaKind.VALUE,
    "Struct": SchemaKind.STRUCT,
    "TupleStruct": SchemaKind.TUPLE_STRUCT,
    "Enum": SchemaKind.ENUM,
    "Option": SchemaKind.OPTION,
    "Optional": SchemaKind.OPTION,
    "List": SchemaKind.LIST,
    "Array": SchemaKind.ARRAY,
}
_REF_KEY = "$ref"


class SchemaError(Exception):
    """Raised for schema document or definition parsing failures."""


def load_schema_document(text: str) -> Mapping[str, Any]:
    """Parse schema document text into the `type_id -> schema` mapping.

    A JSON-RPC response envelope (`{"jsonrpc": ..., "result": {...}}`) is unwrapped.
    """
    try:
        root = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Invalid schema document: {exc}") from exc
    return unwrap_schema_document(root)


def unwrap_schema_document(root: Any) -> Mapping[str, Any]:
    """Return the schema table of a parsed document, unwrapping JSON-RPC responses."""
    if isinstance(root, Mapping) and "jsonrpc" in root:
        if "error" in root and root.get("error") is not None:
            raise SchemaError(f"Schema request returned an error: {root['error']}")
        root = root.get("result")
    if not isinstance(root, Mapping):
        raise SchemaError("Schema document root must be an object of type definitions.")
    if not root:
        raise SchemaError("Schema document does not define any types.")
    return root


def parse_schema_definition(type_id: str, node: Any) -> SchemaDefinition:
    """Parse one raw schema node registered under `type_id`."""
    if not isinstance(node, Mapping):
        raise SchemaError(f"Schema for {type_id} must be an object.")
    raw_kind = node.get("kind")
    if not isinstance(raw_kind, str) or not raw_kind:
        raise SchemaError(f"Schema for {type_id} does not declare a kind.")

    resolved_type_id = _optional_text(node.get("typePath")) or type_id
    kind = _resolve_kind(raw_kind, resolved_type_id)
    common: dict[str, Any] = {
        "type_id": resolved_type_id,
        "kind": kind,
        "short_name": _optional_text(node.get("shortPath")) or "",
        "raw_kind": raw_kind,
        "reflect_types": _reflect_types(node.get("reflectTypes")),
    }

    if kind == SchemaKind.STRUCT:
        return SchemaDefinition(**common, fields=_parse_fields(node, resolved_type_id))
    if kind == SchemaKind.TUPLE_STRUCT:
        return SchemaDefinition(
            **common, prefix_items=_parse_prefix_items(node, resolved_type_id, required=True)
        )
    if kind in (SchemaKind.ENUM, SchemaKind.OPTION):
        return SchemaDefinition(**common, variants=_parse_variants(node, resolved_type_id))
    if kind in (SchemaKind.LIST, SchemaKind.ARRAY):
        return SchemaDefinition(
            **common,
            item=_parse_item(node, resolved_type_id),
            fixed_length=_fixed_length(node) if kind == SchemaKind.ARRAY else None,
        )
    return SchemaDefinition(**common)


def parse_type_reference(node: Any, context: str) -> TypeReference:
    """Parse a `{"type": ...}` slot (or a bare reference) into a TypeReference."""
    target = node.get("type", node) if isinstance(node, Mapping) else node
    if isinstance(target, Mapping):
        ref = target.get(_REF_KEY)
        if isinstance(ref, str) and ref:
            return TypeReference(ref=ref)
        if "kind" in target:
            inline_id = _optional_text(target.get("typePath")) or context
            return TypeReference(inline=parse_schema_definition(inline_id, target))
    if isinstance(target, str) and target:
        return TypeReference(ref=target)
    raise SchemaError(f"Invalid type reference in {context}.")


def _resolve_kind(raw_kind: str, type_id: str) -> SchemaKind:
    kind = _KIND_ALIASES.get(raw_kind, SchemaKind.UNSUPPORTED)
    if kind == SchemaKind.ENUM and type_id.startswith(OPTION_TYPE_PREFIX):
        return SchemaKind.OPTION
    return kind


def _parse_fields(node: Mapping[str, Any], context: str) -> tuple[FieldDefinition, ...]:
    properties = node.get("properties")
    if properties is None:
        return ()
    if not isinstance(properties, Mapping):
        raise SchemaError(f"Properties of {context} must be an object.")
    return tuple(
        FieldDefinition(name=name, type_ref=parse_type_reference(slot, f"{context}.{name}"))
        for name, slot in properties.items()
    )


def _parse_prefix_items(
    node: Mapping[str, Any], context: str, *, required: bool
) -> tuple[TypeReference, ...]:
    items = node.get("prefixItems")
    if items is None and not required:
        return ()
    if not isinstance(items, Sequence) or isinstance(items, str):
        raise SchemaError(f"{context} requires a prefixItems list.")
    return tuple(
        parse_type_reference(slot, f"{context}.{index}") for index, slot in enumerate(items)
    )


def _parse_variants(node: Mapping[str, Any], context: str) -> tuple[VariantDefinition, ...]:
    one_of = node.get("oneOf")
    if not isinstance(one_of, Sequence) or isinstance(one_of, str):
        raise SchemaError(f"{context} requires a oneOf variant list.")
    return tuple(_parse_variant(variant, context) for variant in one_of)


def _parse_variant(node: Any, context: str) -> VariantDefinition:
    if isinstance(node, str):
        return VariantDefinition(name=node)
    if not isinstance(node, Mapping):
        raise SchemaError(f"Variants of {context} must be strings or objects.")
    name = _optional_text(node.get("shortPath"))
    if name is None:
        raise SchemaError(f"A variant of {context} has no shortPath.")
    variant_context = f"{context}::{name}"
    variant_kind = node.get("kind")
    if variant_kind == "Tuple":
        return VariantDefinition(
            name=name,
            shape=VariantShape.TUPLE,
            prefix_items=_parse_prefix_items(node, variant_context, required=True),
        )
    if variant_kind == "Struct":
        return VariantDefinition(
            name=name,
            shape=VariantShape.STRUCT,
            fields=_parse_fields(node, variant_context),
        )
    return VariantDefinition(name=name)


def _parse_item(node: Mapping[str, Any], context: str) -> TypeReference:
    items = node.get("items")
    if items is None:
        raise SchemaError(f"{context} requires an items reference.")
    return parse_type_reference(items, f"{context}[]")


def _fixed_length(node: Mapping[str, Any]) -> int | None:
    length = node.get("length")
    if isinstance(length, int) and not isinstance(length, bool):
        return length
    min_items = node.get("minItems")
    max_items = node.get("maxItems")
    if isinstance(max_items, int) and min_items == max_items:
        return max_items
    return None


def _reflect_types(value: Any) -> tuple[str, ...]:
    if not isinstance(value, Sequence) or isinstance(value, str):
        return ()
    return tuple(item for item in value if isinstance(item, str))


def _optional_text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None
