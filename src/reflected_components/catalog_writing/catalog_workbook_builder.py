"""Excel component catalog generation service."""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from reflected_components.schema_management.schema_models import (
    FieldDefinition,
    SchemaDefinition,
    SchemaKind,
    TypeReference,
    VariantShape,
)
from reflected_components.schema_management.schema_registry import SchemaRegistry
from reflected_components.schema_management.type_names import short_type_name

from .constants import CATALOG_COLUMNS, COMPONENTS_SHEET_NAME, SCHEMA_SHEET_NAME


def generate_catalog_workbook(
    registry: SchemaRegistry,
    output_path: Path | str,
    search: str | None = None,
    schema_text: str = "",
) -> int:
    """Write one catalog row per listed component and return the row count."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = COMPONENTS_SHEET_NAME

    for column_index, name in enumerate(CATALOG_COLUMNS, start=1):
        header = sheet.cell(row=1, column=column_index, value=name)
        header.style = "Headline 3"

    type_ids = registry.component_type_ids(search)
    widths = [len(name) for name in CATALOG_COLUMNS]
    for row_index, type_id in enumerate(type_ids, start=2):
        definition = registry.get(type_id)
        if definition is None:
            continue
        row = _catalog_row(definition)
        for column_index, value in enumerate(row, start=1):
            sheet.cell(row=row_index, column=column_index, value=value)
            widths[column_index - 1] = max(widths[column_index - 1], len(value))
    for column_index, width in enumerate(widths, start=1):
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(width + 4, 60)
        )
    sheet.freeze_panes = "A2"

    _write_schema_sheet(workbook, registry, len(type_ids), schema_text)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output_path)
    return len(type_ids)


def describe_fields(definition: SchemaDefinition) -> str:
    """Summarize the declared payload of a definition in one line."""
    kind = definition.kind
    if kind == SchemaKind.STRUCT:
        return _describe_named(definition.fields)
    if kind == SchemaKind.TUPLE_STRUCT:
        return _describe_positional(definition.prefix_items)
    if kind in (SchemaKind.ENUM, SchemaKind.OPTION):
        parts = []
        for variant in definition.variants:
            if variant.shape == VariantShape.STRUCT:
                parts.append(f"{variant.name} {{{_describe_named(variant.fields)}}}")
            elif variant.shape == VariantShape.TUPLE:
                parts.append(f"{variant.name}{_describe_positional(variant.prefix_items)}")
            else:
                parts.append(variant.name)
        return " | ".join(parts)
    if kind in (SchemaKind.LIST, SchemaKind.ARRAY):
        item = _reference_name(definition.item)
        if definition.fixed_length is not None:
            return f"[{item}; {definition.fixed_length}]"
        return f"[{item}]"
    return ""


def _catalog_row(definition: SchemaDefinition) -> tuple[str, ...]:
    return (
        definition.type_id,
        definition.short_name,
        short_type_name(definition.type_id),
        definition.raw_kind or definition.kind.value,
        describe_fields(definition),
    )


def _describe_named(fields: Sequence[FieldDefinition]) -> str:
    return ", ".join(f"{item.name}: {_reference_name(item.type_ref)}" for item in fields)


def _describe_positional(prefix_items: Sequence[TypeReference]) -> str:
    return "(" + ", ".join(_reference_name(reference) for reference in prefix_items) + ")"


def _reference_name(reference: TypeReference | None) -> str:
    if reference is None:
        return "?"
    return short_type_name(reference.target_type_id or "?")


def _write_schema_sheet(
    workbook: Workbook, registry: SchemaRegistry, component_count: int, schema_text: str
) -> None:
    sheet = workbook.create_sheet(SCHEMA_SHEET_NAME)
    schema_hash = hashlib.sha256(schema_text.encode("utf-8")).hexdigest()
    entries = [
        ("type_count", len(registry)),
        ("component_count", component_count),
        ("schema_hash", schema_hash),
    ]
    for row_index, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row_index, column=1, value=key)
        sheet.cell(row=row_index, column=2, value=value)
