"""Shared catalog workbook constants."""

from __future__ import annotations

COMPONENTS_SHEET_NAME = "Components"
SCHEMA_SHEET_NAME = "Schema"

CATALOG_COLUMNS: tuple[str, ...] = ("Type ID", "Short Name", "Display Name", "Kind", "Fields")
