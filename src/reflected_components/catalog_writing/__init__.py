"""Catalog writing exports."""

from .catalog_workbook_builder import describe_fields, generate_catalog_workbook
from .constants import CATALOG_COLUMNS, COMPONENTS_SHEET_NAME, SCHEMA_SHEET_NAME

__all__ = [
    "COMPONENTS_SHEET_NAME",
    "SCHEMA_SHEET_NAME",
    "CATALOG_COLUMNS",
    "describe_fields",
    "generate_catalog_workbook",
]
