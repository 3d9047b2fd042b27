"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from reflected_components.schema_management.schema_parsing import (
    SchemaError,
    load_schema_document,
)

from .runtime_settings import (
    ComponentSettings,
    Configuration,
    ContainerShape,
    ExportSettings,
    SchemaSettings,
    VectorSettings,
)

_DEFAULT_COMPONENTS_FILENAME = "components.json"


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.parent
    schema = _parse_schema_section(parsed.get("schema"), base_path)
    try:
        load_schema_document(schema.text)
    except SchemaError as exc:
        raise ConfigurationError(str(exc)) from exc

    return Configuration(
        path=path,
        schema=schema,
        components=_parse_components_section(parsed.get("components"), base_path),
        vectors=_parse_vectors_section(parsed.get("vectors")),
        export=_parse_export_section(parsed.get("export")),
    )


def _parse_schema_section(value: Any, base_path: Path) -> SchemaSettings:
    section = _require_mapping(value, "schema")
    inline = section.get("inline")
    path_value = section.get("path")
    if inline and path_value:
        raise ConfigurationError("Schema section must not set both inline and path.")
    if inline:
        if not isinstance(inline, str):
            raise ConfigurationError("schema.inline must be a string.")
        return SchemaSettings(text=inline, source_path=None)
    if path_value:
        schema_path = _resolve_path(base_path, _require_non_empty_string(path_value, "schema.path"))
        if not schema_path.exists():
            raise ConfigurationError(f"Schema file not found: {schema_path}")
        text = schema_path.read_text(encoding="utf-8")
        if not text.strip():
            raise ConfigurationError("Schema text cannot be empty.")
        return SchemaSettings(text=text, source_path=schema_path)
    raise ConfigurationError("Schema section requires either inline or path.")


def _parse_components_section(value: Any, base_path: Path) -> ComponentSettings:
    section = _optional_mapping(value, "components")
    raw_path = section.get("path", _DEFAULT_COMPONENTS_FILENAME)
    component_path = _require_non_empty_string(raw_path, "components.path")
    return ComponentSettings(path=_resolve_path(base_path, component_path))


def _parse_vectors_section(value: Any) -> VectorSettings:
    section = _optional_mapping(value, "vectors")
    return VectorSettings(
        extra_type_ids=_normalize_string_sequence(
            section.get("extra_type_ids"), "vectors.extra_type_ids"
        )
    )


def _parse_export_section(value: Any) -> ExportSettings:
    section = _optional_mapping(value, "export")
    raw_container = _require_non_empty_string(
        section.get("container", ContainerShape.ARRAY.value), "export.container"
    ).lower()
    try:
        container = ContainerShape(raw_container)
    except ValueError as exc:
        allowed = ", ".join(shape.value for shape in ContainerShape)
        raise ConfigurationError(f"export.container must be one of: {allowed}.") from exc
    return ExportSettings(container=container)


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped
