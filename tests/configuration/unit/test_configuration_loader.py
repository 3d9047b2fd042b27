"""Configuration loader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from reflected_components.configuration import ContainerShape
from reflected_components.configuration.loader import ConfigurationError, load_configuration

_MINIMAL_SCHEMA = json.dumps({"f32": {"kind": "Value", "typePath": "f32"}})


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_loads_yaml_configuration_with_defaults(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        """
schema:
  inline: |
    {"f32": {"kind": "Value", "typePath": "f32"}}
""",
    )

    configuration = load_configuration(config_path)

    assert configuration.schema.text.strip().startswith("{")
    assert configuration.schema.source_path is None
    assert configuration.components.path == (tmp_path / "components.json").resolve()
    assert configuration.vectors.extra_type_ids == ()
    assert configuration.export.container == ContainerShape.ARRAY


def test_loads_json_configuration_with_relative_paths(tmp_path: Path) -> None:
    schema_path = _write_file(tmp_path / "registry-schema.json", _MINIMAL_SCHEMA)
    config_path = _write_file(
        tmp_path / "config.json",
        json.dumps(
            {
                "schema": {"path": schema_path.name},
                "components": {"path": "state/scene.json"},
                "vectors": {"extra_type_ids": ["game::math::Vec3A", "  "]},
                "export": {"container": "OBJECT"},
            }
        ),
    )

    configuration = load_configuration(config_path)

    assert configuration.schema.source_path == schema_path.resolve()
    assert configuration.components.path == (tmp_path / "state" / "scene.json").resolve()
    assert configuration.vectors.extra_type_ids == ("game::math::Vec3A",)
    assert configuration.export.container == ContainerShape.OBJECT


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_configuration(tmp_path / "absent.yaml")


def test_schema_section_is_required(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "components:\n  path: c.json\n")

    with pytest.raises(ConfigurationError, match="'schema' is required"):
        load_configuration(config_path)


def test_schema_inline_and_path_are_exclusive(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml", "schema:\n  inline: '{}'\n  path: schema.json\n"
    )

    with pytest.raises(ConfigurationError, match="both inline and path"):
        load_configuration(config_path)


def test_missing_schema_file_raises(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "schema:\n  path: missing.json\n")

    with pytest.raises(ConfigurationError, match="Schema file not found"):
        load_configuration(config_path)


def test_invalid_schema_document_raises(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "schema:\n  inline: '[1, 2]'\n")

    with pytest.raises(ConfigurationError, match="root must be an object"):
        load_configuration(config_path)


def test_unknown_export_container_raises(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        f"schema:\n  inline: '{_MINIMAL_SCHEMA}'\nexport:\n  container: csv\n",
    )

    with pytest.raises(ConfigurationError, match="export.container must be one of"):
        load_configuration(config_path)


def test_non_string_vector_ids_raise(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        f"schema:\n  inline: '{_MINIMAL_SCHEMA}'\nvectors:\n  extra_type_ids: [1]\n",
    )

    with pytest.raises(ConfigurationError, match="entries must be strings"):
        load_configuration(config_path)


def test_root_must_be_mapping(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "- schema\n")

    with pytest.raises(ConfigurationError, match="root must be a mapping"):
        load_configuration(config_path)
