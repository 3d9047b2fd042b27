"""CLI component workflow integration tests."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

from click.testing import CliRunner
from openpyxl import load_workbook
from reflected_components.catalog_writing import COMPONENTS_SHEET_NAME
from reflected_components.cli import cli

TRANSFORM = "bevy_transform::components::transform::Transform"


def _write_config(tmp_path: Path, container: str = "array") -> Path:
    sample_path = Path(__file__).resolve().parents[3] / "samples" / "sample-registry-schema.json"
    shutil.copy(sample_path, tmp_path / "registry-schema.json")
    config = (
        "schema:\n"
        "  path: registry-schema.json\n"
        "components:\n"
        "  path: state/components.json\n"
        "export:\n"
        f"  container: {container}\n"
    )
    path = tmp_path / "config.yaml"
    path.write_text(config, encoding="utf-8")
    return path


def _invoke(*args: str) -> str:
    result = CliRunner().invoke(cli, list(args))
    assert result.exit_code == 0, result.output
    return result.stdout


def test_list_components_supports_search(tmp_path: Path) -> None:
    config_path = str(_write_config(tmp_path))

    listed = _invoke("list-components", "--config", config_path).splitlines()
    searched = _invoke("list-components", "--config", config_path, "--search", "health")

    assert len(listed) == 9
    assert listed[0] == f"{TRANSFORM}\tTransform"
    assert searched.splitlines() == ["game::stats::Health\tHealth"]


def test_add_set_show_and_remove_components(tmp_path: Path) -> None:
    config_path = str(_write_config(tmp_path))
    state_path = tmp_path / "state" / "components.json"

    added = json.loads(_invoke("add-component", "--config", config_path, TRANSFORM))
    assert added == {
        "translation": [0.0, 0.0, 0.0],
        "rotation": [0.0, 0.0, 0.0, 0.0],
        "scale": [0.0, 0.0, 0.0],
    }
    assert json.loads(state_path.read_text(encoding="utf-8")) == {TRANSFORM: added}

    updated = json.loads(
        _invoke(
            "set-component",
            "--config",
            config_path,
            TRANSFORM,
            "--value",
            '{"translation": {"x": 1, "y": 2, "z": 3}, "scale": [1, 1, 1]}',
        )
    )
    assert updated == {"translation": [1.0, 2.0, 3.0], "scale": [1.0, 1.0, 1.0]}

    shown = json.loads(_invoke("show-component", "--config", config_path, TRANSFORM))
    assert shown == updated

    removed = _invoke("remove-component", "--config", config_path, TRANSFORM)
    assert removed.strip() == TRANSFORM
    assert json.loads(state_path.read_text(encoding="utf-8")) == {}


def test_export_uses_configured_container_shape(tmp_path: Path) -> None:
    array_config = str(_write_config(tmp_path, container="array"))
    _invoke("add-component", "--config", array_config, "game::stats::Health")
    _invoke("add-component", "--config", array_config, "game::physics::RigidBody")

    exported = json.loads(_invoke("export", "--config", array_config))
    assert exported == [{"game::stats::Health": 0.0}, {"game::physics::RigidBody": "Dynamic"}]

    object_config = str(_write_config(tmp_path, container="object"))
    output_path = tmp_path / "out" / "scene.json"
    printed = _invoke("export", "--config", object_config, "--output", str(output_path))

    assert printed.strip() == str(output_path.resolve())
    assert json.loads(output_path.read_text(encoding="utf-8")) == {
        "game::stats::Health": 0.0,
        "game::physics::RigidBody": "Dynamic",
    }


def test_write_catalog_command_writes_workbook(tmp_path: Path) -> None:
    config_path = str(_write_config(tmp_path))
    output_path = tmp_path / "catalog.xlsx"

    printed = _invoke(
        "write-catalog", "--config", config_path, "--output", str(output_path), "--search", "game"
    )

    assert printed.strip() == str(output_path.resolve())
    sheet = load_workbook(output_path)[COMPONENTS_SHEET_NAME]
    assert sheet.max_row == 9


def test_generate_config_writes_scaffold(tmp_path: Path) -> None:
    output_path = tmp_path / "generated.yaml"

    printed = _invoke("generate-config", "--output", str(output_path))

    assert printed.strip() == str(output_path.resolve())
    assert "schema:" in output_path.read_text(encoding="utf-8")
