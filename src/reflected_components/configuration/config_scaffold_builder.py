"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration template for reflected-components.
# Replace every <REQUIRED> placeholder before running the component commands.
# Relative paths are resolved against the directory of this file.

schema:
  # Provide either a registry schema document path or inline schema JSON text.
  path: "<REQUIRED>"
  # inline: "<OPTIONAL>"

components:
  # Persisted component values (object form). Created on first save.
  path: "components.json"

vectors:
  # Type ids handled as fixed numeric vectors besides the glam defaults.
  extra_type_ids: []

export:
  # Container shape of exported component JSON (array or object).
  container: "array"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
