"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from reflected_components.catalog_writing import generate_catalog_workbook
from reflected_components.component_storage import (
    ComponentError,
    ComponentSet,
    load_component_file,
    save_component_file,
)
from reflected_components.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    ContainerShape,
    load_configuration,
    write_placeholder_configuration,
)
from reflected_components.schema_management import (
    SchemaError,
    SchemaRegistry,
    VectorTypeCatalog,
    load_schema_document,
    short_type_name,
)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_CONFIG_OPTION = click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON configuration file",
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="reflected-components")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Diagnostics level written to stderr",
)
def cli(log_level: str) -> None:
    """Schema-driven reflected component editor."""
    logging.basicConfig(level=log_level.upper(), format=_LOG_FORMAT, stream=sys.stderr)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="list-components")
@_CONFIG_OPTION
@click.option("--search", default=None, help="Case-insensitive type id filter")
def list_components(config_path: str, search: str | None) -> None:
    """List component types of the configured schema."""
    _, registry = _open_registry(config_path)
    for type_id in registry.component_type_ids(search):
        click.echo(f"{type_id}\t{short_type_name(type_id)}")


@cli.command(name="add-component")
@_CONFIG_OPTION
@click.argument("type_id")
def add_component(config_path: str, type_id: str) -> None:
    """Add a default-valued component to the persisted component set."""
    configuration, components = _open_components(config_path)
    try:
        components.add(type_id)
    except ComponentError as exc:
        raise CliError(str(exc)) from exc
    _save_components(configuration, components)
    _echo_json(components.to_object()[type_id])


@cli.command(name="remove-component")
@_CONFIG_OPTION
@click.argument("type_id")
def remove_component(config_path: str, type_id: str) -> None:
    """Remove a component from the persisted component set."""
    configuration, components = _open_components(config_path)
    if not components.remove(type_id):
        raise CliError(f"Component {type_id} is not present.")
    _save_components(configuration, components)
    click.echo(type_id)


@cli.command(name="set-component")
@_CONFIG_OPTION
@click.argument("type_id")
@click.option("--value", "raw_value", required=True, help="Component value as reflection JSON")
def set_component(config_path: str, type_id: str, raw_value: str) -> None:
    """Replace the value of a present component from reflection JSON."""
    configuration, components = _open_components(config_path)
    if type_id not in components:
        raise CliError(f"Component {type_id} is not present; add it first.")
    try:
        token = json.loads(raw_value)
    except json.JSONDecodeError as exc:
        raise CliError(f"Invalid JSON value: {exc}") from exc
    try:
        components.set_from_json(type_id, token)
    except ComponentError as exc:
        raise CliError(str(exc)) from exc
    _save_components(configuration, components)
    _echo_json(components.to_object()[type_id])


@cli.command(name="show-component")
@_CONFIG_OPTION
@click.argument("type_id")
def show_component(config_path: str, type_id: str) -> None:
    """Print the reflection JSON of one component."""
    _, components = _open_components(config_path)
    encoded = components.to_object()
    if type_id not in encoded:
        raise CliError(f"Component {type_id} is not present.")
    _echo_json(encoded[type_id])


@cli.command(name="export")
@_CONFIG_OPTION
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="File to write; prints to stdout when omitted",
)
def export_components(config_path: str, output_path: str | None) -> None:
    """Export all components in the configured container shape."""
    configuration, components = _open_components(config_path)
    if configuration.export.container == ContainerShape.OBJECT:
        exported: Any = components.to_object()
    else:
        exported = components.to_export_array()
    if output_path is None:
        _echo_json(exported)
        return
    destination = Path(output_path)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(json.dumps(exported, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(destination.resolve()))


@cli.command(name="write-catalog")
@_CONFIG_OPTION
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the component catalog workbook to write",
)
@click.option("--search", default=None, help="Case-insensitive type id filter")
def write_catalog(config_path: str, output_path: str, search: str | None) -> None:
    """Generate a component catalog workbook from the configured schema."""
    configuration, registry = _open_registry(config_path)
    try:
        generate_catalog_workbook(
            registry, output_path, search=search, schema_text=configuration.schema.text
        )
    except (OSError, ValueError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(Path(output_path).resolve()))


def _open_registry(config_path: str) -> tuple[Configuration, SchemaRegistry]:
    try:
        configuration = load_configuration(config_path)
        vector_types = VectorTypeCatalog.with_extra(configuration.vectors.extra_type_ids)
        registry = SchemaRegistry(vector_types)
        registry.load(load_schema_document(configuration.schema.text))
    except (ConfigurationError, SchemaError, OSError) as exc:
        raise CliError(str(exc)) from exc
    return configuration, registry


def _open_components(config_path: str) -> tuple[Configuration, ComponentSet]:
    configuration, registry = _open_registry(config_path)
    try:
        components = load_component_file(configuration.components.path, registry)
    except ComponentError as exc:
        raise CliError(str(exc)) from exc
    return configuration, components


def _save_components(configuration: Configuration, components: ComponentSet) -> None:
    try:
        save_component_file(configuration.components.path, components)
    except OSError as exc:
        raise CliError(str(exc)) from exc


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
