"""Editable collection of named component values."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from reflected_components.dynamic_values.default_builder import build_default
from reflected_components.dynamic_values.value_models import DynamicValue, to_plain
from reflected_components.json_codec.value_decoder import decode
from reflected_components.json_codec.value_encoder import encode
from reflected_components.schema_management.schema_registry import SchemaRegistry

from .container_shapes import (
    ContainerShapeError,
    normalize_component_container,
    to_component_array,
)

logger = logging.getLogger(__name__)


class ComponentError(Exception):
    """Raised when a component operation cannot be carried out."""


class ComponentSet:
    """Component values keyed by type id, each owning its whole value tree.

    Entries whose schema is not currently resolvable are kept as raw JSON and
    written back unchanged, so a partial schema never deletes saved data.
    """

    def __init__(self, registry: SchemaRegistry) -> None:
        self._registry = registry
        self._values: dict[str, DynamicValue] = {}
        self._pending: dict[str, Any] = {}

    @property
    def type_ids(self) -> tuple[str, ...]:
        """Type ids of the decoded components."""
        return tuple(self._values)

    @property
    def pending_type_ids(self) -> tuple[str, ...]:
        """Type ids kept as raw JSON until their schema becomes available."""
        return tuple(self._pending)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._values

    def __len__(self) -> int:
        return len(self._values)

    def add(self, type_id: str) -> DynamicValue:
        """Add a default-valued component; an existing component is returned as is."""
        existing = self._values.get(type_id)
        if existing is not None:
            return existing
        definition = self._registry.get(type_id)
        if definition is None:
            raise ComponentError(f"Schema for {type_id} not found.")
        value = build_default(definition, self._registry)
        self._values[type_id] = value
        self._pending.pop(type_id, None)
        return value

    def remove(self, type_id: str) -> bool:
        """Remove a component (decoded or pending); return True if one was removed."""
        removed = self._values.pop(type_id, None) is not None
        return self._pending.pop(type_id, None) is not None or removed

    def get(self, type_id: str) -> DynamicValue | None:
        """Return the live value of a component for in-place editing."""
        return self._values.get(type_id)

    def set(self, type_id: str, value: DynamicValue) -> bool:
        """Replace the value of an existing component; return False when absent."""
        if type_id not in self._values:
            return False
        self._values[type_id] = value
        return True

    def set_from_json(self, type_id: str, token: Any) -> DynamicValue:
        """Decode `token` against the component schema and store the result."""
        definition = self._registry.get(type_id)
        if definition is None:
            raise ComponentError(f"Schema for {type_id} not found.")
        value = decode(token, definition, self._registry)
        if value is None:
            value = build_default(definition, self._registry)
        self._values[type_id] = value
        self._pending.pop(type_id, None)
        return value

    def to_object(self) -> dict[str, Any]:
        """Return the object container form, pending raw entries included."""
        encoded: dict[str, Any] = {}
        for type_id, value in self._values.items():
            definition = self._registry.get(type_id)
            if definition is None:
                logger.warning("No schema found for %s; writing it without a schema", type_id)
                encoded[type_id] = to_plain(value)
                continue
            encoded[type_id] = encode(value, definition, self._registry)
        for type_id, raw in self._pending.items():
            encoded.setdefault(type_id, raw)
        return encoded

    def to_export_array(self) -> list[dict[str, Any]]:
        """Return the array-of-single-key-objects form for external consumers."""
        return to_component_array(self.to_object())

    def dumps(self) -> str:
        """Serialize the object form as compact JSON text."""
        return json.dumps(self.to_object(), separators=(",", ":"), ensure_ascii=False)

    def loads(self, text: str) -> None:
        """Replace all components from persisted JSON text.

        Raises:
          ComponentError: If the text is not a component container.
        """
        if not text.strip():
            self._load_container({})
            return
        try:
            data = json.loads(text)
            container = normalize_component_container(data)
        except (json.JSONDecodeError, ContainerShapeError) as exc:
            raise ComponentError(f"Invalid component data: {exc}") from exc
        self._load_container(container)

    def refresh(self) -> None:
        """Re-decode pending entries against the current registry."""
        pending, self._pending = self._pending, {}
        self._decode_entries(pending)

    def _load_container(self, container: Mapping[str, Any]) -> None:
        self._values = {}
        self._pending = {}
        self._decode_entries(container)
        logger.info(
            "Loaded %d components (%d pending schema)", len(self._values), len(self._pending)
        )

    def _decode_entries(self, container: Mapping[str, Any]) -> None:
        for type_id, token in container.items():
            definition = self._registry.get(type_id)
            if definition is None:
                logger.warning("Schema for %s not available; keeping raw data", type_id)
                self._pending[type_id] = token
                continue
            value = decode(token, definition, self._registry)
            if value is None:
                logger.debug("Component %s decoded to nothing; using defaults", type_id)
                value = build_default(definition, self._registry)
            self._values[type_id] = value


def load_component_file(path: Path | str, registry: SchemaRegistry) -> ComponentSet:
    """Load persisted components; a missing file yields an empty set."""
    components = ComponentSet(registry)
    source = Path(path)
    if source.exists():
        try:
            text = source.read_text(encoding="utf-8")
        except OSError as exc:
            raise ComponentError(f"Could not read components file {source}: {exc}") from exc
        components.loads(text)
    return components


def save_component_file(path: Path | str, components: ComponentSet) -> Path:
    """Write the object form of `components` and return the resolved path."""
    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(components.dumps(), encoding="utf-8")
    return destination.resolve()
