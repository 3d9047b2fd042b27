"""Process-wide schema registry service."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .schema_models import SchemaDefinition, TypeReference
from .schema_parsing import (
    SchemaError,
    parse_schema_definition,
    parse_type_reference,
    unwrap_schema_document,
)
from .vector_types import VectorTypeCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkippedSchema:
    """Schema entry that could not be parsed during a load."""

    type_id: str
    reason: str


@dataclass(frozen=True)
class RegistryLoadReport:
    """Outcome of one registry load."""

    loaded: int
    skipped: tuple[SkippedSchema, ...]


class SchemaRegistry:
    """Mapping from type id to schema definition, replaced wholesale on load.

    Readers always observe a complete table: `load` builds the new table aside
    and swaps it in with a single assignment while holding the writer lock.
    """

    def __init__(self, vector_types: VectorTypeCatalog | None = None) -> None:
        self._vector_types = vector_types or VectorTypeCatalog()
        self._definitions: Mapping[str, SchemaDefinition] = MappingProxyType({})
        self._write_lock = threading.Lock()

    @property
    def vector_types(self) -> VectorTypeCatalog:
        """Fixed-numeric-vector catalog used by the codec."""
        return self._vector_types

    @property
    def type_ids(self) -> tuple[str, ...]:
        """All registered type ids in document order."""
        return tuple(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._definitions

    def __iter__(self) -> Iterator[SchemaDefinition]:
        return iter(tuple(self._definitions.values()))

    def load(self, document: Any) -> RegistryLoadReport:
        """Replace the whole table from a `type_id -> schema` document.

        Raises:
          SchemaError: If the document is absent, empty, or not an object. The
            previous table is left untouched in that case.
        """
        table = unwrap_schema_document(document)
        definitions: dict[str, SchemaDefinition] = {}
        skipped: list[SkippedSchema] = []
        for type_id, node in table.items():
            try:
                definitions[type_id] = parse_schema_definition(type_id, node)
            except SchemaError as exc:
                logger.warning("Skipping schema %s: %s", type_id, exc)
                skipped.append(SkippedSchema(type_id=type_id, reason=str(exc)))

        with self._write_lock:
            self._definitions = MappingProxyType(definitions)
        logger.info("Loaded %d schemas (%d skipped)", len(definitions), len(skipped))
        return RegistryLoadReport(loaded=len(definitions), skipped=tuple(skipped))

    def get(self, type_id: str) -> SchemaDefinition | None:
        """Return the definition registered under `type_id`."""
        return self._definitions.get(type_id)

    def resolve(
        self, reference: TypeReference | Mapping[str, Any] | None
    ) -> SchemaDefinition | None:
        """Resolve an inline or `$ref` type reference.

        Returns None on a miss so the caller decides whether to skip the slot.
        """
        if reference is None:
            return None
        if not isinstance(reference, TypeReference):
            try:
                reference = parse_type_reference(reference, "reference")
            except SchemaError as exc:
                logger.warning("Could not parse schema reference: %s", exc)
                return None
        if reference.inline is not None:
            return reference.inline
        target = reference.target_type_id
        definition = self._definitions.get(target) if target else None
        if definition is None:
            logger.warning("Could not resolve schema reference: %s", reference.ref)
        return definition

    def is_component(self, type_id: str) -> bool:
        """Return True when `type_id` is registered with the component marker."""
        definition = self._definitions.get(type_id)
        return definition is not None and definition.is_component

    def component_type_ids(self, search: str | None = None) -> tuple[str, ...]:
        """Return sorted component type ids, optionally filtered by a substring."""
        needle = (search or "").strip().lower()
        return tuple(
            sorted(
                type_id
                for type_id, definition in self._definitions.items()
                if definition.is_component and needle in type_id.lower()
            )
        )
