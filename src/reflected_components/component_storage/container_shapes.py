"""Reshaping between the object and array component container forms."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


class ContainerShapeError(ValueError):
    """Raised when a component container has neither supported shape."""


def to_component_array(components: Mapping[str, Any]) -> list[dict[str, Any]]:
    """`{"A": a, "B": b}` -> `[{"A": a}, {"B": b}]`, preserving order."""
    return [{type_id: value} for type_id, value in components.items()]


def from_component_array(items: Sequence[Any]) -> dict[str, Any]:
    """`[{"A": a}, {"B": b}]` -> `{"A": a, "B": b}`; later duplicates win."""
    components: dict[str, Any] = {}
    for index, item in enumerate(items):
        if not isinstance(item, Mapping) or len(item) != 1:
            raise ContainerShapeError(f"Component entry {index} must be a single-key object.")
        ((type_id, value),) = item.items()
        components[str(type_id)] = value
    return components


def normalize_component_container(data: Any) -> dict[str, Any]:
    """Accept either container form and return the object form."""
    if isinstance(data, Mapping):
        return {str(type_id): value for type_id, value in data.items()}
    if isinstance(data, Sequence) and not isinstance(data, str):
        return from_component_array(data)
    raise ContainerShapeError("Components must be an object or an array of single-key objects.")
