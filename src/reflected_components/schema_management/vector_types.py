"""Fixed-size numeric vector type catalog."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

DEFAULT_VECTOR_TYPE_IDS: frozenset[str] = frozenset(
    {
        "glam::Vec2",
        "glam::Vec3",
        "glam::Vec4",
        "glam::Quat",
        "glam::DVec2",
        "glam::IVec2",
        "glam::UVec2",
        "glam::UVec3",
    }
)

COMPONENT_NAMES: tuple[str, ...] = ("x", "y", "z", "w")


@dataclass(frozen=True)
class VectorTypeCatalog:
    """Set of type ids whose value is always a fixed-length float sequence."""

    type_ids: frozenset[str] = DEFAULT_VECTOR_TYPE_IDS

    @classmethod
    def with_extra(cls, extra_type_ids: Iterable[str]) -> VectorTypeCatalog:
        """Return the default catalog extended by `extra_type_ids`."""
        return cls(type_ids=DEFAULT_VECTOR_TYPE_IDS | frozenset(extra_type_ids))

    def is_vector(self, type_id: str | None) -> bool:
        """Return True when `type_id` is a fixed-numeric-vector type."""
        return type_id is not None and type_id in self.type_ids

    def component_count(self, type_id: str) -> int:
        """Return the number of float components for `type_id`."""
        return component_count(type_id)


def component_count(type_id: str) -> int:
    """Vec2-like ids have 2 components, Vec3-like 3, everything else (Vec4, Quat) 4."""
    if "Vec2" in type_id:
        return 2
    if "Vec3" in type_id:
        return 3
    return 4
