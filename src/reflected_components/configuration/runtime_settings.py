"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ContainerShape(str, Enum):
    """Layout of exported component JSON."""

    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class SchemaSettings:
    """Normalized schema document settings."""

    text: str
    source_path: Path | None


@dataclass(frozen=True)
class ComponentSettings:
    """Location of the persisted component state."""

    path: Path


@dataclass(frozen=True)
class VectorSettings:
    """Type ids treated as fixed numeric vectors in addition to the defaults."""

    extra_type_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExportSettings:
    """Shape of exported component JSON."""

    container: ContainerShape = ContainerShape.ARRAY


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    schema: SchemaSettings
    components: ComponentSettings
    vectors: VectorSettings
    export: ExportSettings
