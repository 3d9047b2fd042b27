"""Schema management entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

OPTION_TYPE_PREFIX = "core::option::Option<"
COMPONENT_MARKER = "Component"


class SchemaKind(str, Enum):
    """Structural category of a reflected type."""

    VALUE = "Value"
    STRUCT = "Struct"
    TUPLE_STRUCT = "TupleStruct"
    ENUM = "Enum"
    OPTION = "Option"
    LIST = "List"
    ARRAY = "Array"
    UNSUPPORTED = "Unsupported"


class VariantShape(str, Enum):
    """Data layout carried by one enum variant."""

    UNIT = "Unit"
    TUPLE = "Tuple"
    STRUCT = "Struct"


@dataclass(frozen=True)
class TypeReference:
    """Pointer to another definition, either by `$ref` or inline."""

    ref: str | None = None
    inline: SchemaDefinition | None = None

    @property
    def target_type_id(self) -> str | None:
        """Return the registry key addressed by this reference."""
        if self.inline is not None:
            return self.inline.type_id
        if self.ref is None:
            return None
        return self.ref.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class FieldDefinition:
    """Named field of a struct or struct-shaped variant."""

    name: str
    type_ref: TypeReference


@dataclass(frozen=True)
class VariantDefinition:
    """One named alternative of an enum or option."""

    name: str
    shape: VariantShape = VariantShape.UNIT
    prefix_items: tuple[TypeReference, ...] = ()
    fields: tuple[FieldDefinition, ...] = ()


@dataclass(frozen=True)
class SchemaDefinition:  # pylint: disable=too-many-instance-attributes
    """Parsed shape of one reflected type."""

    type_id: str
    kind: SchemaKind
    short_name: str = ""
    raw_kind: str = ""
    reflect_types: tuple[str, ...] = ()
    fields: tuple[FieldDefinition, ...] = ()
    prefix_items: tuple[TypeReference, ...] = ()
    variants: tuple[VariantDefinition, ...] = ()
    item: TypeReference | None = None
    fixed_length: int | None = field(default=None, compare=False)

    @property
    def is_unit_struct(self) -> bool:
        """Return True for a struct declaring no properties."""
        return self.kind == SchemaKind.STRUCT and not self.fields

    @property
    def is_component(self) -> bool:
        """Return True when the type carries the component marker."""
        return COMPONENT_MARKER in self.reflect_types

    def find_variant(self, name: str) -> VariantDefinition | None:
        """Return the variant declared under `name`, if any."""
        for variant in self.variants:
            if variant.name == name:
                return variant
        return None
