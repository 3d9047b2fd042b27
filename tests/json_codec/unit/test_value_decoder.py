"""Reflection JSON decoding tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from reflected_components.dynamic_values import (
    FixedVector,
    ListValue,
    NoValue,
    PrimitiveValue,
    StructValue,
    TupleValue,
    VariantValue,
    none_value,
    some_value,
)
from reflected_components.json_codec import decode, encode
from reflected_components.schema_management import (
    SchemaDefinition,
    SchemaRegistry,
    load_schema_document,
    parse_schema_definition,
)


def _sample_registry() -> SchemaRegistry:
    sample_path = Path(__file__).resolve().parents[3] / "samples" / "sample-registry-schema.json"
    registry = SchemaRegistry()
    registry.load(load_schema_document(sample_path.read_text(encoding="utf-8")))
    return registry


def _definition(registry: SchemaRegistry, type_id: str) -> SchemaDefinition:
    definition = registry.get(type_id)
    assert definition is not None
    return definition


def test_legacy_vector_object_matches_array_form() -> None:
    registry = _sample_registry()
    vec3 = _definition(registry, "glam::Vec3")

    legacy = decode({"x": 1, "y": 2, "z": 3}, vec3, registry)
    current = decode([1, 2, 3], vec3, registry)

    assert legacy == current == FixedVector([1.0, 2.0, 3.0])


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ([1.5], [1.5, 0.0, 0.0, 0.0]),
        ([1, 2, 3, 4, 5], [1.0, 2.0, 3.0, 4.0]),
        ([True, "a", None, 2], [0.0, 0.0, 0.0, 2.0]),
        ("north", [0.0, 0.0, 0.0, 0.0]),
        ({"w": 1.0}, [0.0, 0.0, 0.0, 1.0]),
    ],
)
def test_vector_decoding_pads_and_tolerates_bad_entries(token: object, expected: list) -> None:
    registry = _sample_registry()

    assert decode(token, _definition(registry, "glam::Quat"), registry) == FixedVector(expected)


def test_option_decoding() -> None:
    registry = _sample_registry()
    option = _definition(registry, "core::option::Option<glam::Vec3>")

    assert decode(None, option, registry) == none_value()
    assert decode([1, 2, 3], option, registry) == some_value(FixedVector([1.0, 2.0, 3.0]))


def test_struct_ignores_unknown_keys_and_leaves_missing_fields_absent() -> None:
    registry = _sample_registry()
    label = _definition(registry, "game::ui::Label")

    value = decode({"text": "Hi", "colour": "red"}, label, registry)

    assert value == StructValue({"text": PrimitiveValue("Hi")})


def test_struct_shape_mismatch_yields_empty_struct() -> None:
    registry = _sample_registry()

    value = decode([1, 2], _definition(registry, "game::ui::Label"), registry)

    assert value == StructValue()


def test_unit_struct_decodes_to_empty_struct_from_anything() -> None:
    registry = _sample_registry()
    player = _definition(registry, "game::markers::Player")

    assert decode(None, player, registry) == StructValue()
    assert decode({"ignored": 1}, player, registry) == StructValue()


def test_single_field_tuple_struct_wraps_scalar() -> None:
    registry = _sample_registry()

    value = decode(4.5, _definition(registry, "game::stats::Health"), registry)

    assert value == TupleValue([PrimitiveValue(4.5)])


def test_multi_field_tuple_struct_is_positional() -> None:
    registry = _sample_registry()
    grid_cell = _definition(registry, "game::grid::GridCell")

    assert decode([1, 2], grid_cell, registry) == TupleValue([PrimitiveValue(1), PrimitiveValue(2)])
    assert decode([1, 2, 3, 4], grid_cell, registry) == TupleValue(
        [PrimitiveValue(1), PrimitiveValue(2), PrimitiveValue(3)]
    )
    assert decode({"0": 1}, grid_cell, registry) == TupleValue()


def test_enum_forms() -> None:
    registry = _sample_registry()
    behavior = _definition(registry, "game::ai::Behavior")

    assert decode("Idle", behavior, registry) == VariantValue("Idle")
    assert decode({"Patrol": [[1, 0, 2]]}, behavior, registry) == VariantValue(
        "Patrol", ListValue([FixedVector([1.0, 0.0, 2.0])])
    )
    assert decode({"Chase": {"target_name": "hero", "speed": 2}}, behavior, registry) == (
        VariantValue(
            "Chase",
            StructValue({"target_name": PrimitiveValue("hero"), "speed": PrimitiveValue(2.0)}),
        )
    )
    assert decode({"Wander": [1, 2]}, behavior, registry) == VariantValue(
        "Wander", TupleValue([PrimitiveValue(1.0), PrimitiveValue(2.0)])
    )


def test_unknown_enum_variant_is_retained_without_data(caplog: pytest.LogCaptureFixture) -> None:
    registry = _sample_registry()

    with caplog.at_level(logging.WARNING):
        value = decode({"Teleport": [1, 2]}, _definition(registry, "game::ai::Behavior"), registry)

    assert value == VariantValue("Teleport")
    assert "Teleport" in caplog.text


@pytest.mark.parametrize("token", [{}, 42, [1, 2]])
def test_enum_shape_mismatch_falls_back_to_default(token: object) -> None:
    registry = _sample_registry()

    value = decode(token, _definition(registry, "game::physics::RigidBody"), registry)

    assert value == VariantValue("Dynamic")


def test_list_drops_undecodable_elements() -> None:
    registry = _sample_registry()
    inventory = _definition(registry, "game::inventory::Inventory")

    value = decode({"items": ["sword", None, 3], "capacity": "12"}, inventory, registry)

    assert value == StructValue(
        {
            "items": ListValue([PrimitiveValue("sword"), PrimitiveValue("3")]),
            "capacity": PrimitiveValue(12),
        }
    )


def test_non_array_list_token_yields_empty_list() -> None:
    registry = _sample_registry()

    strings = _definition(registry, "alloc::vec::Vec<alloc::string::String>")

    value = decode("sword", strings, registry)

    assert value == ListValue()


def test_unconvertible_primitive_leaves_field_absent() -> None:
    registry = _sample_registry()
    label = _definition(registry, "game::ui::Label")

    value = decode({"text": "Hi", "visible": "sometimes"}, label, registry)

    assert value == StructValue({"text": PrimitiveValue("Hi")})


def test_null_primitive_and_unsupported_kinds() -> None:
    registry = _sample_registry()
    unknown_primitive = parse_schema_definition("bevy_asset::id::AssetId", {"kind": "Value"})
    map_type_id = "std::collections::hash::map::HashMap<alloc::string::String, u32>"

    assert decode(None, _definition(registry, "f32"), registry) is None
    assert decode(None, unknown_primitive, registry) == NoValue("bevy_asset::id::AssetId")
    assert decode("raw", unknown_primitive, registry) == PrimitiveValue("raw")
    assert decode({"a": 1}, _definition(registry, map_type_id), registry) == NoValue(map_type_id)


def test_out_of_range_float_leaves_field_absent() -> None:
    registry = _sample_registry()
    behavior = _definition(registry, "game::ai::Behavior")
    token = json.loads('{"Chase": {"target_name": "hero", "speed": 1' + "0" * 400 + "}}")

    value = decode(token, behavior, registry)

    assert value == VariantValue("Chase", StructValue({"target_name": PrimitiveValue("hero")}))


def test_out_of_range_vector_components_become_zero() -> None:
    registry = _sample_registry()
    vec3 = _definition(registry, "glam::Vec3")
    huge = int("1" + "0" * 400)

    assert decode([huge, 2, -huge], vec3, registry) == FixedVector([0.0, 2.0, 0.0])
    assert decode({"x": huge, "y": 1}, vec3, registry) == FixedVector([0.0, 1.0, 0.0])


@pytest.mark.parametrize("raw", ["NaN", "Infinity", "-Infinity", '"1e999"'])
def test_non_finite_numbers_never_reach_encoded_json(raw: str) -> None:
    registry = _sample_registry()
    health = _definition(registry, "game::stats::Health")
    behavior = _definition(registry, "game::ai::Behavior")
    vec3 = _definition(registry, "glam::Vec3")
    unknown_primitive = parse_schema_definition("bevy_asset::id::AssetId", {"kind": "Value"})

    chase = decode(json.loads('{"Chase": {"speed": ' + raw + "}}"), behavior, registry)
    vector = decode(json.loads("[1, " + raw + ", 3]"), vec3, registry)

    assert decode(json.loads(raw), health, registry) is None
    assert chase == VariantValue("Chase", StructValue())
    assert vector == FixedVector([1.0, 0.0, 3.0])
    assert decode(json.loads(raw), unknown_primitive, registry) == (
        PrimitiveValue("1e999") if raw.startswith('"') else NoValue("bevy_asset::id::AssetId")
    )
    encoded = [encode(chase, behavior, registry), encode(vector, vec3, registry)]
    json.dumps(encoded, allow_nan=False)
