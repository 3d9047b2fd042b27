"""Dynamic value model tests."""

from __future__ import annotations

from reflected_components.dynamic_values import (
    FixedVector,
    ListValue,
    NoValue,
    PrimitiveValue,
    StructValue,
    TupleValue,
    VariantValue,
    from_plain,
    none_value,
    some_value,
    to_plain,
)


def test_to_plain_converts_without_schema() -> None:
    value = StructValue(
        {
            "position": FixedVector([1.0, 2.0]),
            "tags": ListValue([PrimitiveValue("a")]),
            "pair": TupleValue([PrimitiveValue(1), NoValue()]),
            "state": VariantValue("Idle"),
            "target": some_value(PrimitiveValue(3)),
        }
    )

    assert to_plain(value) == {
        "position": [1.0, 2.0],
        "tags": ["a"],
        "pair": [1, None],
        "state": "Idle",
        "target": {"Some": 3},
    }


def test_from_plain_builds_generic_values() -> None:
    assert from_plain({"a": [1, "x"], "b": None}) == StructValue(
        {"a": ListValue([PrimitiveValue(1), PrimitiveValue("x")]), "b": NoValue()}
    )


def test_struct_fields_are_mutable_in_place() -> None:
    value = StructValue()

    value.set_field("speed", PrimitiveValue(2.0))

    assert value.fields == {"speed": PrimitiveValue(2.0)}


def test_option_helpers_return_fresh_values() -> None:
    first = none_value()
    second = none_value()

    assert first == second
    assert first is not second
    assert some_value(PrimitiveValue(1)).tag == "Some"
