"""Human-readable names for fully-qualified type ids."""

from __future__ import annotations

_PATH_SEPARATOR = "::"


def short_type_name(type_id: str) -> str:
    """Strip module paths, keeping generic arguments readable.

    `bevy_transform::components::transform::Transform` -> `Transform`,
    `core::option::Option<glam::Vec3>` -> `Option<Vec3>`.
    """
    text = type_id.strip()
    if not text:
        return ""
    open_index = text.find("<")
    if open_index == -1 or not text.endswith(">"):
        return _last_segment(text)
    base = _last_segment(text[:open_index])
    arguments = _split_generic_arguments(text[open_index + 1 : -1])
    inner = ", ".join(short_type_name(argument) for argument in arguments)
    return f"{base}<{inner}>"


def _last_segment(path: str) -> str:
    return path.rsplit(_PATH_SEPARATOR, 1)[-1]


def _split_generic_arguments(text: str) -> list[str]:
    arguments: list[str] = []
    depth = 0
    current: list[str] = []
    for char in text:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        if char == "," and depth == 0:
            arguments.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    tail = "".join(current).strip()
    if tail:
        arguments.append(tail)
    return arguments
