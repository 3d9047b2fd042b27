"""Primitive type-name dispatch shared by default construction and decoding."""

from __future__ import annotations

import math
import re
from enum import Enum

Scalar = bool | int | float | str

_FLOAT_TYPE_IDS = frozenset({"f32", "f64"})
_BOOL_TYPE_IDS = frozenset({"bool"})
_STRING_TYPE_ID = "alloc::string::String"
_COW_STR_SUFFIX = "::Cow<str>"
_INTEGER_PATTERN = re.compile(r"^[iu](8|16|32|64|128|size)$")
_TRUE_TEXT = frozenset({"true", "1"})
_FALSE_TEXT = frozenset({"false", "0", ""})


class PrimitiveFamily(str, Enum):
    """Representation family of a `Value`-kind type id."""

    FLOAT = "float"
    BOOL = "bool"
    TEXT = "text"
    INTEGER = "integer"
    UNKNOWN = "unknown"


class PrimitiveConversionError(ValueError):
    """Raised when a JSON scalar cannot be converted for a primitive type."""


def primitive_family(type_id: str) -> PrimitiveFamily:
    """Classify a primitive type id by exact name."""
    if type_id in _FLOAT_TYPE_IDS:
        return PrimitiveFamily.FLOAT
    if type_id in _BOOL_TYPE_IDS:
        return PrimitiveFamily.BOOL
    if type_id == _STRING_TYPE_ID or type_id.endswith(_COW_STR_SUFFIX):
        return PrimitiveFamily.TEXT
    if _INTEGER_PATTERN.fullmatch(type_id):
        return PrimitiveFamily.INTEGER
    return PrimitiveFamily.UNKNOWN


def zero_value(family: PrimitiveFamily) -> Scalar | None:
    """Return the zero value of `family`, or None for unknown primitives."""
    if family == PrimitiveFamily.FLOAT:
        return 0.0
    if family == PrimitiveFamily.BOOL:
        return False
    if family == PrimitiveFamily.TEXT:
        return ""
    if family == PrimitiveFamily.INTEGER:
        return 0
    return None


def convert_scalar(family: PrimitiveFamily, token: object) -> Scalar:
    """Convert a decoded JSON scalar into the representation of `family`.

    Raises:
      PrimitiveConversionError: If `token` has no sensible conversion.
    """
    if family == PrimitiveFamily.FLOAT:
        return _to_float(token)
    if family == PrimitiveFamily.BOOL:
        return _to_bool(token)
    if family == PrimitiveFamily.TEXT:
        return _to_text(token)
    if family == PrimitiveFamily.INTEGER:
        return _to_int(token)
    if isinstance(token, float) and not math.isfinite(token):
        raise PrimitiveConversionError(f"Not a finite number: {token!r}")
    if isinstance(token, bool | int | float | str):
        return token
    raise PrimitiveConversionError(f"Unsupported scalar: {token!r}")


def _to_float(token: object) -> float:
    if isinstance(token, bool):
        return 1.0 if token else 0.0
    if not isinstance(token, int | float | str):
        raise PrimitiveConversionError(f"Not a float: {token!r}")
    try:
        result = float(token.strip() if isinstance(token, str) else token)
    except (ValueError, OverflowError) as exc:
        raise PrimitiveConversionError(f"Not a float: {token!r}") from exc
    if not math.isfinite(result):
        raise PrimitiveConversionError(f"Not a finite float: {token!r}")
    return result


def _to_bool(token: object) -> bool:
    if isinstance(token, bool):
        return token
    if isinstance(token, int | float):
        return token != 0
    if isinstance(token, str):
        lowered = token.strip().lower()
        if lowered in _TRUE_TEXT:
            return True
        if lowered in _FALSE_TEXT:
            return False
    raise PrimitiveConversionError(f"Not a bool: {token!r}")


def _to_text(token: object) -> str:
    if token is None:
        return ""
    if isinstance(token, str):
        return token
    if isinstance(token, bool):
        return "true" if token else "false"
    if isinstance(token, int | float):
        return str(token)
    raise PrimitiveConversionError(f"Not text: {token!r}")


def _to_int(token: object) -> int:
    if isinstance(token, bool):
        return int(token)
    if isinstance(token, int):
        return token
    if isinstance(token, float):
        if not math.isfinite(token):
            raise PrimitiveConversionError(f"Not an integer: {token!r}")
        return round(token)
    if isinstance(token, str):
        try:
            return int(token.strip())
        except ValueError as exc:
            raise PrimitiveConversionError(f"Not an integer: {token!r}") from exc
    raise PrimitiveConversionError(f"Not an integer: {token!r}")
