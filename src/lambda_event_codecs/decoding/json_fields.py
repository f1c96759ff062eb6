"""Readers that pull typed values out of a parsed JSON tree."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from .decode_errors import (
    DecodeError,
    IntegerOutOfRangeError,
    MissingFieldError,
    TypeMismatchError,
)

INT32_RANGE = (-(2**31), 2**31 - 1)
INT64_RANGE = (-(2**63), 2**63 - 1)
BYTE_RANGE = (0, 255)


@contextmanager
def nested(prefix: str) -> Iterator[None]:
    """Prefix the field path of any decode error raised inside the block."""
    try:
        yield
    except DecodeError as exc:
        raise exc.within(prefix) from exc.__cause__


def json_kind(value: Any) -> str:
    """Name the JSON variant a parsed value belongs to."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, Sequence):
        return "array"
    return type(value).__name__


def require_object(value: Any, label: str, *, path: str | None = None) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeMismatchError(f"expected {label} object, got {json_kind(value)}", path=path)
    return value


def require_field(source: Mapping[str, Any], name: str) -> Any:
    if name not in source:
        raise MissingFieldError(f"key {name!r} not found", path=name)
    return source[name]


def optional_field(source: Mapping[str, Any], name: str, *, null_is_absent: bool) -> Any:
    """Return the field value, or None when the key is missing.

    When `null_is_absent` is false an explicit JSON null is a type mismatch
    rather than an absent value.
    """
    if name not in source:
        return None
    value = source[name]
    if value is None and not null_is_absent:
        raise TypeMismatchError("expected string, got null", path=name)
    return value


def require_string(value: Any, *, path: str | None = None) -> str:
    if not isinstance(value, str):
        raise TypeMismatchError(f"expected string, got {json_kind(value)}", path=path)
    return value


def require_array(value: Any, *, path: str | None = None) -> Sequence[Any]:
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Sequence):
        raise TypeMismatchError(f"expected array, got {json_kind(value)}", path=path)
    return value


def require_bounded_int(
    value: Any, bounds: tuple[int, int], *, path: str | None = None
) -> int:
    """Return `value` as an int when it is an integral JSON number within `bounds`."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeMismatchError(f"expected number, got {json_kind(value)}", path=path)
    if isinstance(value, float):
        if not value.is_integer():
            raise IntegerOutOfRangeError(f"{value!r} is not an integer", path=path)
        value = int(value)
    lower, upper = bounds
    if not lower <= value <= upper:
        raise IntegerOutOfRangeError(
            f"{value} is outside the range {lower}..{upper}", path=path
        )
    return value
