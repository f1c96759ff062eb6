"""Transforms for use with `Record.map_value` and `KafkaEvent.map_values`."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from lambda_event_codecs.decoding.base64_codec import encode_base64

VALUE_FORMATS = ("raw", "utf8", "json")


def raw_value(value: bytes) -> str:
    """Render bytes as base64 text, the way they arrive on the wire."""
    return encode_base64(value)


def utf8_value(value: bytes) -> str:
    """Decode bytes as UTF-8, replacing undecodable sequences."""
    return value.decode("utf-8", errors="replace")


def json_value(value: bytes) -> Any:
    """Parse bytes as a JSON document.

    Raises:
      ValueError: If the bytes are not valid JSON.
    """
    return json.loads(value)


def value_transform(value_format: str) -> Callable[[bytes], Any]:
    """Return the transform registered for `value_format`."""
    transforms = {"raw": raw_value, "utf8": utf8_value, "json": json_value}
    try:
        return transforms[value_format]
    except KeyError as exc:
        raise ValueError(
            f"Unsupported value format: {value_format}. Expected one of {', '.join(VALUE_FORMATS)}."
        ) from exc
