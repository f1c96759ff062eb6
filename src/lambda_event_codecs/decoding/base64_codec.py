"""Base64 text codec with strict and lenient decoding.

Kafka record keys and values are decoded with :func:`decode_base64_lenient`
only. Upstream producers are known to emit malformed base64, and a bad key
must never fail the whole batch, so do not switch those call sites to the
strict decoder.
"""

from __future__ import annotations

import base64
import binascii
import logging
import string

_LOGGER = logging.getLogger(__name__)

_ALPHABET = frozenset(string.ascii_letters + string.digits + "+/")


class Base64DecodeError(ValueError):
    """Raised by the strict decoder for malformed input."""


def encode_base64(data: bytes) -> str:
    """Encode bytes as padded standard-alphabet base64 text."""
    return base64.b64encode(data).decode("ascii")


def decode_base64_strict(text: str | bytes) -> bytes:
    """Decode base64 text, rejecting foreign characters and bad padding."""
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise Base64DecodeError(f"Invalid base64 input: {exc}") from exc


def decode_base64_lenient(text: str | bytes) -> bytes:
    """Decode as much of `text` as possible; never raises.

    Characters outside the base64 alphabet are skipped, decoding stops at the
    first ``=``, a trailing group of two or three characters is decoded as a
    partial quantum and a single dangling character is dropped.
    """
    if isinstance(text, bytes):
        text = text.decode("latin-1")
    head, _, _ = text.partition("=")
    cleaned = "".join(char for char in head if char in _ALPHABET)
    remainder = len(cleaned) % 4
    if remainder == 1:
        cleaned = cleaned[:-1]
    elif remainder:
        cleaned += "=" * (4 - remainder)
    if cleaned != text:
        _LOGGER.debug("Repaired malformed base64 input of length %d", len(text))
    return base64.b64decode(cleaned, validate=True)
