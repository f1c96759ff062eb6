"""Decoding primitives exports."""

from .base64_codec import (
    Base64DecodeError,
    decode_base64_lenient,
    decode_base64_strict,
    encode_base64,
)
from .decode_errors import (
    DecodeError,
    EmptyBootstrapServersError,
    IntegerOutOfRangeError,
    MalformedHeaderObjectError,
    MissingFieldError,
    TypeMismatchError,
    UnrecognizedVariantError,
)

__all__ = [
    "Base64DecodeError",
    "decode_base64_lenient",
    "decode_base64_strict",
    "encode_base64",
    "DecodeError",
    "EmptyBootstrapServersError",
    "IntegerOutOfRangeError",
    "MalformedHeaderObjectError",
    "MissingFieldError",
    "TypeMismatchError",
    "UnrecognizedVariantError",
]
