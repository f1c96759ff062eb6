"""Decode failure hierarchy."""

from __future__ import annotations


class DecodeError(Exception):
    """Raised when a JSON payload cannot be decoded into a domain value."""

    def __init__(self, reason: str, *, path: str | None = None) -> None:
        self.reason = reason
        self.path = path
        super().__init__(self._render())

    def _render(self) -> str:
        if self.path:
            return f"{self.path}: {self.reason}"
        return self.reason

    def within(self, prefix: str) -> DecodeError:
        """Return a copy of this error with `prefix` prepended to its field path."""
        if not self.path:
            path = prefix
        elif self.path.startswith("["):
            path = f"{prefix}{self.path}"
        else:
            path = f"{prefix}.{self.path}"
        return type(self)(self.reason, path=path)


class MissingFieldError(DecodeError):
    """A required object key is absent."""


class TypeMismatchError(DecodeError):
    """A field holds the wrong kind of JSON value."""


class UnrecognizedVariantError(DecodeError):
    """A discriminator string is not one of the known literals."""


class EmptyBootstrapServersError(DecodeError):
    """Splitting `bootstrapServers` produced no servers."""


class IntegerOutOfRangeError(DecodeError):
    """A number does not fit the integer type the field requires."""


class MalformedHeaderObjectError(DecodeError):
    """A Kafka header object does not hold exactly one key."""
