"""API Gateway proxy integration response entities.

Build bodies with the `ProxyBody` constructors rather than by hand: they keep
the content type and the base64 flag consistent with the serialized text.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from http import HTTPStatus
from typing import Any

from lambda_event_codecs.decoding.base64_codec import encode_base64

TEXT_PLAIN = "text/plain; charset=utf-8"
APPLICATION_JSON = "application/json; charset=utf-8"


@dataclass(frozen=True)
class ProxyBody:
    """Response body as API Gateway expects it: always text on the wire."""

    content_type: str
    serialized: str
    is_base64_encoded: bool

    @staticmethod
    def text_plain(text: str) -> ProxyBody:
        return ProxyBody(content_type=TEXT_PLAIN, serialized=text, is_base64_encoded=False)

    @staticmethod
    def application_json(value: Any) -> ProxyBody:
        """Serialize `value` as compact JSON.

        Raises:
          ValueError: If `value` contains NaN or an infinity, which have no
            JSON representation.
        """
        return ProxyBody(
            content_type=APPLICATION_JSON,
            serialized=json.dumps(
                value, ensure_ascii=False, separators=(",", ":"), allow_nan=False
            ),
            is_base64_encoded=False,
        )

    @staticmethod
    def generic_binary(content_type: str, data: bytes) -> ProxyBody:
        """Wrap arbitrary bytes of the given content type as base64 text.

        More specific constructors are one line away::

            def image_gif(data: bytes) -> ProxyBody:
                return ProxyBody.generic_binary("image/gif", data)
        """
        return ProxyBody(
            content_type=content_type,
            serialized=encode_base64(data),
            is_base64_encoded=True,
        )


class HeaderMap(Mapping[str, tuple[str, ...]]):
    """Immutable multi-value header map with case-insensitive names.

    Entries are keyed by the lowercased name and remember the casing of the
    most recent write, which is the casing used on the wire.
    """

    def __init__(self, entries: Mapping[str, tuple[str, tuple[str, ...]]] | None = None) -> None:
        self._entries: dict[str, tuple[str, tuple[str, ...]]] = dict(entries or {})

    def __getitem__(self, name: str) -> tuple[str, ...]:
        return self._entries[name.lower()][1]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._entries

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"HeaderMap({dict(self.items())!r})"

    def __hash__(self) -> int:
        # Consistent with Mapping.__eq__, which compares names as stored.
        return hash(frozenset(self.items()))

    def added(self, name: str, value: str) -> HeaderMap:
        """Return a map with `value` appended to the values of `name`."""
        entries = dict(self._entries)
        _, existing = entries.get(name.lower(), (name, ()))
        entries[name.lower()] = (name, (*existing, value))
        return HeaderMap(entries)

    def replaced(self, name: str, value: str) -> HeaderMap:
        """Return a map where `value` is the only value of `name`."""
        entries = dict(self._entries)
        entries[name.lower()] = (name, (value,))
        return HeaderMap(entries)

    def to_wire(self) -> dict[str, list[str]]:
        return {original: list(values) for original, values in self._entries.values()}


@dataclass(frozen=True)
class ProxyResponse:
    """Response returned to API Gateway from a proxy integration.

    Unless a ``Content-Type`` header is set explicitly, the body's content type
    is sent.
    """

    status: HTTPStatus
    body: ProxyBody
    multi_value_headers: HeaderMap = field(default_factory=HeaderMap)

    def add_header(self, name: str, value: str) -> ProxyResponse:
        """Return a copy with one more value for `name`; earlier values are kept."""
        return replace(self, multi_value_headers=self.multi_value_headers.added(name, value))

    def set_header(self, name: str, value: str) -> ProxyResponse:
        """Return a copy where `value` replaces every earlier value of `name`."""
        return replace(self, multi_value_headers=self.multi_value_headers.replaced(name, value))


def response(status: HTTPStatus | int, body: ProxyBody) -> ProxyResponse:
    """Build a response with no headers."""
    return ProxyResponse(status=HTTPStatus(status), body=body)
