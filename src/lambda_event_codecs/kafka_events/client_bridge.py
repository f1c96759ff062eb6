"""Conversions between confluent-kafka client messages and Lambda Kafka events.

Useful for replaying consumed messages into a handler locally: the messages
are grouped the way the Lambda event source mapping groups them. Nothing here
polls or talks to a broker.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Protocol

from confluent_kafka import (
    TIMESTAMP_CREATE_TIME,
    TIMESTAMP_LOG_APPEND_TIME,
    TIMESTAMP_NOT_AVAILABLE,
)

from .event_models import (
    CreateTime,
    EventSource,
    Header,
    KafkaEvent,
    LogAppendTime,
    NoTimestampType,
    Record,
    Timestamp,
)
from .timestamps import int64_to_utc_time, utc_time_to_int64

_LOGGER = logging.getLogger(__name__)

# librdkafka reports -1 alongside TIMESTAMP_NOT_AVAILABLE.
_MISSING_TIMESTAMP_MILLIS = -1


class ClientMessageError(Exception):
    """Raised when a client message cannot be represented as an event record."""


class KafkaClientMessage(Protocol):
    """Subset of the confluent-kafka `Message` API used for conversion."""

    def error(self) -> Any: ...

    def topic(self) -> str | None: ...

    def partition(self) -> int | None: ...

    def offset(self) -> int | None: ...

    def timestamp(self) -> tuple[int, int | None]: ...

    def headers(self) -> list[tuple[str, bytes | None]] | None: ...

    def key(self) -> bytes | str | None: ...

    def value(self) -> bytes | str | None: ...


def timestamp_from_client(kind: int, millis: int | None) -> Timestamp:
    """Convert a client `(timestamp_type, millis)` pair to a `Timestamp`."""
    if kind == TIMESTAMP_NOT_AVAILABLE:
        return NoTimestampType()
    if millis is None:
        raise ClientMessageError(f"Timestamp type {kind} requires a timestamp value.")
    if kind == TIMESTAMP_CREATE_TIME:
        return CreateTime(int64_to_utc_time(millis))
    if kind == TIMESTAMP_LOG_APPEND_TIME:
        return LogAppendTime(int64_to_utc_time(millis))
    raise ClientMessageError(f"Unknown client timestamp type: {kind}")


def timestamp_to_client(timestamp: Timestamp) -> tuple[int, int]:
    """Convert a `Timestamp` to the pair the client's `Message.timestamp()` returns."""
    if isinstance(timestamp, CreateTime):
        return TIMESTAMP_CREATE_TIME, utc_time_to_int64(timestamp.at)
    if isinstance(timestamp, LogAppendTime):
        return TIMESTAMP_LOG_APPEND_TIME, utc_time_to_int64(timestamp.at)
    return TIMESTAMP_NOT_AVAILABLE, _MISSING_TIMESTAMP_MILLIS


def record_from_message(message: KafkaClientMessage) -> Record[bytes]:
    """Convert one consumed message to an event record."""
    topic = message.topic()
    partition = message.partition()
    offset = message.offset()
    if topic is None or partition is None or offset is None:
        raise ClientMessageError("Message is missing its topic, partition or offset.")
    kind, millis = message.timestamp()
    headers = tuple(
        Header(key=name, value=b"" if value is None else bytes(value))
        for name, value in message.headers() or ()
    )
    return Record(
        topic=topic,
        partition=partition,
        offset=offset,
        timestamp=timestamp_from_client(kind, millis),
        headers=headers,
        key=_as_bytes(message.key()),
        value=_as_bytes(message.value()),
    )


def event_from_messages(
    messages: Iterable[KafkaClientMessage],
    *,
    event_source: EventSource,
    bootstrap_servers: Iterable[str],
    event_source_arn: str | None = None,
) -> KafkaEvent[bytes]:
    """Group consumed messages into a Lambda Kafka event.

    Records are keyed ``"<topic>-<partition>"`` and keep arrival order. A
    message carrying a client error, partition EOF included, raises
    `ClientMessageError`; filter those out while polling.
    """
    grouped: dict[str, list[Record[bytes]]] = {}
    for message in messages:
        error = message.error()
        if error:
            raise ClientMessageError(f"Kafka error: {error}")
        record = record_from_message(message)
        grouped.setdefault(f"{record.topic}-{record.partition}", []).append(record)

    _LOGGER.debug("Grouped client messages into %d partition(s)", len(grouped))
    return KafkaEvent(
        event_source=event_source,
        event_source_arn=event_source_arn,
        bootstrap_servers=tuple(bootstrap_servers),
        records={name: tuple(records) for name, records in grouped.items()},
    )


def _as_bytes(payload: bytes | str | None) -> bytes | None:
    if payload is None:
        return None
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return bytes(payload)
