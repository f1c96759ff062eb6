"""Kafka event JSON codec."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from lambda_event_codecs.decoding.base64_codec import decode_base64_lenient, encode_base64
from lambda_event_codecs.decoding.decode_errors import (
    DecodeError,
    EmptyBootstrapServersError,
    IntegerOutOfRangeError,
    MalformedHeaderObjectError,
    UnrecognizedVariantError,
)
from lambda_event_codecs.decoding.json_fields import (
    BYTE_RANGE,
    INT32_RANGE,
    INT64_RANGE,
    nested,
    optional_field,
    require_array,
    require_bounded_int,
    require_field,
    require_object,
    require_string,
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
    TimestampType,
)
from .timestamps import int64_to_utc_time, utc_time_to_int64

_LOGGER = logging.getLogger(__name__)

SERVERS_DELIMITER = ","


def loads_kafka_event(text: str | bytes) -> KafkaEvent[bytes]:
    """Parse JSON text and decode it as a Kafka event."""
    try:
        payload = json.loads(text)
    except ValueError as exc:
        raise DecodeError(f"Invalid JSON document: {exc}") from exc
    return decode_kafka_event(payload)


def dumps_kafka_event(event: KafkaEvent[bytes], *, indent: int | None = None) -> str:
    """Encode a Kafka event as JSON text."""
    return json.dumps(encode_kafka_event(event), indent=indent)


def decode_kafka_event(payload: Any) -> KafkaEvent[bytes]:
    """Decode a parsed Lambda Kafka event payload.

    Raises:
      DecodeError: If the payload does not describe a valid Kafka event. The
        error names the offending field path.
    """
    source = require_object(payload, "KafkaEvent")
    event_source = decode_event_source(require_field(source, "eventSource"))
    arn = optional_field(source, "eventSourceArn", null_is_absent=False)
    event_source_arn = None if arn is None else require_string(arn, path="eventSourceArn")
    bootstrap_servers = _decode_bootstrap_servers(require_field(source, "bootstrapServers"))

    records_source = require_object(
        require_field(source, "records"), "records", path="records"
    )
    records: dict[str, tuple[Record[bytes], ...]] = {}
    for name, items in records_source.items():
        with nested(f"records.{name}"):
            decoded: list[Record[bytes]] = []
            for index, item in enumerate(require_array(items)):
                with nested(f"[{index}]"):
                    decoded.append(decode_record(item))
            records[name] = tuple(decoded)

    _LOGGER.debug(
        "Decoded %s event with %d partition(s) and %d record(s)",
        event_source.value,
        len(records),
        sum(len(items) for items in records.values()),
    )
    return KafkaEvent(
        event_source=event_source,
        event_source_arn=event_source_arn,
        bootstrap_servers=bootstrap_servers,
        records=records,
    )


def _decode_bootstrap_servers(value: Any) -> tuple[str, ...]:
    raw = require_string(value, path="bootstrapServers")
    # An empty string splits to one empty server name and is accepted.
    servers = tuple(raw.split(SERVERS_DELIMITER))
    if not servers:
        raise EmptyBootstrapServersError("empty string", path="bootstrapServers")
    return servers


def decode_event_source(value: Any) -> EventSource:
    raw = require_string(value, path="eventSource")
    try:
        return EventSource(raw)
    except ValueError as exc:
        raise UnrecognizedVariantError(
            f'unrecognised EventSource: "{raw}"', path="eventSource"
        ) from exc


def decode_record(payload: Any) -> Record[bytes]:
    """Decode one record, base64-decoding its key and value leniently."""
    source = require_object(payload, "Record")
    topic = require_string(require_field(source, "topic"), path="topic")
    partition = require_bounded_int(
        require_field(source, "partition"), INT32_RANGE, path="partition"
    )
    offset = require_bounded_int(require_field(source, "offset"), INT64_RANGE, path="offset")
    timestamp = decode_timestamp(source)

    header_items = require_array(require_field(source, "headers"), path="headers")
    headers: list[Header] = []
    with nested("headers"):
        for index, item in enumerate(header_items):
            with nested(f"[{index}]"):
                headers.append(decode_header(item))

    return Record(
        topic=topic,
        partition=partition,
        offset=offset,
        timestamp=timestamp,
        headers=tuple(headers),
        key=_decode_optional_bytes(source, "key"),
        value=_decode_optional_bytes(source, "value"),
    )


def _decode_optional_bytes(source: Mapping[str, Any], name: str) -> bytes | None:
    value = optional_field(source, name, null_is_absent=True)
    if value is None:
        return None
    return decode_base64_lenient(require_string(value, path=name))


def decode_timestamp(source: Mapping[str, Any]) -> Timestamp:
    """Decode the `timestampType`/`timestamp` sibling fields of a record object."""
    raw_type = require_string(require_field(source, "timestampType"), path="timestampType")
    try:
        timestamp_type = TimestampType(raw_type)
    except ValueError as exc:
        raise UnrecognizedVariantError(
            f'unknown timestampType: "{raw_type}"', path="timestampType"
        ) from exc

    if timestamp_type is TimestampType.NO_TIMESTAMP_TYPE:
        return NoTimestampType()
    millis = require_bounded_int(require_field(source, "timestamp"), INT64_RANGE, path="timestamp")
    try:
        instant = int64_to_utc_time(millis)
    except OverflowError as exc:
        raise IntegerOutOfRangeError(
            f"{millis} is outside the supported datetime range", path="timestamp"
        ) from exc
    if timestamp_type is TimestampType.CREATE_TIME:
        return CreateTime(instant)
    return LogAppendTime(instant)


def decode_header(payload: Any) -> Header:
    """Decode a single-key header object whose value is an array of bytes."""
    source = require_object(payload, "header")
    if not source:
        raise MalformedHeaderObjectError("Unexpected empty object")
    if len(source) > 1:
        raise MalformedHeaderObjectError("Unexpected additional keys in object")
    ((key, raw_value),) = source.items()
    with nested(key):
        octets = [
            require_bounded_int(item, BYTE_RANGE, path=f"[{index}]")
            for index, item in enumerate(require_array(raw_value))
        ]
    return Header(key=key, value=bytes(octets))


def encode_kafka_event(event: KafkaEvent[bytes]) -> dict[str, Any]:
    """Encode a Kafka event to its JSON object form."""
    encoded: dict[str, Any] = {
        "eventSource": event.event_source.value,
        "bootstrapServers": SERVERS_DELIMITER.join(event.bootstrap_servers),
        "records": {
            name: [encode_record(record) for record in partition_records]
            for name, partition_records in event.records.items()
        },
    }
    if event.event_source_arn is not None:
        encoded["eventSourceArn"] = event.event_source_arn
    return encoded


def encode_record(record: Record[bytes]) -> dict[str, Any]:
    encoded: dict[str, Any] = {
        "offset": record.offset,
        "partition": record.partition,
        "topic": record.topic,
        "headers": [encode_header(header) for header in record.headers],
    }
    encoded.update(encode_timestamp_fields(record.timestamp))
    if record.key is not None:
        encoded["key"] = encode_base64(record.key)
    if record.value is not None:
        encoded["value"] = encode_base64(record.value)
    return encoded


def encode_timestamp_fields(timestamp: Timestamp) -> dict[str, Any]:
    """Return the timestamp fields to merge into the enclosing record object."""
    fields: dict[str, Any] = {"timestampType": timestamp.timestamp_type.value}
    if isinstance(timestamp, (CreateTime, LogAppendTime)):
        fields["timestamp"] = utc_time_to_int64(timestamp.at)
    return fields


def encode_header(header: Header) -> dict[str, list[int]]:
    return {header.key: list(header.value)}
