"""Kafka event codec tests."""

from __future__ import annotations

import copy
from datetime import UTC, datetime
from typing import Any

import pytest
from lambda_event_codecs.decoding import (
    DecodeError,
    IntegerOutOfRangeError,
    MalformedHeaderObjectError,
    MissingFieldError,
    TypeMismatchError,
    UnrecognizedVariantError,
)
from lambda_event_codecs.kafka_events.event_codec import (
    decode_header,
    decode_kafka_event,
    decode_record,
    decode_timestamp,
    encode_header,
    encode_kafka_event,
    encode_record,
    encode_timestamp_fields,
    loads_kafka_event,
)
from lambda_event_codecs.kafka_events.event_models import (
    CreateTime,
    EventSource,
    Header,
    LogAppendTime,
    NoTimestampType,
)

_MSK_ARN = (
    "arn:aws:kafka:sa-east-1:123456789012:cluster/vpc-2priv-2pub/"
    "751d2973-a626-431c-9d4e-d7975eb44dd7-2"
)


def _record_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "topic": "mytopic",
        "partition": 0,
        "offset": 15,
        "timestamp": 1545084650987,
        "timestampType": "CREATE_TIME",
        "key": "a2V5",
        "value": "SGVsbG8sIHRoaXMgaXMgYSB0ZXN0Lg==",
        "headers": [{"headerKey": [104, 101, 97, 100, 101, 114, 86, 97, 108, 117, 101]}],
    }
    payload.update(overrides)
    return payload


def _event_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "eventSource": "aws:kafka",
        "eventSourceArn": _MSK_ARN,
        "bootstrapServers": "b-2.demo.kafka.us-east-1.amazonaws.com:9092,"
        "b-1.demo.kafka.us-east-1.amazonaws.com:9092",
        "records": {"mytopic-0": [_record_payload()]},
    }
    payload.update(overrides)
    return payload


def test_decodes_msk_event() -> None:
    event = decode_kafka_event(_event_payload())

    assert event.event_source is EventSource.AWS_KAFKA
    assert event.event_source_arn == _MSK_ARN
    assert event.bootstrap_servers == (
        "b-2.demo.kafka.us-east-1.amazonaws.com:9092",
        "b-1.demo.kafka.us-east-1.amazonaws.com:9092",
    )
    (record,) = event.records["mytopic-0"]
    assert record.topic == "mytopic"
    assert record.partition == 0
    assert record.offset == 15
    assert record.timestamp == CreateTime(datetime(2018, 12, 17, 22, 10, 50, 987000, tzinfo=UTC))
    assert record.headers == (Header("headerKey", b"headerValue"),)
    assert record.key == b"key"
    assert record.value == b"Hello, this is a test."


def test_decodes_self_managed_event_without_arn() -> None:
    payload = _event_payload(eventSource="SelfManagedKafka")
    del payload["eventSourceArn"]

    event = decode_kafka_event(payload)

    assert event.event_source is EventSource.SELF_MANAGED_KAFKA
    assert event.event_source_arn is None


def test_rejects_unknown_event_source_naming_value() -> None:
    with pytest.raises(UnrecognizedVariantError) as exc_info:
        decode_kafka_event(_event_payload(eventSource="kafka"))

    assert exc_info.value.path == "eventSource"
    assert '"kafka"' in str(exc_info.value)


def test_explicit_null_arn_is_a_type_mismatch() -> None:
    with pytest.raises(TypeMismatchError) as exc_info:
        decode_kafka_event(_event_payload(eventSourceArn=None))

    assert exc_info.value.path == "eventSourceArn"


def test_empty_bootstrap_servers_string_splits_to_one_empty_server() -> None:
    event = decode_kafka_event(_event_payload(bootstrapServers=""))

    assert event.bootstrap_servers == ("",)


@pytest.mark.parametrize("field", ["eventSource", "bootstrapServers", "records"])
def test_missing_required_event_fields(field: str) -> None:
    payload = _event_payload()
    del payload[field]

    with pytest.raises(MissingFieldError) as exc_info:
        decode_kafka_event(payload)

    assert exc_info.value.path == field


def test_nested_record_errors_carry_full_path() -> None:
    payload = _event_payload(
        records={"mytopic-0": [_record_payload(), _record_payload(timestampType="SOMETIME")]}
    )

    with pytest.raises(UnrecognizedVariantError) as exc_info:
        decode_kafka_event(payload)

    assert exc_info.value.path == "records.mytopic-0[1].timestampType"
    assert '"SOMETIME"' in str(exc_info.value)


def test_records_must_be_object_of_arrays() -> None:
    with pytest.raises(TypeMismatchError) as exc_info:
        decode_kafka_event(_event_payload(records={"mytopic-0": {"topic": "x"}}))

    assert exc_info.value.path == "records.mytopic-0"


def test_top_level_must_be_object() -> None:
    with pytest.raises(TypeMismatchError):
        decode_kafka_event(["not", "an", "event"])


def test_record_key_and_value_are_optional_and_null_means_absent() -> None:
    payload = _record_payload(key=None)
    del payload["value"]

    record = decode_record(payload)

    assert record.key is None
    assert record.value is None


def test_record_decodes_malformed_base64_leniently() -> None:
    record = decode_record(_record_payload(key="not@@base64!!", value="aGk"))

    assert isinstance(record.key, bytes)
    assert record.value == b"hi"


@pytest.mark.parametrize(
    "field", ["topic", "partition", "offset", "headers", "timestampType", "timestamp"]
)
def test_missing_required_record_fields(field: str) -> None:
    payload = _record_payload()
    del payload[field]

    with pytest.raises(MissingFieldError) as exc_info:
        decode_record(payload)

    assert exc_info.value.path == field
    assert str(exc_info.value) == f"{field}: key {field!r} not found"


@pytest.mark.parametrize(
    ("field", "value", "error"),
    [
        ("partition", 2**31, IntegerOutOfRangeError),
        ("partition", "0", TypeMismatchError),
        ("offset", 2**63, IntegerOutOfRangeError),
        ("topic", 7, TypeMismatchError),
        ("headers", {}, TypeMismatchError),
        ("key", 12, TypeMismatchError),
    ],
)
def test_record_field_validation(field: str, value: Any, error: type[DecodeError]) -> None:
    with pytest.raises(error) as exc_info:
        decode_record(_record_payload(**{field: value}))

    assert exc_info.value.path == field


def test_decode_timestamp_variants() -> None:
    instant = datetime(2018, 12, 17, 22, 10, 50, 987000, tzinfo=UTC)

    assert decode_timestamp({"timestampType": "NO_TIMESTAMP_TYPE"}) == NoTimestampType()
    assert decode_timestamp(
        {"timestampType": "NO_TIMESTAMP_TYPE", "timestamp": "ignored"}
    ) == NoTimestampType()
    assert decode_timestamp(
        {"timestampType": "CREATE_TIME", "timestamp": 1545084650987}
    ) == CreateTime(instant)
    assert decode_timestamp(
        {"timestampType": "LOG_APPEND_TIME", "timestamp": 1545084650987}
    ) == LogAppendTime(instant)


def test_decode_timestamp_requires_value_for_instant_types() -> None:
    with pytest.raises(MissingFieldError) as exc_info:
        decode_timestamp({"timestampType": "LOG_APPEND_TIME"})

    assert exc_info.value.path == "timestamp"


@pytest.mark.parametrize("millis", [2**63, 1.5, 2**63 - 1])
def test_decode_timestamp_range_errors(millis: float) -> None:
    with pytest.raises(IntegerOutOfRangeError):
        decode_timestamp({"timestampType": "CREATE_TIME", "timestamp": millis})


def test_decode_header_single_key() -> None:
    assert decode_header({"k": [104, 105]}) == Header("k", b"hi")


@pytest.mark.parametrize(
    ("payload", "message"),
    [({}, "empty object"), ({"a": [1, 2], "b": [3, 4]}, "additional keys")],
)
def test_decode_header_rejects_wrong_key_count(payload: dict[str, Any], message: str) -> None:
    with pytest.raises(MalformedHeaderObjectError, match=message):
        decode_header(payload)


def test_decode_header_rejects_non_byte_values() -> None:
    with pytest.raises(IntegerOutOfRangeError) as exc_info:
        decode_header({"k": [104, 256]})

    assert exc_info.value.path == "k[1]"


def test_header_errors_inside_records_name_position() -> None:
    with pytest.raises(MalformedHeaderObjectError) as exc_info:
        decode_record(_record_payload(headers=[{"a": [1]}, {}]))

    assert exc_info.value.path == "headers[1]"


def test_encode_header_uses_byte_array() -> None:
    assert encode_header(Header("k", b"hi")) == {"k": [104, 105]}


def test_encode_timestamp_fields() -> None:
    instant = datetime(2018, 12, 17, 22, 10, 50, 987000, tzinfo=UTC)

    assert encode_timestamp_fields(NoTimestampType()) == {"timestampType": "NO_TIMESTAMP_TYPE"}
    assert encode_timestamp_fields(LogAppendTime(instant)) == {
        "timestampType": "LOG_APPEND_TIME",
        "timestamp": 1545084650987,
    }


def test_encode_record_omits_absent_key_and_value() -> None:
    payload = _record_payload(timestampType="NO_TIMESTAMP_TYPE")
    del payload["key"]
    del payload["value"]
    del payload["timestamp"]

    encoded = encode_record(decode_record(payload))

    assert encoded == {
        "offset": 15,
        "partition": 0,
        "topic": "mytopic",
        "headers": [{"headerKey": [104, 101, 97, 100, 101, 114, 86, 97, 108, 117, 101]}],
        "timestampType": "NO_TIMESTAMP_TYPE",
    }


def test_encode_event_matches_wire_payload() -> None:
    payload = _event_payload()

    assert encode_kafka_event(decode_kafka_event(copy.deepcopy(payload))) == payload


def test_encode_event_omits_absent_arn() -> None:
    payload = _event_payload(eventSource="SelfManagedKafka")
    del payload["eventSourceArn"]

    encoded = encode_kafka_event(decode_kafka_event(payload))

    assert "eventSourceArn" not in encoded
    assert encoded["bootstrapServers"] == payload["bootstrapServers"]


def test_loads_kafka_event_reports_invalid_json() -> None:
    with pytest.raises(DecodeError, match="Invalid JSON document"):
        loads_kafka_event("{not json")
