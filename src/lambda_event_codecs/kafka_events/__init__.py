"""Kafka event domain exports."""

from .client_bridge import (
    ClientMessageError,
    event_from_messages,
    record_from_message,
    timestamp_from_client,
    timestamp_to_client,
)
from .event_codec import (
    decode_header,
    decode_kafka_event,
    decode_record,
    decode_timestamp,
    dumps_kafka_event,
    encode_header,
    encode_kafka_event,
    encode_record,
    encode_timestamp_fields,
    loads_kafka_event,
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
from .value_formats import VALUE_FORMATS, json_value, raw_value, utf8_value, value_transform

__all__ = [
    "ClientMessageError",
    "event_from_messages",
    "record_from_message",
    "timestamp_from_client",
    "timestamp_to_client",
    "decode_header",
    "decode_kafka_event",
    "decode_record",
    "decode_timestamp",
    "dumps_kafka_event",
    "encode_header",
    "encode_kafka_event",
    "encode_record",
    "encode_timestamp_fields",
    "loads_kafka_event",
    "CreateTime",
    "EventSource",
    "Header",
    "KafkaEvent",
    "LogAppendTime",
    "NoTimestampType",
    "Record",
    "Timestamp",
    "TimestampType",
    "int64_to_utc_time",
    "utc_time_to_int64",
    "VALUE_FORMATS",
    "json_value",
    "raw_value",
    "utf8_value",
    "value_transform",
]
