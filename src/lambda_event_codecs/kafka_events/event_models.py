"""Kafka event entities.

Lambda treats Amazon MSK and self-managed Apache Kafka as different event
sources, but both deliver the same batch shape: records grouped by
``"<topic>-<partition>"``, each carrying base64 key/value bytes, byte-array
headers and a timestamp tagged with its Kafka timestamp type.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

ValueT = TypeVar("ValueT")
MappedT = TypeVar("MappedT")


class EventSource(str, Enum):
    """Event source mapping that delivered the batch."""

    AWS_KAFKA = "aws:kafka"
    SELF_MANAGED_KAFKA = "SelfManagedKafka"


class TimestampType(str, Enum):
    """Kafka timestamp types, mirroring the Java client's enum."""

    NO_TIMESTAMP_TYPE = "NO_TIMESTAMP_TYPE"
    CREATE_TIME = "CREATE_TIME"
    LOG_APPEND_TIME = "LOG_APPEND_TIME"


@dataclass(frozen=True)
class NoTimestampType:
    """Record without a timestamp."""

    @property
    def timestamp_type(self) -> TimestampType:
        return TimestampType.NO_TIMESTAMP_TYPE


@dataclass(frozen=True)
class CreateTime:
    """Timestamp assigned by the producer."""

    at: datetime

    @property
    def timestamp_type(self) -> TimestampType:
        return TimestampType.CREATE_TIME


@dataclass(frozen=True)
class LogAppendTime:
    """Timestamp assigned by the broker when the record was appended."""

    at: datetime

    @property
    def timestamp_type(self) -> TimestampType:
        return TimestampType.LOG_APPEND_TIME


Timestamp = NoTimestampType | CreateTime | LogAppendTime


@dataclass(frozen=True)
class Header:
    """One record header. Keys may repeat within a record."""

    key: str
    value: bytes


@dataclass(frozen=True)
class Record(Generic[ValueT]):  # pylint: disable=too-many-instance-attributes
    """Kafka record; `value` is raw bytes straight after decoding."""

    topic: str
    partition: int
    offset: int
    timestamp: Timestamp
    headers: tuple[Header, ...]
    key: bytes | None
    value: ValueT | None

    def map_value(self, transform: Callable[[ValueT], MappedT]) -> Record[MappedT]:
        """Return a copy with `transform` applied to the value, when present."""
        return Record(
            topic=self.topic,
            partition=self.partition,
            offset=self.offset,
            timestamp=self.timestamp,
            headers=self.headers,
            key=self.key,
            value=None if self.value is None else transform(self.value),
        )

    def header_values(self, key: str) -> tuple[bytes, ...]:
        """Return every header value stored under `key`, in record order."""
        return tuple(header.value for header in self.headers if header.key == key)


@dataclass(frozen=True)
class KafkaEvent(Generic[ValueT]):
    """Batch of Kafka records delivered to one Lambda invocation."""

    event_source: EventSource
    event_source_arn: str | None
    bootstrap_servers: tuple[str, ...]
    records: Mapping[str, tuple[Record[ValueT], ...]]

    def __post_init__(self) -> None:
        if not self.bootstrap_servers:
            raise ValueError("KafkaEvent requires at least one bootstrap server.")

    def iter_records(self) -> Iterator[Record[ValueT]]:
        """Yield every record, partition by partition in mapping order."""
        for partition_records in self.records.values():
            yield from partition_records

    def map_values(self, transform: Callable[[ValueT], MappedT]) -> KafkaEvent[MappedT]:
        """Return a copy with `transform` applied to every present record value."""
        return KafkaEvent(
            event_source=self.event_source,
            event_source_arn=self.event_source_arn,
            bootstrap_servers=self.bootstrap_servers,
            records={
                name: tuple(record.map_value(transform) for record in partition_records)
                for name, partition_records in self.records.items()
            },
        )
