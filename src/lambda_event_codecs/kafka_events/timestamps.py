"""Millisecond epoch conversions for Kafka timestamps."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MICROSECOND = timedelta(microseconds=1)


def int64_to_utc_time(millis: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime.

    Splits with floor division, so ``-1500`` becomes ``-2`` seconds plus
    ``500`` milliseconds.

    Raises:
      OverflowError: If the instant falls outside the range `datetime` supports.
    """
    seconds, remainder = divmod(millis, 1000)
    return EPOCH + timedelta(seconds=seconds, milliseconds=remainder)


def utc_time_to_int64(instant: datetime) -> int:
    """Convert a datetime to epoch milliseconds, truncating toward zero.

    This is not an exact inverse of :func:`int64_to_utc_time` for negative
    instants with sub-millisecond precision: ``-1.0005s`` maps to ``-1000``,
    whereas floor rounding would give ``-1001``. Naive datetimes are read as
    UTC.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    micros = (instant - EPOCH) // _ONE_MICROSECOND
    whole_millis = abs(micros) // 1000
    return whole_millis if micros >= 0 else -whole_millis
