"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from http import HTTPStatus
from pathlib import Path


@dataclass(frozen=True)
class KafkaDecodeSettings:
    """How decoded record values are rendered."""

    value_format: str = "raw"


@dataclass(frozen=True)
class OutputSettings:
    """JSON output layout."""

    indent: int | None = 2


@dataclass(frozen=True)
class ResponseDefaults:
    """Defaults applied to every encoded proxy response."""

    status: HTTPStatus = HTTPStatus.OK
    headers: Mapping[str, tuple[str, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class CodecSettings:
    """Top-level settings aggregate."""

    path: Path | None
    kafka: KafkaDecodeSettings = field(default_factory=KafkaDecodeSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    response: ResponseDefaults = field(default_factory=ResponseDefaults)
