"""Settings loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from http import HTTPStatus
from pathlib import Path
from typing import Any

import yaml

from lambda_event_codecs.kafka_events.value_formats import VALUE_FORMATS

from .runtime_settings import CodecSettings, KafkaDecodeSettings, OutputSettings, ResponseDefaults


class ConfigurationError(Exception):
    """Raised when the settings file is invalid."""


def load_settings(config_path: Path | str | None) -> CodecSettings:
    """Load and validate a settings file; `None` yields the defaults."""
    if config_path is None:
        return CodecSettings(path=None)
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Settings file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse settings file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Settings root must be a mapping.")

    return CodecSettings(
        path=path,
        kafka=_parse_kafka_section(parsed.get("kafka")),
        output=_parse_output_section(parsed.get("output")),
        response=_parse_response_section(parsed.get("response")),
    )


def _parse_kafka_section(value: Any) -> KafkaDecodeSettings:
    section = _optional_mapping(value, "kafka")
    value_format = _require_non_empty_string(
        section.get("value_format", "raw"), "kafka.value_format"
    ).lower()
    if value_format not in VALUE_FORMATS:
        raise ConfigurationError(
            f"kafka.value_format must be one of: {', '.join(VALUE_FORMATS)}."
        )
    return KafkaDecodeSettings(value_format=value_format)


def _parse_output_section(value: Any) -> OutputSettings:
    section = _optional_mapping(value, "output")
    if "indent" in section and section["indent"] is None:
        return OutputSettings(indent=None)
    indent = _require_positive_int(section.get("indent", 2), "output.indent")
    return OutputSettings(indent=indent)


def _parse_response_section(value: Any) -> ResponseDefaults:
    section = _optional_mapping(value, "response")
    status_code = _require_positive_int(section.get("status", 200), "response.status")
    try:
        status = HTTPStatus(status_code)
    except ValueError as exc:
        raise ConfigurationError(
            f"response.status {status_code} is not a known HTTP status."
        ) from exc
    headers_section = _optional_mapping(section.get("headers"), "response.headers")
    headers = {
        str(name): _normalize_string_sequence(values, f"response.headers.{name}")
        for name, values in headers_section.items()
    }
    return ResponseDefaults(status=status, headers=headers)


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            normalized.append(item)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Settings section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
