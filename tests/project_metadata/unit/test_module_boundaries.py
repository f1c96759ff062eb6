"""Boundary tests keeping the two codecs independent of each other."""

from __future__ import annotations

from pathlib import Path


def _package_root() -> Path:
    return Path(__file__).resolve().parents[3] / "src" / "lambda_event_codecs"


def _assert_no_imports(directory: Path, forbidden_fragment: str) -> None:
    for module_path in sorted(directory.glob("*.py")):
        text = module_path.read_text(encoding="utf-8")
        assert forbidden_fragment not in text, (
            f"Forbidden codec dependency in {module_path}: {forbidden_fragment}"
        )


def test_kafka_codec_does_not_import_proxy_codec() -> None:
    _assert_no_imports(_package_root() / "kafka_events", "lambda_event_codecs.proxy_responses")


def test_proxy_codec_does_not_import_kafka_codec() -> None:
    _assert_no_imports(_package_root() / "proxy_responses", "lambda_event_codecs.kafka_events")


def test_decoding_primitives_do_not_import_codecs() -> None:
    for fragment in ("lambda_event_codecs.kafka_events", "lambda_event_codecs.proxy_responses"):
        _assert_no_imports(_package_root() / "decoding", fragment)
