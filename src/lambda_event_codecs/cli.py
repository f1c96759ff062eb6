"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from lambda_event_codecs.configuration import (
    DEFAULT_CONFIG_FILENAME,
    CodecSettings,
    ConfigurationError,
    load_settings,
    write_placeholder_settings,
)
from lambda_event_codecs.decoding import DecodeError
from lambda_event_codecs.kafka_events import (
    VALUE_FORMATS,
    KafkaEvent,
    encode_kafka_event,
    loads_kafka_event,
    value_transform,
)
from lambda_event_codecs.proxy_responses import (
    ProxyBody,
    dumps_proxy_response,
    response,
)

_LOGGER = logging.getLogger(__name__)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="lambda-event-codecs")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """Encode and decode AWS Lambda Kafka events and proxy responses."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr
        )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML settings template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML settings file with guidance comments."""
    try:
        resolved_output = write_placeholder_settings(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="decode-kafka")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a Lambda Kafka event JSON file",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to a YAML settings file",
)
@click.option(
    "--value-format",
    type=click.Choice(VALUE_FORMATS),
    required=False,
    help="How record values are printed (overrides kafka.value_format)",
)
def decode_kafka(input_path: str, config_path: str | None, value_format: str | None) -> None:
    """Validate a Kafka event file and print it normalized."""
    settings = _load_settings(config_path)
    try:
        event = loads_kafka_event(Path(input_path).read_bytes())
    except OSError as exc:
        raise CliError(str(exc)) from exc
    except DecodeError as exc:
        raise CliError(f"Invalid Kafka event: {exc}") from exc
    try:
        rendered = _render_event(event, value_format or settings.kafka.value_format)
    except ValueError as exc:
        raise CliError(f"Could not render record values: {exc}") from exc
    click.echo(json.dumps(rendered, indent=settings.output.indent, ensure_ascii=False))


@cli.command(name="encode-response")
@click.option("--status", type=int, required=False, help="HTTP status code")
@click.option("--text", "text_body", required=False, help="Plain text body")
@click.option(
    "--json",
    "json_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to a JSON document used as the body",
)
@click.option(
    "--binary",
    "binary_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to a file sent as a base64 body",
)
@click.option("--content-type", required=False, help="Content type of the --binary body")
@click.option("--header", "added_headers", multiple=True, help="NAME:VALUE header to add")
@click.option("--set-header", "set_headers", multiple=True, help="NAME:VALUE header to replace")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to a YAML settings file",
)
def encode_response(  # pylint: disable=too-many-arguments
    status: int | None,
    text_body: str | None,
    json_path: str | None,
    binary_path: str | None,
    content_type: str | None,
    added_headers: tuple[str, ...],
    set_headers: tuple[str, ...],
    config_path: str | None,
) -> None:
    """Print the proxy integration response JSON for a body and headers."""
    settings = _load_settings(config_path)
    body = _build_body(text_body, json_path, binary_path, content_type)
    try:
        proxy_response = response(
            status if status is not None else settings.response.status, body
        )
    except ValueError as exc:
        raise CliError(f"Unknown HTTP status: {status}") from exc
    for name, values in settings.response.headers.items():
        for value in values:
            proxy_response = proxy_response.add_header(name, value)
    for raw_header in added_headers:
        proxy_response = proxy_response.add_header(*_split_header(raw_header))
    for raw_header in set_headers:
        proxy_response = proxy_response.set_header(*_split_header(raw_header))
    click.echo(dumps_proxy_response(proxy_response, indent=settings.output.indent))


def _load_settings(config_path: str | None) -> CodecSettings:
    try:
        return load_settings(config_path)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc


def _render_event(event: KafkaEvent[bytes], value_format: str) -> dict[str, Any]:
    transform = value_transform(value_format)
    rendered = encode_kafka_event(event)
    for name, records in event.records.items():
        for encoded, record in zip(rendered["records"][name], records):
            if record.value is not None:
                encoded["value"] = transform(record.value)
    _LOGGER.debug("Rendered record values as %s", value_format)
    return rendered


def _build_body(
    text_body: str | None,
    json_path: str | None,
    binary_path: str | None,
    content_type: str | None,
) -> ProxyBody:
    provided = [option for option in (text_body, json_path, binary_path) if option is not None]
    if len(provided) != 1:
        raise CliError("Exactly one of --text, --json or --binary must be provided.")
    try:
        if text_body is not None:
            return ProxyBody.text_plain(text_body)
        if json_path is not None:
            return ProxyBody.application_json(
                json.loads(Path(json_path).read_text(encoding="utf-8"))
            )
        if not content_type:
            raise CliError("--content-type is required with --binary.")
        return ProxyBody.generic_binary(content_type, Path(str(binary_path)).read_bytes())
    except (OSError, ValueError) as exc:
        raise CliError(str(exc)) from exc


def _split_header(raw_header: str) -> tuple[str, str]:
    name, separator, value = raw_header.partition(":")
    if not separator or not name.strip():
        raise CliError(f"Header must look like NAME:VALUE, got: {raw_header}")
    return name.strip(), value.strip()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
