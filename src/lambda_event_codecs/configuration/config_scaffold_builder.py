"""Settings scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "lambda-event-codecs.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Settings for the lambda-event-codecs command line.
# Every key is optional; delete the ones you do not need.

kafka:
  # How decode-kafka renders record values: raw (base64), utf8 or json.
  value_format: raw

output:
  # Indentation of printed JSON. Use null for compact output.
  indent: 2

response:
  # Status used by encode-response when --status is not given.
  status: 200
  # Headers added to every encoded response, before command line headers.
  headers:
    # X-Powered-By:
    #   - lambda-event-codecs
"""


def build_placeholder_settings() -> str:
    """Build a YAML settings template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_settings(output_path: Path | str) -> Path:
    """Write the settings template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Settings file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_settings(), encoding="utf-8")
    return destination.resolve()
