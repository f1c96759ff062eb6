"""Module entry point for `python -m lambda_event_codecs`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
