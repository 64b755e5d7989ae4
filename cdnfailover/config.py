"""Configuration constants, .env defaults and options-file loading.

WHY: Marker syntax, the plugin name and the environment defaults are
shared by the compiler, the replacer, the transform and the CLI. Keeping
them here makes the marker format easy to find and the defaults easy to
override per machine (e.g. a CI job that always builds offline).

HOW: python-dotenv loads the .env file on import. Constants are plain
module-level strings. load_options() reads a JSON options file, validates
it against options_schema.json with jsonschema and returns the parsed
FailoverOptions model. log_verbose() is the single place verbose
diagnostics are emitted from.

RULES:
- Markers look like "<!-- cdnfailover:NAME -->"
- CDNFAILOVER_CONFIG names the default options file (cdnfailover.json)
- CDNFAILOVER_VERBOSE / CDNFAILOVER_USE_LOCAL_FILES_ONLY accept "true"
  (case-insensitive); anything else is false
- Invalid options files raise ConfigError naming the offending location
- Verbose messages are prefixed with "cdnfailover:"
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import jsonschema
from dotenv import load_dotenv

from cdnfailover.errors import ConfigError
from cdnfailover.options import FailoverOptions

# Load .env from the project root (where the build is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Marker syntax
# ---------------------------------------------------------------------------

PLUGIN_NAME = "cdnfailover"

MARKER_PREFIX = "<!-- cdnfailover:"
"""Opening delimiter shared by every marker; supplied by the replacer."""

MARKER_SUFFIX = " -->"
"""Closing delimiter appended to each entry name by the compiler."""

# ---------------------------------------------------------------------------
# Environment defaults
# ---------------------------------------------------------------------------

DEFAULT_CONFIG_FILENAME = os.getenv("CDNFAILOVER_CONFIG", "cdnfailover.json")
DEFAULT_VERBOSE = os.getenv("CDNFAILOVER_VERBOSE", "false").lower() == "true"
DEFAULT_USE_LOCAL_FILES_ONLY = (
    os.getenv("CDNFAILOVER_USE_LOCAL_FILES_ONLY", "false").lower() == "true"
)

# ---------------------------------------------------------------------------
# Options file
# ---------------------------------------------------------------------------

_SCHEMA_PATH = Path(__file__).resolve().parent / "options_schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def _get_schema() -> dict:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def validate_options(data: Any) -> None:
    """Validate a raw options object against the packaged JSON schema.

    Raises:
        ConfigError: If the object does not match the schema. The message
                     names the JSON location of the first problem.
    """
    try:
        jsonschema.validate(instance=data, schema=_get_schema())
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise ConfigError("Invalid options at {}: {}".format(location, exc.message)) from exc


def parse_options(data: Any) -> FailoverOptions:
    """Validate a raw options object and return the typed model."""
    if data is None:
        return FailoverOptions()
    validate_options(data)
    return FailoverOptions.model_validate(data)


def load_options(path: str | Path) -> FailoverOptions:
    """Load build options from a JSON file.

    Args:
        path: Path to the options file.

    Returns:
        The parsed options.

    Raises:
        ConfigError: If the file is missing, is not valid JSON, or does
                     not match the options schema.
    """
    options_path = Path(path)
    try:
        raw = options_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError("Options file not found: {}".format(options_path)) from None

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(
            "Options file {} is not valid JSON: {}".format(options_path, exc)
        ) from exc

    return parse_options(data)


def resolve_flag(value: Optional[bool], default: bool) -> bool:
    """Return ``value`` unless it is unset, in which case ``default``."""
    return default if value is None else value


def log_verbose(logger: logging.Logger, verbose: bool, msg: str, *args: Any) -> None:
    """Log an info message prefixed with the plugin name, in verbose mode only."""
    if verbose:
        logger.info("%s:" + msg, PLUGIN_NAME, *args)
