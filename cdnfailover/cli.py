"""Command-line interface for the CDN failover build step.

WHY: Most sites run this as one step of a shell or Makefile build:
read the templates, replace the markers, write the result into the
output tree. The CLI wires the options file, the transform and the file
source/sink together behind a single command.

HOW: Uses argparse to accept input files, the options file, an output
directory and flag overrides. Options come from the JSON file, flags
override them, and unset values fall back to the .env/environment
defaults. Files are read buffered, run through the transform and written
to --output-dir (keeping their path below --base) or to stdout.

RULES:
- Positional arguments: template files; "-" reads stdin
- --config defaults to $CDNFAILOVER_CONFIG or ./cdnfailover.json
- --verbose/--local-only override the options file when given
- Status output goes to stderr; file content goes to stdout only when no
  --output-dir is given
- Exit codes: 0 success, 1 config/input/file errors, 2 usage errors
"""

from __future__ import annotations

import argparse
import codecs
import logging
import sys
from pathlib import Path
from typing import Iterator, List, Optional

from cdnfailover import __version__, cdnfailover
from cdnfailover.config import DEFAULT_CONFIG_FILENAME, DEFAULT_VERBOSE, load_options, resolve_flag
from cdnfailover.core.files import FileRecord, read_files, write_file
from cdnfailover.errors import ConfigError, PluginError

STDIN_PATH = "-"


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed immediately."""
    print(msg, file=sys.stderr, flush=True)


def _read_inputs(inputs: List[str], base: Optional[str]) -> Iterator[FileRecord]:
    """Yield a buffered FileRecord per input, reading stdin for "-"."""
    for item in inputs:
        if item == STDIN_PATH:
            yield FileRecord(path=Path("stdin.html"), contents=sys.stdin.buffer.read())
        else:
            yield from read_files([item], base=base)


def _run(args: argparse.Namespace) -> int:
    """Execute the build step. Returns the process exit code."""
    try:
        options = load_options(args.config)
    except ConfigError as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1

    overrides = {}
    if args.verbose is not None:
        overrides["verbose"] = args.verbose
    if args.local_only is not None:
        overrides["uselocalfilesonly"] = args.local_only
    if overrides:
        options = options.model_copy(update=overrides)

    verbose = resolve_flag(options.verbose, DEFAULT_VERBOSE)
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
    )

    output_dir: Optional[Path] = None
    if args.output_dir:
        output_dir = Path(args.output_dir).resolve()

    try:
        codecs.lookup(args.encoding)
    except LookupError:
        print("Error: Unknown encoding: {}".format(args.encoding), file=sys.stderr)
        return 1

    transform = cdnfailover(options)
    transform.encoding = args.encoding

    errors: List[PluginError] = []

    def on_error(error: PluginError) -> None:
        errors.append(error)
        print("Error: {}".format(error), file=sys.stderr)

    try:
        records = list(_read_inputs(args.inputs, args.base))
    except FileNotFoundError as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1

    originals = {id(record): record.contents for record in records}
    processed = 0
    changed = 0
    for record in transform(records, on_error=on_error):
        processed += 1
        if record.contents is not originals[id(record)]:
            changed += 1

        if output_dir is not None:
            saved = write_file(record, output_dir)
            if saved is not None:
                _status("  Saved: {}".format(saved))
        elif record.is_buffered_payload():
            sys.stdout.flush()
            sys.stdout.buffer.write(bytes(record.contents))
            sys.stdout.buffer.flush()

    _status("Processed {} file(s), {} changed".format(processed, changed))
    return 1 if errors else 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="cdnfailover",
        description="Replace <!-- cdnfailover:NAME --> markers in HTML templates with "
                    "tags that load assets from a CDN and fall back to local copies.",
    )

    parser.add_argument(
        "inputs",
        nargs="+",
        help="Template files to process. Use '-' to read from stdin.",
    )

    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILENAME,
        help="Path to the JSON options file (default: %(default)s).",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to write processed files to (default: print to stdout).",
    )

    parser.add_argument(
        "--base",
        default=None,
        help="Base directory; output keeps each file's path relative to it "
             "(default: the file's own directory).",
    )

    parser.add_argument(
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Log processed entry names and replacement counts.",
    )

    parser.add_argument(
        "--local-only",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Reference the local copies only, without CDN tags (offline builds).",
    )

    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="Text encoding of the templates (default: %(default)s).",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``cdnfailover`` and ``python -m cdnfailover``.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    sys.exit(_run(args))


if __name__ == "__main__":
    main()
