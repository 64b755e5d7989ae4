"""Per-file marker substitution step.

WHY: This is the step a build pipeline runs over its HTML templates. It
applies the precompiled marker patterns to each file and passes the file
on, so it can sit between any source and sink without knowing where the
files come from or go to.

HOW: transform_file() handles one record:
  empty payload    → returned unchanged
  streamed payload → UnsupportedInputKind
  buffered payload → decoded, substituted, re-encoded only if a marker
                     was replaced
Calling the transform with an iterable of records runs transform_file()
on each, yields every processed record once, and hands per-file errors to
an ``on_error`` callback instead of letting them escape the loop.

RULES:
- Compiled patterns are shared read-only by every file
- Content is rewritten only when at least one marker was replaced
- Bytes that do not decode are carried through unchanged
- A streamed file is not forwarded; its handle is closed, the error goes
  to on_error and the remaining files are still processed
- Without on_error, errors are logged and processing continues
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, Optional, Tuple

from cdnfailover.config import PLUGIN_NAME, log_verbose
from cdnfailover.core.files import FileRecord
from cdnfailover.core.models import CompiledPatterns
from cdnfailover.core.replacer import PatternReplacer, PrefixPatternReplacer
from cdnfailover.errors import PluginError, UnsupportedInputKind

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[PluginError], None]


def _log_error(error: PluginError) -> None:
    logger.error("%s", error)


class FailoverTransform:
    """Apply compiled CDN failover patterns to files in a pipeline.

    Args:
        compiled: Patterns produced by compile_patterns().
        replacer: Substitution engine; defaults to PrefixPatternReplacer.
        verbose: Log replacement counts.
        encoding: Text encoding of buffered payloads.
    """

    def __init__(
        self,
        compiled: CompiledPatterns,
        replacer: Optional[PatternReplacer] = None,
        verbose: bool = False,
        encoding: str = "utf-8",
    ) -> None:
        self.compiled = compiled
        self.replacer = replacer if replacer is not None else PrefixPatternReplacer()
        self.verbose = verbose
        self.encoding = encoding

    def substitute(self, text: str) -> Tuple[str, int]:
        """Replace every known marker in ``text``; return (text, count)."""
        return self.replacer.replace(text, self.compiled.patterns)

    def transform_file(self, record: FileRecord) -> FileRecord:
        """Process one record in place and return it.

        Raises:
            UnsupportedInputKind: If the record carries a streamed payload.
        """
        if record.is_empty_payload():
            return record

        if record.is_streamed_payload():
            raise UnsupportedInputKind(PLUGIN_NAME, record.path)

        # Undecodable bytes round-trip unchanged
        text = bytes(record.contents).decode(self.encoding, errors="surrogateescape")
        content, count = self.substitute(text)
        if count:
            log_verbose(logger, self.verbose, "successfully replaced %d patterns", count)
            record.contents = content.encode(self.encoding, errors="surrogateescape")
        return record

    def __call__(
        self,
        records: Iterable[FileRecord],
        on_error: Optional[ErrorHandler] = None,
    ) -> Iterator[FileRecord]:
        """Run transform_file() over a stream of records.

        Each processed record is yielded exactly once, in input order. A
        record that fails with a PluginError is not yielded; its streamed
        payload is closed and the error is passed to ``on_error``.

        Without ``on_error`` the error is only logged at ERROR level and the
        file is silently missing from the output. Callers that must fail
        the build on a rejected file should pass a handler that records or
        raises.
        """
        handler = on_error if on_error is not None else _log_error
        for record in records:
            try:
                processed = self.transform_file(record)
            except PluginError as exc:
                if record.is_streamed_payload() and hasattr(record.contents, "close"):
                    record.contents.close()
                handler(exc)
                continue
            yield processed
