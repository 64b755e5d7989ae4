"""Compile asset entries into marker patterns.

WHY: Every file in a build is scanned for the same markers, so the
snippets are rendered once up front instead of per file. The compiler
also decides which builder handles each entry.

HOW: Walk the entries in configuration order. The position of an entry
in the list is its ordinal, so skipped entries still use up a number and
ordinals stay stable when an entry gains or loses its name. Entries whose
CDN URL ends in "css" go to the stylesheet builder; everything else is
treated as a script.

RULES:
- Entries without a name are skipped silently
- Marker text is "<name> -->"; the "<!-- cdnfailover:" prefix belongs
  to the replacer
- Pattern order follows configuration order
- The summary log line is emitted only in verbose mode
"""

from __future__ import annotations

import logging
from typing import Iterable

from cdnfailover.config import MARKER_SUFFIX, log_verbose
from cdnfailover.core.models import AssetEntry, CompiledPatterns, MarkerPattern
from cdnfailover.core.snippets import build_script_snippet, build_style_snippet

logger = logging.getLogger(__name__)


def marker_for(name: str) -> str:
    """Return the marker text for an entry name (without the shared prefix)."""
    return name + MARKER_SUFFIX


def render_entry(entry: AssetEntry, ordinal: int, local_only: bool = False) -> str:
    """Render one entry with the builder its CDN URL selects."""
    if entry.is_stylesheet:
        return build_style_snippet(entry, local_only)
    return build_script_snippet(entry, ordinal, local_only)


def compile_patterns(
    entries: Iterable[AssetEntry],
    local_only: bool = False,
    verbose: bool = False,
) -> CompiledPatterns:
    """Turn asset entries into ordered (marker, snippet) pairs.

    Args:
        entries: Asset entries in configuration order.
        local_only: Render local-only snippets (no CDN reference).
        verbose: Log a summary of the processed names.

    Returns:
        CompiledPatterns with one pattern per named entry.
    """
    patterns: list[MarkerPattern] = []
    names: list[str] = []

    for ordinal, entry in enumerate(entries):
        if not entry.name:
            continue
        patterns.append(
            MarkerPattern(
                match=marker_for(entry.name),
                replacement=render_entry(entry, ordinal, local_only),
            )
        )
        names.append(entry.name)

    log_verbose(
        logger,
        verbose,
        "options has %d entries with nonempty name:%s",
        len(names),
        ",".join(names),
    )
    return CompiledPatterns(patterns=tuple(patterns), names=tuple(names))
