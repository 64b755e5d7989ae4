"""Multi-pattern marker substitution.

WHY: The transform should not care how markers are found. Keeping the
substitution engine behind a one-method interface lets tests swap in a
fake and keeps the matching rules in one place.

HOW: PatternReplacer is the interface: ``replace(text, patterns)``
returns the rewritten text and the number of replacements. The default
engine, PrefixPatternReplacer, prepends a shared prefix to every pattern,
joins the escaped markers into a single regular expression and rewrites
the text in one pass.

RULES:
- Markers are matched literally; regex metacharacters in names are escaped
- Replacement snippets are inserted literally (backslashes stay as-is)
- When two patterns share a marker the first one configured wins
- No patterns means the text comes back untouched with a count of 0
- Unknown markers are left verbatim
"""

from __future__ import annotations

import re
from typing import Dict, Protocol, Sequence, Tuple

from cdnfailover.config import MARKER_PREFIX
from cdnfailover.core.models import MarkerPattern


class PatternReplacer(Protocol):
    """Anything that can substitute marker patterns in a string."""

    def replace(self, text: str, patterns: Sequence[MarkerPattern]) -> Tuple[str, int]:
        ...


class PrefixPatternReplacer:
    """Single-pass replacer for markers sharing a common prefix.

    Compiled expressions are cached per pattern sequence, so a transform
    reusing the same compiled patterns for every file compiles only once.
    """

    def __init__(self, prefix: str = MARKER_PREFIX) -> None:
        self.prefix = prefix
        self._cache: Dict[Tuple[MarkerPattern, ...], Tuple["re.Pattern[str]", Dict[str, str]]] = {}

    def _compile(self, patterns: Sequence[MarkerPattern]) -> Tuple["re.Pattern[str]", Dict[str, str]]:
        key = tuple(patterns)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        lookup: Dict[str, str] = {}
        for pattern in patterns:
            # First configured pattern wins on duplicate markers
            lookup.setdefault(self.prefix + pattern.match, pattern.replacement)

        # Longest first so a marker never shadows a longer one it prefixes
        alternatives = sorted(lookup, key=len, reverse=True)
        regex = re.compile("|".join(re.escape(marker) for marker in alternatives))
        self._cache[key] = (regex, lookup)
        return regex, lookup

    def replace(self, text: str, patterns: Sequence[MarkerPattern]) -> Tuple[str, int]:
        if not patterns:
            return text, 0

        regex, lookup = self._compile(patterns)
        return regex.subn(lambda match: lookup[match.group(0)], text)
