"""Data records shared by the compiler, the replacer and the transform.

WHY: The options file is loose JSON, but the builders and the compiler
need a small, fixed set of fields with predictable types. These
dataclasses are the contract between configuration loading and snippet
generation.

HOW: Three frozen dataclasses:
  AssetEntry        : one configured resource (CDN URL + local fallback)
  MarkerPattern     : a marker token paired with its rendered snippet
  CompiledPatterns  : the ordered patterns plus the names they came from

RULES:
- Records are created once per build and never mutated
- cdn_url and local_path are always strings (empty when unset)
- integrity and cross_origin are None when the entry does not set them
- MarkerPattern.match excludes the shared marker prefix
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AssetEntry:
    """One configured asset.

    RULES:
    - name: identifier used to build the marker; empty means "skip"
    - cdn_url: remote URL tried first; a trailing "css" selects the
      stylesheet builder
    - local_path: bundled copy served when the CDN load fails
    - integrity: optional subresource-integrity hash
    - cross_origin: optional CORS attribute value
    """

    name: str
    cdn_url: str = ""
    local_path: str = ""
    integrity: str | None = None
    cross_origin: str | None = None

    @property
    def is_stylesheet(self) -> bool:
        return self.cdn_url.endswith("css")


@dataclass(frozen=True)
class MarkerPattern:
    """A marker token and the snippet that replaces it.

    Attributes:
        match: Marker text after the shared prefix, e.g. ``"jquery -->"``.
        replacement: Fully rendered HTML snippet.
    """

    match: str
    replacement: str


@dataclass(frozen=True)
class CompiledPatterns:
    """Result of compiling a list of asset entries.

    Attributes:
        patterns: Marker patterns in configuration order.
        names: Names of the entries that produced a pattern, for diagnostics.
    """

    patterns: tuple[MarkerPattern, ...] = field(default_factory=tuple)
    names: tuple[str, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.patterns)
