"""CDN failover: rewrite HTML templates to load assets from a CDN with a local fallback.

WHY: Sites that pull jQuery, Bootstrap and friends from a public CDN go
blank when that CDN is down or blocked. Templates mark where each asset
belongs with ``<!-- cdnfailover:NAME -->``; at build time this package
replaces every marker with markup that tries the CDN and falls back to
the copy bundled with the site.

HOW: Three stages: compile (options → rendered snippets per marker),
substitute (markers → snippets in each file), write. cdnfailover()
runs the first stage and returns the transform for the second; the CLI
adds reading and writing files around it.

RULES:
- Snippets are rendered once per build and shared by every file
- Unknown markers are left in place
- Streamed file payloads are rejected per file, not per build
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from cdnfailover.config import (
    DEFAULT_USE_LOCAL_FILES_ONLY,
    DEFAULT_VERBOSE,
    parse_options,
    resolve_flag,
)
from cdnfailover.core.compiler import compile_patterns
from cdnfailover.core.replacer import PatternReplacer
from cdnfailover.core.transform import FailoverTransform
from cdnfailover.options import FailoverOptions

__version__ = "0.1.0"

__all__ = [
    "cdnfailover",
    "FailoverOptions",
    "FailoverTransform",
]


def cdnfailover(
    options: Union[FailoverOptions, Dict[str, Any], None] = None,
    replacer: Optional[PatternReplacer] = None,
) -> FailoverTransform:
    """Build the marker-substitution step for one build.

    Args:
        options: A FailoverOptions model or the equivalent plain dict.
                 None means no assets (every file passes through unchanged).
        replacer: Optional substitution engine; defaults to the built-in
                  prefix replacer.

    Returns:
        A FailoverTransform ready to be applied to file records.

    Raises:
        ConfigError: If a dict does not match the options schema.
    """
    if not isinstance(options, FailoverOptions):
        options = parse_options(options)

    verbose = resolve_flag(options.verbose, DEFAULT_VERBOSE)
    local_only = resolve_flag(options.uselocalfilesonly, DEFAULT_USE_LOCAL_FILES_ONLY)

    compiled = compile_patterns(options.entries(), local_only=local_only, verbose=verbose)
    return FailoverTransform(compiled, replacer=replacer, verbose=verbose)
