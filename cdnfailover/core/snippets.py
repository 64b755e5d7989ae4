"""HTML snippet builders for script and stylesheet assets.

WHY: A page that loads jQuery or Bootstrap from a CDN breaks when the
CDN is unreachable. Each marker in a template is replaced with a snippet
that tries the CDN first and, when the browser reports a failure, loads
the copy bundled with the site instead. All detection happens in the
browser at page-load time; this module only renders the markup.

HOW: Both builders fill fixed templates. The only variable parts are the
URLs, the optional ``integrity``/``crossorigin`` attributes and, for
scripts, the ordinal that namespaces the failure flag.

  Script:     <script src=CDN onerror=...> sets ``cdnfailover._<ordinal>``
              on a lazily created global when the load fails. A second
              inline <script> checks that flag and document.write()s a
              <script> tag for the local copy.
  Stylesheet: <link href=CDN> is followed by an inline <script> that looks
              at the last entry of ``document.styleSheets``. A missing
              entry, an ``href`` that differs from the CDN URL, or an entry
              with no parsed rules (checked through both ``cssRules`` and
              the legacy ``rules``) appends a <link> for the local copy to
              ``document.head``.

RULES:
- local_only=True renders a plain tag for the local copy and nothing else
- integrity is rendered before crossorigin; empty values are omitted
- URLs are inserted verbatim; an empty URL renders as an empty attribute
- The document.write()n tag splits its closing tag as ``<\\/script>``
- The global flag key is ``_<ordinal>``; ordinals must be unique per build
- A CDN stylesheet made only of at-rules (e.g. @viewport) exposes no
  parsed rules and therefore always triggers the local fallback
"""

from __future__ import annotations

from cdnfailover.core.models import AssetEntry

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

SCRIPT_LOCAL_TEMPLATE = '<script src="{local}" ></script>'

SCRIPT_CDN_TEMPLATE = (
    '<script src="{cdn}" {attributes}'
    "onerror=\"(typeof cdnfailover==='undefined')"
    '?cdnfailover={{_{ordinal}:true}}:cdnfailover._{ordinal}=true">'
    "</script>"
)

SCRIPT_FALLBACK_TEMPLATE = (
    "<script>(typeof cdnfailover!== 'undefined')"
    "&&cdnfailover.hasOwnProperty('_{ordinal}')"
    "&&document.write('<script src=\"{local}\"><\\/script>');</script>"
)

STYLE_LOCAL_TEMPLATE = '<link rel="stylesheet" href="{local}">'

STYLE_CDN_TEMPLATE = '<link rel="stylesheet" href="{cdn}" {attributes}>'

STYLE_FALLBACK_TEMPLATE = (
    "<script>var e=document.styleSheets[document.styleSheets.length-1];"
    'if(typeof e==="undefined"||e.href!=="{cdn}"'
    "||((!e.cssRules||!e.cssRules.length)&&(!e.rules||!e.rules.length)))"
    '(function(){{var e=document.createElement("link");'
    'e.rel="stylesheet",e.href="{local}",document.head.appendChild(e)}})();'
    "</script>"
)


def _optional_attributes(entry: AssetEntry) -> str:
    """Render the optional ``integrity`` and ``crossorigin`` attributes.

    Each rendered attribute carries a trailing space so the templates can
    place the result directly before the next attribute or ``>``.
    """
    attributes = ""
    if entry.integrity:
        attributes += 'integrity="{}" '.format(entry.integrity)
    if entry.cross_origin:
        attributes += 'crossorigin="{}" '.format(entry.cross_origin)
    return attributes


def build_script_snippet(entry: AssetEntry, ordinal: int, local_only: bool = False) -> str:
    """Render the failover markup for a JavaScript asset.

    Args:
        entry: The asset to render.
        ordinal: Unique non-negative number naming this asset's failure flag.
        local_only: Render only a tag for the local copy (offline builds).

    Returns:
        The HTML snippet as a single string.

    Example:
        >>> build_script_snippet(AssetEntry("jq", "https://x/jq.js", "js/jq.js"), 0, True)
        '<script src="js/jq.js" ></script>'
    """
    local = entry.local_path or ""
    if local_only:
        return SCRIPT_LOCAL_TEMPLATE.format(local=local)

    return SCRIPT_CDN_TEMPLATE.format(
        cdn=entry.cdn_url or "",
        attributes=_optional_attributes(entry),
        ordinal=ordinal,
    ) + SCRIPT_FALLBACK_TEMPLATE.format(ordinal=ordinal, local=local)


def build_style_snippet(entry: AssetEntry, local_only: bool = False) -> str:
    """Render the failover markup for a stylesheet asset.

    Args:
        entry: The asset to render.
        local_only: Render only a <link> for the local copy (offline builds).

    Returns:
        The HTML snippet as a single string.
    """
    local = entry.local_path or ""
    if local_only:
        return STYLE_LOCAL_TEMPLATE.format(local=local)

    cdn = entry.cdn_url or ""
    return STYLE_CDN_TEMPLATE.format(
        cdn=cdn,
        attributes=_optional_attributes(entry),
    ) + STYLE_FALLBACK_TEMPLATE.format(cdn=cdn, local=local)
