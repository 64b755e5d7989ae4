"""Shared test fixtures for the cdnfailover test suite.

WHY: Most test modules need the same handful of asset entries: a script
and a stylesheet with integrity/crossorigin attributes (the Bootstrap CDN
pair), and a bare script without optional attributes. Centralizing them
keeps expected snippets consistent across modules.

HOW: Plain constants for the raw option dicts, fixtures for typed
AssetEntry objects and for an options file written to tmp_path.

RULES:
- URLs and hashes match the public Bootstrap 3.3.7 CDN tags
- Fixtures return fresh objects per test
"""

import json
from typing import Any, Dict, List

import pytest

from cdnfailover.core.models import AssetEntry

BOOTSTRAP_JS_CDN = "https://maxcdn.bootstrapcdn.com/bootstrap/3.3.7/js/bootstrap.min.js"
BOOTSTRAP_JS_LOCAL = "js/bootstrap/dist/js/bootstrap.min.js"
BOOTSTRAP_JS_INTEGRITY = "sha384-Tc5IQib027qvyjSMfHjOMaLkfuWVxZxUPnCJA7l2mCWNIpG9mGCD8wGNIcPD7Txa"

BOOTSTRAP_CSS_CDN = "https://maxcdn.bootstrapcdn.com/bootstrap/3.3.7/css/bootstrap.min.css"
BOOTSTRAP_CSS_LOCAL = "css/bootstrap/dist/css/bootstrap.min.css"
BOOTSTRAP_CSS_INTEGRITY = "sha384-BVYiiSIFeK1dGmJRAkycuHAHRg32OmUcww7on3RYdg4Va+PmSTsz/K68vbdEjh4u"

JQUERY_CDN = "https://x/jquery.js"
JQUERY_LOCAL = "js/jquery.js"

SAMPLE_FILES: List[Dict[str, Any]] = [
    {
        "name": "bootstrap-min-js",
        "cdn": BOOTSTRAP_JS_CDN,
        "local": BOOTSTRAP_JS_LOCAL,
        "cdnintegrity": BOOTSTRAP_JS_INTEGRITY,
        "cdncrossorigin": "anonymous",
    },
    {
        "name": "bootstrap-min-css",
        "cdn": BOOTSTRAP_CSS_CDN,
        "local": BOOTSTRAP_CSS_LOCAL,
        "cdnintegrity": BOOTSTRAP_CSS_INTEGRITY,
        "cdncrossorigin": "anonymous",
    },
    {
        "name": "jquery",
        "cdn": JQUERY_CDN,
        "local": JQUERY_LOCAL,
    },
]


@pytest.fixture
def bootstrap_js_entry():
    return AssetEntry(
        name="bootstrap-min-js",
        cdn_url=BOOTSTRAP_JS_CDN,
        local_path=BOOTSTRAP_JS_LOCAL,
        integrity=BOOTSTRAP_JS_INTEGRITY,
        cross_origin="anonymous",
    )


@pytest.fixture
def bootstrap_css_entry():
    return AssetEntry(
        name="bootstrap-min-css",
        cdn_url=BOOTSTRAP_CSS_CDN,
        local_path=BOOTSTRAP_CSS_LOCAL,
        integrity=BOOTSTRAP_CSS_INTEGRITY,
        cross_origin="anonymous",
    )


@pytest.fixture
def jquery_entry():
    return AssetEntry(name="jquery", cdn_url=JQUERY_CDN, local_path=JQUERY_LOCAL)


@pytest.fixture
def sample_options():
    """Options dict in the external format, three named entries."""
    return {"files": [dict(item) for item in SAMPLE_FILES]}


@pytest.fixture
def options_file(tmp_path, sample_options):
    """The sample options written to tmp_path/cdnfailover.json."""
    path = tmp_path / "cdnfailover.json"
    path.write_text(json.dumps(sample_options), encoding="utf-8")
    return path
