"""Unit tests for the script and stylesheet snippet builders.

WHY: The snippets end up verbatim in production pages. A misplaced quote
or an unsplit closing tag breaks every page that uses the marker, and a
changed flag name silently disables the fallback.

HOW: Full expected strings for the Bootstrap CDN pair (with integrity and
crossorigin), plus targeted checks for local-only rendering, optional
attribute omission, ordinal namespacing and empty fields.

RULES:
- Expected strings are written out in full; no builder output is reused
  to build its own expectation
"""

from cdnfailover.core.models import AssetEntry
from cdnfailover.core.snippets import build_script_snippet, build_style_snippet


class TestScriptSnippet:
    """build_script_snippet() renders the CDN tag plus the fallback writer."""

    def test_full_output_with_optional_attributes(self, bootstrap_js_entry):
        expected = (
            '<script src="https://maxcdn.bootstrapcdn.com/bootstrap/3.3.7/js/bootstrap.min.js" '
            'integrity="sha384-Tc5IQib027qvyjSMfHjOMaLkfuWVxZxUPnCJA7l2mCWNIpG9mGCD8wGNIcPD7Txa" '
            'crossorigin="anonymous" '
            "onerror=\"(typeof cdnfailover==='undefined')?cdnfailover={_22:true}:cdnfailover._22=true\">"
            "</script>"
            "<script>(typeof cdnfailover!== 'undefined')&&cdnfailover.hasOwnProperty('_22')"
            "&&document.write('<script src=\"js/bootstrap/dist/js/bootstrap.min.js\"><\\/script>');"
            "</script>"
        )
        assert build_script_snippet(bootstrap_js_entry, 22) == expected

    def test_without_optional_attributes(self, jquery_entry):
        result = build_script_snippet(jquery_entry, 0)
        assert result.startswith(
            '<script src="https://x/jquery.js" onerror="'
        )
        assert "integrity" not in result
        assert "crossorigin" not in result

    def test_integrity_before_crossorigin(self, bootstrap_js_entry):
        result = build_script_snippet(bootstrap_js_entry, 1)
        assert result.index("integrity=") < result.index("crossorigin=")

    def test_only_crossorigin(self):
        entry = AssetEntry(name="a", cdn_url="https://c/a.js", local_path="a.js", cross_origin="anonymous")
        result = build_script_snippet(entry, 3)
        assert '<script src="https://c/a.js" crossorigin="anonymous" onerror=' in result
        assert "integrity" not in result

    def test_empty_string_attributes_omitted(self):
        entry = AssetEntry(name="a", cdn_url="https://c/a.js", local_path="a.js", integrity="", cross_origin="")
        result = build_script_snippet(entry, 0)
        assert "integrity" not in result
        assert "crossorigin" not in result

    def test_local_only(self, bootstrap_js_entry):
        result = build_script_snippet(bootstrap_js_entry, 5, local_only=True)
        assert result == '<script src="js/bootstrap/dist/js/bootstrap.min.js" ></script>'

    def test_local_only_has_no_cdn_reference(self, bootstrap_js_entry):
        result = build_script_snippet(bootstrap_js_entry, 5, local_only=True)
        assert "maxcdn" not in result
        assert "cdnfailover" not in result

    def test_local_only_with_empty_local(self):
        entry = AssetEntry(name="a", cdn_url="https://c/a.js", local_path="")
        assert build_script_snippet(entry, 0, local_only=True) == '<script src="" ></script>'

    def test_ordinals_namespace_flag(self, jquery_entry):
        first = build_script_snippet(jquery_entry, 0)
        second = build_script_snippet(jquery_entry, 1)
        assert "cdnfailover._0=true" in first
        assert "hasOwnProperty('_0')" in first
        assert "cdnfailover._1=true" in second
        assert "hasOwnProperty('_1')" in second
        assert "_1" not in first

    def test_closing_tag_is_split(self, jquery_entry):
        result = build_script_snippet(jquery_entry, 0)
        written = result.split("document.write(", 1)[1]
        assert "</script>" not in written.split("');", 1)[0]
        assert "<\\/script>" in written

    def test_empty_urls_render_literally(self):
        entry = AssetEntry(name="blank")
        result = build_script_snippet(entry, 7)
        assert result.startswith('<script src="" onerror=')
        assert "document.write('<script src=\"\"><\\/script>')" in result


class TestStyleSnippet:
    """build_style_snippet() renders the CDN link plus the stylesheet probe."""

    def test_full_output_with_optional_attributes(self, bootstrap_css_entry):
        cdn = "https://maxcdn.bootstrapcdn.com/bootstrap/3.3.7/css/bootstrap.min.css"
        expected = (
            '<link rel="stylesheet" href="' + cdn + '" '
            'integrity="sha384-BVYiiSIFeK1dGmJRAkycuHAHRg32OmUcww7on3RYdg4Va+PmSTsz/K68vbdEjh4u" '
            'crossorigin="anonymous" >'
            "<script>var e=document.styleSheets[document.styleSheets.length-1];"
            'if(typeof e==="undefined"||e.href!=="' + cdn + '"'
            "||((!e.cssRules||!e.cssRules.length)&&(!e.rules||!e.rules.length)))"
            '(function(){var e=document.createElement("link");'
            'e.rel="stylesheet",e.href="css/bootstrap/dist/css/bootstrap.min.css",'
            "document.head.appendChild(e)})();</script>"
        )
        assert build_style_snippet(bootstrap_css_entry) == expected

    def test_without_optional_attributes(self):
        entry = AssetEntry(name="s", cdn_url="https://c/site.css", local_path="css/site.css")
        result = build_style_snippet(entry)
        assert result.startswith('<link rel="stylesheet" href="https://c/site.css" ><script>')

    def test_probe_compares_exact_cdn_url(self, bootstrap_css_entry):
        result = build_style_snippet(bootstrap_css_entry)
        assert 'e.href!=="{}"'.format(bootstrap_css_entry.cdn_url) in result

    def test_probe_checks_both_rule_accessors(self, bootstrap_css_entry):
        result = build_style_snippet(bootstrap_css_entry)
        assert "e.cssRules" in result
        assert "e.rules" in result

    def test_local_only(self, bootstrap_css_entry):
        result = build_style_snippet(bootstrap_css_entry, local_only=True)
        assert result == '<link rel="stylesheet" href="css/bootstrap/dist/css/bootstrap.min.css">'

    def test_local_only_with_empty_local(self):
        entry = AssetEntry(name="s", cdn_url="https://c/site.css")
        assert build_style_snippet(entry, local_only=True) == '<link rel="stylesheet" href="">'
