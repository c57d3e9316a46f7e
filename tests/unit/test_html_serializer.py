#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for HTML serialization and URL sanitization."""
import pytest

from md2inline.renderers import HtmlSerializer, StyledNode, format_style, wrap_document
from md2inline.utils.security import (
    get_url_hostname,
    get_url_scheme,
    is_relative_url,
    is_url_scheme_dangerous,
    sanitize_url,
)


@pytest.mark.unit
class TestFormatStyle:
    """Test style attribute formatting."""

    def test_order_and_separators(self) -> None:
        """Test properties keep insertion order."""
        assert format_style({"color": "red", "margin": "0"}) == "color:red;margin:0;"

    def test_empty_values_skipped(self) -> None:
        """Test empty values are left out."""
        assert format_style({"color": "", "margin": "0"}) == "margin:0;"


@pytest.mark.unit
class TestHtmlSerializer:
    """Test StyledNode serialization."""

    def test_element_with_style_and_attrs(self) -> None:
        """Test style comes first, then attributes."""
        node = StyledNode("a", style={"color": "blue"}, attrs={"href": "/x"}, children=["go"])

        assert node.to_html() == '<a style="color:blue;" href="/x">go</a>'

    def test_text_is_escaped(self) -> None:
        """Test text content is HTML-escaped."""
        node = StyledNode("p", children=["<script>&"])

        assert node.to_html() == "<p>&lt;script&gt;&amp;</p>"

    def test_attribute_values_escaped(self) -> None:
        """Test quotes in attributes are escaped."""
        node = StyledNode("img", attrs={"alt": 'say "hi"'})

        assert node.to_html() == '<img alt="say &quot;hi&quot;">'

    def test_void_and_bare_attributes(self) -> None:
        """Test void elements and empty-string attributes."""
        node = StyledNode("input", attrs={"type": "checkbox", "disabled": "", "checked": None})

        assert node.to_html() == '<input type="checkbox" disabled>'

    def test_pretty_indents_containers_only(self) -> None:
        """Test pretty mode never reflows text-bearing elements."""
        tree = StyledNode(
            "div",
            children=[StyledNode("p", style={"white-space": "pre-wrap"}, children=["a\nb"]), StyledNode("hr")],
        )

        assert HtmlSerializer(pretty=True).serialize(tree) == (
            '<div>\n  <p style="white-space:pre-wrap;">a\nb</p>\n  <hr>\n</div>'
        )

    def test_plain_string(self) -> None:
        """Test a bare string serializes as escaped text."""
        assert HtmlSerializer().serialize("a < b") == "a &lt; b"


@pytest.mark.unit
class TestWrapDocument:
    """Test standalone document wrapping."""

    def test_document_shell(self) -> None:
        """Test doctype, charset, viewport and title."""
        html = wrap_document("<p>x</p>", title="Notes & more", background="#fff")

        assert html.startswith("<!DOCTYPE html>\n")
        assert '<meta charset="UTF-8">' in html
        assert 'name="viewport"' in html
        assert "<title>Notes &amp; more</title>" in html
        assert "background:#fff;" in html
        assert "<p>x</p>" in html

    def test_default_title(self) -> None:
        """Test the fallback title."""
        assert "<title>Document</title>" in wrap_document("")


@pytest.mark.unit
class TestUrlSecurity:
    """Test URL scheme checks."""

    @pytest.mark.parametrize(
        "url",
        [
            "javascript:alert(1)",
            "  JAVASCRIPT:alert(1)",
            "java\tscript:alert(1)",
            "vbscript:msgbox(1)",
            "livescript:x",
            "data:text/html,<script>alert(1)</script>",
            "data:application/javascript,alert(1)",
        ],
    )
    def test_dangerous(self, url: str) -> None:
        """Test script-invoking URLs are flagged."""
        assert is_url_scheme_dangerous(url)
        assert sanitize_url(url) == "#"

    @pytest.mark.parametrize(
        "url",
        ["https://example.com", "http://x.org/a?b=c", "mailto:a@b.c", "/path", "#anchor", "page.html",
         "data:image/png;base64,AAAA", ""],
    )
    def test_safe(self, url: str) -> None:
        """Test ordinary URLs pass through."""
        assert not is_url_scheme_dangerous(url)
        assert sanitize_url(url) == url

    def test_custom_placeholder(self) -> None:
        """Test the placeholder is configurable."""
        assert sanitize_url("javascript:x", placeholder="about:blank") == "about:blank"

    def test_relative(self) -> None:
        """Test relative URL detection."""
        assert is_relative_url("../up")
        assert is_relative_url("file.md")
        assert not is_relative_url("https://example.com")

    def test_url_parts_never_raise(self) -> None:
        """Test scheme and hostname helpers on malformed URLs."""
        assert get_url_scheme(" HTTPS://example.com") == "https"
        assert get_url_scheme("/path") == ""
        assert get_url_hostname("https://Example.com/a") == "example.com"
        assert get_url_hostname("http://[bad") is None
        assert not is_url_scheme_dangerous("http://[bad")
