#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the inline Markdown tokenizer."""
import pytest

from md2inline.ast import (
    Code,
    Emphasis,
    FootnoteReference,
    HTMLInline,
    Image,
    ImageReference,
    Link,
    LinkReference,
    Strikethrough,
    Strong,
    Text,
)
from md2inline.parsers.inline import InlineTokenizer, parse_inline


@pytest.mark.unit
class TestEmphasis:
    """Test bold, italic and strikethrough."""

    def test_bold_and_italic(self) -> None:
        """Test mixed bold and italic runs."""
        segments = InlineTokenizer().tokenize("**bold** and *italic*")

        assert len(segments) == 3
        assert isinstance(segments[0], Strong)
        assert segments[0].content == [Text(content="bold")]
        assert segments[1] == " and "
        assert isinstance(segments[2], Emphasis)
        assert segments[2].content == [Text(content="italic")]

    def test_underscore_variants(self) -> None:
        """Test __bold__ and _italic_."""
        segments = InlineTokenizer().tokenize("__strong__ _em_")

        assert isinstance(segments[0], Strong)
        assert isinstance(segments[2], Emphasis)

    def test_bold_italic(self) -> None:
        """Test ***text*** becomes bold wrapping italic."""
        [node] = InlineTokenizer().tokenize("***both***")

        assert isinstance(node, Strong)
        assert isinstance(node.content[0], Emphasis)
        assert node.content[0].content == [Text(content="both")]

    def test_intraword_underscores_stay_literal(self) -> None:
        """Test snake_case identifiers are not italicized."""
        assert InlineTokenizer().tokenize("use snake_case_name here") == ["use snake_case_name here"]

    def test_strikethrough(self) -> None:
        """Test ~~text~~."""
        [node] = InlineTokenizer().tokenize("~~gone~~")

        assert isinstance(node, Strikethrough)
        assert node.content == [Text(content="gone")]

    def test_nested_inside_bold(self) -> None:
        """Test italic nested in bold is tokenized recursively."""
        [node] = InlineTokenizer().tokenize("**a *b* c**")

        assert isinstance(node, Strong)
        assert isinstance(node.content[1], Emphasis)

    def test_depth_limit_keeps_text_literal(self) -> None:
        """Test text beyond the depth limit is not tokenized further."""
        [node] = InlineTokenizer(max_depth=1).tokenize("**a *b* c**")

        assert isinstance(node, Strong)
        assert node.content == [Text(content="a *b* c")]


@pytest.mark.unit
class TestCodeAndEscapes:
    """Test code spans and backslash escapes."""

    def test_code_span_is_opaque(self) -> None:
        """Test markup inside code spans is not interpreted."""
        [node] = InlineTokenizer().tokenize("`**not bold**`")

        assert node == Code(content="**not bold**")

    def test_double_backtick_span(self) -> None:
        """Test a code span containing a single backtick."""
        [node] = InlineTokenizer().tokenize("``a ` b``")

        assert isinstance(node, Code)
        assert node.content == "a ` b"

    def test_escaped_markers_are_literal(self) -> None:
        """Test escaped asterisks never become emphasis."""
        assert InlineTokenizer().tokenize(r"\*not italic\*") == ["*not italic*"]

    def test_unclosed_markers_are_literal(self) -> None:
        """Test unmatched markers stay as text."""
        assert InlineTokenizer().tokenize("a * b ** c") == ["a * b ** c"]


@pytest.mark.unit
class TestLinksAndImages:
    """Test links, images and references."""

    def test_inline_link_with_title(self) -> None:
        """Test [text](url "title")."""
        [node] = InlineTokenizer().tokenize('[Example](https://example.com "Site")')

        assert isinstance(node, Link)
        assert node.url == "https://example.com"
        assert node.title == "Site"
        assert node.content == [Text(content="Example")]

    def test_image_wins_over_link(self) -> None:
        """Test ![alt](src) is an image, not a link after a bang."""
        [node] = InlineTokenizer().tokenize("![A cat](cat.png)")

        assert isinstance(node, Image)
        assert node.url == "cat.png"
        assert node.alt_text == "A cat"

    def test_emphasis_does_not_split_links(self) -> None:
        """Test bold inside link text survives as part of the link."""
        [node] = InlineTokenizer().tokenize("[**bold** link](https://example.com)")

        assert isinstance(node, Link)
        assert isinstance(node.content[0], Strong)
        assert node.content[1] == Text(content=" link")

    def test_bare_url_is_autolinked(self) -> None:
        """Test bare URLs become links without trailing punctuation."""
        segments = InlineTokenizer().tokenize("see https://example.com/page.")

        assert segments[0] == "see "
        assert isinstance(segments[1], Link)
        assert segments[1].url == "https://example.com/page"
        assert segments[2] == "."

    def test_angle_autolink(self) -> None:
        """Test <https://...> autolinks."""
        [node] = InlineTokenizer().tokenize("<https://example.com>")

        assert isinstance(node, Link)
        assert node.url == "https://example.com"

    def test_mailto_autolink_label(self) -> None:
        """Test mailto autolinks show the address only."""
        [node] = InlineTokenizer().tokenize("<mailto:me@example.com>")

        assert node.content == [Text(content="me@example.com")]

    def test_reference_link(self) -> None:
        """Test [text][label]."""
        [node] = InlineTokenizer().tokenize("[docs][ref]")

        assert isinstance(node, LinkReference)
        assert node.label == "ref"
        assert node.content == [Text(content="docs")]

    def test_reference_image(self) -> None:
        """Test ![alt][label]."""
        [node] = InlineTokenizer().tokenize("![logo][img]")

        assert node == ImageReference(label="img", alt_text="logo")

    def test_footnote_reference(self) -> None:
        """Test [^id]."""
        segments = InlineTokenizer().tokenize("claim[^1]")

        assert segments == ["claim", FootnoteReference(identifier="1")]


@pytest.mark.unit
class TestInlineHtml:
    """Test inline HTML recognition."""

    def test_tags_become_html_nodes(self) -> None:
        """Test opening and closing tags are recognized."""
        segments = InlineTokenizer().tokenize("a <span>b</span>")

        assert segments[0] == "a "
        assert segments[1] == HTMLInline(content="<span>")
        assert segments[2] == "b"
        assert segments[3] == HTMLInline(content="</span>")

    def test_html_disabled(self) -> None:
        """Test tags stay literal with parse_html=False."""
        assert InlineTokenizer(parse_html=False).tokenize("a <b>c</b>") == ["a <b>c</b>"]


@pytest.mark.unit
class TestParseInline:
    """Test the module-level helper."""

    def test_wraps_literals_in_text_nodes(self) -> None:
        """Test literals come back as Text nodes."""
        nodes = parse_inline("plain *em*")

        assert nodes[0] == Text(content="plain ")
        assert isinstance(nodes[1], Emphasis)

    def test_empty_input(self) -> None:
        """Test the empty string gives no nodes."""
        assert parse_inline("") == []
