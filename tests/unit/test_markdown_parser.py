#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the line-oriented Markdown block parser."""
import pytest

from md2inline.ast import (
    BlockQuote,
    CodeBlock,
    Document,
    Heading,
    HTMLBlock,
    LineBreak,
    List,
    Paragraph,
    Strong,
    Table,
    Text,
    ThematicBreak,
    extract_text,
)
from md2inline.exceptions import InvalidOptionsError
from md2inline.options import MarkdownParserOptions, StyledRendererOptions
from md2inline.parsers.markdown import MarkdownParser


def parse(text: str, **options) -> Document:
    return MarkdownParser(MarkdownParserOptions(**options) if options else None).parse(text)


@pytest.mark.unit
class TestHeadings:
    """Test ATX headings."""

    def test_levels(self) -> None:
        """Test heading levels one to four."""
        doc = parse("# One\n## Two\n### Three\n#### Four")

        assert [h.level for h in doc.children] == [1, 2, 3, 4]
        assert extract_text(doc.children[0].content) == "One"

    def test_deep_headings_clamp(self) -> None:
        """Test headings deeper than four collapse onto level four."""
        doc = parse("###### Deep")

        assert isinstance(doc.children[0], Heading)
        assert doc.children[0].level == 4

    def test_closing_hashes_removed(self) -> None:
        """Test trailing hashes are not part of the text."""
        doc = parse("## Title ##")

        assert extract_text(doc.children[0].content) == "Title"

    def test_hash_without_space_is_paragraph(self) -> None:
        """Test '#tag' is not a heading."""
        doc = parse("#hashtag")

        assert isinstance(doc.children[0], Paragraph)

    def test_inline_markup_in_heading(self) -> None:
        """Test heading content is tokenized."""
        doc = parse("# A **bold** title")

        assert isinstance(doc.children[0].content[1], Strong)


@pytest.mark.unit
class TestParagraphs:
    """Test paragraphs and line breaks."""

    def test_soft_line_breaks_preserved(self) -> None:
        """Test consecutive lines join with soft breaks."""
        doc = parse("line1\nline2")

        [para] = doc.children
        assert para.content == [Text(content="line1"), LineBreak(soft=True), Text(content="line2")]

    def test_hard_break_two_spaces(self) -> None:
        """Test two trailing spaces make a hard break."""
        doc = parse("line1  \nline2")

        assert doc.children[0].content[1] == LineBreak(soft=False)

    def test_hard_break_backslash(self) -> None:
        """Test a trailing backslash makes a hard break and is removed."""
        doc = parse("line1\\\nline2")

        content = doc.children[0].content
        assert content[0] == Text(content="line1")
        assert content[1] == LineBreak(soft=False)

    def test_blank_line_separates_paragraphs(self) -> None:
        """Test blank lines end paragraphs."""
        doc = parse("one\n\ntwo")

        assert len(doc.children) == 2
        assert all(isinstance(child, Paragraph) for child in doc.children)

    def test_empty_input(self) -> None:
        """Test empty and whitespace-only input."""
        assert parse("").children == []
        assert parse("\n\n   \n").children == []

    def test_crlf_and_bom(self) -> None:
        """Test Windows newlines and a byte order mark."""
        doc = parse("\ufeff# Title\r\n\r\ntext")

        assert isinstance(doc.children[0], Heading)
        assert isinstance(doc.children[1], Paragraph)


@pytest.mark.unit
class TestCodeBlocks:
    """Test fenced code blocks."""

    def test_fenced_block_with_language(self) -> None:
        """Test ```python fences."""
        doc = parse("```python\nx = 1\n\ny = 2\n```")

        [block] = doc.children
        assert isinstance(block, CodeBlock)
        assert block.language == "python"
        assert block.content == "x = 1\n\ny = 2"

    def test_markdown_inside_fence_is_literal(self) -> None:
        """Test fence content is not parsed."""
        doc = parse("~~~\n# not a heading\n- not a list\n~~~")

        assert len(doc.children) == 1
        assert doc.children[0].content == "# not a heading\n- not a list"

    def test_unterminated_fence_flushes(self) -> None:
        """Test an unclosed fence runs to end of input."""
        doc = parse("```\ncode\nmore")

        assert doc.children[0].content == "code\nmore"

    def test_fence_needs_matching_character(self) -> None:
        """Test a ~~~ line does not close a ``` fence."""
        doc = parse("```\na\n~~~\nb\n```")

        assert doc.children[0].content == "a\n~~~\nb"

    def test_fence_closes_open_list(self) -> None:
        """Test a fence after list items ends the list."""
        doc = parse("- item\n```\ncode\n```")

        assert isinstance(doc.children[0], List)
        assert isinstance(doc.children[1], CodeBlock)


@pytest.mark.unit
class TestBlockquotes:
    """Test blockquotes and attribution."""

    def test_attribution_line(self) -> None:
        """Test a trailing '-- Author' line becomes the source."""
        doc = parse("> To be or not to be.\n> -- Shakespeare")

        [quote] = doc.children
        assert isinstance(quote, BlockQuote)
        assert quote.source == "Shakespeare"
        assert extract_text(quote.children[0].content) == "To be or not to be."

    def test_em_dash_attribution(self) -> None:
        """Test an em dash also introduces the source."""
        doc = parse("> Quote\n> — Someone")

        assert doc.children[0].source == "Someone"

    def test_no_attribution(self) -> None:
        """Test quotes without a dash line have no source."""
        doc = parse("> just a quote")

        assert doc.children[0].source is None

    def test_nested_blockquote(self) -> None:
        """Test > > nests."""
        doc = parse("> outer\n>\n> > inner")

        quote = doc.children[0]
        assert isinstance(quote.children[0], Paragraph)
        assert isinstance(quote.children[1], BlockQuote)

    def test_block_content_inside_quote(self) -> None:
        """Test lists inside a quote are parsed."""
        doc = parse("> - a\n> - b")

        assert isinstance(doc.children[0].children[0], List)

    def test_depth_limit(self) -> None:
        """Test quotes deeper than the limit become text."""
        doc = parse(">>>>> deep", max_blockquote_depth=2)

        outer = doc.children[0]
        inner = outer.children[0]
        assert isinstance(inner, BlockQuote)
        assert isinstance(inner.children[0], Paragraph)


@pytest.mark.unit
class TestBlockPrecedence:
    """Test which construct wins on ambiguous lines."""

    @pytest.mark.parametrize("line", ["---", "***", "___", "- - -", "* * *"])
    def test_thematic_breaks(self, line: str) -> None:
        """Test rule variants."""
        assert isinstance(parse(line).children[0], ThematicBreak)

    def test_thematic_break_ends_paragraph(self) -> None:
        """Test a rule directly after text is a break, not a heading underline."""
        doc = parse("text\n---")

        assert isinstance(doc.children[0], Paragraph)
        assert isinstance(doc.children[1], ThematicBreak)

    def test_html_block(self) -> None:
        """Test a block tag opens an HTML block until a blank line."""
        doc = parse("<div>\nhello\n</div>\n\nafter")

        assert isinstance(doc.children[0], HTMLBlock)
        assert doc.children[0].content == "<div>\nhello\n</div>"
        assert isinstance(doc.children[1], Paragraph)

    def test_html_block_disabled(self) -> None:
        """Test parse_html=False treats tags as text."""
        doc = parse("<div>hi</div>", parse_html=False)

        assert isinstance(doc.children[0], Paragraph)

    def test_note_markers_stand_alone(self) -> None:
        """Test note markers are never merged into a paragraph."""
        doc = parse("before\n:::NOTE Tip\nbody\n:::\nafter")

        texts = [extract_text(child.content) for child in doc.children]
        assert texts == ["before", ":::NOTE Tip", "body", ":::", "after"]


@pytest.mark.unit
class TestTables:
    """Test pipe tables."""

    def test_header_alignment_and_rows(self) -> None:
        """Test a full table."""
        doc = parse("| a | b | c |\n|:--|:-:|--:|\n| 1 | 2 | 3 |")

        [table] = doc.children
        assert isinstance(table, Table)
        assert [extract_text(c.content) for c in table.header.cells] == ["a", "b", "c"]
        assert table.alignments == ["left", "center", "right"]
        assert [extract_text(c.content) for c in table.rows[0].cells] == ["1", "2", "3"]

    def test_ragged_rows_padded_and_truncated(self) -> None:
        """Test rows are fitted to the header width."""
        doc = parse("| a | b |\n|---|---|\n| 1 |\n| 1 | 2 | 3 |")

        table = doc.children[0]
        assert [len(row.cells) for row in table.rows] == [2, 2]
        assert extract_text(table.rows[0].cells[1].content) == ""

    def test_first_row_is_header_without_separator(self) -> None:
        """Test tables with no separator still get a header."""
        doc = parse("| a | b |\n| 1 | 2 |")

        table = doc.children[0]
        assert extract_text(table.header.cells[0].content) == "a"
        assert len(table.rows) == 1

    def test_escaped_pipe(self) -> None:
        """Test \\| stays inside a cell."""
        doc = parse("| a \\| b | c |\n|---|---|")

        assert extract_text(doc.children[0].header.cells[0].content) == "a | b"


@pytest.mark.unit
class TestRobustness:
    """Test the parser always terminates and never raises on odd input."""

    @pytest.mark.parametrize(
        "text",
        [
            "*" * 500,
            "[" * 300 + "]" * 300,
            "> " * 200 + "deep",
            "- a\n" + "".join(" " * (i * 2) + "- x\n" for i in range(60)),
            "".join("  " * i + "- x\n" for i in range(1500)),
            "".join(" " * i + "1. x\n" for i in range(3000)),
            "|" * 100,
            "```" + "\n" * 100,
            "~~" * 200,
        ],
    )
    def test_pathological_input(self, text: str) -> None:
        """Test pathological input produces a document."""
        assert isinstance(parse(text), Document)

    def test_deep_list_nesting_is_bounded(self) -> None:
        """Test thousands of indent levels nest no deeper than max_list_depth."""
        doc = parse("".join("  " * i + "- x\n" for i in range(1500)), max_list_depth=4)

        depth, lst = 0, doc.children[0]
        while isinstance(lst, List):
            depth += 1
            lst = lst.items[0].children[-1]
        assert depth == 4

    def test_wrong_options_type(self) -> None:
        """Test options of another component are rejected."""
        with pytest.raises(InvalidOptionsError):
            MarkdownParser(StyledRendererOptions())
