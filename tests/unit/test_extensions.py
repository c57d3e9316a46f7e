#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the note block and footer extensions."""
import pytest

from md2inline.api import parse_markdown
from md2inline.ast import BlockQuote, Document, Footer, Note, Paragraph, ThematicBreak, extract_text
from md2inline.options import MarkdownParserOptions
from md2inline.parsers.markdown import MarkdownParser
from md2inline.transforms import ExtensionTransformer, apply_extensions


@pytest.mark.unit
class TestNotes:
    """Test note block folding."""

    def test_label_and_title(self) -> None:
        """Test :::NOTE label(title) syntax."""
        doc = parse_markdown(":::NOTE Tip(Heads up)\nBody text\n:::")

        [note] = doc.children
        assert isinstance(note, Note)
        assert note.label == "Tip"
        assert note.title == "Heads up"
        assert extract_text(note.children[0].content) == "Body text"

    def test_bare_marker(self) -> None:
        """Test a marker without label or title."""
        [note] = parse_markdown(":::NOTE\nBody\n:::").children

        assert note.label is None
        assert note.title is None

    def test_title_without_label(self) -> None:
        """Test a title with no label."""
        [note] = parse_markdown(":::NOTE (Only a title)\nBody\n:::").children

        assert note.label is None
        assert note.title == "Only a title"

    def test_case_insensitive_marker(self) -> None:
        """Test the marker keyword ignores case."""
        [note] = parse_markdown(":::note Info\nBody\n:::").children

        assert isinstance(note, Note)
        assert note.label == "Info"

    def test_note_holds_blocks(self) -> None:
        """Test every block between the markers moves into the note."""
        doc = parse_markdown("before\n\n:::NOTE\n# Heading\n\n- item\n:::\n\nafter")

        assert [type(child).__name__ for child in doc.children] == ["Paragraph", "Note", "Paragraph"]
        assert len(doc.children[1].children) == 2

    def test_unclosed_note_absorbs_rest(self) -> None:
        """Test a note without a close marker runs to the end."""
        doc = parse_markdown(":::NOTE\none\n\ntwo")

        [note] = doc.children
        assert len(note.children) == 2

    def test_markers_in_nested_containers_ignored(self) -> None:
        """Test markers inside a blockquote are left alone."""
        doc = parse_markdown("> :::NOTE\n> body\n> :::")

        assert isinstance(doc.children[0], BlockQuote)
        assert not any(isinstance(child, Note) for child in doc.children[0].children)

    def test_custom_marker(self) -> None:
        """Test a configured marker keyword."""
        doc = parse_markdown(":::TIP Quick\nBody\n:::", options=MarkdownParserOptions(note_marker="TIP"))

        assert isinstance(doc.children[0], Note)
        assert doc.children[0].label == "Quick"

    def test_stray_close_marker_is_text(self) -> None:
        """Test a close marker with no open note stays a paragraph."""
        doc = parse_markdown("text\n\n:::")

        assert extract_text(doc.children[1].content) == ":::"


@pytest.mark.unit
class TestFooter:
    """Test footer splitting."""

    def test_last_rule_starts_footer(self) -> None:
        """Test content after the last rule becomes the footer."""
        doc = parse_markdown("intro\n\n---\n\nmiddle\n\n---\n\nSigned, me")

        assert isinstance(doc.children[-1], Footer)
        assert isinstance(doc.children[1], ThematicBreak)
        footer = doc.children[-1]
        assert extract_text(footer.children[0].content) == "Signed, me"
        assert sum(isinstance(child, ThematicBreak) for child in doc.children) == 1

    def test_trailing_rule_no_footer(self) -> None:
        """Test a rule in last position leaves the document unchanged."""
        doc = parse_markdown("text\n\n---")

        assert isinstance(doc.children[-1], ThematicBreak)
        assert not any(isinstance(child, Footer) for child in doc.children)

    def test_rule_inside_note_not_used(self) -> None:
        """Test notes are folded first, so their rules stay inside."""
        doc = parse_markdown(":::NOTE\nabove\n\n---\n\nbelow\n:::")

        [note] = doc.children
        assert isinstance(note, Note)
        assert any(isinstance(child, ThematicBreak) for child in note.children)


@pytest.mark.unit
class TestExtensionTransformer:
    """Test transformer-level behavior."""

    def test_identity_without_markers(self) -> None:
        """Test documents without markers come back equal."""
        raw = MarkdownParser().parse("# Title\n\nplain text\n\n- a")

        assert apply_extensions(raw) == raw

    def test_idempotent(self) -> None:
        """Test applying the pass twice changes nothing further."""
        raw = MarkdownParser().parse(":::NOTE A\nx\n:::\n\none\n\n---\n\ntwo\n\n---\n\nthree")
        once = apply_extensions(raw)

        assert apply_extensions(once) == once

    def test_features_can_be_disabled(self) -> None:
        """Test fold_notes and split_footer switches."""
        raw = MarkdownParser().parse(":::NOTE\nx\n:::\n\n---\n\nend")
        doc = ExtensionTransformer(fold_notes=False, split_footer=False).transform(raw)

        assert doc == raw

    def test_does_not_mutate_input(self) -> None:
        """Test the input document is not changed."""
        raw = Document(children=[Paragraph(), ThematicBreak(), Paragraph()])
        apply_extensions(raw)

        assert len(raw.children) == 3
