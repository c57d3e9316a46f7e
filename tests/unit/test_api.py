#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the public API, options and exceptions."""
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

import md2inline
from md2inline import (
    InvalidOptionsError,
    MarkdownParserOptions,
    Md2InlineError,
    PreviewFetchOptions,
    RenderingError,
    StyledRendererOptions,
    ValidationError,
    parse_markdown,
    render_document,
    render_markdown,
    render_markdown_to_html,
)
from md2inline.ast import Document, Footer, Note
from md2inline.renderers import StyledRenderer


@pytest.mark.unit
class TestPublicApi:
    """Test the top-level functions."""

    def test_version(self) -> None:
        """Test the package exposes its version."""
        assert md2inline.__version__ == "1.0.0"

    def test_parse_markdown_applies_extensions(self, sample_text: str) -> None:
        """Test notes and footer come out of parse_markdown."""
        doc = parse_markdown(sample_text)

        assert any(isinstance(child, Note) for child in doc.children)
        assert isinstance(doc.children[-1], Footer)

    def test_parse_markdown_from_path(self, markdown_file: Path) -> None:
        """Test Path input is read from disk."""
        doc = parse_markdown(markdown_file)

        assert isinstance(doc, Document)
        assert doc.children

    def test_parse_markdown_from_bytes(self) -> None:
        """Test UTF-8 bytes input."""
        doc = parse_markdown("# Café".encode("utf-8"))

        assert doc.children[0].content[0].content == "Café"

    def test_render_markdown_sample(self, sample_text: str) -> None:
        """Test a full document renders every construct."""
        root = render_markdown(sample_text, theme="github")

        for tag in ("h1", "h2", "ul", "ol", "blockquote", "pre", "table", "footer", "strong", "em", "code"):
            assert root.find(tag) is not None, tag
        assert root.find("div").attrs == {}

    def test_fragment_output(self) -> None:
        """Test fragments are a single styled div."""
        html = render_markdown_to_html("line1\nline2")

        assert html.startswith('<div style="background:#1e1e1e;')
        assert "white-space:pre-wrap;" in html
        assert "line1\nline2" in html
        assert "<!DOCTYPE" not in html

    def test_standalone_output(self) -> None:
        """Test standalone output with a title from the first heading."""
        html = render_markdown_to_html("text\n\n# The Title", theme="light", standalone=True)

        assert html.startswith("<!DOCTYPE html>")
        assert "<title>The Title</title>" in html
        assert "background:#ffffff;" in html

    def test_standalone_explicit_title(self) -> None:
        """Test an explicit title wins."""
        html = render_markdown_to_html("# Heading", standalone=True, title="Custom")

        assert "<title>Custom</title>" in html

    def test_deeply_indented_list_renders(self) -> None:
        """Test thousands of nested list markers render without error."""
        text = "".join("  " * i + "- x\n" for i in range(1500))

        html = render_markdown_to_html(text)

        assert html.count("<li") == 1500

    def test_render_error_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test unexpected renderer failures surface as RenderingError."""

        def explode(self, node):
            raise KeyError("boom")

        monkeypatch.setattr(StyledRenderer, "visit_paragraph", explode)

        with pytest.raises(RenderingError) as exc_info:
            render_document(parse_markdown("text"))

        assert isinstance(exc_info.value.original_error, KeyError)
        assert exc_info.value.rendering_stage == "styled"


@pytest.mark.unit
class TestOptions:
    """Test options dataclasses."""

    def test_frozen(self) -> None:
        """Test options cannot be mutated."""
        options = StyledRendererOptions()

        with pytest.raises(FrozenInstanceError):
            options.highlight_code = False  # type: ignore[misc]

    def test_create_updated(self) -> None:
        """Test cloning with changes."""
        options = MarkdownParserOptions().create_updated(list_indent_width=4)

        assert options.list_indent_width == 4
        assert options.tab_width == MarkdownParserOptions().tab_width

    def test_describe_fields(self) -> None:
        """Test field help is available."""
        assert "timeout" in PreviewFetchOptions.describe_fields()

    @pytest.mark.parametrize(
        "factory",
        [
            lambda: MarkdownParserOptions(list_indent_width=0),
            lambda: MarkdownParserOptions(note_marker="no spaces"),
            lambda: StyledRendererOptions(preview_description_length=0),
            lambda: PreviewFetchOptions(timeout=0),
            lambda: PreviewFetchOptions(max_concurrent=0),
            lambda: PreviewFetchOptions(cache_ttl=-1),
        ],
    )
    def test_invalid_values(self, factory) -> None:
        """Test out-of-range values are rejected."""
        with pytest.raises(ValueError):
            factory()

    def test_wrong_options_type_message(self) -> None:
        """Test the options type error names both types."""
        with pytest.raises(InvalidOptionsError) as exc_info:
            render_markdown("x", options=MarkdownParserOptions())  # type: ignore[arg-type]

        error = exc_info.value
        assert isinstance(error, ValidationError)
        assert isinstance(error, Md2InlineError)
        assert "StyledRendererOptions" in str(error)
        assert error.received_type is MarkdownParserOptions
