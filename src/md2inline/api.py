#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/api.py
"""Public API: Markdown in, styled tree or HTML out.

Examples
--------
Render a fragment with the default (dark) theme:

    >>> html = render_markdown_to_html("# Title\\n\\nSome **bold** text.")

Get the styled tree and pick a theme:

    >>> root = render_markdown("> quote\\n> -- Author", theme="sepia")
    >>> root.find("blockquote").text
    'quote— Author'

Enable preview cards with pre-fetched data:

    >>> data = prepare_preview_data(text)
    >>> html = render_markdown_to_html(
    ...     text,
    ...     options=StyledRendererOptions(enable_link_preview=True),
    ...     preview_data=data,
    ...     standalone=True,
    ... )

"""

from __future__ import annotations

import logging
from typing import Optional

from md2inline.ast import Document, Heading, extract_text
from md2inline.exceptions import Md2InlineError, RenderingError
from md2inline.options.markdown import MarkdownParserOptions
from md2inline.options.render import StyledRendererOptions
from md2inline.parsers.base import ParserInput
from md2inline.parsers.markdown import MarkdownParser
from md2inline.renderers.html import wrap_document
from md2inline.renderers.styled import StyledRenderer
from md2inline.renderers.styled_node import StyledNode
from md2inline.themes import ThemeSpec
from md2inline.transforms.extensions import apply_extensions
from md2inline.transforms.preview_cards import PreviewData

logger = logging.getLogger(__name__)


def parse_markdown(markdown: ParserInput, options: MarkdownParserOptions | None = None) -> Document:
    """Parse Markdown and apply the note and footer extensions.

    Parameters
    ----------
    markdown : str, Path, bytes or file-like
        Markdown input
    options : MarkdownParserOptions or None, default = None
        Parser options

    Returns
    -------
    Document
        Parsed document with Note and Footer nodes

    """
    parser = MarkdownParser(options)
    document = parser.parse(markdown)
    return apply_extensions(document, marker=parser.options.note_marker)


def render_document(
    document: Document,
    theme: ThemeSpec = None,
    options: StyledRendererOptions | None = None,
    preview_data: PreviewData | None = None,
) -> StyledNode:
    """Render an already parsed document.

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not a StyledRendererOptions
    RenderingError
        On an internal renderer failure

    """
    renderer = StyledRenderer(theme=theme, options=options, preview_data=preview_data)
    try:
        return renderer.render(document)
    except Md2InlineError:
        raise
    except Exception as e:
        raise RenderingError(f"Failed to render document: {e}", rendering_stage="styled", original_error=e) from e


def render_markdown(
    markdown: ParserInput,
    theme: ThemeSpec = None,
    options: StyledRendererOptions | None = None,
    preview_data: PreviewData | None = None,
    parser_options: MarkdownParserOptions | None = None,
) -> StyledNode:
    """Parse and render Markdown to a styled tree.

    Parameters
    ----------
    markdown : str, Path, bytes or file-like
        Markdown input; the empty string renders an empty container
    theme : str, Theme, mapping or None, default = None
        Theme name, Theme, or override mapping; unknown names use the default
    options : StyledRendererOptions or None, default = None
        Rendering options; ``enable_link_preview`` turns on preview cards
    preview_data : mapping or None, default = None
        URL to PreviewInfo (or plain dict) for standalone links
    parser_options : MarkdownParserOptions or None, default = None
        Parser options

    Returns
    -------
    StyledNode
        Themed container

    """
    document = parse_markdown(markdown, options=parser_options)
    return render_document(document, theme=theme, options=options, preview_data=preview_data)


def render_markdown_to_html(
    markdown: ParserInput,
    theme: ThemeSpec = None,
    options: StyledRendererOptions | None = None,
    preview_data: PreviewData | None = None,
    standalone: bool = False,
    title: str | None = None,
    pretty: bool = False,
    parser_options: MarkdownParserOptions | None = None,
) -> str:
    """Parse and render Markdown to HTML.

    Parameters
    ----------
    markdown : str, Path, bytes or file-like
        Markdown input
    theme : str, Theme, mapping or None, default = None
        Theme
    options : StyledRendererOptions or None, default = None
        Rendering options
    preview_data : mapping or None, default = None
        Preview data for standalone links
    standalone : bool, default = False
        Return a complete HTML document instead of a fragment
    title : str or None, default = None
        Document title for standalone output; defaults to the first heading
    pretty : bool, default = False
        Indent block containers
    parser_options : MarkdownParserOptions or None, default = None
        Parser options

    Returns
    -------
    str
        HTML fragment or document

    """
    document = parse_markdown(markdown, options=parser_options)
    root = render_document(document, theme=theme, options=options, preview_data=preview_data)
    fragment = root.to_html(pretty=pretty)
    if not standalone:
        return fragment
    return wrap_document(
        fragment,
        title=title or _document_title(document),
        background=root.style.get("background"),
    )


def _document_title(document: Document) -> Optional[str]:
    for child in document.children:
        if isinstance(child, Heading):
            text = extract_text(child.content).strip()
            if text:
                return text
    return None
