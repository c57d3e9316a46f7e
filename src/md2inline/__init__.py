"""md2inline - Markdown to inline-styled HTML.

md2inline turns Markdown into a themed tree of styled nodes in which every
visual property is written inline, so the output survives environments that
strip stylesheets and scripts (mail clients, CMS embeds, chat previews).

Key Features
------------
- Line-oriented Markdown parser with nested lists, tables, fenced code,
  blockquotes with attribution lines
- Note blocks (``:::NOTE label(title)`` ... ``:::``) and a footer region after
  the last horizontal rule
- Seven built-in color themes plus override mappings
- Pygments highlighting written as inline span colors
- Optional link preview cards from Open Graph metadata, fetched concurrently
  with httpx

Examples
--------
Render to an HTML fragment:

    >>> from md2inline import render_markdown_to_html
    >>> html = render_markdown_to_html("# Hello\\n\\nSome *text*.", theme="light")

Work with the AST:

    >>> from md2inline import parse_markdown, render_document
    >>> doc = parse_markdown(text)
    >>> root = render_document(doc, theme="nord")

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "md2inline requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from md2inline.api import parse_markdown, render_document, render_markdown, render_markdown_to_html  # noqa: E402
from md2inline.exceptions import (  # noqa: E402
    InvalidOptionsError,
    Md2InlineError,
    ParsingError,
    PreviewFetchError,
    RenderingError,
    ValidationError,
)
from md2inline.options import MarkdownParserOptions, PreviewFetchOptions, StyledRendererOptions  # noqa: E402
from md2inline.preview import PreviewCache, PreviewFetcher, PreviewInfo, prepare_preview_data  # noqa: E402
from md2inline.renderers import StyledNode, StyledRenderer  # noqa: E402
from md2inline.themes import Theme, list_themes, resolve_theme  # noqa: E402

__all__ = [
    "__version__",
    "InvalidOptionsError",
    "MarkdownParserOptions",
    "Md2InlineError",
    "ParsingError",
    "PreviewCache",
    "PreviewFetchError",
    "PreviewFetcher",
    "PreviewFetchOptions",
    "PreviewInfo",
    "RenderingError",
    "StyledNode",
    "StyledRenderer",
    "StyledRendererOptions",
    "Theme",
    "ValidationError",
    "list_themes",
    "parse_markdown",
    "prepare_preview_data",
    "render_document",
    "render_markdown",
    "render_markdown_to_html",
    "resolve_theme",
]
