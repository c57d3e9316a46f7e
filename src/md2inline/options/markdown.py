#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/options/markdown.py
"""Configuration options for Markdown parsing."""

from __future__ import annotations

from dataclasses import dataclass, field

from md2inline.constants import (
    DEFAULT_LIST_INDENT_WIDTH,
    DEFAULT_MAX_BLOCKQUOTE_DEPTH,
    DEFAULT_MAX_INLINE_DEPTH,
    DEFAULT_MAX_LIST_DEPTH,
    DEFAULT_NOTE_MARKER,
    DEFAULT_PARSE_HTML,
    DEFAULT_TAB_WIDTH,
)
from md2inline.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class MarkdownParserOptions(CloneFrozenMixin):
    """Configuration options for the line-oriented Markdown parser.

    Parameters
    ----------
    list_indent_width : int, default 2
        Number of leading spaces that make up one list nesting level.
    tab_width : int, default 4
        Tab stop used when expanding leading tabs before measuring indentation.
    max_blockquote_depth : int, default 16
        Deepest blockquote nesting parsed recursively. Deeper quote bodies are
        kept as plain paragraphs.
    max_inline_depth : int, default 16
        Deepest inline nesting (bold inside italic inside link text, ...)
        tokenized recursively. Deeper text is kept literal.
    max_list_depth : int, default 16
        Deepest list nesting. Items indented further attach at this depth.
    parse_html : bool, default True
        Recognize raw HTML blocks and inline tags as HTML nodes. The renderer
        suppresses them either way; when False they are parsed as text.
    note_marker : str, default "NOTE"
        Keyword following ``:::`` that opens a note block.

    """

    list_indent_width: int = field(
        default=DEFAULT_LIST_INDENT_WIDTH,
        metadata={"help": "Leading spaces per list nesting level", "type": int, "importance": "core"},
    )
    tab_width: int = field(
        default=DEFAULT_TAB_WIDTH,
        metadata={"help": "Tab stop used when measuring indentation", "type": int, "importance": "advanced"},
    )
    max_blockquote_depth: int = field(
        default=DEFAULT_MAX_BLOCKQUOTE_DEPTH,
        metadata={"help": "Deepest blockquote nesting parsed recursively", "type": int, "importance": "security"},
    )
    max_inline_depth: int = field(
        default=DEFAULT_MAX_INLINE_DEPTH,
        metadata={"help": "Deepest inline markup nesting parsed recursively", "type": int, "importance": "security"},
    )
    max_list_depth: int = field(
        default=DEFAULT_MAX_LIST_DEPTH,
        metadata={"help": "Deepest list nesting parsed as nested lists", "type": int, "importance": "security"},
    )
    parse_html: bool = field(
        default=DEFAULT_PARSE_HTML,
        metadata={"help": "Recognize raw HTML as HTML nodes (always suppressed on render)", "importance": "advanced"},
    )
    note_marker: str = field(
        default=DEFAULT_NOTE_MARKER,
        metadata={"help": "Keyword after ':::' that opens a note block", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges and the note marker.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.list_indent_width < 1:
            raise ValueError(f"list_indent_width must be at least 1, got {self.list_indent_width}")
        if self.tab_width < 1:
            raise ValueError(f"tab_width must be at least 1, got {self.tab_width}")
        if self.max_blockquote_depth < 1:
            raise ValueError(f"max_blockquote_depth must be at least 1, got {self.max_blockquote_depth}")
        if self.max_inline_depth < 1:
            raise ValueError(f"max_inline_depth must be at least 1, got {self.max_inline_depth}")
        if self.max_list_depth < 1:
            raise ValueError(f"max_list_depth must be at least 1, got {self.max_list_depth}")
        if not self.note_marker or not self.note_marker.isalnum():
            raise ValueError(f"note_marker must be a non-empty alphanumeric word, got {self.note_marker!r}")
