#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/parsers/__init__.py
"""Markdown parsing: block state machine, inline tokenizer and list reconstruction."""

from md2inline.parsers.base import BaseParser, ParserInput
from md2inline.parsers.inline import InlineContext, InlineTokenizer, parse_inline
from md2inline.parsers.lists import ListEntry, ListReconstructor
from md2inline.parsers.markdown import MarkdownParser, ParseMode, ParseState

__all__ = [
    "BaseParser",
    "InlineContext",
    "InlineTokenizer",
    "ListEntry",
    "ListReconstructor",
    "MarkdownParser",
    "ParseMode",
    "ParseState",
    "ParserInput",
    "parse_inline",
]
