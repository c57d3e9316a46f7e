#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/options/__init__.py
"""Options dataclasses for parsing, rendering and preview fetching."""

from md2inline.options.base import CloneFrozenMixin, validate_options_type
from md2inline.options.markdown import MarkdownParserOptions
from md2inline.options.preview import PreviewFetchOptions
from md2inline.options.render import StyledRendererOptions

__all__ = [
    "CloneFrozenMixin",
    "MarkdownParserOptions",
    "PreviewFetchOptions",
    "StyledRendererOptions",
    "validate_options_type",
]
