#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/renderers/__init__.py
"""Renderers: AST to styled tree, styled tree to HTML."""

from md2inline.renderers.base import BaseRenderer
from md2inline.renderers.html import HtmlSerializer, format_style, wrap_document
from md2inline.renderers.styled import StyledRenderer, render_styled
from md2inline.renderers.styled_node import StyledChild, StyledNode

__all__ = [
    "BaseRenderer",
    "HtmlSerializer",
    "StyledChild",
    "StyledNode",
    "StyledRenderer",
    "format_style",
    "render_styled",
    "wrap_document",
]
