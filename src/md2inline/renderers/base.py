#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/renderers/base.py
"""Base class for AST renderers.

This module defines the abstract base class for renderers that turn the
md2inline AST into a styled output tree.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from md2inline.ast import Document
from md2inline.options.base import validate_options_type
from md2inline.renderers.styled_node import StyledNode


class BaseRenderer(ABC):
    """Abstract base class for renderers.

    Parameters
    ----------
    options : Any
        Renderer options; subclasses validate the concrete type

    Examples
    --------
    Creating a custom renderer:

        >>> class PlainRenderer(BaseRenderer):
        ...     def render(self, doc):
        ...         return StyledNode("div", children=[extract_text(doc)])

    """

    def __init__(self, options: Any = None):
        """Store the renderer options."""
        self.options = options

    @staticmethod
    def _validate_options_type(options: Any, expected_type: type, renderer_name: str) -> None:
        """Raise InvalidOptionsError when ``options`` is not an ``expected_type``."""
        validate_options_type(options, expected_type, renderer_name)

    @abstractmethod
    def render(self, doc: Document) -> StyledNode:
        """Render the AST to a styled tree.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Returns
        -------
        StyledNode
            Root of the styled output tree

        """
        pass

    def render_to_string(self, doc: Document, pretty: bool = False) -> str:
        """Render the AST and serialize it to an HTML fragment.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        pretty : bool, default = False
            Indent block containers

        Returns
        -------
        str
            HTML fragment

        """
        return self.render(doc).to_html(pretty=pretty)
