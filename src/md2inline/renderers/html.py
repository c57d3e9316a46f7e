#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/renderers/html.py
"""HTML serialization of the styled output tree.

Style mappings become ``style="prop:value;..."`` attributes, attribute values
and text are HTML-escaped, and void elements are written without a closing
tag. :func:`wrap_document` embeds a fragment in a standalone HTML5 page.
"""

from __future__ import annotations

import logging
from html import escape

from md2inline.constants import DEFAULT_DOCUMENT_TITLE
from md2inline.renderers.styled_node import StyledChild, StyledNode

logger = logging.getLogger(__name__)

VOID_ELEMENTS = frozenset({"br", "hr", "img", "input", "meta", "link"})

# Elements whose children may be laid out on separate lines in pretty mode
_PRETTY_CONTAINERS = frozenset(
    {"div", "blockquote", "ul", "ol", "table", "thead", "tbody", "tr", "section", "footer", "aside"}
)


def format_style(style: dict[str, str]) -> str:
    """Serialize a style mapping as ``prop:value;`` pairs, in insertion order."""
    return "".join(f"{prop}:{value};" for prop, value in style.items() if value is not None and value != "")


class HtmlSerializer:
    """Serialize StyledNode trees to HTML.

    Parameters
    ----------
    pretty : bool, default = False
        Put the children of block containers on their own indented lines.
        Text-bearing elements are never reflowed, so ``white-space:pre-wrap``
        content is unchanged.

    """

    def __init__(self, pretty: bool = False):
        """Initialize the serializer."""
        self.pretty = pretty

    def serialize(self, node: StyledChild) -> str:
        """Serialize a node or text string."""
        parts: list[str] = []
        self._write(node, parts, 0)
        return "".join(parts)

    def _write(self, node: StyledChild, parts: list[str], depth: int) -> None:
        if isinstance(node, str):
            parts.append(escape(node, quote=False))
            return

        parts.append(self._open_tag(node))
        if node.tag in VOID_ELEMENTS:
            return

        if self.pretty and self._is_pretty_container(node):
            indent = "  " * (depth + 1)
            for child in node.children:
                parts.append("\n" + indent)
                self._write(child, parts, depth + 1)
            parts.append("\n" + "  " * depth)
        else:
            for child in node.children:
                self._write(child, parts, depth + 1)

        parts.append(f"</{node.tag}>")

    @staticmethod
    def _is_pretty_container(node: StyledNode) -> bool:
        return (
            node.tag in _PRETTY_CONTAINERS
            and bool(node.children)
            and all(isinstance(child, StyledNode) for child in node.children)
            and "white-space" not in node.style
        )

    @staticmethod
    def _open_tag(node: StyledNode) -> str:
        attributes = []
        style = format_style(node.style)
        if style:
            attributes.append(f'style="{escape(style, quote=True)}"')
        for name, value in node.attrs.items():
            if value is None:
                continue
            if value == "":
                attributes.append(name)
            else:
                attributes.append(f'{name}="{escape(value, quote=True)}"')
        if attributes:
            return f"<{node.tag} {' '.join(attributes)}>"
        return f"<{node.tag}>"


def wrap_document(
    body: str,
    title: str | None = None,
    background: str | None = None,
    language: str = "en",
) -> str:
    """Wrap an HTML fragment in a complete HTML5 document.

    Parameters
    ----------
    body : str
        Serialized fragment
    title : str or None, default = None
        Document title; "Document" when omitted
    background : str or None, default = None
        Page background color, usually the theme background
    language : str, default = "en"
        Value of the ``lang`` attribute

    Returns
    -------
    str
        Complete HTML document

    """
    body_style = format_style({"margin": "0", "padding": "16px", "background": background or ""})
    parts = [
        "<!DOCTYPE html>",
        f'<html lang="{escape(language, quote=True)}">',
        "<head>",
        '<meta charset="UTF-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"<title>{escape(title or DEFAULT_DOCUMENT_TITLE, quote=False)}</title>",
        "</head>",
        f'<body style="{escape(body_style, quote=True)}">',
        body,
        "</body>",
        "</html>",
    ]
    return "\n".join(parts) + "\n"
