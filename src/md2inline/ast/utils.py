#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/ast/utils.py
"""Utility functions for working with AST nodes."""

from __future__ import annotations

from typing import Any, Optional, Union

from md2inline.ast.nodes import (
    Code,
    Image,
    LineBreak,
    Link,
    Node,
    Paragraph,
    Text,
    get_node_children,
)


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = "") -> str:
    r"""Extract plain text from a node or list of nodes.

    Text and inline code contribute their content, soft and hard line breaks
    contribute ``"\n"``, and images contribute their alt text.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = ""
        String placed between sibling parts

    Returns
    -------
    str
        Concatenated text content

    Examples
    --------
    >>> para = Paragraph(content=[Text("A"), LineBreak(soft=True), Text("B")])
    >>> extract_text(para)
    'A\nB'

    """
    if isinstance(node_or_nodes, list):
        return joiner.join(extract_text(node, joiner) for node in node_or_nodes)

    node = node_or_nodes
    if isinstance(node, (Text, Code)):
        return node.content
    if isinstance(node, LineBreak):
        return "\n"
    if isinstance(node, Image):
        return node.alt_text
    return joiner.join(extract_text(child, joiner) for child in get_node_children(node))


def count_nodes(node: Node) -> int:
    """Count ``node`` and all of its descendants."""
    total = 0
    stack: list[Any] = [node]
    while stack:
        current = stack.pop()
        total += 1
        stack.extend(get_node_children(current))
    return total


def get_standalone_link(node: Node) -> Optional[Link]:
    """Return the link when ``node`` is a paragraph made of exactly one link.

    Whitespace-only text around the link is ignored; anything else (more text,
    a second link, formatting) disqualifies the paragraph.

    Parameters
    ----------
    node : Node
        Candidate block node

    Returns
    -------
    Link or None
        The sole link of the paragraph, or None

    """
    if not isinstance(node, Paragraph):
        return None
    meaningful = [child for child in node.content if not (isinstance(child, Text) and not child.content.strip())]
    if len(meaningful) != 1 or not isinstance(meaningful[0], Link):
        return None
    return meaningful[0]


def is_standalone_link(node: Node) -> bool:
    """Return True when ``node`` is a paragraph holding exactly one link."""
    return get_standalone_link(node) is not None
