#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/renderers/styled_node.py
"""Styled output tree.

A :class:`StyledNode` is one element of the rendered output: a tag name, an
inline style mapping and plain attributes. There are no class names and no
stylesheet; every visual property lives on the node that needs it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union

StyledChild = Union["StyledNode", str]


@dataclass
class StyledNode:
    """A styled element.

    Parameters
    ----------
    tag : str
        Element name (``div``, ``p``, ``a`` ...)
    style : dict, default = empty dict
        CSS properties, serialized as the ``style`` attribute
    attrs : dict, default = empty dict
        Other attributes; a value of None is omitted, an empty string is
        written as a bare attribute
    children : list, default = empty list
        Child nodes and text strings, in order

    """

    tag: str
    style: dict[str, str] = field(default_factory=dict)
    attrs: dict[str, str | None] = field(default_factory=dict)
    children: list[StyledChild] = field(default_factory=list)

    def iter_text(self) -> Iterator[str]:
        """Yield the text strings of the subtree in document order."""
        for child in self.children:
            if isinstance(child, StyledNode):
                yield from child.iter_text()
            else:
                yield child

    @property
    def text(self) -> str:
        """Concatenated text of the subtree."""
        return "".join(self.iter_text())

    def find_all(self, tag: str) -> list[StyledNode]:
        """Return every descendant (and self) with the given tag, in document order."""
        found = [self] if self.tag == tag else []
        for child in self.children:
            if isinstance(child, StyledNode):
                found.extend(child.find_all(tag))
        return found

    def find(self, tag: str) -> StyledNode | None:
        """Return the first node with the given tag, or None."""
        matches = self.find_all(tag)
        return matches[0] if matches else None

    def to_html(self, pretty: bool = False) -> str:
        """Serialize to an HTML fragment."""
        from md2inline.renderers.html import HtmlSerializer

        return HtmlSerializer(pretty=pretty).serialize(self)
