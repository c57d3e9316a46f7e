#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/parsers/lists.py
"""Nested list reconstruction.

The block parser sees list items one line at a time and records each as a
flat :class:`ListEntry` carrying its indentation level. When the list ends,
:class:`ListReconstructor` turns that flat run into nested :class:`List`
nodes:

- an item at level L becomes a child of the nearest preceding item whose
  level is lower than L; with no such item it is a root item
- consecutive siblings of the same kind (ordered or unordered) share one
  ``List``; a change of kind starts a new ``List``
- the children of an item follow its paragraph as a nested ``List``

Every input produces a tree. Jumps of several levels at once (0 then 5)
simply attach to the nearest shallower item, and levels beyond ``max_depth``
are treated as the deepest level so the tree depth stays bounded.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from md2inline.ast import List, ListItem, Node, Paragraph, SourceLocation
from md2inline.constants import DEFAULT_MAX_LIST_DEPTH


@dataclass
class ListEntry:
    """One list-item line as seen by the block parser.

    Parameters
    ----------
    level : int
        Indentation level (leading spaces divided by the indent width)
    ordered : bool
        True for ``1.`` style items
    content : list of Node
        Inline content of the item line
    checked : bool or None, default = None
        Task list state for ``- [ ]`` / ``- [x]`` items
    number : int, default = 1
        Item number for ordered items
    line : int or None, default = None
        Zero-based source line index

    """

    level: int
    ordered: bool
    content: list[Node] = field(default_factory=list)
    checked: Optional[bool] = None
    number: int = 1
    line: Optional[int] = None


@dataclass
class _EntryNode:
    entry: ListEntry
    level: int
    children: list[_EntryNode] = field(default_factory=list)


class ListReconstructor:
    """Build nested list nodes from a flat run of list entries.

    Examples
    --------
    >>> entries = [
    ...     ListEntry(level=0, ordered=False, content=[Text("a")]),
    ...     ListEntry(level=1, ordered=False, content=[Text("a.1")]),
    ...     ListEntry(level=0, ordered=False, content=[Text("b")]),
    ... ]
    >>> [lst] = ListReconstructor().build(entries)
    >>> len(lst.items), len(lst.items[0].children)
    (2, 2)

    """

    def __init__(self, max_depth: int = DEFAULT_MAX_LIST_DEPTH):
        self.max_depth = max(1, max_depth)

    def build(self, entries: list[ListEntry]) -> list[List]:
        """Reconstruct the list forest.

        Parameters
        ----------
        entries : list of ListEntry
            List items in parse order

        Returns
        -------
        list of List
            Top-level lists in source order (more than one when the item kind
            changes between root items)

        """
        return self._to_lists(self._build_forest(entries))

    def _build_forest(self, entries: list[ListEntry]) -> list[_EntryNode]:
        roots: list[_EntryNode] = []
        # Chain of open ancestors; levels strictly increase from bottom to top
        stack: list[_EntryNode] = []
        for entry in entries:
            level = min(entry.level, self.max_depth - 1)
            while stack and stack[-1].level >= level:
                stack.pop()
            node = _EntryNode(entry, level)
            if stack:
                stack[-1].children.append(node)
            else:
                roots.append(node)
            stack.append(node)
        return roots

    def _to_lists(self, nodes: list[_EntryNode]) -> list[List]:
        lists: list[List] = []
        for node in nodes:
            item = self._to_item(node)
            if lists and lists[-1].ordered == node.entry.ordered:
                lists[-1].items.append(item)
            else:
                lists.append(
                    List(
                        ordered=node.entry.ordered,
                        items=[item],
                        start=node.entry.number if node.entry.ordered else 1,
                        source_location=_location(node.entry),
                    )
                )
        return lists

    def _to_item(self, node: _EntryNode) -> ListItem:
        children: list[Node] = []
        if node.entry.content:
            children.append(Paragraph(content=node.entry.content, source_location=_location(node.entry)))
        children.extend(self._to_lists(node.children))
        return ListItem(children=children, checked=node.entry.checked, source_location=_location(node.entry))


def _location(entry: ListEntry) -> Optional[SourceLocation]:
    return SourceLocation(line=entry.line) if entry.line is not None else None
