#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

Visitors keep algorithms such as rendering and link extraction separate from
the node classes. Every concrete node calls one ``visit_*`` method from its
``accept``; subclasses of :class:`NodeVisitor` implement all of them, and
:meth:`NodeVisitor.dispatch` routes node kinds the visitor does not know to
:meth:`NodeVisitor.generic_visit`.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from md2inline.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Footer,
    FootnoteReference,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    ImageReference,
    LineBreak,
    Link,
    LinkReference,
    List,
    ListItem,
    Node,
    Note,
    Paragraph,
    PreviewCard,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)

KNOWN_NODE_TYPES: tuple[type[Node], ...] = (
    Document,
    Heading,
    Paragraph,
    CodeBlock,
    BlockQuote,
    List,
    ListItem,
    Table,
    TableRow,
    TableCell,
    ThematicBreak,
    HTMLBlock,
    Note,
    Footer,
    PreviewCard,
    Text,
    Emphasis,
    Strong,
    Strikethrough,
    Code,
    Link,
    Image,
    LineBreak,
    HTMLInline,
    LinkReference,
    ImageReference,
    FootnoteReference,
)


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement a ``visit_*`` method for each node type. Use
    :meth:`dispatch` rather than ``node.accept(visitor)`` when the tree may
    contain node kinds defined outside this package.

    Examples
    --------
    Collect every link URL:

        >>> class LinkCollector(NodeVisitor):
        ...     def __init__(self):
        ...         self.urls = []
        ...     def visit_link(self, node):
        ...         self.urls.append(node.url)
        ...     # remaining visit_* methods walk children

    """

    def dispatch(self, node: Any) -> Any:
        """Visit ``node`` through its ``accept`` method, or ``generic_visit`` if unknown."""
        if isinstance(node, KNOWN_NODE_TYPES):
            return node.accept(self)
        return self.generic_visit(node)

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""
        pass

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""
        pass

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""
        pass

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""
        pass

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        pass

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        pass

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a ThematicBreak node."""
        pass

    @abstractmethod
    def visit_html_block(self, node: HTMLBlock) -> Any:
        """Visit an HTMLBlock node."""
        pass

    @abstractmethod
    def visit_note(self, node: Note) -> Any:
        """Visit a Note node."""
        pass

    @abstractmethod
    def visit_footer(self, node: Footer) -> Any:
        """Visit a Footer node."""
        pass

    @abstractmethod
    def visit_preview_card(self, node: PreviewCard) -> Any:
        """Visit a PreviewCard node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""
        pass

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""
        pass

    @abstractmethod
    def visit_strikethrough(self, node: Strikethrough) -> Any:
        """Visit a Strikethrough node."""
        pass

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""
        pass

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""
        pass

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""
        pass

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""
        pass

    @abstractmethod
    def visit_html_inline(self, node: HTMLInline) -> Any:
        """Visit an HTMLInline node."""
        pass

    @abstractmethod
    def visit_link_reference(self, node: LinkReference) -> Any:
        """Visit a LinkReference node."""
        pass

    @abstractmethod
    def visit_image_reference(self, node: ImageReference) -> Any:
        """Visit an ImageReference node."""
        pass

    @abstractmethod
    def visit_footnote_reference(self, node: FootnoteReference) -> Any:
        """Visit a FootnoteReference node."""
        pass

    def generic_visit(self, node: Any) -> Any:
        """Fallback visitor for node types without a ``visit_*`` method.

        The default implementation does nothing but can be overridden.

        Parameters
        ----------
        node : Any
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        return None
