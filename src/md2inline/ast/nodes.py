#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/ast/nodes.py
"""AST node classes for document representation.

This module defines the node hierarchy produced by the Markdown parser and
consumed by the styled renderer. Each node represents a structural or inline
element of the document and supports the visitor pattern through ``accept``.

Node Hierarchy
--------------
Block-level nodes represent structural document elements:
    - Document, Heading, Paragraph, CodeBlock, BlockQuote
    - List, ListItem, Table, TableRow, TableCell
    - ThematicBreak, HTMLBlock
    - Note, Footer, PreviewCard (block extensions)

Inline nodes represent text formatting:
    - Text, Emphasis, Strong, Strikethrough, Code
    - Link, Image, LineBreak, HTMLInline
    - LinkReference, ImageReference, FootnoteReference

Nodes are treated as values. Transforms never mutate a node in place; they
build a new node with :func:`dataclasses.replace`.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Optional

from md2inline.constants import MAX_HEADING_LEVEL, Alignment

if TYPE_CHECKING:
    from md2inline.preview import PreviewInfo


@dataclass
class SourceLocation:
    """Source location information for AST nodes.

    Parameters
    ----------
    line : int
        Zero-based line index where the node starts in the input text
    column : int or None, default = None
        Column number in the source line

    """

    line: int
    column: Optional[int] = None


class Node(ABC):
    """Base class for all AST nodes.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Arbitrary metadata associated with this node
    source_location : SourceLocation or None, default = None
        Information about where this node came from in the source

    """

    metadata: dict[str, Any]
    source_location: Optional[SourceLocation]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing all other nodes.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document
    metadata : dict, default = empty dict
        Document-level metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this document."""
        return visitor.visit_document(self)


@dataclass
class Heading(Node):
    """Heading node with a level clamped to 1-4.

    Source levels 5 and 6 collapse onto level 4, and anything below 1 is
    raised to 1. The mapping is lossy but total, so constructing a heading
    never fails.

    Parameters
    ----------
    level : int
        Heading level; stored clamped to ``[1, 4]``
    content : list of Node, default = empty list
        Inline nodes representing heading text
    metadata : dict, default = empty dict
        Heading metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    level: int
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def __post_init__(self) -> None:
        """Clamp the heading level into the supported range."""
        self.level = min(max(int(self.level), 1), MAX_HEADING_LEVEL)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this heading."""
        return visitor.visit_heading(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes representing paragraph content
    metadata : dict, default = empty dict
        Paragraph metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass
class CodeBlock(Node):
    """Fenced code block with optional language tag.

    Parameters
    ----------
    content : str
        Code content, verbatim (no inline parsing)
    language : str or None, default = None
        Language tag from the fence info string
    fence_char : str, default = '`'
        Fence character used in the source
    fence_length : int, default = 3
        Number of fence characters
    metadata : dict, default = empty dict
        Code block metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    language: Optional[str] = None
    fence_char: str = "`"
    fence_length: int = 3
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block."""
        return visitor.visit_code_block(self)


@dataclass
class BlockQuote(Node):
    """Block quote node containing other block elements.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the quote
    source : str or None, default = None
        Attribution extracted from a trailing ``-- Author`` line
    metadata : dict, default = empty dict
        Block quote metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    source: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_block_quote(self)


@dataclass
class List(Node):
    """List node (ordered or unordered).

    Parameters
    ----------
    ordered : bool
        True for ordered lists, False for unordered
    items : list of ListItem, default = empty list
        List items
    start : int, default = 1
        Starting number for ordered lists
    metadata : dict, default = empty dict
        List metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list."""
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """List item node containing block content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the item (a paragraph, then any nested lists)
    checked : bool or None, default = None
        Task list state; None for an ordinary item
    metadata : dict, default = empty dict
        List item metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    checked: Optional[bool] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    @property
    def is_tight(self) -> bool:
        """Return True when the item holds exactly one paragraph."""
        return len(self.children) == 1 and isinstance(self.children[0], Paragraph)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)


@dataclass
class Table(Node):
    """Table node with a header row, body rows and column alignments.

    The header row is always the first row of the source table. The separator
    line only tells the parser where the header ends; it never reaches the AST.

    Parameters
    ----------
    header : TableRow or None, default = None
        Header row (None only for an empty table built by hand)
    rows : list of TableRow, default = empty list
        Body rows
    alignments : list, default = empty list
        Column alignments ('left', 'center', 'right', or None)
    metadata : dict, default = empty dict
        Table metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    header: Optional[TableRow] = None
    rows: list[TableRow] = field(default_factory=list)
    alignments: list[Alignment | None] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table."""
        return visitor.visit_table(self)


@dataclass
class TableRow(Node):
    """Table row node containing cells.

    Parameters
    ----------
    cells : list of TableCell, default = empty list
        Cells in this row
    is_header : bool, default = False
        Whether this row is the table header
    metadata : dict, default = empty dict
        Row metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table row."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Table cell node containing inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes in the cell
    alignment : {'left', 'center', 'right'} or None, default = None
        Cell alignment inherited from the separator row
    metadata : dict, default = empty dict
        Cell metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: list[Node] = field(default_factory=list)
    alignment: Optional[Alignment] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table cell."""
        return visitor.visit_table_cell(self)


@dataclass
class ThematicBreak(Node):
    """Thematic break (horizontal rule) node."""

    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this thematic break."""
        return visitor.visit_thematic_break(self)


@dataclass
class HTMLBlock(Node):
    """Raw HTML block.

    Kept in the tree so that transforms can see it; the styled renderer
    always suppresses it.

    Parameters
    ----------
    content : str
        Raw HTML content
    metadata : dict, default = empty dict
        HTML block metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this HTML block."""
        return visitor.visit_html_block(self)


@dataclass
class Note(Node):
    """Admonition block opened by ``:::NOTE label(title)`` and closed by ``:::``.

    Parameters
    ----------
    label : str or None, default = None
        Label shown in the note header (rendered as "Note" when absent)
    title : str or None, default = None
        Parenthesized title following the label
    children : list of Node, default = empty list
        Block nodes between the open and close markers
    metadata : dict, default = empty dict
        Note metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    label: Optional[str] = None
    title: Optional[str] = None
    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this note."""
        return visitor.visit_note(self)


@dataclass
class Footer(Node):
    """Closing region holding every top-level block after the last thematic break.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block nodes of the footer region
    metadata : dict, default = empty dict
        Footer metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footer."""
        return visitor.visit_footer(self)


@dataclass
class PreviewCard(Node):
    """Link preview card replacing a standalone-link paragraph.

    Parameters
    ----------
    url : str
        Target URL of the standalone link
    info : PreviewInfo
        Preview metadata gathered for the URL
    link : Link or None, default = None
        The original link node, kept so the card can fall back to it
    metadata : dict, default = empty dict
        Card metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    url: str
    info: PreviewInfo
    link: Optional[Link] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this preview card."""
        return visitor.visit_preview_card(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text node.

    Parameters
    ----------
    content : str
        Text content
    metadata : dict, default = empty dict
        Text metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text."""
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """Emphasis (italic) node."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this emphasis."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strong (bold) node."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strong."""
        return visitor.visit_strong(self)


@dataclass
class Strikethrough(Node):
    """Strikethrough node (``~~text~~``)."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strikethrough."""
        return visitor.visit_strikethrough(self)


@dataclass
class Code(Node):
    """Inline code span.

    Parameters
    ----------
    content : str
        Code text; may be empty
    metadata : dict, default = empty dict
        Code metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code."""
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Hyperlink node.

    The URL is stored exactly as written. Sanitization happens when the link
    is rendered, so every rendering path applies it.

    Parameters
    ----------
    url : str
        Link target as written in the source
    content : list of Node, default = empty list
        Inline nodes for the link text; may be empty
    title : str or None, default = None
        Optional link title
    metadata : dict, default = empty dict
        Link metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    @property
    def is_external(self) -> bool:
        """Return True for absolute http(s) URLs."""
        lowered = self.url.strip().lower()
        return lowered.startswith("http://") or lowered.startswith("https://")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link."""
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Image node.

    Parameters
    ----------
    url : str
        Image source as written in the source
    alt_text : str, default = ''
        Alternative text
    title : str or None, default = None
        Optional image title
    metadata : dict, default = empty dict
        Image metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    url: str
    alt_text: str = ""
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image."""
        return visitor.visit_image(self)


@dataclass
class LineBreak(Node):
    """Line break inside a paragraph.

    Parameters
    ----------
    soft : bool, default = False
        True for a break between two consecutive source lines, rendered as a
        literal newline; False for an explicit hard break
    metadata : dict, default = empty dict
        Line break metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    soft: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this line break."""
        return visitor.visit_line_break(self)


@dataclass
class HTMLInline(Node):
    """Inline raw HTML tag, suppressed by the styled renderer."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline HTML."""
        return visitor.visit_html_inline(self)


@dataclass
class LinkReference(Node):
    """Unresolved reference-style link (``[text][label]`` or ``[label][]``).

    Parameters
    ----------
    label : str
        Reference identifier
    content : list of Node, default = empty list
        Link text when it differs from the label
    metadata : dict, default = empty dict
        Metadata
    source_location : SourceLocation or None, default = None
        Source location information

    """

    label: str
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link reference."""
        return visitor.visit_link_reference(self)


@dataclass
class ImageReference(Node):
    """Unresolved reference-style image (``![alt][label]``)."""

    label: str
    alt_text: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image reference."""
        return visitor.visit_image_reference(self)


@dataclass
class FootnoteReference(Node):
    """Footnote reference (``[^id]``); definitions are never resolved."""

    identifier: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote reference."""
        return visitor.visit_footnote_reference(self)


# ============================================================================
# Child access helpers
# ============================================================================

_CHILDREN_NODES = (Document, BlockQuote, ListItem, Note, Footer)
_CONTENT_NODES = (Heading, Paragraph, Emphasis, Strong, Strikethrough, Link, TableCell, LinkReference)


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> heading = Heading(level=1, content=[Text("Hello"), Strong(content=[Text("world")])])
    >>> len(get_node_children(heading))
    2

    """
    if isinstance(node, _CHILDREN_NODES):
        return list(node.children)

    if isinstance(node, _CONTENT_NODES):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    if isinstance(node, Table):
        children: list[Node] = []
        if node.header:
            children.append(node.header)
        children.extend(node.rows)
        return children

    if isinstance(node, TableRow):
        return list(node.cells)

    return []


def replace_node_children(node: Node, new_children: list[Node]) -> Node:
    """Create a copy of a node with replaced children.

    Parameters
    ----------
    node : Node
        The node to copy and modify
    new_children : list of Node
        New children to use in the copy

    Returns
    -------
    Node
        New node with replaced children

    Raises
    ------
    ValueError
        If the node type doesn't support children, or a table receives
        something other than rows

    Notes
    -----
    For tables, the first row becomes the header and every other row a body
    row, mirroring how the parser builds tables.

    """
    if isinstance(node, _CHILDREN_NODES):
        return replace(node, children=new_children)

    if isinstance(node, _CONTENT_NODES):
        return replace(node, content=new_children)

    if isinstance(node, List):
        return replace(node, items=new_children)  # type: ignore[arg-type]

    if isinstance(node, Table):
        if not all(isinstance(child, TableRow) for child in new_children):
            raise ValueError("Table children must all be TableRow instances")
        rows: list[TableRow] = list(new_children)  # type: ignore[arg-type]
        if not rows:
            return replace(node, header=None, rows=[])
        return replace(node, header=rows[0], rows=rows[1:])

    if isinstance(node, TableRow):
        return replace(node, cells=new_children)  # type: ignore[arg-type]

    if new_children:
        raise ValueError(f"{type(node).__name__} does not support children")
    return node
