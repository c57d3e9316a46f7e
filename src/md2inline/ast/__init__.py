#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/ast/__init__.py
"""Abstract Syntax Tree (AST) module for document representation.

The parser produces this tree, the extension passes rewrite it, and the
styled renderer consumes it.

- nodes: AST node classes representing document structure
- visitors: Visitor pattern implementation for AST traversal
- transforms: Base transformer
- utils: Text extraction and standalone-link detection

Examples
--------
    >>> from md2inline.ast import Document, Heading, Paragraph, Text
    >>> doc = Document(children=[
    ...     Heading(level=1, content=[Text(content="Title")]),
    ...     Paragraph(content=[Text(content="Hello world")])
    ... ])

"""

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
    SourceLocation,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    get_node_children,
    replace_node_children,
)
from md2inline.ast.transforms import NodeTransformer
from md2inline.ast.utils import count_nodes, extract_text, get_standalone_link, is_standalone_link
from md2inline.ast.visitors import NodeVisitor

__all__ = [
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Document",
    "Emphasis",
    "Footer",
    "FootnoteReference",
    "Heading",
    "HTMLBlock",
    "HTMLInline",
    "Image",
    "ImageReference",
    "LineBreak",
    "Link",
    "LinkReference",
    "List",
    "ListItem",
    "Node",
    "Note",
    "Paragraph",
    "PreviewCard",
    "SourceLocation",
    "Strikethrough",
    "Strong",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ThematicBreak",
    "get_node_children",
    "replace_node_children",
    "NodeTransformer",
    "NodeVisitor",
    "count_nodes",
    "extract_text",
    "get_standalone_link",
    "is_standalone_link",
]
