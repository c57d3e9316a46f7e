#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/ast/transforms.py
"""AST transformation base class.

:class:`NodeTransformer` rebuilds a tree node by node without touching its
input. The block extension pass and the preview-card pass build on it.

Examples
--------
    >>> new_doc = SomeTransformer().transform(doc)

"""

from __future__ import annotations

import copy
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
    get_node_children,
    replace_node_children,
)
from md2inline.ast.visitors import NodeVisitor


class NodeTransformer(NodeVisitor):
    """Base class for transforming AST nodes.

    Subclasses override ``visit_*`` methods to return a modified node, or None
    to remove it. Every method defaults to rebuilding the node with its
    transformed children, so the input tree is never mutated.

    """

    def transform(self, node: Node) -> Node | None:
        """Transform an AST node.

        Parameters
        ----------
        node : Node
            Node to transform

        Returns
        -------
        Node or None
            Transformed node or None to remove

        """
        return self.dispatch(node)

    def _transform_children(self, children: list[Any]) -> list[Any]:
        """Transform a list of child nodes, dropping those transformed to None."""
        result = []
        for child in children:
            transformed = self.transform(child)
            if transformed is not None:
                result.append(transformed)
        return result

    def _generic_transform(self, node: Node) -> Node:
        """Rebuild ``node`` with transformed children.

        Leaf nodes are shallow-copied. Uses :func:`get_node_children` and
        :func:`replace_node_children` so individual visit methods stay short.
        """
        children = get_node_children(node)
        if not children:
            return copy.copy(node)
        return replace_node_children(node, self._transform_children(children))

    def generic_visit(self, node: Any) -> Any:
        """Keep unknown node kinds as they are."""
        return node

    def visit_document(self, node: Document) -> Document:
        """Transform a Document node."""
        return Document(
            children=self._transform_children(node.children),
            metadata=node.metadata.copy(),
            source_location=node.source_location,
        )

    def visit_heading(self, node: Heading) -> Heading:
        """Transform a Heading node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_paragraph(self, node: Paragraph) -> Paragraph:
        """Transform a Paragraph node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_code_block(self, node: CodeBlock) -> CodeBlock:
        """Transform a CodeBlock node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_block_quote(self, node: BlockQuote) -> BlockQuote:
        """Transform a BlockQuote node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_list(self, node: List) -> List:
        """Transform a List node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_list_item(self, node: ListItem) -> ListItem:
        """Transform a ListItem node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_table(self, node: Table) -> Table:
        """Transform a Table node."""
        return Table(
            header=self.transform(node.header) if node.header else None,  # type: ignore[arg-type]
            rows=self._transform_children(node.rows),
            alignments=node.alignments.copy(),
            metadata=node.metadata.copy(),
            source_location=node.source_location,
        )

    def visit_table_row(self, node: TableRow) -> TableRow:
        """Transform a TableRow node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_table_cell(self, node: TableCell) -> TableCell:
        """Transform a TableCell node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_thematic_break(self, node: ThematicBreak) -> ThematicBreak:
        """Transform a ThematicBreak node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_html_block(self, node: HTMLBlock) -> HTMLBlock:
        """Transform an HTMLBlock node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_note(self, node: Note) -> Note:
        """Transform a Note node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_footer(self, node: Footer) -> Footer:
        """Transform a Footer node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_preview_card(self, node: PreviewCard) -> PreviewCard:
        """Transform a PreviewCard node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_text(self, node: Text) -> Text:
        """Transform a Text node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_emphasis(self, node: Emphasis) -> Emphasis:
        """Transform an Emphasis node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_strong(self, node: Strong) -> Strong:
        """Transform a Strong node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_strikethrough(self, node: Strikethrough) -> Strikethrough:
        """Transform a Strikethrough node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_code(self, node: Code) -> Code:
        """Transform a Code node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_link(self, node: Link) -> Link:
        """Transform a Link node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_image(self, node: Image) -> Image:
        """Transform an Image node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_line_break(self, node: LineBreak) -> LineBreak:
        """Transform a LineBreak node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_html_inline(self, node: HTMLInline) -> HTMLInline:
        """Transform an HTMLInline node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_link_reference(self, node: LinkReference) -> LinkReference:
        """Transform a LinkReference node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_image_reference(self, node: ImageReference) -> ImageReference:
        """Transform an ImageReference node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_footnote_reference(self, node: FootnoteReference) -> FootnoteReference:
        """Transform a FootnoteReference node."""
        return self._generic_transform(node)  # type: ignore[return-value]
