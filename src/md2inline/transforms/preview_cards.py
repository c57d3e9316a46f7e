#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/transforms/preview_cards.py
"""Replace standalone-link paragraphs with preview cards."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Union

from md2inline.ast import Document, Footer, Node, Note, Paragraph, PreviewCard, get_standalone_link
from md2inline.ast.transforms import NodeTransformer
from md2inline.preview import PreviewInfo, coerce_preview_data

logger = logging.getLogger(__name__)

PreviewData = Mapping[str, Union[PreviewInfo, Mapping[str, Any], None]]


class PreviewCardTransformer(NodeTransformer):
    """Swap standalone links that have preview data for PreviewCard nodes.

    Only top-level paragraphs and the direct children of Note and Footer
    nodes are considered, mirroring where the block extensions live. A URL
    whose data carries neither title nor description keeps its plain link.

    Parameters
    ----------
    preview_data : mapping
        URL to :class:`~md2inline.preview.PreviewInfo` (or a plain dict with
        the same keys)

    """

    def __init__(self, preview_data: PreviewData | None):
        """Normalize the preview data."""
        self.preview_data = coerce_preview_data(preview_data)

    def visit_document(self, node: Document) -> Document:
        """Replace eligible top-level paragraphs."""
        return Document(
            children=self._replace_cards(node.children),
            metadata=node.metadata.copy(),
            source_location=node.source_location,
        )

    def visit_note(self, node: Note) -> Note:
        """Replace eligible paragraphs in a note body."""
        return Note(
            label=node.label,
            title=node.title,
            children=self._replace_cards(node.children),
            metadata=node.metadata.copy(),
            source_location=node.source_location,
        )

    def visit_footer(self, node: Footer) -> Footer:
        """Replace eligible paragraphs in the footer."""
        return Footer(
            children=self._replace_cards(node.children),
            metadata=node.metadata.copy(),
            source_location=node.source_location,
        )

    def _replace_cards(self, children: list[Node]) -> list[Node]:
        result: list[Node] = []
        for child in children:
            if isinstance(child, (Note, Footer)):
                result.append(self.transform(child))  # type: ignore[arg-type]
                continue
            card = self._card_for(child)
            result.append(card if card is not None else child)
        return result

    def _card_for(self, node: Node) -> PreviewCard | None:
        if not isinstance(node, Paragraph):
            return None
        link = get_standalone_link(node)
        if link is None:
            return None
        info = self.preview_data.get(link.url)
        if info is None or not info.has_content:
            return None
        logger.debug(f"Preview card for {link.url}")
        return PreviewCard(url=link.url, info=info, link=link, source_location=node.source_location)


def apply_preview_cards(document: Document, preview_data: PreviewData | None) -> Document:
    """Return ``document`` with preview cards substituted where data exists."""
    if not preview_data:
        return document
    return PreviewCardTransformer(preview_data).transform(document)  # type: ignore[return-value]
