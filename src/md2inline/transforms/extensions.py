#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/transforms/extensions.py
"""Block extension pass: note blocks and the footer region.

Both extensions are recognized on the top-level children of a
:class:`~md2inline.ast.Document` only. Nested containers (blockquotes, list
items) are left untouched.

Note block
    A paragraph whose trimmed text is ``:::NOTE[ label][(title)]`` opens a
    note. The following top-level nodes become its children until a paragraph
    whose trimmed text is exactly ``:::``. The close marker is consumed; with
    no close marker the note absorbs everything to the end of the document.

Footer region
    After notes are folded, the last top-level thematic break splits the
    document. The nodes after it become one :class:`~md2inline.ast.Footer` and
    the break itself is dropped. A break in last position produces no footer.

The pass is an identity on documents without markers and idempotent on its
own output.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from md2inline.ast import Document, Footer, Node, Note, Paragraph, ThematicBreak, extract_text
from md2inline.ast.transforms import NodeTransformer
from md2inline.constants import DEFAULT_NOTE_MARKER

logger = logging.getLogger(__name__)

NOTE_CLOSE_MARKER = ":::"


def _note_open_pattern(marker: str) -> re.Pattern[str]:
    return re.compile(
        rf"^:::\s*{re.escape(marker)}(?:\s+([^()]*?))?\s*(?:\(([^)]*)\))?\s*$",
        re.IGNORECASE,
    )


class ExtensionTransformer(NodeTransformer):
    """Fold note markers into Note nodes and split off the footer region.

    Parameters
    ----------
    marker : str, default "NOTE"
        Keyword following ``:::`` on a note open line (matched case-insensitively)
    fold_notes : bool, default True
        Recognize note blocks
    split_footer : bool, default True
        Wrap the content after the last top-level rule in a Footer

    Examples
    --------
        >>> doc = MarkdownParser().parse(":::NOTE Tip(Heads up)\\nBody text\\n:::")
        >>> note = ExtensionTransformer().transform(doc).children[0]
        >>> note.label, note.title
        ('Tip', 'Heads up')

    """

    def __init__(self, marker: str = DEFAULT_NOTE_MARKER, fold_notes: bool = True, split_footer: bool = True):
        """Compile the note marker pattern."""
        self.marker = marker
        self.fold_notes = fold_notes
        self.split_footer = split_footer
        self._open_pattern = _note_open_pattern(marker)

    def visit_document(self, node: Document) -> Document:
        """Rewrite the top-level children of the document."""
        children = list(node.children)
        if self.fold_notes:
            children = self._fold_notes(children)
        if self.split_footer:
            children = self._split_footer(children)
        return Document(children=children, metadata=node.metadata.copy(), source_location=node.source_location)

    def _match_open(self, node: Node) -> Optional[re.Match[str]]:
        if not isinstance(node, Paragraph):
            return None
        return self._open_pattern.match(extract_text(node.content).strip())

    @staticmethod
    def _is_close(node: Node) -> bool:
        return isinstance(node, Paragraph) and extract_text(node.content).strip() == NOTE_CLOSE_MARKER

    def _fold_notes(self, children: list[Node]) -> list[Node]:
        result: list[Node] = []
        i = 0
        while i < len(children):
            match = self._match_open(children[i])
            if match is None:
                result.append(children[i])
                i += 1
                continue

            opener = children[i]
            body: list[Node] = []
            j = i + 1
            while j < len(children) and not self._is_close(children[j]):
                body.append(children[j])
                j += 1
            if j >= len(children):
                logger.debug("Note block without close marker absorbs the rest of the document")

            label = (match.group(1) or "").strip() or None
            title = (match.group(2) or "").strip() or None
            result.append(Note(label=label, title=title, children=body, source_location=opener.source_location))
            # Skip the close marker when present
            i = j + 1
        return result

    @staticmethod
    def _split_footer(children: list[Node]) -> list[Node]:
        if any(isinstance(child, Footer) for child in children):
            return children
        last_break = None
        for index, child in enumerate(children):
            if isinstance(child, ThematicBreak):
                last_break = index
        if last_break is None or last_break == len(children) - 1:
            return children

        trailing = children[last_break + 1 :]
        footer = Footer(children=trailing, source_location=trailing[0].source_location)
        return children[:last_break] + [footer]


def apply_extensions(document: Document, marker: str = DEFAULT_NOTE_MARKER) -> Document:
    """Run the note and footer extension pass over ``document``.

    Parameters
    ----------
    document : Document
        Parsed document
    marker : str, default "NOTE"
        Note keyword

    Returns
    -------
    Document
        New document with Note and Footer nodes

    """
    return ExtensionTransformer(marker=marker).transform(document)  # type: ignore[return-value]
