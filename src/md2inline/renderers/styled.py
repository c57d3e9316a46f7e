#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/renderers/styled.py
"""Themed, inline-styled rendering of the AST.

The StyledRenderer maps every node to :class:`StyledNode` elements whose
visual properties are written inline. It is a pure function of the document,
the theme, the options and the preview data: no I/O, no state kept between
calls.

Every ``visit_*`` method returns a list of styled children, so a node can
render as one element, several, or nothing at all.

Rendering rules worth knowing:

- consecutive source lines stay on separate lines: paragraphs carry
  ``white-space:pre-wrap`` and soft line breaks render as a literal newline
- a tight list item (a single paragraph) renders its inline content directly;
  paragraphs in loose items render without their block margin
- the first table row is always in ``thead``
- raw HTML is never emitted; a warning is logged instead
- every href and src passes through :func:`~md2inline.utils.security.sanitize_url`
- node kinds the renderer does not know render their children, else their text,
  else nothing

Examples
--------
    >>> renderer = StyledRenderer(theme="light")
    >>> root = renderer.render(doc)
    >>> html = root.to_html()

"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from md2inline.ast import (
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
    extract_text,
)
from md2inline.ast.visitors import NodeVisitor
from md2inline.constants import DEFAULT_NOTE_LABEL, FONT_STACK, MAX_HEADING_LEVEL, MONOSPACE_FONT_STACK
from md2inline.highlight import highlight_code
from md2inline.options.render import StyledRendererOptions
from md2inline.preview import PreviewInfo
from md2inline.renderers.base import BaseRenderer
from md2inline.renderers.styled_node import StyledChild, StyledNode
from md2inline.themes import Theme, ThemeSpec, resolve_theme
from md2inline.transforms.preview_cards import PreviewData, apply_preview_cards
from md2inline.utils.security import get_url_hostname, sanitize_url

logger = logging.getLogger(__name__)

ELLIPSIS = "…"


class StyledRenderer(NodeVisitor, BaseRenderer):
    """Render an AST document into a StyledNode tree.

    Parameters
    ----------
    theme : str, Theme, mapping or None, default = None
        Theme name, Theme, or override mapping (see :func:`~md2inline.themes.resolve_theme`)
    options : StyledRendererOptions or None, default = None
        Rendering options
    preview_data : mapping or None, default = None
        URL to preview metadata, used when ``options.enable_link_preview`` is set

    """

    def __init__(
        self,
        theme: ThemeSpec = None,
        options: StyledRendererOptions | None = None,
        preview_data: PreviewData | None = None,
    ):
        """Resolve the theme and store options."""
        BaseRenderer._validate_options_type(options, StyledRendererOptions, "styled")
        options = options or StyledRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: StyledRendererOptions = options
        self.theme: Theme = resolve_theme(theme)
        self.preview_data = preview_data
        self._list_depth = 0

    def render(self, doc: Document) -> StyledNode:
        """Render a document to its styled container.

        Parameters
        ----------
        doc : Document
            Document to render

        Returns
        -------
        StyledNode
            Themed container ``div``

        """
        if self.options.enable_link_preview and self.preview_data:
            doc = apply_preview_cards(doc, self.preview_data)
        self._list_depth = 0
        [container] = self.visit_document(doc)
        return container  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _render_nodes(self, nodes: list[Any]) -> list[StyledChild]:
        rendered: list[StyledChild] = []
        for node in nodes:
            rendered.extend(self.dispatch(node) or [])
        return rendered

    def _url(self, url: str) -> str:
        return sanitize_url(url, self.options.unsafe_url_placeholder)

    def _border(self, width: str, color: str) -> str:
        return f"{width} solid {color}"

    # ------------------------------------------------------------------
    # Unknown node kinds
    # ------------------------------------------------------------------

    def generic_visit(self, node: Any) -> list[StyledChild]:
        """Render an unknown node: its children, else its text, else nothing."""
        for attr in ("children", "content"):
            value = getattr(node, attr, None)
            if isinstance(value, list):
                return self._render_nodes(value)
        for attr in ("content", "value", "text"):
            value = getattr(node, attr, None)
            if isinstance(value, str):
                return [value]
        logger.debug(f"Nothing to render for {type(node).__name__}")
        return []

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> list[StyledChild]:
        """Render the themed container."""
        t = self.theme
        style = {
            "background": t.background,
            "color": t.text,
            "padding": "30px",
            "border-radius": "5px",
            "font-family": FONT_STACK,
            "line-height": "1.6",
        }
        return [StyledNode("div", style=style, children=self._render_nodes(node.children))]

    def visit_heading(self, node: Heading) -> list[StyledChild]:
        """Render a heading with its level's typography."""
        level = min(max(node.level, 1), MAX_HEADING_LEVEL)
        border = self.theme.table_border
        styles = {
            1: {
                "font-size": "2em",
                "font-weight": "bold",
                "margin": "1.0em 0",
                "line-height": "1.2",
                "letter-spacing": "-0.03em",
                "padding-bottom": ".5rem",
                "border-bottom": self._border("3px", border),
            },
            2: {
                "font-size": "1.5em",
                "font-weight": "bold",
                "margin": ".75em 0",
                "line-height": "1.3",
                "padding-bottom": ".4rem",
                "border-bottom": self._border("1px", border),
            },
            3: {"font-size": "1.17em", "font-weight": "600", "margin": ".5em 0", "line-height": "1.4"},
            4: {"font-size": "1.1em", "font-weight": "600", "margin": ".25em 0", "line-height": "1.4"},
        }
        return [StyledNode(f"h{level}", style=styles[level], children=self._render_nodes(node.content))]

    def visit_paragraph(self, node: Paragraph) -> list[StyledChild]:
        """Render a paragraph, keeping source line breaks visible."""
        style = {"margin": "0 0 16px 0", "white-space": "pre-wrap"}
        return [StyledNode("p", style=style, children=self._render_nodes(node.content))]

    def visit_code_block(self, node: CodeBlock) -> list[StyledChild]:
        """Render a fenced code block, highlighted when a language is known."""
        t = self.theme
        if self.options.highlight_code:
            code_children = highlight_code(node.content, node.language, t, self.options.pygments_style)
        else:
            code_children = [node.content]

        code_attrs: dict[str, Optional[str]] = {}
        if node.language:
            code_attrs["data-language"] = node.language
        code = StyledNode("code", style={"font-family": MONOSPACE_FONT_STACK}, attrs=code_attrs, children=code_children)
        style = {
            "background": t.code_background,
            "color": t.code_text,
            "padding": "10px",
            "border-radius": "4px",
            "overflow-x": "auto",
            "margin": "0 0 16px 0",
            "white-space": "pre",
            "font-family": MONOSPACE_FONT_STACK,
            "font-size": ".9em",
            "line-height": "1.45",
        }
        return [StyledNode("pre", style=style, children=[code])]

    def visit_block_quote(self, node: BlockQuote) -> list[StyledChild]:
        """Render a blockquote and its attribution line."""
        t = self.theme
        children = self._render_nodes(node.children)
        if node.source:
            cite_style = {
                "display": "block",
                "text-align": "right",
                "margin-top": "8px",
                "font-size": ".9em",
                "font-style": "italic",
                "opacity": ".8",
            }
            children.append(StyledNode("footer", style=cite_style, children=[f"— {node.source}"]))
        style = {
            "border-left": self._border("4px", t.blockquote_border),
            "padding": "8px 16px",
            "background": t.blockquote_background,
            "color": t.blockquote_text,
            "margin": "1.5em 0",
            "border-radius": "0 4px 4px 0",
        }
        return [StyledNode("blockquote", style=style, children=children)]

    def visit_list(self, node: List) -> list[StyledChild]:
        """Render an ordered or unordered list; nested lists have no outer margin."""
        nested = self._list_depth > 0
        style = {
            "margin": "0" if nested else "0 0 16px 0",
            "padding-left": "30px",
            "list-style-type": "decimal" if node.ordered else "disc",
        }
        attrs: dict[str, Optional[str]] = {}
        if node.ordered and node.start != 1:
            attrs["start"] = str(node.start)

        self._list_depth += 1
        try:
            items = self._render_nodes(node.items)
        finally:
            self._list_depth -= 1
        return [StyledNode("ol" if node.ordered else "ul", style=style, attrs=attrs, children=items)]

    def visit_list_item(self, node: ListItem) -> list[StyledChild]:
        """Render a list item, collapsing paragraph spacing."""
        children: list[StyledChild] = []
        style = {"margin": "4px 0", "display": "list-item", "white-space": "pre-wrap"}

        if node.checked is not None:
            style["list-style-type"] = "none"
            checkbox_attrs: dict[str, Optional[str]] = {"type": "checkbox", "disabled": ""}
            if node.checked:
                checkbox_attrs["checked"] = ""
            children.append(
                StyledNode(
                    "input",
                    style={"margin-right": "8px", "vertical-align": "middle"},
                    attrs=checkbox_attrs,
                )
            )

        if node.is_tight:
            children.extend(self._render_nodes(node.children[0].content))  # type: ignore[attr-defined]
        else:
            for child in node.children:
                if isinstance(child, Paragraph):
                    # Inline content only; the item supplies the spacing
                    children.extend(self._render_nodes(child.content))
                else:
                    children.extend(self.dispatch(child) or [])

        return [StyledNode("li", style=style, children=children)]

    def visit_table(self, node: Table) -> list[StyledChild]:
        """Render a table; the first row always goes in ``thead``."""
        rows = ([node.header] if node.header is not None else []) + list(node.rows)
        if not rows:
            return []
        header, body = rows[0], rows[1:]
        alignments = list(node.alignments)

        table_children: list[StyledChild] = [
            StyledNode("thead", children=[self._render_row(header, True, alignments)])
        ]
        if body:
            table_children.append(
                StyledNode("tbody", children=[self._render_row(row, False, alignments) for row in body])
            )
        style = {"border-collapse": "collapse", "width": "100%", "margin": "1em 0"}
        return [StyledNode("table", style=style, children=table_children)]

    def _render_row(self, row: TableRow, header: bool, alignments: list[Any]) -> StyledNode:
        cells = []
        for index, cell in enumerate(row.cells):
            alignment = cell.alignment or (alignments[index] if index < len(alignments) else None)
            cells.append(self._render_cell(cell, header, alignment))
        return StyledNode("tr", children=cells)  # type: ignore[arg-type]

    def _render_cell(self, cell: TableCell, header: bool, alignment: Optional[str]) -> StyledNode:
        t = self.theme
        style = {
            "border": self._border("1px", t.table_border),
            "padding": "8px",
            "text-align": alignment or "left",
        }
        if header:
            style["background"] = t.table_header_background
            style["font-weight"] = "bold"
        return StyledNode("th" if header else "td", style=style, children=self._render_nodes(cell.content))

    def visit_table_row(self, node: TableRow) -> list[StyledChild]:
        """Render a row outside a table context."""
        return [self._render_row(node, node.is_header, [])]

    def visit_table_cell(self, node: TableCell) -> list[StyledChild]:
        """Render a cell outside a table context."""
        return [self._render_cell(node, False, node.alignment)]

    def visit_thematic_break(self, node: ThematicBreak) -> list[StyledChild]:
        """Render a horizontal rule."""
        style = {"border": "0", "border-top": self._border("1px", self.theme.hr), "margin": "1em 0"}
        return [StyledNode("hr", style=style)]

    def visit_html_block(self, node: HTMLBlock) -> list[StyledChild]:
        """Suppress raw HTML."""
        logger.warning("Raw HTML block suppressed")
        return []

    def visit_note(self, node: Note) -> list[StyledChild]:
        """Render a note box with its label and optional title."""
        t = self.theme
        header_children: list[StyledChild] = [
            StyledNode(
                "span",
                style={
                    "text-transform": "uppercase",
                    "letter-spacing": ".05em",
                    "font-size": ".8em",
                    "font-weight": "bold",
                    "color": t.link,
                },
                children=[node.label or DEFAULT_NOTE_LABEL],
            )
        ]
        if node.title:
            header_children.append(
                StyledNode("strong", style={"font-weight": "bold", "margin-left": "8px"}, children=[node.title])
            )
        header = StyledNode("div", style={"margin-bottom": "8px"}, children=header_children)

        style = {
            "border": self._border("1px", t.blockquote_border),
            "border-left": self._border("4px", t.link),
            "border-radius": "6px",
            "background": t.blockquote_background,
            "padding": "12px 16px",
            "margin": "1.5em 0",
        }
        children = [header, *self._render_nodes(node.children)]
        return [StyledNode("div", style=style, attrs={"role": "note"}, children=children)]

    def visit_footer(self, node: Footer) -> list[StyledChild]:
        """Render the footer region."""
        style = {
            "border-top": self._border("1px", self.theme.hr),
            "margin-top": "2em",
            "padding-top": "1em",
            "font-size": ".85em",
            "opacity": ".8",
        }
        return [StyledNode("footer", style=style, children=self._render_nodes(node.children))]

    def visit_preview_card(self, node: PreviewCard) -> list[StyledChild]:
        """Render a link preview card."""
        return [self._render_card(node.url, node.info)]

    def _render_card(self, url: str, info: PreviewInfo) -> StyledNode:
        t = self.theme
        href = self._url(url)
        safe = href != self.options.unsafe_url_placeholder
        site = info.site_name or (get_url_hostname(info.url or url) if safe else None) or ""

        text_children: list[StyledChild] = [
            StyledNode(
                "div",
                style={"font-size": "15px", "font-weight": "bold", "margin-bottom": "4px", "line-height": "1.3"},
                children=[info.title or (url if safe else "")],
            )
        ]
        if info.description:
            text_children.append(
                StyledNode(
                    "div",
                    style={"font-size": "12px", "opacity": ".75", "margin-bottom": "6px"},
                    children=[self._truncate(info.description)],
                )
            )
        text_children.append(
            StyledNode(
                "div",
                style={
                    "font-size": "11px",
                    "color": t.link,
                    "white-space": "nowrap",
                    "font-weight": "500",
                    "text-transform": "lowercase",
                },
                children=[site],
            )
        )

        content: list[StyledChild] = [
            StyledNode(
                "div",
                style={
                    "flex": "1",
                    "padding": "12px",
                    "display": "flex",
                    "flex-direction": "column",
                    "justify-content": "space-between",
                    "min-width": "0",
                },
                children=text_children,
            )
        ]
        image = self._url(info.image) if info.image else None
        if image and image != self.options.unsafe_url_placeholder:
            content.append(
                StyledNode(
                    "div",
                    style={"width": "100px", "height": "100px", "background": t.table_border, "overflow": "hidden"},
                    children=[
                        StyledNode(
                            "img",
                            style={"width": "100%", "height": "100%", "object-fit": "cover"},
                            attrs={"src": image, "alt": "", "onerror": "this.style.display='none'"},
                        )
                    ],
                )
            )

        attrs: dict[str, Optional[str]] = {"href": href}
        if safe:
            attrs.update({"target": "_blank", "rel": "noopener noreferrer"})
        style = {
            "display": "block",
            "text-decoration": "none",
            "color": "inherit",
            "border": self._border("1px", t.table_border),
            "border-radius": "12px",
            "overflow": "hidden",
            "margin": "20px 0",
            "background": t.background,
            "box-shadow": "0 4px 6px rgba(0,0,0,0.1)",
            "max-width": "600px",
        }
        body = StyledNode("div", style={"display": "flex", "flex-direction": "row", "height": "100px"}, children=content)
        return StyledNode("a", style=style, attrs=attrs, children=[body])

    def _truncate(self, text: str) -> str:
        limit = self.options.preview_description_length
        if len(text) <= limit:
            return text
        return text[:limit].rstrip() + ELLIPSIS

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> list[StyledChild]:
        """Render text as a plain string."""
        return [node.content] if node.content else []

    def visit_emphasis(self, node: Emphasis) -> list[StyledChild]:
        """Render emphasis."""
        return [StyledNode("em", style={"font-style": "italic"}, children=self._render_nodes(node.content))]

    def visit_strong(self, node: Strong) -> list[StyledChild]:
        """Render strong emphasis."""
        return [StyledNode("strong", style={"font-weight": "bold"}, children=self._render_nodes(node.content))]

    def visit_strikethrough(self, node: Strikethrough) -> list[StyledChild]:
        """Render strikethrough."""
        return [
            StyledNode("del", style={"text-decoration": "line-through"}, children=self._render_nodes(node.content))
        ]

    def visit_code(self, node: Code) -> list[StyledChild]:
        """Render inline code."""
        t = self.theme
        style = {
            "background": t.code_background,
            "color": t.code_text,
            "padding": "2px 4px",
            "border-radius": "3px",
            "font-family": MONOSPACE_FONT_STACK,
            "font-size": ".9em",
        }
        return [StyledNode("code", style=style, children=[node.content])]

    def visit_link(self, node: Link) -> list[StyledChild]:
        """Render a link with a sanitized href."""
        href = self._url(node.url)
        attrs: dict[str, Optional[str]] = {"href": href}
        if node.title:
            attrs["title"] = node.title
        if self.options.external_links_new_tab and node.is_external and href != self.options.unsafe_url_placeholder:
            attrs["target"] = "_blank"
            attrs["rel"] = "noopener noreferrer"
        style = {"color": self.theme.link, "text-decoration": "underline"}
        return [StyledNode("a", style=style, attrs=attrs, children=self._render_nodes(node.content))]

    def visit_image(self, node: Image) -> list[StyledChild]:
        """Render an image with a sanitized src."""
        attrs: dict[str, Optional[str]] = {"src": self._url(node.url), "alt": node.alt_text}
        if node.title:
            attrs["title"] = node.title
        style = {"max-width": "100%", "height": "auto", "display": "block", "margin": "10px 0"}
        return [StyledNode("img", style=style, attrs=attrs)]

    def visit_line_break(self, node: LineBreak) -> list[StyledChild]:
        """Render a soft break as a newline and a hard break as ``br``."""
        if node.soft:
            return ["\n"]
        return [StyledNode("br")]

    def visit_html_inline(self, node: HTMLInline) -> list[StyledChild]:
        """Suppress raw inline HTML."""
        logger.warning("Raw inline HTML suppressed")
        return []

    def visit_link_reference(self, node: LinkReference) -> list[StyledChild]:
        """Render an unresolved reference link as its bracket text."""
        text = extract_text(node.content)
        if not text or text == node.label:
            return [f"[{node.label}]"]
        return [f"[{text}][{node.label}]"]

    def visit_image_reference(self, node: ImageReference) -> list[StyledChild]:
        """Render an unresolved reference image as its bracket text."""
        return [f"![{node.alt_text or node.label}]"]

    def visit_footnote_reference(self, node: FootnoteReference) -> list[StyledChild]:
        """Render a footnote reference as its bracket text."""
        return [f"[^{node.identifier}]"]


def render_styled(
    doc: Document,
    theme: ThemeSpec = None,
    options: StyledRendererOptions | None = None,
    preview_data: Mapping[str, Any] | None = None,
) -> StyledNode:
    """Render ``doc`` with a fresh :class:`StyledRenderer`."""
    return StyledRenderer(theme=theme, options=options, preview_data=preview_data).render(doc)


__all__ = ["StyledRenderer", "render_styled"]
