#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/parsers/markdown.py
"""Markdown to AST parser.

This module converts Markdown text into the md2inline AST with a line-oriented
state machine. The parser walks the input one line at a time, keeping an
explicit :class:`ParseState`:

- ``mode`` is one of :class:`ParseMode` (``NORMAL``, ``LIST``, ``TABLE``);
  being in a list and being in a table are mutually exclusive
- ``fence`` is the code-block mask: while a fence is open, every line is
  code, whatever the mode

Block constructs are recognized in this precedence: thematic break, heading,
blockquote, note marker, HTML block, checkbox item, unordered item, ordered
item, table row, paragraph line. Consecutive paragraph lines merge into one
paragraph with soft line breaks between them, so source line breaks survive
rendering.

Malformed input never raises: unterminated fences flush at end of input,
tables with ragged rows are padded, and list items at any indentation find a
parent.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from md2inline.ast import (
    BlockQuote,
    CodeBlock,
    Document,
    Heading,
    HTMLBlock,
    LineBreak,
    Node,
    Paragraph,
    SourceLocation,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from md2inline.constants import HTML_BLOCK_TAGS, Alignment
from md2inline.exceptions import ParsingError
from md2inline.options.markdown import MarkdownParserOptions
from md2inline.parsers.base import BaseParser, ParserInput
from md2inline.parsers.inline import InlineTokenizer
from md2inline.parsers.lists import ListEntry, ListReconstructor

logger = logging.getLogger(__name__)

# =============================================================================
# Regex Patterns for Block Markdown
# =============================================================================

# Fence: ``` or ~~~ (3 or more), optional info string
FENCE_OPEN_PATTERN = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")
FENCE_CLOSE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*$")

# Thematic break: three or more of the same -, _ or *, optionally spaced
THEMATIC_BREAK_PATTERN = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")

# ATX heading: # to ######, space, text, optional closing hashes
HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")

# Blockquote line: > prefix with one optional space
BLOCKQUOTE_PATTERN = re.compile(r"^ {0,3}> ?(.*)$")

# Attribution line closing a blockquote: -- Author, — Author, – Author
ATTRIBUTION_PATTERN = re.compile(r"^\s*(?:--|—|–)\s*(\S.*?)\s*$")

# Task list item: - [ ] text / - [x] text
CHECKBOX_ITEM_PATTERN = re.compile(r"^([ \t]*)[-*+][ \t]+\[([ xX])\](?:[ \t]+(.*))?$")

# Unordered list item: -, * or + followed by whitespace
UNORDERED_ITEM_PATTERN = re.compile(r"^([ \t]*)[-*+][ \t]+(.*)$")

# Ordered list item: digits, . or ), whitespace
ORDERED_ITEM_PATTERN = re.compile(r"^([ \t]*)(\d{1,9})[.)][ \t]+(.*)$")

# Table separator row: |---|:---:|---:|
TABLE_SEPARATOR_PATTERN = re.compile(r"^\s*\|?\s*:?-+:?\s*(?:\|\s*:?-+:?\s*)*\|?\s*$")

# Unescaped column separator
TABLE_PIPE_PATTERN = re.compile(r"(?<!\\)\|")

# HTML block start: a known block tag or a comment
HTML_BLOCK_PATTERN = re.compile(r"^ {0,3}<(?:!--|/?([A-Za-z][A-Za-z0-9]*)(?=[\s/>]|$))")

# Hard line break at end of a paragraph line: two spaces or a backslash
HARD_BREAK_PATTERN = re.compile(r"(?: {2,}|\\)$")


class ParseMode(Enum):
    """Mutually exclusive block contexts of the parser (the code fence is separate)."""

    NORMAL = "normal"
    LIST = "list"
    TABLE = "table"


@dataclass
class ParseState:
    """Mutable state of one parse over a run of lines.

    Parameters
    ----------
    line_offset : int
        Line index of the first line in the whole input (non-zero for
        blockquote bodies)
    depth : int
        Blockquote nesting depth of this run

    """

    line_offset: int = 0
    depth: int = 0
    mode: ParseMode = ParseMode.NORMAL
    blocks: list[Node] = field(default_factory=list)

    # Code fence mask
    fence: Optional[str] = None
    fence_indent: int = 0
    fence_language: Optional[str] = None
    fence_start: int = 0
    code_lines: list[str] = field(default_factory=list)

    # Open paragraph
    paragraph_lines: list[str] = field(default_factory=list)
    paragraph_start: int = 0

    # LIST mode
    list_entries: list[ListEntry] = field(default_factory=list)

    # TABLE mode
    table_rows: list[list[str]] = field(default_factory=list)
    table_alignments: list[Alignment | None] = field(default_factory=list)
    table_in_header: bool = True
    table_start: int = 0


class MarkdownParser(BaseParser):
    """Convert Markdown text to an AST Document.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = MarkdownParser()
        >>> doc = parser.parse("# Title\\n\\nSome **bold** text.")

    With options:

        >>> parser = MarkdownParser(MarkdownParserOptions(list_indent_width=4))
        >>> doc = parser.parse(markdown_text)

    Notes
    -----
    The returned document still holds note markers and the footer rule as
    ordinary paragraphs and thematic breaks; the block extension pass in
    :mod:`md2inline.transforms` turns them into Note and Footer nodes.

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options
        self._inline = InlineTokenizer(max_depth=options.max_inline_depth, parse_html=options.parse_html)
        self._lists = ListReconstructor(max_depth=options.max_list_depth)
        self._note_open_pattern = re.compile(rf"^\s*:::\s*{re.escape(options.note_marker)}\b", re.IGNORECASE)

    def parse(self, input_data: ParserInput) -> Document:
        """Parse Markdown input into an AST Document.

        Parameters
        ----------
        input_data : str, Path, bytes or file-like
            Markdown input. Strings are parsed as Markdown source.

        Returns
        -------
        Document
            AST document node

        Raises
        ------
        ParsingError
            If the input cannot be read, or on an internal parser failure

        """
        text = self._load_text_content(input_data)
        text = text.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")
        try:
            children = self._parse_lines(text.split("\n"))
        except RecursionError as e:
            raise ParsingError("Markdown nesting too deep to parse", parsing_stage="block", original_error=e) from e
        return Document(children=children)

    def parse_inline(self, text: str) -> list[Node]:
        """Parse a single run of inline Markdown."""
        return self._inline.parse(text)

    # ------------------------------------------------------------------
    # Line loop
    # ------------------------------------------------------------------

    def _parse_lines(self, lines: list[str], line_offset: int = 0, depth: int = 0) -> list[Node]:
        """Run the state machine over ``lines`` and return the block nodes."""
        state = ParseState(line_offset=line_offset, depth=depth)
        i = 0
        while i < len(lines):
            next_i = self._process_line(state, lines, i)
            # Every step consumes at least one line
            i = max(next_i, i + 1)

        self._finish(state)
        return state.blocks

    def _process_line(self, state: ParseState, lines: list[str], i: int) -> int:
        """Consume the line at ``i`` (and any lookahead) and return the next index."""
        line = lines[i]

        if state.fence is not None:
            self._handle_code_line(state, line, i)
            return i + 1

        if self._try_open_fence(state, line, i):
            return i + 1

        if state.mode is ParseMode.LIST:
            if not line.strip():
                self._close_list(state)
                return i + 1
            entry = self._match_list_item(line, state.line_offset + i)
            if entry is not None:
                state.list_entries.append(entry)
                return i + 1
            self._close_list(state)

        if state.mode is ParseMode.TABLE:
            if TABLE_PIPE_PATTERN.search(line):
                self._add_table_line(state, line)
                return i + 1
            self._close_table(state)

        if not line.strip():
            self._flush_paragraph(state)
            return i + 1

        for try_block in (
            self._try_parse_thematic_break,
            self._try_parse_heading,
            self._try_parse_blockquote,
            self._try_parse_note_marker,
            self._try_parse_html_block,
            self._try_parse_list_item,
            self._try_parse_table_row,
        ):
            matched, next_i = try_block(state, lines, i)
            if matched:
                return next_i

        if not state.paragraph_lines:
            state.paragraph_start = i
        state.paragraph_lines.append(line)
        return i + 1

    def _finish(self, state: ParseState) -> None:
        """Flush whatever is still open at end of input."""
        if state.fence is not None:
            logger.debug(f"Unterminated code fence at line {state.fence_start + 1} flushed at end of input")
            self._close_fence(state)
        self._flush_paragraph(state)
        if state.mode is ParseMode.LIST:
            self._close_list(state)
        elif state.mode is ParseMode.TABLE:
            self._close_table(state)

    # ------------------------------------------------------------------
    # Code fences
    # ------------------------------------------------------------------

    def _try_open_fence(self, state: ParseState, line: str, i: int) -> bool:
        match = FENCE_OPEN_PATTERN.match(line)
        if not match:
            return False
        indent, fence, info = match.groups()
        if fence[0] == "`" and "`" in info:
            # ```code``` on one line is an inline code span, not a fence
            return False

        self._close_open_blocks(state)
        words = info.strip().split()
        state.fence = fence
        state.fence_indent = len(indent)
        state.fence_language = words[0] if words else None
        state.fence_start = state.line_offset + i
        state.code_lines = []
        return True

    def _handle_code_line(self, state: ParseState, line: str, i: int) -> None:
        assert state.fence is not None
        match = FENCE_CLOSE_PATTERN.match(line)
        if match and match.group(1)[0] == state.fence[0] and len(match.group(1)) >= len(state.fence):
            self._close_fence(state)
            return
        state.code_lines.append(_strip_indent(line, state.fence_indent))

    def _close_fence(self, state: ParseState) -> None:
        assert state.fence is not None
        state.blocks.append(
            CodeBlock(
                content="\n".join(state.code_lines),
                language=state.fence_language,
                fence_char=state.fence[0],
                fence_length=len(state.fence),
                source_location=SourceLocation(line=state.fence_start),
            )
        )
        state.fence = None
        state.fence_language = None
        state.code_lines = []

    # ------------------------------------------------------------------
    # Block matchers: each returns (matched, next_index)
    # ------------------------------------------------------------------

    def _try_parse_thematic_break(self, state: ParseState, lines: list[str], i: int) -> tuple[bool, int]:
        if not THEMATIC_BREAK_PATTERN.match(lines[i]):
            return False, i
        self._flush_paragraph(state)
        state.blocks.append(ThematicBreak(source_location=SourceLocation(line=state.line_offset + i)))
        return True, i + 1

    def _try_parse_heading(self, state: ParseState, lines: list[str], i: int) -> tuple[bool, int]:
        match = HEADING_PATTERN.match(lines[i])
        if not match:
            return False, i
        self._flush_paragraph(state)
        level = len(match.group(1))
        text = (match.group(2) or "").strip()
        state.blocks.append(
            Heading(
                level=level,
                content=self._inline.parse(text),
                source_location=SourceLocation(line=state.line_offset + i),
            )
        )
        return True, i + 1

    def _try_parse_blockquote(self, state: ParseState, lines: list[str], i: int) -> tuple[bool, int]:
        if not BLOCKQUOTE_PATTERN.match(lines[i]):
            return False, i
        self._flush_paragraph(state)

        body: list[str] = []
        j = i
        while j < len(lines):
            match = BLOCKQUOTE_PATTERN.match(lines[j])
            if not match:
                break
            body.append(match.group(1))
            j += 1

        state.blocks.append(self._build_blockquote(body, state.line_offset + i, state.depth))
        return True, j

    def _try_parse_note_marker(self, state: ParseState, lines: list[str], i: int) -> tuple[bool, int]:
        stripped = lines[i].strip()
        if stripped != ":::" and not self._note_open_pattern.match(stripped):
            return False, i
        # Markers always stand alone so the extension pass can match them whole
        self._flush_paragraph(state)
        state.blocks.append(
            Paragraph(content=[Text(content=stripped)], source_location=SourceLocation(line=state.line_offset + i))
        )
        return True, i + 1

    def _try_parse_html_block(self, state: ParseState, lines: list[str], i: int) -> tuple[bool, int]:
        if not self.options.parse_html:
            return False, i
        match = HTML_BLOCK_PATTERN.match(lines[i])
        if not match:
            return False, i
        tag = match.group(1)
        if tag is not None and tag.lower() not in HTML_BLOCK_TAGS:
            return False, i

        self._flush_paragraph(state)
        j = i
        while j < len(lines) and lines[j].strip():
            j += 1
        state.blocks.append(
            HTMLBlock(content="\n".join(lines[i:j]), source_location=SourceLocation(line=state.line_offset + i))
        )
        return True, j

    def _try_parse_list_item(self, state: ParseState, lines: list[str], i: int) -> tuple[bool, int]:
        entry = self._match_list_item(lines[i], state.line_offset + i)
        if entry is None:
            return False, i
        self._flush_paragraph(state)
        state.mode = ParseMode.LIST
        state.list_entries = [entry]
        return True, i + 1

    def _try_parse_table_row(self, state: ParseState, lines: list[str], i: int) -> tuple[bool, int]:
        if not TABLE_PIPE_PATTERN.search(lines[i]):
            return False, i
        self._flush_paragraph(state)
        state.mode = ParseMode.TABLE
        state.table_rows = []
        state.table_alignments = []
        state.table_in_header = True
        state.table_start = state.line_offset + i
        self._add_table_line(state, lines[i])
        return True, i + 1

    # ------------------------------------------------------------------
    # Paragraphs
    # ------------------------------------------------------------------

    def _flush_paragraph(self, state: ParseState) -> None:
        if not state.paragraph_lines:
            return
        state.blocks.append(
            Paragraph(
                content=self._paragraph_content(state.paragraph_lines),
                source_location=SourceLocation(line=state.line_offset + state.paragraph_start),
            )
        )
        state.paragraph_lines = []

    def _paragraph_content(self, lines: list[str]) -> list[Node]:
        """Inline content of paragraph lines joined by line breaks."""
        content: list[Node] = []
        last = len(lines) - 1
        for index, raw in enumerate(lines):
            line = raw.strip(" \t")
            hard = index < last and bool(HARD_BREAK_PATTERN.search(raw.rstrip("\t")))
            if hard and line.endswith("\\"):
                line = line[:-1].rstrip()
            content.extend(self._inline.parse(line))
            if index < last:
                content.append(LineBreak(soft=not hard))
        return content

    # ------------------------------------------------------------------
    # Blockquotes
    # ------------------------------------------------------------------

    def _build_blockquote(self, body: list[str], line: int, depth: int) -> BlockQuote:
        """Build a blockquote from its de-prefixed lines, extracting attribution."""
        source: Optional[str] = None
        while body and not body[-1].strip():
            body = body[:-1]
        if body:
            attribution = ATTRIBUTION_PATTERN.match(body[-1])
            if attribution:
                source = attribution.group(1)
                body = body[:-1]

        if depth + 1 >= self.options.max_blockquote_depth:
            logger.debug(f"Blockquote nesting beyond {self.options.max_blockquote_depth} kept as text")
            text_lines = [ln for ln in body if ln.strip()]
            children: list[Node] = [Paragraph(content=self._paragraph_content(text_lines))] if text_lines else []
        else:
            children = self._parse_lines(body, line_offset=line, depth=depth + 1)

        return BlockQuote(children=children, source=source, source_location=SourceLocation(line=line))

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def _indent_level(self, indent: str) -> int:
        width = len(indent.expandtabs(self.options.tab_width))
        return width // self.options.list_indent_width

    def _match_list_item(self, line: str, line_index: int) -> Optional[ListEntry]:
        """Match a checkbox, unordered or ordered item line, in that order."""
        match = CHECKBOX_ITEM_PATTERN.match(line)
        if match:
            return ListEntry(
                level=self._indent_level(match.group(1)),
                ordered=False,
                content=self._inline.parse((match.group(3) or "").strip()),
                checked=match.group(2).lower() == "x",
                line=line_index,
            )

        match = UNORDERED_ITEM_PATTERN.match(line)
        if match:
            return ListEntry(
                level=self._indent_level(match.group(1)),
                ordered=False,
                content=self._inline.parse(match.group(2).strip()),
                line=line_index,
            )

        match = ORDERED_ITEM_PATTERN.match(line)
        if match:
            return ListEntry(
                level=self._indent_level(match.group(1)),
                ordered=True,
                content=self._inline.parse(match.group(3).strip()),
                number=int(match.group(2)),
                line=line_index,
            )

        return None

    def _close_list(self, state: ParseState) -> None:
        state.blocks.extend(self._lists.build(state.list_entries))
        state.list_entries = []
        state.mode = ParseMode.NORMAL

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _add_table_line(self, state: ParseState, line: str) -> None:
        if TABLE_SEPARATOR_PATTERN.match(line) and "-" in line:
            # The separator ends the header; it never becomes a row
            if state.table_in_header:
                state.table_alignments = [_parse_alignment(cell) for cell in _split_table_row(line)]
                state.table_in_header = False
            return
        state.table_rows.append(_split_table_row(line))

    def _close_table(self, state: ParseState) -> None:
        rows = state.table_rows
        state.mode = ParseMode.NORMAL
        state.table_rows = []
        if not rows:
            return

        width = len(rows[0])
        alignments = (state.table_alignments + [None] * width)[:width]

        def build_row(cells: list[str], is_header: bool) -> TableRow:
            padded = (cells + [""] * width)[:width]
            return TableRow(
                cells=[
                    TableCell(content=self._inline.parse(text), alignment=alignment)
                    for text, alignment in zip(padded, alignments)
                ],
                is_header=is_header,
            )

        state.blocks.append(
            Table(
                header=build_row(rows[0], True),
                rows=[build_row(cells, False) for cells in rows[1:]],
                alignments=alignments,
                source_location=SourceLocation(line=state.table_start),
            )
        )

    def _close_open_blocks(self, state: ParseState) -> None:
        self._flush_paragraph(state)
        if state.mode is ParseMode.LIST:
            self._close_list(state)
        elif state.mode is ParseMode.TABLE:
            self._close_table(state)


def _strip_indent(line: str, width: int) -> str:
    """Remove up to ``width`` leading spaces."""
    removed = 0
    while removed < width and removed < len(line) and line[removed] == " ":
        removed += 1
    return line[removed:]


def _split_table_row(line: str) -> list[str]:
    """Split a table line on unescaped pipes, dropping the outer pipes."""
    text = line.strip()
    if text.startswith("|"):
        text = text[1:]
    if text.endswith("|") and not text.endswith("\\|"):
        text = text[:-1]
    return [cell.strip() for cell in TABLE_PIPE_PATTERN.split(text)]


def _parse_alignment(cell: str) -> Alignment | None:
    cell = cell.strip()
    left, right = cell.startswith(":"), cell.endswith(":")
    if left and right:
        return "center"
    if right:
        return "right"
    if left:
        return "left"
    return None
