#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/parsers/inline.py
"""Inline Markdown tokenizer.

Inline markup is recognized by a cascade of regex passes applied in a fixed
priority order. Each pass scans only the literal text left over by the passes
before it; inline nodes that have already been produced are never rescanned.
Within one pass, matches are taken left to right without overlap.

Pass order
----------
1. code spans
2. backslash escapes
3. bold (``***x***`` as bold italic, ``**x**``, ``__x__``)
4. italic (``*x*``, ``_x_``)
5. strikethrough (``~~x~~``)
6. images (``![alt](url "title")``), attempted whole before links
7. links (``[text](url "title")``)
8. reference images, reference links, footnote references
9. autolinks (``<https://...>``) and bare http(s) URLs
10. inline HTML tags and comments

Passes 1-5 never split an image or link construct: a match that starts or
ends inside ``[...](...)`` without enclosing it whole is skipped, so link text
such as ``[**bold**](url)`` reaches the link pass intact. The text inside
bold, italic, strikethrough and link text is tokenized again with the full
cascade, up to a configurable depth.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Pattern, Union

from md2inline.ast import (
    Code,
    Emphasis,
    FootnoteReference,
    HTMLInline,
    Image,
    ImageReference,
    Link,
    LinkReference,
    Node,
    Strikethrough,
    Strong,
    Text,
)
from md2inline.constants import DEFAULT_MAX_INLINE_DEPTH

logger = logging.getLogger(__name__)

Segment = Union[str, Node]

# =============================================================================
# Regex Patterns for Inline Markdown
# =============================================================================

# Code span: a run of backticks, content, the same run
CODE_PATTERN = re.compile(r"(?<!`)(`+)(?!`)(.*?)(?<!`)\1(?!`)")

# Backslash escape of ASCII punctuation
ESCAPE_PATTERN = re.compile(r"\\([!\"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~])")

# Bold: ***text*** (bold italic), **text** or __text__
BOLD_PATTERN = re.compile(
    r"\*\*\*(?=\S)(.+?)(?<=\S)\*\*\*(?!\*)|\*\*(?=\S)(.+?)(?<=\S)\*\*|(?<!\w)__(?=\S)(.+?)(?<=\S)__(?!\w)"
)

# Italic: *text* or _text_ (not flanked by another marker of the same kind)
ITALIC_PATTERN = re.compile(r"(?<!\*)\*(?![\s*])(.+?)(?<![\s*])\*(?!\*)|(?<![\w_])_(?![\s_])(.+?)(?<![\s_])_(?![\w_])")

# Strikethrough: ~~text~~
STRIKETHROUGH_PATTERN = re.compile(r"~~(?=\S)(.+?)(?<=\S)~~")

# Link destination with an optional "title" or 'title'
_DESTINATION = r"\(\s*(<[^<>\n]*>|[^\s()<>]*(?:\([^\s()]*\)[^\s()<>]*)*)(?:\s+(?:\"([^\"]*)\"|'([^']*)'))?\s*\)"

# Image: ![alt](url "title")
IMAGE_PATTERN = re.compile(r"!\[([^\[\]]*)\]" + _DESTINATION)

# Link: [text](url "title"); text may hold one level of nested brackets
LINK_PATTERN = re.compile(r"(?<!!)\[((?:[^\[\]]|\[[^\[\]]*\])*)\]" + _DESTINATION)

# Reference image: ![alt][label]
IMAGE_REFERENCE_PATTERN = re.compile(r"!\[([^\[\]]*)\]\[([^\[\]]*)\]")

# Reference link: [text][label] or [label][]
LINK_REFERENCE_PATTERN = re.compile(r"(?<!!)\[([^\[\]]+)\]\[([^\[\]]*)\]")

# Footnote reference: [^id]
FOOTNOTE_PATTERN = re.compile(r"\[\^([^\[\]\s]+)\]")

# Autolink: <https://example.com> or <mailto:user@example.com>
AUTOLINK_PATTERN = re.compile(r"<((?:https?|ftp)://[^\s<>]+|mailto:[^\s<>]+)>", re.IGNORECASE)

# Bare URL; trailing punctuation is left out of the link
BARE_URL_PATTERN = re.compile(r"(?<![\w/\"'=(<\]])https?://[^\s<>()\[\]]*[^\s<>()\[\].,;:!?'\"*_~]", re.IGNORECASE)

# Inline HTML: opening/closing/self-closing tags and comments
HTML_INLINE_PATTERN = re.compile(r"<!--.*?-->|</?[A-Za-z][A-Za-z0-9-]*(?:\s+[^<>]*?)?\s*/?>", re.DOTALL)

# Constructs that emphasis passes must not cut through
_PROTECTED_PATTERNS = (IMAGE_PATTERN, LINK_PATTERN)


# Passes that produce links; skipped inside link text so links never nest
_LINK_PASSES = frozenset({"link", "link_reference", "autolink", "bare_url"})


@dataclass(frozen=True)
class InlineContext:
    """Position of a tokenize call inside the inline tree.

    Parameters
    ----------
    depth : int
        Number of enclosing inline containers
    in_link : bool
        True while tokenizing link text

    """

    depth: int = 0
    in_link: bool = False

    def nested(self, in_link: bool = False) -> InlineContext:
        """Return the context for text one container deeper."""
        return InlineContext(depth=self.depth + 1, in_link=self.in_link or in_link)


Builder = Callable[[re.Match, InlineContext], Node]


class InlineTokenizer:
    """Split a run of text into literal strings and inline nodes.

    Parameters
    ----------
    max_depth : int, default 16
        Maximum nesting depth for recursive tokenization of the text inside
        bold, italic, strikethrough and link text. Deeper text stays literal.
    parse_html : bool, default True
        Recognize inline HTML tags as :class:`HTMLInline` nodes.

    Examples
    --------
    >>> tokenizer = InlineTokenizer()
    >>> tokenizer.tokenize("**bold** and *italic*")
    [Strong(...), ' and ', Emphasis(...)]

    """

    def __init__(self, max_depth: int = DEFAULT_MAX_INLINE_DEPTH, parse_html: bool = True):
        """Initialize the tokenizer with depth and HTML settings."""
        self.max_depth = max_depth
        self.parse_html = parse_html
        self._pass_table: list[tuple[str, Pattern[str], Builder, bool]] = [
            ("code", CODE_PATTERN, self._build_code, True),
            ("escape", ESCAPE_PATTERN, self._build_escape, True),
            ("bold", BOLD_PATTERN, self._build_strong, True),
            ("italic", ITALIC_PATTERN, self._build_emphasis, True),
            ("strikethrough", STRIKETHROUGH_PATTERN, self._build_strikethrough, True),
            ("image", IMAGE_PATTERN, self._build_image, False),
            ("link", LINK_PATTERN, self._build_link, False),
            ("image_reference", IMAGE_REFERENCE_PATTERN, self._build_image_reference, False),
            ("link_reference", LINK_REFERENCE_PATTERN, self._build_link_reference, False),
            ("footnote", FOOTNOTE_PATTERN, self._build_footnote, False),
            ("autolink", AUTOLINK_PATTERN, self._build_autolink, False),
            ("bare_url", BARE_URL_PATTERN, self._build_bare_url, False),
        ]
        if parse_html:
            self._pass_table.append(("html", HTML_INLINE_PATTERN, self._build_html, False))

    def tokenize(self, text: str, context: InlineContext | None = None) -> list[Segment]:
        """Tokenize ``text`` into literal strings and inline nodes.

        Parameters
        ----------
        text : str
            Inline source text (one paragraph, heading or cell)
        context : InlineContext, optional
            Nesting context; callers normally omit it

        Returns
        -------
        list of str or Node
            Ordered segments. Adjacent literals are merged into one string.

        """
        context = context or InlineContext()
        if not text:
            return []
        if context.depth >= self.max_depth:
            logger.debug(f"Inline nesting deeper than {self.max_depth} kept literal")
            return [text]

        segments: list[Segment] = [text]
        for name, pattern, builder, protects_links in self._pass_table:
            if context.in_link and name in _LINK_PASSES:
                continue
            next_segments: list[Segment] = []
            for segment in segments:
                if isinstance(segment, str):
                    next_segments.extend(self._split(segment, pattern, builder, protects_links, context))
                else:
                    next_segments.append(segment)
            segments = next_segments

        return _merge_literals(segments)

    def parse(self, text: str, context: InlineContext | None = None) -> list[Node]:
        """Tokenize ``text`` and wrap literal strings in :class:`Text` nodes."""
        return [Text(content=seg) if isinstance(seg, str) else seg for seg in self.tokenize(text, context)]

    def _split(
        self,
        text: str,
        pattern: Pattern[str],
        builder: Builder,
        protects_links: bool,
        context: InlineContext,
    ) -> list[Segment]:
        """Apply one pass to a literal segment."""
        protected = _protected_spans(text) if protects_links else []
        result: list[Segment] = []
        last = 0
        pos = 0
        while pos <= len(text):
            match = pattern.search(text, pos)
            if match is None:
                break
            if match.end() == match.start():
                pos = match.end() + 1
                continue
            if _cuts_through(match.start(), match.end(), protected):
                pos = match.start() + 1
                continue
            if match.start() > last:
                result.append(text[last : match.start()])
            result.append(builder(match, context))
            last = pos = match.end()

        if last < len(text):
            result.append(text[last:])
        return result

    # ------------------------------------------------------------------
    # Node builders
    # ------------------------------------------------------------------

    def _build_code(self, match: re.Match, context: InlineContext) -> Node:
        content = match.group(2).replace("\n", " ")
        # One surrounding space is padding, as in `` `code` ``
        if len(content) >= 2 and content.startswith(" ") and content.endswith(" ") and content.strip():
            content = content[1:-1]
        return Code(content=content)

    def _build_escape(self, match: re.Match, context: InlineContext) -> Node:
        return Text(content=match.group(1))

    def _build_strong(self, match: re.Match, context: InlineContext) -> Node:
        if match.group(1) is not None:
            # ***text*** is bold wrapping italic
            inner = self.parse(match.group(1), context.nested().nested())
            return Strong(content=[Emphasis(content=inner)])
        inner_text = match.group(2) if match.group(2) is not None else match.group(3)
        return Strong(content=self.parse(inner_text, context.nested()))

    def _build_emphasis(self, match: re.Match, context: InlineContext) -> Node:
        inner = match.group(1) if match.group(1) is not None else match.group(2)
        return Emphasis(content=self.parse(inner, context.nested()))

    def _build_strikethrough(self, match: re.Match, context: InlineContext) -> Node:
        return Strikethrough(content=self.parse(match.group(1), context.nested()))

    def _build_image(self, match: re.Match, context: InlineContext) -> Node:
        url, title = _destination(match, 2)
        return Image(url=url, alt_text=match.group(1), title=title)

    def _build_link(self, match: re.Match, context: InlineContext) -> Node:
        url, title = _destination(match, 2)
        return Link(url=url, content=self.parse(match.group(1), context.nested(in_link=True)), title=title)

    def _build_image_reference(self, match: re.Match, context: InlineContext) -> Node:
        alt_text = match.group(1)
        return ImageReference(label=match.group(2) or alt_text, alt_text=alt_text)

    def _build_link_reference(self, match: re.Match, context: InlineContext) -> Node:
        text, label = match.group(1), match.group(2)
        if not label:
            return LinkReference(label=text)
        return LinkReference(label=label, content=self.parse(text, context.nested(in_link=True)))

    def _build_footnote(self, match: re.Match, context: InlineContext) -> Node:
        return FootnoteReference(identifier=match.group(1))

    def _build_autolink(self, match: re.Match, context: InlineContext) -> Node:
        url = match.group(1)
        label = url[len("mailto:") :] if url.lower().startswith("mailto:") else url
        return Link(url=url, content=[Text(content=label)])

    def _build_bare_url(self, match: re.Match, context: InlineContext) -> Node:
        url = match.group(0)
        return Link(url=url, content=[Text(content=url)])

    def _build_html(self, match: re.Match, context: InlineContext) -> Node:
        return HTMLInline(content=match.group(0))


def _destination(match: re.Match, group: int) -> tuple[str, Optional[str]]:
    """Read the ``(url, title)`` pair captured by ``_DESTINATION``."""
    url = match.group(group) or ""
    if url.startswith("<") and url.endswith(">"):
        url = url[1:-1]
    title = match.group(group + 1)
    if title is None:
        title = match.group(group + 2)
    return url, title


def _protected_spans(text: str) -> list[tuple[int, int]]:
    spans: list[tuple[int, int]] = []
    for pattern in _PROTECTED_PATTERNS:
        spans.extend(m.span() for m in pattern.finditer(text))
    return spans


def _cuts_through(start: int, end: int, spans: list[tuple[int, int]]) -> bool:
    """Return True if ``[start, end)`` overlaps a span without enclosing it."""
    for span_start, span_end in spans:
        overlaps = start < span_end and span_start < end
        encloses = start <= span_start and span_end <= end
        if overlaps and not encloses:
            return True
    return False


def _merge_literals(segments: list[Segment]) -> list[Segment]:
    """Join adjacent literals; escaped characters become plain literal text."""
    merged: list[Segment] = []
    for segment in segments:
        literal = segment.content if isinstance(segment, Text) else segment
        if isinstance(literal, str):
            if merged and isinstance(merged[-1], str):
                merged[-1] = merged[-1] + literal
            else:
                merged.append(literal)
        else:
            merged.append(segment)
    return [segment for segment in merged if not (isinstance(segment, str) and segment == "")]


def parse_inline(text: str, max_depth: int = DEFAULT_MAX_INLINE_DEPTH, parse_html: bool = True) -> list[Node]:
    """Parse inline Markdown into nodes using a one-off :class:`InlineTokenizer`."""
    return InlineTokenizer(max_depth=max_depth, parse_html=parse_html).parse(text)
