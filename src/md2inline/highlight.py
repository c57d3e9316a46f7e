#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/highlight.py
"""Syntax highlighting of code blocks into inline-styled spans.

Pygments lexes the code and the token styles of a Pygments style are copied
onto ``span`` nodes as inline ``color``, ``font-weight`` and ``font-style``.
No Pygments formatter is involved, since formatters emit class names or a
stylesheet.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pygments import lex
from pygments.lexers import get_lexer_by_name
from pygments.style import StyleMeta
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from md2inline.constants import DEFAULT_DARK_PYGMENTS_STYLE, DEFAULT_LIGHT_PYGMENTS_STYLE
from md2inline.renderers.styled_node import StyledChild, StyledNode
from md2inline.themes import Theme

logger = logging.getLogger(__name__)


def default_style_name(theme: Theme) -> str:
    """Pygments style matching the brightness of ``theme``."""
    return DEFAULT_DARK_PYGMENTS_STYLE if theme.is_dark else DEFAULT_LIGHT_PYGMENTS_STYLE


def _load_style(style_name: str, theme: Theme) -> StyleMeta:
    try:
        return get_style_by_name(style_name)
    except ClassNotFound:
        fallback = default_style_name(theme)
        logger.warning(f"Unknown Pygments style '{style_name}', using '{fallback}'")
        return get_style_by_name(fallback)


def _token_css(style: StyleMeta, token: Any) -> dict[str, str]:
    info = style.style_for_token(token)
    css: dict[str, str] = {}
    if info.get("color"):
        css["color"] = f"#{info['color']}"
    if info.get("bold"):
        css["font-weight"] = "bold"
    if info.get("italic"):
        css["font-style"] = "italic"
    return css


def highlight_code(
    code: str,
    language: Optional[str],
    theme: Theme,
    style_name: Optional[str] = None,
) -> list[StyledChild]:
    """Highlight ``code`` into styled spans.

    Parameters
    ----------
    code : str
        Source code
    language : str or None
        Language tag from the code fence
    theme : Theme
        Active theme; picks the default Pygments style
    style_name : str or None, default = None
        Pygments style overriding the theme default

    Returns
    -------
    list of StyledNode or str
        Spans for styled tokens and plain strings for unstyled runs. An empty
        or unknown language gives ``[code]``.

    """
    if not language or not code:
        return [code]
    try:
        lexer = get_lexer_by_name(language.strip().lower(), stripnl=False, ensurenl=False)
    except ClassNotFound:
        logger.debug(f"No lexer for language '{language}'")
        return [code]

    style = _load_style(style_name or default_style_name(theme), theme)

    result: list[StyledChild] = []
    for token, value in lex(code, lexer):
        if not value:
            continue
        css = _token_css(style, token)
        if not css:
            # Merge adjacent unstyled text
            if result and isinstance(result[-1], str):
                result[-1] += value
            else:
                result.append(value)
            continue
        result.append(StyledNode("span", style=css, children=[value]))
    return result
