#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/themes.py
"""Color themes for styled rendering.

A :class:`Theme` is an immutable record of color tokens. Themes are looked up
by name from :data:`THEMES`, or built from a mapping of overrides laid over a
base theme. Resolution never fails: an unknown name falls back to the default
theme with a warning.

Examples
--------
    >>> resolve_theme("nord").background
    '#2e3440'
    >>> resolve_theme({"base": "light", "link": "#ff0000"}).link
    '#ff0000'

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Union

from md2inline.constants import DEFAULT_THEME_NAME

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Theme:
    """Color tokens used by the styled renderer.

    Parameters
    ----------
    name : str
        Theme name
    background, text : str
        Page background and body text colors
    link : str
        Link color
    code_background, code_text : str
        Inline code and code block colors
    blockquote_background, blockquote_border, blockquote_text : str
        Blockquote colors
    table_header_background, table_border : str
        Table colors
    hr : str
        Horizontal rule and footer separator color

    """

    name: str
    background: str
    text: str
    link: str
    code_background: str
    code_text: str
    blockquote_background: str
    blockquote_border: str
    blockquote_text: str
    table_header_background: str
    table_border: str
    hr: str

    @property
    def is_dark(self) -> bool:
        """True when the background is dark (relative luminance below 0.5)."""
        return _relative_luminance(self.background) < 0.5


THEME_TOKENS = tuple(f.name for f in fields(Theme) if f.name != "name")


def _theme(name: str, *colors: str) -> Theme:
    return Theme(name, *colors)


# Token order: background, text, link, code bg, code text, blockquote bg,
# blockquote border, blockquote text, table header bg, table border, hr
THEMES: dict[str, Theme] = {
    theme.name: theme
    for theme in (
        _theme(
            "light",
            "#ffffff", "#333333", "#007bff", "#f0f0f0", "#333333", "#f9f9f9", "#ccc", "#666", "#f2f2f2", "#ddd", "#ccc",
        ),
        _theme(
            "dark",
            "#1e1e1e", "#e0e0e0", "#4da3ff", "#2d2d2d", "#e0e0e0", "#2a2a2a", "#555", "#aaa", "#2a2a2a", "#555", "#555",
        ),
        _theme(
            "sepia",
            "#f4ecd8", "#5b4636", "#1e7b75", "#e8e0cc", "#5b4636", "#eae0c9", "#c3b393", "#7d6b56", "#e8e0cc",
            "#c3b393", "#c3b393",
        ),
        _theme(
            "nord",
            "#2e3440", "#d8dee9", "#88c0d0", "#3b4252", "#d8dee9", "#3b4252", "#81a1c1", "#e5e9f0", "#3b4252",
            "#4c566a", "#4c566a",
        ),
        _theme(
            "github",
            "#ffffff", "#24292e", "#0366d6", "#f6f8fa", "#24292e", "#f6f8fa", "#dfe2e5", "#6a737d", "#f6f8fa",
            "#dfe2e5", "#e1e4e8",
        ),
        _theme(
            "dracula",
            "#282a36", "#f8f8f2", "#8be9fd", "#44475a", "#f8f8f2", "#44475a", "#6272a4", "#f8f8f2", "#44475a",
            "#6272a4", "#6272a4",
        ),
        _theme(
            "mytheme",
            "#0F0F0F", "#f8f8f2", "#8be9fd", "#16191d", "#f8f8f2", "#3C3D37", "#6272a4", "#9e978c", "#232D3F",
            "#6272a4", "#6272a4",
        ),
    )
}

DEFAULT_THEME = THEMES[DEFAULT_THEME_NAME]

ThemeSpec = Union[str, Theme, Mapping[str, Any], None]


def list_themes() -> list[str]:
    """Return the built-in theme names, sorted."""
    return sorted(THEMES)


def get_theme(name: str) -> Theme | None:
    """Look up a built-in theme by name (case-insensitive); None when unknown."""
    return THEMES.get(name.strip().lower())


def resolve_theme(theme: ThemeSpec = None) -> Theme:
    """Resolve a theme name, Theme or override mapping to a Theme.

    Parameters
    ----------
    theme : str, Theme, mapping or None, default = None
        - None: the default theme
        - str: a built-in theme name; unknown names give the default theme
        - Theme: returned as is
        - mapping: token overrides applied over the default theme, or over the
          theme named by a ``"base"`` key. Unknown keys are ignored.

    Returns
    -------
    Theme
        Resolved theme

    """
    if theme is None:
        return DEFAULT_THEME
    if isinstance(theme, Theme):
        return theme
    if isinstance(theme, str):
        found = get_theme(theme)
        if found is None:
            logger.warning(f"Unknown theme '{theme}', using '{DEFAULT_THEME_NAME}'")
            return DEFAULT_THEME
        return found
    if isinstance(theme, Mapping):
        return _apply_overrides(theme)

    logger.warning(f"Unsupported theme value of type {type(theme).__name__}, using '{DEFAULT_THEME_NAME}'")
    return DEFAULT_THEME


def _apply_overrides(overrides: Mapping[str, Any]) -> Theme:
    base_name = overrides.get("base")
    base = resolve_theme(str(base_name)) if base_name else DEFAULT_THEME

    changes: dict[str, str] = {}
    for key, value in overrides.items():
        if key == "base":
            continue
        if key == "name" or key in THEME_TOKENS:
            if value is not None:
                changes[key] = str(value)
        else:
            logger.warning(f"Ignoring unknown theme token '{key}'")

    changes.setdefault("name", f"{base.name}-custom" if changes else base.name)
    return replace(base, **changes)


def _relative_luminance(color: str) -> float:
    """Relative luminance of a ``#rgb`` or ``#rrggbb`` color; 0.0 when unparseable."""
    value = color.strip().lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        return 0.0
    try:
        channels = [int(value[i : i + 2], 16) / 255 for i in (0, 2, 4)]
    except ValueError:
        return 0.0

    def linear(c: float) -> float:
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (linear(c) for c in channels)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b
