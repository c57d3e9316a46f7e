#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/options/render.py
"""Configuration options for styled rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from md2inline.constants import (
    DEFAULT_EXTERNAL_LINKS_NEW_TAB,
    DEFAULT_HIGHLIGHT_CODE,
    DEFAULT_PREVIEW_DESCRIPTION_LENGTH,
    UNSAFE_URL_PLACEHOLDER,
)
from md2inline.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class StyledRendererOptions(CloneFrozenMixin):
    """Configuration options for rendering a document into styled nodes.

    Parameters
    ----------
    enable_link_preview : bool, default False
        Replace standalone-link paragraphs with preview cards when preview data
        for their URL is supplied.
    preview_description_length : int, default 120
        Maximum number of description characters shown on a preview card.
    highlight_code : bool, default True
        Color fenced code blocks with Pygments when a language is given.
    pygments_style : str or None, default None
        Pygments style name. None picks a dark or light style from the theme.
    unsafe_url_placeholder : str, default "#"
        Value written in place of a URL with a script-invoking scheme.
    external_links_new_tab : bool, default True
        Open http(s) links in a new browsing context with ``rel="noopener noreferrer"``.

    """

    enable_link_preview: bool = field(
        default=False,
        metadata={"help": "Render standalone links as preview cards when data is available", "importance": "core"},
    )
    preview_description_length: int = field(
        default=DEFAULT_PREVIEW_DESCRIPTION_LENGTH,
        metadata={"help": "Maximum description length on preview cards", "type": int, "importance": "advanced"},
    )
    highlight_code: bool = field(
        default=DEFAULT_HIGHLIGHT_CODE,
        metadata={"help": "Syntax highlight fenced code blocks", "importance": "core"},
    )
    pygments_style: str | None = field(
        default=None,
        metadata={"help": "Pygments style name (default: chosen from theme brightness)", "importance": "advanced"},
    )
    unsafe_url_placeholder: str = field(
        default=UNSAFE_URL_PLACEHOLDER,
        metadata={"help": "Replacement for URLs with dangerous schemes", "importance": "security"},
    )
    external_links_new_tab: bool = field(
        default=DEFAULT_EXTERNAL_LINKS_NEW_TAB,
        metadata={"help": "Open external links in a new tab", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.preview_description_length < 1:
            raise ValueError(
                f"preview_description_length must be positive, got {self.preview_description_length}"
            )
