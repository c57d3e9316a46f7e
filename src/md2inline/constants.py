#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for md2inline.

This module centralizes the hardcoded values and default configuration
constants used across md2inline.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Markdown Parsing - Block grammar defaults
3. Rendering - Styled output defaults
4. Security Constants - URL sanitization settings
5. Link Preview - Network fetch defaults
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

Alignment = Literal["left", "center", "right"]

# =============================================================================
# Markdown Parsing
# =============================================================================

DEFAULT_LIST_INDENT_WIDTH = 2
DEFAULT_TAB_WIDTH = 4
DEFAULT_MAX_BLOCKQUOTE_DEPTH = 16
DEFAULT_MAX_INLINE_DEPTH = 16
DEFAULT_MAX_LIST_DEPTH = 16
DEFAULT_PARSE_HTML = True
DEFAULT_NOTE_MARKER = "NOTE"

# Headings deeper than this collapse onto it
MAX_HEADING_LEVEL = 4

# Block-level tags that open an HTMLBlock when at the start of a line
HTML_BLOCK_TAGS = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "details",
        "div",
        "dl",
        "fieldset",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hr",
        "iframe",
        "main",
        "nav",
        "ol",
        "p",
        "pre",
        "script",
        "section",
        "style",
        "table",
        "ul",
    }
)

# =============================================================================
# Rendering
# =============================================================================

DEFAULT_THEME_NAME = "dark"
DEFAULT_PREVIEW_DESCRIPTION_LENGTH = 120
DEFAULT_HIGHLIGHT_CODE = True
DEFAULT_DARK_PYGMENTS_STYLE = "monokai"
DEFAULT_LIGHT_PYGMENTS_STYLE = "default"
DEFAULT_EXTERNAL_LINKS_NEW_TAB = True
DEFAULT_NOTE_LABEL = "Note"
DEFAULT_DOCUMENT_TITLE = "Document"

FONT_STACK = (
    "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif"
)
MONOSPACE_FONT_STACK = "SFMono-Regular, Consolas, 'Liberation Mono', Menlo, monospace"

# =============================================================================
# Security Constants
# =============================================================================

DANGEROUS_SCHEMES = {
    "javascript:",
    "vbscript:",
    "data:text/html",
    "data:text/javascript",
    "data:application/javascript",
    "data:application/x-javascript",
}
SAFE_LINK_SCHEMES = frozenset({"http", "https", "mailto", "ftp", "ftps", "tel", "sms", ""})

# Replacement written into href/src attributes for rejected URLs
UNSAFE_URL_PLACEHOLDER = "#"

# =============================================================================
# Link Preview
# =============================================================================

DEFAULT_PREVIEW_TIMEOUT = 5.0
DEFAULT_PREVIEW_USER_AGENT = "Mozilla/5.0 (compatible; md2inline/1.0)"
DEFAULT_PREVIEW_MAX_CONCURRENT = 5
DEFAULT_PREVIEW_MAX_RESPONSE_BYTES = 2_000_000
DEFAULT_REQUIRE_HTTPS = False
DEFAULT_BLOCK_PRIVATE_NETWORKS = True
DEFAULT_FETCH_TWITTER_OEMBED = True

TWITTER_OEMBED_ENDPOINT = "https://publish.twitter.com/oembed"
TWITTER_SITE_NAME = "X (Twitter)"
