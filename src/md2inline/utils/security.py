#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/utils/security.py
"""URL scheme checks applied to every href and src the renderer writes."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlparse

from md2inline.constants import DANGEROUS_SCHEMES, UNSAFE_URL_PLACEHOLDER

# Browsers drop ASCII whitespace and control characters inside a scheme,
# so "java\tscript:" still runs
_IGNORED_URL_CHARS = re.compile(r"[\x00-\x20\x7f]+")

_SCRIPT_SCHEMES = frozenset({"javascript", "vbscript", "livescript"})

_SCHEME_PATTERN = re.compile(r"^([a-z][a-z0-9+.-]*):", re.IGNORECASE)


def is_relative_url(url: str) -> bool:
    """Return True for URLs without a scheme (paths, fragments, queries)."""
    return url.startswith(("/", "#", "?", "./", "../")) or ":" not in url.split("/", 1)[0]


def get_url_scheme(url: str) -> str:
    """Return the lowercase scheme of ``url``, or an empty string when it has none."""
    match = _SCHEME_PATTERN.match(url.strip())
    return match.group(1).lower() if match else ""


def get_url_hostname(url: str) -> Optional[str]:
    """Return the hostname of ``url``, or None when it has none or is malformed.

    >>> get_url_hostname("https://Example.com/page")
    'example.com'
    >>> get_url_hostname("http://[bad") is None
    True

    """
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


def is_url_scheme_dangerous(url: str) -> bool:
    """Check if a URL uses a script-invoking scheme.

    Examples
    --------
    >>> is_url_scheme_dangerous("https://example.com")
    False
    >>> is_url_scheme_dangerous("JaVaScRiPt:alert(1)")
    True
    >>> is_url_scheme_dangerous("data:text/html,<script>alert(1)</script>")
    True
    >>> is_url_scheme_dangerous("/relative/path")
    False

    """
    if not url or not url.strip():
        return False

    normalized = _IGNORED_URL_CHARS.sub("", url).lower()
    if is_relative_url(normalized):
        return False

    if any(normalized.startswith(scheme) for scheme in DANGEROUS_SCHEMES):
        return True

    scheme = get_url_scheme(normalized)
    if scheme in _SCRIPT_SCHEMES:
        return True
    # data: URLs are only acceptable for images
    return scheme == "data" and not normalized.startswith("data:image/")


def sanitize_url(url: str, placeholder: str = UNSAFE_URL_PLACEHOLDER) -> str:
    """Return ``url`` unchanged, or ``placeholder`` when its scheme is dangerous.

    >>> sanitize_url("javascript:alert('xss')")
    '#'
    >>> sanitize_url("/relative/path")
    '/relative/path'

    """
    if is_url_scheme_dangerous(url):
        return placeholder
    return url.strip()
