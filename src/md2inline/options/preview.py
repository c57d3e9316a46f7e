#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/options/preview.py
"""Configuration options for fetching link preview metadata."""

from __future__ import annotations

from dataclasses import dataclass, field

from md2inline.constants import (
    DEFAULT_BLOCK_PRIVATE_NETWORKS,
    DEFAULT_FETCH_TWITTER_OEMBED,
    DEFAULT_PREVIEW_MAX_CONCURRENT,
    DEFAULT_PREVIEW_MAX_RESPONSE_BYTES,
    DEFAULT_PREVIEW_TIMEOUT,
    DEFAULT_PREVIEW_USER_AGENT,
    DEFAULT_REQUIRE_HTTPS,
)
from md2inline.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class PreviewFetchOptions(CloneFrozenMixin):
    """Network settings for the link preview fetcher.

    Parameters
    ----------
    timeout : float, default 5.0
        Per-URL timeout in seconds, covering connect and read.
    user_agent : str
        User-Agent header sent with every request.
    max_concurrent : int, default 5
        Maximum number of requests in flight at once.
    require_https : bool, default False
        Reject plain http URLs.
    block_private_networks : bool, default True
        Reject ``localhost`` and literal loopback, private, link-local and
        reserved IP addresses.
    max_response_bytes : int, default 2000000
        Stop reading a response body after this many bytes.
    fetch_twitter_oembed : bool, default True
        Use the public oEmbed endpoint for X/Twitter status URLs.
    cache_ttl : float or None, default None
        Seconds a cached result stays valid. None keeps entries forever.

    """

    timeout: float = field(
        default=DEFAULT_PREVIEW_TIMEOUT,
        metadata={"help": "Per-URL timeout in seconds", "type": float, "importance": "core"},
    )
    user_agent: str = field(
        default=DEFAULT_PREVIEW_USER_AGENT,
        metadata={"help": "User-Agent header for preview requests", "importance": "advanced"},
    )
    max_concurrent: int = field(
        default=DEFAULT_PREVIEW_MAX_CONCURRENT,
        metadata={"help": "Maximum concurrent preview requests", "type": int, "importance": "advanced"},
    )
    require_https: bool = field(
        default=DEFAULT_REQUIRE_HTTPS,
        metadata={"help": "Only fetch https URLs", "importance": "security"},
    )
    block_private_networks: bool = field(
        default=DEFAULT_BLOCK_PRIVATE_NETWORKS,
        metadata={"help": "Refuse localhost and private/reserved IP literals", "importance": "security"},
    )
    max_response_bytes: int = field(
        default=DEFAULT_PREVIEW_MAX_RESPONSE_BYTES,
        metadata={"help": "Maximum bytes read from a preview response", "type": int, "importance": "security"},
    )
    fetch_twitter_oembed: bool = field(
        default=DEFAULT_FETCH_TWITTER_OEMBED,
        metadata={"help": "Use oEmbed for X/Twitter status links", "importance": "advanced"},
    )
    cache_ttl: float | None = field(
        default=None,
        metadata={"help": "Seconds a cached preview stays valid (None: forever)", "type": float, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_concurrent < 1:
            raise ValueError(f"max_concurrent must be at least 1, got {self.max_concurrent}")
        if self.max_response_bytes <= 0:
            raise ValueError(f"max_response_bytes must be positive, got {self.max_response_bytes}")
        if self.cache_ttl is not None and self.cache_ttl <= 0:
            raise ValueError(f"cache_ttl must be positive or None, got {self.cache_ttl}")
