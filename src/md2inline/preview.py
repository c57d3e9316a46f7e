#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/preview.py
"""Link preview metadata: extraction, fetching and caching.

The renderer never touches the network. Callers gather preview data for a
document's standalone links up front and hand the resulting mapping to the
render call:

    >>> data = prepare_preview_data(markdown_text)
    >>> html = render_markdown_to_html(
    ...     markdown_text,
    ...     options=StyledRendererOptions(enable_link_preview=True),
    ...     preview_data=data,
    ... )

Fetching is asynchronous. One request is issued per distinct URL, bounded by a
semaphore, and the batch waits for every request to finish or time out. A URL
that fails for any reason (network error, timeout, non-2xx status, rejected by
URL validation) simply has no entry in the result; it never aborts the batch.

Open Graph tags are read with BeautifulSoup. X/Twitter status URLs go through
the public oEmbed endpoint instead, since those pages carry no usable OGP data
for anonymous clients.
"""

from __future__ import annotations

import asyncio
import ipaddress
import json
import logging
import re
import threading
import time
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, Optional, Union
from urllib.parse import urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from md2inline.ast import Document, Footer, Node, Note, get_standalone_link
from md2inline.constants import TWITTER_OEMBED_ENDPOINT, TWITTER_SITE_NAME
from md2inline.exceptions import NetworkSecurityError, PreviewFetchError
from md2inline.options.base import validate_options_type
from md2inline.options.preview import PreviewFetchOptions
from md2inline.utils.security import get_url_scheme

if TYPE_CHECKING:
    from md2inline.options.markdown import MarkdownParserOptions

logger = logging.getLogger(__name__)

TWITTER_STATUS_PATTERN = re.compile(
    r"^https?://(?:www\.|mobile\.)?(?:twitter\.com|x\.com)/[A-Za-z0-9_]{1,15}/status(?:es)?/\d+(?:[/?#].*)?$",
    re.IGNORECASE,
)

_HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


@dataclass(frozen=True)
class PreviewInfo:
    """Preview metadata for one URL.

    Parameters
    ----------
    title : str or None, default = None
        Page title (``og:title`` or ``<title>``)
    description : str or None, default = None
        Page summary (``og:description`` or ``meta[name=description]``)
    image : str or None, default = None
        Absolute thumbnail URL
    site_name : str or None, default = None
        Human-readable site name
    url : str or None, default = None
        Canonical URL of the page

    """

    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    site_name: Optional[str] = None
    url: Optional[str] = None

    @property
    def has_content(self) -> bool:
        """True when a card can be built (a title or a description is present)."""
        return bool(self.title or self.description)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PreviewInfo:
        """Build from a plain mapping, accepting camelCase keys as well."""

        def pick(*keys: str) -> Optional[str]:
            for key in keys:
                value = data.get(key)
                if value:
                    return str(value).strip() or None
            return None

        return cls(
            title=pick("title"),
            description=pick("description"),
            image=pick("image"),
            site_name=pick("site_name", "siteName"),
            url=pick("url", "canonical_url", "canonicalUrl"),
        )

    def to_dict(self) -> dict[str, Optional[str]]:
        """Return the fields as a plain dict."""
        return asdict(self)


def coerce_preview_data(
    preview_data: Mapping[str, Union[PreviewInfo, Mapping[str, Any], None]] | None,
) -> dict[str, PreviewInfo]:
    """Normalize caller-supplied preview data to ``{url: PreviewInfo}``.

    ``None`` values are dropped. Values that are neither a PreviewInfo nor a
    mapping are logged and ignored.
    """
    result: dict[str, PreviewInfo] = {}
    for url, value in (preview_data or {}).items():
        if value is None:
            continue
        if isinstance(value, PreviewInfo):
            result[url] = value
        elif isinstance(value, Mapping):
            result[url] = PreviewInfo.from_mapping(value)
        else:
            logger.warning(f"Ignoring preview data for {url}: unsupported type {type(value).__name__}")
    return result


# =============================================================================
# Standalone link extraction
# =============================================================================


def extract_standalone_links(
    source: Union[Document, str],
    parser_options: MarkdownParserOptions | None = None,
) -> list[str]:
    """Return the distinct http(s) URLs of standalone-link paragraphs.

    Parameters
    ----------
    source : Document or str
        Parsed document, or Markdown text to parse first
    parser_options : MarkdownParserOptions or None, default = None
        Options used when ``source`` is text

    Returns
    -------
    list of str
        URLs in document order, without duplicates

    """
    if isinstance(source, str):
        from md2inline.api import parse_markdown

        source = parse_markdown(source, options=parser_options)

    urls: list[str] = []
    seen: set[str] = set()

    def collect(children: list[Node]) -> None:
        for child in children:
            if isinstance(child, (Note, Footer)):
                collect(child.children)
                continue
            link = get_standalone_link(child)
            if link is None or link.url in seen:
                continue
            if get_url_scheme(link.url) in ("http", "https"):
                seen.add(link.url)
                urls.append(link.url)

    collect(source.children)
    return urls


# =============================================================================
# Metadata parsing
# =============================================================================


def _meta_content(soup: BeautifulSoup, *, prop: str | None = None, name: str | None = None) -> Optional[str]:
    if prop is not None:
        tag = soup.find("meta", attrs={"property": prop}) or soup.find("meta", attrs={"name": prop})
    else:
        tag = soup.find("meta", attrs={"name": name})
    if tag is None:
        return None
    content = tag.get("content")
    if not isinstance(content, str):
        return None
    return content.strip() or None


def _decode_body(body: bytes, encoding: Optional[str]) -> str:
    """Decode a page body with its declared charset, falling back to UTF-8."""
    try:
        return body.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        logger.debug(f"Unknown charset {encoding!r}, decoding as UTF-8")
        return body.decode("utf-8", errors="replace")


def parse_preview_metadata(html: str, base_url: str) -> PreviewInfo:
    """Extract Open Graph preview metadata from an HTML page.

    Parameters
    ----------
    html : str
        Page markup
    base_url : str
        URL the page was fetched from; relative image URLs resolve against it

    Returns
    -------
    PreviewInfo
        Extracted metadata; fields missing from the page are None

    """
    soup = BeautifulSoup(html, "html.parser")

    title = _meta_content(soup, prop="og:title")
    if title is None and soup.title is not None and soup.title.string:
        title = soup.title.string.strip() or None

    description = _meta_content(soup, prop="og:description") or _meta_content(soup, name="description")

    image = _meta_content(soup, prop="og:image")
    if image is not None:
        try:
            image = urljoin(base_url, image)
        except ValueError:
            logger.debug(f"Ignoring malformed og:image URL {image!r}")
            image = None

    return PreviewInfo(
        title=title,
        description=description,
        image=image,
        site_name=_meta_content(soup, prop="og:site_name"),
        url=_meta_content(soup, prop="og:url") or base_url,
    )


def is_twitter_status_url(url: str) -> bool:
    """Return True for ``twitter.com`` / ``x.com`` status URLs."""
    return bool(TWITTER_STATUS_PATTERN.match(url))


def parse_oembed_payload(data: Mapping[str, Any], source_url: str | None = None) -> PreviewInfo:
    """Turn an X/Twitter oEmbed response into preview metadata.

    The author name becomes the title and the text of the embedded blockquote
    becomes the description.
    """
    embedded = data.get("html") or ""
    description = BeautifulSoup(embedded, "html.parser").get_text(" ", strip=True) if embedded else ""
    author = data.get("author_name")
    return PreviewInfo(
        title=(str(author).strip() or None) if author else None,
        description=description or None,
        image=None,
        site_name=TWITTER_SITE_NAME,
        url=data.get("url") or source_url,
    )


# =============================================================================
# URL validation
# =============================================================================


def validate_preview_url(url: str, options: PreviewFetchOptions) -> None:
    """Reject URLs the fetcher must not request.

    Only http and https are allowed (https only with ``require_https``). With
    ``block_private_networks``, ``localhost`` and literal loopback, private,
    link-local, multicast, reserved and unspecified addresses are refused.
    Hostnames are not resolved.

    Raises
    ------
    NetworkSecurityError
        If the URL fails validation

    """
    try:
        parsed = urlparse(url)
        hostname = (parsed.hostname or "").rstrip(".").lower()
    except ValueError as e:
        raise NetworkSecurityError(f"Invalid URL format: {url}") from e

    scheme = parsed.scheme.lower()
    if scheme not in ("http", "https"):
        raise NetworkSecurityError(f"Unsupported URL scheme: {parsed.scheme or '(none)'}")
    if options.require_https and scheme != "https":
        raise NetworkSecurityError(f"HTTPS required but got: {scheme}")

    if not hostname:
        raise NetworkSecurityError("URL missing hostname")

    if not options.block_private_networks:
        return

    if hostname == "localhost" or hostname.endswith(".localhost"):
        raise NetworkSecurityError(f"Access to local host blocked: {hostname}")

    try:
        ip = ipaddress.ip_address(hostname)
    except ValueError:
        return
    if (
        ip.is_private
        or ip.is_loopback
        or ip.is_link_local
        or ip.is_multicast
        or ip.is_reserved
        or ip.is_unspecified
    ):
        raise NetworkSecurityError(f"Access to private/reserved IP address blocked: {ip}")


# =============================================================================
# Cache
# =============================================================================


class PreviewCache:
    """Thread-safe preview cache keyed by URL.

    Misses are cached too (as None) so a failing URL is not fetched again on
    every render.

    Parameters
    ----------
    ttl : float or None, default = None
        Seconds an entry stays valid; None keeps entries forever
    clock : callable, default = time.monotonic
        Time source, replaceable in tests

    """

    def __init__(self, ttl: float | None = None, clock: Callable[[], float] = time.monotonic):
        """Create an empty cache."""
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, tuple[float, Optional[PreviewInfo]]] = {}
        self._lock = threading.Lock()

    def lookup(self, url: str) -> tuple[bool, Optional[PreviewInfo]]:
        """Return ``(hit, value)``; expired entries are evicted and count as misses."""
        with self._lock:
            entry = self._entries.get(url)
            if entry is None:
                return False, None
            stored_at, value = entry
            if self.ttl is not None and self._clock() - stored_at > self.ttl:
                del self._entries[url]
                return False, None
            return True, value

    def get(self, url: str) -> Optional[PreviewInfo]:
        """Return the cached value, or None on a miss or a cached failure."""
        return self.lookup(url)[1]

    def set(self, url: str, value: Optional[PreviewInfo]) -> None:
        """Store ``value`` (None records a failed lookup)."""
        with self._lock:
            self._entries[url] = (self._clock(), value)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, url: object) -> bool:
        return isinstance(url, str) and self.lookup(url)[0]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# =============================================================================
# Fetcher
# =============================================================================


class PreviewFetcher:
    """Concurrent preview fetcher built on ``httpx.AsyncClient``.

    Parameters
    ----------
    options : PreviewFetchOptions or None, default = None
        Network settings
    cache : PreviewCache or None, default = None
        Shared cache; a private one is created when omitted
    client : httpx.AsyncClient or None, default = None
        Client to use. When omitted, :meth:`gather` opens and closes its own
        client. Tests pass a client built on ``httpx.MockTransport``.

    """

    def __init__(
        self,
        options: PreviewFetchOptions | None = None,
        cache: PreviewCache | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """Store the collaborators."""
        validate_options_type(options, PreviewFetchOptions, "preview")
        self.options = options or PreviewFetchOptions()
        self.cache = cache if cache is not None else PreviewCache(ttl=self.options.cache_ttl)
        self._client = client

    def _create_client(self) -> httpx.AsyncClient:
        options = self.options

        async def validate_request_url(request: httpx.Request) -> None:
            # Redirect targets are validated as well
            validate_preview_url(str(request.url), options)

        return httpx.AsyncClient(
            timeout=options.timeout,
            follow_redirects=True,
            headers={"User-Agent": options.user_agent, "Accept": "text/html,application/xhtml+xml,*/*;q=0.8"},
            event_hooks={"request": [validate_request_url]},
        )

    async def gather(self, urls: Iterable[str]) -> dict[str, PreviewInfo]:
        """Fetch previews for ``urls`` concurrently.

        Parameters
        ----------
        urls : iterable of str
            URLs to fetch; duplicates are fetched once

        Returns
        -------
        dict
            URL to PreviewInfo for every URL that produced usable metadata

        """
        unique = list(dict.fromkeys(urls))
        if not unique:
            return {}

        if self._client is not None:
            results = await self._gather_with(self._client, unique)
        else:
            async with self._create_client() as client:
                results = await self._gather_with(client, unique)

        return {url: info for url, info in zip(unique, results) if info is not None and info.has_content}

    async def _gather_with(self, client: httpx.AsyncClient, urls: list[str]) -> list[Optional[PreviewInfo]]:
        semaphore = asyncio.Semaphore(self.options.max_concurrent)

        async def bounded(url: str) -> Optional[PreviewInfo]:
            async with semaphore:
                return await self._fetch_with(client, url)

        return list(await asyncio.gather(*(bounded(url) for url in urls)))

    async def fetch(self, url: str) -> Optional[PreviewInfo]:
        """Fetch the preview for a single URL; None when unavailable."""
        if self._client is not None:
            return await self._fetch_with(self._client, url)
        async with self._create_client() as client:
            return await self._fetch_with(client, url)

    async def _fetch_with(self, client: httpx.AsyncClient, url: str) -> Optional[PreviewInfo]:
        hit, cached = self.cache.lookup(url)
        if hit:
            logger.debug(f"Preview cache hit for {url}")
            return cached

        info: Optional[PreviewInfo] = None
        try:
            validate_preview_url(url, self.options)
            info = await asyncio.wait_for(self._request(client, url), timeout=self.options.timeout)
        except NetworkSecurityError as e:
            logger.warning(f"Preview fetch refused for {url}: {e}")
        except asyncio.TimeoutError:
            logger.debug(f"Preview fetch timed out for {url}")
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, PreviewFetchError) as e:
            logger.debug(f"Preview fetch failed for {url}: {e}")

        self.cache.set(url, info)
        return info

    async def _request(self, client: httpx.AsyncClient, url: str) -> Optional[PreviewInfo]:
        if self.options.fetch_twitter_oembed and is_twitter_status_url(url):
            return await self._request_oembed(client, url)

        async with client.stream("GET", url) as response:
            response.raise_for_status()
            content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
            if content_type and content_type not in _HTML_CONTENT_TYPES:
                logger.debug(f"Skipping preview for {url}: content type {content_type}")
                return None
            body, truncated = await self._read_limited(response)
            if truncated:
                logger.debug(f"Preview body for {url} truncated at {self.options.max_response_bytes} bytes")
            html = _decode_body(body, response.charset_encoding)
            return parse_preview_metadata(html, str(response.url))

    async def _request_oembed(self, client: httpx.AsyncClient, url: str) -> Optional[PreviewInfo]:
        params = {"url": url, "omit_script": "true"}
        async with client.stream("GET", TWITTER_OEMBED_ENDPOINT, params=params) as response:
            response.raise_for_status()
            body, truncated = await self._read_limited(response)
        if truncated:
            raise PreviewFetchError("oEmbed response exceeded the size limit", url=url)
        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PreviewFetchError(f"Invalid oEmbed response: {e}", url=url, original_error=e) from e
        if not isinstance(payload, dict):
            raise PreviewFetchError("oEmbed response is not an object", url=url)
        return parse_oembed_payload(payload, source_url=url)

    async def _read_limited(self, response: httpx.Response) -> tuple[bytes, bool]:
        """Read at most ``max_response_bytes``; the flag reports truncation."""
        limit = self.options.max_response_bytes
        chunks: list[bytes] = []
        total = 0
        async for chunk in response.aiter_bytes():
            remaining = limit - total
            if len(chunk) > remaining:
                chunks.append(chunk[:remaining])
                return b"".join(chunks), True
            chunks.append(chunk)
            total += len(chunk)
        return b"".join(chunks), False


def prepare_preview_data(
    source: Union[Document, str],
    options: PreviewFetchOptions | None = None,
    cache: PreviewCache | None = None,
) -> dict[str, PreviewInfo]:
    """Fetch preview data for every standalone link of a document.

    Synchronous wrapper around :meth:`PreviewFetcher.gather`. It starts its
    own event loop, so call ``PreviewFetcher.gather`` directly from async code.

    Parameters
    ----------
    source : Document or str
        Document or Markdown text
    options : PreviewFetchOptions or None, default = None
        Network settings
    cache : PreviewCache or None, default = None
        Cache shared across calls

    Returns
    -------
    dict
        URL to PreviewInfo, only for URLs with a title or description

    """
    urls = extract_standalone_links(source)
    if not urls:
        return {}
    logger.info(f"Fetching link previews for {len(urls)} URL(s)")
    fetcher = PreviewFetcher(options=options, cache=cache)
    return asyncio.run(fetcher.gather(urls))
