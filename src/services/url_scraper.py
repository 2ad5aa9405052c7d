"""
Best-effort page title lookup used to auto-fill the bookmark form.

Nothing here raises to the caller: every failure is folded into a result with
an `error` string, and `fetch_page_title` degrades to None.
"""
import asyncio
import ipaddress
import logging
import socket
from dataclasses import dataclass
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

USER_AGENT = 'Mozilla/5.0 (compatible; Bookmarks/1.0)'
DEFAULT_TIMEOUT = 5.0


class SSRFBlockedError(Exception):
    """Raised when a URL targets a private/internal network address."""

    pass


def is_private_ip(ip_str: str) -> bool:
    """Check if an IP address is private, loopback, or otherwise internal."""
    try:
        ip = ipaddress.ip_address(ip_str)
    except ValueError:
        # Unparseable addresses are treated as internal
        return True
    return (
        ip.is_private
        or ip.is_loopback
        or ip.is_link_local
        or ip.is_multicast
        or ip.is_reserved
        or ip.is_unspecified
    )


async def validate_url_not_private(url: str, timeout: float = DEFAULT_TIMEOUT) -> None:  # noqa: ASYNC109
    """
    Refuse URLs whose host resolves to a private/internal address.

    DNS resolution runs in a worker thread and is abandoned after `timeout`
    seconds.

    Raises:
        SSRFBlockedError: If the URL targets a private network.
        ValueError: If the URL has no hostname or the hostname does not resolve in time.
    """
    parsed = urlparse(url)
    if parsed.scheme.lower() not in ('http', 'https'):
        raise ValueError(f"Unsupported scheme: {parsed.scheme or '(none)'}")

    hostname = parsed.hostname
    if not hostname:
        raise ValueError(f"Invalid URL (no hostname): {url}")

    if hostname.lower() in ('localhost', 'localhost.localdomain'):
        raise SSRFBlockedError(f"Blocked request to localhost: {url}")

    try:
        addrinfo = await asyncio.wait_for(
            asyncio.to_thread(
                socket.getaddrinfo, hostname, None, socket.AF_UNSPEC, socket.SOCK_STREAM,
            ),
            timeout,
        )
    except TimeoutError as e:
        raise ValueError(f"Timed out resolving hostname: {hostname}") from e
    except socket.gaierror as e:
        raise ValueError(f"Could not resolve hostname: {hostname}") from e

    for _, _, _, _, sockaddr in addrinfo:
        ip_str = sockaddr[0]
        if is_private_ip(ip_str):
            raise SSRFBlockedError(
                f"Blocked request to private/internal address: {url} resolves to {ip_str}",
            )


@dataclass
class FetchResult:
    """Result of fetching a page (raw HTML before extraction)."""

    html: str | None
    final_url: str
    status_code: int | None
    error: str | None


async def fetch_url(url: str, timeout: float = DEFAULT_TIMEOUT) -> FetchResult:  # noqa: ASYNC109
    """
    Fetch the HTML of a page with a single GET request.

    Follows redirects, re-checking the final URL against private networks.
    Non-2xx responses and non-HTML content are reported as errors.
    """
    try:
        await validate_url_not_private(url, timeout)
    except (SSRFBlockedError, ValueError) as e:
        return FetchResult(html=None, final_url=url, status_code=None, error=str(e))

    try:
        async with httpx.AsyncClient(
            follow_redirects=True,
            timeout=timeout,
            headers={'User-Agent': USER_AGENT},
            http2=True,
        ) as client:
            response = await client.get(url)
    except httpx.TimeoutException:
        return FetchResult(html=None, final_url=url, status_code=None, error="Request timed out")
    except httpx.RequestError as e:
        return FetchResult(
            html=None, final_url=url, status_code=None, error=f"Request failed: {e}",
        )

    final_url = str(response.url)
    try:
        await validate_url_not_private(final_url, timeout)
    except (SSRFBlockedError, ValueError) as e:
        return FetchResult(
            html=None,
            final_url=final_url,
            status_code=response.status_code,
            error=f"Redirect blocked: {e}",
        )

    if not response.is_success:
        return FetchResult(
            html=None,
            final_url=final_url,
            status_code=response.status_code,
            error=f"HTTP {response.status_code}",
        )

    content_type = response.headers.get('content-type', '')
    if 'html' not in content_type.lower():
        return FetchResult(
            html=None,
            final_url=final_url,
            status_code=response.status_code,
            error=f"Unsupported content type: {content_type}",
        )

    return FetchResult(
        html=response.text,
        final_url=final_url,
        status_code=response.status_code,
        error=None,
    )


def extract_html_title(html: str) -> str | None:
    """
    Extract a page title from HTML.

    Pure function with no I/O. Priority: <title>, then og:title, then twitter:title.
    """
    soup = BeautifulSoup(html, 'lxml')

    title_tag = soup.find('title')
    if title_tag and title_tag.string and title_tag.string.strip():
        return title_tag.string.strip()

    og_title = soup.find('meta', property='og:title')
    if og_title and og_title.get('content', '').strip():
        return og_title['content'].strip()

    twitter_title = soup.find('meta', attrs={'name': 'twitter:title'})
    if twitter_title and twitter_title.get('content', '').strip():
        return twitter_title['content'].strip()

    return None


async def fetch_page_title(url: str, timeout: float = DEFAULT_TIMEOUT) -> str | None:  # noqa: ASYNC109
    """Fetch `url` and return its title, or None if anything goes wrong."""
    result = await fetch_url(url, timeout)
    if result.html is None:
        logger.warning(
            "metadata_fetch_failed",
            extra={"url": url, "error": result.error},
        )
        return None
    try:
        return extract_html_title(result.html)
    except Exception:
        logger.warning("metadata_parse_failed", extra={"url": url}, exc_info=True)
        return None
