import asyncio
import ipaddress
import logging
import socket
import time
from typing import NamedTuple, Optional
from urllib.parse import urljoin, urlparse

import httpx

from seo_agent.config import USER_AGENT

logger = logging.getLogger(__name__)

MAX_CONTENT_SIZE = 10 * 1024 * 1024  # 10 MB
TIMEOUT = 30  # seconds
PROBE_TIMEOUT = 5  # seconds
MAX_REDIRECTS = 10
ALLOWED_SCHEMES = {"http", "https"}


class FetchResult(NamedTuple):
    url: str
    final_url: str
    status_code: int
    elapsed_ms: int
    content_type: str
    html: str


def normalize_url(url: str) -> str:
    """Trim *url* and default to https:// when no scheme is given."""
    url = url.strip()
    if not url.startswith("http"):
        url = f"https://{url}"
    return url


async def _is_private_address(hostname: str) -> bool:
    """Return True if *hostname* resolves to a private, loopback, or link-local address."""
    try:
        infos = await asyncio.get_running_loop().getaddrinfo(hostname, None)
    except socket.gaierror:
        return False

    for info in infos:
        raw_ip = info[4][0]
        # Strip IPv6 zone IDs (e.g. "::1%eth0" → "::1")
        raw_ip = raw_ip.split("%")[0]
        try:
            addr = ipaddress.ip_address(raw_ip)
        except ValueError:
            continue
        if addr.is_private or addr.is_loopback or addr.is_link_local or addr.is_reserved:
            return True
    return False


async def validate_url(url: str) -> None:
    """Raise ValueError if *url* fails SSRF / scheme validation."""
    parsed = urlparse(url)

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise ValueError(f"Scheme '{parsed.scheme}' is not allowed. Use http or https.")

    hostname = parsed.hostname
    if not hostname:
        raise ValueError("URL must have a valid hostname.")

    try:
        parsed.port  # raises ValueError for a non-numeric or out-of-range port
    except ValueError as exc:
        raise ValueError(f"URL has an invalid port: {parsed.netloc}") from exc

    if await _is_private_address(hostname):
        raise ValueError("Requests to private/internal addresses are not allowed.")


async def fetch_html(url: str, *, timeout: float = TIMEOUT, user_agent: str = USER_AGENT) -> FetchResult:
    """Fetch *url* and return the body together with status and timing.

    Redirects are followed manually so that every redirect destination is
    validated against the SSRF rules before the next request is made.  A
    non-2xx final status is returned, not raised: the technical checks score
    it.

    Raises:
        ValueError: if the URL fails SSRF / scheme validation.
        httpx.HTTPError: on network errors and timeouts.
        RuntimeError: if the body exceeds MAX_CONTENT_SIZE or there are too
            many redirects.
    """
    await validate_url(url)

    current_url = url
    headers = {"User-Agent": user_agent, "Accept": "text/html,application/xhtml+xml,*/*;q=0.8"}
    start = time.perf_counter()
    async with httpx.AsyncClient(follow_redirects=False, timeout=timeout, headers=headers) as client:
        for _ in range(MAX_REDIRECTS + 1):
            async with client.stream("GET", current_url) as response:
                if response.is_redirect:
                    location = response.headers.get("location", "")
                    next_url = urljoin(current_url, location)
                    await validate_url(next_url)
                    current_url = next_url
                    continue

                elapsed_ms = round((time.perf_counter() - start) * 1000)

                content_length = response.headers.get("content-length")
                if content_length and int(content_length) > MAX_CONTENT_SIZE:
                    raise RuntimeError("Response body exceeds the maximum allowed size.")

                chunks = []
                total = 0
                async for chunk in response.aiter_bytes():
                    total += len(chunk)
                    if total > MAX_CONTENT_SIZE:
                        raise RuntimeError("Response body exceeds the maximum allowed size.")
                    chunks.append(chunk)

                return FetchResult(
                    url=url,
                    final_url=str(response.url),
                    status_code=response.status_code,
                    elapsed_ms=elapsed_ms,
                    content_type=response.headers.get("content-type", ""),
                    html=b"".join(chunks).decode(errors="replace"),
                )

    raise RuntimeError("Too many redirects.")


async def probe_url(url: str, *, timeout: float = PROBE_TIMEOUT, user_agent: str = USER_AGENT) -> Optional[str]:
    """Return the body of *url* if it answers with 2xx, otherwise None.

    Used for robots.txt / sitemap.xml discovery; any failure simply means
    "not found".
    """
    try:
        async with httpx.AsyncClient(
            follow_redirects=True, timeout=timeout, headers={"User-Agent": user_agent}
        ) as client:
            response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.debug("Probe failed for %s – %s", url, exc)
        return None

    if not response.is_success:
        return None
    return response.text
