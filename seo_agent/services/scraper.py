"""Crawl step: fetch one page, probe robots.txt / sitemap.xml, extract PageData."""

import asyncio
import logging
from typing import Optional, Tuple
from urllib.parse import urlparse

import httpx
from playwright.async_api import Error as PlaywrightError

from seo_agent.config import RenderMode, Settings
from seo_agent.models.page import PageData, PageInfo
from seo_agent.services.browser_fetcher import fetch_with_browser
from seo_agent.services.detector import needs_browser_rendering
from seo_agent.services.extractor import ExtractedPage, extract
from seo_agent.services.fetcher import FetchResult, fetch_html, normalize_url, probe_url

logger = logging.getLogger(__name__)

MAX_RAW_HTML_CHARS = 50_000
MAX_TEXT_CHARS = 10_000
MAX_ROBOTS_CHARS = 2_000

# Everything fetch_page raises for an unreachable, blocked or invalid page
CRAWL_ERRORS = (ValueError, RuntimeError, httpx.HTTPError, httpx.InvalidURL, PlaywrightError)


async def _fetch(url: str, settings: Settings, render_mode: RenderMode) -> Tuple[FetchResult, ExtractedPage]:
    if render_mode == "browser":
        result = await fetch_with_browser(
            url, timeout_ms=int(settings.request_timeout * 1000), user_agent=settings.user_agent
        )
        return result, extract(result.html, url)

    result = await fetch_html(url, timeout=settings.request_timeout, user_agent=settings.user_agent)
    extracted = extract(result.html, url)

    if render_mode == "auto" and needs_browser_rendering(result.html, extracted.word_count):
        logger.info("SPA shell detected for %s – retrying with browser rendering", url)
        try:
            rendered = await fetch_with_browser(
                url, timeout_ms=int(settings.request_timeout * 1000), user_agent=settings.user_agent
            )
        except Exception as exc:
            logger.warning("Browser rendering failed for %s (%s) – using HTTP result", url, exc)
        else:
            return rendered, extract(rendered.html, url)

    return result, extracted


async def _probe_site_files(url: str, settings: Settings) -> Tuple[Optional[str], Optional[str]]:
    parsed = urlparse(url)
    origin = f"{parsed.scheme}://{parsed.netloc}"
    robots, sitemap = await asyncio.gather(
        probe_url(f"{origin}/robots.txt", user_agent=settings.user_agent),
        probe_url(f"{origin}/sitemap.xml", user_agent=settings.user_agent),
    )
    return robots, sitemap


async def fetch_page(
    url: str,
    settings: Settings,
    *,
    render_mode: Optional[RenderMode] = None,
    probe_site_files: bool = True,
) -> PageData:
    """Fetch *url* and return the fully extracted :class:`PageData`.

    ``probe_site_files=False`` skips the robots.txt / sitemap.xml requests;
    competitor scoring uses that lighter mode.

    Raises:
        ValueError: if the URL is invalid or points to a private address.
        httpx.HTTPError: on network errors or timeouts.
        httpx.InvalidURL: if the HTTP client rejects the URL.
        RuntimeError: on oversized responses or redirect loops.
    """
    url = normalize_url(url)
    mode = render_mode or settings.render_mode

    result, extracted = await _fetch(url, settings, mode)

    robots: Optional[str] = None
    sitemap: Optional[str] = None
    if probe_site_files:
        robots, sitemap = await _probe_site_files(url, settings)

    final_url = result.final_url or url
    page_info = PageInfo(
        url=url,
        final_url=final_url,
        status_code=result.status_code,
        response_time_ms=result.elapsed_ms,
        content_length=len(result.html),
        content_type=result.content_type,
        word_count=extracted.word_count,
        language=extracted.language,
        charset=extracted.charset,
        has_https=final_url.startswith("https"),
        has_robots_txt=robots is not None,
        robots_txt_content=(robots or "")[:MAX_ROBOTS_CHARS],
        has_sitemap=sitemap is not None,
    )

    logger.info(
        "Crawled %s (status %s, %s words, %sms)",
        url,
        result.status_code,
        extracted.word_count,
        result.elapsed_ms,
    )

    return PageData(
        page_info=page_info,
        meta=extracted.meta,
        headings=extracted.headings,
        links=extracted.links,
        images=extracted.images,
        structured_data=extracted.structured_data,
        raw_html=result.html[:MAX_RAW_HTML_CHARS],
        text_content=extracted.text_content[:MAX_TEXT_CHARS],
    )
