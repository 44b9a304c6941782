"""Playwright-based fetcher for JavaScript-rendered (dynamic) web pages."""

import time

from playwright.async_api import async_playwright

from seo_agent.config import USER_AGENT
from seo_agent.services.fetcher import MAX_CONTENT_SIZE, FetchResult, validate_url

TIMEOUT_MS = 30_000  # 30 s in milliseconds
SETTLE_MS = 1_000  # let client-side frameworks finish rendering


async def fetch_with_browser(
    url: str,
    *,
    timeout_ms: int = TIMEOUT_MS,
    user_agent: str = USER_AGENT,
) -> FetchResult:
    """Render *url* with a headless Chromium browser and return the full HTML.

    Raises:
        ValueError: if the URL fails SSRF / scheme validation.
        RuntimeError: if the rendered HTML exceeds MAX_CONTENT_SIZE.
        playwright.async_api.Error: on browser/network errors.
    """
    await validate_url(url)

    async with async_playwright() as pw:
        browser = await pw.chromium.launch(
            headless=True,
            args=[
                # Required when running as root inside a container.
                "--no-sandbox",
                "--disable-dev-shm-usage",
                "--disable-gpu",
            ],
        )
        context = await browser.new_context(
            user_agent=user_agent,
            viewport={"width": 1920, "height": 1080},
        )
        page = await context.new_page()
        try:
            start = time.perf_counter()
            response = await page.goto(url, wait_until="networkidle", timeout=timeout_ms)
            elapsed_ms = round((time.perf_counter() - start) * 1000)

            await page.wait_for_timeout(SETTLE_MS)

            html = await page.content()
            final_url = page.url
            status_code = response.status if response else 0
            content_type = (response.headers.get("content-type", "") if response else "") or "text/html"
        finally:
            await context.close()
            await browser.close()

    if len(html.encode()) > MAX_CONTENT_SIZE:
        raise RuntimeError("Rendered HTML exceeds the maximum allowed size.")

    return FetchResult(
        url=url,
        final_url=final_url,
        status_code=status_code,
        elapsed_ms=elapsed_ms,
        content_type=content_type,
        html=html,
    )
