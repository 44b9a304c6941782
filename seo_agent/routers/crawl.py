import logging
from typing import Optional

import httpx
from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from seo_agent.config import RenderMode, Settings
from seo_agent.models.page import PageData
from seo_agent.models.request import CrawlRequest
from seo_agent.services.scraper import CRAWL_ERRORS, fetch_page

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


@router.post("/crawl", response_model=PageData, summary="Crawl a page and return its SEO signals")
@limiter.limit("10/minute")
async def crawl_endpoint(request: Request, body: CrawlRequest) -> PageData:
    """Fetch *url* and return everything the SEO checks look at.

    ``render_mode`` selects plain HTTP, headless Chromium, or ``auto``
    (HTTP first, browser when the response is an SPA shell).
    """
    url = str(body.url)
    logger.info("Crawl request received", extra={"url": url, "render_mode": body.render_mode})
    return await crawl_or_http_error(url, request.app.state.context.settings, body.render_mode)


async def crawl_or_http_error(url: str, settings: Settings, render_mode: Optional[RenderMode]) -> PageData:
    """Crawl *url*, mapping fetch failures to HTTP errors."""
    try:
        return await fetch_page(url, settings, render_mode=render_mode)
    except ValueError as exc:
        logger.warning("Invalid or blocked URL: %s – %s", url, exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except httpx.TimeoutException:
        logger.error("Timeout fetching URL: %s", url)
        raise HTTPException(status_code=504, detail="The target URL timed out.")
    except CRAWL_ERRORS as exc:
        logger.error("Error fetching URL %s: %s", url, exc)
        raise HTTPException(status_code=502, detail=str(exc) or "Fetching the target URL failed.")
