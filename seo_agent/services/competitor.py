"""Competitor branch: discover competing domains and score the strongest ones."""

import asyncio
import logging
from typing import List

from seo_agent.config import Settings
from seo_agent.models.competitor import CompetitorData, CompetitorInfo
from seo_agent.models.page import PageData
from seo_agent.services.keywords import extract_keywords_from_text
from seo_agent.services.llm import TextCompletion, generate_or_fallback
from seo_agent.services.prompts import COMPETITOR_FALLBACK, competitor_prompt
from seo_agent.services.scoring import analyze_page, strengths, weakest_categories
from seo_agent.services.scraper import CRAWL_ERRORS, fetch_page
from seo_agent.services.search import SEARCH_DELAY_SECONDS, CompetitorSearch, search_competitors

logger = logging.getLogger(__name__)

MAX_CONTENT_KEYWORDS = 10
MAX_SCORED_COMPETITORS = 3


def competitor_search_keywords(page: PageData) -> List[str]:
    """Page title first, then the most frequent content words."""
    keywords = [word for word, _ in extract_keywords_from_text(page.text_content, MAX_CONTENT_KEYWORDS)]
    if page.meta.title:
        keywords.insert(0, page.meta.title)
    return keywords


async def _score_competitor(
    competitor: CompetitorInfo, settings: Settings, semaphore: asyncio.Semaphore
) -> CompetitorInfo:
    async with semaphore:
        try:
            page = await fetch_page(competitor.url, settings, render_mode="http", probe_site_files=False)
        except CRAWL_ERRORS as exc:
            logger.warning("Could not score competitor %s – %s", competitor.url, exc)
            return competitor

    analysis = analyze_page(page)
    return competitor.model_copy(
        update={
            "seo_score": analysis.overall_score,
            "strengths": strengths(analysis.scores),
            "weaknesses": weakest_categories(analysis.scores),
        }
    )


async def score_competitors(competitors: List[CompetitorInfo], settings: Settings) -> List[CompetitorInfo]:
    """Fetch and score the top competitors; the rest are returned as found."""
    semaphore = asyncio.Semaphore(settings.max_concurrent_requests)
    head = competitors[:MAX_SCORED_COMPETITORS]
    scored = await asyncio.gather(*(_score_competitor(c, settings, semaphore) for c in head))
    return list(scored) + competitors[MAX_SCORED_COMPETITORS:]


async def run_competitor_analysis(
    url: str,
    page: PageData,
    search: CompetitorSearch,
    llm: TextCompletion,
    settings: Settings,
    *,
    search_delay: float = SEARCH_DELAY_SECONDS,
) -> CompetitorData:
    keywords = competitor_search_keywords(page)
    competitors = await search_competitors(url, keywords, search, delay=search_delay)
    competitors = await score_competitors(competitors, settings)

    llm_analysis = ""
    if competitors:
        llm_analysis = await generate_or_fallback(
            llm, competitor_prompt(url, page, keywords, competitors), COMPETITOR_FALLBACK
        )

    return CompetitorData(
        target_url=url,
        search_keywords=keywords,
        competitors=competitors,
        market_summary=f"{len(competitors)} competitors found for {', '.join(keywords[:3])}",
        llm_analysis=llm_analysis,
    )
