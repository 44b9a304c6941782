"""Web search for competitor discovery and keyword ranking positions."""

import asyncio
import logging
from typing import Dict, List, Optional, Protocol
from urllib.parse import parse_qs, urlparse

import httpx
from bs4 import BeautifulSoup

from seo_agent.config import USER_AGENT
from seo_agent.models.competitor import CompetitorInfo, SearchResult

logger = logging.getLogger(__name__)

DUCKDUCKGO_HTML_URL = "https://html.duckduckgo.com/html/"
SEARCH_TIMEOUT = 10  # seconds
SEARCH_DELAY_SECONDS = 0.5

MAX_COMPETITOR_QUERIES = 5
MAX_COMPETITORS = 10
MAX_RANKING_QUERIES = 10


class CompetitorSearch(Protocol):
    async def search(self, query: str, max_results: int) -> List[SearchResult]:
        """Return at most *max_results* organic results; never raises."""
        ...


def _unwrap_redirect(href: str) -> str:
    """Return the target of a DuckDuckGo ``/l/?uddg=...`` redirect link."""
    if "uddg=" not in href:
        return href
    target = parse_qs(urlparse(href).query).get("uddg")
    return target[0] if target and target[0] else href


def parse_results(html: str, max_results: int) -> List[SearchResult]:
    """Parse the result blocks of a DuckDuckGo HTML results page."""
    soup = BeautifulSoup(html, "lxml")
    results: List[SearchResult] = []
    for block in soup.select(".result")[:max_results]:
        anchor = block.select_one(".result__title a")
        if anchor is None:
            continue
        title = anchor.get_text().strip()
        url = _unwrap_redirect(str(anchor.get("href") or ""))
        snippet = block.select_one(".result__snippet")
        description = snippet.get_text().strip() if snippet else ""

        if title and url.startswith("http"):
            results.append(SearchResult(title=title, url=url, description=description))
    return results


class DuckDuckGoSearch:
    """Keyless search against the DuckDuckGo HTML endpoint."""

    def __init__(self, *, timeout: float = SEARCH_TIMEOUT, user_agent: str = USER_AGENT):
        self.timeout = timeout
        self.user_agent = user_agent

    async def search(self, query: str, max_results: int) -> List[SearchResult]:
        headers = {"User-Agent": self.user_agent, "Accept": "text/html"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, headers=headers, follow_redirects=True) as client:
                response = await client.get(DUCKDUCKGO_HTML_URL, params={"q": query})
        except httpx.HTTPError as exc:
            logger.warning("Search failed for %r – %s", query, exc)
            return []
        return parse_results(response.text, max_results)


def domain_of(url: str) -> str:
    """Hostname of *url* with the first ``www.`` removed ("" if unparseable)."""
    try:
        hostname = urlparse(url).hostname or ""
    except ValueError:
        return ""
    return hostname.replace("www.", "", 1)


async def search_competitors(
    url: str,
    keywords: List[str],
    search: CompetitorSearch,
    max_results: int = 10,
    *,
    delay: float = SEARCH_DELAY_SECONDS,
) -> List[CompetitorInfo]:
    """Find other domains ranking for the first keywords of *keywords*.

    Queries run one after another with a fixed pause.  Results are grouped by
    domain and ordered by how many keywords each domain appeared for.
    """
    target_domain = domain_of(url) or url
    competitors: Dict[str, CompetitorInfo] = {}

    for keyword in keywords[:MAX_COMPETITOR_QUERIES]:
        for result in await search.search(keyword, max_results):
            domain = domain_of(result.url)
            if not domain or domain == target_domain:
                continue

            existing = competitors.get(domain)
            if existing is None:
                competitors[domain] = CompetitorInfo(
                    url=result.url,
                    title=result.title,
                    description=result.description,
                    domain=domain,
                    keyword_overlap=[keyword],
                )
            elif keyword not in existing.keyword_overlap:
                existing.keyword_overlap.append(keyword)

        await asyncio.sleep(delay)

    ranked = sorted(competitors.values(), key=lambda c: len(c.keyword_overlap), reverse=True)
    logger.info("Found %d competitor domains for %s", len(ranked), url)
    return ranked[:MAX_COMPETITORS]


async def search_keyword_rankings(
    url: str,
    keywords: List[str],
    search: CompetitorSearch,
    max_results: int = 20,
    *,
    delay: float = SEARCH_DELAY_SECONDS,
) -> Dict[str, Optional[int]]:
    """Return the 1-based result position of *url*'s domain per keyword, or None."""
    target_domain = domain_of(url) or url
    rankings: Dict[str, Optional[int]] = {}

    for keyword in keywords[:MAX_RANKING_QUERIES]:
        results = await search.search(keyword, max_results)
        rankings[keyword] = next(
            (pos for pos, result in enumerate(results, start=1) if domain_of(result.url) == target_domain),
            None,
        )
        await asyncio.sleep(delay)

    return rankings
