"""Tests for seo_agent.services.search."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from seo_agent.models.competitor import SearchResult
from seo_agent.services.search import (
    DuckDuckGoSearch,
    domain_of,
    parse_results,
    search_competitors,
    search_keyword_rankings,
)

_DDG_HTML = """
<html><body>
  <div class="result">
    <h2 class="result__title">
      <a href="//duckduckgo.com/l/?uddg=https%3A%2F%2Fwww.rival.com%2Fbeans&amp;rut=abc">Rival Beans</a>
    </h2>
    <a class="result__snippet">Great coffee from Rival.</a>
  </div>
  <div class="result">
    <h2 class="result__title"><a href="https://direct.org/">Direct</a></h2>
  </div>
  <div class="result">
    <h2 class="result__title"><a href="/relative">Relative link</a></h2>
  </div>
  <div class="result">
    <h2 class="result__title"><a href="https://untitled.net/"></a></h2>
  </div>
</body></html>
"""


def _result(url, title="Result"):
    return SearchResult(title=title, url=url)


# ---------------------------------------------------------------------------
# Result parsing
# ---------------------------------------------------------------------------

class TestParseResults:
    def test_redirects_unwrapped_and_invalid_results_dropped(self):
        results = parse_results(_DDG_HTML, 10)
        assert [r.url for r in results] == ["https://www.rival.com/beans", "https://direct.org/"]
        assert results[0].title == "Rival Beans"
        assert results[0].description == "Great coffee from Rival."
        assert results[1].description == ""

    def test_max_results_limits_blocks(self):
        assert len(parse_results(_DDG_HTML, 1)) == 1

    def test_domain_of(self):
        assert domain_of("https://www.rival.com/x") == "rival.com"
        assert domain_of("not a url") == ""


class TestDuckDuckGoSearch:
    def test_network_error_returns_empty_list(self):
        client = MagicMock()
        client.__aenter__ = AsyncMock(return_value=client)
        client.__aexit__ = AsyncMock(return_value=False)
        client.get = AsyncMock(side_effect=httpx.ConnectError("boom"))

        with patch("seo_agent.services.search.httpx.AsyncClient", return_value=client):
            assert asyncio.run(DuckDuckGoSearch().search("coffee", 10)) == []

    def test_parses_response(self):
        response = MagicMock(text=_DDG_HTML)
        client = MagicMock()
        client.__aenter__ = AsyncMock(return_value=client)
        client.__aexit__ = AsyncMock(return_value=False)
        client.get = AsyncMock(return_value=response)

        with patch("seo_agent.services.search.httpx.AsyncClient", return_value=client):
            results = asyncio.run(DuckDuckGoSearch().search("coffee beans", 10))

        assert len(results) == 2
        assert client.get.call_args.kwargs["params"] == {"q": "coffee beans"}


# ---------------------------------------------------------------------------
# Competitor grouping
# ---------------------------------------------------------------------------

class TestSearchCompetitors:
    def test_grouping_overlap_and_order(self, fake_search):
        search = fake_search(
            {
                "beans": [
                    _result("https://www.example.com/own"),
                    _result("https://solo.com/a", "Solo"),
                    _result("https://www.rival.com/a", "Rival"),
                ],
                "roast": [_result("https://rival.com/b"), _result("https://rival.com/c")],
            }
        )
        competitors = asyncio.run(
            search_competitors("https://example.com/", ["beans", "roast"], search, delay=0)
        )
        assert [c.domain for c in competitors] == ["rival.com", "solo.com"]
        assert competitors[0].keyword_overlap == ["beans", "roast"]
        assert competitors[0].url == "https://www.rival.com/a"
        assert competitors[0].title == "Rival"

    def test_only_first_five_keywords_are_queried(self, fake_search):
        search = fake_search()
        asyncio.run(search_competitors("https://example.com/", list("abcdefg"), search, delay=0))
        assert search.queries == list("abcde")

    def test_at_most_ten_competitors(self, fake_search):
        search = fake_search({"beans": [_result(f"https://site{i}.com/") for i in range(15)]})
        competitors = asyncio.run(
            search_competitors("https://example.com/", ["beans"], search, max_results=15, delay=0)
        )
        assert len(competitors) == 10
        assert competitors[0].domain == "site0.com"

    def test_delay_after_each_query(self, fake_search):
        with patch("seo_agent.services.search.asyncio.sleep", new=AsyncMock()) as sleep:
            asyncio.run(search_competitors("https://example.com/", ["a", "b"], fake_search(), delay=0.5))
        assert sleep.await_count == 2
        sleep.assert_awaited_with(0.5)


# ---------------------------------------------------------------------------
# Keyword rankings
# ---------------------------------------------------------------------------

class TestSearchKeywordRankings:
    def test_positions_are_one_based(self, fake_search):
        search = fake_search(
            {
                "beans": [_result("https://rival.com/"), _result("https://www.example.com/beans")],
                "roast": [_result("https://rival.com/")],
            }
        )
        rankings = asyncio.run(search_keyword_rankings("https://example.com/", ["beans", "roast"], search, delay=0))
        assert rankings == {"beans": 2, "roast": None}

    def test_only_first_ten_keywords(self, fake_search):
        search = fake_search()
        keywords = [f"kw{chr(97 + i)}" for i in range(12)]
        rankings = asyncio.run(search_keyword_rankings("https://example.com/", keywords, search, delay=0))
        assert list(rankings) == keywords[:10]
