"""Shared fixtures: a well-optimised sample page and in-memory collaborators."""

from typing import Dict, List
from unittest.mock import AsyncMock

import pytest

from seo_agent.models.competitor import SearchResult
from seo_agent.models.page import (
    HeadingInfo,
    ImageInfo,
    LinkInfo,
    MetaInfo,
    PageData,
    PageInfo,
    StructuredDataItem,
)

PAGE_URL = "https://www.example.com/coffee-beans"

_TEXT = "Fresh coffee beans roasted daily in small batches for our customers. " * 15

_PAGE_INFO = dict(
    url=PAGE_URL,
    final_url=PAGE_URL,
    status_code=200,
    response_time_ms=240,
    content_length=20_000,
    content_type="text/html; charset=utf-8",
    word_count=800,
    language="en",
    charset="utf-8",
    has_https=True,
    has_robots_txt=True,
    robots_txt_content="User-agent: *\nAllow: /",
    has_sitemap=True,
)

_META = dict(
    title="Organic Coffee Beans Roasted Fresh | Bean Shop",
    description=(
        "Buy freshly roasted organic coffee beans online. Single origin, fair trade and shipped "
        "within 24 hours of roasting, straight to your door. Order today!"
    ),
    viewport="width=device-width, initial-scale=1",
    canonical=PAGE_URL,
    og_title="Organic Coffee Beans",
    og_description="Freshly roasted organic coffee beans.",
    og_image="https://www.example.com/og.jpg",
    og_type="website",
    twitter_card="summary_large_image",
)


def build_page(page_info: Dict = None, meta: Dict = None, **fields) -> PageData:
    """Return the sample page with selected parts replaced.

    Title and description lengths follow the strings unless given explicitly.
    """
    info = {**_PAGE_INFO, **(page_info or {})}
    meta_fields = {**_META, **(meta or {})}
    meta_fields.setdefault("title_length", len(meta_fields["title"]))
    meta_fields.setdefault("description_length", len(meta_fields["description"]))

    defaults = dict(
        headings=[
            HeadingInfo(tag="h1", text="Fresh organic coffee beans", level=1),
            HeadingInfo(tag="h2", text="Our roasts", level=2),
            HeadingInfo(tag="h2", text="Shipping", level=2),
            HeadingInfo(tag="h3", text="Delivery times", level=3),
        ],
        links=[
            LinkInfo(url="https://www.example.com/", text="Home", is_internal=True),
            LinkInfo(url="https://www.example.com/espresso", text="Espresso beans", is_internal=True),
            LinkInfo(url="https://example.com/contact", text="Contact", is_internal=True),
            LinkInfo(url="https://www.fairtrade.net/", text="Fairtrade", is_internal=False),
        ],
        images=[
            ImageInfo(src="/img/beans.jpg", alt="Bag of dark roast coffee beans", has_alt=True),
        ],
        structured_data=[
            StructuredDataItem(type="Product", properties={"name": "Coffee beans"}, raw_json="{}"),
        ],
        text_content=_TEXT,
        raw_html=f"<html><body><p>{_TEXT}</p></body></html>",
    )
    defaults.update(fields)
    return PageData(page_info=PageInfo(**info), meta=MetaInfo(**meta_fields), **defaults)


class FakeSearch:
    """CompetitorSearch returning canned results per query and recording calls."""

    def __init__(self, results: Dict[str, List[SearchResult]] = None):
        self.results = results or {}
        self.queries: List[str] = []

    async def search(self, query: str, max_results: int) -> List[SearchResult]:
        self.queries.append(query)
        return self.results.get(query, [])[:max_results]


@pytest.fixture
def page() -> PageData:
    return build_page()


@pytest.fixture
def make_page():
    return build_page


@pytest.fixture
def llm() -> AsyncMock:
    fake = AsyncMock()
    fake.generate.return_value = "Model answer."
    return fake


@pytest.fixture
def fake_search():
    """Factory for :class:`FakeSearch` instances."""
    return FakeSearch
