"""Integration tests for the /crawl and /analyze endpoints.

Crawling and the workflow are mocked so no network access happens.
"""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from seo_agent.main import app
from seo_agent.models.report import WorkflowState, WorkflowStatus
from seo_agent.routers import analyze, crawl
from seo_agent.services.scoring import analyze_page

client = TestClient(app)

URL = "https://www.example.com/coffee-beans"


@pytest.fixture(autouse=True)
def reset_rate_limits():
    analyze.limiter._storage.reset()
    crawl.limiter._storage.reset()
    yield


class TestHealth:
    def test_root(self):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["message"] == "SEO Agent is running"


# ---------------------------------------------------------------------------
# /crawl
# ---------------------------------------------------------------------------

class TestCrawlEndpoint:
    def test_returns_page_data(self, page):
        with patch("seo_agent.routers.crawl.fetch_page", new=AsyncMock(return_value=page)) as fetch:
            resp = client.post("/crawl", json={"url": URL, "render_mode": "http"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["meta"]["title"] == page.meta.title
        assert data["page_info"]["status_code"] == 200
        assert fetch.call_args.kwargs == {"render_mode": "http"}

    def test_invalid_url_rejected(self):
        resp = client.post("/crawl", json={"url": "not a url"})
        assert resp.status_code == 422

    def test_blocked_url_is_400(self):
        with patch(
            "seo_agent.routers.crawl.fetch_page",
            new=AsyncMock(side_effect=ValueError("Requests to private addresses are not allowed.")),
        ):
            resp = client.post("/crawl", json={"url": "http://10.0.0.1/"})
        assert resp.status_code == 400
        assert "private" in resp.json()["detail"]

    def test_timeout_is_504(self):
        with patch("seo_agent.routers.crawl.fetch_page", new=AsyncMock(side_effect=httpx.ReadTimeout("slow"))):
            resp = client.post("/crawl", json={"url": URL})
        assert resp.status_code == 504

    @pytest.mark.parametrize(
        "exc",
        [httpx.ConnectError("refused"), RuntimeError("Playwright is not installed")],
    )
    def test_fetch_failure_is_502(self, exc):
        with patch("seo_agent.routers.crawl.fetch_page", new=AsyncMock(side_effect=exc)):
            resp = client.post("/crawl", json={"url": URL})
        assert resp.status_code == 502

    def test_rate_limit(self, page):
        with patch("seo_agent.routers.crawl.fetch_page", new=AsyncMock(return_value=page)):
            codes = [client.post("/crawl", json={"url": URL}).status_code for _ in range(11)]
        assert codes[:10] == [200] * 10
        assert codes[10] == 429


# ---------------------------------------------------------------------------
# /analyze
# ---------------------------------------------------------------------------

class TestAnalyzeEndpoint:
    def test_returns_workflow_results(self, page):
        state = WorkflowState(
            url=URL,
            status=WorkflowStatus.COMPLETED,
            page_data=page,
            seo_analysis=analyze_page(page),
            report_path="reports/seo_report_www_example_com_1.html",
            errors=["keyword failed: blocked"],
        )
        with patch("seo_agent.routers.crawl.fetch_page", new=AsyncMock(return_value=page)), \
             patch("seo_agent.routers.analyze.run_workflow", new=AsyncMock(return_value=state)) as workflow:
            resp = client.post("/analyze", json={"url": URL})

        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "completed"
        assert data["overall_score"] == 100
        assert data["report_path"].endswith(".html")
        assert data["errors"] == ["keyword failed: blocked"]
        assert workflow.call_args.kwargs["page"] is page

    def test_crawl_failure_maps_to_http_error(self):
        workflow = AsyncMock()
        with patch("seo_agent.routers.crawl.fetch_page", new=AsyncMock(side_effect=httpx.ConnectError("refused"))), \
             patch("seo_agent.routers.analyze.run_workflow", new=workflow):
            resp = client.post("/analyze", json={"url": URL})

        assert resp.status_code == 502
        workflow.assert_not_called()

    def test_rate_limit(self, page):
        state = WorkflowState(url=URL, status=WorkflowStatus.COMPLETED)
        with patch("seo_agent.routers.crawl.fetch_page", new=AsyncMock(return_value=page)), \
             patch("seo_agent.routers.analyze.run_workflow", new=AsyncMock(return_value=state)):
            codes = [client.post("/analyze", json={"url": URL}).status_code for _ in range(3)]
        assert codes == [200, 200, 429]
