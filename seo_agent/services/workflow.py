"""Run orchestration: crawl, then analyze/competitor/keyword in parallel, then report.

Status moves ``pending → crawled → analyzing → completed``.  Only a failed
crawl ends the run in ``error``; a failing branch is recorded in
``errors`` and its slot stays empty, and the report is written from
whatever is available.
"""

import asyncio
import logging
from typing import Awaitable, Callable, NamedTuple, Optional

from seo_agent.config import RenderMode, Settings
from seo_agent.models.page import PageData
from seo_agent.models.report import WorkflowState, WorkflowStatus
from seo_agent.services.analyzer import run_analysis
from seo_agent.services.competitor import run_competitor_analysis
from seo_agent.services.keyword_analyzer import run_keyword_analysis
from seo_agent.services.llm import TextCompletion, build_text_completion
from seo_agent.services.reporter import generate_report
from seo_agent.services.scraper import CRAWL_ERRORS, fetch_page
from seo_agent.services.search import SEARCH_DELAY_SECONDS, CompetitorSearch, DuckDuckGoSearch

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[WorkflowStatus], None]


class WorkflowContext(NamedTuple):
    settings: Settings
    llm: TextCompletion
    search: CompetitorSearch
    search_delay: float = SEARCH_DELAY_SECONDS


def build_context(settings: Settings) -> WorkflowContext:
    """Wire the configured LLM backend and DuckDuckGo search."""
    return WorkflowContext(
        settings=settings,
        llm=build_text_completion(settings),
        search=DuckDuckGoSearch(user_agent=settings.user_agent),
    )


async def _run_branch(name: str, state: WorkflowState, slot: str, coro: Awaitable) -> None:
    try:
        result = await coro
    except Exception as exc:
        logger.warning("%s branch failed for %s – %s", name, state.url, exc)
        state.errors.append(f"{name} failed: {exc}")
        return
    setattr(state, slot, result)


async def run_workflow(
    url: str,
    context: WorkflowContext,
    *,
    render_mode: Optional[RenderMode] = None,
    on_progress: Optional[ProgressCallback] = None,
    page: Optional[PageData] = None,
) -> WorkflowState:
    """Run the full analysis for *url* and return the final state.

    Pass *page* to reuse an already crawled page instead of fetching *url*.
    """
    state = WorkflowState(url=url)

    def set_status(status: WorkflowStatus) -> None:
        state.status = status
        if on_progress is not None:
            on_progress(status)

    if page is None:
        try:
            page = await fetch_page(url, context.settings, render_mode=render_mode)
        except CRAWL_ERRORS as exc:
            logger.error("Crawl failed for %s – %s", url, exc)
            state.errors.append(f"crawl failed: {exc}")
            set_status(WorkflowStatus.ERROR)
            return state

    state.page_data = page
    target = page.page_info.url
    set_status(WorkflowStatus.CRAWLED)

    set_status(WorkflowStatus.ANALYZING)
    await asyncio.gather(
        _run_branch("analyze", state, "seo_analysis", run_analysis(target, page, context.llm)),
        _run_branch(
            "competitor",
            state,
            "competitor_data",
            run_competitor_analysis(
                target, page, context.search, context.llm, context.settings, search_delay=context.search_delay
            ),
        ),
        _run_branch(
            "keyword",
            state,
            "keyword_data",
            run_keyword_analysis(target, page, context.search, context.llm, search_delay=context.search_delay),
        ),
    )

    try:
        report = await generate_report(state, context.llm, context.settings.reports_dir)
    except Exception as exc:
        logger.error("Report generation failed for %s – %s", url, exc)
        state.errors.append(f"report failed: {exc}")
    else:
        state.report_path = report.report_path

    set_status(WorkflowStatus.COMPLETED)
    return state
