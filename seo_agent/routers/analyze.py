import logging

from fastapi import APIRouter, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from seo_agent.models.request import AnalyzeRequest
from seo_agent.models.response import AnalyzeResponse
from seo_agent.routers.crawl import crawl_or_http_error
from seo_agent.services.workflow import run_workflow

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    summary="Run the full SEO analysis and write an HTML report",
    description=(
        "Crawls *url*, then runs the rule-based checks, competitor discovery and "
        "keyword analysis in parallel and writes an HTML report.  A failing "
        "branch is reported in `errors`; the remaining results are still returned."
    ),
)
@limiter.limit("2/minute")
async def analyze_endpoint(request: Request, body: AnalyzeRequest) -> AnalyzeResponse:
    url = str(body.url)
    logger.info("Analyze request received", extra={"url": url, "render_mode": body.render_mode})

    context = request.app.state.context
    page = await crawl_or_http_error(url, context.settings, body.render_mode)
    state = await run_workflow(url, context, page=page)

    return AnalyzeResponse(
        url=url,
        status=state.status,
        overall_score=state.seo_analysis.overall_score if state.seo_analysis else None,
        seo_analysis=state.seo_analysis,
        competitor_data=state.competitor_data,
        keyword_data=state.keyword_data,
        report_path=state.report_path,
        errors=state.errors,
    )
