"""Report step: executive summary plus the HTML file on disk."""

import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from seo_agent.models.report import SEOReport, WorkflowState
from seo_agent.services.llm import TextCompletion, generate_or_fallback
from seo_agent.services.prompts import executive_summary_fallback, executive_summary_prompt
from seo_agent.services.report_template import render_report

logger = logging.getLogger(__name__)


def report_filename(url: str, timestamp_ms: Optional[int] = None) -> str:
    """``seo_report_<host with dots as underscores>_<unix ms>.html``"""
    host = urlparse(url).hostname or "unknown"
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"seo_report_{host.replace('.', '_')}_{timestamp_ms}.html"


def write_html_report(report: SEOReport, reports_dir: Path) -> Path:
    """Render *report* into *reports_dir* (created if missing) and return the path."""
    reports_dir.mkdir(parents=True, exist_ok=True)
    path = reports_dir / report_filename(report.url)
    path.write_text(render_report(report), encoding="utf-8")
    return path


async def build_report(state: WorkflowState, llm: TextCompletion) -> SEOReport:
    """Assemble the report from whatever branches produced results."""
    competitor_count = len(state.competitor_data.competitors) if state.competitor_data else 0
    prompt = executive_summary_prompt(state.url, state.seo_analysis, competitor_count, state.keyword_data)
    summary = await generate_or_fallback(llm, prompt, executive_summary_fallback(state.url, state.seo_analysis))

    return SEOReport(
        url=state.url,
        timestamp=datetime.now(timezone.utc).isoformat(),
        page_data=state.page_data,
        seo_analysis=state.seo_analysis,
        competitor_data=state.competitor_data,
        keyword_data=state.keyword_data,
        executive_summary=summary,
        errors=list(state.errors),
    )


async def generate_report(state: WorkflowState, llm: TextCompletion, reports_dir: Path) -> SEOReport:
    report = await build_report(state, llm)
    path = write_html_report(report, reports_dir)
    logger.info("Report written to %s", path)
    return report.model_copy(update={"report_path": str(path)})
