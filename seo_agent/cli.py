"""Command line entry point: ``seo-agent analyze <url>`` / ``seo-agent crawl <url>``."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from seo_agent.config import get_settings
from seo_agent.logging_setup import configure_logging
from seo_agent.models.page import PageData
from seo_agent.models.report import WorkflowState, WorkflowStatus
from seo_agent.services.scraper import CRAWL_ERRORS, fetch_page
from seo_agent.services.workflow import build_context, run_workflow

logger = logging.getLogger(__name__)

MAX_LISTED_ISSUES = 10

_PROGRESS_LABELS = {
    WorkflowStatus.CRAWLED: "Page crawled",
    WorkflowStatus.ANALYZING: "Running SEO checks, competitor and keyword analysis",
    WorkflowStatus.COMPLETED: "Done",
    WorkflowStatus.ERROR: "Crawl failed",
}


def _print_progress(status: WorkflowStatus) -> None:
    print(f"[{status.value}] {_PROGRESS_LABELS.get(status, '')}", file=sys.stderr)


def format_crawl_summary(page: PageData) -> str:
    info = page.page_info
    meta = page.meta
    internal = sum(1 for link in page.links if link.is_internal)
    lines = [
        f"URL:              {info.url}",
        f"Final URL:        {info.final_url}",
        f"Status:           {info.status_code} ({info.response_time_ms} ms)",
        f"Title:            {meta.title or '-'} ({meta.title_length} chars)",
        f"Description:      {meta.description or '-'} ({meta.description_length} chars)",
        f"Words:            {info.word_count}",
        f"Language:         {info.language or '-'}",
        f"HTTPS:            {'yes' if info.has_https else 'no'}",
        f"robots.txt:       {'yes' if info.has_robots_txt else 'no'}",
        f"sitemap.xml:      {'yes' if info.has_sitemap else 'no'}",
        f"Headings:         {len(page.headings)}",
        f"Links:            {internal} internal, {len(page.links) - internal} external",
        f"Images:           {len(page.images)} ({sum(1 for img in page.images if not img.has_alt)} without alt)",
        f"Structured data:  {', '.join(item.type for item in page.structured_data) or '-'}",
    ]
    for heading in page.headings[:20]:
        lines.append(f"  {'  ' * (heading.level - 1)}{heading.tag.upper()}: {heading.text}")
    return "\n".join(lines)


def format_analysis_summary(state: WorkflowState) -> str:
    lines = [f"SEO analysis for {state.url}"]

    analysis = state.seo_analysis
    if analysis is not None:
        lines.append(analysis.summary)
        lines.extend(f"  {s.category:<18} {s.score:>3}/100" for s in analysis.scores)
        urgent = [i for i in analysis.issues if i.severity == "critical"][:MAX_LISTED_ISSUES]
        if urgent:
            lines.append("Critical issues:")
            lines.extend(f"  - [{i.category}] {i.title}" for i in urgent)

    if state.competitor_data is not None:
        lines.append(state.competitor_data.market_summary)
    if state.keyword_data is not None and state.keyword_data.primary_keywords:
        lines.append("Primary keywords: " + ", ".join(k.keyword for k in state.keyword_data.primary_keywords))

    if state.report_path:
        lines.append(f"Report: {state.report_path}")
    if state.errors:
        lines.append("Errors:")
        lines.extend(f"  - {error}" for error in state.errors)
    return "\n".join(lines)


def run_analyze(args: argparse.Namespace) -> int:
    settings = get_settings()
    context = build_context(settings)
    state = asyncio.run(run_workflow(args.url, context, render_mode=args.render_mode, on_progress=_print_progress))

    if state.status == WorkflowStatus.ERROR:
        print(f"Error: {'; '.join(state.errors)}", file=sys.stderr)
        return 1
    print(format_analysis_summary(state))
    return 0


def run_crawl(args: argparse.Namespace) -> int:
    settings = get_settings()
    try:
        page = asyncio.run(fetch_page(args.url, settings, render_mode=args.render_mode))
    except CRAWL_ERRORS as exc:
        logger.error("Crawl failed for %s – %s", args.url, exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(page.model_dump_json(indent=2, exclude={"raw_html"}))
    else:
        print(format_crawl_summary(page))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seo-agent", description="On-page SEO analysis for a single URL.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_analyze = sub.add_parser("analyze", help="Full analysis with competitors, keywords and an HTML report")
    p_analyze.add_argument("url", help="Target page URL")
    p_analyze.add_argument("--render-mode", choices=["auto", "http", "browser"], default=None)
    p_analyze.set_defaults(func=run_analyze)

    p_crawl = sub.add_parser("crawl", help="Crawl the page and print the extracted SEO signals")
    p_crawl.add_argument("url", help="Target page URL")
    p_crawl.add_argument("--render-mode", choices=["auto", "http", "browser"], default=None)
    p_crawl.add_argument("--json", action="store_true", help="Print the page data as JSON")
    p_crawl.set_defaults(func=run_crawl)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(get_settings().log_level)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
