"""Prompt builders and the fixed texts used when no model answers."""

from typing import Dict, List, Optional

from seo_agent.models.analysis import SEOAnalysis
from seo_agent.models.competitor import CompetitorInfo
from seo_agent.models.keyword import KeywordData, KeywordInfo
from seo_agent.models.page import PageData

ANALYSIS_FALLBACK = "LLM unavailable - recommendations are based on the rule-based checks."
COMPETITOR_FALLBACK = "LLM unavailable for competitor analysis."
KEYWORD_FALLBACK = "LLM unavailable for keyword analysis."


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def analysis_prompt(url: str, page: PageData, analysis: SEOAnalysis) -> str:
    issue_lines = "\n".join(
        f"- [{issue.severity.upper()}] {issue.title}: {issue.description}"
        for issue in analysis.issues
        if issue.severity in ("critical", "warning")
    )
    return f"""You are an SEO expert. Analyse the following SEO problems of a web page and give concrete, prioritised recommendations.

URL: {url}
Overall score: {analysis.overall_score}/100
Words on the page: {page.page_info.word_count}
Title: {page.meta.title}

Problems found:
{issue_lines or 'No critical problems found.'}

Give at most 5 prioritised recommendations with concrete actions."""


def competitor_prompt(
    url: str, page: PageData, search_keywords: List[str], competitors: List[CompetitorInfo]
) -> str:
    competitor_lines = "\n".join(
        f'- {c.domain}: "{c.title}" (keywords: {", ".join(c.keyword_overlap)})' for c in competitors[:5]
    )
    return f"""You are an SEO and competition analyst. Analyse the competitive situation.

Target website: {url}
Title: {page.meta.title}
Main keywords: {', '.join(search_keywords[:5])}

Competitors found:
{competitor_lines}

Write a short competitive analysis with:
1. Overview of the competitive situation
2. Possible competitive advantages of the target website
3. Gaps and opportunities that could be used
4. Top 3 recommendations to improve the competitive position"""


def keyword_prompt(
    url: str, page: PageData, keywords: List[KeywordInfo], rankings: Dict[str, Optional[int]]
) -> str:
    keyword_lines = "\n".join(
        f'- "{k.keyword}": {k.count}x (density: {k.density}%, title: {_yes_no(k.in_title)}, '
        f"H1: {_yes_no(k.in_h1)})"
        for k in keywords[:10]
    )
    ranking_lines = "\n".join(
        f'- "{keyword}": {f"position {pos}" if pos else "not found"}' for keyword, pos in rankings.items()
    )
    return f"""You are an SEO keyword expert. Analyse the keyword usage of this web page.

URL: {url}
Title: {page.meta.title}
Total words: {page.page_info.word_count or 1}

Top keywords on the page:
{keyword_lines}

DuckDuckGo ranking positions:
{ranking_lines or 'No rankings determined'}

Give concrete recommendations:
1. Which keywords are well positioned?
2. Which keywords are missing or should be used more?
3. Keyword suggestions for better rankings
4. Content gaps that should be closed"""


def executive_summary_prompt(
    url: str,
    analysis: Optional[SEOAnalysis],
    competitor_count: int,
    keyword_data: Optional[KeywordData],
) -> str:
    score_line = f"Overall score: {analysis.overall_score}/100" if analysis else "No score available"
    critical = ""
    if analysis:
        critical = "\n".join(f"- {i.title}" for i in analysis.issues if i.severity == "critical")
    top_keywords = ""
    if keyword_data:
        top_keywords = ", ".join(k.keyword for k in keyword_data.primary_keywords[:5])
    return f"""You are an SEO consultant. Write an executive summary for the following SEO report.

URL: {url}
{score_line}

Critical problems:
{critical or 'None'}

Competitors found: {competitor_count}
Top keywords: {top_keywords or 'None determined'}

Write a short, concise summary (3-5 sentences) highlighting the key findings and the most urgent actions."""


def executive_summary_fallback(url: str, analysis: Optional[SEOAnalysis]) -> str:
    summary = f"SEO analysis for {url} completed."
    if analysis:
        critical = sum(1 for i in analysis.issues if i.severity == "critical")
        summary += f" Overall score: {analysis.overall_score}/100. {critical} critical issues found."
    return summary
