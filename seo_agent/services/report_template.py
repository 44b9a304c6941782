"""Self-contained HTML rendering of an :class:`SEOReport`."""

from html import escape
from typing import List, Optional

from seo_agent.models.analysis import SEOAnalysis, SEOIssue
from seo_agent.models.competitor import CompetitorData
from seo_agent.models.keyword import KeywordData, KeywordInfo
from seo_agent.models.page import PageData
from seo_agent.models.report import SEOReport

MAX_REPORT_HEADINGS = 20

_SEVERITY_ORDER = ("critical", "warning", "info", "good")
_SEVERITY_LABELS = {
    "critical": "Critical",
    "warning": "Warnings",
    "info": "Notices",
    "good": "Positive findings",
}

_STYLE = """
body { font-family: -apple-system, "Segoe UI", Roboto, sans-serif; margin: 0; background: #f4f6f9; color: #1d2733; }
header { background: #12263a; color: #fff; padding: 32px 48px; }
header h1 { margin: 0 0 8px; font-size: 26px; }
header .muted { color: #b8c7d6; }
main { max-width: 1100px; margin: 0 auto; padding: 24px; }
section { background: #fff; border-radius: 8px; padding: 20px 24px; margin-bottom: 20px; box-shadow: 0 1px 3px rgba(0,0,0,.08); }
h2 { margin-top: 0; font-size: 20px; }
table { width: 100%; border-collapse: collapse; font-size: 14px; }
th, td { text-align: left; padding: 8px; border-bottom: 1px solid #e4e9ef; vertical-align: top; }
th { background: #f0f3f7; }
.score-big { font-size: 56px; font-weight: 700; }
.score-good { color: #0f9d58; }
.score-ok { color: #d5881f; }
.score-bad { color: #b42318; }
.bar { background: #e4e9ef; border-radius: 4px; height: 10px; width: 200px; }
.bar span { display: block; height: 10px; border-radius: 4px; }
.issue { border-left: 4px solid #ccc; padding: 8px 12px; margin: 8px 0; background: #fafbfc; }
.issue-critical { border-color: #b42318; }
.issue-warning { border-color: #d5881f; }
.issue-info { border-color: #0b74de; }
.issue-good { border-color: #0f9d58; }
.muted { color: #66768a; font-size: 13px; }
.prose { white-space: pre-wrap; line-height: 1.5; }
.errors { background: #fdecea; border: 1px solid #f5c2c0; }
.empty { color: #66768a; font-style: italic; }
"""


def _score_class(score: int) -> str:
    if score >= 80:
        return "score-good"
    if score >= 50:
        return "score-ok"
    return "score-bad"


def _score_color(score: int) -> str:
    return {"score-good": "#0f9d58", "score-ok": "#d5881f", "score-bad": "#b42318"}[_score_class(score)]


def _yes_no(flag: bool) -> str:
    return "✓" if flag else "–"


def _render_scores(analysis: SEOAnalysis) -> str:
    rows = "\n".join(
        f"""
        <tr>
          <td>{escape(s.category)}</td>
          <td class="{_score_class(s.score)}"><strong>{s.score}</strong>/{s.max_score}</td>
          <td><div class="bar"><span style="width:{s.score}%;background:{_score_color(s.score)};"></span></div></td>
          <td class="muted">{escape(s.details)}</td>
        </tr>
        """
        for s in analysis.scores
    )
    return f"""
    <section>
      <h2>Overall score</h2>
      <div class="score-big {_score_class(analysis.overall_score)}">{analysis.overall_score}/100</div>
      <p>{escape(analysis.summary)}</p>
      <table>
        <tr><th>Category</th><th>Score</th><th></th><th>Details</th></tr>
        {rows}
      </table>
    </section>
    """


def _render_issue(issue: SEOIssue) -> str:
    values = ""
    if issue.current_value or issue.ideal_value:
        values = (
            f"<div class='muted'>Current: {escape(issue.current_value)} · "
            f"Ideal: {escape(issue.ideal_value)}</div>"
        )
    return f"""
    <div class="issue issue-{issue.severity}">
      <strong>[{escape(issue.category)}] {escape(issue.title)}</strong>
      <div>{escape(issue.description)}</div>
      <div class="muted">Recommendation: {escape(issue.recommendation)}</div>
      {values}
    </div>
    """


def _render_issues(issues: List[SEOIssue]) -> str:
    if not issues:
        return "<section><h2>Issues</h2><p class='empty'>No issues found.</p></section>"
    groups = []
    for severity in _SEVERITY_ORDER:
        matching = [i for i in issues if i.severity == severity]
        if matching:
            body = "\n".join(_render_issue(i) for i in matching)
            groups.append(f"<h3>{_SEVERITY_LABELS[severity]} ({len(matching)})</h3>{body}")
    return f"<section><h2>Issues</h2>{''.join(groups)}</section>"


def _render_strengths(strengths: List[str]) -> str:
    if not strengths:
        items = "<li class='empty'>No category scored 80 or more.</li>"
    else:
        items = "".join(f"<li>{escape(s)}</li>" for s in strengths)
    return f"<section><h2>Strengths</h2><ul>{items}</ul></section>"


def _render_prose(title: str, text: str) -> str:
    if not text:
        return ""
    return f"<section><h2>{escape(title)}</h2><div class='prose'>{escape(text)}</div></section>"


def _render_page(page: PageData) -> str:
    info = page.page_info
    overview = [
        ("Final URL", info.final_url),
        ("HTTP status", str(info.status_code)),
        ("Response time", f"{info.response_time_ms} ms"),
        ("Page size", f"{round(info.content_length / 1024)} KB"),
        ("Words", str(info.word_count)),
        ("Language", info.language or "–"),
        ("HTTPS", _yes_no(info.has_https)),
        ("robots.txt", _yes_no(info.has_robots_txt)),
        ("sitemap.xml", _yes_no(info.has_sitemap)),
        ("Title", page.meta.title or "–"),
        ("Meta description", page.meta.description or "–"),
        ("Links", f"{sum(1 for link in page.links if link.is_internal)} internal, "
                  f"{sum(1 for link in page.links if not link.is_internal)} external"),
        ("Images", str(len(page.images))),
        ("Structured data", ", ".join(item.type for item in page.structured_data) or "–"),
    ]
    overview_rows = "".join(f"<tr><th>{escape(k)}</th><td>{escape(v)}</td></tr>" for k, v in overview)

    if page.headings:
        heading_rows = "".join(
            f"<tr><td>{escape(h.tag.upper())}</td><td style='padding-left:{(h.level - 1) * 16 + 8}px'>"
            f"{escape(h.text)}</td></tr>"
            for h in page.headings[:MAX_REPORT_HEADINGS]
        )
    else:
        heading_rows = "<tr><td colspan='2' class='empty'>No headings found.</td></tr>"

    return f"""
    <section>
      <h2>Page overview</h2>
      <table>{overview_rows}</table>
    </section>
    <section>
      <h2>Heading structure</h2>
      <table><tr><th>Tag</th><th>Text</th></tr>{heading_rows}</table>
    </section>
    """


def _render_competitors(data: Optional[CompetitorData]) -> str:
    if data is None or not data.competitors:
        rows = "<tr><td colspan='5' class='empty'>No competitor data available.</td></tr>"
    else:
        rows = "\n".join(
            f"""
            <tr>
              <td><a href="{escape(c.url)}">{escape(c.domain)}</a></td>
              <td>{escape(c.title)}<div class="muted">{escape(c.description)}</div></td>
              <td>{escape(', '.join(c.keyword_overlap))}</td>
              <td>{'–' if c.seo_score is None else c.seo_score}</td>
              <td class="muted">{escape('; '.join(c.weaknesses))}</td>
            </tr>
            """
            for c in data.competitors
        )
    summary = f"<p>{escape(data.market_summary)}</p>" if data and data.market_summary else ""
    return f"""
    <section>
      <h2>Competitors</h2>
      {summary}
      <table>
        <tr><th>Domain</th><th>Title</th><th>Keyword overlap</th><th>SEO score</th><th>Weaknesses</th></tr>
        {rows}
      </table>
    </section>
    {_render_prose('Competitive analysis', data.llm_analysis if data else '')}
    """


def _keyword_table(title: str, keywords: List[KeywordInfo], data: KeywordData) -> str:
    if keywords:
        rows = "".join(
            f"""
            <tr>
              <td>{escape(k.keyword)}</td><td>{k.count}</td><td>{k.density}%</td>
              <td>{_yes_no(k.in_title)}</td><td>{_yes_no(k.in_description)}</td>
              <td>{_yes_no(k.in_h1)}</td><td>{_yes_no(k.in_url)}</td>
              <td>{k.prominence_score}</td>
              <td>{data.rankings.get(k.keyword) or '–'}</td>
            </tr>
            """
            for k in keywords
        )
    else:
        rows = "<tr><td colspan='9' class='empty'>None.</td></tr>"
    return f"""
    <h3>{escape(title)}</h3>
    <table>
      <tr><th>Keyword</th><th>Count</th><th>Density</th><th>Title</th><th>Description</th>
      <th>H1</th><th>URL</th><th>Prominence</th><th>Rank</th></tr>
      {rows}
    </table>
    """


def _render_keywords(data: Optional[KeywordData]) -> str:
    if data is None:
        return "<section><h2>Keywords</h2><p class='empty'>No keyword data available.</p></section>"
    return f"""
    <section>
      <h2>Keywords</h2>
      {_keyword_table('Primary keywords', data.primary_keywords, data)}
      {_keyword_table('Secondary keywords', data.secondary_keywords, data)}
    </section>
    {_render_prose('Keyword analysis', data.llm_analysis)}
    """


def _render_errors(errors: List[str]) -> str:
    if not errors:
        return ""
    items = "".join(f"<li>{escape(e)}</li>" for e in errors)
    return (
        "<section class='errors'><h2>Incomplete report</h2>"
        f"<p>Some steps did not complete:</p><ul>{items}</ul></section>"
    )


def render_report(report: SEOReport) -> str:
    """Render *report* as a complete HTML document."""
    sections = [_render_errors(report.errors), _render_prose("Executive summary", report.executive_summary)]

    if report.seo_analysis is not None:
        sections.append(_render_scores(report.seo_analysis))
        sections.append(_render_issues(report.seo_analysis.issues))
        sections.append(_render_strengths(report.seo_analysis.strengths))
        sections.append(_render_prose("AI recommendations", report.seo_analysis.llm_recommendations))
    else:
        sections.append("<section><h2>Overall score</h2><p class='empty'>No analysis available.</p></section>")

    if report.page_data is not None:
        sections.append(_render_page(report.page_data))

    sections.append(_render_competitors(report.competitor_data))
    sections.append(_render_keywords(report.keyword_data))

    body = "\n".join(s for s in sections if s)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>SEO report – {escape(report.url)}</title>
  <style>{_STYLE}</style>
</head>
<body>
  <header>
    <h1>SEO report</h1>
    <div><a href="{escape(report.url)}" style="color:#fff">{escape(report.url)}</a></div>
    <div class="muted">Generated {escape(report.timestamp)}</div>
  </header>
  <main>
    {body}
  </main>
</body>
</html>
"""
