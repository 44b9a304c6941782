from typing import List

from seo_agent.models.analysis import SEOAnalysis, SEOIssue, SEOScore, Severity
from seo_agent.models.page import PageData
from seo_agent.services.checks import round_half_up, run_all_checks

STRENGTH_THRESHOLD = 80
WEAKNESS_THRESHOLD = 50


def overall_score(scores: List[SEOScore]) -> int:
    """Unweighted mean of the category scores, rounded to an integer."""
    if not scores:
        return 0
    return round_half_up(sum(s.score for s in scores) / len(scores))


def strengths(scores: List[SEOScore]) -> List[str]:
    return [f"{s.category}: {s.score}/100" for s in scores if s.score >= STRENGTH_THRESHOLD]


def weakest_categories(scores: List[SEOScore]) -> List[str]:
    return [f"{s.category}: {s.score}/100" for s in scores if s.score < WEAKNESS_THRESHOLD]


def count_issues(issues: List[SEOIssue], severity: Severity) -> int:
    return sum(1 for issue in issues if issue.severity == severity)


def build_summary(score: int, issues: List[SEOIssue]) -> str:
    return (
        f"SEO score: {score}/100 | "
        f"{count_issues(issues, 'critical')} critical, "
        f"{count_issues(issues, 'warning')} warnings, "
        f"{count_issues(issues, 'info')} notices"
    )


def analyze_page(page: PageData) -> SEOAnalysis:
    """Run the rule engine on *page* and aggregate the result.

    The returned analysis has no LLM text; the analysis branch adds it.
    """
    scores, issues = run_all_checks(page)
    score = overall_score(scores)
    return SEOAnalysis(
        overall_score=score,
        scores=scores,
        issues=issues,
        strengths=strengths(scores),
        summary=build_summary(score, issues),
    )
