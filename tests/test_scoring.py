"""Tests for seo_agent.services.scoring."""

from seo_agent.models.analysis import SEOIssue, SEOScore
from seo_agent.models.page import HeadingInfo, ImageInfo, LinkInfo
from seo_agent.services.checks import round_half_up
from seo_agent.services.scoring import (
    analyze_page,
    build_summary,
    count_issues,
    overall_score,
    strengths,
    weakest_categories,
)


def _score(category, value):
    return SEOScore(category=category, score=value)


def _issue(severity):
    return SEOIssue(category="Title", title="t", description="d", severity=severity)


class TestAggregation:
    def test_overall_is_rounded_mean(self):
        scores = [_score("A", 100), _score("B", 85), _score("C", 60)]
        # 245 / 3 = 81.67
        assert overall_score(scores) == 82

    def test_overall_of_no_scores(self):
        assert overall_score([]) == 0

    def test_overall_rounds_halves_up(self):
        scores = [_score("A", 100), _score("B", 85)]
        # 185 / 2 = 92.5
        assert overall_score(scores) == 93

    def test_strengths_threshold_is_inclusive(self):
        scores = [_score("Title", 80), _score("Images", 79), _score("URL", 100)]
        assert strengths(scores) == ["Title: 80/100", "URL: 100/100"]

    def test_weakest_categories(self):
        scores = [_score("Links", 49), _score("Images", 50), _score("Technical", 0)]
        assert weakest_categories(scores) == ["Links: 49/100", "Technical: 0/100"]

    def test_count_and_summary(self):
        issues = [_issue("critical"), _issue("warning"), _issue("warning"), _issue("info"), _issue("good")]
        assert count_issues(issues, "warning") == 2
        assert build_summary(73, issues) == "SEO score: 73/100 | 1 critical, 2 warnings, 1 notices"


class TestAnalyzePage:
    def test_perfect_page(self, page):
        analysis = analyze_page(page)
        assert analysis.overall_score == 100
        assert len(analysis.strengths) == 9
        assert analysis.summary == "SEO score: 100/100 | 0 critical, 0 warnings, 0 notices"
        assert analysis.llm_recommendations == ""

    def test_overall_matches_category_mean(self, make_page):
        analysis = analyze_page(make_page(meta={"title": ""}, images=[]))
        mean = sum(s.score for s in analysis.scores) / len(analysis.scores)
        assert analysis.overall_score == round_half_up(mean)
        assert "Title: 0/100" not in analysis.strengths


# ---------------------------------------------------------------------------
# A fully specified mid-quality page
# ---------------------------------------------------------------------------

class TestMidQualityPage:
    """Short title, no description, no H2, no structured data, no social tags."""

    def _page(self, make_page):
        text = " ".join(["coffee"] * 500)
        return make_page(
            page_info={
                "url": "https://example.com/page",
                "final_url": "https://example.com/page",
                "status_code": 200,
                "response_time_ms": 200,
                "content_length": 4_000,
                "word_count": 500,
                "language": "en",
                "has_https": True,
                "has_robots_txt": False,
                "robots_txt_content": "",
                "has_sitemap": False,
            },
            meta={
                "title": "Coffee beans for you",
                "description": "",
                "viewport": "width=device-width, initial-scale=1",
                "canonical": "",
                "og_title": "",
                "og_description": "",
                "og_image": "",
                "og_type": "",
                "twitter_card": "",
            },
            headings=[HeadingInfo(tag="h1", text="Freshly roasted coffee beans every week!", level=1)],
            images=[ImageInfo(src=f"/img/{i}.jpg", alt=f"Roasted coffee bag number {i}", has_alt=True) for i in range(5)],
            links=[
                *(LinkInfo(url=f"https://example.com/p{i}", text=f"Page {i}", is_internal=True) for i in range(10)),
                LinkInfo(url="https://www.fairtrade.net/", text="Fairtrade", is_internal=False),
            ],
            structured_data=[],
            text_content=text,
            raw_html=f"<html><body><p>{text}</p></body></html>",
        )

    def test_category_scores(self, make_page):
        analysis = analyze_page(self._page(make_page))
        assert {s.category: s.score for s in analysis.scores} == {
            "Title": 70,
            "Meta Description": 0,
            "Headings": 85,
            "Images": 100,
            "Links": 100,
            # no robots.txt -8, no sitemap -8, no canonical -5
            "Technical": 79,
            "Content": 75,
            "Social Media": 30,
            "URL": 100,
        }
        # 639 / 9
        assert analysis.overall_score == 71

    def test_severities(self, make_page):
        issues = analyze_page(self._page(make_page)).issues
        by_title = {i.title: i.severity for i in issues}
        assert by_title["Title too short"] == "warning"
        assert by_title["Missing meta description"] == "critical"
        assert "Structured data present" not in by_title
