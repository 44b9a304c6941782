"""Rule-based on-page SEO checks.

Each check is a pure function ``(PageData) -> CheckResult``.  A category
starts at 100 and every violated condition subtracts a fixed penalty, in the
order the conditions are evaluated below; the result is floored at 0.  A
missing title or description short-circuits to 0 with one critical issue.
Severity is assigned per condition and is not derived from the penalty.
"""

import math
import re
from typing import Callable, List, Tuple
from urllib.parse import urlparse

from seo_agent.models.analysis import CheckResult, SEOIssue, SEOScore, Severity
from seo_agent.models.page import PageData


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


TITLE = "Title"
META_DESCRIPTION = "Meta Description"
HEADINGS = "Headings"
IMAGES = "Images"
LINKS = "Links"
TECHNICAL = "Technical"
CONTENT = "Content"
SOCIAL_MEDIA = "Social Media"
URL = "URL"

_TITLE_SEPARATOR_RE = re.compile(r"^[\s|:\-–—]")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_GENERIC_ALT_RE = re.compile(
    r"^(image|img|foto|photo|bild|picture|banner|logo|icon|grafik|graphic|untitled"
    r"|dsc[_\d]|img[_\d]|screenshot)\s*\d*$",
    re.IGNORECASE,
)
_URL_SPECIAL_CHARS_RE = re.compile(r"[%&=+]")


def _issue(
    category: str,
    title: str,
    description: str,
    severity: Severity,
    recommendation: str,
    current_value: str,
    ideal_value: str,
) -> SEOIssue:
    return SEOIssue(
        category=category,
        title=title,
        description=description,
        severity=severity,
        recommendation=recommendation,
        current_value=current_value,
        ideal_value=ideal_value,
    )


def _result(category: str, score: int, issues: List[SEOIssue], details: str = "") -> CheckResult:
    return CheckResult(
        score=SEOScore(category=category, score=max(score, 0), max_score=100, details=details),
        issues=issues,
    )


# ---------------------------------------------------------------------------
# Title
# ---------------------------------------------------------------------------

def check_title(page: PageData) -> CheckResult:
    title = page.meta.title
    length = page.meta.title_length

    if not title:
        return _result(TITLE, 0, [_issue(
            TITLE, "Missing title tag",
            "The page has no title tag. The title is the most important on-page SEO factor "
            "and is shown as the headline in search results.",
            "critical",
            'Add a unique, descriptive title of 50-60 characters containing the main keyword, '
            'e.g. "Main keyword - description | Brand".',
            "No title", "50-60 characters",
        )])

    score = 100
    issues: List[SEOIssue] = []

    if length < 30:
        score -= 30
        issues.append(_issue(
            TITLE, "Title too short",
            f"The title has only {length} characters. Search engines prefer 50-60 characters; "
            "short titles waste space in the results page.",
            "warning",
            "Extend the title to 50-60 characters with relevant keywords.",
            f"{length} characters", "50-60 characters",
        ))
    elif length > 60:
        score -= 15
        issues.append(_issue(
            TITLE, "Title too long",
            f"The title has {length} characters and will be truncated in search results.",
            "warning",
            "Shorten the title to at most 60 characters. Put the important keywords first "
            "and the brand name last.",
            f"{length} characters", "50-60 characters",
        ))

    domain = (urlparse(page.page_info.url).hostname or "").replace("www.", "", 1)
    domain_key = _NON_ALNUM_RE.sub("", domain.lower())
    if domain_key and _NON_ALNUM_RE.sub("", title.lower()) == domain_key:
        score -= 25
        issues.append(_issue(
            TITLE, "Title is only the domain name",
            "The title consists of the domain name and contains no descriptive keywords.",
            "warning",
            'Write a descriptive title with the main keyword, e.g. "Main keyword - description | Brand".',
            title, "Descriptive title",
        ))

    if _TITLE_SEPARATOR_RE.match(title):
        score -= 10
        issues.append(_issue(
            TITLE, "Title starts with a separator",
            "The title starts with a separator character instead of a keyword. The first words "
            "of a title carry the most weight.",
            "info",
            "Put the most important keywords at the start; use separators only before the brand name.",
            title[:20], "Keywords first",
        ))

    return _result(TITLE, score, issues, title)


# ---------------------------------------------------------------------------
# Meta description
# ---------------------------------------------------------------------------

def check_meta_description(page: PageData) -> CheckResult:
    description = page.meta.description
    length = page.meta.description_length

    if not description:
        return _result(META_DESCRIPTION, 0, [_issue(
            META_DESCRIPTION, "Missing meta description",
            "The page has no meta description. Search engines will show an arbitrary text "
            "excerpt instead.",
            "critical",
            "Write a unique meta description of 150-160 characters with the main keyword and a "
            "call to action.",
            "No description", "150-160 characters",
        )])

    score = 100
    issues: List[SEOIssue] = []

    if length < 80:
        score -= 30
        issues.append(_issue(
            META_DESCRIPTION, "Meta description far too short",
            f"The description has only {length} characters and does not use the space available "
            "in search results.",
            "warning",
            "Extend the description to 150-160 characters with keywords, USP and a call to action.",
            f"{length} characters", "150-160 characters",
        ))
    elif length < 120:
        score -= 15
        issues.append(_issue(
            META_DESCRIPTION, "Meta description slightly short",
            f"The description has {length} characters. Optimal length: 150-160 characters.",
            "info",
            "Extend the description to 150-160 characters for maximum visibility.",
            f"{length} characters", "150-160 characters",
        ))
    elif length > 160:
        score -= 10
        issues.append(_issue(
            META_DESCRIPTION, "Meta description too long",
            f"The description has {length} characters and will be truncated in search results.",
            "info",
            "Shorten the description to 160 characters; keep the key message in the first 120.",
            f"{length} characters", "150-160 characters",
        ))

    if description.strip().lower() == page.meta.title.strip().lower():
        score -= 15
        issues.append(_issue(
            META_DESCRIPTION, "Description identical to title",
            "Meta description and title are identical; they should complement each other.",
            "warning",
            "Write a distinct description that adds detail to what the title promises.",
            "Identical to title", "Unique text",
        ))

    return _result(META_DESCRIPTION, score, issues, description[:100])


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------

def check_headings(page: PageData) -> CheckResult:
    score = 100
    issues: List[SEOIssue] = []

    h1_tags = [h for h in page.headings if h.level == 1]
    h2_tags = [h for h in page.headings if h.level == 2]

    if not h1_tags:
        score -= 40
        issues.append(_issue(
            HEADINGS, "No H1 tag",
            "The page has no H1. After the title, the H1 is the strongest signal for the page topic.",
            "critical",
            "Add exactly one H1 that contains the main keyword and describes the page content.",
            "0 H1 tags", "1 H1 tag",
        ))
    elif len(h1_tags) > 1:
        score -= 20
        issues.append(_issue(
            HEADINGS, "Multiple H1 tags",
            f"The page has {len(h1_tags)} H1 tags. One H1 per page keeps the main topic clear.",
            "warning",
            "Turn all but one H1 into H2 tags.",
            f"{len(h1_tags)} H1 tags", "1 H1 tag",
        ))
    else:
        h1_text = h1_tags[0].text
        if len(h1_text) > 70:
            score -= 10
            issues.append(_issue(
                HEADINGS, "H1 too long",
                f"The H1 has {len(h1_text)} characters. Long H1 tags lose focus.",
                "info",
                "Shorten the H1 to at most 70 characters around the main keyword.",
                f"{len(h1_text)} characters", "Max. 70 characters",
            ))
        if h1_text and h1_text.strip().lower() == page.meta.title.strip().lower():
            score -= 5
            issues.append(_issue(
                HEADINGS, "H1 identical to title",
                "H1 and title are word-for-word identical; a variation covers more keyword variants.",
                "info",
                "Vary the H1 slightly, e.g. phrase it in more detail or use a keyword variant.",
                "Identical", "Slightly varied",
            ))

    if not h2_tags and page.page_info.word_count > 100:
        score -= 15
        issues.append(_issue(
            HEADINGS, "No H2 tags",
            "The page has no H2 tags. H2 sections structure the content for readers and crawlers.",
            "warning",
            "Split the content into logical sections with H2 headings containing sub-keywords.",
            "0 H2 tags", "2-8 H2 tags",
        ))

    levels = [h.level for h in page.headings]
    for previous, current in zip(levels, levels[1:]):
        if current > previous + 1:
            score -= 10
            issues.append(_issue(
                HEADINGS, "Broken heading hierarchy",
                f"Jump from H{previous} directly to H{current}; intermediate levels are skipped.",
                "warning",
                f"Insert the missing H{previous + 1} level so the hierarchy has no gaps (H1 → H2 → H3).",
                f"H{previous} → H{current}", "Gapless hierarchy",
            ))
            break

    seen = set()
    duplicates: List[str] = []
    for text in (h.text.strip().lower() for h in page.headings):
        if text in seen and text not in duplicates:
            duplicates.append(text)
        seen.add(text)
    if duplicates:
        score -= 10
        issues.append(_issue(
            HEADINGS, "Duplicate headings",
            f'{len(duplicates)} heading(s) occur more than once: "{duplicates[0]}"',
            "info",
            "Make every heading unique so each covers a different aspect of the topic.",
            f"{len(duplicates)} duplicates", "0 duplicates",
        ))

    return _result(HEADINGS, score, issues, f"H1: {len(h1_tags)}, H2: {len(h2_tags)}")


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

def check_images(page: PageData) -> CheckResult:
    score = 100
    issues: List[SEOIssue] = []
    total = len(page.images)

    if total == 0:
        if page.page_info.word_count > 300:
            score -= 10
            issues.append(_issue(
                IMAGES, "No images on the page",
                "The page has no visual content. Images improve engagement and bring traffic "
                "from image search.",
                "info",
                "Add relevant images with descriptive alt texts and file names.",
                "0 images", "At least 1 image",
            ))
        return _result(IMAGES, score, issues, "No images")

    without_alt = sum(1 for img in page.images if not img.has_alt)
    pct_without = without_alt / total * 100

    if pct_without > 50:
        score -= 35
        issues.append(_issue(
            IMAGES, "Many images without alt text",
            f"{without_alt} of {total} images ({round_half_up(pct_without)}%) have no alt text. Alt "
            "texts are essential for SEO and accessibility.",
            "critical",
            "Give every image a descriptive alt text of 5-15 words, with a keyword where it fits.",
            f"{without_alt}/{total} without alt", "0 without alt text",
        ))
    elif pct_without > 20:
        score -= 20
        issues.append(_issue(
            IMAGES, "Images without alt text",
            f"{without_alt} of {total} images have no alt text.",
            "warning",
            "Add the missing alt texts, describing the image content precisely.",
            f"{without_alt}/{total} without alt", "0 without alt text",
        ))
    elif pct_without > 0:
        score -= 8
        issues.append(_issue(
            IMAGES, "Some images without alt text",
            f"{without_alt} of {total} images have no alt text.",
            "info",
            "Add the missing alt texts.",
            f"{without_alt}/{total} without alt", "0 without alt text",
        ))

    generic = sum(1 for img in page.images if img.has_alt and _GENERIC_ALT_RE.match(img.alt.strip()))
    if generic:
        score -= 10
        issues.append(_issue(
            IMAGES, "Generic alt texts",
            f'{generic} images have meaningless alt texts such as "image" or "photo".',
            "warning",
            'Replace generic alt texts with descriptive ones, e.g. "Red sofa in a modern living room".',
            f"{generic} generic", "Descriptive texts",
        ))

    long_alts = sum(1 for img in page.images if len(img.alt) > 125)
    if long_alts:
        score -= 5
        issues.append(_issue(
            IMAGES, "Alt texts too long",
            f"{long_alts} images have alt texts over 125 characters; screen readers read them in full.",
            "info",
            "Keep alt texts under 125 characters.",
            f"{long_alts} too long", "Max. 125 characters",
        ))

    return _result(IMAGES, score, issues, f"{total} images, {total - without_alt} with alt")


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------

def check_links(page: PageData) -> CheckResult:
    score = 100
    issues: List[SEOIssue] = []

    internal = [link for link in page.links if link.is_internal]
    external = [link for link in page.links if not link.is_internal]

    if not internal:
        score -= 30
        issues.append(_issue(
            LINKS, "No internal links",
            "The page has no internal links. Internal linking drives crawlability, site "
            "architecture and PageRank distribution.",
            "critical",
            "Add at least 3-5 internal links to related pages with descriptive anchor texts.",
            "0 internal", "10+ internal links",
        ))
    elif len(internal) < 3:
        score -= 20
        issues.append(_issue(
            LINKS, "Few internal links",
            f"Only {len(internal)} internal links. Strong internal linking helps search engines "
            "discover and weigh your pages.",
            "warning",
            "Link to more related content; contextual links in body text are the most valuable.",
            f"{len(internal)} internal", "10+ internal links",
        ))

    if not external and page.page_info.word_count > 300:
        score -= 5
        issues.append(_issue(
            LINKS, "No external links",
            "The page links to no external source. Outbound links to authoritative sources can "
            "strengthen topical relevance.",
            "info",
            "Link to trustworthy external sources such as studies or official sites.",
            "0 external", "2-5 external links",
        ))

    empty_anchor = sum(1 for link in page.links if not link.text.strip())
    if empty_anchor:
        score -= 10
        issues.append(_issue(
            LINKS, "Links without anchor text",
            f"{empty_anchor} links have no visible anchor text. Search engines use anchor text "
            "to understand the target page.",
            "warning",
            "Give every link a descriptive anchor text.",
            f"{empty_anchor} without text", "0 without anchor text",
        ))

    if len(page.links) > 150:
        score -= 10
        issues.append(_issue(
            LINKS, "Very many links on the page",
            f"The page has {len(page.links)} links. Too many links dilute the value passed per link.",
            "info",
            "Check whether every link is needed; slim down navigation and footer links.",
            f"{len(page.links)} links", "Max. 100-150",
        ))

    internal_nofollow = sum(1 for link in internal if link.is_nofollow)
    if internal_nofollow:
        score -= 10
        issues.append(_issue(
            LINKS, "Internal links with nofollow",
            f"{internal_nofollow} internal links are marked nofollow, which blocks link equity "
            "to your own pages.",
            "warning",
            "Remove nofollow from internal links.",
            f"{internal_nofollow} nofollow", "0 internal nofollow",
        ))

    return _result(LINKS, score, issues, f"{len(internal)} internal, {len(external)} external")


# ---------------------------------------------------------------------------
# Technical
# ---------------------------------------------------------------------------

def check_technical(page: PageData) -> CheckResult:
    score = 100
    issues: List[SEOIssue] = []
    info = page.page_info

    if info.status_code != 200:
        score -= 40
        issues.append(_issue(
            TECHNICAL, "HTTP status is not 200",
            f"The page responds with status {info.status_code} instead of 200 OK.",
            "critical",
            f"Fix status {info.status_code}: 3xx means check the redirect, 4xx the page does not "
            "exist, 5xx a server error.",
            str(info.status_code), "200 OK",
        ))

    if not info.has_https:
        score -= 25
        issues.append(_issue(
            TECHNICAL, "No HTTPS",
            "The page is not served over HTTPS. HTTPS is a ranking factor and browsers flag HTTP "
            "pages as not secure.",
            "critical",
            "Install a TLS certificate and 301-redirect all HTTP URLs to HTTPS.",
            "HTTP", "HTTPS",
        ))

    if info.final_url and info.final_url != info.url:
        score -= 5
        issues.append(_issue(
            TECHNICAL, "URL redirect detected",
            f"The URL redirects: {info.url} → {info.final_url}",
            "info",
            "Link the final URL directly and avoid unnecessary redirect chains.",
            "Redirect", "Direct URL",
        ))

    if info.response_time_ms > 3000:
        score -= 25
        issues.append(_issue(
            TECHNICAL, "Very slow response",
            f"Server response time: {info.response_time_ms}ms.",
            "critical",
            "Improve server performance: caching, CDN, better hosting, faster database queries.",
            f"{info.response_time_ms}ms", "<500ms",
        ))
    elif info.response_time_ms > 1000:
        score -= 10
        issues.append(_issue(
            TECHNICAL, "Slow response",
            f"Server response time: {info.response_time_ms}ms. Target: under 500ms.",
            "warning",
            "Check server caching, compress assets (gzip/brotli), consider a CDN.",
            f"{info.response_time_ms}ms", "<500ms",
        ))

    if not info.has_robots_txt:
        score -= 8
        issues.append(_issue(
            TECHNICAL, "No robots.txt",
            "No robots.txt found. It tells crawlers which areas they may visit.",
            "warning",
            'Create /robots.txt, e.g. "User-agent: *\\nAllow: /\\nSitemap: https://domain/sitemap.xml".',
            "Missing", "Present",
        ))

    robots_meta = page.meta.robots.lower()
    if "noindex" in robots_meta:
        score -= 40
        issues.append(_issue(
            TECHNICAL, "Page blocked with noindex",
            'The page is marked meta robots "noindex" and will NOT be indexed.',
            "critical",
            "Remove the noindex directive if the page should appear in search results.",
            robots_meta, "index, follow",
        ))
    if "nofollow" in robots_meta and "noindex" not in robots_meta:
        score -= 10
        issues.append(_issue(
            TECHNICAL, "Page marked nofollow",
            'Meta robots "nofollow" stops crawlers from following any link on this page.',
            "warning",
            "Remove nofollow from the meta robots tag.",
            robots_meta, "index, follow",
        ))

    if not info.has_sitemap:
        score -= 8
        issues.append(_issue(
            TECHNICAL, "No XML sitemap",
            "No sitemap.xml found. A sitemap helps search engines find and index all pages.",
            "warning",
            "Publish an XML sitemap at /sitemap.xml and reference it in robots.txt.",
            "Missing", "Present",
        ))

    if not page.meta.viewport:
        score -= 15
        issues.append(_issue(
            TECHNICAL, "No viewport meta tag",
            "No viewport tag present. With mobile-first indexing this is critical for rankings.",
            "critical",
            'Add <meta name="viewport" content="width=device-width, initial-scale=1"> to the <head>.',
            "Missing", "viewport present",
        ))

    if not page.meta.canonical:
        score -= 5
        issues.append(_issue(
            TECHNICAL, "No canonical tag",
            "No canonical link present. It prevents duplicate content across URL variants.",
            "info",
            'Add a self-referencing <link rel="canonical" href="[current URL]">.',
            "Missing", "Self-referencing canonical",
        ))

    if not info.language:
        score -= 8
        issues.append(_issue(
            TECHNICAL, "No lang attribute",
            "The <html> element has no lang attribute, which helps search engines and screen "
            "readers detect the language.",
            "warning",
            'Add a lang attribute, e.g. <html lang="en">.',
            "Missing", 'e.g. lang="en"',
        ))

    page_size_kb = round_half_up(info.content_length / 1024)
    if page_size_kb > 3000:
        score -= 10
        issues.append(_issue(
            TECHNICAL, "Very large HTML page",
            f"The page is {page_size_kb} KB. Large HTML loads slowly on mobile connections.",
            "warning",
            "Slim down the HTML: externalize inline CSS/JS, remove comments, enable compression.",
            f"{page_size_kb} KB", "<500 KB",
        ))

    return _result(TECHNICAL, score, issues, f"HTTP {info.status_code}, {info.response_time_ms}ms")


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------

def check_content(page: PageData) -> CheckResult:
    score = 100
    issues: List[SEOIssue] = []
    wc = page.page_info.word_count

    if wc < 100:
        score -= 40
        issues.append(_issue(
            CONTENT, "Extremely thin content",
            f"Only {wc} words. Search engines can hardly assess the page; thin content ranks poorly.",
            "critical",
            "Write at least 300 words of unique content that answers the searcher's intent.",
            f"{wc} words", "300+ words",
        ))
    elif wc < 300:
        score -= 25
        issues.append(_issue(
            CONTENT, "Little content",
            f"Only {wc} words. Good rankings usually need more than 300 words.",
            "warning",
            "Expand the content: answer audience questions and cover related topics.",
            f"{wc} words", "300+ words",
        ))
    elif wc < 600:
        score -= 10
        issues.append(_issue(
            CONTENT, "Moderate content length",
            f"{wc} words. Competitive keywords usually call for 600+ words.",
            "info",
            "Extend the content where it adds value; quality beats quantity.",
            f"{wc} words", "600+ words",
        ))

    if page.raw_html and page.text_content:
        ratio = round_half_up(len(page.text_content) / len(page.raw_html) * 100)
        if ratio < 10 and len(page.raw_html) > 1000:
            score -= 10
            issues.append(_issue(
                CONTENT, "Low text-to-HTML ratio",
                f"Only {ratio}% of the HTML is visible text; the markup is bloated.",
                "info",
                "Remove unnecessary wrappers, externalize CSS/JS and reduce inline styles.",
                f"{ratio}%", "25%+",
            ))

    if not page.structured_data:
        score -= 15
        issues.append(_issue(
            CONTENT, "No structured data (Schema.org)",
            "No JSON-LD structured data found. Structured data enables rich snippets such as "
            "ratings, FAQ, breadcrumbs or prices.",
            "warning",
            "Add JSON-LD markup that fits the page type: Organization, LocalBusiness, Article, "
            "Product, FAQPage, BreadcrumbList or HowTo.",
            "0 schema types", "At least 1 schema type",
        ))
    else:
        types = ", ".join(item.type for item in page.structured_data)
        issues.append(_issue(
            CONTENT, "Structured data present",
            f"{len(page.structured_data)} Schema.org type(s) found: {types}. This can enable "
            "rich snippets in search results.",
            "good",
            "Validate the markup regularly with the Rich Results Test.",
            types, "",
        ))

    return _result(CONTENT, score, issues, f"{wc} words")


# ---------------------------------------------------------------------------
# Social media (Open Graph + Twitter cards)
# ---------------------------------------------------------------------------

def check_social_media(page: PageData) -> CheckResult:
    score = 100
    issues: List[SEOIssue] = []
    meta = page.meta

    if not meta.og_title:
        score -= 20
        issues.append(_issue(
            SOCIAL_MEDIA, "No og:title",
            "No Open Graph title. Shared links show a generic or missing title.",
            "warning",
            'Add <meta property="og:title" content="..."> to the <head>.',
            "Missing", "Present",
        ))
    if not meta.og_description:
        score -= 15
        issues.append(_issue(
            SOCIAL_MEDIA, "No og:description",
            "No Open Graph description. Shared links show no description in the preview.",
            "warning",
            'Add <meta property="og:description" content="...">.',
            "Missing", "Present",
        ))
    if not meta.og_image:
        score -= 20
        issues.append(_issue(
            SOCIAL_MEDIA, "No og:image",
            "No Open Graph image. Links without a preview image get far fewer clicks.",
            "warning",
            'Add <meta property="og:image" content="https://..."> with an image of at least 1200x630px.',
            "Missing", "1200x630px image",
        ))
    if not meta.og_type:
        score -= 5
        issues.append(_issue(
            SOCIAL_MEDIA, "No og:type",
            "No Open Graph type. Platforms cannot tell what kind of content is shared.",
            "info",
            'Add <meta property="og:type" content="website"> (or "article", "product").',
            "Missing", "e.g. website",
        ))
    if not meta.twitter_card:
        score -= 10
        issues.append(_issue(
            SOCIAL_MEDIA, "No Twitter card",
            "No Twitter/X card tags. Links on X are shown without a rich preview.",
            "info",
            'Add <meta name="twitter:card" content="summary_large_image">.',
            "Missing", "summary_large_image",
        ))

    return _result(SOCIAL_MEDIA, score, issues)


# ---------------------------------------------------------------------------
# URL
# ---------------------------------------------------------------------------

def check_url(page: PageData) -> CheckResult:
    score = 100
    issues: List[SEOIssue] = []
    full_url = page.page_info.final_url or page.page_info.url

    try:
        parsed = urlparse(full_url)
    except ValueError:
        return _result(URL, score, issues)
    path = parsed.path

    if parsed.query:
        score -= 10
        issues.append(_issue(
            URL, "URL contains parameters",
            f"Query parameters found: ?{parsed.query[:50]}. Parameter URLs can cause duplicate content.",
            "info",
            "Prefer readable URLs without parameters, or point the canonical at the clean version.",
            f"?{parsed.query}"[:40], "No parameters",
        ))

    if len(full_url) > 100:
        score -= 10
        issues.append(_issue(
            URL, "URL too long",
            f"The URL has {len(full_url)} characters. Short, readable URLs perform better.",
            "info",
            "Keep URLs under 75 characters; drop unnecessary directory levels and filler words.",
            f"{len(full_url)} characters", "Max. 75 characters",
        ))

    if path != path.lower():
        score -= 10
        issues.append(_issue(
            URL, "Uppercase letters in URL",
            "The URL path contains uppercase letters. URLs are case-sensitive, so variants can "
            "count as duplicate content.",
            "warning",
            "Use lowercase URLs only and 301-redirect the uppercase variant.",
            path[:40], "Lowercase only",
        ))

    if "_" in path:
        score -= 5
        issues.append(_issue(
            URL, "Underscores in URL",
            "The URL uses underscores. Search engines treat hyphens, not underscores, as word separators.",
            "info",
            "Replace underscores with hyphens and 301-redirect the old URLs.",
            "Underscores", "Hyphens (-)",
        ))

    if _URL_SPECIAL_CHARS_RE.search(path):
        score -= 5
        issues.append(_issue(
            URL, "Special characters in URL path",
            "The URL path contains encoded or special characters, which makes it hard to read and share.",
            "info",
            "Use readable paths made of a-z, 0-9 and hyphens.",
            "Special characters", "Only a-z, 0-9, -",
        ))

    return _result(URL, score, issues, path[:50])


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

ALL_CHECKS: Tuple[Callable[[PageData], CheckResult], ...] = (
    check_title,
    check_meta_description,
    check_headings,
    check_images,
    check_links,
    check_technical,
    check_content,
    check_social_media,
    check_url,
)


def run_all_checks(page: PageData) -> Tuple[List[SEOScore], List[SEOIssue]]:
    """Run every check and return ``(scores, issues)`` in check order."""
    scores: List[SEOScore] = []
    issues: List[SEOIssue] = []
    for check in ALL_CHECKS:
        result = check(page)
        scores.append(result.score)
        issues.extend(result.issues)
    return scores, issues
