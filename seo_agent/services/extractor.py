import json
import re
from typing import List, NamedTuple
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from seo_agent.models.page import HeadingInfo, ImageInfo, LinkInfo, MetaInfo, StructuredDataItem

# Unrendered template syntax (Vue/Angular/Handlebars "{{ ... }}")
_TEMPLATE_PLACEHOLDER_RE = re.compile(r"\{\{.*?\}\}")

_NON_CONTENT_TAGS = ("script", "style", "noscript")
_SKIPPED_HREF_PREFIXES = ("#", "javascript:", "mailto:", "tel:")

MAX_HEADING_CHARS = 200
MAX_ANCHOR_CHARS = 100
MAX_PROPERTY_CHARS = 200
MAX_RAW_JSON_CHARS = 1000


class ExtractedPage(NamedTuple):
    meta: MetaInfo
    headings: List[HeadingInfo]
    links: List[LinkInfo]
    images: List[ImageInfo]
    structured_data: List[StructuredDataItem]
    text_content: str
    word_count: int
    language: str
    charset: str


def _collapse(text: str) -> str:
    return " ".join(text.split())


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    if tag and tag.get("content"):
        return str(tag["content"]).strip()
    return ""


def extract_visible_text(html: str) -> str:
    """Return the body text with scripts/styles removed and whitespace collapsed."""
    soup = BeautifulSoup(html, "lxml")
    for tag in soup.find_all(_NON_CONTENT_TAGS):
        tag.decompose()
    body = soup.find("body") or soup
    return _collapse(body.get_text(" "))


def extract_meta(soup: BeautifulSoup) -> MetaInfo:
    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else ""
    description = _meta_content(soup, name="description")

    canonical_tag = soup.find("link", rel="canonical")
    canonical = str(canonical_tag.get("href") or "").strip() if canonical_tag else ""

    return MetaInfo(
        title=title,
        title_length=len(title),
        description=description,
        description_length=len(description),
        keywords=_meta_content(soup, name="keywords"),
        viewport=_meta_content(soup, name="viewport"),
        robots=_meta_content(soup, name="robots"),
        canonical=canonical,
        og_title=_meta_content(soup, property="og:title"),
        og_description=_meta_content(soup, property="og:description"),
        og_image=_meta_content(soup, property="og:image"),
        og_type=_meta_content(soup, property="og:type"),
        twitter_card=_meta_content(soup, name="twitter:card"),
        twitter_title=_meta_content(soup, name="twitter:title"),
        twitter_description=_meta_content(soup, name="twitter:description"),
    )


def extract_headings(soup: BeautifulSoup) -> List[HeadingInfo]:
    """Return h1-h6 in document order (never grouped by level)."""
    headings: List[HeadingInfo] = []
    for el in soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6"]):
        text = _collapse(el.get_text(" "))
        if _TEMPLATE_PLACEHOLDER_RE.search(text):
            text = _collapse(_TEMPLATE_PLACEHOLDER_RE.sub("", text))
        if not text:
            continue
        headings.append(
            HeadingInfo(tag=el.name, text=text[:MAX_HEADING_CHARS], level=int(el.name[1]))
        )
    return headings


def _bare_host(hostname: str) -> str:
    return hostname[4:] if hostname.startswith("www.") else hostname


def is_same_site(hostname: str, base_hostname: str) -> bool:
    """Host equality that ignores a ``www.`` prefix on either side."""
    return _bare_host(hostname.lower()) == _bare_host(base_hostname.lower())


def extract_links(soup: BeautifulSoup, base_url: str) -> List[LinkInfo]:
    base_host = urlparse(base_url).hostname or ""
    links: List[LinkInfo] = []
    for a in soup.find_all("a", href=True):
        href = str(a["href"]).strip()
        if not href or href.lower().startswith(_SKIPPED_HREF_PREFIXES):
            continue
        try:
            full_url = urljoin(base_url, href)
            link_host = urlparse(full_url).hostname or ""
        except ValueError:
            continue

        rel = a.get("rel") or []
        if isinstance(rel, str):
            rel = rel.split()

        links.append(
            LinkInfo(
                url=full_url,
                text=_collapse(a.get_text(" "))[:MAX_ANCHOR_CHARS],
                is_internal=is_same_site(link_host, base_host),
                is_nofollow="nofollow" in (r.lower() for r in rel),
                has_title=bool(a.get("title")),
            )
        )
    return links


def extract_images(soup: BeautifulSoup) -> List[ImageInfo]:
    images: List[ImageInfo] = []
    for img in soup.find_all("img"):
        alt = str(img.get("alt") or "")
        images.append(
            ImageInfo(
                src=str(img.get("src") or img.get("data-src") or ""),
                alt=alt,
                has_alt=bool(alt.strip()),
                width=str(img.get("width") or ""),
                height=str(img.get("height") or ""),
                is_lazy_loaded=img.get("loading") == "lazy" or bool(img.get("data-src")),
            )
        )
    return images


def _stringify(value) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _structured_item(data: dict) -> StructuredDataItem:
    raw_type = data.get("@type") or "Unknown"
    schema_type = ", ".join(str(t) for t in raw_type) if isinstance(raw_type, list) else str(raw_type)
    properties = {
        key: _stringify(value)[:MAX_PROPERTY_CHARS]
        for key, value in data.items()
        if key not in ("@type", "@context")
    }
    return StructuredDataItem(
        type=schema_type,
        properties=properties,
        raw_json=json.dumps(data, ensure_ascii=False)[:MAX_RAW_JSON_CHARS],
    )


def extract_structured_data(soup: BeautifulSoup) -> List[StructuredDataItem]:
    """Parse JSON-LD blocks; malformed blocks are skipped."""
    items: List[StructuredDataItem] = []
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        try:
            data = json.loads(script.string or script.get_text() or "")
        except json.JSONDecodeError:
            continue

        candidates = data if isinstance(data, list) else [data]
        for candidate in candidates:
            if isinstance(candidate, dict):
                items.append(_structured_item(candidate))
    return items


def extract(html: str, base_url: str) -> ExtractedPage:
    """Extract every SEO-relevant signal from *html*."""
    text = extract_visible_text(html)
    word_count = len(text.split())

    soup = BeautifulSoup(html, "lxml")
    html_tag = soup.find("html")
    language = str(html_tag.get("lang") or "").strip() if html_tag else ""
    charset_tag = soup.find("meta", charset=True)
    charset = str(charset_tag["charset"]).strip() if charset_tag else ""

    return ExtractedPage(
        meta=extract_meta(soup),
        headings=extract_headings(soup),
        links=extract_links(soup, base_url),
        images=extract_images(soup),
        structured_data=extract_structured_data(soup),
        text_content=text,
        word_count=word_count,
        language=language,
        charset=charset,
    )
