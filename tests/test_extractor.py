"""Tests for seo_agent.services.extractor."""

from bs4 import BeautifulSoup

from seo_agent.services.extractor import (
    extract,
    extract_headings,
    extract_links,
    extract_structured_data,
    extract_visible_text,
    is_same_site,
)

BASE_URL = "https://www.example.com/blog/post"

_PAGE_HTML = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>  Coffee Brewing Guide  </title>
  <meta name="description" content="Learn to brew better coffee at home.">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta name="robots" content="index, follow">
  <link rel="canonical" href="https://www.example.com/blog/post">
  <meta property="og:title" content="Brewing Guide">
  <meta property="og:image" content="https://www.example.com/og.png">
  <meta name="twitter:card" content="summary">
  <style>.hidden { display: none; }</style>
  <script>var tracking = "do not count";</script>
</head>
<body>
  <h1>Coffee   Brewing</h1>
  <h3>Grind size</h3>
  <h2>Water</h2>
  <h2>{{ page.subtitle }}</h2>
  <h2>Tips {{ tip.count }}</h2>
  <p>Brew with fresh beans.</p>
  <noscript>Enable JavaScript</noscript>
  <img src="/a.jpg" alt="Pour over">
  <img data-src="/b.jpg" alt="  ">
  <img src="/c.jpg" loading="lazy">
</body>
</html>
"""


def _soup(html):
    return BeautifulSoup(html, "lxml")


# ---------------------------------------------------------------------------
# Text and meta
# ---------------------------------------------------------------------------

class TestVisibleText:
    def test_scripts_styles_and_noscript_removed(self):
        text = extract_visible_text(_PAGE_HTML)
        assert "tracking" not in text
        assert "display" not in text
        assert "Enable JavaScript" not in text
        assert "Brew with fresh beans." in text

    def test_whitespace_collapsed(self):
        assert extract_visible_text("<body><p>a\n\n   b</p>\t<p>c</p></body>") == "a b c"


class TestExtract:
    def test_meta_fields(self):
        page = extract(_PAGE_HTML, BASE_URL)
        assert page.meta.title == "Coffee Brewing Guide"
        assert page.meta.title_length == 20
        assert page.meta.description_length == len("Learn to brew better coffee at home.")
        assert page.meta.canonical == BASE_URL
        assert page.meta.robots == "index, follow"
        assert page.meta.og_title == "Brewing Guide"
        assert page.meta.og_description == ""
        assert page.meta.twitter_card == "summary"

    def test_language_and_charset(self):
        page = extract(_PAGE_HTML, BASE_URL)
        assert page.language == "en"
        assert page.charset == "utf-8"

    def test_word_count_matches_visible_text(self):
        page = extract(_PAGE_HTML, BASE_URL)
        assert page.word_count == len(page.text_content.split())

    def test_images(self):
        first, second, third = extract(_PAGE_HTML, BASE_URL).images
        assert first.has_alt and first.alt == "Pour over"
        assert second.src == "/b.jpg"
        assert not second.has_alt
        assert second.is_lazy_loaded
        assert third.is_lazy_loaded and third.alt == ""


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------

class TestExtractHeadings:
    def test_document_order_is_kept(self):
        headings = extract_headings(_soup(_PAGE_HTML))
        assert [h.tag for h in headings] == ["h1", "h3", "h2", "h2"]

    def test_placeholders_stripped(self):
        headings = extract_headings(_soup(_PAGE_HTML))
        assert headings[0].text == "Coffee Brewing"
        assert headings[-1].text == "Tips"

    def test_text_capped(self):
        headings = extract_headings(_soup(f"<h2>{'x' * 300}</h2>"))
        assert len(headings[0].text) == 200
        assert headings[0].level == 2


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------

class TestExtractLinks:
    def test_skipped_schemes(self):
        html = """
        <a href="#top">Top</a>
        <a href="javascript:void(0)">JS</a>
        <a href="mailto:a@example.com">Mail</a>
        <a href="tel:123">Call</a>
        <a href="">Empty</a>
        """
        assert extract_links(_soup(html), BASE_URL) == []

    def test_resolution_and_internal_flag(self):
        html = """
        <a href="/about">About</a>
        <a href="https://example.com/shop" title="Shop">Shop</a>
        <a href="https://other.org/" rel="nofollow noopener">Other</a>
        """
        about, shop, other = extract_links(_soup(html), BASE_URL)
        assert about.url == "https://www.example.com/about"
        assert about.is_internal
        assert shop.is_internal and shop.has_title
        assert not other.is_internal and other.is_nofollow

    def test_anchor_text_capped(self):
        link = extract_links(_soup(f"<a href='/x'>{'y' * 150}</a>"), BASE_URL)[0]
        assert len(link.text) == 100

    def test_same_site_ignores_www(self):
        assert is_same_site("www.example.com", "example.com")
        assert is_same_site("Example.com", "www.example.com")
        assert not is_same_site("blog.example.com", "example.com")


# ---------------------------------------------------------------------------
# Structured data
# ---------------------------------------------------------------------------

class TestStructuredData:
    def test_object_and_array(self):
        html = """
        <script type="application/ld+json">{"@context": "https://schema.org", "@type": "Organization", "name": "Beans"}</script>
        <script type="application/ld+json">[{"@type": "WebSite"}, {"name": "untyped"}]</script>
        """
        items = extract_structured_data(_soup(html))
        assert [i.type for i in items] == ["Organization", "WebSite", "Unknown"]
        assert items[0].properties == {"name": "Beans"}

    def test_malformed_json_skipped(self):
        html = """
        <script type="application/ld+json">{not json</script>
        <script type="application/ld+json">{"@type": "Product", "offers": {"price": "9.99"}}</script>
        """
        items = extract_structured_data(_soup(html))
        assert len(items) == 1
        assert items[0].properties["offers"] == '{"price": "9.99"}'
