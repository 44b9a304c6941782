"""SPA-shell detection from page HTML.

Given the raw HTML returned by a plain HTTP GET and the word count of its
visible text, :func:`needs_browser_rendering` decides whether the page is a
JavaScript single-page application whose content only exists after
client-side rendering.  In ``auto`` render mode the scraper then re-fetches
the page with a headless browser so the SEO checks see the real content.
"""

import re

# ---------------------------------------------------------------------------
# SPA framework fingerprints
# Present in the *un-rendered* HTML shell when a SPA mounts on the client.
# ---------------------------------------------------------------------------
_SPA_PATTERN = re.compile(
    # React / Next.js mount targets
    r'<div\s[^>]*\bid=["\']root["\']'
    r'|<div\s[^>]*\bid=["\']__next["\']'
    # Vue / generic SPA mount target
    r'|<div\s[^>]*\bid=["\']app["\']'
    # Nuxt.js
    r'|<div\s[^>]*\bid=["\']__nuxt["\']'
    r"|window\.__NUXT__"
    # Next.js inline data script
    r"|__NEXT_DATA__"
    # Angular attribute added at runtime (present in HTML template)
    r"|ng-version="
    # React legacy server attribute
    r"|data-reactroot"
    # Svelte component roots
    r"|<svelte:",
    re.IGNORECASE,
)

# Below this many visible words *and* with an SPA marker present, the page is
# assumed to need JavaScript rendering.
SPA_MIN_WORDS = 20


def needs_browser_rendering(html: str, word_count: int) -> bool:
    """Return True when *html* looks like an empty SPA shell.

    Both conditions must hold: an SPA framework fingerprint is present, and
    fewer than :data:`SPA_MIN_WORDS` words were extracted.  SSR pages built
    with the same frameworks already ship their content and are left alone.
    """
    return word_count < SPA_MIN_WORDS and bool(_SPA_PATTERN.search(html))
