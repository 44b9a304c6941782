"""Content keyword extraction and on-page prominence scoring."""

import re
from collections import Counter
from typing import Dict, List, Optional, Tuple

from seo_agent.models.keyword import KeywordInfo
from seo_agent.models.page import PageData
from seo_agent.services.checks import round_half_up

_WORD_RE = re.compile(r"\b[a-zäöüß]{3,}\b")

STOP_WORDS = frozenset(
    [
        # German
        "der", "die", "das", "ein", "eine", "und", "oder", "aber", "in", "von",
        "zu", "mit", "auf", "an", "fuer", "ist", "sind", "war", "hat", "haben",
        "wird", "werden", "kann", "nicht", "auch", "als", "nach", "bei", "aus",
        "wie", "wenn", "den", "dem", "des", "sich", "es", "ich", "wir", "sie",
        "er", "ihr", "uns", "was", "noch", "nur", "so", "da", "ueber", "vor",
        "bis", "durch", "unter", "ohne", "dass", "diese", "dieser", "dieses",
        "einem", "einen", "einer", "zum", "zur", "im", "am", "vom", "mehr",
        # English
        "the", "and", "for", "are", "but", "not", "you", "all", "can", "had",
        "her", "was", "one", "our", "out", "has", "have", "been", "from",
        "this", "that", "with", "will", "each", "make", "how", "them", "then",
        "its", "over", "such", "into", "than", "most", "also", "some", "just",
        "about", "would", "could", "should", "their", "which", "when", "where",
        "what", "there", "here", "other", "your", "they", "very", "only",
        "does", "did", "his", "him", "who", "may", "new", "now", "any",
        "being", "both", "between", "after", "before", "because", "well",
    ]
)

# Prominence weights per on-page location
TITLE_WEIGHT = 30
DESCRIPTION_WEIGHT = 20
H1_WEIGHT = 25
HEADING_WEIGHT = 10
URL_WEIGHT = 15

PRIMARY_THRESHOLD = 30
MAX_PER_BUCKET = 10
MAX_RANK = 20


def extract_keywords_from_text(text: str, top_n: int = 20) -> List[Tuple[str, int]]:
    """Return the *top_n* most frequent non-stop-words as ``(word, count)``.

    Ties keep first-seen order.
    """
    words = [w for w in _WORD_RE.findall(text.lower()) if w not in STOP_WORDS]
    return Counter(words).most_common(top_n)


def build_keyword_infos(page: PageData, url: str, top_n: int = 20) -> List[KeywordInfo]:
    """Score the top content words of *page* by where they appear.

    *url* is the URL as requested by the user, not the final URL.
    """
    total_words = page.page_info.word_count or 1
    title = page.meta.title.lower()
    description = page.meta.description.lower()
    url_lower = url.lower()
    h1_texts = [h.text.lower() for h in page.headings if h.level == 1]
    heading_texts = [h.text.lower() for h in page.headings]

    infos: List[KeywordInfo] = []
    for word, count in extract_keywords_from_text(page.text_content, top_n):
        in_title = word in title
        in_description = word in description
        in_h1 = any(word in t for t in h1_texts)
        in_headings = any(word in t for t in heading_texts)
        in_url = word in url_lower

        prominence = 0
        if in_title:
            prominence += TITLE_WEIGHT
        if in_description:
            prominence += DESCRIPTION_WEIGHT
        if in_h1:
            prominence += H1_WEIGHT
        if in_headings:
            prominence += HEADING_WEIGHT
        if in_url:
            prominence += URL_WEIGHT

        infos.append(
            KeywordInfo(
                keyword=word,
                density=round_half_up(count / total_words * 10000) / 100,
                count=count,
                in_title=in_title,
                in_description=in_description,
                in_h1=in_h1,
                in_headings=in_headings,
                in_url=in_url,
                prominence_score=prominence,
            )
        )
    return infos


def split_keywords(infos: List[KeywordInfo]) -> Tuple[List[KeywordInfo], List[KeywordInfo]]:
    """Split into (primary, secondary) by prominence, keeping frequency order."""
    primary = [k for k in infos if k.prominence_score >= PRIMARY_THRESHOLD][:MAX_PER_BUCKET]
    secondary = [k for k in infos if k.prominence_score < PRIMARY_THRESHOLD][:MAX_PER_BUCKET]
    return primary, secondary


def apply_ranking_boost(
    infos: List[KeywordInfo], rankings: Dict[str, Optional[int]]
) -> List[KeywordInfo]:
    """Raise prominence by ``21 - rank`` for keywords the target ranks for.

    Unranked keywords are returned unchanged; the result is capped at 100.
    """
    boosted: List[KeywordInfo] = []
    for info in infos:
        rank = rankings.get(info.keyword)
        if rank is not None and 1 <= rank <= MAX_RANK:
            info = info.model_copy(
                update={"prominence_score": min(100, info.prominence_score + MAX_RANK + 1 - rank)}
            )
        boosted.append(info)
    return boosted
