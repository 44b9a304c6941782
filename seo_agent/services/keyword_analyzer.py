from seo_agent.models.keyword import KeywordData
from seo_agent.models.page import PageData
from seo_agent.services.keywords import apply_ranking_boost, build_keyword_infos, split_keywords
from seo_agent.services.llm import TextCompletion, generate_or_fallback
from seo_agent.services.prompts import KEYWORD_FALLBACK, keyword_prompt
from seo_agent.services.search import SEARCH_DELAY_SECONDS, CompetitorSearch, search_keyword_rankings

RANKED_KEYWORDS = 5


async def run_keyword_analysis(
    url: str,
    page: PageData,
    search: CompetitorSearch,
    llm: TextCompletion,
    *,
    search_delay: float = SEARCH_DELAY_SECONDS,
) -> KeywordData:
    """Score the page's content keywords and look up where the site ranks for them.

    Only the most frequent keywords are queried; the primary/secondary split
    is decided before the ranking boost is applied.
    """
    infos = build_keyword_infos(page, url)
    primary, secondary = split_keywords(infos)

    rankings = await search_keyword_rankings(
        url, [k.keyword for k in infos[:RANKED_KEYWORDS]], search, delay=search_delay
    )

    analysis = await generate_or_fallback(llm, keyword_prompt(url, page, infos, rankings), KEYWORD_FALLBACK)

    return KeywordData(
        target_url=url,
        primary_keywords=apply_ranking_boost(primary, rankings),
        secondary_keywords=apply_ranking_boost(secondary, rankings),
        rankings=rankings,
        llm_analysis=analysis,
    )
