import logging

from seo_agent.models.analysis import SEOAnalysis
from seo_agent.models.page import PageData
from seo_agent.services.llm import TextCompletion, generate_or_fallback
from seo_agent.services.prompts import ANALYSIS_FALLBACK, analysis_prompt
from seo_agent.services.scoring import analyze_page

logger = logging.getLogger(__name__)


async def run_analysis(url: str, page: PageData, llm: TextCompletion) -> SEOAnalysis:
    """Score *page* with the rule engine and add the model's recommendations."""
    analysis = analyze_page(page)
    logger.info("Scored %s: %s", url, analysis.summary)

    recommendations = await generate_or_fallback(llm, analysis_prompt(url, page, analysis), ANALYSIS_FALLBACK)
    return analysis.model_copy(update={"llm_recommendations": recommendations})
