from typing import List, Optional

from pydantic import BaseModel


class SearchResult(BaseModel):
    title: str
    url: str
    description: str = ""


class CompetitorInfo(BaseModel):
    url: str
    title: str = ""
    description: str = ""
    domain: str = ""
    keyword_overlap: List[str] = []
    seo_score: Optional[int] = None
    strengths: List[str] = []
    weaknesses: List[str] = []


class CompetitorData(BaseModel):
    target_url: str
    search_keywords: List[str] = []
    competitors: List[CompetitorInfo] = []
    market_summary: str = ""
    llm_analysis: str = ""
