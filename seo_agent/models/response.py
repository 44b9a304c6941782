from typing import List, Optional

from pydantic import BaseModel

from seo_agent.models.analysis import SEOAnalysis
from seo_agent.models.competitor import CompetitorData
from seo_agent.models.keyword import KeywordData
from seo_agent.models.report import WorkflowStatus


class AnalyzeResponse(BaseModel):
    url: str
    status: WorkflowStatus
    overall_score: Optional[int] = None
    seo_analysis: Optional[SEOAnalysis] = None
    competitor_data: Optional[CompetitorData] = None
    keyword_data: Optional[KeywordData] = None
    report_path: str = ""
    errors: List[str] = []
