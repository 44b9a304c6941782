from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from seo_agent.models.analysis import SEOAnalysis
from seo_agent.models.competitor import CompetitorData
from seo_agent.models.keyword import KeywordData
from seo_agent.models.page import PageData


class WorkflowStatus(str, Enum):
    PENDING = "pending"
    CRAWLED = "crawled"
    ANALYZING = "analyzing"
    COMPLETED = "completed"
    ERROR = "error"


class WorkflowState(BaseModel):
    """Mutable run state; each branch writes only its own slot."""

    url: str
    status: WorkflowStatus = WorkflowStatus.PENDING
    page_data: Optional[PageData] = None
    seo_analysis: Optional[SEOAnalysis] = None
    competitor_data: Optional[CompetitorData] = None
    keyword_data: Optional[KeywordData] = None
    report_path: str = ""
    errors: List[str] = []


class SEOReport(BaseModel):
    url: str
    timestamp: str
    page_data: Optional[PageData] = None
    seo_analysis: Optional[SEOAnalysis] = None
    competitor_data: Optional[CompetitorData] = None
    keyword_data: Optional[KeywordData] = None
    executive_summary: str = ""
    errors: List[str] = []
    report_path: str = ""
