from typing import List, Literal

from pydantic import BaseModel

Severity = Literal["critical", "warning", "info", "good"]


class SEOIssue(BaseModel):
    category: str
    title: str
    description: str
    severity: Severity = "info"
    recommendation: str = ""
    current_value: str = ""
    ideal_value: str = ""


class SEOScore(BaseModel):
    category: str
    score: int
    max_score: int = 100
    details: str = ""


class CheckResult(BaseModel):
    score: SEOScore
    issues: List[SEOIssue] = []


class SEOAnalysis(BaseModel):
    overall_score: int = 0
    scores: List[SEOScore] = []
    issues: List[SEOIssue] = []
    strengths: List[str] = []
    summary: str = ""
    llm_recommendations: str = ""
