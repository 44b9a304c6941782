from typing import Dict, List, Optional

from pydantic import BaseModel


class KeywordInfo(BaseModel):
    keyword: str
    density: float = 0.0
    count: int = 0
    in_title: bool = False
    in_description: bool = False
    in_h1: bool = False
    in_headings: bool = False
    in_url: bool = False
    prominence_score: int = 0


class KeywordData(BaseModel):
    target_url: str
    primary_keywords: List[KeywordInfo] = []
    secondary_keywords: List[KeywordInfo] = []
    rankings: Dict[str, Optional[int]] = {}
    """Search position (1-based) of the target domain per queried keyword."""
    llm_analysis: str = ""
