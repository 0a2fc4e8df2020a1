"""Pydantic schemas for match results and API payloads."""
from typing import Optional, List, Dict
from pydantic import BaseModel, Field


class MatchSpan(BaseModel):
    """Matched region of the original (non-normalized) text."""
    start: int = Field(..., ge=0, description="Start offset in the original text")
    end: int = Field(..., ge=0, description="End offset (exclusive) in the original text")
    text: str = Field(..., description="Original substring covered by the span")


class MatchResult(BaseModel):
    """Match decision for one text/term pair."""
    matched: bool = Field(..., description="Whether the term matches the text")
    tier: Optional[str] = Field(None, description="Strategy that produced the match: direct, pattern, variations, literal, numeric")
    spans: List[MatchSpan] = Field(default_factory=list, description="Matched regions for highlighting")


class StudentRecord(BaseModel):
    """Student record as returned by search."""
    id: int
    student_name: str
    student_id: Optional[str] = None
    subject: Optional[str] = None
    grade: Optional[float] = None
    semester: Optional[str] = None
    year: Optional[str] = None
    highlights: Dict[str, str] = Field(default_factory=dict, description="Field name to highlighted HTML")


class SearchInfo(BaseModel):
    """Metadata about a search."""
    query: Optional[str] = None
    total_results: int
    is_numeric_search: bool


class SearchResponse(BaseModel):
    """Search endpoint response."""
    results: List[StudentRecord]
    search_info: SearchInfo


class SearchLogRequest(BaseModel):
    """Search term to record."""
    term: str = Field(..., min_length=1)


class UploadResponse(BaseModel):
    """Upload endpoint response."""
    message: str
    count: int
