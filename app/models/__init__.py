"""Data models for the ATS Match Backend."""
from app.models.analysis import (
    AnalyzeRequest,
    SuggestionsRequest,
    SectionsRequest,
    KeywordsRequest,
    ResumeAnalysisResponse,
    SuggestionsResponse,
    SectionsResponse,
    KeywordsResponse,
    HealthResponse,
)

__all__ = [
    "AnalyzeRequest",
    "SuggestionsRequest",
    "SectionsRequest",
    "KeywordsRequest",
    "ResumeAnalysisResponse",
    "SuggestionsResponse",
    "SectionsResponse",
    "KeywordsResponse",
    "HealthResponse",
]
