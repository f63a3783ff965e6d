"""Convert scorer results into API response models."""
from dataclasses import asdict
from typing import Optional, Sequence

from app.models.analysis import (
    ResumeAnalysisResponse,
    SuggestionResponse,
    SuggestionsResponse,
)
from app.services.ats_scorer import ResumeAnalysis
from app.services.suggestions import Suggestion, estimate_score_impact


class AnalysisConverter:
    """Maps the scorer's dataclasses onto the camelCase response models."""

    @staticmethod
    def to_response(
        analysis: ResumeAnalysis,
        analysis_time_ms: Optional[float] = None,
    ) -> ResumeAnalysisResponse:
        data = asdict(analysis)
        data["analysis_time_ms"] = analysis_time_ms
        return ResumeAnalysisResponse.model_validate(data)

    @staticmethod
    def to_suggestion(suggestion: Suggestion) -> SuggestionResponse:
        return SuggestionResponse.model_validate(asdict(suggestion))

    @classmethod
    def to_suggestions_response(cls, suggestions: Sequence[Suggestion]) -> SuggestionsResponse:
        return SuggestionsResponse(
            suggestions=[cls.to_suggestion(s) for s in suggestions],
            estimated_score_impact=estimate_score_impact(suggestions),
        )
