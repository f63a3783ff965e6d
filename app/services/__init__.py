"""Services for the ATS Match Backend."""
from app.services.ats_scorer import ATSScorer, AnalysisValidationError, analyze, get_ats_scorer
from app.services.converter import AnalysisConverter

__all__ = ["ATSScorer", "AnalysisValidationError", "AnalysisConverter", "analyze", "get_ats_scorer"]
