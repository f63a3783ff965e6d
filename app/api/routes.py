"""
API Routes for ATS Match Backend.

Provides endpoints for:
- Scoring a resume against a job description
- Generating improvement suggestions
- Detecting resume sections
- Extracting job description keywords
- Health checks
"""
from datetime import datetime
import logging
import time

from fastapi import APIRouter, HTTPException

from app.models.analysis import (
    AnalyzeRequest,
    SuggestionsRequest,
    SectionsRequest,
    KeywordsRequest,
    ResumeAnalysisResponse,
    SuggestionsResponse,
    SectionsResponse,
    KeywordsResponse,
    KeywordDataResponse,
    HealthResponse,
)
from app.services.ats_scorer import AnalysisValidationError, get_ats_scorer
from app.services.converter import AnalysisConverter
from app.services.keywords import extract_keywords_with_data
from app.services.sections import detect_sections
from app.services.skills import check_skills_coverage, detect_required_skills
from app.services.suggestions import generate_suggestions
from app.config import get_settings

logger = logging.getLogger(__name__)
router = APIRouter()


def _check_length(value: str, field_name: str) -> None:
    max_chars = get_settings().max_text_chars
    if len(value) > max_chars:
        raise HTTPException(
            status_code=400,
            detail=f"{field_name} exceeds the {max_chars} character limit"
        )


def _require_text(value: str, field_name: str) -> None:
    """Reject blank or oversized text inputs with a 400."""
    if not value or not value.strip():
        raise HTTPException(status_code=400, detail=f"{field_name} is required")
    _check_length(value, field_name)


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """
    Health check endpoint.

    Returns the service status and version.
    """
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.utcnow(),
    )


@router.post("/analyze", response_model=ResumeAnalysisResponse, tags=["Analysis"])
def analyze_resume(request: AnalyzeRequest):
    """
    Score a resume against a job description.

    Request body:
    - resumeText: Plain resume text
    - jobDescription: Plain job description text
    - excludedKeywords: Keywords to ignore when re-scoring
    - dismissedIssues: ATS issues (id or message) that should carry no penalty
    - includeResumeText: Echo the resume text in the response

    Returns the final score, the five-part breakdown, keyword lists,
    per-section analysis and suggestions.
    """
    # Blank inputs are rejected by the scorer itself
    _check_length(request.resume_text, "resumeText")
    _check_length(request.job_description, "jobDescription")

    settings = get_settings()
    include_text = (
        request.include_resume_text
        if request.include_resume_text is not None
        else settings.include_resume_text
    )

    start = time.perf_counter()
    try:
        analysis = get_ats_scorer().analyze(
            request.resume_text,
            request.job_description,
            excluded_keywords=request.excluded_keywords,
            dismissed_issues=request.dismissed_issues,
            include_resume_text=include_text,
        )
    except AnalysisValidationError:
        raise
    except Exception as e:
        logger.error(f"Analysis failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to analyze resume")

    elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
    return AnalysisConverter.to_response(analysis, analysis_time_ms=elapsed_ms)


@router.post("/suggestions", response_model=SuggestionsResponse, tags=["Analysis"])
def suggest_improvements(request: SuggestionsRequest):
    """
    Generate rule-based improvement suggestions.

    Useful when the frontend already holds the missing keyword list from a
    previous analysis. Missing required skills are detected from the job
    description. Also returns an estimate of the score gain available.
    """
    _require_text(request.resume_text, "resumeText")
    _require_text(request.job_description, "jobDescription")

    try:
        required_skills = detect_required_skills(request.job_description)
        missing_skills = check_skills_coverage(request.resume_text, required_skills).missing
        suggestions = generate_suggestions(
            request.resume_text,
            request.missing_keywords,
            missing_skills,
        )
    except Exception as e:
        logger.error(f"Suggestion generation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to generate suggestions")

    return AnalysisConverter.to_suggestions_response(suggestions)


@router.post("/sections", response_model=SectionsResponse, tags=["Utilities"])
def split_sections(request: SectionsRequest):
    """Detect the named sections of a resume."""
    _require_text(request.resume_text, "resumeText")
    return SectionsResponse(sections=detect_sections(request.resume_text))


@router.post("/keywords", response_model=KeywordsResponse, tags=["Utilities"])
def job_keywords(request: KeywordsRequest):
    """
    Extract the top keywords of a job description.

    Each keyword comes with its frequency and the character offsets of its
    occurrences in the whitespace-normalised job description.
    """
    _require_text(request.job_description, "jobDescription")
    occurrences = extract_keywords_with_data(request.job_description, request.count)
    return KeywordsResponse(
        keywords=[
            KeywordDataResponse(keyword=o.keyword, frequency=o.frequency, positions=o.positions)
            for o in occurrences
        ]
    )
