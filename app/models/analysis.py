"""Request and response models for the match analysis API."""
from datetime import datetime
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field, field_validator


class AnalyzeRequest(BaseModel):
    """Request model for resume / job description analysis."""
    resume_text: str = Field(..., alias="resumeText", description="Plain resume text")
    job_description: str = Field(..., alias="jobDescription", description="Plain job description text")
    excluded_keywords: List[str] = Field(
        default_factory=list,
        alias="excludedKeywords",
        description="Keywords marked irrelevant by the user"
    )
    dismissed_issues: List[str] = Field(
        default_factory=list,
        alias="dismissedIssues",
        description="ATS issue ids or messages dismissed by the user"
    )
    include_resume_text: Optional[bool] = Field(
        None,
        alias="includeResumeText",
        description="Echo the resume text back in the response"
    )

    class Config:
        populate_by_name = True

    @field_validator("excluded_keywords", "dismissed_issues", mode="before")
    @classmethod
    def drop_blank_entries(cls, v):
        """Filter out empty strings and nulls from exclusion lists."""
        if isinstance(v, list):
            return [item for item in v if item and str(item).strip()]
        return v


class SuggestionsRequest(BaseModel):
    """Request model for standalone suggestion generation."""
    resume_text: str = Field(..., alias="resumeText")
    job_description: str = Field(..., alias="jobDescription")
    missing_keywords: List[str] = Field(default_factory=list, alias="missingKeywords")

    class Config:
        populate_by_name = True


class SectionsRequest(BaseModel):
    """Request model for section detection."""
    resume_text: str = Field(..., alias="resumeText")

    class Config:
        populate_by_name = True


class KeywordsRequest(BaseModel):
    """Request model for job description keyword extraction."""
    job_description: str = Field(..., alias="jobDescription")
    count: int = Field(40, ge=1, le=100, description="Maximum number of keywords")

    class Config:
        populate_by_name = True


# ============================================
# Score breakdown
# ============================================


class KeywordMatchResponse(BaseModel):
    score: int = Field(..., ge=0, le=100)
    matched: int
    total: int
    matched_keywords: List[str] = Field(alias="matchedKeywords", default_factory=list)
    missing_keywords: List[str] = Field(alias="missingKeywords", default_factory=list)

    class Config:
        populate_by_name = True


class SemanticSimilarityResponse(BaseModel):
    score: int = Field(..., ge=0, le=100)
    similarity: float
    tfidf_cosine: float = Field(alias="tfidfCosine")
    jaccard: float
    lcs_ratio: float = Field(alias="lcsRatio")
    bigram_overlap: float = Field(alias="bigramOverlap")

    class Config:
        populate_by_name = True


class RequiredSkillsResponse(BaseModel):
    score: int = Field(..., ge=0, le=100)
    covered: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)
    total: int

    class Config:
        populate_by_name = True


class SectionDensityResponse(BaseModel):
    density: float
    keyword_count: int = Field(alias="keywordCount")
    is_stuffed: bool = Field(alias="isStuffed")

    class Config:
        populate_by_name = True


class DistributionQualityResponse(BaseModel):
    score: int = Field(..., ge=0, le=100)
    details: Dict[str, SectionDensityResponse] = Field(default_factory=dict)

    class Config:
        populate_by_name = True


class AtsHeuristicsResponse(BaseModel):
    score: int = Field(..., ge=0, le=100)
    issues: List[str] = Field(default_factory=list)
    passed: List[str] = Field(default_factory=list)
    dismissed: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class ScoreBreakdownResponse(BaseModel):
    keyword_match: KeywordMatchResponse = Field(alias="keywordMatch")
    semantic_similarity: SemanticSimilarityResponse = Field(alias="semanticSimilarity")
    required_skills: RequiredSkillsResponse = Field(alias="requiredSkills")
    distribution_quality: DistributionQualityResponse = Field(alias="distributionQuality")
    ats_heuristics: AtsHeuristicsResponse = Field(alias="atsHeuristics")

    class Config:
        populate_by_name = True


# ============================================
# Sections and suggestions
# ============================================


class SectionAnalysisResponse(BaseModel):
    word_count: int = Field(alias="wordCount")
    keyword_count: int = Field(alias="keywordCount")
    keyword_density: float = Field(alias="keywordDensity")
    has_action_verbs: bool = Field(alias="hasActionVerbs")
    has_quantification: bool = Field(alias="hasQuantification")
    quality: Literal["good", "medium", "poor", "unknown"]
    found_keywords: List[str] = Field(alias="foundKeywords", default_factory=list)
    suggested_keywords: List[str] = Field(alias="suggestedKeywords", default_factory=list)

    class Config:
        populate_by_name = True


class SuggestionResponse(BaseModel):
    type: Literal["keyword", "structure", "quantification", "formatting", "skills"]
    section: str
    priority: Literal["high", "medium", "low"]
    recommendation: str
    example: Optional[str] = None
    keywords_to_add: List[str] = Field(alias="keywordsToAdd", default_factory=list)

    class Config:
        populate_by_name = True


class ResumeAnalysisResponse(BaseModel):
    """Complete match analysis response."""
    score: int = Field(..., ge=0, le=100)
    breakdown: ScoreBreakdownResponse
    missing_keywords: List[str] = Field(alias="missingKeywords", default_factory=list)
    strong_matches: List[str] = Field(alias="strongMatches", default_factory=list)
    section_analysis: Dict[str, SectionAnalysisResponse] = Field(alias="sectionAnalysis", default_factory=dict)
    suggestions: List[SuggestionResponse] = Field(default_factory=list)
    preferred_skills: List[str] = Field(alias="preferredSkills", default_factory=list)
    resume_text: Optional[str] = Field(None, alias="resumeText")
    analysis_time_ms: Optional[float] = Field(None, alias="analysisTimeMs")

    class Config:
        populate_by_name = True


class SuggestionsResponse(BaseModel):
    suggestions: List[SuggestionResponse] = Field(default_factory=list)
    estimated_score_impact: int = Field(alias="estimatedScoreImpact")

    class Config:
        populate_by_name = True


class SectionsResponse(BaseModel):
    sections: Dict[str, str] = Field(default_factory=dict)

    class Config:
        populate_by_name = True


class KeywordDataResponse(BaseModel):
    keyword: str
    frequency: int
    positions: List[int] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class KeywordsResponse(BaseModel):
    keywords: List[KeywordDataResponse] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class HealthResponse(BaseModel):
    """Health check response."""
    status: Literal["healthy", "unhealthy"]
    version: str
    timestamp: datetime

    class Config:
        populate_by_name = True
