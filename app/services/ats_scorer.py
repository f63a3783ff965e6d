"""
Resume / job description ATS match scoring.

This module combines five independent signals into one 0-100 score, the way
commercial ATS compatibility checkers report it:
- Keyword match: share of the job's top keywords found in the resume
- Semantic similarity: blended TF-IDF, token, subsequence and bigram overlap
- Required skills: coverage of skills listed after "required"/"must have"
- Distribution quality: keywords spread across sections without stuffing
- ATS heuristics: tables, columns, standard sections, length

Each raw signal passes through a boost curve (see ``calibration``) before the
weighted sum. The scorer holds no per-request state, so one instance can serve
concurrent requests; a re-score after the user excludes a keyword or dismisses
an issue is simply another call with larger exclusion sets.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from app.services.calibration import (
    DISTRIBUTION_FLOOR,
    DISTRIBUTION_SECTIONS,
    KEYWORD_MATCH_CURVE,
    MIN_SECTIONS_WITH_KEYWORDS,
    NO_KEYWORDS_SCORE,
    NO_REQUIRED_SKILLS_SCORE,
    POOR_SPREAD_PENALTY,
    SCORE_WEIGHTS,
    SKILLS_COVERAGE_CURVE,
    STUFFING_DENSITY_THRESHOLD,
    STUFFING_PENALTY,
    TOP_KEYWORDS_REPORTED,
    apply_boost_curve,
    clamp_score,
)
from app.services.heuristics import check_ats_heuristics
from app.services.keywords import (
    DEFAULT_KEYWORD_COUNT,
    count_keyword_matches,
    extract_keywords,
    filter_excluded,
)
from app.services.nlp_utils import word_count
from app.services.sections import SectionAnalysis, analyze_sections, detect_sections, section_keyword_occurrences
from app.services.similarity import semantic_similarity
from app.services.skills import check_skills_coverage, detect_preferred_skills, detect_required_skills
from app.services.suggestions import Suggestion, generate_suggestions

logger = logging.getLogger(__name__)


class AnalysisValidationError(ValueError):
    """Raised when the resume or job description text is missing."""


@dataclass
class KeywordMatchScore:
    score: int
    matched: int
    total: int
    matched_keywords: list[str] = field(default_factory=list)
    missing_keywords: list[str] = field(default_factory=list)


@dataclass
class SemanticSimilarityScore:
    score: int
    similarity: float  # boosted score / 100
    tfidf_cosine: float
    jaccard: float
    lcs_ratio: float
    bigram_overlap: float


@dataclass
class RequiredSkillsScore:
    score: int
    covered: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    total: int = 0


@dataclass
class SectionDensity:
    density: float
    keyword_count: int
    is_stuffed: bool


@dataclass
class DistributionQualityScore:
    score: int
    details: dict[str, SectionDensity] = field(default_factory=dict)


@dataclass
class AtsHeuristicsScore:
    score: int
    issues: list[str] = field(default_factory=list)
    passed: list[str] = field(default_factory=list)
    dismissed: list[str] = field(default_factory=list)


@dataclass
class ScoreBreakdown:
    keyword_match: KeywordMatchScore
    semantic_similarity: SemanticSimilarityScore
    required_skills: RequiredSkillsScore
    distribution_quality: DistributionQualityScore
    ats_heuristics: AtsHeuristicsScore


@dataclass
class ResumeAnalysis:
    """Complete match analysis result."""
    score: int  # 0-100
    breakdown: ScoreBreakdown
    keywords: list[str]
    missing_keywords: list[str]
    strong_matches: list[str]
    section_analysis: dict[str, SectionAnalysis]
    suggestions: list[Suggestion]
    preferred_skills: list[str] = field(default_factory=list)
    resume_text: Optional[str] = None


class ATSScorer:
    """
    Stateless resume / job description match scorer.

    Analyzes a resume against a job description based on:
    1. Keyword match
    2. Semantic similarity
    3. Required skills coverage
    4. Keyword distribution across sections
    5. Structural ATS heuristics
    """

    def __init__(self, keyword_count: int = DEFAULT_KEYWORD_COUNT):
        self.keyword_count = keyword_count

    def analyze(
        self,
        resume_text: str,
        job_description: str,
        excluded_keywords: Iterable[str] = (),
        dismissed_issues: Iterable[str] = (),
        rng: Optional[random.Random] = None,
        include_resume_text: bool = False,
    ) -> ResumeAnalysis:
        """
        Score a resume against a job description.

        Args:
            resume_text: Plain resume text
            job_description: Plain job description text
            excluded_keywords: Keywords the user marked irrelevant
            dismissed_issues: ATS issue ids or messages the user dismissed
            rng: Random source for suggestion examples
            include_resume_text: Echo the resume text in the result

        Returns:
            ResumeAnalysis with the final score and its breakdown

        Raises:
            AnalysisValidationError: if either text is empty or blank
        """
        if not resume_text or not resume_text.strip():
            raise AnalysisValidationError("resumeText is required")
        if not job_description or not job_description.strip():
            raise AnalysisValidationError("jobDescription is required")

        keywords = filter_excluded(
            extract_keywords(job_description, self.keyword_count),
            excluded_keywords,
        )

        keyword_match = self._score_keyword_match(resume_text, keywords)
        semantic = self._score_semantic_similarity(resume_text, job_description)
        skills = self._score_required_skills(resume_text, job_description)
        distribution = self._score_distribution(resume_text, keywords)
        heuristics = self._score_ats_heuristics(resume_text, dismissed_issues)

        logger.debug(
            f"Sub-scores: keywords={keyword_match.score} semantic={semantic.score} "
            f"skills={skills.score} distribution={distribution.score} ats={heuristics.score}"
        )

        final_score = clamp_score(
            keyword_match.score * SCORE_WEIGHTS["keyword_match"]
            + semantic.score * SCORE_WEIGHTS["semantic_similarity"]
            + skills.score * SCORE_WEIGHTS["required_skills"]
            + distribution.score * SCORE_WEIGHTS["distribution_quality"]
            + heuristics.score * SCORE_WEIGHTS["ats_heuristics"]
        )

        suggestions = generate_suggestions(
            resume_text,
            keyword_match.missing_keywords,
            skills.missing,
            keywords=keywords,
            rng=rng,
        )

        logger.info(
            f"Analyzed resume ({word_count(resume_text)} words) against "
            f"{len(keywords)} keywords: score={final_score}"
        )

        return ResumeAnalysis(
            score=final_score,
            breakdown=ScoreBreakdown(
                keyword_match=keyword_match,
                semantic_similarity=semantic,
                required_skills=skills,
                distribution_quality=distribution,
                ats_heuristics=heuristics,
            ),
            keywords=keywords,
            missing_keywords=keyword_match.missing_keywords[:TOP_KEYWORDS_REPORTED],
            strong_matches=keyword_match.matched_keywords[:TOP_KEYWORDS_REPORTED],
            section_analysis=analyze_sections(resume_text, keywords),
            suggestions=suggestions,
            preferred_skills=detect_preferred_skills(job_description),
            resume_text=resume_text if include_resume_text else None,
        )

    def _score_keyword_match(self, resume_text: str, keywords: Sequence[str]) -> KeywordMatchScore:
        matches = count_keyword_matches(resume_text, keywords)

        if not keywords:
            score = NO_KEYWORDS_SCORE
        else:
            match_rate = len(matches.matched) / len(keywords)
            score = clamp_score(apply_boost_curve(match_rate, KEYWORD_MATCH_CURVE))

        return KeywordMatchScore(
            score=score,
            matched=len(matches.matched),
            total=len(keywords),
            matched_keywords=matches.matched,
            missing_keywords=matches.missing,
        )

    def _score_semantic_similarity(self, resume_text: str, job_description: str) -> SemanticSimilarityScore:
        similarity = semantic_similarity(resume_text, job_description)
        return SemanticSimilarityScore(
            score=similarity.score,
            similarity=similarity.score / 100,
            tfidf_cosine=similarity.tfidf_cosine,
            jaccard=similarity.jaccard,
            lcs_ratio=similarity.lcs_ratio,
            bigram_overlap=similarity.bigram_overlap,
        )

    def _score_required_skills(self, resume_text: str, job_description: str) -> RequiredSkillsScore:
        required = detect_required_skills(job_description)

        # No explicit requirements is not the same as zero coverage
        if not required:
            return RequiredSkillsScore(score=NO_REQUIRED_SKILLS_SCORE, total=0)

        coverage = check_skills_coverage(resume_text, required)
        coverage_rate = len(coverage.covered) / len(required)

        return RequiredSkillsScore(
            score=clamp_score(apply_boost_curve(coverage_rate, SKILLS_COVERAGE_CURVE)),
            covered=coverage.covered,
            missing=coverage.missing,
            total=len(required),
        )

    def _score_distribution(self, resume_text: str, keywords: Sequence[str]) -> DistributionQualityScore:
        sections = detect_sections(resume_text)
        details = {}
        penalty = 0

        for name in DISTRIBUTION_SECTIONS:
            text = sections.get(name)
            if not text:
                continue

            words = word_count(text)
            keyword_count = section_keyword_occurrences(text, keywords)
            density = keyword_count / words if words else 0.0
            is_stuffed = density > STUFFING_DENSITY_THRESHOLD

            details[name] = SectionDensity(
                density=round(density, 2),
                keyword_count=keyword_count,
                is_stuffed=is_stuffed,
            )
            if is_stuffed:
                penalty += STUFFING_PENALTY

        sections_with_keywords = sum(1 for d in details.values() if d.keyword_count > 0)
        if sections_with_keywords < MIN_SECTIONS_WITH_KEYWORDS and len(details) > 1:
            penalty += POOR_SPREAD_PENALTY

        return DistributionQualityScore(
            score=max(DISTRIBUTION_FLOOR, 100 - penalty),
            details=details,
        )

    def _score_ats_heuristics(self, resume_text: str, dismissed_issues: Iterable[str]) -> AtsHeuristicsScore:
        result = check_ats_heuristics(resume_text, dismissed_issues)
        return AtsHeuristicsScore(
            score=result.score,
            issues=result.issues,
            passed=result.passed,
            dismissed=result.dismissed,
        )


# Shared instance; the scorer keeps no per-request state
_ats_scorer: Optional[ATSScorer] = None


def get_ats_scorer() -> ATSScorer:
    """Get or create the ATS scorer singleton."""
    global _ats_scorer
    if _ats_scorer is None:
        _ats_scorer = ATSScorer()
    return _ats_scorer


def analyze(
    resume_text: str,
    job_description: str,
    excluded_keywords: Iterable[str] = (),
    dismissed_issues: Iterable[str] = (),
    rng: Optional[random.Random] = None,
) -> ResumeAnalysis:
    return get_ats_scorer().analyze(
        resume_text,
        job_description,
        excluded_keywords=excluded_keywords,
        dismissed_issues=dismissed_issues,
        rng=rng,
    )
