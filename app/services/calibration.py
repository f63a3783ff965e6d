"""
Scoring weights and boost curves.

These numbers are the tuning surface of the scorer: they were calibrated so
that results line up with commercial ATS checkers, and changing any of them
changes every reported score. Keep them here, named, rather than inline.

A boost curve is a tuple of ``(lower_bound, base, slope)`` segments ordered
from the highest bound down. A raw value ``x`` maps to
``base + (x - lower_bound) * slope`` for the first segment whose bound it
reaches.
"""

from __future__ import annotations

import math
from types import MappingProxyType

BoostCurve = tuple[tuple[float, float, float], ...]

# Final score weights (sum to 1.0)
SCORE_WEIGHTS = MappingProxyType({
    "keyword_match": 0.50,
    "semantic_similarity": 0.20,
    "required_skills": 0.15,
    "distribution_quality": 0.10,
    "ats_heuristics": 0.05,
})

# Keyword match rate (0-1) -> score. 0.8 maps to exactly 90.
KEYWORD_MATCH_CURVE: BoostCurve = (
    (0.80, 90.0, 50.0),
    (0.60, 75.0, 75.0),
    (0.40, 60.0, 75.0),
    (0.00, 0.0, 150.0),
)
# No keywords left after exclusions: nothing to match against.
NO_KEYWORDS_SCORE = 75

# Raw combined similarity (0-100) -> score
SEMANTIC_CURVE: BoostCurve = (
    (50.0, 75.0, 0.5),
    (30.0, 60.0, 0.75),
    (15.0, 45.0, 1.0),
    (0.0, 0.0, 3.0),
)
SEMANTIC_SIGNAL_WEIGHTS = MappingProxyType({
    "tfidf_cosine": 0.40,
    "jaccard": 0.30,
    "lcs_ratio": 0.15,
    "bigram_overlap": 0.15,
})

# Required skill coverage rate (0-1) -> score
SKILLS_COVERAGE_CURVE: BoostCurve = (
    (0.85, 95.0, 33.0),
    (0.70, 88.0, 47.0),
    (0.50, 78.0, 50.0),
    (0.30, 65.0, 65.0),
    (0.00, 0.0, 217.0),
)
# The job description names no explicit requirements.
NO_REQUIRED_SKILLS_SCORE = 98

# Distribution quality
DISTRIBUTION_SECTIONS = ("experience", "skills", "summary", "projects")
STUFFING_DENSITY_THRESHOLD = 0.04
STUFFING_PENALTY = 8
POOR_SPREAD_PENALTY = 7
MIN_SECTIONS_WITH_KEYWORDS = 2
DISTRIBUTION_FLOOR = 70

# ATS heuristics
ATS_HEURISTICS_FLOOR = 80

# Result slicing
TOP_KEYWORDS_REPORTED = 15


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def apply_boost_curve(value: float, curve: BoostCurve) -> float:
    for lower_bound, base, slope in curve:
        if value >= lower_bound:
            return min(100.0, base + (value - lower_bound) * slope)
    return 0.0
