"""Structural ATS checks: tables, columns, standard sections and length."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from app.services.calibration import ATS_HEURISTICS_FLOOR
from app.services.nlp_utils import word_count
from app.services.sections import detect_sections

TABLE_INDICATORS = (
    re.compile(r"\|[\s\w]+\|"),  # pipe-separated cells
    re.compile(r"\t\w+\t"),  # tab-separated cells
    re.compile(r"[┌└├┤─│┐┘┬┴┼]"),  # box-drawing characters
)
COLUMN_GAP_PATTERN = re.compile(r"\s{5,}")
MIN_COLUMN_SEGMENT_LENGTH = 10
MAX_MULTI_COLUMN_LINES = 3

STANDARD_SECTIONS = ("experience", "education", "skills")
MIN_STANDARD_SECTION_LENGTH = 20

MIN_WORDS = 200
MAX_WORDS = 2000


@dataclass(frozen=True)
class HeuristicCheck:
    id: str
    issue: str
    penalty: int


CHECKS = {
    check.id: check
    for check in (
        HeuristicCheck("tables", "Tables detected - may not parse correctly in ATS", 12),
        HeuristicCheck("multi_column", "Multi-column layout detected - may confuse ATS", 10),
        HeuristicCheck(
            "standard_sections",
            "Missing one or more standard sections (Experience, Education, Skills)",
            8,
        ),
        HeuristicCheck("too_short", f"Resume may be too short (less than {MIN_WORDS} words)", 5),
        HeuristicCheck(
            "too_long",
            f"Resume may be too long (over {MAX_WORDS} words) - consider condensing",
            3,
        ),
    )
}


@dataclass
class HeuristicsResult:
    score: int
    issues: list[str] = field(default_factory=list)
    passed: list[str] = field(default_factory=list)
    dismissed: list[str] = field(default_factory=list)
    issue_ids: list[str] = field(default_factory=list)


def has_tables(text: str) -> bool:
    return any(pattern.search(text) for pattern in TABLE_INDICATORS)


def has_multi_column(text: str) -> bool:
    """True when more than a few lines split into wide, text-heavy columns."""
    multi_column_lines = 0
    for line in text.splitlines():
        segments = COLUMN_GAP_PATTERN.split(line)
        if len(segments) > 1 and all(len(s.strip()) > MIN_COLUMN_SEGMENT_LENGTH for s in segments):
            multi_column_lines += 1
    return multi_column_lines > MAX_MULTI_COLUMN_LINES


def has_standard_sections(sections: Mapping[str, str]) -> bool:
    return all(
        len(sections.get(name, "")) > MIN_STANDARD_SECTION_LENGTH
        for name in STANDARD_SECTIONS
    )


def _is_dismissed(check: HeuristicCheck, dismissed: set[str]) -> bool:
    return check.id in dismissed or check.issue.lower() in dismissed


def check_ats_heuristics(resume_text: str, dismissed_issues: Iterable[str] = ()) -> HeuristicsResult:
    """
    Run every structural check and score the resume.

    Dismissed issues (matched by check id or issue text, case-insensitive) stay
    in ``issues`` but carry no penalty.
    """
    dismissed = {d.strip().lower() for d in dismissed_issues if d and d.strip()}
    sections = detect_sections(resume_text)
    words = word_count(resume_text)

    failed = []
    result = HeuristicsResult(score=100)

    if has_tables(resume_text):
        failed.append(CHECKS["tables"])
    else:
        result.passed.append("No tables detected")

    if has_multi_column(resume_text):
        failed.append(CHECKS["multi_column"])
    else:
        result.passed.append("Single-column layout")

    if not has_standard_sections(sections):
        failed.append(CHECKS["standard_sections"])
    else:
        result.passed.append("Standard sections present")

    if words < MIN_WORDS:
        failed.append(CHECKS["too_short"])
    elif words > MAX_WORDS:
        failed.append(CHECKS["too_long"])
    else:
        result.passed.append("Appropriate length")

    penalties = 0
    for check in failed:
        result.issues.append(check.issue)
        result.issue_ids.append(check.id)
        if _is_dismissed(check, dismissed):
            result.dismissed.append(check.issue)
        else:
            penalties += check.penalty

    result.score = max(ATS_HEURISTICS_FLOOR, 100 - penalties)
    return result
