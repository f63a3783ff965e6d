"""Required and preferred skill detection from job descriptions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Sequence

from app.services.nlp_utils import clean_text

REQUIRED_SKILL_MARKERS = tuple(re.compile(p, re.IGNORECASE) for p in (
    r"required\s+(?:skills?|qualifications?|experience)",
    r"must\s+have",
    r"minimum\s+(?:qualifications?|requirements?)",
    r"essential\s+skills?",
    r"mandatory",
    r"necessary\s+skills?",
))

PREFERRED_SKILL_MARKERS = tuple(re.compile(p, re.IGNORECASE) for p in (
    r"preferred\s+(?:skills?|qualifications?)",
    r"nice\s+to\s+have",
    r"\bbonus\b",
    r"\ba\s+plus\b",
    r"\bdesired\b",
))

# Characters after the end of a marker that are examined for skills
SKILL_WINDOW_SIZE = 500

SKILL_DELIMITER_PATTERN = re.compile(
    r"[•▪●*;:,\n]"  # bullets, list separators
    r"|\s[-–]\s"  # dash bullets
    r"|\.(?=\s|$)"  # sentence ends, but not "node.js"
    r"|\s(?:and|or)\s",
    re.IGNORECASE,
)
SKILL_CANDIDATE_PATTERN = re.compile(r"^([A-Za-z0-9][A-Za-z0-9\s.+#\-]{1,49}?)\s*(?:\(|$)")
YEARS_REQUIREMENT_PATTERN = re.compile(r"^\d+\+?\s*(?:years?|yrs?)\b", re.IGNORECASE)

NON_SKILL_WORDS = frozenset({
    "the", "and", "or", "with", "for", "experience", "year", "years",
    "minimum", "required", "skills", "qualifications", "requirements",
})

MIN_CANDIDATE_LENGTH = 3
MAX_CANDIDATE_LENGTH = 100

# Each group lists interchangeable spellings of one skill.
SKILL_ALIAS_GROUPS = (
    ("javascript", "js", "java script"),
    ("typescript", "ts", "type script"),
    ("reactjs", "react", "react.js"),
    ("nodejs", "node", "node.js"),
    ("python", "py"),
    ("c++", "cpp", "c plus plus"),
    ("c#", "csharp", "c sharp"),
    ("sql", "structured query language"),
    ("nosql", "no sql", "no-sql"),
    ("machine learning", "ml"),
    ("artificial intelligence", "ai"),
    ("continuous integration", "ci"),
    ("continuous deployment", "cd"),
    ("kubernetes", "k8s"),
    ("postgresql", "postgres"),
)


@dataclass
class SkillCoverage:
    covered: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


@lru_cache(maxsize=256)
def _term_pattern(term: str) -> re.Pattern:
    return re.compile(r"(?<![\w+#])" + re.escape(term) + r"(?![\w+#])")


def _contains_term(text: str, term: str) -> bool:
    return _term_pattern(term).search(text) is not None


def _is_marker(text: str) -> bool:
    return any(m.search(text) for m in REQUIRED_SKILL_MARKERS + PREFERRED_SKILL_MARKERS)


def extract_skill_candidates(window: str) -> list[str]:
    """Split a text window into short, skill-like list items."""
    skills = []
    for item in SKILL_DELIMITER_PATTERN.split(window):
        trimmed = item.strip()
        if not MIN_CANDIDATE_LENGTH <= len(trimmed) <= MAX_CANDIDATE_LENGTH:
            continue

        match = SKILL_CANDIDATE_PATTERN.match(trimmed)
        if not match:
            continue

        skill = match.group(1).strip().lower()
        if skill in NON_SKILL_WORDS or YEARS_REQUIREMENT_PATTERN.match(skill):
            continue
        skills.append(skill)
    return skills


def _extract_skills_near_markers(text: str, markers: Sequence[re.Pattern]) -> list[str]:
    cleaned = clean_text(text)
    skills: dict[str, None] = {}

    for marker in markers:
        for match in marker.finditer(cleaned):
            window = cleaned[match.end():match.end() + SKILL_WINDOW_SIZE]
            for skill in extract_skill_candidates(window):
                # The window can run into the next marker ("... Must have: ...")
                if not _is_marker(skill):
                    skills.setdefault(skill)

    return list(skills)


def detect_required_skills(job_description: str) -> list[str]:
    return _extract_skills_near_markers(job_description, REQUIRED_SKILL_MARKERS)


def detect_preferred_skills(job_description: str) -> list[str]:
    return _extract_skills_near_markers(job_description, PREFERRED_SKILL_MARKERS)


def generate_skill_variations(skill: str) -> list[str]:
    """Return the skill followed by every known alias of the groups it belongs to."""
    lower_skill = skill.lower()
    variations = {lower_skill: None}
    for group in SKILL_ALIAS_GROUPS:
        if any(_contains_term(lower_skill, alias) for alias in group):
            for alias in group:
                variations.setdefault(alias)
    return list(variations)


def check_skills_coverage(resume_text: str, skills: Sequence[str]) -> SkillCoverage:
    """
    Check which skills the resume mentions.

    The skill's own text is matched as a substring; aliases must appear as
    whole words so that short forms like "js" or "ai" do not match inside
    unrelated words.
    """
    lower_resume = resume_text.lower()
    coverage = SkillCoverage()

    for skill in skills:
        variations = generate_skill_variations(skill)
        found = variations[0] in lower_resume or any(
            _contains_term(lower_resume, alias) for alias in variations[1:]
        )
        if found:
            coverage.covered.append(skill)
        else:
            coverage.missing.append(skill)

    return coverage
