"""
Resume section segmentation and per-section quality analysis.

A section starts at a header line such as "Experience" or "Technical Skills:"
and runs until the next header. Header lines are consumed; everything before
the first header belongs to the ``header`` bucket (name, contact details).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal, Sequence

from app.services.keywords import count_occurrences
from app.services.nlp_utils import extract_action_verbs, has_quantification

SectionName = Literal[
    "header", "summary", "experience", "education", "skills", "certifications", "projects"
]
SectionQuality = Literal["good", "medium", "poor", "unknown"]

DEFAULT_SECTION: SectionName = "header"

# Longer lines are body text even if they mention a section word.
MAX_HEADER_LENGTH = 30

SECTION_PATTERNS: tuple[tuple[SectionName, re.Pattern], ...] = tuple(
    (name, re.compile(r"^\s*(?:" + alternatives + r")\s*:?\s*$", re.IGNORECASE))
    for name, alternatives in (
        ("summary", r"(?:professional\s+)?summary|(?:career\s+)?objective|(?:professional\s+)?profile"),
        ("experience", r"(?:work\s+|professional\s+)?experience|employment(?:\s+history)?|work\s+history"),
        ("education", r"education|academic\s+background"),
        ("skills", r"(?:technical\s+|core\s+)?skills|(?:core\s+)?competencies|expertise"),
        ("certifications", r"certifications?|licen[sc]es?"),
        ("projects", r"projects?|portfolio"),
    )
)

# Section analysis quality thresholds
MIN_WORDS_FOR_QUALITY = 20
GOOD_KEYWORD_COUNT = 5
MEDIUM_KEYWORD_COUNT = 2
SUGGESTED_KEYWORDS_PER_SECTION = 5


@dataclass
class SectionSpan:
    """One contiguous section: its header line (None for the leading bucket) and body lines."""
    name: SectionName
    header: str | None
    lines: list[str] = field(default_factory=list)

    @property
    def content(self) -> str:
        return "\n".join(self.lines).strip()


@dataclass
class SectionAnalysis:
    word_count: int
    keyword_count: int
    keyword_density: float
    has_action_verbs: bool
    has_quantification: bool
    quality: SectionQuality
    found_keywords: list[str] = field(default_factory=list)
    suggested_keywords: list[str] = field(default_factory=list)


def match_section_header(line: str) -> SectionName | None:
    if len(line.strip()) >= MAX_HEADER_LENGTH:
        return None
    for name, pattern in SECTION_PATTERNS:
        if pattern.match(line):
            return name
    return None


def segment_sections(text: str) -> list[SectionSpan]:
    """Split resume text into ordered spans at recognised header lines."""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    spans = [SectionSpan(name=DEFAULT_SECTION, header=None)]

    for line in normalized.split("\n"):
        name = match_section_header(line)
        if name is None:
            spans[-1].lines.append(line)
        else:
            spans.append(SectionSpan(name=name, header=line))

    return spans


def reconstruct(spans: Sequence[SectionSpan]) -> str:
    """Join header lines and body lines back into the newline-normalised text."""
    lines: list[str] = []
    for span in spans:
        if span.header is not None:
            lines.append(span.header)
        lines.extend(span.lines)
    return "\n".join(lines)


def detect_sections(text: str) -> dict[str, str]:
    """
    Map section name to its trimmed content.

    Repeated sections (two "Experience" headers) are joined in document order.
    Sections with no content are left out.
    """
    sections: dict[str, str] = {}
    for span in segment_sections(text):
        content = span.content
        if not content:
            continue
        if span.name in sections:
            sections[span.name] = f"{sections[span.name]}\n{content}"
        else:
            sections[span.name] = content
    return sections


def _quality(word_count: int, keyword_count: int) -> SectionQuality:
    if word_count <= MIN_WORDS_FOR_QUALITY:
        return "unknown"
    if keyword_count >= GOOD_KEYWORD_COUNT:
        return "good"
    if keyword_count >= MEDIUM_KEYWORD_COUNT:
        return "medium"
    return "poor"


def analyze_section(text: str, keywords: Sequence[str]) -> SectionAnalysis:
    lower_text = text.lower()
    found = [k for k in keywords if k.lower() in lower_text]
    words = len(text.split())

    return SectionAnalysis(
        word_count=words,
        keyword_count=len(found),
        keyword_density=len(found) / words if words else 0.0,
        has_action_verbs=bool(extract_action_verbs(text)),
        has_quantification=has_quantification(text),
        quality=_quality(words, len(found)),
        found_keywords=found,
        suggested_keywords=[k for k in keywords if k not in found][:SUGGESTED_KEYWORDS_PER_SECTION],
    )


def analyze_sections(resume_text: str, keywords: Sequence[str]) -> dict[str, SectionAnalysis]:
    return {
        name: analyze_section(text, keywords)
        for name, text in detect_sections(resume_text).items()
    }


def section_keyword_occurrences(text: str, keywords: Sequence[str]) -> int:
    """Total keyword occurrences in a section, counting repeats."""
    return sum(count_occurrences(text, k) for k in keywords)
