"""Keyword extraction from job descriptions and matching against resumes."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from app.services.ngrams import extract_all_ngrams
from app.services.nlp_utils import clean_text, word_count

DEFAULT_KEYWORD_COUNT = 40


@dataclass
class KeywordMatches:
    matched: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


@dataclass
class KeywordOccurrence:
    """A job keyword with its frequency and character offsets in the cleaned text."""
    keyword: str
    frequency: int
    positions: list[int] = field(default_factory=list)


def extract_keywords(job_description: str, count: int = DEFAULT_KEYWORD_COUNT) -> list[str]:
    """Extract the top ``count`` keywords and phrases from a job description."""
    return [ng.text for ng in extract_all_ngrams(clean_text(job_description), count)]


def extract_keywords_with_data(text: str, count: int = DEFAULT_KEYWORD_COUNT) -> list[KeywordOccurrence]:
    cleaned = clean_text(text)
    lower_text = cleaned.lower()
    occurrences = []

    for ng in extract_all_ngrams(cleaned, count):
        positions = []
        pos = lower_text.find(ng.text)
        while pos != -1:
            positions.append(pos)
            pos = lower_text.find(ng.text, pos + len(ng.text))
        occurrences.append(KeywordOccurrence(keyword=ng.text, frequency=ng.count, positions=positions))

    return occurrences


def filter_excluded(keywords: Sequence[str], excluded: Iterable[str]) -> list[str]:
    """Drop user-excluded keywords (case-insensitive), keeping the original order."""
    excluded_set = {k.strip().lower() for k in excluded if k and k.strip()}
    if not excluded_set:
        return list(keywords)
    return [k for k in keywords if k.lower() not in excluded_set]


def has_keyword(resume_text: str, keyword: str) -> bool:
    return keyword.lower() in resume_text.lower()


def count_keyword_matches(resume_text: str, keywords: Sequence[str]) -> KeywordMatches:
    """Partition keywords into those present in the resume and those missing."""
    lower_resume = resume_text.lower()
    result = KeywordMatches()
    for keyword in keywords:
        if keyword.lower() in lower_resume:
            result.matched.append(keyword)
        else:
            result.missing.append(keyword)
    return result


def count_occurrences(text: str, keyword: str) -> int:
    if not keyword:
        return 0
    return len(re.findall(re.escape(keyword.lower()), text.lower()))


def calculate_keyword_density(text: str, keywords: Sequence[str]) -> float:
    """Keyword occurrences per word of ``text``; 0.0 for text without words."""
    words = word_count(text)
    if words == 0:
        return 0.0
    return sum(count_occurrences(text, k) for k in keywords) / words
