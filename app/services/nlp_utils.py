"""Lightweight text normalization utilities for ATS scoring.

Everything here is a pure function over strings so the scorer can be shared
between requests. It provides:
- Whitespace cleaning
- Tokenization
- Stopword filtering (grammar words plus generic resume vocabulary)
- Sentence splitting
- Action verb and quantification detection
"""

from __future__ import annotations

import re


STOPWORDS = frozenset({
    # Articles
    "a", "an", "the",
    # Conjunctions
    "and", "but", "or", "nor", "for", "yet", "so",
    # Prepositions
    "in", "on", "at", "to", "from", "by", "with", "about", "as", "into",
    "through", "during", "before", "after", "above", "below", "between",
    "under", "over", "of", "off", "up", "down", "out",
    # Pronouns
    "i", "you", "he", "she", "it", "we", "they", "me", "him", "her",
    "us", "them", "my", "your", "his", "its", "our", "their", "mine",
    "yours", "hers", "ours", "theirs", "this", "that", "these", "those",
    "who", "whom", "whose", "which", "what",
    # Auxiliary verbs
    "is", "am", "are", "was", "were", "be", "been", "being", "have",
    "has", "had", "do", "does", "did", "will", "would", "should",
    "could", "may", "might", "must", "can", "shall",
    # Common function words
    "not", "no", "yes", "if", "when", "where", "why", "how", "all",
    "each", "every", "both", "few", "more", "most", "other", "some",
    "such", "than", "too", "very", "just", "now", "then", "there",
    "here", "well", "only", "also", "again", "however", "therefore",
    # Document furniture
    "resume", "cv", "curriculum", "vitae", "page", "email", "phone",
    "address", "linkedin", "github", "portfolio",
})

# Structural resume vocabulary. Meaningful as headers, useless as keywords.
COMMON_RESUME_WORDS = frozenset({
    "experience", "education", "skills", "summary", "objective",
    "professional", "work", "history", "responsibilities", "duties",
    "accomplishments", "achievements", "position", "role", "title",
    "company", "organization", "university", "college", "school",
    "degree", "certification", "certificate", "award", "honor",
    "references", "available", "upon", "request",
})

ACTION_VERBS = (
    "achieved", "administrated", "analyzed", "architected", "built",
    "collaborated", "created", "delivered", "designed", "developed",
    "directed", "engineered", "enhanced", "established", "executed",
    "facilitated", "founded", "generated", "implemented", "improved",
    "increased", "introduced", "launched", "led", "managed", "optimized",
    "organized", "performed", "planned", "produced", "programmed", "reduced",
    "resolved", "spearheaded", "streamlined", "strengthened",
)

WHITESPACE_PATTERN = re.compile(r"\s+")
NON_TOKEN_PATTERN = re.compile(r"[^\w\s-]")
SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+|\n")
BULLET_PREFIX_PATTERN = re.compile(r"^[-*•▪●\s]+")
ACTION_VERB_PATTERN = re.compile(
    r"^(" + "|".join(ACTION_VERBS) + r")\b",
    re.IGNORECASE,
)
QUANTIFICATION_PATTERN = re.compile(
    r"\b\d+(?:[,.]\d+)*\s*"
    r"(%|percent|million|thousand|billion|k|m|b|x|times|hours?|days?|weeks?|months?|years?)"
    r"(?!\w)",
    re.IGNORECASE,
)


def clean_text(text: str) -> str:
    """Collapse every whitespace run (CR, LF and tabs included) into one space."""
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def tokenize(text: str) -> list[str]:
    """Lower-case and split text into word tokens, keeping hyphenated words."""
    return NON_TOKEN_PATTERN.sub(" ", text.lower()).split()


def is_stopword(token: str) -> bool:
    lower = token.lower()
    return lower in STOPWORDS or lower in COMMON_RESUME_WORDS


def word_count(text: str) -> int:
    return len(text.split())


def extract_sentences(text: str) -> list[str]:
    sentences = (s.strip() for s in SENTENCE_SPLIT_PATTERN.split(text))
    return [s for s in sentences if s]


def extract_action_verbs(text: str) -> list[str]:
    """Return the action verbs that open a sentence or bullet, in document order."""
    verbs = []
    for sentence in extract_sentences(text):
        match = ACTION_VERB_PATTERN.match(BULLET_PREFIX_PATTERN.sub("", sentence))
        if match:
            verbs.append(match.group(1).lower())
    return verbs


def has_quantification(text: str) -> bool:
    """True when the text contains a number with a unit (40%, 3 years, 2x, ...)."""
    return QUANTIFICATION_PATTERN.search(text) is not None
