"""
Semantic similarity between a resume and a job description.

Four lexical signals are blended:
- TF-IDF cosine similarity over the two-document corpus
- Jaccard overlap of significant tokens
- Longest common subsequence ratio of token sequences
- Jaccard overlap of adjacent-token bigrams

IDF is computed from the resume/job pair only. Terms that appear in just one
of the two texts therefore carry more weight than shared ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from scipy.sparse import spmatrix
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import cosine_similarity

from app.services.calibration import (
    SEMANTIC_CURVE,
    SEMANTIC_SIGNAL_WEIGHTS,
    apply_boost_curve,
    clamp_score,
)
from app.services.nlp_utils import clean_text, is_stopword, tokenize

# LCS is quadratic; longer sequences are truncated to this many tokens.
LCS_TOKEN_LIMIT = 100


@dataclass
class SimilarityBreakdown:
    tfidf_cosine: float
    jaccard: float
    lcs_ratio: float
    bigram_overlap: float
    raw_score: float  # 0-100, before the boost curve
    score: int  # 0-100, boosted


def significant_tokens(text: str) -> list[str]:
    return [t for t in tokenize(clean_text(text)) if len(t) > 1 and not is_stopword(t)]


def fit_tfidf(texts: Sequence[str]) -> tuple[TfidfVectorizer, spmatrix]:
    """
    Fit TF-IDF over ``texts`` alone and return the vectorizer and its matrix.

    Uses smoothed IDF, ``ln((n + 1) / (df + 1)) + 1``, on ``significant_tokens``.

    Raises:
        ValueError: if no text contains a significant token
    """
    vectorizer = TfidfVectorizer(
        tokenizer=significant_tokens,
        lowercase=False,
        token_pattern=None,
        smooth_idf=True,
    )
    matrix = vectorizer.fit_transform(list(texts))
    return vectorizer, matrix


def tfidf_cosine_similarity(text1: str, text2: str) -> float:
    try:
        _, matrix = fit_tfidf([text1, text2])
    except ValueError:
        # Empty vocabulary
        return 0.0
    return float(cosine_similarity(matrix[0:1], matrix[1:2])[0][0])


def jaccard_similarity(a: set, b: set) -> float:
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def _bigram_set(tokens: Sequence[str]) -> set[str]:
    return {f"{tokens[i]} {tokens[i + 1]}" for i in range(len(tokens) - 1)}


def bigram_similarity(tokens1: Sequence[str], tokens2: Sequence[str]) -> float:
    bigrams1 = _bigram_set(tokens1)
    bigrams2 = _bigram_set(tokens2)
    if not bigrams1 or not bigrams2:
        return 0.0
    return jaccard_similarity(bigrams1, bigrams2)


def _lcs_table(seq1: Sequence[str], seq2: Sequence[str]) -> int:
    m, n = len(seq1), len(seq2)
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if seq1[i - 1] == seq2[j - 1]:
                dp[i][j] = dp[i - 1][j - 1] + 1
            else:
                dp[i][j] = max(dp[i - 1][j], dp[i][j - 1])
    return dp[m][n]


def _lcs_rolling(seq1: Sequence[str], seq2: Sequence[str]) -> int:
    n = len(seq2)
    prev = [0] * (n + 1)
    curr = [0] * (n + 1)
    for i in range(1, len(seq1) + 1):
        for j in range(1, n + 1):
            if seq1[i - 1] == seq2[j - 1]:
                curr[j] = prev[j - 1] + 1
            else:
                curr[j] = max(prev[j], curr[j - 1])
        prev, curr = curr, prev
    return prev[n]


def lcs_length(seq1: Sequence[str], seq2: Sequence[str]) -> int:
    """Longest common subsequence length, truncating both sides past the limit."""
    if len(seq1) > LCS_TOKEN_LIMIT or len(seq2) > LCS_TOKEN_LIMIT:
        return _lcs_rolling(seq1[:LCS_TOKEN_LIMIT], seq2[:LCS_TOKEN_LIMIT])
    return _lcs_table(seq1, seq2)


def lcs_similarity(tokens1: Sequence[str], tokens2: Sequence[str]) -> float:
    if not tokens1 or not tokens2:
        return 0.0
    # Normalised by the untruncated length, so very long texts stay conservative.
    return lcs_length(tokens1, tokens2) / max(len(tokens1), len(tokens2))


def boost_similarity(raw_score: float) -> int:
    return clamp_score(apply_boost_curve(raw_score, SEMANTIC_CURVE))


def semantic_similarity(resume_text: str, job_description: str) -> SimilarityBreakdown:
    """Blend the four similarity signals and apply the semantic boost curve."""
    resume_tokens = significant_tokens(resume_text)
    job_tokens = significant_tokens(job_description)

    signals = {
        "tfidf_cosine": tfidf_cosine_similarity(resume_text, job_description),
        "jaccard": jaccard_similarity(set(resume_tokens), set(job_tokens)),
        "lcs_ratio": lcs_similarity(resume_tokens, job_tokens),
        "bigram_overlap": bigram_similarity(resume_tokens, job_tokens),
    }
    raw_score = 100 * sum(signals[name] * weight for name, weight in SEMANTIC_SIGNAL_WEIGHTS.items())

    return SimilarityBreakdown(
        raw_score=raw_score,
        score=boost_similarity(raw_score),
        **signals,
    )
