"""N-gram mining for job description keyword extraction."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Literal

from app.services.nlp_utils import is_stopword, tokenize

NGramKind = Literal["unigram", "bigram", "trigram"]

MIN_TOKEN_LENGTH = 3
# Phrases seen only once are noise, single words are always kept.
MIN_PHRASE_COUNT = 2

NGRAM_WEIGHTS: dict[NGramKind, int] = {
    "trigram": 3,
    "bigram": 2,
    "unigram": 1,
}


@dataclass(frozen=True)
class NGram:
    text: str
    count: int
    kind: NGramKind


def _is_candidate(token: str) -> bool:
    return len(token) >= MIN_TOKEN_LENGTH and not is_stopword(token)


def _ranked(counts: Counter, kind: NGramKind) -> list[NGram]:
    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [NGram(text=text, count=count, kind=kind) for text, count in ranked]


def _extract_phrases(text: str, size: int, kind: NGramKind) -> list[NGram]:
    tokens = tokenize(text)
    counts: Counter = Counter()
    for i in range(len(tokens) - size + 1):
        window = tokens[i:i + size]
        if all(_is_candidate(token) for token in window):
            counts[" ".join(window)] += 1

    frequent = Counter({phrase: n for phrase, n in counts.items() if n >= MIN_PHRASE_COUNT})
    return _ranked(frequent, kind)


def extract_unigrams(text: str) -> list[NGram]:
    counts: Counter = Counter(t for t in tokenize(text) if _is_candidate(t))
    return _ranked(counts, "unigram")


def extract_bigrams(text: str) -> list[NGram]:
    return _extract_phrases(text, 2, "bigram")


def extract_trigrams(text: str) -> list[NGram]:
    return _extract_phrases(text, 3, "trigram")


def extract_all_ngrams(text: str, max_count: int = 40) -> list[NGram]:
    """
    Merge unigrams, bigrams and trigrams ranked by ``count * kind weight``.

    Longer phrases get a higher multiplier so a repeated trigram outranks the
    single words it is made of. Candidates with equal weight keep the merge
    order (trigrams first, then bigrams, then unigrams); there is no other
    tie-break.
    """
    merged = extract_trigrams(text) + extract_bigrams(text) + extract_unigrams(text)
    merged.sort(key=lambda ng: ng.count * NGRAM_WEIGHTS[ng.kind], reverse=True)
    return merged[:max_count]
