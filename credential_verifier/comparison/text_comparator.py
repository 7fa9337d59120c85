"""Deterministic text similarity with a numeric tampering penalty.

Character-level Levenshtein similarity is the primary signal because a
single changed grade digit or name letter barely moves word overlap.
Numbers (dates, grades, IDs, years) are compared as a multiset on the raw
text; every value whose count differs costs a fixed number of points.
"""

import re
from collections import Counter

from rapidfuzz.distance import Levenshtein

from credential_verifier.comparison.models import (
    NumericMismatch,
    SimilarityResult,
    WordStatistics,
)

NUMERIC_PENALTY_PER_MISMATCH = 7.0
MAX_NUMERIC_PENALTY = 50.0
METRIC_DIVERGENCE_THRESHOLD = 5.0
MAX_UNIQUE_WORDS = 50
MIN_UNIQUE_WORD_LENGTH = 3

_WHITESPACE_RE = re.compile(r"\s+")
_NUMBER_RE = re.compile(r"\d+\.?\d*")


def normalize_for_comparison(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text.lower()).strip()


def extract_numeric_tokens(text: str) -> list[str]:
    """Numeric substrings in order of appearance.

    A sentence-ending period ("in 2024.") is not part of the number.
    """
    return [token.rstrip(".") for token in _NUMBER_RE.findall(text)]


def character_similarity(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 100.0
    distance = Levenshtein.distance(a, b)
    return round((1 - distance / longest) * 100, 2)


def word_similarity(words_a: list[str], words_b: list[str]) -> float:
    longest = max(len(words_a), len(words_b))
    if longest == 0:
        return 100.0
    overlap = sum((Counter(words_a) & Counter(words_b)).values())
    return round(overlap / longest * 100, 2)


def numeric_mismatches(reference_text: str, candidate_text: str) -> list[NumericMismatch]:
    reference_counts = Counter(extract_numeric_tokens(reference_text))
    candidate_counts = Counter(extract_numeric_tokens(candidate_text))
    mismatches: list[NumericMismatch] = []
    # Counter preserves first-seen order; reference values are reported first.
    for value in dict.fromkeys([*reference_counts, *candidate_counts]):
        in_reference = reference_counts.get(value, 0)
        in_candidate = candidate_counts.get(value, 0)
        if in_reference != in_candidate:
            mismatches.append(NumericMismatch(value, in_reference, in_candidate))
    return mismatches


def numeric_penalty(mismatch_count: int) -> float:
    return min(NUMERIC_PENALTY_PER_MISMATCH * mismatch_count, MAX_NUMERIC_PENALTY)


def _unique_words(words: list[str], other: set[str]) -> list[str]:
    unique = [w for w in words if w not in other and len(w) >= MIN_UNIQUE_WORD_LENGTH]
    return unique[:MAX_UNIQUE_WORDS]


def compare(reference_text: str, candidate_text: str) -> SimilarityResult:
    """Score how closely *candidate_text* matches *reference_text*. Pure, no I/O."""
    reference = normalize_for_comparison(reference_text)
    candidate = normalize_for_comparison(candidate_text)
    reference_words = reference.split()
    candidate_words = candidate.split()

    char_score = character_similarity(reference, candidate)
    word_score = word_similarity(reference_words, candidate_words)

    mismatches = numeric_mismatches(reference_text, candidate_text)
    penalty = numeric_penalty(len(mismatches))
    final_score = max(0.0, round(char_score - penalty, 2))

    reference_set = set(reference_words)
    candidate_set = set(candidate_words)
    common = sum(1 for w in reference_words if w in candidate_set)
    removed = [w for w in reference_words if w not in candidate_set]
    added = [w for w in candidate_words if w not in reference_set]

    return SimilarityResult(
        final_similarity=final_score,
        character_similarity=char_score,
        word_similarity=word_score,
        numeric_penalty=penalty,
        numeric_mismatches=mismatches,
        unique_to_reference=_unique_words(reference_words, candidate_set),
        unique_to_candidate=_unique_words(candidate_words, reference_set),
        potential_tampering=(
            abs(char_score - word_score) > METRIC_DIVERGENCE_THRESHOLD or bool(mismatches)
        ),
        word_statistics=WordStatistics(
            total_reference=len(reference_words),
            total_candidate=len(candidate_words),
            common=common,
            removed=len(removed),
            added=len(added),
        ),
    )
