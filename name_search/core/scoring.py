"""
Composite name scoring.

Combines the individual metrics into the two scores the search ranks by:

- `single_part_score`: a query term against every part of a candidate name
- `composite_name_score`: a multi-part query against a multi-part candidate,
  routed through the regional heuristics

The constants below are calibration points tuned against known name variants,
not derived values. Keep them named so they can be revisited together.
"""

from __future__ import annotations

from typing import Sequence

from .distance import damerau_levenshtein_similarity
from .normalize import name_parts, strip_titles
from .patterns import detect_transliteration_pattern, vowel_pattern, vowel_pattern_similarity
from .regional import (
    Region,
    arabic_similarity,
    classify_region,
    hispanic_similarity,
    is_hispanic_name,
    is_transliteration_equivalent,
)
from .similarity import jaro_winkler, phonetic_similarity

# Acceptance threshold for ranked stages (strictly greater than)
ACCEPTANCE_THRESHOLD = 0.4
# A query part counts as matched above this composite part score
PART_MATCH_THRESHOLD = 0.75
# Incomplete coverage divides by part count times this factor
INCOMPLETE_COVERAGE_PENALTY = 1.5

TRANSLITERATION_SCORE = 0.95
TRANSLITERATION_BONUS = 0.10
REMAP_BOOST = 0.9

PHONETIC_WEIGHT = 0.25
EDIT_WEIGHT = 0.20
JARO_WINKLER_WEIGHT = 0.20
VOWEL_WEIGHT = 0.15
REGIONAL_WEIGHT = 0.20

# Below every floor a part is unrelated and ignored
PHONETIC_FLOOR = 0.1
EDIT_FLOOR = 0.1
JARO_WINKLER_FLOOR = 0.3
REGIONAL_FLOOR = 0.2
VOWEL_FLOOR = 0.3


def clamp(score: float) -> float:
    return min(1.0, max(0.0, score))


def _score_part(term: str, part: str, hispanic: bool) -> float:
    phonetic = phonetic_similarity(term, part)
    edit = damerau_levenshtein_similarity(term, part)
    winkler = jaro_winkler(term, part)
    vowels = vowel_pattern_similarity(vowel_pattern(term), vowel_pattern(part))
    regional = hispanic_similarity(term, part) if hispanic else 0.0

    if (
        phonetic < PHONETIC_FLOOR
        and edit < EDIT_FLOOR
        and winkler < JARO_WINKLER_FLOOR
        and regional < REGIONAL_FLOOR
        and vowels < VOWEL_FLOOR
    ):
        return 0.0

    return (
        phonetic * PHONETIC_WEIGHT
        + edit * EDIT_WEIGHT
        + winkler * JARO_WINKLER_WEIGHT
        + vowels * VOWEL_WEIGHT
        + regional * REGIONAL_WEIGHT
    )


def single_part_score(term: str, candidate: str) -> float:
    """
    Score a query term against the best-matching part of a candidate name.

    A part that is a transliteration of the term short-circuits to 0.95.
    Otherwise each part gets a weighted blend of phonetic, edit, Jaro-Winkler
    and vowel-pattern similarity (plus the Hispanic G/H score when either side
    looks Hispanic), and the best part wins.

    Args:
        term: Lowercased, normalized query text
        candidate: Candidate name as given

    Returns:
        Score in [0.0, 1.0]; 0.0 when either side is empty
    """
    parts = name_parts(candidate)
    if not term or not parts:
        return 0.0

    if any(is_transliteration_equivalent(term, part) for part in parts):
        return TRANSLITERATION_SCORE

    hispanic = is_hispanic_name(term) or any(is_hispanic_name(part) for part in parts)
    return clamp(max(_score_part(term, part, hispanic) for part in parts))


def transliteration_aware_similarity(word1: str, word2: str) -> float:
    """Jaro-Winkler plus 0.10 when the words look like transliteration variants, capped at 1.0."""
    score = jaro_winkler(word1, word2)
    if detect_transliteration_pattern(word1, word2):
        score += TRANSLITERATION_BONUS
    return min(1.0, score)


def _generic_composite(query_parts: Sequence[str], candidate_parts: Sequence[str]) -> float:
    total = 0.0
    matched = 0
    for query_part in query_parts:
        best = max(transliteration_aware_similarity(query_part, part) for part in candidate_parts)
        if best > PART_MATCH_THRESHOLD:
            total += best
            matched += 1

    if matched < len(query_parts):
        return total / (len(query_parts) * INCOMPLETE_COVERAGE_PENALTY)
    return total / len(query_parts)


def composite_name_score(query: str, candidate: str) -> float:
    """
    Score a multi-part query against a candidate name.

    Titles are removed from both sides first ("Mr. Michael Johnson" compares as
    "michael johnson"). When both sides look Hispanic the G/H heuristic decides,
    when both look Arabic the Arabic heuristic decides; otherwise each query
    part takes its best transliteration-aware similarity among the candidate
    parts, parts above 0.75 count as matched, and incomplete coverage is
    penalized.

    A Hispanic score of 0.0 means the pattern did not apply and generic scoring
    is used instead.

    Args:
        query: Query text as given
        candidate: Candidate name as given

    Returns:
        Score in [0.0, 1.0]
    """
    query_parts = strip_titles(name_parts(query))
    candidate_parts = strip_titles(name_parts(candidate))
    if not query_parts or not candidate_parts:
        return 0.0

    query_name = " ".join(query_parts)
    candidate_name = " ".join(candidate_parts)
    region = classify_region(
        query_name,
        candidate_name,
        query_raw=_raw_without_titles(query),
        candidate_raw=_raw_without_titles(candidate),
    )

    if region is Region.HISPANIC:
        score = hispanic_similarity(query_name, candidate_name)
        if score > 0.0:
            return clamp(score)
    elif region is Region.ARABIC:
        return clamp(arabic_similarity(query_name, candidate_name))

    return clamp(_generic_composite(query_parts, candidate_parts))


def _raw_without_titles(text: str) -> str:
    """Collapse whitespace but keep hyphens, so Arabic markers like "al-" survive."""
    return " ".join(strip_titles(text.split()))
