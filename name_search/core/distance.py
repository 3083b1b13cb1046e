"""
Edit-distance functions.

- Levenshtein distance (rapidfuzz)
- Damerau-Levenshtein similarity, restricted to adjacent transpositions
  (rapidfuzz optimal string alignment)
- A vowel-aware Levenshtein variant used when comparing vowel patterns

Empty or missing strings never raise: distances fall back to the length of the
other string and similarities to 0.0.
"""

from __future__ import annotations

from typing import Optional

from rapidfuzz.distance import OSA, Levenshtein

PATTERN_VOWELS = "AEIOUY"

VOWEL_H_COST = 2
AI_CONFLATION_COST = 3


def levenshtein(s: Optional[str], t: Optional[str]) -> int:
    """Standard unit-cost edit distance."""
    return Levenshtein.distance(s or "", t or "")


def damerau_levenshtein_similarity(s1: Optional[str], s2: Optional[str]) -> float:
    """
    Edit similarity allowing adjacent transpositions as a single edit.

    Returns:
        1 - distance / max(len1, len2); 1.0 when both are empty, 0.0 when
        exactly one is
    """
    if not s1 and not s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    return 1.0 - OSA.distance(s1, s2) / max(len(s1), len(s2))


def _follows_vowel_h(text: str, index: int) -> bool:
    return text[index] == "H" and text[index - 1] in PATTERN_VOWELS


def _substitution_cost(s: str, t: str, i: int, j: int) -> int:
    if s[i - 1] == t[j - 1]:
        return 0
    if i < 2 or j < 2:
        return 1

    cost = 1
    if _follows_vowel_h(s, i - 1) or _follows_vowel_h(t, j - 1):
        cost = VOWEL_H_COST

    s_pair = s[i - 2:i]
    t_pair = t[j - 2:j]
    if (s_pair == "AI" and t_pair in ("AA", "AH")) or (t_pair == "AI" and s_pair in ("AA", "AH")):
        cost = AI_CONFLATION_COST
    return cost


def vowel_aware_distance(s: Optional[str], t: Optional[str]) -> int:
    """
    Levenshtein distance with heavier substitutions around vowel+H and AI.

    Substituting a character costs 2 when either side is an H right after a
    vowel, and 3 when one side reads "AI" while the other reads "AA" or "AH"
    at the same place. This keeps "Saira" away from "Sarah"/"Saara" while
    leaving ordinary one-letter differences at cost 1.

    Comparison is case-insensitive.
    """
    s = (s or "").upper()
    t = (t or "").upper()
    if not s:
        return len(t)
    if not t:
        return len(s)

    previous = list(range(len(t) + 1))
    for i in range(1, len(s) + 1):
        current = [i] + [0] * len(t)
        for j in range(1, len(t) + 1):
            current[j] = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + _substitution_cost(s, t, i, j),
            )
        previous = current
    return previous[len(t)]
