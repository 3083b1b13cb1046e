"""
String similarity metrics for short strings such as personal names.

- Jaro and Jaro-Winkler
- Phonetic similarity combining Soundex and the dual metaphone codes

Every function returns a value in [0.0, 1.0].
"""

from __future__ import annotations

from .distance import damerau_levenshtein_similarity
from .phonetics import dual_metaphone, soundex

WINKLER_PREFIX_LIMIT = 4
WINKLER_PREFIX_WEIGHT = 0.1

# Letters that commonly stand in for each other at the start of a name
PHONETIC_EQUIVALENT_GROUPS = (
    frozenset("KC"),  # Kloe / Chloe
    frozenset("FP"),  # F / PH
    frozenset("JG"),
    frozenset("SZ"),
    frozenset("AE"),
)

SILENT_H_BONUS = 0.3
SOUNDEX_MATCH = 0.6
SOUNDEX_DIGITS_MATCH = 0.4
SOUNDEX_FIRST_LETTER = 0.2
SOUNDEX_EQUIVALENT_LETTER = 0.15
METAPHONE_MATCH = 0.6
METAPHONE_PARTIAL_WEIGHT = 0.4
EQUIVALENT_START_BONUS = 0.2
G_H_SWAP_BONUS = 0.25


def jaro(s1: str, s2: str) -> float:
    """
    Jaro similarity.

    Returns 1.0 for two empty strings and 0.0 when exactly one is empty.
    Transpositions are halved without rounding, so an odd count weighs in as
    a fraction; `rapidfuzz.distance.Jaro` floors it and scores such pairs
    higher.
    """
    if not s1 and not s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    if s1 == s2:
        return 1.0

    window = max(0, max(len(s1), len(s2)) // 2 - 1)
    s1_matched = [False] * len(s1)
    s2_matched = [False] * len(s2)
    matches = 0
    for i, ch in enumerate(s1):
        for j in range(max(0, i - window), min(i + window + 1, len(s2))):
            if not s2_matched[j] and s2[j] == ch:
                s1_matched[i] = s2_matched[j] = True
                matches += 1
                break
    if not matches:
        return 0.0

    s2_chars = (ch for ch, matched in zip(s2, s2_matched) if matched)
    transpositions = sum(
        1 for ch, matched in zip(s1, s1_matched) if matched and ch != next(s2_chars)
    )
    m = float(matches)
    return (m / len(s1) + m / len(s2) + (m - transpositions / 2.0) / m) / 3.0


def jaro_winkler(s1: str, s2: str) -> float:
    """
    Jaro similarity boosted by the length of the common prefix.

    The prefix counts at most four characters, each worth 0.1 of the remaining
    distance. Unlike most library versions, the boost is applied at every Jaro
    level rather than only above 0.7.
    """
    base = jaro(s1, s2)
    prefix = 0
    for a, b in zip(s1[:WINKLER_PREFIX_LIMIT], s2[:WINKLER_PREFIX_LIMIT]):
        if a != b:
            break
        prefix += 1
    return base + prefix * WINKLER_PREFIX_WEIGHT * (1.0 - base)


def are_phonetic_equivalents(c1: str, c2: str) -> bool:
    a = c1.upper()
    b = c2.upper()
    return any(a in group and b in group for group in PHONETIC_EQUIVALENT_GROUPS)


def has_phonetic_equivalent_start(s1: str, s2: str) -> bool:
    """True when two strings start with interchangeable sounds (CH/K, K/C, F/P, ...)."""
    if not s1 or not s2:
        return False
    a = s1.upper()
    b = s2.upper()
    if (a.startswith("CH") and b.startswith("K")) or (a.startswith("K") and b.startswith("CH")):
        return True
    return are_phonetic_equivalents(a[0], b[0])


def _soundex_score(query_code: str, word_code: str) -> float:
    if query_code == word_code:
        return SOUNDEX_MATCH
    if len(query_code) < 2 or len(word_code) < 2:
        return 0.0

    score = 0.0
    if query_code[1:] == word_code[1:]:
        score += SOUNDEX_DIGITS_MATCH
    if query_code[0] == word_code[0]:
        score += SOUNDEX_FIRST_LETTER
    elif are_phonetic_equivalents(query_code[0], word_code[0]):
        score += SOUNDEX_EQUIVALENT_LETTER
    return score


def phonetic_similarity(query_word: str, word: str) -> float:
    """
    Phonetic closeness of two words.

    The score is built from bonuses:
    - Soundex: full match 0.6, otherwise 0.4 for equal digits plus 0.2 for the
      same first letter (0.15 for an equivalent one)
    - metaphone: any primary/alternate cross match 0.6, otherwise 0.4 x the best
      pairwise edit similarity of the codes, 0.2 for an equivalent start and
      0.25 for the M..G / M..H swap (Miguel / Mihel)
    - 0.3 when only `word` carries an H after a vowel and the codes are
      otherwise identical (Sara -> Sarah)

    Returns:
        The sum, clamped to [0.0, 1.0]
    """
    if not query_word or not word:
        return 0.0

    query_primary, query_alternate = dual_metaphone(query_word)
    word_primary, word_alternate = dual_metaphone(word)

    score = 0.0
    query_has_h = "H" in query_primary or "H" in query_alternate
    word_has_h = "H" in word_primary or "H" in word_alternate
    if word_has_h and not query_has_h:
        if (
            query_primary.replace("H", "") == word_primary.replace("H", "")
            or query_alternate.replace("H", "") == word_alternate.replace("H", "")
        ):
            score += SILENT_H_BONUS

    score += _soundex_score(soundex(query_word), soundex(word))

    if {word_primary, word_alternate} & {query_primary, query_alternate}:
        score += METAPHONE_MATCH
    else:
        best = max(
            damerau_levenshtein_similarity(word_primary, query_primary),
            damerau_levenshtein_similarity(word_alternate, query_alternate),
            damerau_levenshtein_similarity(word_primary, query_alternate),
            damerau_levenshtein_similarity(word_alternate, query_primary),
        )
        score += METAPHONE_PARTIAL_WEIGHT * best

        if has_phonetic_equivalent_start(word_primary, query_primary):
            score += EQUIVALENT_START_BONUS

        if (
            len(word_primary) > 2
            and len(query_primary) > 2
            and word_primary[0] == "M"
            and query_primary[0] == "M"
        ):
            upper_query = query_word.upper()
            upper_word = word.upper()
            if ("G" in upper_word and "H" in upper_query) or ("H" in upper_word and "G" in upper_query):
                score += G_H_SWAP_BONUS

    return min(1.0, max(0.0, score))
