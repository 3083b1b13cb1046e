"""
Regional name heuristics.

Some name families vary in predictable ways when written in Latin script:

- Hispanic names swap G and H ("Miguel" / "Mihel")
- Arabic names drift between vowels ("Ahmed" / "Ahmad") and between a doubled
  vowel and vowel+H ("Saara" / "Sarah")
- South Asian names swap Y and I ("Sayra" / "Saira")

Routing between the specialized scorers is a closed set of variants, modelled
by `Region`.
"""

from __future__ import annotations

from enum import Enum

from .distance import PATTERN_VOWELS, damerau_levenshtein_similarity
from .patterns import consonant_pattern, consonant_structure_similarity, vowel_pattern, vowel_pattern_similarity

KNOWN_TRANSLITERATIONS = frozenset({
    frozenset({"sayra", "saira"}),
})
Y_I_SIMILARITY_BAR = 0.7

HISPANIC_PREFIXES = ("MI", "MA", "JO", "JU", "CA", "LU", "RO", "RA")
HISPANIC_INFIXES = ("GL", "GU", "RR", "LL", "NZ", "CH")
HISPANIC_SUFFIXES = ("EZ", "ES", "OS", "AS", "IO", "IA", "EL")

HISPANIC_G_H_STRONG = 0.9
HISPANIC_G_H_WEAK = 0.7
HISPANIC_RESIDUAL_BAR = 0.7

ARABIC_MARKERS = ("al-", "el-")
ARABIC_PREFIXES = ("bin ", "ibn ")

ARABIC_LENGTH_GATE = 3
ARABIC_CONSONANT_LENGTH_GATE = 2
ARABIC_VOWEL_H_MATCH = 0.85
ARABIC_VOWEL_H_MISMATCH = 0.1
ARABIC_CONSONANT_BAR = 0.7
ARABIC_VOWEL_MATCH = 0.9
ARABIC_VOWEL_COUNT_MATCH = 0.7

ARABIC_VOWEL_GROUPS = str.maketrans({"A": "1", "E": "1", "I": "1", "O": "2", "U": "2"})


class Region(Enum):
    """Specialized scoring family for a query/candidate pair."""

    HISPANIC = "hispanic"
    ARABIC = "arabic"
    GENERIC = "generic"


def _has_y_i_substitution(word1: str, word2: str) -> bool:
    if abs(len(word1) - len(word2)) > 1:
        return False
    if consonant_pattern(word1) != consonant_pattern(word2):
        return False

    vowels1 = vowel_pattern(word1)
    vowels2 = vowel_pattern(word2)
    if not (("Y" in vowels1 and "I" in vowels2) or ("I" in vowels1 and "Y" in vowels2)):
        return False

    similarity = vowel_pattern_similarity(vowels1.replace("Y", "I"), vowels2.replace("Y", "I"))
    return similarity > Y_I_SIMILARITY_BAR


def is_transliteration_equivalent(word1: str, word2: str) -> bool:
    """
    Whether two words are spellings of the same name.

    True for a known equivalent pair, or when the words share their consonant
    skeleton and differ by a Y/I vowel swap ("Sayra" / "Saira").
    """
    a = word1.lower()
    b = word2.lower()
    if frozenset({a, b}) in KNOWN_TRANSLITERATIONS:
        return True
    return _has_y_i_substitution(a, b)


def is_hispanic_name(name: str) -> bool:
    if not name or len(name) < 3:
        return False
    upper = name.upper()
    return (
        upper.startswith(HISPANIC_PREFIXES)
        or any(infix in upper for infix in HISPANIC_INFIXES)
        or upper.endswith(HISPANIC_SUFFIXES)
    )


def hispanic_similarity(name1: str, name2: str) -> float:
    """
    G/H swap score for names starting with "MI".

    Returns 0.9 when the names agree once G and H are removed, 0.7 when they
    merely share the pattern, and 0.0 when the pattern does not apply (callers
    then fall back to generic scoring).
    """
    a = name1.upper()
    b = name2.upper()
    if not (a.startswith("MI") and b.startswith("MI")):
        return 0.0
    if not (("G" in a and "H" in b) or ("H" in a and "G" in b)):
        return 0.0

    residual = damerau_levenshtein_similarity(
        a.replace("G", "").replace("H", ""),
        b.replace("G", "").replace("H", ""),
    )
    if residual > HISPANIC_RESIDUAL_BAR:
        return HISPANIC_G_H_STRONG
    return HISPANIC_G_H_WEAK


def is_arabic_name(name: str) -> bool:
    lower = name.lower()
    return any(marker in lower for marker in ARABIC_MARKERS) or lower.startswith(ARABIC_PREFIXES)


def _vowel_h_vowels(text: str) -> set[str]:
    return {text[i] for i in range(len(text) - 1) if text[i] in PATTERN_VOWELS and text[i + 1] == "H"}


def _doubled_vowel_set(text: str) -> set[str]:
    return {text[i] for i in range(len(text) - 1) if text[i] in PATTERN_VOWELS and text[i] == text[i + 1]}


def arabic_similarity(name1: str, name2: str) -> float:
    """
    Score two names as Arabic transliteration variants.

    Consonants are the stable part of a romanized Arabic name, so the score is
    driven by consonant structure once the vowel+H / doubled-vowel cases
    ("Sarah" / "Saara" / "Saira") have been decided.
    """
    if abs(len(name1) - len(name2)) > ARABIC_LENGTH_GATE:
        return 0.0

    a = name1.upper()
    b = name2.upper()
    vowel_h1, vowel_h2 = _vowel_h_vowels(a), _vowel_h_vowels(b)
    doubled1, doubled2 = _doubled_vowel_set(a), _doubled_vowel_set(b)

    if (vowel_h1 & doubled2) or (doubled1 & vowel_h2):
        return ARABIC_VOWEL_H_MATCH

    vowels1 = vowel_pattern(a)
    vowels2 = vowel_pattern(b)
    if bool(vowel_h1) != bool(vowel_h2):
        if len(vowels1.replace("A", "")) != len(vowels2.replace("A", "")):
            return ARABIC_VOWEL_H_MISMATCH

    consonants1 = consonant_pattern(a)
    consonants2 = consonant_pattern(b)
    if (
        not consonants1
        or not consonants2
        or abs(len(consonants1) - len(consonants2)) > ARABIC_CONSONANT_LENGTH_GATE
    ):
        return 0.0

    consonant_score = consonant_structure_similarity(consonants1, consonants2)
    if consonant_score > ARABIC_CONSONANT_BAR:
        grouped1 = vowels1.translate(ARABIC_VOWEL_GROUPS)
        grouped2 = vowels2.translate(ARABIC_VOWEL_GROUPS)
        if grouped1 and grouped1 == grouped2:
            return ARABIC_VOWEL_MATCH
        if abs(len(vowels1) - len(vowels2)) <= 1:
            return ARABIC_VOWEL_COUNT_MATCH

    return consonant_score * 0.5


def classify_region(query_name: str, candidate_name: str, *, query_raw: str = "", candidate_raw: str = "") -> Region:
    """
    Pick the specialized scorer for a pair of names.

    Hispanic routing takes precedence over Arabic routing. The Arabic markers
    ("al-", "el-") only survive in unnormalized text, so the raw strings are
    checked alongside the cleaned names when given.
    """
    if is_hispanic_name(query_name) and is_hispanic_name(candidate_name):
        return Region.HISPANIC
    query_arabic = is_arabic_name(query_name) or (bool(query_raw) and is_arabic_name(query_raw))
    candidate_arabic = is_arabic_name(candidate_name) or (bool(candidate_raw) and is_arabic_name(candidate_raw))
    if query_arabic and candidate_arabic:
        return Region.ARABIC
    return Region.GENERIC
