"""
Vowel and consonant pattern analysis.

Transliterated names tend to keep their consonant skeleton while the vowels
drift ("Ahmed"/"Ahmad"/"Ahmid"), or trade a doubled vowel for a vowel+H
("Saara"/"Sarah"). The helpers here extract those skeletons and compare them.

All functions are pure and case-insensitive.
"""

from __future__ import annotations

from .distance import PATTERN_VOWELS, vowel_aware_distance

VOWEL_GROUPS = str.maketrans({"A": "1", "E": "1", "I": "2", "Y": "2", "O": "3", "U": "3"})

DOUBLED_VOWEL_SIMILARITY = 0.9
AH_AI_SIMILARITY = 0.3

RH_SHARED_FLOOR = 0.8
RH_MISMATCH_CAP = 0.6


def vowel_pattern(word: str) -> str:
    """
    Ordered vowels of a word, Y included.

    Examples:
        "Saira" -> "AIA"
        "Dylan" -> "YA"
    """
    return "".join(char for char in word.upper() if char in PATTERN_VOWELS)


def consonant_pattern(word: str) -> str:
    """
    Ordered consonant letters of a word.

    An H directly after a vowel is written twice so that it weighs more in
    structural comparisons ("Sarah" -> "SRHH", "Saira" -> "SR").
    """
    upper = word.upper()
    symbols: list[str] = []
    for i, char in enumerate(upper):
        if char in PATTERN_VOWELS or not char.isalpha():
            continue
        if char == "H" and i > 0 and upper[i - 1] in PATTERN_VOWELS:
            symbols.append("HH")
        else:
            symbols.append(char)
    return "".join(symbols)


def _doubled_vowels(text: str) -> list[str]:
    return [text[i] for i in range(len(text) - 1) if text[i] == text[i + 1]]


def _has_vowel_then(text: str, vowel: str, follower: str) -> bool:
    return any(text[j] == vowel and text[j + 1] == follower for j in range(len(text) - 1))


def has_transliteration_pattern(pattern1: str, pattern2: str) -> bool:
    """True when a doubled vowel on one side is that vowel followed by H on the other."""
    p1 = pattern1.upper()
    p2 = pattern2.upper()
    for first, second in ((p1, p2), (p2, p1)):
        for vowel in _doubled_vowels(first):
            if _has_vowel_then(second, vowel, "H"):
                return True
    return False


def normalize_vowel_pattern(pattern: str) -> str:
    """
    Group acoustically similar vowels.

    The second vowel of a doubled pair becomes "H" (so "AA" reads like "AH"),
    then A/E -> 1, I/Y -> 2, O/U -> 3.
    """
    chars = list(pattern.upper())
    for i in range(len(chars) - 1):
        if chars[i] == chars[i + 1]:
            chars[i + 1] = "H"
    return "".join(chars).translate(VOWEL_GROUPS)


def _edit_similarity(pattern1: str, pattern2: str) -> float:
    longest = max(len(pattern1), len(pattern2))
    if longest == 0:
        return 1.0
    return 1.0 - vowel_aware_distance(pattern1, pattern2) / longest


def vowel_pattern_similarity(pattern1: str, pattern2: str) -> float:
    """
    Compare two vowel patterns.

    Returns a value in [0.0, 1.0]:
    - 1.0 for identical patterns
    - 0.9 when a doubled vowel faces the same vowel followed by H
    - 0.3 when one side has "AH" and the other "AI" (Sarah vs Saira)
    - set overlap for short patterns (2 characters or fewer)
    - a 40/60 blend of raw and vowel-grouped edit similarity otherwise
    """
    p1 = pattern1.upper()
    p2 = pattern2.upper()
    if p1 == p2:
        return 1.0

    if has_transliteration_pattern(p1, p2):
        return DOUBLED_VOWEL_SIMILARITY

    if ("AH" in p1 and "AI" in p2) or ("AI" in p1 and "AH" in p2):
        return AH_AI_SIMILARITY

    if len(p1) <= 2 or len(p2) <= 2:
        set1, set2 = set(p1), set(p2)
        union = set1 | set2
        return len(set1 & set2) / len(union) if union else 0.0

    raw = _edit_similarity(p1, p2)
    grouped = _edit_similarity(normalize_vowel_pattern(p1), normalize_vowel_pattern(p2))
    return raw * 0.4 + grouped * 0.6


def _has_rh(pattern: str) -> bool:
    return "RH" in pattern


def _positional_similarity(pattern1: str, pattern2: str) -> float:
    longest = max(len(pattern1), len(pattern2))
    if longest == 0:
        return 0.0
    matches = sum(1 for a, b in zip(pattern1, pattern2) if a == b)
    return matches / longest


def consonant_structure_similarity(pattern1: str, pattern2: str) -> float:
    """
    Compare consonant skeletons with position weighting.

    Short patterns (2 symbols or fewer) use a direct positional match ratio.
    Longer patterns are aligned with cheap indels (1), expensive mismatches (10)
    and matches whose cost grows from 3 to 10 towards the start of the name, so
    agreement early in the name counts for more.

    An R followed by H is treated as a distinguishing feature: shared -> at
    least 0.8, present on one side only -> at most 0.6.
    """
    p1 = pattern1.upper()
    p2 = pattern2.upper()
    if len(p1) <= 2 or len(p2) <= 2:
        return _positional_similarity(p1, p2)

    longest = max(len(p1), len(p2))
    previous = list(range(len(p2) + 1))
    for i in range(1, len(p1) + 1):
        current = [i] + [0] * len(p2)
        for j in range(1, len(p2) + 1):
            if p1[i - 1] == p2[j - 1]:
                step = int(10 * (1.0 - 0.7 * min(i, j) / longest))
            else:
                step = 10
            current[j] = min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + step)
        previous = current

    similarity = 1.0 - previous[len(p2)] / (longest * 10)

    if "R" in p1 and "R" in p2:
        rh1, rh2 = _has_rh(p1), _has_rh(p2)
        if rh1 and rh2:
            similarity = max(similarity, RH_SHARED_FLOOR)
        elif rh1 != rh2:
            similarity = min(similarity, RH_MISMATCH_CAP)
    return similarity


def detect_transliteration_pattern(text1: str, text2: str) -> bool:
    """
    Coarse signal that two spellings are transliteration variants.

    Checks both directions for:
    - a doubled vowel on one side against that vowel followed by H, or by a
      different vowel, on the other ("Saara" / "Sarah", "Saara" / "Saira")
    - a vowel+H on one side against the same vowel doubled on the other
    """
    t1 = text1.upper()
    t2 = text2.upper()
    for first, second in ((t1, t2), (t2, t1)):
        for i in range(len(first) - 1):
            vowel = first[i]
            if vowel not in PATTERN_VOWELS or first[i + 1] != vowel:
                continue
            for j in range(len(second) - 1):
                if second[j] != vowel:
                    continue
                follower = second[j + 1]
                if follower == "H" or (follower in PATTERN_VOWELS and follower != vowel):
                    return True

    for first, second in ((t1, t2), (t2, t1)):
        for i in range(len(first) - 1):
            if first[i] in PATTERN_VOWELS and first[i + 1] == "H":
                if _has_vowel_then(second, first[i], first[i]):
                    return True
    return False
