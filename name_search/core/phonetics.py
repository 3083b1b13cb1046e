"""
Phonetic encoders.

Two independent codes are computed per word:

- Soundex: first letter plus three consonant-class digits ("Robert" -> "R163")
- A Double-Metaphone-like dual code with a primary and an alternate spelling
  of the pronunciation ("Sarah" -> ("SRH", "SR"))

Both are pure functions of a single word.
"""

from __future__ import annotations

from typing import NamedTuple

# Digit class per letter A..Z
SOUNDEX_DIGITS = "01230120022455012623010202"

METAPHONE_VOWELS = "AEIOU"
SOFT_C_FOLLOWERS = "EIY"

# Consonants whose code does not depend on their neighbours
CONSONANT_CODES = {
    "B": "P",
    "D": "T",
    "F": "F",
    "V": "F",
    "G": "K",
    "J": "J",
    "K": "K",
    "L": "L",
    "M": "M",
    "N": "N",
    "P": "P",
    "Q": "K",
    "R": "R",
    "S": "S",
    "T": "T",
    "X": "KS",
    "Z": "S",
}


class PhoneticCodes(NamedTuple):
    primary: str
    alternate: str


def _soundex_digit(char: str) -> str:
    if "A" <= char <= "Z":
        return SOUNDEX_DIGITS[ord(char) - ord("A")]
    return "0"


def soundex(word: str) -> str:
    """
    Classic four-symbol Soundex code.

    The first letter is kept verbatim. H and W are dropped from the rest of the
    word, the remaining letters are mapped to digit classes, adjacent identical
    digits collapse and zeros (vowels and unmapped characters) are dropped.

    Examples:
        "Robert" -> "R163"
        "Abboud" -> "A130"
        "Kan" -> "K500"

    Returns:
        The code, or "" for an empty word
    """
    if not word:
        return ""
    word = word.upper()
    digits = [_soundex_digit(char) for char in word[1:] if char not in "HW"]
    collapsed = [digit for i, digit in enumerate(digits) if i == 0 or digit != digits[i - 1]]
    code = word[0] + "".join(digit for digit in collapsed if digit != "0")
    return (code + "000")[:4]


def _soft_c(word: str, index: int) -> str:
    if index + 1 < len(word) and word[index + 1] in SOFT_C_FOLLOWERS:
        return "S"
    return "K"


def _followed_by_vowel(word: str, index: int) -> bool:
    return index + 1 < len(word) and word[index + 1] in METAPHONE_VOWELS


def _encode_first(word: str) -> PhoneticCodes:
    first = word[0]
    if first in METAPHONE_VOWELS:
        return PhoneticCodes("A", "A")
    if first == "C":
        code = _soft_c(word, 0)
        return PhoneticCodes(code, code)
    if first == "Y":
        return PhoneticCodes("Y", "A")
    if first in ("H", "W"):
        return PhoneticCodes(first, first)
    code = CONSONANT_CODES.get(first, first)
    return PhoneticCodes(code, code)


def dual_metaphone(word: str) -> PhoneticCodes:
    """
    Compute primary and alternate phonetic codes for a word.

    Vowels are only coded at the start of the word (as "A"). Doubled consonants
    count once. An H after a vowel is kept in the primary code only, which keeps
    "Sarah" and "Sara" apart in one code and together in the other. W and Y are
    coded only before a vowel.

    Examples:
        "Miguel" -> ("MKL", "MKL")
        "Mihel" -> ("MHL", "ML")
        "Yasmin" -> ("YSMN", "ASMN")

    Returns:
        PhoneticCodes, ("", "") for an empty word
    """
    if not word:
        return PhoneticCodes("", "")
    word = word.upper()
    first = _encode_first(word)
    primary = [first.primary]
    alternate = [first.alternate]

    for i in range(1, len(word)):
        char = word[i]
        if char == word[i - 1] and char not in METAPHONE_VOWELS:
            continue
        if char in METAPHONE_VOWELS:
            continue

        if char == "C":
            code = _soft_c(word, i)
        elif char == "H":
            if word[i - 1] in METAPHONE_VOWELS:
                primary.append("H")
            continue
        elif char in ("W", "Y"):
            if not _followed_by_vowel(word, i):
                continue
            code = char
        else:
            code = CONSONANT_CODES.get(char, "")

        primary.append(code)
        alternate.append(code)

    return PhoneticCodes("".join(primary), "".join(alternate))
