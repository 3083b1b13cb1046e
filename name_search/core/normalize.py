"""
Text normalization for names.

Queries and candidates go through the same normalization so that separators,
spacing and case never decide a match on their own:

- "Jin-ho  Kim" -> "Jin ho Kim"
- "Dr. Ayesha Khan" -> "Dr Ayesha Khan"
- "al_mansour,ali" -> "al mansour ali"

All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

# Characters folded to a space before whitespace is collapsed
SEPARATOR_PATTERN = re.compile(r"[-_.,]")
WHITESPACE_PATTERN = re.compile(r"\s+")

HONORIFIC_TITLES = frozenset({"dr", "mr", "mrs", "ms", "miss", "prof", "rev", "hon", "sir", "dame"})


def normalize(text: Optional[str]) -> str:
    """
    Normalize a name for comparison.

    Hyphens, underscores, periods and commas become spaces, runs of whitespace
    collapse to a single space and the result is trimmed. Case is preserved;
    use `comparison_key` for case-insensitive comparison.

    The function is idempotent: normalize(normalize(s)) == normalize(s).

    Args:
        text: Raw name text (None is treated as empty)

    Returns:
        Normalized text, or "" for empty input
    """
    if not text:
        return ""
    folded = SEPARATOR_PATTERN.sub(" ", text)
    return WHITESPACE_PATTERN.sub(" ", folded).strip()


def comparison_key(text: Optional[str]) -> str:
    """Normalized, lowercased form used for every equality check."""
    return normalize(text).lower()


def name_parts(text: Optional[str]) -> list[str]:
    """
    Split a name into lowercase parts.

    Examples:
        "Ali Al-Mansour" -> ["ali", "al", "mansour"]
        "M. Johnson" -> ["m", "johnson"]
    """
    key = comparison_key(text)
    return key.split(" ") if key else []


def is_title(part: str) -> bool:
    return part.rstrip(".").lower() in HONORIFIC_TITLES


def strip_titles(parts: Iterable[str]) -> list[str]:
    """
    Remove honorific titles from a sequence of name parts.

    Matching ignores case and a trailing period, so "Dr", "dr." and "DR"
    are all removed.
    """
    return [part for part in parts if not is_title(part)]
