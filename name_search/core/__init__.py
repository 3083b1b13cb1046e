"""
Name matching domain logic.

This package handles:
- Text normalization and title stripping
- Phonetic encoding (Soundex, dual metaphone)
- Edit distances and vowel/consonant pattern analysis
- Similarity metrics (Jaro-Winkler, phonetic similarity)
- Regional heuristics (Hispanic, Arabic, Y/I transliteration)
- Composite scoring used to rank candidates

All logic is pure and has no I/O dependencies.
"""

from __future__ import annotations

from .models import MatchResult, NameView
from .normalize import comparison_key, name_parts, normalize, strip_titles
from .regional import Region
from .scoring import composite_name_score, single_part_score

__all__ = [
    "MatchResult",
    "NameView",
    "Region",
    "comparison_key",
    "composite_name_score",
    "name_parts",
    "normalize",
    "single_part_score",
    "strip_titles",
]
