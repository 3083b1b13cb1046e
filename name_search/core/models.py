"""
Domain models for name search.

These are pure data models with no dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .normalize import normalize


@dataclass(frozen=True)
class NameView:
    """
    A name together with its derived comparison forms.

    Example:
        NameView.of(0, "Dr. Ayesha Khan"):
        - raw: "Dr. Ayesha Khan"
        - normalized: "Dr Ayesha Khan"
        - key: "dr ayesha khan"
        - parts: ("dr", "ayesha", "khan")
    """
    index: int
    """Position in the candidate list (-1 for a query)"""

    raw: str
    """The name exactly as supplied"""

    normalized: str
    """Separators folded to spaces, whitespace collapsed, case preserved"""

    key: str
    """Lowercased normalized form used for equality checks"""

    parts: tuple[str, ...]
    """Lowercased space-delimited parts of the key"""

    @classmethod
    def of(cls, index: int, raw: str) -> "NameView":
        normalized = normalize(raw)
        key = normalized.lower()
        return cls(
            index=index,
            raw=raw,
            normalized=normalized,
            key=key,
            parts=tuple(key.split(" ")) if key else (),
        )

    @property
    def first(self) -> str:
        return self.parts[0] if self.parts else ""

    @property
    def last(self) -> str:
        return self.parts[-1] if self.parts else ""


@dataclass(frozen=True)
class MatchResult:
    """
    The candidate a search resolved to.

    A search that finds nothing returns None rather than a MatchResult, so an
    empty-string candidate is still a legitimate match.
    """
    candidate: str
    """The matched element of the candidate list, unmodified"""

    index: int
    """Position of the match in the candidate list"""

    strategy: str
    """Name of the matcher stage that decided"""

    confidence: float = 1.0
    """1.0 for rule-based stages, the winning score for ranking stages"""

    details: Optional[str] = None
    """Human-readable explanation of the match"""
