from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence

from ..config import MatchTables
from ..core.models import MatchResult, NameView
from ..core.normalize import comparison_key, normalize


@dataclass
class SearchContext:
    """
    Everything a matcher needs to decide on one search.

    The query is normalized once when the context is built. Candidate views are
    derived lazily and shared by every matcher of the same search. `tables` is
    the snapshot captured when the search started.
    """

    raw_query: str
    candidates: Sequence[str]
    tables: MatchTables
    scoring_workers: int = 1
    normalized_query: str = ""
    query_key: str = ""
    query_parts: tuple[str, ...] = ()
    _views: Optional[list[NameView]] = field(default=None, repr=False)

    @classmethod
    def build(
        cls,
        raw_query: str,
        candidates: Sequence[str],
        tables: MatchTables,
        *,
        scoring_workers: int = 1,
    ) -> "SearchContext":
        normalized = normalize(raw_query)
        key = normalized.lower()
        return cls(
            raw_query=raw_query,
            candidates=candidates,
            tables=tables,
            scoring_workers=scoring_workers,
            normalized_query=normalized,
            query_key=key,
            query_parts=tuple(key.split(" ")) if key else (),
        )

    @property
    def views(self) -> list[NameView]:
        if self._views is None:
            self._views = [NameView.of(index, raw) for index, raw in enumerate(self.candidates)]
        return self._views

    @property
    def part_count(self) -> int:
        return len(self.query_parts)

    def first(self, predicate: Callable[[NameView], bool]) -> Optional[NameView]:
        for view in self.views:
            if predicate(view):
                return view
        return None

    def resolve(self, mapped_name: str) -> Optional[NameView]:
        """The first candidate whose comparison key equals that of `mapped_name`."""
        key = comparison_key(mapped_name)
        if not key:
            return None
        return self.first(lambda view: view.key == key)

    def score_all(self, scorer: Callable[[NameView], float]) -> list[float]:
        """Score every candidate; results are returned in candidate order."""
        views = self.views
        if self.scoring_workers > 1 and len(views) > 1:
            with ThreadPoolExecutor(max_workers=self.scoring_workers) as executor:
                return list(executor.map(scorer, views))
        return [scorer(view) for view in views]

    def best_above(self, scores: Iterable[float], threshold: float) -> Optional[tuple[NameView, float]]:
        """Highest score strictly above `threshold`; the earliest candidate wins ties."""
        best: Optional[tuple[NameView, float]] = None
        for view, score in zip(self.views, scores):
            if score <= threshold:
                continue
            if best is None or score > best[1]:
                best = (view, score)
        return best

    def result(
        self,
        view: NameView,
        strategy: str,
        *,
        confidence: float = 1.0,
        details: Optional[str] = None,
    ) -> MatchResult:
        return MatchResult(
            candidate=view.raw,
            index=view.index,
            strategy=strategy,
            confidence=confidence,
            details=details,
        )
