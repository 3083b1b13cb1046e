"""
Search entry points.

`NameSearch` owns a matcher pipeline and the current lookup tables. Each
search captures the tables once, so replacing them while searches are
running never changes the outcome of a search already in progress.

The module-level `search` and `find` functions use a shared instance built
from the packaged defaults.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from threading import Lock
from typing import Optional, Sequence

from .config import MatchTables, Settings
from .core.models import MatchResult
from .matchers.contexts import SearchContext
from .matchers.core import MatcherPipeline

logger = logging.getLogger(__name__)


class NameSearch:
    """
    Resolve a typed name to one entry of a candidate list.

    Example:
        >>> NameSearch().search(["Michael Johnson", "Jane Doe"], "Mikael Jonson")
        'Michael Johnson'
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        tables: Optional[MatchTables] = None,
        *,
        pipeline: Optional[MatcherPipeline] = None,
    ) -> None:
        self.settings = settings or Settings()
        self._lock = Lock()
        self._tables = tables if tables is not None else self.settings.resolved_tables()
        self._pipeline = pipeline or MatcherPipeline(
            disabled_matchers=self.settings.search.disabled_matchers,
            matcher_order=self.settings.search.matcher_order,
        )

    @property
    def tables(self) -> MatchTables:
        with self._lock:
            return self._tables

    @property
    def pipeline(self) -> MatcherPipeline:
        return self._pipeline

    def replace_tables(self, tables: MatchTables) -> MatchTables:
        """Swap in new tables for subsequent searches and return the previous ones."""
        with self._lock:
            previous = self._tables
            self._tables = tables
        logger.debug("Replaced match tables")
        return previous

    def find(
        self,
        candidates: Optional[Sequence[str]],
        query: Optional[str],
        tables: Optional[MatchTables] = None,
    ) -> Optional[MatchResult]:
        """
        Find the candidate that best matches `query`.

        Args:
            candidates: Names to choose from; the match is returned verbatim
            query: Name as typed by the user
            tables: Tables to use for this search instead of the current ones

        Returns:
            The match with the deciding matcher and its confidence, or None when
            the query is empty or nothing matches well enough
        """
        if not query or not candidates:
            return None
        ctx = SearchContext.build(
            query,
            candidates,
            tables if tables is not None else self.tables,
            scoring_workers=self.settings.search.scoring_workers,
        )
        if not ctx.query_parts:
            return None
        result = self._pipeline.run(ctx)
        if result is None:
            logger.debug("No match for %r among %d candidates", query, len(candidates))
        return result

    def search(
        self,
        candidates: Optional[Sequence[str]],
        query: Optional[str],
        tables: Optional[MatchTables] = None,
    ) -> str:
        """Like `find`, but returns the matched candidate or "" when there is none."""
        result = self.find(candidates, query, tables)
        return result.candidate if result is not None else ""


@lru_cache(maxsize=1)
def default_search() -> NameSearch:
    return NameSearch()


def find(
    candidates: Optional[Sequence[str]],
    query: Optional[str],
    tables: Optional[MatchTables] = None,
) -> Optional[MatchResult]:
    return default_search().find(candidates, query, tables)


def search(
    candidates: Optional[Sequence[str]],
    query: Optional[str],
    tables: Optional[MatchTables] = None,
) -> str:
    return default_search().search(candidates, query, tables)
