from __future__ import annotations

import logging
from typing import Optional

from ...core.distance import levenshtein
from ...core.models import MatchResult, NameView
from ...core.scoring import ACCEPTANCE_THRESHOLD, REMAP_BOOST, composite_name_score, single_part_score
from ..contexts import SearchContext
from ..protocols import MatcherPlugin

logger = logging.getLogger(__name__)

CLOSE_SPELLING_MAX_DISTANCE = 2


class CloseSpellingMatcher(MatcherPlugin):
    """
    Two-part query against two-part candidates spelled almost the same.

    Both parts must be within two edits. The candidate with the smallest total
    distance wins, the earliest one on ties.
    """

    name = "close_spelling"

    def match(self, ctx: SearchContext) -> Optional[MatchResult]:
        if ctx.part_count != 2:
            return None
        first, last = ctx.query_parts
        best: Optional[tuple[NameView, int]] = None
        for view in ctx.views:
            if len(view.parts) != 2:
                continue
            first_distance = levenshtein(first, view.parts[0])
            last_distance = levenshtein(last, view.parts[1])
            if first_distance > CLOSE_SPELLING_MAX_DISTANCE or last_distance > CLOSE_SPELLING_MAX_DISTANCE:
                continue
            total = first_distance + last_distance
            if best is None or total < best[1]:
                best = (view, total)
        if best is None:
            return None
        view, total = best
        return ctx.result(view, self.name, details=f"{total} edit(s) from the query")


class CompositeNameMatcher(MatcherPlugin):
    name = "composite_name"

    def match(self, ctx: SearchContext) -> Optional[MatchResult]:
        if ctx.part_count < 2:
            return None
        scores = ctx.score_all(lambda view: composite_name_score(ctx.raw_query, view.raw))
        best = ctx.best_above(scores, ACCEPTANCE_THRESHOLD)
        if best is None:
            logger.debug("No composite score above %.2f for %r", ACCEPTANCE_THRESHOLD, ctx.raw_query)
            return None
        view, score = best
        return ctx.result(view, self.name, confidence=score, details=f"composite name score {score:.3f}")


class FallbackScoreMatcher(MatcherPlugin):
    """
    Rank every candidate by its best single-part score.

    For a one-word query a candidate containing the word, or one of its
    remapped spellings, inside any of its parts scores at least 0.9.
    """

    name = "fallback_score"

    def match(self, ctx: SearchContext) -> Optional[MatchResult]:
        if not ctx.query_key:
            return None
        boost_terms = self._boost_terms(ctx)
        scores = ctx.score_all(lambda view: self._score(ctx.query_key, view, boost_terms))
        best = ctx.best_above(scores, ACCEPTANCE_THRESHOLD)
        if best is None:
            logger.debug("No candidate scored above %.2f for %r", ACCEPTANCE_THRESHOLD, ctx.raw_query)
            return None
        view, score = best
        return ctx.result(view, self.name, confidence=score, details=f"name score {score:.3f}")

    @staticmethod
    def _boost_terms(ctx: SearchContext) -> tuple[str, ...]:
        if ctx.part_count != 1:
            return ()
        term = ctx.query_parts[0]
        return (term, *ctx.tables.name_variants(term), *ctx.tables.surname_variants(term))

    @staticmethod
    def _score(term: str, view: NameView, boost_terms: tuple[str, ...]) -> float:
        score = single_part_score(term, view.raw)
        if score < REMAP_BOOST and any(boost in part for boost in boost_terms for part in view.parts):
            return REMAP_BOOST
        return score
