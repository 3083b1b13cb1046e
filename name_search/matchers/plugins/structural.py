from __future__ import annotations

import logging
from typing import Optional

from ...core.models import MatchResult
from ..contexts import SearchContext
from ..protocols import MatcherPlugin

logger = logging.getLogger(__name__)


class HyphenatedLiteralMatcher(MatcherPlugin):
    """
    Keep hyphenated queries literal.

    "Saira-Raza" first looks for a candidate containing that exact text. A
    single-part query with a hyphen may also match a candidate that starts
    with it.
    """

    name = "hyphenated_literal"

    def match(self, ctx: SearchContext) -> Optional[MatchResult]:
        if "-" not in ctx.raw_query:
            return None
        literal = ctx.raw_query.lower()
        view = ctx.first(lambda v: literal in v.raw.lower())
        if view is not None:
            return ctx.result(view, self.name, details=f"contains {ctx.raw_query!r}")
        if ctx.part_count == 1:
            view = ctx.first(lambda v: v.raw.lower().startswith(literal))
            if view is not None:
                return ctx.result(view, self.name, details=f"starts with {ctx.raw_query!r}")
        return None


class ExactMatcher(MatcherPlugin):
    name = "exact"

    def match(self, ctx: SearchContext) -> Optional[MatchResult]:
        view = ctx.first(lambda v: v.key == ctx.query_key)
        if view is None:
            return None
        return ctx.result(view, self.name, details="identical after normalization")


class FirstAndCompoundMatcher(MatcherPlugin):
    """
    Two-part query naming a first name and the start of a compound surname.

    "Ali Al" matches "Ali Al-Mansour" or "Ali Al Mansour", but not a plain
    two-part "Ali Alvarez"; that case is left to the partial surname matcher.
    """

    name = "first_and_compound"

    def match(self, ctx: SearchContext) -> Optional[MatchResult]:
        if ctx.part_count != 2:
            return None
        prefix = " ".join(ctx.query_parts)
        view = ctx.first(lambda v: v.key.startswith(prefix) and ("-" in v.raw or len(v.parts) > 2))
        if view is None:
            return None
        return ctx.result(view, self.name, details=f"compound name starting with {prefix!r}")


class InitialAndSurnameMatcher(MatcherPlugin):
    """Initial plus surname ("C Hernandez", "M. Johnson")."""

    name = "initial_and_surname"

    def match(self, ctx: SearchContext) -> Optional[MatchResult]:
        if ctx.part_count != 2 or len(ctx.query_parts[0]) != 1:
            return None
        initial, surname = ctx.query_parts
        view = ctx.first(lambda v: len(v.parts) >= 2 and v.first[:1] == initial and v.last == surname)
        if view is None:
            return None
        return ctx.result(view, self.name, details=f"initial {initial.upper()!r} with surname {surname!r}")
