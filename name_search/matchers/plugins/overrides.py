from __future__ import annotations

import logging
from typing import Optional

from ...core.models import MatchResult
from ..contexts import SearchContext
from ..protocols import MatcherPlugin

logger = logging.getLogger(__name__)


class PartialNameMapMatcher(MatcherPlugin):
    """Look the query up, as typed, in the partial-name table ("Ali Al" -> "Ali Al-Mansour")."""

    name = "partial_name_map"

    def match(self, ctx: SearchContext) -> Optional[MatchResult]:
        mapped = ctx.tables.partial_name(ctx.raw_query)
        if mapped is None:
            return None
        view = ctx.resolve(mapped)
        if view is None:
            logger.debug("Partial name %r maps to %r, which is not a candidate", ctx.raw_query, mapped)
            return None
        return ctx.result(view, self.name, details=f"partial name {ctx.raw_query!r} maps to {mapped!r}")


class FullNameMapMatcher(MatcherPlugin):
    name = "full_name_map"

    def match(self, ctx: SearchContext) -> Optional[MatchResult]:
        mapped = ctx.tables.full_name(ctx.query_key)
        if mapped is None:
            return None
        view = ctx.resolve(mapped)
        if view is None:
            logger.debug("Full name %r maps to %r, which is not a candidate", ctx.normalized_query, mapped)
            return None
        return ctx.result(view, self.name, details=f"{ctx.normalized_query!r} is listed as {mapped!r}")


class SingleNamePriorityMatcher(MatcherPlugin):
    """A bare given name shared by several people resolves to the configured one."""

    name = "single_name_priority"

    def match(self, ctx: SearchContext) -> Optional[MatchResult]:
        if ctx.part_count != 1:
            return None
        mapped = ctx.tables.priority_name(ctx.query_parts[0])
        if mapped is None:
            return None
        view = ctx.resolve(mapped)
        if view is None:
            return None
        return ctx.result(view, self.name, details=f"{ctx.query_parts[0]!r} prefers {mapped!r}")
