from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from ...core.models import MatchResult
from ..contexts import SearchContext
from ..protocols import MatcherPlugin

logger = logging.getLogger(__name__)


def expand_variants(table: Mapping[str, Sequence[str]], term: str, *, first_entry_only: bool) -> list[str]:
    """
    The term followed by its remapped spellings.

    An entry contributes when the term is its key (all listed variants are
    added) or one of its variants (the key is added). With `first_entry_only`
    the scan stops at the first contributing entry, so table order matters.
    """
    variants = [term]
    for key, values in table.items():
        if term == key:
            variants.extend(values)
        elif term in values:
            variants.append(key)
        else:
            continue
        if first_entry_only:
            break
    return variants


class SingleTokenMatcher(MatcherPlugin):
    """
    Single-word query matched against whole name parts.

    A candidate whose first name is the word wins over one that has it in
    any other position. If neither exists the given-name variants are tried
    in table order, with the same preference.
    """

    name = "single_token"

    def match(self, ctx: SearchContext) -> Optional[MatchResult]:
        if ctx.part_count != 1:
            return None
        term = ctx.query_parts[0]
        result = self._match_word(ctx, term)
        if result is not None:
            return result
        for variant in ctx.tables.name_variants(term):
            result = self._match_word(ctx, variant, via=term)
            if result is not None:
                return result
        return None

    def _match_word(self, ctx: SearchContext, word: str, via: Optional[str] = None) -> Optional[MatchResult]:
        suffix = f" (variant of {via!r})" if via else ""
        view = ctx.first(lambda v: v.first == word)
        if view is not None:
            return ctx.result(view, self.name, details=f"first name {word!r}{suffix}")
        view = ctx.first(lambda v: word in v.parts)
        if view is not None:
            return ctx.result(view, self.name, details=f"name part {word!r}{suffix}")
        return None


class RemappedFullNameMatcher(MatcherPlugin):
    """Two-part query where either part may be a known alternative spelling."""

    name = "remapped_full_name"

    def match(self, ctx: SearchContext) -> Optional[MatchResult]:
        if ctx.part_count != 2:
            return None
        first, last = ctx.query_parts
        first_names = expand_variants(ctx.tables.name_remap, first, first_entry_only=True)
        last_names = expand_variants(ctx.tables.surname_remap, last, first_entry_only=True)
        for first_variant in first_names:
            for last_variant in last_names:
                view = ctx.first(lambda v: v.parts == (first_variant, last_variant))
                if view is not None:
                    return ctx.result(view, self.name, details=f"spelled as {first_variant!r} {last_variant!r}")
        return None


class FirstAndPartialLastMatcher(MatcherPlugin):
    """First name (or a variant of it) plus the beginning of the surname: "Jon R"."""

    name = "first_and_partial_last"

    def match(self, ctx: SearchContext) -> Optional[MatchResult]:
        if ctx.part_count != 2:
            return None
        first, partial = ctx.query_parts
        for first_variant in expand_variants(ctx.tables.name_remap, first, first_entry_only=False):
            view = ctx.first(
                lambda v: len(v.parts) >= 2 and v.first == first_variant and v.last.startswith(partial)
            )
            if view is not None:
                return ctx.result(
                    view,
                    self.name,
                    details=f"first name {first_variant!r}, surname starting with {partial!r}",
                )
        return None
