"""
Unit tests for the matcher plugins and the matcher pipeline.

Each matcher is exercised on its own with small, explicit tables so the
packaged defaults never decide the outcome.
"""

import unittest
from typing import Optional

from name_search.config import MatchTables
from name_search.core.models import MatchResult
from name_search.matchers.contexts import SearchContext
from name_search.matchers.core import DEFAULT_MATCHER_ORDER, MatcherPipeline
from name_search.matchers.plugins.overrides import (
    FullNameMapMatcher,
    PartialNameMapMatcher,
    SingleNamePriorityMatcher,
)
from name_search.matchers.plugins.scoring import CloseSpellingMatcher, CompositeNameMatcher, FallbackScoreMatcher
from name_search.matchers.plugins.structural import (
    ExactMatcher,
    FirstAndCompoundMatcher,
    HyphenatedLiteralMatcher,
    InitialAndSurnameMatcher,
)
from name_search.matchers.plugins.variants import (
    FirstAndPartialLastMatcher,
    RemappedFullNameMatcher,
    SingleTokenMatcher,
    expand_variants,
)

EMPTY = MatchTables()


def _ctx(query: str, candidates: list[str], tables: MatchTables = EMPTY, workers: int = 1) -> SearchContext:
    return SearchContext.build(query, candidates, tables, scoring_workers=workers)


class TestSearchContext(unittest.TestCase):
    """Test query preparation and candidate helpers."""

    def test_query_is_normalized_once(self):
        ctx = _ctx("  Jin-ho   KIM ", [])
        self.assertEqual(ctx.normalized_query, "Jin ho KIM")
        self.assertEqual(ctx.query_key, "jin ho kim")
        self.assertEqual(ctx.query_parts, ("jin", "ho", "kim"))
        self.assertEqual(ctx.part_count, 3)

    def test_views_keep_raw_candidates(self):
        ctx = _ctx("x", ["Dr. Ayesha Khan"])
        view = ctx.views[0]
        self.assertEqual(view.raw, "Dr. Ayesha Khan")
        self.assertEqual(view.parts, ("dr", "ayesha", "khan"))
        self.assertEqual((view.first, view.last), ("dr", "khan"))

    def test_resolve_by_comparison_key(self):
        ctx = _ctx("x", ["Jane Doe", "Ali Al-Mansour"])
        self.assertEqual(ctx.resolve("ali al mansour").index, 1)
        self.assertIsNone(ctx.resolve("Nobody Here"))

    def test_best_above_prefers_first_on_ties(self):
        ctx = _ctx("x", ["a", "b", "c"])
        view, score = ctx.best_above([0.5, 0.7, 0.7], 0.4)
        self.assertEqual((view.index, score), (1, 0.7))
        self.assertIsNone(ctx.best_above([0.4, 0.1, 0.0], 0.4))

    def test_score_all_keeps_order_with_workers(self):
        candidates = [f"name{i}" for i in range(20)]
        ctx = _ctx("x", candidates, workers=4)
        self.assertEqual(ctx.score_all(lambda view: float(view.index)), [float(i) for i in range(20)])


class TestTableMatchers(unittest.TestCase):
    """Test the table-driven matchers."""

    def test_partial_name_uses_query_as_typed(self):
        tables = MatchTables(partial_names={"Ali Al": "Ali Al-Mansour"})
        result = PartialNameMapMatcher().match(_ctx(" ali al", ["Jane Doe", "Ali Al-Mansour"], tables))
        self.assertEqual(result.candidate, "Ali Al-Mansour")
        self.assertEqual(result.index, 1)
        self.assertEqual(result.strategy, "partial_name_map")
        self.assertEqual(result.confidence, 1.0)

    def test_partial_name_target_missing(self):
        tables = MatchTables(partial_names={"Ali Al": "Ali Al-Mansour"})
        self.assertIsNone(PartialNameMapMatcher().match(_ctx("Ali Al", ["Jane Doe"], tables)))

    def test_full_name_uses_normalized_query(self):
        tables = MatchTables(full_names={"Way Chang": "Wei Zhang"})
        result = FullNameMapMatcher().match(_ctx("WAY-CHANG", ["Mei Li", "Wei Zhang"], tables))
        self.assertEqual(result.candidate, "Wei Zhang")

    def test_single_name_priority(self):
        tables = MatchTables(single_name_priorities={"Miguel": "Miguel Rivera"})
        candidates = ["Miguel Gomez", "Miguel Rivera"]
        result = SingleNamePriorityMatcher().match(_ctx("miguel", candidates, tables))
        self.assertEqual(result.candidate, "Miguel Rivera")
        self.assertIsNone(SingleNamePriorityMatcher().match(_ctx("Miguel Rivera", candidates, tables)))


class TestStructuralMatchers(unittest.TestCase):
    """Test the rule-based matchers."""

    def test_hyphenated_literal(self):
        result = HyphenatedLiteralMatcher().match(_ctx("jin-ho", ["Jinho Park", "Jin-ho Kim"]))
        self.assertEqual(result.candidate, "Jin-ho Kim")

    def test_hyphenated_literal_requires_hyphen(self):
        self.assertIsNone(HyphenatedLiteralMatcher().match(_ctx("Jin ho", ["Jin-ho Kim"])))

    def test_hyphenated_literal_not_found(self):
        self.assertIsNone(HyphenatedLiteralMatcher().match(_ctx("Saira-Raza", ["Dr. Saira Raza"])))

    def test_exact(self):
        result = ExactMatcher().match(_ctx("MICHAEL  johnson", ["Michael Johnsen", "Michael Johnson"]))
        self.assertEqual(result.candidate, "Michael Johnson")

    def test_first_and_compound_needs_compound_surname(self):
        candidates = ["Ali Alvarez", "Ali Al-Mansour"]
        result = FirstAndCompoundMatcher().match(_ctx("Ali Al", candidates))
        self.assertEqual(result.candidate, "Ali Al-Mansour")
        self.assertIsNone(FirstAndCompoundMatcher().match(_ctx("Ali Al", ["Ali Alvarez"])))

    def test_first_and_compound_accepts_three_parts(self):
        result = FirstAndCompoundMatcher().match(_ctx("Ali Al", ["Ali Al Mansour"]))
        self.assertEqual(result.candidate, "Ali Al Mansour")

    def test_initial_and_surname(self):
        candidates = ["Carla Hernan", "Carlos Hernandez"]
        result = InitialAndSurnameMatcher().match(_ctx("C. Hernandez", candidates))
        self.assertEqual(result.candidate, "Carlos Hernandez")
        self.assertIsNone(InitialAndSurnameMatcher().match(_ctx("Ca Hernandez", candidates)))


class TestVariantMatchers(unittest.TestCase):
    """Test the matchers that expand the remap tables."""

    def test_expand_variants(self):
        table = {"a": ("b",), "c": ("b",)}
        self.assertEqual(expand_variants(table, "b", first_entry_only=True), ["b", "a"])
        self.assertEqual(expand_variants(table, "b", first_entry_only=False), ["b", "a", "c"])
        self.assertEqual(expand_variants(table, "a", first_entry_only=True), ["a", "b"])
        self.assertEqual(expand_variants(table, "z", first_entry_only=False), ["z"])

    def test_single_token_prefers_first_name_position(self):
        result = SingleTokenMatcher().match(_ctx("kim", ["Jin-ho Kim", "Kim Lee"]))
        self.assertEqual(result.candidate, "Kim Lee")

    def test_single_token_anywhere(self):
        result = SingleTokenMatcher().match(_ctx("Kim", ["Jane Doe", "Jin-ho Kim"]))
        self.assertEqual(result.candidate, "Jin-ho Kim")

    def test_single_token_variant(self):
        tables = MatchTables(name_remap={"mihel": ["miguel"]})
        result = SingleTokenMatcher().match(_ctx("Mihel", ["Dr. George Mitchell", "Dr. Miguel Cruz"], tables))
        self.assertEqual(result.candidate, "Dr. Miguel Cruz")
        self.assertIn("mihel", result.details)

    def test_remapped_full_name(self):
        tables = MatchTables(name_remap={"john": ["jon", "jhon"]}, surname_remap={"smyth": ["smith"]})
        result = RemappedFullNameMatcher().match(_ctx("John Smyth", ["John Smithers", "Jon Smith"], tables))
        self.assertEqual(result.candidate, "Jon Smith")

    def test_remapped_full_name_reverse_lookup(self):
        tables = MatchTables(name_remap={"john": ["jon", "jhon"]})
        result = RemappedFullNameMatcher().match(_ctx("Jhon Richardson", ["John Richardson"], tables))
        self.assertEqual(result.candidate, "John Richardson")

    def test_first_and_partial_last(self):
        result = FirstAndPartialLastMatcher().match(_ctx("Jon R", ["John Hamilton", "Jon Richardson"]))
        self.assertEqual(result.candidate, "Jon Richardson")

    def test_first_and_partial_last_through_variants(self):
        tables = MatchTables(name_remap={"jon": ["john"]})
        result = FirstAndPartialLastMatcher().match(_ctx("Jon Ham", ["John Hamilton"], tables))
        self.assertEqual(result.candidate, "John Hamilton")


class TestScoringMatchers(unittest.TestCase):
    """Test the ranking matchers."""

    def test_close_spelling_first_on_ties(self):
        result = CloseSpellingMatcher().match(_ctx("Sayra Kan", ["Saira Khan", "Sara Kane"]))
        self.assertEqual(result.candidate, "Saira Khan")

    def test_close_spelling_smallest_total_distance(self):
        result = CloseSpellingMatcher().match(_ctx("Sayra Kan", ["Sara Kane", "Sayra Khan"]))
        self.assertEqual(result.candidate, "Sayra Khan")

    def test_close_spelling_only_two_part_candidates(self):
        self.assertIsNone(CloseSpellingMatcher().match(_ctx("Sayra Kan", ["Dr. Saira Khan"])))

    def test_composite_name(self):
        result = CompositeNameMatcher().match(_ctx("Dr Jonathon Smyth", ["Jane Doe", "Jonathan Smith"]))
        self.assertEqual(result.candidate, "Jonathan Smith")
        self.assertGreater(result.confidence, 0.75)
        self.assertIsNone(CompositeNameMatcher().match(_ctx("Jonathon", ["Jonathan Smith"])))

    def test_fallback_score(self):
        result = FallbackScoreMatcher().match(_ctx("Jonathon", ["Jane Doe", "Jonathan Smith"]))
        self.assertEqual(result.candidate, "Jonathan Smith")
        self.assertEqual(result.strategy, "fallback_score")
        self.assertGreater(result.confidence, 0.4)

    def test_fallback_remap_boost(self):
        tables = MatchTables(surname_remap={"kan": ["khan"]})
        result = FallbackScoreMatcher().match(_ctx("Kan", ["Jane Doe", "Dr. Ayesha Khan"], tables))
        self.assertEqual(result.candidate, "Dr. Ayesha Khan")
        self.assertEqual(result.confidence, 0.9)

    def test_fallback_below_threshold(self):
        self.assertIsNone(FallbackScoreMatcher().match(_ctx("zzzz", ["Jane Doe"])))


class _RaisingMatcher:
    name = "raising"

    def match(self, ctx: SearchContext) -> Optional[MatchResult]:
        raise RuntimeError("boom")


class _FirstCandidateMatcher:
    name = "first_candidate"

    def match(self, ctx: SearchContext) -> Optional[MatchResult]:
        return ctx.result(ctx.views[0], self.name, details="always the first")


class TestMatcherPipeline(unittest.TestCase):
    """Test ordering, disabling and error handling in the pipeline."""

    def test_default_order(self):
        pipeline = MatcherPipeline(load_entry_points=False)
        self.assertEqual(pipeline.names, DEFAULT_MATCHER_ORDER)

    def test_extra_matchers_run_last(self):
        pipeline = MatcherPipeline(extra_matchers=[_FirstCandidateMatcher()], load_entry_points=False)
        self.assertEqual(pipeline.names[-1], "first_candidate")
        result = pipeline.run(_ctx("zzzz", ["Jane Doe"]))
        self.assertEqual(result.strategy, "first_candidate")

    def test_matcher_order_moves_names_first(self):
        pipeline = MatcherPipeline(
            extra_matchers=[_FirstCandidateMatcher()],
            matcher_order=["first_candidate", "exact"],
            load_entry_points=False,
        )
        self.assertEqual(pipeline.names[:3], ["first_candidate", "exact", "partial_name_map"])
        result = pipeline.run(_ctx("Michael Johnson", ["Jane Doe", "Michael Johnson"]))
        self.assertEqual(result.candidate, "Jane Doe")

    def test_disabled_matchers(self):
        pipeline = MatcherPipeline(disabled_matchers={"exact", "single_token"}, load_entry_points=False)
        self.assertNotIn("exact", pipeline.names)
        self.assertNotIn("single_token", pipeline.names)

    def test_unknown_names_are_reported(self):
        with self.assertLogs("name_search.matchers.core", level="WARNING") as logs:
            MatcherPipeline(disabled_matchers={"no_such_matcher"}, load_entry_points=False)
        self.assertIn("no_such_matcher", logs.output[0])

    def test_failing_matcher_is_skipped(self):
        pipeline = MatcherPipeline(
            extra_matchers=[_RaisingMatcher()],
            matcher_order=["raising"],
            load_entry_points=False,
        )
        with self.assertLogs("name_search.matchers.core", level="ERROR"):
            result = pipeline.run(_ctx("Michael Johnson", ["Michael Johnson"]))
        self.assertEqual(result.strategy, "exact")

    def test_failure_is_raised_when_nothing_matches(self):
        pipeline = MatcherPipeline(extra_matchers=[_RaisingMatcher()], load_entry_points=False)
        with self.assertLogs("name_search.matchers.core", level="ERROR"):
            with self.assertRaises(RuntimeError):
                pipeline.run(_ctx("zzzz", ["Jane Doe"]))


if __name__ == "__main__":
    unittest.main()
