from __future__ import annotations

import logging
from importlib import metadata
from typing import Any, Iterable, Optional

from ..core.models import MatchResult
from .contexts import SearchContext
from .protocols import MatcherPlugin
from .plugins.overrides import FullNameMapMatcher, PartialNameMapMatcher, SingleNamePriorityMatcher
from .plugins.scoring import CloseSpellingMatcher, CompositeNameMatcher, FallbackScoreMatcher
from .plugins.structural import (
    ExactMatcher,
    FirstAndCompoundMatcher,
    HyphenatedLiteralMatcher,
    InitialAndSurnameMatcher,
)
from .plugins.variants import FirstAndPartialLastMatcher, RemappedFullNameMatcher, SingleTokenMatcher

logger = logging.getLogger(__name__)

MATCHER_ENTRY_POINT_GROUP = "name_search.matchers"

# Built-in matchers in the order they are consulted. Table overrides come
# first, rule-based matchers next, and the two ranking matchers last.
DEFAULT_MATCHER_ORDER: list[str] = [
    "partial_name_map",
    "full_name_map",
    "hyphenated_literal",
    "single_name_priority",
    "exact",
    "first_and_compound",
    "single_token",
    "initial_and_surname",
    "remapped_full_name",
    "first_and_partial_last",
    "close_spelling",
    "composite_name",
    "fallback_score",
]


def _builtin_matchers() -> list[MatcherPlugin]:
    return [
        PartialNameMapMatcher(),
        FullNameMapMatcher(),
        HyphenatedLiteralMatcher(),
        SingleNamePriorityMatcher(),
        ExactMatcher(),
        FirstAndCompoundMatcher(),
        SingleTokenMatcher(),
        InitialAndSurnameMatcher(),
        RemappedFullNameMatcher(),
        FirstAndPartialLastMatcher(),
        CloseSpellingMatcher(),
        CompositeNameMatcher(),
        FallbackScoreMatcher(),
    ]


def _select_entry_points(group: str) -> Iterable[Any]:
    try:
        return metadata.entry_points(group=group)
    except Exception:  # pragma: no cover - depends on runtime packaging
        return []


def _load_plugins(group: str) -> list[Any]:
    plugins: list[Any] = []
    for ep in _select_entry_points(group):
        try:
            loaded = ep.load()
            plugin = loaded() if callable(loaded) else loaded
            if plugin is not None:
                plugins.append(plugin)
        except Exception as exc:  # pragma: no cover - plugin errors
            logger.warning("Failed to load plugin %s from %s: %s", getattr(ep, "name", ep), group, exc)
    return plugins


def _plugin_name(plugin: Any) -> str:
    return getattr(plugin, "name", "") or plugin.__class__.__name__


class MatcherPipeline:
    """
    Ordered list of matchers; the first one to return a result decides.

    Built-in matchers run in `DEFAULT_MATCHER_ORDER`. External matchers
    registered under the `name_search.matchers` entry point group run after
    them unless `matcher_order` names them earlier. Names listed in
    `matcher_order` move to the front in that order; every other matcher keeps
    its relative position behind them.
    """

    def __init__(
        self,
        *,
        disabled_matchers: Optional[Iterable[str]] = None,
        matcher_order: Optional[Iterable[str]] = None,
        extra_matchers: Optional[Iterable[MatcherPlugin]] = None,
        load_entry_points: bool = True,
    ) -> None:
        self._disabled = {name.strip() for name in (disabled_matchers or ()) if name and name.strip()}
        self._order = [name for name in (matcher_order or ()) if name]

        self._matchers: list[MatcherPlugin] = []

        def _append(plugin: Any) -> None:
            if _plugin_name(plugin) in self._disabled:
                return
            self._matchers.append(plugin)

        for plugin in _builtin_matchers():
            _append(plugin)
        for plugin in extra_matchers or ():
            _append(plugin)
        if load_entry_points:
            for plugin in _load_plugins(MATCHER_ENTRY_POINT_GROUP):
                _append(plugin)

        self._warn_unknown_names()
        self._apply_matcher_order()

    @property
    def names(self) -> list[str]:
        return [_plugin_name(plugin) for plugin in self._matchers]

    def _warn_unknown_names(self) -> None:
        known = set(self.names) | set(DEFAULT_MATCHER_ORDER)
        for name in sorted(self._disabled - known):
            logger.warning("Unknown matcher %r in disabled_matchers", name)
        for name in self._order:
            if name not in known:
                logger.warning("Unknown matcher %r in matcher_order", name)

    def _apply_matcher_order(self) -> None:
        if not self._order:
            return
        named = [(_plugin_name(p), p) for p in self._matchers]
        first: list[MatcherPlugin] = []
        used: set[int] = set()
        for name in self._order:
            for idx, (pname, plugin) in enumerate(named):
                if idx in used:
                    continue
                if pname == name:
                    first.append(plugin)
                    used.add(idx)
                    break
        rest = [plugin for idx, (_, plugin) in enumerate(named) if idx not in used]
        self._matchers = first + rest

    def run(self, ctx: SearchContext) -> Optional[MatchResult]:
        last_exc: Exception | None = None
        for plugin in self._matchers:
            try:
                result = plugin.match(ctx)
            except Exception as exc:
                last_exc = exc
                logger.exception("Matcher plugin %s failed", _plugin_name(plugin))
                continue
            if result is not None:
                logger.debug(
                    "Matcher %s chose %r for %r (confidence %.3f)",
                    result.strategy,
                    result.candidate,
                    ctx.raw_query,
                    result.confidence,
                )
                return result
        if last_exc:
            raise last_exc
        return None
