from __future__ import annotations

from .contexts import SearchContext
from .core import DEFAULT_MATCHER_ORDER, MatcherPipeline
from .protocols import MatcherPlugin

__all__ = [
    "DEFAULT_MATCHER_ORDER",
    "MatcherPipeline",
    "MatcherPlugin",
    "SearchContext",
]
