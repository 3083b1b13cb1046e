from __future__ import annotations

from typing import Optional, Protocol

from ..core.models import MatchResult
from .contexts import SearchContext


class MatcherPlugin(Protocol):
    name: str

    def match(self, ctx: SearchContext) -> Optional[MatchResult]: ...
