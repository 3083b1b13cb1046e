"Fuzzy name search over short candidate lists."

from importlib import metadata

from .config import MatchTables, SearchSettings, Settings
from .core.models import MatchResult
from .search import NameSearch, find, search

__all__ = [
    "MatchResult",
    "MatchTables",
    "NameSearch",
    "SearchSettings",
    "Settings",
    "__version__",
    "find",
    "search",
]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return metadata.version("name-search")
        except metadata.PackageNotFoundError:  # pragma: no cover - during editable dev installs
            return "0.0.0"
    raise AttributeError(name)
