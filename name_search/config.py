from __future__ import annotations

import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .core.normalize import comparison_key

logger = logging.getLogger(__name__)

DEFAULT_TABLES_RESOURCE = "default_tables.yaml"
CONFIG_FILENAMES = ("name_search.yaml", "name_search.yml")
TABLE_FIELDS = ("name_remap", "surname_remap", "full_names", "partial_names", "single_name_priorities")


def _fold_remap(values: Any) -> Any:
    if not isinstance(values, Mapping):
        return values if values is not None else {}
    folded: Dict[str, Tuple[str, ...]] = {}
    for key, variants in values.items():
        if isinstance(variants, str):
            variants = [variants]
        seen: list[str] = []
        for variant in variants or []:
            name = str(variant).strip().lower()
            if name and name not in seen:
                seen.append(name)
        folded[str(key).strip().lower()] = tuple(seen)
    return folded


class MatchTables(BaseModel):
    """
    The lookup tables that steer a search before any scoring happens.

    Keys are folded when the tables are built so lookups are case-insensitive:
    remap keys and variants, partial-name keys and single-name keys are trimmed
    and lowercased, full-name keys are reduced to their comparison key. Mapped
    values are kept as written and resolved against candidates by comparison
    key at search time.

    Instances are immutable and every table is exposed as a read-only mapping;
    build a new instance (or use `merged`) to change them.
    """

    model_config = ConfigDict(frozen=True, validate_default=True)

    name_remap: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)
    surname_remap: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)
    full_names: Dict[str, str] = Field(default_factory=dict)
    partial_names: Dict[str, str] = Field(default_factory=dict)
    single_name_priorities: Dict[str, str] = Field(default_factory=dict)

    @field_validator("name_remap", "surname_remap", mode="before")
    @classmethod
    def _fold_remap_tables(cls, values: Any) -> Any:
        return _fold_remap(values)

    @field_validator("full_names", mode="before")
    @classmethod
    def _fold_full_names(cls, values: Any) -> Any:
        if not isinstance(values, Mapping):
            return values if values is not None else {}
        return {comparison_key(str(k)): str(v) for k, v in values.items()}

    @field_validator("partial_names", "single_name_priorities", mode="before")
    @classmethod
    def _fold_lookup_keys(cls, values: Any) -> Any:
        if not isinstance(values, Mapping):
            return values if values is not None else {}
        return {str(k).strip().lower(): str(v) for k, v in values.items()}

    @field_validator(*TABLE_FIELDS, mode="after")
    @classmethod
    def _read_only(cls, values: Dict[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(values)

    @field_serializer(*TABLE_FIELDS)
    def _plain_dict(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return dict(values)

    @classmethod
    def defaults(cls) -> "MatchTables":
        """The tables shipped with the package."""
        return _default_tables()

    @classmethod
    def load(cls, path: Path) -> "MatchTables":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})

    def merged(self, other: "MatchTables") -> "MatchTables":
        """Overlay `other` on these tables; entries in `other` win."""
        return MatchTables.model_validate(
            {
                "name_remap": {**self.name_remap, **other.name_remap},
                "surname_remap": {**self.surname_remap, **other.surname_remap},
                "full_names": {**self.full_names, **other.full_names},
                "partial_names": {**self.partial_names, **other.partial_names},
                "single_name_priorities": {**self.single_name_priorities, **other.single_name_priorities},
            }
        )

    def name_variants(self, name: str) -> Tuple[str, ...]:
        return self.name_remap.get(name.lower(), ())

    def surname_variants(self, name: str) -> Tuple[str, ...]:
        return self.surname_remap.get(name.lower(), ())

    def partial_name(self, raw_query: str) -> Optional[str]:
        return self.partial_names.get(raw_query.strip().lower())

    def full_name(self, query_key: str) -> Optional[str]:
        return self.full_names.get(query_key)

    def priority_name(self, term: str) -> Optional[str]:
        return self.single_name_priorities.get(term.lower())


@lru_cache(maxsize=1)
def _default_tables() -> MatchTables:
    text = resources.files("name_search.data").joinpath(DEFAULT_TABLES_RESOURCE).read_text(encoding="utf-8")
    return MatchTables.model_validate(yaml.safe_load(text) or {})


class SearchSettings(BaseModel):
    scoring_workers: int = 1
    disabled_matchers: List[str] = Field(default_factory=list)
    matcher_order: List[str] = Field(default_factory=list)
    use_default_tables: bool = True

    @field_validator("scoring_workers", mode="before")
    @classmethod
    def _at_least_one_worker(cls, value: Optional[int]) -> int:
        if value is None:
            return 1
        return max(1, int(value))

    @field_validator("disabled_matchers", "matcher_order", mode="before")
    @classmethod
    def _strip_names(cls, values: Optional[List[str]]) -> List[str]:
        return [str(v).strip() for v in (values or []) if v and str(v).strip()]


class Settings(BaseModel):
    tables: MatchTables = Field(default_factory=MatchTables)
    search: SearchSettings = SearchSettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})

    def resolved_tables(self) -> MatchTables:
        """Configured tables, overlaid on the packaged defaults unless disabled."""
        if not self.search.use_default_tables:
            return self.tables
        return MatchTables.defaults().merged(self.tables)


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        if not explicit_path.exists():
            raise FileNotFoundError(f"Config file not found: {explicit_path}")
        return explicit_path
    cwd = Path.cwd()
    for candidate in (cwd / name for name in CONFIG_FILENAMES):
        if candidate.exists():
            logger.debug("Using config file %s", candidate)
            return candidate
    return None
