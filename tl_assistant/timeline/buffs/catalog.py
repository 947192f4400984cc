#!filepath: tl_assistant/timeline/buffs/catalog.py
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from tl_assistant import logs
from tl_assistant.utils.errors import ConfigError

POOL_TARGET = "NA"
ALL_TARGETS = ("all", "全員", "全体")


class BuffScope(str, Enum):
    INDIVIDUAL = "individual"   # one participant
    ALL = "all"                 # every participant on the field
    POOL = "pool"               # flat, added once

    @classmethod
    def from_target(cls, target: Optional[str]) -> "BuffScope":
        if not target or target == POOL_TARGET:
            return cls.POOL
        if target.lower() in ALL_TARGETS:
            return cls.ALL
        return cls.INDIVIDUAL


class CatalogEntry(BaseModel):
    """
    One named accrual modifier (FROZEN).

    magnitude is either direct, or base_magnitude + (level - 1) * per_step
    for stacking grants. duration holds one value or two variants.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    target: str = POOL_TARGET
    scope: Optional[BuffScope] = Field(default=None, validate_default=True)

    magnitude: Optional[float] = None
    base_magnitude: Optional[float] = None
    per_step: float = 0.0

    duration: Tuple[int, ...] = ()
    offset: int = 0

    include: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = ()

    # grant selector key in SimulationConfig.grant_levels
    grant: Optional[str] = None
    # blueprint for inline special commands
    template: bool = False

    @field_validator("scope")
    @classmethod
    def _derive_scope(cls, v: Optional[BuffScope], info: ValidationInfo) -> BuffScope:
        if v is not None:
            return v
        return BuffScope.from_target(info.data.get("target"))

    @field_validator("duration", mode="before")
    @classmethod
    def _normalize_duration(cls, v: Union[None, int, Sequence[int]]):
        if v is None:
            return ()
        if isinstance(v, (int, float)):
            return (int(v),)
        return tuple(int(x) for x in v)

    @field_validator("include", "exclude", mode="before")
    @classmethod
    def _normalize_patterns(cls, v):
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return tuple(v)

    @model_validator(mode="after")
    def _check(self) -> "CatalogEntry":
        if len(self.duration) > 2:
            raise ValueError(f"{self.id}: at most two duration variants")
        if not self.template and not self.duration:
            raise ValueError(f"{self.id}: duration required")
        for p in self.include + self.exclude:
            re.compile(p)
        return self

    # --------------------------------------------------
    @property
    def scope_key(self) -> Tuple[BuffScope, str]:
        return self.scope, self.target

    def magnitude_at(self, level: int = 1) -> float:
        if self.base_magnitude is not None:
            return self.base_magnitude + (level - 1) * self.per_step
        if self.magnitude is None:
            raise ValueError(f"[Catalog] entry {self.id} has no magnitude")
        return self.magnitude

    def duration_frames(self, second_variant: bool = False) -> int:
        if not self.duration:
            raise ValueError(f"[Catalog] entry {self.id} has no duration")
        if second_variant and len(self.duration) > 1:
            return self.duration[1]
        return self.duration[0]


@dataclass(frozen=True)
class MatchRule:
    """(include, exclude) predicate bound to the entry it builds."""
    include: Tuple[re.Pattern, ...]
    exclude: Tuple[re.Pattern, ...]
    entry: CatalogEntry

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "MatchRule":
        return cls(
            include=tuple(re.compile(p, re.IGNORECASE) for p in entry.include),
            exclude=tuple(re.compile(p, re.IGNORECASE) for p in entry.exclude),
            entry=entry,
        )

    def matches(self, name: str) -> bool:
        if not any(p.search(name) for p in self.include):
            return False
        return not any(p.search(name) for p in self.exclude)


class _CatalogFile(BaseModel):
    entries: List[CatalogEntry] = Field(default_factory=list)


def default_catalog_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "catalog.yml")


class BuffCatalog:
    """
    Read-only catalog of named modifiers.

    Detection is an ordered rule list evaluated first-match-wins, so a new
    modifier is a data addition to catalog.yml, not a new branch.
    """

    def __init__(self, entries: Sequence[CatalogEntry]):
        ids = [e.id for e in entries]
        dup = {i for i in ids if ids.count(i) > 1}
        if dup:
            raise ConfigError(f"[Catalog] duplicate entry ids: {sorted(dup)}")

        self._entries: Tuple[CatalogEntry, ...] = tuple(entries)
        self._by_id: Dict[str, CatalogEntry] = {e.id: e for e in entries}
        self._rules: Tuple[MatchRule, ...] = tuple(
            MatchRule.from_entry(e) for e in entries if e.include
        )

    @classmethod
    def load(cls, path: Optional[str] = None) -> "BuffCatalog":
        path = path or default_catalog_path()
        if not os.path.exists(path):
            raise ConfigError(f"Catalog file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        try:
            parsed = _CatalogFile(**raw)
        except (ValidationError, TypeError) as e:
            raise ConfigError(f"Invalid catalog {path}: {e}") from e

        logs.debug(f"[Catalog] loaded {len(parsed.entries)} entries from {path}")
        return cls(parsed.entries)

    # --------------------------------------------------
    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Tuple[CatalogEntry, ...]:
        return self._entries

    def get(self, entry_id: str) -> Optional[CatalogEntry]:
        return self._by_id.get(entry_id)

    def match(self, name: str) -> Optional[CatalogEntry]:
        if not name:
            return None
        for rule in self._rules:
            if rule.matches(name):
                return rule.entry
        return None

    @property
    def template(self) -> Optional[CatalogEntry]:
        for e in self._entries:
            if e.template:
                return e
        return None

    def grants(self) -> Tuple[CatalogEntry, ...]:
        return tuple(e for e in self._entries if e.grant)
