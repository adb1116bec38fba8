"""Per-route direction label corrections.

Some TTC routes publish both physical directions under the same direction ID,
or label a direction with the wrong compass word. Those known defects are
listed in ``data/direction_overrides.yaml`` as reviewable, versioned data:

    version: 1
    rules:
      - routes: ["332", "352"]
        direction_id: 1
        observed: East
        corrected: West

Each rule may name several routes, so routes sharing a correction share one
entry. The table is loaded once per process and never mutated.

Usage:
    table = default_table()
    table.lookup("84", 1, "east")  # -> "West"
    table.lookup("84", 1, "west")  # -> None (keep the cleaned label)
"""

from __future__ import annotations

import logging
import os
import pathlib
from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from importlib import import_module, resources
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Literal, Mapping, Tuple, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ttc_headsigns.config import get_settings

yaml = cast(Any, import_module("yaml"))

logger = logging.getLogger(__name__)

OverrideKey = Tuple[str, int, str]

_PACKAGED_TABLE = "direction_overrides.yaml"


class OverrideRule(BaseModel):
    """One curated correction: (routes, direction ID, observed label) -> corrected label.

    Attributes:
        routes: Route short names the correction applies to
        direction_id: Feed direction ID (0 or 1)
        observed: Compass label as published by the feed (matched case-insensitively)
        corrected: Canonical label returned instead
        observed_on: Date the defect was observed in the upstream feed
        note: Free-form provenance
    """

    model_config = ConfigDict(frozen=True)

    routes: List[str] = Field(min_length=1)
    direction_id: Literal[0, 1]
    observed: str
    corrected: str
    observed_on: date | None = None
    note: str | None = None

    @field_validator("routes", mode="before")
    @classmethod
    def _routes_as_text(cls, value: Any) -> Any:
        # unquoted YAML route numbers load as ints
        if isinstance(value, (str, int)):
            value = [value]
        return [str(v).strip() for v in value] if isinstance(value, list) else value

    @field_validator("observed", "corrected")
    @classmethod
    def _non_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("label must not be blank")
        return value.strip()

    def keys(self) -> Iterator[OverrideKey]:
        return ((route, self.direction_id, self.observed.lower()) for route in self.routes)


class OverrideFile(BaseModel):
    """Schema of the YAML document."""

    version: int = 1
    rules: List[OverrideRule] = Field(default_factory=list)


def _build_index(rules: Tuple[OverrideRule, ...]) -> Dict[OverrideKey, str]:
    index: Dict[OverrideKey, str] = {}
    for rule in rules:
        for key in rule.keys():
            existing = index.get(key)
            if existing is not None and existing != rule.corrected:
                raise ValueError(
                    f"conflicting overrides for route {key[0]} direction {key[1]} "
                    f"{rule.observed!r}: {existing!r} vs {rule.corrected!r}"
                )
            index[key] = rule.corrected
    # a corrected label must not be rewritten again on a second pass
    loops = sorted(
        (route, direction_id, corrected)
        for (route, direction_id, _), corrected in index.items()
        if (route, direction_id, corrected.lower()) in index
    )
    if loops:
        raise ValueError(f"overrides rewrite their own output: {loops}")
    return index


@dataclass(frozen=True)
class OverrideTable:
    """Immutable lookup over a set of :class:`OverrideRule`."""

    rules: Tuple[OverrideRule, ...] = ()
    version: int = 1
    index: Mapping[OverrideKey, str] = field(
        default_factory=lambda: MappingProxyType({}), repr=False
    )

    @classmethod
    def from_rules(cls, rules: Iterable[OverrideRule], *, version: int = 1) -> OverrideTable:
        frozen = tuple(rules)
        return cls(rules=frozen, version=version, index=MappingProxyType(_build_index(frozen)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OverrideTable:
        parsed = OverrideFile.model_validate(dict(data))
        return cls.from_rules(parsed.rules, version=parsed.version)

    def lookup(self, route_short_name: str, direction_id: int, label: str) -> str | None:
        """Return the corrected label, or None when no rule covers this triple."""
        return self.index.get((route_short_name.strip(), direction_id, label.strip().lower()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "rules": [rule.model_dump(mode="json", exclude_none=True) for rule in self.rules],
        }

    def __len__(self) -> int:
        return len(self.index)


def _read_table_text(path: str | os.PathLike | None) -> str:
    if path:
        return pathlib.Path(path).read_text(encoding="utf-8")
    packaged = resources.files("ttc_headsigns") / "data" / _PACKAGED_TABLE
    return packaged.read_text(encoding="utf-8")


def load_table(path: str | os.PathLike | None = None) -> OverrideTable:
    """Load an override table from ``path`` or from the packaged YAML."""
    data = yaml.safe_load(_read_table_text(path)) or {}
    if not isinstance(data, dict):
        raise TypeError("override table must contain a top-level mapping")
    table = OverrideTable.from_dict(data)
    logger.debug(
        "Loaded %d direction overrides (version %d) from %s",
        len(table),
        table.version,
        path or _PACKAGED_TABLE,
    )
    return table


@lru_cache(maxsize=1)
def default_table() -> OverrideTable:
    """Process-wide table; built on first use and never mutated."""
    return load_table(get_settings().overrides_path)
