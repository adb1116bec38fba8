from __future__ import annotations

import os
import pathlib
import warnings
from functools import lru_cache, reduce
from importlib import import_module
from typing import Any, Dict, Iterable, List, Mapping, cast

from pydantic import BaseModel, ConfigDict, Field

yaml = cast(Any, import_module("yaml"))

CONFIG_ENV = "TTC_HEADSIGNS_CONFIG"
ENV_PREFIX = "agency"


class AgencySettings(BaseModel):
    """Agency-wide knobs read once per process."""

    model_config = ConfigDict(frozen=True)

    name: str = "TTC"
    language: str = "en"
    color: str = "DA251D"
    route_type: int = 3  # bus
    # 101: NORTH/SOUTH share direction ID 1 (2024-09-05)
    direction_splitter_routes: List[int] = Field(default_factory=lambda: [101])
    overrides_path: str | None = None


def _read_yaml(path: str | os.PathLike | None) -> Dict[str, Any]:
    """Return a dict from YAML or {} if path is None/missing/empty."""
    if not path:
        return {}
    p = pathlib.Path(path)
    if not p.exists():
        return {}
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise TypeError("agency config must contain a top-level mapping")
    return data


def _env_overrides() -> Dict[str, Any]:
    """
    Map AGENCY__key=value -> settings[key]=value (key lower-cased).
    Values are YAML-coerced (so 'true', '42', '[1, 2]' become bool/int/list).
    """
    out: Dict[str, Any] = {}
    for k, v in os.environ.items():
        if "__" not in k:
            continue
        prefix, key = k.lower().split("__", 1)
        if prefix != ENV_PREFIX:
            continue
        try:
            val = yaml.safe_load(v)
        except yaml.YAMLError:
            val = v
        out[key] = val
    return out


def _warn_unknown_keys(values: Mapping[str, Any]) -> None:
    """Emit a warning when the config names settings that do not exist."""

    unknown = [key for key in values if key not in AgencySettings.model_fields]
    if unknown:
        warnings.warn(
            f"Unknown agency settings: {', '.join(sorted(unknown))}",
            stacklevel=3,
        )


def load_settings(
    path: str | os.PathLike | None = "agency.yaml",
    overrides: Dict[str, Any] | None = None,
) -> AgencySettings:
    """Load YAML + env/CLI overrides into validated AgencySettings."""
    data = _read_yaml(path).get("agency") or {}
    if not isinstance(data, dict):
        raise TypeError("'agency' must be a mapping")
    sources: Iterable[Dict[str, Any]] = (
        d for d in (data, _env_overrides(), overrides) if d
    )
    acc: Dict[str, Any] = {}
    merged = reduce(lambda base, extra: {**base, **extra}, sources, acc)
    _warn_unknown_keys(merged)
    known = {k: v for k, v in merged.items() if k in AgencySettings.model_fields}
    return AgencySettings.model_validate(known)


@lru_cache(maxsize=1)
def get_settings() -> AgencySettings:
    """Process-wide settings; built on first use and never mutated."""
    return load_settings(os.environ.get(CONFIG_ENV, "agency.yaml"))
