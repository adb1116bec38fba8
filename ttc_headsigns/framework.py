"""Field-cleaning passes and their registry.

A pass turns one feed label into its cleaned form. The record the label was
read from (route names, direction ID, ...) travels in ``Artifact.meta``, so
every field cleaner has the same call shape and can be chained or driven by
name from the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Protocol, runtime_checkable


@dataclass(frozen=True)
class Artifact:
    """A feed label plus the record context it was read with."""

    payload: str
    meta: Dict[str, Any] | None = None

    def context(self, key: str, default: Any = None) -> Any:
        return (self.meta or {}).get(key, default)


@runtime_checkable
class Pass(Protocol):
    name: str

    def __call__(self, a: Artifact) -> Artifact: ...


_PASSES: Mapping[str, Pass] = MappingProxyType({})


def register(p: Pass) -> Pass:
    """Publish ``p`` under ``p.name``; a later pass with the same name wins."""
    global _PASSES
    _PASSES = MappingProxyType({**_PASSES, p.name: p})
    return p


def get_pass(name: str) -> Pass:
    try:
        return _PASSES[name]
    except KeyError:
        expected = ", ".join(sorted(_PASSES))
        raise KeyError(f"unknown field {name!r} (expected one of: {expected})") from None


def run_step(name: str, a: Artifact) -> Artifact:
    return get_pass(name)(a)


def run_pipeline(steps: Iterable[str], a: Artifact) -> Artifact:
    """Clean ``a`` with each named pass in turn."""
    return reduce(lambda acc, step: run_step(step, acc), steps, a)


def registry() -> Dict[str, Pass]:
    """Snapshot of the registered passes, keyed by field name."""
    return dict(_PASSES)


def with_metrics(a: Artifact, pass_name: str, cleaned: str) -> Artifact:
    """Return ``cleaned`` as a new artifact, recording whether the pass changed it."""
    meta = dict(a.meta or {})
    metrics = dict(meta.get("metrics") or {})
    metrics[pass_name] = {"changed": cleaned != a.payload}
    meta["metrics"] = metrics
    return Artifact(payload=cleaned, meta=meta)
