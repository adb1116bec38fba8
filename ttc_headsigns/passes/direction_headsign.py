from __future__ import annotations

from ttc_headsigns.framework import Artifact, register, with_metrics
from ttc_headsigns.headsigns import clean_direction_headsign


class _DirectionHeadsignPass:
    """Reads ``direction_id``, ``from_stop_name`` and ``route_short_name`` from meta.

    Without a ``direction_id`` no per-route override is applied.
    """

    name = "direction_headsign"

    def __call__(self, a: Artifact) -> Artifact:
        direction_id = a.context("direction_id")
        cleaned = clean_direction_headsign(
            int(direction_id) if direction_id is not None else None,
            bool(a.context("from_stop_name", False)),
            a.payload,
            route_short_name=a.context("route_short_name"),
            language=a.context("language"),
        )
        return with_metrics(a, self.name, cleaned)


direction_headsign = register(_DirectionHeadsignPass())
