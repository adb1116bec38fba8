from __future__ import annotations

from ttc_headsigns.framework import Artifact, register, with_metrics
from ttc_headsigns.headsigns import clean_stop_headsign


class _StopHeadsignPass:
    """Needs ``route_short_name`` / ``route_long_name`` in the artifact meta."""

    name = "stop_headsign"

    def __call__(self, a: Artifact) -> Artifact:
        cleaned = clean_stop_headsign(
            a.context("route_short_name") or "",
            a.context("route_long_name") or "",
            a.payload,
            language=a.context("language"),
        )
        return with_metrics(a, self.name, cleaned)


stop_headsign = register(_StopHeadsignPass())
