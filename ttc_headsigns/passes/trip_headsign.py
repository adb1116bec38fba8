from __future__ import annotations

from ttc_headsigns.framework import Artifact, register, with_metrics
from ttc_headsigns.headsigns import clean_trip_headsign


class _TripHeadsignPass:
    name = "trip_headsign"

    def __call__(self, a: Artifact) -> Artifact:
        cleaned = clean_trip_headsign(a.payload, language=a.context("language"))
        return with_metrics(a, self.name, cleaned)


trip_headsign = register(_TripHeadsignPass())
