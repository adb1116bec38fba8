from __future__ import annotations

from ttc_headsigns.agency import clean_route_long_name
from ttc_headsigns.framework import Artifact, register, with_metrics


class _RouteLongNamePass:
    name = "route_long_name"

    def __call__(self, a: Artifact) -> Artifact:
        cleaned = clean_route_long_name(a.payload, language=a.context("language"))
        return with_metrics(a, self.name, cleaned)


route_long_name = register(_RouteLongNamePass())
