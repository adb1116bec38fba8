from __future__ import annotations

from ttc_headsigns.framework import Artifact, register, with_metrics
from ttc_headsigns.stops import clean_stop_name


class _StopNamePass:
    name = "stop_name"

    def __call__(self, a: Artifact) -> Artifact:
        cleaned = clean_stop_name(a.payload, language=a.context("language"))
        return with_metrics(a, self.name, cleaned)


stop_name = register(_StopNamePass())
