"""TTC-specific hooks consumed by the feed exporter.

Exclusion predicates, route long name cleaning and the set of routes whose
directions must be split by the exporter.
"""

from __future__ import annotations

import logging
from typing import Optional

from ttc_headsigns.config import AgencySettings, get_settings
from ttc_headsigns.patterns import NOT_IN_SERVICE
from ttc_headsigns.text_cleaning import (
    clean_label,
    fix_mc_x_case,
    pipe,
    repair_text,
    to_lower_case_upper_case_words,
)

logger = logging.getLogger(__name__)


def is_not_in_service(headsign: Optional[str]) -> bool:
    """True when the whole (trimmed) headsign reads "Not In Service"."""
    return headsign is not None and NOT_IN_SERVICE.fullmatch(headsign.strip()) is not None


def exclude_trip(trip_headsign: Optional[str]) -> bool:
    excluded = is_not_in_service(trip_headsign)
    if excluded:
        logger.debug("Excluding trip with headsign %r", trip_headsign)
    return excluded


def exclude_stop_time(stop_headsign: Optional[str]) -> bool:
    excluded = is_not_in_service(stop_headsign)
    if excluded:
        logger.debug("Excluding stop time with headsign %r", stop_headsign)
    return excluded


def clean_route_long_name(route_long_name: str, *, language: str | None = None) -> str:
    lang = language or get_settings().language
    return pipe(
        route_long_name,
        repair_text,
        lambda s: to_lower_case_upper_case_words(lang, s),
        fix_mc_x_case,
        clean_label,
    )


def direction_splitter_enabled(route_id: int, settings: AgencySettings | None = None) -> bool:
    """Routes whose trips share one direction ID for both physical directions."""
    return route_id in (settings or get_settings()).direction_splitter_routes
