"""Trip, stop and direction headsign cleaning for the TTC bus feed.

Public API (stable):
- extract_route_key
- clean_trip_headsign
- clean_stop_headsign
- choose_direction / select_direction_headsign
- clean_direction_headsign

Notes:
- Every function is pure and total; "no match" returns the input (or the
  ``""`` route-key sentinel) and never raises.
- Direction labels go through ``clean_direction_headsign`` *before* any
  generic trip cleaning: an override hit is already canonical.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from functools import lru_cache
from typing import Optional

from ttc_headsigns import patterns as p
from ttc_headsigns.config import get_settings
from ttc_headsigns.overrides import OverrideTable, default_table
from ttc_headsigns.text_cleaning import (
    clean_and,
    clean_at,
    clean_label,
    clean_numbers,
    clean_street_types,
    pipe,
    remove_via,
    repair_text,
    to_fixpoint,
    to_lower_case_upper_case_words,
)

logger = logging.getLogger(__name__)

NO_ROUTE_KEY = ""


def _language(language: str | None) -> str:
    return language or get_settings().language


# ---------------------------------------------------------------------------
# Route short name
# ---------------------------------------------------------------------------


def extract_route_key(headsign: str) -> str:
    """Return the route number of ``"<prefix> - <number> ..."`` text, else ``""``.

    >>> extract_route_key("East - 84 Sheppard West")
    '84'
    >>> extract_route_key("Foo Bar")
    ''
    """
    match = p.STARTS_WITH_RSN.match(headsign)
    return match.group("rsn") if match else NO_ROUTE_KEY


# ---------------------------------------------------------------------------
# Trip headsigns
# ---------------------------------------------------------------------------


def _clean_trip_headsign_once(headsign: str, lang: str) -> str:
    return pipe(
        headsign,
        repair_text,
        p.KEEP_LETTER_AND_TOWARDS.apply,
        p.ENDS_EXTRA_FARE_REQUIRED.apply,
        p.SHORT_TURN.apply,
        remove_via,
        lambda s: to_lower_case_upper_case_words(lang, s),
        clean_at,
        clean_and,
        clean_street_types,
        clean_numbers,
        clean_label,
    )


def clean_trip_headsign(headsign: str, *, language: str | None = None) -> str:
    """Normalize a trip headsign for display.

    Stripping a leading route number or a "Short Turn" phrase can expose
    another one, so the pipeline runs until its output stops changing.
    """
    lang = _language(language)
    return to_fixpoint(headsign, lambda s: _clean_trip_headsign_once(s, lang))


# ---------------------------------------------------------------------------
# Stop headsigns
# ---------------------------------------------------------------------------


@lru_cache(maxsize=256)
def _route_prefix(route_short_name: str, route_long_name: str) -> re.Pattern[str]:
    return p.route_prefix(route_short_name, route_long_name)


def clean_stop_headsign(
    route_short_name: str,
    route_long_name: str,
    stop_headsign: str,
    *,
    language: str | None = None,
) -> str:
    """Drop a repeated ``<route number>[letter] <route name>`` prefix, keeping the letter.

    ``("52", "Lawrence West", "52A Lawrence West to Sheppard")`` keeps ``A`` and
    the destination; the rest goes through the generic (trip) headsign cleaner.
    """
    prefix = _route_prefix(route_short_name or "", route_long_name or "")
    lang = _language(language)

    def _once(text: str) -> str:
        stripped = prefix.sub(
            lambda m: f"{m.group('letter')} " if m.group("letter") else "",
            text,
            count=1,
        )
        return clean_trip_headsign(stripped, language=lang)

    return to_fixpoint(stop_headsign, _once)


# ---------------------------------------------------------------------------
# Direction selection
# ---------------------------------------------------------------------------


class DirectionChoice(Enum):
    """Which of two candidate labels distinguishes the direction."""

    FIRST = "first"
    SECOND = "second"
    UNDECIDED = "undecided"


def _is_branch(headsign: Optional[str]) -> bool:
    return headsign is not None and headsign.startswith(p.BRANCH_PREFIX)


def _is_compass(headsign: Optional[str]) -> bool:
    return headsign is not None and p.DIRECTION_ONLY.match(headsign) is not None


def choose_direction(headsign1: Optional[str], headsign2: Optional[str]) -> DirectionChoice:
    """Pick the label that should name the direction.

    First matching rule wins:
    1. identical labels cannot be told apart;
    2. a label starting with the branch marker ``"L "`` loses to one without;
    3. a bare compass word (East/West/North/South) beats anything else.
    """
    if headsign1 == headsign2:
        return DirectionChoice.UNDECIDED
    branch1, branch2 = _is_branch(headsign1), _is_branch(headsign2)
    if branch1 != branch2:
        return DirectionChoice.SECOND if branch1 else DirectionChoice.FIRST
    compass1, compass2 = _is_compass(headsign1), _is_compass(headsign2)
    if compass1 != compass2:
        return DirectionChoice.FIRST if compass1 else DirectionChoice.SECOND
    return DirectionChoice.UNDECIDED


def select_direction_headsign(
    headsign1: Optional[str], headsign2: Optional[str]
) -> Optional[str]:
    """Return the chosen label, or None when the caller must use its own default."""
    choice = choose_direction(headsign1, headsign2)
    if choice is DirectionChoice.FIRST:
        return headsign1
    if choice is DirectionChoice.SECOND:
        return headsign2
    return None


# ---------------------------------------------------------------------------
# Direction headsigns
# ---------------------------------------------------------------------------


def _clean_direction_headsign_once(
    direction_id: int | None,
    from_stop_name: bool,
    headsign: str,
    route_short_name: str | None,
    table: OverrideTable,
    lang: str,
) -> str:
    text = repair_text(headsign)
    rsn = extract_route_key(text) or (route_short_name or NO_ROUTE_KEY).strip()
    cleaned = pipe(
        text,
        p.STARTS_WITH_DASH.apply,
        lambda s: to_lower_case_upper_case_words(lang, s),
        clean_label,
    )
    if not rsn or direction_id is None:
        return cleaned
    corrected = table.lookup(rsn, direction_id, cleaned)
    if corrected is None:
        return cleaned
    logger.debug(
        "Route %s direction %d: %r -> %r (from_stop_name=%s)",
        rsn,
        direction_id,
        cleaned,
        corrected,
        from_stop_name,
    )
    return corrected


def clean_direction_headsign(
    direction_id: int | None,
    from_stop_name: bool,
    headsign: str,
    *,
    route_short_name: str | None = None,
    table: OverrideTable | None = None,
    language: str | None = None,
) -> str:
    """Clean a direction label, correcting known per-route feed defects.

    The route number comes from the text itself (``"East - 84 ..."``) and falls
    back to ``route_short_name``. Only the compass word before the dash is
    kept; if ``(route, direction_id, label)`` has an override the corrected
    word is returned as is. Without a ``direction_id`` no override applies.
    """
    overrides = table if table is not None else default_table()
    lang = _language(language)
    return to_fixpoint(
        headsign,
        lambda s: _clean_direction_headsign_once(
            direction_id, from_stop_name, s, route_short_name, overrides, lang
        ),
    )
