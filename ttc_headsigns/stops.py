"""Stop name cleaning."""

from __future__ import annotations

from ttc_headsigns import patterns as p
from ttc_headsigns.config import get_settings
from ttc_headsigns.text_cleaning import (
    clean_at,
    clean_bounds,
    clean_label,
    clean_numbers,
    clean_street_types,
    pipe,
    repair_text,
    to_fixpoint,
    to_lower_case_upper_case_words,
)


def _clean_stop_name_once(stop_name: str, lang: str) -> str:
    return pipe(
        stop_name,
        repair_text,
        lambda s: to_lower_case_upper_case_words(lang, s),
        clean_at,
        p.SIDE.apply,
        clean_bounds,
        lambda s: p.apply_rewrites(s, p.ABBREVIATION_FIXES),
        p.GO.apply,
        clean_street_types,
        clean_numbers,
        clean_label,
    )


def clean_stop_name(stop_name: str, *, language: str | None = None) -> str:
    """Normalize a GTFS stop name for display.

    ``"YONGE ST AT FINCH AVE EAST SIDE"`` -> ``"Yonge Street / Finch Avenue East"``
    """
    lang = language or get_settings().language
    return to_fixpoint(stop_name, lambda s: _clean_stop_name_once(s, lang))
