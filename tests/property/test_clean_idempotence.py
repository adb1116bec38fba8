import string
from functools import reduce
from typing import Callable, TypeVar

from hypothesis import given, settings, strategies as st

from ttc_headsigns.framework import Artifact
from ttc_headsigns.headsigns import (
    clean_direction_headsign,
    clean_stop_headsign,
    clean_trip_headsign,
)
from ttc_headsigns.passes.trip_headsign import trip_headsign
from ttc_headsigns.stops import clean_stop_name

T = TypeVar("T")


def _apply(times: int, fn: Callable[[T], T], value: T) -> T:
    return reduce(lambda acc, _: fn(acc), range(times), value)


words = st.sampled_from(
    [
        "at",
        "and",
        "to",
        "towards",
        "via",
        "short",
        "turn",
        "side",
        "north",
        "bound",
        "eb",
        "st",
        "dr",
        "ave",
        "rd",
        "first",
        "1st",
        "go",
        "hs",
        "ii",
        "52",
        "52a",
        "yonge",
        "lawrence",
        "west",
        "station",
    ]
)
alphabet = st.characters(categories=("Ll", "Lu", "Nd", "Zs"))
# Latin-1/Windows-1252 fragments that ftfy reads as mojibake
mojibake = st.sampled_from(["Ã©", "Ã‰", "Ã¨", "Â", "\x83", "\x85", "â€™", "CAFÃ‰", "é"])
samples = st.one_of(
    st.text(alphabet=alphabet, max_size=60),
    st.text(alphabet=string.ascii_letters + string.digits + " -/", max_size=60),
    st.lists(st.one_of(words, mojibake), max_size=8).map(" ".join),
)


@given(samples)
@settings(deadline=None)
def test_trip_headsign_idempotent(sample: str) -> None:
    once = clean_trip_headsign(sample)
    assert clean_trip_headsign(once) == once


@given(samples)
@settings(deadline=None)
def test_trip_headsign_pass_idempotent(sample: str) -> None:
    artifact = Artifact(payload=sample)
    once = trip_headsign(artifact)
    twice = _apply(2, trip_headsign, artifact)
    assert twice.payload == once.payload


@given(samples)
@settings(deadline=None)
def test_stop_headsign_idempotent(sample: str) -> None:
    once = clean_stop_headsign("52", "Lawrence West", sample)
    assert clean_stop_headsign("52", "Lawrence West", once) == once


@given(samples)
@settings(deadline=None)
def test_stop_name_idempotent(sample: str) -> None:
    once = clean_stop_name(sample)
    assert clean_stop_name(once) == once


@given(samples, st.sampled_from([0, 1]))
@settings(deadline=None)
def test_direction_headsign_idempotent(sample: str, direction_id: int) -> None:
    once = clean_direction_headsign(direction_id, False, sample, route_short_name="84")
    assert clean_direction_headsign(direction_id, False, once, route_short_name="84") == once
