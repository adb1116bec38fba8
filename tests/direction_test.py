import pytest

from ttc_headsigns.headsigns import (
    DirectionChoice,
    choose_direction,
    clean_direction_headsign,
    extract_route_key,
    select_direction_headsign,
)
from ttc_headsigns.overrides import OverrideRule, OverrideTable


@pytest.mark.parametrize(
    "headsign, expected",
    [
        ("East - 84 Sheppard West", "84"),
        ("52 - 123 Foo", "123"),
        ("- 84", "84"),
        ("Foo Bar", ""),
        ("84", ""),
        ("", ""),
    ],
)
def test_extract_route_key(headsign, expected):
    assert extract_route_key(headsign) == expected


@pytest.mark.parametrize(
    "first, second, expected",
    [
        ("L Downtown", "Uptown", DirectionChoice.SECOND),
        ("Uptown", "L Downtown", DirectionChoice.FIRST),
        ("East", "Kennedy Station", DirectionChoice.FIRST),
        ("East", "Main St Loop", DirectionChoice.FIRST),
        ("Kennedy Station", "West", DirectionChoice.SECOND),
        ("East", "East", DirectionChoice.UNDECIDED),
        ("East", "West", DirectionChoice.UNDECIDED),
        ("Kipling", "Kennedy", DirectionChoice.UNDECIDED),
        (None, "East", DirectionChoice.SECOND),
        (None, None, DirectionChoice.UNDECIDED),
    ],
)
def test_choose_direction(first, second, expected):
    assert choose_direction(first, second) is expected


def test_branch_rule_wins_over_compass_rule():
    assert choose_direction("L East", "Kennedy Station") is DirectionChoice.SECOND


def test_select_direction_headsign():
    assert select_direction_headsign("L Downtown", "Uptown") == "Uptown"
    assert select_direction_headsign("North", "Finch Station") == "North"
    assert select_direction_headsign("Kipling", "Kennedy") is None


@pytest.mark.parametrize(
    "direction_id, headsign, route, expected",
    [
        (1, "East", "84", "West"),
        (0, "West", "84", "East"),
        (1, "West", "84", "West"),
        (1, "East - 84 Sheppard West", None, "West"),
        (1, "East - 332 Eglinton West Blue Night", None, "West"),
        (1, "East - 352 Lawrence West Blue Night", None, "West"),
        (0, "East - 332 Eglinton West", None, "East"),
        (1, "SOUTH - 900 AIRPORT EXPRESS", None, "North"),
        (1, "EAST - 952 LAWRENCE WEST EXPRESS", None, "West"),
        (1, "EAST - 7 BATHURST", None, "East"),
        (1, "East - 84 Sheppard West", "7", "West"),
        (1, "East", None, "East"),
        (1, "CAFÃ‰ STATION", "84", "Café Station"),
        (1, "east - 84 Sheppard", None, "West"),
    ],
)
def test_clean_direction_headsign(direction_id, headsign, route, expected):
    assert (
        clean_direction_headsign(direction_id, False, headsign, route_short_name=route) == expected
    )


def test_clean_direction_headsign_with_custom_table():
    table = OverrideTable.from_rules(
        [OverrideRule(routes=["7"], direction_id=0, observed="North", corrected="South")]
    )
    assert clean_direction_headsign(0, True, "NORTH", route_short_name="7", table=table) == "South"
    assert clean_direction_headsign(1, True, "NORTH", route_short_name="7", table=table) == "North"


def test_clean_direction_headsign_logs_corrections(caplog):
    with caplog.at_level("DEBUG", logger="ttc_headsigns.headsigns"):
        clean_direction_headsign(1, False, "East", route_short_name="84")
    assert "'East' -> 'West'" in caplog.text


@pytest.mark.parametrize(
    "direction_id, headsign",
    [
        (1, "East - 84 Sheppard West"),
        (0, "West - 84 Sheppard West"),
        (1, "SOUTH - 900 AIRPORT EXPRESS"),
        (0, "north"),
        (0, "\x83"),
        (1, "\x83"),
        (1, "CAFÃ‰ STATION"),
    ],
)
def test_clean_direction_headsign_idempotent(direction_id, headsign):
    once = clean_direction_headsign(direction_id, False, headsign, route_short_name="84")
    twice = clean_direction_headsign(direction_id, False, once, route_short_name="84")
    assert twice == once


def test_clean_direction_headsign_without_direction_id_skips_overrides():
    assert clean_direction_headsign(None, False, "West - 84 Sheppard") == "West"
    assert clean_direction_headsign(None, False, "East", route_short_name="84") == "East"
