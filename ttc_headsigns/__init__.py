# Auto-register passes on package import (e.g., when importing any submodule)
from . import passes  # noqa: F401
from .agency import exclude_stop_time, exclude_trip
from .headsigns import (
    DirectionChoice,
    choose_direction,
    clean_direction_headsign,
    clean_stop_headsign,
    clean_trip_headsign,
    extract_route_key,
    select_direction_headsign,
)
from .stops import clean_stop_name

__all__: list[str] = [
    "DirectionChoice",
    "choose_direction",
    "clean_direction_headsign",
    "clean_stop_headsign",
    "clean_stop_name",
    "clean_trip_headsign",
    "exclude_stop_time",
    "exclude_trip",
    "extract_route_key",
    "select_direction_headsign",
]
