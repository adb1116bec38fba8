"""One registered pass per cleanable feed field.

Importing this package registers every pass with ``ttc_headsigns.framework``;
each submodule also exposes its pass under the field name
(``ttc_headsigns.passes.trip_headsign.trip_headsign``).
"""

from importlib import import_module

FIELDS = (
    "direction_headsign",
    "route_long_name",
    "stop_headsign",
    "stop_name",
    "trip_headsign",
)

for _field in FIELDS:
    import_module(f".{_field}", __name__)

__all__ = list(FIELDS)
