"""Relational store for airports, runways, runway ends, and frequencies.

Typical usage:
    from airportdb.store import AirportStore

    with AirportStore.open("data/airports.sqlite") as store:
        airport = store.get_airport("KPAO")
        runways = store.get_runways("KPAO")
"""

from airportdb.store.database import AirportStore, StoreError
from airportdb.store.models import (
    Airport,
    FrequencySet,
    FrequencySlot,
    Infrastructure,
    Runway,
    RunwayEnd,
    RunwaySide,
    SurfaceType,
)

__all__ = [
    "Airport",
    "AirportStore",
    "FrequencySet",
    "FrequencySlot",
    "Infrastructure",
    "Runway",
    "RunwayEnd",
    "RunwaySide",
    "StoreError",
    "SurfaceType",
]
