"""Typed rows persisted in the airport store.

Each dataclass mirrors one destination table. The importer builds them
from source records; the store's read accessors return them.
"""

from dataclasses import dataclass, fields
from enum import Enum


class SurfaceType(Enum):
    """Normalized runway surface."""

    ASPHALT = "asphalt"
    CONCRETE = "concrete"
    DIRT = "dirt"
    GRAVEL = "gravel"
    GRASS = "grass"
    METAL = "metal"
    WATER = "water"
    UNKNOWN = "unknown"


class RunwaySide(Enum):
    """Which threshold of a runway an end describes.

    The integer offset is added to runway_id * 10 to derive the end's id.
    """

    LOW = "le"
    HIGH = "he"

    @property
    def id_offset(self) -> int:
        return 1 if self is RunwaySide.LOW else 2


class FrequencySlot(Enum):
    """Radio service columns of the frequencies table."""

    ATIS = "atis"
    TOWER = "tower"
    GROUND = "ground"
    CLEARANCE = "clearance"
    UNICOM = "unicom"
    APPROACH = "approach"
    DEPARTURE = "departure"


@dataclass
class Airport:
    """Airport row.

    Attributes:
        icao: Primary identifier (e.g., "KPAO")
        name: Airport name
        type: Source category (e.g., "small_airport"), "unknown" if absent
        latitude: Latitude in degrees
        longitude: Longitude in degrees
        elevation_ft: Field elevation in feet
        country_code: ISO country code (e.g., "US")
        country: Country display name, or the code when unmapped
        iata: IATA code (3-letter, if exists)
        faa: FAA / GPS code
        local: Local code
        state: ISO region (e.g., "US-CA")
        city: Municipality
    """

    icao: str
    name: str
    type: str
    latitude: float
    longitude: float
    elevation_ft: int
    country_code: str
    country: str
    iata: str | None = None
    faa: str | None = None
    local: str | None = None
    state: str | None = None
    city: str | None = None


@dataclass
class Runway:
    """Runway row. Ends are stored separately as RunwayEnd rows."""

    id: int
    airport_icao: str
    length_ft: int
    width_ft: int
    surface: SurfaceType
    lighted: bool


@dataclass
class RunwayEnd:
    """One threshold of a runway.

    Attributes:
        runway_id: Owning runway
        side: Low or high end
        ident: Threshold label (e.g., "04L")
        heading_deg_true: True heading in degrees
        latitude: Threshold latitude
        longitude: Threshold longitude
        displaced_threshold_ft: Displaced threshold length, if published
        elevation_ft: Threshold elevation, if published
    """

    runway_id: int
    side: RunwaySide
    ident: str
    heading_deg_true: float
    latitude: float
    longitude: float
    displaced_threshold_ft: int | None = None
    elevation_ft: int | None = None

    @property
    def id(self) -> int:
        """Stable id derived from the runway id and the side."""
        return self.runway_id * 10 + self.side.id_offset


@dataclass
class FrequencySet:
    """Wide frequency row: one optional value per radio service."""

    airport_icao: str
    atis: str | None = None
    tower: str | None = None
    ground: str | None = None
    clearance: str | None = None
    unicom: str | None = None
    approach: str | None = None
    departure: str | None = None

    def offer(self, slot: FrequencySlot, value: str) -> bool:
        """Fill a slot unless it already holds a value.

        Returns:
            True if the value was stored, False if the slot was taken.
        """
        if getattr(self, slot.value) is not None:
            return False
        setattr(self, slot.value, value)
        return True

    def is_empty(self) -> bool:
        return all(getattr(self, slot.value) is None for slot in FrequencySlot)


@dataclass
class Infrastructure:
    """Reserved infrastructure row; the importer does not populate it."""

    airport_icao: str
    has_fbo: bool | None = None
    has_hangars: bool | None = None
    has_tie_downs: bool | None = None


def column_names(model: type) -> list[str]:
    """Column names of a row dataclass, in declaration order."""
    return [f.name for f in fields(model)]
