"""Typed source records, one class per CSV extract.

Every record class declares COLUMNS, a static mapping from its field names
to source header names. Fields are looked up by header name through a
HeaderIndex, so column order may change between dataset refreshes and
columns missing from a file simply read as None.

Records hold the raw (trimmed, possibly None) strings; validation and
normalization happen in the import stages.
"""

from dataclasses import dataclass
from typing import ClassVar, TypeVar

from airportdb.importer.csv_parser import HeaderIndex, parse_csv_line
from airportdb.store.models import RunwaySide

R = TypeVar("R", bound="SourceRecord")


class SourceRecord:
    """Base for records built from one CSV line."""

    COLUMNS: ClassVar[dict[str, str]] = {}

    @classmethod
    def from_line(cls: type[R], header: HeaderIndex, line: str) -> R:
        """Parse a data line into a record.

        Raises:
            CSVParseError: If the line has malformed quoting.
        """
        values = parse_csv_line(line)
        return cls(**{name: header.get(values, column) for name, column in cls.COLUMNS.items()})


@dataclass
class CountryRecord(SourceRecord):
    code: str | None
    name: str | None

    COLUMNS: ClassVar[dict[str, str]] = {"code": "code", "name": "name"}


@dataclass
class AirportRecord(SourceRecord):
    icao: str | None
    iata: str | None
    faa: str | None
    local: str | None
    name: str | None
    type: str | None
    latitude: str | None
    longitude: str | None
    elevation_ft: str | None
    country_code: str | None
    region: str | None
    city: str | None

    COLUMNS: ClassVar[dict[str, str]] = {
        "icao": "ident",
        "iata": "iata_code",
        "faa": "gps_code",
        "local": "local_code",
        "name": "name",
        "type": "type",
        "latitude": "latitude_deg",
        "longitude": "longitude_deg",
        "elevation_ft": "elevation_ft",
        "country_code": "iso_country",
        "region": "iso_region",
        "city": "municipality",
    }


@dataclass
class RunwayEndRecord:
    """Raw values describing one runway threshold."""

    side: RunwaySide
    ident: str | None
    heading: str | None
    latitude: str | None
    longitude: str | None
    displaced_threshold_ft: str | None
    elevation_ft: str | None


_END_FIELDS = (
    ("ident", "ident"),
    ("heading", "heading_degt"),
    ("latitude", "latitude_deg"),
    ("longitude", "longitude_deg"),
    ("displaced_threshold_ft", "displaced_threshold_ft"),
    ("elevation_ft", "elevation_ft"),
)


@dataclass
class RunwayRecord(SourceRecord):
    id: str | None
    airport_ident: str | None
    length_ft: str | None
    width_ft: str | None
    surface: str | None
    lighted: str | None
    closed: str | None
    le_ident: str | None
    le_heading: str | None
    le_latitude: str | None
    le_longitude: str | None
    le_displaced_threshold_ft: str | None
    le_elevation_ft: str | None
    he_ident: str | None
    he_heading: str | None
    he_latitude: str | None
    he_longitude: str | None
    he_displaced_threshold_ft: str | None
    he_elevation_ft: str | None

    COLUMNS: ClassVar[dict[str, str]] = {
        "id": "id",
        "airport_ident": "airport_ident",
        "length_ft": "length_ft",
        "width_ft": "width_ft",
        "surface": "surface",
        "lighted": "lighted",
        "closed": "closed",
        **{
            f"{side.value}_{name}": f"{side.value}_{column}"
            for side in RunwaySide
            for name, column in _END_FIELDS
        },
    }

    def end(self, side: RunwaySide) -> RunwayEndRecord:
        """Raw values of the low or high end of this runway."""
        return RunwayEndRecord(
            side=side, **{name: getattr(self, f"{side.value}_{name}") for name, _ in _END_FIELDS}
        )


@dataclass
class FrequencyRecord(SourceRecord):
    airport_ident: str | None
    type: str | None
    frequency_mhz: str | None

    COLUMNS: ClassVar[dict[str, str]] = {
        "airport_ident": "airport_ident",
        "type": "type",
        "frequency_mhz": "frequency_mhz",
    }
