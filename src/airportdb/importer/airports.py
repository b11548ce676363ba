"""Airport stage: airports.csv into the airports table."""

from airportdb.importer.countries import CountryIndex
from airportdb.importer.normalize import to_int, to_number
from airportdb.importer.records import AirportRecord
from airportdb.importer.stage import ImportStage
from airportdb.importer.stats import ImportStats
from airportdb.store.database import AirportStore
from airportdb.store.models import Airport

DEFAULT_AIRPORT_TYPE = "unknown"


class AirportImporter(ImportStage[AirportRecord]):
    """Validates airport rows and upserts them keyed by identifier.

    A row is rejected when its identifier or name is missing, or when
    latitude, longitude, elevation or country code is missing or not
    numeric. Country names come from the CountryIndex.
    """

    name = "airports"
    record_type = AirportRecord

    def __init__(self, store: AirportStore, countries: CountryIndex) -> None:
        super().__init__(store)
        self.countries = countries

    def process(self, record: AirportRecord, stats: ImportStats) -> None:
        airport = self.build_airport(record)
        if airport is None:
            self.reject(stats, "%s", record.icao or record.name or "<no identifier>")
            return
        stats.record_write(self.store.upsert_airport(airport))

    def build_airport(self, record: AirportRecord) -> Airport | None:
        """Normalize a source record, or return None if it is not acceptable."""
        if not record.icao or not record.name:
            return None

        latitude = to_number(record.latitude)
        longitude = to_number(record.longitude)
        elevation_ft = to_int(record.elevation_ft)
        if latitude is None or longitude is None or elevation_ft is None:
            return None
        if not record.country_code:
            return None

        return Airport(
            icao=record.icao,
            name=record.name,
            type=record.type or DEFAULT_AIRPORT_TYPE,
            latitude=latitude,
            longitude=longitude,
            elevation_ft=elevation_ft,
            country_code=record.country_code,
            country=self.countries.name_for(record.country_code),
            iata=record.iata,
            faa=record.faa,
            local=record.local,
            state=record.region,
            city=record.city,
        )
