"""Runway stage: runways.csv into the runways and runway_ends tables.

Each accepted runway carries up to two ends. Ends are validated one at a
time; an incomplete end is dropped while the runway itself is kept. The
runway and its ends are written in one transaction, replacing whatever
ends a previous import left behind.
"""

from airportdb.importer.normalize import (
    normalize_surface,
    to_boolean,
    to_identifier,
    to_int,
    to_number,
)
from airportdb.importer.records import RunwayEndRecord, RunwayRecord
from airportdb.importer.stage import ImportStage
from airportdb.importer.stats import ImportStats
from airportdb.store.models import Runway, RunwayEnd, RunwaySide


class RunwayImporter(ImportStage[RunwayRecord]):
    """Imports open runways whose airport is already in the store."""

    name = "runways"
    record_type = RunwayRecord

    def process(self, record: RunwayRecord, stats: ImportStats) -> None:
        # Closed runways never reach the store, however complete they are
        if to_boolean(record.closed):
            self.reject(stats, "runway %s is closed", record.id)
            return

        runway = self.build_runway(record)
        if runway is None:
            self.reject(stats, "runway %s is incomplete", record.id)
            return

        if not self.store.airport_exists(runway.airport_icao):
            self.reject(
                stats, "runway %s references unknown airport %s", runway.id, runway.airport_icao
            )
            return

        ends = [
            end
            for end in (build_end(runway.id, record.end(side)) for side in RunwaySide)
            if end is not None
        ]
        stats.record_write(self.store.upsert_runway(runway, ends))
        stats.ends += len(ends)

    @staticmethod
    def build_runway(record: RunwayRecord) -> Runway | None:
        """Normalize the runway part of a record, or None if it is not acceptable."""
        runway_id = to_identifier(record.id)
        length_ft = to_int(record.length_ft)
        width_ft = to_int(record.width_ft)

        if runway_id is None or not record.airport_ident:
            return None
        if length_ft is None or width_ft is None or length_ft <= 0 or width_ft <= 0:
            return None

        return Runway(
            id=runway_id,
            airport_icao=record.airport_ident,
            length_ft=length_ft,
            width_ft=width_ft,
            surface=normalize_surface(record.surface),
            lighted=bool(to_boolean(record.lighted)),
        )


def build_end(runway_id: int, record: RunwayEndRecord) -> RunwayEnd | None:
    """Build one runway end, or None when ident, heading or position is missing."""
    heading = to_number(record.heading)
    latitude = to_number(record.latitude)
    longitude = to_number(record.longitude)

    if not record.ident or heading is None or latitude is None or longitude is None:
        return None

    return RunwayEnd(
        runway_id=runway_id,
        side=record.side,
        ident=record.ident,
        heading_deg_true=heading,
        latitude=latitude,
        longitude=longitude,
        displaced_threshold_ft=to_int(record.displaced_threshold_ft),
        elevation_ft=to_int(record.elevation_ft),
    )
