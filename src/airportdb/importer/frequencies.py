"""Frequency stage: airport-frequencies.csv into the frequencies table.

The source has one line per (airport, service) pair while the table has
one row per airport with a column per service, so the import runs in two
passes: accumulate a FrequencySet per airport while streaming, then write
each non-empty set once the file is consumed.
"""

import sqlite3

from airportdb.importer.normalize import frequency_slot
from airportdb.importer.records import FrequencyRecord
from airportdb.importer.stage import ImportStage
from airportdb.importer.stats import ImportStats
from airportdb.store.database import AirportStore
from airportdb.store.models import FrequencySet


class FrequencyImporter(ImportStage[FrequencyRecord]):
    """Folds per-service rows into one wide row per airport.

    The first value seen for an (airport, slot) pair wins; later ones are
    counted as duplicates and ignored. "ctaf" shares the unicom slot.
    """

    name = "frequencies"
    record_type = FrequencyRecord

    def __init__(self, store: AirportStore) -> None:
        super().__init__(store)
        self.pending: dict[str, FrequencySet] = {}

    def process(self, record: FrequencyRecord, stats: ImportStats) -> None:
        if not record.airport_ident or not record.type or not record.frequency_mhz:
            self.reject(stats, "missing airport, type or frequency")
            return

        slot = frequency_slot(record.type)
        if slot is None:
            self.reject(stats, "unrecognized type %s", record.type)
            return

        frequencies = self.pending.get(record.airport_ident)
        if frequencies is None:
            if not self.store.airport_exists(record.airport_ident):
                self.reject(stats, "unknown airport %s", record.airport_ident)
                return
            frequencies = self.pending[record.airport_ident] = FrequencySet(record.airport_ident)

        if not frequencies.offer(slot, record.frequency_mhz):
            stats.duplicates += 1

    def finish(self, stats: ImportStats) -> None:
        """Write one row per airport that collected at least one frequency."""
        self.log_info("Writing frequencies for %d airports", len(self.pending))
        for frequencies in self.pending.values():
            if frequencies.is_empty():
                continue
            try:
                stats.record_write(self.store.upsert_frequencies(frequencies))
            except sqlite3.IntegrityError as e:
                self.log_warning("Cannot write frequencies of %s: %s", frequencies.airport_icao, e)
                stats.skipped += 1
        self.pending.clear()
