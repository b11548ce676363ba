"""Shared row loop for the import stages."""

import sqlite3
from pathlib import Path
from typing import ClassVar, Generic, TypeVar

from airportdb.core.logging_system import LoggerMixin
from airportdb.importer.csv_parser import read_csv_rows
from airportdb.importer.records import SourceRecord
from airportdb.importer.stats import PROGRESS_INTERVAL, ImportStats
from airportdb.store.database import AirportStore

R = TypeVar("R", bound=SourceRecord)


class ImportStage(LoggerMixin, Generic[R]):
    """Streams one source file through process(), one record at a time.

    Subclasses set name and record_type and implement process(). A row
    that raises ValueError (including CSVParseError) or violates a store
    constraint is logged and counted as skipped; the stream continues.
    """

    name: ClassVar[str]
    record_type: ClassVar[type[SourceRecord]]

    def __init__(self, store: AirportStore) -> None:
        self.store = store
        self.attach_logger(f"airportdb.importer.{self.name}")

    def run(self, path: str | Path) -> ImportStats:
        """Import every data line of a source file.

        Raises:
            SourceFileError: If the file is missing or unreadable.
        """
        stats = ImportStats(self.name)
        self.log_info("Importing %s from %s", self.name, path)

        for line_num, header, line in read_csv_rows(path):
            try:
                record = self.record_type.from_line(header, line)
                self.process(record, stats)
            except (ValueError, sqlite3.IntegrityError) as e:
                self.log_warning("Error on line %d of %s: %s", line_num, Path(path).name, e)
                stats.skipped += 1

            if line_num % PROGRESS_INTERVAL == 0:
                self.log_info("  ... line %d: %s", line_num, stats.describe())

        self.finish(stats)
        self.log_info("%s: %s", self.name.capitalize(), stats.describe())
        return stats

    def process(self, record: R, stats: ImportStats) -> None:
        """Validate and write one record, updating stats."""
        raise NotImplementedError

    def finish(self, stats: ImportStats) -> None:
        """Hook run after the last line; writes nothing by default."""

    def reject(self, stats: ImportStats, reason: str, *args: object) -> None:
        self.log_debug("Skipping %s row: " + reason, self.name, *args)
        stats.skipped += 1
