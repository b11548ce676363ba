"""CSV to SQLite import pipeline.

Typical usage:
    from airportdb.importer import ImportPipeline

    report = ImportPipeline(settings).run()
    print(report.format_summary())
"""

from airportdb.importer.airports import AirportImporter
from airportdb.importer.countries import CountryIndex
from airportdb.importer.csv_parser import (
    CSVParseError,
    HeaderIndex,
    SourceFileError,
    parse_csv_line,
    read_csv_rows,
)
from airportdb.importer.frequencies import FrequencyImporter
from airportdb.importer.pipeline import ImportPipeline
from airportdb.importer.runways import RunwayImporter
from airportdb.importer.stats import ImportReport, ImportStats

__all__ = [
    "AirportImporter",
    "CSVParseError",
    "CountryIndex",
    "FrequencyImporter",
    "HeaderIndex",
    "ImportPipeline",
    "ImportReport",
    "ImportStats",
    "RunwayImporter",
    "SourceFileError",
    "parse_csv_line",
    "read_csv_rows",
]
