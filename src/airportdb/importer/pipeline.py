"""Import pipeline driver.

Runs the four stages in order against one store handle:

    countries -> airports -> runways
                          -> frequencies

Typical usage:
    settings = ImportSettings.defaults()
    report = ImportPipeline(settings).run()
    print(report.format_summary())
"""

from airportdb.core.config import ImportSettings
from airportdb.core.logging_system import LoggerMixin
from airportdb.importer.airports import AirportImporter
from airportdb.importer.countries import CountryIndex
from airportdb.importer.csv_parser import SourceFileError
from airportdb.importer.frequencies import FrequencyImporter
from airportdb.importer.runways import RunwayImporter
from airportdb.importer.stats import ImportReport
from airportdb.store.database import AirportStore


class ImportPipeline(LoggerMixin):
    """Owns the store handle for one run and drives the stages.

    Examples:
        >>> pipeline = ImportPipeline(ImportSettings.defaults())
        >>> report = pipeline.run()
        >>> report.stage("airports").inserted
        28354
    """

    def __init__(self, settings: ImportSettings) -> None:
        self.settings = settings
        self.attach_logger("airportdb.importer.pipeline")

    def check_sources(self) -> None:
        """Fail fast when any source file is missing.

        Raises:
            SourceFileError: Naming the first missing file.
        """
        for path in self.settings.source_paths():
            if not path.is_file():
                raise SourceFileError(f"Required source file not found: {path}")

    def run(self) -> ImportReport:
        """Import all sources into the configured database.

        Returns:
            Counters for every stage.

        Raises:
            SourceFileError: If a source file is missing or unreadable.
            StoreError: If the database cannot be opened.
        """
        self.check_sources()
        self.log_info("Database: %s", self.settings.database_path)
        self.log_info("CSV source: %s", self.settings.source_dir)

        report = ImportReport()
        with AirportStore.open(self.settings.database_path) as store:
            countries = CountryIndex.load(self.settings.countries_path)
            report.countries = len(countries)

            report.stages.append(
                AirportImporter(store, countries).run(self.settings.airports_path)
            )
            report.stages.append(RunwayImporter(store).run(self.settings.runways_path))
            report.stages.append(FrequencyImporter(store).run(self.settings.frequencies_path))

            violations = store.foreign_key_violations()
            if violations:
                self.log_warning("%d rows reference missing parents", len(violations))

        return report
