"""Country code to display name index built from countries.csv."""

import logging
from pathlib import Path

from airportdb.importer.csv_parser import CSVParseError, read_csv_rows
from airportdb.importer.records import CountryRecord

logger = logging.getLogger(__name__)


class CountryIndex:
    """In-memory mapping of ISO country code to display name.

    Built once per run and read-only afterwards.

    Examples:
        >>> countries = CountryIndex.load("tmp/countries.csv")
        >>> countries.name_for("US")
        'United States'
        >>> countries.name_for("ZZ")
        'ZZ'
    """

    def __init__(self, names: dict[str, str] | None = None) -> None:
        self._names: dict[str, str] = dict(names or {})

    @classmethod
    def load(cls, path: str | Path) -> "CountryIndex":
        """Read every row with both a code and a name.

        Rows missing either value, or with broken quoting, are skipped
        without counting. A repeated code keeps the last name seen.

        Raises:
            SourceFileError: If the file is missing or unreadable.
        """
        index = cls()
        for line_num, header, line in read_csv_rows(path):
            try:
                record = CountryRecord.from_line(header, line)
            except CSVParseError as e:
                logger.debug("Skipping country line %d: %s", line_num, e)
                continue
            if record.code and record.name:
                index._names[record.code] = record.name

        logger.info("Loaded %d countries", len(index))
        return index

    def name_for(self, code: str) -> str:
        """Display name for a code, falling back to the code itself."""
        return self._names.get(code, code)

    def __len__(self) -> int:
        return len(self._names)
