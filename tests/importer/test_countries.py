"""Tests for the country index."""

from collections.abc import Callable
from pathlib import Path

import pytest

from airportdb.importer.countries import CountryIndex
from airportdb.importer.csv_parser import SourceFileError


class TestCountryIndex:
    """Test building and reading the country index."""

    def test_loads_rows_with_code_and_name(self, source_dir: Path) -> None:
        """Test rows with both values are loaded and others skipped."""
        countries = CountryIndex.load(source_dir / "countries.csv")

        assert len(countries) == 2
        assert countries.name_for("US") == "United States"
        assert countries.name_for("GB") == "United Kingdom"

    def test_unknown_code_falls_back_to_code(self) -> None:
        countries = CountryIndex({"US": "United States"})
        assert countries.name_for("ZZ") == "ZZ"

    def test_last_duplicate_wins(self, write_source: Callable[[str, str], Path]) -> None:
        """Test a repeated code keeps the last name."""
        path = write_source("countries.csv", 'code,name\nUS,"United States"\nUS,USA\n')

        assert CountryIndex.load(path).name_for("US") == "USA"

    def test_header_case_and_order_ignored(self, write_source: Callable[[str, str], Path]) -> None:
        path = write_source("countries.csv", "Name,CODE\nFrance,FR\n")

        assert CountryIndex.load(path).name_for("FR") == "France"

    def test_malformed_line_skipped(self, write_source: Callable[[str, str], Path]) -> None:
        path = write_source("countries.csv", 'code,name\nFR,"France\nDE,Germany\n')

        countries = CountryIndex.load(path)

        assert len(countries) == 1
        assert countries.name_for("DE") == "Germany"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(SourceFileError):
            CountryIndex.load(tmp_path / "countries.csv")
