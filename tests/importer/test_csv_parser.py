"""Tests for the CSV line parser, header index, and streaming reader."""

from pathlib import Path

import pytest

from airportdb.importer.csv_parser import (
    CSVParseError,
    HeaderIndex,
    SourceFileError,
    parse_csv_line,
    read_csv_rows,
)


class TestParseCsvLine:
    """Test splitting single lines into fields."""

    def test_plain_fields(self) -> None:
        """Test unquoted fields split on commas."""
        assert parse_csv_line("a,b,c") == ["a", "b", "c"]

    def test_quoted_comma_stays_in_field(self) -> None:
        """Test a comma inside quotes does not split the field."""
        assert parse_csv_line('a,"b,c",d') == ["a", "b,c", "d"]

    def test_doubled_quote_collapses(self) -> None:
        """Test doubled quotes inside a quoted field become one quote."""
        assert parse_csv_line('"a""b"') == ['a"b']

    def test_fields_are_trimmed(self) -> None:
        """Test surrounding whitespace is removed from every field."""
        assert parse_csv_line('  KPAO , "Palo Alto",7 ') == ["KPAO", "Palo Alto", "7"]

    def test_line_terminator_ignored(self) -> None:
        """Test CRLF and LF terminators are not part of the last field."""
        assert parse_csv_line("a,b\r\n") == ["a", "b"]
        assert parse_csv_line("a,b\n") == ["a", "b"]

    def test_empty_fields_preserved(self) -> None:
        """Test consecutive and trailing commas produce empty fields."""
        assert parse_csv_line("a,,c,") == ["a", "", "c", ""]

    def test_unterminated_quote_raises(self) -> None:
        """Test an unterminated quoted field is reported."""
        with pytest.raises(CSVParseError):
            parse_csv_line('a,"b,c')

    def test_text_after_closing_quote_raises(self) -> None:
        """Test a closing quote followed by text is reported."""
        with pytest.raises(CSVParseError):
            parse_csv_line('"ab"c,d')

    def test_blanks_after_closing_quote_allowed(self) -> None:
        """Test blanks between a closing quote and the delimiter are dropped."""
        assert parse_csv_line('a,"b" ,c') == ["a", "b", "c"]
        assert parse_csv_line('"x ""y"" , z"\t,w') == ['x "y" , z', "w"]
        assert parse_csv_line('a,"b"  ') == ["a", "b"]

    def test_blanks_then_text_after_quote_raises(self) -> None:
        with pytest.raises(CSVParseError):
            parse_csv_line('a,"b" c,d')

    def test_undecodable_bytes_raise(self) -> None:
        """Test a line holding non-UTF-8 bytes is a row-level error."""
        line = b"KBAD,Caf\xe9,1\n".decode("utf-8", errors="surrogateescape")

        with pytest.raises(CSVParseError, match="UTF-8"):
            parse_csv_line(line)

    def test_parse_error_is_value_error(self) -> None:
        """Test parse errors are row-level ValueErrors."""
        assert issubclass(CSVParseError, ValueError)


class TestHeaderIndex:
    """Test column lookup by name."""

    def test_lookup_is_case_insensitive(self) -> None:
        """Test header names match regardless of case."""
        header = HeaderIndex.from_line('"ID","Le_Heading_DegT"')
        assert header.get(["1", "140"], "le_heading_degT") == "140"
        assert header.columns == ["id", "le_heading_degt"]

    def test_missing_column_is_none(self) -> None:
        """Test a column absent from the file reads as None."""
        header = HeaderIndex.from_line("ident,name")
        assert header.get(["KPAO", "Palo Alto"], "iata_code") is None

    def test_short_row_is_none(self) -> None:
        """Test a row with fewer fields than the header reads as None."""
        header = HeaderIndex.from_line("ident,name,type")
        assert header.get(["KPAO"], "type") is None

    def test_empty_value_is_none(self) -> None:
        """Test an empty field reads as None."""
        header = HeaderIndex.from_line("ident,name")
        assert header.get(["KPAO", ""], "name") is None

    def test_reordered_columns(self) -> None:
        """Test lookups follow the header, not a fixed position."""
        first = HeaderIndex.from_line("ident,name")
        second = HeaderIndex.from_line("name,ident")
        assert first.get(["KPAO", "Palo Alto"], "name") == "Palo Alto"
        assert second.get(["Palo Alto", "KPAO"], "name") == "Palo Alto"


class TestReadCsvRows:
    """Test streaming data lines from a file."""

    def test_skips_header_and_blank_lines(self, tmp_path: Path) -> None:
        """Test blank lines are skipped and the header is not yielded."""
        path = tmp_path / "data.csv"
        path.write_text("\ncode,name\nUS,United States\n\n  \nGB,United Kingdom\n")

        rows = list(read_csv_rows(path))

        assert [line_num for line_num, _, _ in rows] == [3, 6]
        header = rows[0][1]
        assert header.get(parse_csv_line(rows[1][2]), "code") == "GB"

    def test_byte_order_mark_stripped(self, tmp_path: Path) -> None:
        """Test a UTF-8 BOM does not leak into the first column name."""
        path = tmp_path / "data.csv"
        path.write_bytes("\ufeffcode,name\nUS,United States\n".encode())

        _, header, _ = next(read_csv_rows(path))

        assert header.columns == ["code", "name"]

    def test_bad_byte_does_not_stop_stream(self, tmp_path: Path) -> None:
        """Test lines after an undecodable byte are still yielded."""
        path = tmp_path / "data.csv"
        path.write_bytes(b"code,name\nFR,Fran\xe7e\nDE,Germany\n")

        rows = list(read_csv_rows(path))

        assert [line_num for line_num, _, _ in rows] == [2, 3]
        with pytest.raises(CSVParseError):
            parse_csv_line(rows[0][2])
        assert parse_csv_line(rows[1][2]) == ["DE", "Germany"]

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Test a missing file is a fatal source error."""
        with pytest.raises(SourceFileError):
            list(read_csv_rows(tmp_path / "nope.csv"))

    def test_empty_file_raises(self, tmp_path: Path) -> None:
        """Test a file without a header line is a fatal source error."""
        path = tmp_path / "empty.csv"
        path.write_text("\n\n")

        with pytest.raises(SourceFileError, match="no header"):
            list(read_csv_rows(path))
