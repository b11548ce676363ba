"""Line-oriented CSV parsing for the source extracts.

Source files are read one physical line at a time. Each line is split
with the standard csv module in strict mode, so a quoted field may hold
commas and doubled quotes, while broken quoting and undecodable bytes
are reported per line instead of silently absorbed.

Typical usage:
    for line_num, header, line in read_csv_rows(path):
        fields = parse_csv_line(line)
        name = header.get(fields, "name")
"""

import csv
import logging
import re
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

# Bytes that are not valid UTF-8 surface as lone surrogates (surrogateescape)
_UNDECODABLE = re.compile("[\udc80-\udcff]")


class CSVParseError(ValueError):
    """Raised when a line has malformed quoting."""


class SourceFileError(Exception):
    """Raised when a required source file is missing or unreadable."""


def parse_csv_line(line: str) -> list[str]:
    """Split one CSV line into trimmed fields.

    Blanks between a closing quote and the next delimiter are allowed.

    Args:
        line: A single line, with or without its line terminator.

    Returns:
        Ordered field values, surrounding whitespace removed.

    Raises:
        CSVParseError: If a quoted field is unterminated, a closing quote
            is followed by text, or the line held bytes that are not UTF-8.

    Examples:
        >>> parse_csv_line('a,"b,c",d')
        ['a', 'b,c', 'd']
        >>> parse_csv_line('"a""b" ,c')
        ['a"b', 'c']
    """
    line = line.rstrip("\r\n")
    if not line:
        return [""]
    if _UNDECODABLE.search(line):
        raise CSVParseError("Line contains bytes that are not valid UTF-8")

    try:
        fields = _split(line)
    except csv.Error as e:
        relaxed = _drop_blanks_after_quotes(line)
        if relaxed == line:
            raise CSVParseError(f"Malformed CSV line: {e}") from e
        try:
            fields = _split(relaxed)
        except csv.Error as e:
            raise CSVParseError(f"Malformed CSV line: {e}") from e

    return [field.strip() for field in fields]


def _split(line: str) -> list[str]:
    return next(csv.reader([line], skipinitialspace=True, strict=True))


def _drop_blanks_after_quotes(line: str) -> str:
    """Remove blanks that sit between a closing quote and a delimiter."""
    chars: list[str] = []
    in_quotes = False
    at_field_start = True
    i = 0
    while i < len(line):
        ch = line[i]
        i += 1
        if in_quotes:
            if ch == '"':
                if line[i : i + 1] == '"':
                    chars.append('""')
                    i += 1
                    continue
                in_quotes = False
                rest = line[i:].lstrip(" \t")
                if not rest or rest[0] == ",":
                    i = len(line) - len(rest)
        elif ch == ",":
            at_field_start = True
        elif ch == '"' and at_field_start:
            in_quotes = True
            at_field_start = False
        elif ch not in " \t":
            at_field_start = False
        chars.append(ch)
    return "".join(chars)


class HeaderIndex:
    """Case-insensitive column name to position mapping for one file.

    Attributes:
        columns: Lower-cased header names in file order

    Examples:
        >>> header = HeaderIndex.from_line("ICAO,Name")
        >>> header.get(["KPAO", "Palo Alto"], "name")
        'Palo Alto'
        >>> header.get(["KPAO", "Palo Alto"], "iata") is None
        True
    """

    def __init__(self, columns: list[str]) -> None:
        self.columns = [column.lower() for column in columns]
        self._positions: dict[str, int] = {}
        for position, column in enumerate(self.columns):
            self._positions.setdefault(column, position)

    @classmethod
    def from_line(cls, line: str) -> "HeaderIndex":
        return cls(parse_csv_line(line))

    def get(self, fields: list[str], column: str) -> str | None:
        """Look up a field by column name.

        Returns:
            The field value, or None if the column is not in this file, the
            row is too short, or the value is empty.
        """
        position = self._positions.get(column.lower())
        if position is None or position >= len(fields):
            return None
        return fields[position] or None


def read_csv_rows(path: str | Path) -> Iterator[tuple[int, HeaderIndex, str]]:
    """Stream the data lines of a CSV file.

    The first non-blank line is the header. Blank lines are skipped. Bytes
    that are not valid UTF-8 do not stop the stream; parse_csv_line rejects
    the line that holds them.

    Args:
        path: CSV file to read

    Yields:
        (line_number, header, raw_line) for each data line.

    Raises:
        SourceFileError: If the file does not exist, cannot be read, or has
            no header line.
    """
    path = Path(path)
    if not path.is_file():
        raise SourceFileError(f"Source file not found: {path}")

    try:
        with open(path, encoding="utf-8-sig", errors="surrogateescape", newline="") as f:
            header: HeaderIndex | None = None
            for line_num, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                if header is None:
                    try:
                        header = HeaderIndex.from_line(line)
                    except CSVParseError as e:
                        raise SourceFileError(f"Unreadable header in {path}: {e}") from e
                    logger.debug("Columns in %s: %s", path.name, header.columns)
                    continue
                yield line_num, header, line
    except OSError as e:
        raise SourceFileError(f"Cannot read source file {path}: {e}") from e

    if header is None:
        raise SourceFileError(f"Source file has no header line: {path}")
