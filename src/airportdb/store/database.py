"""SQLite-backed airport store.

This module owns the destination database: opening and initialising the
file, the idempotent upserts the importer writes through, and thin
read-only accessors over the result.

Typical usage:
    with AirportStore.open("data/airports.sqlite") as store:
        store.upsert_airport(airport)

        airport = store.get_airport("KPAO")
        runways = store.get_runways("KPAO")
"""

import logging
import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from airportdb.store.models import (
    Airport,
    FrequencySet,
    FrequencySlot,
    Infrastructure,
    Runway,
    RunwayEnd,
    RunwaySide,
    SurfaceType,
    column_names,
)
from airportdb.store.schema import SCHEMA, TABLES

logger = logging.getLogger(__name__)

_AIRPORT_COLUMNS = column_names(Airport)
_FREQUENCY_COLUMNS = column_names(FrequencySet)

_UPSERT_AIRPORT = f"""
    INSERT INTO airports ({", ".join(_AIRPORT_COLUMNS)})
    VALUES ({", ".join("?" for _ in _AIRPORT_COLUMNS)})
    ON CONFLICT(icao) DO UPDATE SET
        {", ".join(f"{c} = excluded.{c}" for c in _AIRPORT_COLUMNS if c != "icao")},
        updated_at = CURRENT_TIMESTAMP
"""

_UPSERT_RUNWAY = """
    INSERT INTO runways (id, airport_icao, length_ft, width_ft, surface, lighted)
    VALUES (?, ?, ?, ?, ?, ?)
    ON CONFLICT(id) DO UPDATE SET
        airport_icao = excluded.airport_icao,
        length_ft = excluded.length_ft,
        width_ft = excluded.width_ft,
        surface = excluded.surface,
        lighted = excluded.lighted
"""

_INSERT_RUNWAY_END = """
    INSERT INTO runway_ends (
        id, runway_id, side, ident, heading_deg_true, latitude, longitude,
        displaced_threshold_ft, elevation_ft
    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

_UPSERT_FREQUENCIES = f"""
    INSERT INTO frequencies ({", ".join(_FREQUENCY_COLUMNS)})
    VALUES ({", ".join("?" for _ in _FREQUENCY_COLUMNS)})
    ON CONFLICT(airport_icao) DO UPDATE SET
        {", ".join(f"{c} = excluded.{c}" for c in _FREQUENCY_COLUMNS if c != "airport_icao")}
"""


class StoreError(Exception):
    """Raised when the destination store cannot be opened or initialised."""


class AirportStore:
    """Single-writer handle on the airport database.

    The handle is created explicitly and passed to whoever needs it; its
    owner closes it. Foreign keys are enforced on the connection.

    Examples:
        >>> with AirportStore.open("data/airports.sqlite") as store:
        ...     print(store.count_airports())
    """

    def __init__(self, connection: sqlite3.Connection, path: Path | None = None) -> None:
        """Wrap an open connection.

        Args:
            connection: Open SQLite connection
            path: File the connection points at, for diagnostics
        """
        self._conn = connection
        self._conn.row_factory = sqlite3.Row
        self.path = path

    @classmethod
    def open(cls, path: str | Path) -> "AirportStore":
        """Open (creating if needed) the database file and apply the schema.

        Args:
            path: Database file path, or ":memory:"

        Returns:
            Store ready for writes.

        Raises:
            StoreError: If the file cannot be opened or the schema applied.
        """
        if str(path) != ":memory:":
            path = Path(path)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StoreError(f"Cannot create directory for {path}: {e}") from e

        try:
            connection = sqlite3.connect(str(path))
            connection.execute("PRAGMA foreign_keys = ON")
            connection.executescript(SCHEMA)
            connection.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open database {path}: {e}") from e

        logger.info("Opened airport store at %s", path)
        return cls(connection, Path(path) if str(path) != ":memory:" else None)

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()

    def __enter__(self) -> "AirportStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run a block of writes as one unit: commit on success, roll back on error."""
        with self._conn:
            yield self._conn

    # -- writes -------------------------------------------------------------

    def upsert_airport(self, airport: Airport) -> bool:
        """Insert or overwrite an airport keyed by ICAO.

        created_at is left untouched on update; updated_at is refreshed.

        Returns:
            True if the airport was new, False if an existing row was updated.
        """
        with self.transaction() as conn:
            created = not self._exists(conn, "airports", "icao", airport.icao)
            conn.execute(_UPSERT_AIRPORT, [getattr(airport, c) for c in _AIRPORT_COLUMNS])
        return created

    def upsert_runway(self, runway: Runway, ends: Sequence[RunwayEnd]) -> bool:
        """Write a runway and replace its full set of ends atomically.

        Ends from an earlier import that are not in ``ends`` are removed.

        Returns:
            True if the runway was new, False if an existing row was updated.
        """
        with self.transaction() as conn:
            created = not self._exists(conn, "runways", "id", runway.id)
            conn.execute(
                _UPSERT_RUNWAY,
                (
                    runway.id,
                    runway.airport_icao,
                    runway.length_ft,
                    runway.width_ft,
                    runway.surface.value,
                    int(runway.lighted),
                ),
            )
            conn.execute("DELETE FROM runway_ends WHERE runway_id = ?", (runway.id,))
            conn.executemany(
                _INSERT_RUNWAY_END,
                [
                    (
                        end.id,
                        end.runway_id,
                        end.side.value,
                        end.ident,
                        end.heading_deg_true,
                        end.latitude,
                        end.longitude,
                        end.displaced_threshold_ft,
                        end.elevation_ft,
                    )
                    for end in ends
                ],
            )
        return created

    def upsert_frequencies(self, frequencies: FrequencySet) -> bool:
        """Insert or overwrite the wide frequency row of one airport.

        Returns:
            True if the row was new, False if an existing row was updated.
        """
        with self.transaction() as conn:
            created = not self._exists(
                conn, "frequencies", "airport_icao", frequencies.airport_icao
            )
            conn.execute(
                _UPSERT_FREQUENCIES, [getattr(frequencies, c) for c in _FREQUENCY_COLUMNS]
            )
        return created

    @staticmethod
    def _exists(conn: sqlite3.Connection, table: str, column: str, value: object) -> bool:
        row = conn.execute(f"SELECT 1 FROM {table} WHERE {column} = ? LIMIT 1", (value,)).fetchone()
        return row is not None

    # -- reads --------------------------------------------------------------

    def airport_exists(self, icao: str) -> bool:
        """Exact-match lookup used to resolve foreign keys during import."""
        return self._exists(self._conn, "airports", "icao", icao)

    def get_airport(self, icao: str) -> Airport | None:
        """Get airport by ICAO code.

        Examples:
            >>> airport = store.get_airport("KPAO")
            >>> if airport:
            ...     print(airport.name)
        """
        row = self._conn.execute("SELECT * FROM airports WHERE icao = ?", (icao,)).fetchone()
        return self._airport_from_row(row) if row else None

    def get_airport_by_iata(self, iata: str) -> Airport | None:
        """Get the first airport carrying an IATA code."""
        row = self._conn.execute(
            "SELECT * FROM airports WHERE iata = ? ORDER BY icao LIMIT 1", (iata,)
        ).fetchone()
        return self._airport_from_row(row) if row else None

    def get_airports_by_country(self, country_code: str) -> list[Airport]:
        return self._select_airports("WHERE country_code = ?", (country_code,))

    def get_airports_by_state(self, state: str, country_code: str | None = None) -> list[Airport]:
        """Airports in an ISO region, optionally restricted to one country."""
        if country_code:
            return self._select_airports(
                "WHERE state = ? AND country_code = ?", (state, country_code)
            )
        return self._select_airports("WHERE state = ?", (state,))

    def get_airports_by_city(self, city: str) -> list[Airport]:
        return self._select_airports("WHERE city = ?", (city,))

    def get_airports_by_type(self, airport_type: str) -> list[Airport]:
        return self._select_airports("WHERE type = ?", (airport_type,))

    def get_airports_with_towers(self) -> list[Airport]:
        return self._select_airports("WHERE has_tower = 1", ())

    def get_runways(self, icao: str) -> list[Runway]:
        """Get runways for an airport, ordered by id.

        Returns:
            List of runways (empty if none found)
        """
        rows = self._conn.execute(
            "SELECT * FROM runways WHERE airport_icao = ? ORDER BY id", (icao,)
        ).fetchall()
        return [
            Runway(
                id=row["id"],
                airport_icao=row["airport_icao"],
                length_ft=row["length_ft"],
                width_ft=row["width_ft"],
                surface=SurfaceType(row["surface"]),
                lighted=bool(row["lighted"]),
            )
            for row in rows
        ]

    def get_runway_ends(self, runway_id: int) -> list[RunwayEnd]:
        """Get the ends of a runway, low end first."""
        rows = self._conn.execute(
            "SELECT * FROM runway_ends WHERE runway_id = ? ORDER BY id", (runway_id,)
        ).fetchall()
        return [
            RunwayEnd(
                runway_id=row["runway_id"],
                side=RunwaySide(row["side"]),
                ident=row["ident"],
                heading_deg_true=row["heading_deg_true"],
                latitude=row["latitude"],
                longitude=row["longitude"],
                displaced_threshold_ft=row["displaced_threshold_ft"],
                elevation_ft=row["elevation_ft"],
            )
            for row in rows
        ]

    def get_frequencies(self, icao: str) -> FrequencySet | None:
        """Get the frequency row of an airport, if any."""
        row = self._conn.execute(
            "SELECT * FROM frequencies WHERE airport_icao = ?", (icao,)
        ).fetchone()
        if row is None:
            return None
        return FrequencySet(
            airport_icao=row["airport_icao"],
            **{slot.value: row[slot.value] for slot in FrequencySlot},
        )

    def get_fuel_types(self, icao: str) -> list[str]:
        rows = self._conn.execute(
            "SELECT fuel_type FROM fuel_available WHERE airport_icao = ? ORDER BY fuel_type",
            (icao,),
        ).fetchall()
        return [row["fuel_type"] for row in rows]

    def get_infrastructure(self, icao: str) -> Infrastructure | None:
        row = self._conn.execute(
            "SELECT * FROM infrastructure WHERE airport_icao = ?", (icao,)
        ).fetchone()
        if row is None:
            return None
        return Infrastructure(
            airport_icao=row["airport_icao"],
            has_fbo=_optional_bool(row["has_fbo"]),
            has_hangars=_optional_bool(row["has_hangars"]),
            has_tie_downs=_optional_bool(row["has_tie_downs"]),
        )

    def get_airac_cycle(self, icao: str) -> str | None:
        """AIRAC cycle recorded for an airport in the operational table."""
        row = self._conn.execute(
            "SELECT airac_cycle FROM operational WHERE airport_icao = ?", (icao,)
        ).fetchone()
        return row["airac_cycle"] if row else None

    def count_airports(self) -> int:
        return self.count("airports")

    def count(self, table: str) -> int:
        """Row count of one of the store's tables.

        Raises:
            ValueError: If the table is not part of the schema.
        """
        if table not in TABLES:
            raise ValueError(f"Unknown table: {table}")
        return self._conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]

    def get_countries(self) -> list[str]:
        """Sorted ISO codes of all countries with at least one airport."""
        rows = self._conn.execute(
            "SELECT DISTINCT country_code FROM airports ORDER BY country_code"
        ).fetchall()
        return [row["country_code"] for row in rows]

    def foreign_key_violations(self) -> list[tuple]:
        """Rows whose parent is missing, as reported by PRAGMA foreign_key_check."""
        return [tuple(row) for row in self._conn.execute("PRAGMA foreign_key_check").fetchall()]

    def _select_airports(self, where: str, params: tuple) -> list[Airport]:
        rows = self._conn.execute(f"SELECT * FROM airports {where} ORDER BY name", params)
        return [self._airport_from_row(row) for row in rows.fetchall()]

    @staticmethod
    def _airport_from_row(row: sqlite3.Row) -> Airport:
        return Airport(**{column: row[column] for column in _AIRPORT_COLUMNS})


def _optional_bool(value: int | None) -> bool | None:
    return None if value is None else bool(value)
