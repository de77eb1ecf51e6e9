"""Repository layer responsible for all database access."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol, Sequence

from demo_reset.domain.errors import PersistenceError
from demo_reset.utils.config import Settings, get_settings
from demo_reset.utils.logger import get_logger


logger = get_logger(__name__)


TABLE_COLUMNS: dict[str, tuple[str, ...]] = {
    "cabins": (
        "name",
        "max_capacity",
        "regular_price",
        "discount",
        "description",
        "image",
    ),
    "guests": (
        "full_name",
        "email",
        "nationality",
        "national_id",
        "country_flag",
    ),
    "bookings": (
        "created_at",
        "start_date",
        "end_date",
        "num_nights",
        "num_guests",
        "cabin_price",
        "extras_price",
        "total_price",
        "status",
        "has_breakfast",
        "is_paid",
        "observations",
        "cabin_id",
        "guest_id",
    ),
}


class PersistenceService(Protocol):
    """Storage boundary consumed by the reset workflow."""

    def delete_all(self, table: str) -> None:
        ...

    def bulk_insert(self, table: str, records: Sequence[Mapping[str, Any]]) -> list[int]:
        ...


def _require_table(table: str) -> tuple[str, ...]:
    try:
        return TABLE_COLUMNS[table]
    except KeyError:
        raise PersistenceError(f"unknown table {table!r}") from None


class DataRepository:
    """SQLite-backed persistence with enforced foreign keys."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._db_path = Path(self._settings.database_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def database_path(self) -> Path:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._db_path)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON;")
        return connection

    def initialize_database(self) -> None:
        """Create tables if they do not exist yet."""
        try:
            with self._connect() as conn:
                cursor = conn.cursor()

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS cabins (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        name TEXT NOT NULL,
                        max_capacity INTEGER NOT NULL CHECK (max_capacity > 0),
                        regular_price REAL NOT NULL CHECK (regular_price >= 0),
                        discount REAL NOT NULL DEFAULT 0,
                        description TEXT,
                        image TEXT,
                        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                        CHECK (discount <= regular_price)
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS guests (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        full_name TEXT NOT NULL,
                        email TEXT NOT NULL,
                        nationality TEXT,
                        national_id TEXT,
                        country_flag TEXT,
                        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS bookings (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        created_at TEXT NOT NULL,
                        start_date TEXT NOT NULL,
                        end_date TEXT NOT NULL,
                        num_nights INTEGER NOT NULL,
                        num_guests INTEGER NOT NULL CHECK (num_guests > 0),
                        cabin_price REAL NOT NULL,
                        extras_price REAL NOT NULL,
                        total_price REAL NOT NULL,
                        status TEXT NOT NULL
                            CHECK (status IN ('unconfirmed', 'checked-in', 'checked-out')),
                        has_breakfast INTEGER NOT NULL CHECK (has_breakfast IN (0,1)),
                        is_paid INTEGER NOT NULL CHECK (is_paid IN (0,1)),
                        observations TEXT,
                        cabin_id INTEGER NOT NULL,
                        guest_id INTEGER NOT NULL,
                        FOREIGN KEY (cabin_id) REFERENCES cabins(id),
                        FOREIGN KEY (guest_id) REFERENCES guests(id)
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE INDEX IF NOT EXISTS idx_bookings_status
                    ON bookings(status);
                    """
                )
                conn.commit()
            logger.info("Database initialized at %s", self._db_path)
        except sqlite3.Error as exc:
            raise PersistenceError(f"database initialization failed: {exc}") from exc

    def delete_all(self, table: str) -> None:
        """Remove every row from ``table``."""
        _require_table(table)
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute(f"DELETE FROM {table};")
                conn.commit()
                deleted = cursor.rowcount
        except sqlite3.Error as exc:
            raise PersistenceError(f"delete {table} failed: {exc}") from exc
        logger.info("Deleted %s rows from %s", deleted, table)

    def bulk_insert(self, table: str, records: Sequence[Mapping[str, Any]]) -> list[int]:
        """Insert ``records`` in one transaction and return ids in insertion order."""
        allowed_columns = _require_table(table)
        if not records:
            return []

        columns = tuple(records[0].keys())
        unknown = [column for column in columns if column not in allowed_columns]
        if unknown:
            raise PersistenceError(
                f"insert {table} failed: unknown columns {', '.join(sorted(unknown))}"
            )
        for record in records:
            if tuple(record.keys()) != columns:
                raise PersistenceError(
                    f"insert {table} failed: records do not share the same columns"
                )

        column_list = ", ".join(columns)
        placeholders = ", ".join("?" for _ in columns)
        statement = f"INSERT INTO {table} ({column_list}) VALUES ({placeholders});"

        assigned_ids: list[int] = []
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                for record in records:
                    cursor.execute(statement, tuple(record[column] for column in columns))
                    assigned_ids.append(int(cursor.lastrowid))
                conn.commit()
        except sqlite3.Error as exc:
            raise PersistenceError(f"insert {table} failed: {exc}") from exc

        logger.info("Inserted %s rows into %s", len(assigned_ids), table)
        return assigned_ids

    def count_rows(self, table: str) -> int:
        _require_table(table)
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT COUNT(*) AS count FROM {table};")
            return int(cursor.fetchone()["count"])

    def list_ids(self, table: str) -> list[int]:
        _require_table(table)
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT id FROM {table} ORDER BY id ASC;")
            return [int(row["id"]) for row in cursor.fetchall()]

    def list_bookings(self) -> list[dict[str, Any]]:
        """Return persisted bookings ordered by id."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT
                    id,
                    created_at,
                    start_date,
                    end_date,
                    num_nights,
                    num_guests,
                    cabin_price,
                    extras_price,
                    total_price,
                    status,
                    has_breakfast,
                    is_paid,
                    observations,
                    cabin_id,
                    guest_id
                FROM bookings
                ORDER BY id ASC;
                """
            )
            return [dict(row) for row in cursor.fetchall()]

    def count_bookings_by_status(self) -> dict[str, int]:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT status, COUNT(*) AS count
                FROM bookings
                GROUP BY status
                ORDER BY status ASC;
                """
            )
            return {str(row["status"]): int(row["count"]) for row in cursor.fetchall()}
