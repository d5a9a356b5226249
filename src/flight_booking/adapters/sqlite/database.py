"""
Database module for flight booking persistence.

This module provides a Database class for managing SQLite operations:
table creation, seeding of reference data, and locked query helpers
shared by the repositories.
"""

import json
import logging
import sqlite3
import threading
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Optional, Sequence

import pandas as pd

from src.flight_booking.exceptions import StorageError
from src.flight_booking.schemas.flight import City, Flight

logger = logging.getLogger(__name__)

FLIGHT_COLUMNS = (
    "id",
    "airline",
    "airline_code",
    "airline_logo",
    "flight_number",
    "departure_airport",
    "arrival_airport",
    "departure_date",
    "departure_time",
    "arrival_time",
    "duration",
    "duration_minutes",
    "stops",
    "stop_locations",
    "price",
    "destination",
)


class Database:
    """
    SQLite database manager for flights, cities, users and bookings.

    One connection is shared across threads (FastAPI runs sync endpoints
    in a thread pool); every statement runs under a re-entrant lock.

    Attributes:
        conn: The SQLite database connection object.

    Example:
        >>> db = Database("flight_booking.db")
        >>> db.seed_if_empty(PUBLIC_FLIGHTS, CITIES)
    """

    def __init__(self, db_path: str = "flight_booking.db") -> None:
        """
        Open the database and create tables.

        Args:
            db_path: Path to the SQLite database file, or ":memory:".
        """
        logger.debug("Connecting to database: %s", db_path)
        self.db_path = db_path
        self._lock = threading.RLock()
        try:
            self.conn: sqlite3.Connection = sqlite3.connect(
                db_path, check_same_thread=False
            )
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open database {db_path}: {e}") from e
        self.conn.row_factory = sqlite3.Row
        self._create_tables()

    def _create_tables(self) -> None:
        """
        Create database tables if they do not exist.

        Creates four tables:
            - flights: Bookable flight offers
            - cities: Cities served, for origin/destination pickers
            - users: User profiles and roles
            - bookings: Confirmed bookings
        """
        with self._lock:
            cursor = self.conn.cursor()

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS flights (
                    id TEXT PRIMARY KEY,
                    airline TEXT,
                    airline_code TEXT,
                    airline_logo TEXT,
                    flight_number TEXT,
                    departure_airport TEXT NOT NULL,
                    arrival_airport TEXT NOT NULL,
                    departure_date TEXT,
                    departure_time TEXT,
                    arrival_time TEXT,
                    duration TEXT,
                    duration_minutes INTEGER,
                    stops INTEGER NOT NULL DEFAULT 0,
                    stop_locations TEXT,
                    price REAL NOT NULL,
                    destination TEXT
                )
            ''')

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS cities (
                    code TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    airport TEXT
                )
            ''')

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    email TEXT NOT NULL UNIQUE,
                    first_name TEXT,
                    last_name TEXT,
                    role TEXT NOT NULL DEFAULT 'user',
                    created_at TEXT,
                    updated_at TEXT
                )
            ''')

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS bookings (
                    id TEXT PRIMARY KEY,
                    booking_id TEXT NOT NULL UNIQUE,
                    user_id TEXT NOT NULL,
                    flight_id TEXT NOT NULL,
                    booking_date TEXT,
                    departure_date TEXT,
                    total_price REAL,
                    origin TEXT,
                    destination TEXT,
                    departure_time TEXT,
                    arrival_time TEXT,
                    duration TEXT,
                    stops INTEGER,
                    airline TEXT,
                    flight_number TEXT,
                    cabin_class TEXT,
                    trip_type TEXT,
                    passengers INTEGER,
                    price REAL,
                    status TEXT,
                    created_at TEXT,
                    passenger_details TEXT,
                    payment_details TEXT,
                    return_flight_id TEXT,
                    return_departure_date TEXT,
                    return_departure_time TEXT,
                    return_arrival_time TEXT
                )
            ''')

            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_flights_route "
                "ON flights (departure_airport, arrival_airport)"
            )
            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_bookings_user ON bookings (user_id)"
            )

            self.conn.commit()
        logger.debug("Database tables created/verified")

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the connection lock across several statements."""
        with self._lock:
            yield

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a write statement, commit, and return the affected row count."""
        with self._lock:
            try:
                cursor = self.conn.execute(sql, params)
                self.conn.commit()
            except sqlite3.IntegrityError:
                self.conn.rollback()
                raise
            except sqlite3.Error as e:
                self.conn.rollback()
                raise StorageError(f"Database write failed: {e}") from e
            return cursor.rowcount

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        with self._lock:
            try:
                return self.conn.execute(sql, params).fetchall()
            except sqlite3.Error as e:
                raise StorageError(f"Database read failed: {e}") from e

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        with self._lock:
            try:
                return self.conn.execute(sql, params).fetchone()
            except sqlite3.Error as e:
                raise StorageError(f"Database read failed: {e}") from e

    def read_frame(self, sql: str, params: Sequence[Any] = ()) -> pd.DataFrame:
        """Run a query and load the result with pandas."""
        with self._lock:
            # pandas expects plain tuple rows
            self.conn.row_factory = None
            try:
                return pd.read_sql(sql, self.conn, params=list(params))
            except (sqlite3.Error, pd.errors.DatabaseError) as e:
                raise StorageError(f"Database read failed: {e}") from e
            finally:
                self.conn.row_factory = sqlite3.Row

    def count(self, table: str) -> int:
        row = self.fetch_one(f"SELECT COUNT(*) AS n FROM {table}")
        return int(row["n"]) if row else 0

    def insert_flights(self, flights: Iterable[Flight]) -> int:
        """
        Insert flights, skipping ids that already exist.

        Returns:
            Number of rows inserted.
        """
        rows = [
            (
                f.id,
                f.airline,
                f.airline_code,
                f.airline_logo,
                f.flight_number,
                f.departure_airport,
                f.arrival_airport,
                f.departure_date,
                f.departure_time,
                f.arrival_time,
                f.duration,
                f.duration_minutes,
                f.stops,
                json.dumps(list(f.stop_locations)) if f.stop_locations is not None else None,
                f.price,
                f.destination,
            )
            for f in flights
        ]
        placeholders = ", ".join(["?"] * len(FLIGHT_COLUMNS))
        sql = (
            f"INSERT OR IGNORE INTO flights ({', '.join(FLIGHT_COLUMNS)}) "
            f"VALUES ({placeholders})"
        )
        with self._lock:
            try:
                before = self.conn.total_changes
                self.conn.executemany(sql, rows)
                self.conn.commit()
                inserted = self.conn.total_changes - before
            except sqlite3.Error as e:
                self.conn.rollback()
                raise StorageError(f"Inserting flights failed: {e}") from e
        logger.debug("Inserted %d of %d flights", inserted, len(rows))
        return inserted

    def insert_cities(self, cities: Iterable[City]) -> None:
        rows = [(c.code, c.name, c.airport) for c in cities]
        with self._lock:
            try:
                self.conn.executemany(
                    "INSERT OR IGNORE INTO cities (code, name, airport) VALUES (?, ?, ?)",
                    rows,
                )
                self.conn.commit()
            except sqlite3.Error as e:
                self.conn.rollback()
                raise StorageError(f"Inserting cities failed: {e}") from e

    def seed_if_empty(
        self,
        flights: Iterable[Flight],
        cities: Iterable[City],
    ) -> bool:
        """
        Load reference flights and cities into an empty database.

        Args:
            flights: Flights to insert when the flights table is empty.
            cities: Cities to insert when the cities table is empty.

        Returns:
            True if anything was seeded.
        """
        seeded = False
        with self._lock:
            if self.count("cities") == 0:
                self.insert_cities(cities)
                seeded = True
            if self.count("flights") == 0:
                inserted = self.insert_flights(flights)
                logger.info("Seeded %d flights into %s", inserted, self.db_path)
                seeded = True
        return seeded

    def close(self) -> None:
        with self._lock:
            self.conn.close()
        logger.debug("Closed database: %s", self.db_path)
