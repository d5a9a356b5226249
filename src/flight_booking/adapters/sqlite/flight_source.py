"""
SQLite Flight Source - SQL to DataFrame to Flight adapter.

Reads the flights table with pandas, validates the frame against
FlightFrameSchema at the boundary, then converts rows to Flight values.
"""

import json
import logging
from typing import Any, List, Optional

import pandas as pd

from src.flight_booking.adapters.sqlite.database import FLIGHT_COLUMNS, Database
from src.flight_booking.exceptions import StorageError
from src.flight_booking.ports.flight_source import FlightSource
from src.flight_booking.schemas.flight import City, Flight, FlightFrameSchema

logger = logging.getLogger(__name__)


def _decode_stop_locations(value: Any) -> Optional[List[str]]:
    if isinstance(value, str) and value:
        return json.loads(value)
    return None


def frame_to_flights(df: pd.DataFrame) -> List[Flight]:
    """
    Convert a validated flights frame into Flight values.

    Args:
        df: Frame with the flights table columns.

    Returns:
        Flights in frame order.
    """
    if df.empty:
        return []
    validated = FlightFrameSchema.validate(df)
    validated = validated.assign(
        stop_locations=validated["stop_locations"].map(_decode_stop_locations)
    )
    return [Flight.from_record(record) for record in validated.to_dict("records")]


class SqliteFlightSource(FlightSource):
    """
    Flight source backed by the application database.

    Attributes:
        _db: Shared Database instance.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    def fetch_flights(
        self,
        origin: Optional[str] = None,
        destination: Optional[str] = None,
    ) -> List[Flight]:
        query = f"SELECT {', '.join(FLIGHT_COLUMNS)} FROM flights WHERE 1=1"
        params: list = []

        if origin:
            query += " AND departure_airport = ?"
            params.append(origin)

        if destination:
            query += " AND arrival_airport = ?"
            params.append(destination)

        query += " ORDER BY rowid"

        logger.debug("Executing query: %s with params: %s", query, params)
        df = self._db.read_frame(query, params)

        if df.empty:
            logger.info("No flights found for %s->%s", origin or "*", destination or "*")
            return []

        flights = frame_to_flights(df)
        logger.debug("Loaded %d flights from %s", len(flights), self.name)
        return flights

    def get_flight(self, flight_id: str) -> Optional[Flight]:
        df = self._db.read_frame(
            f"SELECT {', '.join(FLIGHT_COLUMNS)} FROM flights WHERE id = ?",
            [flight_id],
        )
        flights = frame_to_flights(df)
        return flights[0] if flights else None

    def get_cities(self) -> List[City]:
        rows = self._db.fetch_all("SELECT code, name, airport FROM cities ORDER BY rowid")
        return [City(code=row["code"], name=row["name"], airport=row["airport"]) for row in rows]

    @property
    def name(self) -> str:
        return "SQLite"

    @property
    def is_available(self) -> bool:
        try:
            self._db.fetch_one("SELECT 1")
        except StorageError:
            logger.warning("SQLite flight source unavailable", exc_info=True)
            return False
        return True
