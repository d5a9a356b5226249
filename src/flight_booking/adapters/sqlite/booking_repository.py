"""
SQLite booking repository.

Passenger and payment details are stored as JSON text columns.
"""

import json
import logging
import sqlite3
from typing import Callable, List, Optional

from src.flight_booking.adapters.sqlite.database import Database
from src.flight_booking.exceptions import StorageError
from src.flight_booking.ports.repositories import BookingRepository
from src.flight_booking.schemas.booking import (
    Booking,
    BookingStatus,
    PassengerDetails,
    PaymentDetails,
)

logger = logging.getLogger(__name__)

BOOKING_COLUMNS = (
    "id",
    "booking_id",
    "user_id",
    "flight_id",
    "booking_date",
    "departure_date",
    "total_price",
    "origin",
    "destination",
    "departure_time",
    "arrival_time",
    "duration",
    "stops",
    "airline",
    "flight_number",
    "cabin_class",
    "trip_type",
    "passengers",
    "price",
    "status",
    "created_at",
    "passenger_details",
    "payment_details",
    "return_flight_id",
    "return_departure_date",
    "return_departure_time",
    "return_arrival_time",
)


def _to_row(booking: Booking) -> tuple:
    return (
        booking.id,
        booking.booking_id,
        booking.user_id,
        booking.flight_id,
        booking.booking_date,
        booking.departure_date,
        booking.total_price,
        booking.origin,
        booking.destination,
        booking.departure_time,
        booking.arrival_time,
        booking.duration,
        booking.stops,
        booking.airline,
        booking.flight_number,
        booking.cabin_class,
        booking.trip_type,
        booking.passengers,
        booking.price,
        booking.status.value,
        booking.created_at,
        json.dumps([p.to_dict() for p in booking.passenger_details]),
        json.dumps(booking.payment_details.to_dict()) if booking.payment_details else None,
        booking.return_flight_id,
        booking.return_departure_date,
        booking.return_departure_time,
        booking.return_arrival_time,
    )


def _from_row(row: sqlite3.Row) -> Booking:
    passengers = json.loads(row["passenger_details"] or "[]")
    payment = json.loads(row["payment_details"]) if row["payment_details"] else None
    return Booking(
        id=row["id"],
        booking_id=row["booking_id"],
        user_id=row["user_id"],
        flight_id=row["flight_id"],
        booking_date=row["booking_date"],
        departure_date=row["departure_date"],
        total_price=row["total_price"],
        origin=row["origin"],
        destination=row["destination"],
        departure_time=row["departure_time"],
        arrival_time=row["arrival_time"],
        duration=row["duration"],
        stops=row["stops"],
        airline=row["airline"],
        flight_number=row["flight_number"],
        cabin_class=row["cabin_class"],
        trip_type=row["trip_type"],
        passengers=row["passengers"],
        price=row["price"],
        status=BookingStatus(row["status"]),
        created_at=row["created_at"],
        passenger_details=tuple(PassengerDetails.from_dict(p) for p in passengers),
        payment_details=PaymentDetails.from_dict(payment) if payment else None,
        return_flight_id=row["return_flight_id"],
        return_departure_date=row["return_departure_date"],
        return_departure_time=row["return_departure_time"],
        return_arrival_time=row["return_arrival_time"],
    )


class SqliteBookingRepository(BookingRepository):
    """Booking persistence in the bookings table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def add(self, booking: Booking) -> Booking:
        placeholders = ", ".join(["?"] * len(BOOKING_COLUMNS))
        sql = f"INSERT INTO bookings ({', '.join(BOOKING_COLUMNS)}) VALUES ({placeholders})"
        try:
            self._db.execute(sql, _to_row(booking))
        except sqlite3.IntegrityError as e:
            raise StorageError(f"Booking {booking.booking_id} could not be stored: {e}") from e
        logger.debug("Stored booking %s", booking.booking_id)
        return booking

    def add_next(self, build: Callable[[int], Booking]) -> Booking:
        with self._db.locked():
            return self.add(build(self.count() + 1))

    def list_for_user(self, user_id: str) -> List[Booking]:
        rows = self._db.fetch_all(
            "SELECT * FROM bookings WHERE user_id = ? ORDER BY created_at, rowid",
            (user_id,),
        )
        return [_from_row(row) for row in rows]

    def get(self, booking_id: str, user_id: str) -> Optional[Booking]:
        row = self._db.fetch_one(
            "SELECT * FROM bookings WHERE (booking_id = ? OR id = ?) AND user_id = ?",
            (booking_id, booking_id, user_id),
        )
        return _from_row(row) if row else None

    def count(self) -> int:
        return self._db.count("bookings")

    def list_all(self) -> List[Booking]:
        rows = self._db.fetch_all("SELECT * FROM bookings ORDER BY created_at, rowid")
        return [_from_row(row) for row in rows]
