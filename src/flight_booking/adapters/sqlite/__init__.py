"""SQLite adapters: database, flight source and repositories."""

from src.flight_booking.adapters.sqlite.booking_repository import SqliteBookingRepository
from src.flight_booking.adapters.sqlite.database import Database
from src.flight_booking.adapters.sqlite.flight_source import SqliteFlightSource
from src.flight_booking.adapters.sqlite.user_repository import SqliteUserRepository

__all__ = [
    "Database",
    "SqliteBookingRepository",
    "SqliteFlightSource",
    "SqliteUserRepository",
]
