"""
Port interfaces for Flight Booking.

Ports define the abstract interfaces the services use to reach storage
and external data. Adapters implement them.
"""

from src.flight_booking.ports.flight_source import FlightSource
from src.flight_booking.ports.repositories import BookingRepository, UserRepository

__all__ = [
    "BookingRepository",
    "FlightSource",
    "UserRepository",
]
