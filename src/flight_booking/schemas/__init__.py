"""
Schema definitions for Flight Booking.

Frozen dataclasses for domain values, and the pandera contract for
flight rows read from storage.
"""

from .booking import (
    Booking,
    BookingRequest,
    BookingStatus,
    PassengerDetails,
    PaymentDetails,
    hash_sensitive_data,
)
from .filters import (
    AirlineAllowList,
    AirlineAllowMap,
    CabinClass,
    CanonicalFilter,
    DepartureTimeBands,
    LegacyStops,
    PriceBounds,
    SortOption,
    StopsTriple,
    TripType,
    normalize_airline_key,
)
from .flight import City, Flight, FlightDataFrame, FlightFrameSchema
from .user import Identity, User, UserRole

__all__ = [
    # Flight schemas
    "City",
    "Flight",
    "FlightDataFrame",
    "FlightFrameSchema",
    # Filters
    "AirlineAllowList",
    "AirlineAllowMap",
    "CabinClass",
    "CanonicalFilter",
    "DepartureTimeBands",
    "LegacyStops",
    "PriceBounds",
    "SortOption",
    "StopsTriple",
    "TripType",
    "normalize_airline_key",
    # Bookings
    "Booking",
    "BookingRequest",
    "BookingStatus",
    "PassengerDetails",
    "PaymentDetails",
    "hash_sensitive_data",
    # Users
    "Identity",
    "User",
    "UserRole",
]
