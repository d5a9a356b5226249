"""
Domain services for Flight Booking.

Services orchestrate ports (flight source, repositories) and the search
core (normalizer, predicate pipeline, sort engine).
"""

from src.flight_booking.services.booking_service import BookingService
from src.flight_booking.services.dashboard_service import DashboardService, DashboardStats
from src.flight_booking.services.filter_normalizer import normalize_filters
from src.flight_booking.services.flight_query_service import (
    FlightQueryService,
    query_flights,
)
from src.flight_booking.services.predicate_pipeline import apply_predicates
from src.flight_booking.services.sort_engine import sort_flights
from src.flight_booking.services.user_service import UserService

__all__ = [
    "BookingService",
    "DashboardService",
    "DashboardStats",
    "FlightQueryService",
    "UserService",
    "apply_predicates",
    "normalize_filters",
    "query_flights",
    "sort_flights",
]
