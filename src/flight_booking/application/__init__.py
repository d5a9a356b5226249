"""
Application layer for Flight Booking.

Provides the facade that builds every dependency and hands the services
to consumers such as the HTTP API.
"""

from src.flight_booking.application.flight_booking_app import FlightBookingApp

__all__ = ["FlightBookingApp"]
