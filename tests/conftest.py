"""
Shared fixtures.

Provides a flight factory, the three demo flights, an in-memory flight
source, and a FlightBookingApp over a temporary SQLite file with a
TestClient in front of it.
"""

from datetime import datetime, timezone
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.flight_booking.application.flight_booking_app import FlightBookingApp
from src.flight_booking.config import Settings
from src.flight_booking.data.seed_data import CITIES, PUBLIC_FLIGHTS
from src.flight_booking.ports.flight_source import FlightSource
from src.flight_booking.schemas.flight import City, Flight
from src.flight_booking.schemas.user import Identity, UserRole

FIXED_NOW = datetime(2024, 3, 9, 10, 30, tzinfo=timezone.utc)


class InMemoryFlightSource(FlightSource):
    """FlightSource over a fixed list, recording each fetch."""

    def __init__(self, flights: List[Flight], cities: Optional[List[City]] = None) -> None:
        self._flights = list(flights)
        self._cities = list(cities if cities is not None else CITIES)
        self.fetch_calls: list = []

    def fetch_flights(self, origin=None, destination=None) -> List[Flight]:
        self.fetch_calls.append((origin, destination))
        return [
            f
            for f in self._flights
            if (not origin or f.departure_airport == origin)
            and (not destination or f.arrival_airport == destination)
        ]

    def get_flight(self, flight_id: str) -> Optional[Flight]:
        return next((f for f in self._flights if f.id == flight_id), None)

    def get_cities(self) -> List[City]:
        return list(self._cities)

    @property
    def name(self) -> str:
        return "In-memory"


# =============================================================================
# FLIGHT DATA
# =============================================================================


@pytest.fixture
def make_flight():
    """Factory for flights with overridable defaults."""

    def _make(**overrides) -> Flight:
        values = dict(
            id="f1",
            airline="Air India",
            airline_code="AI",
            airline_logo="air-india-logo.png",
            flight_number="AI100",
            departure_airport="DEL",
            arrival_airport="BOM",
            departure_date="2024-03-20",
            departure_time="08:00",
            arrival_time="10:00",
            duration="2h 0m",
            duration_minutes=120,
            stops=0,
            price=500.0,
        )
        values.update(overrides)
        return Flight(**values)

    return _make


@pytest.fixture
def three_flights() -> List[Flight]:
    """The demo flights: prices 5500/6200/7800, stops 0/0/1."""
    return list(PUBLIC_FLIGHTS)


@pytest.fixture
def source_factory():
    """Build an InMemoryFlightSource over given flights."""
    return InMemoryFlightSource


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


# =============================================================================
# IDENTITIES
# =============================================================================


@pytest.fixture
def user_identity() -> Identity:
    return Identity(id="user-1", email="asha@example.com", role=UserRole.USER)


@pytest.fixture
def other_identity() -> Identity:
    return Identity(id="user-2", email="ravi@example.com", role=UserRole.USER)


@pytest.fixture
def admin_identity() -> Identity:
    return Identity(id="admin-1", email="admin@example.com", role=UserRole.ADMIN)


# =============================================================================
# APPLICATION
# =============================================================================


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings over a temporary database with only the demo flights seeded."""
    return Settings(
        database_path=str(tmp_path / "test_flights.db"),
        jwt_secret="test-secret",
        seed_flights_per_route=0,
    )


@pytest.fixture
def booking_app(settings, fixed_clock):
    app = FlightBookingApp(settings, clock=fixed_clock)
    yield app
    app.shutdown()


@pytest.fixture
def registered_users(booking_app, user_identity, other_identity, admin_identity):
    """Store profiles for the three test identities."""
    for identity, first, last in (
        (admin_identity, "Ada", "Admin"),
        (user_identity, "Asha", "Rao"),
        (other_identity, "Ravi", "Kumar"),
    ):
        booking_app.users.create_user(
            email=identity.email,
            first_name=first,
            last_name=last,
            actor=admin_identity,
            role=identity.role,
            user_id=identity.id,
        )
    return booking_app


@pytest.fixture
def client(booking_app) -> TestClient:
    return TestClient(create_app(booking_app=booking_app))


@pytest.fixture
def auth_headers(booking_app):
    """Build an Authorization header for an identity."""

    def _headers(identity: Identity) -> dict:
        return {"Authorization": f"Bearer {booking_app.tokens.issue(identity)}"}

    return _headers
