"""
FlightBookingApp - public entry point for the booking platform.

Acts as a Facade/Factory: builds the database, adapters and services
from Settings with sensible defaults, and exposes the services to the
HTTP layer.
"""

from __future__ import annotations

import logging
from datetime import date
from itertools import chain
from typing import Optional

from src.flight_booking.adapters.auth.jwt_service import JwtTokenService
from src.flight_booking.adapters.generated.mock_flights import (
    GeneratedFlightSource,
    iter_route_flights,
)
from src.flight_booking.adapters.sqlite.booking_repository import SqliteBookingRepository
from src.flight_booking.adapters.sqlite.database import Database
from src.flight_booking.adapters.sqlite.flight_source import SqliteFlightSource
from src.flight_booking.adapters.sqlite.user_repository import SqliteUserRepository
from src.flight_booking.config import Settings
from src.flight_booking.data.seed_data import CITIES, PUBLIC_FLIGHTS
from src.flight_booking.ports.flight_source import FlightSource
from src.flight_booking.services.booking_service import BookingService, Clock
from src.flight_booking.services.dashboard_service import DashboardService
from src.flight_booking.services.flight_query_service import FlightQueryService
from src.flight_booking.services.user_service import UserService

logger = logging.getLogger(__name__)

DEFAULT_GENERATED_PER_ROUTE = 10


class FlightBookingApp:
    """
    Wires storage, flight source and services together.

    Example usage:
        >>> app = FlightBookingApp(Settings(database_path=":memory:"))
        >>> flights = app.flights.search({"from": "DEL", "sortBy": "PriceLowToHigh"})
        >>> app.shutdown()

    Attributes:
        settings: Effective settings.
        database: Shared SQLite database.
        flight_source: Source used for search and booking.
        tokens: Access token service.
        flights: Flight search service.
        bookings: Booking service.
        users: User service.
        dashboard: Admin dashboard service.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        flight_source: Optional[FlightSource] = None,
        clock: Optional[Clock] = None,
        seed: bool = True,
    ) -> None:
        """
        Initialize the application with optional custom dependencies.

        Args:
            settings: Settings to use. Defaults to ``Settings.from_env()``.
            flight_source: Custom flight source. If None, ``settings.flight_source``
                picks the SQLite database or the in-memory generator.
            clock: Current-time provider for bookings and stats.
            seed: Seed demo flights and cities into an empty database.
        """
        self.settings = settings or Settings.from_env()
        self.database = Database(self.settings.database_path)

        if seed:
            generated = iter_route_flights(
                CITIES,
                departure_date=date.today().isoformat(),
                per_route=self.settings.seed_flights_per_route,
            )
            self.database.seed_if_empty(chain(PUBLIC_FLIGHTS, generated), CITIES)

        if flight_source is not None:
            self.flight_source = flight_source
        else:
            try:
                self.flight_source = self._configured_flight_source()
            except ValueError:
                self.database.close()
                raise

        booking_repo = SqliteBookingRepository(self.database)
        user_repo = SqliteUserRepository(self.database)

        self.tokens = JwtTokenService(
            secret=self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
            expires_minutes=self.settings.jwt_expires_minutes,
        )
        self.flights = FlightQueryService(self.flight_source)
        self.bookings = BookingService(self.flight_source, booking_repo, clock=clock)
        self.users = UserService(user_repo)
        self.dashboard = DashboardService(
            self.flight_source, booking_repo, user_repo, clock=clock
        )

        logger.info(
            "FlightBookingApp initialized with %s flight source (db=%s)",
            self.flight_source.name,
            self.settings.database_path,
        )

    def _configured_flight_source(self) -> FlightSource:
        kind = self.settings.flight_source
        if kind == "sqlite":
            return SqliteFlightSource(self.database)
        if kind == "generated":
            return GeneratedFlightSource(
                per_route=self.settings.seed_flights_per_route or DEFAULT_GENERATED_PER_ROUTE
            )
        raise ValueError(f"Unknown flight source: {kind!r}")

    @property
    def is_ready(self) -> bool:
        """Check if the flight source can serve requests."""
        return self.flight_source.is_available

    def shutdown(self) -> None:
        """Release the database connection."""
        self.database.close()
        logger.info("FlightBookingApp shutdown complete")

    def __enter__(self) -> "FlightBookingApp":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()
