"""
Dashboard Service - admin overview figures.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Optional

from src.flight_booking.exceptions import AuthorizationError
from src.flight_booking.schemas.user import Identity
from src.flight_booking.services.booking_service import utc_now

if TYPE_CHECKING:
    from src.flight_booking.ports.flight_source import FlightSource
    from src.flight_booking.ports.repositories import BookingRepository, UserRepository

WELCOME_MESSAGE = "Welcome to the admin dashboard"


@dataclass(frozen=True)
class DashboardStats:
    total_users: int
    total_bookings: int
    revenue_this_month: float
    active_flights: int


class DashboardService:
    """
    Computes the admin dashboard from live storage.

    Revenue sums ``total_price`` of bookings created in the clock's
    current calendar month.
    """

    def __init__(
        self,
        flight_source: FlightSource,
        booking_repo: BookingRepository,
        user_repo: UserRepository,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._flight_source = flight_source
        self._bookings = booking_repo
        self._users = user_repo
        self._clock = clock or utc_now

    def welcome(self, actor: Identity) -> dict:
        if not actor.is_admin:
            raise AuthorizationError("Admin access required")
        return {
            "message": WELCOME_MESSAGE,
            "user": {"id": actor.id, "email": actor.email, "role": actor.role.value},
        }

    def get_stats(self, actor: Identity) -> DashboardStats:
        if not actor.is_admin:
            raise AuthorizationError("Admin access required")

        month_prefix = f"{self._clock():%Y-%m}"
        bookings = self._bookings.list_all()
        revenue = sum(
            b.total_price for b in bookings if b.created_at.startswith(month_prefix)
        )

        return DashboardStats(
            total_users=self._users.count(),
            total_bookings=len(bookings),
            revenue_this_month=float(revenue),
            active_flights=len(self._flight_source.fetch_flights()),
        )
