"""
Booking Service - assembles, stores and looks up bookings.

Coordinates:
- FlightSource (outbound and return flight lookup)
- BookingRepository (persistence)
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from src.flight_booking.exceptions import (
    BookingNotFoundError,
    FlightNotFoundError,
    InvalidBookingError,
)
from src.flight_booking.schemas.booking import Booking, BookingRequest, BookingStatus
from src.flight_booking.schemas.filters import CabinClass, TripType
from src.flight_booking.schemas.flight import Flight

if TYPE_CHECKING:
    from src.flight_booking.ports.flight_source import FlightSource
    from src.flight_booking.ports.repositories import BookingRepository

logger = logging.getLogger(__name__)

QR_CODE_URL = "https://api.qrserver.com/v1/create-qr-code/?size=150x150&data={booking_id}"

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_booking_id(sequence: int, when: datetime) -> str:
    """
    Format a human booking reference.

    Example:
        generate_booking_id(7, datetime(2024, 3, 9)) -> 'FLT-20240309-0007'
    """
    return f"FLT-{when:%Y%m%d}-{sequence:04d}"


def build_ticket(booking: Booking) -> Dict[str, Any]:
    """
    Ticket details for a booking, keyed the way the frontend renders them.

    Baggage allowance is 15kg for Economy and 30kg for any other cabin.
    """
    baggage = "15kg" if booking.cabin_class == CabinClass.ECONOMY.value else "30kg"
    return {
        "ticketNumber": f"TKT-{booking.booking_id}",
        "bookingId": booking.booking_id,
        "bookingDate": booking.booking_date,
        "passengerDetails": [p.to_dict() for p in booking.passenger_details],
        "flightDetails": {
            "airline": booking.airline,
            "flightNumber": booking.flight_number,
            "from": booking.origin,
            "to": booking.destination,
            "departureDate": booking.departure_date,
            "departureTime": booking.departure_time,
            "arrivalTime": booking.arrival_time,
            "cabin": booking.cabin_class,
        },
        "boardingInstructions": {
            "checkInTime": "2 hours before departure",
            "boardingGate": "To be announced",
            "baggageAllowance": baggage,
            "boardingTime": "30 minutes before departure",
        },
        "qrCode": QR_CODE_URL.format(booking_id=booking.booking_id),
        "status": (booking.status or BookingStatus.CONFIRMED).value,
    }


class BookingService:
    """
    Domain service for flight bookings.

    Attributes:
        _flight_source: Source used to resolve flight ids.
        _bookings: Booking persistence.
        _clock: Returns the current time; injectable for tests.
    """

    def __init__(
        self,
        flight_source: FlightSource,
        booking_repo: BookingRepository,
        clock: Optional[Clock] = None,
    ) -> None:
        self._flight_source = flight_source
        self._bookings = booking_repo
        self._clock = clock or utc_now

    def _find_return_flight(self, request: BookingRequest) -> Optional[Flight]:
        """First flight from destination back to origin, preferring the return date."""
        candidates = self._flight_source.fetch_flights(
            origin=request.destination,
            destination=request.origin,
        )
        if not candidates:
            logger.info(
                "No return flight %s->%s for round trip",
                request.destination,
                request.origin,
            )
            return None
        for flight in candidates:
            if flight.departure_date == request.return_date:
                return flight
        return candidates[0]

    def book_flight(self, request: BookingRequest, user_id: str) -> Booking:
        """
        Create and store a booking.

        Round trips (tripType RoundTrip with a return date) also pick a
        return flight when one exists. The CVV is stored hashed.

        Args:
            request: Validated booking request.
            user_id: Owner of the new booking.

        Returns:
            The stored Booking.

        Raises:
            InvalidBookingError: If no user id is given.
            FlightNotFoundError: If the outbound flight does not exist.
        """
        if not user_id:
            raise InvalidBookingError("A booking needs an owning user")

        outbound = self._flight_source.get_flight(request.flight_id)
        if outbound is None:
            raise FlightNotFoundError(request.flight_id)

        return_flight = None
        if request.trip_type == TripType.ROUND_TRIP.value and request.return_date:
            return_flight = self._find_return_flight(request)

        base_price = outbound.price
        return_price = return_flight.price if return_flight else 0
        total_price = (base_price + return_price) * request.passengers

        now = self._clock()
        timestamp = now.isoformat()
        booking = Booking(
            id=str(uuid.uuid4()),
            booking_id="",
            user_id=user_id,
            flight_id=outbound.id,
            booking_date=timestamp,
            departure_date=request.departure_date,
            total_price=total_price,
            origin=request.origin,
            destination=request.destination,
            departure_time=outbound.departure_time,
            arrival_time=outbound.arrival_time,
            duration=outbound.duration,
            stops=outbound.stops,
            airline=outbound.airline,
            flight_number=outbound.flight_number,
            cabin_class=request.cabin_class,
            trip_type=request.trip_type,
            passengers=request.passengers,
            price=base_price,
            status=BookingStatus.CONFIRMED,
            created_at=timestamp,
            passenger_details=request.passenger_details,
            payment_details=(
                request.payment_details.with_hashed_cvv()
                if request.payment_details
                else None
            ),
            return_flight_id=return_flight.id if return_flight else None,
            return_departure_date=request.return_date,
            return_departure_time=return_flight.departure_time if return_flight else None,
            return_arrival_time=return_flight.arrival_time if return_flight else None,
        )

        stored = self._bookings.add_next(
            lambda sequence: replace(booking, booking_id=generate_booking_id(sequence, now))
        )
        logger.info(
            "Booked %s for user %s: flight %s x%d, total %.2f",
            stored.booking_id,
            user_id,
            outbound.id,
            request.passengers,
            total_price,
        )
        return stored

    def get_user_bookings(self, user_id: str) -> List[Booking]:
        return self._bookings.list_for_user(user_id)

    def get_booking(self, booking_id: str, user_id: str) -> Booking:
        """
        Return one of the user's bookings.

        Raises:
            BookingNotFoundError: If it does not exist or belongs to someone else.
        """
        booking = self._bookings.get(booking_id, user_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def generate_ticket(self, booking_id: str, user_id: str) -> Dict[str, Any]:
        return build_ticket(self.get_booking(booking_id, user_id))
