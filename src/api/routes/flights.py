"""
Flight routes: search, public demo flights, cities, bookings and tickets.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Header, Request, status

from src.api.dependencies import get_booking_app, get_current_identity, get_optional_identity
from src.api.query_params import expand_query_params
from src.api.schemas import (
    BookingCreateRequest,
    BookingListResponse,
    BookingResponse,
    CityListResponse,
    FlightListResponse,
)
from src.flight_booking.application.flight_booking_app import FlightBookingApp
from src.flight_booking.exceptions import AuthorizationError
from src.flight_booking.schemas.booking import BookingRequest, PassengerDetails, PaymentDetails
from src.flight_booking.schemas.user import Identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flights", tags=["flights"])


def _to_booking_request(body: BookingCreateRequest) -> BookingRequest:
    return BookingRequest(
        flight_id=body.flight_id,
        origin=body.origin,
        destination=body.destination,
        departure_date=body.departure_date,
        passengers=body.passengers,
        cabin_class=body.cabin_class,
        trip_type=body.trip_type,
        return_date=body.return_date,
        passenger_details=tuple(
            PassengerDetails(p.full_name, p.phone_number, p.id_number)
            for p in body.passenger_details
        ),
        payment_details=(
            PaymentDetails(
                card_number=body.payment_details.card_number,
                expiry_date=body.payment_details.expiry_date,
                cvv=body.payment_details.cvv,
                name_on_card=body.payment_details.name_on_card,
            )
            if body.payment_details
            else None
        ),
    )


@router.get("/public", response_model=FlightListResponse)
def get_public_flights(booking_app: FlightBookingApp = Depends(get_booking_app)):
    return {"flights": booking_app.flights.get_public_flights()}


@router.get("", response_model=FlightListResponse)
def get_flights(
    request: Request,
    identity: Optional[Identity] = Depends(get_optional_identity),
    booking_app: FlightBookingApp = Depends(get_booking_app),
):
    """Search with filters from the query string (bracket notation allowed)."""
    filters = expand_query_params(request.query_params.multi_items())
    return {"flights": booking_app.flights.search(filters, identity)}


@router.post("/search", response_model=FlightListResponse)
def search_flights(
    filters: Optional[Dict[str, Any]] = Body(default=None),
    identity: Optional[Identity] = Depends(get_optional_identity),
    booking_app: FlightBookingApp = Depends(get_booking_app),
):
    """Search with a JSON filter body."""
    return {"flights": booking_app.flights.search(filters, identity)}


@router.post("/booking", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def book_flight(
    body: BookingCreateRequest,
    identity: Identity = Depends(get_current_identity),
    booking_app: FlightBookingApp = Depends(get_booking_app),
):
    booking = booking_app.bookings.book_flight(_to_booking_request(body), identity.id)
    return {"booking": booking}


@router.get("/bookings", response_model=BookingListResponse)
def get_user_bookings(
    identity: Identity = Depends(get_current_identity),
    x_user_id: Optional[str] = Header(default=None),
    booking_app: FlightBookingApp = Depends(get_booking_app),
):
    """Caller's bookings; admins may name another user in X-User-Id."""
    target = x_user_id or identity.id
    if not identity.can_access(target):
        raise AuthorizationError("Only admins can view other users' bookings")
    return {"bookings": booking_app.bookings.get_user_bookings(target)}


@router.get("/bookings/user/{user_id}", response_model=BookingListResponse)
def get_bookings_by_user_id(
    user_id: str,
    identity: Identity = Depends(get_current_identity),
    booking_app: FlightBookingApp = Depends(get_booking_app),
):
    if not identity.can_access(user_id):
        raise AuthorizationError("You can only view your own bookings")
    return {"bookings": booking_app.bookings.get_user_bookings(user_id)}


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: str,
    identity: Identity = Depends(get_current_identity),
    booking_app: FlightBookingApp = Depends(get_booking_app),
):
    return {"booking": booking_app.bookings.get_booking(booking_id, identity.id)}


@router.get("/bookings/{booking_id}/ticket")
def generate_ticket(
    booking_id: str,
    identity: Identity = Depends(get_current_identity),
    booking_app: FlightBookingApp = Depends(get_booking_app),
) -> Dict[str, Any]:
    return {"ticketDetails": booking_app.bookings.generate_ticket(booking_id, identity.id)}


@router.get("/cities/origin", response_model=CityListResponse)
def get_origin_cities(booking_app: FlightBookingApp = Depends(get_booking_app)):
    return {"cities": booking_app.flights.get_origin_cities()}


@router.get("/cities/destination", response_model=CityListResponse)
def get_destination_cities(booking_app: FlightBookingApp = Depends(get_booking_app)):
    return {"cities": booking_app.flights.get_destination_cities()}
