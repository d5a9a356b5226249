"""
Pydantic schemas (the JSON contract).

The frontend speaks camelCase; every model generates camelCase aliases
and also accepts snake_case names so domain dataclasses validate
directly. Booking payloads use ``from``/``to`` for the route.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.flight_booking.schemas.booking import BookingStatus
from src.flight_booking.schemas.user import UserRole


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# --- Flights ---


class FlightSchema(CamelModel):
    id: str
    airline: str
    airline_code: str
    airline_logo: str
    flight_number: str
    departure_airport: str
    arrival_airport: str
    departure_date: str
    departure_time: str
    arrival_time: str
    duration: str
    duration_minutes: Optional[int] = None
    stops: int
    stop_locations: Optional[List[str]] = None
    price: float
    destination: Optional[str] = None


class FlightListResponse(CamelModel):
    flights: List[FlightSchema]


class CitySchema(CamelModel):
    code: str
    name: str
    airport: str


class CityListResponse(CamelModel):
    cities: List[CitySchema]


# --- Bookings ---


class PassengerDetailsSchema(CamelModel):
    full_name: str
    phone_number: str
    id_number: str


class PaymentDetailsSchema(CamelModel):
    card_number: str
    expiry_date: str
    cvv: str
    name_on_card: str


class BookingCreateRequest(CamelModel):
    """Body of POST /flights/booking."""

    flight_id: str = Field(min_length=1)
    origin: str = Field(alias="from")
    destination: str = Field(alias="to")
    departure_date: str
    return_date: Optional[str] = None
    passengers: int = Field(ge=1)
    cabin_class: Optional[str] = None
    trip_type: Optional[str] = None
    passenger_details: List[PassengerDetailsSchema] = Field(default_factory=list)
    payment_details: Optional[PaymentDetailsSchema] = None


class BookingSchema(CamelModel):
    id: str
    booking_id: str
    user_id: str
    flight_id: str
    booking_date: str
    departure_date: str
    total_price: float
    origin: str = Field(alias="from")
    destination: str = Field(alias="to")
    departure_time: str
    arrival_time: str
    duration: str
    stops: int
    airline: str
    flight_number: str
    cabin_class: Optional[str] = None
    trip_type: Optional[str] = None
    passengers: int
    price: float
    status: BookingStatus
    created_at: str
    passenger_details: List[PassengerDetailsSchema] = Field(default_factory=list)
    payment_details: Optional[PaymentDetailsSchema] = None
    return_flight_id: Optional[str] = None
    return_departure_date: Optional[str] = None
    return_departure_time: Optional[str] = None
    return_arrival_time: Optional[str] = None


class BookingResponse(CamelModel):
    booking: BookingSchema


class BookingListResponse(CamelModel):
    bookings: List[BookingSchema]


# --- Users ---


class UserSchema(CamelModel):
    id: str
    email: str
    first_name: str
    last_name: str
    role: UserRole
    created_at: str
    updated_at: str


class UserCreateRequest(CamelModel):
    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    role: Optional[UserRole] = None
    id: Optional[str] = None


class UserUpdateRequest(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[UserRole] = None


# --- Dashboard ---


class IdentitySchema(CamelModel):
    id: str
    email: Optional[str] = None
    role: UserRole


class DashboardResponse(CamelModel):
    message: str
    user: IdentitySchema


class DashboardStatsSchema(CamelModel):
    total_users: int
    total_bookings: int
    revenue_this_month: float
    active_flights: int
