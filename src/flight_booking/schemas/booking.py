"""
Booking schemas.

``BookingRequest`` is what a client submits; ``Booking`` is the stored
record assembled by the booking service.
"""

import hashlib
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class BookingStatus(str, Enum):
    CONFIRMED = "Confirmed"
    PENDING = "Pending"
    CANCELLED = "Cancelled"


def hash_sensitive_data(data: str) -> str:
    """Return the SHA-256 hex digest of ``data``."""
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class PassengerDetails:
    full_name: str
    phone_number: str
    id_number: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "fullName": self.full_name,
            "phoneNumber": self.phone_number,
            "idNumber": self.id_number,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PassengerDetails":
        return cls(
            full_name=data.get("fullName", ""),
            phone_number=data.get("phoneNumber", ""),
            id_number=data.get("idNumber", ""),
        )


@dataclass(frozen=True)
class PaymentDetails:
    """
    Card data attached to a booking.

    Stored bookings never hold the raw CVV; see ``with_hashed_cvv``.
    """

    card_number: str
    expiry_date: str
    cvv: str
    name_on_card: str

    def with_hashed_cvv(self) -> "PaymentDetails":
        """Return a copy whose CVV is replaced by its SHA-256 digest."""
        if not self.cvv:
            return self
        return replace(self, cvv=hash_sensitive_data(self.cvv))

    def to_dict(self) -> Dict[str, str]:
        return {
            "cardNumber": self.card_number,
            "expiryDate": self.expiry_date,
            "cvv": self.cvv,
            "nameOnCard": self.name_on_card,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaymentDetails":
        return cls(
            card_number=data.get("cardNumber", ""),
            expiry_date=data.get("expiryDate", ""),
            cvv=data.get("cvv", ""),
            name_on_card=data.get("nameOnCard", ""),
        )


@dataclass(frozen=True)
class BookingRequest:
    """
    A client's request to book a flight.

    Attributes:
        flight_id: Outbound flight identifier.
        origin: Departure airport code (``from`` on the wire).
        destination: Arrival airport code (``to`` on the wire).
        departure_date: Outbound departure date.
        passengers: Number of travellers; total price scales with it.
        cabin_class: Free-form cabin class.
        trip_type: Free-form trip type; ``RoundTrip`` looks up a return leg.
        return_date: Return date for round trips.
        passenger_details: Traveller details.
        payment_details: Card data, if supplied.
    """

    flight_id: str
    origin: str
    destination: str
    departure_date: str
    passengers: int
    cabin_class: Optional[str] = None
    trip_type: Optional[str] = None
    return_date: Optional[str] = None
    passenger_details: Tuple[PassengerDetails, ...] = ()
    payment_details: Optional[PaymentDetails] = None

    def __post_init__(self) -> None:
        if not self.flight_id:
            raise ValueError("flight_id cannot be empty")
        if self.passengers < 1:
            raise ValueError(f"passengers must be >= 1, got {self.passengers}")


@dataclass(frozen=True)
class Booking:
    """Stored booking record."""

    id: str
    booking_id: str
    user_id: str
    flight_id: str
    booking_date: str
    departure_date: str
    total_price: float
    origin: str
    destination: str
    departure_time: str
    arrival_time: str
    duration: str
    stops: int
    airline: str
    flight_number: str
    cabin_class: Optional[str]
    trip_type: Optional[str]
    passengers: int
    price: float
    status: BookingStatus
    created_at: str
    passenger_details: Tuple[PassengerDetails, ...] = field(default_factory=tuple)
    payment_details: Optional[PaymentDetails] = None
    return_flight_id: Optional[str] = None
    return_departure_date: Optional[str] = None
    return_departure_time: Optional[str] = None
    return_arrival_time: Optional[str] = None
