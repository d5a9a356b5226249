"""
Tests for BookingService.

Covers booking assembly, round-trip return-leg selection, booking id
sequencing, ownership on lookup, and ticket rendering.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest

from src.flight_booking.adapters.sqlite.booking_repository import SqliteBookingRepository
from src.flight_booking.adapters.sqlite.database import Database
from src.flight_booking.exceptions import (
    BookingNotFoundError,
    FlightNotFoundError,
    InvalidBookingError,
)
from src.flight_booking.schemas.booking import (
    BookingRequest,
    BookingStatus,
    PassengerDetails,
    PaymentDetails,
    hash_sensitive_data,
)
from src.flight_booking.services.booking_service import (
    BookingService,
    build_ticket,
    generate_booking_id,
)


@pytest.fixture
def database():
    db = Database(":memory:")
    yield db
    db.close()


@pytest.fixture
def repo(database):
    return SqliteBookingRepository(database)


@pytest.fixture
def source(source_factory, make_flight):
    return source_factory(
        [
            make_flight(id="out", price=500.0),
            make_flight(
                id="ret-early",
                departure_airport="BOM",
                arrival_airport="DEL",
                departure_date="2024-03-25",
                departure_time="09:00",
                arrival_time="11:00",
                price=300.0,
            ),
            make_flight(
                id="ret-match",
                departure_airport="BOM",
                arrival_airport="DEL",
                departure_date="2024-03-27",
                departure_time="18:00",
                arrival_time="20:00",
                price=350.0,
            ),
        ]
    )


@pytest.fixture
def service(source, repo, fixed_clock):
    return BookingService(source, repo, clock=fixed_clock)


def _request(**overrides):
    values = dict(
        flight_id="out",
        origin="DEL",
        destination="BOM",
        departure_date="2024-03-20",
        passengers=1,
        cabin_class="Economy",
        trip_type="OneWay",
        passenger_details=(PassengerDetails("Asha Rao", "+91-9000000000", "P1234567"),),
        payment_details=PaymentDetails("4111111111111111", "12/27", "123", "ASHA RAO"),
    )
    values.update(overrides)
    return BookingRequest(**values)


# =============================================================================
# HELPERS
# =============================================================================


class TestBookingId:
    def test_format(self):
        when = datetime(2024, 3, 9, tzinfo=timezone.utc)
        assert generate_booking_id(7, when) == "FLT-20240309-0007"


class TestBookingRequest:
    def test_empty_flight_id_rejected(self):
        with pytest.raises(ValueError):
            _request(flight_id="")

    def test_zero_passengers_rejected(self):
        with pytest.raises(ValueError):
            _request(passengers=0)


# =============================================================================
# BOOK
# =============================================================================


class TestBookFlight:
    """book_flight assembly and validation."""

    def test_one_way_booking(self, service):
        booking = service.book_flight(_request(passengers=2), "user-1")
        assert booking.booking_id == "FLT-20240309-0001"
        assert booking.user_id == "user-1"
        assert booking.flight_id == "out"
        assert booking.total_price == 1000.0
        assert booking.price == 500.0
        assert booking.status is BookingStatus.CONFIRMED
        assert booking.created_at == "2024-03-09T10:30:00+00:00"
        assert booking.departure_time == "08:00"
        assert booking.return_flight_id is None

    def test_cvv_is_hashed(self, service):
        booking = service.book_flight(_request(), "user-1")
        assert booking.payment_details.cvv == hash_sensitive_data("123")
        assert booking.payment_details.card_number == "4111111111111111"

    def test_sequence_increments(self, service):
        first = service.book_flight(_request(), "user-1")
        second = service.book_flight(_request(), "user-2")
        assert first.booking_id.endswith("-0001")
        assert second.booking_id.endswith("-0002")

    def test_concurrent_bookings_get_distinct_ids(self, service, repo):
        total = 120
        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = [
                pool.submit(service.book_flight, _request(), f"user-{n % 5}")
                for n in range(total)
            ]
            bookings = [future.result() for future in futures]

        ids = sorted(b.booking_id for b in bookings)
        assert ids == [f"FLT-20240309-{n:04d}" for n in range(1, total + 1)]
        assert repo.count() == total

    def test_round_trip_prefers_return_date(self, service):
        booking = service.book_flight(
            _request(trip_type="RoundTrip", return_date="2024-03-27", passengers=2), "user-1"
        )
        assert booking.return_flight_id == "ret-match"
        assert booking.return_departure_time == "18:00"
        assert booking.return_arrival_time == "20:00"
        assert booking.return_departure_date == "2024-03-27"
        assert booking.total_price == (500.0 + 350.0) * 2

    def test_round_trip_falls_back_to_first_candidate(self, service):
        booking = service.book_flight(
            _request(trip_type="RoundTrip", return_date="2024-04-01"), "user-1"
        )
        assert booking.return_flight_id == "ret-early"
        assert booking.total_price == 800.0

    def test_round_trip_without_return_date_is_one_way(self, service):
        booking = service.book_flight(_request(trip_type="RoundTrip"), "user-1")
        assert booking.return_flight_id is None
        assert booking.total_price == 500.0

    def test_round_trip_without_return_flight(self, service):
        booking = service.book_flight(
            _request(flight_id="ret-match", origin="BOM", destination="GOI",
                     trip_type="RoundTrip", return_date="2024-04-01"),
            "user-1",
        )
        assert booking.return_flight_id is None
        assert booking.total_price == 350.0

    def test_unknown_flight(self, service):
        with pytest.raises(FlightNotFoundError) as exc_info:
            service.book_flight(_request(flight_id="nope"), "user-1")
        assert exc_info.value.status_code == 404

    def test_missing_user(self, service):
        with pytest.raises(InvalidBookingError):
            service.book_flight(_request(), "")


# =============================================================================
# LOOKUP
# =============================================================================


class TestBookingLookup:
    """Ownership-scoped reads."""

    def test_user_bookings_scoped(self, service):
        service.book_flight(_request(), "user-1")
        service.book_flight(_request(), "user-2")
        service.book_flight(_request(), "user-1")
        mine = service.get_user_bookings("user-1")
        assert [b.booking_id for b in mine] == ["FLT-20240309-0001", "FLT-20240309-0003"]

    def test_get_by_reference_or_row_id(self, service):
        booking = service.book_flight(_request(), "user-1")
        assert service.get_booking(booking.booking_id, "user-1").id == booking.id
        assert service.get_booking(booking.id, "user-1").booking_id == booking.booking_id

    def test_round_trip_through_storage(self, service):
        booking = service.book_flight(_request(), "user-1")
        stored = service.get_booking(booking.booking_id, "user-1")
        assert stored == booking

    def test_other_users_booking_not_found(self, service):
        booking = service.book_flight(_request(), "user-1")
        with pytest.raises(BookingNotFoundError):
            service.get_booking(booking.booking_id, "user-2")


# =============================================================================
# TICKET
# =============================================================================


class TestTicket:
    """Ticket details rendering."""

    def test_ticket_fields(self, service):
        booking = service.book_flight(_request(), "user-1")
        ticket = service.generate_ticket(booking.booking_id, "user-1")
        assert ticket["ticketNumber"] == "TKT-FLT-20240309-0001"
        assert ticket["flightDetails"]["from"] == "DEL"
        assert ticket["flightDetails"]["to"] == "BOM"
        assert ticket["flightDetails"]["cabin"] == "Economy"
        assert ticket["boardingInstructions"]["baggageAllowance"] == "15kg"
        assert ticket["qrCode"].endswith("data=FLT-20240309-0001")
        assert ticket["status"] == "Confirmed"
        assert ticket["passengerDetails"][0]["fullName"] == "Asha Rao"

    def test_non_economy_baggage(self, service):
        booking = service.book_flight(_request(cabin_class="Business"), "user-1")
        assert build_ticket(booking)["boardingInstructions"]["baggageAllowance"] == "30kg"

    def test_ticket_requires_ownership(self, service):
        booking = service.book_flight(_request(), "user-1")
        with pytest.raises(BookingNotFoundError):
            service.generate_ticket(booking.booking_id, "user-2")
