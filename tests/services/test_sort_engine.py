"""
Tests for the sort engine.
"""

import pytest

from src.flight_booking.schemas.filters import SortOption
from src.flight_booking.services.sort_engine import sort_flights


def _ids(flights):
    return [f.id for f in flights]


@pytest.fixture
def flights(make_flight):
    return [
        make_flight(id="a", price=300, duration_minutes=90, departure_time="12:00"),
        make_flight(id="b", price=100, duration_minutes=None, departure_time="06:30"),
        make_flight(id="c", price=300, duration_minutes=45, departure_time=""),
        make_flight(id="d", price=200, duration_minutes=200, departure_time="21:15"),
    ]


class TestSortOrders:
    """Each recognized option."""

    def test_price_low_to_high(self, flights):
        assert _ids(sort_flights(flights, SortOption.PRICE_LOW_TO_HIGH)) == ["b", "d", "a", "c"]

    def test_price_high_to_low_keeps_ties_in_input_order(self, flights):
        assert _ids(sort_flights(flights, SortOption.PRICE_HIGH_TO_LOW)) == ["a", "c", "d", "b"]

    def test_duration_missing_counts_as_zero(self, flights):
        assert _ids(sort_flights(flights, SortOption.DURATION_SHORT_TO_LONG)) == ["b", "c", "a", "d"]

    def test_departure_soon_to_late_missing_first(self, flights):
        assert _ids(sort_flights(flights, SortOption.DEPARTURE_SOON_TO_LATE)) == ["c", "b", "a", "d"]

    def test_departure_late_to_soon(self, flights):
        assert _ids(sort_flights(flights, SortOption.DEPARTURE_LATE_TO_SOON)) == ["d", "a", "b", "c"]

    def test_string_option_accepted(self, flights):
        assert _ids(sort_flights(flights, "PriceLowToHigh")) == ["b", "d", "a", "c"]


class TestSortPassthrough:
    """Options without an ordering keep input order."""

    @pytest.mark.parametrize("option", [None, "Cheapest", SortOption.DURATION_LONG_TO_SHORT])
    def test_input_order_preserved(self, flights, option):
        assert _ids(sort_flights(flights, option)) == ["a", "b", "c", "d"]


class TestSortGuarantees:
    """Stability and non-mutation."""

    def test_equal_prices_keep_relative_order(self, make_flight):
        first = make_flight(id="first", price=500)
        second = make_flight(id="second", price=500)
        assert sort_flights([first, second], SortOption.PRICE_LOW_TO_HIGH) == [first, second]

    def test_returns_new_list(self, flights):
        before = list(flights)
        result = sort_flights(flights, SortOption.PRICE_LOW_TO_HIGH)
        assert result is not flights
        assert flights == before

    def test_passthrough_returns_new_list(self, flights):
        assert sort_flights(flights, None) is not flights

    def test_accepts_any_iterable(self, flights):
        assert _ids(sort_flights(iter(flights), SortOption.PRICE_LOW_TO_HIGH)) == ["b", "d", "a", "c"]
