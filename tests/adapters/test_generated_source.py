"""
Tests for the generated flight source.
"""

import random

import pytest

from src.flight_booking.adapters.generated.mock_flights import (
    GeneratedFlightSource,
    format_duration,
    generate_mock_flights,
    iter_route_flights,
)
from src.flight_booking.data.seed_data import CITIES


class TestFormatDuration:
    @pytest.mark.parametrize("minutes,expected", [(60, "1h 0m"), (135, "2h 15m"), (299, "4h 59m")])
    def test_format(self, minutes, expected):
        assert format_duration(minutes) == expected


class TestGenerateMockFlights:
    """Value ranges and ids of generated flights."""

    @pytest.fixture
    def flights(self):
        return generate_mock_flights("DEL", "BOM", "2024-03-20", count=25, rng=random.Random(7))

    def test_ids_and_route(self, flights):
        assert [f.id for f in flights[:2]] == ["flight-DEL-BOM-0", "flight-DEL-BOM-1"]
        assert all(f.departure_airport == "DEL" and f.arrival_airport == "BOM" for f in flights)
        assert all(f.departure_date == "2024-03-20" for f in flights)

    def test_value_ranges(self, flights):
        for flight in flights:
            assert 60 <= flight.duration_minutes <= 299
            assert 200 <= flight.price <= 799
            assert 0 <= flight.stops <= 2
            assert len(flight.stop_locations) == flight.stops
            assert 4 <= int(flight.departure_time[:2]) <= 23
            assert flight.duration == format_duration(flight.duration_minutes)

    def test_seeded_rng_is_reproducible(self):
        first = generate_mock_flights("DEL", "BOM", "2024-03-20", 5, random.Random(1))
        second = generate_mock_flights("DEL", "BOM", "2024-03-20", 5, random.Random(1))
        assert first == second


class TestIterRouteFlights:
    def test_every_ordered_pair(self):
        cities = CITIES[:3]
        flights = list(iter_route_flights(cities, "2024-03-20", per_route=2))
        assert len(flights) == 3 * 2 * 2
        assert all(f.departure_airport != f.arrival_airport for f in flights)

    def test_zero_per_route(self):
        assert list(iter_route_flights(CITIES, "2024-03-20", per_route=0)) == []


class TestGeneratedFlightSource:
    """FlightSource behaviour over generated routes."""

    @pytest.fixture
    def source(self):
        return GeneratedFlightSource(seed=3, per_route=4, departure_date="2024-03-20", cities=CITIES[:3])

    def test_route_fetch(self, source):
        flights = source.fetch_flights(origin="DEL", destination="BOM")
        assert len(flights) == 4
        assert source.fetch_flights(origin="DEL", destination="BOM") == flights

    def test_origin_only(self, source):
        flights = source.fetch_flights(origin="DEL")
        assert len(flights) == 2 * 4
        assert {f.arrival_airport for f in flights} == {"BOM", "MAA"}

    def test_fetch_all(self, source):
        assert len(source.fetch_flights()) == 3 * 2 * 4

    def test_get_flight_by_id(self, source):
        flight = source.fetch_flights(origin="BOM", destination="MAA")[2]
        assert source.get_flight("flight-BOM-MAA-2") == flight

    @pytest.mark.parametrize("flight_id", ["flight-BOM-MAA-9", "flight-DEL-DEL-0", "abc", "flight-BOM-MAA-x"])
    def test_unknown_ids(self, source, flight_id):
        assert source.get_flight(flight_id) is None

    def test_matches_seeded_iteration(self):
        """Same seed and date as iter_route_flights gives the same flights."""
        source = GeneratedFlightSource(seed=0, per_route=3, departure_date="2024-03-20", cities=CITIES[:2])
        expected = list(iter_route_flights(CITIES[:2], "2024-03-20", per_route=3, seed=0))
        assert source.fetch_flights() == expected

    def test_metadata(self, source):
        assert source.name == "Generated"
        assert source.is_available
        assert [c.code for c in source.get_cities()] == ["DEL", "BOM", "MAA"]
