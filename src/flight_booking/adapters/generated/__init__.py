"""Generated (mock) flight data."""

from src.flight_booking.adapters.generated.mock_flights import (
    GeneratedFlightSource,
    generate_mock_flights,
    iter_route_flights,
)

__all__ = ["GeneratedFlightSource", "generate_mock_flights", "iter_route_flights"]
