"""
Generated flight source.

Produces plausible mock flights for a city pair. Generation is seeded
per route, so the same source returns the same flights on every call.
"""

import logging
import random
from datetime import date
from itertools import permutations
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from src.flight_booking.data.seed_data import AIRLINES, CITIES, STOP_LOCATIONS
from src.flight_booking.ports.flight_source import FlightSource
from src.flight_booking.schemas.flight import City, Flight

logger = logging.getLogger(__name__)

MIN_DURATION_MINUTES = 60
MAX_DURATION_MINUTES = 299
FIRST_DEPARTURE_HOUR = 4
LAST_DEPARTURE_HOUR = 23
MAX_STOPS = 2
MIN_PRICE = 200
MAX_PRICE = 799


def format_duration(minutes: int) -> str:
    """Format minutes as '{h}h {m}m' (e.g. 135 -> '2h 15m')."""
    return f"{minutes // 60}h {minutes % 60}m"


def generate_mock_flights(
    origin: str,
    destination: str,
    departure_date: str,
    count: int = 10,
    rng: Optional[random.Random] = None,
) -> List[Flight]:
    """
    Generate mock flights for one route.

    Args:
        origin: Departure airport code.
        destination: Arrival airport code.
        departure_date: Departure date for every generated flight.
        count: Number of flights.
        rng: Random source; a fresh unseeded one if omitted.

    Returns:
        ``count`` flights with ids ``flight-{origin}-{destination}-{i}``.
    """
    rng = rng or random.Random()
    flights = []

    for i in range(count):
        airline = rng.choice(AIRLINES)
        airline_code = airline["name"][:2].upper()
        flight_number = f"{airline_code}{rng.randint(1000, 1999)}"

        duration_minutes = rng.randint(MIN_DURATION_MINUTES, MAX_DURATION_MINUTES)
        departure_hour = rng.randint(FIRST_DEPARTURE_HOUR, LAST_DEPARTURE_HOUR)
        departure_minute = rng.randint(0, 59)

        arrival_total = departure_hour * 60 + departure_minute + duration_minutes
        arrival_hour = (arrival_total // 60) % 24
        arrival_minute = arrival_total % 60

        stops = rng.randint(0, MAX_STOPS)

        flights.append(
            Flight(
                id=f"flight-{origin}-{destination}-{i}",
                airline=airline["name"],
                airline_code=airline_code,
                airline_logo=airline["logo"],
                flight_number=flight_number,
                departure_airport=origin,
                arrival_airport=destination,
                departure_date=departure_date,
                departure_time=f"{departure_hour:02d}:{departure_minute:02d}",
                arrival_time=f"{arrival_hour:02d}:{arrival_minute:02d}",
                duration=format_duration(duration_minutes),
                duration_minutes=duration_minutes,
                stops=stops,
                stop_locations=tuple(STOP_LOCATIONS[:stops]),
                price=rng.randint(MIN_PRICE, MAX_PRICE),
                destination=destination,
            )
        )

    return flights


def iter_route_flights(
    cities: Sequence[City],
    departure_date: str,
    per_route: int,
    seed: int = 0,
) -> Iterator[Flight]:
    """Yield generated flights for every ordered pair of distinct cities."""
    for origin, destination in permutations([c.code for c in cities], 2):
        rng = random.Random(f"{seed}:{origin}:{destination}")
        yield from generate_mock_flights(origin, destination, departure_date, per_route, rng)


class GeneratedFlightSource(FlightSource):
    """
    In-memory flight source generating flights on demand.

    Routes are generated lazily and cached, so repeated fetches return
    equal flights.

    Attributes:
        _seed: Base seed mixed with each route.
        _per_route: Flights per route.
        _departure_date: Date stamped on generated flights.
    """

    def __init__(
        self,
        seed: int = 0,
        per_route: int = 10,
        departure_date: Optional[str] = None,
        cities: Sequence[City] = CITIES,
    ) -> None:
        self._seed = seed
        self._per_route = per_route
        self._departure_date = departure_date or date.today().isoformat()
        self._cities = list(cities)
        self._routes: Dict[Tuple[str, str], List[Flight]] = {}

    def _route(self, origin: str, destination: str) -> List[Flight]:
        key = (origin, destination)
        if key not in self._routes:
            rng = random.Random(f"{self._seed}:{origin}:{destination}")
            self._routes[key] = generate_mock_flights(
                origin, destination, self._departure_date, self._per_route, rng
            )
            logger.debug("Generated %d flights for %s->%s", self._per_route, origin, destination)
        return self._routes[key]

    def fetch_flights(
        self,
        origin: Optional[str] = None,
        destination: Optional[str] = None,
    ) -> List[Flight]:
        codes = [c.code for c in self._cities]
        origins = [origin] if origin else codes
        destinations = [destination] if destination else codes

        flights: List[Flight] = []
        for o in origins:
            for d in destinations:
                if o != d:
                    flights.extend(self._route(o, d))
        return flights

    def get_flight(self, flight_id: str) -> Optional[Flight]:
        parts = flight_id.split("-")
        if len(parts) != 4 or parts[0] != "flight":
            return None
        _, origin, destination, index = parts
        if not index.isdigit() or origin == destination:
            return None
        route = self._route(origin, destination)
        i = int(index)
        return route[i] if i < len(route) else None

    def get_cities(self) -> List[City]:
        return list(self._cities)

    @property
    def name(self) -> str:
        return "Generated"
