"""
Flight Source port interface.

Defines the abstract contract for data sources that provide flights and
the cities they serve.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.flight_booking.schemas.flight import City, Flight


class FlightSource(ABC):
    """
    Abstract interface for flight sources.

    Implementations:
    - SqliteFlightSource: flights table in the application database
    - GeneratedFlightSource: deterministic mock flights for a city pair
    """

    @abstractmethod
    def fetch_flights(
        self,
        origin: Optional[str] = None,
        destination: Optional[str] = None,
    ) -> List[Flight]:
        """
        Return flights, optionally restricted to a route.

        Args:
            origin: Keep only flights departing from this airport code.
            destination: Keep only flights arriving at this airport code.

        Returns:
            Flights in storage order.

        Raises:
            StorageError: If the backend cannot be read.
        """
        ...

    @abstractmethod
    def get_flight(self, flight_id: str) -> Optional[Flight]:
        """Return the flight with ``flight_id``, or None."""
        ...

    @abstractmethod
    def get_cities(self) -> List[City]:
        """Return all cities served by this source."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Human-readable name of this source.

        Returns:
            Source identifier (e.g., "SQLite", "Generated").
        """
        ...

    @property
    def is_available(self) -> bool:
        """
        Check if the source is currently available.

        Default implementation returns True. Override for sources that
        need connection health checks.
        """
        return True
