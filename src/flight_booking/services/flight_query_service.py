"""
Flight Query Service - search orchestrator.

Sequences normalize -> fetch -> filter -> sort. ``query_flights`` is the
pure core over an in-memory collection; ``FlightQueryService`` fetches
the collection from a FlightSource first.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, List, Mapping, Optional

from src.flight_booking.data.seed_data import PUBLIC_FLIGHTS
from src.flight_booking.exceptions import InvalidFlightCollectionError
from src.flight_booking.schemas.filters import CanonicalFilter
from src.flight_booking.schemas.flight import City, Flight
from src.flight_booking.services.filter_normalizer import normalize_filters
from src.flight_booking.services.predicate_pipeline import apply_predicates
from src.flight_booking.services.sort_engine import sort_flights

if TYPE_CHECKING:
    from src.flight_booking.ports.flight_source import FlightSource
    from src.flight_booking.schemas.user import Identity

logger = logging.getLogger(__name__)


def _require_collection(flights: Any) -> List[Flight]:
    if flights is None or isinstance(flights, (str, bytes, Mapping)):
        raise InvalidFlightCollectionError(flights)
    if not isinstance(flights, Iterable):
        raise InvalidFlightCollectionError(flights)
    return list(flights)


def _filter_and_sort(flights: List[Flight], canonical: CanonicalFilter) -> List[Flight]:
    filtered = apply_predicates(flights, canonical)
    if canonical.sort_by is None:
        return filtered
    return sort_flights(filtered, canonical.sort_by)


def query_flights(
    flights: Iterable[Flight],
    raw_filters: Optional[Mapping[str, Any]],
) -> List[Flight]:
    """
    Filter and sort an in-memory flight collection.

    The origin/destination pre-filter is a FlightSource concern and is
    not applied here.

    Args:
        flights: Flight collection (not modified).
        raw_filters: Raw filter payload; None or empty returns the
            collection unchanged.

    Returns:
        New list of the matching flights.

    Raises:
        InvalidFlightCollectionError: If ``flights`` is None or not iterable.
    """
    collection = _require_collection(flights)
    if not raw_filters:
        return collection
    return _filter_and_sort(collection, normalize_filters(raw_filters))


class FlightQueryService:
    """
    Search entry point over a FlightSource.

    Stateless and thread-safe; every call re-fetches from the source.

    Attributes:
        _flight_source: Source of flights and cities.
    """

    def __init__(self, flight_source: FlightSource) -> None:
        self._flight_source = flight_source

    def search(
        self,
        raw_filters: Optional[Mapping[str, Any]] = None,
        identity: Optional[Identity] = None,
    ) -> List[Flight]:
        """
        Run a flight search.

        Args:
            raw_filters: Raw filter payload. None or empty returns every
                flight from the source, unsorted.
            identity: Caller identity, if authenticated. Logged only;
                it never changes the result.

        Returns:
            Matching flights in the requested order.
        """
        start_time = time.perf_counter()

        if not raw_filters:
            flights = _require_collection(self._flight_source.fetch_flights())
            logger.info("Search without filters returned %d flights", len(flights))
            return flights

        canonical = normalize_filters(raw_filters)
        if canonical.use_route_filter:
            fetched = self._flight_source.fetch_flights(
                origin=canonical.origin,
                destination=canonical.destination,
            )
        else:
            fetched = self._flight_source.fetch_flights()

        candidates = _require_collection(fetched)
        results = _filter_and_sort(candidates, canonical)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Search %s->%s by %s: %d of %d flights in %.1fms",
            canonical.origin or "*",
            canonical.destination or "*",
            identity.id if identity else "anonymous",
            len(results),
            len(candidates),
            elapsed_ms,
        )
        return results

    def get_public_flights(self) -> List[Flight]:
        """Static demo flights shown on the landing page."""
        return list(PUBLIC_FLIGHTS)

    def get_origin_cities(self) -> List[City]:
        return self._flight_source.get_cities()

    def get_destination_cities(self) -> List[City]:
        return self._flight_source.get_cities()
