"""
Sort engine.

Orders flights by one SortOption. Python's sort is stable, so ties keep
their input order, including for the descending orders.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from src.flight_booking.schemas.filters import SortOption
from src.flight_booking.schemas.flight import Flight

# option -> (key, reverse)
SORT_KEYS: Dict[SortOption, Tuple[Callable[[Flight], Any], bool]] = {
    SortOption.PRICE_LOW_TO_HIGH: (lambda f: f.price, False),
    SortOption.PRICE_HIGH_TO_LOW: (lambda f: f.price, True),
    SortOption.DURATION_SHORT_TO_LONG: (lambda f: f.duration_minutes or 0, False),
    SortOption.DEPARTURE_SOON_TO_LATE: (lambda f: f.departure_time or "", False),
    SortOption.DEPARTURE_LATE_TO_SOON: (lambda f: f.departure_time or "", True),
}


def sort_flights(
    flights: Iterable[Flight],
    sort_by: Optional[SortOption],
) -> List[Flight]:
    """
    Return a new list of ``flights`` ordered by ``sort_by``.

    Options without an ordering (None, unrecognized values and
    DurationLongToShort) return the flights in input order.
    """
    option = SortOption.parse(sort_by)
    if option not in SORT_KEYS:
        return list(flights)
    key, reverse = SORT_KEYS[option]
    return sorted(flights, key=key, reverse=reverse)
