"""
Search filter schemas.

The raw filter payload arrives in several incompatible shapes (each
frontend contract revision added its own). ``CanonicalFilter`` is the
single shape-resolved record the predicate pipeline works from. Every
dual-shape field is a tagged union: exactly one variant, or None.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Union


class CabinClass(str, Enum):
    """Recognized cabin classes. Free-form values are tolerated as well."""

    ECONOMY = "Economy"
    BUSINESS = "Business"
    FIRST_CLASS = "FirstClass"


class TripType(str, Enum):
    """Recognized trip types. Free-form values are tolerated as well."""

    ONE_WAY = "OneWay"
    ROUND_TRIP = "RoundTrip"


class SortOption(str, Enum):
    PRICE_LOW_TO_HIGH = "PriceLowToHigh"
    PRICE_HIGH_TO_LOW = "PriceHighToLow"
    DURATION_SHORT_TO_LONG = "DurationShortToLong"
    DURATION_LONG_TO_SHORT = "DurationLongToShort"
    DEPARTURE_SOON_TO_LATE = "DepartureSoonToLate"
    DEPARTURE_LATE_TO_SOON = "DepartureLateToSoon"

    @classmethod
    def parse(cls, value: object) -> Optional["SortOption"]:
        """Return the matching option, or None for anything unrecognized."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


_WHITESPACE = re.compile(r"\s+")


def normalize_airline_key(name: str) -> str:
    """
    Convert an airline display name into its allow-map key.

    Lower-cases and strips all whitespace. The frontend keys JetBlue as
    ``jetBlue``, so that one result is remapped.

    Examples:
        'Air India' -> 'airindia'
        'JetBlue'   -> 'jetBlue'
    """
    key = _WHITESPACE.sub("", name.lower())
    if key == "jetblue":
        return "jetBlue"
    return key


@dataclass(frozen=True)
class PriceBounds:
    """
    Inclusive price interval.

    An absent side is unconstrained (-inf / +inf). ``lower > upper`` is
    allowed and simply matches nothing.
    """

    lower: float = -math.inf
    upper: float = math.inf


@dataclass(frozen=True)
class AirlineAllowMap:
    """Airline keys (see ``normalize_airline_key``) whose flag was true."""

    allowed_keys: FrozenSet[str]


@dataclass(frozen=True)
class AirlineAllowList:
    """Exact airline display names to keep."""

    names: FrozenSet[str]

    @classmethod
    def create(cls, names: Iterable[str]) -> "AirlineAllowList":
        return cls(names=frozenset(names))


@dataclass(frozen=True)
class StopsTriple:
    """Stop bands to keep: direct (0), one stop (1), multi stop (2+)."""

    direct: bool = False
    one_stop: bool = False
    multi_stop: bool = False


@dataclass(frozen=True)
class LegacyStops:
    """
    Legacy stop constraint.

    ``direct_only`` wins over ``max_stops`` when both are set.
    """

    direct_only: bool = False
    max_stops: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.direct_only and self.max_stops is None:
            raise ValueError("LegacyStops needs direct_only or max_stops")


@dataclass(frozen=True)
class DepartureTimeBands:
    """
    Departure time-of-day bands to keep.

    morning is [05:00, 12:00), afternoon [12:00, 17:00), evening the rest.
    """

    morning: bool = False
    afternoon: bool = False
    evening: bool = False


AirlineConstraint = Union[AirlineAllowMap, AirlineAllowList]
StopsConstraint = Union[StopsTriple, LegacyStops]


@dataclass(frozen=True)
class CanonicalFilter:
    """
    Shape-resolved search filter.

    Attributes:
        origin: Departure airport code, if any.
        destination: Arrival airport code, if any.
        use_route_filter: False disables the origin/destination pre-filter.
        departure_date: Requested departure date (informational).
        return_date: Requested return date (informational).
        passengers: Passenger count (informational).
        cabin_class: Free-form cabin class (informational).
        trip_type: Free-form trip type (informational).
        price: Price interval, or None.
        airlines: Allow-map or allow-list, or None.
        stops: Stop triple or legacy pair, or None.
        departure_time: Time-of-day bands, or None.
        sort_by: Selected sort option, or None.
    """

    origin: Optional[str] = None
    destination: Optional[str] = None
    use_route_filter: bool = True
    departure_date: Optional[str] = None
    return_date: Optional[str] = None
    passengers: Optional[int] = None
    cabin_class: Optional[str] = None
    trip_type: Optional[str] = None
    price: Optional[PriceBounds] = None
    airlines: Optional[AirlineConstraint] = None
    stops: Optional[StopsConstraint] = None
    departure_time: Optional[DepartureTimeBands] = None
    sort_by: Optional[SortOption] = None

    def constraints(self) -> List[object]:
        """Active constraints in pipeline order."""
        ordered = [self.price, self.airlines, self.stops, self.departure_time]
        return [c for c in ordered if c is not None]

    @property
    def has_route(self) -> bool:
        return self.use_route_filter and bool(self.origin or self.destination)
