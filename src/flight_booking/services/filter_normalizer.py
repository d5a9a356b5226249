"""
Filter normalizer.

Collapses the raw, multi-revision filter payload into one
``CanonicalFilter``. The same payload arrives as a JSON body or as a
URL query string, so scalars may be strings; numbers and booleans are
coerced and anything uncoercible counts as absent.

This module never raises for malformed input: a fragment that cannot be
read becomes "no constraint".
"""

import logging
import math
from typing import Any, Mapping, Optional, Sequence

from src.flight_booking.schemas.filters import (
    AirlineAllowList,
    AirlineAllowMap,
    AirlineConstraint,
    CanonicalFilter,
    DepartureTimeBands,
    LegacyStops,
    PriceBounds,
    SortOption,
    StopsConstraint,
    StopsTriple,
)

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"true", "1"})
_FALSE_STRINGS = frozenset({"false", "0"})


def _as_number(value: Any) -> Optional[float]:
    """Read a finite number from a number or numeric string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


def _as_int(value: Any) -> Optional[int]:
    number = _as_number(value)
    if number is None or math.isinf(number) or not number.is_integer():
        return None
    return int(number)


def _as_bool(value: Any) -> Optional[bool]:
    """Read a boolean from a bool, 0/1, or 'true'/'false'/'1'/'0'."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _normalize_price(raw: Mapping[str, Any]) -> Optional[PriceBounds]:
    price_range = raw.get("priceRange")
    if _is_sequence(price_range) and len(price_range) == 2:
        lower = _as_number(price_range[0])
        upper = _as_number(price_range[1])
        if lower is not None and upper is not None:
            return PriceBounds(lower=lower, upper=upper)
    if price_range is not None:
        logger.debug("Ignoring malformed priceRange: %r", price_range)

    lower = _as_number(raw.get("minPrice"))
    upper = _as_number(raw.get("maxPrice"))
    if lower is None and upper is None:
        return None
    return PriceBounds(
        lower=-math.inf if lower is None else lower,
        upper=math.inf if upper is None else upper,
    )


def _normalize_airlines(raw: Mapping[str, Any]) -> Optional[AirlineConstraint]:
    airlines = raw.get("airlines")
    if isinstance(airlines, Mapping):
        return AirlineAllowMap(
            allowed_keys=frozenset(
                str(key) for key, flag in airlines.items() if flag is True
            )
        )

    airline_list = raw.get("airlineList")
    if isinstance(airline_list, str):
        airline_list = airline_list.split(",")
    if _is_sequence(airline_list):
        names = [name.strip() for name in airline_list if isinstance(name, str)]
        names = [name for name in names if name]
        if names:
            return AirlineAllowList.create(names)
    return None


def _normalize_stops(raw: Mapping[str, Any]) -> Optional[StopsConstraint]:
    stops = raw.get("stops")
    if isinstance(stops, Mapping):
        return StopsTriple(
            direct=_as_bool(stops.get("direct")) is True,
            one_stop=_as_bool(stops.get("oneStop")) is True,
            multi_stop=_as_bool(stops.get("multiStop")) is True,
        )

    direct_only = _as_bool(raw.get("directOnly")) is True
    max_stops = _as_int(raw.get("maxStops"))
    if not direct_only and max_stops is None:
        return None
    return LegacyStops(direct_only=direct_only, max_stops=max_stops)


def _normalize_departure_time(raw: Mapping[str, Any]) -> Optional[DepartureTimeBands]:
    bands = raw.get("departureTime")
    if not isinstance(bands, Mapping):
        return None
    return DepartureTimeBands(
        morning=_as_bool(bands.get("morning")) is True,
        afternoon=_as_bool(bands.get("afternoon")) is True,
        evening=_as_bool(bands.get("evening")) is True,
    )


def normalize_filters(raw: Optional[Mapping[str, Any]]) -> CanonicalFilter:
    """
    Resolve a raw filter payload into a CanonicalFilter.

    Within each dual-shape field the modern shape wins when present and
    well-formed; the legacy shape is then ignored entirely:

    - price: ``priceRange`` [min, max] over ``minPrice``/``maxPrice``
    - airlines: ``airlines`` key->bool map over ``airlineList``
    - stops: ``stops`` {direct, oneStop, multiStop} over
      ``directOnly``/``maxStops``

    Args:
        raw: Filter payload (JSON body or expanded query params).
            ``from``/``to`` may also be spelled ``origin``/``destination``.

    Returns:
        CanonicalFilter; a None or non-mapping payload yields an
        unconstrained filter.
    """
    if not isinstance(raw, Mapping):
        return CanonicalFilter()

    use_filter = _as_bool(raw.get("useFilter"))
    sort_value = raw.get("sortBy")
    sort_by = SortOption.parse(sort_value)
    if sort_value is not None and sort_by is None:
        logger.debug("Ignoring unrecognized sortBy: %r", sort_value)

    canonical = CanonicalFilter(
        origin=_as_text(raw.get("from", raw.get("origin"))),
        destination=_as_text(raw.get("to", raw.get("destination"))),
        use_route_filter=use_filter is not False,
        departure_date=_as_text(raw.get("departureDate")),
        return_date=_as_text(raw.get("returnDate")),
        passengers=_as_int(raw.get("passengers")),
        cabin_class=_as_text(raw.get("cabinClass")),
        trip_type=_as_text(raw.get("tripType")),
        price=_normalize_price(raw),
        airlines=_normalize_airlines(raw),
        stops=_normalize_stops(raw),
        departure_time=_normalize_departure_time(raw),
        sort_by=sort_by,
    )

    logger.debug("Normalized filters: %s", canonical)
    return canonical
