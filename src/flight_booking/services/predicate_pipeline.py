"""
Predicate pipeline.

Applies a CanonicalFilter to a flight collection as boolean masks over a
pandas frame built from the flights. Each canonical constraint type maps
to exactly one mask builder in ``PREDICATES``; masks compose with AND.
"""

import logging
from typing import Callable, Dict, Iterable, List

import numpy as np
import pandas as pd

from src.flight_booking.schemas.filters import (
    AirlineAllowList,
    AirlineAllowMap,
    CanonicalFilter,
    DepartureTimeBands,
    LegacyStops,
    PriceBounds,
    StopsTriple,
    normalize_airline_key,
)
from src.flight_booking.schemas.flight import Flight

logger = logging.getLogger(__name__)

__all__ = [
    "PREDICATES",
    "apply_predicates",
    "departure_hours",
    "flights_to_frame",
]

MORNING_START = 5
AFTERNOON_START = 12
EVENING_START = 17

MaskBuilder = Callable[[pd.DataFrame, object], pd.Series]


def flights_to_frame(flights: List[Flight]) -> pd.DataFrame:
    """Build the columns the predicates read, one row per flight."""
    return pd.DataFrame(
        {
            "price": [f.price for f in flights],
            "airline": [f.airline or "" for f in flights],
            "stops": [f.stops for f in flights],
            "departure_time": [f.departure_time or "" for f in flights],
        }
    )


def departure_hours(times: pd.Series) -> pd.Series:
    """
    Leading integer of each 'HH:MM' string's hour part.

    Unparseable values become NaN.
    """
    hour_part = times.astype(str).str.split(":").str[0]
    digits = hour_part.str.extract(r"^\s*([+-]?\d+)", expand=False)
    return pd.to_numeric(digits, errors="coerce")


def _price_mask(df: pd.DataFrame, bounds: PriceBounds) -> pd.Series:
    return (df["price"] >= bounds.lower) & (df["price"] <= bounds.upper)


def _airline_map_mask(df: pd.DataFrame, allow: AirlineAllowMap) -> pd.Series:
    keys = df["airline"].map(normalize_airline_key)
    return (df["airline"] != "") & keys.isin(allow.allowed_keys)


def _airline_list_mask(df: pd.DataFrame, allow: AirlineAllowList) -> pd.Series:
    return (df["airline"] != "") & df["airline"].isin(allow.names)


def _stops_triple_mask(df: pd.DataFrame, triple: StopsTriple) -> pd.Series:
    mask = pd.Series(False, index=df.index)
    if triple.direct:
        mask |= df["stops"] == 0
    if triple.one_stop:
        mask |= df["stops"] == 1
    if triple.multi_stop:
        mask |= df["stops"] >= 2
    return mask


def _legacy_stops_mask(df: pd.DataFrame, legacy: LegacyStops) -> pd.Series:
    if legacy.direct_only:
        return df["stops"] == 0
    stops = pd.to_numeric(df["stops"], errors="coerce")
    return stops <= legacy.max_stops


def _departure_time_mask(df: pd.DataFrame, bands: DepartureTimeBands) -> pd.Series:
    hours = departure_hours(df["departure_time"])
    morning = (hours >= MORNING_START) & (hours < AFTERNOON_START)
    afternoon = (hours >= AFTERNOON_START) & (hours < EVENING_START)
    evening = hours.notna() & ~morning & ~afternoon

    mask = hours.isna()
    if bands.morning:
        mask |= morning
    if bands.afternoon:
        mask |= afternoon
    if bands.evening:
        mask |= evening
    return mask


PREDICATES: Dict[type, MaskBuilder] = {
    PriceBounds: _price_mask,
    AirlineAllowMap: _airline_map_mask,
    AirlineAllowList: _airline_list_mask,
    StopsTriple: _stops_triple_mask,
    LegacyStops: _legacy_stops_mask,
    DepartureTimeBands: _departure_time_mask,
}


def apply_predicates(
    flights: Iterable[Flight],
    canonical: CanonicalFilter,
) -> List[Flight]:
    """
    Keep the flights that pass every active constraint.

    Args:
        flights: Flight collection (not modified).
        canonical: Normalized filter.

    Returns:
        The kept Flight objects, in input order.
    """
    flights = list(flights)
    constraints = canonical.constraints()
    if not flights or not constraints:
        return flights

    df = flights_to_frame(flights)
    mask = pd.Series(True, index=df.index)

    for constraint in constraints:
        mask &= PREDICATES[type(constraint)](df, constraint)
        logger.debug(
            "%s kept %d of %d flights",
            type(constraint).__name__,
            int(mask.sum()),
            len(flights),
        )

    return [flights[i] for i in np.flatnonzero(mask.to_numpy())]
