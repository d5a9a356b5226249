"""
Flight schemas.

``Flight`` is the immutable value passed through the search core.
``FlightFrameSchema`` is the pandera contract for tabular flight data read
from storage; validation happens at that boundary only, not per query.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

import pandera as pa
from pandera.typing import DataFrame, Series


@dataclass(frozen=True)
class Flight:
    """
    Immutable flight offer.

    Attributes:
        id: Flight identifier.
        airline: Airline display name (e.g., 'Air India').
        airline_code: Airline code (e.g., 'AI').
        airline_logo: Logo reference for display.
        flight_number: Flight number (e.g., 'AI202').
        departure_airport: Departure airport code.
        arrival_airport: Arrival airport code.
        departure_date: Departure date string (YYYY-MM-DD).
        departure_time: Departure time of day ('HH:MM').
        arrival_time: Arrival time of day ('HH:MM').
        duration: Human readable duration (e.g., '2h 15m').
        duration_minutes: Duration in minutes, if known.
        stops: Number of intermediate stops.
        stop_locations: Stop airport codes; length equals ``stops`` when set.
        price: Fare for one passenger.
        destination: Destination label kept for display compatibility.
    """

    id: str
    airline: str
    airline_code: str
    airline_logo: str
    flight_number: str
    departure_airport: str
    arrival_airport: str
    departure_date: str
    departure_time: str
    arrival_time: str
    duration: str
    duration_minutes: Optional[int]
    stops: int
    price: float
    stop_locations: Optional[Tuple[str, ...]] = None
    destination: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the flight after initialization."""
        if self.stops < 0:
            raise ValueError(f"stops must be >= 0, got {self.stops}")
        if self.price < 0:
            raise ValueError(f"price must be >= 0, got {self.price}")
        if self.stop_locations is not None and len(self.stop_locations) != self.stops:
            raise ValueError(
                f"stop_locations has {len(self.stop_locations)} entries "
                f"but stops is {self.stops}"
            )

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Flight":
        """
        Build a Flight from a snake_case record (a storage row).

        Missing optional values (None or NaN) become None.

        Args:
            record: Mapping with Flight field names as keys.

        Returns:
            Validated Flight instance.
        """

        def _optional(key: str) -> Any:
            value = record.get(key)
            # NaN is the only value not equal to itself
            if value is None or value != value:
                return None
            return value

        duration_minutes = _optional("duration_minutes")
        stop_locations = _optional("stop_locations")

        return cls(
            id=str(record["id"]),
            airline=record.get("airline") or "",
            airline_code=record.get("airline_code") or "",
            airline_logo=record.get("airline_logo") or "",
            flight_number=record.get("flight_number") or "",
            departure_airport=record["departure_airport"],
            arrival_airport=record["arrival_airport"],
            departure_date=record.get("departure_date") or "",
            departure_time=record.get("departure_time") or "",
            arrival_time=record.get("arrival_time") or "",
            duration=record.get("duration") or "",
            duration_minutes=int(duration_minutes) if duration_minutes is not None else None,
            stops=int(record["stops"]),
            price=float(record["price"]),
            stop_locations=tuple(stop_locations) if stop_locations is not None else None,
            destination=_optional("destination"),
        )


@dataclass(frozen=True)
class City:
    """A city served by the booking platform."""

    code: str
    name: str
    airport: str


class FlightFrameSchema(pa.DataFrameModel):
    """
    Contract for flight rows loaded from storage.

    Only the columns the search core relies on are constrained. Extra
    columns pass through unchanged (strict=False).
    """

    id: Series[str] = pa.Field(
        nullable=False,
        unique=True,
        description="Flight identifier",
    )
    departure_airport: Series[str] = pa.Field(
        nullable=False,
        description="Departure airport code (e.g., 'DEL')",
    )
    arrival_airport: Series[str] = pa.Field(
        nullable=False,
        description="Arrival airport code",
    )
    stops: Series[int] = pa.Field(
        ge=0,
        description="Number of intermediate stops",
    )
    price: Series[float] = pa.Field(
        ge=0,
        description="Fare for one passenger",
    )
    duration_minutes: Series[float] = pa.Field(
        nullable=True,
        ge=0,
        description="Duration in minutes (float for NaN support)",
    )

    class Config:
        strict = False
        coerce = True
        name = "FlightFrameSchema"
        description = "Flight rows as read from storage"


FlightDataFrame = DataFrame[FlightFrameSchema]
