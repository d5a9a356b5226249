"""
Custom exceptions for the flight_booking package.

Every exception carries the HTTP status code the API layer responds
with, so a single handler can translate the whole hierarchy.
"""


class FlightBookingError(Exception):
    """Base exception for all flight_booking errors."""

    status_code: int = 500

    def __init__(self, message: str = "") -> None:
        self.message = message or self.__class__.__doc__ or "Flight booking error"
        super().__init__(self.message)


class ValidationError(FlightBookingError):
    """Base exception for invalid input."""

    status_code = 400


class InvalidFlightCollectionError(ValidationError):
    """Raised when the flight collection handed to a query is absent or not iterable."""

    def __init__(self, value: object = None) -> None:
        self.value = value
        super().__init__(
            f"Expected an iterable flight collection, got {type(value).__name__}"
        )


class InvalidBookingError(ValidationError):
    """Raised when a booking request cannot be assembled."""

    pass


class NotFoundError(FlightBookingError):
    """Base exception for missing records."""

    status_code = 404


class FlightNotFoundError(NotFoundError):
    """Raised when a flight id does not exist in the flight source."""

    def __init__(self, flight_id: str) -> None:
        self.flight_id = flight_id
        super().__init__(f"Flight '{flight_id}' not found")


class BookingNotFoundError(NotFoundError):
    """Raised when a booking does not exist or belongs to another user."""

    def __init__(self, booking_id: str) -> None:
        self.booking_id = booking_id
        super().__init__(f"Booking '{booking_id}' not found")


class UserNotFoundError(NotFoundError):
    """Raised when a user id does not exist."""

    def __init__(self, user_id: str = "") -> None:
        self.user_id = user_id
        super().__init__(f"User '{user_id}' not found" if user_id else "User not found")


class ConflictError(FlightBookingError):
    """Base exception for uniqueness conflicts."""

    status_code = 409


class UserAlreadyExistsError(ConflictError):
    """Raised when creating a user whose email is already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"User with email '{email}' already exists")


class AuthenticationError(FlightBookingError):
    """Raised when a request carries no valid access token."""

    status_code = 401


class AuthorizationError(FlightBookingError):
    """Raised when the caller lacks the role or ownership an action needs."""

    status_code = 403


class StorageError(FlightBookingError):
    """Raised when the storage backend fails."""

    status_code = 500
