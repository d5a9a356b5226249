"""
Repository port interfaces for bookings and users.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Mapping, Optional

from src.flight_booking.schemas.booking import Booking
from src.flight_booking.schemas.user import User


class BookingRepository(ABC):
    """Persistence contract for bookings."""

    @abstractmethod
    def add(self, booking: Booking) -> Booking:
        """Store a new booking and return it."""
        ...

    @abstractmethod
    def list_for_user(self, user_id: str) -> List[Booking]:
        """Return the bookings of ``user_id``, oldest first."""
        ...

    @abstractmethod
    def get(self, booking_id: str, user_id: str) -> Optional[Booking]:
        """
        Return one of ``user_id``'s bookings.

        ``booking_id`` matches either the human booking reference
        (FLT-...) or the record id.
        """
        ...

    @abstractmethod
    def add_next(self, build: Callable[[int], Booking]) -> Booking:
        """
        Store the booking ``build`` makes from the next sequence number.

        The sequence is the stored booking count plus one. Reading it and
        inserting happen as one step, so concurrent callers never share
        a number.
        """
        ...

    @abstractmethod
    def count(self) -> int:
        ...

    @abstractmethod
    def list_all(self) -> List[Booking]:
        ...


class UserRepository(ABC):
    """Persistence contract for users."""

    @abstractmethod
    def list_all(self) -> List[User]:
        ...

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    def create(self, user: User) -> User:
        ...

    @abstractmethod
    def update(self, user_id: str, changes: Mapping[str, Any]) -> Optional[User]:
        """
        Apply ``changes`` (User field names) and return the updated user.

        Returns None if the user does not exist.
        """
        ...

    @abstractmethod
    def delete(self, user_id: str) -> bool:
        """Delete a user; False if it did not exist."""
        ...

    @abstractmethod
    def count(self) -> int:
        ...
