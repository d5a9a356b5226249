"""
User and caller identity schemas.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: Optional[str]) -> "UserRole":
        """Map a claim value to a role; anything unrecognized is a plain user."""
        if value == cls.ADMIN.value:
            return cls.ADMIN
        return cls.USER


@dataclass(frozen=True)
class Identity:
    """
    Authenticated caller, as decoded from an access token.

    Attributes:
        id: User identifier (token subject).
        email: Email address, if the token carries one.
        role: Caller role.
    """

    id: str
    email: Optional[str] = None
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN

    def can_access(self, user_id: str) -> bool:
        """True if the caller owns ``user_id`` or is an admin."""
        return self.is_admin or self.id == user_id


@dataclass(frozen=True)
class User:
    id: str
    email: str
    first_name: str
    last_name: str
    role: UserRole
    created_at: str
    updated_at: str
