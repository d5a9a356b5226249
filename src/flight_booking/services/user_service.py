"""
User Service - profile management with ownership and role rules.

A caller may read or update their own profile; admins may act on any
profile. Only admins may list, create or delete users, and only admins
may change a role.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from src.flight_booking.exceptions import (
    AuthorizationError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from src.flight_booking.schemas.user import Identity, User, UserRole

if TYPE_CHECKING:
    from src.flight_booking.ports.repositories import UserRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("first_name", "last_name", "role")


def _require_admin(actor: Identity) -> None:
    if not actor.is_admin:
        raise AuthorizationError("Admin access required")


class UserService:
    """
    Domain service for user profiles.

    Attributes:
        _users: User persistence.
    """

    def __init__(self, user_repo: UserRepository) -> None:
        self._users = user_repo

    def list_users(self, actor: Identity) -> List[User]:
        _require_admin(actor)
        return self._users.list_all()

    def get_current_user(self, actor: Identity) -> User:
        user = self._users.get_by_id(actor.id)
        if user is None:
            raise UserNotFoundError()
        return user

    def get_user(self, user_id: str, actor: Identity) -> User:
        """
        Return a profile the actor may see.

        Raises:
            AuthorizationError: If the actor is neither the owner nor an admin.
            UserNotFoundError: If the user does not exist.
        """
        if not actor.can_access(user_id):
            raise AuthorizationError("You can only access your own profile")
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def create_user(
        self,
        email: str,
        first_name: str,
        last_name: str,
        actor: Identity,
        role: Optional[UserRole] = None,
        user_id: Optional[str] = None,
    ) -> User:
        """
        Create a user (admin only). Role defaults to ``user``.

        Raises:
            AuthorizationError: If the actor is not an admin.
            UserAlreadyExistsError: If the email is already registered.
        """
        _require_admin(actor)
        if self._users.get_by_email(email) is not None:
            raise UserAlreadyExistsError(email)

        timestamp = datetime.now(timezone.utc).isoformat()
        user = self._users.create(
            User(
                id=user_id or str(uuid.uuid4()),
                email=email,
                first_name=first_name,
                last_name=last_name,
                role=role or UserRole.USER,
                created_at=timestamp,
                updated_at=timestamp,
            )
        )
        logger.info("Created user %s (%s)", user.id, user.role.value)
        return user

    def update_user(
        self,
        user_id: str,
        changes: Dict[str, Any],
        actor: Identity,
    ) -> User:
        """
        Update first name, last name or role.

        Raises:
            AuthorizationError: If the actor is neither owner nor admin, or
                a non-admin tries to change a role.
            UserNotFoundError: If the user does not exist.
        """
        if not actor.can_access(user_id):
            raise AuthorizationError("You can only update your own profile")
        if not actor.is_admin and changes.get("role"):
            raise AuthorizationError("You cannot change your role")

        updates = {
            key: value
            for key, value in changes.items()
            if key in UPDATABLE_FIELDS and value is not None
        }
        if "role" in updates:
            updates["role"] = UserRole(updates["role"])
        updates["updated_at"] = datetime.now(timezone.utc).isoformat()

        user = self._users.update(user_id, updates)
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info("Updated user %s: %s", user_id, sorted(updates))
        return user

    def delete_user(self, user_id: str, actor: Identity) -> None:
        _require_admin(actor)
        if not self._users.delete(user_id):
            raise UserNotFoundError(user_id)
        logger.info("Deleted user %s", user_id)
