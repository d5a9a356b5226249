"""
SQLite user repository.
"""

import logging
import sqlite3
from typing import Any, List, Mapping, Optional

from src.flight_booking.adapters.sqlite.database import Database
from src.flight_booking.exceptions import UserAlreadyExistsError
from src.flight_booking.ports.repositories import UserRepository
from src.flight_booking.schemas.user import User, UserRole

logger = logging.getLogger(__name__)

USER_COLUMNS = ("id", "email", "first_name", "last_name", "role", "created_at", "updated_at")
UPDATABLE_COLUMNS = frozenset({"first_name", "last_name", "role", "updated_at"})


def _from_row(row: sqlite3.Row) -> User:
    return User(
        id=row["id"],
        email=row["email"],
        first_name=row["first_name"] or "",
        last_name=row["last_name"] or "",
        role=UserRole.parse(row["role"]),
        created_at=row["created_at"] or "",
        updated_at=row["updated_at"] or "",
    )


class SqliteUserRepository(UserRepository):
    """User persistence in the users table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def list_all(self) -> List[User]:
        rows = self._db.fetch_all(f"SELECT {', '.join(USER_COLUMNS)} FROM users ORDER BY rowid")
        return [_from_row(row) for row in rows]

    def get_by_id(self, user_id: str) -> Optional[User]:
        row = self._db.fetch_one(
            f"SELECT {', '.join(USER_COLUMNS)} FROM users WHERE id = ?", (user_id,)
        )
        return _from_row(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        row = self._db.fetch_one(
            f"SELECT {', '.join(USER_COLUMNS)} FROM users WHERE email = ?", (email,)
        )
        return _from_row(row) if row else None

    def create(self, user: User) -> User:
        placeholders = ", ".join(["?"] * len(USER_COLUMNS))
        try:
            self._db.execute(
                f"INSERT INTO users ({', '.join(USER_COLUMNS)}) VALUES ({placeholders})",
                (
                    user.id,
                    user.email,
                    user.first_name,
                    user.last_name,
                    user.role.value,
                    user.created_at,
                    user.updated_at,
                ),
            )
        except sqlite3.IntegrityError as e:
            raise UserAlreadyExistsError(user.email) from e
        return user

    def update(self, user_id: str, changes: Mapping[str, Any]) -> Optional[User]:
        updates = {k: v for k, v in changes.items() if k in UPDATABLE_COLUMNS}
        if "role" in updates and isinstance(updates["role"], UserRole):
            updates["role"] = updates["role"].value

        if updates:
            set_clause = ", ".join(f"{key} = ?" for key in updates)
            sql = f"UPDATE users SET {set_clause} WHERE id = ?"
            self._db.execute(sql, list(updates.values()) + [user_id])
            logger.debug("Updated user %s: %s", user_id, sorted(updates))

        return self.get_by_id(user_id)

    def delete(self, user_id: str) -> bool:
        return self._db.execute("DELETE FROM users WHERE id = ?", (user_id,)) > 0

    def count(self) -> int:
        return self._db.count("users")
