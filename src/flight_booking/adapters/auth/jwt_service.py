"""
JWT token service.

Issues and verifies HS256 access tokens with PyJWT. Two payload styles
are accepted:

- flat: ``{"id" | "sub", "email", "role"}``
- provider style: ``{"sub", "user_metadata": {"email", "email_verified"}}``;
  tokens whose email is not verified are rejected.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping

import jwt

from src.flight_booking.exceptions import AuthenticationError
from src.flight_booking.schemas.user import Identity, UserRole

logger = logging.getLogger(__name__)


def identity_from_claims(claims: Mapping[str, Any]) -> Identity:
    """
    Build an Identity from decoded token claims.

    Raises:
        AuthenticationError: If the subject is missing or the email is
            not verified.
    """
    user_id = claims.get("id") or claims.get("sub")
    if not user_id:
        raise AuthenticationError("Token has no subject")

    email = claims.get("email")
    metadata = claims.get("user_metadata")
    if isinstance(metadata, Mapping):
        if not metadata.get("email_verified"):
            raise AuthenticationError("Email not verified")
        email = email or metadata.get("email")

    return Identity(id=str(user_id), email=email, role=UserRole.parse(claims.get("role")))


class JwtTokenService:
    """
    Signs and verifies access tokens.

    Attributes:
        _secret: Shared signing secret.
        _algorithm: JWT algorithm (e.g. "HS256").
        _expires: Lifetime of issued tokens.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: int = 1440,
    ) -> None:
        if not secret:
            raise ValueError("JWT secret cannot be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._expires = timedelta(minutes=expires_minutes)

    def issue(self, identity: Identity) -> str:
        """Return a signed token carrying ``identity``."""
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "sub": identity.id,
            "id": identity.id,
            "email": identity.email,
            "role": identity.role.value,
            "iat": now,
            "exp": now + self._expires,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Identity:
        """
        Decode and validate a token.

        Raises:
            AuthenticationError: If the token is malformed, expired, signed
                with another key, or carries unusable claims.
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Authentication token expired") from e
        except jwt.PyJWTError as e:
            logger.debug("Token verification failed: %s", e)
            raise AuthenticationError("Invalid authentication token") from e

        return identity_from_claims(claims)
