"""
FastAPI dependencies: application container and caller identity.

Tokens are read from ``Authorization: Bearer <jwt>``, falling back to
the ``access_token`` cookie.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.flight_booking.application.flight_booking_app import FlightBookingApp
from src.flight_booking.exceptions import AuthenticationError, AuthorizationError
from src.flight_booking.schemas.user import Identity

logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "access_token"

bearer_scheme = HTTPBearer(auto_error=False)


def get_booking_app(request: Request) -> FlightBookingApp:
    return request.app.state.booking_app


def _read_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(ACCESS_TOKEN_COOKIE)


def get_optional_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    booking_app: FlightBookingApp = Depends(get_booking_app),
) -> Optional[Identity]:
    """Caller identity on public routes; a bad token means anonymous."""
    token = _read_token(request, credentials)
    if not token:
        return None
    try:
        return booking_app.tokens.verify(token)
    except AuthenticationError as e:
        logger.debug("Treating request as anonymous: %s", e.message)
        return None


def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    booking_app: FlightBookingApp = Depends(get_booking_app),
) -> Identity:
    """
    Caller identity on protected routes.

    Raises:
        AuthenticationError: If no token is sent or it fails verification.
    """
    token = _read_token(request, credentials)
    if not token:
        raise AuthenticationError("Missing authentication token")
    return booking_app.tokens.verify(token)


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_admin:
        raise AuthorizationError("Access denied. Admin privileges required.")
    return identity
