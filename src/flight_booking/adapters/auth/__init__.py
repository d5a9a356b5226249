"""Access token handling."""

from src.flight_booking.adapters.auth.jwt_service import JwtTokenService, identity_from_claims

__all__ = ["JwtTokenService", "identity_from_claims"]
