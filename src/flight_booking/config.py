"""
Configuration module for the Flight Booking API.

Loads environment variables (optionally from a .env file) and exposes
them as an immutable Settings object.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_CORS_ORIGINS: Tuple[str, ...] = (
    "http://localhost:3000",
    "http://localhost:5173",
)

FLIGHT_SOURCES: Tuple[str, ...] = ("sqlite", "generated")


def _split_csv(value: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """
    Application settings.

    Attributes:
        database_path: Path to the SQLite database file.
        jwt_secret: Shared secret used to sign and verify access tokens.
        jwt_algorithm: JWT signing algorithm.
        jwt_expires_minutes: Lifetime of issued access tokens.
        api_prefix: Global prefix for all HTTP routes.
        cors_origins: Frontend origins allowed by CORS.
        host: Bind address for the development server.
        port: Bind port for the development server.
        log_level: Root logging level name.
        seed_flights_per_route: Generated flights per city pair when seeding.
        flight_source: Where searches read flights: "sqlite" (the database)
            or "generated" (an in-memory generator, no database flights).
    """

    database_path: str = "flight_booking.db"
    jwt_secret: str = "default_secret_key_for_dev"
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 1440
    api_prefix: str = "/api"
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)
    host: str = "0.0.0.0"
    port: int = 3333
    log_level: str = "INFO"
    seed_flights_per_route: int = 5
    flight_source: str = "sqlite"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            Settings with unset variables falling back to defaults.

        Raises:
            ValueError: If a numeric variable is not an integer or
                FLIGHT_SOURCE names an unknown source.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        cors = env.get("CORS_ORIGINS")
        flight_source = env.get("FLIGHT_SOURCE", defaults.flight_source).strip().lower()
        if flight_source not in FLIGHT_SOURCES:
            raise ValueError(
                f"FLIGHT_SOURCE must be one of {', '.join(FLIGHT_SOURCES)}, got {flight_source!r}"
            )

        return cls(
            database_path=env.get("DATABASE_PATH", defaults.database_path),
            jwt_secret=env.get("JWT_SECRET") or defaults.jwt_secret,
            jwt_algorithm=env.get("JWT_ALGORITHM", defaults.jwt_algorithm),
            jwt_expires_minutes=int(
                env.get("JWT_EXPIRES_MINUTES", defaults.jwt_expires_minutes)
            ),
            api_prefix=env.get("API_PREFIX", defaults.api_prefix),
            cors_origins=_split_csv(cors) if cors else defaults.cors_origins,
            host=env.get("HOST", defaults.host),
            port=int(env.get("PORT", defaults.port)),
            log_level=env.get("LOG_LEVEL", defaults.log_level),
            seed_flights_per_route=int(
                env.get("SEED_FLIGHTS_PER_ROUTE", defaults.seed_flights_per_route)
            ),
            flight_source=flight_source,
        )
