"""
Flight Booking API.

``create_app`` builds the FastAPI application; the module-level ``app``
is what uvicorn serves. The FlightBookingApp container is created at
startup unless one is passed in (tests pass their own).
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import dashboard_router, flights_router, users_router
from src.flight_booking.application.flight_booking_app import FlightBookingApp
from src.flight_booking.config import Settings
from src.flight_booking.exceptions import AuthenticationError, FlightBookingError
from src.flight_booking.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    booking_app: Optional[FlightBookingApp] = None,
) -> FastAPI:
    """
    Build the API.

    Args:
        settings: Settings for CORS, prefix and the default container.
            Defaults to the container's settings, else ``Settings.from_env()``.
        booking_app: Prebuilt container. If None, one is created on startup
            and shut down on exit.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = booking_app.settings if booking_app else Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.booking_app is None
        if owned:
            app.state.booking_app = FlightBookingApp(settings)
        yield
        if owned:
            app.state.booking_app.shutdown()
            app.state.booking_app = None

    app = FastAPI(title="Flight Booking API", lifespan=lifespan)
    app.state.booking_app = booking_app

    # Enable CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(FlightBookingError)
    async def handle_flight_booking_error(request: Request, exc: FlightBookingError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.info(
                "%s %s -> %d: %s",
                request.method,
                request.url.path,
                exc.status_code,
                exc.message,
            )
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message},
            headers=headers,
        )

    @app.get(f"{settings.api_prefix}/health")
    def health(request: Request):
        container = request.app.state.booking_app
        return {
            "status": "ok",
            "ready": bool(container and container.is_ready),
        }

    for router in (flights_router, users_router, dashboard_router):
        app.include_router(router, prefix=settings.api_prefix)

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn using environment settings."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    uvicorn.run("src.api.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
