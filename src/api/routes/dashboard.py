"""
Admin dashboard routes.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_booking_app, require_admin
from src.api.schemas import DashboardResponse, DashboardStatsSchema
from src.flight_booking.application.flight_booking_app import FlightBookingApp
from src.flight_booking.schemas.user import Identity

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    identity: Identity = Depends(require_admin),
    booking_app: FlightBookingApp = Depends(get_booking_app),
):
    return booking_app.dashboard.welcome(identity)


@router.get("/stats", response_model=DashboardStatsSchema)
def get_stats(
    identity: Identity = Depends(require_admin),
    booking_app: FlightBookingApp = Depends(get_booking_app),
):
    return booking_app.dashboard.get_stats(identity)
