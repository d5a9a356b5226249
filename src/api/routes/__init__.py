"""HTTP routers, one per resource."""

from src.api.routes.dashboard import router as dashboard_router
from src.api.routes.flights import router as flights_router
from src.api.routes.users import router as users_router

__all__ = ["dashboard_router", "flights_router", "users_router"]
