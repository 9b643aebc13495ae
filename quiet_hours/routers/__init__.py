"""API Routers for the Quiet Hours API."""

from quiet_hours.routers.auth import router as auth_router
from quiet_hours.routers.places import router as places_router
from quiet_hours.routers.bookings import router as bookings_router
from quiet_hours.routers.favorites import router as favorites_router

__all__ = [
    "auth_router",
    "places_router",
    "bookings_router",
    "favorites_router",
]
