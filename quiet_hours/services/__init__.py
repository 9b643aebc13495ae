"""Services for the Quiet Hours API."""

from quiet_hours.services.booking_service import BookingService
from quiet_hours.services.favorite_service import FavoriteService
from quiet_hours.services.place_service import PlaceService
from quiet_hours.services.seed import seed_sample_places

__all__ = [
    "BookingService",
    "FavoriteService",
    "PlaceService",
    "seed_sample_places",
]
