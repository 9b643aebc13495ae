"""SQLAlchemy models for the Quiet Hours API."""

from quiet_hours.models.user import User
from quiet_hours.models.place import Place
from quiet_hours.models.booking import Booking
from quiet_hours.models.favorite import Favorite
from quiet_hours.models.review import Review

__all__ = [
    "User",
    "Place",
    "Booking",
    "Favorite",
    "Review",
]
