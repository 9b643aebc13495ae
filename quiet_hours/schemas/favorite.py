"""Favorite and review schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from quiet_hours.schemas.base import BaseSchema, IDMixin, TimestampMixin
from quiet_hours.schemas.place import PlaceResponse


class FavoriteCreate(BaseSchema):
    place_id: UUID


class FavoriteResponse(BaseSchema, IDMixin):
    user_id: UUID
    place_id: UUID
    created_at: datetime


class FavoriteEnvelope(BaseSchema):
    message: str
    favorite: FavoriteResponse


class FavoritePlacesResponse(BaseSchema):
    message: str
    places: list[PlaceResponse]


class FavoriteCheckResponse(BaseSchema):
    is_favorite: bool


class ReviewCreate(BaseSchema):
    """Leave a review. Rating is bound-checked to [1, 5]."""

    place_id: UUID
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


class ReviewResponse(BaseSchema, IDMixin, TimestampMixin):
    user_id: UUID
    place_id: UUID
    rating: int
    comment: Optional[str] = None


class ReviewEnvelope(BaseSchema):
    message: str
    review: ReviewResponse
