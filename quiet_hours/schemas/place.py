"""Place, search and review-listing schemas."""

from datetime import datetime
from typing import Literal, Optional, Union
from uuid import UUID

from pydantic import Field

from quiet_hours.schemas.base import BaseSchema, IDMixin, TimestampMixin


class PlaceCreate(BaseSchema):
    """Add a place; deduped against external_id, then (name, address)."""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    address: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    place_type: Optional[str] = Field(None, max_length=50)
    amenities: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    image: Optional[str] = None
    external_id: Optional[str] = Field(None, max_length=255)


class PlaceResponse(BaseSchema, IDMixin, TimestampMixin):
    """A stored place."""

    name: str
    description: Optional[str] = None
    address: str
    latitude: float
    longitude: float
    place_type: Optional[str] = None
    amenities: Optional[str] = None
    rating: Optional[float] = 0
    image: Optional[str] = None
    hourly_rate: Optional[float] = None
    external_id: Optional[str] = None


class NearbyPlaceResponse(PlaceResponse):
    """A stored place with its distance from the query point."""

    distance: float = Field(..., description="Great-circle distance in meters")


class ExternalPlaceResult(BaseSchema):
    """A place found by the external provider; not persisted."""

    external_id: Optional[str] = None
    name: str
    address: str
    latitude: float
    longitude: float
    place_type: Optional[str] = None
    amenities: Optional[str] = None
    rating: float = 0
    image: Optional[str] = None


class PlaceSearchRequest(BaseSchema):
    """Free-text search, optionally biased towards a point."""

    query: str = Field(..., min_length=1, max_length=255)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class ReviewWithAuthor(BaseSchema, IDMixin):
    """A review as shown on a place's detail page."""

    user_id: UUID
    place_id: UUID
    rating: int
    comment: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    created_at: datetime


class PlaceEnvelope(BaseSchema):
    message: str
    place: PlaceResponse


class PlaceListResponse(BaseSchema):
    message: str
    places: list[PlaceResponse]


class NearbyPlacesResponse(BaseSchema):
    message: str
    places: list[NearbyPlaceResponse]


class PlaceSearchResponse(BaseSchema):
    message: str
    source: Literal["external", "local"]
    places: list[Union[PlaceResponse, ExternalPlaceResult]]


class PlaceDetailResponse(BaseSchema):
    message: str
    place: PlaceResponse
    reviews: list[ReviewWithAuthor]
