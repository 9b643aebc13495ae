"""Booking schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from quiet_hours.models.enums import BookingStatus
from quiet_hours.schemas.base import BaseSchema, IDMixin, TimestampMixin, to_naive_utc


class BookingCreate(BaseSchema):
    """Book a place for [start_time, end_time)."""

    place_id: UUID
    start_time: datetime
    end_time: datetime
    notes: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_timezone(cls, value: datetime) -> datetime:
        """Store and compare in naive UTC."""
        return to_naive_utc(value)


class BookingUpdate(BaseSchema):
    """Move a booking to another status and/or replace its notes."""

    status: BookingStatus
    notes: Optional[str] = None


class BookingResponse(BaseSchema, IDMixin, TimestampMixin):
    """Booking response, with a summary of the booked place when available."""

    user_id: UUID
    place_id: UUID
    start_time: datetime
    end_time: datetime
    status: BookingStatus
    total_price: Optional[float] = None
    notes: Optional[str] = None

    place_name: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    image: Optional[str] = None
    amenities: Optional[str] = None


class BookingEnvelope(BaseSchema):
    message: str
    booking: BookingResponse


class BookingListResponse(BaseSchema):
    message: str
    bookings: list[BookingResponse] = Field(default_factory=list)
