"""Bookings router."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from quiet_hours.core.database import get_db
from quiet_hours.core.security import get_current_user_id
from quiet_hours.models.booking import Booking
from quiet_hours.models.enums import BookingStatus
from quiet_hours.models.place import Place
from quiet_hours.schemas.booking import (
    BookingCreate,
    BookingEnvelope,
    BookingListResponse,
    BookingResponse,
    BookingUpdate,
)
from quiet_hours.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


def booking_response(booking: Booking, place: Optional[Place] = None) -> BookingResponse:
    if place is None:
        return BookingResponse.model_validate(booking)
    return BookingResponse(
        **booking.__dict__,
        place_name=place.name,
        address=place.address,
        latitude=place.latitude,
        longitude=place.longitude,
        image=place.image,
        amenities=place.amenities,
    )


@router.post("", response_model=BookingEnvelope, status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingCreate,
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    """Book a place. Fails with 409 if the window overlaps an active booking."""
    booking = await BookingService(db).create_booking(
        user_id=user_id,
        place_id=data.place_id,
        start_time=data.start_time,
        end_time=data.end_time,
        notes=data.notes,
    )
    return BookingEnvelope(message="Booking created successfully", booking=booking_response(booking))


@router.get("", response_model=BookingListResponse)
async def list_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    """List the caller's bookings."""
    rows = await BookingService(db).list_for_user(user_id, status=status_filter, skip=skip, limit=limit)
    return BookingListResponse(
        message="Bookings retrieved successfully",
        bookings=[booking_response(booking, place) for booking, place in rows],
    )


@router.get("/{booking_id}", response_model=BookingEnvelope)
async def get_booking(
    booking_id: UUID,
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    """Get one of the caller's bookings."""
    booking, place = await BookingService(db).get_for_user(booking_id, user_id)
    return BookingEnvelope(
        message="Booking details retrieved successfully",
        booking=booking_response(booking, place),
    )


@router.put("/{booking_id}", response_model=BookingEnvelope)
async def update_booking(
    booking_id: UUID,
    data: BookingUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    """Change a booking's status (confirm, complete, cancel) and/or notes."""
    booking = await BookingService(db).update_booking(
        booking_id, user_id, status=data.status, notes=data.notes
    )
    return BookingEnvelope(message="Booking updated successfully", booking=booking_response(booking))


@router.delete("/{booking_id}", response_model=BookingEnvelope)
async def cancel_booking(
    booking_id: UUID,
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    """Cancel a pending or confirmed booking."""
    booking = await BookingService(db).cancel_booking(booking_id, user_id)
    return BookingEnvelope(message="Booking cancelled successfully", booking=booking_response(booking))
