"""Booking lifecycle: range validation, pricing, conflict detection and status moves."""

import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quiet_hours.core.errors import Conflict, Forbidden, InvalidRange, InvalidStateTransition, NotFound
from quiet_hours.models.booking import Booking
from quiet_hours.models.enums import ACTIVE_BOOKING_STATUSES, BOOKING_TRANSITIONS, BookingStatus
from quiet_hours.models.place import Place

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
SECONDS_PER_HOUR = Decimal(3600)

# Name of the PostgreSQL exclusion constraint installed by the initial migration
OVERLAP_CONSTRAINT = "ex_bookings_place_active_overlap"

CONFLICT_MESSAGE = "Place is already booked for this time period"


def validate_range(start_time: datetime, end_time: datetime) -> None:
    if end_time <= start_time:
        raise InvalidRange("End time must be after start time")


def compute_total_price(hourly_rate: Optional[float], start_time: datetime, end_time: datetime) -> Decimal:
    """hourly_rate × duration in hours, rounded to cents. A missing rate is free."""
    rate = Decimal(str(hourly_rate)) if hourly_rate is not None else Decimal(0)
    seconds = Decimal(str((end_time - start_time).total_seconds()))
    return (rate * seconds / SECONDS_PER_HOUR).quantize(CENTS, rounding=ROUND_HALF_UP)


def check_transition(current: BookingStatus, target: BookingStatus) -> None:
    if target not in BOOKING_TRANSITIONS[current]:
        raise InvalidStateTransition(
            f"Cannot change a {current.value} booking to {target.value}"
        )


class BookingService:
    """Service for creating and managing bookings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_booking(
        self,
        user_id: UUID,
        place_id: UUID,
        start_time: datetime,
        end_time: datetime,
        notes: Optional[str] = None,
    ) -> Booking:
        """Create a pending booking if the window is free.

        The place row is locked for the rest of the transaction, so two
        requests for the same place cannot both pass the conflict check.
        """
        validate_range(start_time, end_time)

        result = await self.db.execute(
            select(Place).where(Place.id == place_id).with_for_update()
        )
        place = result.scalar_one_or_none()
        if not place:
            raise NotFound("Place not found")

        total_price = compute_total_price(place.hourly_rate, start_time, end_time)

        conflict = await self.db.execute(
            select(Booking.id)
            .where(
                Booking.place_id == place_id,
                Booking.status.in_(ACTIVE_BOOKING_STATUSES),
                Booking.start_time < end_time,
                Booking.end_time > start_time,
            )
            .limit(1)
        )
        if conflict.first() is not None:
            await self.db.rollback()
            logger.info(f"Booking conflict on place {place_id} for {start_time} - {end_time}")
            raise Conflict(CONFLICT_MESSAGE)

        booking = Booking(
            user_id=user_id,
            place_id=place_id,
            start_time=start_time,
            end_time=end_time,
            total_price=float(total_price),
            notes=notes,
            status=BookingStatus.PENDING,
        )
        self.db.add(booking)

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if OVERLAP_CONSTRAINT in str(e.orig):
                raise Conflict(CONFLICT_MESSAGE) from e
            raise

        await self.db.refresh(booking)
        logger.info(f"Booking {booking.id} created on place {place_id} (total {total_price})")
        return booking

    async def list_for_user(
        self,
        user_id: UUID,
        status: Optional[BookingStatus] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[tuple[Booking, Place]]:
        """The user's bookings with their places, latest start first."""
        query = (
            select(Booking, Place)
            .join(Place, Booking.place_id == Place.id)
            .where(Booking.user_id == user_id)
        )
        if status:
            query = query.where(Booking.status == status)

        query = query.order_by(Booking.start_time.desc()).offset(skip).limit(limit)

        result = await self.db.execute(query)
        return [(row[0], row[1]) for row in result.all()]

    async def get_for_user(self, booking_id: UUID, user_id: UUID) -> tuple[Booking, Place]:
        result = await self.db.execute(
            select(Booking, Place)
            .join(Place, Booking.place_id == Place.id)
            .where(Booking.id == booking_id, Booking.user_id == user_id)
        )
        row = result.one_or_none()
        if not row:
            raise NotFound("Booking not found")
        return row[0], row[1]

    async def _get_owned(self, booking_id: UUID, user_id: UUID) -> Booking:
        booking = await self.db.get(Booking, booking_id)
        # Unknown and foreign bookings look the same to the caller
        if booking is None or booking.user_id != user_id:
            raise Forbidden("Unauthorized")
        return booking

    async def update_booking(
        self,
        booking_id: UUID,
        user_id: UUID,
        status: BookingStatus,
        notes: Optional[str] = None,
    ) -> Booking:
        """Apply a status move (and optional notes) to the caller's booking."""
        booking = await self._get_owned(booking_id, user_id)

        if status != booking.status:
            check_transition(booking.status, status)
            logger.info(f"Booking {booking.id}: {booking.status.value} -> {status.value}")
            booking.status = status
        if notes is not None:
            booking.notes = notes

        await self.db.commit()
        await self.db.refresh(booking)
        return booking

    async def cancel_booking(self, booking_id: UUID, user_id: UUID) -> Booking:
        booking = await self._get_owned(booking_id, user_id)

        if booking.status in (BookingStatus.COMPLETED, BookingStatus.CANCELLED):
            raise InvalidStateTransition(f"Cannot cancel a {booking.status.value} booking")

        booking.status = BookingStatus.CANCELLED
        await self.db.commit()
        await self.db.refresh(booking)
        logger.info(f"Booking {booking.id} cancelled")
        return booking

    async def complete_elapsed_bookings(self, now: Optional[datetime] = None) -> int:
        """Mark confirmed bookings whose window has ended as completed.

        Returns the number of bookings moved.
        """
        now = now or datetime.utcnow()
        result = await self.db.execute(
            update(Booking)
            .where(
                Booking.status == BookingStatus.CONFIRMED,
                Booking.end_time <= now,
            )
            .values(status=BookingStatus.COMPLETED, updated_at=now)
        )
        await self.db.commit()
        return result.rowcount or 0
