"""Booking model."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Numeric, Text, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quiet_hours.core.database import Base
from quiet_hours.models.enums import BookingStatus

if TYPE_CHECKING:
    from quiet_hours.models.place import Place
    from quiet_hours.models.user import User


class Booking(Base):
    """A reservation of a place for the half-open window [start_time, end_time)."""

    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    place_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("places.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Naive UTC
    start_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    status: Mapped[BookingStatus] = mapped_column(
        SQLEnum(
            BookingStatus,
            name="booking_status",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        default=BookingStatus.PENDING,
        nullable=False,
        index=True,
    )
    total_price: Mapped[Optional[float]] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=True
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="bookings")
    place: Mapped["Place"] = relationship("Place", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_bookings_time_range"),
        Index("ix_bookings_place_window", "place_id", "start_time", "end_time"),
    )
