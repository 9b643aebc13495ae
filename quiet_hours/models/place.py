"""Place model."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, DateTime, Float, Numeric, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quiet_hours.core.database import Base

if TYPE_CHECKING:
    from quiet_hours.models.booking import Booking
    from quiet_hours.models.favorite import Favorite
    from quiet_hours.models.review import Review


class Place(Base):
    """A bookable location with coordinates, optional hourly rate and amenity tags."""

    __tablename__ = "places"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    place_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, index=True)
    amenities: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # comma-separated

    # Seeded value only; reviews do not feed back into it
    rating: Mapped[float] = mapped_column(Float, default=0)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    hourly_rate: Mapped[Optional[float]] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=True
    )

    # Id from the external search provider
    external_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    bookings: Mapped[list["Booking"]] = relationship(
        "Booking", back_populates="place", cascade="all, delete-orphan", passive_deletes=True
    )
    favorites: Mapped[list["Favorite"]] = relationship(
        "Favorite", back_populates="place", cascade="all, delete-orphan", passive_deletes=True
    )
    reviews: Mapped[list["Review"]] = relationship(
        "Review", back_populates="place", cascade="all, delete-orphan", passive_deletes=True
    )
