"""Favorites toggling and review creation."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quiet_hours.core.errors import Conflict, InvalidInput, NotFound
from quiet_hours.models.favorite import Favorite
from quiet_hours.models.place import Place
from quiet_hours.models.review import Review

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class FavoriteService:
    """Service for a user's favorites and reviews."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _require_place(self, place_id: UUID) -> None:
        result = await self.db.execute(select(Place.id).where(Place.id == place_id))
        if result.scalar_one_or_none() is None:
            raise NotFound("Place not found")

    async def _find(self, user_id: UUID, place_id: UUID) -> Optional[Favorite]:
        result = await self.db.execute(
            select(Favorite).where(Favorite.user_id == user_id, Favorite.place_id == place_id)
        )
        return result.scalar_one_or_none()

    async def add(self, user_id: UUID, place_id: UUID) -> Favorite:
        await self._require_place(place_id)

        if await self._find(user_id, place_id):
            raise Conflict("Already added to favorites")

        favorite = Favorite(user_id=user_id, place_id=place_id)
        self.db.add(favorite)
        try:
            await self.db.commit()
        except IntegrityError as e:
            # Lost a race against a concurrent add of the same pair
            await self.db.rollback()
            raise Conflict("Already added to favorites") from e

        await self.db.refresh(favorite)
        return favorite

    async def remove(self, user_id: UUID, place_id: UUID) -> None:
        favorite = await self._find(user_id, place_id)
        if not favorite:
            raise NotFound("Favorite not found")

        await self.db.delete(favorite)
        await self.db.commit()

    async def is_favorite(self, user_id: UUID, place_id: UUID) -> bool:
        return await self._find(user_id, place_id) is not None

    async def list_places(self, user_id: UUID, skip: int = 0, limit: int = 20) -> list[Place]:
        """Favorited places, most recently favorited first."""
        result = await self.db.execute(
            select(Place)
            .join(Favorite, Favorite.place_id == Place.id)
            .where(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def add_review(
        self,
        user_id: UUID,
        place_id: UUID,
        rating: int,
        comment: Optional[str] = None,
    ) -> Review:
        """Record a review. The place's own rating column is left as is."""
        if rating < MIN_RATING or rating > MAX_RATING:
            raise InvalidInput("Rating must be between 1 and 5")

        await self._require_place(place_id)

        review = Review(user_id=user_id, place_id=place_id, rating=rating, comment=comment)
        self.db.add(review)
        await self.db.commit()
        await self.db.refresh(review)
        return review
