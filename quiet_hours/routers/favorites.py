"""Favorites and reviews router."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from quiet_hours.core.database import get_db
from quiet_hours.core.security import get_current_user_id
from quiet_hours.schemas.base import MessageResponse
from quiet_hours.schemas.favorite import (
    FavoriteCheckResponse,
    FavoriteCreate,
    FavoriteEnvelope,
    FavoritePlacesResponse,
    FavoriteResponse,
    ReviewCreate,
    ReviewEnvelope,
    ReviewResponse,
)
from quiet_hours.schemas.place import PlaceResponse
from quiet_hours.services.favorite_service import FavoriteService

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.post("", response_model=FavoriteEnvelope, status_code=status.HTTP_201_CREATED)
async def add_favorite(
    data: FavoriteCreate,
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    favorite = await FavoriteService(db).add(user_id, data.place_id)
    return FavoriteEnvelope(message="Added to favorites", favorite=FavoriteResponse.model_validate(favorite))


@router.get("", response_model=FavoritePlacesResponse)
async def list_favorites(
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    """The caller's favorite places, most recently added first."""
    places = await FavoriteService(db).list_places(user_id, skip=skip, limit=limit)
    return FavoritePlacesResponse(
        message="Favorites retrieved successfully",
        places=[PlaceResponse.model_validate(place) for place in places],
    )


@router.post("/review", response_model=ReviewEnvelope, status_code=status.HTTP_201_CREATED)
async def add_review(
    data: ReviewCreate,
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    """Leave a review on a place."""
    review = await FavoriteService(db).add_review(
        user_id, data.place_id, rating=data.rating, comment=data.comment
    )
    return ReviewEnvelope(message="Review added successfully", review=ReviewResponse.model_validate(review))


@router.delete("/{place_id}", response_model=MessageResponse)
async def remove_favorite(
    place_id: UUID,
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    await FavoriteService(db).remove(user_id, place_id)
    return MessageResponse(message="Removed from favorites")


@router.get("/{place_id}/check", response_model=FavoriteCheckResponse)
async def check_favorite(
    place_id: UUID,
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    return FavoriteCheckResponse(is_favorite=await FavoriteService(db).is_favorite(user_id, place_id))
