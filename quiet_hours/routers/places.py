"""Places router - discovery, search and adding places."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from quiet_hours.core.database import get_db
from quiet_hours.core.photon_client import PhotonClient, get_photon_client
from quiet_hours.core.security import get_current_user_id
from quiet_hours.schemas.place import (
    ExternalPlaceResult,
    NearbyPlaceResponse,
    NearbyPlacesResponse,
    PlaceCreate,
    PlaceDetailResponse,
    PlaceEnvelope,
    PlaceListResponse,
    PlaceResponse,
    PlaceSearchRequest,
    PlaceSearchResponse,
    ReviewWithAuthor,
)
from quiet_hours.services.place_service import DEFAULT_RADIUS_METERS, SEARCH_LIMIT, PlaceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/places", tags=["places"])


@router.get("/nearby", response_model=NearbyPlacesResponse)
async def get_nearby_places(
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    radius: float = Query(DEFAULT_RADIUS_METERS, gt=0),
    db: AsyncSession = Depends(get_db),
):
    """Places within `radius` meters of a point, closest first (max 20)."""
    if latitude is None or longitude is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Latitude and longitude are required",
        )

    rows = await PlaceService(db).nearby(latitude, longitude, radius)

    return NearbyPlacesResponse(
        message="Places retrieved successfully",
        places=[
            NearbyPlaceResponse(**place.__dict__, distance=distance)
            for place, distance in rows
        ],
    )


@router.post("/search", response_model=PlaceSearchResponse)
async def search_places(
    data: PlaceSearchRequest,
    db: AsyncSession = Depends(get_db),
    photon: PhotonClient = Depends(get_photon_client),
):
    """Free-text search through the external geocoder, falling back to local data."""
    query = data.query.strip()
    if not query:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Search query is required")

    results = await photon.search(
        query,
        latitude=data.latitude,
        longitude=data.longitude,
        limit=SEARCH_LIMIT,
    )

    if results:
        return PlaceSearchResponse(
            message="Photon search successful",
            source="external",
            places=[ExternalPlaceResult(**result) for result in results],
        )

    logger.info(f"Photon returned no results for {query!r}; using local database search")
    places = await PlaceService(db).search_local(query)

    return PlaceSearchResponse(
        message="Photon returned no results; using local database search",
        source="local",
        places=[PlaceResponse.model_validate(place) for place in places],
    )


@router.get("", response_model=PlaceListResponse)
async def list_places(
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    place_type: Optional[str] = Query(None, alias="type"),
    db: AsyncSession = Depends(get_db),
):
    """All places, newest first."""
    places = await PlaceService(db).list_places(skip=skip, limit=limit, place_type=place_type)
    return PlaceListResponse(
        message="Places retrieved successfully",
        places=[PlaceResponse.model_validate(place) for place in places],
    )


@router.get("/{place_id}", response_model=PlaceDetailResponse)
async def get_place(
    place_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """A place and its reviews."""
    service = PlaceService(db)
    place = await service.get_place(place_id)
    reviews = await service.get_reviews(place_id)

    return PlaceDetailResponse(
        message="Place details retrieved successfully",
        place=PlaceResponse.model_validate(place),
        reviews=[
            ReviewWithAuthor(**review.__dict__, first_name=first_name, last_name=last_name)
            for review, first_name, last_name in reviews
        ],
    )


@router.post("", response_model=PlaceEnvelope, status_code=status.HTTP_201_CREATED)
async def add_place(
    data: PlaceCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    """Add a place, or return the existing row if it is already known."""
    place, created = await PlaceService(db).add_or_get(**data.model_dump())

    if not created:
        response.status_code = status.HTTP_200_OK
        return PlaceEnvelope(message="Place already exists", place=PlaceResponse.model_validate(place))

    return PlaceEnvelope(message="Place added successfully", place=PlaceResponse.model_validate(place))
