"""Place discovery: nearby search, local text search, listing and dedupe-or-insert."""

import logging
import math
from typing import Optional
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from quiet_hours.core.errors import NotFound
from quiet_hours.models.place import Place
from quiet_hours.models.review import Review
from quiet_hours.models.user import User

logger = logging.getLogger(__name__)

EARTH_RADIUS_METERS = 6371000
DEFAULT_RADIUS_METERS = 5000
NEARBY_LIMIT = 20
SEARCH_LIMIT = 20


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points, in meters."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lon2) - math.radians(lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(a)))


def distance_expression(latitude: float, longitude: float) -> ColumnElement:
    """SQL haversine distance from (latitude, longitude) to each place, in meters."""
    phi1 = math.radians(latitude)
    lambda1 = math.radians(longitude)
    phi2 = func.radians(Place.latitude)
    half_dphi = (phi2 - phi1) / 2
    half_dlambda = (func.radians(Place.longitude) - lambda1) / 2

    a = (
        func.sin(half_dphi) * func.sin(half_dphi)
        + math.cos(phi1) * func.cos(phi2) * func.sin(half_dlambda) * func.sin(half_dlambda)
    )
    # Rounding can push sqrt(a) a hair above 1 near the antipode; asin would reject it
    return 2 * EARTH_RADIUS_METERS * func.asin(func.least(1.0, func.sqrt(a)))


class PlaceService:
    """Service for reading and adding places."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def nearby(
        self,
        latitude: float,
        longitude: float,
        radius: float = DEFAULT_RADIUS_METERS,
        limit: int = NEARBY_LIMIT,
    ) -> list[tuple[Place, float]]:
        """Places within `radius` meters, closest first.

        A linear scan over the table; there is no spatial index.
        """
        distance = distance_expression(latitude, longitude)
        result = await self.db.execute(
            select(Place, distance.label("distance"))
            .where(distance <= radius)
            .order_by(distance)
            .limit(limit)
        )
        return [(row[0], float(row[1])) for row in result.all()]

    async def list_places(
        self,
        skip: int = 0,
        limit: int = 20,
        place_type: Optional[str] = None,
    ) -> list[Place]:
        query = select(Place)
        if place_type:
            query = query.where(Place.place_type == place_type)
        query = query.order_by(Place.created_at.desc()).offset(skip).limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def search_local(self, term: str, limit: int = SEARCH_LIMIT) -> list[Place]:
        """Substring match on name, address, amenities and type, newest first."""
        term = term.strip()
        result = await self.db.execute(
            select(Place)
            .where(
                or_(
                    Place.name.icontains(term, autoescape=True),
                    Place.address.icontains(term, autoescape=True),
                    Place.amenities.icontains(term, autoescape=True),
                    Place.place_type.icontains(term, autoescape=True),
                )
            )
            .order_by(Place.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_place(self, place_id: UUID) -> Place:
        place = await self.db.get(Place, place_id)
        if not place:
            raise NotFound("Place not found")
        return place

    async def get_reviews(self, place_id: UUID) -> list[tuple[Review, str, str]]:
        """Reviews of a place with the reviewer's name, newest first."""
        result = await self.db.execute(
            select(Review, User.first_name, User.last_name)
            .join(User, Review.user_id == User.id)
            .where(Review.place_id == place_id)
            .order_by(Review.created_at.desc())
        )
        return [(row[0], row[1], row[2]) for row in result.all()]

    async def add_or_get(self, **fields) -> tuple[Place, bool]:
        """Insert a place unless it already exists.

        Matches by external_id first, then by the (name, address) pair.
        Returns the place and whether it was created.
        """
        external_id = fields.get("external_id")
        if external_id:
            result = await self.db.execute(
                select(Place).where(Place.external_id == external_id).limit(1)
            )
            existing = result.scalar_one_or_none()
            if existing:
                return existing, False

        result = await self.db.execute(
            select(Place)
            .where(Place.name == fields["name"], Place.address == fields["address"])
            .limit(1)
        )
        existing = result.scalar_one_or_none()
        if existing:
            return existing, False

        place = Place(**fields)
        self.db.add(place)
        await self.db.commit()
        await self.db.refresh(place)
        logger.info(f"Place {place.id} added ({place.name})")
        return place, True
