"""Sample data for local development."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from quiet_hours.models.place import Place

logger = logging.getLogger(__name__)

SAMPLE_PLACES = [
    {
        "name": "Quiet Cafe Downtown",
        "description": "A peaceful cafe with free WiFi",
        "address": "123 Main St, City",
        "latitude": 40.7128,
        "longitude": -74.0060,
        "place_type": "Cafe",
        "amenities": "WiFi,Power Outlets,Quiet Zone",
        "hourly_rate": 5.00,
        "image": "https://picsum.photos/seed/quiet-1/800/600",
    },
    {
        "name": "Library Study Zone",
        "description": "Modern library with study areas",
        "address": "456 Oak Ave, City",
        "latitude": 40.7200,
        "longitude": -73.9800,
        "place_type": "Library",
        "amenities": "Quiet,Study Tables,WiFi",
        "hourly_rate": 0.00,
        "image": "https://picsum.photos/seed/quiet-2/800/600",
    },
    {
        "name": "Coworking Space",
        "description": "Professional coworking environment",
        "address": "789 Business Blvd, City",
        "latitude": 40.7300,
        "longitude": -73.9700,
        "place_type": "Coworking",
        "amenities": "WiFi,Meeting Rooms,Parking",
        "hourly_rate": 15.00,
        "image": "https://picsum.photos/seed/quiet-3/800/600",
    },
    {
        "name": "Park Pavilion",
        "description": "Peaceful outdoor pavilion",
        "address": "321 Green Lane, City",
        "latitude": 40.7400,
        "longitude": -73.9600,
        "place_type": "Park",
        "amenities": "Outdoor,Benches,Shade",
        "hourly_rate": 0.00,
        "image": "https://picsum.photos/seed/quiet-4/800/600",
    },
    {
        "name": "Wellness Center",
        "description": "Meditation and wellness space",
        "address": "654 Peace St, City",
        "latitude": 40.7500,
        "longitude": -73.9500,
        "place_type": "Wellness",
        "amenities": "Meditation,Yoga,Quiet",
        "hourly_rate": 10.00,
        "image": "https://picsum.photos/seed/quiet-5/800/600",
    },
]


async def seed_sample_places(db: AsyncSession) -> int:
    """Insert the sample places if the table is empty. Returns rows inserted."""
    count = await db.scalar(select(func.count(Place.id)))
    if count:
        return 0

    db.add_all([Place(**fields) for fields in SAMPLE_PLACES])
    await db.commit()
    logger.info(f"Database seeded with {len(SAMPLE_PLACES)} sample places")
    return len(SAMPLE_PLACES)
