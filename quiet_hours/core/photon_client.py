"""
Photon (OpenStreetMap) geocoder client

Provides free-text place search for discovery. Results are ephemeral; they
only become rows once a client adds one through POST /places.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from quiet_hours.core.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20


def feature_to_place(feature: Dict[str, Any]) -> Dict[str, Any]:
    """Map a Photon GeoJSON feature onto the place result shape."""
    props = feature.get("properties") or {}
    coordinates = (feature.get("geometry") or {}).get("coordinates") or [0, 0]
    longitude, latitude = coordinates[0], coordinates[1]

    address_parts = [
        props.get("street"),
        props.get("housenumber"),
        props.get("city"),
        props.get("state"),
        props.get("country"),
    ]
    osm_id = props.get("osm_id")

    return {
        "external_id": str(osm_id) if osm_id is not None else None,
        "name": props.get("name") or props.get("street") or "Place",
        "address": ", ".join(str(part) for part in address_parts if part),
        "latitude": latitude,
        "longitude": longitude,
        "place_type": props.get("type") or props.get("osm_key") or "Place",
        "amenities": props.get("osm_value"),
        "rating": 0,
    }


class PhotonClient:
    """Client for the Photon search API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.photon_base_url).rstrip("/")
        self.timeout = timeout or settings.photon_timeout_seconds
        self.user_agent = settings.photon_user_agent
        self._transport = transport

    async def search(
        self,
        query: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        limit: int = DEFAULT_LIMIT,
    ) -> Optional[List[Dict[str, Any]]]:
        """Search places by free text.

        Returns the mapped results, or None if the provider could not be
        reached or answered with an error.
        """
        params: Dict[str, Any] = {"q": query, "limit": limit}
        if latitude is not None and longitude is not None:
            params["lat"] = latitude
            params["lon"] = longitude

        headers = {"User-Agent": self.user_agent} if self.user_agent else {}

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.get(f"{self.base_url}/api/", params=params, headers=headers)

            if response.status_code != 200:
                logger.warning(f"[PHOTON] Search failed: {response.status_code}")
                return None

            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"[PHOTON] Search error: {e}")
            return None

        features = data.get("features") if isinstance(data, dict) else None
        features = features or []
        return [feature_to_place(feature) for feature in features]


_photon_client: Optional[PhotonClient] = None


def get_photon_client() -> PhotonClient:
    """FastAPI dependency returning the shared Photon client."""
    global _photon_client
    if _photon_client is None:
        _photon_client = PhotonClient()
    return _photon_client
