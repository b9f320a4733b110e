"""
Places Service

Thin proxy over the Google Geocoding and Places web APIs. Venue proposals use
it to turn a map tap or a search string into a name, address and place id.
"""

from typing import Any, Dict, List, Optional

import httpx

from nightout.core.config import settings
from nightout.services.logger import logger

GOOGLE_MAPS_API_URL = "https://maps.googleapis.com/maps/api"

DETAIL_FIELDS = (
    "name,formatted_address,geometry,formatted_phone_number,website,rating,"
    "price_level,opening_hours,reviews,url,user_ratings_total"
)

FALLBACK_NAME = "Selected Location"
FALLBACK_ADDRESS = "Custom location selected on map"


class PlacesError(Exception):
    """Raised when the Places API is unreachable or rejects a request."""


def _name_from_components(components: List[Dict[str, Any]]) -> str:
    """Establishment name, else 'number route', else route."""

    def find(kind: str) -> Optional[Dict[str, Any]]:
        return next((c for c in components if kind in c.get("types", [])), None)

    establishment = find("establishment")
    street_number = find("street_number")
    route = find("route")

    if establishment:
        return establishment.get("long_name", "")
    if street_number and route:
        return f"{street_number.get('long_name', '')} {route.get('long_name', '')}"
    if route:
        return route.get("long_name", "")
    return ""


def _summarize_details(place_id: str, details: Dict[str, Any]) -> Dict[str, Any]:
    location = (details.get("geometry") or {}).get("location") or {}
    return {
        "place_id": place_id,
        "name": details.get("name"),
        "address": details.get("formatted_address"),
        "latitude": location.get("lat"),
        "longitude": location.get("lng"),
        "phone_number": details.get("formatted_phone_number"),
        "website": details.get("website"),
        "rating": details.get("rating"),
        "price_level": details.get("price_level"),
        "opening_hours": (details.get("opening_hours") or {}).get("weekday_text"),
        "reviews": details.get("reviews"),
        "url": details.get("url"),
        "user_ratings_total": details.get("user_ratings_total"),
    }


class PlacesService:
    """Client for Google Geocoding / Places"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._transport = transport

    @property
    def api_key(self) -> str:
        return self._api_key if self._api_key is not None else settings.GOOGLE_PLACES_API_KEY

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if not self.is_configured:
            raise PlacesError("GOOGLE_PLACES_API_KEY is not configured")

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=float(settings.PLACES_TIMEOUT_SECONDS),
            ) as client:
                response = await client.get(
                    f"{GOOGLE_MAPS_API_URL}/{path}",
                    params={**params, "key": self.api_key},
                )
        except httpx.HTTPError as e:
            raise PlacesError(f"Places request failed: {e}") from e

        if not response.is_success:
            raise PlacesError(f"Places API returned HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise PlacesError("Places API returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise PlacesError("Places API returned an unexpected body")

        api_status = data.get("status")
        if api_status not in ("OK", "ZERO_RESULTS"):
            raise PlacesError(
                f"Places API status {api_status}: {data.get('error_message', '')}".strip()
            )
        return data

    async def place_details(self, place_id: str) -> Dict[str, Any]:
        data = await self._get(
            "place/details/json", {"place_id": place_id, "fields": DETAIL_FIELDS}
        )
        details = data.get("result")
        if not details:
            raise PlacesError(f"No details for place {place_id}")
        return _summarize_details(place_id, details)

    async def search(self, query: str) -> List[Dict[str, Any]]:
        """Free-text place search."""
        data = await self._get("place/textsearch/json", {"query": query})
        return [
            _summarize_details(result.get("place_id"), result)
            for result in data.get("results", [])
            if result.get("place_id")
        ]

    async def reverse_geocode(self, latitude: float, longitude: float) -> Dict[str, Any]:
        """
        Resolve a map coordinate to a place.

        Tries geocoding, then place details for the geocoded place id. Every
        failure degrades to a coarser answer; the last resort is the bare
        coordinate labelled as a custom location.
        """
        fallback = {
            "place_id": None,
            "name": FALLBACK_NAME,
            "address": FALLBACK_ADDRESS,
            "latitude": latitude,
            "longitude": longitude,
        }

        try:
            data = await self._get("geocode/json", {"latlng": f"{latitude},{longitude}"})
        except PlacesError as e:
            logger.warning(
                "Reverse geocoding failed, using raw coordinates",
                {"error": str(e), "latitude": latitude, "longitude": longitude},
            )
            return fallback

        results = data.get("results") or []
        if not results:
            return fallback

        first = results[0]
        place_id = first.get("place_id")
        geocoded = {
            "place_id": place_id,
            "name": _name_from_components(first.get("address_components") or [])
            or FALLBACK_NAME,
            "address": first.get("formatted_address") or FALLBACK_ADDRESS,
            "latitude": latitude,
            "longitude": longitude,
        }
        if not place_id:
            return geocoded

        try:
            return await self.place_details(place_id)
        except PlacesError as e:
            logger.warning(
                f"Place details failed for {place_id}, using geocoding result",
                {"error": str(e)},
            )
            return geocoded


# Global instance
places_service = PlacesService()
