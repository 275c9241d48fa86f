"""Forward, reverse and autocomplete geocoding."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx

from smart_trip.core.config import ApiSettings
from smart_trip.core.errors import GeocodingError
from smart_trip.core.schemas import Location

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_USER_AGENT = "SmartTripPlanner/1.0"


def _place_to_location(place: Dict[str, Any], *, fallback_name: Optional[str] = None) -> Location:
    name = (
        place.get("city")
        or place.get("town")
        or place.get("village")
        or place.get("name")
        or place.get("county")
        or fallback_name
        or place.get("formatted")
    )
    return Location(
        name=name,
        display_name=place.get("formatted"),
        lat=place["lat"],
        lng=place["lon"],
        country=place.get("country"),
    )


class GeoapifyClient:
    """Thin async wrapper around the Geoapify geocoding API v1."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.geoapify.com/v1/geocode",
        timeout_s: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"accept": "application/json"},
            timeout=httpx.Timeout(timeout_s, connect=5.0),
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTPX client."""

        await self._client.aclose()

    async def _aget(self, path: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Execute an authenticated GET request and return the ``results`` list."""

        try:
            response = await self._client.get(path, params={**params, "apiKey": self.api_key, "format": "json"})
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise GeocodingError(f"Geoapify request failed: {exc}") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise GeocodingError(f"Geoapify returned a non-JSON body: {exc}") from exc
        if not isinstance(payload, dict):
            raise GeocodingError(f"Unexpected Geoapify payload: {type(payload).__name__}")
        results = payload.get("results") or []
        if not isinstance(results, list):
            raise GeocodingError("Unexpected Geoapify payload: results is not a list")
        return [item for item in results if isinstance(item, dict) and "lat" in item and "lon" in item]

    async def search(self, text: str, *, limit: int = 1) -> List[Location]:
        """Forward-geocode free text into candidate locations."""

        if not text or not text.strip():
            return []
        results = await self._aget("/search", {"text": text.strip(), "limit": limit})
        return [_place_to_location(item, fallback_name=text.strip()) for item in results]

    async def search_one(self, text: str) -> Optional[Location]:
        matches = await self.search(text, limit=1)
        return matches[0] if matches else None

    async def autocomplete(self, text: str, *, limit: int = 5) -> List[Location]:
        """City suggestions for a partially typed name."""

        if not text or len(text.strip()) < 2:
            return []
        results = await self._aget("/autocomplete", {"text": text.strip(), "limit": limit, "type": "city"})
        return [_place_to_location(item) for item in results]

    async def reverse(self, lat: float, lng: float) -> Optional[Location]:
        """Name the place at the given coordinates, keeping the caller's coordinates."""

        results = await self._aget("/reverse", {"lat": lat, "lon": lng})
        if not results:
            return None
        location = _place_to_location(results[0])
        return location.model_copy(update={"lat": lat, "lng": lng})


def create_geoapify_client(settings: ApiSettings) -> GeoapifyClient:
    """Instantiate the Geoapify client using project configuration."""

    return GeoapifyClient(api_key=settings.ensure("geoapify_api_key"))


async def geocode_nominatim(
    queries: Iterable[str],
    *,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = 10.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[Location]:
    """Return the first Nominatim hit over ``queries`` (tried in order) or ``None``."""

    cleaned = [query.strip() for query in queries if query and len(query.strip()) > 1]
    if not cleaned:
        return None

    async with httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": user_agent},
        transport=transport,
    ) as client:
        for query in cleaned:
            try:
                response = await client.get(
                    NOMINATIM_URL,
                    params={"q": query, "format": "json", "limit": 1, "addressdetails": 1},
                )
                response.raise_for_status()
                data = response.json()
            except (httpx.HTTPError, ValueError) as exc:
                logger.debug("Nominatim lookup for %r failed: %s", query, exc)
                continue

            if data:
                first = data[0]
                address = first.get("address") or {}
                return Location(
                    name=address.get("city") or address.get("town") or first.get("name") or query,
                    display_name=first.get("display_name"),
                    lat=float(first["lat"]),
                    lng=float(first["lon"]),
                    country=address.get("country"),
                )
    return None
