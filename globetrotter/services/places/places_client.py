"""Google Places web service adapter.

Stateless request/response translation: provider statuses other than the
accepted ones become ``UpstreamError``; nothing is retried.
"""
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import httpx

from globetrotter.core.config import settings
from globetrotter.core.exceptions import UpstreamError
from globetrotter.core.logger import logger

MAX_NEARBY_RADIUS = 50000
DETAIL_FIELDS = (
    "name,formatted_address,formatted_phone_number,geometry,rating,reviews,"
    "photos,price_level,opening_hours,website,types,user_ratings_total"
)
LIST_STATUSES = ("OK", "ZERO_RESULTS")


class PlacesClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = settings.PLACES_BASE_URL,
        timeout: float = settings.PLACES_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, endpoint: str, params: Dict[str, Any], accepted=LIST_STATUSES) -> Dict[str, Any]:
        query = {k: v for k, v in params.items() if v is not None}
        query["key"] = self.api_key
        try:
            response = await self._client.get(f"/{endpoint}/json", params=query)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Places {endpoint} HTTP {e.response.status_code}")
            raise UpstreamError(f"HTTP_{e.response.status_code}")
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Places {endpoint} request failed: {type(e).__name__}")
            raise UpstreamError("REQUEST_FAILED")

        status = data.get("status", "UNKNOWN")
        if status not in accepted:
            logger.error(f"Places {endpoint} returned status {status}")
            raise UpstreamError(status)
        return data

    async def search_places(self, query: str, place_type: Optional[str] = None) -> List[Dict[str, Any]]:
        data = await self._get("textsearch", {"query": query, "type": place_type})
        return data.get("results", [])

    async def get_place_details(self, place_id: str) -> Dict[str, Any]:
        data = await self._get(
            "details",
            {"place_id": place_id, "fields": DETAIL_FIELDS},
            accepted=("OK",),
        )
        return data.get("result", {})

    async def get_nearby_places(
        self,
        lat: float,
        lng: float,
        radius: int = 5000,
        place_type: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        data = await self._get(
            "nearbysearch",
            {
                "location": f"{lat},{lng}",
                "radius": min(radius, MAX_NEARBY_RADIUS),
                "type": place_type,
            },
        )
        return data.get("results", [])

    async def autocomplete(self, text: str, types: Optional[str] = None) -> List[Dict[str, Any]]:
        data = await self._get("autocomplete", {"input": text, "types": types})
        return data.get("predictions", [])

    def get_photo_url(self, photo_reference: str, max_width: int = 400) -> str:
        query = urlencode({
            "maxwidth": max_width,
            "photo_reference": photo_reference,
            "key": self.api_key,
        })
        return f"{self.base_url}/photo?{query}"


async def get_places_client():
    """FastAPI dependency yielding a client bound to the configured API key."""
    client = PlacesClient(settings.GOOGLE_PLACES_API_KEY)
    try:
        yield client
    finally:
        await client.aclose()
