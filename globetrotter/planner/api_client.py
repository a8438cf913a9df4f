"""HTTP client the planner uses to drive the GlobeTrotter API."""
from typing import Any, Dict, List, Optional

import httpx

from globetrotter.core.logger import logger


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class TripPlannerApi:
    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {type(e).__name__}")
            raise ApiError(0, "Network error") from e

        if response.is_error:
            try:
                message = response.json().get("message", response.text)
            except ValueError:
                message = response.text
            raise ApiError(response.status_code, message)
        return response.json()

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        data = await self.request("POST", "/users/login", json={"email": email, "password": password})
        self.token = data["token"]
        return data["user"]

    async def search_places(self, query: str, **params) -> List[Dict[str, Any]]:
        return await self.request("GET", "/trips/places/search", params={"query": query, **params})

    async def add_city(
        self,
        name: str,
        country: str,
        cost_index: Optional[float] = None,
        popularity_score: Optional[float] = None,
    ) -> int:
        data = await self.request(
            "POST",
            "/trips/city-add",
            json={
                "name": name,
                "country": country,
                "costIndex": cost_index,
                "popularityScore": popularity_score,
            },
        )
        return data["cityId"]

    async def delete_city(self, city_id: int) -> Dict[str, Any]:
        return await self.request("DELETE", f"/trips/city/{city_id}")

    async def create_trip(self, **fields) -> Dict[str, Any]:
        return await self.request("POST", "/trips", json=fields)

    async def delete_trip(self, trip_id: str) -> Dict[str, Any]:
        return await self.request("DELETE", f"/trips/{trip_id}")

    async def add_stops(self, trip_id: str, stops: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return await self.request("POST", f"/trips/{trip_id}/stops", json={"stops": stops})

    async def get_trip(self, trip_id: str) -> Dict[str, Any]:
        return await self.request("GET", f"/trips/{trip_id}")
