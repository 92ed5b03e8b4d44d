"""OpenStreetMap Nominatim geocoding client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

DEFAULT_BASE_URL = "https://nominatim.openstreetmap.org"


class GeocodingClient(Protocol):
    """Interface for free-text place lookups."""

    async def search(self, query: str) -> list[dict[str, object]]:
        """Return raw place matches for a query, best first."""


@dataclass
class HttpxNominatimClient(GeocodingClient):
    """HTTPX-backed Nominatim client."""

    base_url: str
    user_agent: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, base_url: str = DEFAULT_BASE_URL, user_agent: str = "session-directory"
    ) -> "HttpxNominatimClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            user_agent=user_agent,
            http_client=httpx.AsyncClient(),
        )

    async def search(self, query: str) -> list[dict[str, object]]:
        """Search places matching a free-text query."""
        response = await self.http_client.get(
            f"{self.base_url}/search",
            params={"format": "json", "q": query, "limit": 1},
            headers={"User-Agent": self.user_agent},
            timeout=10,
        )
        response.raise_for_status()
        payload = response.json()
        return payload if isinstance(payload, list) else []

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
