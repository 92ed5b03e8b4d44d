"""Best-effort map links for session locations."""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

from session_directory.adapters.nominatim_client import GeocodingClient
from session_directory.services.cache import Cache

_EMBED_URL = "https://www.openstreetmap.org/export/embed.html"

_logger = logging.getLogger(__name__)


@dataclass
class MapService:
    """Resolve a location to an embeddable map URL, or ``None``."""

    client: GeocodingClient
    cache: Cache
    ttl_seconds: int = 86400

    async def map_url(self, location: str) -> str | None:
        """Return an OpenStreetMap embed URL for a location, if it resolves.

        Lookup failures degrade to ``None`` so that a broken geocoder never
        breaks reading a session.
        """
        query = location.strip()
        if not query:
            return None
        cache_key = f"geo:{query.lower()}"
        hit, cached = self.cache.lookup(cache_key)
        if hit:
            return cached if isinstance(cached, str) else None
        try:
            places = await self.client.search(query)
        except Exception as exc:
            _logger.warning("Geocoding lookup failed for %r: %s", query, exc)
            return None
        url = _embed_url(places[0]) if places else None
        self.cache.store(cache_key, url, ttl_seconds=self.ttl_seconds)
        return url


def _embed_url(place: dict[str, object]) -> str | None:
    try:
        lat = float(place["lat"])  # type: ignore[arg-type]
        lon = float(place["lon"])  # type: ignore[arg-type]
    except (KeyError, TypeError, ValueError):
        return None
    query = urlencode(
        {
            "bbox": f"{lon},{lat},{lon},{lat}",
            "layer": "mapnik",
            "marker": f"{lat},{lon}",
        }
    )
    return f"{_EMBED_URL}?{query}"
