"""Tests for map lookups."""

import asyncio

from session_directory.services.cache import InMemoryCache
from session_directory.services.maps import MapService
from tests.conftest import FakeGeocodingClient


def test_map_url_for_resolved_location() -> None:
    client = FakeGeocodingClient()
    service = MapService(client=client, cache=InMemoryCache())

    url = asyncio.run(service.map_url("  Berlin "))

    assert url is not None
    assert url.startswith("https://www.openstreetmap.org/export/embed.html?")
    assert "bbox=13.405%2C52.52%2C13.405%2C52.52" in url
    assert client.queries == ["Berlin"]


def test_map_url_is_cached_including_misses() -> None:
    client = FakeGeocodingClient(places=[])
    service = MapService(client=client, cache=InMemoryCache())

    first = asyncio.run(service.map_url("Atlantis"))
    second = asyncio.run(service.map_url("atlantis"))

    assert first is None
    assert second is None
    assert client.queries == ["Atlantis"]


def test_map_url_skips_blank_location() -> None:
    client = FakeGeocodingClient()
    service = MapService(client=client, cache=InMemoryCache())

    assert asyncio.run(service.map_url("   ")) is None
    assert client.queries == []


def test_map_url_failure_is_not_cached() -> None:
    client = FakeGeocodingClient(error=RuntimeError("timeout"))
    service = MapService(client=client, cache=InMemoryCache())

    assert asyncio.run(service.map_url("Berlin")) is None
    client.error = None
    assert asyncio.run(service.map_url("Berlin")) is not None
    assert client.queries == ["Berlin", "Berlin"]


def test_map_url_ignores_place_without_coordinates() -> None:
    client = FakeGeocodingClient(places=[{"display_name": "Nowhere"}])
    service = MapService(client=client, cache=InMemoryCache())

    assert asyncio.run(service.map_url("Nowhere")) is None
