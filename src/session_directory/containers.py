"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from session_directory.adapters.nominatim_client import HttpxNominatimClient
from session_directory.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from session_directory.config import Settings
from session_directory.services.cache import InMemoryCache
from session_directory.services.maps import MapService
from session_directory.services.notifications import LoggingNotifier, Notifier
from session_directory.services.sessions import SessionDirectoryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_service: SessionDirectoryService
    map_service: MapService
    notifier: Notifier
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    session_repository = SupabaseSessionRepository(
        supabase_client, table=resolved_settings.sessions_table
    )
    session_service = SessionDirectoryService(
        repository=session_repository,
        code_length=resolved_settings.code_length,
    )
    geocoding_client = HttpxNominatimClient.create(
        base_url=resolved_settings.geocoding_base_url,
        user_agent=resolved_settings.geocoding_user_agent,
    )
    map_service = MapService(
        client=geocoding_client,
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.map_cache_ttl_seconds,
    )

    async def close_resources() -> None:
        await geocoding_client.close()

    return AppContainer(
        settings=resolved_settings,
        session_service=session_service,
        map_service=map_service,
        notifier=LoggingNotifier(),
        close_resources=close_resources,
    )
