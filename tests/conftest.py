"""Shared test fixtures."""

from dataclasses import dataclass, field
from uuid import UUID

import pytest

from session_directory.adapters.nominatim_client import GeocodingClient
from session_directory.config import Settings
from session_directory.containers import AppContainer
from session_directory.domain.events import SessionEvent
from session_directory.domain.sessions import PUBLIC, SessionRecord
from session_directory.services.cache import InMemoryCache
from session_directory.services.maps import MapService
from session_directory.services.notifications import Notifier
from session_directory.services.sessions import (
    SessionDirectoryService,
    SessionRepository,
)


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository for tests."""

    sessions: dict[UUID, SessionRecord] = field(default_factory=dict)
    saves: int = 0

    def create_session(self, session: SessionRecord) -> SessionRecord:
        self.sessions[session.id] = session
        return session

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        return self.sessions.get(session_id)

    def list_public_sessions(self) -> list[SessionRecord]:
        return [
            session
            for session in self.sessions.values()
            if session.visibility == PUBLIC
        ]

    def save_session(self, session: SessionRecord) -> None:
        self.saves += 1
        self.sessions[session.id] = session

    def delete_session(self, session_id: UUID) -> None:
        self.sessions.pop(session_id, None)


@dataclass
class FailingSessionRepository(InMemorySessionRepository):
    """Repository whose reads fail like an unreachable database."""

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        raise RuntimeError("connection refused")

    def list_public_sessions(self) -> list[SessionRecord]:
        raise RuntimeError("connection refused")


@dataclass
class FakeGeocodingClient(GeocodingClient):
    """Fake geocoder returning a fixed result, or raising if configured."""

    places: list[dict[str, object]] = field(
        default_factory=lambda: [{"lat": "52.52", "lon": "13.405"}]
    )
    error: Exception | None = None
    queries: list[str] = field(default_factory=list)

    async def search(self, query: str) -> list[dict[str, object]]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.places


@dataclass
class RecordingNotifier(Notifier):
    """Notifier that keeps every event it receives."""

    events: list[SessionEvent] = field(default_factory=list)

    def notify(self, event: SessionEvent) -> None:
        self.events.append(event)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def session_service(
    session_repository: InMemorySessionRepository,
) -> SessionDirectoryService:
    return SessionDirectoryService(repository=session_repository)


@pytest.fixture
def geocoding_client() -> FakeGeocodingClient:
    return FakeGeocodingClient()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def container(
    settings: Settings,
    session_service: SessionDirectoryService,
    geocoding_client: FakeGeocodingClient,
    notifier: RecordingNotifier,
) -> AppContainer:
    map_service = MapService(client=geocoding_client, cache=InMemoryCache())

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        session_service=session_service,
        map_service=map_service,
        notifier=notifier,
        close_resources=close_resources,
    )
