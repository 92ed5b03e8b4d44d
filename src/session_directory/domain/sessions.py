"""Domain models for scheduled sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

PUBLIC = "public"
PRIVATE = "private"
VISIBILITIES = frozenset({PUBLIC, PRIVATE})


@dataclass(frozen=True)
class Attendee:
    """A participant who joined a session."""

    name: str
    attendance_code: str
    joined_at: datetime


@dataclass(frozen=True)
class SessionRecord:
    """Represents a persisted session."""

    id: UUID
    title: str
    management_code: str
    created_at: datetime
    description: str = ""
    date: str = ""
    time: str = ""
    location: str = ""
    max_participants: int = 0
    visibility: str = PUBLIC
    private_code: str | None = None
    contact_email: str = ""
    attendees: tuple[Attendee, ...] = ()

    @property
    def is_private(self) -> bool:
        return self.visibility == PRIVATE

    @property
    def is_full(self) -> bool:
        """Return true when a capacity is set and already reached."""
        return (
            self.max_participants > 0
            and len(self.attendees) >= self.max_participants
        )


@dataclass(frozen=True)
class SessionDraft:
    """Organizer input for a new session."""

    title: str
    description: str = ""
    date: str = ""
    time: str = ""
    location: str = ""
    max_participants: int = 0
    visibility: str = PUBLIC
    contact_email: str = ""


@dataclass(frozen=True)
class SessionChanges:
    """Partial update; ``None`` leaves the stored value unchanged."""

    title: str | None = None
    description: str | None = None
    date: str | None = None
    time: str | None = None
    location: str | None = None
    max_participants: int | None = None
    visibility: str | None = None
    contact_email: str | None = None
