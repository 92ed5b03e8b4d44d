"""Descriptions of what a session mutation did."""

from dataclasses import dataclass, field
from uuid import UUID

CREATED = "created"
UPDATED = "updated"
DELETED = "deleted"
JOINED = "joined"
LEFT = "left"
ATTENDEE_REMOVED = "attendee_removed"


@dataclass(frozen=True)
class SessionEvent:
    """A notification-worthy change to a session."""

    kind: str
    session_id: UUID
    title: str
    recipient: str = ""
    details: dict[str, str] = field(default_factory=dict)
