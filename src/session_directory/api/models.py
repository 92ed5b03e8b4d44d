"""Request models and response serialization for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field

from session_directory.domain.sessions import PUBLIC, SessionChanges, SessionDraft
from session_directory.services.sessions import MANAGEMENT_ROLE, SessionView


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateSessionRequest(_CamelModel):
    """Body of ``POST /sessions``."""

    title: str | None = None
    description: str | None = None
    date: str | None = None
    time: str | None = None
    max_participants: int | None = Field(default=None, alias="maxParticipants")
    type: str | None = None
    location: str | None = None
    email: str | None = None

    def to_draft(self) -> SessionDraft:
        return SessionDraft(
            title=self.title or "",
            description=self.description or "",
            date=self.date or "",
            time=self.time or "",
            location=self.location or "",
            max_participants=self.max_participants or 0,
            visibility=self.type or PUBLIC,
            contact_email=self.email or "",
        )


class UpdateSessionRequest(_CamelModel):
    """Body of ``PUT /sessions/{id}``; omitted or null fields are kept."""

    title: str | None = None
    description: str | None = None
    date: str | None = None
    time: str | None = None
    max_participants: int | None = Field(default=None, alias="maxParticipants")
    type: str | None = None
    location: str | None = None
    email: str | None = None

    def to_changes(self) -> SessionChanges:
        return SessionChanges(
            title=self.title,
            description=self.description,
            date=self.date,
            time=self.time,
            location=self.location,
            max_participants=self.max_participants,
            visibility=self.type,
            contact_email=self.email,
        )


class JoinRequest(_CamelModel):
    name: str | None = None


class CodeRequest(_CamelModel):
    """Body carrying a single capability code (leave, verify)."""

    code: str | None = None


class RemoveAttendeeRequest(_CamelModel):
    """Body of ``POST /attendance/{id}/remove``."""

    code: str | None = None
    attendance_code: str | None = Field(default=None, alias="attendanceCode")
    attendee_name: str | None = Field(default=None, alias="attendeeName")


def serialize_session(view: SessionView) -> dict[str, object]:
    """Render a session for a caller, hiding codes their role doesn't cover.

    The management code, attendance codes and contact email are only shown
    to the holder of the management code. The private code is shown to anyone
    who presented a valid code.
    """
    session = view.session
    is_manager = view.role == MANAGEMENT_ROLE
    attendees = []
    for attendee in session.attendees:
        item: dict[str, object] = {
            "name": attendee.name,
            "joinedAt": attendee.joined_at.isoformat(),
        }
        if is_manager:
            item["attendanceCode"] = attendee.attendance_code
        attendees.append(item)
    payload: dict[str, object] = {
        "id": str(session.id),
        "title": session.title,
        "description": session.description,
        "date": session.date,
        "time": session.time,
        "maxParticipants": session.max_participants,
        "type": session.visibility,
        "location": session.location,
        "privateCode": session.private_code if view.role else None,
        "attendees": attendees,
        "createdAt": session.created_at.isoformat(),
    }
    if is_manager:
        payload["managementCode"] = session.management_code
        payload["contactEmail"] = session.contact_email
    return payload
