"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from session_directory.domain.sessions import PUBLIC, Attendee, SessionRecord
from session_directory.services.sessions import SessionRepository

_COLUMNS = (
    "id, title, description, date, time, location, max_participants, type, "
    "management_code, private_code, contact_email, attendees, created_at"
)


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation storing attendees as a JSON column."""

    client: Client
    table: str = "sessions"

    def create_session(self, session: SessionRecord) -> SessionRecord:
        """Insert a session row and return it."""
        response = self.client.table(self.table).insert(_to_row(session)).execute()
        if not response.data:
            raise RuntimeError("Failed to create session")
        return _from_row(response.data[0])

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""
        response = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _from_row(response.data[0])

    def list_public_sessions(self) -> list[SessionRecord]:
        """Return public sessions ordered by date then time."""
        response = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .eq("type", PUBLIC)
            .order("date")
            .order("time")
            .execute()
        )
        return [_from_row(row) for row in response.data or []]

    def save_session(self, session: SessionRecord) -> None:
        """Overwrite the mutable columns of a session."""
        row = _to_row(session)
        for immutable in ("id", "management_code", "created_at"):
            row.pop(immutable)
        self.client.table(self.table).update(row).eq("id", str(session.id)).execute()

    def delete_session(self, session_id: UUID) -> None:
        """Delete a session row."""
        self.client.table(self.table).delete().eq("id", str(session_id)).execute()


def _to_row(session: SessionRecord) -> dict[str, object]:
    return {
        "id": str(session.id),
        "title": session.title,
        "description": session.description,
        "date": session.date,
        "time": session.time,
        "location": session.location,
        "max_participants": session.max_participants,
        "type": session.visibility,
        "management_code": session.management_code,
        "private_code": session.private_code,
        "contact_email": session.contact_email,
        "attendees": [
            {
                "name": attendee.name,
                "attendance_code": attendee.attendance_code,
                "joined_at": attendee.joined_at.isoformat(),
            }
            for attendee in session.attendees
        ],
        "created_at": session.created_at.isoformat(),
    }


def _from_row(row: dict[str, object]) -> SessionRecord:
    attendees = row.get("attendees") or []
    return SessionRecord(
        id=UUID(str(row["id"])),
        title=str(row["title"]),
        description=str(row.get("description") or ""),
        date=str(row.get("date") or ""),
        time=str(row.get("time") or ""),
        location=str(row.get("location") or ""),
        max_participants=int(row.get("max_participants") or 0),
        visibility=str(row.get("type") or PUBLIC),
        management_code=str(row["management_code"]),
        private_code=row.get("private_code") or None,  # type: ignore[arg-type]
        contact_email=str(row.get("contact_email") or ""),
        attendees=tuple(
            Attendee(
                name=str(item["name"]),
                attendance_code=str(item["attendance_code"]),
                joined_at=datetime.fromisoformat(str(item["joined_at"])),
            )
            for item in attendees  # type: ignore[union-attr]
        ),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
