"""Session directory operations gated by capability codes."""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from session_directory.domain.errors import (
    AccessDeniedError,
    SessionNotFoundError,
    SessionValidationError,
)
from session_directory.domain.events import (
    ATTENDEE_REMOVED,
    CREATED,
    DELETED,
    JOINED,
    LEFT,
    UPDATED,
    SessionEvent,
)
from session_directory.domain.sessions import (
    PRIVATE,
    PUBLIC,
    VISIBILITIES,
    Attendee,
    SessionChanges,
    SessionDraft,
    SessionRecord,
)
from session_directory.services.codes import (
    DEFAULT_CODE_LENGTH,
    authorize,
    generate_code,
)

MANAGEMENT_ROLE = "management"
PRIVATE_ROLE = "private"


class SessionRepository(Protocol):
    """Persistence interface for sessions."""

    def create_session(self, session: SessionRecord) -> SessionRecord:
        """Persist a new session and return it."""

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""

    def list_public_sessions(self) -> list[SessionRecord]:
        """Return public sessions ordered by date then time."""

    def save_session(self, session: SessionRecord) -> None:
        """Overwrite the stored copy of an existing session."""

    def delete_session(self, session_id: UUID) -> None:
        """Remove a session permanently."""


@dataclass(frozen=True)
class SessionOutcome:
    """Result of a mutation plus the events it produced."""

    session: SessionRecord
    events: list[SessionEvent] = field(default_factory=list)
    attendance_code: str | None = None


@dataclass(frozen=True)
class SessionView:
    """A session as seen by a caller holding ``role`` (``None`` if no code)."""

    session: SessionRecord
    role: str | None = None


def parse_session_id(raw: str) -> UUID:
    """Parse a session id from a path segment."""
    try:
        return UUID(raw)
    except ValueError as exc:
        raise SessionNotFoundError() from exc


def resolve_role(session: SessionRecord, code: str | None) -> str | None:
    """Return which capability ``code`` carries for ``session``, if any."""
    if authorize(code, session.management_code):
        return MANAGEMENT_ROLE
    if session.is_private and authorize(code, session.private_code):
        return PRIVATE_ROLE
    return None


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SessionDirectoryService:
    """Create, read and mutate sessions.

    Each operation is a single read-modify-write against one record. The
    service performs no notification I/O itself; mutations return the events
    they produced and the caller decides how to deliver them.
    """

    repository: SessionRepository
    code_length: int = DEFAULT_CODE_LENGTH
    clock: Callable[[], datetime] = _utcnow

    def create_session(self, draft: SessionDraft) -> SessionOutcome:
        """Create a session and issue its management (and private) code."""
        title = draft.title.strip()
        if not title:
            raise SessionValidationError("Title required")
        _validate_visibility(draft.visibility)
        _validate_capacity(draft.max_participants)
        management_code = generate_code(self.code_length)
        private_code = (
            generate_code(self.code_length) if draft.visibility == PRIVATE else None
        )
        session = self.repository.create_session(
            SessionRecord(
                id=uuid4(),
                title=title,
                description=draft.description,
                date=draft.date,
                time=draft.time,
                location=draft.location,
                max_participants=draft.max_participants,
                visibility=draft.visibility,
                management_code=management_code,
                private_code=private_code,
                contact_email=draft.contact_email,
                created_at=self.clock(),
            )
        )
        details = {"Management code": management_code}
        if private_code:
            details["Private code"] = private_code
        event = SessionEvent(
            kind=CREATED,
            session_id=session.id,
            title=session.title,
            recipient=session.contact_email,
            details=details,
        )
        return SessionOutcome(session=session, events=[event])

    def list_public_sessions(self) -> list[SessionRecord]:
        """Return public sessions sorted by date then time."""
        sessions = self.repository.list_public_sessions()
        return sorted(
            (session for session in sessions if session.visibility == PUBLIC),
            key=lambda session: (session.date, session.time),
        )

    def get_session(self, session_id: UUID, code: str | None = None) -> SessionView:
        """Return a session, enforcing the private-code check."""
        session = self._require(session_id)
        role = resolve_role(session, code)
        if session.is_private and role is None:
            raise AccessDeniedError("Private session. Code required.")
        return SessionView(session=session, role=role)

    def verify_code(self, session_id: UUID, code: str | None) -> str | None:
        """Return the role a code grants without exposing the session."""
        return resolve_role(self._require(session_id), code)

    def update_session(
        self, session_id: UUID, code: str | None, changes: SessionChanges
    ) -> SessionOutcome:
        """Apply a partial update; absent fields keep their stored values."""
        session = self._require_manager(
            session_id, code, "Management code invalid"
        )
        title = session.title if changes.title is None else changes.title.strip()
        if not title:
            raise SessionValidationError("Title required")
        visibility = _coalesce(changes.visibility, session.visibility)
        _validate_visibility(visibility)
        max_participants = _coalesce(
            changes.max_participants, session.max_participants
        )
        _validate_capacity(max_participants)
        if changes.max_participants is not None and (
            0 < max_participants < len(session.attendees)
        ):
            raise SessionValidationError(
                "Capacity is below the current number of attendees"
            )
        private_code = session.private_code
        if visibility == PRIVATE and not private_code:
            private_code = generate_code(self.code_length)
        if visibility == PUBLIC:
            private_code = None
        updated = replace(
            session,
            title=title,
            description=_coalesce(changes.description, session.description),
            date=_coalesce(changes.date, session.date),
            time=_coalesce(changes.time, session.time),
            location=_coalesce(changes.location, session.location),
            max_participants=max_participants,
            visibility=visibility,
            private_code=private_code,
            contact_email=_coalesce(changes.contact_email, session.contact_email),
        )
        self.repository.save_session(updated)
        return SessionOutcome(session=updated, events=[_event(UPDATED, updated)])

    def delete_session(self, session_id: UUID, code: str | None) -> SessionOutcome:
        """Delete a session permanently."""
        session = self._require_manager(
            session_id, code, "Management code invalid"
        )
        self.repository.delete_session(session.id)
        return SessionOutcome(session=session, events=[_event(DELETED, session)])

    def join_session(self, session_id: UUID, name: str | None) -> SessionOutcome:
        """Add an attendee and return their freshly issued attendance code."""
        session = self._require(session_id)
        # Read-then-append: concurrent joins may both pass this check.
        if session.is_full:
            raise SessionValidationError("Session is full")
        cleaned = (name or "").strip()
        if not cleaned:
            raise SessionValidationError("Name required")
        taken = {attendee.attendance_code for attendee in session.attendees}
        attendance_code = generate_code(self.code_length)
        while attendance_code in taken:
            attendance_code = generate_code(self.code_length)
        attendee = Attendee(
            name=cleaned, attendance_code=attendance_code, joined_at=self.clock()
        )
        updated = replace(session, attendees=(*session.attendees, attendee))
        self.repository.save_session(updated)
        return SessionOutcome(
            session=updated,
            events=[_event(JOINED, updated, attendee=cleaned)],
            attendance_code=attendance_code,
        )

    def leave_session(self, session_id: UUID, code: str | None) -> SessionOutcome:
        """Remove the attendee holding ``code``."""
        session = self._require(session_id)
        if not (code or "").strip():
            raise SessionValidationError("Code required")
        index = _find_attendee(
            session,
            lambda attendee: authorize(code, attendee.attendance_code),
        )
        if index is None:
            raise SessionValidationError("Invalid code")
        removed = session.attendees[index]
        updated = _without_attendee(session, index)
        self.repository.save_session(updated)
        return SessionOutcome(
            session=updated, events=[_event(LEFT, updated, attendee=removed.name)]
        )

    def remove_attendee(
        self,
        session_id: UUID,
        code: str | None,
        attendance_code: str | None = None,
        attendee_name: str | None = None,
    ) -> SessionOutcome:
        """Remove an attendee on behalf of the organizer.

        The target is resolved by attendance code when one is given, and by
        exact name otherwise. Only the first match is removed.
        """
        session = self._require_manager(
            session_id, code, "Management code required"
        )
        index = None
        if attendance_code:
            index = _find_attendee(
                session, lambda attendee: attendee.attendance_code == attendance_code
            )
        elif attendee_name:
            index = _find_attendee(
                session, lambda attendee: attendee.name == attendee_name
            )
        if index is None:
            raise SessionValidationError("Attendee not found")
        removed = session.attendees[index]
        updated = _without_attendee(session, index)
        self.repository.save_session(updated)
        return SessionOutcome(
            session=updated,
            events=[_event(ATTENDEE_REMOVED, updated, attendee=removed.name)],
        )

    def _require(self, session_id: UUID) -> SessionRecord:
        session = self.repository.get_session(session_id)
        if session is None:
            raise SessionNotFoundError()
        return session

    def _require_manager(
        self, session_id: UUID, code: str | None, message: str
    ) -> SessionRecord:
        session = self._require(session_id)
        if not authorize(code, session.management_code):
            raise AccessDeniedError(message)
        return session


def _coalesce(value, fallback):  # type: ignore[no-untyped-def]
    return fallback if value is None else value


def _validate_visibility(visibility: str) -> None:
    if visibility not in VISIBILITIES:
        raise SessionValidationError("Type must be 'public' or 'private'")


def _validate_capacity(max_participants: int) -> None:
    if max_participants < 0:
        raise SessionValidationError("maxParticipants must be zero or positive")


def _find_attendee(
    session: SessionRecord, predicate: Callable[[Attendee], bool]
) -> int | None:
    for index, attendee in enumerate(session.attendees):
        if predicate(attendee):
            return index
    return None


def _without_attendee(session: SessionRecord, index: int) -> SessionRecord:
    attendees = session.attendees[:index] + session.attendees[index + 1 :]
    return replace(session, attendees=attendees)


def _event(
    kind: str, session: SessionRecord, attendee: str | None = None
) -> SessionEvent:
    details = {"attendee": attendee} if attendee else {}
    return SessionEvent(
        kind=kind,
        session_id=session.id,
        title=session.title,
        recipient=session.contact_email,
        details=details,
    )
