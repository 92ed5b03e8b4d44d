"""Attendance endpoints: join, leave and organizer removal."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from session_directory.api.models import (
    CodeRequest,
    JoinRequest,
    RemoveAttendeeRequest,
)
from session_directory.services.notifications import dispatch
from session_directory.services.sessions import parse_session_id

if TYPE_CHECKING:
    from session_directory.containers import AppContainer

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.post("/{session_id}/join")
async def join_session(
    session_id: str, request: Request, body: JoinRequest | None = None
) -> dict[str, str | None]:
    """Join a session; the returned attendance code is the caller's only copy."""
    container: AppContainer = request.app.state.container
    outcome = container.session_service.join_session(
        parse_session_id(session_id), (body or JoinRequest()).name
    )
    dispatch(container.notifier, outcome.events)
    return {"attendanceCode": outcome.attendance_code}


@router.post("/{session_id}/leave")
async def leave_session(
    session_id: str, request: Request, body: CodeRequest | None = None
) -> dict[str, bool]:
    """Leave a session using an attendance code."""
    container: AppContainer = request.app.state.container
    outcome = container.session_service.leave_session(
        parse_session_id(session_id), (body or CodeRequest()).code
    )
    dispatch(container.notifier, outcome.events)
    return {"success": True}


@router.post("/{session_id}/remove")
async def remove_attendee(
    session_id: str,
    request: Request,
    body: RemoveAttendeeRequest | None = None,
) -> dict[str, bool]:
    """Remove an attendee with the management code."""
    container: AppContainer = request.app.state.container
    body = body or RemoveAttendeeRequest()
    outcome = container.session_service.remove_attendee(
        parse_session_id(session_id),
        body.code,
        attendance_code=body.attendance_code,
        attendee_name=body.attendee_name,
    )
    dispatch(container.notifier, outcome.events)
    return {"success": True}
