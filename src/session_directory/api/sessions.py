"""Session endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Query, Request

from session_directory.api.models import (
    CodeRequest,
    CreateSessionRequest,
    UpdateSessionRequest,
    serialize_session,
)
from session_directory.services.notifications import dispatch
from session_directory.services.sessions import SessionView, parse_session_id

if TYPE_CHECKING:
    from session_directory.containers import AppContainer

router = APIRouter(prefix="/sessions", tags=["sessions"])


def presented_code(
    code: str | None = Query(default=None),
    x_access_code: str | None = Header(default=None),
) -> str | None:
    """Return the caller's code, preferring the query string over the header."""
    query_code = (code or "").strip()
    if query_code:
        return query_code
    header_code = (x_access_code or "").strip()
    return header_code or None


@router.get("")
async def list_sessions(request: Request) -> list[dict[str, object]]:
    """Return public sessions ordered by date and time."""
    container: AppContainer = request.app.state.container
    return [
        serialize_session(SessionView(session=session))
        for session in container.session_service.list_public_sessions()
    ]


@router.post("")
async def create_session(
    request: Request, body: CreateSessionRequest | None = None
) -> dict[str, object]:
    """Create a session and return its codes; the only time they are issued."""
    container: AppContainer = request.app.state.container
    body = body or CreateSessionRequest()
    outcome = container.session_service.create_session(body.to_draft())
    dispatch(container.notifier, outcome.events)
    return {
        "id": str(outcome.session.id),
        "managementCode": outcome.session.management_code,
        "privateCode": outcome.session.private_code,
    }


@router.get("/{session_id}")
async def get_session(
    session_id: str,
    request: Request,
    code: str | None = Depends(presented_code),
) -> dict[str, object]:
    """Return a session; private sessions need the private or management code."""
    container: AppContainer = request.app.state.container
    view = container.session_service.get_session(parse_session_id(session_id), code)
    return serialize_session(view)


@router.put("/{session_id}")
async def update_session(
    session_id: str,
    request: Request,
    body: UpdateSessionRequest | None = None,
    code: str | None = Depends(presented_code),
) -> dict[str, bool]:
    """Partially update a session."""
    container: AppContainer = request.app.state.container
    body = body or UpdateSessionRequest()
    outcome = container.session_service.update_session(
        parse_session_id(session_id), code, body.to_changes()
    )
    dispatch(container.notifier, outcome.events)
    return {"success": True}


@router.delete("/{session_id}")
async def delete_session(
    session_id: str,
    request: Request,
    code: str | None = Depends(presented_code),
) -> dict[str, bool]:
    """Delete a session."""
    container: AppContainer = request.app.state.container
    outcome = container.session_service.delete_session(
        parse_session_id(session_id), code
    )
    dispatch(container.notifier, outcome.events)
    return {"success": True}


@router.post("/{session_id}/verify")
async def verify_code(
    session_id: str, request: Request, body: CodeRequest | None = None
) -> dict[str, str | None]:
    """Report which capability a code carries without returning the session."""
    container: AppContainer = request.app.state.container
    role = container.session_service.verify_code(
        parse_session_id(session_id), (body or CodeRequest()).code
    )
    return {"role": role}


@router.get("/{session_id}/map")
async def session_map(
    session_id: str,
    request: Request,
    code: str | None = Depends(presented_code),
) -> dict[str, str | None]:
    """Return an embeddable map for the session location, if one resolves."""
    container: AppContainer = request.app.state.container
    view = container.session_service.get_session(parse_session_id(session_id), code)
    url = await container.map_service.map_url(view.session.location)
    return {"mapUrl": url}
