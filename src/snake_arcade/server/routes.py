"""REST API route handlers for session lifecycle and commands."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from snake_arcade.server.models import (
    CommandRequest,
    ConfigUpdate,
    CreateSessionRequest,
    SessionSummary,
)
from snake_arcade.server.session_manager import (
    GameSession,
    SessionManager,
    apply_message,
    update_config,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _get_session(request: Request, session_id: str) -> GameSession:
    try:
        return _get_manager(request).require_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new game session waiting in the start phase."""
    manager = _get_manager(request)
    try:
        session = manager.create_session(**body.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List open sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the current render snapshot."""
    session = _get_session(request, session_id)
    result = session.summary().model_dump()
    result["config"] = session.engine.config.to_dict()
    result["state"] = session.engine.snapshot()
    return result


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> Response:
    """Stop a session and disconnect its clients."""
    try:
        await _get_manager(request).close_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc
    return Response(status_code=204)


@router.patch("/{session_id}/config")
async def patch_config(
    session_id: str, body: ConfigUpdate, request: Request,
) -> dict:
    """Change difficulty, wrap mode, speed scaling or audio."""
    session = _get_session(request, session_id)
    async with session.lock:
        try:
            update_config(session, body.changes())
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return session.engine.snapshot()


@router.post("/{session_id}/commands")
async def send_command(
    session_id: str, body: CommandRequest, request: Request,
) -> dict:
    """Apply a start/pause toggle, restart, or direction change."""
    if (body.action is None) == (body.direction is None):
        raise HTTPException(
            status_code=422,
            detail="Provide exactly one of 'action' or 'direction'.",
        )
    session = _get_session(request, session_id)
    async with session.lock:
        apply_message(session, body.model_dump(exclude_none=True))
        return session.engine.snapshot()
