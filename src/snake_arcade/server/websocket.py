"""WebSocket handlers for real-time play and watching."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from snake_arcade.server.session_manager import (
    GameSession,
    SessionManager,
    apply_message,
)

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


async def _send_initial_state(websocket: WebSocket, session: GameSession) -> None:
    async with session.lock:
        payload = session.engine.snapshot()
    payload["events"] = []
    payload["sounds"] = []
    await websocket.send_text(json.dumps(payload, separators=(",", ":")))


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send commands, receive state whenever it changes."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session.subscribers.append(websocket)
    logger.info("Player connected to session %s.", session_id)
    await _send_initial_state(websocket, session)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            async with session.lock:
                handled = apply_message(session, msg)
            if handled:
                await manager.broadcast(session, force=True)
    except WebSocketDisconnect:
        logger.info("Player disconnected from session %s.", session_id)
    finally:
        if websocket in session.subscribers:
            session.subscribers.remove(websocket)


@ws_router.websocket("/sessions/{session_id}/watch")
async def watch(websocket: WebSocket, session_id: str) -> None:
    """Watcher WebSocket: receive-only state stream."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session.subscribers.append(websocket)
    logger.info("Watcher connected to session %s.", session_id)
    await _send_initial_state(websocket, session)

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Watcher disconnected from session %s.", session_id)
    finally:
        if websocket in session.subscribers:
            session.subscribers.remove(websocket)
