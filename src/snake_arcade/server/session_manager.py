"""In-memory session registry and per-session async frame loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

import numpy as np
from starlette.websockets import WebSocket, WebSocketState

from snake_arcade.audio import AudioCues, Tone
from snake_arcade.config import GameConfig
from snake_arcade.engine import GameEngine
from snake_arcade.events import GameEvent
from snake_arcade.loop import FrameLoop
from snake_arcade.server.models import SessionSummary
from snake_arcade.snake import Direction
from snake_arcade.storage import HighScoreStore, MemoryHighScoreStore

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100
_ACTIONS = frozenset({"toggle", "restart"})


@dataclass
class GameSession:
    """One game plus everything needed to drive and stream it."""

    session_id: str
    engine: GameEngine
    loop: FrameLoop
    frame_rate: int
    cues: AudioCues | None = None
    subscribers: list[WebSocket] = field(default_factory=list)
    events: list[GameEvent] = field(default_factory=list)
    sounds: list[dict] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _last_sent: dict | None = field(default=None, repr=False)
    _task: asyncio.Task | None = field(default=None, repr=False)

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            phase=self.engine.phase.value,
            score=self.engine.score,
            high_score=self.engine.high_score,
            tick_ms=self.engine.tick_ms,
            frame_rate=self.frame_rate,
            connected=len(self.subscribers),
        )

    def drain_payload(self) -> dict:
        """Snapshot plus the events and sounds queued since the last drain."""
        payload = self.engine.snapshot()
        payload["events"] = [e.value for e in self.events]
        payload["sounds"] = list(self.sounds)
        self.events.clear()
        self.sounds.clear()
        return payload

    def queue_sound(self, tone: Tone, samples: np.ndarray) -> None:
        """Record a rendered cue for the next payload."""
        self.sounds.append({**tone.to_dict(), "sample_count": int(samples.size)})


def apply_message(session: GameSession, msg: dict) -> bool:
    """Apply one client command to the session's engine.

    Understood messages are ``{"direction": "up"}``,
    ``{"action": "toggle" | "restart"}`` and ``{"config": {...}}``.
    Returns ``True`` if the message was recognised. Callers must hold
    ``session.lock``.
    """
    engine = session.engine

    direction_str = msg.get("direction")
    if isinstance(direction_str, str):
        try:
            direction = Direction.from_name(direction_str)
        except ValueError:
            return False
        engine.queue_direction(direction)
        return True

    action = msg.get("action")
    if action in _ACTIONS:
        if action == "toggle":
            engine.toggle_pause_or_start()
        else:
            engine.restart()
        return True

    changes = msg.get("config")
    if isinstance(changes, dict) and changes:
        try:
            update_config(session, changes)
        except ValueError as exc:
            logger.info("Rejected config change %s: %s", changes, exc)
            return False
        return True

    return False


def update_config(session: GameSession, changes: dict) -> GameConfig:
    """Apply config *changes*; raises ``ValueError`` for invalid values."""
    allowed = {"difficulty", "wrap", "speed_scaling", "audio_enabled"}
    unknown = set(changes) - allowed
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}.")
    try:
        config = session.engine.set_config(**changes)
    except TypeError as exc:
        raise ValueError(str(exc)) from exc
    if session.cues is not None:
        session.cues.enabled = config.audio_enabled
    return config


class SessionManager:
    """Central registry managing all game sessions.

    All sessions share one high-score store, so the best score carries
    across games for the life of the store.
    """

    def __init__(
        self,
        store: HighScoreStore | None = None,
        max_sessions: int = _MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self.store = store if store is not None else MemoryHighScoreStore()
        self._sessions: dict[str, GameSession] = {}
        self._max_sessions = max_sessions

    def create_session(
        self,
        difficulty: str = "normal",
        wrap: bool = False,
        speed_scaling: bool = True,
        audio_enabled: bool = True,
        grid_size: int = 24,
        seed: int | None = None,
        frame_rate: int = 60,
    ) -> GameSession:
        """Create a session and start its frame loop.

        Must be called from within a running event loop.
        """
        if len(self._sessions) >= self._max_sessions:
            raise ValueError("Too many open sessions. Close one first.")

        config = GameConfig(
            grid_size=grid_size,
            difficulty=difficulty,
            wrap=wrap,
            speed_scaling=speed_scaling,
            audio_enabled=audio_enabled,
            seed=seed,
        )
        engine = GameEngine(config, store=self.store)
        session = GameSession(
            session_id=uuid.uuid4().hex[:12],
            engine=engine,
            loop=FrameLoop(engine),
            frame_rate=frame_rate,
        )
        session.cues = AudioCues(session.queue_sound, enabled=audio_enabled)
        engine.subscribe(session.events.append)
        engine.subscribe(session.cues)

        self._sessions[session.session_id] = session
        session._task = asyncio.create_task(self._frame_loop(session))
        logger.info(
            "Session %s created (difficulty=%s, wrap=%s).",
            session.session_id, difficulty, wrap,
        )
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    async def close_session(self, session_id: str) -> None:
        """Stop a session's frame loop and disconnect its sockets."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        if session._task and not session._task.done():
            session._task.cancel()
            await asyncio.gather(session._task, return_exceptions=True)
        await self._close_connections(session)
        logger.info("Session %s closed.", session_id)

    async def _frame_loop(self, session: GameSession) -> None:
        """Drive the engine once per frame, streaming changed state."""
        frame_interval = 1.0 / session.frame_rate
        try:
            while True:
                await asyncio.sleep(frame_interval)
                async with session.lock:
                    session.loop.frame()
                await self.broadcast(session)
        except asyncio.CancelledError:
            logger.info("Frame loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Frame loop error in session %s.", session.session_id)

    async def broadcast(self, session: GameSession, force: bool = False) -> None:
        """Send the current state to every subscriber if it changed."""
        async with session.lock:
            payload = session.drain_payload()
        if not force and payload == session._last_sent:
            return
        session._last_sent = payload
        text = json.dumps(payload, separators=(",", ":"))

        dead: list[WebSocket] = []
        for ws in list(session.subscribers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(text)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.subscribers:
                session.subscribers.remove(ws)

    async def _close_connections(self, session: GameSession) -> None:
        for ws in list(session.subscribers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session closed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.subscribers.clear()

    async def cleanup(self) -> None:
        """Cancel all running frame loops."""
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
