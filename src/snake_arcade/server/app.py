"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from snake_arcade.server.routes import router
from snake_arcade.server.session_manager import SessionManager
from snake_arcade.server.websocket import ws_router
from snake_arcade.storage import JsonHighScoreStore


def create_app(high_score_path: str | Path | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    When *high_score_path* is given the best score is kept in that JSON
    file; otherwise it lives only as long as the process.
    """

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        store = (
            JsonHighScoreStore(high_score_path)
            if high_score_path is not None else None
        )
        app.state.session_manager = SessionManager(store=store)
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Snake Arcade API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
