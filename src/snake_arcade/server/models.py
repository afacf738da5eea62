"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

DifficultyName = Literal["easy", "normal", "hard"]
DirectionName = Literal["up", "down", "left", "right"]


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    difficulty: DifficultyName = "normal"
    wrap: bool = False
    speed_scaling: bool = True
    audio_enabled: bool = True
    grid_size: int = Field(default=24, ge=4, le=64)
    seed: int | None = None
    frame_rate: int = Field(default=60, ge=1, le=240)


class ConfigUpdate(BaseModel):
    """Request body for PATCH /sessions/{session_id}/config."""

    difficulty: DifficultyName | None = None
    wrap: bool | None = None
    speed_scaling: bool | None = None
    audio_enabled: bool | None = None

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)


class CommandRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/commands."""

    action: Literal["toggle", "restart"] | None = None
    direction: DirectionName | None = None


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    phase: str
    score: int
    high_score: int
    tick_ms: int
    frame_rate: int
    connected: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
