"""Discrete events emitted by the tick engine."""

from __future__ import annotations

import enum
from collections.abc import Callable


class GameEvent(str, enum.Enum):
    """Notifications for external collaborators (audio, UI)."""

    EAT = "eat"
    GAME_OVER = "game_over"
    WIN = "win"


EventListener = Callable[[GameEvent], None]
