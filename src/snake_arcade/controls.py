"""Keyboard mapping onto engine commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from snake_arcade.snake import Direction

if TYPE_CHECKING:
    from snake_arcade.engine import GameEngine

KEY_TO_DIRECTION: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "w": Direction.UP,
    "W": Direction.UP,
    "s": Direction.DOWN,
    "S": Direction.DOWN,
    "a": Direction.LEFT,
    "A": Direction.LEFT,
    "d": Direction.RIGHT,
    "D": Direction.RIGHT,
}

TOGGLE_KEYS = frozenset({" ", "Space"})
RESTART_KEYS = frozenset({"r", "R"})


def dispatch_key(engine: GameEngine, key: str) -> bool:
    """Translate a key name into an engine command.

    Returns ``True`` if the key is bound to a control, whether or not the
    engine acted on it.
    """
    if key in TOGGLE_KEYS:
        engine.toggle_pause_or_start()
        return True
    if key in RESTART_KEYS:
        engine.restart()
        return True
    direction = KEY_TO_DIRECTION.get(key)
    if direction is None:
        return False
    engine.queue_direction(direction)
    return True
