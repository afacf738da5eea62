"""Snake Arcade: fixed-tick snake game engine."""

from snake_arcade.config import GameConfig
from snake_arcade.engine import GameEngine
from snake_arcade.events import GameEvent
from snake_arcade.grid import Grid
from snake_arcade.loop import FrameLoop
from snake_arcade.phase import GamePhase
from snake_arcade.snake import Direction, Snake
from snake_arcade.speed import Difficulty

__all__ = [
    "Difficulty",
    "Direction",
    "FrameLoop",
    "GameConfig",
    "GameEngine",
    "GameEvent",
    "GamePhase",
    "Grid",
    "Snake",
]
