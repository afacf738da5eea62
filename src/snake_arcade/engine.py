"""Tick engine owning the full state of one snake game."""

from __future__ import annotations

import logging

import numpy as np

from snake_arcade.config import GameConfig
from snake_arcade.direction_queue import DirectionQueue
from snake_arcade.events import EventListener, GameEvent
from snake_arcade.food import FoodSpawner
from snake_arcade.grid import CellType, Grid
from snake_arcade.phase import GamePhase, toggle_target, transition
from snake_arcade.snake import Direction, Snake
from snake_arcade.speed import tick_interval_ms
from snake_arcade.storage import HighScoreStore, MemoryHighScoreStore

logger = logging.getLogger(__name__)


class GameEngine:
    """Single-snake, fixed-tick game engine.

    The engine owns the grid, snake, food, score, phase and the time
    accumulator used by :class:`~snake_arcade.loop.FrameLoop`. All
    mutation goes through the command methods (:meth:`queue_direction`,
    :meth:`toggle_pause_or_start`, :meth:`restart`, :meth:`set_config`)
    and :meth:`step`, which advances the game by one tick.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: HighScoreStore | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.rng = np.random.default_rng(self.config.seed)
        self.high_score = self.store.load()
        self.queue = DirectionQueue()
        self.phase = GamePhase.START
        self._listeners: list[EventListener] = []

        self.grid = Grid(self.config.grid_size)
        self.food_spawner = FoodSpawner(self.grid, rng=self.rng)
        self.reset()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Start a new game and wait in the ``START`` phase."""
        size = self.config.grid_size
        if self.grid.size != size:
            self.grid = Grid(size)
            self.food_spawner = FoodSpawner(self.grid, rng=self.rng)
        else:
            self.grid.clear()
            self.food_spawner.position = None

        mid = size // 2
        self.snake = Snake(
            mid - 1, mid, Direction.RIGHT, length=self.config.initial_length,
        )
        for x, y in self.snake.body:
            self.grid.set(x, y, CellType.SNAKE)

        self.score = 0
        self.high_score = max(self.high_score, self.store.load())
        self.tick = 0
        self.accumulator_ms = 0.0
        self.queue.clear()
        self._update_tick_ms()
        self.food_spawner.spawn()
        self.phase = transition(self.phase, GamePhase.START)

    def restart(self) -> None:
        """Reset and immediately enter ``RUNNING``. Valid from any phase."""
        self.reset()
        self._set_phase(GamePhase.RUNNING)
        logger.info("Game restarted.")

    def start(self) -> None:
        """Leave the ``START`` phase; no-op in any other phase."""
        if self.phase is GamePhase.START:
            self._set_phase(GamePhase.RUNNING)

    def toggle_pause_or_start(self) -> GamePhase:
        """Handle the start/pause control and return the resulting phase.

        Starts a waiting game, pauses or resumes a live one, and begins a
        fresh game after a loss or win.
        """
        if self.phase.is_terminal:
            self.restart()
        else:
            self._set_phase(toggle_target(self.phase))
        return self.phase

    # ------------------------------------------------------------------
    # Input & configuration
    # ------------------------------------------------------------------

    def queue_direction(self, direction: Direction | str) -> bool:
        """Buffer a direction change for the next tick.

        A request in the ``START`` phase also starts the game. Requests in
        any phase other than ``START`` or ``RUNNING`` are ignored. Returns
        ``True`` if the direction was buffered.
        """
        if isinstance(direction, str):
            direction = Direction.from_name(direction)
        if not self.phase.accepts_direction:
            return False
        self.start()
        return self.queue.request(direction, self.snake.direction)

    def set_config(self, **changes) -> GameConfig:
        """Apply configuration changes and return the new config.

        Difficulty and speed scaling take effect immediately; wrap mode on
        the next tick; grid size and initial length on the next reset.
        """
        self.config = self.config.with_changes(**changes)
        self._update_tick_ms()
        logger.debug("Config updated: %s", changes)
        return self.config

    def subscribe(self, listener: EventListener) -> None:
        """Register a callable invoked with each emitted :class:`GameEvent`."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set_board(
        self,
        snake_cells: list[tuple[int, int]],
        direction: Direction = Direction.RIGHT,
        food: tuple[int, int] | None = None,
    ) -> None:
        """Replace the snake and food with explicit positions.

        Used to resume saved positions and to set up scenarios. When *food*
        is ``None`` a new food cell is spawned.
        """
        cells = [tuple(c) for c in snake_cells]
        if len(set(cells)) != len(cells):
            raise ValueError("Snake cells must be distinct.")
        for x, y in cells:
            if not self.grid.in_bounds(x, y):
                raise ValueError(f"Cell ({x}, {y}) is outside the grid.")
        if food is not None:
            food = tuple(food)
            if not self.grid.in_bounds(*food):
                raise ValueError(f"Food cell {food} is outside the grid.")
            if food in cells:
                raise ValueError(f"Food cell {food} is occupied by the snake.")

        self.grid.clear()
        self.food_spawner.position = None
        self.snake = Snake.from_cells(cells, direction)
        for x, y in cells:
            self.grid.set(x, y, CellType.SNAKE)
        self.queue.clear()
        if food is not None:
            self.food_spawner.place(*food)
        else:
            self.food_spawner.spawn()

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    @property
    def food(self) -> tuple[int, int] | None:
        return self.food_spawner.position

    @property
    def direction(self) -> Direction:
        return self.snake.direction

    def step(self) -> list[GameEvent]:
        """Advance the game by one tick.

        Returns the events fired during the tick. Outside the ``RUNNING``
        phase nothing happens and an empty list is returned.
        """
        if self.phase is not GamePhase.RUNNING:
            return []

        events: list[GameEvent] = []
        self.snake.direction = self.queue.consume(self.snake.direction)
        next_x, next_y = self.snake.next_head()
        if self.config.wrap:
            next_x, next_y = self.grid.wrap(next_x, next_y)
        eating = self.food_spawner.is_at(next_x, next_y)
        self.tick += 1

        if self._collides(next_x, next_y, eating):
            self._set_phase(GamePhase.GAME_OVER)
            events.append(GameEvent.GAME_OVER)
            logger.info(
                "Snake crashed at tick %d with score %d.", self.tick, self.score,
            )
        else:
            vacated = self.snake.advance((next_x, next_y), grow=eating)
            if vacated is not None:
                self.grid.set(vacated[0], vacated[1], CellType.EMPTY)
            self.grid.set(next_x, next_y, CellType.SNAKE)

            if eating:
                self.score += 1
                self._update_tick_ms()
                events.append(GameEvent.EAT)
                if self.food_spawner.spawn() is None:
                    self._set_phase(GamePhase.WIN)
                    events.append(GameEvent.WIN)
                    logger.info(
                        "Board filled at tick %d with score %d.",
                        self.tick, self.score,
                    )

        self.queue.end_tick()
        self._reconcile_high_score()
        for event in events:
            self._emit(event)
        return events

    def would_collide(self, direction: Direction) -> bool:
        """Check whether a tick heading in *direction* would end the game."""
        dx, dy = direction.value
        x, y = self.snake.head
        x, y = x + dx, y + dy
        if self.config.wrap:
            x, y = self.grid.wrap(x, y)
        return self._collides(x, y, self.food_spawner.is_at(x, y))

    def _collides(self, x: int, y: int, eating: bool) -> bool:
        """Check whether moving the head to ``(x, y)`` ends the game."""
        if not self.grid.in_bounds(x, y):
            return True
        # The tail leaves its cell this tick unless the snake is growing.
        if not eating and (x, y) == self.snake.tail:
            return False
        return self.grid.get(x, y) == CellType.SNAKE

    def _update_tick_ms(self) -> None:
        self.tick_ms = tick_interval_ms(
            self.config.difficulty, self.score,
            scaling=self.config.speed_scaling,
        )

    def _reconcile_high_score(self) -> None:
        if self.score <= self.high_score:
            return
        # The store may be shared; another game can have raised it since.
        stored = self.store.load()
        if stored >= self.score:
            self.high_score = stored
            return
        self.high_score = self.score
        self.store.save(self.high_score)

    def _set_phase(self, target: GamePhase) -> None:
        previous = self.phase
        self.phase = transition(previous, target)
        logger.debug("Phase %s -> %s.", previous.value, target.value)

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def snapshot(self) -> dict:
        """Return the render view of the current state as a plain dict."""
        return {
            "grid_size": self.grid.size,
            "snake": [list(seg) for seg in self.snake.body],
            "head": list(self.snake.head),
            "food": list(self.food) if self.food is not None else None,
            "direction": self.snake.direction.name.lower(),
            "phase": self.phase.value,
            "score": self.score,
            "high_score": self.high_score,
            "tick": self.tick,
            "tick_ms": self.tick_ms,
            "difficulty": self.config.difficulty,
            "wrap": self.config.wrap,
            "speed_scaling": self.config.speed_scaling,
        }
