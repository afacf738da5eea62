"""Fixed-timestep frame loop decoupling simulation from render rate."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from snake_arcade.phase import GamePhase

if TYPE_CHECKING:
    from snake_arcade.engine import GameEngine
    from snake_arcade.events import GameEvent

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class FrameLoop:
    """Drives a :class:`GameEngine` from wall-clock frame timestamps.

    Call :meth:`frame` once per display refresh. Elapsed time is clamped
    to the engine's ``max_frame_delta_ms`` so a long stall does not cause
    a burst of catch-up ticks, then banked in the engine's accumulator
    while the game is running. Each whole tick interval in the
    accumulator runs one tick.
    """

    def __init__(
        self,
        engine: GameEngine,
        clock: Callable[[], float] = monotonic_ms,
    ) -> None:
        self.engine = engine
        self.clock = clock
        self.last_frame_ms = clock()
        self.frames = 0

    def frame(self, now_ms: float | None = None) -> list[GameEvent]:
        """Run all ticks owed since the previous frame.

        Returns the events fired by those ticks, in order.
        """
        if now_ms is None:
            now_ms = self.clock()
        delta = min(
            max(now_ms - self.last_frame_ms, 0.0),
            self.engine.config.max_frame_delta_ms,
        )
        self.last_frame_ms = now_ms
        self.frames += 1
        return self.advance(delta)

    def advance(self, delta_ms: float) -> list[GameEvent]:
        """Bank *delta_ms* of simulated time and run the ticks it pays for."""
        engine = self.engine
        events: list[GameEvent] = []
        if engine.phase is not GamePhase.RUNNING:
            return events

        engine.accumulator_ms += delta_ms
        ticks = 0
        while (
            engine.phase is GamePhase.RUNNING
            and engine.accumulator_ms >= engine.tick_ms
        ):
            events.extend(engine.step())
            engine.accumulator_ms -= engine.tick_ms
            ticks += 1
        if ticks > 1:
            logger.debug("Frame %d ran %d ticks.", self.frames, ticks)
        return events
