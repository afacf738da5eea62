"""Tick interval policy derived from difficulty and score."""

from __future__ import annotations

import enum

MIN_TICK_MS = 70
SPEED_STEP_MS = 4


class Difficulty(enum.Enum):
    """Selectable difficulty levels."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


BASE_TICK_MS: dict[Difficulty, int] = {
    Difficulty.EASY: 180,
    Difficulty.NORMAL: 140,
    Difficulty.HARD: 110,
}


def tick_interval_ms(
    difficulty: Difficulty | str,
    score: int,
    *,
    scaling: bool = True,
) -> int:
    """Return the tick duration in milliseconds.

    With *scaling* enabled the interval shrinks by :data:`SPEED_STEP_MS`
    per point and floors at :data:`MIN_TICK_MS`. Without it the base
    interval for the difficulty is returned unchanged.
    """
    base = BASE_TICK_MS[Difficulty(difficulty)]
    if not scaling:
        return base
    return max(MIN_TICK_MS, base - score * SPEED_STEP_MS)
