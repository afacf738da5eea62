"""Coarse game lifecycle states and their allowed transitions."""

from __future__ import annotations

import enum


class GamePhase(str, enum.Enum):
    """Lifecycle phases of a single game."""

    START = "start"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    WIN = "win"

    @property
    def is_terminal(self) -> bool:
        """True once the game has ended and only a restart can continue."""
        return self in (GamePhase.GAME_OVER, GamePhase.WIN)

    @property
    def accepts_direction(self) -> bool:
        return self in (GamePhase.START, GamePhase.RUNNING)


# Transitions driven by play. Reset to START is allowed from any phase and
# is handled separately by :func:`transition`.
_TRANSITIONS: dict[GamePhase, frozenset[GamePhase]] = {
    GamePhase.START: frozenset({GamePhase.RUNNING}),
    GamePhase.RUNNING: frozenset(
        {GamePhase.PAUSED, GamePhase.GAME_OVER, GamePhase.WIN},
    ),
    GamePhase.PAUSED: frozenset({GamePhase.RUNNING}),
    GamePhase.GAME_OVER: frozenset(),
    GamePhase.WIN: frozenset(),
}


def can_transition(current: GamePhase, target: GamePhase) -> bool:
    """Check whether *current* may move to *target*."""
    return target is GamePhase.START or target in _TRANSITIONS[current]


def transition(current: GamePhase, target: GamePhase) -> GamePhase:
    """Validate a phase change and return the new phase.

    Raises ``ValueError`` for a transition the state machine does not allow.
    """
    if not can_transition(current, target):
        raise ValueError(
            f"Illegal phase transition {current.value} -> {target.value}."
        )
    return target


def toggle_target(current: GamePhase) -> GamePhase:
    """Phase reached by the start/pause control from *current*.

    Terminal phases map to ``RUNNING`` and require a reset first.
    """
    if current is GamePhase.RUNNING:
        return GamePhase.PAUSED
    return GamePhase.RUNNING
