"""Single-slot buffering of direction changes between ticks."""

from __future__ import annotations

import logging

from snake_arcade.snake import Direction

logger = logging.getLogger(__name__)


class DirectionQueue:
    """Holds at most one pending direction change per tick window.

    Only the first acceptable request of a tick window is kept, so a burst
    such as up → left → down cannot chain into a reversal. Later requests
    are dropped until :meth:`end_tick` reopens the slot.
    """

    def __init__(self) -> None:
        self.pending: Direction | None = None
        self._buffered_this_tick = False

    @property
    def has_pending(self) -> bool:
        return self.pending is not None

    def request(self, direction: Direction, current: Direction) -> bool:
        """Try to buffer *direction* against the live *current* direction.

        Returns ``True`` if the request was buffered.
        """
        effective = self.pending or current
        if direction is effective.opposite:
            logger.debug("Dropped reversal %s -> %s.", effective.name, direction.name)
            return False
        if self._buffered_this_tick:
            return False
        self.pending = direction
        self._buffered_this_tick = True
        return True

    def consume(self, current: Direction) -> Direction:
        """Return the direction to move in this tick and empty the slot."""
        pending = self.pending
        self.pending = None
        if pending is not None and pending is not current.opposite:
            return pending
        return current

    def end_tick(self) -> None:
        """Reopen the slot for the next tick window."""
        self.pending = None
        self._buffered_this_tick = False

    def clear(self) -> None:
        self.end_tick()
