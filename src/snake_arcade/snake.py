"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @classmethod
    def from_name(cls, name: str) -> Direction:
        """Look up a direction by its lowercase name (``"up"``, ...)."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown direction {name!r}.") from None


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake represented as an ordered deque of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(
        self,
        start_x: int,
        start_y: int,
        direction: Direction = Direction.RIGHT,
        length: int = 3,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        self.body: deque[tuple[int, int]] = deque()
        for i in range(length):
            self.body.append((start_x - dx * i, start_y - dy * i))
        self.direction = direction

    @classmethod
    def from_cells(
        cls,
        cells: list[tuple[int, int]],
        direction: Direction = Direction.RIGHT,
    ) -> Snake:
        """Build a snake from an explicit head-first list of cells."""
        if not cells:
            raise ValueError("Snake length must be at least 1.")
        snake = cls(cells[0][0], cells[0][1], direction, length=1)
        snake.body = deque(tuple(c) for c in cells)
        return snake

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> tuple[int, int]:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> tuple[int, int]:
        return self.body[-1]

    def next_head(self) -> tuple[int, int]:
        """Compute the next head position without moving."""
        dx, dy = self.direction.value
        x, y = self.head
        return x + dx, y + dy

    def advance(
        self, new_head: tuple[int, int], grow: bool = False,
    ) -> tuple[int, int] | None:
        """Push *new_head* onto the body.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        self.body.appendleft(new_head)
        if grow:
            return None
        return self.body.pop()
