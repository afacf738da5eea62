"""Food spawning logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from snake_arcade.grid import CellType

if TYPE_CHECKING:
    from snake_arcade.grid import Grid

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Manages the single food item on the grid.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    ``position`` is ``None`` whenever no food is on the board.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.position: tuple[int, int] | None = None

    def spawn(self) -> tuple[int, int] | None:
        """Place food on a uniformly chosen empty cell.

        Any existing food is removed first. Returns the new position, or
        ``None`` when every cell is taken.
        """
        self.remove()
        empty = self.grid.empty_cells()
        if not empty:
            logger.info("No empty cells left for food.")
            return None

        pos = empty[int(self.rng.integers(len(empty)))]
        self.grid.set(pos[0], pos[1], CellType.FOOD)
        self.position = pos
        return pos

    def place(self, x: int, y: int) -> None:
        """Put food on a specific cell, replacing any existing food."""
        if self.grid.get(x, y) == CellType.SNAKE:
            raise ValueError(f"Cell ({x}, {y}) is occupied by the snake.")
        self.remove()
        self.grid.set(x, y, CellType.FOOD)
        self.position = (x, y)

    def remove(self) -> None:
        """Take the food off the board, if present."""
        if self.position is None:
            return
        x, y = self.position
        if self.grid.get(x, y) == CellType.FOOD:
            self.grid.set(x, y, CellType.EMPTY)
        self.position = None

    def is_at(self, x: int, y: int) -> bool:
        return self.position == (x, y)
