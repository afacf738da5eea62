"""Square grid representation for the snake game."""

from __future__ import annotations

import enum

import numpy as np


class CellType(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2


class Grid:
    """NumPy-backed square game grid.

    Cells are addressed as ``(x, y)`` with ``x`` growing to the right and
    ``y`` growing downwards. The backing array is indexed ``[y, x]``.
    """

    def __init__(self, size: int = 24) -> None:
        if size < 4:
            raise ValueError("Grid size must be at least 4.")
        self.size = size
        self.cells = np.zeros((size, size), dtype=np.int8)

    def clear(self) -> None:
        """Reset all cells to empty."""
        self.cells[:] = CellType.EMPTY

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.size and 0 <= y < self.size

    def wrap(self, x: int, y: int) -> tuple[int, int]:
        """Map coordinates into ``[0, size)`` on both axes."""
        return x % self.size, y % self.size

    def get(self, x: int, y: int) -> CellType:
        return CellType(self.cells[y, x])

    def set(self, x: int, y: int, cell_type: CellType) -> None:
        self.cells[y, x] = cell_type

    def empty_cells(self) -> list[tuple[int, int]]:
        """Return all empty cells in row-major order."""
        ys, xs = np.where(self.cells == CellType.EMPTY)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def count(self, cell_type: CellType) -> int:
        return int(np.count_nonzero(self.cells == cell_type))
