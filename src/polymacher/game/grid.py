from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np


Coordinate = Tuple[int, int]


class WallGrid:
    """Boolean wall map over a fixed-size board.

    Cells are indexed ``grid[y, x]``; ``True`` marks a wall. Every in-bounds
    cell always holds a value, and a fresh grid is entirely passable.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.bool_)

    def reset(self) -> None:
        self.grid.fill(False)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_wall(self, x: int, y: int) -> bool:
        return bool(self.grid[y, x])

    def set_cell(self, x: int, y: int, blocked: bool) -> None:
        self.grid[y, x] = blocked

    def fill_rect(self, x1: int, y1: int, x2: int, y2: int, blocked: bool) -> None:
        """Set every cell of the inclusive rectangle (x1, y1)-(x2, y2)."""
        self.grid[y1 : y2 + 1, x1 : x2 + 1] = blocked

    def is_open(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if not self.is_inside(x, y):
                return False
            if self.grid[y, x]:
                return False
        return True

    def copy(self) -> "WallGrid":
        new_grid = WallGrid(self.width, self.height)
        new_grid.grid = self.grid.copy()
        return new_grid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WallGrid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.grid, other.grid)
        )
