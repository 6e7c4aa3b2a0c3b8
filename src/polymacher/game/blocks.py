from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Color(str, Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    ANY = "any"  # goals only

    def accepts(self, other: "Color") -> bool:
        """Whether a goal of this color is covered by a block of ``other``."""
        return self is Color.ANY or self is other


@dataclass(frozen=True)
class Block:
    """A colored cell-sized entity. Blocks compare by coordinate and color."""

    x: int
    y: int
    color: Color

    @property
    def pos(self) -> tuple[int, int]:
        return self.x, self.y

    def translated(self, dx: int, dy: int) -> "Block":
        return Block(self.x + dx, self.y + dy, self.color)

    def distance_sq(self, other: "Block") -> int:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy


@dataclass(frozen=True)
class Goal:
    """A fixed cell that must be covered by a cluster block of a matching color."""

    x: int
    y: int
    color: Color = Color.ANY

    @property
    def pos(self) -> tuple[int, int]:
        return self.x, self.y
