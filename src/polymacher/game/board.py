from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np

from .blocks import Block, Goal
from .grid import WallGrid
from .levels import DirectiveKind, LevelData, LevelDataError


logger = logging.getLogger(__name__)


@dataclass
class BoardState:
    """Mutable runtime state of one level.

    ``poly`` is the player-controlled cluster; its first element is always the
    parent block. ``inert`` holds blocks not yet absorbed, in level order.
    """

    walls: WallGrid
    poly: List[Block]
    inert: List[Block] = field(default_factory=list)
    goals: List[Goal] = field(default_factory=list)

    @property
    def width(self) -> int:
        return self.walls.width

    @property
    def height(self) -> int:
        return self.walls.height

    @property
    def parent(self) -> Block:
        return self.poly[0]

    def copy(self) -> "BoardState":
        return BoardState(
            walls=self.walls.copy(),
            poly=list(self.poly),
            inert=list(self.inert),
            goals=list(self.goals),
        )

    def occupancy(self) -> np.ndarray:
        """Stack of 0/1 layers: walls, goals, inert blocks, cluster blocks."""
        layers = np.zeros((4, self.height, self.width), dtype=np.int8)
        layers[0] = self.walls.grid
        for goal in self.goals:
            layers[1, goal.y, goal.x] = 1
        for block in self.inert:
            layers[2, block.y, block.x] = 1
        for block in self.poly:
            layers[3, block.y, block.x] = 1
        return layers

    def render_text(self) -> str:
        cells: Dict[Tuple[int, int], str] = {}
        for goal in self.goals:
            cells[goal.pos] = "*"
        for block in self.inert:
            cells[block.pos] = "o"
        for block in self.poly:
            cells[block.pos] = "x"
        cells[self.parent.pos] = "@"
        lines: List[str] = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                if self.walls.is_wall(x, y):
                    row.append("#")
                else:
                    row.append(cells.get((x, y), "."))
            lines.append("".join(row))
        return "\n".join(lines)


def _check_inside(walls: WallGrid, x: int, y: int, what: str, level: LevelData) -> None:
    if not walls.is_inside(x, y):
        raise LevelDataError(
            f"{level.name}: {what} at ({x},{y}) lies outside the {walls.width}x{walls.height} board"
        )


def _validate(board: BoardState, level: LevelData) -> None:
    walls = board.walls
    occupied: Dict[Tuple[int, int], str] = {}
    for what, block in [("parent", board.parent)] + [("block", b) for b in board.inert]:
        if walls.is_wall(block.x, block.y):
            raise LevelDataError(f"{level.name}: {what} at {block.pos} sits on a wall")
        if block.pos in occupied:
            raise LevelDataError(
                f"{level.name}: {what} at {block.pos} overlaps the {occupied[block.pos]}"
            )
        occupied[block.pos] = what

    seen_goals = set()
    for goal in board.goals:
        if walls.is_wall(goal.x, goal.y):
            raise LevelDataError(f"{level.name}: goal at {goal.pos} sits on a wall")
        if goal.pos in seen_goals:
            raise LevelDataError(f"{level.name}: duplicate goal at {goal.pos}")
        seen_goals.add(goal.pos)


def load_level(level: LevelData, width: int = 9, height: int = 9) -> BoardState:
    """Build a fresh BoardState from a level record.

    Directives apply in listed order. Raises LevelDataError if any coordinate
    falls outside the board or the finished layout is inconsistent.
    """
    walls = WallGrid(width, height)
    _check_inside(walls, level.parent.x, level.parent.y, "parent", level)
    board = BoardState(walls=walls, poly=[level.parent])

    for d in level.directives:
        _check_inside(walls, d.x1, d.y1, d.kind.value, level)
        _check_inside(walls, d.x2, d.y2, d.kind.value, level)
        if d.kind in (DirectiveKind.WALLS, DirectiveKind.WALL):
            walls.fill_rect(d.x1, d.y1, d.x2, d.y2, True)
        elif d.kind in (DirectiveKind.CLEARS, DirectiveKind.CLEAR):
            walls.fill_rect(d.x1, d.y1, d.x2, d.y2, False)
        elif d.kind == DirectiveKind.GOAL:
            board.goals.append(Goal(d.x1, d.y1, d.color))
        elif d.kind == DirectiveKind.BLOCK:
            board.inert.append(Block(d.x1, d.y1, d.color))

    _validate(board, level)
    logger.debug(
        "Built %s: %d inert blocks, %d goals", level.name, len(board.inert), len(board.goals)
    )
    return board
