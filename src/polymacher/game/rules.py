from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .blocks import Goal
from .board import BoardState


logger = logging.getLogger(__name__)

DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(frozen=True)
class MoveOutcome:
    moved: bool
    absorbed_any: bool = False

    @property
    def rejected(self) -> bool:
        return not self.moved


REJECTED = MoveOutcome(moved=False)


class GoalStatus(Enum):
    SATISFIED = "satisfied"
    UNOCCUPIED = "unoccupied"
    MISMATCHED = "mismatched"  # occupied by a block of the wrong color


def _check_direction(dx: int, dy: int) -> None:
    if (dx, dy) not in DIRECTIONS:
        raise ValueError(f"move must be a unit step along one axis, got ({dx}, {dy})")


def can_move(board: BoardState, dx: int, dy: int) -> bool:
    """Whether the whole cluster can shift by (dx, dy) without leaving the board or entering a wall."""
    _check_direction(dx, dy)
    return board.walls.is_open((b.x + dx, b.y + dy) for b in board.poly)


def propagate_absorption(board: BoardState) -> bool:
    """Absorb every inert block touching the cluster, transitively.

    A block touches the cluster when its squared distance to some cluster
    block is at most 1, so diagonal neighbours do not count. After each
    absorption the scan restarts from the head of the inert list.
    """
    absorbed = False
    i = 0
    while i < len(board.inert):
        block = board.inert[i]
        if any(block.distance_sq(member) <= 1 for member in board.poly):
            board.poly.append(board.inert.pop(i))
            absorbed = True
            logger.debug("Absorbed %s block at %s", block.color.value, block.pos)
            i = 0
            continue
        i += 1
    return absorbed


def apply_move(board: BoardState, dx: int, dy: int) -> MoveOutcome:
    if not can_move(board, dx, dy):
        logger.debug("Move (%d, %d) rejected", dx, dy)
        return REJECTED
    board.poly[:] = [b.translated(dx, dy) for b in board.poly]
    absorbed = propagate_absorption(board)
    return MoveOutcome(moved=True, absorbed_any=absorbed)


def goal_status(board: BoardState, goal: Goal) -> GoalStatus:
    for block in board.poly:
        if block.pos == goal.pos:
            if goal.color.accepts(block.color):
                return GoalStatus.SATISFIED
            return GoalStatus.MISMATCHED
    return GoalStatus.UNOCCUPIED


def is_satisfied(board: BoardState) -> bool:
    """True when every goal is covered by a cluster block of an accepted color.

    A wrongly colored block on any goal fails the whole check at once; an
    uncovered goal is noted and the remaining goals are still examined.
    """
    all_covered = True
    for goal in board.goals:
        status = goal_status(board, goal)
        if status is GoalStatus.MISMATCHED:
            return False
        if status is GoalStatus.UNOCCUPIED:
            all_covered = False
    return all_covered
