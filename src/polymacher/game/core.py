from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Sequence

from .board import BoardState, load_level
from .events import (
    EVENT_ABSORBED,
    EVENT_GAME_COMPLETE,
    EVENT_GOAL_SATISFIED,
    EVENT_LEVEL_LOADED,
    EVENT_LEVEL_RESET,
    EVENT_MOVE_ACCEPTED,
    EVENT_MOVE_REJECTED,
    EventBus,
)
from .levels import CAMPAIGN, LevelData
from .rules import MoveOutcome, apply_move, is_satisfied
from .timer import TickScheduler, TimerHandle


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    UP = 2
    DOWN = 3
    RESET = 4


ACTION_VECTORS = {
    Action.LEFT: (-1, 0),
    Action.RIGHT: (1, 0),
    Action.UP: (0, -1),
    Action.DOWN: (0, 1),
}


class Phase(Enum):
    LOADING = "loading"
    PLAYING = "playing"
    WON = "won"
    COMPLETE = "complete"


@dataclass
class GameConfig:
    width: int = 9
    height: int = 9
    win_delay_ticks: int = 60
    start_level: int = 0


class PolymacherGame:
    """A play session over an ordered list of levels.

    Moves and resets are only honoured while PLAYING. Solving a level locks
    input (WON) until the scheduler fires the advance, which loads the next
    level or ends the session (COMPLETE).
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        levels: Optional[Sequence[LevelData]] = None,
        events: Optional[EventBus] = None,
        scheduler: Optional[TickScheduler] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.levels = tuple(levels) if levels is not None else CAMPAIGN
        if not self.levels:
            raise ValueError("a session needs at least one level")
        # bad level data fails at construction rather than mid-session
        for level in self.levels:
            load_level(level, self.config.width, self.config.height)
        self.events = events or EventBus()
        self.scheduler = scheduler or TickScheduler()
        self.phase = Phase.LOADING
        self.level_index = self.config.start_level
        self.board: Optional[BoardState] = None
        self.move_count = 0
        self._advance_timer: Optional[TimerHandle] = None
        self.load_level(self.level_index)

    @property
    def level(self) -> LevelData:
        return self.levels[self.level_index]

    @property
    def is_playing(self) -> bool:
        return self.phase is Phase.PLAYING

    @property
    def is_complete(self) -> bool:
        return self.phase is Phase.COMPLETE

    def _build(self, index: int) -> None:
        if not 0 <= index < len(self.levels):
            raise IndexError(f"level index {index} out of range (0..{len(self.levels) - 1})")
        board = load_level(self.levels[index], self.config.width, self.config.height)
        self.phase = Phase.LOADING
        self.board = board
        self.level_index = index
        self.move_count = 0
        self.phase = Phase.PLAYING

    def load_level(self, index: int) -> None:
        """Switch to level ``index``, dropping any pending advance."""
        if self._advance_timer is not None:
            self.scheduler.cancel(self._advance_timer)
            self._advance_timer = None
        self._build(index)
        logger.info("Level %d: %s", self.level_index, self.level.name)
        self.events.emit(EVENT_LEVEL_LOADED, level_index=self.level_index, level_name=self.level.name)

    def reset(self) -> bool:
        """Rebuild the current level. Ignored unless PLAYING."""
        if not self.is_playing:
            return False
        self._build(self.level_index)
        logger.info("Reset level %d: %s", self.level_index, self.level.name)
        self.events.emit(EVENT_LEVEL_RESET, level_index=self.level_index, level_name=self.level.name)
        return True

    def move(self, dx: int, dy: int) -> Optional[MoveOutcome]:
        """Try to shift the cluster. Returns None when input is locked."""
        if not self.is_playing:
            return None
        assert self.board is not None
        outcome = apply_move(self.board, dx, dy)
        if outcome.rejected:
            self.events.emit(EVENT_MOVE_REJECTED, dx=dx, dy=dy)
            return outcome

        self.move_count += 1
        self.events.emit(EVENT_MOVE_ACCEPTED, dx=dx, dy=dy)
        if outcome.absorbed_any:
            self.events.emit(EVENT_ABSORBED, cluster_size=len(self.board.poly))
        if is_satisfied(self.board):
            self._win()
        return outcome

    def step(self, action: Action | int) -> Optional[MoveOutcome]:
        action = Action(action)
        if action == Action.RESET:
            self.reset()
            return None
        dx, dy = ACTION_VECTORS[action]
        return self.move(dx, dy)

    def tick(self, n: int = 1) -> int:
        return self.scheduler.tick(n)

    def _win(self) -> None:
        self.phase = Phase.WON
        logger.info("Solved %s in %d moves", self.level.name, self.move_count)
        self.events.emit(EVENT_GOAL_SATISFIED, level_index=self.level_index, level_name=self.level.name)
        self._advance_timer = self.scheduler.schedule(self.config.win_delay_ticks, self._advance)

    def _advance(self) -> None:
        self._advance_timer = None
        next_index = self.level_index + 1
        if next_index >= len(self.levels):
            self.phase = Phase.COMPLETE
            logger.info("Game complete!")
            self.events.emit(EVENT_GAME_COMPLETE, levels=len(self.levels))
            return
        self.load_level(next_index)

    def get_state(self) -> dict:
        assert self.board is not None
        return {
            "level_index": self.level_index,
            "level_name": self.level.name,
            "phase": self.phase.value,
            "move_count": self.move_count,
            "cluster_size": len(self.board.poly),
            "inert_remaining": len(self.board.inert),
            "solved": self.phase in (Phase.WON, Phase.COMPLETE),
        }
