"""Game module for Polymacher.

Exports the rules engine and the session that drives it:
- WallGrid: bounded wall map
- Block, Goal, Color: board entities
- LevelData, parse_level, load_levels, CAMPAIGN: level records
- BoardState, load_level: runtime board and the level loader
- can_move, apply_move, propagate_absorption, is_satisfied: move and win rules
- PolymacherGame: progression across levels
"""

from .grid import WallGrid
from .blocks import Block, Color, Goal
from .levels import CAMPAIGN, LevelData, LevelDataError, load_levels, parse_level
from .board import BoardState, load_level
from .rules import MoveOutcome, apply_move, can_move, is_satisfied, propagate_absorption
from .events import EventBus
from .timer import TickScheduler
from .core import Action, GameConfig, Phase, PolymacherGame

__all__ = [
    "WallGrid",
    "Block",
    "Color",
    "Goal",
    "CAMPAIGN",
    "LevelData",
    "LevelDataError",
    "load_levels",
    "parse_level",
    "BoardState",
    "load_level",
    "MoveOutcome",
    "apply_move",
    "can_move",
    "is_satisfied",
    "propagate_absorption",
    "EventBus",
    "TickScheduler",
    "Action",
    "GameConfig",
    "Phase",
    "PolymacherGame",
]
