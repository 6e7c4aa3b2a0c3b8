"""
Level records for Polymacher.

A level record mirrors the authoring format:

    {"name": "AMASS",
     "parent": [1, 2, "red"],
     "data": [["walls", 0, 0, 8, 8], ["clears", 1, 2, 7, 3], ["goal", 7, 2, "any"], ...]}

Directives apply in order, so a later clear can carve a room out of an
earlier wall rectangle.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from .blocks import Block, Color


logger = logging.getLogger(__name__)


class LevelDataError(ValueError):
    """Raised when a level record is malformed or inconsistent with the board."""


class DirectiveKind(str, Enum):
    WALLS = "walls"
    WALL = "wall"
    CLEARS = "clears"
    CLEAR = "clear"
    GOAL = "goal"
    BLOCK = "block"


# Number of integer arguments, and whether a trailing color follows
_ARITY = {
    DirectiveKind.WALLS: (4, False),
    DirectiveKind.CLEARS: (4, False),
    DirectiveKind.WALL: (2, False),
    DirectiveKind.CLEAR: (2, False),
    DirectiveKind.GOAL: (2, True),
    DirectiveKind.BLOCK: (2, True),
}


@dataclass(frozen=True)
class Directive:
    """One level-building instruction over the inclusive rectangle (x1, y1)-(x2, y2)."""
    kind: DirectiveKind
    x1: int
    y1: int
    x2: int
    y2: int
    color: Optional[Color] = None


@dataclass(frozen=True)
class LevelData:
    name: str
    parent: Block
    directives: Tuple[Directive, ...]


def _as_int(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise LevelDataError(f"{where}: expected an integer coordinate, got {value!r}")
    return value


def _as_color(value: Any, where: str, allow_any: bool) -> Color:
    try:
        color = Color(value)
    except ValueError:
        raise LevelDataError(f"{where}: unknown color {value!r}") from None
    if color is Color.ANY and not allow_any:
        raise LevelDataError(f"{where}: the wildcard color is only valid on goals")
    return color


def parse_directive(entry: Sequence[Any], where: str = "directive") -> Directive:
    if isinstance(entry, (str, bytes)) or not isinstance(entry, Sequence) or not entry:
        raise LevelDataError(f"{where}: expected a non-empty list, got {entry!r}")
    try:
        kind = DirectiveKind(entry[0])
    except ValueError:
        raise LevelDataError(f"{where}: unknown directive {entry[0]!r}") from None

    n_ints, has_color = _ARITY[kind]
    expected = 1 + n_ints + (1 if has_color else 0)
    if len(entry) != expected:
        raise LevelDataError(
            f"{where}: {kind.value!r} takes {expected - 1} arguments, got {len(entry) - 1}"
        )
    coords = [_as_int(v, where) for v in entry[1 : 1 + n_ints]]
    if n_ints == 2:
        coords = coords + coords
    x1, y1, x2, y2 = coords
    if x2 < x1 or y2 < y1:
        raise LevelDataError(f"{where}: range ({x1},{y1})-({x2},{y2}) is reversed")

    color = None
    if has_color:
        color = _as_color(entry[-1], where, allow_any=(kind == DirectiveKind.GOAL))
    return Directive(kind, x1, y1, x2, y2, color)


def parse_level(record: Mapping[str, Any]) -> LevelData:
    """Convert one authoring record into an immutable LevelData."""
    if not isinstance(record, Mapping):
        raise LevelDataError(f"level record must be a mapping, got {type(record).__name__}")
    name = str(record.get("name", "UNTITLED"))

    parent = record.get("parent")
    if isinstance(parent, (str, bytes)) or not isinstance(parent, Sequence) or len(parent) != 3:
        raise LevelDataError(f"{name}: parent must be [x, y, color], got {parent!r}")
    parent_block = Block(
        _as_int(parent[0], f"{name} parent"),
        _as_int(parent[1], f"{name} parent"),
        _as_color(parent[2], f"{name} parent", allow_any=False),
    )

    data = record.get("data", [])
    if isinstance(data, (str, bytes)) or not isinstance(data, Sequence):
        raise LevelDataError(f"{name}: data must be a list of directives")
    directives = tuple(
        parse_directive(entry, f"{name} data[{i}]") for i, entry in enumerate(data)
    )
    return LevelData(name=name, parent=parent_block, directives=directives)


def load_levels(path: Union[str, Path]) -> List[LevelData]:
    """Read a JSON file holding a list of level records."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            records = json.load(f)
        except json.JSONDecodeError as e:
            raise LevelDataError(f"{path}: invalid JSON ({e})") from e
    if not isinstance(records, list):
        raise LevelDataError(f"{path}: expected a list of level records")
    levels = [parse_level(r) for r in records]
    logger.info("Loaded %d levels from %s", len(levels), path)
    return levels


LEVEL_RECORDS: List[dict] = [
    {
        "name": "EMPTY HALL",
        "parent": [1, 6, "red"],
        "data": [
            ["walls", 0, 0, 8, 8],
            ["clears", 1, 6, 4, 6],
            ["clears", 4, 2, 7, 2],
            ["clears", 4, 3, 4, 5],
            ["goal", 7, 2, "any"],
        ],
    },
    {
        "name": "AMASS",
        "parent": [1, 2, "red"],
        "data": [
            ["walls", 0, 0, 8, 8],
            ["clears", 1, 2, 7, 3],
            ["clears", 4, 4, 4, 6],
            ["goal", 7, 2, "any"],
            ["goal", 7, 3, "any"],
            ["block", 4, 6, "red"],
        ],
    },
    {
        "name": "SOCKET",
        "parent": [4, 4, "red"],
        "data": [
            ["walls", 0, 0, 8, 8],
            ["clears", 2, 2, 6, 6],
            ["clear", 4, 1],
            ["clear", 7, 4],
            ["goal", 2, 5, "any"],
            ["goal", 3, 6, "any"],
            ["goal", 2, 6, "any"],
            ["block", 4, 1, "red"],
            ["block", 7, 4, "red"],
        ],
    },
    {
        "name": "PEEKABOO",
        "parent": [5, 3, "red"],
        "data": [
            ["walls", 0, 0, 8, 8],
            ["clears", 2, 3, 6, 5],
            ["wall", 4, 3],
            ["goal", 2, 5, "any"],
            ["goal", 3, 5, "any"],
            ["block", 3, 3, "red"],
        ],
    },
    {
        "name": "FILE IN LINE",
        "parent": [4, 6, "red"],
        "data": [
            ["walls", 0, 0, 8, 8],
            ["clears", 2, 1, 6, 7],
            ["goal", 3, 3, "any"],
            ["goal", 4, 3, "any"],
            ["goal", 5, 3, "any"],
            ["block", 4, 2, "red"],
            ["block", 4, 4, "red"],
        ],
    },
    {
        "name": "PINCH",
        "parent": [4, 6, "red"],
        "data": [
            ["walls", 0, 0, 8, 8],
            ["clears", 2, 1, 6, 4],
            ["clears", 3, 5, 5, 7],
            ["wall", 4, 4],
            ["goal", 4, 5, "any"],
            ["goal", 4, 7, "any"],
            ["block", 4, 2, "red"],
            ["block", 4, 3, "red"],
        ],
    },
    {
        "name": "OPERAND",
        "parent": [4, 6, "red"],
        "data": [
            ["walls", 0, 0, 8, 8],
            ["clears", 3, 2, 5, 6],
            ["wall", 5, 2],
            ["wall", 3, 6],
            ["block", 3, 5, "red"],
            ["block", 5, 4, "red"],
            ["goal", 3, 2, "any"],
            ["goal", 4, 2, "any"],
            ["goal", 4, 3, "any"],
        ],
    },
    {
        "name": "REVOLVE",
        "parent": [4, 6, "red"],
        "data": [
            ["walls", 0, 0, 8, 8],
            ["clears", 2, 2, 6, 6],
            ["wall", 4, 4],
            ["wall", 2, 2],
            ["block", 2, 4, "red"],
            ["block", 4, 3, "red"],
            ["block", 6, 4, "red"],
            ["goal", 5, 5, "any"],
            ["goal", 5, 6, "any"],
            ["goal", 6, 5, "any"],
            ["goal", 6, 6, "any"],
        ],
    },
    {
        "name": "GET THROUGH",
        "parent": [2, 2, "red"],
        "data": [
            ["walls", 0, 0, 8, 8],
            ["clears", 2, 2, 6, 6],
            ["walls", 2, 5, 2, 6],
            ["wall", 5, 4],
            ["block", 5, 3, "red"],
            ["block", 6, 3, "red"],
            ["block", 4, 6, "red"],
            ["goal", 4, 5, "any"],
            ["goal", 6, 6, "any"],
        ],
    },
    {
        "name": "TWO ROOMS",
        "parent": [2, 3, "red"],
        "data": [
            ["walls", 0, 0, 8, 8],
            ["clears", 1, 1, 3, 7],
            ["clears", 5, 1, 7, 5],
            ["clear", 4, 2],
            ["block", 2, 5, "red"],
            ["block", 1, 6, "red"],
            ["block", 5, 4, "red"],
            ["goal", 1, 1, "any"],
            ["goal", 2, 1, "any"],
            ["goal", 3, 1, "any"],
            ["goal", 3, 2, "any"],
        ],
    },
]

CAMPAIGN: Tuple[LevelData, ...] = tuple(parse_level(r) for r in LEVEL_RECORDS)
