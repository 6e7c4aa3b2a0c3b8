from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from polymacher.game import CAMPAIGN, Action, GameConfig, LevelDataError, PolymacherGame, load_levels


KEY_TO_ACTION = {
    "L": Action.LEFT,
    "R": Action.RIGHT,
    "U": Action.UP,
    "D": Action.DOWN,
    "X": Action.RESET,
    "a": Action.LEFT,
    "d": Action.RIGHT,
    "w": Action.UP,
    "s": Action.DOWN,
    "r": Action.RESET,
}


def parse_moves(text: str) -> List[Action]:
    actions: List[Action] = []
    for ch in text:
        if ch in " ,":
            continue
        if ch not in KEY_TO_ACTION:
            raise ValueError(f"unknown move {ch!r}; use L R U D X or a d w s r")
        actions.append(KEY_TO_ACTION[ch])
    return actions


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="polymacher", description="Replay moves on a Polymacher level")
    p.add_argument("--level", type=int, default=0, help="Level index to start on")
    p.add_argument("--moves", type=str, default="", help="Moves to apply, e.g. RRRRUU")
    p.add_argument("--levels-file", type=str, default=None, help="JSON file of level records")
    p.add_argument("--list", action="store_true", help="List levels and exit")
    p.add_argument("--verbose", action="store_true", help="Log engine events")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        levels = load_levels(args.levels_file) if args.levels_file else list(CAMPAIGN)
    except (OSError, LevelDataError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    if args.list:
        for i, level in enumerate(levels):
            print(f"{i:2d}  {level.name}")
        return 0

    try:
        actions = parse_moves(args.moves)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    try:
        game = PolymacherGame(GameConfig(start_level=args.level), levels=levels)
    except (IndexError, LevelDataError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    print(f"{game.level_index}: {game.level.name}")
    for action in actions:
        game.step(action)
        if not game.is_playing:
            break
    print(game.board.render_text())
    state = game.get_state()
    print(f"moves: {state['move_count']}  cluster: {state['cluster_size']}  solved: {state['solved']}")
    return 0 if state["solved"] else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
