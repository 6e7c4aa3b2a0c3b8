from typing import Callable, Dict

from blinker import Signal


EVENT_MOVE_ACCEPTED = "move_accepted"      # payload: dx, dy
EVENT_MOVE_REJECTED = "move_rejected"      # payload: dx, dy
EVENT_ABSORBED = "absorbed"                # payload: cluster_size=int
EVENT_GOAL_SATISFIED = "goal_satisfied"    # payload: level_index=int, level_name=str
EVENT_LEVEL_RESET = "level_reset"          # payload: level_index=int, level_name=str
EVENT_LEVEL_LOADED = "level_loaded"        # payload: level_index=int, level_name=str
EVENT_GAME_COMPLETE = "game_complete"      # payload: levels=int


class EventBus:
    """Named blinker signals; handlers receive ``(sender, **payload)``."""

    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn: Callable) -> None:
        sig = self._signals.setdefault(name, Signal(name))
        # strong reference so lambdas and bound methods stay connected
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload) -> None:
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)
