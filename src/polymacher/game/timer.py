from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List


@dataclass(eq=False)
class TimerHandle:
    due: int
    callback: Callable[[], None] = field(repr=False)
    fired: bool = False


class TickScheduler:
    """Fire-once callbacks driven by an external tick source (one tick per frame)."""

    def __init__(self) -> None:
        self.now = 0
        self._pending: List[TimerHandle] = []

    @property
    def pending(self) -> int:
        return len(self._pending)

    def schedule(self, ticks: int, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(due=self.now + max(1, int(ticks)), callback=callback)
        self._pending.append(handle)
        return handle

    def cancel(self, handle: TimerHandle) -> bool:
        if handle in self._pending:
            self._pending.remove(handle)
            return True
        return False

    def tick(self, n: int = 1) -> int:
        """Advance time by ``n`` ticks and run due callbacks in due order. Returns how many fired."""
        self.now += n
        due = sorted((h for h in self._pending if h.due <= self.now), key=lambda h: h.due)
        fired = 0
        for handle in due:
            self._pending.remove(handle)
            handle.fired = True
            handle.callback()
            fired += 1
        return fired
