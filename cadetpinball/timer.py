"""Game-time timers that fire callbacks once their target time passes."""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Any, Callable, Optional

__all__ = ["TimerCallback", "TimerQueue"]

TimerCallback = Callable[[int, Any], None]

_INT32_MAX = 2**31 - 1


@dataclass
class _Timer:
    target_time: int
    caller: Any
    callback: Optional[TimerCallback]
    timer_id: int


class TimerQueue:
    """A bounded set of timers ordered by target time.

    ``clock`` returns the current game time in milliseconds.
    """

    def __init__(self, max_count: int, clock: Callable[[], int]) -> None:
        self.max_count = max_count
        self._clock = clock
        self._active: list[_Timer] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._active)

    def set(self, time: float, caller: Any, callback: Optional[TimerCallback]) -> int:
        """Schedule ``callback`` after ``time`` seconds.

        Returns the new timer id, or 0 when the queue is full.
        """
        if len(self._active) >= self.max_count:
            return 0
        target = self._clock() + int(time * 1000.0)
        timer = _Timer(target, caller, callback, self._next_id)
        index = bisect.bisect_right(self._active, target, key=lambda t: t.target_time)
        self._active.insert(index, timer)
        self._next_id += 1
        if self._next_id > _INT32_MAX:
            self._next_id = 1
        return timer.timer_id

    def kill(self, timer_id: int) -> int:
        """Cancel a timer; returns its id, or 0 if it was not active."""
        for index, timer in enumerate(self._active):
            if timer.timer_id == timer_id:
                del self._active[index]
                return timer_id
        return 0

    def _fire_first(self) -> None:
        timer = self._active.pop(0)
        if timer.callback is not None:
            timer.callback(timer.timer_id, timer.caller)

    def check(self) -> int:
        """Fire due timers and return how many fired.

        At most two due timers fire per call, plus any that are at least
        100 ms overdue.
        """
        now = self._clock()
        fired = 0
        if not self._active:
            return 0
        while self._active[0].target_time <= now:
            self._fire_first()
            fired += 1
            if fired > 1:
                break
            if not self._active:
                return fired
        while self._active and now >= self._active[0].target_time + 100:
            self._fire_first()
            fired += 1
        return fired