"""
Deterministic scheduler driven by a virtual clock.

Nothing fires until the owner calls advance() or run_all(), which makes timer
behaviour reproducible in tests.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, List

from callgate.scheduling.base import validate_delay
from callgate.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(order=True)
class ManualTimer:
    """Handle for a timer registered with a ManualScheduler."""

    due_ms: float
    seq: int
    callback: Callable[[], Any] = field(compare=False)


class ManualScheduler:
    """
    Virtual-time scheduler.

    Example:
        clock = ManualScheduler()
        clock.schedule(lambda: print("tick"), 100)
        clock.advance(100)  # prints "tick"
    """

    def __init__(self) -> None:
        self.now_ms: float = 0
        self._timers: List[ManualTimer] = []
        self._counter = itertools.count()

    @property
    def pending(self) -> int:
        """Number of registered timers that have not fired yet."""
        return len(self._timers)

    def schedule(self, callback: Callable[[], Any], delay_ms: float) -> ManualTimer:
        validate_delay(delay_ms)
        timer = ManualTimer(self.now_ms + delay_ms, next(self._counter), callback)
        heapq.heappush(self._timers, timer)
        logger.debug(f"Timer #{timer.seq} due at {timer.due_ms}ms")
        return timer

    def advance(self, ms: float) -> None:
        """
        Move the clock forward, firing every timer that comes due.

        Timers fire in due-time order, ties in registration order. Timers
        registered while advancing also fire if they fall inside the window.

        Args:
            ms: Milliseconds to advance; must be non-negative.
        """
        validate_delay(ms)
        target = self.now_ms + ms
        while self._timers and self._timers[0].due_ms <= target:
            self._fire_next()
        self.now_ms = target

    def run_all(self, max_timers: int = 1000) -> int:
        """
        Fire timers until none remain.

        Args:
            max_timers: Upper bound on timers fired before giving up.

        Returns:
            The number of timers fired.

        Raises:
            RuntimeError: If more than max_timers timers would fire.
        """
        fired = 0
        while self._timers:
            if fired >= max_timers:
                raise RuntimeError(
                    f"Timers still pending after firing {max_timers}; "
                    "a callback is probably rescheduling itself"
                )
            self._fire_next()
            fired += 1
        return fired

    def _fire_next(self) -> None:
        timer = heapq.heappop(self._timers)
        self.now_ms = max(self.now_ms, timer.due_ms)
        logger.debug(f"Firing timer #{timer.seq} at {self.now_ms}ms")
        timer.callback()
