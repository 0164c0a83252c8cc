"""
Rate limiting for function calls.

throttle() lets the wrapped body run at most once per window. Calls that
arrive while a window is open are coalesced into a single trailing run once
the window closes.
"""

import functools
import threading
from typing import Any, Callable, Dict, Optional, Tuple

from callgate.scheduling.background import get_default_scheduler
from callgate.scheduling.base import Scheduler, validate_delay
from callgate.utils.logger import get_logger

logger = get_logger(__name__)


class _ThrottleState:
    """Private per-wrapper state; only touched while holding lock."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.pending = 0
        self.leader_free = True
        self.last_result: Any = None
        self.latest_call: Tuple[Tuple[Any, ...], Dict[str, Any]] = ((), {})


def throttle(func: Callable, wait_ms: float, scheduler: Optional[Scheduler] = None) -> Callable:
    """
    Limit how often func's body runs.

    The first call in an idle period runs func immediately and opens a window
    of wait_ms. Calls inside the window do not run func; they return the
    previous result and mark a backlog. When the window closes, a non-empty
    backlog produces exactly one more run (with the arguments of the most
    recent call) and a new window; an empty backlog returns to idle.

    Exceptions from func propagate to whoever triggered the run: the caller
    for an immediate run, the scheduler for a trailing one. The next window is
    scheduled before func runs, so a failure does not wedge the throttle.

    Args:
        func: Function to rate limit.
        wait_ms: Window length in milliseconds.
        scheduler: Timer service. When omitted, each window uses whatever
            get_default_scheduler() returns at that moment.

    Returns:
        A wrapper returning the most recent result of func.
    """
    if not callable(func):
        raise TypeError(f"throttle() expects a callable, got {func!r}")
    validate_delay(wait_ms)
    name = getattr(func, "__qualname__", repr(func))
    state = _ThrottleState()

    def lead():
        state.pending -= 1
        args, kwargs = state.latest_call
        timers = scheduler if scheduler is not None else get_default_scheduler()
        timers.schedule(retest, wait_ms)
        state.last_result = func(*args, **kwargs)

    def retest():
        with state.lock:
            if state.pending > 0:
                if state.pending > 1:
                    logger.debug(f"throttle: {name} dropped {state.pending - 1} backlogged call(s)")
                state.pending = 1
                lead()
            else:
                state.leader_free = True
                logger.debug(f"throttle: {name} window closed")

    @functools.wraps(func)
    def wrapped(*args, **kwargs):
        with state.lock:
            state.pending += 1
            state.latest_call = (args, kwargs)
            if state.leader_free:
                state.leader_free = False
                logger.debug(f"throttle: {name} window opened")
                lead()
            return state.last_result

    return wrapped
