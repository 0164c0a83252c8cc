"""
Deferred call: run a function later without blocking the caller.
"""

from typing import Callable, Optional

from callgate.scheduling.background import get_default_scheduler
from callgate.scheduling.base import Scheduler, validate_delay
from callgate.utils.logger import get_logger

logger = get_logger(__name__)


def delay(
    func: Callable,
    wait_ms: float,
    *args,
    scheduler: Optional[Scheduler] = None,
    **kwargs,
) -> None:
    """
    Call func(*args, **kwargs) once, no earlier than wait_ms from now.

    Returns immediately. The call cannot be cancelled, and an exception raised
    by func goes to the scheduler's error handling, not to this caller.

    Args:
        func: Function to call later.
        wait_ms: Minimum delay in milliseconds.
        *args: Positional arguments bound for the call.
        scheduler: Timer service; the default background service when omitted.
        **kwargs: Keyword arguments bound for the call.
    """
    if not callable(func):
        raise TypeError(f"delay() expects a callable, got {func!r}")
    validate_delay(wait_ms)
    if scheduler is None:
        scheduler = get_default_scheduler()

    def fire():
        return func(*args, **kwargs)

    fire.__qualname__ = f"delay({getattr(func, '__qualname__', repr(func))})"
    scheduler.schedule(fire, wait_ms)
    logger.debug(f"delay: {fire.__qualname__} scheduled in {wait_ms}ms")
