"""
Invocation gate: run a function's body at most once.
"""

import functools
import threading
from typing import Any, Callable

from callgate.utils.logger import get_logger

logger = get_logger(__name__)


def once(func: Callable) -> Callable:
    """
    Wrap a function so its body executes at most one time.

    The first successful call runs func with the given arguments and stores
    the result; every later call returns that result without running func,
    whatever arguments it receives. If func raises, the exception reaches the
    caller unchanged and the gate stays open, so the next call tries again.

    Args:
        func: The function to guard.

    Returns:
        A wrapper with the same signature as func.
    """
    if not callable(func):
        raise TypeError(f"once() expects a callable, got {func!r}")

    name = getattr(func, "__qualname__", repr(func))
    lock = threading.RLock()
    has_run = False
    result: Any = None

    @functools.wraps(func)
    def wrapped(*args, **kwargs):
        nonlocal has_run, result
        with lock:
            if not has_run:
                result = func(*args, **kwargs)
                has_run = True
                logger.debug(f"once: {name} fired")
            return result

    return wrapped
