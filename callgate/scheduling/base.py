"""
Contract for the timer service used by delay() and throttle().
"""

from typing import Any, Callable, Protocol


class Scheduler(Protocol):
    """
    Anything that can run a callback once, no earlier than a delay from now.

    Implementations must invoke callbacks with no arguments and must never run
    them synchronously inside schedule().
    """

    def schedule(self, callback: Callable[[], Any], delay_ms: float) -> Any:
        """
        Register a one-shot callback.

        Args:
            callback: Zero-argument callable to run when the timer fires.
            delay_ms: Minimum delay in milliseconds before the callback runs.

        Returns:
            An opaque handle identifying the timer.
        """
        ...


def validate_delay(delay_ms: float) -> float:
    """
    Check that a delay is a non-negative number of milliseconds.

    Raises:
        TypeError: If delay_ms is not a real number.
        ValueError: If delay_ms is negative.
    """
    if isinstance(delay_ms, bool) or not isinstance(delay_ms, (int, float)):
        raise TypeError(f"Delay must be a number of milliseconds, got {delay_ms!r}")
    if delay_ms < 0:
        raise ValueError(f"Delay must be non-negative, got {delay_ms}")
    return delay_ms
