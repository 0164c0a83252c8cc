"""
callgate: run-once, memoize, delay and throttle decorators.

Example:
    from callgate import once, throttle

    init = once(connect)
    refresh = throttle(reload_config, 500)
"""

from callgate.decorators import delay, memoize, once, throttle
from callgate.scheduling import (
    BackgroundTimerService,
    ManualScheduler,
    Scheduler,
    get_default_scheduler,
    shutdown_default_scheduler,
)

__all__ = [
    "BackgroundTimerService",
    "ManualScheduler",
    "Scheduler",
    "delay",
    "get_default_scheduler",
    "memoize",
    "once",
    "shutdown_default_scheduler",
    "throttle",
]

__version__ = "1.0.0"
