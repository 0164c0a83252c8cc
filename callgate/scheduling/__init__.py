"""
Timer services for deferred and rate-limited calls.

ManualScheduler drives timers from a virtual clock; BackgroundTimerService
uses APScheduler and real time.
"""

from callgate.scheduling.background import (
    BackgroundTimerService,
    get_default_scheduler,
    shutdown_default_scheduler,
)
from callgate.scheduling.base import Scheduler
from callgate.scheduling.manual import ManualScheduler, ManualTimer

__all__ = [
    "BackgroundTimerService",
    "ManualScheduler",
    "ManualTimer",
    "Scheduler",
    "get_default_scheduler",
    "shutdown_default_scheduler",
]
