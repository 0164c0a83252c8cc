"""
APScheduler-backed timer service.

This module runs delay() and throttle() callbacks on real wall-clock timers
using a BackgroundScheduler, so callers never block waiting for them.
"""

import threading
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from apscheduler.events import EVENT_JOB_ERROR, JobExecutionEvent
from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.job import Job
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.date import DateTrigger
import pytz

from callgate.config.settings import get_scheduler_settings
from callgate.scheduling.base import validate_delay
from callgate.utils.logger import get_logger

logger = get_logger(__name__)


class BackgroundTimerService:
    """
    Runs one-shot callbacks on a background thread.

    Features:
        - Each schedule() call becomes a one-shot "date" job
        - A single worker by default, so callbacks never overlap
        - Callback failures are logged, never raised to the scheduling caller

    Example:
        timers = BackgroundTimerService()
        timers.schedule(lambda: print("later"), 500)
        ...
        timers.shutdown()
    """

    def __init__(self, timezone: Optional[str] = None, max_workers: Optional[int] = None):
        """
        Initialize the service.

        Args:
            timezone: Zone name for run dates; defaults to CALLGATE_TIMEZONE.
            max_workers: Worker threads for callbacks; defaults to
                CALLGATE_SCHEDULER_WORKERS.
        """
        settings = get_scheduler_settings()
        self.timezone = pytz.timezone(timezone or settings["timezone"])
        self.max_workers = max_workers or settings["max_workers"]

        self.scheduler = self._build_scheduler()
        self._lock = threading.RLock()

        logger.info(
            f"Timer service initialized ({self.timezone.zone}, "
            f"{self.max_workers} worker(s))"
        )

    def schedule(self, callback: Callable[[], Any], delay_ms: float) -> Job:
        """
        Run a callback once after delay_ms milliseconds.

        Starts the scheduler if it is not running yet, including after a
        shutdown().

        Returns:
            The APScheduler Job for the timer.
        """
        validate_delay(delay_ms)
        with self._lock:
            self.start()
            run_date = datetime.now(self.timezone) + timedelta(milliseconds=delay_ms)
            job = self.scheduler.add_job(
                func=callback,
                trigger=DateTrigger(run_date=run_date, timezone=self.timezone),
                name=getattr(callback, "__qualname__", repr(callback)),
            )
        logger.debug(f"Scheduled {job.name} in {delay_ms}ms (job {job.id})")
        return job

    def start(self):
        """Start the scheduler if needed."""
        with self._lock:
            if not self.scheduler.running:
                self.scheduler.start()
                logger.info("Timer service started")

    def shutdown(self, wait: bool = True):
        """
        Stop the scheduler.

        Args:
            wait: Block until running callbacks finish. Pending timers that
                have not fired are kept and run once the service is started
                again by start() or the next schedule().
        """
        with self._lock:
            if not self.scheduler.running:
                return
            # A stopped BackgroundScheduler cannot run jobs again, so unfired
            # timers move to a fresh one that starts on the next schedule().
            stopped, self.scheduler = self.scheduler, self._build_scheduler()
            stopped.pause()
            carried = stopped.get_jobs()
            for job in carried:
                self.scheduler.add_job(job.func, trigger=job.trigger, id=job.id, name=job.name)
        stopped.shutdown(wait=wait)
        logger.info(f"Timer service shut down ({len(carried)} timer(s) kept for restart)")

    def get_status(self) -> dict:
        """
        Get current service status.

        Returns:
            Dictionary with:
            - running: Whether the scheduler is active
            - pending: Number of timers that have not fired
            - timezone: Zone used for run dates
            - max_workers: Callback worker threads
        """
        return {
            "running": self.scheduler.running,
            "pending": len(self.scheduler.get_jobs()),
            "timezone": self.timezone.zone,
            "max_workers": self.max_workers,
        }

    def _build_scheduler(self) -> BackgroundScheduler:
        scheduler = BackgroundScheduler(
            timezone=self.timezone,
            executors={"default": ThreadPoolExecutor(self.max_workers)},
            job_defaults={"misfire_grace_time": None, "coalesce": False},
        )
        scheduler.add_listener(self._on_job_error, EVENT_JOB_ERROR)
        return scheduler

    def _on_job_error(self, event: JobExecutionEvent):
        logger.error(
            f"Timer callback failed (job {event.job_id}): {event.exception}",
            exc_info=(type(event.exception), event.exception, event.exception.__traceback__),
        )


_default_service: Optional[BackgroundTimerService] = None
_default_lock = threading.Lock()


def get_default_scheduler() -> BackgroundTimerService:
    """
    Return the process-wide timer service, creating it on first use.
    """
    global _default_service
    with _default_lock:
        if _default_service is None:
            _default_service = BackgroundTimerService()
        return _default_service


def shutdown_default_scheduler(wait: bool = True) -> None:
    """
    Stop the process-wide timer service, if one was created.

    The same service stays the default; it restarts, with any timers that had
    not fired, on its next schedule().
    """
    with _default_lock:
        service = _default_service
    if service is not None:
        service.shutdown(wait=wait)
