"""
Helpers for loading configuration from environment variables.
"""

from typing import Any, Dict, Optional

from dotenv import load_dotenv
import os
import pytz

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_environment(dotenv_path: Optional[str] = ".env") -> None:
    """
    Load environment variables from a .env file and the host environment.

    Args:
        dotenv_path: Path to the .env file. Defaults to ".env".

    Returns:
        None. Modifies process environment in-place.
    """
    if dotenv_path:
        load_dotenv(dotenv_path)


def get_log_level() -> str:
    """
    Read the logging level name.

    Returns:
        LOG_LEVEL upper-cased, or "INFO" when unset or not a known level.
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    return level if level in _LOG_LEVELS else "INFO"


def get_scheduler_settings() -> Dict[str, Any]:
    """
    Collect settings for the background timer service.

    Returns:
        A dictionary with the scheduler timezone name and its worker count.

    Raises:
        ValueError: If CALLGATE_TIMEZONE is not a known zone or
            CALLGATE_SCHEDULER_WORKERS is not a positive integer.
    """
    timezone = os.getenv("CALLGATE_TIMEZONE", "UTC")
    try:
        pytz.timezone(timezone)
    except pytz.UnknownTimeZoneError:
        raise ValueError(f"Unknown timezone in CALLGATE_TIMEZONE: {timezone!r}")

    raw_workers = os.getenv("CALLGATE_SCHEDULER_WORKERS", "1")
    try:
        max_workers = int(raw_workers)
    except ValueError:
        raise ValueError(
            f"CALLGATE_SCHEDULER_WORKERS must be an integer, got {raw_workers!r}"
        )
    if max_workers < 1:
        raise ValueError(f"CALLGATE_SCHEDULER_WORKERS must be positive, got {max_workers}")

    return {
        "timezone": timezone,
        "max_workers": max_workers,
    }
