"""
Tests for configuration loading and the logger factory.
"""

import logging
import os

import pytest

from callgate.config.settings import get_log_level, get_scheduler_settings, load_environment
from callgate.utils.logger import get_logger


def test_scheduler_defaults(monkeypatch):
    monkeypatch.delenv("CALLGATE_TIMEZONE", raising=False)
    monkeypatch.delenv("CALLGATE_SCHEDULER_WORKERS", raising=False)

    assert get_scheduler_settings() == {"timezone": "UTC", "max_workers": 1}


def test_unknown_timezone_rejected(monkeypatch):
    monkeypatch.setenv("CALLGATE_TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(ValueError, match="CALLGATE_TIMEZONE"):
        get_scheduler_settings()


@pytest.mark.parametrize("value", ["zero", "0", "-3"])
def test_bad_worker_count_rejected(monkeypatch, value):
    monkeypatch.setenv("CALLGATE_SCHEDULER_WORKERS", value)

    with pytest.raises(ValueError, match="CALLGATE_SCHEDULER_WORKERS"):
        get_scheduler_settings()


@pytest.mark.parametrize("raw, expected", [("debug", "DEBUG"), ("WARNING", "WARNING"), ("loud", "INFO")])
def test_log_level(monkeypatch, raw, expected):
    monkeypatch.setenv("LOG_LEVEL", raw)

    assert get_log_level() == expected


def test_load_environment_reads_dotenv(tmp_path, monkeypatch):
    monkeypatch.delenv("CALLGATE_TEST_VALUE", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("CALLGATE_TEST_VALUE=from-dotenv\n")

    try:
        load_environment(str(env_file))
        assert os.getenv("CALLGATE_TEST_VALUE") == "from-dotenv"
    finally:
        os.environ.pop("CALLGATE_TEST_VALUE", None)


def test_logger_configured_once():
    first = get_logger("callgate.tests.logger")
    second = get_logger("callgate.tests.logger")

    assert first is second
    assert len(first.handlers) == 1
    assert isinstance(first.handlers[0], logging.StreamHandler)
