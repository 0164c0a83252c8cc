"""
Shared pytest fixtures.
"""

import pytest

from callgate.scheduling import BackgroundTimerService, ManualScheduler


@pytest.fixture
def clock():
    """A virtual-time scheduler starting at 0ms."""
    return ManualScheduler()


@pytest.fixture
def timers():
    """A real background timer service, shut down after the test."""
    service = BackgroundTimerService(timezone="UTC", max_workers=1)
    yield service
    service.shutdown(wait=True)


class EmptyLookingScheduler(ManualScheduler):
    """Manual scheduler that is falsy while no timers are pending."""

    def __len__(self):
        return self.pending


@pytest.fixture
def falsy_clock():
    return EmptyLookingScheduler()
