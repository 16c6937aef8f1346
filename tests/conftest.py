"""
Shared pytest fixtures and configuration for rivulet tests.
"""

import pytest

from rivulet import VirtualTimeScheduler, configured
from rivulet.testing import EventRecorder
from tests.utils.memory_utils import SubscriptionTracker


@pytest.fixture
def recorder():
    """Provide a fresh EventRecorder for tests that need one."""
    return EventRecorder()


@pytest.fixture
def scheduler():
    """Provide a virtual-time scheduler starting at 0."""
    return VirtualTimeScheduler()


@pytest.fixture
def tracker():
    """Count live subscriptions for the duration of the test."""
    with SubscriptionTracker() as tracker:
        yield tracker


@pytest.fixture
def unhandled_errors():
    """Collect errors that reach observers without an error handler."""
    errors = []
    with configured(unhandled_error_handler=errors.append):
        yield errors
