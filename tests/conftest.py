"""
Shared test fixtures and configuration.
"""

import pytest
import os
from datetime import date

# Set test environment variables before importing app modules
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("STORAGE_TYPE", "memory")
os.environ.setdefault("LOCAL_STORAGE_PATH", "/tmp/healthapp_test_data")
os.environ.setdefault("EXPORT_PATH", "/tmp/healthapp_test_exports")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LLM_API_KEY", "")
os.environ.setdefault("OPENAI_API_KEY", "")

from healthapp.core.app_state import AppState  # noqa: E402
from healthapp.core.notifications import RecordingNotifier  # noqa: E402
from healthapp.models import DaySummary  # noqa: E402
from healthapp.storage import InMemoryStorage  # noqa: E402


class FakeClock:
    """Settable calendar for rollover tests."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def clock():
    return FakeClock(date(2024, 3, 10))


@pytest.fixture
def memory_store():
    return InMemoryStorage()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app_state(memory_store, notifier, clock):
    return AppState(memory_store, notifier=notifier, clock=clock)


def make_day(day: str, **values) -> DaySummary:
    """A DaySummary with neutral zero values, overridden by keyword."""
    return DaySummary(date=day, **values)
