"""
Pytest fixtures for the severance engine test suite.

Provides:
- The default Honduras policy and holiday calendars
- A deterministic clock frozen at a known reference date
- Logging reset between tests
"""

from datetime import date

import pytest

from severance_config.schema import DEFAULT_POLICY
from severance_engines.holidays import HondurasHolidayCalendar, StaticHolidayCalendar
from severance_kernel.domain.clock import DeterministicClock
from severance_kernel.logging_config import LogContext, reset_logging


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state and context between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def policy():
    return DEFAULT_POLICY


@pytest.fixture
def honduras_calendar():
    return HondurasHolidayCalendar()


@pytest.fixture
def no_holidays():
    return StaticHolidayCalendar()


@pytest.fixture
def clock():
    return DeterministicClock(date(2026, 1, 6))
