"""
Clock -- Deterministic time abstraction.

Responsibility:
    Provides an injectable clock interface so that engine and service code
    never call ``datetime.now()`` or ``date.today()`` directly.  The
    severance calculation's reference date ("today" in HR terms) is frozen
    from a Clock at the service boundary and threaded explicitly through
    every engine call.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O (except SystemClock,
    which is the one sanctioned I/O boundary for time).

Audit relevance:
    A severance document must be reproducible: re-running a calculation
    with the same DeterministicClock yields the same figures.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone

# Payroll dates are civil dates in Honduras local time (UTC-6, no DST).
DEFAULT_TIMEZONE = timezone(timedelta(hours=-6), "CST")


class Clock(ABC):
    """
    Abstract clock interface.

    Contract:
        Services that need the current date receive a Clock via constructor
        injection.  Engine code must NEVER read the wall clock.

    Guarantees:
        - ``now()`` returns a timezone-aware ``datetime``.
        - ``today()`` returns the civil date of ``now()``.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Get the current time."""
        ...

    def today(self) -> date:
        """Get the current civil date."""
        return self.now().date()


class SystemClock(Clock):
    """
    Production clock that returns actual system time.

    Non-goals:
        Not suitable for deterministic replay or testing.
    """

    def __init__(self, tz: timezone = DEFAULT_TIMEZONE):
        self._tz = tz

    def now(self) -> datetime:
        return datetime.now(self._tz)


class DeterministicClock(Clock):
    """
    Test clock with controlled time.

    Guarantees:
        ``now()`` returns the same value on repeated calls until
        ``advance_days()`` or ``set_date()`` is called.
    """

    def __init__(self, fixed: date | datetime | None = None):
        self._fixed = self._as_datetime(fixed or date(2024, 1, 1))

    @staticmethod
    def _as_datetime(value: date | datetime) -> datetime:
        if isinstance(value, datetime):
            return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
        return datetime(value.year, value.month, value.day, 12, 0, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._fixed

    def set_date(self, value: date | datetime) -> None:
        """Set the clock to a specific date or time."""
        self._fixed = self._as_datetime(value)

    def advance_days(self, days: int = 1) -> date:
        """Advance by whole days and return the new date."""
        self._fixed = self._fixed + timedelta(days=days)
        return self.today()
