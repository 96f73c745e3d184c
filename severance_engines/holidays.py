"""
Module: severance_engines.holidays
Responsibility:
    Honduras national holiday calendar and business-day counting used to
    measure vacation days actually consumed.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Holy Week is derived from Gregorian (Western) Easter.
    - Spans crossing a year boundary consult each year's holidays.
    - ``business_days`` counts both endpoints and returns 0 for an
      inverted span.

Usage:
    from severance_engines.holidays import HondurasHolidayCalendar, business_days

    calendar = HondurasHolidayCalendar()
    business_days(date(2025, 4, 14), date(2025, 4, 18), calendar)  # 2
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date, timedelta

from dateutil.easter import EASTER_WESTERN, easter

from severance_kernel.logging_config import get_logger

logger = get_logger("engines.holidays")

WEDNESDAY = 2
SATURDAY = 5

# (month, day, name)
FIXED_HOLIDAYS: tuple[tuple[int, int, str], ...] = (
    (1, 1, "Año Nuevo"),
    (4, 14, "Día de las Américas"),
    (5, 1, "Día del Trabajo"),
    (9, 15, "Día de la Independencia"),
    (12, 25, "Navidad"),
)


def easter_sunday(year: int) -> date:
    return easter(year, EASTER_WESTERN)


def first_weekday_of_month(year: int, month: int, weekday: int) -> date:
    first = date(year, month, 1)
    return first + timedelta(days=(weekday - first.weekday()) % 7)


def honduras_holidays(year: int) -> dict[date, str]:
    """All national holidays of ``year`` mapped to their names."""
    holidays = {date(year, m, d): name for m, d, name in FIXED_HOLIDAYS}

    sunday = easter_sunday(year)
    holidays[sunday - timedelta(days=3)] = "Jueves Santo"
    holidays[sunday - timedelta(days=2)] = "Viernes Santo"
    holidays[sunday - timedelta(days=1)] = "Sábado de Gloria"

    # Feriado Morazánico: first Wednesday of October plus that Friday and Saturday
    wednesday = first_weekday_of_month(year, 10, WEDNESDAY)
    holidays[wednesday] = "Feriado Morazánico"
    holidays[wednesday + timedelta(days=2)] = "Feriado Morazánico"
    holidays[wednesday + timedelta(days=3)] = "Feriado Morazánico"
    return holidays


class HolidayCalendar(ABC):
    """
    Source of non-working dates.

    Contract:
        ``holidays_for_year`` returns the full set of holidays in a year;
        the result must be deterministic for a given year.
    """

    @abstractmethod
    def holidays_for_year(self, year: int) -> frozenset[date]:
        ...

    def is_holiday(self, day: date) -> bool:
        return day in self.holidays_for_year(day.year)

    def is_business_day(self, day: date) -> bool:
        return day.weekday() < SATURDAY and not self.is_holiday(day)


class HondurasHolidayCalendar(HolidayCalendar):
    """National holidays of Honduras, computed once per year and cached."""

    def __init__(self, extra_holidays: Iterable[date] = ()):
        self._extra = frozenset(extra_holidays)
        self._cache: dict[int, frozenset[date]] = {}

    def holidays_for_year(self, year: int) -> frozenset[date]:
        cached = self._cache.get(year)
        if cached is None:
            extra = {d for d in self._extra if d.year == year}
            cached = frozenset(honduras_holidays(year)) | extra
            self._cache[year] = cached
            logger.debug(
                "holiday_calendar_built",
                extra={"year": year, "holiday_count": len(cached)},
            )
        return cached


class StaticHolidayCalendar(HolidayCalendar):
    """Calendar backed by an explicit list of dates."""

    def __init__(self, dates: Iterable[date] = ()):
        self._dates = frozenset(dates)

    def holidays_for_year(self, year: int) -> frozenset[date]:
        return frozenset(d for d in self._dates if d.year == year)


def business_days(start: date, end: date, calendar: HolidayCalendar) -> int:
    """Monday-Friday non-holiday days in ``[start, end]``."""
    if start > end:
        return 0
    count = 0
    current = start
    while current <= end:
        if calendar.is_business_day(current):
            count += 1
        current += timedelta(days=1)
    return count
