"""
Module: severance_engines.periods
Responsibility:
    Decompose the span between two calendar dates into years, months and
    days under one of two day-count conventions:

    * ``calendar`` -- actual month lengths; a negative day component
      borrows the length of the month before ``end``; if the day count is
      still negative (a 30th or 31st start after a short February) the
      anniversary clamps to that month's last day.
    * ``banking360`` -- every month is 30 days and every year 360 days.

    This is the leaf component of the severance engine; every day count
    used by the benefit calculators comes from here.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - ``years * 12 + months`` is the number of full months elapsed.
    - Under banking360, ``total_days == years*360 + months*30 + days``.
    - A single ServicePeriod never mixes conventions.
    - ``start > end`` yields the zero period; nothing here raises on
      date ordering.

Failure modes:
    - None.  The functions are total over all pairs of dates.

Audit relevance:
    Every day count printed on a severance document (cesantia, vacation
    and bonus pro-rations) is a ServicePeriod computed here with an
    explicit convention and inclusive flag.

Usage:
    from severance_engines.periods import compute_period, DayCountConvention

    period = compute_period(
        date(2025, 2, 11), date(2026, 1, 6),
        DayCountConvention.BANKING_360, inclusive=True,
    )
    period.total_days  # 326
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from enum import Enum

BANKING_DAYS_PER_MONTH = 30
BANKING_DAYS_PER_YEAR = 360


class DayCountConvention(str, Enum):
    """Day-count basis for decomposing a span of dates."""

    CALENDAR = "calendar"
    BANKING_360 = "banking360"


@dataclass(frozen=True)
class ServicePeriod:
    """
    Elapsed time between two dates.

    Contract:
        Frozen dataclass; derived per calculation and never persisted.
    Guarantees:
        - years >= 0 and 0 <= months <= 11.
        - total_days is expressed in the period's own convention.
        - When ``inclusive`` is set, both endpoints were counted: one day
          was added to ``days`` and ``total_days`` (no carry into months).
    """

    years: int
    months: int
    days: int
    total_days: int
    convention: DayCountConvention
    inclusive: bool = False

    @classmethod
    def zero(cls, convention: DayCountConvention, inclusive: bool = False) -> ServicePeriod:
        return cls(0, 0, 0, 0, convention, inclusive)

    @property
    def total_months(self) -> int:
        """Full months elapsed."""
        return self.years * 12 + self.months

    @property
    def is_zero(self) -> bool:
        return self.total_days == 0

    def to_dict(self) -> dict[str, object]:
        return {
            "years": self.years,
            "months": self.months,
            "days": self.days,
            "total_days": self.total_days,
            "convention": self.convention.value,
            "inclusive": self.inclusive,
        }


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, clamping ``day`` to the last valid day of the month."""
    return date(year, month, min(day, last_day_of_month(year, month)))


def _calendar_period(start: date, end: date) -> tuple[int, int, int, int]:
    years = end.year - start.year
    months = end.month - start.month
    days = end.day - start.day
    if days < 0:
        prior_year, prior_month = (end.year, end.month - 1) if end.month > 1 else (end.year - 1, 12)
        days += last_day_of_month(prior_year, prior_month)
        months -= 1
        if days < 0:
            # anniversary clamped to the prior month's last day
            days = end.day
    if months < 0:
        months += 12
        years -= 1
    return years, months, days, (end - start).days


def _banking_period(start: date, end: date) -> tuple[int, int, int, int]:
    years = end.year - start.year
    months = end.month - start.month
    days = end.day - start.day
    if days < 0:
        days += BANKING_DAYS_PER_MONTH
        months -= 1
    if months < 0:
        months += 12
        years -= 1
    total = years * BANKING_DAYS_PER_YEAR + months * BANKING_DAYS_PER_MONTH + days
    return years, months, days, total


def compute_period(
    start: date,
    end: date,
    convention: DayCountConvention = DayCountConvention.CALENDAR,
    inclusive: bool = False,
) -> ServicePeriod:
    """
    Decompose ``[start, end]`` into a ServicePeriod.

    Preconditions:
        None -- callers validate ordering upstream.
    Postconditions:
        - ``start > end`` returns ``ServicePeriod.zero(convention, inclusive)``.
        - With ``inclusive=True`` one day is added to ``days`` and
          ``total_days`` so that both endpoints are counted.
    """
    convention = DayCountConvention(convention)
    if start > end:
        return ServicePeriod.zero(convention, inclusive)

    if convention is DayCountConvention.CALENDAR:
        years, months, days, total = _calendar_period(start, end)
    else:
        years, months, days, total = _banking_period(start, end)

    if inclusive:
        days += 1
        total += 1
    return ServicePeriod(years, months, days, total, convention, inclusive)


def banking_days(start: date, end: date, inclusive: bool = False) -> int:
    """Total banking360 days between two dates (0 when ``start > end``)."""
    return compute_period(start, end, DayCountConvention.BANKING_360, inclusive).total_days
