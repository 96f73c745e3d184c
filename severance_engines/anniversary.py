"""
Module: severance_engines.anniversary
Responsibility:
    Resolve service anniversaries for a hire date: the most recent
    anniversary on or before a reference date, the next one after it,
    the anniversary-year window between them, and the number of fully
    completed service years.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - A February 29 hire date is normalized to February 28 of the same
      year before any anniversary arithmetic; the recorded date is kept
      for display only.
    - ``completed_years`` is never negative.
    - A reference date before the hire date resolves to the normalized
      hire date (degenerate, non-error).

Failure modes:
    - None.

Usage:
    from severance_engines.anniversary import last_anniversary, completed_years

    last_anniversary(date(2020, 2, 29), date(2023, 3, 1))  # date(2023, 2, 28)
    completed_years(date(2024, 2, 10), date(2026, 1, 6))   # 1
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from severance_engines.periods import clamp_day


@dataclass(frozen=True)
class AnniversaryWindow:
    """The anniversary year containing a reference date: [start, end]."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def normalize_hire_date(hire_date: date) -> date:
    """Feb 29 -> Feb 28 of the same year; every other date unchanged."""
    if hire_date.month == 2 and hire_date.day == 29:
        return hire_date.replace(day=28)
    return hire_date


def _anniversary_in(hire_date: date, year: int) -> date:
    hire = normalize_hire_date(hire_date)
    return clamp_day(year, hire.month, hire.day)


def last_anniversary(hire_date: date, reference_date: date) -> date:
    """Most recent anniversary on or before ``reference_date``."""
    hire = normalize_hire_date(hire_date)
    if reference_date <= hire:
        return hire
    candidate = _anniversary_in(hire, reference_date.year)
    if candidate > reference_date:
        candidate = _anniversary_in(hire, reference_date.year - 1)
    return candidate


def next_anniversary(hire_date: date, reference_date: date) -> date:
    """First anniversary strictly after ``reference_date``."""
    hire = normalize_hire_date(hire_date)
    if reference_date < hire:
        return hire
    return _anniversary_in(hire, last_anniversary(hire, reference_date).year + 1)


def completed_years(hire_date: date, reference_date: date) -> int:
    """Fully completed service years at ``reference_date``, floored at 0."""
    hire = normalize_hire_date(hire_date)
    years = reference_date.year - hire.year
    if (reference_date.month, reference_date.day) < (hire.month, hire.day):
        years -= 1
    return max(0, years)


def anniversary_window(hire_date: date, reference_date: date) -> AnniversaryWindow:
    """Anniversary year containing ``reference_date``."""
    start = last_anniversary(hire_date, reference_date)
    end = _anniversary_in(hire_date, start.year + 1) - timedelta(days=1)
    return AnniversaryWindow(start=start, end=end)


class AnniversaryResolver:
    """
    Anniversary arithmetic bound to a single hire date.

    Contract:
        Holds the recorded and normalized hire dates; every method takes
        an explicit reference date.
    """

    def __init__(self, hire_date: date):
        self.hire_date = hire_date
        self.normalized_hire_date = normalize_hire_date(hire_date)

    def last(self, reference_date: date) -> date:
        return last_anniversary(self.normalized_hire_date, reference_date)

    def next(self, reference_date: date) -> date:
        return next_anniversary(self.normalized_hire_date, reference_date)

    def completed_years(self, reference_date: date) -> int:
        return completed_years(self.normalized_hire_date, reference_date)

    def window(self, reference_date: date) -> AnniversaryWindow:
        return anniversary_window(self.normalized_hire_date, reference_date)
