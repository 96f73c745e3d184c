"""
Module: severance_engines.vacation
Responsibility:
    Vacation entitlement under Honduras labor law: the per-cycle
    entitlement for the anniversary year being worked, the cumulative
    (stacked) entitlement earned by every completed year, and the
    business days already consumed by approved vacation requests inside
    the current anniversary year.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Legal figures come from ``SeverancePolicy`` (trial period, schedule,
    leave type and status labels).

Invariants enforced:
    - Trial-period gate: fewer than ``trial_period_days`` elapsed since
      the hire date yields zero per-cycle and zero cumulative entitlement.
    - Cumulative entitlement is a closed-form sum over the schedule
      (0, 10, 22, 37, then +20 per completed year), monotonically
      non-decreasing in completed years.
    - Only requests whose type and status match the policy's vacation
      and approved labels consume days.
    - Available balance is never negative.

Failure modes:
    - None.  Missing leave records mean zero days taken.

Audit relevance:
    The vacation balance shown to HR and the vacation days paid out at
    termination both come from ``entitlement``; they cannot disagree.

Usage:
    from severance_engines.vacation import entitlement, vacation_balance

    ent = entitlement(date(2022, 3, 1), date(2025, 6, 1))
    ent.per_cycle_days   # 20 (cycle 4)
    ent.cumulative_days  # 37
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from severance_config.schema import DEFAULT_POLICY, SeverancePolicy
from severance_engines.anniversary import (
    AnniversaryWindow,
    anniversary_window,
    completed_years,
    next_anniversary,
)
from severance_engines.holidays import (
    HolidayCalendar,
    HondurasHolidayCalendar,
    business_days,
)
from severance_kernel.logging_config import get_logger

logger = get_logger("engines.vacation")


@dataclass(frozen=True)
class LeaveRequest:
    """A leave record supplied by the HR system (read-only)."""

    start_date: date
    end_date: date
    leave_type: str
    status: str


@dataclass(frozen=True)
class VacationEntitlement:
    """
    Vacation entitlement at a reference date.

    Guarantees:
        - per_cycle_days and cumulative_days are 0 while in the trial period.
        - days_until_eligible is 0 once the trial period is over.
    """

    per_cycle_days: int
    cumulative_days: int
    completed_years: int
    in_trial_period: bool
    days_until_eligible: int

    @property
    def cycle(self) -> int:
        return self.completed_years + 1


@dataclass(frozen=True)
class VacationBalance:
    """Per-cycle entitlement against days taken in the current anniversary year."""

    entitlement: VacationEntitlement
    taken: int
    window: AnniversaryWindow
    next_anniversary: date

    @property
    def available(self) -> int:
        return max(0, self.entitlement.per_cycle_days - self.taken)

    def to_dict(self) -> dict[str, object]:
        return {
            "entitlement": self.entitlement.per_cycle_days,
            "cumulative": self.entitlement.cumulative_days,
            "taken": self.taken,
            "available": self.available,
            "years_of_service": self.entitlement.completed_years,
            "in_trial_period": self.entitlement.in_trial_period,
            "days_until_eligible": self.entitlement.days_until_eligible,
            "window_start": self.window.start.isoformat(),
            "window_end": self.window.end.isoformat(),
            "next_anniversary": self.next_anniversary.isoformat(),
        }


def per_cycle_days(completed: int, policy: SeverancePolicy = DEFAULT_POLICY) -> int:
    """Days granted for cycle ``completed + 1``; the last tier repeats."""
    schedule = policy.vacation_schedule
    cycle = max(0, completed) + 1
    return schedule[min(cycle, len(schedule)) - 1].days


def cumulative_days(completed: int, policy: SeverancePolicy = DEFAULT_POLICY) -> int:
    """Sum of the entitlements of every completed cycle."""
    if completed <= 0:
        return 0
    schedule = policy.vacation_schedule
    tiered = min(completed, len(schedule))
    total = sum(tier.days for tier in schedule[:tiered])
    return total + (completed - tiered) * schedule[-1].days


def entitlement(
    hire_date: date,
    reference_date: date,
    policy: SeverancePolicy = DEFAULT_POLICY,
) -> VacationEntitlement:
    """
    Vacation entitlement at ``reference_date``.

    The trial gate counts actual elapsed days from the hire date as
    recorded, so a Feb 29 hire reaches eligibility on day 90 like any
    other; anniversary arithmetic uses the normalized date.
    """
    elapsed = (reference_date - hire_date).days
    years = completed_years(hire_date, reference_date)

    if elapsed < policy.trial_period_days:
        return VacationEntitlement(
            per_cycle_days=0,
            cumulative_days=0,
            completed_years=years,
            in_trial_period=True,
            days_until_eligible=policy.trial_period_days - max(0, elapsed),
        )

    return VacationEntitlement(
        per_cycle_days=per_cycle_days(years, policy),
        cumulative_days=cumulative_days(years, policy),
        completed_years=years,
        in_trial_period=False,
        days_until_eligible=0,
    )


def is_approved_vacation(request: LeaveRequest, policy: SeverancePolicy = DEFAULT_POLICY) -> bool:
    return (
        request.leave_type == policy.vacation_leave_type
        and request.status == policy.approved_status
    )


def days_taken(
    approved_vacations: Iterable[LeaveRequest],
    window: AnniversaryWindow,
    calendar: HolidayCalendar,
    policy: SeverancePolicy = DEFAULT_POLICY,
) -> int:
    """
    Business days consumed inside ``window``.

    Each approved vacation request overlapping the window is clipped to
    it; Monday-Friday days that are not holidays are counted.
    """
    total = 0
    for request in approved_vacations:
        if not is_approved_vacation(request, policy):
            continue
        start = max(request.start_date, window.start)
        end = min(request.end_date, window.end)
        total += business_days(start, end, calendar)
    return total


def vacation_balance(
    hire_date: date,
    reference_date: date,
    approved_vacations: Iterable[LeaveRequest] = (),
    calendar: HolidayCalendar | None = None,
    policy: SeverancePolicy = DEFAULT_POLICY,
) -> VacationBalance:
    """Entitlement, days taken and availability for the current anniversary year."""
    calendar = calendar or HondurasHolidayCalendar()
    ent = entitlement(hire_date, reference_date, policy)
    window = anniversary_window(hire_date, reference_date)
    taken = days_taken(approved_vacations, window, calendar, policy)

    balance = VacationBalance(
        entitlement=ent,
        taken=taken,
        window=window,
        next_anniversary=next_anniversary(hire_date, reference_date),
    )
    logger.debug(
        "vacation_balance_computed",
        extra={
            "per_cycle_days": ent.per_cycle_days,
            "cumulative_days": ent.cumulative_days,
            "days_taken": taken,
            "available": balance.available,
            "in_trial_period": ent.in_trial_period,
        },
    )
    return balance
