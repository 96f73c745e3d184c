"""
Module: severance_engines.salary
Responsibility:
    Average the salary history preceding termination and derive the two
    daily rates that translate benefit day counts into currency:

    * rate A ("averaged"): monthly * 14 / 12 / 30 -- the monthly salary
      annualized with the 13th and 14th month bonuses, used for preaviso,
      cesantia and vacation components.
    * rate B ("ordinary"): monthly / 30 -- used for the 13th and 14th
      month bonuses themselves, which accrue on ordinary salary.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Decimal-only arithmetic; rates keep full precision and only
      component amounts are rounded.
    - The two rates are separate fields and never substituted for one
      another.
    - An empty salary history averages to zero.

Failure modes:
    - ValueError when a SalaryRecord carries a negative amount.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from severance_config.schema import DEFAULT_POLICY, SeverancePolicy
from severance_kernel.domain.values import round_half_up

ZERO = Decimal("0")


def _to_decimal(value: Decimal | int | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        raise ValueError(f"salary amounts must not be float: {value!r}")
    return Decimal(str(value))


@dataclass(frozen=True)
class SalaryRecord:
    """One month of paid salary, oldest to newest in a history."""

    month: str
    year: int
    base_amount: Decimal
    overtime_amount: Decimal = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_amount", _to_decimal(self.base_amount))
        object.__setattr__(self, "overtime_amount", _to_decimal(self.overtime_amount))
        if self.base_amount < 0 or self.overtime_amount < 0:
            raise ValueError("salary amounts cannot be negative")

    @property
    def total_amount(self) -> Decimal:
        return self.base_amount + self.overtime_amount


@dataclass(frozen=True)
class SalaryAverages:
    """Averages over a salary history."""

    average_monthly: Decimal
    average_with_overtime: Decimal
    latest_monthly: Decimal
    record_count: int

    @classmethod
    def empty(cls) -> SalaryAverages:
        return cls(ZERO, ZERO, ZERO, 0)


@dataclass(frozen=True)
class DailyRates:
    """
    Daily rates derived from one monthly salary.

    Contract:
        ``rate_a`` and ``rate_b`` are full-precision Decimals; display
        values are rounded copies.
    """

    monthly_salary: Decimal
    averaged_monthly: Decimal
    rate_a: Decimal
    rate_b: Decimal

    @property
    def rate_a_display(self) -> Decimal:
        return round_half_up(self.rate_a)

    @property
    def rate_b_display(self) -> Decimal:
        return round_half_up(self.rate_b)


MONTH_NAMES = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)


def build_salary_history(
    monthly_salary: Decimal | int | str,
    end_date: date,
    months: int = 6,
) -> tuple[SalaryRecord, ...]:
    """
    Flat history of ``months`` months ending with ``end_date``'s month.

    Used when only the current contract salary is known; oldest first.
    """
    amount = _to_decimal(monthly_salary)
    records = []
    for offset in range(months - 1, -1, -1):
        month_start = end_date.replace(day=1) - relativedelta(months=offset)
        records.append(
            SalaryRecord(
                month=MONTH_NAMES[month_start.month - 1],
                year=month_start.year,
                base_amount=amount,
            )
        )
    return tuple(records)


def average_salaries(history: Sequence[SalaryRecord]) -> SalaryAverages:
    if not history:
        return SalaryAverages.empty()
    count = Decimal(len(history))
    return SalaryAverages(
        average_monthly=sum((r.base_amount for r in history), ZERO) / count,
        average_with_overtime=sum((r.total_amount for r in history), ZERO) / count,
        latest_monthly=history[-1].base_amount,
        record_count=len(history),
    )


def daily_rates(
    monthly_salary: Decimal | int | str,
    policy: SeverancePolicy = DEFAULT_POLICY,
) -> DailyRates:
    monthly = _to_decimal(monthly_salary)
    months = Decimal(policy.months_per_year)
    bonus_months = Decimal(policy.bonus_months_per_year)
    days = Decimal(policy.days_per_month)

    return DailyRates(
        monthly_salary=monthly,
        averaged_monthly=monthly * bonus_months / months,
        rate_a=monthly * bonus_months / (months * days),
        rate_b=monthly / days,
    )
