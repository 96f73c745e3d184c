"""
Module: severance_engines.severance
Responsibility:
    Orchestrate a full severance ("prestaciones") calculation for one
    employee: resolve anniversaries and service periods, average the
    salary history, compute every component's day count, price each at
    its daily rate and aggregate into a ``SeveranceResult``.

Architecture position:
    Engines -- pure calculation layer, zero I/O, no clock access.
    The reference date ("today" for the preaviso tier) is a mandatory
    argument; callers freeze it from an injected Clock.

Invariants enforced:
    - Determinism: identical ``SeveranceInput`` and ``reference_date``
      produce identical results.
    - Precondition violations (termination before hire) degrade to zero
      day counts; nothing here raises on them.
    - An explicit ``last_anniversary_date`` on the input overrides the
      resolver.
    - An explicit ``monthly_salary`` on the input overrides the salary
      history average.

Failure modes:
    - InvalidCurrencyError when the input names an unsupported currency.

Audit relevance:
    Each ``calculate`` call is traced via ``@traced_engine`` with an input
    fingerprint over the full input and reference date.

Usage:
    from severance_engines import SeveranceCalculator, SeveranceInput

    result = SeveranceCalculator().calculate(
        severance_input=SeveranceInput(
            employee_name="Ana Lopez",
            dni="0801-1990-12345",
            hire_date=date(2024, 2, 10),
            termination_date=date(2026, 1, 6),
            monthly_salary=Decimal("30000"),
        ),
        reference_date=date(2026, 1, 6),
    )
    result.total_benefits
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from severance_config.schema import DEFAULT_POLICY, SeverancePolicy
from severance_engines.aggregator import CalculationContext, SeveranceResult, aggregate
from severance_engines.anniversary import (
    completed_years,
    last_anniversary,
    normalize_hire_date,
)
from severance_engines.benefits import (
    BenefitKind,
    component,
    fourteenth_month_days,
    notice_days,
    rate_for,
    severance_days,
    severance_prorated_days,
    thirteenth_month_days,
    vacation_days,
    vacation_prorated_days,
)
from severance_engines.holidays import HolidayCalendar, HondurasHolidayCalendar
from severance_engines.periods import DayCountConvention, compute_period
from severance_engines.salary import SalaryRecord, average_salaries, daily_rates
from severance_engines.tracer import traced_engine
from severance_engines.vacation import LeaveRequest, vacation_balance
from severance_kernel.logging_config import get_logger

logger = get_logger("engines.severance")


@dataclass(frozen=True)
class SeveranceInput:
    """
    Everything the engine needs for one employee.

    Contract:
        Built by the calling layer from pre-validated HR records;
        immutable for the duration of a calculation.
    """

    employee_name: str
    dni: str
    hire_date: date
    termination_date: date
    termination_reason: str = ""
    salary_history: tuple[SalaryRecord, ...] = ()
    approved_vacations: tuple[LeaveRequest, ...] = ()
    last_anniversary_date: date | None = None
    monthly_salary: Decimal | None = None
    currency: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "salary_history", tuple(self.salary_history))
        object.__setattr__(self, "approved_vacations", tuple(self.approved_vacations))
        if self.monthly_salary is not None and not isinstance(self.monthly_salary, Decimal):
            object.__setattr__(self, "monthly_salary", Decimal(str(self.monthly_salary)))


class SeveranceCalculator:
    """
    Stateless severance calculator.

    Contract:
        Holds only the policy and holiday calendar; every call receives
        its input and reference date explicitly.
    """

    def __init__(
        self,
        policy: SeverancePolicy = DEFAULT_POLICY,
        calendar: HolidayCalendar | None = None,
    ):
        self.policy = policy
        self.calendar = calendar or HondurasHolidayCalendar()

    @traced_engine(
        "severance",
        "1.0",
        fingerprint_fields=("severance_input", "reference_date"),
    )
    def calculate(
        self,
        *,
        severance_input: SeveranceInput,
        reference_date: date,
    ) -> SeveranceResult:
        policy = self.policy
        hire = severance_input.hire_date
        termination = severance_input.termination_date
        currency = severance_input.currency or policy.currency

        anniversary = severance_input.last_anniversary_date or last_anniversary(hire, termination)
        years = completed_years(hire, termination)

        averages = average_salaries(severance_input.salary_history)
        monthly = (
            severance_input.monthly_salary
            if severance_input.monthly_salary is not None
            else averages.average_monthly
        )
        rates = daily_rates(monthly, policy)

        balance = vacation_balance(
            hire, termination, severance_input.approved_vacations, self.calendar, policy
        )
        thirteenth = thirteenth_month_days(hire, termination, policy)
        fourteenth = fourteenth_month_days(hire, termination, policy)

        day_counts = {
            BenefitKind.PREAVISO: Decimal(notice_days(hire, reference_date, policy)),
            BenefitKind.CESANTIA: severance_days(hire, termination, policy),
            BenefitKind.CESANTIA_PROPORCIONAL: severance_prorated_days(
                anniversary, termination, policy
            ),
            BenefitKind.VACACIONES: vacation_days(hire, termination, policy),
            BenefitKind.VACACIONES_PROPORCIONALES: vacation_prorated_days(
                anniversary, termination, balance.entitlement.per_cycle_days, policy
            ),
            BenefitKind.DECIMO_TERCER_MES: thirteenth.days,
            BenefitKind.DECIMO_CUARTO_MES: fourteenth.days,
        }
        components = [
            component(kind, days, rate_for(kind, rates), currency)
            for kind, days in day_counts.items()
        ]

        logger.debug(
            "severance_day_counts",
            extra={kind.value: str(days) for kind, days in day_counts.items()},
        )

        context = CalculationContext(
            employee_name=severance_input.employee_name,
            dni=severance_input.dni,
            termination_reason=severance_input.termination_reason,
            hire_date=hire,
            normalized_hire_date=normalize_hire_date(hire),
            termination_date=termination,
            reference_date=reference_date,
            last_anniversary=anniversary,
            service_period=compute_period(
                normalize_hire_date(hire), termination, DayCountConvention.CALENDAR
            ),
            completed_years=years,
            salary_averages=averages,
            daily_rates=rates,
            vacation_balance=balance,
            thirteenth_month_anchor=thirteenth.anchor,
            fourteenth_month_anchor=fourteenth.anchor,
            thirteenth_month_raw_days=thirteenth.raw_days,
            fourteenth_month_raw_days=fourteenth.raw_days,
        )

        result = aggregate(components, currency, context)
        logger.info(
            "severance_calculated",
            extra={
                "completed_years": years,
                "termination_reason": severance_input.termination_reason,
                "total_benefits": str(result.total_benefits.amount),
                "currency": result.currency.code,
            },
        )
        return result
