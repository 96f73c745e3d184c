"""
Module: severance_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    severance calculation engines.  This is the canonical import surface
    for ``severance_services``.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import severance_kernel and severance_config.schema.
    MUST NOT import severance_services.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
      Reference dates are explicit parameters supplied by services.
    - Decimal-only arithmetic for day fractions and amounts.
    - Determinism: identical inputs always produce identical outputs.

Audit relevance:
    Every full calculation is traced via ``@traced_engine`` (see
    ``severance_engines.tracer``), emitting SEVERANCE_ENGINE_TRACE records.

Usage:
    from severance_engines import SeveranceCalculator, SeveranceInput
    from severance_engines import compute_period, DayCountConvention
    from severance_engines import entitlement, vacation_balance
"""

from severance_engines.aggregator import (
    CalculationContext,
    SeveranceResult,
    aggregate,
)
from severance_engines.anniversary import (
    AnniversaryResolver,
    AnniversaryWindow,
    anniversary_window,
    completed_years,
    last_anniversary,
    next_anniversary,
    normalize_hire_date,
)
from severance_engines.benefits import (
    BenefitComponent,
    BenefitKind,
    BonusDays,
    component,
    fourteenth_month_days,
    notice_days,
    severance_days,
    severance_prorated_days,
    thirteenth_month_days,
    vacation_days,
    vacation_prorated_days,
)
from severance_engines.holidays import (
    HolidayCalendar,
    HondurasHolidayCalendar,
    StaticHolidayCalendar,
    business_days,
    easter_sunday,
    honduras_holidays,
)
from severance_engines.periods import (
    DayCountConvention,
    ServicePeriod,
    banking_days,
    compute_period,
)
from severance_engines.salary import (
    DailyRates,
    SalaryAverages,
    SalaryRecord,
    average_salaries,
    build_salary_history,
    daily_rates,
)
from severance_engines.severance import SeveranceCalculator, SeveranceInput
from severance_engines.tracer import traced_engine
from severance_engines.vacation import (
    LeaveRequest,
    VacationBalance,
    VacationEntitlement,
    cumulative_days,
    days_taken,
    entitlement,
    per_cycle_days,
    vacation_balance,
)

__all__ = [
    "AnniversaryResolver",
    "AnniversaryWindow",
    "BenefitComponent",
    "BenefitKind",
    "BonusDays",
    "CalculationContext",
    "DailyRates",
    "DayCountConvention",
    "HolidayCalendar",
    "HondurasHolidayCalendar",
    "LeaveRequest",
    "SalaryAverages",
    "SalaryRecord",
    "ServicePeriod",
    "SeveranceCalculator",
    "SeveranceInput",
    "SeveranceResult",
    "StaticHolidayCalendar",
    "VacationBalance",
    "VacationEntitlement",
    "aggregate",
    "anniversary_window",
    "average_salaries",
    "banking_days",
    "build_salary_history",
    "business_days",
    "completed_years",
    "component",
    "compute_period",
    "cumulative_days",
    "daily_rates",
    "days_taken",
    "easter_sunday",
    "entitlement",
    "fourteenth_month_days",
    "honduras_holidays",
    "last_anniversary",
    "next_anniversary",
    "normalize_hire_date",
    "notice_days",
    "per_cycle_days",
    "severance_days",
    "severance_prorated_days",
    "thirteenth_month_days",
    "traced_engine",
    "vacation_balance",
    "vacation_days",
    "vacation_prorated_days",
]
