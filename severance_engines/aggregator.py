"""
Module: severance_engines.aggregator
Responsibility:
    Collect the seven severance components into a ``SeveranceResult`` and
    total them.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Every component kind appears exactly once in document order; kinds
      not supplied are filled with zero components.
    - ``total_benefits`` is the sum of the already-rounded component
      amounts, rounded again to the currency's decimal places.  The
      double rounding is the payroll convention and is kept deliberately.
    - Zero components are kept in the result, never dropped.

Failure modes:
    - ValueError when the same component kind is supplied twice.
    - CurrencyMismatchError when a component is not in the result currency.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from severance_engines.benefits import BenefitComponent, BenefitKind, component
from severance_engines.periods import ServicePeriod
from severance_engines.salary import DailyRates, SalaryAverages
from severance_engines.vacation import VacationBalance
from severance_kernel.domain.values import Currency, Money, round_half_up
from severance_kernel.logging_config import get_logger

logger = get_logger("engines.aggregator")


@dataclass(frozen=True)
class CalculationContext:
    """Inputs and intermediate figures a document generator displays."""

    employee_name: str
    dni: str
    termination_reason: str
    hire_date: date
    normalized_hire_date: date
    termination_date: date
    reference_date: date
    last_anniversary: date
    service_period: ServicePeriod
    completed_years: int
    salary_averages: SalaryAverages
    daily_rates: DailyRates
    vacation_balance: VacationBalance
    thirteenth_month_anchor: date | None
    fourteenth_month_anchor: date | None
    thirteenth_month_raw_days: int
    fourteenth_month_raw_days: int

    def to_dict(self) -> dict[str, Any]:
        def iso(value: date | None) -> str | None:
            return value.isoformat() if value else None

        return {
            "employee_name": self.employee_name,
            "dni": self.dni,
            "termination_reason": self.termination_reason,
            "hire_date": iso(self.hire_date),
            "normalized_hire_date": iso(self.normalized_hire_date),
            "termination_date": iso(self.termination_date),
            "reference_date": iso(self.reference_date),
            "last_anniversary": iso(self.last_anniversary),
            "service_period": self.service_period.to_dict(),
            "completed_years": self.completed_years,
            "average_monthly_salary": str(round_half_up(self.salary_averages.average_monthly)),
            "average_with_overtime": str(
                round_half_up(self.salary_averages.average_with_overtime)
            ),
            "monthly_salary": str(round_half_up(self.daily_rates.monthly_salary)),
            "averaged_monthly_salary": str(round_half_up(self.daily_rates.averaged_monthly)),
            "daily_rate_averaged": str(self.daily_rates.rate_a_display),
            "daily_rate_ordinary": str(self.daily_rates.rate_b_display),
            "vacation_balance": self.vacation_balance.to_dict(),
            "thirteenth_month_anchor": iso(self.thirteenth_month_anchor),
            "fourteenth_month_anchor": iso(self.fourteenth_month_anchor),
            "thirteenth_month_raw_days": self.thirteenth_month_raw_days,
            "fourteenth_month_raw_days": self.fourteenth_month_raw_days,
        }


@dataclass(frozen=True)
class SeveranceResult:
    """
    Complete severance settlement.

    Contract:
        Frozen; the single source of every number shown on a settlement
        document.
    Guarantees:
        - ``components`` holds one entry per BenefitKind in enum order.
        - ``total_benefits`` equals the rounded sum of component amounts.
    """

    components: tuple[BenefitComponent, ...]
    total_benefits: Money
    context: CalculationContext | None = None

    def component(self, kind: BenefitKind) -> BenefitComponent:
        for item in self.components:
            if item.kind is kind:
                return item
        raise KeyError(kind)

    @property
    def currency(self) -> Currency:
        return self.total_benefits.currency

    @property
    def preaviso(self) -> BenefitComponent:
        return self.component(BenefitKind.PREAVISO)

    @property
    def cesantia(self) -> BenefitComponent:
        return self.component(BenefitKind.CESANTIA)

    @property
    def cesantia_proporcional(self) -> BenefitComponent:
        return self.component(BenefitKind.CESANTIA_PROPORCIONAL)

    @property
    def vacaciones(self) -> BenefitComponent:
        return self.component(BenefitKind.VACACIONES)

    @property
    def vacaciones_proporcionales(self) -> BenefitComponent:
        return self.component(BenefitKind.VACACIONES_PROPORCIONALES)

    @property
    def decimo_tercer_mes(self) -> BenefitComponent:
        return self.component(BenefitKind.DECIMO_TERCER_MES)

    @property
    def decimo_cuarto_mes(self) -> BenefitComponent:
        return self.component(BenefitKind.DECIMO_CUARTO_MES)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "currency": self.currency.code,
            "currency_name": self.currency.name,
            "components": {c.kind.value: c.to_dict() for c in self.components},
            "total_benefits": str(self.total_benefits.amount),
        }
        if self.context is not None:
            payload["context"] = self.context.to_dict()
        return payload


def aggregate(
    components: Iterable[BenefitComponent],
    currency: str | Currency,
    context: CalculationContext | None = None,
) -> SeveranceResult:
    """Order, complete and total the components."""
    currency = Currency(currency) if isinstance(currency, str) else currency
    by_kind: dict[BenefitKind, BenefitComponent] = {}
    for item in components:
        if item.kind in by_kind:
            raise ValueError(f"duplicate severance component: {item.kind.value}")
        by_kind[item.kind] = item

    ordered = tuple(
        by_kind.get(kind) or component(kind, Decimal(0), Decimal(0), currency)
        for kind in BenefitKind
    )

    total = Money.zero(currency)
    for item in ordered:
        total = total + item.amount
    total = total.round()

    logger.info(
        "severance_aggregated",
        extra={
            "currency": currency.code,
            "total_benefits": str(total.amount),
            "component_count": len(ordered),
            "zero_components": sum(1 for c in ordered if c.amount.is_zero),
        },
    )
    return SeveranceResult(components=ordered, total_benefits=total, context=context)
