"""
Module: severance_engines.benefits
Responsibility:
    Day counts for each severance ("prestaciones") component and their
    translation into currency:

    ======================  ==============================================
    preaviso                notice tier by calendar service at the
                            calculation date
    cesantia                completed years * 30
    cesantia proporcional   banking360 days after the last anniversary,
                            both ends counted, * 30/360
    vacaciones              cumulative vacation entitlement
    vacaciones prop.        banking360 days from the last anniversary,
                            both ends counted, * per-cycle/360
    decimo tercer mes       banking360 days from Jan 1, both ends
                            counted, * 30/360
    decimo cuarto mes       same from Jul 1; zero before Jul 1
    ======================  ==============================================

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Fractional day counts are rounded half-up to the policy's
      ``day_count_places``; amounts are rounded half-up to the currency's
      decimal places at the component.
    - Preaviso, cesantia and vacation components are paid at rate A;
      13th and 14th month at rate B (see ``severance_engines.salary``).
    - Bonus anchors are Jan 1 and Jul 1 of the termination year, independent
      of the hire date.

Failure modes:
    - None.  Inverted spans yield zero days.

Usage:
    from severance_engines.benefits import thirteenth_month_days

    bonus = thirteenth_month_days(date(2024, 2, 10), date(2026, 1, 6))
    bonus.raw_days  # 6
    bonus.days      # Decimal("0.50")
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum

from severance_config.schema import DEFAULT_POLICY, BonusAnchor, SeverancePolicy
from severance_engines.anniversary import completed_years, normalize_hire_date
from severance_engines.periods import DayCountConvention, banking_days, compute_period
from severance_engines.salary import DailyRates
from severance_engines.vacation import cumulative_days
from severance_kernel.domain.values import Currency, Money, round_half_up


class BenefitKind(str, Enum):
    """Severance components, in document order."""

    PREAVISO = "preaviso"
    CESANTIA = "cesantia"
    CESANTIA_PROPORCIONAL = "cesantia_proporcional"
    VACACIONES = "vacaciones"
    VACACIONES_PROPORCIONALES = "vacaciones_proporcionales"
    DECIMO_TERCER_MES = "decimo_tercer_mes"
    DECIMO_CUARTO_MES = "decimo_cuarto_mes"


# Components paid on ordinary salary; everything else uses the averaged rate.
ORDINARY_RATE_KINDS = frozenset({BenefitKind.DECIMO_TERCER_MES, BenefitKind.DECIMO_CUARTO_MES})


def rate_for(kind: BenefitKind, rates: DailyRates) -> Decimal:
    return rates.rate_b if kind in ORDINARY_RATE_KINDS else rates.rate_a


@dataclass(frozen=True)
class BenefitComponent:
    """
    One line of the severance settlement.

    Guarantees:
        - amount == round_half_up(days * daily_rate) in the amount's currency.
        - daily_rate keeps full precision.
    """

    kind: BenefitKind
    days: Decimal
    daily_rate: Decimal
    amount: Money

    def to_dict(self) -> dict[str, str]:
        return {
            "kind": self.kind.value,
            "days": str(self.days),
            "daily_rate": str(round_half_up(self.daily_rate)),
            "amount": str(self.amount.amount),
        }


@dataclass(frozen=True)
class BonusDays:
    """Accrual of an annual bonus up to termination."""

    anchor: date | None
    raw_days: int
    days: Decimal


def component(
    kind: BenefitKind,
    days: Decimal | int,
    daily_rate: Decimal,
    currency: str | Currency,
) -> BenefitComponent:
    days = Decimal(days)
    return BenefitComponent(
        kind=kind,
        days=days,
        daily_rate=daily_rate,
        amount=Money.of(days * daily_rate, currency).round(),
    )


def _scale(raw_days: int, numerator: int, policy: SeverancePolicy) -> Decimal:
    scaled = Decimal(raw_days) * Decimal(numerator) / Decimal(policy.days_per_year)
    return round_half_up(scaled, policy.day_count_places)


def notice_days(
    hire_date: date,
    reference_date: date,
    policy: SeverancePolicy = DEFAULT_POLICY,
) -> int:
    """Preaviso days owed for calendar service from hire to ``reference_date``."""
    period = compute_period(
        normalize_hire_date(hire_date), reference_date, DayCountConvention.CALENDAR
    )
    owed = 0
    for tier in policy.notice_tiers:
        if period.total_months >= tier.min_months:
            owed = tier.notice_days
    return owed


def severance_days(
    hire_date: date,
    termination_date: date,
    policy: SeverancePolicy = DEFAULT_POLICY,
) -> Decimal:
    return Decimal(completed_years(hire_date, termination_date) * policy.severance_days_per_year)


def severance_prorated_days(
    last_anniversary: date,
    termination_date: date,
    policy: SeverancePolicy = DEFAULT_POLICY,
) -> Decimal:
    raw = banking_days(last_anniversary + timedelta(days=1), termination_date, inclusive=True)
    return _scale(raw, policy.severance_days_per_year, policy)


def vacation_days(
    hire_date: date,
    termination_date: date,
    policy: SeverancePolicy = DEFAULT_POLICY,
) -> Decimal:
    """Cumulative vacation days earned by every completed year (zero in trial)."""
    if (termination_date - hire_date).days < policy.trial_period_days:
        return Decimal(0)
    return Decimal(cumulative_days(completed_years(hire_date, termination_date), policy))


def vacation_prorated_days(
    last_anniversary: date,
    termination_date: date,
    per_cycle_days: int,
    policy: SeverancePolicy = DEFAULT_POLICY,
) -> Decimal:
    raw = banking_days(last_anniversary, termination_date, inclusive=True)
    return _scale(raw, per_cycle_days, policy)


def bonus_days(
    anchor: BonusAnchor,
    hire_date: date,
    termination_date: date,
    policy: SeverancePolicy = DEFAULT_POLICY,
) -> BonusDays:
    """
    Accrued days of a bonus that starts on ``anchor`` each year.

    Counted from the anchor in the termination year whatever the hire
    date; zero when termination precedes that anchor or the hire date.
    """
    anchor_date = anchor.in_year(termination_date.year)
    if termination_date < anchor_date or termination_date < hire_date:
        return BonusDays(anchor=None, raw_days=0, days=Decimal(0))

    raw = banking_days(anchor_date, termination_date, inclusive=True)
    return BonusDays(
        anchor=anchor_date, raw_days=raw, days=_scale(raw, policy.days_per_month, policy)
    )


def thirteenth_month_days(
    hire_date: date,
    termination_date: date,
    policy: SeverancePolicy = DEFAULT_POLICY,
) -> BonusDays:
    return bonus_days(policy.thirteenth_month_anchor, hire_date, termination_date, policy)


def fourteenth_month_days(
    hire_date: date,
    termination_date: date,
    policy: SeverancePolicy = DEFAULT_POLICY,
) -> BonusDays:
    return bonus_days(policy.fourteenth_month_anchor, hire_date, termination_date, policy)
