"""
End-to-end tests for SeveranceCalculator.

Covers:
- The reference settlement: hire 2024-02-10, termination 2026-01-06,
  monthly salary 30,000 HNL
- Leap-day hires
- Empty salary history and salary overrides
- Last-anniversary override
- Preaviso driven by the reference date, not termination
- Determinism and tracing
"""

import logging
from datetime import date
from decimal import Decimal

import pytest

from severance_engines.benefits import BenefitKind
from severance_engines.holidays import StaticHolidayCalendar
from severance_engines.salary import SalaryRecord, build_salary_history
from severance_engines.severance import SeveranceCalculator, SeveranceInput
from severance_engines.vacation import LeaveRequest
from severance_kernel.domain.values import Money


def _scenario_input(**overrides):
    fields = dict(
        employee_name="Ana Lopez",
        dni="0801-1990-12345",
        hire_date=date(2024, 2, 10),
        termination_date=date(2026, 1, 6),
        termination_reason="Renuncia",
        monthly_salary=Decimal("30000"),
    )
    fields.update(overrides)
    return SeveranceInput(**fields)


class TestReferenceSettlement:
    """The documented settlement for a 30,000 HNL salary."""

    def setup_method(self):
        self.calculator = SeveranceCalculator(calendar=StaticHolidayCalendar())
        self.result = self.calculator.calculate(
            severance_input=_scenario_input(),
            reference_date=date(2026, 1, 6),
        )

    @pytest.mark.parametrize(
        "kind,days,amount",
        [
            (BenefitKind.PREAVISO, "30", "35000.00"),
            (BenefitKind.CESANTIA, "30", "35000.00"),
            (BenefitKind.CESANTIA_PROPORCIONAL, "27.17", "31698.33"),
            (BenefitKind.VACACIONES, "10", "11666.67"),
            (BenefitKind.VACACIONES_PROPORCIONALES, "10.90", "12716.67"),
            (BenefitKind.DECIMO_TERCER_MES, "0.50", "500.00"),
            (BenefitKind.DECIMO_CUARTO_MES, "0", "0.00"),
        ],
    )
    def test_component(self, kind, days, amount):
        item = self.result.component(kind)

        assert item.days == Decimal(days)
        assert item.amount == Money.of(Decimal(amount), "HNL")

    def test_total(self):
        assert self.result.total_benefits == Money.of(Decimal("126581.67"), "HNL")

    def test_context(self):
        context = self.result.context

        assert context.completed_years == 1
        assert context.last_anniversary == date(2025, 2, 10)
        assert (context.service_period.years, context.service_period.months) == (1, 10)
        assert context.service_period.days == 27
        assert context.daily_rates.rate_b == Decimal("1000")
        assert context.thirteenth_month_anchor == date(2026, 1, 1)
        assert context.thirteenth_month_raw_days == 6
        assert context.fourteenth_month_anchor is None
        assert context.vacation_balance.entitlement.per_cycle_days == 12

    def test_to_dict(self):
        payload = self.result.to_dict()

        assert payload["total_benefits"] == "126581.67"
        assert payload["components"]["decimo_tercer_mes"]["amount"] == "500.00"
        assert payload["context"]["termination_reason"] == "Renuncia"
        assert payload["context"]["daily_rate_averaged"] == "1166.67"
        assert payload["context"]["daily_rate_ordinary"] == "1000.00"
        assert payload["context"]["monthly_salary"] == "30000.00"
        assert payload["context"]["averaged_monthly_salary"] == "35000.00"
        assert payload["context"]["fourteenth_month_anchor"] is None
        assert payload["context"]["service_period"]["total_days"] == 696


class TestCalculatorVariants:
    """Inputs that change individual figures."""

    def setup_method(self):
        self.calculator = SeveranceCalculator(calendar=StaticHolidayCalendar())

    def test_salary_history_average(self):
        history = build_salary_history(Decimal("30000"), date(2026, 1, 6))
        result = self.calculator.calculate(
            severance_input=_scenario_input(monthly_salary=None, salary_history=history),
            reference_date=date(2026, 1, 6),
        )

        assert result.total_benefits.amount == Decimal("126581.67")
        assert result.context.salary_averages.record_count == 6

    def test_overtime_does_not_change_rates(self):
        history = [
            SalaryRecord("diciembre", 2025, Decimal("30000"), Decimal("5000")),
            SalaryRecord("enero", 2026, Decimal("30000"), Decimal("5000")),
        ]
        result = self.calculator.calculate(
            severance_input=_scenario_input(monthly_salary=None, salary_history=history),
            reference_date=date(2026, 1, 6),
        )

        assert result.context.daily_rates.monthly_salary == Decimal("30000")
        assert result.context.salary_averages.average_with_overtime == Decimal("35000")

    def test_empty_salary_history(self):
        result = self.calculator.calculate(
            severance_input=_scenario_input(monthly_salary=None),
            reference_date=date(2026, 1, 6),
        )

        assert result.total_benefits.is_zero
        assert result.cesantia.days == Decimal("30")
        assert all(c.amount.is_zero for c in result.components)

    def test_preaviso_uses_reference_date(self):
        result = self.calculator.calculate(
            severance_input=_scenario_input(),
            reference_date=date(2026, 2, 10),
        )

        assert result.preaviso.days == Decimal("60")
        assert result.preaviso.amount.amount == Decimal("70000.00")
        assert result.cesantia.days == Decimal("30")

    def test_last_anniversary_override(self):
        result = self.calculator.calculate(
            severance_input=_scenario_input(last_anniversary_date=date(2025, 12, 31)),
            reference_date=date(2026, 1, 6),
        )

        assert result.context.last_anniversary == date(2025, 12, 31)
        assert result.cesantia_proporcional.days == Decimal("0.50")

    def test_leap_day_hire(self):
        result = self.calculator.calculate(
            severance_input=_scenario_input(
                hire_date=date(2020, 2, 29), termination_date=date(2025, 3, 1)
            ),
            reference_date=date(2025, 3, 1),
        )

        assert result.context.normalized_hire_date == date(2020, 2, 28)
        assert result.context.last_anniversary == date(2025, 2, 28)
        assert result.context.completed_years == 5
        assert result.cesantia.days == Decimal("150")
        assert result.vacaciones.days == Decimal("77")

    def test_trial_period_termination(self):
        result = self.calculator.calculate(
            severance_input=_scenario_input(hire_date=date(2025, 11, 1)),
            reference_date=date(2026, 1, 6),
        )

        assert result.vacaciones.days == 0
        assert result.vacaciones_proporcionales.days == 0
        assert result.preaviso.days == 0
        assert result.cesantia.days == 0

    def test_termination_before_hire_degrades_to_zero(self):
        result = self.calculator.calculate(
            severance_input=_scenario_input(
                hire_date=date(2026, 1, 6), termination_date=date(2025, 1, 1)
            ),
            reference_date=date(2025, 1, 1),
        )

        assert result.total_benefits.is_zero

    def test_leave_does_not_change_vacation_pay(self):
        leave = LeaveRequest(date(2025, 6, 2), date(2025, 6, 6), "Vacation", "Approved")
        result = self.calculator.calculate(
            severance_input=_scenario_input(approved_vacations=[leave]),
            reference_date=date(2026, 1, 6),
        )

        assert result.context.vacation_balance.taken == 5
        assert result.vacaciones.days == Decimal("10")

    def test_currency_override(self):
        result = self.calculator.calculate(
            severance_input=_scenario_input(currency="USD"),
            reference_date=date(2026, 1, 6),
        )
        assert result.currency.code == "USD"


class TestDeterminismAndTracing:
    """Identical inputs give identical, traced results."""

    def test_same_input_same_result(self):
        calculator = SeveranceCalculator()
        first = calculator.calculate(
            severance_input=_scenario_input(), reference_date=date(2026, 1, 6)
        )
        second = calculator.calculate(
            severance_input=_scenario_input(), reference_date=date(2026, 1, 6)
        )
        assert first == second

    def test_trace_emitted_with_stable_fingerprint(self, caplog):
        calculator = SeveranceCalculator()
        with caplog.at_level(logging.INFO, logger="severance_kernel.engines.tracer"):
            for _ in range(2):
                calculator.calculate(
                    severance_input=_scenario_input(), reference_date=date(2026, 1, 6)
                )

        traces = [r for r in caplog.records if r.getMessage() == "SEVERANCE_ENGINE_TRACE"]
        assert len(traces) == 2
        assert traces[0].engine_name == "severance"
        assert len(traces[0].input_fingerprint) == 16
        assert traces[0].input_fingerprint == traces[1].input_fingerprint
