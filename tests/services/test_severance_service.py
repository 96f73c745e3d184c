"""
Tests for SeveranceService.

Covers:
- Precondition errors raised before the engine runs
- Leave row coercion and approval filtering
- Reference date frozen from the injected clock
- Vacation balance and preaviso end-date queries
- Log context bound for the duration of a calculation
"""

import logging
from datetime import date, timedelta
from decimal import Decimal

import pytest

from severance_config.schema import DEFAULT_POLICY
from severance_engines.salary import SalaryRecord
from severance_engines.vacation import LeaveRequest
from severance_kernel.domain.clock import DeterministicClock
from severance_kernel.exceptions import (
    MissingHireDateError,
    PreconditionError,
    TerminationBeforeHireError,
)
from severance_kernel.logging_config import LogContext
from severance_services import SeveranceService, coerce_leave_request, coerce_salary_record

HIRE = date(2024, 2, 10)
TERMINATION = date(2026, 1, 6)

LEAVE_ROWS = [
    {"start_date": "2025-06-02", "end_date": "2025-06-06", "type": "Vacation", "status": "Approved"},
    {"start_date": "2025-07-07", "end_date": "2025-07-11", "type": "Vacation", "status": "Pending"},
    {"start_date": "2025-08-04", "end_date": "2025-08-08", "type": "Sick", "status": "Approved"},
]


class _ContextCapture(logging.Handler):
    """Records the LogContext active when each record is emitted."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.seen = []

    def emit(self, record):
        self.seen.append((record.getMessage(), LogContext.get_all()))


class TestRowCoercion:
    """Tests for HR row coercion."""

    def test_leave_row_with_type_key(self):
        request = coerce_leave_request(LEAVE_ROWS[0])

        assert request == LeaveRequest(date(2025, 6, 2), date(2025, 6, 6), "Vacation", "Approved")

    def test_leave_row_with_leave_type_key_and_timestamps(self):
        request = coerce_leave_request(
            {
                "start_date": "2025-06-02T00:00:00Z",
                "end_date": date(2025, 6, 3),
                "leave_type": "Vacation",
                "status": "Approved",
            }
        )
        assert request.start_date == date(2025, 6, 2)

    def test_leave_request_passes_through(self):
        request = LeaveRequest(date(2025, 6, 2), date(2025, 6, 3), "Vacation", "Approved")
        assert coerce_leave_request(request) is request

    def test_unparseable_date(self):
        with pytest.raises(ValueError):
            coerce_leave_request(
                {"start_date": 20250602, "end_date": "2025-06-03", "type": "Vacation", "status": "Approved"}
            )

    def test_salary_row(self):
        record = coerce_salary_record({"month": "enero", "year": "2026", "amount": "30000.50"})

        assert record == SalaryRecord("enero", 2026, Decimal("30000.50"))

    def test_salary_row_with_overtime(self):
        record = coerce_salary_record(
            {"month": "enero", "year": 2026, "base_amount": 30000, "overtime_amount": "1200"}
        )
        assert record.total_amount == Decimal("31200")


class TestPreconditions:
    """Precondition violations raise before any calculation."""

    def setup_method(self):
        self.service = SeveranceService(DeterministicClock(TERMINATION))

    def test_missing_hire_date(self):
        with pytest.raises(MissingHireDateError) as exc_info:
            self.service.calculate(
                employee_name="Ana Lopez",
                dni="0801-1990-12345",
                hire_date=None,
                termination_date=TERMINATION,
            )

        assert exc_info.value.code == "MISSING_HIRE_DATE"
        assert exc_info.value.employee_id == "0801-1990-12345"

    def test_termination_before_hire(self):
        with pytest.raises(TerminationBeforeHireError) as exc_info:
            self.service.calculate(
                employee_name="Ana Lopez",
                dni="0801-1990-12345",
                hire_date=TERMINATION,
                termination_date=HIRE,
            )

        assert isinstance(exc_info.value, PreconditionError)
        assert exc_info.value.hire_date == TERMINATION

    def test_same_day_termination_allowed(self):
        result = self.service.calculate(
            employee_name="Ana Lopez",
            dni="0801-1990-12345",
            hire_date=TERMINATION,
            termination_date=TERMINATION,
            monthly_salary=Decimal("30000"),
        )
        assert result.decimo_tercer_mes.days == Decimal("0.50")
        assert result.total_benefits.amount == Decimal("500.00")

    def test_vacation_balance_requires_hire_date(self):
        with pytest.raises(MissingHireDateError):
            self.service.vacation_balance(None, employee_id="E-1")

    def test_preaviso_requires_hire_date(self):
        with pytest.raises(MissingHireDateError):
            self.service.preaviso_termination_date(None)


class TestCalculate:
    """Full calculations through the service."""

    def setup_method(self):
        self.clock = DeterministicClock(TERMINATION)
        self.service = SeveranceService(self.clock, policy=DEFAULT_POLICY)

    def _calculate(self, **overrides):
        fields = dict(
            employee_name="Ana Lopez",
            dni="0801-1990-12345",
            hire_date=HIRE,
            termination_date=TERMINATION,
            termination_reason="Despido",
            monthly_salary="30000",
            leave_requests=LEAVE_ROWS,
        )
        fields.update(overrides)
        return self.service.calculate(**fields)

    def test_total(self):
        result = self._calculate()

        assert result.total_benefits.amount == Decimal("126581.67")
        assert result.currency.code == "HNL"

    def test_only_approved_vacation_counted(self):
        result = self._calculate()
        assert result.context.vacation_balance.taken == 5

    def test_reference_date_from_clock(self):
        result = self._calculate()
        assert result.context.reference_date == TERMINATION

    def test_later_clock_changes_preaviso_only(self):
        service = SeveranceService(DeterministicClock(date(2026, 2, 10)), policy=DEFAULT_POLICY)
        result = service.calculate(
            employee_name="Ana Lopez",
            dni="0801-1990-12345",
            hire_date=HIRE,
            termination_date=TERMINATION,
            monthly_salary="30000",
        )

        assert result.preaviso.days == Decimal("60")
        assert result.cesantia.days == Decimal("30")

    def test_explicit_reference_date_wins(self):
        result = self._calculate(reference_date=date(2026, 2, 10))
        assert result.preaviso.days == Decimal("60")

    def test_salary_history_rows(self):
        rows = [{"month": "enero", "year": 2026, "amount": "30000"}]
        result = self._calculate(monthly_salary=None, salary_history=rows)

        assert result.total_benefits.amount == Decimal("126581.67")

    def test_log_context_bound_during_calculation(self):
        capture = _ContextCapture()
        logger = logging.getLogger("severance_kernel")
        logger.addHandler(capture)
        logger.setLevel(logging.DEBUG)
        try:
            self._calculate()
        finally:
            logger.removeHandler(capture)

        messages = dict(capture.seen)
        assert messages["severance_calculation_started"]["employee_id"] == "0801-1990-12345"
        assert "calculation_id" in messages["severance_calculation_completed"]
        assert messages["SEVERANCE_ENGINE_TRACE"]["employee_id"] == "0801-1990-12345"
        assert LogContext.get_all() == {}


class TestQueries:
    """Tests for balance and date queries."""

    def setup_method(self):
        self.service = SeveranceService(DeterministicClock(TERMINATION), policy=DEFAULT_POLICY)

    def test_vacation_balance(self):
        balance = self.service.vacation_balance(HIRE, LEAVE_ROWS)

        assert balance.entitlement.per_cycle_days == 12
        assert balance.taken == 5
        assert balance.available == 7

    def test_preaviso_termination_date(self):
        assert self.service.preaviso_termination_date(HIRE) == TERMINATION + timedelta(days=30)

    def test_preaviso_in_first_three_months(self):
        assert self.service.preaviso_termination_date(date(2025, 12, 1)) == TERMINATION

    def test_salary_history_from_contract(self):
        history = self.service.salary_history_from_contract(Decimal("30000"))

        assert len(history) == 6
        assert history[-1].month == "enero"
        assert history[-1].year == 2026

    def test_salary_history_without_contract(self):
        history = self.service.salary_history_from_contract(None, months=3)

        assert [r.base_amount for r in history] == [Decimal("0")] * 3

    def test_default_policy_loaded_from_config(self):
        service = SeveranceService(DeterministicClock(TERMINATION))

        assert service.policy.jurisdiction == "HN"
        assert service.policy.checksum
