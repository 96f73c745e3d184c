"""
severance_services.severance_service -- Severance calculation facade for HR callers.

Responsibility:
    Bridge HR records to the pure severance engines: freeze the reference
    date from an injected Clock, coerce raw leave and salary rows into
    engine types, keep only approved vacation requests, reject calls that
    violate caller-side preconditions, and bind the log context for the
    calculation.

Architecture position:
    Services -- orchestration over engines + kernel + config.
    The only layer that reads the clock (through ``Clock``) or loads
    configuration (through ``get_active_policy``).

Invariants enforced:
    - The engines never see a missing hire date or a termination date
      before the hire date; those raise typed PreconditionErrors here.
    - Every calculation runs with an explicit, frozen reference date.

Failure modes:
    - MissingHireDateError when ``hire_date`` is None.
    - TerminationBeforeHireError when termination precedes hire.
    - PolicyNotFoundError / InvalidPolicyError from policy loading.
    - ValueError / KeyError from malformed raw leave or salary rows.

Audit relevance:
    Each calculation logs ``severance_calculation_started`` and
    ``severance_calculation_completed`` with the employee id bound in
    LogContext, alongside the engine's SEVERANCE_ENGINE_TRACE.

Usage:
    from severance_kernel.domain.clock import SystemClock
    from severance_services import SeveranceService

    service = SeveranceService(SystemClock())
    result = service.calculate(
        employee_name="Ana Lopez",
        dni="0801-1990-12345",
        hire_date=date(2024, 2, 10),
        termination_date=date(2026, 1, 6),
        monthly_salary=Decimal("30000"),
        leave_requests=rows_from_hr_system,
    )
    document_payload = result.to_dict()
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any
from uuid import uuid4

from severance_config import get_active_policy
from severance_config.schema import SeverancePolicy
from severance_engines import (
    HolidayCalendar,
    HondurasHolidayCalendar,
    LeaveRequest,
    SalaryRecord,
    SeveranceCalculator,
    SeveranceInput,
    SeveranceResult,
    VacationBalance,
    build_salary_history,
    notice_days,
    vacation_balance,
)
from severance_engines.vacation import is_approved_vacation
from severance_kernel.domain.clock import Clock
from severance_kernel.exceptions import MissingHireDateError, TerminationBeforeHireError
from severance_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.severance")

LeaveRow = LeaveRequest | Mapping[str, Any]
SalaryRow = SalaryRecord | Mapping[str, Any]


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    raise ValueError(f"Cannot parse date from {value!r}")


def coerce_leave_request(row: LeaveRow) -> LeaveRequest:
    """Build a LeaveRequest from an HR row (``type`` or ``leave_type`` key)."""
    if isinstance(row, LeaveRequest):
        return row
    leave_type = row["leave_type"] if "leave_type" in row else row["type"]
    return LeaveRequest(
        start_date=_parse_date(row["start_date"]),
        end_date=_parse_date(row["end_date"]),
        leave_type=str(leave_type),
        status=str(row["status"]),
    )


def coerce_salary_record(row: SalaryRow) -> SalaryRecord:
    if isinstance(row, SalaryRecord):
        return row
    base = row["base_amount"] if "base_amount" in row else row["amount"]
    return SalaryRecord(
        month=str(row["month"]),
        year=int(row["year"]),
        base_amount=Decimal(str(base)),
        overtime_amount=Decimal(str(row.get("overtime_amount", 0))),
    )


class SeveranceService:
    """
    Severance calculations for HR callers.

    Contract:
        Receives a Clock via constructor injection; the policy defaults to
        the active Honduras policy and the calendar to the national
        holiday calendar.
    Guarantees:
        - ``calculate`` either raises a PreconditionError or returns a
          complete ``SeveranceResult``.
        - Leave rows that are not approved vacation never reach the engine.
    Non-goals:
        - Does not load employee, contract or leave records; callers pass
          them in.
        - Does not authorize the caller.
    """

    def __init__(
        self,
        clock: Clock,
        policy: SeverancePolicy | None = None,
        calendar: HolidayCalendar | None = None,
    ):
        self._clock = clock
        self._policy = policy or get_active_policy()
        self._calendar = calendar or HondurasHolidayCalendar()
        self._calculator = SeveranceCalculator(self._policy, self._calendar)

    @property
    def policy(self) -> SeverancePolicy:
        return self._policy

    def _reference_date(self, reference_date: date | None) -> date:
        return reference_date if reference_date is not None else self._clock.today()

    def approved_vacations(self, leave_requests: Iterable[LeaveRow]) -> tuple[LeaveRequest, ...]:
        """Coerce rows and keep only approved vacation requests."""
        requests = [coerce_leave_request(row) for row in leave_requests]
        approved = tuple(r for r in requests if is_approved_vacation(r, self._policy))
        logger.debug(
            "leave_requests_filtered",
            extra={"received": len(requests), "approved_vacations": len(approved)},
        )
        return approved

    def calculate(
        self,
        *,
        employee_name: str,
        dni: str,
        hire_date: date | None,
        termination_date: date,
        termination_reason: str = "",
        salary_history: Iterable[SalaryRow] = (),
        monthly_salary: Decimal | int | str | None = None,
        leave_requests: Iterable[LeaveRow] = (),
        last_anniversary_date: date | None = None,
        reference_date: date | None = None,
    ) -> SeveranceResult:
        """
        Validate, build a SeveranceInput and run the engine.

        ``reference_date`` defaults to the clock's current date; it drives
        the preaviso tier.

        Raises:
            MissingHireDateError: If ``hire_date`` is None.
            TerminationBeforeHireError: If termination precedes hire.
        """
        if hire_date is None:
            logger.warning("severance_rejected_missing_hire_date", extra={"dni": dni})
            raise MissingHireDateError(dni)
        if termination_date < hire_date:
            logger.warning(
                "severance_rejected_termination_before_hire",
                extra={"dni": dni, "hire_date": hire_date, "termination_date": termination_date},
            )
            raise TerminationBeforeHireError(hire_date, termination_date)

        frozen_reference = self._reference_date(reference_date)
        severance_input = SeveranceInput(
            employee_name=employee_name,
            dni=dni,
            hire_date=hire_date,
            termination_date=termination_date,
            termination_reason=termination_reason,
            salary_history=tuple(coerce_salary_record(r) for r in salary_history),
            approved_vacations=self.approved_vacations(leave_requests),
            last_anniversary_date=last_anniversary_date,
            monthly_salary=Decimal(str(monthly_salary)) if monthly_salary is not None else None,
            currency=self._policy.currency,
        )
        return self.calculate_input(severance_input, reference_date=frozen_reference)

    def calculate_input(
        self,
        severance_input: SeveranceInput,
        reference_date: date | None = None,
    ) -> SeveranceResult:
        """Run the engine for an already-built SeveranceInput."""
        frozen_reference = self._reference_date(reference_date)
        with LogContext.bind(employee_id=severance_input.dni, calculation_id=str(uuid4())):
            logger.info(
                "severance_calculation_started",
                extra={
                    "hire_date": severance_input.hire_date,
                    "termination_date": severance_input.termination_date,
                    "reference_date": frozen_reference,
                },
            )
            result = self._calculator.calculate(
                severance_input=severance_input,
                reference_date=frozen_reference,
            )
            logger.info(
                "severance_calculation_completed",
                extra={
                    "total_benefits": str(result.total_benefits.amount),
                    "currency": result.currency.code,
                },
            )
        return result

    def salary_history_from_contract(
        self,
        monthly_salary: Decimal | int | str | None,
        end_date: date | None = None,
        months: int = 6,
    ) -> tuple[SalaryRecord, ...]:
        """Flat history from the current contract salary; zeros when there is no contract."""
        amount = monthly_salary if monthly_salary is not None else Decimal("0")
        return build_salary_history(amount, self._reference_date(end_date), months)

    def vacation_balance(
        self,
        hire_date: date | None,
        leave_requests: Iterable[LeaveRow] = (),
        reference_date: date | None = None,
        employee_id: str | None = None,
    ) -> VacationBalance:
        """
        Vacation entitlement and days taken in the current anniversary year.

        Raises:
            MissingHireDateError: If ``hire_date`` is None.
        """
        if hire_date is None:
            raise MissingHireDateError(employee_id)
        return vacation_balance(
            hire_date,
            self._reference_date(reference_date),
            self.approved_vacations(leave_requests),
            self._calendar,
            self._policy,
        )

    def preaviso_termination_date(
        self,
        hire_date: date | None,
        reference_date: date | None = None,
        employee_id: str | None = None,
    ) -> date:
        """
        Last day of the notice period if notice is given on the reference date.

        Raises:
            MissingHireDateError: If ``hire_date`` is None.
        """
        if hire_date is None:
            raise MissingHireDateError(employee_id)
        reference = self._reference_date(reference_date)
        return reference + timedelta(days=notice_days(hire_date, reference, self._policy))
