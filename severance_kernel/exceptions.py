"""
Typed Exception Hierarchy for the Severance Kernel.

Every error has a typed exception class (catch by type, not message), a
``code`` class attribute (machine-readable, API-safe), and structured
attributes carrying the data that caused it.

Example:
    try:
        service.calculate(hire_date=None, ...)
    except MissingHireDateError as e:
        api_response(code=e.code, employee=e.employee_id)

Hierarchy:

    SeveranceKernelError (base)
    |
    +-- PreconditionError
    |   +-- MissingHireDateError
    |   +-- TerminationBeforeHireError
    |
    +-- CurrencyError
    |   +-- InvalidCurrencyError
    |   +-- CurrencyMismatchError
    |
    +-- PolicyError
        +-- PolicyNotFoundError
        +-- InvalidPolicyError

The calculation engines never raise PreconditionError themselves: they
degrade to zero periods.  Precondition errors are raised by the service
layer, which owns input validation.
"""

from __future__ import annotations

from datetime import date


class SeveranceKernelError(Exception):
    """
    Base exception for all severance kernel errors.

    All subclasses must have a ``code`` class attribute for
    machine-readable error identification.
    """

    code: str = "SEVERANCE_KERNEL_ERROR"


# Precondition exceptions (raised by the calling layer, never by engines)


class PreconditionError(SeveranceKernelError):
    """Base exception for caller-side precondition violations."""

    code: str = "PRECONDITION_ERROR"


class MissingHireDateError(PreconditionError):
    """A calculation was requested for an employee without a hire date."""

    code: str = "MISSING_HIRE_DATE"

    def __init__(self, employee_id: str | None):
        self.employee_id = employee_id
        super().__init__(
            f"Hire date is required to calculate benefits for employee "
            f"'{employee_id or '<unknown>'}'"
        )


class TerminationBeforeHireError(PreconditionError):
    """Termination date precedes the hire date."""

    code: str = "TERMINATION_BEFORE_HIRE"

    def __init__(self, hire_date: date, termination_date: date):
        self.hire_date = hire_date
        self.termination_date = termination_date
        super().__init__(
            f"Termination date {termination_date.isoformat()} is before "
            f"hire date {hire_date.isoformat()}"
        )


# Currency exceptions


class CurrencyError(SeveranceKernelError):
    """Base exception for currency-related errors."""

    code: str = "CURRENCY_ERROR"


class InvalidCurrencyError(CurrencyError):
    """Unknown or unsupported ISO 4217 currency code."""

    code: str = "INVALID_CURRENCY"

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"Invalid ISO 4217 currency code: '{currency}'")


class CurrencyMismatchError(CurrencyError):
    """Attempted arithmetic on amounts in different currencies."""

    code: str = "CURRENCY_MISMATCH"

    def __init__(self, currency1: str, currency2: str):
        self.currency1 = currency1
        self.currency2 = currency2
        super().__init__(f"Currency mismatch: {currency1} vs {currency2}")


# Policy exceptions


class PolicyError(SeveranceKernelError):
    """Base exception for legal policy configuration errors."""

    code: str = "POLICY_ERROR"


class PolicyNotFoundError(PolicyError):
    """No policy file exists for the requested jurisdiction."""

    code: str = "POLICY_NOT_FOUND"

    def __init__(self, jurisdiction: str, path: str):
        self.jurisdiction = jurisdiction
        self.path = path
        super().__init__(
            f"No severance policy for jurisdiction '{jurisdiction}' at {path}"
        )


class InvalidPolicyError(PolicyError):
    """A policy file could not be parsed or failed validation."""

    code: str = "INVALID_POLICY"

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid severance policy '{source}': {reason}")
