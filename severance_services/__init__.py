"""
severance_services -- orchestration over the pure severance engines.

Services own clock access, policy loading and caller-side precondition
checks; engines stay pure.
"""

from severance_services.severance_service import (
    SeveranceService,
    coerce_leave_request,
    coerce_salary_record,
)

__all__ = [
    "SeveranceService",
    "coerce_leave_request",
    "coerce_salary_record",
]
