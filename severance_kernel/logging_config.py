"""
severance_kernel.logging_config -- JSON-lines logging for severance calculations.

Responsibility:
    One JSON object per log record under the ``severance_kernel`` logger
    namespace, stamped with the employee and calculation being processed.

Architecture position:
    Kernel -- imported by every layer; imports nothing from the project.

Invariants enforced:
    - Only ``employee_id`` and ``calculation_id`` are context fields; the
      service binds both for the duration of a calculation and the
      previous values come back on exit.
    - Dates render as ISO strings and Decimals as their exact string form,
      so logged amounts match the settlement document.

Usage:
    configure_logging()
    with LogContext.bind(employee_id=dni, calculation_id=str(uuid4())):
        get_logger("services.severance").info("severance_calculation_started")
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from typing import Any

__all__ = [
    "LogContext",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
    "reset_logging",
]

ROOT_LOGGER = "severance_kernel"

_employee_id: ContextVar[str | None] = ContextVar("severance_employee_id", default=None)
_calculation_id: ContextVar[str | None] = ContextVar("severance_calculation_id", default=None)

_FIELDS: dict[str, ContextVar[str | None]] = {
    "employee_id": _employee_id,
    "calculation_id": _calculation_id,
}


class LogContext:
    """Employee and calculation ids attached to every record in the current context."""

    @staticmethod
    def set(employee_id: str | None = None, calculation_id: str | None = None) -> None:
        if employee_id is not None:
            _employee_id.set(employee_id)
        if calculation_id is not None:
            _calculation_id.set(calculation_id)

    @staticmethod
    def get_all() -> dict[str, str]:
        return {name: var.get() for name, var in _FIELDS.items() if var.get() is not None}

    @staticmethod
    def clear() -> None:
        for var in _FIELDS.values():
            var.set(None)

    @staticmethod
    @contextmanager
    def bind(
        employee_id: str | None = None,
        calculation_id: str | None = None,
    ) -> Iterator[None]:
        """Set the given ids for the duration of the ``with`` block."""
        values = {"employee_id": employee_id, "calculation_id": calculation_id}
        tokens = [
            (_FIELDS[name], _FIELDS[name].set(value))
            for name, value in values.items()
            if value is not None
        ]
        try:
            yield
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _json_default(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _error_payload(exc: BaseException) -> dict[str, Any]:
    error: dict[str, Any] = {"type": type(exc).__name__, "message": str(exc)}
    code = getattr(exc, "code", None)
    if code is not None:
        error["code"] = code
    error.update({k: v for k, v in vars(exc).items() if not k.startswith("_")})
    return error


class StructuredFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
            **LogContext.get_all(),
        }
        payload.update(
            (key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS
        )
        if record.exc_info and record.exc_info[1] is not None:
            payload["error"] = _error_payload(record.exc_info[1])
            payload["traceback"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_json_default, ensure_ascii=False)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """Attach one JSON handler to the ``severance_kernel`` logger; later calls are no-ops."""
    root = logging.getLogger(ROOT_LOGGER)
    if any(isinstance(h.formatter, StructuredFormatter) for h in root.handlers):
        return
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False


def reset_logging() -> None:
    """Drop handlers and restore propagation (tests)."""
    root = logging.getLogger(ROOT_LOGGER)
    root.handlers.clear()
    root.setLevel(logging.WARNING)
    root.propagate = True
