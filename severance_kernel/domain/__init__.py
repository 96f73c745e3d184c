"""
Pure domain layer.

This module contains value objects and the clock abstraction with NO
dependencies on I/O or configuration.  All domain objects are immutable
and deterministic.
"""

from severance_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from severance_kernel.domain.currency import CurrencyInfo, CurrencyRegistry
from severance_kernel.domain.values import Currency, Money, round_half_up

__all__ = [
    "Clock",
    "Currency",
    "CurrencyInfo",
    "CurrencyRegistry",
    "DeterministicClock",
    "Money",
    "SystemClock",
    "round_half_up",
]
