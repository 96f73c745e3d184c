"""
Severance Kernel

Shared foundation for the prestaciones calculation engines:
- Decimal-only money with explicit half-up rounding
- Injectable clock (engines never read the wall clock)
- Typed exceptions with machine-readable codes
- Structured JSON logging
"""

__version__ = "0.1.0"
