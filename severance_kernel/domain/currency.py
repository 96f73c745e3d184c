"""Currency -- ISO 4217 registry for the payroll currencies the engine settles in."""

from dataclasses import dataclass
from typing import ClassVar

from severance_kernel.exceptions import InvalidCurrencyError


@dataclass(frozen=True)
class CurrencyInfo:
    """Information about a single ISO 4217 currency."""

    code: str
    decimal_places: int
    name: str


class CurrencyRegistry:
    """Registry of supported ISO 4217 currencies with decimal places."""

    # Lempira payroll plus USD for dollar-denominated contracts
    _CURRENCIES: ClassVar[dict[str, CurrencyInfo]] = {
        "HNL": CurrencyInfo("HNL", 2, "Lempira hondureño"),
        "USD": CurrencyInfo("USD", 2, "Dólar estadounidense"),
    }

    @classmethod
    def get_info(cls, code: str) -> CurrencyInfo | None:
        """Get currency information, or None for unknown codes."""
        return cls._CURRENCIES.get(code)

    @classmethod
    def get_decimal_places(cls, code: str) -> int:
        """Get the number of decimal places for a currency.

        Raises:
            InvalidCurrencyError: If the code is not supported.
        """
        info = cls._CURRENCIES.get(code)
        if info is None:
            raise InvalidCurrencyError(code)
        return info.decimal_places

    @classmethod
    def validate(cls, code: str) -> str:
        """Validate and normalize a currency code.

        Returns:
            The uppercased, stripped code.

        Raises:
            InvalidCurrencyError: If the code is not supported.
        """
        normalized = code.upper().strip() if code else ""
        if normalized not in cls._CURRENCIES:
            raise InvalidCurrencyError(code)
        return normalized
