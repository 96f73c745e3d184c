"""
Values -- Immutable, self-validating domain value objects.

Responsibility:
    Provides the monetary value types used by every benefit calculation:
    Currency and Money, plus the single rounding primitive
    (``round_half_up``) shared by day-count and amount rounding.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    No outward dependencies except severance_kernel.domain.currency.

Invariants enforced:
    - Monetary amounts are Decimal, never float.
    - Currency codes are validated at construction time.
    - Rounding is round-half-away-from-zero (``ROUND_HALF_UP`` on Decimal)
      at the currency's decimal places.

Failure modes:
    - InvalidCurrencyError on construction with an unsupported currency.
    - ValueError on construction with an amount not convertible to Decimal.
    - CurrencyMismatchError when arithmetic mixes different currencies.

Audit relevance:
    Payroll documents display the same rounded figures these objects hold;
    no downstream consumer re-rounds or re-derives an amount.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from severance_kernel.domain.currency import CurrencyRegistry
from severance_kernel.exceptions import CurrencyMismatchError

TWO_PLACES = 2


def round_half_up(value: Decimal, places: int = TWO_PLACES) -> Decimal:
    """
    Round a Decimal to ``places`` digits, halves away from zero.

    Decimal arithmetic carries no binary representation error, so no
    epsilon nudge is required before quantizing.
    """
    exponent = Decimal(1).scaleb(-places)
    return value.quantize(exponent, rounding=ROUND_HALF_UP)


@dataclass(frozen=True, slots=True)
class Currency:
    """
    ISO 4217 currency code value object.

    Contract:
        Wraps a three-letter code, validated and normalized (uppercased)
        on construction.

    Guarantees:
        - Immutable and hashable.
        - code is always a supported code per CurrencyRegistry.
    """

    code: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", CurrencyRegistry.validate(self.code))

    @property
    def decimal_places(self) -> int:
        return CurrencyRegistry.get_decimal_places(self.code)

    @property
    def name(self) -> str:
        info = CurrencyRegistry.get_info(self.code)
        return info.name if info else self.code

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"Currency({self.code!r})"


@dataclass(frozen=True, slots=True)
class Money:
    """
    Monetary amount value object.

    Contract:
        Pairs a Decimal amount with its Currency.

    Guarantees:
        - Immutable and hashable.
        - amount is always a Decimal (never float).
        - Addition enforces the same-currency constraint.

    Non-goals:
        - Does NOT auto-round -- callers must explicitly call .round().
        - Does NOT convert between currencies.
    """

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            if isinstance(self.amount, float):
                raise ValueError(f"Money amount must not be float: {self.amount!r}")
            try:
                object.__setattr__(self, "amount", Decimal(str(self.amount)))
            except (InvalidOperation, ValueError) as e:
                raise ValueError(f"Invalid amount: {self.amount}") from e

        if isinstance(self.currency, str):
            object.__setattr__(self, "currency", Currency(self.currency))
        elif not isinstance(self.currency, Currency):
            raise TypeError(f"currency must be Currency or str, got {type(self.currency)}")

    @classmethod
    def of(cls, amount: Decimal | str | int, currency: str | Currency) -> Money:
        """
        Factory method for creating Money.

        Raises:
            ValueError: If amount cannot be converted to Decimal.
            InvalidCurrencyError: If the currency is not supported.
        """
        if isinstance(amount, (str, int)):
            amount = Decimal(str(amount))
        if isinstance(currency, str):
            currency = Currency(currency)
        return cls(amount=amount, currency=currency)

    @classmethod
    def zero(cls, currency: str | Currency) -> Money:
        """Create a zero amount in the given currency."""
        return cls.of(Decimal("0"), currency)

    @property
    def is_zero(self) -> bool:
        return self.amount == Decimal("0")

    def round(self) -> Money:
        """Return a new Money rounded half-up to the currency's decimal places."""
        return Money(
            amount=round_half_up(self.amount, self.currency.decimal_places),
            currency=self.currency,
        )

    def _check_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency.code, other.currency.code)

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other)
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def __repr__(self) -> str:
        return f"Money({self.amount!r}, {self.currency.code!r})"
