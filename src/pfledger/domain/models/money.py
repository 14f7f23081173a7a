"""Money value type and fixed-point scales."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Union

from pfledger.core.exceptions import CurrencyMismatchError, ValidationError


class CurrencyUnit:
    """ISO 4217 codes used across the ledger."""

    EUR = "EUR"
    USD = "USD"
    CHF = "CHF"
    GBP = "GBP"


@dataclass(frozen=True)
class Value:
    """
    A fixed-point scale.

    Amounts and share counts are stored as integers; a Value converts
    between the stored integer and its decimal meaning.
    """

    decimals: int

    @property
    def factor(self) -> int:
        return 10**self.decimals

    def factorize(self, value: Union[Decimal, int, str]) -> int:
        """Scale a decimal value to its stored integer (banker's rounding)."""
        scaled = Decimal(value) * self.factor
        return int(scaled.quantize(Decimal("1"), rounding=ROUND_HALF_EVEN))

    def to_decimal(self, value: int) -> Decimal:
        """Convert a stored integer back to its decimal value."""
        return Decimal(value) / Decimal(self.factor)


class Values:
    """Scales for the integer fields of the ledger."""

    Amount = Value(decimals=2)
    Share = Value(decimals=6)
    ExchangeRate = Value(decimals=10)


@dataclass(frozen=True)
class Money:
    """
    Immutable (amount, currency) pair.

    amount is an integer in minor units (see Values.Amount).
    Arithmetic requires both operands to share a currency.
    """

    amount: int
    currency_code: str

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValidationError(f"Money amount must be an integer, got {self.amount!r}")
        if not self.currency_code:
            raise ValidationError("Money requires a currency code")

    @classmethod
    def of(cls, currency_code: str, amount: int) -> "Money":
        return cls(amount=amount, currency_code=currency_code)

    @classmethod
    def zero(cls, currency_code: str) -> "Money":
        return cls(amount=0, currency_code=currency_code)

    def _check_currency(self, other: "Money") -> None:
        if other.currency_code != self.currency_code:
            raise CurrencyMismatchError(self.currency_code, other.currency_code)

    def add(self, other: "Money") -> "Money":
        self._check_currency(other)
        return Money(self.amount + other.amount, self.currency_code)

    def subtract(self, other: "Money") -> "Money":
        self._check_currency(other)
        return Money(self.amount - other.amount, self.currency_code)

    def multiply(self, factor: int) -> "Money":
        return Money(self.amount * factor, self.currency_code)

    def absolute(self) -> "Money":
        return Money(abs(self.amount), self.currency_code)

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def __add__(self, other: "Money") -> "Money":
        return self.add(other)

    def __sub__(self, other: "Money") -> "Money":
        return self.subtract(other)

    def __neg__(self) -> "Money":
        return Money(-self.amount, self.currency_code)

    def __str__(self) -> str:
        return f"{self.currency_code} {Values.Amount.to_decimal(self.amount):.2f}"
