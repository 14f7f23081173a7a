"""Transaction and Unit domain models."""

import datetime as dt
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from pfledger.config.settings import get_settings
from pfledger.core.exceptions import ValidationError
from pfledger.core.timezone import now_eastern, today_eastern
from pfledger.domain.models.enums import (
    AccountTransactionType,
    PortfolioTransactionType,
    UnitType,
)
from pfledger.domain.models.money import Money
from pfledger.domain.models.security import Security


def _default_currency() -> str:
    return get_settings().default_currency_code


@dataclass(frozen=True, eq=False)
class Unit:
    """
    Typed line item of a transaction (gross value, fee or tax).

    The amount is in the transaction currency. For cross-currency cases the
    original amount is kept as forex together with the exchange rate used.
    Units compare by identity: two equal fees are still two line items.
    """

    type: UnitType
    amount: Money
    forex: Optional[Money] = None
    exchange_rate: Optional[Decimal] = None

    def __post_init__(self) -> None:
        if isinstance(self.type, str):
            object.__setattr__(self, "type", UnitType(self.type))
        if self.amount.is_negative():
            raise ValidationError(f"{self.type.value} unit amount cannot be negative")

        if self.forex is None:
            if self.exchange_rate is not None:
                raise ValidationError("Exchange rate given without forex amount")
            return

        if self.forex.currency_code == self.amount.currency_code:
            raise ValidationError(
                f"Forex amount must differ in currency from {self.amount.currency_code}"
            )
        if self.exchange_rate is None:
            raise ValidationError(
                f"Unit in {self.amount.currency_code} with forex in "
                f"{self.forex.currency_code} requires an exchange rate"
            )
        if self.exchange_rate <= 0:
            raise ValidationError("Exchange rate must be positive")


@dataclass(eq=False)
class Transaction:
    """
    Ledger record shared by account and portfolio transactions.

    Setters only validate their own field. Keeping a paired transaction in
    sync is the job of the cross entry, never of the transaction.
    """

    date: dt.date = field(default_factory=today_eastern)
    currency_code: str = field(default_factory=_default_currency)
    amount: int = 0
    security: Optional[Security] = None
    note: Optional[str] = None
    txn_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    updated_at: Optional[dt.datetime] = field(default=None)
    _units: list[Unit] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self._check_amount(self.amount)
        if self.updated_at is None:
            self.updated_at = now_eastern()

    @staticmethod
    def _check_amount(amount: int) -> None:
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValidationError(f"Amount must be an integer, got {amount!r}")
        if amount < 0:
            raise ValidationError("Amount cannot be negative")

    def _touch(self) -> None:
        self.updated_at = now_eastern()

    def set_date(self, value: dt.date) -> None:
        self.date = value
        self._touch()

    def set_amount(self, amount: int) -> None:
        self._check_amount(amount)
        self.amount = amount
        self._touch()

    def set_currency_code(self, currency_code: str) -> None:
        if not currency_code:
            raise ValidationError("Currency code is required")
        for unit in self._units:
            if unit.amount.currency_code != currency_code:
                raise ValidationError(
                    f"Unit in {unit.amount.currency_code} cannot follow a change "
                    f"of currency to {currency_code}"
                )
        self.currency_code = currency_code
        self._touch()

    def set_security(self, security: Optional[Security]) -> None:
        self.security = security
        self._touch()

    def set_note(self, note: Optional[str]) -> None:
        self.note = note
        self._touch()

    def get_monetary_amount(self) -> Money:
        return Money(self.amount, self.currency_code)

    @property
    def units(self) -> tuple[Unit, ...]:
        return tuple(self._units)

    def add_unit(self, unit: Unit) -> None:
        """Attach a line item; it must be in the transaction currency."""
        if unit.amount.currency_code != self.currency_code:
            raise ValidationError(
                f"Unit currency {unit.amount.currency_code} does not match "
                f"transaction currency {self.currency_code}"
            )
        if any(u is unit for u in self._units):
            raise ValidationError("Unit is already attached to this transaction")
        self._units.append(unit)
        self._touch()

    def remove_unit(self, unit: Unit) -> None:
        for index, existing in enumerate(self._units):
            if existing is unit:
                del self._units[index]
                self._touch()
                return
        raise ValidationError("Unit is not attached to this transaction")

    def clear_units(self) -> None:
        self._units.clear()
        self._touch()

    def get_unit(self, unit_type: UnitType) -> Optional[Unit]:
        """Return the first unit of the given type, if any."""
        return next((u for u in self._units if u.type == unit_type), None)

    def get_unit_sum(self, unit_type: UnitType) -> Money:
        """Sum all units of a type; zero in the transaction currency if none."""
        total = Money.zero(self.currency_code)
        for unit in self._units:
            if unit.type == unit_type:
                total = total.add(unit.amount)
        return total


@dataclass(eq=False)
class AccountTransaction(Transaction):
    """Transaction held by a cash account. Security is optional."""

    type: AccountTransactionType = AccountTransactionType.DEPOSIT

    def __post_init__(self) -> None:
        super().__post_init__()
        if isinstance(self.type, str):
            self.type = AccountTransactionType(self.type)

    def set_type(self, txn_type: AccountTransactionType) -> None:
        self.type = AccountTransactionType(txn_type)
        self._touch()


@dataclass(eq=False)
class PortfolioTransaction(Transaction):
    """
    Transaction held by a security portfolio.

    amount is the gross value of the shares. The cash actually moved (net
    amount) is derived from it and the FEE/TAX units on every call:
    - purchases: gross + fees + taxes
    - liquidations: gross - fees - taxes
    """

    type: PortfolioTransactionType = PortfolioTransactionType.BUY
    shares: int = 0

    def __post_init__(self) -> None:
        super().__post_init__()
        if isinstance(self.type, str):
            self.type = PortfolioTransactionType(self.type)
        self._check_shares(self.shares)

    @staticmethod
    def _check_shares(shares: int) -> None:
        if isinstance(shares, bool) or not isinstance(shares, int):
            raise ValidationError(f"Shares must be an integer, got {shares!r}")
        if shares < 0:
            raise ValidationError("Shares cannot be negative")

    def set_type(self, txn_type: PortfolioTransactionType) -> None:
        self.type = PortfolioTransactionType(txn_type)
        self._touch()

    def set_shares(self, shares: int) -> None:
        self._check_shares(shares)
        self.shares = shares
        self._touch()

    def get_fees_and_taxes(self) -> Money:
        return self.get_unit_sum(UnitType.FEE).add(self.get_unit_sum(UnitType.TAX))

    def get_net_amount(self) -> Money:
        """Cash moved by this transaction."""
        gross = self.get_monetary_amount()
        if self.type.is_purchase:
            return gross.add(self.get_fees_and_taxes())
        return gross.subtract(self.get_fees_and_taxes())

    def gross_from_net(
        self,
        net_amount: int,
        txn_type: Optional[PortfolioTransactionType] = None,
    ) -> int:
        """Inverse of get_net_amount for the current units (and type, unless given)."""
        txn_type = PortfolioTransactionType(txn_type or self.type)
        charges = self.get_fees_and_taxes().amount
        gross = net_amount - charges if txn_type.is_purchase else net_amount + charges
        if gross < 0:
            raise ValidationError(
                f"Net amount {net_amount} does not cover fees and taxes of {charges}"
            )
        return gross
