"""Enumerations for domain models."""

from enum import Enum


class AccountTransactionType(str, Enum):
    """Types of cash account transactions."""

    DEPOSIT = "DEPOSIT"
    REMOVAL = "REMOVAL"
    INTEREST = "INTEREST"
    INTEREST_CHARGE = "INTEREST_CHARGE"
    DIVIDENDS = "DIVIDENDS"
    FEES = "FEES"
    FEES_REFUND = "FEES_REFUND"
    TAXES = "TAXES"
    TAX_REFUND = "TAX_REFUND"
    TRANSFER_IN = "TRANSFER_IN"
    TRANSFER_OUT = "TRANSFER_OUT"
    BUY = "BUY"
    SELL = "SELL"

    @property
    def is_debit(self) -> bool:
        """Return True if cash leaves the account."""
        return self in _ACCOUNT_DEBITS

    @property
    def is_credit(self) -> bool:
        """Return True if cash enters the account."""
        return not self.is_debit

    @property
    def is_cross(self) -> bool:
        """Return True if a transaction of this type is always one half of a pair."""
        return self in _ACCOUNT_CROSS_TYPES


_ACCOUNT_DEBITS = frozenset(
    {
        AccountTransactionType.REMOVAL,
        AccountTransactionType.INTEREST_CHARGE,
        AccountTransactionType.FEES,
        AccountTransactionType.TAXES,
        AccountTransactionType.TRANSFER_OUT,
        AccountTransactionType.BUY,
    }
)

_ACCOUNT_CROSS_TYPES = frozenset(
    {
        AccountTransactionType.TRANSFER_IN,
        AccountTransactionType.TRANSFER_OUT,
        AccountTransactionType.BUY,
        AccountTransactionType.SELL,
    }
)


class PortfolioTransactionType(str, Enum):
    """Types of security portfolio transactions."""

    BUY = "BUY"
    SELL = "SELL"
    TRANSFER_IN = "TRANSFER_IN"
    TRANSFER_OUT = "TRANSFER_OUT"
    DELIVERY_INBOUND = "DELIVERY_INBOUND"
    DELIVERY_OUTBOUND = "DELIVERY_OUTBOUND"

    @property
    def is_purchase(self) -> bool:
        """Return True if shares enter the portfolio."""
        return self in _PORTFOLIO_PURCHASES

    @property
    def is_liquidation(self) -> bool:
        """Return True if shares leave the portfolio."""
        return not self.is_purchase

    @property
    def is_cross(self) -> bool:
        """Return True if a transaction of this type is always one half of a pair."""
        # Deliveries move shares without a counterpart
        return self not in (
            PortfolioTransactionType.DELIVERY_INBOUND,
            PortfolioTransactionType.DELIVERY_OUTBOUND,
        )


_PORTFOLIO_PURCHASES = frozenset(
    {
        PortfolioTransactionType.BUY,
        PortfolioTransactionType.TRANSFER_IN,
        PortfolioTransactionType.DELIVERY_INBOUND,
    }
)


class UnitType(str, Enum):
    """Types of transaction line items."""

    GROSS_VALUE = "GROSS_VALUE"
    FEE = "FEE"
    TAX = "TAX"


class CrossEntryKind(str, Enum):
    """The closed set of paired transaction variants."""

    BUY_SELL = "BUY_SELL"
    ACCOUNT_TRANSFER = "ACCOUNT_TRANSFER"
    PORTFOLIO_TRANSFER = "PORTFOLIO_TRANSFER"


class CrossEntryState(str, Enum):
    """Attachment state of a cross entry's two transactions."""

    UNATTACHED = "UNATTACHED"
    ATTACHED = "ATTACHED"
