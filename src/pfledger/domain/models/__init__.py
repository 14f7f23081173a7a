"""Domain models package."""

from pfledger.domain.models.enums import (
    AccountTransactionType,
    PortfolioTransactionType,
    UnitType,
    CrossEntryKind,
    CrossEntryState,
)
from pfledger.domain.models.money import Money, CurrencyUnit, Value, Values
from pfledger.domain.models.security import Security
from pfledger.domain.models.transaction import (
    Unit,
    Transaction,
    AccountTransaction,
    PortfolioTransaction,
)
from pfledger.domain.models.owners import TransactionOwner, Account, Portfolio
from pfledger.domain.models.client import Client
from pfledger.domain.models.cross_entry import (
    CrossEntry,
    BuySellEntry,
    AccountTransferEntry,
    PortfolioTransferEntry,
)

__all__ = [
    "AccountTransactionType",
    "PortfolioTransactionType",
    "UnitType",
    "CrossEntryKind",
    "CrossEntryState",
    "Money",
    "CurrencyUnit",
    "Value",
    "Values",
    "Security",
    "Unit",
    "Transaction",
    "AccountTransaction",
    "PortfolioTransaction",
    "TransactionOwner",
    "Account",
    "Portfolio",
    "Client",
    "CrossEntry",
    "BuySellEntry",
    "AccountTransferEntry",
    "PortfolioTransferEntry",
]
