"""Domain layer - ledger models with no service dependencies."""

from pfledger.domain.models import (
    Money,
    Security,
    Unit,
    AccountTransaction,
    PortfolioTransaction,
    Account,
    Portfolio,
    Client,
    BuySellEntry,
    AccountTransferEntry,
    PortfolioTransferEntry,
)

__all__ = [
    "Money",
    "Security",
    "Unit",
    "AccountTransaction",
    "PortfolioTransaction",
    "Account",
    "Portfolio",
    "Client",
    "BuySellEntry",
    "AccountTransferEntry",
    "PortfolioTransferEntry",
]
