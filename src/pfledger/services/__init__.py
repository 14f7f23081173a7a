"""Service layer - use case orchestration over the ledger."""

from pfledger.services.ledger_service import (
    LedgerService,
    TradeCreate,
    CashTransferCreate,
    SecurityTransferCreate,
    TransactionUpdate,
)

__all__ = [
    "LedgerService",
    "TradeCreate",
    "CashTransferCreate",
    "SecurityTransferCreate",
    "TransactionUpdate",
]
