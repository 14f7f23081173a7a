"""Client: the registry of owners, securities and cross entries."""

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from pfledger.core.exceptions import InvariantViolation, ValidationError
from pfledger.domain.models.owners import Account, Portfolio
from pfledger.domain.models.security import Security
from pfledger.domain.models.transaction import Transaction

if TYPE_CHECKING:
    from pfledger.domain.models.cross_entry import CrossEntry


@dataclass(eq=False)
class Client:
    """
    Root of the object graph.

    Besides the owners it keeps the pairing index: transaction id -> cross
    entry. Transactions never reference their counterpart directly.

    lock guards every owner of this client. Hold it around insert, update
    and delete of a cross entry when more than one thread touches the ledger.
    """

    accounts: list[Account] = field(default_factory=list)
    portfolios: list[Portfolio] = field(default_factory=list)
    securities: list[Security] = field(default_factory=list)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _cross_entries: dict = field(default_factory=dict, init=False, repr=False)

    def add_account(self, account: Account) -> Account:
        if account.client is not None and account.client is not self:
            raise ValidationError(f"Account '{account.name}' belongs to another client")
        account.client = self
        self.accounts.append(account)
        return account

    def add_portfolio(self, portfolio: Portfolio) -> Portfolio:
        if portfolio.client is not None and portfolio.client is not self:
            raise ValidationError(f"Portfolio '{portfolio.name}' belongs to another client")
        portfolio.client = self
        self.portfolios.append(portfolio)
        return portfolio

    def add_security(self, security: Security) -> Security:
        self.securities.append(security)
        return security

    def register_cross_entry(self, entry: "CrossEntry") -> None:
        """Index both transactions of an entry; a transaction pairs at most once."""
        for transaction in entry.transactions:
            existing = self._cross_entries.get(transaction.txn_id)
            if existing is not None and existing is not entry:
                raise InvariantViolation(
                    f"Transaction {transaction.txn_id} is already paired by another entry"
                )
        for transaction in entry.transactions:
            self._cross_entries[transaction.txn_id] = entry

    def unregister_cross_entry(self, entry: "CrossEntry") -> None:
        for transaction in entry.transactions:
            if self._cross_entries.get(transaction.txn_id) is entry:
                del self._cross_entries[transaction.txn_id]

    def get_cross_entry(self, transaction: Transaction) -> Optional["CrossEntry"]:
        return self._cross_entries.get(transaction.txn_id)

    @property
    def cross_entries(self) -> list:
        """Distinct registered entries in registration order."""
        seen: list = []
        for entry in self._cross_entries.values():
            if not any(e is entry for e in seen):
                seen.append(entry)
        return seen
