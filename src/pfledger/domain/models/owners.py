"""Transaction owners: cash accounts and security portfolios."""

import logging
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Optional

from pfledger.config.settings import get_settings
from pfledger.core.exceptions import (
    AttachmentError,
    CrossEntryLookupError,
    NotFoundError,
)
from pfledger.domain.models.transaction import (
    AccountTransaction,
    PortfolioTransaction,
    Transaction,
)

if TYPE_CHECKING:
    from pfledger.domain.models.client import Client

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class TransactionOwner:
    """
    Container holding an ordered collection of transactions.

    Insertion order is the only ordering guarantee; nothing is sorted by date.
    """

    transaction_class: ClassVar[type] = Transaction

    name: str = ""
    owner_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    client: Optional["Client"] = field(default=None, repr=False)
    _transactions: list = field(default_factory=list, init=False, repr=False)

    @property
    def transactions(self) -> list:
        return list(self._transactions)

    def contains(self, transaction: Transaction) -> bool:
        return any(t is transaction for t in self._transactions)

    def __contains__(self, transaction: object) -> bool:
        return isinstance(transaction, Transaction) and self.contains(transaction)

    def add_transaction(self, transaction: Transaction) -> None:
        """Attach a transaction; refuses foreign kinds and duplicates."""
        if not isinstance(transaction, self.transaction_class):
            raise AttachmentError(
                f"{type(self).__name__} '{self.name}' cannot hold "
                f"{type(transaction).__name__}"
            )
        if self.contains(transaction):
            raise AttachmentError(
                f"Transaction {transaction.txn_id} already attached to '{self.name}'"
            )
        self._transactions.append(transaction)

    def remove_transaction(self, transaction: Transaction) -> None:
        for index, existing in enumerate(self._transactions):
            if existing is transaction:
                del self._transactions[index]
                return
        raise NotFoundError("Transaction", transaction.txn_id)

    def delete_transaction(self, transaction: Transaction, client: "Client") -> None:
        """
        Delete a transaction held by this owner.

        Paired transactions are deleted together with their counterpart via
        the cross entry the client resolves. A transaction of a paired type
        without a resolvable cross entry is a data integrity error.
        """
        if not self.contains(transaction):
            raise NotFoundError("Transaction", transaction.txn_id)

        entry = client.get_cross_entry(transaction)
        if entry is not None:
            entry.delete(transaction)
            return

        if transaction.type.is_cross:
            raise CrossEntryLookupError(transaction.txn_id)

        self.remove_transaction(transaction)
        logger.debug("Deleted %s from '%s'", transaction.txn_id, self.name)


@dataclass(eq=False)
class Account(TransactionOwner):
    """Cash account."""

    transaction_class: ClassVar[type] = AccountTransaction

    currency_code: str = field(default_factory=lambda: get_settings().default_currency_code)


@dataclass(eq=False)
class Portfolio(TransactionOwner):
    """Security portfolio, settling trades against its reference account."""

    transaction_class: ClassVar[type] = PortfolioTransaction

    reference_account: Optional[Account] = field(default=None, repr=False)

    def add_transaction(self, transaction: Transaction) -> None:
        """Attach a transaction; portfolio transactions must name a security."""
        if isinstance(transaction, PortfolioTransaction) and transaction.security is None:
            raise AttachmentError(
                f"Transaction {transaction.txn_id} has no security and cannot be "
                f"held by '{self.name}'"
            )
        super().add_transaction(transaction)
