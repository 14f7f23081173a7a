"""
Cross entries: one financial event recorded as two linked transactions.

A cross entry binds two owners and the two transactions it keeps in
lock-step. The set of variants is closed:

- BuySellEntry: portfolio transaction <-> account transaction (a trade)
- AccountTransferEntry: account <-> account (cash moved)
- PortfolioTransferEntry: portfolio <-> portfolio (shares moved)

After insert() or update_from() returns, both transactions are consistent.
"""

import datetime as dt
import logging
from abc import ABC, abstractmethod
from typing import ClassVar, Optional, Union

from pfledger.core.exceptions import (
    AttachmentError,
    InvariantViolation,
    NotFoundError,
    ValidationError,
)
from pfledger.domain.models.enums import (
    AccountTransactionType,
    CrossEntryKind,
    CrossEntryState,
    PortfolioTransactionType,
)
from pfledger.domain.models.owners import Account, Portfolio, TransactionOwner
from pfledger.domain.models.security import Security
from pfledger.domain.models.transaction import (
    AccountTransaction,
    PortfolioTransaction,
    Transaction,
)

logger = logging.getLogger(__name__)

TradeType = Union[PortfolioTransactionType, AccountTransactionType, str]

_TRADE_TYPES = ("BUY", "SELL")


class CrossEntry(ABC):
    """Pairing of two transactions held by two different owners."""

    kind: ClassVar[CrossEntryKind]

    def __init__(
        self,
        owner_a: TransactionOwner,
        transaction_a: Transaction,
        owner_b: TransactionOwner,
        transaction_b: Transaction,
    ):
        if owner_a is owner_b:
            raise ValidationError(f"Cannot pair '{owner_a.name}' with itself")
        self._owner_a = owner_a
        self._transaction_a = transaction_a
        self._owner_b = owner_b
        self._transaction_b = transaction_b

    @property
    def owners(self) -> tuple[TransactionOwner, TransactionOwner]:
        return self._owner_a, self._owner_b

    @property
    def transactions(self) -> tuple[Transaction, Transaction]:
        return self._transaction_a, self._transaction_b

    @property
    def state(self) -> CrossEntryState:
        if self._owner_a.contains(self._transaction_a) and self._owner_b.contains(
            self._transaction_b
        ):
            return CrossEntryState.ATTACHED
        return CrossEntryState.UNATTACHED

    def _is_side_a(self, transaction: Transaction) -> bool:
        if transaction is self._transaction_a:
            return True
        if transaction is self._transaction_b:
            return False
        raise InvariantViolation(
            f"Transaction {transaction.txn_id} is not managed by this {self.kind.value} entry"
        )

    def get_owner(self, transaction: Transaction) -> TransactionOwner:
        return self._owner_a if self._is_side_a(transaction) else self._owner_b

    def get_cross_owner(self, transaction: Transaction) -> TransactionOwner:
        return self._owner_b if self._is_side_a(transaction) else self._owner_a

    def get_cross_transaction(self, transaction: Transaction) -> Transaction:
        return self._transaction_b if self._is_side_a(transaction) else self._transaction_a

    # Shared setters fan out to both sides

    def set_date(self, value: dt.date) -> None:
        for transaction in self.transactions:
            transaction.set_date(value)

    def set_currency_code(self, currency_code: str) -> None:
        for transaction in self.transactions:
            if any(u.amount.currency_code != currency_code for u in transaction.units):
                raise ValidationError(
                    f"Units of {transaction.txn_id} are not in {currency_code}"
                )
        for transaction in self.transactions:
            transaction.set_currency_code(currency_code)

    def set_note(self, note: Optional[str]) -> None:
        for transaction in self.transactions:
            transaction.set_note(note)

    def _resolve_client(self):
        clients = [o.client for o in self.owners if o.client is not None]
        if len(clients) == 2 and clients[0] is not clients[1]:
            raise AttachmentError("Cannot pair owners of two different clients")
        return clients[0] if clients else None

    def insert(self) -> None:
        """Attach both transactions to their owners, or neither."""
        client = self._resolve_client()
        self._validate()
        self._mirror(self._transaction_a, self._transaction_b)

        self._owner_a.add_transaction(self._transaction_a)
        try:
            self._owner_b.add_transaction(self._transaction_b)
        except AttachmentError:
            self._owner_a.remove_transaction(self._transaction_a)
            raise

        if client is not None:
            try:
                client.register_cross_entry(self)
            except InvariantViolation:
                self._owner_b.remove_transaction(self._transaction_b)
                self._owner_a.remove_transaction(self._transaction_a)
                raise

        logger.debug(
            "Inserted %s entry %s <-> %s",
            self.kind.value,
            self._transaction_a.txn_id,
            self._transaction_b.txn_id,
        )

    def update_from(self, transaction: Transaction) -> None:
        """Copy the mirrored fields of one side onto its counterpart."""
        if self._is_side_a(transaction):
            self._mirror(self._transaction_a, self._transaction_b)
        else:
            self._mirror(self._transaction_b, self._transaction_a)

    def delete(self, transaction: Optional[Transaction] = None) -> None:
        """
        Detach both transactions, starting with the counterpart of
        `transaction` (side A by default).
        """
        if transaction is None:
            transaction = self._transaction_a
        owner = self.get_owner(transaction)
        other_owner = self.get_cross_owner(transaction)
        other = self.get_cross_transaction(transaction)

        if not owner.contains(transaction):
            raise NotFoundError("Transaction", transaction.txn_id)
        if not other_owner.contains(other):
            raise NotFoundError("Transaction", other.txn_id)
        client = self._resolve_client()

        other_owner.remove_transaction(other)
        try:
            owner.remove_transaction(transaction)
        except NotFoundError:
            other_owner.add_transaction(other)
            raise

        if client is not None:
            client.unregister_cross_entry(self)

        logger.debug(
            "Deleted %s entry %s <-> %s",
            self.kind.value,
            self._transaction_a.txn_id,
            self._transaction_b.txn_id,
        )

    @abstractmethod
    def _validate(self) -> None:
        """Check the entry can be attached."""

    @abstractmethod
    def _mirror(self, source: Transaction, target: Transaction) -> None:
        """Make target consistent with source."""


def _trade_type_name(txn_type: TradeType) -> str:
    name = txn_type.value if hasattr(txn_type, "value") else str(txn_type)
    if name not in _TRADE_TYPES:
        raise ValidationError(f"Trade type must be BUY or SELL, got {name}")
    return name


class BuySellEntry(CrossEntry):
    """
    A trade: shares enter or leave the portfolio, cash leaves or enters the account.

    The portfolio side carries the gross amount and the FEE/TAX units. The
    account side carries the net cash amount derived from them.
    """

    kind = CrossEntryKind.BUY_SELL

    def __init__(self, portfolio: Portfolio, account: Account):
        super().__init__(
            portfolio,
            PortfolioTransaction(
                type=PortfolioTransactionType.BUY,
                currency_code=account.currency_code,
            ),
            account,
            AccountTransaction(
                type=AccountTransactionType.BUY,
                currency_code=account.currency_code,
            ),
        )

    @property
    def portfolio(self) -> Portfolio:
        return self._owner_a

    @property
    def account(self) -> Account:
        return self._owner_b

    @property
    def portfolio_transaction(self) -> PortfolioTransaction:
        return self._transaction_a

    @property
    def account_transaction(self) -> AccountTransaction:
        return self._transaction_b

    def set_type(self, txn_type: TradeType) -> None:
        name = _trade_type_name(txn_type)
        self.portfolio_transaction.set_type(PortfolioTransactionType(name))
        self.account_transaction.set_type(AccountTransactionType(name))

        # a sale may be typed before its proceeds are known; insert() checks again
        net = self.portfolio_transaction.get_net_amount()
        if not net.is_negative():
            self.account_transaction.set_amount(net.amount)

    def set_security(self, security: Optional[Security]) -> None:
        self.portfolio_transaction.set_security(security)
        self.account_transaction.set_security(security)

    def set_shares(self, shares: int) -> None:
        self.portfolio_transaction.set_shares(shares)

    def set_amount(self, amount: int) -> None:
        """Set the gross amount; the account side receives the net amount."""
        previous = self.portfolio_transaction.amount
        self.portfolio_transaction.set_amount(amount)
        try:
            self._refresh_account_amount()
        except ValidationError:
            self.portfolio_transaction.amount = previous
            raise

    def _refresh_account_amount(self) -> None:
        self.account_transaction.set_amount(self._net_amount(self.portfolio_transaction))

    @staticmethod
    def _net_amount(transaction: PortfolioTransaction) -> int:
        net = transaction.get_net_amount()
        if net.is_negative():
            raise ValidationError(
                f"Fees and taxes exceed the gross amount of {transaction.amount}"
            )
        return net.amount

    def _validate(self) -> None:
        if self.portfolio_transaction.security is None:
            raise ValidationError("A trade requires a security")
        _trade_type_name(self.portfolio_transaction.type)

    def _mirror(self, source: Transaction, target: Transaction) -> None:
        name = _trade_type_name(source.type)
        if source.security is None:
            raise ValidationError("A trade requires a security")

        if source is self.portfolio_transaction:
            amount = self._net_amount(source)
            target.set_type(AccountTransactionType(name))
        else:
            if target.units and target.currency_code != source.currency_code:
                raise ValidationError(
                    f"Units in {target.currency_code} cannot follow a change "
                    f"of currency to {source.currency_code}"
                )
            amount = target.gross_from_net(source.amount, PortfolioTransactionType(name))
            target.set_type(PortfolioTransactionType(name))

        target.set_date(source.date)
        target.set_currency_code(source.currency_code)
        target.set_security(source.security)
        target.set_note(source.note)
        target.set_amount(amount)


class AccountTransferEntry(CrossEntry):
    """Cash moved from a source account (TRANSFER_OUT) to a target account (TRANSFER_IN)."""

    kind = CrossEntryKind.ACCOUNT_TRANSFER

    def __init__(self, source_account: Account, target_account: Account):
        super().__init__(
            source_account,
            AccountTransaction(
                type=AccountTransactionType.TRANSFER_OUT,
                currency_code=source_account.currency_code,
            ),
            target_account,
            AccountTransaction(
                type=AccountTransactionType.TRANSFER_IN,
                currency_code=source_account.currency_code,
            ),
        )

    @property
    def source_account(self) -> Account:
        return self._owner_a

    @property
    def target_account(self) -> Account:
        return self._owner_b

    @property
    def source_transaction(self) -> AccountTransaction:
        return self._transaction_a

    @property
    def target_transaction(self) -> AccountTransaction:
        return self._transaction_b

    def set_amount(self, amount: int) -> None:
        for transaction in self.transactions:
            transaction.set_amount(amount)

    def _validate(self) -> None:
        if self.source_transaction.type != AccountTransactionType.TRANSFER_OUT:
            raise ValidationError("Source of a cash transfer must be TRANSFER_OUT")
        if self.target_transaction.type != AccountTransactionType.TRANSFER_IN:
            raise ValidationError("Target of a cash transfer must be TRANSFER_IN")

    def _mirror(self, source: Transaction, target: Transaction) -> None:
        target.set_date(source.date)
        target.set_currency_code(source.currency_code)
        target.set_note(source.note)
        target.set_amount(source.amount)


class PortfolioTransferEntry(CrossEntry):
    """Shares moved from a source portfolio (TRANSFER_OUT) to a target portfolio (TRANSFER_IN)."""

    kind = CrossEntryKind.PORTFOLIO_TRANSFER

    def __init__(self, source_portfolio: Portfolio, target_portfolio: Portfolio):
        super().__init__(
            source_portfolio,
            PortfolioTransaction(type=PortfolioTransactionType.TRANSFER_OUT),
            target_portfolio,
            PortfolioTransaction(type=PortfolioTransactionType.TRANSFER_IN),
        )

    @property
    def source_portfolio(self) -> Portfolio:
        return self._owner_a

    @property
    def target_portfolio(self) -> Portfolio:
        return self._owner_b

    @property
    def source_transaction(self) -> PortfolioTransaction:
        return self._transaction_a

    @property
    def target_transaction(self) -> PortfolioTransaction:
        return self._transaction_b

    def set_amount(self, amount: int) -> None:
        for transaction in self.transactions:
            transaction.set_amount(amount)

    def set_security(self, security: Optional[Security]) -> None:
        for transaction in self.transactions:
            transaction.set_security(security)

    def set_shares(self, shares: int) -> None:
        for transaction in self.transactions:
            transaction.set_shares(shares)

    def _validate(self) -> None:
        if self.source_transaction.security is None:
            raise ValidationError("A security transfer requires a security")
        if self.source_transaction.type != PortfolioTransactionType.TRANSFER_OUT:
            raise ValidationError("Source of a security transfer must be TRANSFER_OUT")
        if self.target_transaction.type != PortfolioTransactionType.TRANSFER_IN:
            raise ValidationError("Target of a security transfer must be TRANSFER_IN")

    def _mirror(self, source: Transaction, target: Transaction) -> None:
        if source.security is None:
            raise ValidationError("A security transfer requires a security")
        target.set_date(source.date)
        target.set_currency_code(source.currency_code)
        target.set_security(source.security)
        target.set_note(source.note)
        target.set_shares(source.shares)
        target.set_amount(source.amount)
