"""Ledger service for paired transaction management."""

import datetime as dt
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from pfledger.core.exceptions import (
    AppError,
    CrossEntryLookupError,
    NotFoundError,
    ValidationError,
)
from pfledger.core.timezone import today_eastern
from pfledger.domain.models import (
    Account,
    AccountTransferEntry,
    BuySellEntry,
    Client,
    CrossEntry,
    Money,
    Portfolio,
    PortfolioTransaction,
    PortfolioTransactionType,
    PortfolioTransferEntry,
    Security,
    Transaction,
    TransactionOwner,
    Unit,
    UnitType,
    Values,
)

logger = logging.getLogger(__name__)


@dataclass
class TradeCreate:
    """Input data for recording a buy or sell."""

    portfolio: Portfolio
    account: Account
    security: Security
    txn_type: PortfolioTransactionType
    shares: Decimal
    amount: Decimal  # gross value of the shares
    fees: Decimal = Decimal("0")
    taxes: Decimal = Decimal("0")
    date: Optional[dt.date] = None
    currency_code: Optional[str] = None
    note: Optional[str] = None


@dataclass
class CashTransferCreate:
    """Input data for moving cash between two accounts."""

    source_account: Account
    target_account: Account
    amount: Decimal
    date: Optional[dt.date] = None
    note: Optional[str] = None


@dataclass
class SecurityTransferCreate:
    """Input data for moving shares between two portfolios."""

    source_portfolio: Portfolio
    target_portfolio: Portfolio
    security: Security
    shares: Decimal
    amount: Decimal
    date: Optional[dt.date] = None
    currency_code: Optional[str] = None
    note: Optional[str] = None


@dataclass
class TransactionUpdate:
    """Partial update data for editing one side of a pair."""

    date: Optional[dt.date] = None
    amount: Optional[Decimal] = None
    shares: Optional[Decimal] = None
    security: Optional[Security] = None
    note: Optional[str] = None


class LedgerService:
    """
    Service for managing the paired transaction ledger.

    Handles owner creation and the create/edit/delete use cases of cross
    entries. Every mutation runs under the client lock so that no reader
    observes one side of a pair without the other.
    """

    def __init__(self, client: Client):
        self._client = client

    @property
    def client(self) -> Client:
        return self._client

    def create_account(self, name: str, currency_code: Optional[str] = None) -> Account:
        """
        Create a new cash account.

        Args:
            name: Unique account name
            currency_code: Account currency, defaults to the configured currency

        Returns:
            Created Account instance
        """
        with self._client.lock:
            if any(a.name == name for a in self._client.accounts):
                raise ValidationError(f"Account with name '{name}' already exists")
            account = Account(name=name)
            if currency_code:
                account.currency_code = currency_code
            return self._client.add_account(account)

    def create_portfolio(
        self,
        name: str,
        reference_account: Optional[Account] = None,
    ) -> Portfolio:
        """Create a new securities portfolio settling against reference_account."""
        with self._client.lock:
            if any(p.name == name for p in self._client.portfolios):
                raise ValidationError(f"Portfolio with name '{name}' already exists")
            if reference_account is not None:
                self._check_owner(reference_account, "Account")
            portfolio = Portfolio(name=name, reference_account=reference_account)
            return self._client.add_portfolio(portfolio)

    def add_security(self, security: Security) -> Security:
        with self._client.lock:
            return self._client.add_security(security)

    def record_trade(self, data: TradeCreate) -> BuySellEntry:
        """
        Record a buy or sell as a portfolio/account pair.

        Fees and taxes become FEE/TAX units of the portfolio transaction; the
        account transaction receives the resulting net cash amount.
        """
        self._validate_trade(data)

        with self._client.lock:
            entry = BuySellEntry(data.portfolio, data.account)
            entry.set_currency_code(data.currency_code or data.account.currency_code)
            entry.set_date(data.date or today_eastern())
            entry.set_security(data.security)
            entry.set_shares(Values.Share.factorize(data.shares))

            currency_code = entry.portfolio_transaction.currency_code
            if data.fees > 0:
                entry.portfolio_transaction.add_unit(
                    Unit(UnitType.FEE, Money(Values.Amount.factorize(data.fees), currency_code))
                )
            if data.taxes > 0:
                entry.portfolio_transaction.add_unit(
                    Unit(UnitType.TAX, Money(Values.Amount.factorize(data.taxes), currency_code))
                )

            entry.set_type(data.txn_type)
            entry.set_amount(Values.Amount.factorize(data.amount))
            entry.set_note(data.note)
            entry.insert()

        logger.info(
            "Recorded %s of %s shares of '%s' in '%s' against '%s'",
            entry.portfolio_transaction.type.value,
            data.shares,
            data.security.name,
            data.portfolio.name,
            data.account.name,
        )
        return entry

    def transfer_cash(self, data: CashTransferCreate) -> AccountTransferEntry:
        """Move cash from the source account to the target account."""
        self._validate_cash_transfer(data)

        with self._client.lock:
            entry = AccountTransferEntry(data.source_account, data.target_account)
            entry.set_date(data.date or today_eastern())
            entry.set_amount(Values.Amount.factorize(data.amount))
            entry.set_note(data.note)
            entry.insert()

        logger.info(
            "Transferred %s from '%s' to '%s'",
            data.amount,
            data.source_account.name,
            data.target_account.name,
        )
        return entry

    def transfer_securities(self, data: SecurityTransferCreate) -> PortfolioTransferEntry:
        """Move shares from the source portfolio to the target portfolio."""
        self._validate_security_transfer(data)

        with self._client.lock:
            entry = PortfolioTransferEntry(data.source_portfolio, data.target_portfolio)
            if data.currency_code:
                entry.set_currency_code(data.currency_code)
            entry.set_date(data.date or today_eastern())
            entry.set_security(data.security)
            entry.set_shares(Values.Share.factorize(data.shares))
            entry.set_amount(Values.Amount.factorize(data.amount))
            entry.set_note(data.note)
            entry.insert()

        logger.info(
            "Transferred %s shares of '%s' from '%s' to '%s'",
            data.shares,
            data.security.name,
            data.source_portfolio.name,
            data.target_portfolio.name,
        )
        return entry

    def get_cross_entry(self, transaction: Transaction) -> CrossEntry:
        """Return the entry pairing a transaction."""
        entry = self._client.get_cross_entry(transaction)
        if entry is None:
            raise CrossEntryLookupError(transaction.txn_id)
        return entry

    def edit_transaction(
        self,
        transaction: Transaction,
        patch: TransactionUpdate,
    ) -> Transaction:
        """
        Edit one side of a pair and propagate the change to the other side.

        On any error both sides are restored to their state before the edit.
        """
        with self._client.lock:
            entry = self._client.get_cross_entry(transaction)
            affected = [transaction]
            if entry is not None:
                affected.append(entry.get_cross_transaction(transaction))
            before = [self._snapshot(t) for t in affected]

            try:
                self._apply_patch(transaction, patch)
                if entry is not None:
                    entry.update_from(transaction)
            except AppError:
                for t, snapshot in zip(affected, before):
                    self._restore(t, snapshot)
                raise

        logger.debug("Edited transaction %s", transaction.txn_id)
        return transaction

    def delete_transaction(self, owner: TransactionOwner, transaction: Transaction) -> None:
        """Delete a transaction, together with its counterpart when paired."""
        with self._client.lock:
            self._check_owner(owner, type(owner).__name__)
            owner.delete_transaction(transaction, self._client)

        logger.info("Deleted transaction %s from '%s'", transaction.txn_id, owner.name)

    def _check_owner(self, owner: TransactionOwner, resource: str) -> None:
        if owner.client is not self._client:
            raise NotFoundError(resource, owner.owner_id)

    def _validate_trade(self, data: TradeCreate) -> None:
        """Validate trade input."""
        self._check_owner(data.portfolio, "Portfolio")
        self._check_owner(data.account, "Account")

        data.txn_type = PortfolioTransactionType(data.txn_type)
        if data.txn_type not in (PortfolioTransactionType.BUY, PortfolioTransactionType.SELL):
            raise ValidationError(f"Trade type must be BUY or SELL, got {data.txn_type.value}")
        if data.security is None:
            raise ValidationError(f"{data.txn_type.value} requires a security")
        if data.shares is None or data.shares <= 0:
            raise ValidationError(f"{data.txn_type.value} requires shares > 0")
        if data.amount is None or data.amount < 0:
            raise ValidationError(f"{data.txn_type.value} requires amount >= 0")
        if data.fees < 0:
            raise ValidationError("Fees cannot be negative")
        if data.taxes < 0:
            raise ValidationError("Taxes cannot be negative")
        if (
            data.txn_type == PortfolioTransactionType.SELL
            and data.fees + data.taxes > data.amount
        ):
            raise ValidationError("Fees and taxes cannot exceed the proceeds of a sale")

    def _validate_cash_transfer(self, data: CashTransferCreate) -> None:
        """Validate cash transfer input."""
        self._check_owner(data.source_account, "Account")
        self._check_owner(data.target_account, "Account")

        if data.source_account is data.target_account:
            raise ValidationError("Source and target account must differ")
        if data.amount is None or data.amount <= 0:
            raise ValidationError("Cash transfer requires amount > 0")

    def _validate_security_transfer(self, data: SecurityTransferCreate) -> None:
        """Validate security transfer input."""
        self._check_owner(data.source_portfolio, "Portfolio")
        self._check_owner(data.target_portfolio, "Portfolio")

        if data.source_portfolio is data.target_portfolio:
            raise ValidationError("Source and target portfolio must differ")
        if data.security is None:
            raise ValidationError("Security transfer requires a security")
        if data.shares is None or data.shares <= 0:
            raise ValidationError("Security transfer requires shares > 0")
        if data.amount is None or data.amount < 0:
            raise ValidationError("Security transfer requires amount >= 0")

    @staticmethod
    def _apply_patch(transaction: Transaction, patch: TransactionUpdate) -> None:
        if patch.date is not None:
            transaction.set_date(patch.date)
        if patch.amount is not None:
            transaction.set_amount(Values.Amount.factorize(patch.amount))
        if patch.shares is not None:
            if not isinstance(transaction, PortfolioTransaction):
                raise ValidationError("Only portfolio transactions carry shares")
            transaction.set_shares(Values.Share.factorize(patch.shares))
        if patch.security is not None:
            transaction.set_security(patch.security)
        if patch.note is not None:
            transaction.set_note(patch.note)

    @staticmethod
    def _snapshot(transaction: Transaction) -> dict:
        """Capture the mutable fields of a transaction."""
        fields = ["date", "amount", "currency_code", "security", "note", "type", "updated_at"]
        if isinstance(transaction, PortfolioTransaction):
            fields.append("shares")
        return {name: getattr(transaction, name) for name in fields}

    @staticmethod
    def _restore(transaction: Transaction, snapshot: dict) -> None:
        for name, value in snapshot.items():
            setattr(transaction, name, value)
