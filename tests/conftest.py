"""
Pytest configuration and fixtures for ledger tests.

This module provides:
- A client populated with two accounts, two portfolios and a security
- Service fixtures over that client
- Factory helpers for cross entries
"""

from datetime import date
from decimal import Decimal
from typing import Callable

import pytest

from pfledger.config.settings import reset_settings
from pfledger.domain.models import (
    Account,
    AccountTransferEntry,
    BuySellEntry,
    Client,
    CurrencyUnit,
    Money,
    Portfolio,
    PortfolioTransactionType,
    PortfolioTransferEntry,
    Security,
    Unit,
    UnitType,
    Values,
)
from pfledger.services import LedgerService


# =============================================================================
# SETTINGS
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test against default settings."""
    monkeypatch.delenv("DEFAULT_CURRENCY_CODE", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def fixed_date() -> date:
    """Fixed date for deterministic tests."""
    return date(2024, 6, 15)


# =============================================================================
# CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def client() -> Client:
    """Client with two accounts, two portfolios and one security."""
    client = Client()
    client.add_account(Account(name="Checking", currency_code=CurrencyUnit.EUR))
    client.add_account(Account(name="Savings", currency_code=CurrencyUnit.EUR))
    client.add_portfolio(Portfolio(name="Broker A"))
    client.add_portfolio(Portfolio(name="Broker B"))
    client.add_security(Security(name="Some security", currency_code=CurrencyUnit.EUR))
    return client


@pytest.fixture
def account_a(client) -> Account:
    return client.accounts[0]


@pytest.fixture
def account_b(client) -> Account:
    return client.accounts[1]


@pytest.fixture
def portfolio_a(client) -> Portfolio:
    return client.portfolios[0]


@pytest.fixture
def portfolio_b(client) -> Portfolio:
    return client.portfolios[1]


@pytest.fixture
def security(client) -> Security:
    return client.securities[0]


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def ledger_service(client) -> LedgerService:
    """Provide LedgerService over the test client."""
    return LedgerService(client=client)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def buy_sell_factory(portfolio_a, account_a, security, fixed_date) -> Callable[..., BuySellEntry]:
    """Factory for inserted trades with optional fee and tax units."""

    def _create(
        txn_type: PortfolioTransactionType = PortfolioTransactionType.BUY,
        amount: int = 1000,
        fee: int = 10,
        tax: int = 11,
        insert: bool = True,
    ) -> BuySellEntry:
        entry = BuySellEntry(portfolio_a, account_a)
        entry.set_currency_code(CurrencyUnit.EUR)
        entry.set_date(fixed_date)
        entry.set_security(security)
        entry.set_shares(1 * Values.Share.factor)
        if fee:
            entry.portfolio_transaction.add_unit(
                Unit(UnitType.FEE, Money.of(CurrencyUnit.EUR, fee))
            )
        if tax:
            entry.portfolio_transaction.add_unit(
                Unit(UnitType.TAX, Money.of(CurrencyUnit.EUR, tax))
            )
        entry.set_type(txn_type)
        entry.set_amount(amount)
        if insert:
            entry.insert()
        return entry

    return _create


@pytest.fixture
def account_transfer_factory(account_a, account_b, fixed_date) -> Callable[..., AccountTransferEntry]:
    """Factory for inserted cash transfers from account_a to account_b."""

    def _create(amount: int = 1000, insert: bool = True) -> AccountTransferEntry:
        entry = AccountTransferEntry(account_a, account_b)
        entry.set_date(fixed_date)
        entry.set_amount(amount)
        if insert:
            entry.insert()
        return entry

    return _create


@pytest.fixture
def portfolio_transfer_factory(
    portfolio_a, portfolio_b, security, fixed_date
) -> Callable[..., PortfolioTransferEntry]:
    """Factory for inserted security transfers from portfolio_a to portfolio_b."""

    def _create(amount: int = 1000, shares: int = 1, insert: bool = True) -> PortfolioTransferEntry:
        entry = PortfolioTransferEntry(portfolio_a, portfolio_b)
        entry.set_currency_code(CurrencyUnit.EUR)
        entry.set_date(fixed_date)
        entry.set_amount(amount)
        entry.set_security(security)
        entry.set_shares(shares)
        if insert:
            entry.insert()
        return entry

    return _create


@pytest.fixture
def eur() -> Callable[[str], Money]:
    """Build EUR money from a decimal string."""

    def _eur(value: str) -> Money:
        return Money.of(CurrencyUnit.EUR, Values.Amount.factorize(Decimal(value)))

    return _eur
