"""
Unit tests for settings, the application context and time helpers.
"""

from datetime import date, datetime

import pytest
import pytz

from pfledger.app_context import AppContext, get_app_context, set_app_context
from pfledger.config.settings import Settings, get_settings, set_settings
from pfledger.core.timezone import EASTERN_TZ, to_eastern, today_eastern
from pfledger.domain.models import Account, AccountTransaction, Client
from pfledger.services import LedgerService


class TestSettings:
    """Tests for environment driven settings."""

    def test_defaults(self):
        settings = get_settings()

        assert settings.default_currency_code == "EUR"
        assert settings.log_level == "INFO"

    def test_default_currency_from_environment(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_CURRENCY_CODE", "USD")
        set_settings(Settings())

        assert Account(name="Env").currency_code == "USD"
        assert AccountTransaction().currency_code == "USD"

    def test_explicit_currency_wins(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_CURRENCY_CODE", "USD")
        set_settings(Settings())

        assert Account(name="Explicit", currency_code="CHF").currency_code == "CHF"


class TestAppContext:
    """Tests for AppContext wiring."""

    def test_client_requires_initialize(self):
        context = AppContext()

        assert not context.is_initialized
        with pytest.raises(RuntimeError):
            context.client

    def test_initialize_creates_client_and_service(self):
        context = AppContext()
        context.initialize()

        assert context.is_initialized
        assert isinstance(context.client, Client)
        assert isinstance(context.ledger, LedgerService)
        assert context.ledger is context.ledger
        assert context.ledger.client is context.client

    def test_initialize_with_existing_client(self, client):
        context = AppContext()
        context.initialize(client)

        assert context.client is client

    def test_initialize_applies_settings(self):
        context = AppContext(settings=Settings(default_currency_code="GBP"))
        context.initialize()

        assert context.settings.default_currency_code == "GBP"
        assert context.ledger.create_account("Pounds").currency_code == "GBP"

    def test_global_context(self):
        context = AppContext()
        set_app_context(context)
        try:
            assert get_app_context() is context
        finally:
            set_app_context(None)

        assert isinstance(get_app_context(), AppContext)


class TestTimezone:
    """Tests for Eastern time helpers."""

    def test_today_is_a_date(self):
        assert isinstance(today_eastern(), date)

    def test_naive_datetime_is_localized(self):
        converted = to_eastern(datetime(2024, 1, 15, 17, 0))

        assert converted.tzinfo is not None
        assert converted.hour == 17

    def test_aware_datetime_is_converted(self):
        aware = pytz.utc.localize(datetime(2024, 7, 1, 16, 0))

        converted = to_eastern(aware)

        assert converted.utcoffset() == EASTERN_TZ.localize(datetime(2024, 7, 1)).utcoffset()
        assert converted.hour == 12
