"""
Unit tests for Money and the fixed-point Values.

Tests cover:
- Value equality and immutability
- Same-currency arithmetic
- Currency mismatch errors
- Decimal <-> integer scaling
"""

import dataclasses
from decimal import Decimal

import pytest

from pfledger.core.exceptions import CurrencyMismatchError, ValidationError
from pfledger.domain.models import CurrencyUnit, Money, Values


class TestMoneyValue:
    """Tests for Money construction and equality."""

    def test_equal_amount_and_currency_are_equal(self):
        assert Money.of(CurrencyUnit.EUR, 10) == Money(10, CurrencyUnit.EUR)

    def test_different_currency_is_not_equal(self):
        assert Money.of(CurrencyUnit.EUR, 10) != Money.of(CurrencyUnit.USD, 10)

    def test_money_is_immutable(self):
        money = Money.of(CurrencyUnit.EUR, 10)

        with pytest.raises(dataclasses.FrozenInstanceError):
            money.amount = 20

    def test_non_integer_amount_rejected(self):
        with pytest.raises(ValidationError):
            Money(Decimal("10.5"), CurrencyUnit.EUR)

    def test_zero(self):
        assert Money.zero(CurrencyUnit.USD).is_zero()
        assert Money.zero(CurrencyUnit.USD).currency_code == CurrencyUnit.USD

    def test_str_uses_amount_scale(self, eur):
        assert str(eur("12.50")) == "EUR 12.50"


class TestMoneyArithmetic:
    """Tests for Money arithmetic."""

    def test_add_and_subtract(self):
        a = Money.of(CurrencyUnit.EUR, 1000)
        b = Money.of(CurrencyUnit.EUR, 21)

        assert a + b == Money.of(CurrencyUnit.EUR, 1021)
        assert a - b == Money.of(CurrencyUnit.EUR, 979)

    def test_negative_results(self):
        result = Money.of(CurrencyUnit.EUR, 10) - Money.of(CurrencyUnit.EUR, 15)

        assert result.is_negative()
        assert result.absolute() == Money.of(CurrencyUnit.EUR, 5)
        assert -result == Money.of(CurrencyUnit.EUR, 5)

    def test_multiply(self):
        assert Money.of(CurrencyUnit.EUR, 7).multiply(3) == Money.of(CurrencyUnit.EUR, 21)

    def test_currency_mismatch_raises(self):
        """
        GIVEN EUR and USD money
        WHEN they are added
        THEN CurrencyMismatchError (a ValidationError) is raised
        """
        with pytest.raises(CurrencyMismatchError) as exc_info:
            Money.of(CurrencyUnit.EUR, 1) + Money.of(CurrencyUnit.USD, 1)

        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.code == "VALIDATION_ERROR"


class TestValues:
    """Tests for fixed-point scaling."""

    def test_amount_factor(self):
        assert Values.Amount.factor == 100
        assert Values.Amount.factorize(Decimal("1000")) == 100000

    def test_share_factor(self):
        assert Values.Share.factorize("1.5") == 1_500_000
        assert Values.Share.to_decimal(2_000_000) == Decimal("2")

    def test_factorize_rounds_half_even(self):
        assert Values.Amount.factorize(Decimal("0.125")) == 12
        assert Values.Amount.factorize(Decimal("0.135")) == 14
