"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.value_objects import Email, Money


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_int(self):
        assert Money.of(10, "EUR") == Money(Decimal("10"), "EUR")

    def test_of_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten")

    def test_non_decimal_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_non_finite_amount_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            Money(Decimal("NaN"))

    @pytest.mark.parametrize("currency", ["US", "USDX", "U5D", ""])
    def test_bad_currency_rejected(self, currency):
        with pytest.raises(ValidationError, match="3-letter"):
            Money(Decimal("1"), currency)

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_subtraction(self):
        assert Money.of("10") - Money.of("3") == Money.of("7")

    def test_subtraction_below_zero_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            Money.of("3") - Money.of("10")

    def test_multiplication(self):
        assert Money.of("10.00") * 3 == Money.of("30.00")

    def test_multiplication_by_float_is_type_error(self):
        with pytest.raises(TypeError):
            Money.of("10") * 1.5

    def test_negative_factor_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money.of("10") * -2

    def test_division(self):
        assert Money.of("10") / 4 == Money.of("2.5")

    def test_division_by_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Money.of("10") / 0

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="different currencies: USD and EUR"):
            Money.of("10") + Money.of("10", "EUR")

    def test_comparison(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") >= Money.of("10")
        assert not Money.of("10") > Money.of("10")

    def test_comparison_across_currencies_rejected(self):
        with pytest.raises(ValidationError):
            Money.of("5") < Money.of("10", "EUR")

    def test_comparison_with_non_money_is_type_error(self):
        with pytest.raises(TypeError):
            Money.of("5") < 10

    def test_equality_is_by_value(self):
        assert Money.of("10.00") == Money.of("10.00")
        assert Money.of("10.00") != Money.of("10.00", "EUR")

    def test_string_form(self):
        assert str(Money.of("20")) == "20.00 USD"
        assert Money.of("7.5").format_amount() == "7.50"

    def test_zero(self):
        assert Money.zero("GBP") == Money(Decimal("0"), "GBP")

    def test_immutable(self):
        m = Money.of("1")
        with pytest.raises(AttributeError):
            m.amount = Decimal("2")


# ── Email ────────────────────────────────────────────────────────────────────


class TestEmail:

    def test_valid(self):
        assert str(Email("alice@example.com")) == "alice@example.com"

    @pytest.mark.parametrize("raw", ["alice", "alice@example", "a b@example.com", "@example.com"])
    def test_invalid_format_rejected(self, raw):
        with pytest.raises(ValidationError, match="format is invalid"):
            Email(raw)

    def test_empty_rejected(self):
        with pytest.raises(ValidationError, match="required"):
            Email("   ")

    def test_too_long_rejected(self):
        raw = "a" * 250 + "@example.com"
        with pytest.raises(ValidationError, match="254"):
            Email(raw)

    def test_equality_is_by_value(self):
        assert Email("bob@example.com") == Email("bob@example.com")
