"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from opm.domain.exceptions import ValidationError
from opm.domain.model.value_objects import Money


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_float_keeps_decimal_digits(self):
        assert Money.of(0.07).amount == Decimal("0.07")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten")

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)

    def test_negative_amount_allowed(self):
        assert Money.of("-3").amount == Decimal("-3")

    def test_subtraction_may_go_negative(self):
        assert Money.of("5") - Money.of("10") == Money.of("-5")

    def test_multiplication_by_decimal(self):
        assert Money.of("21") * Decimal("0.07") == Money.of("1.47")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("1") * 0.5

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("1"), "USD") + Money(Decimal("1"), "EUR")

    def test_quantized_rounds_half_up(self):
        assert Money.of("1.005").quantized() == Money.of("1.01")

    def test_str(self):
        assert str(Money.of("22.47")) == "$22.47"
        assert str(Money.of("3")) == "$3.00"

    def test_str_negative(self):
        assert str(Money.of("-1.5")) == "-$1.50"
