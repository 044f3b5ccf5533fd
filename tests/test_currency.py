"""
Test suite for currency module

Tests Money arithmetic, rounding and decimal parsing.
All monetary calculations must use Decimal precision.
"""

import pytest
from decimal import Decimal

from atm_banking.currency import Money, Currency, decimal_from_string


class TestMoney:
    """Test Money class operations"""

    def test_money_creation(self):
        """Test Money object creation and rounding"""
        money = Money(Decimal('100.50'), Currency.INR)
        assert money.amount == Decimal('100.50')
        assert money.currency == Currency.INR

        # Rounded half up to two places
        assert Money(Decimal('100.555'), Currency.INR).amount == Decimal('100.56')
        assert Money(Decimal('0.004'), Currency.INR).amount == Decimal('0.00')

    def test_non_decimal_amount_is_converted(self):
        """Test that ints and strings become Decimal"""
        assert Money(10000, Currency.INR).amount == Decimal('10000.00')
        assert Money('25000', Currency.INR).amount == Decimal('25000.00')

    def test_money_arithmetic(self):
        """Test addition and subtraction"""
        a = Money(Decimal('10000.00'), Currency.INR)
        b = Money(Decimal('250.00'), Currency.INR)

        assert (a - b).amount == Decimal('9750.00')
        assert (a + b).amount == Decimal('10250.00')
        assert (b - a).amount == Decimal('-9750.00')

    def test_repeated_subtraction_has_no_drift(self):
        """Test that repeated penalty deductions stay exact"""
        balance = Money(Decimal('1000.00'), Currency.INR)
        penalty = Money(Decimal('0.10'), Currency.INR)
        for _ in range(1000):
            balance = balance - penalty
        assert balance.amount == Decimal('900.00')

    def test_currency_mismatch(self):
        """Test that different currencies cannot be mixed"""
        inr = Money(Decimal('1'), Currency.INR)
        usd = Money(Decimal('1'), Currency.USD)

        with pytest.raises(ValueError, match="Cannot add"):
            inr + usd
        with pytest.raises(ValueError, match="Cannot compare"):
            inr >= usd

    def test_comparisons_and_predicates(self):
        """Test ordering and sign checks"""
        low = Money(Decimal('999'), Currency.INR)
        high = Money(Decimal('1000'), Currency.INR)

        assert high >= low
        assert not low >= high
        assert high >= Money(Decimal('1000.00'), Currency.INR)
        assert high == Money(Decimal('1000.00'), Currency.INR)
        assert Money.zero(Currency.INR).is_zero()
        assert high.is_positive()
        assert (low - high).is_negative()
        assert low != Decimal('999')

    def test_to_string(self):
        """Test two-decimal display"""
        assert Money(Decimal('10000'), Currency.INR).to_string() == "INR 10,000.00"
        assert Money(Decimal('949.5'), Currency.INR).to_string() == "INR 949.50"


class TestDecimalParsing:
    """Test decimal_from_string"""

    def test_plain_and_formatted_values(self):
        """Test common input formats"""
        assert decimal_from_string("1500") == Decimal('1500')
        assert decimal_from_string("1500.75") == Decimal('1500.75')
        assert decimal_from_string("INR 1,500.75") == Decimal('1500.75')
        assert decimal_from_string("1,000") == Decimal('1000')
        assert decimal_from_string("10,5") == Decimal('10.5')
        assert decimal_from_string("  -12.5 ") == Decimal('-12.5')

    def test_currency_prefixes(self):
        """Test a leading currency code or symbol is accepted"""
        assert decimal_from_string("inr 250") == Decimal('250')
        assert decimal_from_string("INR1500") == Decimal('1500')
        assert decimal_from_string("Rs. 1,000") == Decimal('1000')
        assert decimal_from_string("₹ 99.99") == Decimal('99.99')

    @pytest.mark.parametrize("value", [
        "", "abc", "1e3", "1E3", "12abc", "abc12", "1 000", "12-3",
        "1.2.3", "+", "NaN", "Infinity", "INR", "INR 12 USD", "0x10",
    ])
    def test_invalid_values(self, value):
        """Test malformed input is rejected rather than partially parsed"""
        with pytest.raises(ValueError):
            decimal_from_string(value)
