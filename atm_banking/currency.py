"""
Currency Support Module

Handles ISO 4217 currency codes and proper Decimal precision for balances,
amounts and penalties. NEVER uses float for monetary values.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, getcontext
from dataclasses import dataclass
from enum import Enum
import re

# Set global decimal context for financial precision
getcontext().prec = 28

class Currency(Enum):
    """ISO 4217 Currency Codes with precision info"""
    INR = ("INR", 2)  # Indian Rupee, 2 decimal places
    USD = ("USD", 2)  # US Dollar, 2 decimal places
    EUR = ("EUR", 2)  # Euro, 2 decimal places
    GBP = ("GBP", 2)  # British Pound, 2 decimal places

    def __init__(self, code: str, precision: int):
        self.code = code
        self.precision = precision

@dataclass(frozen=True)
class Money:
    """
    Immutable money representation with currency and proper precision.
    Balances, amounts and penalties all use this class.
    """
    amount: Decimal
    currency: Currency

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

        # Round to currency precision
        rounded = self.amount.quantize(
            Decimal('0.1') ** self.currency.precision,
            rounding=ROUND_HALF_UP
        )
        object.__setattr__(self, 'amount', rounded)

    @classmethod
    def zero(cls, currency: Currency) -> 'Money':
        return cls(Decimal('0'), currency)

    def __add__(self, other: 'Money') -> 'Money':
        if self.currency != other.currency:
            raise ValueError(f"Cannot add {self.currency.code} and {other.currency.code}")
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        if self.currency != other.currency:
            raise ValueError(f"Cannot subtract {other.currency.code} from {self.currency.code}")
        return Money(self.amount - other.amount, self.currency)

    def __ge__(self, other: 'Money') -> bool:
        if self.currency != other.currency:
            raise ValueError(f"Cannot compare {self.currency.code} and {other.currency.code}")
        return self.amount >= other.amount

    def is_zero(self) -> bool:
        """Check if amount is exactly zero"""
        return self.amount == Decimal('0')

    def is_positive(self) -> bool:
        """Check if amount is positive"""
        return self.amount > Decimal('0')

    def is_negative(self) -> bool:
        """Check if amount is negative"""
        return self.amount < Decimal('0')

    def to_string(self) -> str:
        """Format for display"""
        return f"{self.currency.code} {self.amount:,.{self.currency.precision}f}"


# Optional leading currency code or symbol, e.g. "INR 1,500.75" or "₹1500"
CURRENCY_PREFIX = re.compile(
    r'^(?:(?:' + '|'.join(c.code for c in Currency) + r')|Rs\.?|[₹$€£])\s*',
    re.IGNORECASE
)
NUMBER_PATTERN = re.compile(r'^[+-]?[\d.,]+$')


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats

    A leading currency code or symbol and surrounding whitespace are
    accepted. Anything else besides digits, separators and a leading sign
    is rejected rather than dropped, so "1e3" or "12abc" never parse.

    Args:
        value: String representation of number

    Returns:
        Decimal value

    Raises:
        ValueError: If string cannot be converted to a finite Decimal
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    clean_value = CURRENCY_PREFIX.sub('', value.strip(), count=1)
    if not NUMBER_PATTERN.match(clean_value):
        raise ValueError(f"Cannot convert '{value}' to Decimal")

    # Both comma and dot - assume comma is thousands separator
    if ',' in clean_value and '.' in clean_value:
        clean_value = clean_value.replace(',', '')
    elif ',' in clean_value and clean_value.count(',') == 1:
        parts = clean_value.split(',')
        if len(parts[1]) <= 2:  # Likely decimal separator
            clean_value = clean_value.replace(',', '.')
        else:  # Likely thousands separator
            clean_value = clean_value.replace(',', '')

    try:
        result = Decimal(clean_value)
    except InvalidOperation:
        raise ValueError(f"Cannot convert '{value}' to Decimal")

    if not result.is_finite():
        raise ValueError(f"Cannot convert '{value}' to Decimal")
    return result
