"""
Pydantic schemas for API requests and responses

Request models carry the input-layer checks: field lengths and formats,
positive amounts, password length and confirmation.
"""

from decimal import Decimal
from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel, Field, field_validator, model_validator

from ..config import get_config
from ..currency import Money, decimal_from_string
from ..errors import InvalidAccountType
from ..transactions import AccountType, BalanceSnapshot


class MoneyModel(BaseModel):
    amount: str = Field(..., description="Decimal amount as string")
    currency: str = Field(..., description="Currency code (INR, USD, etc.)")

    @classmethod
    def from_money(cls, money: Money) -> 'MoneyModel':
        return cls(amount=str(money.amount), currency=money.currency.code)


def _parse_account_type(value: str) -> str:
    try:
        return AccountType.parse(value).value
    except InvalidAccountType as e:
        raise ValueError(str(e))


def _parse_amount(value: str) -> str:
    amount = decimal_from_string(value)
    if amount <= Decimal('0'):
        raise ValueError("Amount must be greater than zero")
    return str(amount)


AccountTypeField = Annotated[str, AfterValidator(_parse_account_type)]
AmountField = Annotated[str, AfterValidator(_parse_amount)]


# Customer schemas
class RegisterCustomerRequest(BaseModel):
    name: str
    email: str
    address: str
    phone: str

    @field_validator('name', 'email', 'address', 'phone')
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Input cannot be empty or only whitespace")
        return value

    @field_validator('name')
    @classmethod
    def name_length(cls, value: str) -> str:
        min_length = get_config().name_min_length
        if len(value) < min_length:
            raise ValueError(f"Name must be at least {min_length} characters long")
        return value

    @field_validator('email')
    @classmethod
    def email_format(cls, value: str) -> str:
        if '@' not in value or '.' not in value:
            raise ValueError("Invalid email format")
        return value

    @field_validator('address')
    @classmethod
    def address_length(cls, value: str) -> str:
        min_length = get_config().address_min_length
        if len(value) < min_length:
            raise ValueError(f"Address must be at least {min_length} characters long")
        return value

    @field_validator('phone')
    @classmethod
    def phone_digits(cls, value: str) -> str:
        digits = get_config().phone_digits
        if len(value) != digits or not value.isdigit():
            raise ValueError(f"Phone number must be exactly {digits} digits")
        return value


# Session schemas
class LoginRequest(BaseModel):
    customer_id: str
    password: str


class ChangePasswordRequest(BaseModel):
    new_password: str
    confirm_password: str

    @field_validator('new_password')
    @classmethod
    def password_length(cls, value: str) -> str:
        min_length = get_config().password_min_length
        if len(value) < min_length:
            raise ValueError(f"Password must be at least {min_length} characters long")
        return value

    @model_validator(mode='after')
    def passwords_match(self) -> 'ChangePasswordRequest':
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


# Transaction schemas
class WithdrawRequest(BaseModel):
    account_type: AccountTypeField = Field(..., description="Account (S for Savings, C for Current)")
    amount: AmountField = Field(..., description="Decimal amount as string")


class TransferRequest(BaseModel):
    to_customer_id: Optional[str] = Field(None, description="Recipient; omit to move between own accounts")
    from_account_type: AccountTypeField = Field(..., description="Source account (S/C)")
    to_account_type: AccountTypeField = Field(..., description="Destination account (S/C)")
    amount: AmountField = Field(..., description="Decimal amount as string")


class BalanceResponse(BaseModel):
    customer_id: str
    savings_balance: MoneyModel
    current_balance: MoneyModel

    @classmethod
    def from_snapshot(cls, snapshot: BalanceSnapshot) -> 'BalanceResponse':
        return cls(
            customer_id=snapshot.customer_id,
            savings_balance=MoneyModel.from_money(snapshot.savings_balance),
            current_balance=MoneyModel.from_money(snapshot.current_balance)
        )
