"""
Transaction Engine Module

Balance inquiry, withdrawal and transfer over the customer ledger. Every debit
goes through the same minimum-balance rule: staying at or above the account's
minimum costs nothing; dropping below it costs a fixed penalty on top of the
amount, and is refused only when the penalty would take the account negative.
"""

from decimal import Decimal, InvalidOperation
from dataclasses import dataclass
from typing import Dict, Optional, Union
from enum import Enum

from .currency import Money, Currency
from .customers import Customer, CustomerLedger
from .errors import InvalidAccountType, InvalidAmount, InsufficientFunds, CustomerNotFound
from .logging_config import get_logger, log_action


class AccountType(Enum):
    """The two accounts every customer holds"""
    SAVINGS = "savings"
    CURRENT = "current"

    @property
    def tag(self) -> str:
        """Single-letter menu tag (S or C)"""
        return self.value[0].upper()

    @property
    def balance_field(self) -> str:
        return f"{self.value}_balance"

    @classmethod
    def parse(cls, value: Union[str, 'AccountType']) -> 'AccountType':
        """Accept an AccountType, a tag (S/C) or a name (savings/current), any case"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for account_type in cls:
                if normalized in (account_type.value, account_type.tag.lower()):
                    return account_type
        raise InvalidAccountType(f"Invalid account type {value!r}: expected S or C")


@dataclass(frozen=True)
class AccountRule:
    """Minimum balance and the penalty charged for dropping below it"""
    minimum_balance: Money
    penalty: Money

    def __post_init__(self):
        if self.minimum_balance.currency != self.penalty.currency:
            raise ValueError("Minimum balance and penalty must share a currency")
        if self.minimum_balance.is_negative() or self.penalty.is_negative():
            raise ValueError("Minimum balance and penalty cannot be negative")


def default_rules(currency: Currency = Currency.INR) -> Dict[AccountType, AccountRule]:
    return {
        AccountType.SAVINGS: AccountRule(
            minimum_balance=Money(Decimal('1000'), currency),
            penalty=Money(Decimal('50'), currency)
        ),
        AccountType.CURRENT: AccountRule(
            minimum_balance=Money(Decimal('5000'), currency),
            penalty=Money(Decimal('250'), currency)
        ),
    }


def assess_debit(balance: Money, amount: Money, rule: AccountRule) -> Money:
    """
    Penalty owed for debiting amount from balance under rule

    Returns a zero Money when the debit keeps the balance at or above the
    minimum.

    Raises:
        InsufficientFunds: If amount plus penalty exceeds the balance
    """
    remaining = balance - amount
    if remaining >= rule.minimum_balance:
        return Money.zero(balance.currency)
    if (remaining - rule.penalty).is_negative():
        raise InsufficientFunds(
            f"Insufficient funds: balance {balance.to_string()}, "
            f"requested {amount.to_string()} plus penalty {rule.penalty.to_string()}"
        )
    return rule.penalty


@dataclass(frozen=True)
class BalanceSnapshot:
    """Both balances of one customer at a point in time"""
    customer_id: str
    savings_balance: Money
    current_balance: Money

    def for_account(self, account_type: AccountType) -> Money:
        return getattr(self, account_type.balance_field)


@dataclass(frozen=True)
class WithdrawalResult:
    customer_id: str
    account_type: AccountType
    amount: Money
    penalty: Money
    balance: Money  # balance of the debited account afterwards

    @property
    def penalty_applied(self) -> bool:
        return self.penalty.is_positive()

    @property
    def total_debited(self) -> Money:
        return self.amount + self.penalty


@dataclass(frozen=True)
class TransferResult:
    from_customer_id: str
    to_customer_id: str
    from_account_type: AccountType
    to_account_type: AccountType
    amount: Money
    penalty: Money
    from_balance: Money  # source account afterwards
    to_balance: Money    # destination account afterwards

    @property
    def penalty_applied(self) -> bool:
        return self.penalty.is_positive()

    @property
    def total_debited(self) -> Money:
        return self.amount + self.penalty


class TransactionEngine:
    """
    Stateless money-movement logic over a CustomerLedger

    Each operation validates, then checks and mutates inside
    CustomerLedger.locked(), so it either applies every change or none.
    """

    def __init__(
        self,
        ledger: CustomerLedger,
        rules: Optional[Dict[AccountType, AccountRule]] = None
    ):
        self.ledger = ledger
        self.currency = ledger.currency
        self.rules = rules or default_rules(self.currency)
        self.logger = get_logger("atm_banking.transactions")

        for account_type in AccountType:
            rule = self.rules.get(account_type)
            if rule is None:
                raise ValueError(f"Missing account rule for {account_type.value}")
            if rule.minimum_balance.currency != self.currency:
                raise ValueError(f"Account rules must be in {self.currency.code}")

    def inquire(self, customer_id: str) -> BalanceSnapshot:
        """
        Read both balances; never mutates

        Raises:
            CustomerNotFound: If the customer does not exist
        """
        customer = self.ledger.get(customer_id)
        return self._snapshot(customer)

    def withdraw(
        self,
        customer_id: str,
        account_type: Union[str, AccountType],
        amount: Union[Money, Decimal, int, str]
    ) -> WithdrawalResult:
        """
        Withdraw cash from one account

        Raises:
            InvalidAmount: If amount is not a positive value
            InvalidAccountType: If account_type is not savings or current
            CustomerNotFound: If the customer does not exist
            InsufficientFunds: If amount plus any penalty exceeds the balance
        """
        money = self._to_money(amount)
        account_type = AccountType.parse(account_type)
        rule = self.rules[account_type]

        try:
            with self.ledger.locked(customer_id) as records:
                customer = records[customer_id]
                balance = self._balance(customer, account_type)
                penalty = assess_debit(balance, money, rule)
                new_balance = balance - money - penalty
                setattr(customer, account_type.balance_field, new_balance)
        except (CustomerNotFound, InsufficientFunds) as e:
            log_action(
                self.logger, "warning", f"Withdrawal rejected: {e}",
                customer_id=customer_id, action="withdraw",
                extra={"account_type": account_type.value, "amount": money.to_string(),
                       "error_kind": e.kind.value}
            )
            raise

        result = WithdrawalResult(
            customer_id=customer_id,
            account_type=account_type,
            amount=money,
            penalty=penalty,
            balance=new_balance
        )

        log_action(
            self.logger, "info", "Withdrawal completed",
            customer_id=customer_id, action="withdraw",
            resource=f"account:{customer_id}:{account_type.value}",
            extra={
                "amount": money.to_string(),
                "penalty": penalty.to_string(),
                "balance": new_balance.to_string()
            }
        )
        return result

    def transfer(
        self,
        from_customer_id: str,
        to_customer_id: str,
        from_account_type: Union[str, AccountType],
        to_account_type: Union[str, AccountType],
        amount: Union[Money, Decimal, int, str]
    ) -> TransferResult:
        """
        Move money between two accounts, possibly of the same customer

        The minimum-balance rule applies to the source only. The destination
        is credited exactly amount; any penalty is a fee credited nowhere.

        Raises:
            InvalidAmount: If amount is not a positive value
            InvalidAccountType: If either account type is unknown
            CustomerNotFound: If either customer does not exist
            InsufficientFunds: If amount plus any penalty exceeds the source balance
        """
        money = self._to_money(amount)
        from_account_type = AccountType.parse(from_account_type)
        to_account_type = AccountType.parse(to_account_type)
        rule = self.rules[from_account_type]

        try:
            with self.ledger.locked(from_customer_id, to_customer_id) as records:
                source = records[from_customer_id]
                destination = records[to_customer_id]

                from_balance = self._balance(source, from_account_type)
                penalty = assess_debit(from_balance, money, rule)
                setattr(source, from_account_type.balance_field, from_balance - money - penalty)

                # Read after the debit so a self-transfer sees its own update
                to_balance = self._balance(destination, to_account_type) + money
                setattr(destination, to_account_type.balance_field, to_balance)

                from_balance = self._balance(source, from_account_type)
        except (CustomerNotFound, InsufficientFunds) as e:
            log_action(
                self.logger, "warning", f"Transfer rejected: {e}",
                customer_id=from_customer_id, action="transfer",
                extra={
                    "to_customer_id": to_customer_id,
                    "from_account_type": from_account_type.value,
                    "to_account_type": to_account_type.value,
                    "amount": money.to_string(),
                    "error_kind": e.kind.value
                }
            )
            raise

        result = TransferResult(
            from_customer_id=from_customer_id,
            to_customer_id=to_customer_id,
            from_account_type=from_account_type,
            to_account_type=to_account_type,
            amount=money,
            penalty=penalty,
            from_balance=from_balance,
            to_balance=to_balance
        )

        log_action(
            self.logger, "info", "Transfer completed",
            customer_id=from_customer_id, action="transfer",
            resource=f"account:{from_customer_id}:{from_account_type.value}",
            extra={
                "to_customer_id": to_customer_id,
                "to_account_type": to_account_type.value,
                "amount": money.to_string(),
                "penalty": penalty.to_string()
            }
        )
        return result

    def _to_money(self, amount: Union[Money, Decimal, int, str]) -> Money:
        """Normalize a requested amount, rejecting anything not strictly positive"""
        if isinstance(amount, Money):
            if amount.currency != self.currency:
                raise InvalidAmount(f"Amount must be in {self.currency.code}")
            money = amount
        elif isinstance(amount, (Decimal, int, str)) and not isinstance(amount, bool):
            try:
                value = Decimal(amount) if not isinstance(amount, str) else Decimal(amount.strip())
            except InvalidOperation:
                raise InvalidAmount(f"Invalid amount {amount!r}")
            if not value.is_finite():
                raise InvalidAmount(f"Invalid amount {amount!r}")
            try:
                money = Money(value, self.currency)
            except InvalidOperation:
                # Too many digits to round within the decimal context
                raise InvalidAmount(f"Amount {amount!r} exceeds supported precision")
        else:
            raise InvalidAmount(f"Unsupported amount type {type(amount).__name__}")

        if not money.is_positive():
            raise InvalidAmount("Amount must be greater than zero")
        return money

    @staticmethod
    def _balance(customer: Customer, account_type: AccountType) -> Money:
        return getattr(customer, account_type.balance_field)

    def _snapshot(self, customer: Customer) -> BalanceSnapshot:
        return BalanceSnapshot(
            customer_id=customer.id,
            savings_balance=customer.savings_balance,
            current_balance=customer.current_balance
        )
