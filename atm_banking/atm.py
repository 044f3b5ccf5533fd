"""
ATM System Module

Wires the credential pool, customer ledger, access gate and transaction
engine together and exposes the operations a session driver calls:
registration, login/logout, password change, turn checks, balance inquiry,
withdrawal and transfer.
"""

from decimal import Decimal
from datetime import datetime, timezone
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Union
import threading

from .config import AtmConfig, get_config
from .currency import Money, Currency
from .storage import StorageInterface, InMemoryStorage
from .credentials import CredentialPool, DefaultCredential
from .customers import Customer, CustomerLedger
from .access import AccessGate
from .transactions import (
    TransactionEngine, AccountType, AccountRule, BalanceSnapshot,
    WithdrawalResult, TransferResult
)
from .errors import CapacityExceeded
from .logging_config import get_logger, log_action


def rules_from_config(config: AtmConfig, currency: Currency) -> Dict[AccountType, AccountRule]:
    """Account rules as configured"""
    return {
        AccountType.SAVINGS: AccountRule(
            minimum_balance=Money(Decimal(config.savings_minimum_balance), currency),
            penalty=Money(Decimal(config.savings_penalty), currency)
        ),
        AccountType.CURRENT: AccountRule(
            minimum_balance=Money(Decimal(config.current_minimum_balance), currency),
            penalty=Money(Decimal(config.current_penalty), currency)
        ),
    }


class ATMSystem:
    """ATM backend with all components initialized"""

    def __init__(
        self,
        config: Optional[AtmConfig] = None,
        storage: Optional[StorageInterface] = None
    ):
        self.config = config or get_config()
        self.currency = Currency[self.config.currency.upper()]
        self.storage = storage or InMemoryStorage()

        self.credential_pool = CredentialPool.seeded(
            size=self.config.credential_pool_size,
            id_prefix=self.config.customer_id_prefix,
            password_prefix=self.config.password_prefix
        )
        self.ledger = CustomerLedger(
            self.storage, currency=self.currency, capacity=self.config.max_customers
        )
        self.access_gate = AccessGate()
        self.transaction_engine = TransactionEngine(
            self.ledger, rules=rules_from_config(self.config, self.currency)
        )

        self.savings_opening_balance = Money(Decimal(self.config.savings_opening_balance), self.currency)
        self.current_opening_balance = Money(Decimal(self.config.current_opening_balance), self.currency)

        self._registration_lock = threading.Lock()
        self.logger = get_logger("atm_banking.atm")

    def register(self, name: str, email: str, address: str, phone: str) -> DefaultCredential:
        """
        Create a customer with opening balances and the next default credential

        Field formats are checked by the input layer before this is called.

        Raises:
            CapacityExceeded: If the ledger is full (no credential is consumed)
            PoolExhausted: If no default credentials remain
            DuplicateCustomerId: If the issued ID is already in the ledger
        """
        with self._registration_lock:
            if not self.ledger.has_capacity():
                raise CapacityExceeded("Maximum customer limit reached")

            credential = self.credential_pool.issue_next()
            now = datetime.now(timezone.utc)
            customer = Customer(
                id=credential.customer_id,
                created_at=now,
                updated_at=now,
                password=credential.password,
                name=name,
                email=email,
                address=address,
                phone=phone,
                savings_balance=self.savings_opening_balance,
                current_balance=self.current_opening_balance,
                is_first_login=True
            )
            self.ledger.insert(customer)

        log_action(
            self.logger, "info", "Customer registered",
            customer_id=credential.customer_id, action="register",
            resource=f"customer:{credential.customer_id}"
        )
        return credential

    def login(self, customer_id: str, password: str) -> bool:
        """Validate credentials and, on success, queue the session"""
        if not self.ledger.validate_credentials(customer_id, password):
            log_action(
                self.logger, "warning", "Login failed: invalid credentials",
                customer_id=customer_id, action="login"
            )
            return False

        self.access_gate.enqueue(customer_id)
        log_action(
            self.logger, "info", "Login succeeded",
            customer_id=customer_id, action="login"
        )
        return True

    def logout(self, customer_id: str) -> bool:
        """
        End a session

        The active session is dequeued; a session still waiting is dropped
        from its place in line. Returns False if customer_id was not queued.
        """
        removed = self.access_gate.release(customer_id)

        log_action(
            self.logger, "info" if removed else "warning",
            "Logged out" if removed else "Logout ignored: session not queued",
            customer_id=customer_id, action="logout"
        )
        return removed

    def is_logged_in(self, customer_id: str) -> bool:
        return self.access_gate.contains(customer_id)

    def is_my_turn(self, customer_id: str) -> bool:
        return self.access_gate.is_front(customer_id)

    @contextmanager
    def session_turn(self, customer_id: str) -> Iterator[None]:
        """Guard a check-then-act sequence for the active session"""
        with self.access_gate.turn(customer_id):
            yield

    def must_change_password(self, customer_id: str) -> bool:
        """Whether the customer still has to replace the default password"""
        return self.ledger.get(customer_id).is_first_login

    def change_password(self, customer_id: str, new_password: str) -> bool:
        """Length and confirmation checks belong to the caller"""
        return self.ledger.change_password(customer_id, new_password)

    def profile(self, customer_id: str) -> Customer:
        """
        Customer record snapshot

        Raises:
            CustomerNotFound: If the customer does not exist
        """
        return self.ledger.get(customer_id)

    def inquire(self, customer_id: str) -> BalanceSnapshot:
        return self.transaction_engine.inquire(customer_id)

    def withdraw(
        self,
        customer_id: str,
        account_type: Union[str, AccountType],
        amount: Union[Money, Decimal, int, str]
    ) -> WithdrawalResult:
        return self.transaction_engine.withdraw(customer_id, account_type, amount)

    def transfer(
        self,
        from_customer_id: str,
        to_customer_id: str,
        from_account_type: Union[str, AccountType],
        to_account_type: Union[str, AccountType],
        amount: Union[Money, Decimal, int, str]
    ) -> TransferResult:
        return self.transaction_engine.transfer(
            from_customer_id, to_customer_id, from_account_type, to_account_type, amount
        )
