"""
Customer Ledger Module

The authoritative store of customer records: bounded capacity, keyed by
customer ID, with credential validation and password changes. Reads return
snapshots; record mutation happens only inside locked(), which serializes
writers per customer and writes all touched records back together.
"""

from decimal import Decimal
from datetime import datetime, timezone
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional
from contextlib import contextmanager
import threading

from .currency import Money, Currency
from .storage import StorageInterface, StorageRecord
from .errors import CapacityExceeded, CustomerNotFound, DuplicateCustomerId
from .logging_config import get_logger, log_action


@dataclass
class Customer(StorageRecord):
    """
    Customer record; `id` is the customer ID (CUSTnnn)
    """
    password: str
    name: str
    email: str
    address: str
    phone: str
    savings_balance: Money
    current_balance: Money
    is_first_login: bool = True

    def __post_init__(self):
        if self.savings_balance.currency != self.current_balance.currency:
            raise ValueError("Savings and current balances must share a currency")

    @property
    def customer_id(self) -> str:
        return self.id

    @property
    def currency(self) -> Currency:
        return self.savings_balance.currency


class CustomerLedger:
    """
    Bounded in-memory customer store
    """

    def __init__(
        self,
        storage: StorageInterface,
        currency: Currency = Currency.INR,
        capacity: int = 100
    ):
        self.storage = storage
        self.currency = currency
        self.capacity = capacity
        self.table_name = "customers"
        self.logger = get_logger("atm_banking.customers")

        # Guards insertion and the per-record lock table
        self._lock = threading.RLock()
        self._record_locks: Dict[str, threading.Lock] = {}

    @property
    def count(self) -> int:
        return self.storage.count(self.table_name)

    def __len__(self) -> int:
        return self.count

    def __contains__(self, customer_id: str) -> bool:
        return self.storage.exists(self.table_name, customer_id)

    def has_capacity(self) -> bool:
        """Check whether another record can be inserted"""
        return self.count < self.capacity

    def insert(self, customer: Customer) -> Customer:
        """
        Insert a new customer record

        Raises:
            CapacityExceeded: If the ledger is full
            DuplicateCustomerId: If the customer ID is already present
        """
        if customer.currency != self.currency:
            raise ValueError(f"Customer balances must be in {self.currency.code}")

        with self._lock:
            if not self.has_capacity():
                log_action(
                    self.logger, "warning", "Customer insert rejected: ledger full",
                    customer_id=customer.id, action="insert_customer",
                    extra={"capacity": self.capacity}
                )
                raise CapacityExceeded("Maximum customer limit reached")

            if customer.id in self:
                log_action(
                    self.logger, "warning", "Customer insert rejected: duplicate ID",
                    customer_id=customer.id, action="insert_customer"
                )
                raise DuplicateCustomerId(f"Customer ID {customer.id} already exists")

            self._save_customer(customer)
            self._record_locks[customer.id] = threading.Lock()

        log_action(
            self.logger, "info", "Customer inserted",
            customer_id=customer.id, action="insert_customer",
            resource=f"customer:{customer.id}"
        )
        return customer

    def find(self, customer_id: str) -> Optional[Customer]:
        """Exact-match lookup returning a snapshot, or None when absent"""
        customer_dict = self.storage.load(self.table_name, customer_id)
        if customer_dict:
            return self._customer_from_dict(customer_dict)
        return None

    def get(self, customer_id: str) -> Customer:
        """Lookup that treats absence as an error"""
        customer = self.find(customer_id)
        if not customer:
            raise CustomerNotFound(customer_id)
        return customer

    def list_customers(self) -> List[Customer]:
        """All customer records, oldest first"""
        customers = [self._customer_from_dict(data) for data in self.storage.load_all(self.table_name)]
        return sorted(customers, key=lambda c: (c.created_at, c.id))

    def validate_credentials(self, customer_id: str, password: str) -> bool:
        """True iff the customer exists and the password matches exactly"""
        customer = self.find(customer_id)
        return customer is not None and customer.password == password

    def change_password(self, customer_id: str, new_password: str) -> bool:
        """
        Replace the password and clear the first-login flag

        Password rules are the caller's concern. Returns False when the
        customer does not exist.
        """
        if customer_id not in self:
            return False

        with self.locked(customer_id) as records:
            customer = records[customer_id]
            customer.password = new_password
            customer.is_first_login = False

        log_action(
            self.logger, "info", "Password changed",
            customer_id=customer_id, action="change_password",
            resource=f"customer:{customer_id}"
        )
        return True

    @contextmanager
    def locked(self, *customer_ids: str) -> Iterator[Dict[str, Customer]]:
        """
        Hold the records of the given customers exclusively

        Locks are taken in sorted ID order. Yields snapshots keyed by customer
        ID (a repeated ID maps to one shared snapshot); they are written back
        together only if the block completes without raising.

        Raises:
            CustomerNotFound: Before any lock is taken, if an ID is unknown
        """
        ids = sorted(set(customer_ids))
        with self._lock:
            for customer_id in ids:
                if customer_id not in self._record_locks:
                    raise CustomerNotFound(customer_id)
            locks = [self._record_locks[customer_id] for customer_id in ids]

        for lock in locks:
            lock.acquire()
        try:
            records = {customer_id: self.get(customer_id) for customer_id in ids}
            yield records

            now = datetime.now(timezone.utc)
            with self.storage.atomic():
                for customer in records.values():
                    customer.updated_at = now
                    self._save_customer(customer)
        finally:
            for lock in reversed(locks):
                lock.release()

    def _save_customer(self, customer: Customer) -> None:
        """Save customer to storage"""
        self.storage.save(self.table_name, customer.id, self._customer_to_dict(customer))

    def _customer_to_dict(self, customer: Customer) -> Dict:
        """Convert Customer to dictionary for storage"""
        result = customer.to_dict()
        result['savings_balance'] = str(customer.savings_balance.amount)
        result['current_balance'] = str(customer.current_balance.amount)
        result['currency'] = customer.currency.code
        return result

    def _customer_from_dict(self, data: Dict) -> Customer:
        """Convert dictionary to Customer"""
        currency = Currency[data['currency']]

        return Customer(
            id=data['id'],
            created_at=datetime.fromisoformat(data['created_at']),
            updated_at=datetime.fromisoformat(data['updated_at']),
            password=data['password'],
            name=data['name'],
            email=data['email'],
            address=data['address'],
            phone=data['phone'],
            savings_balance=Money(Decimal(data['savings_balance']), currency),
            current_balance=Money(Decimal(data['current_balance']), currency),
            is_first_login=data['is_first_login']
        )
