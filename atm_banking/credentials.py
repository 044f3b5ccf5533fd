"""
Default Credential Pool Module

A fixed inventory of (customer ID, password) pairs handed to new registrants.
Pairs are issued last-seeded-first and are never reused once issued.
"""

from dataclasses import dataclass
from typing import Iterable, List
import threading

from .errors import PoolExhausted
from .logging_config import get_logger, log_action


@dataclass(frozen=True)
class DefaultCredential:
    """Immutable default login pair"""
    customer_id: str
    password: str


class CredentialPool:
    """
    Finite supply of default credentials

    The pool is write-once: pairs are fixed at construction and the only
    mutation afterwards is issue_next() removing one.
    """

    def __init__(self, credentials: Iterable[DefaultCredential]):
        self._credentials: List[DefaultCredential] = list(credentials)
        self._lock = threading.Lock()
        self.logger = get_logger("atm_banking.credentials")

    @classmethod
    def seeded(
        cls,
        size: int = 10,
        id_prefix: str = "CUST",
        password_prefix: str = "PASS"
    ) -> 'CredentialPool':
        """Build the default inventory CUST001/PASS001 .. CUSTnnn/PASSnnn in seed order"""
        return cls(
            DefaultCredential(f"{id_prefix}{n:03d}", f"{password_prefix}{n:03d}")
            for n in range(1, size + 1)
        )

    @property
    def remaining(self) -> int:
        """Number of pairs not yet issued"""
        with self._lock:
            return len(self._credentials)

    def issue_next(self) -> DefaultCredential:
        """
        Remove and return the most recently seeded pair still in the pool

        Raises:
            PoolExhausted: If every pair has been issued
        """
        with self._lock:
            if not self._credentials:
                log_action(
                    self.logger, "warning", "Default credential pool exhausted",
                    action="issue_credential"
                )
                raise PoolExhausted("No more default credentials available")
            credential = self._credentials.pop()
            remaining = len(self._credentials)

        log_action(
            self.logger, "info", "Default credential issued",
            customer_id=credential.customer_id, action="issue_credential",
            extra={"remaining": remaining}
        )
        return credential
