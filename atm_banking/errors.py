"""
Error Types Module

Every failure the core can report is a BankingError subclass tagged with an
ErrorKind. Operations either apply all of their mutations or raise one of
these with nothing changed.
"""

from enum import Enum


class ErrorKind(Enum):
    """Kinds of failure reported by core operations"""
    VALIDATION_FAILURE = "validation_failure"
    NOT_FOUND = "not_found"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    DUPLICATE_ID = "duplicate_id"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    POOL_EXHAUSTED = "pool_exhausted"
    ACCESS_DENIED = "access_denied"


class BankingError(Exception):
    """Base exception for all core banking errors."""
    
    kind: ErrorKind = ErrorKind.VALIDATION_FAILURE


class ValidationFailure(BankingError):
    """Raised when a caller-supplied argument violates a precondition."""
    
    kind = ErrorKind.VALIDATION_FAILURE


class InvalidAmount(ValidationFailure):
    """Raised for zero or negative monetary amounts."""


class InvalidAccountType(ValidationFailure):
    """Raised for an account-type tag that is neither savings nor current."""


class CustomerNotFound(BankingError):
    """Raised when a referenced customer ID has no record."""
    
    kind = ErrorKind.NOT_FOUND
    
    def __init__(self, customer_id: str):
        super().__init__(f"Customer {customer_id} not found")
        self.customer_id = customer_id


class InsufficientFunds(BankingError):
    """Raised when a debit would leave an account negative even after the penalty."""
    
    kind = ErrorKind.INSUFFICIENT_FUNDS


class DuplicateCustomerId(BankingError):
    """Raised when inserting a record whose customer ID already exists."""
    
    kind = ErrorKind.DUPLICATE_ID


class CapacityExceeded(BankingError):
    """Raised when the ledger already holds its maximum number of records."""
    
    kind = ErrorKind.CAPACITY_EXCEEDED


class PoolExhausted(BankingError):
    """Raised when no default credentials remain to be issued."""
    
    kind = ErrorKind.POOL_EXHAUSTED


class NotYourTurn(BankingError):
    """Raised when a session acts while it is not the head of the access gate."""
    
    kind = ErrorKind.ACCESS_DENIED
